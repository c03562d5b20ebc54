"""
Matching configuration loaded from environment variables.

Every threshold defaults to the values the intake dialogs were tuned with;
override with ``CUSTOMER_MATCH_<NAME>`` variables or a local ``.env`` file.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MatchSettings(BaseSettings):
    """Scores, tiers and workflow switches for company-name matching."""

    model_config = SettingsConfigDict(
        env_prefix="CUSTOMER_MATCH_",
        env_file=".env",
        extra="ignore",
    )

    # Confidence tiers (score points)
    high_confidence: int = Field(default=90, ge=0, le=100)
    medium_confidence: int = Field(default=70, ge=0, le=100)

    # Base scores per match type
    starts_with_base: int = Field(default=90, ge=0, le=100)
    contains_base: int = Field(default=75, ge=0, le=100)
    contains_position_penalty: int = Field(default=2, ge=0)
    fuzzy_min_similarity: float = Field(default=0.6, ge=0.0, le=1.0)
    fuzzy_weight: int = Field(default=70, ge=0, le=100)
    email_domain_bonus: int = Field(default=15, ge=0, le=100)

    # Workflow
    auto_accept: bool = False
    auto_accept_threshold: int = Field(default=90, ge=0, le=100)

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    @model_validator(mode="after")
    def _check_tiers(self) -> "MatchSettings":
        if self.medium_confidence > self.high_confidence:
            raise ValueError("medium_confidence must not exceed high_confidence")
        return self


@lru_cache(maxsize=1)
def get_settings() -> MatchSettings:
    return MatchSettings()
