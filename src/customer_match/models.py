from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum

_INTAKE_ALIASES = {
    "email": ("email", "contact_email"),
    "phone": ("phone", "contact_phone"),
    "contact_person": ("contact_person",),
}


class MatchType(StrEnum):
    EXACT = "exact"
    STARTS_WITH = "startsWith"
    CONTAINS = "contains"
    FUZZY = "fuzzy"

    @property
    def label(self) -> str:
        return _MATCH_TYPE_LABELS[self]


_MATCH_TYPE_LABELS = {
    MatchType.EXACT: "Exact Match",
    MatchType.STARTS_WITH: "Starts With",
    MatchType.CONTAINS: "Contains",
    MatchType.FUZZY: "Similar Name",
}


class Confidence(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def from_score(cls, score: int, high: int = 90, medium: int = 70) -> "Confidence":
        if score >= high:
            return cls.HIGH
        if score >= medium:
            return cls.MEDIUM
        return cls.LOW


@dataclass(frozen=True, slots=True)
class ContactFields:
    """Optional contact details, either freshly submitted or stored on a customer."""

    email: str | None = None
    phone: str | None = None
    contact_person: str | None = None

    @classmethod
    def from_mapping(cls, values: Mapping[str, object]) -> "ContactFields":
        """Build from stored column names or intake-form aliases (``contact_email`` etc)."""

        picked: dict[str, str | None] = {}
        for name, keys in _INTAKE_ALIASES.items():
            picked[name] = None
            for key in keys:
                value = values.get(key)
                if value is not None and str(value).strip():
                    picked[name] = str(value)
                    break
        return cls(**picked)

    def present(self) -> dict[str, str]:
        """Fields holding a non-blank value, in declaration order."""

        values = {"email": self.email, "phone": self.phone, "contact_person": self.contact_person}
        return {name: value for name, value in values.items() if value is not None and value.strip()}


@dataclass(frozen=True, slots=True)
class CustomerRecord:
    """Canonical representation of a stored customer account."""

    customer_id: str
    company_name: str
    contact_person: str | None = None
    email: str | None = None
    phone: str | None = None

    def contact_fields(self) -> ContactFields:
        return ContactFields(email=self.email, phone=self.phone, contact_person=self.contact_person)


@dataclass(frozen=True, slots=True)
class MatchResult:
    """A ranked candidate for a search term. Recomputed per search, never stored."""

    customer: CustomerRecord
    score: int
    match_type: MatchType
    confidence: Confidence


@dataclass(frozen=True, slots=True)
class ChangeSet:
    """Contact fields whose submitted value differs from the stored one.

    ``old_values`` and ``new_values`` hold the original strings for display,
    keyed by field name, and only for the fields in ``changed_fields``.
    """

    changed_fields: tuple[str, ...] = ()
    old_values: dict[str, str] = field(default_factory=dict)
    new_values: dict[str, str] = field(default_factory=dict)

    @property
    def has_changes(self) -> bool:
        return bool(self.changed_fields)


@dataclass(slots=True)
class MatchGroups:
    """Results partitioned for presentation: exact, similar (prefix/substring), other (fuzzy)."""

    exact: list[MatchResult] = field(default_factory=list)
    similar: list[MatchResult] = field(default_factory=list)
    other: list[MatchResult] = field(default_factory=list)
