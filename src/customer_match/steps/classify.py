from __future__ import annotations

import math
from collections.abc import Sequence

import structlog

from customer_match.config import MatchSettings, get_settings
from customer_match.models import Confidence, CustomerRecord, MatchGroups, MatchResult, MatchType
from customer_match.steps.normalize import normalize
from customer_match.steps.similarity import similarity

logger = structlog.get_logger(__name__)


class CompanyNameMatcher:
    """Ranks stored customers against a free-text company name.

    Rules are tried in order and the first one that applies sets the match
    type and base score:

    1. normalized names equal -> exact, 100
    2. candidate starts with the term -> startsWith, 90 minus the extra length
    3. candidate contains the term -> contains, 75 minus 2 per leading character
    4. name similarity >= 0.6 -> fuzzy, similarity * 70; below that the
       candidate is dropped

    A term containing an email address earns a bonus when its domain matches
    the candidate's email domain. The bonus never changes the match type.
    """

    def __init__(self, settings: MatchSettings | None = None) -> None:
        self._settings = settings or get_settings()

    def classify(self, search_term: str | None, candidates: Sequence[CustomerRecord]) -> list[MatchResult]:
        term = (search_term or "").lower().strip()
        if not term or not candidates:
            return []

        normalized_term = normalize(search_term)
        term_domain = email_domain(search_term) if "@" in search_term else ""
        settings = self._settings

        results: list[MatchResult] = []
        for customer in candidates:
            base = self._base_score(customer, search_term, term, normalized_term)
            if base is None:
                continue
            match_type, score = base

            if term_domain and email_domain(customer.email) == term_domain:
                score += settings.email_domain_bonus

            score = max(0, min(score, 100))
            results.append(
                MatchResult(
                    customer=customer,
                    score=score,
                    match_type=match_type,
                    confidence=Confidence.from_score(
                        score,
                        high=settings.high_confidence,
                        medium=settings.medium_confidence,
                    ),
                )
            )

        ranked = sorted(results, key=lambda result: -result.score)
        logger.debug(
            "classification_complete",
            candidate_count=len(candidates),
            result_count=len(ranked),
            top_score=ranked[0].score if ranked else None,
        )
        return ranked

    def find_best_match(
        self,
        search_term: str | None,
        candidates: Sequence[CustomerRecord],
    ) -> MatchResult | None:
        results = self.classify(search_term, candidates)
        if results and results[0].score >= self._settings.auto_accept_threshold:
            return results[0]
        return None

    def _base_score(
        self,
        customer: CustomerRecord,
        search_term: str,
        term: str,
        normalized_term: str,
    ) -> tuple[MatchType, int] | None:
        settings = self._settings
        name = (customer.company_name or "").lower().strip()

        if normalize(customer.company_name) == normalized_term:
            return MatchType.EXACT, 100
        if name.startswith(term):
            return MatchType.STARTS_WITH, settings.starts_with_base - (len(name) - len(term))
        position = name.find(term)
        if position >= 0:
            return MatchType.CONTAINS, settings.contains_base - settings.contains_position_penalty * position

        ratio = similarity(search_term, customer.company_name)
        if ratio >= settings.fuzzy_min_similarity:
            return MatchType.FUZZY, _round_half_up(ratio * settings.fuzzy_weight)
        return None


def classify(search_term: str | None, candidates: Sequence[CustomerRecord]) -> list[MatchResult]:
    return CompanyNameMatcher().classify(search_term, candidates)


def find_best_match(search_term: str | None, candidates: Sequence[CustomerRecord]) -> MatchResult | None:
    return CompanyNameMatcher().find_best_match(search_term, candidates)


def group_by_type(results: Sequence[MatchResult]) -> MatchGroups:
    groups = MatchGroups()
    for result in results:
        if result.match_type == MatchType.EXACT:
            groups.exact.append(result)
        elif result.match_type == MatchType.FUZZY:
            groups.other.append(result)
        else:
            groups.similar.append(result)
    return groups


def email_domain(text: str | None) -> str:
    """Lower-cased text after the last ``@``; empty when there is none."""

    if not text or "@" not in text:
        return ""
    return text.rpartition("@")[2].strip().lower()


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
