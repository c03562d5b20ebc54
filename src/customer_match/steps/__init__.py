from customer_match.steps.changes import ChangeDetector, detect_changes
from customer_match.steps.classify import (
    CompanyNameMatcher,
    classify,
    email_domain,
    find_best_match,
    group_by_type,
)
from customer_match.steps.normalize import normalize, search_key
from customer_match.steps.similarity import levenshtein, similarity

__all__ = [
    "ChangeDetector",
    "CompanyNameMatcher",
    "classify",
    "detect_changes",
    "email_domain",
    "find_best_match",
    "group_by_type",
    "levenshtein",
    "normalize",
    "search_key",
    "similarity",
]
