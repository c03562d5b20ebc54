"""Company-name matching and customer resolution for order/inquiry intake."""

from customer_match.models import ChangeSet, Confidence, ContactFields, CustomerRecord, MatchResult, MatchType
from customer_match.runners import ResolutionWorkflow
from customer_match.steps import classify, detect_changes, find_best_match, group_by_type, normalize, similarity

__all__ = [
    "ChangeSet",
    "Confidence",
    "ContactFields",
    "CustomerRecord",
    "MatchResult",
    "MatchType",
    "ResolutionWorkflow",
    "classify",
    "detect_changes",
    "find_best_match",
    "group_by_type",
    "normalize",
    "similarity",
]
