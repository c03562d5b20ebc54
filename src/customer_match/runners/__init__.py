from customer_match.runners.headless import AutoAcceptPolicy, BatchOutcome, resolve, resolve_batch
from customer_match.runners.workflow import Decision, Outcome, ResolutionState, ResolutionWorkflow, Stage

__all__ = [
    "AutoAcceptPolicy",
    "BatchOutcome",
    "Decision",
    "Outcome",
    "ResolutionState",
    "ResolutionWorkflow",
    "Stage",
    "resolve",
    "resolve_batch",
]
