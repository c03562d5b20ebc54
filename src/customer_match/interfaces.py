from __future__ import annotations

from typing import TYPE_CHECKING, Mapping, Protocol, Sequence

from customer_match.models import CustomerRecord

if TYPE_CHECKING:
    from customer_match.runners.workflow import Decision, ResolutionState


class CustomerStore(Protocol):
    """External customer master data.

    The classifier never talks to a store; the workflow snapshots
    ``list_candidates`` once per search and only writes on a final decision.
    """

    def list_candidates(self) -> Sequence[CustomerRecord]:
        ...

    def create_customer(self, fields: Mapping[str, str]) -> CustomerRecord:
        ...

    def update_customer(self, customer_id: str, fields: Mapping[str, str]) -> CustomerRecord:
        ...


class DecisionPolicy(Protocol):
    """Supplies the human decisions of the workflow for headless callers."""

    def choose_candidate(self, state: "ResolutionState") -> str | None:
        """Return the customer id to select, or ``None`` to create a new customer."""
        ...

    def confirm_update(self, state: "ResolutionState") -> "Decision":
        ...
