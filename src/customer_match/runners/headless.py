from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

import structlog

from customer_match.config import MatchSettings, get_settings
from customer_match.exceptions import InvalidCustomerDataError
from customer_match.interfaces import DecisionPolicy
from customer_match.runners.workflow import Decision, ResolutionState, ResolutionWorkflow, Stage
from customer_match.schema import INTAKE_SCHEMA, FieldTag, RecordSchema
from customer_match.steps.changes import ContactSource

logger = structlog.get_logger(__name__)


class AutoAcceptPolicy:
    """Synthetic decisions for batch intake.

    Selects the top result when it scores at least ``threshold``, otherwise
    creates a new customer. Without an explicit ``threshold`` the
    ``auto_accept_threshold`` of ``settings`` applies. Contact differences
    are applied only when ``apply_updates`` is set.
    """

    def __init__(
        self,
        threshold: int | None = None,
        apply_updates: bool = False,
        settings: MatchSettings | None = None,
    ) -> None:
        if threshold is None:
            threshold = (settings or get_settings()).auto_accept_threshold
        self.threshold = threshold
        self._apply_updates = apply_updates

    def choose_candidate(self, state: ResolutionState) -> str | None:
        if state.results and state.results[0].score >= self.threshold:
            return state.results[0].customer.customer_id
        return None

    def confirm_update(self, state: ResolutionState) -> Decision:
        return Decision.UPDATE if self._apply_updates else Decision.KEEP


@dataclass(slots=True)
class BatchOutcome:
    row: int
    search_term: str
    outcome: str
    customer_id: str | None
    score: int | None
    changed_fields: list[str]


def resolve(
    workflow: ResolutionWorkflow,
    search_term: str,
    submitted: ContactSource,
    policy: DecisionPolicy,
) -> ResolutionState:
    """Run one intake entry through the workflow with decisions supplied by ``policy``."""

    state = workflow.start(search_term, submitted)
    if state.is_resolved:
        return state

    if state.stage == Stage.NO_MATCH:
        return workflow.create_new(state)

    if state.stage == Stage.AWAITING_SELECTION:
        customer_id = policy.choose_candidate(state)
        state = workflow.create_new(state) if customer_id is None else workflow.select(state, customer_id)

    if state.stage == Stage.AWAITING_CHANGE_CONFIRMATION:
        state = workflow.confirm(state, policy.confirm_update(state))

    return state


def resolve_batch(
    workflow: ResolutionWorkflow,
    rows: Iterable[Mapping[str, object]],
    policy: DecisionPolicy,
    schema: RecordSchema = INTAKE_SCHEMA,
) -> list[BatchOutcome]:
    """Resolve intake rows in order; customers created early are candidates for later rows."""

    outcomes: list[BatchOutcome] = []
    for index, row in enumerate(rows):
        search_term = schema.joined_value(row, FieldTag.COMPANY_NAME)
        if not search_term:
            logger.warning("intake_row_skipped", row=index, reason="missing company name")
            continue

        submitted = {
            "email": schema.joined_value(row, FieldTag.EMAIL),
            "phone": schema.joined_value(row, FieldTag.PHONE),
            "contact_person": schema.joined_value(row, FieldTag.CONTACT_PERSON),
        }
        try:
            state = resolve(workflow, search_term, submitted, policy)
        except InvalidCustomerDataError as exc:
            logger.warning("intake_row_skipped", row=index, reason=str(exc))
            continue
        outcomes.append(
            BatchOutcome(
                row=index,
                search_term=search_term,
                outcome=state.outcome.value if state.outcome else "",
                customer_id=state.customer.customer_id if state.customer else None,
                score=state.selected.score if state.selected else None,
                changed_fields=list(state.changes.changed_fields) if state.changes else [],
            )
        )

    logger.info("batch_resolved", row_count=len(outcomes))
    return outcomes
