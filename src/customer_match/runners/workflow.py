"""
Customer resolution workflow.

Drives one intake entry from a free-text company name to a final decision:

    start -> no_match            -> create_new                 -> resolved (created)
          -> awaiting_selection  -> create_new                 -> resolved (created)
                                 -> select (no changes)        -> resolved (selected_unchanged)
                                 -> select (changes)           -> awaiting_change_confirmation
          awaiting_change_confirmation -> update_record        -> resolved (selected_updated)
                                       -> keep_existing        -> resolved (selected_unchanged)
    any open stage -> cancel                                   -> resolved (aborted)

States are immutable values. Each transition returns a new state and the
store is only written by ``create_new`` and ``update_record``, so a caller
may park a state while waiting for a person and resume or drop it later.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import StrEnum

import structlog

from customer_match.config import MatchSettings, get_settings
from customer_match.exceptions import (
    InvalidCustomerDataError,
    InvalidTransitionError,
    StoreWriteError,
    UnknownCandidateError,
)
from customer_match.interfaces import CustomerStore
from customer_match.models import ChangeSet, ContactFields, CustomerRecord, MatchResult
from customer_match.steps.changes import ChangeDetector, ContactSource, as_contact_fields
from customer_match.steps.classify import CompanyNameMatcher

logger = structlog.get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class Stage(StrEnum):
    NO_MATCH = "no_match"
    AWAITING_SELECTION = "awaiting_selection"
    AWAITING_CHANGE_CONFIRMATION = "awaiting_change_confirmation"
    RESOLVED = "resolved"


class Outcome(StrEnum):
    CREATED = "created"
    SELECTED_UNCHANGED = "selected_unchanged"
    SELECTED_UPDATED = "selected_updated"
    ABORTED = "aborted"


class Decision(StrEnum):
    UPDATE = "update"
    KEEP = "keep"
    CANCEL = "cancel"


@dataclass(frozen=True, slots=True)
class ResolutionState:
    stage: Stage
    search_term: str
    submitted: ContactFields = field(default_factory=ContactFields)
    results: tuple[MatchResult, ...] = ()
    selected: MatchResult | None = None
    changes: ChangeSet | None = None
    outcome: Outcome | None = None
    customer: CustomerRecord | None = None
    auto_accepted: bool = False

    @property
    def is_resolved(self) -> bool:
        return self.stage == Stage.RESOLVED

    def result_for(self, customer_id: str) -> MatchResult | None:
        for result in self.results:
            if result.customer.customer_id == customer_id:
                return result
        return None


class ResolutionWorkflow:
    def __init__(
        self,
        store: CustomerStore,
        settings: MatchSettings | None = None,
        matcher: CompanyNameMatcher | None = None,
        change_detector: ChangeDetector | None = None,
    ) -> None:
        self._store = store
        self._settings = settings or get_settings()
        self._matcher = matcher or CompanyNameMatcher(self._settings)
        self._change_detector = change_detector or ChangeDetector()

    def start(self, search_term: str, submitted: ContactSource = None) -> ResolutionState:
        search_term = search_term or ""
        contact = as_contact_fields(submitted)
        candidates = list(self._store.list_candidates())
        results = tuple(self._matcher.classify(search_term, candidates))

        if not results:
            logger.info("resolution_no_match", candidate_count=len(candidates))
            return ResolutionState(stage=Stage.NO_MATCH, search_term=search_term, submitted=contact)

        state = ResolutionState(
            stage=Stage.AWAITING_SELECTION,
            search_term=search_term,
            submitted=contact,
            results=results,
        )

        auto_pick = self._auto_accept_candidate(results)
        if auto_pick is not None:
            logger.info(
                "resolution_auto_accepted",
                customer_id=auto_pick.customer.customer_id,
                score=auto_pick.score,
            )
            return self._apply_selection(replace(state, auto_accepted=True), auto_pick)

        logger.info("resolution_awaiting_selection", result_count=len(results), top_score=results[0].score)
        return state

    def select(self, state: ResolutionState, customer_id: str) -> ResolutionState:
        _require(state, "select a candidate", Stage.AWAITING_SELECTION)
        chosen = state.result_for(customer_id)
        if chosen is None:
            raise UnknownCandidateError(customer_id)
        logger.info("candidate_selected", customer_id=customer_id, score=chosen.score)
        return self._apply_selection(state, chosen)

    def create_new(self, state: ResolutionState, fields: Mapping[str, str] | None = None) -> ResolutionState:
        """Create a customer from the search term and submitted contact.

        ``fields`` holds values confirmed by the person and overrides the
        defaults key by key. The payload is validated before the store is
        touched.
        """

        _require(state, "create a customer", Stage.NO_MATCH, Stage.AWAITING_SELECTION)
        payload = {"company_name": state.search_term, **state.submitted.present(), **(fields or {})}
        payload = {name: (value or "").strip() for name, value in payload.items()}
        errors = _validate_new_customer(payload)
        if errors:
            logger.warning("customer_data_rejected", fields=sorted(errors))
            raise InvalidCustomerDataError(errors)

        record_fields = {name: value for name, value in payload.items() if value}
        try:
            customer = self._store.create_customer(record_fields)
        except Exception as exc:
            logger.error("store_write_failed", operation="create", error=str(exc))
            raise StoreWriteError("create", reason=str(exc)) from exc

        logger.info("customer_created", customer_id=customer.customer_id)
        return replace(state, stage=Stage.RESOLVED, outcome=Outcome.CREATED, customer=customer)

    def update_record(self, state: ResolutionState) -> ResolutionState:
        _require(state, "update the customer", Stage.AWAITING_CHANGE_CONFIRMATION)
        customer_id = state.selected.customer.customer_id
        try:
            customer = self._store.update_customer(customer_id, dict(state.changes.new_values))
        except Exception as exc:
            logger.error("store_write_failed", operation="update", customer_id=customer_id, error=str(exc))
            raise StoreWriteError("update", customer_id=customer_id, reason=str(exc)) from exc

        logger.info("customer_updated", customer_id=customer_id, fields=list(state.changes.changed_fields))
        return replace(state, stage=Stage.RESOLVED, outcome=Outcome.SELECTED_UPDATED, customer=customer)

    def keep_existing(self, state: ResolutionState) -> ResolutionState:
        _require(state, "keep the existing record", Stage.AWAITING_CHANGE_CONFIRMATION)
        return replace(
            state,
            stage=Stage.RESOLVED,
            outcome=Outcome.SELECTED_UNCHANGED,
            customer=state.selected.customer,
        )

    def confirm(self, state: ResolutionState, decision: Decision) -> ResolutionState:
        if decision == Decision.UPDATE:
            return self.update_record(state)
        if decision == Decision.KEEP:
            return self.keep_existing(state)
        return self.cancel(state)

    def cancel(self, state: ResolutionState) -> ResolutionState:
        _require(
            state,
            "cancel",
            Stage.NO_MATCH,
            Stage.AWAITING_SELECTION,
            Stage.AWAITING_CHANGE_CONFIRMATION,
        )
        logger.info("resolution_aborted", stage=state.stage.value)
        return replace(state, stage=Stage.RESOLVED, outcome=Outcome.ABORTED, customer=None)

    def _apply_selection(self, state: ResolutionState, chosen: MatchResult) -> ResolutionState:
        changes = self._change_detector.detect(state.submitted, chosen.customer)
        if not changes.has_changes:
            return replace(
                state,
                stage=Stage.RESOLVED,
                selected=chosen,
                changes=changes,
                outcome=Outcome.SELECTED_UNCHANGED,
                customer=chosen.customer,
            )

        logger.info(
            "contact_changes_detected",
            customer_id=chosen.customer.customer_id,
            fields=list(changes.changed_fields),
        )
        return replace(state, stage=Stage.AWAITING_CHANGE_CONFIRMATION, selected=chosen, changes=changes)

    def _auto_accept_candidate(self, results: tuple[MatchResult, ...]) -> MatchResult | None:
        if not self._settings.auto_accept:
            return None
        threshold = self._settings.auto_accept_threshold
        contenders = [result for result in results if result.score >= threshold]
        # A second high-scoring candidate means the choice is ambiguous.
        if len(contenders) != 1:
            return None
        return contenders[0]


def _require(state: ResolutionState, action: str, *allowed: Stage) -> None:
    if state.stage not in allowed:
        raise InvalidTransitionError(action, state.stage.value)


def _validate_new_customer(payload: Mapping[str, str]) -> dict[str, str]:
    errors: dict[str, str] = {}
    if not payload.get("company_name"):
        errors["company_name"] = "company name is required"
    email = payload.get("email")
    if email and not EMAIL_PATTERN.match(email):
        errors["email"] = "invalid email format"
    return errors
