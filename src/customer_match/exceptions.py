from __future__ import annotations


class CustomerMatchError(Exception):
    """Base class for errors raised by customer_match."""


class WorkflowError(CustomerMatchError):
    """A resolution workflow was driven in a way its current state does not allow."""


class InvalidTransitionError(WorkflowError):
    def __init__(self, action: str, stage: str) -> None:
        super().__init__(f"Cannot {action} while workflow is in stage '{stage}'")
        self.action = action
        self.stage = stage


class UnknownCandidateError(WorkflowError):
    def __init__(self, customer_id: str) -> None:
        super().__init__(f"Customer '{customer_id}' is not among the current match results")
        self.customer_id = customer_id


class StoreWriteError(CustomerMatchError):
    """The external customer store rejected a create or update.

    The workflow state passed to the failing call is still valid, so the
    decision can be retried.
    """

    def __init__(self, operation: str, customer_id: str | None = None, reason: str = "") -> None:
        target = f" for customer '{customer_id}'" if customer_id else ""
        message = f"Store write failed during {operation}{target}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.operation = operation
        self.customer_id = customer_id


class InvalidCustomerDataError(WorkflowError):
    """A new customer payload failed validation before reaching the store."""

    def __init__(self, errors: dict[str, str]) -> None:
        details = "; ".join(f"{name}: {message}" for name, message in errors.items())
        super().__init__(f"Invalid customer data ({details})")
        self.errors = errors
