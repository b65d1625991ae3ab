"""Domain and contract exceptions for cqrs-ddd-scheduler."""

from __future__ import annotations

from typing import Any


class SchedulerError(Exception):
    """Root exception for the scheduler package."""


class DomainError(SchedulerError):
    """Base class for all domain-related errors."""


class InvariantViolationError(DomainError):
    """Raised when a domain invariant is violated."""


class ValidationError(SchedulerError):
    """Raised when input validation fails.

    Carries structured errors: ``{field: [messages]}``.
    """

    def __init__(self, errors: dict[str, list[str]] | str | None = None) -> None:
        if isinstance(errors, str):
            self.errors: dict[str, list[str]] = {"__root__": [errors]}
        elif errors is None:
            self.errors = {}
        else:
            self.errors = errors
        super().__init__(str(self.errors))


class InvalidIntervalSpecError(ValidationError):
    """Raised when a duration string is not a supported ISO-8601 duration."""

    def __init__(self, spec: Any, reason: str | None = None) -> None:
        self.spec = spec
        self.reason = reason
        msg = f"Invalid interval specification {spec!r}"
        if reason:
            msg += f": {reason}"
        super().__init__({"interval": [msg]})


# ── Job state machine ───────────────────────────────────────────────


class JobStateError(DomainError):
    """Raised when a job state machine transition is not allowed.

    E.g. dispatching a job that is not WAITING, executing a job without a
    program, or dispatching a one-shot job that already ran and is not due.
    """


class JobLockedError(JobStateError):
    """Raised when a job is mutated or executed while a run is in progress."""

    def __init__(self, job_id: object = None) -> None:
        self.job_id = job_id
        super().__init__(f"Cannot modify job {job_id!r}: a run is in progress")


class JobNotPendingError(JobStateError):
    """Raised when ``execute`` is called on a job that is not PENDING."""

    def __init__(self, job_id: object, status: str) -> None:
        self.job_id = job_id
        self.status = status
        super().__init__(
            f"Cannot execute job {job_id!r} in {status} state (expected PENDING)"
        )


class JobAlreadyStartedError(JobStateError):
    """Raised when the first execution date is rewritten after a run."""

    def __init__(self, job_id: object, execution_count: int) -> None:
        self.job_id = job_id
        self.execution_count = execution_count
        super().__init__(
            f"Cannot reschedule job {job_id!r}: "
            f"already executed {execution_count} time(s)"
        )


class CatchUpLimitExceededError(JobStateError):
    """Raised when a recurring job needs more catch-up runs than allowed.

    Completed iterations stay recorded on the job; it remains PENDING.
    """

    def __init__(self, job_id: object, limit: int) -> None:
        self.job_id = job_id
        self.limit = limit
        super().__init__(
            f"Job {job_id!r} exceeded {limit} catch-up iterations in one run"
        )


__all__ = [
    "CatchUpLimitExceededError",
    "DomainError",
    "InvalidIntervalSpecError",
    "InvariantViolationError",
    "JobAlreadyStartedError",
    "JobLockedError",
    "JobNotPendingError",
    "JobStateError",
    "SchedulerError",
    "ValidationError",
]
