"""Domain events emitted during job lifecycle transitions."""

from __future__ import annotations

from datetime import datetime

from pydantic import ConfigDict

from ..domain.events import DomainEvent


class JobRegistered(DomainEvent):
    """Emitted when a job is durably registered for the first time."""

    model_config = ConfigDict(frozen=True)

    service_id: str | None = None
    next_execution_date: datetime


class JobScheduled(DomainEvent):
    """Emitted when the first execution date is set explicitly."""

    model_config = ConfigDict(frozen=True)

    next_execution_date: datetime


class JobDispatched(DomainEvent):
    """Emitted when a job moves from WAITING to PENDING."""

    model_config = ConfigDict(frozen=True)


class JobExecuted(DomainEvent):
    """Emitted after each successful program run."""

    model_config = ConfigDict(frozen=True)

    execution_count: int
    due_date: datetime | None = None


class JobParked(DomainEvent):
    """Emitted when a recurring job goes back to WAITING for its next tick."""

    model_config = ConfigDict(frozen=True)

    next_execution_date: datetime


class JobTerminated(DomainEvent):
    """Emitted when a job finishes its last run."""

    model_config = ConfigDict(frozen=True)

    execution_count: int


class JobFailed(DomainEvent):
    """Emitted when a program run raises."""

    model_config = ConfigDict(frozen=True)

    error_message: str
    execution_count: int


class JobRepetitionEnded(DomainEvent):
    """Emitted when a recurring job is turned into a finish-after-next-run job."""

    model_config = ConfigDict(frozen=True)


class JobReset(DomainEvent):
    """Emitted when an operator returns a failed job to WAITING."""

    model_config = ConfigDict(frozen=True)
