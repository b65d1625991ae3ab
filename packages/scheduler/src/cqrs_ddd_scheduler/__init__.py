"""cqrs-ddd-scheduler — Scheduled and recurring jobs for the CQRS/DDD toolkit.

The :class:`Job` aggregate owns its execution state machine; storage, the
work itself and the clock are injected collaborators.
"""

from __future__ import annotations

# ── Adapters ────────────────────────────────────────────────────
from .adapters.memory import FrozenClock, InMemoryJobRepository

# ── Domain ───────────────────────────────────────────────────────
from .domain import AggregateRoot, DomainEvent, Interval, ValueObject

# ── Jobs ─────────────────────────────────────────────────────────
from .jobs import (
    CallableProgram,
    ExecutionPolicy,
    FailureRecord,
    IProgram,
    IRunner,
    Job,
    JobDispatched,
    JobExecuted,
    JobFailed,
    JobParked,
    JobRegistered,
    JobRepetitionEnded,
    JobReset,
    JobRunner,
    JobScheduled,
    JobService,
    JobStatus,
    JobTerminated,
)

# ── Ports ────────────────────────────────────────────────────────
from .ports import IJobRepository

# ── Primitives ───────────────────────────────────────────────────
from .primitives import (
    CatchUpLimitExceededError,
    DomainError,
    IClock,
    IIDGenerator,
    InvalidIntervalSpecError,
    InvariantViolationError,
    JobAlreadyStartedError,
    JobLockedError,
    JobNotPendingError,
    JobStateError,
    SchedulerError,
    SequentialIDGenerator,
    SystemClock,
    UUID4Generator,
    ValidationError,
)

__all__ = [
    # Adapters
    "FrozenClock",
    "InMemoryJobRepository",
    # Domain
    "AggregateRoot",
    "DomainEvent",
    "Interval",
    "ValueObject",
    # Jobs
    "CallableProgram",
    "ExecutionPolicy",
    "FailureRecord",
    "IProgram",
    "IRunner",
    "Job",
    "JobDispatched",
    "JobExecuted",
    "JobFailed",
    "JobParked",
    "JobRegistered",
    "JobRepetitionEnded",
    "JobReset",
    "JobRunner",
    "JobScheduled",
    "JobService",
    "JobStatus",
    "JobTerminated",
    # Ports
    "IJobRepository",
    # Primitives
    "CatchUpLimitExceededError",
    "DomainError",
    "IClock",
    "IIDGenerator",
    "InvalidIntervalSpecError",
    "InvariantViolationError",
    "JobAlreadyStartedError",
    "JobLockedError",
    "JobNotPendingError",
    "JobStateError",
    "SchedulerError",
    "SequentialIDGenerator",
    "SystemClock",
    "UUID4Generator",
    "ValidationError",
]
