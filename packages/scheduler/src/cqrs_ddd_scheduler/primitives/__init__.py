"""Primitives: exceptions, clock, ID generation."""

from __future__ import annotations

from .clock import IClock, SystemClock, ensure_aware
from .exceptions import (
    CatchUpLimitExceededError,
    DomainError,
    InvalidIntervalSpecError,
    InvariantViolationError,
    JobAlreadyStartedError,
    JobLockedError,
    JobNotPendingError,
    JobStateError,
    SchedulerError,
    ValidationError,
)
from .id_generator import IIDGenerator, SequentialIDGenerator, UUID4Generator

__all__ = [
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
    "ensure_aware",
]
