"""Scheduled Jobs — entity, events, failure records, program capabilities, service."""

from __future__ import annotations

from .entity import Job, JobStatus
from .events import (
    JobDispatched,
    JobExecuted,
    JobFailed,
    JobParked,
    JobRegistered,
    JobRepetitionEnded,
    JobReset,
    JobScheduled,
    JobTerminated,
)
from .failure import FailureRecord
from .policy import ExecutionPolicy
from .program import CallableProgram, IProgram, IRunner, JobRunner
from .service import JobService

__all__ = [
    # Entity
    "Job",
    "JobStatus",
    "ExecutionPolicy",
    "FailureRecord",
    # Events
    "JobRegistered",
    "JobScheduled",
    "JobDispatched",
    "JobExecuted",
    "JobParked",
    "JobTerminated",
    "JobFailed",
    "JobRepetitionEnded",
    "JobReset",
    # Capabilities
    "IProgram",
    "IRunner",
    "CallableProgram",
    "JobRunner",
    # Service
    "JobService",
]
