"""Job — aggregate root for scheduled, optionally recurring work."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import ConfigDict, Field, PrivateAttr, field_validator, model_validator

from ..domain.aggregate import AggregateRoot
from ..domain.interval import Interval
from ..primitives.clock import IClock, SystemClock, ensure_aware
from ..primitives.exceptions import (
    CatchUpLimitExceededError,
    InvalidIntervalSpecError,
    InvariantViolationError,
    JobAlreadyStartedError,
    JobLockedError,
    JobNotPendingError,
    JobStateError,
)
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

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ..domain.events import DomainEvent
    from .program import IProgram, IRunner

logger = logging.getLogger("cqrs_ddd.scheduler")


class JobStatus(str, Enum):
    """Lifecycle states for a scheduled job."""

    WAITING = "WAITING"
    PENDING = "PENDING"
    TERMINATED = "TERMINATED"
    FAILED = "FAILED"


class Job(AggregateRoot[str]):
    """Aggregate root representing a one-shot or recurring scheduled job.

    Status transitions::

        WAITING  → PENDING     (prepare_for_execution)
        PENDING  → TERMINATED  (execute: one-shot run succeeded)
        PENDING  → WAITING     (execute: recurring, next tick in the future)
        PENDING  → FAILED      (execute: program raised)
        FAILED   → WAITING     (reset)

    A recurring job catches up on missed ticks inside a single ``execute``
    call: after each successful run ``next_execution_date`` advances by
    exactly one ``repeat_every`` interval and the job runs again until the
    next tick lies in the future.

    While a run is in progress the job is locked: every mutator and any
    re-entrant ``execute`` raise :class:`JobLockedError`.  The lock is local
    and advisory; it does not coordinate separate processes.

    Usage::

        job = Job(service_id="reports.daily", program=program, clock=clock)
        job.set_repeat_every("P1D")
        await repository.add(job)          # stamps insertion_date

        job.prepare_for_execution()        # done by the dispatcher
        job.execute(JobRunner())
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str | None = None
    service_id: str | None = None
    program: Any = Field(default=None, exclude=True, repr=False)
    status: JobStatus = JobStatus.WAITING
    next_execution_date: datetime | None = None
    first_execution_date: datetime | None = None
    insertion_date: datetime | None = None
    last_execution_date: datetime | None = None
    repeat_every: str | None = None
    execution_count: int = Field(default=0, ge=0)
    last_failure: FailureRecord | None = None
    policy: ExecutionPolicy = Field(
        default_factory=ExecutionPolicy, exclude=True, repr=False
    )

    _locked: bool = PrivateAttr(default=False)
    _clock: IClock = PrivateAttr(default_factory=SystemClock)

    def __init__(self, clock: IClock | None = None, **data: Any) -> None:
        super().__init__(**data)
        if clock is not None:
            self._clock = clock

    # -- validation -------------------------------------------------------

    @field_validator("repeat_every", mode="before")
    @classmethod
    def _canonical_repeat_every(cls, value: Any) -> str | None:
        if value is None:
            return None
        return _recurring_interval(value).isoformat()

    @field_validator(
        "next_execution_date",
        "first_execution_date",
        "insertion_date",
        "last_execution_date",
    )
    @classmethod
    def _aware_dates(cls, value: datetime | None) -> datetime | None:
        return ensure_aware(value) if value is not None else None

    @model_validator(mode="after")
    def _check_terminal_date(self) -> Job:
        if self.status == JobStatus.TERMINATED and self.next_execution_date is not None:
            raise InvariantViolationError(
                "A TERMINATED job cannot have a next execution date"
            )
        if (
            self.status != JobStatus.TERMINATED
            and self.next_execution_date is None
            and self.insertion_date is not None
        ):
            raise InvariantViolationError(
                f"A registered {self.status.value} job needs a next execution date"
            )
        return self

    # -- helpers ----------------------------------------------------------

    def _now(self) -> datetime:
        return ensure_aware(self._clock.now())

    def _emit(self, event: DomainEvent) -> None:
        self.add_event(
            event.bind(
                aggregate_id=self.id,
                aggregate_type=self.__class__.__name__,
                occurred_at=self._now(),
            )
        )

    # -- read accessors ---------------------------------------------------

    @property
    def clock(self) -> IClock:
        return self._clock

    @property
    def is_locked(self) -> bool:
        return self._locked

    @property
    def is_recurring(self) -> bool:
        return self.repeat_every is not None

    @property
    def is_registered(self) -> bool:
        return self.insertion_date is not None

    @property
    def repeat_interval(self) -> Interval | None:
        """Parsed ``repeat_every``, or None for one-shot jobs."""
        if self.repeat_every is None:
            return None
        return Interval.parse(self.repeat_every)

    def to_record(self) -> dict[str, Any]:
        """JSON-friendly snapshot of every persisted attribute.

        The program, the policy and the transient lock are not included;
        the persistence layer resolves the program from ``service_id``.
        """
        return self.model_dump(mode="json")

    # -- locking ----------------------------------------------------------

    def lock(self) -> None:
        self._locked = True

    def unlock(self) -> None:
        self._locked = False

    def check_unlocked(self) -> None:
        """Raise :class:`JobLockedError` while a run is in progress."""
        if self._locked:
            raise JobLockedError(self.id)

    @contextmanager
    def locked(self) -> Iterator[Job]:
        """Hold the lock for the duration of the block, releasing it on exit."""
        self.check_unlocked()
        self.lock()
        try:
            yield self
        finally:
            self.unlock()

    # -- mutators ---------------------------------------------------------

    def set_name(self, name: str | None) -> Job:
        self.name = name
        return self

    def set_service_id(self, service_id: str) -> Job:
        self.check_unlocked()
        self.service_id = service_id
        return self

    def set_program(self, program: IProgram) -> Job:
        self.check_unlocked()
        self.program = program
        return self

    def set_clock(self, clock: IClock) -> Job:
        self.check_unlocked()
        self._clock = clock
        return self

    def set_scheduled_in(self, interval: Interval | str) -> Job:
        """Schedule the first run ``interval`` from now."""
        self.check_unlocked()
        delay = Interval.coerce(interval)
        self._ensure_not_started()
        return self._schedule(delay.add_to(self._now()))

    def set_scheduled_at(self, date: datetime) -> Job:
        """Schedule the first run at ``date`` (naive values are read as UTC)."""
        self.check_unlocked()
        self._ensure_not_started()
        return self._schedule(ensure_aware(date))

    def set_repeat_every(self, interval: Interval | str) -> Job:
        """Make the job recurring with the given (non-zero) interval."""
        self.check_unlocked()
        self.repeat_every = _recurring_interval(interval, self._now()).isoformat()
        return self

    def end_repetition(self) -> Job:
        """Stop repeating: the next successful run terminates the job."""
        self.check_unlocked()
        if self.repeat_every is not None:
            self.repeat_every = None
            self._emit(JobRepetitionEnded())
        return self

    def _ensure_not_started(self) -> None:
        if self.execution_count > 0:
            raise JobAlreadyStartedError(self.id, self.execution_count)

    def _schedule(self, moment: datetime) -> Job:
        self.next_execution_date = moment
        self.first_execution_date = moment
        self._emit(JobScheduled(next_execution_date=moment))
        return self

    # -- lifecycle --------------------------------------------------------

    def register(self, now: datetime | None = None) -> None:
        """Stamp the insertion date on first durable registration.

        Jobs without an explicit schedule become due immediately.
        Registering an already registered job is a no-op.
        """
        if self.insertion_date is not None:
            return
        moment = ensure_aware(now) if now is not None else self._now()
        self.insertion_date = moment
        if self.first_execution_date is None:
            self.first_execution_date = moment
            self.next_execution_date = moment
        self._emit(
            JobRegistered(
                service_id=self.service_id,
                next_execution_date=self.next_execution_date,
            )
        )

    def prepare_for_execution(self) -> None:
        """WAITING → PENDING, stamping ``last_execution_date``."""
        self.check_unlocked()
        if self.status != JobStatus.WAITING:
            raise JobStateError(
                f"Cannot dispatch job {self.id!r} in {self.status.value} state"
            )
        if self.next_execution_date is None:
            raise JobStateError(
                f"Cannot dispatch job {self.id!r} before it is registered or scheduled"
            )
        self.status = JobStatus.PENDING
        self.last_execution_date = self._now()
        self._emit(JobDispatched())

    def reset(self) -> None:
        """FAILED → WAITING; the failed tick becomes due again."""
        self.check_unlocked()
        if self.status != JobStatus.FAILED:
            raise JobStateError(
                f"Cannot reset job {self.id!r} in {self.status.value} state"
            )
        self.status = JobStatus.WAITING
        self._emit(JobReset())

    # -- execution --------------------------------------------------------

    def execute(self, runner: IRunner) -> None:
        """Run the job's program as many times as its schedule requires.

        Raises:
            JobNotPendingError: the job is not PENDING (nothing changes).
            JobLockedError: a run of this job is already in progress.
            JobStateError: no program is attached, or a one-shot job that
                already ran was dispatched before it is due (strict policy).
            CatchUpLimitExceededError: a recurring job needed more runs than
                ``policy.max_catch_up_iterations``.
            InvalidIntervalSpecError: the next tick of a recurring job falls
                outside the supported date range; raised before the run.
            Exception: whatever the program raised, after the failure has
                been recorded on the job.
        """
        if self.status != JobStatus.PENDING:
            raise JobNotPendingError(self.id, self.status.value)
        self.check_unlocked()
        if self.program is None:
            raise JobStateError(f"Job {self.id!r} has no program to execute")
        if self.next_execution_date is None:
            raise JobStateError(f"Job {self.id!r} has no execution date")

        limit = self.policy.max_catch_up_iterations
        runs = 0
        while True:
            now = self._now()
            is_future = self.next_execution_date > now

            if is_future and self.is_recurring:
                self._park()
                return
            if is_future and self.execution_count > 0:
                self._report_anomaly(now)
                return
            if runs >= limit:
                raise CatchUpLimitExceededError(self.id, limit)

            # Computed up front so an unusable interval fails before the run.
            interval = self.repeat_interval
            following = (
                interval.add_to(self.next_execution_date)
                if interval is not None
                else None
            )

            self._run_once(runner, now)
            runs += 1

            if following is None:
                self._terminate()
                return
            self.next_execution_date = following
            logger.debug(
                "Job %s advanced to %s after run %d",
                self.id,
                self.next_execution_date.isoformat(),
                self.execution_count,
            )

    def _run_once(self, runner: IRunner, now: datetime) -> None:
        due_date = self.next_execution_date
        with self.locked():
            self.last_execution_date = now
            try:
                runner.set_job(self)
                self.program.execute(runner)
            except Exception as exc:
                self._record_failure(exc, now)
                raise
        self.execution_count += 1
        self._emit(JobExecuted(execution_count=self.execution_count, due_date=due_date))

    def _record_failure(self, exc: Exception, now: datetime) -> None:
        self.status = JobStatus.FAILED
        self.execution_count += 1
        self.last_failure = FailureRecord.from_exception(exc, occurred_at=now)
        logger.warning(
            "Job %s (%s) failed on run %d: %s",
            self.id,
            self.service_id,
            self.execution_count,
            exc,
        )
        self._emit(
            JobFailed(error_message=str(exc), execution_count=self.execution_count)
        )

    def _park(self) -> None:
        self.status = JobStatus.WAITING
        logger.debug(
            "Job %s waiting until %s", self.id, self.next_execution_date.isoformat()
        )
        self._emit(JobParked(next_execution_date=self.next_execution_date))

    def _terminate(self) -> None:
        self.status = JobStatus.TERMINATED
        self.next_execution_date = None
        logger.info(
            "Job %s (%s) terminated after %d run(s)",
            self.id,
            self.service_id,
            self.execution_count,
        )
        self._emit(JobTerminated(execution_count=self.execution_count))

    def _report_anomaly(self, now: datetime) -> None:
        message = (
            f"One-shot job {self.id!r} already ran {self.execution_count} time(s) "
            f"and is not due until {self.next_execution_date}; "
            f"it was dispatched at {now.isoformat()}"
        )
        logger.warning("Inconsistent dispatch: %s", message)
        if self.policy.strict_anomalies:
            raise JobStateError(message)


def _recurring_interval(
    value: Interval | str, reference: datetime | None = None
) -> Interval:
    interval = Interval.coerce(value)
    if interval.is_zero:
        raise InvalidIntervalSpecError(value, "repeat interval must be non-zero")
    # Raises InvalidIntervalSpecError when the step overflows the datetime range.
    interval.add_to(reference or datetime.now(timezone.utc))
    return interval
