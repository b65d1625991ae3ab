"""Tests for JobService."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

import pytest

from cqrs_ddd_scheduler.adapters.memory import InMemoryJobRepository
from cqrs_ddd_scheduler.jobs import (
    CallableProgram,
    ExecutionPolicy,
    Job,
    JobRunner,
    JobService,
    JobStatus,
)
from cqrs_ddd_scheduler.primitives.exceptions import (
    CatchUpLimitExceededError,
    JobStateError,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from cqrs_ddd_scheduler.adapters.memory import FrozenClock
    from cqrs_ddd_scheduler.jobs import IRunner


class CountingRunner(JobRunner):
    instances = 0

    def __init__(self) -> None:
        super().__init__()
        type(self).instances += 1


def _noop(runner: IRunner) -> None:
    return None


def _fail(runner: IRunner) -> None:
    raise ConnectionError("smtp unreachable")


def _service(clock: FrozenClock) -> tuple[JobService, InMemoryJobRepository]:
    persistence = InMemoryJobRepository(clock=clock)
    return JobService(persistence), persistence


def _job(
    clock: FrozenClock, fn: Callable[[IRunner], object] = _noop, **data: object
) -> Job:
    return Job(
        service_id="mail.digest", program=CallableProgram(fn), clock=clock, **data
    )


class TestJobService:
    """Test the JobService."""

    @pytest.mark.asyncio
    async def test_register_persists_job(
        self, clock: FrozenClock, t0: datetime
    ) -> None:
        """register() should persist and stamp the job."""
        service, persistence = _service(clock)
        job = _job(clock)

        result = await service.register(job)

        assert result is job
        assert job.id is not None
        assert job.insertion_date == t0
        assert await persistence.get(job.id) is job

    @pytest.mark.asyncio
    async def test_get_nonexistent_returns_none(self, clock: FrozenClock) -> None:
        service, _ = _service(clock)

        assert await service.get("nonexistent") is None
        assert await service.run("nonexistent") is None
        assert await service.reset("nonexistent") is None
        assert await service.end_repetition("nonexistent") is None

    @pytest.mark.asyncio
    async def test_run_one_shot_job(self, clock: FrozenClock) -> None:
        """run() dispatches, executes and persists the job."""
        service, persistence = _service(clock)
        job = await service.register(_job(clock))
        version = job.version

        result = await service.run(job.id)

        assert result is job
        assert job.status == JobStatus.TERMINATED
        assert job.execution_count == 1
        assert job.version == version + 2
        stored = await persistence.get(job.id)
        assert stored.status == JobStatus.TERMINATED

    @pytest.mark.asyncio
    async def test_run_recurring_job_catches_up(
        self, clock: FrozenClock, t0: datetime
    ) -> None:
        service, _ = _service(clock)
        job = await service.register(_job(clock, repeat_every="PT1H"))
        clock.advance(hours=3, minutes=30)

        await service.run(job.id)

        assert job.execution_count == 4
        assert job.status == JobStatus.WAITING
        assert job.next_execution_date == t0 + timedelta(hours=4)

    @pytest.mark.asyncio
    async def test_run_uses_fresh_runner(self, clock: FrozenClock) -> None:
        persistence = InMemoryJobRepository(clock=clock)
        service = JobService(persistence, runner_factory=CountingRunner)
        job = await service.register(_job(clock, repeat_every="PT1H"))
        CountingRunner.instances = 0

        await service.run(job.id)
        clock.advance(hours=1)
        await service.run(job.id)

        assert CountingRunner.instances == 2
        assert job.execution_count == 2

    @pytest.mark.asyncio
    async def test_run_persists_failure_and_reraises(
        self, clock: FrozenClock, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A failing program is persisted as FAILED, logged, and re-raised."""
        service, persistence = _service(clock)
        job = await service.register(_job(clock, fn=_fail))

        with (
            caplog.at_level(logging.ERROR, logger="cqrs_ddd.scheduler.service"),
            pytest.raises(ConnectionError),
        ):
            await service.run(job.id)

        stored = await persistence.get(job.id)
        assert stored.status == JobStatus.FAILED
        assert stored.last_failure.message == "smtp unreachable"
        assert "failed" in caplog.text
        assert not stored.is_locked

    @pytest.mark.asyncio
    async def test_run_resumes_job_stopped_by_catch_up_limit(
        self, clock: FrozenClock, t0: datetime
    ) -> None:
        """A job left PENDING by the catch-up bound continues on the next run."""
        service, persistence = _service(clock)
        job = await service.register(
            _job(
                clock,
                repeat_every="PT1H",
                policy=ExecutionPolicy(max_catch_up_iterations=2),
            )
        )
        clock.advance(hours=3, minutes=30)

        with pytest.raises(CatchUpLimitExceededError):
            await service.run(job.id)

        stored = await persistence.get(job.id)
        assert stored.status == JobStatus.PENDING
        assert stored.execution_count == 2

        result = await service.run(job.id)

        assert result is job
        assert job.execution_count == 4
        assert job.status == JobStatus.WAITING
        assert job.next_execution_date == t0 + timedelta(hours=4)

    @pytest.mark.asyncio
    async def test_run_resumes_early_dispatched_job_once_due(
        self, clock: FrozenClock, t0: datetime
    ) -> None:
        service, persistence = _service(clock)
        job = Job(
            service_id="mail.digest",
            program=CallableProgram(_noop),
            clock=clock,
            status=JobStatus.PENDING,
            execution_count=1,
            first_execution_date=t0 - timedelta(hours=1),
            next_execution_date=t0 + timedelta(hours=1),
        )
        await persistence.add(job)

        with pytest.raises(JobStateError, match="already ran"):
            await service.run(job.id)
        clock.advance(hours=1)

        await service.run(job.id)

        assert job.status == JobStatus.TERMINATED
        assert job.execution_count == 2

    @pytest.mark.asyncio
    async def test_run_refuses_job_that_is_not_waiting(
        self, clock: FrozenClock
    ) -> None:
        service, _ = _service(clock)
        job = await service.register(_job(clock))
        await service.run(job.id)

        with pytest.raises(JobStateError, match="TERMINATED"):
            await service.run(job.id)

    @pytest.mark.asyncio
    async def test_reset_then_rerun(self, clock: FrozenClock) -> None:
        """reset() returns a FAILED job to WAITING so it can run again."""
        service, _ = _service(clock)
        job = await service.register(_job(clock, fn=_fail))
        with pytest.raises(ConnectionError):
            await service.run(job.id)
        job.set_program(CallableProgram(_noop))

        result = await service.reset(job.id)

        assert result.status == JobStatus.WAITING
        await service.run(job.id)
        assert job.status == JobStatus.TERMINATED
        assert job.execution_count == 2

    @pytest.mark.asyncio
    async def test_end_repetition(self, clock: FrozenClock) -> None:
        service, _ = _service(clock)
        job = await service.register(_job(clock, repeat_every="P1D"))

        result = await service.end_repetition(job.id)

        assert result.repeat_every is None
        await service.run(job.id)
        assert job.status == JobStatus.TERMINATED
