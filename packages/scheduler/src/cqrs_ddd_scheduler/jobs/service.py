"""JobService — register, run, reset and stop repeating scheduled jobs."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .entity import JobStatus
from .program import JobRunner

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..ports.job_repository import IJobRepository
    from .entity import Job
    from .program import IRunner

logger = logging.getLogger("cqrs_ddd.scheduler.service")


class JobService:
    """Bridge between callers and the job persistence layer.

    All persistence goes through ``IJobRepository``.  The service does not
    look for due jobs or enqueue them; a dispatcher that already knows which
    job to run calls :meth:`run` with its ID.

    ``runner_factory`` builds a fresh :class:`IRunner` for every run
    (defaults to :class:`JobRunner`).
    """

    def __init__(
        self,
        persistence: IJobRepository,
        runner_factory: Callable[[], IRunner] = JobRunner,
    ) -> None:
        self._persistence = persistence
        self._runner_factory = runner_factory

    # -- commands ---------------------------------------------------------

    async def register(self, job: Job) -> Job:
        """Persist a new job; the repository stamps its insertion date."""
        await self._persistence.add(job)
        logger.info(
            "Registered job %s (%s), first run at %s",
            job.id,
            job.service_id,
            job.next_execution_date,
        )
        return job

    async def run(self, job_id: str) -> Job | None:
        """Dispatch and execute a job, then persist the outcome.

        A WAITING job is dispatched first.  A job left PENDING by an earlier
        run (catch-up limit reached, or dispatched before it was due) is
        executed again as is, continuing from its current due date.

        Program failures are persisted on the job before being re-raised.
        Returns None if the job does not exist.
        """
        job = await self._persistence.get(job_id)
        if not job:
            return None

        if job.status == JobStatus.PENDING:
            logger.info("Resuming pending job %s (%s)", job_id, job.service_id)
        else:
            job.prepare_for_execution()
            await self._persistence.add(job)

        try:
            job.execute(self._runner_factory())
        except Exception:
            logger.exception("Scheduled job %s (%s) failed", job_id, job.service_id)
            await self._persistence.add(job)
            raise

        await self._persistence.add(job)
        return job

    async def reset(self, job_id: str) -> Job | None:
        """Return a FAILED job to WAITING."""
        job = await self._persistence.get(job_id)
        if not job:
            return None

        job.reset()
        await self._persistence.add(job)
        return job

    async def end_repetition(self, job_id: str) -> Job | None:
        """Let a recurring job finish after its next successful run."""
        job = await self._persistence.get(job_id)
        if not job:
            return None

        job.end_repetition()
        await self._persistence.add(job)
        return job

    async def get(self, job_id: str) -> Job | None:
        """Fetch a single job by ID."""
        return await self._persistence.get(job_id)
