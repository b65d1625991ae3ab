"""InMemoryJobRepository — in-memory implementation for testing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cqrs_ddd_scheduler.ports.job_repository import IJobRepository
from cqrs_ddd_scheduler.primitives.clock import SystemClock
from cqrs_ddd_scheduler.primitives.id_generator import UUID4Generator

if TYPE_CHECKING:
    import builtins

    from cqrs_ddd_scheduler.jobs.entity import Job
    from cqrs_ddd_scheduler.primitives.clock import IClock
    from cqrs_ddd_scheduler.primitives.id_generator import IIDGenerator


class InMemoryJobRepository(IJobRepository):
    """In-memory implementation of ``IJobRepository`` for testing.

    Stores the job objects themselves, so the program and clock attached
    to a job survive a round trip.
    """

    def __init__(
        self,
        id_generator: IIDGenerator | None = None,
        clock: IClock | None = None,
    ) -> None:
        self._jobs: dict[str, Job] = {}
        self._id_generator = id_generator or UUID4Generator()
        self._clock = clock or SystemClock()

    async def add(self, entity: Job) -> str:
        """Store or update a job, registering it on first save."""
        job_id = entity.assign_id(self._id_generator)
        if not entity.is_registered:
            entity.register(self._clock.now())
        entity.mark_saved()
        self._jobs[job_id] = entity
        return job_id

    async def get(self, entity_id: str) -> Job | None:
        """Retrieve a job by ID."""
        return self._jobs.get(entity_id)

    async def delete(self, entity_id: str) -> str:
        """Delete a job by ID."""
        self._jobs.pop(entity_id, None)
        return entity_id

    async def list_all(
        self, entity_ids: builtins.list[str] | None = None
    ) -> builtins.list[Job]:
        """Retrieve all jobs, or filter by IDs."""
        if entity_ids is None:
            return list(self._jobs.values())
        return [j for jid, j in self._jobs.items() if jid in entity_ids]

    # --- Test helpers ---

    def clear(self) -> None:
        self._jobs.clear()

    def __len__(self) -> int:
        return len(self._jobs)
