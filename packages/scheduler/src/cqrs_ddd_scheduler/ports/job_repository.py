"""IJobRepository — repository port for scheduled jobs."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    import builtins

    from ..jobs.entity import Job


@runtime_checkable
class IJobRepository(Protocol):
    """Repository interface for jobs.

    Infrastructure packages provide the real implementation;
    ``InMemoryJobRepository`` ships in ``adapters.memory`` for unit tests.

    ``add`` doubles as the registration hook: on the first save of a job
    the implementation assigns its identity and calls :meth:`Job.register`
    so the insertion date is stamped exactly once.  The repository also owns
    resolving a job's program from its ``service_id`` when reloading it;
    the job never persists itself.
    """

    async def add(self, entity: Job) -> str:
        """Insert or update a job and return its ID."""
        ...

    async def get(self, entity_id: str) -> Job | None:
        """Retrieve a job by ID."""
        ...

    async def delete(self, entity_id: str) -> str:
        """Delete a job by ID."""
        ...

    async def list_all(
        self, entity_ids: builtins.list[str] | None = None
    ) -> builtins.list[Job]:
        """Retrieve all jobs, or only those with the given IDs."""
        ...
