"""DomainEvent — base for the events a job records as it changes state."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class DomainEvent(BaseModel):
    """Immutable record of something that happened to an aggregate.

    Events are created bare by the aggregate and bound to it with
    :meth:`bind`, which fills in the aggregate identity and the time taken
    from the aggregate's clock.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    event_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    aggregate_id: str | None = None
    aggregate_type: str | None = None
    correlation_id: str | None = None

    def bind(
        self,
        *,
        aggregate_id: str | None,
        aggregate_type: str,
        occurred_at: datetime | None = None,
    ) -> DomainEvent:
        """Return a copy attached to the given aggregate.

        Values the event already carries are kept.
        """
        updates: dict[str, object] = {}
        if self.aggregate_id is None and aggregate_id is not None:
            updates["aggregate_id"] = aggregate_id
        if self.aggregate_type is None:
            updates["aggregate_type"] = aggregate_type
        if occurred_at is not None:
            updates["occurred_at"] = occurred_at
        if not updates:
            return self
        return self.model_copy(update=updates)
