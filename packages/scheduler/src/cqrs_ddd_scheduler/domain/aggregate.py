"""AggregateRoot — identity, version and pending events for the Job."""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar, cast
from uuid import UUID

from pydantic import BaseModel, ConfigDict, PrivateAttr

if TYPE_CHECKING:
    from ..primitives.id_generator import IIDGenerator
    from .events import DomainEvent

ID = TypeVar("ID", str, int, UUID)


class AggregateRoot(BaseModel, Generic[ID]):
    """Base class for aggregates whose identity is handed out by storage.

    ``id`` stays ``None`` until the repository calls :meth:`assign_id` on the
    first save (or an ``id_generator`` is passed at construction).  Every
    save goes through :meth:`mark_saved`, which bumps :attr:`version`.
    Domain events accumulate until :meth:`collect_events` drains them.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: ID | None = None
    _version: int = PrivateAttr(default=0)
    _domain_events: list[DomainEvent] = PrivateAttr(
        default_factory=lambda: cast("list[DomainEvent]", [])
    )

    def __init__(
        self, id_generator: IIDGenerator | None = None, **data: object
    ) -> None:
        if data.get("id") is None and id_generator is not None:
            data = {**data, "id": id_generator.next_id()}
        version = cast("int", data.pop("_version", 0))
        super().__init__(**data)
        self._version = version

    # -- identity / persistence -------------------------------------------

    @property
    def version(self) -> int:
        """Number of times the aggregate has been saved."""
        return self._version

    def assign_id(self, id_generator: IIDGenerator) -> ID:
        """Give the aggregate an identity unless it already has one."""
        if self.id is None:
            self.id = cast("ID", id_generator.next_id())
        return self.id

    def mark_saved(self) -> None:
        self._version += 1

    # -- events -----------------------------------------------------------

    def add_event(self, event: DomainEvent) -> None:
        self._domain_events.append(event)

    def collect_events(self) -> list[DomainEvent]:
        """Return the recorded events and clear them."""
        events = list(self._domain_events)
        self._domain_events.clear()
        return events
