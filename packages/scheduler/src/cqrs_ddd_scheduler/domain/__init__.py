"""Domain primitives: aggregates, events, value objects, intervals."""

from __future__ import annotations

from .aggregate import AggregateRoot
from .events import DomainEvent
from .interval import Interval
from .value_object import ValueObject

__all__: list[str] = [
    "AggregateRoot",
    "DomainEvent",
    "Interval",
    "ValueObject",
]
