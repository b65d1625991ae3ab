"""IClock — source of the current time."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Protocol, runtime_checkable


@runtime_checkable
class IClock(Protocol):
    """Protocol for reading the current time.

    Jobs compare their due dates against ``now()`` instead of reading the
    system clock directly, so tests can pin time with a frozen clock.
    Implementations must return timezone-aware datetimes.
    """

    def now(self) -> datetime:
        """Return the current instant as an aware datetime."""
        ...


class SystemClock(IClock):
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


def ensure_aware(value: datetime) -> datetime:
    """Interpret naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
