"""FrozenClock — manually advanced clock for deterministic tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from cqrs_ddd_scheduler.primitives.clock import IClock, ensure_aware


class FrozenClock(IClock):
    """
    :class:`IClock` that only moves when told to.

    Usage::

        clock = FrozenClock(datetime(2025, 1, 1, 9, tzinfo=timezone.utc))
        job = Job(clock=clock, ...)
        clock.advance(hours=3, minutes=30)
    """

    def __init__(self, now: datetime | None = None) -> None:
        self._now = ensure_aware(now) if now else datetime.now(timezone.utc)

    def now(self) -> datetime:
        return self._now

    # --- Test helpers ---

    def set(self, now: datetime) -> None:
        self._now = ensure_aware(now)

    def advance(self, delta: timedelta | None = None, **kwargs: float) -> datetime:
        """Move forward by ``delta`` or by ``timedelta(**kwargs)``."""
        step = delta if delta is not None else timedelta(**kwargs)
        self._now = self._now + step
        return self._now
