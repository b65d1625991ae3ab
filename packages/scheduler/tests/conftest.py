"""Shared fixtures for scheduler tests."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from cqrs_ddd_scheduler.adapters.memory import FrozenClock

T0 = datetime(2025, 1, 6, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def t0() -> datetime:
    """Reference instant used as the first scheduled run."""
    return T0


@pytest.fixture
def clock() -> FrozenClock:
    """Clock frozen at ``T0``."""
    return FrozenClock(T0)
