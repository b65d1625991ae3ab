from .clock import FrozenClock
from .job_repository import InMemoryJobRepository

__all__ = [
    "FrozenClock",
    "InMemoryJobRepository",
]
