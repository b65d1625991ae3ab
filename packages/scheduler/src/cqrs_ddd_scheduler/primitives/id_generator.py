"""ID generation strategies used when a job is first stored."""

import itertools
import uuid
from typing import Protocol


class IIDGenerator(Protocol):
    """
    Protocol for assigning identities to newly registered jobs.
    Jobs never pick their own ID; the repository asks a generator.
    """

    def next_id(self) -> str:
        """Return a new, unique identifier."""
        ...


class UUID4Generator(IIDGenerator):
    """Random UUIDv4 identifiers; the default for repositories."""

    def next_id(self) -> str:
        return str(uuid.uuid4())


class SequentialIDGenerator(IIDGenerator):
    """
    Predictable ``<prefix><n>`` identifiers (``job-1``, ``job-2``, ...).
    Useful for fixtures and for logs that should be easy to read.
    """

    def __init__(self, prefix: str = "job-", start: int = 1) -> None:
        self._prefix = prefix
        self._counter = itertools.count(start)

    def next_id(self) -> str:
        return f"{self._prefix}{next(self._counter)}"
