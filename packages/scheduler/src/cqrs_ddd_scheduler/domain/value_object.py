"""ValueObject — immutable base for schedule values such as intervals."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Immutable model compared by its serialised form.

    Two value objects are equal when they have the same type and dump to the
    same JSON.  Fields declared with ``exclude=True`` (e.g. the live exception
    kept on a failure record) take no part in equality or hashing.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def _identity(self) -> tuple[type, str]:
        return type(self), self.model_dump_json()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValueObject):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(self._identity())
