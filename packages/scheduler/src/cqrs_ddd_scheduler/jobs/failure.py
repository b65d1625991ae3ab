"""FailureRecord — diagnostic snapshot of a failed job run."""

from __future__ import annotations

import traceback as tb
from datetime import datetime, timezone

from pydantic import Field

from ..domain.value_object import ValueObject


def _error_code(exc: BaseException) -> int | str | None:
    code = getattr(exc, "code", None)
    if isinstance(code, (int, str)) and not isinstance(code, bool):
        return code
    errno = getattr(exc, "errno", None)
    if isinstance(errno, int):
        return errno
    return None


class FailureRecord(ValueObject):
    """Message, code and cause of the exception raised by a job's program.

    ``cause`` keeps the original exception object for in-process inspection;
    it is excluded from serialisation and from equality, so a record loaded
    back from storage only carries the textual fields.
    """

    message: str
    code: int | str | None = None
    error_type: str
    traceback: str | None = None
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    cause: BaseException | None = Field(default=None, exclude=True, repr=False)

    @classmethod
    def from_exception(
        cls, exc: BaseException, occurred_at: datetime | None = None
    ) -> FailureRecord:
        error_type = type(exc)
        data: dict[str, object] = {
            "message": str(exc),
            "code": _error_code(exc),
            "error_type": f"{error_type.__module__}.{error_type.__qualname__}",
            "traceback": "".join(tb.format_exception(exc)) or None,
            "cause": exc,
        }
        if occurred_at is not None:
            data["occurred_at"] = occurred_at
        return cls(**data)
