"""Program and Runner capabilities consumed by :class:`Job`."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable

    from .entity import Job


@runtime_checkable
class IRunner(Protocol):
    """Execution context handed to a program.

    The job calls :meth:`set_job` before every program invocation so the
    running code can read back its own record (e.g. ``execution_count``).
    """

    def set_job(self, job: Job) -> None: ...


@runtime_checkable
class IProgram(Protocol):
    """The opaque unit of work a job delegates to.

    ``execute`` may raise anything; the job records the failure and
    re-raises it unchanged.
    """

    def execute(self, runner: IRunner) -> None: ...


class JobRunner(IRunner):
    """Default runner: keeps a back-reference to the executing job."""

    def __init__(self) -> None:
        self.job: Job | None = None

    def set_job(self, job: Job) -> None:
        self.job = job


class CallableProgram(IProgram):
    """Adapts a plain ``fn(runner)`` callable to :class:`IProgram`.

    Usage::

        job.set_program(CallableProgram(lambda runner: send_digest()))
    """

    def __init__(self, fn: Callable[[IRunner], object]) -> None:
        self._fn = fn

    def execute(self, runner: IRunner) -> None:
        self._fn(runner)

    def __repr__(self) -> str:
        name = getattr(self._fn, "__qualname__", repr(self._fn))
        return f"CallableProgram({name})"
