"""ExecutionPolicy — per-job tuning of the execution state machine."""

from __future__ import annotations

from pydantic import Field

from ..domain.value_object import ValueObject

DEFAULT_MAX_CATCH_UP_ITERATIONS = 10_000


class ExecutionPolicy(ValueObject):
    """Limits applied while a job executes.

    Attributes:
        max_catch_up_iterations: Upper bound on program runs performed by a
            single ``execute`` call while a recurring job catches up on
            missed ticks.
        strict_anomalies: When True, dispatching a one-shot job that already
            ran and is not yet due raises ``JobStateError``; when False the
            call only logs a warning and returns with the job still PENDING.
    """

    max_catch_up_iterations: int = Field(default=DEFAULT_MAX_CATCH_UP_ITERATIONS, ge=1)
    strict_anomalies: bool = True
