"""Interval — ISO-8601 duration value object used for job schedules."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any

from dateutil.relativedelta import relativedelta
from pydantic import Field

from ..primitives.exceptions import InvalidIntervalSpecError
from .value_object import ValueObject

_DURATION_RE = re.compile(
    r"P"
    r"(?:(?P<years>\d+)Y)?"
    r"(?:(?P<months>\d+)M)?"
    r"(?:(?P<weeks>\d+)W)?"
    r"(?:(?P<days>\d+)D)?"
    r"(?:T"
    r"(?:(?P<hours>\d+)H)?"
    r"(?:(?P<minutes>\d+)M)?"
    r"(?:(?P<seconds>\d+)S)?"
    r")?",
    re.ASCII,
)

_DATE_UNITS = (("years", "Y"), ("months", "M"), ("weeks", "W"), ("days", "D"))
_TIME_UNITS = (("hours", "H"), ("minutes", "M"), ("seconds", "S"))


class Interval(ValueObject):
    """A calendar-aware duration such as ``P1D`` or ``PT1H30M``.

    Supported designators are years, months, weeks, days, hours, minutes
    and seconds, each a non-negative integer.  Fractional values and the
    alternative ``PYYYY-MM-DDThh:mm:ss`` form of ISO-8601 are not supported.

    Arithmetic is delegated to :class:`dateutil.relativedelta.relativedelta`,
    so adding ``P1M`` to January 31st lands on the last day of February.

    Usage::

        every_hour = Interval.parse("PT1H")
        next_run = every_hour.add_to(last_run)
        assert Interval.parse(every_hour.isoformat()) == every_hour
    """

    years: int = Field(default=0, ge=0)
    months: int = Field(default=0, ge=0)
    weeks: int = Field(default=0, ge=0)
    days: int = Field(default=0, ge=0)
    hours: int = Field(default=0, ge=0)
    minutes: int = Field(default=0, ge=0)
    seconds: int = Field(default=0, ge=0)

    # -- construction -----------------------------------------------------

    @classmethod
    def parse(cls, spec: str) -> Interval:
        """Parse an ISO-8601 duration string.

        Raises:
            InvalidIntervalSpecError: if ``spec`` is not a string, has no
                components, or uses an unsupported syntax.
        """
        if not isinstance(spec, str):
            raise InvalidIntervalSpecError(spec, "expected a string")

        match = _DURATION_RE.fullmatch(spec)
        if match is None:
            raise InvalidIntervalSpecError(spec, "not an ISO-8601 duration")
        if spec.endswith("T"):
            raise InvalidIntervalSpecError(spec, "time designator without components")

        parts = {
            name: int(value)
            for name, value in match.groupdict().items()
            if value is not None
        }
        if not parts:
            raise InvalidIntervalSpecError(spec, "no duration components")
        return cls(**parts)

    @classmethod
    def coerce(cls, value: Interval | str | Any) -> Interval:
        """Return ``value`` as an :class:`Interval`, parsing strings."""
        if isinstance(value, Interval):
            return value
        return cls.parse(value)

    # -- queries ----------------------------------------------------------

    @property
    def is_zero(self) -> bool:
        """True if every component is zero."""
        return not any(
            (
                self.years,
                self.months,
                self.weeks,
                self.days,
                self.hours,
                self.minutes,
                self.seconds,
            )
        )

    def as_relativedelta(self) -> relativedelta:
        return relativedelta(
            years=self.years,
            months=self.months,
            weeks=self.weeks,
            days=self.days,
            hours=self.hours,
            minutes=self.minutes,
            seconds=self.seconds,
        )

    def add_to(self, moment: datetime) -> datetime:
        """Return ``moment`` advanced by this interval.

        Raises:
            InvalidIntervalSpecError: if the result falls outside the
                supported datetime range.
        """
        try:
            return moment + self.as_relativedelta()
        except (OverflowError, ValueError) as exc:
            raise InvalidIntervalSpecError(
                self.isoformat(), f"cannot be added to {moment.isoformat()}: {exc}"
            ) from exc

    def isoformat(self) -> str:
        """Canonical ISO-8601 form; zero components are omitted."""
        date_part = "".join(
            f"{getattr(self, name)}{unit}"
            for name, unit in _DATE_UNITS
            if getattr(self, name)
        )
        time_part = "".join(
            f"{getattr(self, name)}{unit}"
            for name, unit in _TIME_UNITS
            if getattr(self, name)
        )
        if not date_part and not time_part:
            return "PT0S"
        return f"P{date_part}" + (f"T{time_part}" if time_part else "")

    # -- dunder -----------------------------------------------------------

    def __str__(self) -> str:
        return self.isoformat()

    def __radd__(self, other: object) -> Any:
        if isinstance(other, datetime):
            return self.add_to(other)
        return NotImplemented
