"""Tests for the Interval value object."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError as PydanticValidationError

from cqrs_ddd_scheduler.domain.interval import Interval
from cqrs_ddd_scheduler.primitives.exceptions import (
    InvalidIntervalSpecError,
    ValidationError,
)


class TestIntervalParsing:
    def test_parse_all_components(self) -> None:
        interval = Interval.parse("P1Y2M3W4DT5H6M7S")

        assert interval.years == 1
        assert interval.months == 2
        assert interval.weeks == 3
        assert interval.days == 4
        assert interval.hours == 5
        assert interval.minutes == 6
        assert interval.seconds == 7

    def test_minutes_and_months_are_told_apart_by_time_designator(self) -> None:
        assert Interval.parse("P1M") == Interval(months=1)
        assert Interval.parse("PT1M") == Interval(minutes=1)

    @pytest.mark.parametrize(
        "spec",
        ["P1D", "PT1H", "P1Y", "P2W", "P1M", "PT30S", "P1DT12H", "P1Y2M3W4DT5H6M7S"],
    )
    def test_round_trip(self, spec: str) -> None:
        interval = Interval.parse(spec)

        assert interval.isoformat() == spec
        assert Interval.parse(interval.isoformat()) == interval

    def test_zero_duration_formats_canonically(self) -> None:
        interval = Interval.parse("P0D")

        assert interval.is_zero
        assert interval.isoformat() == "PT0S"
        assert Interval.parse("PT0S") == interval

    def test_str_is_isoformat(self) -> None:
        assert str(Interval(hours=1, minutes=30)) == "PT1H30M"

    @pytest.mark.parametrize(
        "spec",
        [
            "", "P", "PT", "P1DT", "1D", "p1d",
            "P1.5D", "PT1H2D", "P-1D", "P1D ", "1 hour",
        ],
    )
    def test_invalid_specs_raise(self, spec: str) -> None:
        with pytest.raises(InvalidIntervalSpecError) as exc_info:
            Interval.parse(spec)

        assert exc_info.value.spec == spec
        assert "interval" in exc_info.value.errors

    @pytest.mark.parametrize("spec", [None, 5, timedelta(hours=1)])
    def test_non_string_specs_raise(self, spec: object) -> None:
        with pytest.raises(InvalidIntervalSpecError, match="expected a string"):
            Interval.parse(spec)  # type: ignore[arg-type]

    @pytest.mark.parametrize("spec", ["P١D", "PT٣H", "P１D"])
    def test_non_ascii_digits_rejected(self, spec: str) -> None:
        with pytest.raises(InvalidIntervalSpecError):
            Interval.parse(spec)

    def test_invalid_spec_is_a_validation_error(self) -> None:
        with pytest.raises(ValidationError):
            Interval.parse("yesterday")

    def test_negative_components_rejected_by_model(self) -> None:
        with pytest.raises(PydanticValidationError):
            Interval(days=-1)

    def test_coerce_accepts_instances_and_strings(self) -> None:
        interval = Interval(days=1)

        assert Interval.coerce(interval) is interval
        assert Interval.coerce("P1D") == interval


class TestIntervalArithmetic:
    def test_add_hours_and_minutes(self) -> None:
        start = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)

        assert Interval.parse("PT1H30M").add_to(start) == datetime(
            2025, 1, 1, 10, 30, tzinfo=timezone.utc
        )

    def test_month_end_is_clamped(self) -> None:
        start = datetime(2025, 1, 31, tzinfo=timezone.utc)

        assert Interval.parse("P1M").add_to(start) == datetime(
            2025, 2, 28, tzinfo=timezone.utc
        )

    def test_leap_year(self) -> None:
        start = datetime(2024, 2, 29, tzinfo=timezone.utc)

        assert Interval.parse("P1Y").add_to(start) == datetime(
            2025, 2, 28, tzinfo=timezone.utc
        )

    def test_weeks_add_seven_days(self) -> None:
        start = datetime(2025, 1, 6, tzinfo=timezone.utc)

        assert Interval.parse("P2W").add_to(start) == start + timedelta(days=14)

    def test_datetime_plus_interval(self) -> None:
        start = datetime(2025, 1, 1, tzinfo=timezone.utc)

        assert start + Interval(days=1) == datetime(2025, 1, 2, tzinfo=timezone.utc)

    def test_timezone_is_preserved(self) -> None:
        start = datetime(2025, 1, 1, tzinfo=timezone(timedelta(hours=2)))

        result = Interval(hours=5).add_to(start)

        assert result.tzinfo == start.tzinfo

    def test_overflow_raises_interval_error(self) -> None:
        start = datetime(2025, 1, 1, tzinfo=timezone.utc)

        with pytest.raises(InvalidIntervalSpecError, match="P9999Y") as exc_info:
            Interval(years=9999).add_to(start)

        assert exc_info.value.reason is not None
        assert "2025-01-01" in exc_info.value.reason

    def test_overflow_of_huge_day_count(self) -> None:
        start = datetime(2025, 1, 1, tzinfo=timezone.utc)

        with pytest.raises(InvalidIntervalSpecError):
            start + Interval(days=10**10)


class TestIntervalValueSemantics:
    def test_structural_equality_and_hash(self) -> None:
        a = Interval.parse("PT1H")
        b = Interval(hours=1)

        assert a == b
        assert len({a, b}) == 1

    def test_different_units_are_not_equal(self) -> None:
        assert Interval.parse("PT60M") != Interval.parse("PT1H")

    def test_immutable(self) -> None:
        interval = Interval(days=1)

        with pytest.raises(PydanticValidationError):
            interval.days = 2  # type: ignore[misc]
