"""Tests for working-day arithmetic."""

import pendulum
import pytest

from wbsplan.exception import InvalidInputError
from wbsplan.holiday import HolidayTable
from wbsplan.service.business_day import (
    add_working_days,
    add_working_days_and_hours,
    count_working_days,
    is_working_day,
    next_working_day_on_or_after,
)


def test_weekends_are_never_working_days(jp_holidays: HolidayTable) -> None:
    """Saturdays and Sundays are non-working whatever the holiday table says."""
    day = pendulum.date(2025, 1, 1)
    for _ in range(366):
        if day.day_of_week in (pendulum.WeekDay.SATURDAY, pendulum.WeekDay.SUNDAY):
            assert not is_working_day(day, holidays=jp_holidays)
        day = day.add(days=1)


def test_regional_holiday_is_not_a_working_day(jp_holidays: HolidayTable) -> None:
    """Coming of Age Day 2025 falls on a Monday."""
    assert not is_working_day("2025-01-13", holidays=jp_holidays)
    assert is_working_day("2025-01-14", holidays=jp_holidays)


def test_custom_holiday_is_not_a_working_day(no_holidays: HolidayTable) -> None:
    """Custom holidays are added on top of the regional table."""
    assert is_working_day("2025-01-07", holidays=no_holidays)
    assert not is_working_day(
        "2025-01-07", custom_holidays=["2025-01-07"], holidays=no_holidays
    )


def test_add_working_days_skips_weekends(no_holidays: HolidayTable) -> None:
    """Friday plus one working day is Monday."""
    result = add_working_days("2025-01-10", 1, holidays=no_holidays)
    assert result == pendulum.date(2025, 1, 13)


def test_add_zero_working_days_is_identity(no_holidays: HolidayTable) -> None:
    """Zero days returns the date unchanged, even on a weekend."""
    assert add_working_days("2025-01-11", 0, holidays=no_holidays) == pendulum.date(
        2025, 1, 11
    )


def test_add_negative_working_days_is_rejected(no_holidays: HolidayTable) -> None:
    """Negative durations are a fault."""
    with pytest.raises(InvalidInputError):
        add_working_days("2025-01-06", -1, holidays=no_holidays)


def test_add_working_days_skips_regional_holidays(jp_holidays: HolidayTable) -> None:
    """Friday plus one working day skips the Monday holiday."""
    result = add_working_days("2025-01-10", 1, holidays=jp_holidays)
    assert result == pendulum.date(2025, 1, 14)


@pytest.mark.parametrize(
    ("days", "hours", "expected"),
    [
        (2, 4, pendulum.date(2025, 1, 9)),
        (2, 3, pendulum.date(2025, 1, 8)),
        (0, 4, pendulum.date(2025, 1, 7)),
        (0, 3, pendulum.date(2025, 1, 6)),
        (0, 12, pendulum.date(2025, 1, 8)),
    ],
)
def test_add_working_days_and_hours_rounds_partial_days(
    no_holidays: HolidayTable, days: int, hours: int, expected: pendulum.Date
) -> None:
    """Leftover hours of half a day or more take one more working day."""
    result = add_working_days_and_hours("2025-01-06", days, hours, holidays=no_holidays)
    assert result == expected


def test_count_working_days_excludes_start(no_holidays: HolidayTable) -> None:
    """Monday to Wednesday counts Tuesday and Wednesday."""
    assert count_working_days("2025-01-06", "2025-01-08", holidays=no_holidays) == 2
    assert count_working_days("2025-01-06", "2025-01-06", holidays=no_holidays) == 0


@pytest.mark.parametrize("days", [0, 1, 4, 5, 17, 40])
def test_count_inverts_add(jp_holidays: HolidayTable, days: int) -> None:
    """Counting the days just added gives the same number back."""
    start = pendulum.date(2025, 4, 25)
    end = add_working_days(start, days, holidays=jp_holidays)
    assert count_working_days(start, end, holidays=jp_holidays) == days


@pytest.mark.parametrize(
    ("start", "end"),
    [
        ("2025-01-06", "2025-01-20"),
        ("2025-05-02", "2025-04-28"),
        ("2025-12-27", "2026-01-05"),
        ("2025-03-01", "2025-03-01"),
    ],
)
def test_count_working_days_is_antisymmetric(
    jp_holidays: HolidayTable, start: str, end: str
) -> None:
    """Swapping the arguments flips the sign."""
    assert count_working_days(start, end, holidays=jp_holidays) == -count_working_days(
        end, start, holidays=jp_holidays
    )


def test_years_outside_the_table_have_only_weekends(jp_holidays: HolidayTable) -> None:
    """New Year's Day is an ordinary working day in an uncovered year."""
    assert is_working_day("2099-01-01", holidays=jp_holidays)


def test_next_working_day_on_or_after(jp_holidays: HolidayTable) -> None:
    """A Saturday before a holiday Monday moves to Tuesday."""
    assert next_working_day_on_or_after(
        "2025-01-11", holidays=jp_holidays
    ) == pendulum.date(2025, 1, 14)
    assert next_working_day_on_or_after(
        "2025-01-14", holidays=jp_holidays
    ) == pendulum.date(2025, 1, 14)


def test_malformed_date_is_rejected(no_holidays: HolidayTable) -> None:
    """Only YYYY-MM-DD strings are accepted."""
    with pytest.raises(InvalidInputError):
        is_working_day("06/01/2025", holidays=no_holidays)
