# SPDX-License-Identifier: MIT

from typing import Iterable, Optional

import pendulum

from wbsplan import state
from wbsplan.exception import InvalidInputError
from wbsplan.holiday import HolidayTable
from wbsplan.model.task import HOURS_PER_DAY
from wbsplan.time import DateLike, to_date, to_date_set

WEEKEND_DAYS = (pendulum.WeekDay.SATURDAY, pendulum.WeekDay.SUNDAY)

# Leftover hours at or above this threshold occupy one more working day.
PARTIAL_DAY_THRESHOLD_HOURS = 4


def is_weekend(date: DateLike) -> bool:
    return to_date(date).day_of_week in WEEKEND_DAYS


def is_working_day(
    date: DateLike,
    custom_holidays: Iterable[DateLike] = (),
    holidays: Optional[HolidayTable] = None,
) -> bool:
    """
    Check whether a date is a working day.

    A date is not a working day when it falls on a weekend, on a regional
    holiday of its year, or on one of the custom holidays.
    """
    table = holidays if holidays is not None else state.get_holiday_table()
    return _is_working_day(to_date(date), to_date_set(custom_holidays), table)


def _is_working_day(
    date: pendulum.Date,
    custom_holidays: frozenset[pendulum.Date],
    holidays: HolidayTable,
) -> bool:
    if date.day_of_week in WEEKEND_DAYS:
        return False
    if holidays.is_holiday(date):
        return False
    return date not in custom_holidays


def add_working_days(
    date: DateLike,
    days: int,
    custom_holidays: Iterable[DateLike] = (),
    holidays: Optional[HolidayTable] = None,
) -> pendulum.Date:
    """
    Advance a date by a number of working days.

    The walk moves one calendar day at a time and only counts steps that land
    on a working day, so the result is always a working day unless ``days``
    is 0, in which case the date is returned unchanged.
    """
    if days < 0:
        raise InvalidInputError(f"Working days to add must be >= 0, got {days}")

    table = holidays if holidays is not None else state.get_holiday_table()
    return _add_working_days(to_date(date), days, to_date_set(custom_holidays), table)


def _add_working_days(
    date: pendulum.Date,
    days: int,
    custom_holidays: frozenset[pendulum.Date],
    holidays: HolidayTable,
) -> pendulum.Date:
    current = date
    remaining = days
    while remaining > 0:
        current = current.add(days=1)
        if _is_working_day(current, custom_holidays, holidays):
            remaining -= 1
    return current


def add_working_days_and_hours(
    date: DateLike,
    days: int,
    hours: int,
    custom_holidays: Iterable[DateLike] = (),
    holidays: Optional[HolidayTable] = None,
) -> pendulum.Date:
    """
    Advance a date by a duration of working days plus working hours.

    One working day is 8 hours. The whole-day part is added first; a leftover
    of 4 hours or more takes one more working day, anything less is dropped.
    Results are always whole dates.

    Example: 2 days + 4 hours from a Monday lands on Thursday.
    """
    if days < 0 or hours < 0:
        raise InvalidInputError(
            f"Duration must not be negative, got {days} days {hours} hours"
        )

    table = holidays if holidays is not None else state.get_holiday_table()
    whole_days, leftover_hours = divmod(days * HOURS_PER_DAY + hours, HOURS_PER_DAY)
    if leftover_hours >= PARTIAL_DAY_THRESHOLD_HOURS:
        whole_days += 1
    return _add_working_days(
        to_date(date), whole_days, to_date_set(custom_holidays), table
    )


def count_working_days(
    start: DateLike,
    end: DateLike,
    custom_holidays: Iterable[DateLike] = (),
    holidays: Optional[HolidayTable] = None,
) -> int:
    """
    Count the working days after ``start`` up to and including ``end``.

    The start date itself is never counted, so equal dates give 0. When
    ``start`` is after ``end`` the count is negative.
    """
    table = holidays if holidays is not None else state.get_holiday_table()
    start_date = to_date(start)
    end_date = to_date(end)
    holiday_set = to_date_set(custom_holidays)

    is_negative = start_date > end_date
    if is_negative:
        start_date, end_date = end_date, start_date

    count = 0
    current = start_date
    while current < end_date:
        current = current.add(days=1)
        if _is_working_day(current, holiday_set, table):
            count += 1

    return -count if is_negative else count


def next_working_day_on_or_after(
    date: DateLike,
    custom_holidays: Iterable[DateLike] = (),
    holidays: Optional[HolidayTable] = None,
) -> pendulum.Date:
    table = holidays if holidays is not None else state.get_holiday_table()
    holiday_set = to_date_set(custom_holidays)
    current = to_date(date)
    while not _is_working_day(current, holiday_set, table):
        current = current.add(days=1)
    return current
