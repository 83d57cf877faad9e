# SPDX-License-Identifier: MIT

import datetime
import re
from typing import Iterable, Optional, Union

import pendulum

from wbsplan.exception import InvalidInputError

DateLike = Union[str, datetime.date]

_DATE_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def today() -> pendulum.Date:
    return pendulum.today("local").date()


def date_from_str(date_str: str) -> pendulum.Date:
    """Parse a 'YYYY-MM-DD' string into a pendulum.Date."""
    match = _DATE_PATTERN.match(date_str.strip())
    if match is None:
        raise InvalidInputError(f"Expected a YYYY-MM-DD date, got '{date_str}'")
    year, month, day = (int(part) for part in match.groups())
    try:
        return pendulum.date(year, month, day)
    except ValueError as e:
        raise InvalidInputError(f"Invalid calendar date '{date_str}': {e}")


def date_from_str_optional(date_str: Optional[str]) -> Optional[pendulum.Date]:
    if date_str is None:
        return None
    return date_from_str(date_str)


def date_to_str(date: datetime.date) -> str:
    return date.strftime("%Y-%m-%d")


def date_to_str_optional(date: Optional[datetime.date]) -> Optional[str]:
    if date is None:
        return None
    return date_to_str(date)


def to_date(value: DateLike) -> pendulum.Date:
    """
    Normalize a boundary value to a pendulum.Date.

    Strings must be 'YYYY-MM-DD'. Datetimes lose their time-of-day, which is
    the same as normalizing them to midnight.
    """
    if isinstance(value, str):
        return date_from_str(value)
    if isinstance(value, datetime.datetime):
        return pendulum.date(value.year, value.month, value.day)
    if isinstance(value, pendulum.Date):
        return value
    if isinstance(value, datetime.date):
        return pendulum.date(value.year, value.month, value.day)
    raise InvalidInputError(f"Expected a date, got {type(value).__name__}")


def to_date_optional(value: Optional[DateLike]) -> Optional[pendulum.Date]:
    if value is None:
        return None
    return to_date(value)


def to_date_set(values: Iterable[DateLike]) -> frozenset[pendulum.Date]:
    return frozenset(to_date(value) for value in values)


def date_to_display_str(date: datetime.date) -> str:
    return to_date(date).format("YYYY-MM-DD ddd")


def date_to_display_str_optional(date: Optional[datetime.date]) -> Optional[str]:
    if date is None:
        return None
    return date_to_display_str(date)


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    parsed = pendulum.parse(datetime)
    if not isinstance(parsed, pendulum.DateTime):
        raise InvalidInputError(f"Expected an ISO timestamp, got '{datetime}'")
    return parsed
