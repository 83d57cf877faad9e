# SPDX-License-Identifier: MIT

from contextvars import ContextVar

from wbsplan.holiday import DEFAULT_REGION, HolidayTable, load_holiday_table

_holiday_region: ContextVar[str] = ContextVar("holiday_region", default=DEFAULT_REGION)


def set_holiday_region(value: str) -> None:
    _holiday_region.set(value)


def get_holiday_region() -> str:
    return _holiday_region.get()


def get_holiday_table() -> HolidayTable:
    return load_holiday_table(_holiday_region.get())
