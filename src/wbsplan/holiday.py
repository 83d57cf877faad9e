# SPDX-License-Identifier: MIT

import datetime
import logging
from functools import cache
from importlib import resources
from typing import Any, Mapping

import pendulum
from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]

from wbsplan.exception import InvalidInputError
from wbsplan.time import to_date

logger = logging.getLogger(__name__)

DEFAULT_REGION = "jp"


class HolidayTable:
    """
    Read-only lookup of regional non-working days keyed by calendar year.

    Years that the table does not list have no holidays, so calendar
    arithmetic keeps working (weekends only) outside the covered span.
    """

    def __init__(
        self,
        region: str,
        version: str,
        holidays_by_year: Mapping[int, frozenset[pendulum.Date]],
    ) -> None:
        self._region = region
        self._version = version
        self._holidays_by_year = dict(holidays_by_year)

    @property
    def region(self) -> str:
        return self._region

    @property
    def version(self) -> str:
        return self._version

    @property
    def years(self) -> list[int]:
        return sorted(self._holidays_by_year)

    def holidays_for_year(self, year: int) -> frozenset[pendulum.Date]:
        return self._holidays_by_year.get(year, frozenset())

    def is_holiday(self, date: datetime.date) -> bool:
        return date in self.holidays_for_year(date.year)

    def __repr__(self) -> str:
        return f"HolidayTable(region={self._region!r}, version={self._version!r})"


EMPTY_HOLIDAY_TABLE = HolidayTable("none", "0", {})


def parse_holiday_table(raw_table: dict[str, Any]) -> HolidayTable:
    holidays_by_year: dict[int, frozenset[pendulum.Date]] = {}
    for year, dates in (raw_table.get("years") or {}).items():
        holidays_by_year[int(year)] = frozenset(to_date(date) for date in dates or [])
    return HolidayTable(
        region=str(raw_table["region"]),
        version=str(raw_table.get("version", "0")),
        holidays_by_year=holidays_by_year,
    )


@cache
def load_holiday_table(region: str = DEFAULT_REGION) -> HolidayTable:
    """Load the packaged holiday table for a region, once per process."""
    resource = resources.files("wbsplan") / "data" / "holidays" / f"{region}.yaml"
    if not resource.is_file():
        raise InvalidInputError(f"No holiday table for region '{region}'")

    raw_table = load(resource.read_text(encoding="utf-8"), Loader=Loader)
    table = parse_holiday_table(raw_table)
    logger.debug(
        "Loaded holiday table %s (version %s, years %s)",
        table.region,
        table.version,
        table.years,
    )
    return table
