"""Tests for date helpers."""

import datetime

import pendulum
import pytest

from wbsplan.exception import InvalidInputError
from wbsplan.time import date_from_str, date_to_str, to_date, to_date_set


def test_date_round_trip() -> None:
    """YYYY-MM-DD strings parse and format back unchanged."""
    assert date_to_str(date_from_str("2025-02-28")) == "2025-02-28"


@pytest.mark.parametrize("value", ["2025-02-30", "2025-2-1", "20250201", ""])
def test_invalid_dates_are_rejected(value: str) -> None:
    """Malformed or impossible dates raise InvalidInputError."""
    with pytest.raises(InvalidInputError):
        date_from_str(value)


def test_to_date_drops_time_of_day() -> None:
    """Datetimes normalize to their calendar date."""
    result = to_date(datetime.datetime(2025, 3, 4, 23, 59))
    assert result == pendulum.date(2025, 3, 4)
    assert isinstance(result, pendulum.Date)


def test_to_date_set_deduplicates() -> None:
    """Mixed representations of the same day collapse."""
    assert to_date_set(["2025-01-01", datetime.date(2025, 1, 1)]) == frozenset(
        {pendulum.date(2025, 1, 1)}
    )


def test_to_date_rejects_other_types() -> None:
    """Numbers are not dates."""
    with pytest.raises(InvalidInputError):
        to_date(20250101)  # type: ignore[arg-type]
