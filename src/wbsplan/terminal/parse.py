# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from wbsplan.exception import InvalidInputError
from wbsplan.model.task import HOURS_PER_DAY
from wbsplan.time import date_from_str, today

_ESTIMATE_PATTERN = re.compile(r"^(?:(\d+)d)?\s*(?:(\d+)h)?$")


def parse_date(date_param: Optional[str | int]) -> Optional[pendulum.Date]:
    if date_param is None:
        return None

    date = str(date_param).strip()

    if re.match(r"^\d{4}-\d{2}-\d{2}$", date):
        try:
            return date_from_str(date)
        except InvalidInputError as e:
            raise typer.BadParameter(str(e))

    # Numeric input for relative days (e.g., "1", "-1", "30")
    if re.match(r"^-?\d+$", date):
        return today().add(days=int(date))

    if date == "today" or date == "t":
        return today()
    if date == "yesterday" or date == "y":
        return today().subtract(days=1)
    if date == "tomorrow" or date == "o":
        return today().add(days=1)
    raise typer.BadParameter("Incorrect date format")


def parse_estimate(estimate: Optional[str]) -> Optional[tuple[int, int]]:
    """
    Parse an estimate like "2d", "4h" or "1d 4h" into (days, hours).

    Hours of a full day or more are carried into days.

    Raises:
        typer.BadParameter: If the estimate cannot be parsed
    """
    if estimate is None:
        return None

    match = _ESTIMATE_PATTERN.match(estimate.strip().lower())
    if match is None or (match.group(1) is None and match.group(2) is None):
        raise typer.BadParameter(
            f"Estimate must look like 2d, 4h or 1d4h, got '{estimate}'"
        )

    days = int(match.group(1) or 0)
    hours = int(match.group(2) or 0)
    extra_days, hours = divmod(hours, HOURS_PER_DAY)
    return (days + extra_days, hours)


def parse_number_list(number_param: str) -> list[int]:
    """
    Parse a single row number, a comma-separated list, or ranges.

    Args:
        number_param: e.g. "1", "1,2,3", "1-5" or "1,3-5,8"

    Returns:
        Sorted, deduplicated list of row numbers
    """
    number_strings = [s.strip() for s in number_param.split(",")]

    numbers: list[int] = []
    for number_str in number_strings:
        if not number_str:
            continue

        if "-" in number_str:
            range_parts = number_str.split("-")
            if len(range_parts) != 2:
                raise typer.BadParameter(
                    f"Invalid range format: '{number_str}' (expected format: 'start-end')"
                )
            try:
                start = int(range_parts[0].strip())
                end = int(range_parts[1].strip())
            except ValueError:
                raise typer.BadParameter(
                    f"Invalid range: '{number_str}' contains non-integer values"
                )
            if start > end:
                raise typer.BadParameter(
                    f"Invalid range: '{number_str}' (start must be <= end)"
                )
            numbers.extend(range(start, end + 1))
        else:
            try:
                numbers.append(int(number_str))
            except ValueError:
                raise typer.BadParameter(
                    f"Invalid row number: '{number_str}' is not a valid integer"
                )

    if len(numbers) == 0:
        raise typer.BadParameter("No valid row numbers provided")

    return sorted(set(numbers))
