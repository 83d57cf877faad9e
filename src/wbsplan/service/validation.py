# SPDX-License-Identifier: MIT

import logging
from typing import Iterable, Optional

from wbsplan import state
from wbsplan.holiday import HolidayTable
from wbsplan.model.schedule_validation import ScheduleValidation
from wbsplan.model.task import HOURS_PER_DAY, Task
from wbsplan.service.business_day import count_working_days
from wbsplan.time import DateLike, date_to_str, to_date, to_date_optional, today

logger = logging.getLogger(__name__)

MISSING_END_DATE_MESSAGE = "Task end date is not set"


def validate_schedule(
    tasks: list[Task],
    delivery_date: DateLike,
    due_date: DateLike,
    custom_holidays: Iterable[DateLike] = (),
    now: Optional[DateLike] = None,
    holidays: Optional[HolidayTable] = None,
) -> ScheduleValidation:
    """
    Check the latest task end date against the delivery date.

    Remaining working days are always counted from ``now`` (default: today)
    to the due date, the hard deadline, even when the plan itself is
    measured against the delivery date.
    """
    if len(tasks) == 0:
        return {
            "is_valid": True,
            "overrun_days": None,
            "remaining_business_days": None,
            "total_remaining_hours": None,
            "message": None,
        }

    last_end_date = None
    for task in tasks:
        end_date = to_date_optional(task.get("end_date"))
        if end_date is None:
            continue
        if last_end_date is None or end_date > last_end_date:
            last_end_date = end_date

    if last_end_date is None:
        return {
            "is_valid": False,
            "overrun_days": None,
            "remaining_business_days": None,
            "total_remaining_hours": None,
            "message": MISSING_END_DATE_MESSAGE,
        }

    table = holidays if holidays is not None else state.get_holiday_table()
    delivery = to_date(delivery_date)
    due = to_date(due_date)
    current_date = to_date(now) if now is not None else today()

    remaining_business_days = count_working_days(
        current_date, due, custom_holidays, table
    )
    total_remaining_hours = remaining_business_days * HOURS_PER_DAY

    if last_end_date > delivery:
        overrun_days = delivery.diff(last_end_date).in_days()
        logger.debug(
            "Schedule overruns delivery date %s by %d day(s)", delivery, overrun_days
        )
        return {
            "is_valid": False,
            "overrun_days": overrun_days,
            "remaining_business_days": remaining_business_days,
            "total_remaining_hours": total_remaining_hours,
            "message": (
                f"{remaining_business_days} working day(s) remain until the due "
                f"date, but the current plan finishes {overrun_days} day(s) late "
                f"(projected completion: {date_to_str(last_end_date)})"
            ),
        }

    return {
        "is_valid": True,
        "overrun_days": None,
        "remaining_business_days": remaining_business_days,
        "total_remaining_hours": total_remaining_hours,
        "message": (
            "The plan finishes within the delivery date. "
            f"{remaining_business_days} working day(s) remain until the due date"
        ),
    }
