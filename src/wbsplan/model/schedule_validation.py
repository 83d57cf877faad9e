# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict


class ScheduleValidation(TypedDict):
    is_valid: bool
    overrun_days: Optional[int]
    remaining_business_days: Optional[int]
    total_remaining_hours: Optional[int]
    message: Optional[str]
