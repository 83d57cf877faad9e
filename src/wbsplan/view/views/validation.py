# SPDX-License-Identifier: MIT

from rich import print
from rich.padding import Padding

from wbsplan.color import INVALID_COLOR, VALID_COLOR
from wbsplan.model.schedule_validation import ScheduleValidation


def validation_view(validation: ScheduleValidation) -> None:
    if validation["message"] is None:
        return
    color = VALID_COLOR if validation["is_valid"] else INVALID_COLOR
    print(Padding(f"[{color}]{validation['message']}[/{color}]", (0, 1, 1, 1)))
