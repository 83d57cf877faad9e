# SPDX-License-Identifier: MIT

COMPLETED_TASK_COLOR = "bright_black"
SECTION_COLOR = "sandy_brown"

VALID_COLOR = "green"
INVALID_COLOR = "red"
WARNING_COLOR = "yellow"

STATUS_COLORS = {
    "Pending": "white",
    "In Progress": "cyan",
    "Review": "magenta",
    "Done": COMPLETED_TASK_COLOR,
}

SCHEDULE_TYPE_COLORS = {
    "AUTO": "white",
    "FIXED": "plum1",
    "COORDINATION": "gold1",
}

TREE_STATUS_COLORS = {
    "pending": "white",
    "inProgress": "cyan",
    "completed": COMPLETED_TASK_COLOR,
}


def countdown_color(countdown: int) -> str:
    """Negative countdowns finish after the delivery date."""
    if countdown < 0:
        return INVALID_COLOR
    if countdown <= 3:
        return WARNING_COLOR
    return VALID_COLOR
