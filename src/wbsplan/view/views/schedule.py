# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from wbsplan.color import (
    COMPLETED_TASK_COLOR,
    SCHEDULE_TYPE_COLORS,
    SECTION_COLOR,
    STATUS_COLORS,
    countdown_color,
)
from wbsplan.model.project import Project
from wbsplan.service.export import format_estimate
from wbsplan.service.schedule import calculate_progress
from wbsplan.time import date_to_display_str_optional
from wbsplan.view.views.header import header

SCHEDULE_COLUMNS = [
    "#",
    "task",
    "category",
    "status",
    "assignee",
    "estimate",
    "type",
    "start",
    "end",
    "countdown",
]


def schedule_view(project: Project) -> None:
    """
    Print the computed schedule grouped by section.

    The row number in the first column is the task reference every task
    command accepts.
    """
    progress = calculate_progress(project["tasks"])
    header(project["name"], f"schedule ({progress}% complete)")

    schedule_table = Table(box=box.SIMPLE)
    for column in SCHEDULE_COLUMNS:
        if column in ("#", "countdown"):
            schedule_table.add_column(column, justify="right")
        else:
            schedule_table.add_column(column)

    current_section = None
    tasks = sorted(project["tasks"], key=lambda task: task["order_index"])
    for number, task in enumerate(tasks, start=1):
        if task["section"] != current_section:
            current_section = task["section"]
            schedule_table.add_row(
                "", f"[bold {SECTION_COLOR}]{current_section}[/bold {SECTION_COLOR}]"
            )

        countdown = task.get("countdown_to_due")
        countdown_value = ""
        if countdown is not None:
            color = countdown_color(countdown)
            countdown_value = f"[{color}]{countdown}[/{color}]"

        status_color = STATUS_COLORS.get(task["status"], "white")
        type_color = SCHEDULE_TYPE_COLORS.get(task["schedule_type"], "white")
        row = [
            str(number),
            task["name"],
            task["category"],
            f"[{status_color}]{task['status']}[/{status_color}]",
            task["assignee"],
            format_estimate(task),
            f"[{type_color}]{task['schedule_type']}[/{type_color}]",
            date_to_display_str_optional(task.get("start_date")) or "",
            date_to_display_str_optional(task.get("end_date")) or "",
            countdown_value,
        ]
        if task["completed"]:
            row = [
                f"[{COMPLETED_TASK_COLOR}]{value}[/{COMPLETED_TASK_COLOR}]"
                for value in row
            ]
        schedule_table.add_row(*row)

    console = Console()
    console.print(schedule_table)
