# SPDX-License-Identifier: MIT

import csv
import io

from wbsplan.model.task import Task
from wbsplan.time import date_to_str_optional

CSV_HEADER = (
    "Section",
    "Task",
    "Category",
    "Status",
    "Assignee",
    "Estimate",
    "Schedule type",
    "Start",
    "End",
    "Countdown",
    "Completed",
)


def format_estimate(task: Task) -> str:
    return f"{task['estimate_days']}d {task['estimate_hours']}h"


def export_tasks_csv(tasks: list[Task]) -> str:
    """
    Render the flat schedule as CSV text, one row per task in order_index
    order. Every cell is quoted; missing dates and countdowns are empty.
    """
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for task in sorted(tasks, key=lambda task: task["order_index"]):
        countdown = task.get("countdown_to_due")
        writer.writerow(
            (
                task["section"],
                task["name"],
                task["category"],
                task["status"],
                task["assignee"],
                format_estimate(task),
                task["schedule_type"],
                date_to_str_optional(task.get("start_date")) or "",
                date_to_str_optional(task.get("end_date")) or "",
                "" if countdown is None else countdown,
                "yes" if task["completed"] else "no",
            )
        )
    return output.getvalue()
