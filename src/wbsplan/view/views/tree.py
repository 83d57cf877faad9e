# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from wbsplan.color import INVALID_COLOR, TREE_STATUS_COLORS
from wbsplan.model.project import Project
from wbsplan.service.task_tree import (
    calculate_tree_progress,
    flatten_tree,
    validate_tree_dates,
)
from wbsplan.time import date_to_display_str_optional
from wbsplan.view.views.header import header

INDENT = "  "


def tree_view(project: Project) -> None:
    """
    Print the nested task tree depth-first with indented names.

    Parents whose dates do not cover their subtasks are listed below the
    table.
    """
    tree_tasks = project["tree_tasks"]
    header(project["name"], f"tree ({calculate_tree_progress(tree_tasks)}% complete)")

    tree_table = Table(box=box.SIMPLE)
    tree_table.add_column("#", justify="right")
    tree_table.add_column("task")
    tree_table.add_column("status")
    tree_table.add_column("assignee")
    tree_table.add_column("start")
    tree_table.add_column("days", justify="right")
    tree_table.add_column("end")

    warnings: list[str] = []
    for number, (level, task) in enumerate(flatten_tree(tree_tasks), start=1):
        status_color = TREE_STATUS_COLORS.get(task["status"], "white")
        tree_table.add_row(
            str(number),
            INDENT * level + task["name"],
            f"[{status_color}]{task['status']}[/{status_color}]",
            task["assignee"],
            date_to_display_str_optional(task["start_date"]) or "",
            str(task["duration"]) if task["duration"] > 0 else "",
            date_to_display_str_optional(task["end_date"]) or "",
        )
        is_valid, message = validate_tree_dates(task)
        if not is_valid:
            warnings.append(f"{number}. {task['name']}: {message}")

    console = Console()
    console.print(tree_table)
    for warning in warnings:
        console.print(f"[{INVALID_COLOR}]{warning}[/{INVALID_COLOR}]")
