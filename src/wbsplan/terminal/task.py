# SPDX-License-Identifier: MIT

from typing import Annotated, Any, Optional

import pendulum
import typer

from wbsplan.model.project import Project
from wbsplan.model.task import Task
from wbsplan.service.project import (
    get_active_project,
    resolve_task_number,
    save_recomputed_project,
)
from wbsplan.service.schedule import (
    delete_task,
    insert_task,
    list_sections,
    move_section,
    move_task_in_section,
    reorder_and_recalculate,
    set_section_completed,
)
from wbsplan.service.task_field import apply_task_field_changes
from wbsplan.template.task import create_new_section_name, get_task_template
from wbsplan.terminal.completion import complete_section
from wbsplan.terminal.custom_typer import AliasedTyperGroup
from wbsplan.terminal.error import exit_on_invalid_input
from wbsplan.terminal.parse import parse_date, parse_estimate, parse_number_list
from wbsplan.terminal.project import DATE_HELP, show_schedule
from wbsplan.terminal.validate import (
    validate_assignee,
    validate_category,
    validate_schedule_type,
    validate_status,
)

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

ESTIMATE_HELP = "valid input: 2d, 4h or 1d4h (1 day = 8 hours)"


def validate_direction(direction: str) -> str:
    if direction not in ("up", "down"):
        raise typer.BadParameter("Direction must be 'up' or 'down'")
    return direction


def _store(project: Project, tasks: list[Task]) -> None:
    project["tasks"] = tasks
    stored_project = save_recomputed_project(project)
    show_schedule(str(stored_project["id"]))


def _collect_changes(
    name: Optional[str],
    section: Optional[str],
    category: Optional[str],
    status: Optional[str],
    assignee: Optional[str],
    estimate: Optional[str],
    overtime: Optional[str],
    schedule_type: Optional[str],
    start: Optional[pendulum.Date],
    candidates: Optional[list[str]],
) -> dict[str, Any]:
    changes: dict[str, Any] = {}
    if name is not None:
        changes["name"] = name
    if section is not None:
        changes["section"] = section
    if category is not None:
        changes["category"] = category
    if status is not None:
        changes["status"] = status
    if assignee is not None:
        changes["assignee"] = assignee
    parsed_estimate = parse_estimate(estimate)
    if parsed_estimate is not None:
        changes["estimate_days"], changes["estimate_hours"] = parsed_estimate
    parsed_overtime = parse_estimate(overtime)
    if parsed_overtime is not None:
        changes["overtime_days"], changes["overtime_hours"] = parsed_overtime
    if schedule_type is not None:
        changes["schedule_type"] = schedule_type
    if start is not None:
        changes["start_date"] = start
    if candidates is not None:
        changes["date_candidates"] = [parse_date(candidate) for candidate in candidates]
    return changes


@app.command("add, a", no_args_is_help=True)
def add(
    name: str,
    section: Annotated[
        Optional[str],
        typer.Option(
            "--section",
            "-s",
            autocompletion=complete_section,
            help="existing or new section (default: a new 'New section N')",
        ),
    ] = None,
    category: Annotated[
        Optional[str], typer.Option("--category", "-c", callback=validate_category)
    ] = None,
    assignee: Annotated[
        Optional[str], typer.Option("--assignee", "-a", callback=validate_assignee)
    ] = None,
    estimate: Annotated[
        Optional[str], typer.Option("--estimate", "-e", help=ESTIMATE_HELP)
    ] = None,
    schedule_type: Annotated[
        Optional[str],
        typer.Option(
            "--type",
            "-t",
            callback=validate_schedule_type,
            help="valid input: AUTO, FIXED, COORDINATION",
        ),
    ] = None,
    start: Annotated[
        Optional[pendulum.Date],
        typer.Option(
            "--start", parser=parse_date, help="pinned start for FIXED tasks, " + DATE_HELP
        ),
    ] = None,
    candidates: Annotated[
        Optional[list[str]],
        typer.Option(
            "--candidate",
            "-cd",
            help="candidate date for COORDINATION tasks (repeatable)",
        ),
    ] = None,
    outsourced: Annotated[
        bool, typer.Option("--outsourced", help="tag the task as outsourced")
    ] = False,
) -> None:
    """Add a task at the end of its section."""
    with exit_on_invalid_input():
        project = get_active_project()
        task_section = section
        if task_section is None:
            task_section = create_new_section_name(list_sections(project["tasks"]))

        task = get_task_template(task_section)
        changes = _collect_changes(
            name,
            None,
            category,
            None,
            assignee,
            estimate,
            None,
            schedule_type,
            start,
            candidates,
        )
        if outsourced:
            changes["is_outsourced"] = True
        task = apply_task_field_changes(task, changes)

        tasks = insert_task(
            project["tasks"],
            task,
            project["start_date"],
            project["delivery_date"],
            project["due_date"],
            project["custom_holidays"],
        )
        _store(project, tasks)


@app.command("modify, m", no_args_is_help=True)
def modify(
    number: Annotated[int, typer.Argument(help="row number from the schedule view")],
    name: Annotated[Optional[str], typer.Option("--name", "-n")] = None,
    section: Annotated[
        Optional[str],
        typer.Option("--section", "-s", autocompletion=complete_section),
    ] = None,
    category: Annotated[
        Optional[str], typer.Option("--category", "-c", callback=validate_category)
    ] = None,
    status: Annotated[
        Optional[str],
        typer.Option(
            "--status",
            "-st",
            callback=validate_status,
            help="valid input: Pending, 'In Progress', Review, Done",
        ),
    ] = None,
    assignee: Annotated[
        Optional[str], typer.Option("--assignee", "-a", callback=validate_assignee)
    ] = None,
    estimate: Annotated[
        Optional[str], typer.Option("--estimate", "-e", help=ESTIMATE_HELP)
    ] = None,
    overtime: Annotated[
        Optional[str], typer.Option("--overtime", "-o", help=ESTIMATE_HELP)
    ] = None,
    remove_overtime: Annotated[bool, typer.Option("--remove-overtime")] = False,
    schedule_type: Annotated[
        Optional[str],
        typer.Option(
            "--type",
            "-t",
            callback=validate_schedule_type,
            help="valid input: AUTO, FIXED, COORDINATION",
        ),
    ] = None,
    start: Annotated[
        Optional[pendulum.Date],
        typer.Option(
            "--start", parser=parse_date, help="pinned start for FIXED tasks, " + DATE_HELP
        ),
    ] = None,
    candidates: Annotated[
        Optional[list[str]],
        typer.Option(
            "--candidate",
            "-cd",
            help="replaces the candidate dates (repeatable)",
        ),
    ] = None,
    remove_candidates: Annotated[bool, typer.Option("--remove-candidates")] = False,
    completed: Annotated[
        Optional[bool],
        typer.Option("--completed/--not-completed", help="also updates the status"),
    ] = None,
    outsourced: Annotated[
        Optional[bool], typer.Option("--outsourced/--not-outsourced")
    ] = None,
) -> None:
    """Change fields of a task and reschedule."""
    with exit_on_invalid_input():
        project = get_active_project()
        task_id = resolve_task_number(project, number)

        changes = _collect_changes(
            name,
            section,
            category,
            status,
            assignee,
            estimate,
            overtime,
            schedule_type,
            start,
            candidates,
        )
        if remove_overtime:
            changes["overtime_days"] = None
            changes["overtime_hours"] = None
        if remove_candidates:
            changes["date_candidates"] = None
        if completed is not None:
            changes["completed"] = completed
        if outsourced is not None:
            changes["is_outsourced"] = outsourced

        tasks = [
            apply_task_field_changes(task, changes) if task["id"] == task_id else task
            for task in project["tasks"]
        ]
        _store(project, tasks)


@app.command("delete, d", no_args_is_help=True)
def delete(
    numbers: Annotated[
        str, typer.Argument(help="row numbers, e.g. 3 or 1,4-6")
    ],
) -> None:
    """Delete tasks; the remaining tasks keep their relative order."""
    row_numbers = parse_number_list(numbers)
    with exit_on_invalid_input():
        project = get_active_project()
        task_ids = [resolve_task_number(project, number) for number in row_numbers]

        tasks = project["tasks"]
        for task_id in task_ids:
            tasks = delete_task(
                tasks,
                task_id,
                project["start_date"],
                project["delivery_date"],
                project["due_date"],
                project["custom_holidays"],
            )
        _store(project, tasks)


@app.command("move, mv", no_args_is_help=True)
def move(
    number: Annotated[int, typer.Argument(help="row number from the schedule view")],
    direction: Annotated[
        str, typer.Argument(callback=validate_direction, help="up or down")
    ],
) -> None:
    """Move a task one step within its section."""
    with exit_on_invalid_input():
        project = get_active_project()
        task_id = resolve_task_number(project, number)
        tasks = move_task_in_section(
            project["tasks"],
            task_id,
            direction,  # type: ignore[arg-type]
            project["start_date"],
            project["delivery_date"],
            project["due_date"],
            project["custom_holidays"],
        )
        _store(project, tasks)


@app.command("move-section, ms", no_args_is_help=True)
def move_section_command(
    section: Annotated[str, typer.Argument(autocompletion=complete_section)],
    direction: Annotated[
        str, typer.Argument(callback=validate_direction, help="up or down")
    ],
) -> None:
    """Swap a whole section with its neighbour."""
    with exit_on_invalid_input():
        project = get_active_project()
        tasks = move_section(
            project["tasks"],
            section,
            direction,  # type: ignore[arg-type]
            project["start_date"],
            project["delivery_date"],
            project["due_date"],
            project["custom_holidays"],
        )
        _store(project, tasks)


@app.command("reorder, r", no_args_is_help=True)
def reorder(
    from_number: Annotated[int, typer.Argument(help="current row number")],
    to_number: Annotated[int, typer.Argument(help="target row number")],
) -> None:
    """Move a task to any position in the overall order."""
    with exit_on_invalid_input():
        project = get_active_project()
        tasks = reorder_and_recalculate(
            project["tasks"],
            from_number - 1,
            to_number - 1,
            project["start_date"],
            project["delivery_date"],
            project["due_date"],
            project["custom_holidays"],
        )
        _store(project, tasks)


@app.command("complete-section, cs", no_args_is_help=True)
def complete_section_command(
    section: Annotated[str, typer.Argument(autocompletion=complete_section)],
    undo: Annotated[
        bool, typer.Option("--undo", help="mark the section's tasks as not completed")
    ] = False,
) -> None:
    """Mark every task of a section as completed."""
    with exit_on_invalid_input():
        project = get_active_project()
        if section not in list_sections(project["tasks"]):
            raise typer.BadParameter(f"Section '{section}' not found")
        tasks = set_section_completed(project["tasks"], section, not undo)
        _store(project, tasks)
