# SPDX-License-Identifier: MIT

from typing import Annotated, Any, Optional

import pendulum
import typer

from wbsplan.model.project import Project
from wbsplan.model.task_tree import TreeTask
from wbsplan.repository.project import PROJECT_REPO
from wbsplan.service.project import get_active_project
from wbsplan.service.task_tree import (
    add_tree_task,
    apply_status_change,
    delete_tree_task,
    find_tree_task,
    next_status,
    propose_status_change,
    tree_task_id_at,
    update_tree_task,
)
from wbsplan.template.task import get_tree_task_template
from wbsplan.terminal.custom_typer import AliasedTyperGroup
from wbsplan.terminal.error import exit_on_invalid_input
from wbsplan.terminal.parse import parse_date
from wbsplan.terminal.project import DATE_HELP
from wbsplan.terminal.validate import validate_non_negative, validate_tree_status
from wbsplan.view.views.tree import tree_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

ROW_HELP = "row number from the tree view"


def _store(project: Project, tree_tasks: list[TreeTask]) -> None:
    project["tree_tasks"] = tree_tasks
    PROJECT_REPO.update_project(project)
    tree_view(PROJECT_REPO.get_project(str(project["id"])))


def _collect_changes(
    name: Optional[str],
    assignee: Optional[str],
    start: Optional[pendulum.Date],
    duration: Optional[int],
) -> dict[str, Any]:
    changes: dict[str, Any] = {}
    if name is not None:
        changes["name"] = name
    if assignee is not None:
        changes["assignee"] = assignee
    if start is not None:
        changes["start_date"] = start
    if duration is not None:
        changes["duration"] = duration
    return changes


@app.command("list, ls")
def list_tree() -> None:
    """Show the nested tasks of the active project."""
    with exit_on_invalid_input():
        project = get_active_project()
    tree_view(project)


@app.command("add, a", no_args_is_help=True)
def add(
    name: str,
    parent: Annotated[
        Optional[int],
        typer.Option("--parent", "-p", help="add as subtask of this row number"),
    ] = None,
    assignee: Annotated[Optional[str], typer.Option("--assignee", "-a")] = None,
    start: Annotated[
        Optional[pendulum.Date],
        typer.Option("--start", "-s", parser=parse_date, help=DATE_HELP),
    ] = None,
    duration: Annotated[
        Optional[int],
        typer.Option(
            "--duration",
            "-d",
            callback=validate_non_negative,
            help="weekdays after the start day",
        ),
    ] = None,
) -> None:
    """Add a top-level task or a subtask."""
    with exit_on_invalid_input():
        project = get_active_project()
        tree_tasks = project["tree_tasks"]
        parent_id = None
        if parent is not None:
            parent_id = tree_task_id_at(tree_tasks, parent)

        task = get_tree_task_template(name)
        tree_tasks = add_tree_task(tree_tasks, task, parent_id)
        changes = _collect_changes(None, assignee, start, duration)
        if len(changes) > 0:
            tree_tasks = update_tree_task(tree_tasks, task["id"], changes)
        _store(project, tree_tasks)


@app.command("modify, m", no_args_is_help=True)
def modify(
    number: Annotated[int, typer.Argument(help=ROW_HELP)],
    name: Annotated[Optional[str], typer.Option("--name", "-n")] = None,
    assignee: Annotated[Optional[str], typer.Option("--assignee", "-a")] = None,
    start: Annotated[
        Optional[pendulum.Date],
        typer.Option("--start", "-s", parser=parse_date, help=DATE_HELP),
    ] = None,
    duration: Annotated[
        Optional[int],
        typer.Option(
            "--duration",
            "-d",
            callback=validate_non_negative,
            help="weekdays after the start day",
        ),
    ] = None,
) -> None:
    """Change fields of a nested task; start or duration recompute the end."""
    with exit_on_invalid_input():
        project = get_active_project()
        task_id = tree_task_id_at(project["tree_tasks"], number)
        tree_tasks = update_tree_task(
            project["tree_tasks"],
            task_id,
            _collect_changes(name, assignee, start, duration),
        )
        _store(project, tree_tasks)


@app.command("status, st", no_args_is_help=True)
def status(
    number: Annotated[int, typer.Argument(help=ROW_HELP)],
    new_status: Annotated[
        Optional[str],
        typer.Argument(
            callback=validate_tree_status,
            help="pending, inProgress or completed (default: next in cycle)",
        ),
    ] = None,
    yes: Annotated[
        Optional[bool],
        typer.Option(
            "--yes/--no",
            help="complete open subtasks too without asking, or leave them",
        ),
    ] = None,
) -> None:
    """Change the status of a nested task, cascading completion on request."""
    with exit_on_invalid_input():
        project = get_active_project()
        tree_tasks = project["tree_tasks"]
        task_id = tree_task_id_at(tree_tasks, number)
        task = find_tree_task(tree_tasks, task_id)
        if task is None:
            raise typer.BadParameter(f"Tree row {number} not found")

        target_status = new_status
        if target_status is None:
            target_status = next_status(task["status"])
        proposal = propose_status_change(tree_tasks, task_id, target_status)

        cascade = False
        if proposal["requires_confirmation"]:
            if yes is None:
                cascade = typer.confirm(
                    f"Also complete {len(proposal['incomplete_descendant_ids'])}"
                    f" open subtask(s) of '{task['name']}'?",
                    default=True,
                )
            else:
                cascade = yes
        _store(project, apply_status_change(tree_tasks, proposal, cascade))


@app.command("delete, d", no_args_is_help=True)
def delete(
    number: Annotated[int, typer.Argument(help=ROW_HELP)],
) -> None:
    """Delete a nested task and all of its subtasks."""
    with exit_on_invalid_input():
        project = get_active_project()
        task_id = tree_task_id_at(project["tree_tasks"], number)
        _store(project, delete_tree_task(project["tree_tasks"], task_id))
