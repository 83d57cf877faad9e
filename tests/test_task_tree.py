"""Tests for nested tasks and two-phase cascading completion."""

import pendulum
import pytest

from wbsplan.exception import InvalidInputError
from wbsplan.model.task_tree import TreeTask, TreeTaskStatus
from wbsplan.service.task_tree import (
    add_tree_task,
    apply_status_change,
    calculate_tree_end_date,
    calculate_tree_progress,
    delete_tree_task,
    flatten_tree,
    next_status,
    propose_status_change,
    tree_task_id_at,
    update_tree_task,
    validate_tree_dates,
)


def _tree_task(
    id: str, status: str = TreeTaskStatus.PENDING, **fields: object
) -> TreeTask:
    task: TreeTask = {
        "id": id,
        "name": id,
        "status": status,
        "assignee": "",
        "start_date": None,
        "duration": 0,
        "end_date": None,
    }
    task.update(fields)  # type: ignore[typeddict-item]
    return task


@pytest.fixture
def tree() -> list[TreeTask]:
    """Two phases, the first with a nested subtask."""
    return [
        _tree_task(
            "1",
            children=[
                _tree_task("1-1", TreeTaskStatus.COMPLETED),
                _tree_task("1-2", children=[_tree_task("1-2-1")]),
            ],
        ),
        _tree_task("2", TreeTaskStatus.IN_PROGRESS),
    ]


def test_flatten_is_depth_first(tree: list[TreeTask]) -> None:
    """Parents come before their children with increasing levels."""
    assert [(level, task["id"]) for level, task in flatten_tree(tree)] == [
        (0, "1"),
        (1, "1-1"),
        (1, "1-2"),
        (2, "1-2-1"),
        (0, "2"),
    ]


def test_progress_counts_every_node(tree: list[TreeTask]) -> None:
    """One of five nodes completed is 20 percent."""
    assert calculate_tree_progress(tree) == 20
    assert calculate_tree_progress([]) == 0


def test_end_date_skips_weekends_only() -> None:
    """Three weekdays after a Thursday is the next Tuesday."""
    assert calculate_tree_end_date("2025-01-09", 3) == pendulum.date(2025, 1, 14)
    # Coming of Age Day is not skipped in the tree variant
    assert calculate_tree_end_date("2025-01-10", 1) == pendulum.date(2025, 1, 13)


def test_end_date_requires_start_and_duration() -> None:
    """No start or a non-positive duration gives no end date."""
    assert calculate_tree_end_date(None, 3) is None
    assert calculate_tree_end_date("2025-01-09", 0) is None
    assert calculate_tree_end_date("2025-01-09", -2) is None


def test_parent_window_must_cover_children() -> None:
    """A parent starting late or ending early is flagged."""
    child = _tree_task(
        "c",
        start_date=pendulum.date(2025, 1, 6),
        end_date=pendulum.date(2025, 1, 10),
    )
    covering = _tree_task(
        "p",
        start_date=pendulum.date(2025, 1, 6),
        end_date=pendulum.date(2025, 1, 10),
        children=[child],
    )
    late = _tree_task("p", start_date=pendulum.date(2025, 1, 7), children=[child])
    early = _tree_task("p", end_date=pendulum.date(2025, 1, 9), children=[child])

    assert validate_tree_dates(covering) == (True, "")
    assert not validate_tree_dates(late)[0]
    assert not validate_tree_dates(early)[0]
    assert validate_tree_dates(_tree_task("leaf")) == (True, "")


def test_status_cycle() -> None:
    """pending, inProgress, completed, then back to pending."""
    assert next_status(TreeTaskStatus.PENDING) == TreeTaskStatus.IN_PROGRESS
    assert next_status(TreeTaskStatus.IN_PROGRESS) == TreeTaskStatus.COMPLETED
    assert next_status(TreeTaskStatus.COMPLETED) == TreeTaskStatus.PENDING
    with pytest.raises(InvalidInputError):
        next_status("blocked")


def test_completing_parent_needs_confirmation(tree: list[TreeTask]) -> None:
    """Incomplete descendants are listed in the proposal."""
    proposal = propose_status_change(tree, "1", TreeTaskStatus.COMPLETED)

    assert proposal["requires_confirmation"]
    assert proposal["incomplete_descendant_ids"] == ["1-2", "1-2-1"]


def test_confirmed_cascade_completes_descendants(tree: list[TreeTask]) -> None:
    """With confirmation every descendant is completed."""
    proposal = propose_status_change(tree, "1", TreeTaskStatus.COMPLETED)

    result = apply_status_change(tree, proposal, cascade=True)

    assert all(
        task["status"] == TreeTaskStatus.COMPLETED
        for _, task in flatten_tree(result[:1])
    )
    assert tree[0]["status"] == TreeTaskStatus.PENDING


def test_declined_cascade_updates_parent_only(tree: list[TreeTask]) -> None:
    """Without confirmation only the parent changes."""
    proposal = propose_status_change(tree, "1", TreeTaskStatus.COMPLETED)

    result = apply_status_change(tree, proposal, cascade=False)

    statuses = {task["id"]: task["status"] for _, task in flatten_tree(result)}
    assert statuses["1"] == TreeTaskStatus.COMPLETED
    assert statuses["1-2"] == TreeTaskStatus.PENDING
    assert statuses["1-2-1"] == TreeTaskStatus.PENDING


def test_other_status_changes_need_no_confirmation(tree: list[TreeTask]) -> None:
    """Only completion cascades."""
    proposal = propose_status_change(tree, "1", TreeTaskStatus.IN_PROGRESS)

    assert not proposal["requires_confirmation"]
    assert proposal["incomplete_descendant_ids"] == []


def test_unknown_task_is_rejected(tree: list[TreeTask]) -> None:
    """Proposals need an existing task."""
    with pytest.raises(InvalidInputError):
        propose_status_change(tree, "9", TreeTaskStatus.COMPLETED)


def test_update_recomputes_end_date(tree: list[TreeTask]) -> None:
    """Changing start or duration recomputes the end date of nested tasks."""
    result = update_tree_task(
        tree, "1-2-1", {"start_date": "2025-01-09", "duration": 3}
    )
    [(_, task)] = [
        (level, task) for level, task in flatten_tree(result) if task["id"] == "1-2-1"
    ]

    assert task["end_date"] == pendulum.date(2025, 1, 14)

    cleared = update_tree_task(result, "1-2-1", {"duration": 0})
    [(_, cleared_task)] = [
        (level, task)
        for level, task in flatten_tree(cleared)
        if task["id"] == "1-2-1"
    ]
    assert cleared_task["end_date"] is None


def test_update_rejects_status(tree: list[TreeTask]) -> None:
    """Status changes go through the two-phase interface."""
    with pytest.raises(InvalidInputError):
        update_tree_task(tree, "2", {"status": TreeTaskStatus.COMPLETED})


def test_add_task_at_top_level_and_as_subtask(tree: list[TreeTask]) -> None:
    """New tasks go last among their siblings."""
    with_top = add_tree_task(tree, _tree_task("3"))
    with_sub = add_tree_task(with_top, _tree_task("1-2-2"), parent_id="1-2")

    assert [task["id"] for _, task in flatten_tree(with_sub)] == [
        "1",
        "1-1",
        "1-2",
        "1-2-1",
        "1-2-2",
        "2",
        "3",
    ]
    assert len(flatten_tree(tree)) == 5


def test_add_task_rejects_unknown_parent_and_duplicate_id(
    tree: list[TreeTask],
) -> None:
    """Parents must exist and ids stay unique."""
    with pytest.raises(InvalidInputError):
        add_tree_task(tree, _tree_task("9"), parent_id="missing")
    with pytest.raises(InvalidInputError):
        add_tree_task(tree, _tree_task("1-2-1"))


def test_delete_removes_subtree(tree: list[TreeTask]) -> None:
    """Deleting a parent deletes its subtasks too."""
    result = delete_tree_task(tree, "1-2")

    assert [task["id"] for _, task in flatten_tree(result)] == ["1", "1-1", "2"]
    with pytest.raises(InvalidInputError):
        delete_tree_task(tree, "missing")


def test_row_numbers_follow_depth_first_order(tree: list[TreeTask]) -> None:
    """Row numbers are 1-based positions in the flattened tree."""
    assert tree_task_id_at(tree, 1) == "1"
    assert tree_task_id_at(tree, 4) == "1-2-1"
    assert tree_task_id_at(tree, 5) == "2"
    with pytest.raises(InvalidInputError):
        tree_task_id_at(tree, 6)
