"""Test fixtures for wbsplan."""

from pathlib import Path
from typing import Any, Callable

import pytest

from wbsplan import configuration
from wbsplan.holiday import EMPTY_HOLIDAY_TABLE, HolidayTable, load_holiday_table
from wbsplan.model.task import Task
from wbsplan.repository.configuration import CONFIGURATION_REPO
from wbsplan.repository.project import PROJECT_REPO
from wbsplan.template.task import get_task_template


@pytest.fixture
def no_holidays() -> HolidayTable:
    """Calendar with weekends only."""
    return EMPTY_HOLIDAY_TABLE


@pytest.fixture
def jp_holidays() -> HolidayTable:
    """Packaged Japanese holiday table."""
    return load_holiday_table("jp")


@pytest.fixture
def make_task() -> Callable[..., Task]:
    """Build a task from the new-task template with field overrides."""

    def factory(**overrides: Any) -> Task:
        task = get_task_template(overrides.pop("section", "Design"))
        task.update(overrides)  # type: ignore[typeddict-item]
        return task

    return factory


@pytest.fixture
def isolated_store(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point configuration and project files at a temporary directory."""
    config_dir = tmp_path / "config"
    data_dir = tmp_path / "data"
    config_dir.mkdir()

    monkeypatch.setattr(configuration, "CONFIG_PATH", config_dir)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_dir / "config.yaml")
    monkeypatch.setattr(configuration, "DATA_PATH", data_dir)
    monkeypatch.setattr(configuration, "DATA_PROJECTS_DIR", data_dir / "projects")

    # Drop anything an earlier test loaded into the repository singletons
    monkeypatch.setattr(CONFIGURATION_REPO, "_config", None)
    monkeypatch.setattr(CONFIGURATION_REPO, "is_dirty", False)
    monkeypatch.setattr(PROJECT_REPO, "_projects", None)
    monkeypatch.setattr(PROJECT_REPO, "is_dirty", False)
    monkeypatch.setattr(PROJECT_REPO, "_dirty_ids", set())
    monkeypatch.setattr(PROJECT_REPO, "_deleted_ids", set())

    return tmp_path
