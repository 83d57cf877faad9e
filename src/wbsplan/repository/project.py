# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Any, Optional, cast

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from wbsplan import configuration, time
from wbsplan.exception import InvalidInputError
from wbsplan.model.entity_id import ProjectId, generate_project_id
from wbsplan.model.project import Project
from wbsplan.model.task import Task
from wbsplan.model.task_tree import TreeTask

logger = logging.getLogger(__name__)


class ProjectRepository:
    def __init__(self) -> None:
        self._projects: Optional[list[Project]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()
        self._deleted_ids: set[str] = set()

    @property
    def projects(self) -> list[Project]:
        if self._projects is None:
            self.__load_data()
        if self._projects is None:
            raise ValueError()
        return self._projects

    def __load_data(self) -> None:
        self._projects = []
        if not configuration.DATA_PROJECTS_DIR.is_dir():
            return
        for file_path in sorted(configuration.DATA_PROJECTS_DIR.iterdir()):
            if file_path.suffix != ".yaml":
                continue
            raw_project = load(file_path.read_text(encoding="utf-8"), Loader=Loader)
            if raw_project is not None:
                self._projects.append(
                    self.__convert_project_for_deserialization(raw_project)
                )
        logger.debug(
            "Loaded %d project(s) from %s",
            len(self._projects),
            configuration.DATA_PROJECTS_DIR,
        )

    def __save_data(self) -> None:
        configuration.DATA_PROJECTS_DIR.mkdir(parents=True, exist_ok=True)

        # Write dirty entities
        for project in self.projects:
            if project["id"] in self._dirty_ids:
                serializable_project = self.__convert_project_for_serialization(
                    deepcopy(project)
                )
                file_path = configuration.DATA_PROJECTS_DIR / f"{project['id']}.yaml"
                file_path.write_text(
                    dump(serializable_project, Dumper=Dumper, allow_unicode=True),
                    encoding="utf-8",
                )
                logger.info("Wrote project %s to %s", project["id"], file_path)

        # Remove hard-deleted entity files
        for entity_id in self._deleted_ids:
            file_path = configuration.DATA_PROJECTS_DIR / f"{entity_id}.yaml"
            if file_path.exists():
                file_path.unlink()
                logger.info("Removed project file %s", file_path)

        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def flush(self) -> bool:
        if self._projects is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def __convert_task_for_serialization(self, task: Task) -> dict[str, Any]:
        serializable_task = cast(dict[str, Any], task)
        serializable_task["start_date"] = time.date_to_str_optional(
            serializable_task.get("start_date")
        )
        serializable_task["end_date"] = time.date_to_str_optional(
            serializable_task.get("end_date")
        )
        candidates = serializable_task.get("date_candidates")
        if candidates is not None:
            serializable_task["date_candidates"] = [
                time.date_to_str(candidate) for candidate in candidates
            ]
        return serializable_task

    def __convert_task_for_deserialization(self, task: dict[str, Any]) -> Task:
        deserializable_task = task
        deserializable_task["start_date"] = time.to_date_optional(
            deserializable_task.get("start_date")
        )
        deserializable_task["end_date"] = time.to_date_optional(
            deserializable_task.get("end_date")
        )
        candidates = deserializable_task.get("date_candidates")
        if candidates is not None:
            deserializable_task["date_candidates"] = [
                time.to_date(candidate) for candidate in candidates
            ]
        return cast(Task, deserializable_task)

    def __convert_tree_task_for_serialization(self, task: TreeTask) -> dict[str, Any]:
        serializable_task = cast(dict[str, Any], task)
        serializable_task["start_date"] = time.date_to_str_optional(
            serializable_task.get("start_date")
        )
        serializable_task["end_date"] = time.date_to_str_optional(
            serializable_task.get("end_date")
        )
        if "children" in serializable_task:
            serializable_task["children"] = [
                self.__convert_tree_task_for_serialization(child)
                for child in serializable_task["children"]
            ]
        return serializable_task

    def __convert_tree_task_for_deserialization(self, task: dict[str, Any]) -> TreeTask:
        deserializable_task = task
        deserializable_task["start_date"] = time.to_date_optional(
            deserializable_task.get("start_date")
        )
        deserializable_task["end_date"] = time.to_date_optional(
            deserializable_task.get("end_date")
        )
        if "children" in deserializable_task:
            deserializable_task["children"] = [
                self.__convert_tree_task_for_deserialization(child)
                for child in deserializable_task["children"] or []
            ]
        return cast(TreeTask, deserializable_task)

    def __convert_project_for_serialization(self, project: Project) -> dict[str, Any]:
        serializable_project = cast(dict[str, Any], project)
        serializable_project["created"] = time.datetime_to_iso_str(
            serializable_project["created"]
        )
        serializable_project["updated"] = time.datetime_to_iso_str(
            serializable_project["updated"]
        )
        serializable_project["start_date"] = time.date_to_str(
            serializable_project["start_date"]
        )
        serializable_project["delivery_date"] = time.date_to_str(
            serializable_project["delivery_date"]
        )
        serializable_project["due_date"] = time.date_to_str(
            serializable_project["due_date"]
        )
        serializable_project["custom_holidays"] = [
            time.date_to_str(holiday)
            for holiday in serializable_project["custom_holidays"]
        ]
        serializable_project["tasks"] = [
            self.__convert_task_for_serialization(task)
            for task in serializable_project["tasks"]
        ]
        serializable_project["tree_tasks"] = [
            self.__convert_tree_task_for_serialization(task)
            for task in serializable_project["tree_tasks"]
        ]
        return serializable_project

    def __convert_project_for_deserialization(self, project: dict[str, Any]) -> Project:
        deserializable_project = project
        deserializable_project["created"] = time.datetime_from_str(
            deserializable_project["created"]
        )
        deserializable_project["updated"] = time.datetime_from_str(
            deserializable_project["updated"]
        )
        deserializable_project["start_date"] = time.to_date(
            deserializable_project["start_date"]
        )
        deserializable_project["delivery_date"] = time.to_date(
            deserializable_project["delivery_date"]
        )
        deserializable_project["due_date"] = time.to_date(
            deserializable_project["due_date"]
        )
        deserializable_project["custom_holidays"] = [
            time.to_date(holiday)
            for holiday in deserializable_project.get("custom_holidays") or []
        ]
        deserializable_project["tasks"] = [
            self.__convert_task_for_deserialization(task)
            for task in deserializable_project.get("tasks") or []
        ]
        deserializable_project["tree_tasks"] = [
            self.__convert_tree_task_for_deserialization(task)
            for task in deserializable_project.get("tree_tasks") or []
        ]
        return cast(Project, deserializable_project)

    def __find_project(self, id: ProjectId) -> Project:
        for project in self.projects:
            if project["id"] == id:
                return project
        raise InvalidInputError(f"Project {id} not found")

    def save_new_project(self, project: Project) -> ProjectId:
        self.is_dirty = True

        project_id = generate_project_id()
        project["id"] = project_id
        self.projects.append(deepcopy(project))
        self._dirty_ids.add(project_id)

        return project_id

    def update_project(self, project: Project) -> None:
        """Replace the stored record with ``project`` and bump its updated timestamp."""
        if project["id"] is None:
            raise InvalidInputError("Cannot update a project that was never saved")
        stored_project = self.__find_project(project["id"])

        self.is_dirty = True
        self._dirty_ids.add(project["id"])

        index = self.projects.index(stored_project)
        updated_project = deepcopy(project)
        updated_project["updated"] = time.now_utc()
        self.projects[index] = updated_project

    def delete_project(self, id: ProjectId) -> None:
        project = self.__find_project(id)

        self.is_dirty = True
        self.projects.remove(project)
        self._dirty_ids.discard(id)
        self._deleted_ids.add(id)

    def get_all_projects(self) -> list[Project]:
        return deepcopy(self.projects)

    def get_project(self, id: ProjectId) -> Project:
        return deepcopy(self.__find_project(id))


PROJECT_REPO = ProjectRepository()
