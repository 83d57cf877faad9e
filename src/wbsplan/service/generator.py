# SPDX-License-Identifier: MIT

import logging
import math
import re

from wbsplan.model.task import Assignee, ScheduleType, Task, TaskCategory
from wbsplan.template.wbs import (
    Section,
    TemplateKey,
    generate_wbs,
    task_from_template,
)

logger = logging.getLogger(__name__)

LANDING_PAGE_PATTERN = re.compile(r"LP|ランディングページ|landing page", re.IGNORECASE)
PAGE_COUNT_PATTERN = re.compile(r"(\d+)\s*(ページ|page|pg)", re.IGNORECASE)
CONTACT_FORM_PATTERN = re.compile(r"フォーム|contact|inquiry|お問い合わせ", re.IGNORECASE)
CMS_PATTERN = re.compile(r"CMS|WordPress|MovableType|ブログ|blog|お知らせ", re.IGNORECASE)
LOGIN_PATTERN = re.compile(r"ログイン|会員|マイページ|login|auth|member", re.IGNORECASE)

BASELINE_PAGE_COUNT = 5
FRONT_END_DAYS_PER_EXTRA_PAGE = 0.5
DESIGN_DAYS_PER_EXTRA_PAGE = 0.3

FRONT_END_TASK_NAME = "front-end implementation"
DESIGN_TASK_KEYWORD = "design"
FORM_TASK_KEYWORD = "form"


def generate_tasks_from_text(text: str) -> list[Task]:
    """
    Seed a task list from free-text requirements.

    This is keyword matching, not parsing: the landing-page template is used
    when the text mentions a landing page, page counts above five stretch the
    front-end and design estimates, and feature keywords (contact form,
    CMS/blog, login/member area) insert extra tasks. Every task gets a fresh
    id and the order is renumbered at the end.
    """
    is_landing_page = LANDING_PAGE_PATTERN.search(text) is not None
    template_key = TemplateKey.LP if is_landing_page else TemplateKey.WEB_SITE
    tasks = generate_wbs(template_key)
    logger.debug("Generating tasks from the %s template", template_key)

    page_count_match = PAGE_COUNT_PATTERN.search(text)
    page_count = int(page_count_match.group(1)) if page_count_match else 0
    if page_count > BASELINE_PAGE_COUNT:
        _scale_for_page_count(tasks, page_count)

    if CONTACT_FORM_PATTERN.search(text):
        form_exists = any(FORM_TASK_KEYWORD in task["name"].lower() for task in tasks)
        if not form_exists:
            tasks.insert(
                _find_insert_index(tasks, Section.IMPLEMENTATION),
                _simple_task(
                    "Form implementation",
                    Section.IMPLEMENTATION,
                    TaskCategory.DEVELOPMENT,
                    Assignee.AGENCY,
                    1,
                    0,
                ),
            )

    if CMS_PATTERN.search(text) and is_landing_page:
        insert_index = _find_insert_index(tasks, Section.IMPLEMENTATION)
        tasks[insert_index:insert_index] = [
            _simple_task(
                "CMS requirements",
                Section.CMS_DESIGN,
                TaskCategory.PLANNING,
                Assignee.DIRECTOR,
                0,
                4,
            ),
            _simple_task(
                "CMS implementation",
                Section.IMPLEMENTATION,
                TaskCategory.DEVELOPMENT,
                Assignee.AGENCY,
                2,
                0,
            ),
        ]

    if LOGIN_PATTERN.search(text):
        insert_index = _find_insert_index(tasks, Section.IMPLEMENTATION)
        tasks[insert_index:insert_index] = [
            _simple_task(
                "Member feature requirements",
                Section.REQUIREMENTS,
                TaskCategory.PLANNING,
                Assignee.DIRECTOR,
                1,
                0,
            ),
            _simple_task(
                "Login/authentication implementation",
                Section.IMPLEMENTATION,
                TaskCategory.DEVELOPMENT,
                Assignee.AGENCY,
                3,
                0,
            ),
            _simple_task(
                "My page implementation",
                Section.IMPLEMENTATION,
                TaskCategory.DEVELOPMENT,
                Assignee.AGENCY,
                3,
                0,
            ),
        ]

    for index, task in enumerate(tasks):
        task["order_index"] = index
    return tasks


def _scale_for_page_count(tasks: list[Task], page_count: int) -> None:
    extra_pages = page_count - BASELINE_PAGE_COUNT
    for task in tasks:
        name = task["name"].lower()
        if (
            task["section"] == Section.IMPLEMENTATION
            and task["category"] == TaskCategory.DEVELOPMENT
            and FRONT_END_TASK_NAME in name
        ):
            task["estimate_days"] += math.ceil(
                extra_pages * FRONT_END_DAYS_PER_EXTRA_PAGE
            )
        elif (
            task["section"] == Section.DESIGN
            and task["category"] == TaskCategory.DESIGN
            and DESIGN_TASK_KEYWORD in name
        ):
            task["estimate_days"] += math.ceil(extra_pages * DESIGN_DAYS_PER_EXTRA_PAGE)


def _find_insert_index(tasks: list[Task], section: str) -> int:
    """Position right after the first task of a section, or the end."""
    for index, task in enumerate(tasks):
        if task["section"] == section:
            return index + 1
    return len(tasks)


def _simple_task(
    name: str,
    section: str,
    category: str,
    assignee: str,
    estimate_days: int,
    estimate_hours: int,
) -> Task:
    return task_from_template(
        {
            "name": name,
            "section": section,
            "category": category,
            "assignee": assignee,
            "estimate_days": estimate_days,
            "estimate_hours": estimate_hours,
            "schedule_type": ScheduleType.AUTO,
        },
        0,
    )
