# SPDX-License-Identifier: MIT

from typing import TypedDict

from wbsplan.model.entity_id import generate_task_id
from wbsplan.model.task import (
    Assignee,
    ScheduleType,
    Task,
    TaskCategory,
    TaskStatus,
)


class TemplateTask(TypedDict):
    name: str
    section: str
    category: str
    assignee: str
    estimate_days: int
    estimate_hours: int
    schedule_type: str


class TemplateKey:
    WEB_SITE = "WEB_SITE"
    LP = "LP"

    ALL = (WEB_SITE, LP)


class Section:
    MATERIALS = "Materials"
    CMS_DESIGN = "CMS design"
    DESIGN = "Design"
    IMPLEMENTATION = "Implementation"
    ADMIN = "Admin screens"
    INITIAL_CONTENT = "Initial content"
    STAKEHOLDERS = "Stakeholder meetings"
    TEST_AND_LAUNCH = "Testing & launch"
    STRUCTURE_AND_COPY = "Structure & copy"
    LAUNCH = "Launch"
    REQUIREMENTS = "Requirements"


def _template_task(
    name: str,
    section: str,
    category: str,
    assignee: str,
    estimate_days: int,
    estimate_hours: int,
    schedule_type: str = ScheduleType.AUTO,
) -> TemplateTask:
    return {
        "name": name,
        "section": section,
        "category": category,
        "assignee": assignee,
        "estimate_days": estimate_days,
        "estimate_hours": estimate_hours,
        "schedule_type": schedule_type,
    }


_PLANNING = TaskCategory.PLANNING
_DESIGN = TaskCategory.DESIGN
_DEVELOPMENT = TaskCategory.DEVELOPMENT
_QA = TaskCategory.QA
_LAUNCH = TaskCategory.LAUNCH

_DIRECTOR = Assignee.DIRECTOR
_AGENCY = Assignee.AGENCY
_CLIENT = Assignee.CLIENT

_FIXED = ScheduleType.FIXED
_COORDINATION = ScheduleType.COORDINATION

TEMPLATES: dict[str, list[TemplateTask]] = {
    TemplateKey.WEB_SITE: [
        _template_task("Material request list", Section.MATERIALS, _PLANNING, _DIRECTOR, 0, 4),
        _template_task("Shared folder and naming rules", Section.MATERIALS, _PLANNING, _DIRECTOR, 0, 3),
        _template_task("Collect materials (logo/images/copy/terms)", Section.MATERIALS, _PLANNING, _CLIENT, 2, 0),
        _template_task("Find missing materials and re-request", Section.MATERIALS, _PLANNING, _DIRECTOR, 1, 0),
        _template_task("Photo shoot/interview scheduling", Section.MATERIALS, _PLANNING, _DIRECTOR, 0, 4, _COORDINATION),
        _template_task("Photo shoot/interview", Section.MATERIALS, _PLANNING, _AGENCY, 1, 0, _FIXED),
        _template_task("Organize shoot materials", Section.MATERIALS, _PLANNING, _AGENCY, 1, 0),
        _template_task("Column post type requirements", Section.CMS_DESIGN, _PLANNING, _DIRECTOR, 0, 4),
        _template_task("News post type requirements", Section.CMS_DESIGN, _PLANNING, _DIRECTOR, 0, 3),
        _template_task("Category and tag design", Section.CMS_DESIGN, _PLANNING, _DIRECTOR, 0, 4),
        _template_task("SEO/OGP field design", Section.CMS_DESIGN, _PLANNING, _DIRECTOR, 0, 4),
        _template_task("List/detail display spec", Section.CMS_DESIGN, _PLANNING, _DIRECTOR, 1, 0),
        _template_task("Common UI layout", Section.DESIGN, _DESIGN, _AGENCY, 1, 0),
        _template_task("Key page design", Section.DESIGN, _DESIGN, _AGENCY, 2, 0),
        _template_task("Column list/detail design", Section.DESIGN, _DESIGN, _AGENCY, 1, 0),
        _template_task("News list/detail design", Section.DESIGN, _DESIGN, _AGENCY, 1, 0),
        _template_task("Design review scheduling", Section.DESIGN, _DESIGN, _DIRECTOR, 0, 3, _COORDINATION),
        _template_task("Design review", Section.DESIGN, _DESIGN, _CLIENT, 0, 4, _FIXED),
        _template_task("Design revisions", Section.DESIGN, _DESIGN, _AGENCY, 2, 0),
        _template_task("Front-end implementation", Section.IMPLEMENTATION, _DEVELOPMENT, _AGENCY, 5, 0),
        _template_task("Form implementation", Section.IMPLEMENTATION, _DEVELOPMENT, _AGENCY, 1, 0),
        _template_task("Column post type implementation", Section.IMPLEMENTATION, _DEVELOPMENT, _AGENCY, 2, 0),
        _template_task("News post type implementation", Section.IMPLEMENTATION, _DEVELOPMENT, _AGENCY, 1, 0),
        _template_task("Category and tag implementation", Section.IMPLEMENTATION, _DEVELOPMENT, _AGENCY, 0, 4),
        _template_task("List/detail templates", Section.IMPLEMENTATION, _DEVELOPMENT, _AGENCY, 2, 0),
        _template_task("Field help texts and examples", Section.ADMIN, _DEVELOPMENT, _AGENCY, 0, 4),
        _template_task("Required/optional fields and input aids", Section.ADMIN, _DEVELOPMENT, _AGENCY, 0, 4),
        _template_task("Image upload guide", Section.ADMIN, _DEVELOPMENT, _AGENCY, 0, 4),
        _template_task("Preview flow (draft, review, publish)", Section.ADMIN, _DEVELOPMENT, _AGENCY, 1, 0),
        _template_task("Client quick manual", Section.ADMIN, _DEVELOPMENT, _DIRECTOR, 0, 4),
        _template_task("Initial column posts (3)", Section.INITIAL_CONTENT, _DEVELOPMENT, _CLIENT, 1, 4),
        _template_task("Initial news posts (3)", Section.INITIAL_CONTENT, _DEVELOPMENT, _CLIENT, 1, 0),
        _template_task("Display and link check", Section.INITIAL_CONTENT, _QA, _AGENCY, 0, 4),
        _template_task("Kickoff scheduling", Section.STAKEHOLDERS, _PLANNING, _DIRECTOR, 0, 3, _COORDINATION),
        _template_task("Kickoff meeting", Section.STAKEHOLDERS, _PLANNING, _DIRECTOR, 0, 4, _FIXED),
        _template_task("Midpoint review scheduling", Section.STAKEHOLDERS, _QA, _DIRECTOR, 0, 3, _COORDINATION),
        _template_task("Midpoint review", Section.STAKEHOLDERS, _QA, _DIRECTOR, 0, 4, _FIXED),
        _template_task("Display and behaviour testing", Section.TEST_AND_LAUNCH, _QA, _AGENCY, 2, 0),
        _template_task("Fixes", Section.TEST_AND_LAUNCH, _QA, _AGENCY, 2, 0),
        _template_task("Launch date scheduling", Section.TEST_AND_LAUNCH, _LAUNCH, _DIRECTOR, 0, 3, _COORDINATION),
        _template_task("GA4/tag setup", Section.TEST_AND_LAUNCH, _LAUNCH, _DIRECTOR, 1, 0),
        _template_task("DNS/SSL/server setup", Section.TEST_AND_LAUNCH, _LAUNCH, _AGENCY, 1, 0),
        _template_task("Production release", Section.TEST_AND_LAUNCH, _LAUNCH, _DIRECTOR, 0, 4, _FIXED),
        _template_task("Post-launch check", Section.TEST_AND_LAUNCH, _LAUNCH, _DIRECTOR, 0, 4),
        _template_task("Operations lecture", Section.TEST_AND_LAUNCH, _LAUNCH, _DIRECTOR, 0, 4),
    ],
    TemplateKey.LP: [
        _template_task("Material request list", Section.MATERIALS, _PLANNING, _DIRECTOR, 0, 4),
        _template_task("Collect materials", Section.MATERIALS, _PLANNING, _CLIENT, 1, 0),
        _template_task("Re-request missing materials", Section.MATERIALS, _PLANNING, _DIRECTOR, 0, 4),
        _template_task("Photo shoot/interview scheduling", Section.MATERIALS, _PLANNING, _DIRECTOR, 0, 4, _COORDINATION),
        _template_task("Photo shoot/interview", Section.MATERIALS, _PLANNING, _AGENCY, 1, 0, _FIXED),
        _template_task("Message and appeal points", Section.STRUCTURE_AND_COPY, _PLANNING, _DIRECTOR, 1, 0),
        _template_task("Wireframe", Section.STRUCTURE_AND_COPY, _PLANNING, _AGENCY, 1, 4),
        _template_task("Copywriting", Section.STRUCTURE_AND_COPY, _PLANNING, _AGENCY, 2, 0),
        _template_task("Design", Section.DESIGN, _DESIGN, _AGENCY, 2, 0),
        _template_task("Review scheduling", Section.DESIGN, _DESIGN, _DIRECTOR, 0, 3, _COORDINATION),
        _template_task("Review meeting", Section.DESIGN, _DESIGN, _CLIENT, 0, 4, _FIXED),
        _template_task("Revisions", Section.DESIGN, _DESIGN, _AGENCY, 1, 0),
        _template_task("Coding", Section.IMPLEMENTATION, _DEVELOPMENT, _AGENCY, 3, 0),
        _template_task("Form and analytics setup", Section.IMPLEMENTATION, _DEVELOPMENT, _AGENCY, 1, 0),
        _template_task("Display check and optimisation", Section.IMPLEMENTATION, _DEVELOPMENT, _AGENCY, 1, 0),
        _template_task("Launch date scheduling", Section.LAUNCH, _LAUNCH, _DIRECTOR, 0, 3, _COORDINATION),
        _template_task("Launch", Section.LAUNCH, _LAUNCH, _DIRECTOR, 0, 4, _FIXED),
        _template_task("Post-launch check", Section.LAUNCH, _LAUNCH, _DIRECTOR, 0, 4),
    ],
}


def task_from_template(template_task: TemplateTask, order_index: int) -> Task:
    return {
        "id": generate_task_id(),
        "name": template_task["name"],
        "section": template_task["section"],
        "category": template_task["category"],
        "status": TaskStatus.PENDING,
        "assignee": template_task["assignee"],
        "estimate_days": template_task["estimate_days"],
        "estimate_hours": template_task["estimate_hours"],
        "overtime_days": None,
        "overtime_hours": None,
        "is_outsourced": False,
        "schedule_type": template_task["schedule_type"],
        "order_index": order_index,
        "start_date": None,
        "end_date": None,
        "countdown_to_due": None,
        "completed": False,
        "date_candidates": None,
    }


def generate_wbs(template_key: str) -> list[Task]:
    """Clone a base template into fresh tasks; unknown keys use WEB_SITE."""
    template = TEMPLATES.get(template_key, TEMPLATES[TemplateKey.WEB_SITE])
    return [
        task_from_template(template_task, index)
        for index, template_task in enumerate(template)
    ]
