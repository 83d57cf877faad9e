# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from wbsplan.model.project import Project
from wbsplan.template.wbs import TemplateKey
from wbsplan.time import now_utc, today

DEFAULT_DURATION_DAYS = 60


def get_project_template(
    name: str,
    start_date: Optional[pendulum.Date] = None,
    template: str = TemplateKey.WEB_SITE,
    default_duration_days: int = DEFAULT_DURATION_DAYS,
) -> Project:
    now = now_utc()
    start = start_date if start_date is not None else today()
    delivery = start.add(days=default_duration_days)
    return {
        "id": None,
        "name": name,
        "client_name": "",
        "template": template,
        "stakeholders": {"director": "", "agency": "", "client": ""},
        "created": now,
        "updated": now,
        "start_date": start,
        "delivery_date": delivery,
        "due_date": delivery,
        "custom_holidays": [],
        "hourly_rate": None,
        "total_budget": None,
        "outsourcing_cost": 0,
        "tasks": [],
        "tree_tasks": [],
    }
