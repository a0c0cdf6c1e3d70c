"""Pydantic schemas for the dashboard payload."""

import uuid
from typing import Optional

from clientdesk.schemas.client import ClientDetail
from clientdesk.schemas.common import CamelModel, DateRange
from clientdesk.schemas.interaction_log import InteractionLogDetail
from clientdesk.schemas.project import ProjectDetail, ProjectWithClient
from clientdesk.schemas.reminder import ReminderDetail, ReminderRead


class StatusCount(CamelModel):
    status: str
    count: int


class TypeCount(CamelModel):
    type: str
    count: int


class TopClient(CamelModel):
    """A client ranked by its projects (budget sum or project count)."""
    id: uuid.UUID
    name: str
    email: str
    company: Optional[str] = None
    project_count: int
    total_budget: float


class DashboardRead(CamelModel):
    total_clients: int
    total_projects: int
    total_logs: int
    total_reminders: int
    total_budget: float

    projects_by_status: list[StatusCount]
    logs_by_type: list[TypeCount]
    top_budget_clients: list[TopClient]
    top_count_projects_clients: list[TopClient]

    recent_clients: list[ClientDetail]
    recent_projects: list[ProjectDetail]
    latest_project: Optional[ProjectWithClient] = None
    overdue_projects: list[ProjectWithClient]
    recent_logs: list[InteractionLogDetail]

    upcoming_reminders: list[ReminderDetail]
    pending_reminders: list[ReminderDetail]
    overdue_reminders: list[ReminderDetail]
    all_reminders: list[ReminderRead]

    date_range: DateRange
