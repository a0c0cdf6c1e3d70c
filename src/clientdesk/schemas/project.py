"""Pydantic schemas for projects."""

import uuid
from typing import Literal

from pydantic import Field, computed_field

from clientdesk.schedule import days_remaining, is_project_overdue, utcnow
from clientdesk.schemas.common import CamelModel, ClientSummary, UTCDateTime
from clientdesk.schemas.interaction_log import InteractionLogRead
from clientdesk.schemas.reminder import ReminderRead

ProjectStatus = Literal["Pending", "In Progress", "Completed", "Cancelled"]


class ProjectCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    budget: float = Field(..., ge=0)
    start_date: UTCDateTime
    deadline: UTCDateTime
    status: ProjectStatus = "Pending"
    client_id: uuid.UUID


class ProjectUpdate(ProjectCreate):
    pass


class ProjectRead(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    client_id: uuid.UUID
    title: str
    description: str
    budget: float
    start_date: UTCDateTime
    deadline: UTCDateTime
    status: str
    created_at: UTCDateTime
    updated_at: UTCDateTime

    @computed_field(alias="isOverdue")
    @property
    def is_overdue(self) -> bool:
        return is_project_overdue(self.deadline, self.status, utcnow())

    @computed_field(alias="daysRemaining")
    @property
    def days_remaining(self) -> int:
        return days_remaining(self.deadline, utcnow())


class ProjectWithClient(ProjectRead):
    client: ClientSummary


class ProjectDetail(ProjectWithClient):
    """Project with its client and the logs/reminders attached to it."""
    logs: list[InteractionLogRead] = []
    reminders: list[ReminderRead] = []
