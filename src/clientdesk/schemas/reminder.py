"""Pydantic schemas for reminders.

``isOverdue`` and ``isUpcoming`` are computed when the response is built,
never stored.
"""

import uuid
from typing import Literal, Optional

from pydantic import Field, computed_field

from clientdesk.schedule import is_reminder_due_soon, is_reminder_overdue, utcnow
from clientdesk.schemas.common import (
    CamelModel,
    ClientSummary,
    ProjectSummary,
    UTCDateTime,
)

ReminderStatus = Literal["Pending", "Completed", "Cancelled"]


class ReminderCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    notes: Optional[str] = None
    due_date: UTCDateTime
    status: ReminderStatus = "Pending"
    client_id: Optional[uuid.UUID] = None
    project_id: Optional[uuid.UUID] = None


class ReminderUpdate(ReminderCreate):
    pass


class ReminderRead(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    title: str
    notes: Optional[str] = None
    due_date: UTCDateTime
    status: str
    client_id: Optional[uuid.UUID] = None
    project_id: Optional[uuid.UUID] = None
    created_at: UTCDateTime
    updated_at: UTCDateTime

    @computed_field(alias="isOverdue")
    @property
    def is_overdue(self) -> bool:
        return is_reminder_overdue(self.due_date, self.status, utcnow())

    @computed_field(alias="isUpcoming")
    @property
    def is_upcoming(self) -> bool:
        return is_reminder_due_soon(self.due_date, self.status, utcnow())


class ReminderDetail(ReminderRead):
    client: Optional[ClientSummary] = None
    project: Optional[ProjectSummary] = None
