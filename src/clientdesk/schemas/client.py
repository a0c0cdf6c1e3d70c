"""Pydantic schemas for clients."""

import uuid
from typing import Optional

from pydantic import Field

from clientdesk.schemas.common import EMAIL_PATTERN, CamelModel, UTCDateTime
from clientdesk.schemas.interaction_log import InteractionLogRead
from clientdesk.schemas.project import ProjectRead
from clientdesk.schemas.reminder import ReminderRead


class ClientCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    phone: str = Field(default="", max_length=50)
    company: Optional[str] = Field(default=None, max_length=200)
    notes: Optional[str] = None


class ClientUpdate(ClientCreate):
    pass


class ClientRead(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    email: str
    phone: str
    company: Optional[str] = None
    notes: Optional[str] = None
    created_at: UTCDateTime
    updated_at: UTCDateTime


class ClientDetail(ClientRead):
    """Client with nested projects, reminders and interaction logs."""
    projects: list[ProjectRead] = []
    reminders: list[ReminderRead] = []
    logs: list[InteractionLogRead] = []
