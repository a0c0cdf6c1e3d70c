"""Pydantic schemas for interaction logs."""

import uuid
from typing import Literal, Optional

from pydantic import Field, model_validator

from clientdesk.schemas.common import (
    CamelModel,
    ClientSummary,
    ProjectSummary,
    UTCDateTime,
)

InteractionType = Literal["call", "meeting", "email", "note"]


class InteractionLogCreate(CamelModel):
    type: InteractionType
    notes: str = Field(..., min_length=1)
    date: Optional[UTCDateTime] = None  # defaults to now
    client_id: Optional[uuid.UUID] = None
    project_id: Optional[uuid.UUID] = None

    @model_validator(mode="after")
    def require_client_or_project(self):
        if self.client_id is None and self.project_id is None:
            raise ValueError("Either clientId or projectId must be provided")
        return self


class InteractionLogUpdate(InteractionLogCreate):
    """Full replacement. An omitted ``date`` keeps the stored one."""


class InteractionLogRead(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    type: str
    notes: str
    date: UTCDateTime
    client_id: Optional[uuid.UUID] = None
    project_id: Optional[uuid.UUID] = None
    created_at: UTCDateTime
    updated_at: UTCDateTime


class InteractionLogDetail(InteractionLogRead):
    client: Optional[ClientSummary] = None
    project: Optional[ProjectSummary] = None
