"""Shared pydantic building blocks.

All API payloads use camelCase on the wire and snake_case in Python:
``CamelModel`` sets an alias generator and accepts either spelling on
input. FastAPI serialises response models by alias, so responses come out
camelCase too.
"""

import uuid
from datetime import datetime
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from clientdesk.schedule import as_utc

UTCDateTime = Annotated[datetime, AfterValidator(as_utc)]

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ClientSummary(CamelModel):
    id: uuid.UUID
    name: str
    email: str


class ProjectSummary(CamelModel):
    id: uuid.UUID
    title: str


class MessageResponse(BaseModel):
    message: str


class DateRange(CamelModel):
    start_date: Optional[UTCDateTime] = None
    end_date: Optional[UTCDateTime] = None
