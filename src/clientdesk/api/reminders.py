"""Reminder API routes.

Besides the common list filters, ``window`` narrows to a named due-date
window and ``statusFilter`` to a status group (completed, due, cancelled).
"""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from clientdesk.api.params import list_filters
from clientdesk.auth.dependencies import CurrentIdentity, get_current_user
from clientdesk.db.engine import get_db
from clientdesk.schedule import REMINDER_WINDOWS
from clientdesk.schemas.common import MessageResponse
from clientdesk.schemas.reminder import ReminderCreate, ReminderDetail, ReminderUpdate
from clientdesk.services.listing import ListFilters
from clientdesk.services.reminder_service import ReminderService

router = APIRouter(prefix="/reminders")


def _svc(db: AsyncSession = Depends(get_db)) -> ReminderService:
    return ReminderService(db)


@router.get("", response_model=list[ReminderDetail])
async def list_reminders(
    filters: ListFilters = Depends(list_filters),
    window: Optional[str] = Query(
        None, description=f"One of: {', '.join(REMINDER_WINDOWS)}"
    ),
    status_filter: Optional[Literal["completed", "due", "cancelled"]] = Query(
        None, alias="statusFilter"
    ),
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ReminderService = Depends(_svc),
):
    return await svc.list_reminders(
        identity.user_id, filters, window=window, status_filter=status_filter
    )


@router.post("", response_model=ReminderDetail, status_code=201)
async def create_reminder(
    body: ReminderCreate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ReminderService = Depends(_svc),
):
    return await svc.create_reminder(identity.user_id, body)


@router.get("/{reminder_id}", response_model=ReminderDetail)
async def get_reminder(
    reminder_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ReminderService = Depends(_svc),
):
    return await svc.get_reminder(reminder_id, identity.user_id)


@router.put("/{reminder_id}", response_model=ReminderDetail)
async def update_reminder(
    reminder_id: str,
    body: ReminderUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ReminderService = Depends(_svc),
):
    return await svc.update_reminder(reminder_id, identity.user_id, body)


@router.delete("/{reminder_id}", response_model=MessageResponse)
async def delete_reminder(
    reminder_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ReminderService = Depends(_svc),
):
    await svc.delete_reminder(reminder_id, identity.user_id)
    return {"message": "Reminder deleted successfully"}
