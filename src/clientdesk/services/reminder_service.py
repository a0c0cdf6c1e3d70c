"""Reminder service — tenant-scoped CRUD for reminders.

On top of the common list filters, reminders can be narrowed to a named
due-date window ("today", "nextweek", "past30days", …) and a status group.
Windows are resolved against one "now" per call.
"""

import uuid
from datetime import datetime
from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from clientdesk.db.models import Client, Project, Reminder
from clientdesk.schedule import utcnow, window_bounds
from clientdesk.schemas.reminder import ReminderCreate, ReminderUpdate
from clientdesk.services.interaction_log_service import check_links_owned
from clientdesk.services.listing import ListFilters, ListPolicy, apply_list_filters
from clientdesk.services.ownership import RowId, get_owned_or_404

logger = structlog.get_logger()

REMINDER_LIST_POLICY = ListPolicy(
    search_columns=(
        Reminder.title,
        Reminder.notes,
        Reminder.status,
        Client.name,
        Project.title,
    ),
    date_columns={"dueDate": Reminder.due_date, "createdAt": Reminder.created_at},
    default_date_field="dueDate",
    sort_columns={
        "dueDate": Reminder.due_date,
        "title": Reminder.title,
        "status": Reminder.status,
        "createdAt": Reminder.created_at,
        "client": Client.name,
        "project": Project.title,
    },
    default_sort_field="dueDate",
    default_sort_order="asc",
    tiebreaker=Reminder.id,
)

REMINDER_RELATIONS = (
    selectinload(Reminder.client),
    selectinload(Reminder.project),
)


class ReminderService:
    """Business logic for reminders."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_reminders(
        self,
        user_id: uuid.UUID,
        filters: ListFilters,
        window: Optional[str] = None,
        status_filter: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> list[Reminder]:
        q = (
            select(Reminder)
            .outerjoin(Client, Reminder.client_id == Client.id)
            .outerjoin(Project, Reminder.project_id == Project.id)
            .where(Reminder.user_id == user_id)
            .options(*REMINDER_RELATIONS)
        )

        if window:
            start, end = window_bounds(window, now or utcnow())
            if start is not None:
                q = q.where(Reminder.due_date >= start)
            if end is not None:
                q = q.where(Reminder.due_date < end)

        if status_filter == "completed":
            q = q.where(Reminder.status == "Completed")
        elif status_filter == "cancelled":
            q = q.where(Reminder.status == "Cancelled")
        elif status_filter == "due":
            q = q.where(Reminder.status.not_in(("Completed", "Cancelled")))

        q = apply_list_filters(q, REMINDER_LIST_POLICY, filters)
        result = await self.db.execute(q)
        return list(result.scalars().all())

    async def get_reminder(self, reminder_id: RowId, user_id: uuid.UUID) -> Reminder:
        return await get_owned_or_404(
            self.db, Reminder, reminder_id, user_id, "Reminder", REMINDER_RELATIONS
        )

    async def create_reminder(self, user_id: uuid.UUID, data: ReminderCreate) -> Reminder:
        await check_links_owned(self.db, user_id, data.client_id, data.project_id)

        reminder = Reminder(user_id=user_id, **data.model_dump())
        self.db.add(reminder)
        await self.db.commit()
        logger.info("reminder.created", reminder_id=str(reminder.id), user_id=str(user_id))
        return await self.get_reminder(reminder.id, user_id)

    async def update_reminder(
        self, reminder_id: RowId, user_id: uuid.UUID, data: ReminderUpdate
    ) -> Reminder:
        reminder = await get_owned_or_404(self.db, Reminder, reminder_id, user_id, "Reminder")
        await check_links_owned(self.db, user_id, data.client_id, data.project_id)

        for field, value in data.model_dump().items():
            setattr(reminder, field, value)
        await self.db.commit()
        logger.info(
            "reminder.updated",
            reminder_id=str(reminder_id),
            status=data.status,
            user_id=str(user_id),
        )
        return await self.get_reminder(reminder_id, user_id)

    async def delete_reminder(self, reminder_id: RowId, user_id: uuid.UUID) -> None:
        reminder = await get_owned_or_404(self.db, Reminder, reminder_id, user_id, "Reminder")
        await self.db.delete(reminder)
        await self.db.commit()
        logger.info("reminder.deleted", reminder_id=str(reminder_id), user_id=str(user_id))
