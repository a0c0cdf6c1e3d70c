"""Interaction log service — tenant-scoped CRUD for calls, meetings, emails, notes."""

import uuid
from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from clientdesk.db.models import Client, InteractionLog, Project
from clientdesk.schedule import utcnow
from clientdesk.schemas.interaction_log import InteractionLogCreate, InteractionLogUpdate
from clientdesk.services.listing import ListFilters, ListPolicy, apply_list_filters
from clientdesk.services.ownership import RowId, get_owned_or_404

logger = structlog.get_logger()

LOG_LIST_POLICY = ListPolicy(
    search_columns=(InteractionLog.type, InteractionLog.notes, Client.name, Project.title),
    date_columns={"date": InteractionLog.date, "createdAt": InteractionLog.created_at},
    default_date_field="date",
    sort_columns={
        "date": InteractionLog.date,
        "type": InteractionLog.type,
        "createdAt": InteractionLog.created_at,
        "client": Client.name,
        "project": Project.title,
    },
    default_sort_field="date",
    default_sort_order="desc",
    tiebreaker=InteractionLog.id,
)

LOG_RELATIONS = (
    selectinload(InteractionLog.client),
    selectinload(InteractionLog.project),
)


async def check_links_owned(
    db: AsyncSession,
    user_id: uuid.UUID,
    client_id: Optional[uuid.UUID],
    project_id: Optional[uuid.UUID],
) -> None:
    """Referenced client/project must belong to the caller. Shared with reminders."""
    if client_id is not None:
        await get_owned_or_404(db, Client, client_id, user_id, "Client")
    if project_id is not None:
        await get_owned_or_404(db, Project, project_id, user_id, "Project")


class InteractionLogService:
    """Business logic for interaction logs."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_logs(self, user_id: uuid.UUID, filters: ListFilters) -> list[InteractionLog]:
        q = (
            select(InteractionLog)
            .outerjoin(Client, InteractionLog.client_id == Client.id)
            .outerjoin(Project, InteractionLog.project_id == Project.id)
            .where(InteractionLog.user_id == user_id)
            .options(*LOG_RELATIONS)
        )
        q = apply_list_filters(q, LOG_LIST_POLICY, filters)
        result = await self.db.execute(q)
        return list(result.scalars().all())

    async def get_log(self, log_id: RowId, user_id: uuid.UUID) -> InteractionLog:
        return await get_owned_or_404(
            self.db, InteractionLog, log_id, user_id, "Interaction log", LOG_RELATIONS
        )

    async def create_log(self, user_id: uuid.UUID, data: InteractionLogCreate) -> InteractionLog:
        await check_links_owned(self.db, user_id, data.client_id, data.project_id)

        log = InteractionLog(
            user_id=user_id,
            type=data.type,
            notes=data.notes,
            date=data.date or utcnow(),
            client_id=data.client_id,
            project_id=data.project_id,
        )
        self.db.add(log)
        await self.db.commit()
        logger.info(
            "interaction_log.created",
            log_id=str(log.id),
            type=data.type,
            user_id=str(user_id),
        )
        return await self.get_log(log.id, user_id)

    async def update_log(
        self, log_id: RowId, user_id: uuid.UUID, data: InteractionLogUpdate
    ) -> InteractionLog:
        log = await get_owned_or_404(
            self.db, InteractionLog, log_id, user_id, "Interaction log"
        )
        await check_links_owned(self.db, user_id, data.client_id, data.project_id)

        log.type = data.type
        log.notes = data.notes
        if data.date is not None:
            log.date = data.date
        log.client_id = data.client_id
        log.project_id = data.project_id
        await self.db.commit()
        logger.info("interaction_log.updated", log_id=str(log_id), user_id=str(user_id))
        return await self.get_log(log_id, user_id)

    async def delete_log(self, log_id: RowId, user_id: uuid.UUID) -> None:
        log = await get_owned_or_404(
            self.db, InteractionLog, log_id, user_id, "Interaction log"
        )
        await self.db.delete(log)
        await self.db.commit()
        logger.info("interaction_log.deleted", log_id=str(log_id), user_id=str(user_id))
