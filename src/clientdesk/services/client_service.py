"""Client service — tenant-scoped CRUD for clients.

Routes call the service with the caller's user id; every query here
filters on it. Reads embed the client's projects, reminders and logs.
"""

import uuid

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from clientdesk.db.models import Client, Project
from clientdesk.schemas.client import ClientCreate, ClientUpdate
from clientdesk.services.listing import ListFilters, ListPolicy, apply_list_filters
from clientdesk.services.ownership import RowId, get_owned_or_404

logger = structlog.get_logger()

_project_count = (
    select(func.count(Project.id))
    .where(Project.client_id == Client.id)
    .correlate(Client)
    .scalar_subquery()
)

CLIENT_LIST_POLICY = ListPolicy(
    search_columns=(Client.name, Client.email, Client.phone, Client.company),
    date_columns={"createdAt": Client.created_at},
    default_date_field="createdAt",
    sort_columns={
        "name": Client.name,
        "email": Client.email,
        "phone": Client.phone,
        "company": Client.company,
        "createdAt": Client.created_at,
        "projects": _project_count,
    },
    default_sort_field="name",
    default_sort_order="asc",
    tiebreaker=Client.id,
)

CLIENT_RELATIONS = (
    selectinload(Client.projects),
    selectinload(Client.reminders),
    selectinload(Client.logs),
)


class ClientService:
    """Business logic for clients."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_clients(self, user_id: uuid.UUID, filters: ListFilters) -> list[Client]:
        q = select(Client).where(Client.user_id == user_id).options(*CLIENT_RELATIONS)
        q = apply_list_filters(q, CLIENT_LIST_POLICY, filters)
        result = await self.db.execute(q)
        return list(result.scalars().all())

    async def get_client(self, client_id: RowId, user_id: uuid.UUID) -> Client:
        return await get_owned_or_404(
            self.db, Client, client_id, user_id, "Client", CLIENT_RELATIONS
        )

    async def create_client(self, user_id: uuid.UUID, data: ClientCreate) -> Client:
        client = Client(user_id=user_id, **data.model_dump())
        self.db.add(client)
        await self.db.commit()
        logger.info("client.created", client_id=str(client.id), user_id=str(user_id))
        return await self.get_client(client.id, user_id)

    async def update_client(
        self, client_id: RowId, user_id: uuid.UUID, data: ClientUpdate
    ) -> Client:
        client = await get_owned_or_404(self.db, Client, client_id, user_id, "Client")
        for field, value in data.model_dump().items():
            setattr(client, field, value)
        await self.db.commit()
        logger.info("client.updated", client_id=str(client_id), user_id=str(user_id))
        return await self.get_client(client_id, user_id)

    async def delete_client(self, client_id: RowId, user_id: uuid.UUID) -> None:
        """Delete a client. Its projects, logs and reminders go with it (FK cascade)."""
        client = await get_owned_or_404(self.db, Client, client_id, user_id, "Client")
        await self.db.delete(client)
        await self.db.commit()
        logger.info("client.deleted", client_id=str(client_id), user_id=str(user_id))
