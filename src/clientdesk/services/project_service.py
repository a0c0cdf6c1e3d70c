"""Project service — tenant-scoped CRUD for projects.

A project always hangs off one client, and that client must belong to the
caller: create and update both re-check it through ``get_owned_or_404``
before anything is written.
"""

import uuid

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from clientdesk.db.models import Client, Project
from clientdesk.errors import InvalidInput
from clientdesk.schemas.project import ProjectCreate, ProjectUpdate
from clientdesk.services.listing import ListFilters, ListPolicy, apply_list_filters
from clientdesk.services.ownership import RowId, get_owned_or_404

logger = structlog.get_logger()

PROJECT_LIST_POLICY = ListPolicy(
    search_columns=(Project.title, Project.description, Project.status, Client.name),
    date_columns={
        "deadline": Project.deadline,
        "startDate": Project.start_date,
        "createdAt": Project.created_at,
    },
    default_date_field="deadline",
    sort_columns={
        "title": Project.title,
        "description": Project.description,
        "budget": Project.budget,
        "startDate": Project.start_date,
        "deadline": Project.deadline,
        "status": Project.status,
        "createdAt": Project.created_at,
        "client": Client.name,
    },
    default_sort_field="title",
    default_sort_order="asc",
    tiebreaker=Project.id,
)

PROJECT_RELATIONS = (
    selectinload(Project.client),
    selectinload(Project.logs),
    selectinload(Project.reminders),
)


def _check_dates(data: ProjectCreate) -> None:
    if data.start_date > data.deadline:
        raise InvalidInput.for_field(
            "deadline", "Start date must be earlier than or equal to deadline"
        )


class ProjectService:
    """Business logic for projects."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_projects(self, user_id: uuid.UUID, filters: ListFilters) -> list[Project]:
        q = (
            select(Project)
            .join(Client, Project.client_id == Client.id)
            .where(Project.user_id == user_id)
            .options(*PROJECT_RELATIONS)
        )
        q = apply_list_filters(q, PROJECT_LIST_POLICY, filters)
        result = await self.db.execute(q)
        return list(result.scalars().all())

    async def get_project(self, project_id: RowId, user_id: uuid.UUID) -> Project:
        return await get_owned_or_404(
            self.db, Project, project_id, user_id, "Project", PROJECT_RELATIONS
        )

    async def create_project(self, user_id: uuid.UUID, data: ProjectCreate) -> Project:
        _check_dates(data)
        await get_owned_or_404(self.db, Client, data.client_id, user_id, "Client")

        project = Project(user_id=user_id, **data.model_dump())
        self.db.add(project)
        await self.db.commit()
        logger.info(
            "project.created",
            project_id=str(project.id),
            client_id=str(data.client_id),
            user_id=str(user_id),
        )
        return await self.get_project(project.id, user_id)

    async def update_project(
        self, project_id: RowId, user_id: uuid.UUID, data: ProjectUpdate
    ) -> Project:
        project = await get_owned_or_404(self.db, Project, project_id, user_id, "Project")
        _check_dates(data)
        if data.client_id != project.client_id:
            await get_owned_or_404(self.db, Client, data.client_id, user_id, "Client")

        for field, value in data.model_dump().items():
            setattr(project, field, value)
        await self.db.commit()
        logger.info("project.updated", project_id=str(project_id), user_id=str(user_id))
        return await self.get_project(project_id, user_id)

    async def delete_project(self, project_id: RowId, user_id: uuid.UUID) -> None:
        """Delete a project. Its logs and reminders go with it (FK cascade)."""
        project = await get_owned_or_404(self.db, Project, project_id, user_id, "Project")
        await self.db.delete(project)
        await self.db.commit()
        logger.info("project.deleted", project_id=str(project_id), user_id=str(user_id))
