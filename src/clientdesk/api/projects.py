"""Project API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from clientdesk.api.params import list_filters
from clientdesk.auth.dependencies import CurrentIdentity, get_current_user
from clientdesk.db.engine import get_db
from clientdesk.schemas.common import MessageResponse
from clientdesk.schemas.project import ProjectCreate, ProjectDetail, ProjectUpdate
from clientdesk.services.listing import ListFilters
from clientdesk.services.project_service import ProjectService

router = APIRouter(prefix="/projects")


def _svc(db: AsyncSession = Depends(get_db)) -> ProjectService:
    return ProjectService(db)


@router.get("", response_model=list[ProjectDetail])
async def list_projects(
    filters: ListFilters = Depends(list_filters),
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ProjectService = Depends(_svc),
):
    """List the caller's projects. The date range applies to the deadline
    unless ``dateField`` says otherwise."""
    return await svc.list_projects(identity.user_id, filters)


@router.post("", response_model=ProjectDetail, status_code=201)
async def create_project(
    body: ProjectCreate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ProjectService = Depends(_svc),
):
    """Create a project for one of the caller's clients (404 if the client isn't theirs)."""
    return await svc.create_project(identity.user_id, body)


@router.get("/{project_id}", response_model=ProjectDetail)
async def get_project(
    project_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ProjectService = Depends(_svc),
):
    return await svc.get_project(project_id, identity.user_id)


@router.put("/{project_id}", response_model=ProjectDetail)
async def update_project(
    project_id: str,
    body: ProjectUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ProjectService = Depends(_svc),
):
    return await svc.update_project(project_id, identity.user_id, body)


@router.delete("/{project_id}", response_model=MessageResponse)
async def delete_project(
    project_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ProjectService = Depends(_svc),
):
    await svc.delete_project(project_id, identity.user_id)
    return {"message": "Project deleted successfully"}
