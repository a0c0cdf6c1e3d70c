"""Interaction log API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from clientdesk.api.params import list_filters
from clientdesk.auth.dependencies import CurrentIdentity, get_current_user
from clientdesk.db.engine import get_db
from clientdesk.schemas.common import MessageResponse
from clientdesk.schemas.interaction_log import (
    InteractionLogCreate,
    InteractionLogDetail,
    InteractionLogUpdate,
)
from clientdesk.services.interaction_log_service import InteractionLogService
from clientdesk.services.listing import ListFilters

router = APIRouter(prefix="/interaction-logs")


def _svc(db: AsyncSession = Depends(get_db)) -> InteractionLogService:
    return InteractionLogService(db)


@router.get("", response_model=list[InteractionLogDetail])
async def list_logs(
    filters: ListFilters = Depends(list_filters),
    identity: CurrentIdentity = Depends(get_current_user),
    svc: InteractionLogService = Depends(_svc),
):
    return await svc.list_logs(identity.user_id, filters)


@router.post("", response_model=InteractionLogDetail, status_code=201)
async def create_log(
    body: InteractionLogCreate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: InteractionLogService = Depends(_svc),
):
    """Record an interaction. Needs a clientId, a projectId, or both."""
    return await svc.create_log(identity.user_id, body)


@router.get("/{log_id}", response_model=InteractionLogDetail)
async def get_log(
    log_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: InteractionLogService = Depends(_svc),
):
    return await svc.get_log(log_id, identity.user_id)


@router.put("/{log_id}", response_model=InteractionLogDetail)
async def update_log(
    log_id: str,
    body: InteractionLogUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: InteractionLogService = Depends(_svc),
):
    return await svc.update_log(log_id, identity.user_id, body)


@router.delete("/{log_id}", response_model=MessageResponse)
async def delete_log(
    log_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: InteractionLogService = Depends(_svc),
):
    await svc.delete_log(log_id, identity.user_id)
    return {"message": "Interaction log deleted successfully"}
