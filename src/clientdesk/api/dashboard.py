"""Dashboard API route."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from clientdesk.auth.dependencies import CurrentIdentity, get_current_user
from clientdesk.db.engine import get_session_factory
from clientdesk.schemas.dashboard import DashboardRead
from clientdesk.services.dashboard_service import DashboardService
from clientdesk.services.listing import parse_date_param

router = APIRouter()


@router.get("/dashboard", response_model=DashboardRead)
async def get_dashboard(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    identity: CurrentIdentity = Depends(get_current_user),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
):
    """Aggregate statistics over the caller's data, optionally within a date range."""
    svc = DashboardService(session_factory)
    return await svc.build(
        identity.user_id,
        start=parse_date_param(start_date, "startDate"),
        end=parse_date_param(end_date, "endDate", end_of_day=True),
    )
