"""API route aggregation.

All routers registered here get mounted in main.py under /api.

Auth is enforced twice over: the request gate middleware rejects
unauthenticated requests before routing, and protected routers also carry
``get_current_user`` at the include_router level, so a router can't be
exposed by mistake if the gate's allowlist changes. Health and auth
routers are open.
"""

from fastapi import APIRouter, Depends

from clientdesk.api.auth import router as auth_router
from clientdesk.api.clients import router as clients_router
from clientdesk.api.dashboard import router as dashboard_router
from clientdesk.api.health import router as health_router
from clientdesk.api.interaction_logs import router as interaction_logs_router
from clientdesk.api.projects import router as projects_router
from clientdesk.api.reminders import router as reminders_router
from clientdesk.auth.dependencies import get_current_user

# All protected routers require authentication
_auth = [Depends(get_current_user)]

api_router = APIRouter(prefix="/api")

# Open routes, no auth required
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])

# Protected routes, require a valid session token
api_router.include_router(clients_router, tags=["clients"], dependencies=_auth)
api_router.include_router(projects_router, tags=["projects"], dependencies=_auth)
api_router.include_router(interaction_logs_router, tags=["interaction-logs"], dependencies=_auth)
api_router.include_router(reminders_router, tags=["reminders"], dependencies=_auth)
api_router.include_router(dashboard_router, tags=["dashboard"], dependencies=_auth)
