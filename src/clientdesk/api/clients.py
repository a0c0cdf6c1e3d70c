"""Client API routes.

Routes translate HTTP to service calls; the caller's identity always comes
from the session (``get_current_user``), never from the request body.
"""


from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from clientdesk.api.params import list_filters
from clientdesk.auth.dependencies import CurrentIdentity, get_current_user
from clientdesk.db.engine import get_db
from clientdesk.schemas.client import ClientCreate, ClientDetail, ClientUpdate
from clientdesk.schemas.common import MessageResponse
from clientdesk.services.client_service import ClientService
from clientdesk.services.listing import ListFilters

router = APIRouter(prefix="/clients")


def _svc(db: AsyncSession = Depends(get_db)) -> ClientService:
    return ClientService(db)


@router.get("", response_model=list[ClientDetail])
async def list_clients(
    filters: ListFilters = Depends(list_filters),
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ClientService = Depends(_svc),
):
    """List the caller's clients with their projects, reminders and logs."""
    return await svc.list_clients(identity.user_id, filters)


@router.post("", response_model=ClientDetail, status_code=201)
async def create_client(
    body: ClientCreate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ClientService = Depends(_svc),
):
    return await svc.create_client(identity.user_id, body)


@router.get("/{client_id}", response_model=ClientDetail)
async def get_client(
    client_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ClientService = Depends(_svc),
):
    return await svc.get_client(client_id, identity.user_id)


@router.put("/{client_id}", response_model=ClientDetail)
async def update_client(
    client_id: str,
    body: ClientUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ClientService = Depends(_svc),
):
    return await svc.update_client(client_id, identity.user_id, body)


@router.delete("/{client_id}", response_model=MessageResponse)
async def delete_client(
    client_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ClientService = Depends(_svc),
):
    """Delete a client together with its projects, logs and reminders."""
    await svc.delete_client(client_id, identity.user_id)
    return {"message": "Client deleted successfully"}
