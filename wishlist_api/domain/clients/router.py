"""Client router - FastAPI endpoints for API clients"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import require_roles
from ...database import get_db
from ...models import ROLE_ADMIN, Client, User
from ...shared.validators import parse_page_params
from ..accounts.schemas import TokenResponse
from .schemas import ClientCreate, ClientPage, ClientResponse, ClientUpdate
from .service import ClientService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/client", tags=["Clients"])

admin_only = require_roles(ROLE_ADMIN)


def get_client_service(db: Session = Depends(get_db)) -> ClientService:
    """Dependency injection for ClientService"""
    return ClientService(db)


def client_response(client: Client, service: ClientService) -> ClientResponse:
    return ClientResponse(
        id=client.id,
        name=client.name,
        clientKey=client.client_key,
        userId=client.user_id,
        description=client.description,
        redirectUri=client.redirect_uri,
        statusId=client.status,
        activeRefreshTokens=service.active_refresh_tokens(client),
        dateCreated=client.created_at,
        dateModified=client.updated_at,
    )


@router.get("", response_model=ClientPage)
async def get_clients(
    _admin: User = Depends(admin_only),
    service: ClientService = Depends(get_client_service),
):
    """Get all clients"""
    count, clients = service.get_clients()
    return ClientPage(count=count, data=[client_response(c, service) for c in clients])


@router.get("/page/{skip}/{top}", response_model=ClientPage)
async def get_clients_paged(
    skip: str,
    top: str,
    _admin: User = Depends(admin_only),
    service: ClientService = Depends(get_client_service),
):
    """Get clients paginated: /api/client/page/{offset}/{page size}"""
    offset, limit = parse_page_params(skip, top)
    count, clients = service.get_clients(offset, limit)
    return ClientPage(count=count, data=[client_response(c, service) for c in clients])


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: int,
    _admin: User = Depends(admin_only),
    service: ClientService = Depends(get_client_service),
):
    """Get a specific client"""
    return client_response(service.get_client(client_id), service)


@router.post("", response_model=ClientResponse)
async def create_client(
    data: ClientCreate,
    current_user: User = Depends(admin_only),
    service: ClientService = Depends(get_client_service),
):
    """Register a new client"""
    return client_response(service.create_client(data, current_user), service)


@router.post("/{client_id}/rt", response_model=TokenResponse)
async def rotate_refresh_token(
    client_id: int,
    _admin: User = Depends(admin_only),
    service: ClientService = Depends(get_client_service),
):
    """Revoke the client's refresh tokens and issue a new token pair"""
    return service.rotate_refresh_token(client_id)


@router.put("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: int,
    data: ClientUpdate,
    _admin: User = Depends(admin_only),
    service: ClientService = Depends(get_client_service),
):
    """Update a client"""
    return client_response(service.update_client(client_id, data), service)


@router.delete("/{client_id}")
async def delete_client(
    client_id: int,
    _admin: User = Depends(admin_only),
    service: ClientService = Depends(get_client_service),
):
    """Delete a client and revoke everything it holds"""
    return service.delete_client(client_id)
