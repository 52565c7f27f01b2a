"""Account router - FastAPI endpoints for accounts and sign-in"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_token, get_current_user, require_roles
from ...database import get_db
from ...models import ROLE_ADMIN, Token, User
from ...shared.validators import parse_page_params
from .schemas import (
    AccountCreate,
    AccountPage,
    AccountResponse,
    AccountUpdate,
    LoginRequest,
    RefreshRequest,
    TokenResponse,
)
from .service import AccountService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/account", tags=["Accounts"])
auth_router = APIRouter(prefix="/auth", tags=["Auth"])

admin_only = require_roles(ROLE_ADMIN)


def get_account_service(db: Session = Depends(get_db)) -> AccountService:
    """Dependency injection for AccountService"""
    return AccountService(db)


def account_response(user: User) -> AccountResponse:
    return AccountResponse(
        id=user.id,
        email=user.email,
        fullName=user.full_name,
        roles=user.roles or [],
        status=user.status,
        dateCreated=user.created_at,
        dateModified=user.updated_at,
    )


# ============================================================================
# SIGN-IN
# ============================================================================


@auth_router.post("/token", response_model=TokenResponse)
async def login(
    data: LoginRequest,
    service: AccountService = Depends(get_account_service),
):
    """Exchange email and password for a bearer token"""
    return service.login(data)


@auth_router.post("/refresh", response_model=TokenResponse)
async def refresh(
    data: RefreshRequest,
    service: AccountService = Depends(get_account_service),
):
    """Exchange a refresh token for a new token pair"""
    return service.refresh(data)


@auth_router.post("/logout")
async def logout(
    token: Token = Depends(get_current_token),
    service: AccountService = Depends(get_account_service),
):
    """Revoke the bearer token used for this request"""
    return service.logout(token)


@auth_router.get("/me", response_model=AccountResponse)
async def me(current_user: User = Depends(get_current_user)):
    """Get the signed-in account"""
    return account_response(current_user)


# ============================================================================
# ACCOUNT ADMINISTRATION
# ============================================================================


@router.get("", response_model=AccountPage)
async def get_accounts(
    _admin: User = Depends(admin_only),
    service: AccountService = Depends(get_account_service),
):
    """Get all accounts"""
    count, users = service.get_accounts()
    return AccountPage(count=count, data=[account_response(u) for u in users])


@router.get("/page/{skip}/{top}", response_model=AccountPage)
async def get_accounts_paged(
    skip: str,
    top: str,
    _admin: User = Depends(admin_only),
    service: AccountService = Depends(get_account_service),
):
    """Get accounts paginated: /api/account/page/{offset}/{page size}"""
    offset, limit = parse_page_params(skip, top)
    count, users = service.get_accounts(offset, limit)
    return AccountPage(count=count, data=[account_response(u) for u in users])


@router.get("/role/{role}", response_model=AccountPage)
async def get_accounts_by_role(
    role: str,
    _admin: User = Depends(admin_only),
    service: AccountService = Depends(get_account_service),
):
    """Get accounts holding a role"""
    users = service.get_accounts_by_role(role)
    return AccountPage(count=len(users), data=[account_response(u) for u in users])


@router.get("/{user_id}", response_model=AccountResponse)
async def get_account(
    user_id: int,
    _admin: User = Depends(admin_only),
    service: AccountService = Depends(get_account_service),
):
    """Get a specific account"""
    return account_response(service.get_account(user_id))


@router.post("", response_model=AccountResponse)
async def create_account(
    data: AccountCreate,
    _admin: User = Depends(admin_only),
    service: AccountService = Depends(get_account_service),
):
    """Create a new account"""
    return account_response(service.create_account(data))


@router.put("/{user_id}", response_model=AccountResponse)
async def update_account(
    user_id: int,
    data: AccountUpdate,
    _admin: User = Depends(admin_only),
    service: AccountService = Depends(get_account_service),
):
    """Update an account"""
    return account_response(service.update_account(user_id, data))


@router.delete("/{user_id}")
async def delete_account(
    user_id: int,
    _admin: User = Depends(admin_only),
    service: AccountService = Depends(get_account_service),
):
    """Delete an account"""
    return service.delete_account(user_id)
