"""Settings router - FastAPI endpoints for wishlist app settings"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import require_roles
from ...database import get_db
from ...models import ROLE_ADMIN, ROLE_USER, User, WishlistAppSettings
from ...shared.validators import parse_page_params
from .schemas import SettingsCreate, SettingsPage, SettingsResponse, SettingsUpdate, ToggleRequest
from .service import SettingsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/wishlist/settings", tags=["Settings"])

admin_only = require_roles(ROLE_ADMIN)
admin_or_user = require_roles(ROLE_ADMIN, ROLE_USER)


def get_settings_service(db: Session = Depends(get_db)) -> SettingsService:
    """Dependency injection for SettingsService"""
    return SettingsService(db)


def settings_response(settings: WishlistAppSettings, service: SettingsService) -> SettingsResponse:
    return SettingsResponse(
        id=settings.id,
        userId=settings.user_id,
        currency=settings.currency,
        language=settings.language,
        defaultPrivacy=settings.default_privacy,
        pushEnabled=settings.push_enabled,
        emailEnabled=settings.email_enabled,
        dateCreated=settings.created_at,
        dateModified=settings.updated_at,
        **service.describe(settings),
    )


@router.get("", response_model=SettingsPage)
async def get_all_settings(
    _admin: User = Depends(admin_only),
    service: SettingsService = Depends(get_settings_service),
):
    """Get every account's settings"""
    count, rows = service.get_all_settings()
    return SettingsPage(count=count, data=[settings_response(s, service) for s in rows])


@router.get("/page/{skip}/{top}", response_model=SettingsPage)
async def get_settings_paged(
    skip: str,
    top: str,
    _admin: User = Depends(admin_only),
    service: SettingsService = Depends(get_settings_service),
):
    """Get settings paginated: /api/wishlist/settings/page/{offset}/{page size}"""
    offset, limit = parse_page_params(skip, top)
    count, rows = service.get_all_settings(offset, limit)
    return SettingsPage(count=count, data=[settings_response(s, service) for s in rows])


@router.get("/mine", response_model=SettingsResponse)
async def get_my_settings(
    current_user: User = Depends(admin_or_user),
    service: SettingsService = Depends(get_settings_service),
):
    """Get the caller's settings"""
    return settings_response(service.get_my_settings(current_user), service)


@router.get("/{settings_id}", response_model=SettingsResponse)
async def get_settings(
    settings_id: int,
    current_user: User = Depends(admin_or_user),
    service: SettingsService = Depends(get_settings_service),
):
    """Get specific settings"""
    return settings_response(service.get_settings(settings_id, current_user), service)


@router.post("", response_model=SettingsResponse)
async def create_settings(
    data: SettingsCreate,
    _admin: User = Depends(admin_only),
    service: SettingsService = Depends(get_settings_service),
):
    """Create settings for an account"""
    return settings_response(service.create_settings(data), service)


@router.put("/{settings_id}", response_model=SettingsResponse)
async def update_settings(
    settings_id: int,
    data: SettingsUpdate,
    current_user: User = Depends(admin_or_user),
    service: SettingsService = Depends(get_settings_service),
):
    """Update settings"""
    return settings_response(service.update_settings(settings_id, data, current_user), service)


# ============================================================================
# NOTIFICATION OPT-INS
# ============================================================================


@router.put("/{settings_id}/notification/{notification_id}", response_model=SettingsResponse)
async def set_notification(
    settings_id: int,
    notification_id: int,
    data: ToggleRequest,
    current_user: User = Depends(admin_or_user),
    service: SettingsService = Depends(get_settings_service),
):
    """Turn a push notification on or off"""
    settings = service.set_notification(settings_id, notification_id, data.enabled, current_user)
    return settings_response(settings, service)


@router.put(
    "/{settings_id}/notification/{notification_id}/action/{action_id}",
    response_model=SettingsResponse,
)
async def set_notification_action(
    settings_id: int,
    notification_id: int,
    action_id: int,
    data: ToggleRequest,
    current_user: User = Depends(admin_or_user),
    service: SettingsService = Depends(get_settings_service),
):
    """Turn a notification action on or off"""
    settings = service.set_notification_action(
        settings_id, notification_id, action_id, data.enabled, current_user
    )
    return settings_response(settings, service)


@router.put(
    "/{settings_id}/emailNotification/{notification_id}", response_model=SettingsResponse
)
async def set_email_notification(
    settings_id: int,
    notification_id: int,
    data: ToggleRequest,
    current_user: User = Depends(admin_or_user),
    service: SettingsService = Depends(get_settings_service),
):
    """Turn an email notification on or off"""
    settings = service.set_email_notification(settings_id, notification_id, data.enabled, current_user)
    return settings_response(settings, service)


@router.delete("/{settings_id}")
async def delete_settings(
    settings_id: int,
    current_user: User = Depends(admin_only),
    service: SettingsService = Depends(get_settings_service),
):
    """Delete settings"""
    return service.delete_settings(settings_id, current_user)
