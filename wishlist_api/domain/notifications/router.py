"""Notification router - FastAPI endpoints for the notification catalog"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import require_roles
from ...database import get_db
from ...models import ROLE_ADMIN, ROLE_USER, Notification, User
from ...shared.validators import parse_page_params
from .schemas import (
    NotificationActionResponse,
    NotificationCreate,
    NotificationDetailsPage,
    NotificationDetailsResponse,
    NotificationPage,
    NotificationResponse,
    NotificationUpdate,
)
from .service import NotificationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notification", tags=["Notifications"])

admin_only = require_roles(ROLE_ADMIN)
admin_or_user = require_roles(ROLE_ADMIN, ROLE_USER)


def get_notification_service(db: Session = Depends(get_db)) -> NotificationService:
    """Dependency injection for NotificationService"""
    return NotificationService(db)


def notification_response(notification: Notification) -> NotificationResponse:
    return NotificationResponse(
        id=notification.id,
        name=notification.name,
        description=notification.description,
        channel=notification.channel,
        statusId=notification.status,
        dateCreated=notification.created_at,
        dateModified=notification.updated_at,
    )


def notification_details(notification: Notification) -> NotificationDetailsResponse:
    return NotificationDetailsResponse(
        **notification_response(notification).model_dump(),
        actions=[
            NotificationActionResponse(
                id=action.id,
                name=action.name,
                description=action.description,
                enabledByDefault=action.enabled_by_default,
            )
            for action in notification.actions
        ],
    )


@router.get("", response_model=NotificationPage)
async def get_notifications(
    _admin: User = Depends(admin_only),
    service: NotificationService = Depends(get_notification_service),
):
    """Get the notification catalog"""
    count, notifications = service.get_notifications()
    return NotificationPage(count=count, data=[notification_response(n) for n in notifications])


@router.get("/details", response_model=NotificationDetailsPage)
async def get_notifications_details(
    _admin: User = Depends(admin_only),
    service: NotificationService = Depends(get_notification_service),
):
    """Get the notification catalog including actions"""
    count, notifications = service.get_notifications()
    return NotificationDetailsPage(count=count, data=[notification_details(n) for n in notifications])


@router.get("/page/{skip}/{top}", response_model=NotificationPage)
async def get_notifications_paged(
    skip: str,
    top: str,
    _admin: User = Depends(admin_only),
    service: NotificationService = Depends(get_notification_service),
):
    """Get notifications paginated: /api/notification/page/{offset}/{page size}"""
    offset, limit = parse_page_params(skip, top)
    count, notifications = service.get_notifications(offset, limit)
    return NotificationPage(count=count, data=[notification_response(n) for n in notifications])


@router.get("/{notification_id}", response_model=NotificationResponse)
async def get_notification(
    notification_id: int,
    _user: User = Depends(admin_or_user),
    service: NotificationService = Depends(get_notification_service),
):
    """Get a specific notification"""
    return notification_response(service.get_notification(notification_id))


@router.get("/{notification_id}/details", response_model=NotificationDetailsResponse)
async def get_notification_details(
    notification_id: int,
    _user: User = Depends(admin_or_user),
    service: NotificationService = Depends(get_notification_service),
):
    """Get a specific notification including actions"""
    return notification_details(service.get_notification(notification_id))


@router.post("", response_model=NotificationDetailsResponse)
async def create_notification(
    data: NotificationCreate,
    _admin: User = Depends(admin_only),
    service: NotificationService = Depends(get_notification_service),
):
    """Add a notification to the catalog"""
    return notification_details(service.create_notification(data))


@router.put("/{notification_id}", response_model=NotificationDetailsResponse)
async def update_notification(
    notification_id: int,
    data: NotificationUpdate,
    _admin: User = Depends(admin_only),
    service: NotificationService = Depends(get_notification_service),
):
    """Update a notification"""
    return notification_details(service.update_notification(notification_id, data))


@router.delete("/{notification_id}")
async def delete_notification(
    notification_id: int,
    _admin: User = Depends(admin_only),
    service: NotificationService = Depends(get_notification_service),
):
    """Delete a notification and the user settings that refer to it"""
    return service.delete_notification(notification_id)
