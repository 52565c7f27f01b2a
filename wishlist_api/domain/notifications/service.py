"""Notification service - Business logic for the notification catalog"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Notification
from .repository import NotificationRepository
from .schemas import NotificationActionIn, NotificationCreate, NotificationUpdate

logger = logging.getLogger(__name__)


def _action_rows(actions: list[NotificationActionIn]) -> list[dict]:
    return [
        {
            "name": action.name.strip(),
            "description": action.description,
            "enabled_by_default": action.enabledByDefault,
        }
        for action in actions
    ]


class NotificationService:
    """Service layer for notification business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = NotificationRepository()

    def get_notifications(
        self, skip: int = 0, top: Optional[int] = None
    ) -> tuple[int, list[Notification]]:
        count = self.repo.count_notifications(self.db)
        return count, self.repo.get_notifications(self.db, skip, top)

    def get_notification(self, notification_id: int) -> Notification:
        notification = self.repo.get_notification_by_id(self.db, notification_id)
        if not notification:
            raise HTTPException(status_code=404, detail="Notification not found")
        return notification

    def _check_name_free(self, name: str, notification_id: Optional[int] = None) -> None:
        existing = self.repo.get_notification_by_name(self.db, name)
        if existing and existing.id != notification_id:
            raise HTTPException(status_code=409, detail="A notification with this name already exists")

    def create_notification(self, data: NotificationCreate) -> Notification:
        name = data.name.strip()
        self._check_name_free(name)

        notification = self.repo.create_notification(
            self.db,
            _action_rows(data.actions),
            name=name,
            description=data.description,
            channel=data.channel,
            status=data.statusId,
        )
        logger.info(
            f"🆕 Notification {notification.id} '{name}' created with {len(notification.actions)} action(s)"
        )
        return notification

    def update_notification(self, notification_id: int, data: NotificationUpdate) -> Notification:
        notification = self.get_notification(notification_id)
        name = data.name.strip() if data.name else None
        if name:
            self._check_name_free(name, notification.id)

        return self.repo.update_notification(
            self.db,
            notification,
            actions=_action_rows(data.actions) if data.actions is not None else None,
            name=name,
            description=data.description,
            channel=data.channel,
            status=data.statusId,
        )

    def delete_notification(self, notification_id: int) -> dict:
        notification = self.get_notification(notification_id)
        self.repo.delete_notification(self.db, notification)
        logger.info(f"✅ Notification {notification_id} deleted")
        return {"status": True}
