"""Settings service - Business logic for wishlist app settings"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import ROLE_ADMIN, Notification, User, WishlistAppSettings
from ..accounts.repository import AccountRepository
from ..notifications.repository import NotificationRepository
from .repository import SettingsRepository
from .schemas import SettingsCreate, SettingsUpdate

logger = logging.getLogger(__name__)


class SettingsService:
    """Service layer for settings business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SettingsRepository()
        self.notifications = NotificationRepository()

    def get_all_settings(
        self, skip: int = 0, top: Optional[int] = None
    ) -> tuple[int, list[WishlistAppSettings]]:
        count = self.repo.count_settings(self.db)
        return count, self.repo.get_all_settings(self.db, skip, top)

    def get_settings(self, settings_id: int, user: User) -> WishlistAppSettings:
        """Get settings the user owns (admins may read any)"""
        settings = self.repo.get_settings_by_id(self.db, settings_id)
        if not settings:
            raise HTTPException(status_code=404, detail="Settings not found")
        if settings.user_id != user.id and not user.has_role(ROLE_ADMIN):
            logger.warning(f"🚫 Access denied: user {user.id} -> settings {settings_id}")
            raise HTTPException(status_code=403, detail="You do not have access to these settings")
        return settings

    def get_my_settings(self, user: User) -> WishlistAppSettings:
        """Get the caller's settings, creating the defaults on first use"""
        settings = self.repo.get_settings_by_user(self.db, user.id)
        if not settings:
            settings = self.repo.create_settings(self.db, user.id)
            logger.info(f"🆕 Default settings created for user {user.id}")
        return settings

    def create_settings(self, data: SettingsCreate) -> WishlistAppSettings:
        if not AccountRepository.get_user_by_id(self.db, data.userId):
            raise HTTPException(status_code=404, detail="Account not found")
        if self.repo.get_settings_by_user(self.db, data.userId):
            raise HTTPException(status_code=409, detail="Settings already exist for this account")

        return self.repo.create_settings(
            self.db,
            data.userId,
            currency=data.currency,
            language=data.language,
            default_privacy=data.defaultPrivacy,
            push_enabled=data.pushEnabled,
            email_enabled=data.emailEnabled,
        )

    def update_settings(self, settings_id: int, data: SettingsUpdate, user: User) -> WishlistAppSettings:
        settings = self.get_settings(settings_id, user)
        updates = {
            "currency": data.currency,
            "language": data.language,
            "default_privacy": data.defaultPrivacy,
            "push_enabled": data.pushEnabled,
            "email_enabled": data.emailEnabled,
        }
        return self.repo.update_settings(self.db, settings, **updates)

    def delete_settings(self, settings_id: int, user: User) -> dict:
        settings = self.get_settings(settings_id, user)
        self.repo.delete_settings(self.db, settings)
        logger.info(f"✅ Settings {settings_id} deleted")
        return {"status": True}

    # ------------------------------------------------------------------
    # Notification opt-ins
    # ------------------------------------------------------------------

    def _get_notification(self, notification_id: int) -> Notification:
        notification = self.notifications.get_notification_by_id(self.db, notification_id)
        if not notification:
            raise HTTPException(status_code=404, detail="Notification not found")
        return notification

    def set_notification(
        self, settings_id: int, notification_id: int, enabled: bool, user: User
    ) -> WishlistAppSettings:
        settings = self.get_settings(settings_id, user)
        self._get_notification(notification_id)
        self.repo.set_notification(self.db, settings.id, notification_id, enabled)
        logger.info(f"🔔 Settings {settings_id}: notification {notification_id} enabled={enabled}")
        return settings

    def set_notification_action(
        self, settings_id: int, notification_id: int, action_id: int, enabled: bool, user: User
    ) -> WishlistAppSettings:
        settings = self.get_settings(settings_id, user)
        self._get_notification(notification_id)
        if not self.notifications.get_action(self.db, notification_id, action_id):
            raise HTTPException(status_code=404, detail="Notification action not found")
        self.repo.set_notification_action(self.db, settings.id, notification_id, action_id, enabled)
        logger.info(
            f"🔔 Settings {settings_id}: notification {notification_id} action {action_id} enabled={enabled}"
        )
        return settings

    def set_email_notification(
        self, settings_id: int, notification_id: int, enabled: bool, user: User
    ) -> WishlistAppSettings:
        settings = self.get_settings(settings_id, user)
        self._get_notification(notification_id)
        self.repo.set_email_notification(self.db, settings.id, notification_id, enabled)
        logger.info(f"📧 Settings {settings_id}: email notification {notification_id} enabled={enabled}")
        return settings

    def describe(self, settings: WishlistAppSettings) -> dict:
        """
        Merge the active catalog with the stored opt-ins.

        Catalog entries without a stored row report their defaults: enabled
        for the notification, `enabled_by_default` for each action.
        """
        push_rows = {row.notification_id: row for row in settings.notifications}
        email_rows = {row.notification_id: row.enabled for row in settings.email_notifications}

        notifications = []
        email_notifications = []
        for notification in self.notifications.get_notifications(self.db, active_only=True):
            push_row = push_rows.get(notification.id)
            action_rows = {a.action_id: a.enabled for a in push_row.actions} if push_row else {}
            notifications.append(
                {
                    "notificationId": notification.id,
                    "name": notification.name,
                    "enabled": push_row.enabled if push_row else True,
                    "actions": [
                        {
                            "actionId": action.id,
                            "name": action.name,
                            "enabled": action_rows.get(action.id, action.enabled_by_default),
                        }
                        for action in notification.actions
                    ],
                }
            )
            email_notifications.append(
                {
                    "notificationId": notification.id,
                    "name": notification.name,
                    "enabled": email_rows.get(notification.id, True),
                }
            )
        return {"notifications": notifications, "emailNotifications": email_notifications}
