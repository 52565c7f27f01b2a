"""Settings repository - Database operations for wishlist app settings"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import (
    SettingEmailNotification,
    SettingNotification,
    SettingNotificationAction,
    WishlistAppSettings,
)


class SettingsRepository:
    """Repository for settings database operations"""

    @staticmethod
    def count_settings(db: Session) -> int:
        return db.query(WishlistAppSettings).count()

    @staticmethod
    def get_all_settings(
        db: Session, skip: int = 0, top: Optional[int] = None
    ) -> list[WishlistAppSettings]:
        query = db.query(WishlistAppSettings).order_by(WishlistAppSettings.id.asc()).offset(skip)
        if top is not None:
            query = query.limit(top)
        return query.all()

    @staticmethod
    def get_settings_by_id(db: Session, settings_id: int) -> Optional[WishlistAppSettings]:
        return db.query(WishlistAppSettings).filter(WishlistAppSettings.id == settings_id).first()

    @staticmethod
    def get_settings_by_user(db: Session, user_id: int) -> Optional[WishlistAppSettings]:
        return db.query(WishlistAppSettings).filter(WishlistAppSettings.user_id == user_id).first()

    @staticmethod
    def create_settings(db: Session, user_id: int, **settings_data) -> WishlistAppSettings:
        settings = WishlistAppSettings(user_id=user_id, **settings_data)
        db.add(settings)
        db.commit()
        db.refresh(settings)
        return settings

    @staticmethod
    def update_settings(db: Session, settings: WishlistAppSettings, **updates) -> WishlistAppSettings:
        """Update settings with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(settings, key):
                setattr(settings, key, value)

        db.commit()
        db.refresh(settings)
        return settings

    @staticmethod
    def delete_settings(db: Session, settings: WishlistAppSettings) -> None:
        db.delete(settings)
        db.commit()

    # Notification opt-ins
    @staticmethod
    def get_notification_setting(
        db: Session, settings_id: int, notification_id: int
    ) -> Optional[SettingNotification]:
        return (
            db.query(SettingNotification)
            .filter(
                SettingNotification.settings_id == settings_id,
                SettingNotification.notification_id == notification_id,
            )
            .first()
        )

    @staticmethod
    def get_or_add_notification_setting(
        db: Session, settings_id: int, notification_id: int, enabled: bool = True
    ) -> SettingNotification:
        """Return the push opt-in row, adding it (not committed) when missing"""
        row = SettingsRepository.get_notification_setting(db, settings_id, notification_id)
        if not row:
            row = SettingNotification(
                settings_id=settings_id, notification_id=notification_id, enabled=enabled
            )
            db.add(row)
            db.flush()
        return row

    @staticmethod
    def set_notification(
        db: Session, settings_id: int, notification_id: int, enabled: bool
    ) -> SettingNotification:
        row = SettingsRepository.get_or_add_notification_setting(
            db, settings_id, notification_id, enabled
        )
        row.enabled = enabled
        db.commit()
        return row

    @staticmethod
    def set_notification_action(
        db: Session, settings_id: int, notification_id: int, action_id: int, enabled: bool
    ) -> SettingNotificationAction:
        parent = SettingsRepository.get_or_add_notification_setting(db, settings_id, notification_id)
        row = (
            db.query(SettingNotificationAction)
            .filter(
                SettingNotificationAction.setting_notification_id == parent.id,
                SettingNotificationAction.action_id == action_id,
            )
            .first()
        )
        if not row:
            row = SettingNotificationAction(setting_notification_id=parent.id, action_id=action_id)
            db.add(row)
        row.enabled = enabled
        db.commit()
        return row

    @staticmethod
    def set_email_notification(
        db: Session, settings_id: int, notification_id: int, enabled: bool
    ) -> SettingEmailNotification:
        row = (
            db.query(SettingEmailNotification)
            .filter(
                SettingEmailNotification.settings_id == settings_id,
                SettingEmailNotification.notification_id == notification_id,
            )
            .first()
        )
        if not row:
            row = SettingEmailNotification(settings_id=settings_id, notification_id=notification_id)
            db.add(row)
        row.enabled = enabled
        db.commit()
        return row
