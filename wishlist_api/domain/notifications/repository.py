"""Notification repository - Database operations for the notification catalog"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import (
    Notification,
    NotificationAction,
    SettingEmailNotification,
    SettingNotification,
    SettingNotificationAction,
)


class NotificationRepository:
    """Repository for notification database operations"""

    @staticmethod
    def count_notifications(db: Session) -> int:
        return db.query(Notification).count()

    @staticmethod
    def get_notifications(
        db: Session, skip: int = 0, top: Optional[int] = None, active_only: bool = False
    ) -> list[Notification]:
        """Get notifications ordered by name, optionally paged"""
        query = db.query(Notification)
        if active_only:
            query = query.filter(Notification.status == "active")
        query = query.order_by(Notification.name.asc(), Notification.id.asc()).offset(skip)
        if top is not None:
            query = query.limit(top)
        return query.all()

    @staticmethod
    def get_notification_by_id(db: Session, notification_id: int) -> Optional[Notification]:
        return db.query(Notification).filter(Notification.id == notification_id).first()

    @staticmethod
    def get_notification_by_name(db: Session, name: str) -> Optional[Notification]:
        return db.query(Notification).filter(Notification.name == name).first()

    @staticmethod
    def get_action(db: Session, notification_id: int, action_id: int) -> Optional[NotificationAction]:
        return (
            db.query(NotificationAction)
            .filter(
                NotificationAction.id == action_id,
                NotificationAction.notification_id == notification_id,
            )
            .first()
        )

    @staticmethod
    def create_notification(db: Session, actions: list[dict], **notification_data) -> Notification:
        """Create a notification together with its actions"""
        notification = Notification(**notification_data)
        notification.actions = [NotificationAction(**action) for action in actions]
        db.add(notification)
        db.commit()
        db.refresh(notification)
        return notification

    @staticmethod
    def update_notification(
        db: Session, notification: Notification, actions: Optional[list[dict]] = None, **updates
    ) -> Notification:
        """Update provided fields; a non-None `actions` replaces the action set"""
        for key, value in updates.items():
            if value is not None and hasattr(notification, key):
                setattr(notification, key, value)

        if actions is not None:
            old_ids = [action.id for action in notification.actions]
            if old_ids:
                db.query(SettingNotificationAction).filter(
                    SettingNotificationAction.action_id.in_(old_ids)
                ).delete(synchronize_session=False)
            notification.actions = [NotificationAction(**action) for action in actions]

        db.commit()
        db.refresh(notification)
        return notification

    @staticmethod
    def delete_notification(db: Session, notification: Notification) -> None:
        """Delete a notification and every user setting that refers to it"""
        action_ids = [action.id for action in notification.actions]
        if action_ids:
            db.query(SettingNotificationAction).filter(
                SettingNotificationAction.action_id.in_(action_ids)
            ).delete(synchronize_session=False)
        setting_ids = [
            row.id
            for row in db.query(SettingNotification.id)
            .filter(SettingNotification.notification_id == notification.id)
            .all()
        ]
        if setting_ids:
            db.query(SettingNotificationAction).filter(
                SettingNotificationAction.setting_notification_id.in_(setting_ids)
            ).delete(synchronize_session=False)
            db.query(SettingNotification).filter(SettingNotification.id.in_(setting_ids)).delete(
                synchronize_session=False
            )
        db.query(SettingEmailNotification).filter(
            SettingEmailNotification.notification_id == notification.id
        ).delete(synchronize_session=False)

        db.delete(notification)
        db.commit()
