from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base

# Shared lifecycle states for accounts and wishlists
STATUSES = ("active", "inactive", "disabled", "pending", "archived", "suspended", "deleted")
PRIVACY_OPTIONS = ("Private", "Public")

ROLE_ADMIN = "admin"
ROLE_USER = "user"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    full_name = Column(String(255), nullable=True)
    password_hash = Column(String(255), nullable=False)
    roles = Column(JSON, default=lambda: [ROLE_USER], nullable=False)
    status = Column(String(20), default="active", nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    tokens = relationship("Token", back_populates="user", cascade="all, delete-orphan")
    wishlists = relationship("Wishlist", back_populates="user", cascade="all, delete-orphan")
    clients = relationship("Client", back_populates="user", cascade="all, delete-orphan")
    settings = relationship(
        "WishlistAppSettings", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )

    def has_role(self, *names: str) -> bool:
        return any(name in (self.roles or []) for name in names)


class Token(Base):
    """
    Issued tokens. For access tokens `value` is the JWT id; for refresh
    tokens it is the SHA-256 of the token, which is only shown once.
    """

    __tablename__ = "tokens"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # Set for refresh tokens issued to an API client
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=True, index=True)
    login_provider = Column(String(50), default="local", nullable=False)
    name = Column(String(50), default="access_token", nullable=False)
    value = Column(String(64), unique=True, index=True, nullable=False)
    scope = Column(String(255), default="*", nullable=False)
    type = Column(String(20), default="bearer", nullable=False)
    expires_in = Column(Integer, nullable=False)  # seconds
    expires_at = Column(DateTime, nullable=False)
    revoked = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="tokens")
    client = relationship("Client", back_populates="tokens")


class Wishlist(Base):
    __tablename__ = "wishlists"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    preferences = Column(JSON, default=dict, nullable=False)
    status = Column(String(20), default="active", nullable=False)
    privacy = Column(String(20), default="Public", nullable=False)
    # Bumped whenever the item order changes; stale writers fail the UPDATE
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __mapper_args__ = {"version_id_col": version}

    user = relationship("User", back_populates="wishlists")
    items = relationship(
        "WishlistItem",
        back_populates="wishlist",
        cascade="all, delete-orphan",
        order_by="WishlistItem.sort_order",
    )


class WishlistItem(Base):
    __tablename__ = "wishlist_items"

    id = Column(Integer, primary_key=True, index=True)
    wishlist_id = Column(
        Integer, ForeignKey("wishlists.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    url = Column(String(1000), nullable=True)
    price = Column(Float, nullable=True)
    quantity = Column(Integer, default=1, nullable=False)
    image_url = Column(String(1000), nullable=True)
    purchased = Column(Boolean, default=False, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    wishlist = relationship("Wishlist", back_populates="items")

    __table_args__ = (Index("ix_wishlist_items_wishlist_sort", "wishlist_id", "sort_order"),)


class Client(Base):
    """API client allowed to hold refresh tokens on behalf of its owner"""

    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    client_key = Column(String(64), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)
    redirect_uri = Column(String(1000), nullable=True)
    status = Column(String(20), default="active", nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="clients")
    tokens = relationship("Token", back_populates="client", cascade="all, delete-orphan")


class Notification(Base):
    """Notification catalog entry (e.g. "item purchased") with its user actions"""

    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    channel = Column(String(20), default="push", nullable=False)
    status = Column(String(20), default="active", nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    actions = relationship(
        "NotificationAction",
        back_populates="notification",
        cascade="all, delete-orphan",
        order_by="NotificationAction.id",
    )


class NotificationAction(Base):
    __tablename__ = "notification_actions"

    id = Column(Integer, primary_key=True, index=True)
    notification_id = Column(
        Integer, ForeignKey("notifications.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    enabled_by_default = Column(Boolean, default=True, nullable=False)

    notification = relationship("Notification", back_populates="actions")


class WishlistAppSettings(Base):
    """Per-user wishlist app preferences and notification opt-ins"""

    __tablename__ = "wishlist_app_settings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False, index=True
    )
    currency = Column(String(3), default="USD", nullable=False)
    language = Column(String(10), default="en", nullable=False)
    default_privacy = Column(String(20), default="Public", nullable=False)
    push_enabled = Column(Boolean, default=True, nullable=False)
    email_enabled = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="settings")
    notifications = relationship(
        "SettingNotification",
        back_populates="settings",
        cascade="all, delete-orphan",
        order_by="SettingNotification.notification_id",
    )
    email_notifications = relationship(
        "SettingEmailNotification",
        back_populates="settings",
        cascade="all, delete-orphan",
        order_by="SettingEmailNotification.notification_id",
    )


class SettingNotification(Base):
    """Push opt-in for one catalog notification"""

    __tablename__ = "setting_notifications"

    id = Column(Integer, primary_key=True, index=True)
    settings_id = Column(
        Integer, ForeignKey("wishlist_app_settings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    notification_id = Column(
        Integer, ForeignKey("notifications.id", ondelete="CASCADE"), nullable=False
    )
    enabled = Column(Boolean, default=True, nullable=False)

    settings = relationship("WishlistAppSettings", back_populates="notifications")
    notification = relationship("Notification")
    actions = relationship(
        "SettingNotificationAction",
        back_populates="setting_notification",
        cascade="all, delete-orphan",
        order_by="SettingNotificationAction.action_id",
    )

    __table_args__ = (UniqueConstraint("settings_id", "notification_id"),)


class SettingNotificationAction(Base):
    __tablename__ = "setting_notification_actions"

    id = Column(Integer, primary_key=True, index=True)
    setting_notification_id = Column(
        Integer, ForeignKey("setting_notifications.id", ondelete="CASCADE"), nullable=False, index=True
    )
    action_id = Column(
        Integer, ForeignKey("notification_actions.id", ondelete="CASCADE"), nullable=False
    )
    enabled = Column(Boolean, default=True, nullable=False)

    setting_notification = relationship("SettingNotification", back_populates="actions")
    action = relationship("NotificationAction")

    __table_args__ = (UniqueConstraint("setting_notification_id", "action_id"),)


class SettingEmailNotification(Base):
    """Email opt-in for one catalog notification"""

    __tablename__ = "setting_email_notifications"

    id = Column(Integer, primary_key=True, index=True)
    settings_id = Column(
        Integer, ForeignKey("wishlist_app_settings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    notification_id = Column(
        Integer, ForeignKey("notifications.id", ondelete="CASCADE"), nullable=False
    )
    enabled = Column(Boolean, default=True, nullable=False)

    settings = relationship("WishlistAppSettings", back_populates="email_notifications")
    notification = relationship("Notification")

    __table_args__ = (UniqueConstraint("settings_id", "notification_id"),)
