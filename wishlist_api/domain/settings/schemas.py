"""Settings domain schemas - Pydantic models for validation"""

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...models import PRIVACY_OPTIONS

CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")


def _check_currency(v):
    if v is None:
        return v
    v = v.strip().upper()
    if not CURRENCY_PATTERN.match(v):
        raise ValueError("currency must be a three letter ISO code")
    return v


def _check_privacy(v):
    if v is not None and v not in PRIVACY_OPTIONS:
        raise ValueError(f"defaultPrivacy must be one of: {', '.join(PRIVACY_OPTIONS)}")
    return v


class SettingsCreate(BaseModel):
    """Schema for creating settings on behalf of an account"""

    userId: int
    currency: str = "USD"
    language: str = Field(default="en", min_length=2, max_length=10)
    defaultPrivacy: str = "Public"
    pushEnabled: bool = True
    emailEnabled: bool = True

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v):
        return _check_currency(v)

    @field_validator("defaultPrivacy")
    @classmethod
    def validate_privacy(cls, v):
        return _check_privacy(v)


class SettingsUpdate(BaseModel):
    currency: Optional[str] = None
    language: Optional[str] = Field(default=None, min_length=2, max_length=10)
    defaultPrivacy: Optional[str] = None
    pushEnabled: Optional[bool] = None
    emailEnabled: Optional[bool] = None

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v):
        return _check_currency(v)

    @field_validator("defaultPrivacy")
    @classmethod
    def validate_privacy(cls, v):
        return _check_privacy(v)


class ToggleRequest(BaseModel):
    enabled: bool


class SettingActionResponse(BaseModel):
    actionId: int
    name: str
    enabled: bool


class SettingNotificationResponse(BaseModel):
    notificationId: int
    name: str
    enabled: bool
    actions: list[SettingActionResponse] = []


class SettingEmailNotificationResponse(BaseModel):
    notificationId: int
    name: str
    enabled: bool


class SettingsResponse(BaseModel):
    id: int
    userId: int
    currency: str
    language: str
    defaultPrivacy: str
    pushEnabled: bool
    emailEnabled: bool
    notifications: list[SettingNotificationResponse] = []
    emailNotifications: list[SettingEmailNotificationResponse] = []
    dateCreated: Optional[datetime] = None
    dateModified: Optional[datetime] = None


class SettingsPage(BaseModel):
    count: int
    data: list[SettingsResponse]
