"""Notification domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...models import STATUSES

CHANNELS = ("push", "email")


class NotificationActionIn(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    enabledByDefault: bool = True


class NotificationCreate(BaseModel):
    """Schema for adding a notification to the catalog"""

    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    channel: str = "push"
    statusId: str = "active"
    actions: list[NotificationActionIn] = []

    @field_validator("channel")
    @classmethod
    def validate_channel(cls, v):
        if v not in CHANNELS:
            raise ValueError(f"channel must be one of: {', '.join(CHANNELS)}")
        return v

    @field_validator("statusId")
    @classmethod
    def validate_status(cls, v):
        if v not in STATUSES:
            raise ValueError(f"statusId must be one of: {', '.join(STATUSES)}")
        return v


class NotificationUpdate(BaseModel):
    """Partial update; a given `actions` list replaces the current actions"""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    channel: Optional[str] = None
    statusId: Optional[str] = None
    actions: Optional[list[NotificationActionIn]] = None

    @field_validator("channel")
    @classmethod
    def validate_channel(cls, v):
        if v is not None and v not in CHANNELS:
            raise ValueError(f"channel must be one of: {', '.join(CHANNELS)}")
        return v

    @field_validator("statusId")
    @classmethod
    def validate_status(cls, v):
        if v is not None and v not in STATUSES:
            raise ValueError(f"statusId must be one of: {', '.join(STATUSES)}")
        return v


class NotificationActionResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    enabledByDefault: bool


class NotificationResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    channel: str
    statusId: str
    dateCreated: Optional[datetime] = None
    dateModified: Optional[datetime] = None


class NotificationDetailsResponse(NotificationResponse):
    actions: list[NotificationActionResponse] = []


class NotificationPage(BaseModel):
    count: int
    data: list[NotificationResponse]


class NotificationDetailsPage(BaseModel):
    count: int
    data: list[NotificationDetailsResponse]
