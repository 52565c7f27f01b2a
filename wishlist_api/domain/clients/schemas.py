"""Client domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...models import STATUSES
from ...shared.validators import validate_http_url


def _check_status(v):
    if v is not None and v not in STATUSES:
        raise ValueError(f"statusId must be one of: {', '.join(STATUSES)}")
    return v


class ClientCreate(BaseModel):
    """Schema for registering an API client; userId defaults to the caller"""

    name: str = Field(min_length=1, max_length=255)
    userId: Optional[int] = None
    description: Optional[str] = None
    redirectUri: Optional[str] = None
    statusId: str = "active"

    @field_validator("redirectUri")
    @classmethod
    def validate_redirect_uri(cls, v):
        return validate_http_url(v)

    @field_validator("statusId")
    @classmethod
    def validate_status(cls, v):
        return _check_status(v)


class ClientUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    redirectUri: Optional[str] = None
    statusId: Optional[str] = None

    @field_validator("redirectUri")
    @classmethod
    def validate_redirect_uri(cls, v):
        return validate_http_url(v)

    @field_validator("statusId")
    @classmethod
    def validate_status(cls, v):
        return _check_status(v)


class ClientResponse(BaseModel):
    id: int
    name: str
    clientKey: str
    userId: int
    description: Optional[str] = None
    redirectUri: Optional[str] = None
    statusId: str
    activeRefreshTokens: int = 0
    dateCreated: Optional[datetime] = None
    dateModified: Optional[datetime] = None


class ClientPage(BaseModel):
    count: int
    data: list[ClientResponse]
