"""Account domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...models import ROLE_ADMIN, ROLE_USER, STATUSES
from ...shared.validators import validate_email

KNOWN_ROLES = (ROLE_ADMIN, ROLE_USER)


def _check_roles(v):
    if v is None:
        return v
    unknown = [role for role in v if role not in KNOWN_ROLES]
    if unknown:
        raise ValueError(f"Unknown role(s): {', '.join(unknown)}")
    if not v:
        raise ValueError("At least one role is required")
    return v


def _check_status(v):
    if v is not None and v not in STATUSES:
        raise ValueError(f"Status must be one of: {', '.join(STATUSES)}")
    return v


class AccountCreate(BaseModel):
    """Schema for creating a new account"""

    email: str
    password: str
    fullName: Optional[str] = None
    roles: list[str] = [ROLE_USER]
    status: str = "active"

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        if len(v) < 8:
            raise ValueError("Password must be at least 8 characters long")
        return v

    @field_validator("roles")
    @classmethod
    def validate_roles(cls, v):
        return _check_roles(v)

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        return _check_status(v)


class AccountUpdate(BaseModel):
    """Schema for updating an existing account"""

    email: Optional[str] = None
    password: Optional[str] = None
    fullName: Optional[str] = None
    roles: Optional[list[str]] = None
    status: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        if v:
            return validate_email(v)
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        if v is not None and len(v) < 8:
            raise ValueError("Password must be at least 8 characters long")
        return v

    @field_validator("roles")
    @classmethod
    def validate_roles(cls, v):
        return _check_roles(v)

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        return _check_status(v)


class AccountResponse(BaseModel):
    """Schema for account response (never includes the password hash)"""

    id: int
    email: str
    fullName: Optional[str] = None
    roles: list[str]
    status: str
    dateCreated: Optional[datetime] = None
    dateModified: Optional[datetime] = None


class AccountPage(BaseModel):
    """Paged account listing"""

    count: int
    data: list[AccountResponse]


class LoginRequest(BaseModel):
    email: str
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    refresh_token: Optional[str] = None
