"""Wishlist domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from ...models import PRIVACY_OPTIONS, STATUSES
from ...shared.validators import validate_http_url


def _check_status(v):
    if v is not None and v not in STATUSES:
        raise ValueError(f"statusId must be one of: {', '.join(STATUSES)}")
    return v


def _check_privacy(v):
    if v is not None and v not in PRIVACY_OPTIONS:
        raise ValueError(f"privacy must be one of: {', '.join(PRIVACY_OPTIONS)}")
    return v


# ============================================================================
# WISHLISTS
# ============================================================================


class WishlistCreate(BaseModel):
    """Schema for creating a new wishlist"""

    name: str = Field(min_length=1, max_length=255)
    preferences: dict[str, Any] = {}
    statusId: str = "active"
    privacy: str = "Public"

    @field_validator("name")
    @classmethod
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("name is required")
        return v

    @field_validator("statusId")
    @classmethod
    def validate_status(cls, v):
        return _check_status(v)

    @field_validator("privacy")
    @classmethod
    def validate_privacy(cls, v):
        return _check_privacy(v)


class WishlistUpdate(BaseModel):
    """Schema for updating an existing wishlist"""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    preferences: Optional[dict[str, Any]] = None
    statusId: Optional[str] = None
    privacy: Optional[str] = None

    @field_validator("statusId")
    @classmethod
    def validate_status(cls, v):
        return _check_status(v)

    @field_validator("privacy")
    @classmethod
    def validate_privacy(cls, v):
        return _check_privacy(v)


class WishlistResponse(BaseModel):
    """Schema for wishlist response"""

    id: int
    name: str
    userId: int
    preferences: dict[str, Any]
    statusId: str
    privacy: str
    version: int
    itemCount: int = 0
    dateCreated: Optional[datetime] = None
    dateModified: Optional[datetime] = None


class WishlistPage(BaseModel):
    count: int
    data: list[WishlistResponse]


# ============================================================================
# WISHLIST ITEMS
# ============================================================================


class WishlistItemCreate(BaseModel):
    """Schema for adding an item; sortOrder is assigned by the server"""

    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    url: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    quantity: int = Field(default=1, ge=1)
    imageUrl: Optional[str] = None
    purchased: bool = False

    @field_validator("url", "imageUrl")
    @classmethod
    def validate_urls(cls, v):
        return validate_http_url(v)


class WishlistItemUpdate(BaseModel):
    """Schema for updating an item; use the sort endpoint to move it"""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    url: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    quantity: Optional[int] = Field(default=None, ge=1)
    imageUrl: Optional[str] = None
    purchased: Optional[bool] = None

    @field_validator("url", "imageUrl")
    @classmethod
    def validate_urls(cls, v):
        return validate_http_url(v)


class WishlistItemResponse(BaseModel):
    """Schema for wishlist item response"""

    id: int
    wishlistId: int
    name: str
    description: Optional[str] = None
    url: Optional[str] = None
    price: Optional[float] = None
    quantity: int
    imageUrl: Optional[str] = None
    purchased: bool
    sortOrder: int
    dateCreated: Optional[datetime] = None
    dateModified: Optional[datetime] = None


class WishlistItemPage(BaseModel):
    count: int
    data: list[WishlistItemResponse]


class SortRequest(BaseModel):
    """Move the item at oldIndex to newIndex"""

    oldIndex: int
    newIndex: int
