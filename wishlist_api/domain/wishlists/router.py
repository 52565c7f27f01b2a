"""Wishlist router - FastAPI endpoints for wishlists and wishlist items"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_roles
from ...database import get_db
from ...models import ROLE_ADMIN, ROLE_USER, User, Wishlist, WishlistItem
from ...shared.validators import parse_page_params
from .schemas import (
    SortRequest,
    WishlistCreate,
    WishlistItemCreate,
    WishlistItemPage,
    WishlistItemResponse,
    WishlistItemUpdate,
    WishlistPage,
    WishlistResponse,
    WishlistUpdate,
)
from .service import WishlistService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/wishlist", tags=["Wishlists"])

admin_only = require_roles(ROLE_ADMIN)
admin_or_user = require_roles(ROLE_ADMIN, ROLE_USER)


def get_wishlist_service(db: Session = Depends(get_db)) -> WishlistService:
    """Dependency injection for WishlistService"""
    return WishlistService(db)


def wishlist_response(wishlist: Wishlist) -> WishlistResponse:
    return WishlistResponse(
        id=wishlist.id,
        name=wishlist.name,
        userId=wishlist.user_id,
        preferences=wishlist.preferences or {},
        statusId=wishlist.status,
        privacy=wishlist.privacy,
        version=wishlist.version,
        itemCount=len(wishlist.items),
        dateCreated=wishlist.created_at,
        dateModified=wishlist.updated_at,
    )


def item_response(item: WishlistItem) -> WishlistItemResponse:
    return WishlistItemResponse(
        id=item.id,
        wishlistId=item.wishlist_id,
        name=item.name,
        description=item.description,
        url=item.url,
        price=item.price,
        quantity=item.quantity,
        imageUrl=item.image_url,
        purchased=item.purchased,
        sortOrder=item.sort_order,
        dateCreated=item.created_at,
        dateModified=item.updated_at,
    )


# ============================================================================
# WISHLISTS
# ============================================================================


@router.get("", response_model=WishlistPage)
async def get_wishlists(
    _admin: User = Depends(admin_only),
    service: WishlistService = Depends(get_wishlist_service),
):
    """Get all wishlists"""
    count, wishlists = service.get_wishlists()
    return WishlistPage(count=count, data=[wishlist_response(w) for w in wishlists])


@router.get("/page/{skip}/{top}", response_model=WishlistPage)
async def get_wishlists_paged(
    skip: str,
    top: str,
    _admin: User = Depends(admin_only),
    service: WishlistService = Depends(get_wishlist_service),
):
    """Get wishlists paginated: /api/wishlist/page/{offset}/{page size}"""
    offset, limit = parse_page_params(skip, top)
    count, wishlists = service.get_wishlists(skip=offset, top=limit)
    return WishlistPage(count=count, data=[wishlist_response(w) for w in wishlists])


@router.get("/mine", response_model=WishlistPage)
async def get_my_wishlists(
    current_user: User = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service),
):
    """Get the current user's wishlists"""
    count, wishlists = service.get_wishlists(user_id=current_user.id)
    return WishlistPage(count=count, data=[wishlist_response(w) for w in wishlists])


@router.get("/{wishlist_id}", response_model=WishlistResponse)
async def get_wishlist(
    wishlist_id: int,
    current_user: User = Depends(admin_or_user),
    service: WishlistService = Depends(get_wishlist_service),
):
    """Get a specific wishlist"""
    return wishlist_response(service.get_wishlist(wishlist_id, current_user))


@router.post("", response_model=WishlistResponse)
async def create_wishlist(
    data: WishlistCreate,
    current_user: User = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service),
):
    """Create a wishlist owned by the current user"""
    return wishlist_response(service.create_wishlist(data, current_user))


@router.put("/{wishlist_id}", response_model=WishlistResponse)
async def update_wishlist(
    wishlist_id: int,
    data: WishlistUpdate,
    current_user: User = Depends(admin_or_user),
    service: WishlistService = Depends(get_wishlist_service),
):
    """Update a wishlist"""
    return wishlist_response(service.update_wishlist(wishlist_id, data, current_user))


# ============================================================================
# WISHLIST ITEMS
# ============================================================================


@router.get("/{wishlist_id}/item", response_model=list[WishlistItemResponse])
async def get_items(
    wishlist_id: int,
    current_user: User = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service),
):
    """Get a wishlist's items in sort order"""
    _, items = service.get_items(wishlist_id, current_user)
    return [item_response(i) for i in items]


@router.get("/{wishlist_id}/item/page/{skip}/{top}", response_model=WishlistItemPage)
async def get_items_paged(
    wishlist_id: int,
    skip: str,
    top: str,
    current_user: User = Depends(admin_only),
    service: WishlistService = Depends(get_wishlist_service),
):
    """Get a wishlist's items paginated: .../item/page/{offset}/{page size}"""
    offset, limit = parse_page_params(skip, top)
    count, items = service.get_items(wishlist_id, current_user, offset, limit)
    return WishlistItemPage(count=count, data=[item_response(i) for i in items])


@router.get("/{wishlist_id}/item/{item_id}", response_model=WishlistItemResponse)
async def get_item(
    wishlist_id: int,
    item_id: int,
    current_user: User = Depends(admin_or_user),
    service: WishlistService = Depends(get_wishlist_service),
):
    """Get a specific wishlist item"""
    return item_response(service.get_item(wishlist_id, item_id, current_user))


@router.put("/{wishlist_id}/item/{item_id}", response_model=WishlistItemResponse)
async def update_item(
    wishlist_id: int,
    item_id: int,
    data: WishlistItemUpdate,
    current_user: User = Depends(admin_or_user),
    service: WishlistService = Depends(get_wishlist_service),
):
    """Update a wishlist item"""
    return item_response(service.update_item(wishlist_id, item_id, data, current_user))


# Sync handlers below run in the threadpool, where the wishlist lock may block


@router.delete("/{wishlist_id}")
def delete_wishlist(
    wishlist_id: int,
    current_user: User = Depends(admin_only),
    service: WishlistService = Depends(get_wishlist_service),
):
    """Delete a wishlist and all of its items"""
    return service.delete_wishlist(wishlist_id, current_user)


@router.post("/{wishlist_id}/item", response_model=WishlistItemResponse)
def create_item(
    wishlist_id: int,
    data: WishlistItemCreate,
    current_user: User = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service),
):
    """Append an item to the end of a wishlist"""
    return item_response(service.create_item(wishlist_id, data, current_user))


@router.post("/{wishlist_id}/item/{item_id}/sort", response_model=list[WishlistItemResponse])
def sort_items(
    wishlist_id: int,
    item_id: int,
    data: SortRequest,
    current_user: User = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service),
):
    """Move the item at oldIndex to newIndex; returns the reordered list"""
    items = service.sort_items(wishlist_id, item_id, data.oldIndex, data.newIndex, current_user)
    return [item_response(i) for i in items]


@router.delete("/{wishlist_id}/item/{item_id}")
def delete_item(
    wishlist_id: int,
    item_id: int,
    current_user: User = Depends(admin_only),
    service: WishlistService = Depends(get_wishlist_service),
):
    """Delete a wishlist item"""
    return service.delete_item(wishlist_id, item_id, current_user)
