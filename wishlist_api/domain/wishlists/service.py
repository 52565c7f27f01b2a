"""Wishlist service - Business logic for wishlists and item ordering"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import set_committed_value
from sqlalchemy.orm.exc import StaleDataError
from sqlalchemy.sql import func

from ...exceptions import (
    ConcurrentModification,
    NotFound,
    PartialWriteError,
    StoreUnavailable,
    WishlistError,
)
from ...locks import collection_lock
from ...models import ROLE_ADMIN, User, Wishlist, WishlistItem
from .ordering import changed_positions, resequence
from .repository import WishlistRepository
from .schemas import WishlistCreate, WishlistItemCreate, WishlistItemUpdate, WishlistUpdate

logger = logging.getLogger(__name__)


def lock_key(wishlist_id: int) -> str:
    return f"wishlist:{wishlist_id}"


class WishlistService:
    """Service layer for wishlist business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = WishlistRepository()

    # ------------------------------------------------------------------
    # Access checks
    # ------------------------------------------------------------------

    @staticmethod
    def can_read(wishlist: Wishlist, user: User) -> bool:
        return (
            user.has_role(ROLE_ADMIN)
            or wishlist.user_id == user.id
            or wishlist.privacy == "Public"
        )

    @staticmethod
    def can_write(wishlist: Wishlist, user: User) -> bool:
        return user.has_role(ROLE_ADMIN) or wishlist.user_id == user.id

    def _verify_access(self, wishlist: Wishlist, user: User, write: bool) -> None:
        allowed = self.can_write(wishlist, user) if write else self.can_read(wishlist, user)
        if not allowed:
            logger.warning(f"🚫 Access denied: user {user.id} -> wishlist {wishlist.id}")
            raise HTTPException(status_code=403, detail="You do not have access to this wishlist")

    # ------------------------------------------------------------------
    # Wishlists
    # ------------------------------------------------------------------

    def get_wishlists(
        self, user_id: Optional[int] = None, skip: int = 0, top: Optional[int] = None
    ) -> tuple[int, list[Wishlist]]:
        """Get (total count, wishlists) for a page"""
        count = self.repo.count_wishlists(self.db, user_id)
        return count, self.repo.get_wishlists(self.db, user_id, skip, top)

    def get_wishlist(self, wishlist_id: int, user: User, write: bool = False) -> Wishlist:
        """Get a specific wishlist the user may access"""
        wishlist = self.repo.get_wishlist_by_id(self.db, wishlist_id)
        if not wishlist:
            raise HTTPException(status_code=404, detail="Wishlist not found")
        self._verify_access(wishlist, user, write)
        return wishlist

    def create_wishlist(self, data: WishlistCreate, user: User) -> Wishlist:
        """Create a wishlist owned by the current user"""
        logger.info(f"📥 Creating wishlist for user_id: {user.id}")
        return self.repo.create_wishlist(
            self.db,
            user.id,
            name=data.name,
            preferences=data.preferences,
            status=data.statusId,
            privacy=data.privacy,
        )

    def update_wishlist(self, wishlist_id: int, data: WishlistUpdate, user: User) -> Wishlist:
        """Update a wishlist"""
        wishlist = self.get_wishlist(wishlist_id, user, write=True)

        updates = {
            "name": data.name.strip() if data.name else None,
            "preferences": data.preferences,
            "status": data.statusId,
            "privacy": data.privacy,
        }
        try:
            return self.repo.update_wishlist(self.db, wishlist, **updates)
        except StaleDataError as e:
            self.db.rollback()
            raise ConcurrentModification("Wishlist was changed by another request") from e

    def delete_wishlist(self, wishlist_id: int, user: User) -> dict:
        """Delete a wishlist and its items"""
        wishlist = self.get_wishlist(wishlist_id, user, write=True)
        with collection_lock(lock_key(wishlist_id)):
            try:
                self.repo.delete_wishlist(self.db, wishlist)
            except StaleDataError as e:
                self.db.rollback()
                raise ConcurrentModification("Wishlist was changed by another request") from e
            except OperationalError as e:
                self.db.rollback()
                raise StoreUnavailable("Database unavailable while deleting the wishlist") from e
        logger.info(f"✅ Wishlist {wishlist_id} deleted")
        return {"status": True}

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def get_items(
        self, wishlist_id: int, user: User, skip: int = 0, top: Optional[int] = None
    ) -> tuple[int, list[WishlistItem]]:
        """Get (total count, items in sort order) for a page"""
        self.get_wishlist(wishlist_id, user)
        count = self.repo.count_items(self.db, wishlist_id)
        return count, self.repo.get_items(self.db, wishlist_id, skip, top)

    def get_item(self, wishlist_id: int, item_id: int, user: User, write: bool = False) -> WishlistItem:
        """Get a specific item"""
        self.get_wishlist(wishlist_id, user, write)
        item = self.repo.get_item(self.db, wishlist_id, item_id)
        if not item:
            raise HTTPException(status_code=404, detail="Wishlist item not found")
        return item

    def create_item(self, wishlist_id: int, data: WishlistItemCreate, user: User) -> WishlistItem:
        """Append an item at the end of the wishlist"""
        wishlist = self.get_wishlist(wishlist_id, user, write=True)

        with collection_lock(lock_key(wishlist_id)):
            self.db.refresh(wishlist)
            try:
                sort_order = self.repo.count_items(self.db, wishlist_id)
                item = self.repo.add_item(
                    self.db,
                    wishlist_id,
                    sort_order,
                    name=data.name,
                    description=data.description,
                    url=data.url,
                    price=data.price,
                    quantity=data.quantity,
                    image_url=data.imageUrl,
                    purchased=data.purchased,
                )
                wishlist.updated_at = func.now()
                self.db.commit()
            except StaleDataError as e:
                self.db.rollback()
                raise ConcurrentModification("Wishlist was changed by another request") from e
            except OperationalError as e:
                self.db.rollback()
                raise StoreUnavailable("Database unavailable while adding the item") from e

        self.db.refresh(item)
        logger.info(f"✅ Item {item.id} added to wishlist {wishlist_id} at position {sort_order}")
        return item

    def update_item(
        self, wishlist_id: int, item_id: int, data: WishlistItemUpdate, user: User
    ) -> WishlistItem:
        """Update an item's details (never its position)"""
        item = self.get_item(wishlist_id, item_id, user, write=True)

        updates = {
            "name": data.name,
            "description": data.description,
            "url": data.url,
            "price": data.price,
            "quantity": data.quantity,
            "image_url": data.imageUrl,
            "purchased": data.purchased,
        }
        return self.repo.update_item(self.db, item, **updates)

    def delete_item(self, wishlist_id: int, item_id: int, user: User) -> dict:
        """Delete an item and close the gap it leaves in the order"""
        wishlist = self.get_wishlist(wishlist_id, user, write=True)

        with collection_lock(lock_key(wishlist_id)):
            self.db.refresh(wishlist)
            item = self.repo.get_item(self.db, wishlist_id, item_id)
            if not item:
                raise HTTPException(status_code=404, detail="Wishlist item not found")

            removed_position = item.sort_order
            try:
                self.db.delete(item)
                self.db.flush()
                shifted = self.repo.close_gap(self.db, wishlist_id, removed_position)
                wishlist.updated_at = func.now()
                self.db.commit()
            except StaleDataError as e:
                self.db.rollback()
                raise ConcurrentModification("Wishlist was changed by another request") from e
            except OperationalError as e:
                self.db.rollback()
                raise StoreUnavailable("Database unavailable while deleting the item") from e

        logger.info(
            f"✅ Item {item_id} deleted from wishlist {wishlist_id}; {shifted} item(s) shifted up"
        )
        return {"status": True}

    def sort_items(
        self, wishlist_id: int, item_id: int, old_index: int, new_index: int, user: User
    ) -> list[WishlistItem]:
        """
        Move the item at old_index to new_index and persist the new order.

        Runs under the wishlist's lock; the mover and the shifted band are
        written in one transaction together with a version bump on the
        wishlist. Any failure rolls the whole batch back.
        """
        logger.info(f"🔄 Sorting wishlist {wishlist_id}: {old_index} -> {new_index}")

        with collection_lock(lock_key(wishlist_id)):
            try:
                wishlist = self.repo.get_wishlist_by_id(self.db, wishlist_id, for_update=True)
                if not wishlist:
                    raise NotFound(f"Wishlist {wishlist_id} not found")
                self._verify_access(wishlist, user, write=True)

                items = self.repo.get_items(self.db, wishlist_id)
                if not any(item.id == item_id for item in items):
                    raise NotFound(f"Item {item_id} not found in wishlist {wishlist_id}")

                before = {item.id: item.sort_order for item in items}
                ordered = resequence(items, old_index, new_index)

                mover_id = next(i for i, position in before.items() if position == old_index)
                if mover_id != item_id:
                    logger.warning(
                        f"⚠️ Sort path item {item_id} differs from item {mover_id} at oldIndex {old_index}"
                    )

                changed = changed_positions(before, items)
                if changed:
                    positions = {item.id: item.sort_order for item in changed}
                    matched = self.repo.save_sort_orders(self.db, wishlist_id, positions)
                    if matched != len(positions):
                        logger.error(
                            f"❌ Sort of wishlist {wishlist_id} matched {matched}/{len(positions)} rows"
                        )
                        raise PartialWriteError(
                            f"Only {matched} of {len(positions)} items could be updated"
                        )
                    # Already written above; keep the ORM from writing them again
                    for item in changed:
                        set_committed_value(item, "sort_order", item.sort_order)
                    wishlist.updated_at = func.now()

                self.db.commit()
            except (WishlistError, HTTPException):
                self.db.rollback()
                raise
            except StaleDataError as e:
                self.db.rollback()
                raise ConcurrentModification("Wishlist was changed by another request") from e
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error(f"❌ Database error sorting wishlist {wishlist_id}: {e}")
                raise StoreUnavailable("Database unavailable while sorting") from e

        logger.info(f"✅ Wishlist {wishlist_id} sorted; {len(changed)} item(s) moved")
        return ordered
