"""Wishlist repository - Database operations for wishlists and their items"""

from typing import Optional

from sqlalchemy import func, update
from sqlalchemy.orm import Session

from ...models import Wishlist, WishlistItem


class WishlistRepository:
    """Repository for wishlist database operations"""

    @staticmethod
    def count_wishlists(db: Session, user_id: Optional[int] = None) -> int:
        query = db.query(Wishlist)
        if user_id is not None:
            query = query.filter(Wishlist.user_id == user_id)
        return query.count()

    @staticmethod
    def get_wishlists(
        db: Session,
        user_id: Optional[int] = None,
        skip: int = 0,
        top: Optional[int] = None,
    ) -> list[Wishlist]:
        """Get wishlists ordered by name, optionally for one owner and paged"""
        query = db.query(Wishlist)
        if user_id is not None:
            query = query.filter(Wishlist.user_id == user_id)
        query = query.order_by(Wishlist.name.asc(), Wishlist.id.asc()).offset(skip)
        if top is not None:
            query = query.limit(top)
        return query.all()

    @staticmethod
    def get_wishlist_by_id(db: Session, wishlist_id: int, for_update: bool = False) -> Optional[Wishlist]:
        """Get a wishlist by ID; for_update takes a row lock where the backend supports it"""
        query = db.query(Wishlist).filter(Wishlist.id == wishlist_id)
        if for_update:
            query = query.with_for_update()
        return query.first()

    @staticmethod
    def create_wishlist(db: Session, user_id: int, **wishlist_data) -> Wishlist:
        """Create a new wishlist"""
        wishlist = Wishlist(user_id=user_id, **wishlist_data)
        db.add(wishlist)
        db.commit()
        db.refresh(wishlist)
        return wishlist

    @staticmethod
    def update_wishlist(db: Session, wishlist: Wishlist, **updates) -> Wishlist:
        """Update a wishlist with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(wishlist, key):
                setattr(wishlist, key, value)

        db.commit()
        db.refresh(wishlist)
        return wishlist

    @staticmethod
    def delete_wishlist(db: Session, wishlist: Wishlist) -> None:
        """Delete a wishlist and its items"""
        db.delete(wishlist)
        db.commit()

    # Item Methods
    @staticmethod
    def count_items(db: Session, wishlist_id: int) -> int:
        return (
            db.query(func.count(WishlistItem.id))
            .filter(WishlistItem.wishlist_id == wishlist_id)
            .scalar()
        )

    @staticmethod
    def get_items(
        db: Session, wishlist_id: int, skip: int = 0, top: Optional[int] = None
    ) -> list[WishlistItem]:
        """Get a wishlist's items in sort order"""
        query = (
            db.query(WishlistItem)
            .filter(WishlistItem.wishlist_id == wishlist_id)
            .order_by(WishlistItem.sort_order.asc(), WishlistItem.id.asc())
            .offset(skip)
        )
        if top is not None:
            query = query.limit(top)
        return query.all()

    @staticmethod
    def get_item(db: Session, wishlist_id: int, item_id: int) -> Optional[WishlistItem]:
        """Get an item, scoped to its wishlist"""
        return (
            db.query(WishlistItem)
            .filter(WishlistItem.id == item_id, WishlistItem.wishlist_id == wishlist_id)
            .first()
        )

    @staticmethod
    def add_item(db: Session, wishlist_id: int, sort_order: int, **item_data) -> WishlistItem:
        """Stage a new item; the caller commits"""
        item = WishlistItem(wishlist_id=wishlist_id, sort_order=sort_order, **item_data)
        db.add(item)
        return item

    @staticmethod
    def update_item(db: Session, item: WishlistItem, **updates) -> WishlistItem:
        """Update an item with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(item, key):
                setattr(item, key, value)

        db.commit()
        db.refresh(item)
        return item

    @staticmethod
    def close_gap(db: Session, wishlist_id: int, removed_position: int) -> int:
        """Shift every item after removed_position down by one; the caller commits"""
        result = db.execute(
            update(WishlistItem)
            .where(
                WishlistItem.wishlist_id == wishlist_id,
                WishlistItem.sort_order > removed_position,
            )
            .values(sort_order=WishlistItem.sort_order - 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    @staticmethod
    def save_sort_orders(db: Session, wishlist_id: int, positions: dict[int, int]) -> int:
        """
        Write new sort orders ({item id: sort_order}) for one wishlist.

        Every statement is scoped to the wishlist. Returns the number of rows
        matched; the caller compares it with len(positions) and commits or
        rolls back the whole batch.
        """
        matched = 0
        for item_id, sort_order in positions.items():
            result = db.execute(
                update(WishlistItem)
                .where(WishlistItem.id == item_id, WishlistItem.wishlist_id == wishlist_id)
                .values(sort_order=sort_order)
                .execution_options(synchronize_session=False)
            )
            matched += result.rowcount
        return matched
