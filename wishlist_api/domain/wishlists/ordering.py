"""Wishlist item ordering - moves one item within a dense sort_order sequence"""

from typing import Protocol, Sequence

from ...exceptions import InvalidRange, NotFound


class OrderedItem(Protocol):
    id: int
    sort_order: int


def resequence(items: Sequence[OrderedItem], old_index: int, new_index: int) -> list:
    """
    Move the item at position old_index to new_index.

    Items are updated in place. Only the mover and the band between the two
    positions change; everything else keeps its sort_order.

    Returns every item sorted by its new sort_order (ties broken by id).

    Raises:
        InvalidRange: either index is outside [0, len(items) - 1]
        NotFound: no item currently sits at old_index
    """
    count = len(items)
    for name, value in (("oldIndex", old_index), ("newIndex", new_index)):
        if not 0 <= value < count:
            raise InvalidRange(f"{name} {value} is out of range for {count} item(s)")

    mover = next((item for item in items if item.sort_order == old_index), None)
    if mover is None:
        raise NotFound(f"No item at position {old_index}")

    moving_up = old_index - new_index > -1

    for item in items:
        if item is mover:
            continue
        position = item.sort_order
        if moving_up:
            if new_index <= position < old_index:
                item.sort_order = position + 1
        elif old_index < position <= new_index:
            item.sort_order = position - 1

    mover.sort_order = new_index

    return sorted(items, key=lambda item: (item.sort_order, item.id))


def changed_positions(before: dict[int, int], items: Sequence[OrderedItem]) -> list:
    """Items whose sort_order differs from the `before` snapshot (id -> sort_order)"""
    return [item for item in items if before.get(item.id) != item.sort_order]
