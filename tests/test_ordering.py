"""Unit tests for the item re-sequencer"""

from dataclasses import dataclass

import pytest

from wishlist_api.domain.wishlists.ordering import changed_positions, resequence
from wishlist_api.exceptions import InvalidRange, NotFound


@dataclass
class Item:
    id: int
    name: str
    sort_order: int


def make_items(*names):
    return [Item(id=index + 1, name=name, sort_order=index) for index, name in enumerate(names)]


def names(items):
    return [item.name for item in items]


def test_move_up_shifts_band_down():
    items = make_items("A", "B", "C", "D")

    ordered = resequence(items, 3, 1)

    assert names(ordered) == ["A", "D", "B", "C"]
    assert [item.sort_order for item in ordered] == [0, 1, 2, 3]


def test_move_down_shifts_band_up():
    items = make_items("A", "B", "C", "D")

    ordered = resequence(items, 0, 2)

    assert names(ordered) == ["B", "C", "A", "D"]
    assert [item.sort_order for item in ordered] == [0, 1, 2, 3]


def test_same_index_changes_nothing():
    items = make_items("A", "B", "C")
    before = {item.id: item.sort_order for item in items}

    ordered = resequence(items, 1, 1)

    assert names(ordered) == ["A", "B", "C"]
    assert changed_positions(before, items) == []


def test_first_to_last():
    ordered = resequence(make_items("A", "B", "C", "D", "E"), 0, 4)
    assert names(ordered) == ["B", "C", "D", "E", "A"]


def test_last_to_first():
    ordered = resequence(make_items("A", "B", "C", "D", "E"), 4, 0)
    assert names(ordered) == ["E", "A", "B", "C", "D"]


def test_single_item():
    ordered = resequence(make_items("A"), 0, 0)
    assert names(ordered) == ["A"]
    assert ordered[0].sort_order == 0


def test_every_move_keeps_positions_dense():
    count = 6
    for old_index in range(count):
        for new_index in range(count):
            items = make_items(*"ABCDEF")
            ordered = resequence(items, old_index, new_index)

            assert sorted(item.sort_order for item in items) == list(range(count))
            assert ordered[new_index].name == "ABCDEF"[old_index]


@pytest.mark.parametrize("old_index,new_index", [(0, 3), (3, 0), (1, 2), (4, 1)])
def test_reverse_move_restores_order(old_index, new_index):
    items = make_items("A", "B", "C", "D", "E")

    resequence(items, old_index, new_index)
    ordered = resequence(items, new_index, old_index)

    assert names(ordered) == ["A", "B", "C", "D", "E"]


def test_only_band_and_mover_change():
    items = make_items("A", "B", "C", "D", "E", "F")
    before = {item.id: item.sort_order for item in items}

    resequence(items, 4, 1)

    changed = changed_positions(before, items)
    assert sorted(item.name for item in changed) == ["B", "C", "D", "E"]


@pytest.mark.parametrize(
    "old_index,new_index,field",
    [(4, 0, "oldIndex"), (0, 4, "newIndex"), (-1, 0, "oldIndex"), (0, -1, "newIndex")],
)
def test_out_of_range_index_is_rejected(old_index, new_index, field):
    items = make_items("A", "B", "C", "D")

    with pytest.raises(InvalidRange) as exc_info:
        resequence(items, old_index, new_index)

    assert field in exc_info.value.detail
    assert exc_info.value.status_code == 400
    # Nothing was touched
    assert [item.sort_order for item in items] == [0, 1, 2, 3]


def test_empty_collection_rejects_any_index():
    with pytest.raises(InvalidRange):
        resequence([], 0, 0)


def test_missing_item_at_old_index():
    items = [Item(1, "A", 0), Item(2, "B", 2), Item(3, "C", 3)]

    with pytest.raises(NotFound) as exc_info:
        resequence(items, 1, 0)

    assert exc_info.value.status_code == 404
    assert [item.sort_order for item in items] == [0, 2, 3]
