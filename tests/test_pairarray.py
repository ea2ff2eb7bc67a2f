from dataclasses import dataclass

import pytest

from bigrepair.pairarray import CircularArray


@dataclass
class Rec:
    hpos: int = -1


def make(count, factor=0.5, minsize=4):
    records = [Rec() for _ in range(count)]
    return records, CircularArray(records, factor, minsize)


def push(records, array, rid):
    records[rid].hpos = array.insert(rid)


def assert_consistent(records, array):
    for rid in array:
        assert array.get(records[rid].hpos) == rid


def test_positions_are_sequential_from_empty():
    records, array = make(3)
    positions = [array.insert(rid) for rid in range(3)]
    assert positions == list(range(3))
    assert array.capacity == array.minsize
    assert list(array) == [0, 1, 2]


def test_wrap_around_keeps_order():
    records, array = make(8)
    for rid in range(3):
        push(records, array, rid)
    array.delete_first()
    array.delete_first()
    for rid in range(3, 6):
        push(records, array, rid)
    assert list(array) == [2, 3, 4, 5]
    assert len(array) == 4
    assert array.get(array.first_position()) == 2
    assert_consistent(records, array)


def test_growth_preserves_order_and_updates_slots():
    records, array = make(20)
    for rid in range(3):
        push(records, array, rid)
    array.delete_first()
    for rid in range(3, 20):
        push(records, array, rid)
    assert list(array) == list(range(1, 20))
    assert array.capacity >= len(array)
    assert_consistent(records, array)


def test_shrink_keeps_items_and_respects_minsize():
    records, array = make(40)
    for rid in range(40):
        push(records, array, rid)
    peak = array.capacity
    for _ in range(37):
        array.delete_first()
    assert list(array) == [37, 38, 39]
    assert array.capacity < peak
    assert array.capacity >= array.minsize
    assert_consistent(records, array)


def test_deleting_everything_releases_storage():
    records, array = make(5)
    for rid in range(5):
        push(records, array, rid)
    for _ in range(5):
        array.delete_first()
    assert len(array) == 0
    assert array.capacity == 0
    assert list(array) == []


def test_delete_from_empty_raises():
    _, array = make(1)
    with pytest.raises(IndexError):
        array.delete_first()


def test_first_position_of_empty_raises():
    _, array = make(1)
    with pytest.raises(IndexError):
        array.first_position()


def test_set_then_get():
    records, array = make(3)
    for rid in range(3):
        push(records, array, rid)
    array.set(records[1].hpos, 2)
    assert array.get(records[1].hpos) == 2
    assert list(array) == [0, 2, 2]


def test_get_outside_capacity_raises():
    records, array = make(1)
    push(records, array, 0)
    with pytest.raises(IndexError):
        array.get(array.capacity)


def test_clear_empties_array():
    records, array = make(3)
    for rid in range(3):
        push(records, array, rid)
    array.clear()
    assert len(array) == 0
    assert list(array) == []
    push(records, array, 2)
    assert list(array) == [2]


@pytest.mark.parametrize("factor", [0, 1, 1.5, -0.2])
def test_invalid_factor_raises(factor):
    with pytest.raises(ValueError):
        CircularArray([], factor, 4)


def test_invalid_minsize_raises():
    with pytest.raises(ValueError):
        CircularArray([], 0.5, 0)