from dataclasses import dataclass

import pytest

from bigrepair.basics import Pair
from bigrepair.pairhash import PairHash


@dataclass
class Rec:
    pair: Pair
    kpos: int = -1


def add(records, table, pair):
    records.append(Rec(Pair(*pair)))
    rid = len(records) - 1
    table.insert(rid)
    return rid


@pytest.mark.parametrize("requested", [1, 2, 5, 16, 65536, 100000])
def test_size_rounded_to_mask(requested):
    table = PairHash(requested, [], 0.5)
    size = table.maxpos + 1
    assert size & (size - 1) == 0
    assert table.maxpos >= requested
    assert size // 2 <= requested


def test_non_positive_size_raises():
    with pytest.raises(ValueError):
        PairHash(0, [], 0.5)


def test_invalid_factor_raises():
    with pytest.raises(ValueError):
        PairHash(16, [], 1.0)


def test_search_finds_inserted_pairs():
    records = []
    table = PairHash(16, records, 0.5)
    ids = {pair: add(records, table, pair) for pair in [(1, 2), (2, 1), (97, 98)]}
    for pair, rid in ids.items():
        assert table.search(Pair(*pair)) == rid
    assert table.search(Pair(3, 3)) is None
    assert table.used == len(ids)


def test_delete_makes_pair_absent():
    records = []
    table = PairHash(16, records, 0.5)
    first = add(records, table, (5, 6))
    second = add(records, table, (6, 7))
    table.delete(first)
    assert table.search(Pair(5, 6)) is None
    assert table.search(Pair(6, 7)) == second
    assert table.used == 1


def test_reinsert_after_delete():
    records = []
    table = PairHash(16, records, 0.5)
    rid = add(records, table, (5, 6))
    table.delete(rid)
    table.insert(rid)
    assert table.search(Pair(5, 6)) == rid


def test_growth_keeps_every_pair_reachable():
    records = []
    table = PairHash(16, records, 0.5)
    start = table.maxpos
    pairs = [(a, b) for a in range(20) for b in range(10)]
    for pair in pairs:
        add(records, table, pair)
    assert table.maxpos > start
    assert table.used - 1 <= table.maxpos * table.factor
    for rid, pair in enumerate(pairs):
        assert table.search(Pair(*pair)) == rid


def test_reposition_after_moving_record():
    records = []
    table = PairHash(16, records, 0.5)
    first = add(records, table, (1, 1))
    last = add(records, table, (2, 2))
    table.delete(first)
    records[first] = records[last]
    records.pop()
    table.reposition(first)
    assert table.search(Pair(2, 2)) == first
    assert table.search(Pair(1, 1)) is None


def test_negative_symbols_hash_and_match():
    records = []
    table = PairHash(8, records, 0.5)
    rid = add(records, table, (-1, -2))
    other = add(records, table, (-2, -1))
    assert table.search(Pair(-1, -2)) == rid
    assert table.search(Pair(-2, -1)) == other


def test_clear_resets_counts():
    records = []
    table = PairHash(16, records, 0.5)
    add(records, table, (1, 2))
    table.clear()
    assert table.used == 0
    assert table.maxpos == 0