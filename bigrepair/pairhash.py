"""Linear-probing hash table from symbol pairs to record ids."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from .basics import Pair

EMPTY = -1
DELETED = -2

_LPRIME = 767865341467865341
_MASK64 = (1 << 64) - 1


def _table_mask(maxpos: int) -> int:
    """Round ``maxpos`` to a value of the form ``2**k - 1`` not below it."""
    if maxpos < 1:
        raise ValueError(f"hash table size must be positive, got {maxpos}")
    highest = 1 << (maxpos.bit_length() - 1)
    return (highest << 1) - 1


def _home_slot(pair: Pair, maxpos: int) -> int:
    key = ((pair[0] << 32) | (pair[1] & _MASK64)) & _MASK64
    return (((_LPRIME * key) & _MASK64) >> 32) & maxpos


class PairHash:
    """Open-addressing table mapping ``records[id].pair`` to ``id``.

    ``records`` is an indexable collection whose items carry ``pair`` and
    ``kpos`` attributes; ``kpos`` is kept equal to the slot holding the id.
    The table grows when more than ``factor`` of it is in use and never
    shrinks.
    """

    def __init__(self, maxpos: int, records: Sequence[Any], factor: float = 0.5) -> None:
        if not 0 < factor < 1:
            raise ValueError(f"factor must lie strictly between 0 and 1, got {factor}")
        self.maxpos = _table_mask(maxpos)
        self.used = 0
        self.factor = factor
        self._records = records
        self._table = [EMPTY] * (self.maxpos + 1)

    def search(self, pair: Pair) -> Optional[int]:
        """Return the id of the record holding ``pair``, or None."""
        k = _home_slot(pair, self.maxpos)
        while (rid := self._table[k]) != EMPTY:
            if rid >= 0 and tuple(self._records[rid].pair) == tuple(pair):
                return rid
            k = (k + 1) & self.maxpos
        return None

    def _free_slot(self, table: list[int], maxpos: int, pair: Pair) -> int:
        k = _home_slot(pair, maxpos)
        while table[k] >= 0:
            k = (k + 1) & maxpos
        return k

    def insert(self, rid: int) -> None:
        """Add ``records[rid]``, whose pair must not be present yet."""
        if self.used > self.maxpos * self.factor:
            self._grow()
        self.used += 1
        record = self._records[rid]
        k = self._free_slot(self._table, self.maxpos, record.pair)
        self._table[k] = rid
        record.kpos = k

    def _grow(self) -> None:
        maxpos = _table_mask((self.maxpos << 1) | 1)
        table = [EMPTY] * (maxpos + 1)
        for rid in self._table:
            if rid >= 0:
                record = self._records[rid]
                k = self._free_slot(table, maxpos, record.pair)
                table[k] = rid
                record.kpos = k
        self.maxpos = maxpos
        self._table = table

    def delete(self, rid: int) -> None:
        """Mark the slot of ``records[rid]`` as deleted."""
        self._table[self._records[rid].kpos] = DELETED
        self.used -= 1

    def reposition(self, rid: int) -> None:
        """Point the slot given by ``records[rid].kpos`` at ``rid``."""
        self._table[self._records[rid].kpos] = rid

    def clear(self) -> None:
        """Drop the table's storage."""
        self._table = []
        self.maxpos = 0
        self.used = 0