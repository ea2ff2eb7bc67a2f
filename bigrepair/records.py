"""Table of active pair records, linked to the pair hash, heap and occurrence list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, List, Optional

from .basics import NULL_FREQ, Pair

if TYPE_CHECKING:
    from .heap import PairHeap
    from .pairhash import PairHash


@dataclass(slots=True)
class Record:
    """One active pair with its bookkeeping positions."""

    pair: Pair
    freq: int = 0
    cpos: int = -1
    hpos: int = 0
    kpos: int = 0


@dataclass(slots=True)
class Link:
    """Previous and next occurrence of the same pair in the sequence.

    A negative ``prev`` of the form ``-id - 1`` marks the head of the list of
    record ``id``; ``NULL_FREQ`` marks a head whose record is gone.
    """

    prev: int = -1
    next: int = -1


class Records:
    """Dense array of records; ids are positions and stay below ``len(self)``.

    Removing a record moves the last one into its place, and the hash table,
    heap and occurrence links are told about the move.
    """

    def __init__(self, factor: float, minsize: int) -> None:
        if not 0 < factor < 1:
            raise ValueError(f"factor must lie strictly between 0 and 1, got {factor}")
        if minsize < 1:
            raise ValueError(f"minsize must be positive, got {minsize}")
        self.factor = factor
        self.minsize = minsize
        self._items: List[Record] = []
        self.hash_table: Optional[PairHash] = None
        self.heap: Optional[PairHeap] = None
        self.links: Optional[List[Link]] = None

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, rid: int) -> Record:
        if not 0 <= rid < len(self._items):
            raise IndexError(f"record id {rid} outside 0..{len(self._items) - 1}")
        return self._items[rid]

    def __iter__(self) -> Iterator[Record]:
        return iter(self._items)

    def associate(
        self,
        hash_table: Optional[PairHash],
        heap: Optional[PairHeap],
        links: Optional[List[Link]],
    ) -> None:
        """Attach the structures kept in step with the records."""
        self.hash_table = hash_table
        self.heap = heap
        self.links = links

    def _linked(self) -> tuple[PairHash, PairHeap]:
        if self.hash_table is None or self.heap is None:
            raise RuntimeError("records are not associated with a hash table and a heap")
        return self.hash_table, self.heap

    def insert(self, pair: Pair) -> int:
        """Add a record for ``pair`` with frequency 1 and return its id.

        The record is entered in the hash table and the heap, not in the
        occurrence links.
        """
        hash_table, heap = self._linked()
        rid = len(self._items)
        self._items.append(Record(Pair(*pair)))
        hash_table.insert(rid)
        heap.insert(rid)
        return rid

    def delete_last(self) -> None:
        """Drop the last record."""
        if not self._items:
            raise IndexError("delete from empty records")
        self._items.pop()

    def remove(self, rid: int) -> None:
        """Remove record ``rid``, already taken out of the heap.

        The last record takes over the id ``rid``.
        """
        hash_table, heap = self._linked()
        record = self[rid]
        hash_table.delete(rid)
        links = self.links
        if record.cpos != -1 and links is not None and links[record.cpos].prev == -rid - 1:
            links[record.cpos].prev = NULL_FREQ
        last = len(self._items) - 1
        if rid != last:
            moved = self._items[last]
            self._items[rid] = moved
            hash_table.reposition(rid)
            heap.reposition(rid)
            if moved.cpos != -1 and links is not None:
                links[moved.cpos].prev = -rid - 1
        self.delete_last()

    def clear(self) -> None:
        """Drop all records and detach the associated structures."""
        self._items = []
        self.hash_table = None
        self.heap = None
        self.links = None