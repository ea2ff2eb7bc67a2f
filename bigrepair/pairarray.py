"""Growable circular array of record ids, keeping each record's slot up to date."""

from __future__ import annotations

from typing import Any, Iterator, Sequence


class CircularArray:
    """A FIFO of record ids stored in a circular buffer.

    ``records`` is an indexable collection whose items carry an ``hpos``
    attribute; whenever the buffer is relocated, ``records[id].hpos`` is set
    to the id's new slot.  The buffer grows by ``1/factor`` when full and
    shrinks by ``factor`` when sparse, never below ``minsize`` slots.
    """

    def __init__(self, records: Sequence[Any], factor: float, minsize: int) -> None:
        if not 0 < factor < 1:
            raise ValueError(f"factor must lie strictly between 0 and 1, got {factor}")
        if minsize < 1:
            raise ValueError(f"minsize must be positive, got {minsize}")
        self._records = records
        self.factor = factor
        self.minsize = minsize
        self._slots: list[int] = []
        self.capacity = 0
        self._size = 0
        self._first = 0

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[int]:
        end = self._first + self._size
        yield from self._slots[self._first : min(end, self.capacity)]
        if end > self.capacity:
            yield from self._slots[: end - self.capacity]

    def _relocate(self, new_capacity: int) -> None:
        items = list(self)
        for slot, item in enumerate(items):
            self._records[item].hpos = slot
        self._slots = items + [0] * (new_capacity - len(items))
        self.capacity = new_capacity
        self._first = 0

    def insert(self, item: int) -> int:
        """Append ``item`` at the end and return the slot it occupies."""
        if self._size == self.capacity:
            if self.capacity == 0:
                self._slots = [0] * self.minsize
                self.capacity = self.minsize
                self._first = 0
            else:
                grown = max(self.capacity + 1, int(self.capacity / self.factor))
                self._relocate(grown)
        pos = (self._first + self._size) % self.capacity
        self._slots[pos] = item
        self._size += 1
        return pos

    def delete_first(self) -> None:
        """Drop the first item, shrinking the buffer when it becomes sparse."""
        if self._size == 0:
            raise IndexError("delete from an empty array")
        self._first = (self._first + 1) % self.capacity
        self._size -= 1
        if self._size == 0:
            self.clear()
        elif (
            self._size < self.capacity * self.factor * self.factor
            and self.capacity * self.factor >= self.minsize
        ):
            self._relocate(int(self.capacity * self.factor))

    def first_position(self) -> int:
        """Return the slot holding the first item."""
        if self._size == 0:
            raise IndexError("empty array has no first item")
        return self._first

    def get(self, pos: int) -> int:
        """Return the id stored in slot ``pos``."""
        self._check_slot(pos)
        return self._slots[pos]

    def set(self, pos: int, item: int) -> None:
        """Store ``item`` in slot ``pos``."""
        self._check_slot(pos)
        self._slots[pos] = item

    def clear(self) -> None:
        """Release all storage and empty the array."""
        self._slots = []
        self.capacity = 0
        self._size = 0
        self._first = 0

    def _check_slot(self, pos: int) -> None:
        if not 0 <= pos < self.capacity:
            raise IndexError(f"slot {pos} outside 0..{self.capacity - 1}")