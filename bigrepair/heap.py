"""Priority structure over pair frequencies with O(1) updates.

Pairs seen fewer than ``sqrt(u)`` times sit in one FIFO per frequency; the
rest, of which there are at most ``sqrt(u)``, sit in a list of frequency
nodes ordered by frequency, each holding a list of pairs.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from .pairarray import CircularArray

if TYPE_CHECKING:
    from .records import Records


@dataclass(slots=True)
class FreqNode:
    """A frequency shared by one or more frequent pairs."""

    freq: int = 0
    elems: int = -1
    larger: int = -1
    smaller: int = -1


@dataclass(slots=True)
class HeapNode:
    """A frequent pair's cell in its frequency node's list."""

    id: int = 0
    prev: int = -1
    next: int = -1
    fnode: int = -1


class PairHeap:
    """Max-frequency queue of record ids.

    ``records[id].freq`` holds each pair's frequency and ``records[id].hpos``
    its position inside this structure.
    """

    def __init__(self, u: int, records: Records, factor: float, minsize: int) -> None:
        sqrtu = math.isqrt(max(u, 0))
        if sqrtu * sqrtu < u:
            sqrtu += 1
        self.sqrtu = max(2, sqrtu)
        self._records = records
        self.factor = factor
        self.minsize = minsize
        self._reset()

    def _reset(self) -> None:
        size = self.sqrtu
        self._infreq = [
            CircularArray(self._records, self.factor, self.minsize) for _ in range(size)
        ]
        self._nodes = [HeapNode(next=i + 1) for i in range(size)]
        self._nodes[-1].next = -1
        self._free_node = 0
        self._freqs = [FreqNode(larger=i + 1) for i in range(size)]
        self._freqs[-1].larger = -1
        self._free_freq = 0
        self.smallest = -1
        self.largest = -1
        self.max = size

    def _alloc_node(self) -> int:
        pos = self._free_node
        if pos == -1:
            raise RuntimeError("no room left for frequent pairs")
        self._free_node = self._nodes[pos].next
        return pos

    def _release_node(self, pos: int) -> None:
        self._nodes[pos].next = self._free_node
        self._free_node = pos

    def _alloc_freq(self) -> int:
        pos = self._free_freq
        if pos == -1:
            raise RuntimeError("no room left for frequency nodes")
        self._free_freq = self._freqs[pos].larger
        return pos

    def _drop_freq(self, fp: int) -> None:
        f = self._freqs[fp]
        if f.smaller == -1:
            self.smallest = f.larger
        else:
            self._freqs[f.smaller].larger = f.larger
        if f.larger == -1:
            self.largest = f.smaller
        else:
            self._freqs[f.larger].smaller = f.smaller
        f.larger = self._free_freq
        self._free_freq = fp

    def _unlink(self, node: HeapNode, f: FreqNode) -> None:
        if node.prev == -1:
            f.elems = node.next
        else:
            self._nodes[node.prev].next = node.next
        if node.next != -1:
            self._nodes[node.next].prev = node.prev

    def _remove_low(self, freq: int, hpos: int) -> None:
        bucket = self._infreq[freq]
        first = bucket.get(bucket.first_position())
        bucket.set(hpos, first)
        self._records[first].hpos = hpos
        bucket.delete_first()

    def inc_freq(self, rid: int) -> None:
        """Raise the frequency of record ``rid`` by one."""
        rec = self._records[rid]
        freq = rec.freq
        rec.freq += 1
        hpos = rec.hpos
        if freq >= self.sqrtu:
            node = self._nodes[hpos]
            fp = node.fnode
            f = self._freqs[fp]
            freq += 1
            if (
                node.prev == -1
                and node.next == -1
                and (f.larger == -1 or self._freqs[f.larger].freq != freq)
            ):
                f.freq = freq
                return
            self._unlink(node, f)
            node.prev = -1
            if f.larger != -1 and self._freqs[f.larger].freq == freq:
                lfp = f.larger
                lf = self._freqs[lfp]
                node.next = lf.elems
                self._nodes[lf.elems].prev = hpos
            else:
                lfp = self._alloc_freq()
                lf = self._freqs[lfp]
                lf.freq = freq
                lf.smaller = fp
                lf.larger = f.larger
                if f.larger != -1:
                    self._freqs[f.larger].smaller = lfp
                else:
                    self.largest = lfp
                f.larger = lfp
                node.next = -1
            lf.elems = hpos
            node.fnode = lfp
            if f.elems == -1:
                self._drop_freq(fp)
            return

        self._remove_low(freq, hpos)
        freq += 1
        if freq < self.sqrtu:
            rec.hpos = self._infreq[freq].insert(rid)
            return
        hpos = self._alloc_node()
        rec.hpos = hpos
        node = self._nodes[hpos]
        node.prev = -1
        node.id = rid
        if self.smallest != -1 and self._freqs[self.smallest].freq == freq:
            fp = self.smallest
            f = self._freqs[fp]
            node.next = f.elems
            self._nodes[f.elems].prev = hpos
        else:
            fp = self._alloc_freq()
            f = self._freqs[fp]
            f.freq = freq
            f.smaller = -1
            f.larger = self.smallest
            if self.smallest != -1:
                self._freqs[self.smallest].smaller = fp
            self.smallest = fp
            if self.largest == -1:
                self.largest = fp
            node.next = -1
        f.elems = hpos
        node.fnode = fp

    def dec_freq(self, rid: int) -> None:
        """Lower the frequency of record ``rid`` by one.

        A record whose frequency reaches zero is removed from the records.
        """
        rec = self._records[rid]
        freq = rec.freq
        rec.freq -= 1
        hpos = rec.hpos
        if freq > self.sqrtu:
            node = self._nodes[hpos]
            fp = node.fnode
            f = self._freqs[fp]
            freq -= 1
            if (
                node.prev == -1
                and node.next == -1
                and (f.smaller == -1 or self._freqs[f.smaller].freq != freq)
            ):
                f.freq = freq
                return
            self._unlink(node, f)
            node.prev = -1
            if f.smaller != -1 and self._freqs[f.smaller].freq == freq:
                sfp = f.smaller
                sf = self._freqs[sfp]
                node.next = sf.elems
                self._nodes[sf.elems].prev = hpos
            else:
                sfp = self._alloc_freq()
                sf = self._freqs[sfp]
                sf.freq = freq
                sf.larger = fp
                sf.smaller = f.smaller
                if f.smaller != -1:
                    self._freqs[f.smaller].larger = sfp
                else:
                    self.smallest = sfp
                f.smaller = sfp
                node.next = -1
            sf.elems = hpos
            node.fnode = sfp
            if f.elems == -1:
                self._drop_freq(fp)
            return

        if freq < self.sqrtu:
            self._remove_low(freq, hpos)
        else:
            node = self._nodes[hpos]
            fp = node.fnode
            f = self._freqs[fp]
            self._unlink(node, f)
            self._release_node(hpos)
            if f.elems == -1:
                self._drop_freq(fp)
        freq -= 1
        if freq > 0:
            rec.hpos = self._infreq[freq].insert(rid)
        else:
            self._records.remove(rid)

    def insert(self, rid: int) -> None:
        """Enter record ``rid`` with frequency 1."""
        rec = self._records[rid]
        rec.hpos = self._infreq[1].insert(rid)
        rec.freq = 1

    def extract_max(self) -> Optional[int]:
        """Take out and return the id of a most frequent pair, or None if empty."""
        if self.max == self.sqrtu and self.largest == -1:
            self.max -= 1
        if self.max < self.sqrtu:
            while self.max and len(self._infreq[self.max]) == 0:
                self.max -= 1
            if not self.max:
                return None
            bucket = self._infreq[self.max]
            rid = bucket.get(bucket.first_position())
            bucket.delete_first()
            return rid
        fp = self.largest
        f = self._freqs[fp]
        hpos = f.elems
        node = self._nodes[hpos]
        rid = node.id
        f.elems = node.next
        if node.next != -1:
            self._nodes[node.next].prev = -1
        else:
            self._drop_freq(fp)
        self._release_node(hpos)
        return rid

    def purge(self) -> None:
        """Remove every pair of frequency 1 from the heap and the records."""
        bucket = self._infreq[1]
        count = len(bucket)
        if count:
            pos = bucket.first_position()
            capacity = bucket.capacity
            for _ in range(count):
                rid = bucket.get(pos)
                pos = (pos + 1) % capacity
                self._records.remove(rid)
        bucket.clear()

    def reposition(self, rid: int) -> None:
        """Point the heap slot given by ``records[rid].hpos`` at ``rid``."""
        rec = self._records[rid]
        if rec.freq < self.sqrtu:
            self._infreq[rec.freq].set(rec.hpos, rid)
        else:
            self._nodes[rec.hpos].id = rid

    def clear(self) -> None:
        """Empty the heap, keeping its size parameters."""
        self._reset()