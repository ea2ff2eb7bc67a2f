"""RePair grammar compression of integer sequences."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .basics import NULL_FREQ, Pair, PathLike, bits, read_ints, write_ints
from .heap import PairHeap
from .pairhash import PairHash
from .records import Link, Records

_INT32_MAX = (1 << 31) - 1
_HASH_SIZE = 256 * 256


@dataclass
class Grammar:
    """A straight-line grammar: rule ``k`` defines the symbol ``alpha + k``."""

    alpha: int
    rules: List[Pair] = field(default_factory=list)
    sequence: List[int] = field(default_factory=list)
    original_length: int = 0


class _Compressor:
    """State of one RePair run over a threaded, shrinking sequence."""

    def __init__(self, symbols: Sequence[int], factor: float, minsize: int) -> None:
        self.factor = factor
        self.text = list(symbols)
        self.u = self.c = len(self.text)
        self.alpha = max(self.text, default=0) + 1
        self.n = self.alpha
        self.rules: List[Pair] = []
        self.records = Records(factor, minsize)
        self.heap = PairHeap(self.u, self.records, factor, minsize)
        self.hash = PairHash(_HASH_SIZE, self.records, factor)
        self.links = [Link() for _ in range(self.u)]
        self.records.associate(self.hash, self.heap, self.links)
        self._prepare()

    def _prepare(self) -> None:
        text = self.text
        for pos, (left, right) in enumerate(zip(text, text[1:])):
            self._add_occurrence(pos, Pair(left, right))
        self.heap.purge()

    def _add_occurrence(self, pos: int, pair: Pair) -> None:
        links = self.links
        rid = self.hash.search(pair)
        if rid is None:
            rid = self.records.insert(pair)
            rec = self.records[rid]
            links[pos].next = -1
        else:
            self.heap.inc_freq(rid)
            rec = self.records[rid]
            links[pos].next = rec.cpos
            links[rec.cpos].prev = pos
        links[pos].prev = -rid - 1
        rec.cpos = pos

    def _drop_occurrence(self, pos: int, pair: Pair, oid: int) -> None:
        rid = self.hash.search(pair)
        if rid is None:
            return
        if rid != oid:
            self.heap.dec_freq(rid)
        links = self.links
        link = links[pos]
        if link.prev == NULL_FREQ:
            return
        if link.prev < 0:
            self.records[rid].cpos = link.next
        else:
            links[link.prev].next = link.next
        if link.next != -1:
            links[link.next].prev = link.prev

    def _replace(self, oid: int) -> None:
        orec = self.records[oid]
        self.rules.append(orec.pair)
        text, links, n = self.text, self.links, self.n
        cpos = orec.cpos
        while cpos != -1:
            u = self.u
            after = text[cpos + 1]
            sgte = -after - 1 if after < 0 else cpos + 1
            if sgte + 1 < u and text[sgte + 1] < 0:
                ssgte = -text[sgte + 1] - 1
            else:
                ssgte = sgte + 1
            following = links[cpos].next
            if following != -1:
                links[following].prev = -oid - 1
            orec.cpos = following
            if ssgte != u:
                self._drop_occurrence(sgte, Pair(text[sgte], text[ssgte]), oid)
                self._add_occurrence(cpos, Pair(n, text[ssgte]))
            if cpos != 0:
                before = text[cpos - 1]
                if before < 0:
                    ant = -before - 1
                    if ant == cpos:
                        ant = cpos - 2
                else:
                    ant = cpos - 1
                self._drop_occurrence(ant, Pair(text[ant], text[cpos]), oid)
                self._add_occurrence(ant, Pair(text[ant], n))
            text[cpos] = n
            if ssgte != u:
                text[ssgte - 1] = -cpos - 1
            text[cpos + 1] = -ssgte - 1
            self.c -= 1
            cpos = orec.cpos
        self.records.remove(oid)

    def _compact(self) -> None:
        text, links, records = self.text, self.links, self.records
        c = self.c
        i = 0
        for ni in range(c - 1):
            text[ni] = text[i]
            src = links[i]
            link = links[ni] = Link(src.prev, src.next)
            if link.prev < 0:
                if link.prev != NULL_FREQ:
                    records[-link.prev - 1].cpos = ni
            else:
                links[link.prev].next = ni
            if link.next != -1:
                links[link.next].prev = ni
            i += 1
            if text[i] < 0:
                i = -text[i] - 1
        if c > 0:
            text[c - 1] = text[i]
        self.u = c
        del text[c:]
        del links[c:]
        records.associate(self.hash, self.heap, links)

    def _final_sequence(self) -> List[int]:
        text, u = self.text, self.u
        out = []
        i = 0
        while i < u:
            out.append(text[i])
            i += 1
            if i < u and text[i] < 0:
                i = -text[i] - 1
        return out

    def run(self) -> Grammar:
        length = len(self.text)
        while (oid := self.heap.extract_max()) is not None:
            if self.n >= _INT32_MAX:
                raise OverflowError("too many rules for 32-bit symbols")
            self._replace(oid)
            self.n += 1
            self.heap.purge()
            if self.c < self.factor * self.u:
                self._compact()
        return Grammar(self.alpha, self.rules, self._final_sequence(), length)


def compress(sequence: Iterable[int], factor: float = 0.5, minsize: int = 256) -> Grammar:
    """Compress a sequence of non-negative integers with RePair.

    Terminals are ``0 .. alpha - 1`` with ``alpha`` one more than the largest
    input value; rules are numbered from ``alpha`` in creation order.
    """
    if not 0 < factor < 1:
        raise ValueError(f"factor must lie strictly between 0 and 1, got {factor}")
    if minsize < 1:
        raise ValueError(f"minsize must be positive, got {minsize}")
    symbols = list(sequence)
    for value in symbols:
        if not 0 <= value < _INT32_MAX:
            raise ValueError(f"symbol {value} is not a non-negative 32-bit integer")
    return _Compressor(symbols, factor, minsize).run()


def estimated_size(grammar: Grammar) -> int:
    """Estimate in bytes of a compact encoding of ``grammar``."""
    rules = len(grammar.rules)
    length = len(grammar.sequence)
    width = bits(grammar.alpha + rules - 1)
    return (2 * rules + (rules + length) * width) // 8 + 1


def compress_file(path: PathLike) -> Grammar:
    """Compress the int32 file ``path`` into ``path.R`` and ``path.C``."""
    grammar = compress(read_ints(path))
    flat = [grammar.alpha]
    for rule in grammar.rules:
        flat.extend(rule)
    base = str(Path(path))
    write_ints(base + ".R", flat)
    write_ints(base + ".C", grammar.sequence)
    return grammar


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point; returns the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    err = sys.stderr
    err.write("==== Command line:\n")
    err.write("".join(f" {a}" for a in ["irepair", *args]) + "\n")
    if len(args) != 1:
        err.write(
            "Usage: irepair <filename>\n"
            "Compresses <filename> with repair and creates <filename>.ext compressed files\n"
            "This is a version for sequences of integers\n\n"
        )
        return 1
    try:
        grammar = compress_file(args[0])
    except (OSError, ValueError, OverflowError) as exc:
        err.write(f"Error: {exc}\n")
        return 1
    est = estimated_size(grammar)
    err.write("IRePair succeeded\n")
    err.write(f"   Original ints: {grammar.original_length}\n")
    err.write(f"   Number of rules: {len(grammar.rules)}\n")
    err.write(f"   Final sequence length: {len(grammar.sequence)}\n")
    err.write(f"   Estimated output size (bytes): {est}\n")
    denominator = grammar.original_length * bits(grammar.alpha - 1)
    if denominator:
        err.write(f"   Compression ratio: {100.0 * est * 8 / denominator:0.2f}%\n")
    else:
        err.write("   Compression ratio: nan%\n")
    return 0