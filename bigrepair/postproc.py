"""Merge the dictionary and parse grammars into one grammar for the original text.

The dictionary words of a prefix-free parse are compressed as one integer
sequence, each word closed by a unique terminator in ``256 .. terms - 1``.
Each word is reduced to a single nonterminal with balanced rules.  The parse
grammar's terminals, which are word numbers starting at 1, are then replaced
by those nonterminals.  The rules of both grammars are concatenated.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .basics import Pair, PathLike, bits, read_ints, write_ints

Rules = Sequence[Tuple[int, int]]


@dataclass(frozen=True)
class PostprocessResult:
    """The merged grammar and the number of rules it added."""

    header: Tuple[int, int, int]
    rules: List[Pair] = field(default_factory=list)
    sequence: List[int] = field(default_factory=list)
    rule_count: int = 0

    @property
    def estimated_size(self) -> int:
        """Size estimate in bytes; it counts the added rules only."""
        r = self.rule_count
        return (2 * r + bits(256 + r) * r) // 8 + 1


def _balance_words(
    terms: int, alpha: int, rlen: int, first_id: int, sequence: Sequence[int]
) -> Tuple[List[Pair], List[Optional[int]]]:
    """Build balanced rules for every word; return them and the word table.

    Entry ``k`` of the table is the symbol word ``k`` maps to; entry 0 is
    unused because word numbers start at 1.
    """
    shift_seq = terms - alpha - 256
    new_rules: List[Pair] = []
    table: List[Optional[int]] = [None]
    next_id = first_id

    def lift(value: int) -> int:
        return value + rlen if value >= 256 else value

    pos = 0
    size = len(sequence)
    while pos < size:
        end = pos
        word: List[int] = []
        while end < size and not 256 <= sequence[end] < terms:
            value = sequence[end]
            word.append(value - shift_seq if value >= 256 else value)
            end += 1
        if end == size:
            raise ValueError("dictionary sequence ends inside a word")
        if not word:
            word = [sequence[end]]
        while len(word) > 1:
            reduced: List[int] = []
            for left, right in zip(word[0::2], word[1::2]):
                new_rules.append(Pair(lift(left), lift(right)))
                reduced.append(next_id)
                next_id += 1
            if len(word) % 2:
                reduced.append(word[-1])
            word = reduced
        top = word[0]
        table.append(top + rlen if top >= 256 + alpha else top)
        pos = end + 1
    return new_rules, table


def merge_grammars(
    dict_terms: int,
    dict_rules: Rules,
    dict_sequence: Sequence[int],
    parse_header: Sequence[int],
    parse_rules: Rules,
    parse_sequence: Sequence[int],
) -> PostprocessResult:
    """Combine the dictionary and parse grammars.

    ``parse_header`` is ``(alpha, recursive_len, rlen)``: the parse alphabet
    size and the counts of parse rules to translate.  The header is kept as
    is; rules follow in the order translated parse rules, remaining parse
    rules, shifted dictionary rules, balanced word rules.
    """
    if len(parse_header) != 3:
        raise ValueError(f"parse header needs 3 integers, got {len(parse_header)}")
    alpha, recursive_len, rlen = (int(v) for v in parse_header)
    if alpha < 0:
        raise ValueError(f"parse alphabet size must be non-negative, got {alpha}")
    if not 0 <= recursive_len <= rlen:
        raise ValueError(f"invalid rule counts {recursive_len} and {rlen} in parse header")
    if rlen > len(parse_rules):
        raise ValueError(
            f"Read error: header announces {rlen} parse rules, found {len(parse_rules)}"
        )

    shift_rules = dict_terms - 256 - alpha - rlen
    shifted = [
        Pair(*(v - shift_rules if v >= 256 else v for v in rule)) for rule in dict_rules
    ]
    balanced, table = _balance_words(
        dict_terms, alpha, rlen, 256 + alpha + len(dict_rules), dict_sequence
    )

    def translate(value: int) -> int:
        if value >= alpha:
            return value
        if 0 < value < len(table):
            mapped = table[value]
            if mapped is not None:
                return mapped
        raise ValueError(f"parse symbol {value} names no dictionary word")

    translated = [
        Pair(translate(left), translate(right)) for left, right in parse_rules[:rlen]
    ]
    untouched = [Pair(left, right) for left, right in parse_rules[rlen:]]
    sequence = [translate(v) for v in parse_sequence]
    return PostprocessResult(
        header=(alpha, recursive_len, rlen),
        rules=translated + untouched + shifted + balanced,
        sequence=sequence,
        rule_count=len(dict_rules) + len(balanced),
    )


def _pairs(values: Sequence[int]) -> List[Pair]:
    return [Pair(left, right) for left, right in zip(values[0::2], values[1::2])]


def postprocess(basename: PathLike) -> PostprocessResult:
    """Turn ``basename.{dicz.int,parse}.[RC]`` into ``basename.[RC]``."""
    base = str(Path(basename))
    for ext in ("R", "C"):
        src, dst = f"{base}.parse.{ext}", f"{base}.{ext}"
        try:
            os.replace(src, dst)
        except OSError as exc:
            raise OSError(f"Cannot rename .parse.{ext} to {dst}: {exc}") from exc

    parse_r = read_ints(base + ".R")
    if len(parse_r) < 3:
        raise ValueError(f"Read error in {base}.R")
    body = parse_r[3:]
    if len(body) % 2:
        raise ValueError(f"Read error in {base}.R: odd number of rule symbols")

    dict_r = read_ints(base + ".dicz.int.R")
    if not dict_r:
        raise ValueError(f"Read error in {base}.dicz.int.R")
    dict_c = read_ints(base + ".dicz.int.C")
    parse_c = read_ints(base + ".C")

    result = merge_grammars(
        dict_r[0], _pairs(dict_r[1:]), dict_c, parse_r[:3], _pairs(body), parse_c
    )
    flat = list(result.header)
    for rule in result.rules:
        flat.extend(rule)
    write_ints(base + ".R", flat)
    write_ints(base + ".C", result.sequence)
    return result


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point; returns the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    err = sys.stderr
    err.write("==== Command line:\n")
    err.write("".join(f" {a}" for a in ["postproc", *args]) + "\n")
    if len(args) != 1:
        err.write(
            "Usage: postproc <file> makes <file>.[RC] from <file>.[dicz.int+parse].[RC]\n"
        )
        return 1
    try:
        result = postprocess(args[0])
    except (OSError, ValueError) as exc:
        err.write(f"{exc}\n")
        return 1
    est = result.estimated_size
    err.write("Prefix-Free + Repair succeeded\n")
    err.write(f"  Number of rules: {result.rule_count}\n")
    # the estimate leaves the final sequence out, as reported here
    err.write("  Final sequence length: 0 (integers)\n")
    err.write(f"  Estimated output size (bytes): {est}\n")
    sys.stdout.write(f"  Estimated output size (stdout): {est}\n")
    err.write("=== postprocessing completed!\n")
    return 0