"""Expansion of RePair grammars back into the text they encode."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple

from .basics import Pair, PathLike, bits, read_ints, write_ints

Rules = Sequence[Tuple[int, int]]


@dataclass(frozen=True)
class DecompressionStats:
    """Figures gathered while expanding a grammar."""

    alpha: int
    rules: int
    sequence_length: int
    original_length: int
    max_depth: int


def _rule(symbol: int, alpha: int, rules: Rules) -> Tuple[int, int]:
    index = symbol - alpha
    if index >= len(rules):
        raise ValueError(
            f"symbol {symbol} refers to rule {index}, but there are only {len(rules)} rules"
        )
    return rules[index]


def _walk(symbol: int, alpha: int, rules: Rules) -> Iterator[Tuple[int, int]]:
    """Yield the terminals under ``symbol`` left to right, with their depths."""
    stack = [(symbol, 0)]
    while stack:
        current, depth = stack.pop()
        if current < 0:
            raise ValueError(f"symbol {current} is negative")
        while current >= alpha:
            left, right = _rule(current, alpha, rules)
            depth += 1
            stack.append((right, depth))
            current = left
            if current < 0:
                raise ValueError(f"symbol {current} is negative")
        yield current, depth


def expand(symbol: int, alpha: int, rules: Rules) -> List[int]:
    """Return the terminals that ``symbol`` derives.

    Symbols below ``alpha`` are terminals; symbol ``alpha + k`` is rule ``k``.
    """
    return [terminal for terminal, _ in _walk(symbol, alpha, rules)]


def decompress(
    alpha: int, rules: Rules, sequence: Sequence[int]
) -> Tuple[List[int], DecompressionStats]:
    """Expand every symbol of ``sequence`` and return the text with statistics."""
    output: List[int] = []
    max_depth = 0
    for symbol in sequence:
        for terminal, depth in _walk(symbol, alpha, rules):
            output.append(terminal)
            if depth > max_depth:
                max_depth = depth
    stats = DecompressionStats(
        alpha=alpha,
        rules=len(rules),
        sequence_length=len(sequence),
        original_length=len(output),
        max_depth=max_depth,
    )
    return output, stats


def read_grammar(basename: PathLike) -> Tuple[int, List[Pair], List[int]]:
    """Read ``basename.R`` and ``basename.C`` into ``(alpha, rules, sequence)``."""
    base = str(Path(basename))
    header = read_ints(base + ".R")
    if not header:
        raise ValueError(f"cannot read file {base}.R")
    alpha = header[0]
    body = header[1:]
    rules = [Pair(left, right) for left, right in zip(body[0::2], body[1::2])]
    sequence = read_ints(base + ".C")
    return alpha, rules, sequence


def decompress_file(basename: PathLike, as_ints: bool = False) -> DecompressionStats:
    """Expand ``basename.[RC]`` into ``basename.out``.

    With ``as_ints`` the output holds 32-bit integers, otherwise one byte per
    terminal.
    """
    alpha, rules, sequence = read_grammar(basename)
    output, stats = decompress(alpha, rules, sequence)
    target = str(Path(basename)) + ".out"
    if as_ints:
        write_ints(target, output)
    else:
        Path(target).write_bytes(bytes(symbol & 0xFF for symbol in output))
    return stats


def _estimated_size(stats: DecompressionStats, as_ints: bool) -> int:
    n, c = stats.rules, stats.sequence_length
    width = bits(max(n + stats.alpha - 1, 0)) if as_ints else bits(n + 256)
    return (2 * n + (n + c) * width) // 8 + 1


def _run(argv: Optional[Sequence[str]], as_ints: bool) -> int:
    name = "idespair" if as_ints else "despair"
    args = list(sys.argv[1:] if argv is None else argv)
    err = sys.stderr
    err.write("==== Command line:\n")
    err.write("".join(f" {a}" for a in [name, *args]) + "\n")
    if len(args) != 1:
        if as_ints:
            err.write(
                f"Usage: {name} <filename>\n"
                "Decompresses <filename> from its .C and .R extensions.\n"
                "Decompressed file is <filename>.out\n"
                "This is a version for prefix-free parsing with integer symbols\n"
            )
        else:
            err.write(
                f"Usage: {name} <filename>\n"
                "Decompresses <filename> from its .C and .R extensions.\n"
                " Decompressed file is <filename>.out\n"
                "This is a version for prefix-free parsing\n"
            )
        return 1
    try:
        stats = decompress_file(args[0], as_ints=as_ints)
    except (OSError, ValueError) as exc:
        err.write(f"Error: {exc}\n")
        return 1
    est = _estimated_size(stats, as_ints)
    if as_ints:
        err.write("IDesPair succeeded\n")
        err.write(f"   Original ints: {stats.original_length}\n")
        err.write(f"   Size of the original input alphabet: {stats.alpha}\n")
        denominator = stats.original_length * bits(max(stats.alpha - 1, 0))
        ratio = 100.0 * 8 * est / denominator if denominator else float("nan")
    else:
        err.write("DesPair succeeded\n")
        err.write(f"   Original chars: {stats.original_length}\n")
        denominator = stats.original_length
        ratio = 100.0 * est / denominator if denominator else float("nan")
    err.write(f"   Number of rules: {stats.rules}\n")
    err.write(f"   Compressed sequence length: {stats.sequence_length} (integers)\n")
    err.write(f"   Maximum rule depth: {stats.max_depth}\n")
    err.write(f"   Estimated output size (bytes): {est}\n")
    err.write(f"   Compression ratio: {ratio:0.2f}%\n")
    return 0


def main_chars(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point writing bytes; returns the exit status."""
    return _run(argv, as_ints=False)


def main_ints(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point writing 32-bit integers; returns the exit status."""
    return _run(argv, as_ints=True)