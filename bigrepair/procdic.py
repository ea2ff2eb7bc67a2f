"""Turn a prefix-free parsing dictionary into int32 words with unique terminators."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .basics import PathLike, read_ints, write_ints

FIRST_TERMINATOR = 256


def dictionary_to_ints(text: bytes, lengths: Iterable[int]) -> List[int]:
    """Split ``text`` into words of the given lengths, each followed by a terminator.

    Bytes become integers 0..255; the k-th word is closed by ``256 + k``.
    """
    out: List[int] = []
    pos = 0
    terminator = FIRST_TERMINATOR
    for length in lengths:
        length = max(length, 0)
        word = text[pos : pos + length]
        if len(word) < length:
            raise ValueError("Unexpected end of dictionary")
        out.extend(word)
        out.append(terminator)
        terminator += 1
        pos += length
    if pos < len(text):
        raise ValueError("Unexpected trailing chars in dictionary")
    return out


def process_dictionary(path: PathLike) -> int:
    """Read ``path`` and ``path.len``, write ``path.int``; return the word count."""
    base = str(Path(path))
    text = Path(base).read_bytes()
    lengths = read_ints(base + ".len")
    values = dictionary_to_ints(text, lengths)
    write_ints(base + ".int", values)
    return len(lengths)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point; returns the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    err = sys.stderr
    err.write("==== Command line:\n")
    err.write("".join(f" {a}" for a in ["procdic", *args]) + "\n")
    if len(args) != 1:
        err.write("Usage: procdic <dictionaryfilename>\n\n")
        return 1
    try:
        count = process_dictionary(args[0])
    except OSError as exc:
        err.write(f"Cannot open file: {exc}\n")
        return 1
    except ValueError as exc:
        err.write(f"{exc}\n")
        return 1
    err.write(f"{count} strings\n")
    err.write("=== Preprocessing completed!\n")
    return 0