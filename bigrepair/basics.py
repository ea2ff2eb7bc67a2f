"""Shared primitives: symbol pairs, bit widths and int32 file I/O."""

from __future__ import annotations

import os
import struct
from pathlib import Path
from typing import Iterable, NamedTuple, Union

INT_SIZE = 4
"""Size in bytes of one stored integer."""

NULL_FREQ = -(1 << 31)
"""Marker for a link whose pair record has been removed."""

PathLike = Union[str, "os.PathLike[str]"]


class Pair(NamedTuple):
    """An ordered pair of adjacent symbols."""

    left: int
    right: int


def bits(x: int) -> int:
    """Return the number of bits needed to write the non-negative integer ``x``."""
    if x < 0:
        raise ValueError(f"bits() needs a non-negative value, got {x}")
    return x.bit_length()


def read_ints(path: PathLike) -> list[int]:
    """Read a file of native-order 32-bit signed integers.

    Trailing bytes that do not make up a whole integer are ignored.
    """
    data = Path(path).read_bytes()
    count = len(data) // INT_SIZE
    return list(struct.unpack(f"={count}i", data[: count * INT_SIZE]))


def write_ints(path: PathLike, values: Iterable[int]) -> None:
    """Write integers to ``path`` as native-order 32-bit signed integers."""
    items = list(values)
    try:
        payload = struct.pack(f"={len(items)}i", *items)
    except struct.error as exc:
        raise ValueError(f"value does not fit in a 32-bit integer: {exc}") from exc
    Path(path).write_bytes(payload)