import struct

import pytest

from bigrepair.basics import INT_SIZE, Pair, bits, read_ints, write_ints


def test_bits_of_zero_is_zero():
    assert bits(0) == 0


def test_bits_of_256():
    assert bits(256) == 9


@pytest.mark.parametrize("x", [1, 2, 3, 255, 256, 257, 1023, 1 << 31, (1 << 40) + 7])
def test_bits_bounds_value(x):
    width = bits(x)
    assert 2 ** (width - 1) <= x < 2**width


def test_bits_negative_raises():
    with pytest.raises(ValueError):
        bits(-1)


def test_pair_fields_and_equality():
    pair = Pair(3, 4)
    assert pair.left == 3
    assert pair.right == 4
    assert pair == (3, 4)
    assert {pair: "x"}[Pair(3, 4)] == "x"


def test_write_read_round_trip(tmp_path):
    values = [0, 255, 256, -1, 2**31 - 1, -(2**31)]
    path = tmp_path / "seq.int"
    write_ints(path, values)
    assert read_ints(path) == values
    assert path.stat().st_size == INT_SIZE * len(values)


def test_written_layout_is_native_int32(tmp_path):
    path = tmp_path / "seq.int"
    write_ints(path, [1, 300, -5])
    assert path.read_bytes() == struct.pack("=3i", 1, 300, -5)


def test_read_ignores_trailing_partial_integer(tmp_path):
    path = tmp_path / "seq.int"
    path.write_bytes(struct.pack("=2i", 7, 9) + b"\x01\x02")
    assert read_ints(path) == [7, 9]


def test_read_empty_file(tmp_path):
    path = tmp_path / "empty.int"
    path.write_bytes(b"")
    assert read_ints(path) == []


def test_write_accepts_generator(tmp_path):
    path = tmp_path / "gen.int"
    write_ints(path, (v * 2 for v in range(5)))
    assert read_ints(path) == [v * 2 for v in range(5)]


def test_write_out_of_range_raises(tmp_path):
    with pytest.raises(ValueError):
        write_ints(tmp_path / "bad.int", [2**31])