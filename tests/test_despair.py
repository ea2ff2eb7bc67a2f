import pytest

from bigrepair.basics import Pair, read_ints, write_ints
from bigrepair.despair import (
    decompress,
    decompress_file,
    expand,
    main_chars,
    main_ints,
    read_grammar,
)
from bigrepair.irepair import compress, compress_file


def test_expand_terminal_is_itself():
    assert expand(5, 10, []) == [5]


def test_expand_single_rule():
    assert expand(256, 256, [Pair(97, 98)]) == [97, 98]


def test_expand_nested_rules():
    rules = [Pair(1, 2), Pair(3, 0)]
    assert expand(4, 3, rules) == [1, 2, 0]


def test_expand_unknown_rule_raises():
    with pytest.raises(ValueError):
        expand(7, 3, [Pair(0, 1)])


def test_decompress_depth():
    rules = [Pair(1, 2), Pair(3, 0)]
    _, stats = decompress(3, rules, [4, 0])
    assert stats.max_depth == 2
    assert stats.original_length == 4


@pytest.mark.parametrize(
    "data",
    [
        [1, 2, 1, 2, 1, 2, 3],
        [0, 0, 0, 0, 0, 0, 0, 0, 0],
        [5, 3, 5, 3, 9, 5, 3, 5, 3, 9, 1],
        [7],
    ],
)
def test_decompress_round_trip(data):
    grammar = compress(data)
    output, stats = decompress(grammar.alpha, grammar.rules, grammar.sequence)
    assert output == data
    assert stats.rules == len(grammar.rules)
    assert stats.sequence_length == len(grammar.sequence)


def test_read_grammar(tmp_path):
    base = tmp_path / "g"
    write_ints(str(base) + ".R", [3, 0, 1, 3, 2])
    write_ints(str(base) + ".C", [4, 0])
    alpha, rules, sequence = read_grammar(base)
    assert alpha == 3
    assert rules == [Pair(0, 1), Pair(3, 2)]
    assert sequence == [4, 0]


def test_read_grammar_empty_rules_file(tmp_path):
    base = tmp_path / "g"
    (tmp_path / "g.R").write_bytes(b"")
    write_ints(str(base) + ".C", [])
    with pytest.raises(ValueError):
        read_grammar(base)


def test_decompress_file_ints(tmp_path):
    data = [4, 2, 4, 2, 4, 2, 8, 4, 2]
    path = tmp_path / "seq"
    write_ints(path, data)
    compress_file(path)
    stats = decompress_file(path, as_ints=True)
    assert read_ints(str(path) + ".out") == data
    assert stats.original_length == len(data)


def test_decompress_file_chars(tmp_path):
    text = b"abracadabra abracadabra"
    path = tmp_path / "txt"
    write_ints(path, list(text))
    compress_file(path)
    stats = decompress_file(path)
    assert stats.original_length == len(text)
    assert (tmp_path / "txt.out").read_bytes() == text


def test_main_ints_round_trip(tmp_path, capsys):
    data = [1, 2, 3, 1, 2, 3, 1, 2, 3]
    path = tmp_path / "m"
    write_ints(path, data)
    compress_file(path)
    assert main_ints([str(path)]) == 0
    assert "IDesPair succeeded" in capsys.readouterr().err
    assert read_ints(str(path) + ".out") == data


def test_main_chars_bad_arguments():
    assert main_chars([]) == 1


def test_main_ints_missing_file(tmp_path):
    assert main_ints([str(tmp_path / "absent")]) == 1