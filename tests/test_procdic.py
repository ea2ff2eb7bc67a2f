import pytest

from bigrepair.basics import read_ints, write_ints
from bigrepair.procdic import dictionary_to_ints, main, process_dictionary


def test_dictionary_to_ints_terminators():
    assert dictionary_to_ints(b"abc", [2, 1]) == [97, 98, 256, 99, 257]


def test_dictionary_to_ints_empty_word():
    result = dictionary_to_ints(b"x", [0, 1])
    assert result == [256, ord("x"), 257]


def test_dictionary_to_ints_no_words():
    assert dictionary_to_ints(b"", []) == []


def test_dictionary_to_ints_short_text():
    with pytest.raises(ValueError, match="Unexpected end"):
        dictionary_to_ints(b"ab", [3])


def test_dictionary_to_ints_trailing_text():
    with pytest.raises(ValueError, match="trailing"):
        dictionary_to_ints(b"abcd", [2])


def test_terminators_are_distinct_and_increasing():
    words = [b"hello", b"world", b"x", b"yz"]
    result = dictionary_to_ints(b"".join(words), [len(w) for w in words])
    terminators = [v for v in result if v >= 256]
    assert len(terminators) == len(words)
    assert terminators == sorted(set(terminators))
    assert [v for v in result if v < 256] == list(b"".join(words))


def test_process_dictionary(tmp_path):
    path = tmp_path / "d.dicz"
    path.write_bytes(b"##ab#cd")
    write_ints(str(path) + ".len", [4, 3])
    assert process_dictionary(path) == 2
    assert read_ints(str(path) + ".int") == list(b"##ab") + [256] + list(b"#cd") + [257]


def test_main_reports_count(tmp_path, capsys):
    path = tmp_path / "d"
    path.write_bytes(b"abc")
    write_ints(str(path) + ".len", [1, 2])
    assert main([str(path)]) == 0
    assert "2 strings" in capsys.readouterr().err


def test_main_trailing_chars_fails(tmp_path):
    path = tmp_path / "d"
    path.write_bytes(b"abcdef")
    write_ints(str(path) + ".len", [2])
    assert main([str(path)]) == 1


def test_main_missing_lengths(tmp_path):
    path = tmp_path / "d"
    path.write_bytes(b"abc")
    assert main([str(path)]) == 1


def test_main_bad_arguments():
    assert main([]) == 1