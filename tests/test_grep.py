import re

import pytest

from hobbyos.grep import grep_lines, main


def test_plain_matches():
    lines = ["abbc\n", "xyz\n", "b\n"]
    assert list(grep_lines("b+", lines, False)) == ["abbc\n", "b\n"]


def test_highlighted_match():
    result = list(grep_lines("b+", ["abbc\n"], True))
    assert result == ["a\033[91mbb\033[0mc\n"]


def test_highlight_removed_gives_original():
    lines = ["one two\n", "three\n", "two\n"]
    plain = list(grep_lines("two", lines, False))
    coloured = list(grep_lines("two", lines, True))
    stripped = [s.replace("\033[91m", "").replace("\033[0m", "") for s in coloured]
    assert stripped == plain


def test_compiled_pattern_accepted():
    assert list(grep_lines(re.compile("^x"), ["xa\n", "ax\n"])) == ["xa\n"]


def test_invalid_pattern_raises():
    with pytest.raises(re.error):
        list(grep_lines("(", ["a\n"]))


def test_main_usage(capsys):
    assert main([]) == 1
    assert "Usage" in capsys.readouterr().err


def test_main_file(tmp_path, capsysbinary):
    path = tmp_path / "in.txt"
    path.write_bytes(b"alpha\nbeta\ngamma\n")
    assert main(["a$", str(path)]) == 0
    assert capsysbinary.readouterr().out == b"alpha\nbeta\ngamma\n"


def test_main_missing_file(tmp_path, capsys):
    assert main(["x", str(tmp_path / "missing")]) == 1
    assert "failed to open" in capsys.readouterr().err