import io

import pytest

from hobbyos.more import DEFAULT_PAGE_SIZE, main, pages, parse_args


def test_parse_args_defaults():
    assert parse_args([]) == (DEFAULT_PAGE_SIZE, None)
    assert parse_args(["file.txt"]) == (DEFAULT_PAGE_SIZE, "file.txt")


def test_parse_args_page_size():
    assert parse_args(["-5", "file.txt"]) == (5, "file.txt")
    assert parse_args(["-20"]) == (20, None)


def test_parse_args_non_numeric_option_is_file():
    assert parse_args(["-x"]) == (DEFAULT_PAGE_SIZE, "-x")


def test_pages_cover_all_lines():
    lines = [f"{i}\n" for i in range(23)]
    result = list(pages(lines, 7))
    assert [line for page in result for line in page] == lines
    assert all(len(page) <= 7 for page in result)
    assert all(len(page) == 7 for page in result[:-1])


def test_pages_empty():
    assert list(pages([], 3)) == []


def test_pages_rejects_zero():
    with pytest.raises(ValueError):
        list(pages(["a"], 0))


def test_main_short_file(tmp_path, capsysbinary):
    path = tmp_path / "in.txt"
    content = b"one\ntwo\nthree\n"
    path.write_bytes(content)
    assert main([str(path)]) == 0
    captured = capsysbinary.readouterr()
    assert captured.out == content
    assert b"---more---" not in captured.err


def test_main_stops_when_no_key(tmp_path, capsysbinary, monkeypatch):
    path = tmp_path / "in.txt"
    lines = [f"line {i}\n".encode() for i in range(5)]
    path.write_bytes(b"".join(lines))
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    assert main(["-2", str(path)]) == 0
    captured = capsysbinary.readouterr()
    assert captured.out == b"".join(lines[:2])
    assert b"---more---" in captured.err


def test_main_continues_on_key(tmp_path, capsysbinary, monkeypatch):
    path = tmp_path / "in.txt"
    content = b"a\nb\nc\n"
    path.write_bytes(content)
    monkeypatch.setattr("sys.stdin", io.StringIO("\n\n"))
    assert main(["-1", str(path)]) == 0
    assert capsysbinary.readouterr().out == content


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing")]) == 1
    assert "failed to open" in capsys.readouterr().err