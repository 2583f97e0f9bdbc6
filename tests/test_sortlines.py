from hobbyos.sortlines import main, sort_lines


def test_sort_ascii_matches_sorted():
    lines = [b"pear\n", b"apple\n", b"fig\n", b"banana\n"]
    assert sort_lines(lines) == sorted(lines)


def test_prefix_sorts_first():
    assert sort_lines([b"abc", b"ab"]) == [b"ab", b"abc"]


def test_high_bytes_sort_before_ascii():
    result = sort_lines([b"a\n", b"\xc3\xa9\n"])
    assert result[0] == b"\xc3\xa9\n"


def test_str_lines_are_sorted_and_returned_unchanged():
    lines = ["b\n", "é\n", "a\n"]
    result = sort_lines(lines)
    assert sorted(result) == sorted(lines)
    assert result[0] == "é\n"


def test_sort_is_idempotent():
    lines = [b"x", b"\xff", b"", b"x\n", b"A"]
    once = sort_lines(lines)
    assert sort_lines(once) == once


def test_main_sorts_file(tmp_path, capsysbinary):
    path = tmp_path / "in.txt"
    path.write_bytes(b"c\nb\na\n")
    assert main([str(path)]) == 0
    assert capsysbinary.readouterr().out == b"a\nb\nc\n"


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "none.txt")]) == 1
    assert "failed to open" in capsys.readouterr().err