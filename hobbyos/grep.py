"""Print the lines that match a regular expression."""

from __future__ import annotations

import re
import sys
from collections.abc import Iterable, Iterator

_LINE_BUFFER = 256
_HIGHLIGHT = "\033[91m"
_RESET = "\033[0m"


def _fgets_lines(data: bytes, bufsize: int) -> Iterator[bytes]:
    limit = bufsize - 1
    start = 0
    while start < len(data):
        end = data.find(b"\n", start)
        end = len(data) if end < 0 else end + 1
        end = min(end, start + limit)
        yield data[start:end]
        start = end


def grep_lines(pattern, lines: Iterable[str], highlight: bool = False) -> Iterator[str]:
    """Yield each line containing a match; with ``highlight`` the match is coloured."""
    regex = re.compile(pattern)
    for line in lines:
        match = regex.search(line)
        if match is None:
            continue
        if highlight:
            yield (
                line[: match.start()]
                + _HIGHLIGHT
                + match.group(0)
                + _RESET
                + line[match.end():]
            )
        else:
            yield line


def main(argv=None) -> int:
    """Search the file in ``argv[1]`` (or stdin) for the pattern ``argv[0]``."""
    if argv is None:
        argv = sys.argv[1:]
    if not argv:
        print("Usage: grep <pattern> [<file>]", file=sys.stderr)
        return 1
    try:
        pattern = re.compile(argv[0])
    except re.error as exc:
        print(f"invalid pattern: {exc}", file=sys.stderr)
        return 1

    if len(argv) >= 2:
        try:
            with open(argv[1], "rb") as fp:
                data = fp.read()
        except OSError:
            print(f"failed to open: {argv[1]}", file=sys.stderr)
            return 1
    else:
        data = sys.stdin.buffer.read()

    lines = (
        chunk.decode("utf-8", errors="surrogateescape")
        for chunk in _fgets_lines(data, _LINE_BUFFER)
    )
    out = sys.stdout.buffer
    for line in grep_lines(pattern, lines, sys.stdout.isatty()):
        out.write(line.encode("utf-8", errors="surrogateescape"))
    out.flush()
    return 0