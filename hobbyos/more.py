"""Show text one page at a time."""

from __future__ import annotations

import re
import sys
from collections.abc import Iterator, Sequence

DEFAULT_PAGE_SIZE = 10
_LINE_BUFFER = 256
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _fgets_lines(data: bytes, bufsize: int) -> Iterator[bytes]:
    limit = bufsize - 1
    start = 0
    while start < len(data):
        end = data.find(b"\n", start)
        end = len(data) if end < 0 else end + 1
        end = min(end, start + limit)
        yield data[start:end]
        start = end


def parse_args(argv: Sequence[str]) -> tuple[int, str | None]:
    """Return (page size, file path or None) from ``-N [file]`` arguments."""
    page_size = DEFAULT_PAGE_SIZE
    index = 0
    if argv and len(argv[0]) >= 2 and argv[0][0] == "-" and argv[0][1].isdigit():
        match = _LEADING_INT.match(argv[0][1:])
        page_size = int(match.group(1)) if match else 0
        index = 1
    path = argv[index] if len(argv) > index else None
    return page_size, path


def pages(lines: Sequence, page_size: int) -> Iterator[list]:
    """Split ``lines`` into consecutive pages of ``page_size`` lines."""
    if page_size <= 0:
        raise ValueError(f"page size must be positive: {page_size}")
    lines = list(lines)
    for start in range(0, len(lines), page_size):
        yield lines[start : start + page_size]


def _open_key_source(from_stdin: bool):
    if not from_stdin:
        return sys.stdin, False
    try:
        return open("/dev/tty"), True
    except OSError:
        return None, False


def main(argv=None) -> int:
    """Page through the file in ``argv`` (or stdin), waiting for a key between pages."""
    if argv is None:
        argv = sys.argv[1:]
    page_size, path = parse_args(argv)
    if page_size <= 0:
        print(f"invalid page size: {page_size}", file=sys.stderr)
        return 1

    if path is not None:
        try:
            with open(path, "rb") as fp:
                data = fp.read()
        except OSError:
            print(f"failed to open '{path}'", file=sys.stderr)
            return 1
    else:
        data = sys.stdin.buffer.read()

    keys, owned = _open_key_source(path is None)
    out = sys.stdout.buffer
    try:
        for number, page in enumerate(pages(list(_fgets_lines(data, _LINE_BUFFER)), page_size)):
            if number > 0:
                out.flush()
                sys.stderr.write("---more---\n")
                sys.stderr.flush()
                if keys is not None and not keys.readline():
                    return 0
            for line in page:
                out.write(line)
        out.flush()
    finally:
        if owned:
            keys.close()
    return 0