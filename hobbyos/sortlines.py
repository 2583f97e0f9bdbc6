"""Sort the lines of a file or of standard input."""

from __future__ import annotations

import sys
from collections.abc import Iterator

_LINE_BUFFER = 1024


def _fgets_lines(data: bytes, bufsize: int) -> Iterator[bytes]:
    limit = bufsize - 1
    start = 0
    while start < len(data):
        end = data.find(b"\n", start)
        end = len(data) if end < 0 else end + 1
        end = min(end, start + limit)
        yield data[start:end]
        start = end


def _signed_key(line) -> list[int]:
    raw = line.encode("utf-8") if isinstance(line, str) else bytes(line)
    return [b - 256 if b >= 0x80 else b for b in raw]


def sort_lines(lines):
    """Sort lines byte-wise, treating bytes as signed; a prefix sorts first."""
    return sorted(lines, key=_signed_key)


def main(argv=None) -> int:
    """Print the sorted lines of the file in ``argv`` (or of stdin)."""
    if argv is None:
        argv = sys.argv[1:]
    if argv:
        try:
            with open(argv[0], "rb") as fp:
                data = fp.read()
        except OSError:
            print(f"failed to open '{argv[0]}'", file=sys.stderr)
            return 1
    else:
        data = sys.stdin.buffer.read()

    out = sys.stdout.buffer
    for line in sort_lines(_fgets_lines(data, _LINE_BUFFER)):
        out.write(line)
    out.flush()
    return 0