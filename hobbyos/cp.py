"""Copy one file to another."""

from __future__ import annotations

import sys

_CHUNK = 256


def copy_file(src, dest) -> None:
    """Copy ``src`` to ``dest``; raise OSError naming the step that failed."""
    try:
        fsrc = open(src, "rb")
    except OSError as exc:
        raise OSError(exc.errno, f"failed to open for read: {src}", str(src)) from exc
    with fsrc:
        try:
            fdest = open(dest, "wb")
        except OSError as exc:
            raise OSError(exc.errno, f"failed to open for write: {dest}", str(dest)) from exc
        with fdest:
            while chunk := fsrc.read(_CHUNK):
                try:
                    fdest.write(chunk)
                except OSError as exc:
                    raise OSError(exc.errno, f"failed to write to {dest}", str(dest)) from exc


def main(argv=None) -> int:
    """Copy ``argv[0]`` to ``argv[1]``; return the exit status."""
    if argv is None:
        argv = sys.argv[1:]
    if len(argv) < 2:
        print("Usage: cp <src> <dest>")
        return 1
    try:
        copy_file(argv[0], argv[1])
    except OSError as exc:
        print(exc.strerror)
        return 1
    return 0