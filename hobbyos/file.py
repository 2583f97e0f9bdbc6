"""The file descriptor interface and helpers built on top of it."""

from __future__ import annotations

from abc import ABC, abstractmethod


class FileDescriptor(ABC):
    """An open file that bytes can be read from and written to."""

    @abstractmethod
    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes from the current read position."""

    @abstractmethod
    def write(self, data: bytes) -> int:
        """Write ``data`` at the current write position; return the byte count."""

    @abstractmethod
    def size(self) -> int:
        """Current size of the file in bytes."""

    def is_terminal(self) -> bool:
        """True if the descriptor refers to a terminal."""
        return False

    @abstractmethod
    def load(self, size: int, offset: int) -> bytes:
        """Read up to ``size`` bytes at ``offset`` without moving the read position."""


def print_to_fd(fd: FileDescriptor, format: str, *args) -> int:
    """Write ``format % args`` to ``fd`` and return the number of bytes written."""
    data = (format % args).encode("utf-8")
    fd.write(data)
    return len(data)


def _delim_byte(delim) -> int:
    if isinstance(delim, int):
        return delim & 0xFF
    raw = delim.encode("utf-8") if isinstance(delim, str) else bytes(delim)
    if len(raw) != 1:
        raise ValueError("delimiter must be a single byte")
    return raw[0]


def read_delim(fd: FileDescriptor, delim, max_len: int) -> bytes:
    """Read bytes up to and including ``delim``, at most ``max_len - 1`` of them."""
    stop = _delim_byte(delim)
    out = bytearray()
    while len(out) < max_len - 1:
        chunk = fd.read(1)
        if not chunk:
            break
        out += chunk[:1]
        if chunk[0] == stop:
            break
    return bytes(out)