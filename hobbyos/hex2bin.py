"""Convert hexadecimal numbers to binary, or dump binary as hexadecimal."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass

USAGE = (
    "Usage: hex2bin [options] [in-file]\n"
    "Convert hexadecimal values to binary and write them to standard output\n"
    "  -h: show this help\n"
    "  -s <size>: number of bytes per unit\n"
    "      size = 1 (default), 2, 4, 8\n"
    "  -l: treat the binary as little endian\n"
    "  -r: reverse the direction and dump the binary as hexadecimal\n"
)

_VALID_SIZES = (1, 2, 4, 8)
_HEX_NUMBER = re.compile(r"\s*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]+)")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class Options:
    """Command-line settings."""

    reverse: bool = False
    size: int = 1
    little_endian: bool = False
    in_file: str | None = None
    show_help: bool = False


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def parse_args(argv) -> Options:
    """Parse options (without the program name); the first non-option is the file."""
    options = Options()
    args = list(argv)
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "-h":
            options.show_help = True
            return options
        if arg == "-s":
            i += 1
            if i >= len(args):
                raise ValueError("missing value for -s")
            size = _atoi(args[i])
            if size not in _VALID_SIZES:
                raise ValueError(f"invalid size: {size}")
            options.size = size
        elif arg == "-l":
            options.little_endian = True
        elif arg == "-r":
            options.reverse = True
        else:
            options.in_file = arg
            return options
        i += 1
    return options


def _check_size(size: int) -> None:
    if size not in _VALID_SIZES:
        raise ValueError(f"invalid size: {size}")


def hex_to_binary(text: str, size: int = 1, little_endian: bool = False) -> bytes:
    """Read whitespace-separated hex numbers and emit ``size`` bytes for each."""
    _check_size(size)
    mask = (1 << (8 * size)) - 1
    order = "little" if little_endian else "big"
    out = bytearray()
    pos = 0
    while True:
        match = _HEX_NUMBER.match(text, pos)
        if match is None:
            break
        value = int(match.group(2), 16)
        if match.group(1) == "-":
            value = -value
        value &= 0xFFFFFFFFFFFFFFFF
        out += (value & mask).to_bytes(size, order)
        pos = match.end()
    return bytes(out)


def binary_to_hex(data: bytes, size: int = 1, little_endian: bool = False) -> str:
    """Dump bytes as hex in units of ``size``, eight bytes per line."""
    _check_size(size)
    parts: list[str] = []
    line_bytes = 0
    data = bytes(data)
    for start in range(0, len(data), size):
        unit = data[start : start + size].ljust(size, b"\0")
        if line_bytes > 0:
            parts.append(" ")
        if little_endian:
            unit = unit[::-1]
        parts.append(unit.hex())
        line_bytes += size
        if line_bytes >= 8:
            parts.append("\n")
            line_bytes = 0
    return "".join(parts)


def main(argv=None) -> int:
    """Run the converter; return the exit status."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        options = parse_args(argv)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    if options.show_help:
        print(USAGE, end="")
        return 1

    if options.in_file is None:
        data = sys.stdin.buffer.read()
    else:
        try:
            with open(options.in_file, "rb") as fp:
                data = fp.read()
        except OSError as exc:
            print(f"failed to open in-file: {exc.strerror}", file=sys.stderr)
            return 1

    if options.reverse:
        sys.stdout.write(binary_to_hex(data, options.size, options.little_endian))
        sys.stdout.flush()
    else:
        result = hex_to_binary(data.decode("latin-1"), options.size, options.little_endian)
        sys.stdout.flush()
        sys.stdout.buffer.write(result)
        sys.stdout.buffer.flush()
    return 0