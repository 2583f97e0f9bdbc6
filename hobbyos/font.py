"""Bitmap font rendering and UTF-8 decoding helpers."""

from __future__ import annotations

from hobbyos.graphics import PixelColor, PixelWriter, Vector2D

GLYPH_HEIGHT = 16
GLYPH_WIDTH = 8


class Font:
    """A half-width bitmap font: 16 one-byte rows per glyph, indexed by code."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)

    def glyph(self, c) -> bytes | None:
        """The 16 rows of the glyph for ``c``, or None if the font lacks it."""
        code = ord(c) if isinstance(c, str) else int(c)
        index = GLYPH_HEIGHT * code
        if code < 0 or index >= len(self._data):
            return None
        return self._data[index : index + GLYPH_HEIGHT]


def write_ascii(
    writer: PixelWriter, pos: Vector2D, c, color: PixelColor, font: Font
) -> None:
    """Draw one single-byte character; bytes of 0x80 and above draw nothing."""
    code = (ord(c) if isinstance(c, str) else int(c)) & 0xFF
    if code >= 0x80:
        return
    rows = font.glyph(code)
    if rows is None:
        return
    for dy, row in enumerate(rows):
        for dx in range(GLYPH_WIDTH):
            if (row << dx) & 0x80:
                writer.write(pos + Vector2D(dx, dy), color)


def count_utf8_size(c: int) -> int:
    """Length of the UTF-8 sequence introduced by lead byte ``c`` (0 if invalid)."""
    if c < 0x80:
        return 1
    if 0xC0 <= c < 0xE0:
        return 2
    if 0xE0 <= c < 0xF0:
        return 3
    if 0xF0 <= c < 0xF8:
        return 4
    return 0


def convert_utf8_to32(data: bytes) -> tuple[int, int]:
    """Decode the first UTF-8 sequence of ``data`` into (code point, byte count).

    An invalid lead byte yields (0, 0). Missing continuation bytes read as zero.
    """
    if not data:
        return 0, 0
    size = count_utf8_size(data[0])
    if size == 0:
        return 0, 0
    raw = bytes(data[:size]).ljust(size, b"\0")
    if size == 1:
        return raw[0], 1
    lead_mask = {2: 0x1F, 3: 0x0F, 4: 0x07}[size]
    value = raw[0] & lead_mask
    for b in raw[1:]:
        value = (value << 6) | (b & 0x3F)
    return value, size


def is_hankaku(c: int) -> bool:
    """True for characters drawn one cell wide."""
    return c <= 0x7F


def write_unicode(
    writer: PixelWriter, pos: Vector2D, c: int, color: PixelColor, font: Font
) -> bool:
    """Draw one character.

    Characters outside ASCII have no glyph source and are drawn as two '?'
    cells; the function then returns False. Otherwise it returns True.
    """
    if c <= 0x7F:
        write_ascii(writer, pos, c, color, font)
        return True
    write_ascii(writer, pos, "?", color, font)
    write_ascii(writer, pos + Vector2D(GLYPH_WIDTH, 0), "?", color, font)
    return False


def write_string(
    writer: PixelWriter, pos: Vector2D, s, color: PixelColor, font: Font
) -> None:
    """Draw a UTF-8 string, stopping at the end or at a NUL byte."""
    data = s.encode("utf-8") if isinstance(s, str) else bytes(s)
    x = 0
    i = 0
    while i < len(data) and data[i] != 0:
        code, size = convert_utf8_to32(data[i:])
        write_unicode(writer, pos + Vector2D(GLYPH_WIDTH * x, 0), code, color, font)
        i += size if size > 0 else 1
        x += 1 if is_hankaku(code) else 2