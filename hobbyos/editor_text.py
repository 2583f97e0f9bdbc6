"""Text handling for the editor: UTF-8 lines, cell layout and the save dialog."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Sequence

INVALID_BYTE = 0x80000000

CHAR_WIDTH = 8
CHAR_HEIGHT = 16

DIALOG_WIDTH = CHAR_WIDTH * 31
DIALOG_HEIGHT = CHAR_HEIGHT * 4 + CHAR_HEIGHT // 2

DIALOG_SAVE_BX = CHAR_WIDTH * 1
DIALOG_SAVE_BY = CHAR_HEIGHT * 2
DIALOG_SAVE_BW = CHAR_WIDTH * 9
DIALOG_SAVE_BH = CHAR_HEIGHT * 2
DIALOG_DISCARD_BX = CHAR_WIDTH * 11
DIALOG_DISCARD_BY = CHAR_HEIGHT * 2
DIALOG_DISCARD_BW = CHAR_WIDTH * 9
DIALOG_DISCARD_BH = CHAR_HEIGHT * 2
DIALOG_CANCEL_BX = CHAR_WIDTH * 21
DIALOG_CANCEL_BY = CHAR_HEIGHT * 2
DIALOG_CANCEL_BW = CHAR_WIDTH * 9
DIALOG_CANCEL_BH = CHAR_HEIGHT * 2

TAB = 0x09
NEWLINE = 0x0A


class DialogButton(enum.Enum):
    """Which button of the save dialog a point falls on."""

    NONE = 0
    SAVE = 1
    DISCARD = 2
    CANCEL = 3


_BUTTON_AREAS = (
    (DialogButton.SAVE, DIALOG_SAVE_BX, DIALOG_SAVE_BY, DIALOG_SAVE_BW, DIALOG_SAVE_BH),
    (
        DialogButton.DISCARD,
        DIALOG_DISCARD_BX,
        DIALOG_DISCARD_BY,
        DIALOG_DISCARD_BW,
        DIALOG_DISCARD_BH,
    ),
    (
        DialogButton.CANCEL,
        DIALOG_CANCEL_BX,
        DIALOG_CANCEL_BY,
        DIALOG_CANCEL_BW,
        DIALOG_CANCEL_BH,
    ),
)

_SEQUENCES = (
    (0xE0, 0xC0, 1, 0x1F),
    (0xF0, 0xE0, 2, 0x0F),
    (0xF8, 0xF0, 3, 0x07),
)


def decode_utf8_lines(data: bytes) -> list[list[int]]:
    """Split ``data`` into lines of code points.

    Bytes that do not decode are kept as ``INVALID_BYTE | byte``. There is
    always at least one line; a trailing newline yields an empty last line.
    """
    lines: list[list[int]] = []
    current: list[int] = []
    it = iter(bytes(data))
    for c in it:
        if c == NEWLINE:
            lines.append(current)
            current = []
            continue
        if c < 0x80:
            current.append(c)
            continue
        for lead_mask, lead_value, extra, value_mask in _SEQUENCES:
            if c & lead_mask == lead_value:
                break
        else:
            current.append(INVALID_BYTE | c)
            continue
        tail = [next(it, None) for _ in range(extra)]
        if all(b is not None and b & 0xC0 == 0x80 for b in tail):
            value = c & value_mask
            for b in tail:
                value = (value << 6) | (b & 0x3F)
            current.append(value)
        else:
            current.append(INVALID_BYTE | c)
            current.extend(INVALID_BYTE | b for b in tail if b is not None)
    lines.append(current)
    return lines


def load_file(path) -> list[list[int]]:
    """Read a file as lines of code points; a missing file gives one empty line."""
    try:
        with open(path, "rb") as fp:
            data = fp.read()
    except FileNotFoundError:
        return [[]]
    return decode_utf8_lines(data)


def encode_char(c: int) -> bytes:
    """Encode one code point as UTF-8; raise ValueError if it cannot be encoded."""
    if c < 0:
        raise ValueError(f"invalid character 0x{c:x}")
    if c < 0x80:
        return bytes((c,))
    if c < 0x800:
        return bytes((0xC0 | ((c >> 6) & 0x1F), 0x80 | (c & 0x3F)))
    if c < 0x10000:
        return bytes(
            (0xE0 | ((c >> 12) & 0x0F), 0x80 | ((c >> 6) & 0x3F), 0x80 | (c & 0x3F))
        )
    if c < 0x110000:
        return bytes(
            (
                0xF0 | ((c >> 18) & 0x07),
                0x80 | ((c >> 12) & 0x3F),
                0x80 | ((c >> 6) & 0x3F),
                0x80 | (c & 0x3F),
            )
        )
    raise ValueError(f"invalid character 0x{c:x}")


def encode_lines(lines: Iterable[Sequence[int]]) -> bytes:
    """Encode lines of code points as UTF-8 joined by newlines."""
    return b"\n".join(b"".join(encode_char(c) for c in line) for line in lines)


def save_file(path, lines: Iterable[Sequence[int]]) -> None:
    """Write lines to ``path``; raise ValueError if no file is given or a char is invalid."""
    if path is None:
        raise ValueError("cannot save because no file is opened")
    data = encode_lines(lines)
    with open(path, "wb") as fp:
        fp.write(data)


def char_cell_width(c: int) -> int:
    """Number of screen cells the editor uses to draw ``c``."""
    if (c & INVALID_BYTE) or (c < 0x20 and c != TAB):
        return 2
    if c == TAB:
        return 1
    try:
        encode_char(c)
    except ValueError:
        return 1
    return 1 if c < 0x80 else 2


def get_char_range(char_idx: Sequence[int], pos: int) -> tuple[int, int]:
    """Return (first cell, cell count) of the character at cell ``pos``.

    Past the end of the text the result is (cell after the last char, 0).
    """
    if pos < 0 or pos >= len(char_idx) or char_idx[pos] < 0:
        last_valid = len(char_idx) - 1
        while last_valid >= 0 and char_idx[last_valid] < 0:
            last_valid -= 1
        return last_valid + 1, 0
    start = pos
    while start > 0 and char_idx[start] == char_idx[start - 1]:
        start -= 1
    end = start
    while end + 1 < len(char_idx) and char_idx[end] == char_idx[end + 1]:
        end += 1
    return start, end - start + 1


def layout_line(chars: Sequence[int], width: int, tab_size: int) -> list[int]:
    """For each of ``width`` cells, the index of the character in it, or -1."""
    cells = [-1] * width
    idx = 0
    for i, c in enumerate(chars):
        if idx >= width:
            break
        cw = char_cell_width(c)
        for j in range(min(cw, width - idx)):
            cells[idx + j] = i
        idx += cw
        if c == TAB:
            while idx % tab_size != 0 and idx < width:
                cells[idx] = i
                idx += 1
    return cells


def dialog_hit_check(dx: int, dy: int, mx: int, my: int) -> DialogButton:
    """The dialog button at (mx, my) for a dialog whose top-left is (dx, dy)."""
    for button, bx, by, bw, bh in _BUTTON_AREAS:
        if dx + bx <= mx < dx + bx + bw and dy + by <= my < dy + by + bh:
            return button
    return DialogButton.NONE