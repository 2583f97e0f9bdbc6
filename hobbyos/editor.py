"""Cursor movement and editing for the text editor."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Sequence

from hobbyos.editor_text import (
    CHAR_HEIGHT,
    CHAR_WIDTH,
    DIALOG_HEIGHT,
    DIALOG_WIDTH,
    get_char_range,
    layout_line,
)

MODIFIER_CTRL = 0x01
MODIFIER_ALT = 0x04

MIN_WIDTH = (DIALOG_WIDTH + CHAR_WIDTH - 1) // CHAR_WIDTH
MIN_HEIGHT = (DIALOG_HEIGHT + CHAR_HEIGHT - 1) // CHAR_HEIGHT

_BACKSPACE = 0x08
_NEWLINE = 0x0A


class Key(enum.IntEnum):
    """USB HID key codes the editor reacts to."""

    ESC = 0x29
    DELETE = 0x4C
    LEFT = 0x50
    RIGHT = 0x4F
    UP = 0x52
    DOWN = 0x51
    HOME = 0x4A
    END = 0x4D
    PGUP = 0x4B
    PGDN = 0x4E
    S = 0x16
    D = 0x07
    C = 0x06


def _to_code_points(line) -> list[int]:
    if isinstance(line, str):
        return [ord(ch) for ch in line]
    return [int(c) for c in line]


def _ascii_code(ascii) -> int:
    if isinstance(ascii, str):
        return ord(ascii) if ascii else 0
    return int(ascii or 0)


class Editor:
    """Text of a document plus the cursor and scroll position of its view.

    ``cursor_x`` is a screen cell within the line, ``cursor_y`` a line of the
    document and ``scroll_y`` the first line shown.
    """

    def __init__(
        self,
        lines: Iterable[Sequence[int]],
        width: int = 80,
        height: int = 20,
        tab_size: int = 8,
    ) -> None:
        if width <= 0 or height <= 0 or tab_size <= 0:
            raise ValueError("width, height and tab size must be positive")
        self.width = max(width, MIN_WIDTH)
        self.height = max(height, MIN_HEIGHT)
        self.tab_size = tab_size
        self.lines: list[list[int]] = [_to_code_points(line) for line in lines]
        if not self.lines:
            self.lines.append([])
        self.scroll_y = 0
        self.cursor_x = 0
        self.cursor_y = 0
        self.edited = False

    def _layout(self, y: int) -> list[int]:
        return layout_line(self.lines[y], self.width, self.tab_size)

    def char_range(self, y: int, pos: int) -> tuple[int, int]:
        """(first cell, cell count) of the character at cell ``pos`` of line ``y``."""
        if 0 <= y < len(self.lines):
            return get_char_range(self._layout(y), pos)
        return 0, 0

    def key(self, keycode: int, ascii=0, modifier: int = 0) -> bool:
        """Handle a key press; return True if it asks for the file to be saved."""
        code = _ascii_code(ascii)
        cx, cy = self.cursor_x, self.cursor_y
        new_scroll_y = self.scroll_y
        new_x, new_y = cx, cy
        save_requested = False
        data = self.lines

        if modifier == MODIFIER_CTRL and keycode == Key.S:
            save_requested = True
        elif 0 < code < 0x80 and keycode != Key.ESC:
            if code == _BACKSPACE:
                if cx == 0:
                    if cy > 0:
                        s, _ = self.char_range(cy - 1, self.width)
                        data[cy - 1].extend(data[cy])
                        del data[cy]
                        new_y -= 1
                        new_x = s
                        self.edited = True
                else:
                    s, _ = self.char_range(cy, cx - 1)
                    idx = self._layout(cy)[cx - 1]
                    if idx >= 0:
                        del data[cy][idx]
                        new_x = s
                        self.edited = True
            elif code == _NEWLINE:
                idx = 0 if cx == 0 else self._layout(cy)[cx - 1] + 1
                rest = data[cy][idx:]
                del data[cy][idx:]
                data.insert(cy + 1, rest)
                new_y += 1
                new_x = 0
                self.edited = True
            else:
                idx = 0 if cx == 0 else self._layout(cy)[cx - 1] + 1
                data[cy].insert(idx, code)
                _, cw = get_char_range(self._layout(cy), cx)
                if cx + cw <= self.width:
                    new_x += cw
                self.edited = True
        elif keycode == Key.DELETE:
            line_char_idx = self._layout(cy)
            s, cw = self.char_range(cy, cx)
            if cw == 0 and (s == 0 or line_char_idx[s - 1] + 1 == len(data[cy])):
                if cy + 1 < len(data):
                    data[cy].extend(data[cy + 1])
                    del data[cy + 1]
                    self.edited = True
            else:
                idx = line_char_idx[s] if s == 0 else line_char_idx[s - 1] + 1
                if 0 <= idx < len(data[cy]):
                    del data[cy][idx]
                    self.edited = True
        elif keycode == Key.LEFT:
            new_x -= 1
            if new_x < 0:
                if cy == 0:
                    new_x = 0
                else:
                    new_y -= 1
                    new_x = self.width
            new_x, _ = self.char_range(new_y, new_x)
        elif keycode == Key.RIGHT:
            _, cw = self.char_range(cy, cx)
            if cw == 0:
                if cy + 1 < len(data):
                    new_y += 1
                    new_x = 0
            else:
                new_x += cw
        elif keycode == Key.UP:
            if cy > 0:
                new_y -= 1
                new_x, _ = self.char_range(new_y, cx)
        elif keycode == Key.DOWN:
            if cy + 1 < len(data):
                new_y += 1
                new_x, _ = self.char_range(new_y, cx)
        elif keycode == Key.HOME:
            if modifier & MODIFIER_CTRL:
                new_y = 0
            new_x = 0
        elif keycode == Key.END:
            if modifier & MODIFIER_CTRL:
                new_y = len(data) - 1
            new_x, _ = self.char_range(new_y, self.width)
        elif keycode == Key.PGUP:
            new_scroll_y = max(0, new_scroll_y - self.height // 2)
            new_y = max(0, new_y - self.height // 2)
            new_x, _ = self.char_range(new_y, new_x)
        elif keycode == Key.PGDN:
            new_scroll_y = min(len(data) - 1, new_scroll_y + self.height // 2)
            new_y = min(len(data) - 1, new_y + self.height // 2)
            new_x, _ = self.char_range(new_y, new_x)

        if new_y < new_scroll_y:
            new_scroll_y = new_y
        if new_y >= new_scroll_y + self.height:
            new_scroll_y = new_y - self.height + 1
        self.scroll_y = new_scroll_y
        self.cursor_x = new_x
        self.cursor_y = new_y
        return save_requested

    def click(self, sx: int, sy: int) -> None:
        """Move the cursor to the character at screen cell (sx, sy)."""
        if not (0 <= sx < self.width and 0 <= sy < self.height):
            return
        new_y = min(sy + self.scroll_y, len(self.lines) - 1)
        start, _ = self.char_range(new_y, sx)
        self.cursor_x = start
        self.cursor_y = new_y

    def screen_rows(self) -> list[list[int]]:
        """The lines currently visible, from the top of the view."""
        return [list(line) for line in self.lines[self.scroll_y : self.scroll_y + self.height]]