"""A text console that keeps a character buffer and draws it with a bitmap font."""

from __future__ import annotations

from hobbyos.font import Font, write_ascii, write_string
from hobbyos.graphics import PixelColor, PixelWriter, Vector2D, fill_rectangle


class Console:
    """A fixed-size text console that scrolls when the last row is full."""

    ROWS = 25
    COLUMNS = 80

    def __init__(self, fg_color: PixelColor, bg_color: PixelColor, font: Font) -> None:
        self.fg_color = fg_color
        self.bg_color = bg_color
        self._font = font
        self._writer: PixelWriter | None = None
        self._buffer = [bytearray(self.COLUMNS + 1) for _ in range(self.ROWS)]
        self.cursor_row = 0
        self.cursor_column = 0

    def put_string(self, s) -> None:
        """Append text; a newline moves to the next row, overlong rows are cut."""
        data = s.encode("utf-8") if isinstance(s, str) else bytes(s)
        for byte in data:
            if byte == 0:
                break
            if byte == 0x0A:
                self._newline()
            elif self.cursor_column < self.COLUMNS - 1:
                if self._writer is not None:
                    pos = Vector2D(8 * self.cursor_column, 16 * self.cursor_row)
                    write_ascii(self._writer, pos, byte, self.fg_color, self._font)
                self._buffer[self.cursor_row][self.cursor_column] = byte
                self.cursor_column += 1

    def set_writer(self, writer: PixelWriter | None) -> None:
        """Draw to ``writer`` from now on, repainting the whole console."""
        if writer is self._writer:
            return
        self._writer = writer
        self._refresh()

    def lines(self) -> list[str]:
        """The text of every row of the console."""
        return [
            bytes(row).split(b"\0", 1)[0].decode("utf-8", errors="replace")
            for row in self._buffer
        ]

    def _area(self) -> Vector2D:
        return Vector2D(8 * self.COLUMNS, 16 * self.ROWS)

    def _newline(self) -> None:
        self.cursor_column = 0
        if self.cursor_row < self.ROWS - 1:
            self.cursor_row += 1
            return

        self._buffer = self._buffer[1:] + [bytearray(self.COLUMNS + 1)]
        if self._writer is not None:
            fill_rectangle(self._writer, Vector2D(0, 0), self._area(), self.bg_color)
            for row, text in enumerate(self._buffer[:-1]):
                write_string(
                    self._writer, Vector2D(0, 16 * row), bytes(text), self.fg_color, self._font
                )

    def _refresh(self) -> None:
        if self._writer is None:
            return
        fill_rectangle(self._writer, Vector2D(0, 0), self._area(), self.bg_color)
        for row, text in enumerate(self._buffer):
            write_string(
                self._writer, Vector2D(0, 16 * row), bytes(text), self.fg_color, self._font
            )