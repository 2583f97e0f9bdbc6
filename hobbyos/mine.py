"""Minesweeper: mine placement, mouse hit testing and opening cells."""

from __future__ import annotations

import enum
import random
from collections.abc import Sequence

BLOCK_SIZE = 20
BLOCK_PADDING = 2
TITLE_HEIGHT = 20


class CellState(enum.IntEnum):
    """What the player sees in a cell: a mine count, unknown or a flag."""

    ZERO = 0
    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    UNKNOWN = 10
    FLAG = 11


def _first_hit(coord: int, count: int, extra: int) -> int | None:
    for i in range(count):
        lo = (BLOCK_SIZE + BLOCK_PADDING) * i + BLOCK_PADDING
        hi = extra + (BLOCK_SIZE + BLOCK_PADDING) * i + BLOCK_PADDING + BLOCK_SIZE
        if lo < coord < hi:
            return i
    return None


def detect_mouse(x: int, y: int, width: int, height: int) -> tuple[int, int] | None:
    """The (column, row) of the cell under window point (x, y), or None."""
    if y < TITLE_HEIGHT + BLOCK_PADDING or x < BLOCK_PADDING:
        return None
    column = _first_hit(x, width, 0)
    if column is None:
        return None
    row = _first_hit(y, height, TITLE_HEIGHT)
    if row is None:
        return None
    return column, row


def place_mines(width: int, height: int, count: int, rng: random.Random | None = None) -> list[list[bool]]:
    """A ``[x][y]`` grid with ``count`` mines at random distinct cells."""
    if count > width * height:
        raise ValueError("too many mine")
    if count < 0:
        raise ValueError(f"mine count must not be negative: {count}")
    rng = rng or random.Random()
    grid = [[False] * height for _ in range(width)]
    for cell in rng.sample(range(width * height), count):
        grid[cell % width][cell // width] = True
    return grid


class Minesweeper:
    """The board: where the mines are and what the player has uncovered."""

    def __init__(self, width: int, height: int, mines: Sequence[Sequence[bool]]) -> None:
        if len(mines) != width or any(len(col) != height for col in mines):
            raise ValueError("mine grid does not match the board size")
        self.width = width
        self.height = height
        self.mines = [[bool(m) for m in col] for col in mines]
        self.state = [[CellState.UNKNOWN] * height for _ in range(width)]

    def _neighbours(self, x: int, y: int):
        for nx in range(x - 1, x + 2):
            for ny in range(y - 1, y + 2):
                if (nx, ny) != (x, y) and 0 <= nx < self.width and 0 <= ny < self.height:
                    yield nx, ny

    def open(self, x: int, y: int) -> bool:
        """Uncover an unknown cell; return True if it held a mine."""
        if self.state[x][y] != CellState.UNKNOWN:
            return False
        if self.mines[x][y]:
            return True
        pending = [(x, y)]
        while pending:
            cx, cy = pending.pop()
            if self.state[cx][cy] != CellState.UNKNOWN:
                continue
            count = sum(self.mines[nx][ny] for nx, ny in self._neighbours(cx, cy))
            self.state[cx][cy] = CellState(count)
            if count == 0:
                pending.extend(self._neighbours(cx, cy))
        return False

    def toggle_flag(self, x: int, y: int) -> None:
        """Flag an unknown cell, or unflag a flagged one."""
        if self.state[x][y] == CellState.UNKNOWN:
            self.state[x][y] = CellState.FLAG
        elif self.state[x][y] == CellState.FLAG:
            self.state[x][y] = CellState.UNKNOWN

    def is_win(self) -> bool:
        """True once every cell without a mine has been uncovered."""
        return all(
            self.mines[x][y] or self.state[x][y] < CellState.UNKNOWN
            for x in range(self.width)
            for y in range(self.height)
        )