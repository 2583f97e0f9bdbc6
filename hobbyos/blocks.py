"""A block-breaking game: the bar, the ball and the wall of blocks."""

from __future__ import annotations

import math

NUM_BLOCKS_X = 10
NUM_BLOCKS_Y = 5
BLOCK_WIDTH = 20
BLOCK_HEIGHT = 10
BAR_WIDTH = 30
BAR_HEIGHT = 5
BALL_RADIUS = 5
GAP_WIDTH = 30
GAP_HEIGHT = 30
GAP_BAR = 80
BAR_FLOAT = 10

CANVAS_WIDTH = NUM_BLOCKS_X * BLOCK_WIDTH + 2 * GAP_WIDTH
CANVAS_HEIGHT = GAP_HEIGHT + NUM_BLOCKS_Y * BLOCK_HEIGHT + GAP_BAR + BAR_HEIGHT + BAR_FLOAT
BAR_Y = CANVAS_HEIGHT - BAR_FLOAT - BAR_HEIGHT

FRAME_RATE = 60
BAR_SPEED = CANVAS_WIDTH
BALL_SPEED = BAR_SPEED // 2

BALL_START_X = CANVAS_WIDTH // 2 - BALL_RADIUS - 20
BALL_START_Y = CANVAS_HEIGHT - BAR_FLOAT - BAR_HEIGHT - BALL_RADIUS - 20

KEY_RIGHT = 79
KEY_LEFT = 80
KEY_SPACE = 44


def limit_range(x, lo, hi):
    """``x`` clamped to the range [lo, hi]."""
    if x < lo:
        return lo
    if x > hi:
        return hi
    return x


def _trunc_div(a: int, b: int) -> int:
    return int(a / b)


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class BlocksGame:
    """The state of one game; ``step`` advances it by one frame."""

    def __init__(self) -> None:
        self.blocks = [[True] * NUM_BLOCKS_X for _ in range(NUM_BLOCKS_Y)]
        self.bar_x = CANVAS_WIDTH // 2 - BAR_WIDTH // 2
        self.ball_x = BALL_START_X
        self.ball_y = BALL_START_Y
        self.move_dir = 0
        self.ball_dir = 0
        self.ball_dx = 0
        self.ball_dy = 0

    @property
    def ball_visible(self) -> bool:
        """False once the ball has fallen below the bar."""
        return self.ball_y >= 0

    @property
    def block_count(self) -> int:
        """Number of blocks still standing."""
        return sum(sum(row) for row in self.blocks)

    def press(self, keycode: int) -> None:
        """Handle a key press: arrows move the bar, space launches the ball."""
        if keycode == KEY_RIGHT:
            self.move_dir = 1
        elif keycode == KEY_LEFT:
            self.move_dir = -1
        elif keycode == KEY_SPACE:
            if self.ball_dir == 0 and self.ball_y < 0:
                self.ball_x, self.ball_y = BALL_START_X, BALL_START_Y
            elif self.ball_dir == 0:
                self.ball_dir = 45
        if self.bar_x == 0 and self.move_dir < 0:
            self.move_dir = 0
        elif self.bar_x + BAR_WIDTH == CANVAS_WIDTH - 1 and self.move_dir > 0:
            self.move_dir = 0

    def release(self) -> None:
        """Handle a key release: the bar stops."""
        self.move_dir = 0

    def step(self) -> None:
        """Advance the game by one frame."""
        self.bar_x += _trunc_div(self.move_dir * BAR_SPEED, FRAME_RATE)
        self.bar_x = limit_range(self.bar_x, 0, CANVAS_WIDTH - BAR_WIDTH - 1)

        if self.ball_dir == 0:
            return

        nx = self.ball_x + self.ball_dx
        ny = self.ball_y + self.ball_dy
        if (self.ball_dx < 0 and nx < BALL_RADIUS) or (
            self.ball_dx > 0 and CANVAS_WIDTH - BALL_RADIUS <= nx
        ):
            self.ball_dir = 180 - self.ball_dir
        if self.ball_dy < 0 and ny < BALL_RADIUS:
            self.ball_dir = -self.ball_dir
        elif (
            self.bar_x <= nx < self.bar_x + BAR_WIDTH
            and self.ball_dy > 0
            and BAR_Y - BALL_RADIUS <= ny
        ):
            self.ball_dir = -self.ball_dir
        elif self.ball_dy > 0 and CANVAS_HEIGHT - BALL_RADIUS <= ny:
            self.ball_dir = 0
            self.ball_y = -1
            return

        self._hit_block(nx, ny)

        rad = math.pi * self.ball_dir / 180
        self.ball_dx = _round_half_away(BALL_SPEED * math.cos(rad) / FRAME_RATE)
        self.ball_dy = _round_half_away(BALL_SPEED * math.sin(rad) / FRAME_RATE)
        self.ball_x += self.ball_dx
        self.ball_y += self.ball_dy

    def _hit_block(self, nx: int, ny: int) -> None:
        if (
            nx < GAP_WIDTH
            or CANVAS_WIDTH - GAP_WIDTH <= nx
            or ny < GAP_HEIGHT
            or GAP_HEIGHT + NUM_BLOCKS_Y * BLOCK_HEIGHT <= ny
        ):
            return
        index_x = (nx - GAP_WIDTH) // BLOCK_WIDTH
        index_y = (ny - GAP_HEIGHT) // BLOCK_HEIGHT
        if not self.blocks[index_y][index_x]:
            return
        self.blocks[index_y][index_x] = False

        left = GAP_WIDTH + index_x * BLOCK_WIDTH
        right = GAP_WIDTH + (index_x + 1) * BLOCK_WIDTH
        top = GAP_HEIGHT + index_y * BLOCK_HEIGHT
        bottom = GAP_HEIGHT + (index_y + 1) * BLOCK_HEIGHT
        if (self.ball_x < left <= nx) or (right < self.ball_x and nx <= right):
            self.ball_dir = 180 - self.ball_dir
        if (self.ball_y < top <= ny) or (bottom < self.ball_y and ny <= bottom):
            self.ball_dir = -self.ball_dir