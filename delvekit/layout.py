"""Screen layout of the game window, measured in cells and pixels."""

from __future__ import annotations

from typing import NamedTuple

CELL_SIZE = 16

SIDEBAR_WIDTH = 12
GAME_AREA_WIDTH = 48
GAME_AREA_HEIGHT = 30
STATUS_LINE_HEIGHT = 1

WINDOW_WIDTH = SIDEBAR_WIDTH + GAME_AREA_WIDTH
WINDOW_HEIGHT = GAME_AREA_HEIGHT + STATUS_LINE_HEIGHT

WINDOW_WIDTH_PX = WINDOW_WIDTH * CELL_SIZE
WINDOW_HEIGHT_PX = WINDOW_HEIGHT * CELL_SIZE

GAME_AREA_X_OFFSET = SIDEBAR_WIDTH
GAME_AREA_Y_OFFSET = 0
STATUS_LINE_Y_OFFSET = GAME_AREA_HEIGHT

WINDOW_TITLE = "Adventure Game"


class Rect(NamedTuple):
    """A pixel rectangle."""

    x: int
    y: int
    width: int
    height: int


def cell_to_pixels(game_x: int, game_y: int) -> tuple[int, int]:
    """Pixel position of the top-left corner of a game-area cell."""
    return (
        (game_x + GAME_AREA_X_OFFSET) * CELL_SIZE,
        (game_y + GAME_AREA_Y_OFFSET) * CELL_SIZE,
    )


def status_rect() -> Rect:
    """Pixel rectangle covered by the status line along the window's bottom."""
    return Rect(
        0,
        STATUS_LINE_Y_OFFSET * CELL_SIZE,
        WINDOW_WIDTH * CELL_SIZE,
        STATUS_LINE_HEIGHT * CELL_SIZE,
    )