from delvekit.layout import (
    CELL_SIZE,
    GAME_AREA_HEIGHT,
    GAME_AREA_WIDTH,
    SIDEBAR_WIDTH,
    WINDOW_HEIGHT_PX,
    WINDOW_WIDTH_PX,
    Rect,
    cell_to_pixels,
    cell_to_pixels as to_px,
    status_rect,
)


def test_window_is_sixty_by_thirty_one_cells():
    rect = status_rect()
    assert rect.width == 60 * CELL_SIZE
    assert rect.width == WINDOW_WIDTH_PX
    assert rect.y + rect.height == 31 * CELL_SIZE
    assert rect.y + rect.height == WINDOW_HEIGHT_PX
    x, _ = cell_to_pixels(GAME_AREA_WIDTH, 0)
    assert x == 60 * CELL_SIZE


def test_game_area_starts_after_sidebar():
    x, y = cell_to_pixels(0, 0)
    assert x == SIDEBAR_WIDTH * CELL_SIZE
    assert y == 0


def test_adjacent_cells_are_one_cell_apart():
    x0, y0 = to_px(5, 7)
    x1, y1 = to_px(6, 8)
    assert x1 - x0 == CELL_SIZE
    assert y1 - y0 == CELL_SIZE


def test_last_game_cell_reaches_window_edge():
    x, _ = cell_to_pixels(GAME_AREA_WIDTH - 1, 0)
    assert x + CELL_SIZE == WINDOW_WIDTH_PX


def test_status_rect_sits_below_game_area():
    rect = status_rect()
    assert isinstance(rect, Rect)
    assert rect.x == 0
    assert rect.y == cell_to_pixels(0, GAME_AREA_HEIGHT)[1]
    assert rect.width == WINDOW_WIDTH_PX
    assert rect.y + rect.height == WINDOW_HEIGHT_PX