"""Layered character-cell rendering of the dungeon view into draw commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional, Tuple

from delvekit.layout import GAME_AREA_HEIGHT, GAME_AREA_WIDTH, cell_to_pixels

VIEWPORT_MARGIN = 5
CHUNK_X = GAME_AREA_WIDTH - 2 * VIEWPORT_MARGIN
CHUNK_Y = GAME_AREA_HEIGHT - 2 * VIEWPORT_MARGIN

DUNGEON_WIDTH = 100
DUNGEON_HEIGHT = 100

EXPLORED_COLOR = 0x08

_PALETTE = {
    0x01: (255, 0, 0),
    0x02: (0, 255, 0),
    0x03: (0, 0, 255),
    0x04: (255, 255, 0),
    0x05: (255, 0, 255),
    0x06: (0, 255, 255),
    0x07: (255, 255, 255),
    EXPLORED_COLOR: (64, 64, 64),
}
_DEFAULT_RGB = (255, 255, 255)

RGB = Tuple[int, int, int]
TileLookup = Callable[[int, int], Optional[Tuple[str, int]]]
CellPredicate = Callable[[int, int], bool]


def tile_rgb(color: int) -> RGB:
    """RGB triple for a tile colour code; unknown codes render white."""
    return _PALETTE.get(color, _DEFAULT_RGB)


@dataclass(frozen=True)
class ZCell:
    """One cell of a z-buffer layer."""

    character: str = "\0"
    color: int = 0
    has_content: bool = False


_EMPTY = ZCell()


@dataclass
class ZBuffer:
    """A layer of character cells covering the game area."""

    width: int = GAME_AREA_WIDTH
    height: int = GAME_AREA_HEIGHT
    _cells: list = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._cells = [_EMPTY] * (self.width * self.height)

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def write(self, x: int, y: int, character: str, color: int) -> bool:
        """Store a character; writes outside the layer are ignored."""
        if not self._inside(x, y):
            return False
        self._cells[y * self.width + x] = ZCell(character, color, True)
        return True

    def get(self, x: int, y: int) -> ZCell:
        """The cell at (x, y); IndexError outside the layer."""
        if not self._inside(x, y):
            raise IndexError(f"z-buffer position ({x}, {y}) out of bounds")
        return self._cells[y * self.width + x]

    def clear(self) -> None:
        self._cells = [_EMPTY] * (self.width * self.height)

    def __iter__(self) -> Iterator[ZCell]:
        return iter(self._cells)


@dataclass(frozen=True)
class DrawCommand:
    """A character to draw at a pixel position in a given colour."""

    x: int
    y: int
    character: str
    color: int
    rgb: RGB


class RenderState:
    """Viewport and the background and entity layers of the game area."""

    def __init__(
        self,
        dungeon_width: int = DUNGEON_WIDTH,
        dungeon_height: int = DUNGEON_HEIGHT,
    ) -> None:
        self.dungeon_width = dungeon_width
        self.dungeon_height = dungeon_height
        self.viewport_x = 0
        self.viewport_y = 0
        self.background = ZBuffer()
        self.entities = ZBuffer()

    def update_viewport(self, player_x: float, player_y: float) -> tuple[int, int]:
        """Scroll by a chunk when the player nears an edge; returns the viewport."""
        px = int(player_x)
        py = int(player_y)
        if px - self.viewport_x < VIEWPORT_MARGIN:
            self.viewport_x -= CHUNK_X
        if px - self.viewport_x >= GAME_AREA_WIDTH - VIEWPORT_MARGIN:
            self.viewport_x += CHUNK_X
        if py - self.viewport_y < VIEWPORT_MARGIN:
            self.viewport_y -= CHUNK_Y
        if py - self.viewport_y >= GAME_AREA_HEIGHT - VIEWPORT_MARGIN:
            self.viewport_y += CHUNK_Y

        self.viewport_x = max(self.viewport_x, 0)
        self.viewport_y = max(self.viewport_y, 0)
        self.viewport_x = min(self.viewport_x, self.dungeon_width - GAME_AREA_WIDTH)
        self.viewport_y = min(self.viewport_y, self.dungeon_height - GAME_AREA_HEIGHT)
        return self.viewport_x, self.viewport_y

    def draw_background(
        self,
        tile_at: TileLookup,
        is_visible: CellPredicate,
        is_explored: CellPredicate,
    ) -> None:
        """Redraw the background layer from the dungeon.

        ``tile_at(x, y)`` gives ``(symbol, color)`` or None. Visible tiles keep
        their colour, explored ones are dimmed, others stay blank.
        """
        self.background.clear()
        for screen_y in range(GAME_AREA_HEIGHT):
            dungeon_y = self.viewport_y + screen_y
            if not 0 <= dungeon_y < self.dungeon_height:
                continue
            for screen_x in range(GAME_AREA_WIDTH):
                dungeon_x = self.viewport_x + screen_x
                if not 0 <= dungeon_x < self.dungeon_width:
                    continue
                if is_visible(dungeon_x, dungeon_y):
                    dimmed = False
                elif is_explored(dungeon_x, dungeon_y):
                    dimmed = True
                else:
                    continue
                tile = tile_at(dungeon_x, dungeon_y)
                if tile is None:
                    continue
                symbol, color = tile
                self.background.write(
                    screen_x, screen_y, symbol, EXPLORED_COLOR if dimmed else color
                )

    def draw_entity(
        self,
        x: float,
        y: float,
        character: str,
        color: int,
        carried: bool,
        is_visible: CellPredicate,
    ) -> bool:
        """Put an entity on the entity layer if it is on the map, on screen and seen."""
        if carried:
            return False
        screen_x = int(x - self.viewport_x)
        screen_y = int(y - self.viewport_y)
        if not (0 <= screen_x < GAME_AREA_WIDTH and 0 <= screen_y < GAME_AREA_HEIGHT):
            return False
        if not is_visible(int(x), int(y)):
            return False
        return self.entities.write(screen_x, screen_y, character, color)

    def begin_frame(self) -> None:
        """Clear the entity layer ready for a new frame."""
        self.entities.clear()

    def compose(self) -> list[DrawCommand]:
        """Draw commands for the game area, entities taking priority over tiles."""
        commands: list[DrawCommand] = []
        for screen_y in range(GAME_AREA_HEIGHT):
            for screen_x in range(GAME_AREA_WIDTH):
                cell = self.entities.get(screen_x, screen_y)
                if not cell.has_content:
                    cell = self.background.get(screen_x, screen_y)
                    if not cell.has_content:
                        continue
                px, py = cell_to_pixels(screen_x, screen_y)
                commands.append(
                    DrawCommand(px, py, cell.character, cell.color, tile_rgb(cell.color))
                )
        return commands