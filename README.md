# delvekit

Pure-Python building blocks for tile-based dungeon games. It needs no
third-party packages.

## Modules

### `delvekit.spatial`

`SpatialGrid` is a fixed 10×10 grid of cells. Each cell covers 10×10 world
units and holds at most 32 entities. Entities are integers, and
`INVALID_ENTITY` (`0xFFFFFFFF`) is refused.

- `add(entity, x, y)`, `remove(entity, x, y)` and
  `move(entity, old_x, old_y, new_x, new_y)` place entities by world position.
  A position outside the grid is clamped to the nearest edge cell. A move that
  stays within one cell does nothing. If a move cannot add the entity to its
  new cell, the grid puts it back in the old cell and re-raises the error.
- `query_point`, `query_radius` and `query_rect` return a `QueryResult`. It
  holds `entities`, `search_radius`, `center_x` and `center_y`, and you can
  iterate over it, take its `len()` and test membership. `query_radius` and
  `query_rect` gather every entity in the cells the search area touches, up to
  288 entities. They do not filter by exact distance.
- `count_in_radius` returns the size of a radius query. `find_nearest(x, y,
  max_radius)` returns `(entity, distance)` or `None`. It widens its search in
  10-unit steps. It measures the distance from the query point to the centre
  of the cell that contains that point, not to the entity itself.
- `stats()` returns a `GridStats` with occupancy figures and query counters,
  and also logs them. `reset_stats()` zeroes the counters. `total_entities()`
  counts the stored entities.
- `cell(cell_x, cell_y)` returns a `SpatialCell` and raises `IndexError`
  outside the grid. The module-level `cell_coords` and `is_valid_cell` convert
  world positions to grid coordinates and check grid coordinates.
- `close()` logs the final statistics. After it, further operations raise
  `SpatialError`. The grid also works as a context manager.

`add` raises `CellFullError` when the cell already holds 32 entities and
`DuplicateEntityError` when the entity is already in the cell. `remove`
raises `EntityNotFoundError` when the entity is not in the cell. All three
are `SpatialError` subclasses. An invalid entity or a negative radius raises
`ValueError`, and so does a rectangle whose minimum exceeds its maximum.

### `delvekit.templates`

`TemplateRegistry` loads entity templates from a JSON document of the form
`{"templates": [{"name": ..., "components": [...]}, ...]}`. Use `load_file`
for a file or `load_data` for data that is already parsed. Each call returns
the length of the `templates` array. A later template replaces an earlier one
whose name is equal ignoring case. Lookups with `get`, `build_components` and
`create_entity` need the exact stored name. Otherwise they raise
`TemplateNotFoundError`.

`build_components(name)` turns each component entry into a `(type, value)`
pair. The types `Position`, `BaseInfo`, `Actor` and `Action` become records
of those classes, with defaults filled in. Any other type gives `None`.
`create_entity(name, world)` creates an entity in an `EntityWorld`, attaches
the components the world knows, and skips unknown types with a warning. By
default an `EntityWorld` knows `Position`, `BaseInfo`, `Actor`, `Action` and
`FieldOfView`.

### `delvekit.layout`

This module holds the window geometry in cells and pixels: a 12-cell sidebar,
a 48×30 game area, a one-line status bar, and 16-pixel cells. `cell_to_pixels`
maps a game-area cell to its pixel corner. `status_rect` returns the status
bar's pixel `Rect`.

### `delvekit.statusview`

`status_line(position, room_count)` formats the status bar text. `position`
may be an `(x, y)` pair, an object with `x` and `y`, or `None`.

### `delvekit.render`

`RenderState` keeps a viewport and two `ZBuffer` layers, `background` and
`entities`.

- `update_viewport` scrolls the viewport by a chunk when the player comes
  within 5 cells of an edge, and clamps it to the dungeon, which is 100×100
  by default.
- `draw_background(tile_at, is_visible, is_explored)` fills the background
  layer from your callbacks. Explored tiles that are not visible are dimmed
  to colour `0x08`.
- `draw_entity` writes a visible, uncarried entity to the entity layer.
- `begin_frame` clears the entity layer.
- `compose()` returns a list of `DrawCommand` values (pixel position,
  character, colour code, RGB). An entity takes priority over the tile beneath
  it. `tile_rgb` maps colour codes to RGB.

## Example

```python
from delvekit.spatial import SpatialGrid
from delvekit.templates import TemplateRegistry, EntityWorld

grid = SpatialGrid()
grid.add(1, 12.0, 34.0)
print(grid.query_radius(12.0, 34.0, 5.0).entities)

registry = TemplateRegistry()
registry.load_data({"templates": [
    {"name": "goblin", "components": [
        {"type": "Position", "x": 3, "y": 4},
        {"type": "BaseInfo", "symbol": "g", "color": 2, "name": "Goblin"},
    ]},
]})
world = EntityWorld()
goblin = registry.create_entity("goblin", world)
```

## What it does not do

delvekit does not open a window, load fonts or draw anything. `compose`
produces draw commands, and your own graphics code must paint them. There is
no game loop and no command to run. The package does not generate dungeons or
compute field of view. `draw_background` and `draw_entity` take the tiles,
visibility and exploration state from callbacks you supply.

## Running the tests

```
pip install -e ".[test]"
pytest
```