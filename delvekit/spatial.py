"""Uniform-grid spatial partitioning for entities on a dungeon map."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterator

logger = logging.getLogger(__name__)

INVALID_ENTITY = 0xFFFFFFFF

CELL_SIZE = 10
GRID_WIDTH = 10
GRID_HEIGHT = 10
MAX_ENTITIES_PER_CELL = 32
MAX_QUERY_RESULTS = MAX_ENTITIES_PER_CELL * 9


class SpatialError(Exception):
    """Base error for spatial grid operations."""


class CellFullError(SpatialError):
    """Raised when a cell already holds its maximum number of entities."""


class DuplicateEntityError(SpatialError):
    """Raised when an entity is already present in the target cell."""


class EntityNotFoundError(SpatialError, LookupError):
    """Raised when an entity is not present in the expected cell."""


def cell_coords(world_x: float, world_y: float) -> tuple[int, int]:
    """Return the grid cell holding a world position, clamped to the grid."""
    cell_x = int(world_x / CELL_SIZE)
    cell_y = int(world_y / CELL_SIZE)
    cell_x = min(max(cell_x, 0), GRID_WIDTH - 1)
    cell_y = min(max(cell_y, 0), GRID_HEIGHT - 1)
    return cell_x, cell_y


def is_valid_cell(cell_x: int, cell_y: int) -> bool:
    """Whether the given grid coordinates lie inside the grid."""
    return 0 <= cell_x < GRID_WIDTH and 0 <= cell_y < GRID_HEIGHT


@dataclass(eq=False)
class SpatialCell:
    """One grid cell and the entities it currently holds."""

    x: int
    y: int
    _entities: list[int] = field(default_factory=list, repr=False)

    @property
    def entities(self) -> tuple[int, ...]:
        return tuple(self._entities)

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, entity: object) -> bool:
        return entity in self._entities


@dataclass(frozen=True)
class QueryResult:
    """Entities gathered by a grid query."""

    entities: tuple[int, ...]
    search_radius: float
    center_x: int
    center_y: int

    def __len__(self) -> int:
        return len(self.entities)

    def __iter__(self) -> Iterator[int]:
        return iter(self.entities)

    def __contains__(self, entity: object) -> bool:
        return entity in self.entities


@dataclass(frozen=True)
class GridStats:
    """Occupancy and query statistics for a grid."""

    total_entities: int
    occupied_cells: int
    max_entities_in_cell: int
    occupancy_rate: float
    cell_utilization: float
    total_queries: int
    entities_checked: int
    cache_hits: int

    @property
    def average_entities_per_query(self) -> float:
        if self.total_queries == 0:
            return 0.0
        return self.entities_checked / self.total_queries


def _clamp_range(low: float, high: float, limit: int) -> range:
    first = max(int(low / CELL_SIZE), 0)
    last = min(int(high / CELL_SIZE), limit - 1)
    return range(first, last + 1)


class SpatialGrid:
    """A fixed grid of cells bucketing entities by world position."""

    def __init__(self) -> None:
        self._cells = [
            [SpatialCell(x, y) for y in range(GRID_HEIGHT)] for x in range(GRID_WIDTH)
        ]
        self.total_queries = 0
        self.entities_checked = 0
        self.cache_hits = 0
        self._open = True
        logger.info(
            "Spatial grid initialized: %dx%d cells, cell size: %d, max entities per cell: %d",
            GRID_WIDTH,
            GRID_HEIGHT,
            CELL_SIZE,
            MAX_ENTITIES_PER_CELL,
        )

    def __enter__(self) -> SpatialGrid:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return not self._open

    def _require_open(self) -> None:
        if not self._open:
            raise SpatialError("spatial grid not initialized")

    @staticmethod
    def _require_entity(entity: int) -> None:
        if entity == INVALID_ENTITY:
            raise ValueError("invalid entity")

    def _iter_cells(self) -> Iterator[SpatialCell]:
        for column in self._cells:
            yield from column

    def cell(self, cell_x: int, cell_y: int) -> SpatialCell:
        """Return the cell at grid coordinates, raising IndexError if outside."""
        if not is_valid_cell(cell_x, cell_y):
            raise IndexError(f"cell coordinates ({cell_x}, {cell_y}) out of bounds")
        return self._cells[cell_x][cell_y]

    def add(self, entity: int, x: float, y: float) -> None:
        """Place an entity in the cell containing (x, y)."""
        self._require_open()
        self._require_entity(entity)
        cx, cy = cell_coords(x, y)
        target = self.cell(cx, cy)
        if len(target) >= MAX_ENTITIES_PER_CELL:
            raise CellFullError(
                f"cell ({cx}, {cy}) is full ({len(target)} entities), "
                f"cannot add entity {entity}"
            )
        if entity in target:
            raise DuplicateEntityError(
                f"entity {entity} already exists in cell ({cx}, {cy})"
            )
        target._entities.append(entity)
        logger.debug(
            "Added entity %d to spatial cell (%d, %d) at world position (%.1f, %.1f)",
            entity, cx, cy, x, y,
        )

    def remove(self, entity: int, x: float, y: float) -> None:
        """Remove an entity from the cell containing (x, y)."""
        self._require_open()
        self._require_entity(entity)
        cx, cy = cell_coords(x, y)
        entities = self.cell(cx, cy)._entities
        try:
            index = entities.index(entity)
        except ValueError:
            raise EntityNotFoundError(
                f"entity {entity} not found in cell ({cx}, {cy})"
            ) from None
        # Swap with the last entry, matching the cell's unordered layout.
        last = entities.pop()
        if index < len(entities):
            entities[index] = last
        logger.debug("Removed entity %d from spatial cell (%d, %d)", entity, cx, cy)

    def move(
        self,
        entity: int,
        old_x: float,
        old_y: float,
        new_x: float,
        new_y: float,
    ) -> None:
        """Move an entity between cells; a move within one cell changes nothing."""
        self._require_open()
        self._require_entity(entity)
        old_cell = cell_coords(old_x, old_y)
        new_cell = cell_coords(new_x, new_y)
        if old_cell == new_cell:
            return
        self.remove(entity, old_x, old_y)
        try:
            self.add(entity, new_x, new_y)
        except SpatialError:
            try:
                self.add(entity, old_x, old_y)
            except SpatialError:
                logger.error(
                    "Failed to restore entity %d to old cell after failed move", entity
                )
            raise
        logger.debug(
            "Moved entity %d from cell %s to cell %s", entity, old_cell, new_cell
        )

    def _collect(self, cells: Iterator[SpatialCell]) -> tuple[int, ...]:
        found: list[int] = []
        for cell in cells:
            for entity in cell._entities:
                if len(found) < MAX_QUERY_RESULTS:
                    found.append(entity)
                    self.entities_checked += 1
        return tuple(found)

    def _cells_in(self, xs: range, ys: range) -> Iterator[SpatialCell]:
        for cx in xs:
            for cy in ys:
                yield self._cells[cx][cy]

    def query_point(self, x: float, y: float) -> QueryResult:
        """Entities in the single cell containing (x, y)."""
        self._require_open()
        self.total_queries += 1
        cx, cy = cell_coords(x, y)
        entities = self._collect(iter([self.cell(cx, cy)]))
        return QueryResult(entities, 0.0, cx, cy)

    def query_radius(
        self, center_x: float, center_y: float, radius: float
    ) -> QueryResult:
        """Entities in every cell touched by the square bounding the circle."""
        self._require_open()
        if radius < 0.0:
            raise ValueError(f"search radius cannot be negative: {radius:.2f}")
        self.total_queries += 1
        cx, cy = cell_coords(center_x, center_y)
        xs = _clamp_range(center_x - radius, center_x + radius, GRID_WIDTH)
        ys = _clamp_range(center_y - radius, center_y + radius, GRID_HEIGHT)
        entities = self._collect(self._cells_in(xs, ys))
        logger.debug(
            "Radius query at (%.1f, %.1f) with radius %.1f found %d entities in %d cells",
            center_x, center_y, radius, len(entities), len(xs) * len(ys),
        )
        return QueryResult(entities, radius, cx, cy)

    def query_rect(
        self, min_x: float, min_y: float, max_x: float, max_y: float
    ) -> QueryResult:
        """Entities in every cell overlapping the rectangle."""
        self._require_open()
        if min_x > max_x or min_y > max_y:
            raise ValueError(
                f"invalid rectangle bounds: min({min_x:.1f}, {min_y:.1f}) "
                f"max({max_x:.1f}, {max_y:.1f})"
            )
        self.total_queries += 1
        cx, cy = cell_coords((min_x + max_x) / 2, (min_y + max_y) / 2)
        xs = _clamp_range(min_x, max_x, GRID_WIDTH)
        ys = _clamp_range(min_y, max_y, GRID_HEIGHT)
        return QueryResult(self._collect(self._cells_in(xs, ys)), 0.0, cx, cy)

    def total_entities(self) -> int:
        """Number of entities stored across all cells."""
        self._require_open()
        return sum(len(cell) for cell in self._iter_cells())

    def stats(self) -> GridStats:
        """Compute and log grid statistics."""
        self._require_open()
        total = self.total_entities()
        counts = [len(cell) for cell in self._iter_cells() if len(cell) > 0]
        cell_total = GRID_WIDTH * GRID_HEIGHT
        capacity = cell_total * MAX_ENTITIES_PER_CELL
        result = GridStats(
            total_entities=total,
            occupied_cells=len(counts),
            max_entities_in_cell=max(counts, default=0),
            occupancy_rate=total / capacity * 100.0 if total else 0.0,
            cell_utilization=len(counts) / cell_total * 100.0 if counts else 0.0,
            total_queries=self.total_queries,
            entities_checked=self.entities_checked,
            cache_hits=self.cache_hits,
        )
        logger.info("=== Spatial Grid Statistics ===")
        logger.info("Grid size: %dx%d cells (%d total)", GRID_WIDTH, GRID_HEIGHT, cell_total)
        logger.info("Cell size: %dx%d world units", CELL_SIZE, CELL_SIZE)
        logger.info("Total entities: %d", result.total_entities)
        logger.info(
            "Occupied cells: %d (%.1f%% utilization)",
            result.occupied_cells, result.cell_utilization,
        )
        logger.info("Max entities in single cell: %d", result.max_entities_in_cell)
        logger.info("Overall occupancy: %.2f%%", result.occupancy_rate)
        logger.info(
            "Query performance: %d queries, %d entities checked",
            result.total_queries, result.entities_checked,
        )
        if result.total_queries:
            logger.info(
                "Average entities checked per query: %.1f",
                result.average_entities_per_query,
            )
        return result

    def reset_stats(self) -> None:
        """Zero the query counters."""
        self.total_queries = 0
        self.entities_checked = 0
        self.cache_hits = 0

    def find_nearest(
        self, x: float, y: float, max_radius: float
    ) -> tuple[int, float] | None:
        """Search outward in cell-sized steps for the nearest entity.

        Entities are treated as lying at the centre of the cell that contains
        the query point. Returns ``(entity, distance)`` or ``None``.
        """
        self._require_open()
        if max_radius < 0.0:
            raise ValueError(f"max_radius cannot be negative: {max_radius:.2f}")
        best: tuple[int, float] | None = None
        search_radius = min(float(CELL_SIZE), max_radius)
        while search_radius <= max_radius and best is None:
            for entity in self.query_radius(x, y, search_radius):
                if entity == INVALID_ENTITY:
                    continue
                cx, cy = cell_coords(x, y)
                ex = cx * CELL_SIZE + CELL_SIZE // 2
                ey = cy * CELL_SIZE + CELL_SIZE // 2
                distance = math.hypot(ex - x, ey - y)
                if distance <= max_radius and (best is None or distance < best[1]):
                    best = (entity, distance)
            search_radius += CELL_SIZE
        return best

    def count_in_radius(self, x: float, y: float, radius: float) -> int:
        """Number of entities a radius query would return."""
        return len(self.query_radius(x, y, radius))

    def close(self) -> None:
        """Log final statistics and mark the grid unusable."""
        if not self._open:
            logger.warning("Attempting to cleanup uninitialized spatial grid")
            return
        self.stats()
        self._open = False
        logger.info("Spatial grid cleaned up")