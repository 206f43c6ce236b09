"""Spatial grids, entity templates, window layout, status text and z-buffered tile rendering for dungeon games."""

__version__ = "0.1.0"
__all__ = ["layout", "render", "spatial", "statusview", "templates"]