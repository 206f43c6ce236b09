"""Text of the status line shown beneath the game area."""

from __future__ import annotations

from typing import Any

_MAX_LENGTH = 255


def _coords(position: Any) -> tuple[int, int]:
    if hasattr(position, "x") and hasattr(position, "y"):
        return int(position.x), int(position.y)
    x, y = position
    return int(x), int(y)


def status_line(position: Any, room_count: int) -> str:
    """Status text for the player's position (a pair, an object with x/y, or None)."""
    if position is not None:
        x, y = _coords(position)
        text = (
            f"Dungeon Level: 1  |  Position: ({x}, {y})  |  Rooms: {room_count}"
        )
    else:
        text = f"Dungeon Level: 1  |  Rooms: {room_count}"
    return text[:_MAX_LENGTH]