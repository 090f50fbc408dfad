# game/world/game_map.py
from typing import NamedTuple

import numpy as np
import structlog

log = structlog.get_logger()


class Tile(NamedTuple):
    """Read-only view of a single map cell."""

    blocked: bool
    block_sight: bool
    explored: bool


class GameMap:
    """Fixed size grid of tile state.

    Arrays are indexed ``[y, x]``.  Every cell starts as a wall; generation
    carves floor with :meth:`carve`.  After generation only the ``explored``
    layer changes, and only from ``False`` to ``True``.
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            log.error("Invalid map dimensions", width=width, height=height)
            raise ValueError("Map width and height must be positive integers.")
        self._width = width
        self._height = height
        log.info("Initializing GameMap", width=self._width, height=self._height)

        # Use C order for compatibility with many libraries
        self.blocked: np.ndarray = np.ones((height, width), dtype=bool, order="C")
        self.block_sight: np.ndarray = np.ones((height, width), dtype=bool, order="C")
        self.explored: np.ndarray = np.zeros((height, width), dtype=bool, order="C")
        log.debug("GameMap arrays initialized", shape=(height, width))

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def in_bounds(self, x: int, y: int) -> bool:
        """Checks if the given coordinates are within the map boundaries."""
        return 0 <= x < self._width and 0 <= y < self._height

    def tile(self, x: int, y: int) -> Tile:
        return Tile(
            blocked=bool(self.blocked[y, x]),
            block_sight=bool(self.block_sight[y, x]),
            explored=bool(self.explored[y, x]),
        )

    def is_blocked(self, x: int, y: int) -> bool:
        """Out of bounds cells count as blocked."""
        if not self.in_bounds(x, y):
            return True
        return bool(self.blocked[y, x])

    def is_transparent(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            # Treat out of bounds as non-transparent for FOV calculations
            return False
        return not self.block_sight[y, x]

    def carve(self, x1: int, y1: int, x2: int, y2: int) -> None:
        """Turns the inclusive box ``(x1, y1)..(x2, y2)`` into empty floor.

        ``explored`` is left untouched.  The box is clipped to the map.
        """
        x_start, x_end = max(0, x1), min(self._width, x2 + 1)
        y_start, y_end = max(0, y1), min(self._height, y2 + 1)
        if x_start >= x_end or y_start >= y_end:
            log.warning("Attempted to carve zero-size area", box=(x1, y1, x2, y2))
            return
        self.blocked[y_start:y_end, x_start:x_end] = False
        self.block_sight[y_start:y_end, x_start:x_end] = False

    def mark_explored(self, visible: np.ndarray) -> None:
        """Ratchets ``explored`` forward with the currently visible cells."""
        np.logical_or(self.explored, visible, out=self.explored)
