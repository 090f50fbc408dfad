"""game/world/los.py

Bresenham line helper shared by the ray casting field of view.
"""

from __future__ import annotations

from typing import Iterator


def bresenham_line(x0: int, y0: int, x1: int, y1: int) -> Iterator[tuple[int, int]]:
    """Yield the cells from ``(x0, y0)`` to ``(x1, y1)``, excluding the start.

    Coordinates are in ``(x, y)`` order to align with typical Cartesian usage
    elsewhere in the codebase and tests.
    """

    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    xi, yi = x0, y0
    while xi != x1 or yi != y1:
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            xi += sx
        if e2 <= dx:
            err += dx
            yi += sy
        yield xi, yi


__all__ = ["bresenham_line"]
