"""Field-of-view calculators.

Two interchangeable calculators live here, both driven by user supplied
callables for blocking checks, visibility writes and distance calculations:

* :class:`RayCastVisibility` casts a Bresenham ray from the origin to every
  cell on the perimeter of the square enclosing the radius.
* :class:`ShadowcastVisibility` performs recursive shadowcasting over eight octants.
"""

from __future__ import annotations

from typing import Callable

from game.world.los import bresenham_line


class _VisibilityBase:
    """Shared callable wiring for the visibility calculators.

    Parameters
    ----------
    blocks_light:
        Callable receiving ``(x, y)`` returning ``True`` if the tile blocks
        light or lies outside the map bounds.
    set_visible:
        Callable receiving ``(x, y)`` which marks the tile as visible.
    get_distance:
        Callable receiving the relative ``(dx, dy)`` from the origin and
        returning the distance value used to clamp the search radius.
    """

    def __init__(
        self,
        *,
        blocks_light: Callable[[int, int], bool],
        set_visible: Callable[[int, int], None],
        get_distance: Callable[[int, int], float],
    ) -> None:
        self.blocks_light = blocks_light
        self.set_visible = set_visible
        self.get_distance = get_distance

    def compute(self, origin_x: int, origin_y: int, radius: int) -> None:
        raise NotImplementedError


class RayCastVisibility(_VisibilityBase):
    """Ray casting visibility."""

    def compute(self, origin_x: int, origin_y: int, radius: int) -> None:
        """Compute visibility from ``(origin_x, origin_y)`` within ``radius``."""

        self.set_visible(origin_x, origin_y)
        if radius <= 0:
            return
        x_min, x_max = origin_x - radius, origin_x + radius
        y_min, y_max = origin_y - radius, origin_y + radius
        for x in range(x_min, x_max + 1):
            self._cast_ray(origin_x, origin_y, x, y_min, radius)
            self._cast_ray(origin_x, origin_y, x, y_max, radius)
        for y in range(y_min + 1, y_max):
            self._cast_ray(origin_x, origin_y, x_min, y, radius)
            self._cast_ray(origin_x, origin_y, x_max, y, radius)

    def _cast_ray(
        self, cx: int, cy: int, target_x: int, target_y: int, radius: int
    ) -> None:
        for mx, my in bresenham_line(cx, cy, target_x, target_y):
            if self.get_distance(mx - cx, my - cy) > radius:
                return
            self.set_visible(mx, my)
            if self.blocks_light(mx, my):
                return


class ShadowcastVisibility(_VisibilityBase):
    """Generic visibility calculator using recursive shadowcasting."""

    def compute(self, origin_x: int, origin_y: int, radius: int) -> None:
        """Compute visibility from ``(origin_x, origin_y)`` within ``radius``."""

        self.set_visible(origin_x, origin_y)
        for octant in range(8):
            self._cast_light(
                origin_x, origin_y, 1, 1.0, 0.0, radius, *self._multipliers[octant]
            )

    # Transformation coefficients for the eight octants.
    _multipliers = (
        (1, 0, 0, 1),
        (0, 1, 1, 0),
        (0, -1, 1, 0),
        (-1, 0, 0, 1),
        (-1, 0, 0, -1),
        (0, -1, -1, 0),
        (0, 1, -1, 0),
        (1, 0, 0, -1),
    )

    def _cast_light(
        self,
        cx: int,
        cy: int,
        row: int,
        start_slope: float,
        end_slope: float,
        radius: int,
        xx: int,
        xy: int,
        yx: int,
        yy: int,
    ) -> None:
        """Recursively cast light in a single octant."""

        if start_slope < end_slope:
            return

        for j in range(row, radius + 1):
            dx = -j - 1
            dy = -j
            blocked = False
            new_start = start_slope
            while dx <= 0:
                dx += 1
                mx = cx + dx * xx + dy * xy
                my = cy + dx * yx + dy * yy

                l_slope = (dx - 0.5) / (dy + 0.5)
                r_slope = (dx + 0.5) / (dy - 0.5)
                if start_slope < r_slope:
                    continue
                if end_slope > l_slope:
                    break

                if self.get_distance(mx - cx, my - cy) <= radius:
                    self.set_visible(mx, my)

                if blocked:
                    if self.blocks_light(mx, my):
                        new_start = r_slope
                        continue
                    else:
                        blocked = False
                        start_slope = new_start
                else:
                    if self.blocks_light(mx, my) and j < radius:
                        blocked = True
                        self._cast_light(
                            cx,
                            cy,
                            j + 1,
                            start_slope,
                            l_slope,
                            radius,
                            xx,
                            xy,
                            yx,
                            yy,
                        )
                        new_start = r_slope
            if blocked:
                break
