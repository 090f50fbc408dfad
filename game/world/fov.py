# game/world/fov.py
"""
Field of View (FOV) state for the player.

:class:`FieldOfView` owns the "currently visible" layer, runs one of the
calculators from :mod:`game.world.visibility` and ratchets the map's
``explored`` layer forward with every tile that becomes visible.  It also
remembers the last origin so the session can skip recomputation while the
player stands still.
"""

import math
import time

import numpy as np
import structlog

from game.constants import FovAlgorithm
from game.world.game_map import GameMap
from game.world.visibility import RayCastVisibility, ShadowcastVisibility

log = structlog.get_logger(__name__)

_CALCULATORS = {
    FovAlgorithm.BASIC: RayCastVisibility,
    FovAlgorithm.SHADOWCAST: ShadowcastVisibility,
}


def parse_algorithm(name: str | FovAlgorithm) -> FovAlgorithm:
    """Resolve a config string such as ``"basic"`` to a :class:`FovAlgorithm`."""
    if isinstance(name, FovAlgorithm):
        return name
    try:
        return FovAlgorithm[str(name).upper()]
    except KeyError:
        raise ValueError(f"Unknown FOV algorithm: {name!r}") from None


class FieldOfView:
    def __init__(
        self,
        game_map: GameMap,
        radius: int,
        light_walls: bool = True,
        algorithm: FovAlgorithm = FovAlgorithm.BASIC,
    ):
        self.game_map = game_map
        self.radius = radius
        self.light_walls = light_walls
        self.algorithm = algorithm
        self.visible: np.ndarray = np.zeros(
            (game_map.height, game_map.width), dtype=bool, order="C"
        )
        self.last_origin: tuple[int, int] | None = None

    def is_visible(self, x: int, y: int) -> bool:
        if not self.game_map.in_bounds(x, y):
            return False
        return bool(self.visible[y, x])

    def update(self, x: int, y: int, force: bool = False) -> bool:
        """Recompute from ``(x, y)`` unless it matches the previous origin.

        Returns ``True`` when a recomputation happened.
        """
        if not force and self.last_origin == (x, y):
            return False
        self.recompute(x, y, self.radius, self.light_walls, self.algorithm)
        return True

    def recompute(
        self,
        origin_x: int,
        origin_y: int,
        radius: int,
        light_walls: bool,
        algorithm: FovAlgorithm,
    ) -> None:
        """Replace the visible set with what ``(origin_x, origin_y)`` can see.

        ``radius <= 0`` means unlimited.  With ``light_walls`` the opaque tile
        that stops a line of sight is itself visible.
        """
        game_map = self.game_map
        func_log = log.bind(
            origin=(origin_x, origin_y), radius=radius, algorithm=algorithm.name
        )
        if not game_map.in_bounds(origin_x, origin_y):
            func_log.warning("FOV origin out of bounds")
            self.visible.fill(False)
            self.last_origin = (origin_x, origin_y)
            return

        start_time = time.perf_counter()
        effective_radius = (
            radius if radius > 0 else math.ceil(math.hypot(game_map.width, game_map.height))
        )
        opaque = game_map.block_sight
        visible = self.visible

        def blocks_light(tx: int, ty: int) -> bool:
            return not game_map.is_transparent(tx, ty)

        def set_visible(tx: int, ty: int) -> None:
            if not game_map.in_bounds(tx, ty):
                return
            if not light_walls and opaque[ty, tx] and (tx, ty) != (origin_x, origin_y):
                return
            visible[ty, tx] = True

        def get_distance(dx: int, dy: int) -> float:
            return math.hypot(dx, dy)

        calculator = _CALCULATORS[algorithm](
            blocks_light=blocks_light,
            set_visible=set_visible,
            get_distance=get_distance,
        )

        visible.fill(False)
        calculator.compute(origin_x, origin_y, effective_radius)
        game_map.mark_explored(visible)
        self.last_origin = (origin_x, origin_y)

        duration_ms = (time.perf_counter() - start_time) * 1000
        func_log.debug(
            "FOV computation finished",
            duration_ms=f"{duration_ms:.2f}",
            visible_count=int(np.sum(visible)),
        )
