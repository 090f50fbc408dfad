# engine/renderer.py
"""Render data helpers.

These functions turn the session into plain arrays and lists that any
front end can draw: per-tile background colors, the entity draw order and
the HP readout.  They never draw anything themselves.
"""
from typing import TYPE_CHECKING, List, Tuple

import numpy as np
import structlog

if TYPE_CHECKING:
    from game.entities.components import Entity
    from game.game_state import GameState
    from game.world.fov import FieldOfView
    from game.world.game_map import GameMap
    from utils.config_loader import GameConfig

log = structlog.get_logger(__name__)


def tile_background_colors(
    game_map: "GameMap", fov: "FieldOfView", config: "GameConfig"
) -> Tuple[np.ndarray, np.ndarray]:
    """Background color per tile and the mask of tiles that get drawn.

    Returns ``(colors, drawn_mask)`` where ``colors`` has shape
    ``(height, width, 3)`` and ``uint8`` dtype.  The color is picked from the
    four presets by visibility and whether the tile blocks sight.  Only
    explored tiles are drawn; the rest stay black.
    """
    visible = fov.visible
    wall = game_map.block_sight
    drawn_mask = game_map.explored | visible

    conditions = [
        visible & wall,
        visible & ~wall,
        ~visible & wall,
        ~visible & ~wall,
    ]
    presets = [
        np.array(config.color_light_wall, dtype=np.uint8),
        np.array(config.color_light_ground, dtype=np.uint8),
        np.array(config.color_dark_wall, dtype=np.uint8),
        np.array(config.color_dark_ground, dtype=np.uint8),
    ]
    colors = np.zeros((game_map.height, game_map.width, 3), dtype=np.uint8)
    for condition, preset in zip(conditions, presets):
        colors[condition & drawn_mask] = preset
    return colors, drawn_mask


def entities_to_draw(gs: "GameState") -> List["Entity"]:
    """Entities in view, non-blocking ones first so corpses sit underneath."""
    visible = [e for e in gs.entity_registry if gs.fov.is_visible(e.x, e.y)]
    # sorted() is stable, so registry order breaks ties
    return sorted(visible, key=lambda e: e.blocks)


def hp_readout(player: "Entity") -> str | None:
    if player.fighter is None:
        return None
    return f"HP: {player.fighter.hp}/{player.fighter.max_hp}"
