"""Movement helper utilities.

This module exposes small helper functions for moving entities around the
game map.  The helpers centralise the blocking rule (map bounds, blocked
tiles and blocking entities) before updating the entity's position.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:  # pragma: no cover - imported for type checking only
    from game.entities.registry import EntityRegistry
    from game.game_state import GameState
    from game.world.game_map import GameMap

log = structlog.get_logger(__name__)


def is_blocked(x: int, y: int, game_map: GameMap, entities: EntityRegistry) -> bool:
    """``True`` if the cell is out of bounds, a blocked tile or holds a blocker."""
    if game_map.is_blocked(x, y):
        return True
    return entities.get_blocking_entity_at(x, y) is not None


def move_by(entity_id: int, dx: int, dy: int, gs: GameState) -> bool:
    """Attempt to move an entity.

    Parameters
    ----------
    entity_id:
        The identifier of the entity to move.
    dx, dy:
        Delta values to apply to the entity's current position.
    gs:
        The active :class:`~game.game_state.GameState` instance which contains
        the map and entity registry.

    Returns
    -------
    bool
        ``True`` if the movement succeeded, ``False`` otherwise.
    """
    entity = gs.entity_registry[entity_id]
    dest_x, dest_y = entity.x + dx, entity.y + dy
    if is_blocked(dest_x, dest_y, gs.game_map, gs.entity_registry):
        log.debug("Move blocked", entity_id=entity_id, dest=(dest_x, dest_y))
        return False
    entity.set_pos(dest_x, dest_y)
    return True


def move_towards(entity_id: int, target_x: int, target_y: int, gs: GameState) -> bool:
    """Steps one cell towards the target.

    The direction vector is normalized and each component rounded to the
    nearest integer, so diagonal steps happen when the target lies roughly
    diagonal.
    """
    entity = gs.entity_registry[entity_id]
    dx = target_x - entity.x
    dy = target_y - entity.y
    distance = math.hypot(dx, dy)
    if distance == 0:
        return False
    step_x = int(round(dx / distance))
    step_y = int(round(dy / distance))
    return move_by(entity_id, step_x, step_y, gs)
