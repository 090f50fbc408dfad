"""Central AI dispatch system.

This module exposes :func:`run_ai_phase`, which gives every living,
AI-driven entity one turn after the player acts.  The decision function is
selected by the entity's :class:`AiKind` through :data:`AI_HANDLERS`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict

import structlog

from game.constants import MELEE_RANGE, PLAYER_ID, AiKind
from game.systems.combat_system import handle_melee_attack
from game.systems.movement_system import move_towards

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from game.game_state import GameState

log = structlog.get_logger()


def basic_ai_take_turn(monster_id: int, gs: GameState) -> None:
    """A basic monster only acts while it stands in the player's view."""
    monster = gs.entity_registry[monster_id]
    if not gs.fov.is_visible(monster.x, monster.y):
        return

    player = gs.entity_registry[PLAYER_ID]
    if monster.distance_to(player) >= MELEE_RANGE:
        moved = move_towards(monster_id, player.x, player.y, gs)
        log.debug("Monster approaches", monster_id=monster_id, moved=moved)
    elif player.fighter is not None and player.fighter.hp > 0:
        handle_melee_attack(monster_id, PLAYER_ID, gs)


AI_HANDLERS: Dict[AiKind, Callable[[int, "GameState"], None]] = {
    AiKind.BASIC: basic_ai_take_turn,
}


def run_ai_phase(gs: GameState) -> None:
    """Gives each living AI entity one turn, in registry order."""
    registry = gs.entity_registry
    for entity_id in registry.ids():
        if entity_id == PLAYER_ID:
            continue
        entity = registry[entity_id]
        if entity.ai is None or not entity.alive:
            continue
        AI_HANDLERS[entity.ai](entity_id, gs)
