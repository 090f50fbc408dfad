# game/systems/death_system.py
"""Terminal transitions applied when a fighter drops to 0 hp.

The transition is chosen by the fighter's :class:`DeathPolicy` through
:data:`DEATH_HANDLERS`.  Entities are never removed from the registry; death
only rewrites the entity in place so ids stay stable.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict

import structlog

from game.constants import CORPSE_COLOR, CORPSE_GLYPH, DeathPolicy

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from game.entities.components import Entity
    from game.game_state import GameState

log = structlog.get_logger(__name__)


def player_death(entity: Entity, gs: GameState) -> None:
    """The game ends; the player turns into a corpse but keeps its Fighter."""
    gs.add_message("You died!", (255, 0, 0))
    entity.glyph = CORPSE_GLYPH
    entity.color = CORPSE_COLOR
    log.info("Player died", pos=(entity.x, entity.y), turn=gs.turn_count)


def monster_death(entity: Entity, gs: GameState) -> None:
    """Transforms the monster into a corpse that does not block or act."""
    gs.add_message(f"{entity.name} is dead!", (255, 127, 0))
    entity.glyph = CORPSE_GLYPH
    entity.color = CORPSE_COLOR
    entity.blocks = False
    entity.fighter = None
    entity.ai = None
    entity.name = f"remains of {entity.name}"
    log.debug("Monster died", name=entity.name, pos=(entity.x, entity.y))


DEATH_HANDLERS: Dict[DeathPolicy, Callable[["Entity", "GameState"], None]] = {
    DeathPolicy.PLAYER: player_death,
    DeathPolicy.MONSTER: monster_death,
}


def handle_entity_death(entity: Entity, gs: GameState) -> None:
    """Runs the death handler for ``entity``'s policy.

    Parameters
    ----------
    entity:
        The entity whose hp just reached 0.  It must still carry its Fighter,
        since the policy is read from it.
    gs:
        The active :class:`~game.game_state.GameState` instance.
    """
    if entity.fighter is None:
        log.warning("Death requested for entity without fighter", name=entity.name)
        return
    DEATH_HANDLERS[entity.fighter.on_death](entity, gs)
