# game/systems/combat_system.py
"""
Handles combat calculations and actions between entities.
"""
from typing import TYPE_CHECKING

import structlog

from game.systems.death_system import handle_entity_death

if TYPE_CHECKING:
    from game.entities.components import Entity
    from game.game_state import GameState

log = structlog.get_logger(__name__)


def take_damage(entity: "Entity", damage: int, gs: "GameState") -> None:
    """
    Subtracts ``damage`` from ``entity``'s hp.

    Death fires only on the hit that takes a living fighter to 0 hp or below;
    further damage on a dead entity changes hp but never re-fires it.
    """
    fighter = entity.fighter
    if fighter is None or damage <= 0:
        return
    fighter.hp -= damage
    if fighter.hp <= 0 and entity.alive:
        entity.alive = False
        handle_entity_death(entity, gs)


def handle_melee_attack(attacker_id: int, defender_id: int, gs: "GameState") -> int:
    """
    Processes a melee attack from attacker_id to defender_id.

    Damage is the attacker's power minus the defender's defense.  Returns the
    damage dealt (0 when the blow has no effect).  Raises ``ValueError`` when
    both ids name the same entity.
    """
    attacker, defender = gs.entity_registry.get_pair(attacker_id, defender_id)
    if attacker.fighter is None or defender.fighter is None:
        log.warning(
            "Melee attack without fighters",
            attacker_id=attacker_id,
            defender_id=defender_id,
        )
        return 0

    damage = attacker.fighter.power - defender.fighter.defense
    log.debug(
        "Handling melee attack",
        attacker=attacker.name,
        defender=defender.name,
        attacker_id=attacker_id,
        defender_id=defender_id,
        damage=damage,
    )
    if damage > 0:
        gs.add_message(
            f"{attacker.name} attacks {defender.name} for {damage} hit points."
        )
        take_damage(defender, damage, gs)
        return damage

    gs.add_message(f"{attacker.name} attacks {defender.name} but it has no effect!")
    return 0
