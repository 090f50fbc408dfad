# engine/action_handler.py
"""
Handles processing of player intents, validating them against game rules,
and triggering the matching game state changes: bump-to-attack movement,
fullscreen toggling and exit.
"""
from typing import TYPE_CHECKING

import structlog

from engine.intents import Intent, IntentKind, PlayerAction
from game.systems import combat_system, movement_system

if TYPE_CHECKING:
    from engine.console_renderer import ConsoleRenderer
    from game.game_state import GameState

log = structlog.get_logger(__name__)


def player_move_or_attack(dx: int, dy: int, gs: "GameState") -> None:
    """Attacks a fighter standing on the target cell, otherwise tries to move.

    The player's turn is spent either way, even when the move is blocked.
    """
    player_id = gs.player_id
    player = gs.entity_registry[player_id]
    target_x, target_y = player.x + dx, player.y + dy

    target_id = gs.entity_registry.get_fighter_at(target_x, target_y)
    if target_id is not None and target_id != player_id:
        combat_system.handle_melee_attack(player_id, target_id, gs)
        return

    if not movement_system.move_by(player_id, dx, dy, gs):
        log.debug("Player bumped into obstacle", target=(target_x, target_y))


def process_player_action(
    intent: Intent,
    gs: "GameState",
    renderer: "ConsoleRenderer",
) -> PlayerAction:
    """
    Resolves one intent against the session.
    Returns whether the player spent a turn or asked to exit.
    """
    log.debug(
        "ActionHandler: Processing intent",
        kind=intent.kind.name,
        dx=intent.dx,
        dy=intent.dy,
    )

    match intent.kind:
        case IntentKind.TOGGLE_FULLSCREEN:
            renderer.toggle_fullscreen()
            return PlayerAction.DIDNT_TAKE_TURN

        case IntentKind.EXIT:
            log.info("Exit requested")
            return PlayerAction.EXIT

        case IntentKind.MOVE:
            if not gs.player.alive:
                log.debug("Ignoring move, player is dead")
                return PlayerAction.DIDNT_TAKE_TURN
            player_move_or_attack(intent.dx, intent.dy, gs)
            return PlayerAction.TOOK_TURN

        case _:
            return PlayerAction.DIDNT_TAKE_TURN
