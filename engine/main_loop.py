# engine/main_loop.py
from typing import TYPE_CHECKING, Self

import structlog

from game.game_state import GameState
from game.systems.ai_system import run_ai_phase

from . import action_handler
from .intents import PlayerAction

if TYPE_CHECKING:
    from .console_renderer import ConsoleRenderer, StdinInput

log = structlog.get_logger()


class MainLoop:
    """
    Coordinates the main game logic: FOV refresh, rendering, waiting for an
    intent, resolving it and, when the player spent a turn, the AI phase.
    """

    def __init__(
        self: Self,
        game_state: GameState,
        renderer: "ConsoleRenderer",
        input_source: "StdinInput",
    ):
        self.game_state = game_state
        self.renderer = renderer
        self.input_source = input_source
        log.info("MainLoop initialized successfully")

    def run_cycle(self: Self) -> PlayerAction:
        """Runs one await-input, resolve, AI-phase cycle."""
        gs = self.game_state
        if gs.update_fov():
            log.debug("FOV recomputed", origin=tuple(gs.player_position))
        self.renderer.render(gs)

        intent = self.input_source.wait_for_intent()
        result = action_handler.process_player_action(intent, gs, self.renderer)

        if result is PlayerAction.TOOK_TURN:
            gs.advance_turn()
            if gs.player.alive:
                run_ai_phase(gs)
        return result

    def run(self: Self) -> None:
        """Cycles until the player asks to exit."""
        log.info("Entering main loop")
        while self.run_cycle() is not PlayerAction.EXIT:
            pass
        log.info("Main loop finished", turns=self.game_state.turn_count)
