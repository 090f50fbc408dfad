# engine/console_renderer.py
"""Plain-text front end for terminal sessions.

:class:`ConsoleRenderer` prints one frame per cycle; :class:`StdinInput`
reads one key name per line (``up``, ``alt+enter``, ``escape``...) and hands
back intents.
"""
import sys
from typing import TYPE_CHECKING, List, TextIO

import structlog

from engine.input_handler import InputHandler
from engine.intents import Intent
from engine.renderer import entities_to_draw, hp_readout, tile_background_colors

if TYPE_CHECKING:
    from game.game_state import GameState

log = structlog.get_logger(__name__)

WALL_CHAR = "#"
FLOOR_CHAR = "."
UNSEEN_CHAR = " "
DIM_WALL_CHAR = "+"
DIM_FLOOR_CHAR = ","
MESSAGES_SHOWN = 5


class ConsoleRenderer:
    def __init__(self, out: TextIO | None = None):
        self.out = out if out is not None else sys.stdout
        self.fullscreen = False

    def toggle_fullscreen(self) -> None:
        self.fullscreen = not self.fullscreen
        log.info("Fullscreen toggled", fullscreen=self.fullscreen)

    def frame_lines(self, gs: "GameState") -> List[str]:
        """Builds the text rows of one frame: map, HP readout, recent messages."""
        game_map = gs.game_map
        _, drawn = tile_background_colors(game_map, gs.fov, gs.config)
        visible = gs.fov.visible
        wall = game_map.block_sight

        grid = [[UNSEEN_CHAR] * game_map.width for _ in range(game_map.height)]
        for y in range(game_map.height):
            row = grid[y]
            for x in range(game_map.width):
                if not drawn[y, x]:
                    continue
                if visible[y, x]:
                    row[x] = WALL_CHAR if wall[y, x] else FLOOR_CHAR
                else:
                    row[x] = DIM_WALL_CHAR if wall[y, x] else DIM_FLOOR_CHAR

        for entity in entities_to_draw(gs):
            grid[entity.y][entity.x] = entity.glyph

        lines = ["".join(row) for row in grid]
        readout = hp_readout(gs.player)
        if readout is not None:
            lines.append(readout)
        lines.extend(text for text, _ in gs.message_log[-MESSAGES_SHOWN:])
        return lines

    def render(self, gs: "GameState") -> None:
        self.out.write("\n".join(self.frame_lines(gs)) + "\n")
        self.out.flush()


class StdinInput:
    """Blocks on a text stream for the next key name."""

    def __init__(self, input_handler: InputHandler, stream: TextIO | None = None):
        self.input_handler = input_handler
        self.stream = stream if stream is not None else sys.stdin

    def wait_for_intent(self) -> Intent:
        line = self.stream.readline()
        if not line:
            log.info("Input stream closed")
            return Intent.exit()
        return self.input_handler.intent_for_line(line)
