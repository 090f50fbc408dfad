# engine/intents.py
"""Player intents produced by the input collaborator and their outcomes."""
from dataclasses import dataclass
from enum import Enum, auto

from game.constants import CARDINAL_DIRECTIONS


class IntentKind(Enum):
    MOVE = auto()
    TOGGLE_FULLSCREEN = auto()
    EXIT = auto()
    NO_OP = auto()


class PlayerAction(Enum):
    """What resolving one intent did to the turn."""

    TOOK_TURN = auto()
    DIDNT_TAKE_TURN = auto()
    EXIT = auto()


@dataclass(frozen=True)
class Intent:
    kind: IntentKind
    dx: int = 0
    dy: int = 0

    @classmethod
    def move(cls, dx: int, dy: int) -> "Intent":
        """A one-cell step; only the four cardinal directions are valid."""
        if (dx, dy) not in CARDINAL_DIRECTIONS:
            raise ValueError(f"Move intent must be a cardinal unit step, got {(dx, dy)}")
        return cls(IntentKind.MOVE, dx, dy)

    @classmethod
    def toggle_fullscreen(cls) -> "Intent":
        return cls(IntentKind.TOGGLE_FULLSCREEN)

    @classmethod
    def exit(cls) -> "Intent":
        return cls(IntentKind.EXIT)

    @classmethod
    def no_op(cls) -> "Intent":
        return cls(IntentKind.NO_OP)
