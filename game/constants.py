from enum import Enum, IntEnum


class DeathPolicy(Enum):
    """Selects the terminal transition applied when a fighter hits 0 hp."""

    PLAYER = "player"
    MONSTER = "monster"


class AiKind(Enum):
    """Selects the per-turn decision function for an AI-driven entity."""

    BASIC = "basic"


class FovAlgorithm(IntEnum):
    """Field of view algorithms understood by :mod:`game.world.fov`."""

    BASIC = 0  # Ray casting towards the radius perimeter
    SHADOWCAST = 1  # Recursive shadowcasting over eight octants


# Registry index reserved for the player entity.
PLAYER_ID: int = 0

CORPSE_GLYPH: str = "%"
CORPSE_COLOR: tuple[int, int, int] = (127, 0, 0)

# Distance at which a basic monster stops closing in and attacks instead.
MELEE_RANGE: float = 2.0

CARDINAL_DIRECTIONS: tuple[tuple[int, int], ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))

__all__ = [
    "DeathPolicy",
    "AiKind",
    "FovAlgorithm",
    "PLAYER_ID",
    "CORPSE_GLYPH",
    "CORPSE_COLOR",
    "MELEE_RANGE",
    "CARDINAL_DIRECTIONS",
]
