from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from game.constants import AiKind, DeathPolicy


@dataclass
class Position:
    """Spatial position on the map."""

    x: int
    y: int

    def __iter__(self):
        yield self.x
        yield self.y


@dataclass
class Fighter:
    """Combat statistics. ``hp`` never exceeds ``max_hp``."""

    max_hp: int
    hp: int
    defense: int
    power: int
    on_death: DeathPolicy

    def __post_init__(self) -> None:
        if self.hp > self.max_hp:
            raise ValueError("Fighter hp cannot exceed max_hp")


@dataclass
class Entity:
    """Player, monster or corpse.

    Corpses are former monsters with ``fighter`` and ``ai`` cleared and
    ``blocks`` set to ``False``.
    """

    x: int
    y: int
    glyph: str
    color: Tuple[int, int, int]
    name: str
    blocks: bool = False
    alive: bool = False
    fighter: Optional[Fighter] = None
    ai: Optional[AiKind] = None

    @property
    def position(self) -> Position:
        return Position(self.x, self.y)

    def set_pos(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    def distance_to(self, other: "Entity") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)
