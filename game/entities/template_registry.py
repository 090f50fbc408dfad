from __future__ import annotations

"""Registry for monster templates.

Stores immutable template data for the monster species.  Templates are loaded
from ``config.yaml`` at start-up; the generator picks one by weight for every
monster it seeds and builds a fresh :class:`Entity` from it.
"""

from typing import Sequence, Self, TYPE_CHECKING

import structlog

from game.constants import AiKind, DeathPolicy
from game.entities.components import Entity, Fighter
from utils.config_loader import GameConfig, MonsterTemplate

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from game_rng import GameRNG

log = structlog.get_logger()


class EntityTemplateRegistry:
    """Weighted collection of monster templates."""

    def __init__(self: Self, templates: Sequence[MonsterTemplate]):
        if not templates:
            raise ValueError("At least one monster template is required.")
        self.templates: tuple[MonsterTemplate, ...] = tuple(templates)
        log.debug(
            "EntityTemplateRegistry initialized",
            templates=[t.name for t in self.templates],
        )

    def get_template(self: Self, name: str) -> MonsterTemplate | None:
        """Retrieve a template definition by name."""
        for template in self.templates:
            if template.name == name:
                return template
        return None

    def choose(self: Self, rng: "GameRNG") -> MonsterTemplate:
        return rng.weighted_choice(
            self.templates, [t.weight for t in self.templates]
        )

    def spawn(self: Self, template: MonsterTemplate, x: int, y: int) -> Entity:
        """Builds a live, blocking, basic-AI monster from ``template``."""
        return Entity(
            x=x,
            y=y,
            glyph=template.glyph,
            color=template.color,
            name=template.name,
            blocks=True,
            alive=True,
            fighter=Fighter(
                max_hp=template.hp,
                hp=template.hp,
                defense=template.defense,
                power=template.power,
                on_death=DeathPolicy.MONSTER,
            ),
            ai=AiKind.BASIC,
        )


def make_player(config: GameConfig, x: int = 0, y: int = 0) -> Entity:
    """The player starts at a placeholder position until generation moves it."""
    return Entity(
        x=x,
        y=y,
        glyph=config.player_glyph,
        color=config.player_color,
        name="player",
        blocks=True,
        alive=True,
        fighter=Fighter(
            max_hp=config.player_hp,
            hp=config.player_hp,
            defense=config.player_defense,
            power=config.player_power,
            on_death=DeathPolicy.PLAYER,
        ),
    )
