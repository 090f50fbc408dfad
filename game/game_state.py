# game/game_state.py
import structlog

from game.constants import PLAYER_ID
from game.entities.components import Entity, Position
from game.entities.registry import EntityRegistry
from game.entities.template_registry import EntityTemplateRegistry, make_player
from game.world.fov import FieldOfView, parse_algorithm
from game.world.game_map import GameMap
from game.world.procgen import DungeonLayout, generate_dungeon
from game_rng import GameRNG
from utils.config_loader import GameConfig

log = structlog.get_logger()


class GameState:
    """Central container for mutable game data.

    One instance holds everything a session needs: the map, the entity
    registry (player at id 0), the player's field of view, the RNG used for
    generation and the message log.  Systems receive it explicitly.
    """

    def __init__(
        self,
        config: GameConfig,
        game_map: GameMap,
        entity_registry: EntityRegistry,
        rng: GameRNG,
        templates: EntityTemplateRegistry,
        layout: DungeonLayout | None = None,
    ):
        if len(entity_registry) == 0:
            raise ValueError("GameState requires the player at registry id 0.")

        self.config = config
        self.game_map = game_map
        self.entity_registry = entity_registry
        self.rng_instance = rng
        self.templates = templates
        self.layout = layout if layout is not None else DungeonLayout()
        self.player_id: int = PLAYER_ID
        self.fov = FieldOfView(
            game_map,
            radius=config.fov_radius,
            light_walls=config.fov_light_walls,
            algorithm=parse_algorithm(config.fov_algorithm),
        )
        self.message_log: list[tuple[str, tuple[int, int, int]]] = []
        self.turn_count: int = 0

        log.info(
            "Game state initialized",
            map_size=f"{game_map.width}x{game_map.height}",
            entities=len(entity_registry),
            rng_seed=rng.initial_seed,
        )

    @classmethod
    def new_game(cls, config: GameConfig) -> "GameState":
        """Builds a fresh dungeon from ``config`` and returns the session."""
        rng = GameRNG(seed=config.dungeon_seed)
        log.debug("GameRNG initialized", seed=rng.initial_seed)
        game_map = GameMap(config.map_width, config.map_height)
        entity_registry = EntityRegistry()
        entity_registry.add(make_player(config))
        templates = EntityTemplateRegistry(config.monster_templates)
        layout = generate_dungeon(
            game_map,
            entity_registry,
            templates,
            rng,
            max_rooms=config.max_rooms,
            room_min_size=config.room_min_size,
            room_max_size=config.room_max_size,
            max_room_monsters=config.max_room_monsters,
        )
        gs = cls(config, game_map, entity_registry, rng, templates, layout)
        gs.add_message(
            "Welcome stranger! Prepare to perish in the Tombs of the Ancient Kings.",
            (255, 0, 0),
        )
        return gs

    @property
    def player(self) -> Entity:
        return self.entity_registry[self.player_id]

    @property
    def player_position(self) -> Position:
        return self.player.position

    def update_fov(self) -> bool:
        """Recomputes the player's FOV if the player moved since the last call."""
        px, py = self.player_position
        return self.fov.update(px, py)

    def add_message(
        self, text: str, color: tuple[int, int, int] = (255, 255, 255)
    ) -> None:
        """Adds a message to the game log."""
        self.message_log.append((text, color))
        log.debug("Message added", message=text, color=color)

    def advance_turn(self) -> None:
        self.turn_count += 1
        log.debug("Turn advanced", turn=self.turn_count)
