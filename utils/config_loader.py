# utils/config_loader.py
"""Configuration loading helpers.

YAML holds the game settings (map size, room bounds, player and monster
stats, colors); TOML holds the keybindings.  :class:`GameConfig` turns the
raw YAML mapping into typed values, filling every missing key with the
stock defaults so an empty file still yields a playable game.
"""
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from typing import Dict as PyDict

import structlog
import yaml

log = structlog.get_logger(__name__)

RGB = tuple[int, int, int]

DEFAULT_MONSTER_TEMPLATES: PyDict[str, PyDict[str, Any]] = {
    "orc": {
        "glyph": "o",
        "color": [63, 127, 63],
        "hp": 10,
        "defense": 0,
        "power": 3,
        "weight": 80,
    },
    "troll": {
        "glyph": "T",
        "color": [0, 127, 0],
        "hp": 16,
        "defense": 1,
        "power": 4,
        "weight": 20,
    },
}


def load_toml_config(config_path: Path, config_name: str) -> PyDict[str, Any]:
    """Loads a TOML configuration file. Missing or broken files yield ``{}``."""
    if not config_path.is_file():
        log.error(f"{config_name} config file not found", path=str(config_path))
        return {}
    try:
        with config_path.open("rb") as f:  # tomllib requires bytes mode
            config_data = tomllib.load(f)
        log.info(f"{config_name} config loaded", path=str(config_path))
        return config_data
    except tomllib.TOMLDecodeError as e:
        log.error(
            f"Error parsing TOML for {config_name}",
            path=str(config_path),
            error=str(e),
            exc_info=True,
        )
        return {}


def load_yaml_config(config_path: Path, config_name: str) -> PyDict[str, Any]:
    """Loads a YAML configuration file, raising if it is missing or malformed."""
    if not config_path.is_file():
        log.error(f"{config_name} config file not found", path=str(config_path))
        raise FileNotFoundError(
            f"{config_name} configuration file not found: {config_path}"
        )
    try:
        with config_path.open("r") as f:
            config_data = yaml.safe_load(f)
        if config_data is None:
            log.warning(f"{config_name} config file is empty.", path=str(config_path))
            return {}
        log.info(f"{config_name} config loaded", path=str(config_path))
        return config_data
    except yaml.YAMLError as e:
        log.error(
            f"Error parsing YAML for {config_name}",
            path=str(config_path),
            error=str(e),
            exc_info=True,
        )
        raise


def _rgb(value: Any, default: RGB) -> RGB:
    if value is None:
        return default
    r, g, b = value
    return int(r), int(g), int(b)


@dataclass(frozen=True)
class MonsterTemplate:
    name: str
    glyph: str
    color: RGB
    hp: int
    defense: int
    power: int
    weight: float


def parse_monster_templates(
    raw_templates: PyDict[str, PyDict[str, Any]],
) -> tuple[MonsterTemplate, ...]:
    return tuple(
        MonsterTemplate(
            name=name,
            glyph=str(data["glyph"]),
            color=_rgb(data.get("color"), (255, 255, 255)),
            hp=int(data["hp"]),
            defense=int(data.get("defense", 0)),
            power=int(data["power"]),
            weight=float(data.get("weight", 1)),
        )
        for name, data in raw_templates.items()
    )


@dataclass(frozen=True)
class GameConfig:
    """Typed view over ``config.yaml``."""

    map_width: int = 80
    map_height: int = 45
    room_min_size: int = 6
    room_max_size: int = 10
    max_rooms: int = 30
    max_room_monsters: int = 3
    fov_radius: int = 10
    fov_algorithm: str = "basic"
    fov_light_walls: bool = True
    dungeon_seed: int | None = None
    log_level: str = "info"
    player_glyph: str = "@"
    player_color: RGB = (255, 255, 255)
    player_hp: int = 30
    player_defense: int = 2
    player_power: int = 5
    color_dark_wall: RGB = (0, 0, 100)
    color_light_wall: RGB = (130, 110, 50)
    color_dark_ground: RGB = (50, 50, 150)
    color_light_ground: RGB = (200, 180, 50)
    monster_templates: tuple[MonsterTemplate, ...] = field(
        default_factory=lambda: parse_monster_templates(DEFAULT_MONSTER_TEMPLATES)
    )

    @classmethod
    def from_dict(cls, config: PyDict[str, Any]) -> "GameConfig":
        dungeon = config.get("dungeon", {})
        fov = config.get("fov", {})
        player = config.get("player", {})
        colors = config.get("colors", {})
        raw_templates = config.get("monsters") or DEFAULT_MONSTER_TEMPLATES

        templates = parse_monster_templates(raw_templates)

        seed = dungeon.get("seed")
        return cls(
            map_width=int(dungeon.get("map_width", 80)),
            map_height=int(dungeon.get("map_height", 45)),
            room_min_size=int(dungeon.get("room_min_size", 6)),
            room_max_size=int(dungeon.get("room_max_size", 10)),
            max_rooms=int(dungeon.get("max_rooms", 30)),
            max_room_monsters=int(dungeon.get("max_room_monsters", 3)),
            fov_radius=int(fov.get("radius", 10)),
            fov_algorithm=str(fov.get("algorithm", "basic")),
            fov_light_walls=bool(fov.get("light_walls", True)),
            dungeon_seed=None if seed is None else int(seed),
            log_level=str(config.get("log_level", "info")),
            player_glyph=str(player.get("glyph", "@")),
            player_color=_rgb(player.get("color"), (255, 255, 255)),
            player_hp=int(player.get("hp", 30)),
            player_defense=int(player.get("defense", 2)),
            player_power=int(player.get("power", 5)),
            color_dark_wall=_rgb(colors.get("dark_wall"), (0, 0, 100)),
            color_light_wall=_rgb(colors.get("light_wall"), (130, 110, 50)),
            color_dark_ground=_rgb(colors.get("dark_ground"), (50, 50, 150)),
            color_light_ground=_rgb(colors.get("light_ground"), (200, 180, 50)),
            monster_templates=templates,
        )
