from pathlib import Path

import pytest
import yaml

from utils.config_loader import (
    GameConfig,
    MonsterTemplate,
    load_toml_config,
    load_yaml_config,
    parse_monster_templates,
)
from utils.logging_utils import resolve_level

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"


def test_empty_mapping_gives_classic_defaults():
    config = GameConfig.from_dict({})
    assert config == GameConfig()
    assert (config.map_width, config.map_height) == (80, 45)
    assert (config.room_min_size, config.room_max_size) == (6, 10)
    assert config.max_rooms == 30
    assert config.max_room_monsters == 3
    assert config.fov_radius == 10
    assert config.fov_algorithm == "basic"
    assert config.fov_light_walls is True
    assert config.dungeon_seed is None
    assert (config.player_hp, config.player_defense, config.player_power) == (30, 2, 5)
    assert [t.name for t in config.monster_templates] == ["orc", "troll"]


def test_shipped_config_matches_defaults():
    raw = load_yaml_config(CONFIG_DIR / "config.yaml", "Main")
    assert GameConfig.from_dict(raw) == GameConfig()


def test_overrides_are_applied():
    config = GameConfig.from_dict(
        {
            "dungeon": {"map_width": 40, "seed": "17", "max_rooms": 5},
            "fov": {"algorithm": "shadowcast", "radius": 0, "light_walls": False},
            "player": {"hp": 50, "color": [1, 2, 3]},
            "monsters": {
                "rat": {"glyph": "r", "hp": 2, "power": 1},
            },
        }
    )
    assert config.map_width == 40
    assert config.map_height == 45
    assert config.dungeon_seed == 17
    assert config.max_rooms == 5
    assert config.fov_algorithm == "shadowcast"
    assert config.fov_radius == 0
    assert config.fov_light_walls is False
    assert config.player_hp == 50
    assert config.player_color == (1, 2, 3)
    assert config.monster_templates == (
        MonsterTemplate(
            name="rat", glyph="r", color=(255, 255, 255),
            hp=2, defense=0, power=1, weight=1.0,
        ),
    )


def test_monster_template_missing_stat_raises():
    with pytest.raises(KeyError):
        parse_monster_templates({"blob": {"glyph": "b", "hp": 3}})


def test_missing_yaml_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_yaml_config(tmp_path / "nope.yaml", "Main")


def test_malformed_yaml_raises(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("dungeon: [unclosed\n")
    with pytest.raises(yaml.YAMLError):
        load_yaml_config(path, "Main")


def test_empty_yaml_is_empty_mapping(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_yaml_config(path, "Main") == {}


def test_missing_or_broken_toml_yields_empty(tmp_path):
    assert load_toml_config(tmp_path / "missing.toml", "Keybindings") == {}
    path = tmp_path / "broken.toml"
    path.write_text("[bindings\nkey = ")
    assert load_toml_config(path, "Keybindings") == {}


def test_shipped_keybindings_parse():
    bindings = load_toml_config(CONFIG_DIR / "keybindings.toml", "Keybindings")
    assert set(bindings["bindings"]) == {"common", "movement"}
    assert bindings["bindings"]["common"]["toggle_fullscreen"]["mods"] == ["alt"]


def test_resolve_level():
    assert resolve_level("debug") == 10
    assert resolve_level("INFO") == 20
    assert resolve_level(30) == 30
    with pytest.raises(ValueError):
        resolve_level("loud")


def test_shipped_config_has_only_read_sections():
    raw = load_yaml_config(CONFIG_DIR / "config.yaml", "Main")
    assert set(raw) <= {"log_level", "dungeon", "fov", "player", "colors", "monsters"}
