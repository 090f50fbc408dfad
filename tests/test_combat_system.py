import pytest

from game.constants import CORPSE_COLOR, CORPSE_GLYPH, DeathPolicy
from game.entities.components import Entity, Fighter
from game.entities.registry import EntityRegistry
from game.entities.template_registry import EntityTemplateRegistry, make_player
from game.game_state import GameState
from game.systems.combat_system import handle_melee_attack, take_damage
from game.world.game_map import GameMap
from game_rng import GameRNG
from utils.config_loader import GameConfig


def create_game_state(player_hp: int = 30, player_defense: int = 2, player_power: int = 5):
    config = GameConfig(
        map_width=10,
        map_height=10,
        player_hp=player_hp,
        player_defense=player_defense,
        player_power=player_power,
    )
    gm = GameMap(width=10, height=10)
    gm.carve(1, 1, 8, 8)
    registry = EntityRegistry()
    registry.add(make_player(config, 5, 5))
    templates = EntityTemplateRegistry(config.monster_templates)
    return GameState(config, gm, registry, GameRNG(seed=1), templates)


def add_fighter(gs, x, y, name="Goblin", hp=10, defense=0, power=3):
    return gs.entity_registry.add(
        Entity(
            x=x,
            y=y,
            glyph="g",
            color=(0, 255, 0),
            name=name,
            blocks=True,
            alive=True,
            fighter=Fighter(
                max_hp=hp, hp=hp, defense=defense, power=power,
                on_death=DeathPolicy.MONSTER,
            ),
        )
    )


def test_damage_is_power_minus_defense():
    gs = create_game_state(player_power=5)
    goblin = add_fighter(gs, 5, 6, defense=2)
    dealt = handle_melee_attack(gs.player_id, goblin, gs)
    assert dealt == 3
    assert gs.entity_registry[goblin].fighter.hp == 7
    assert gs.message_log[-1][0] == "player attacks Goblin for 3 hit points."


def test_no_damage_when_defense_not_below_power():
    gs = create_game_state(player_power=2)
    goblin = add_fighter(gs, 5, 6, defense=5)
    dealt = handle_melee_attack(gs.player_id, goblin, gs)
    assert dealt == 0
    assert gs.entity_registry[goblin].fighter.hp == 10
    assert gs.message_log[-1][0] == "player attacks Goblin but it has no effect!"


def test_monster_death_leaves_corpse():
    gs = create_game_state(player_power=5)
    goblin_id = add_fighter(gs, 5, 6, hp=5)
    handle_melee_attack(gs.player_id, goblin_id, gs)
    goblin = gs.entity_registry[goblin_id]
    assert not goblin.alive
    assert goblin.glyph == CORPSE_GLYPH
    assert goblin.color == CORPSE_COLOR
    assert goblin.blocks is False
    assert goblin.fighter is None
    assert goblin.ai is None
    assert goblin.name == "remains of Goblin"
    assert ("Goblin is dead!", (255, 127, 0)) in gs.message_log
    assert len(gs.entity_registry) == 2


def test_player_death_keeps_fighter():
    gs = create_game_state(player_hp=1, player_defense=0)
    orc = add_fighter(gs, 5, 6, name="orc", power=3)
    handle_melee_attack(orc, gs.player_id, gs)
    player = gs.player
    assert player.fighter is not None
    assert player.fighter.hp <= 0
    assert not player.alive
    assert player.glyph == CORPSE_GLYPH
    assert player.color == CORPSE_COLOR
    assert [m for m, _ in gs.message_log].count("You died!") == 1


def test_death_fires_only_once():
    gs = create_game_state(player_hp=1, player_defense=0)
    orc = add_fighter(gs, 5, 6, name="orc", power=3)
    handle_melee_attack(orc, gs.player_id, gs)
    handle_melee_attack(orc, gs.player_id, gs)
    take_damage(gs.player, 4, gs)
    assert gs.player.fighter.hp == 1 - 3 - 3 - 4
    assert [m for m, _ in gs.message_log].count("You died!") == 1


def test_zero_or_negative_damage_is_ignored():
    gs = create_game_state()
    take_damage(gs.player, 0, gs)
    take_damage(gs.player, -3, gs)
    assert gs.player.fighter.hp == 30
    assert gs.player.alive


def test_attacking_self_is_a_programming_error():
    gs = create_game_state()
    with pytest.raises(ValueError):
        handle_melee_attack(gs.player_id, gs.player_id, gs)
