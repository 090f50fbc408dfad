from game.constants import AiKind
from game.entities.registry import EntityRegistry
from game.entities.template_registry import EntityTemplateRegistry, make_player
from game.game_state import GameState
from game.systems.ai_system import AI_HANDLERS, basic_ai_take_turn, run_ai_phase
from game.world.game_map import GameMap
from game_rng import GameRNG
from utils.config_loader import GameConfig


def create_game_state(player_pos=(2, 5), fov_radius=10):
    config = GameConfig(map_width=14, map_height=11, fov_radius=fov_radius)
    gm = GameMap(width=14, height=11)
    gm.carve(1, 1, 12, 9)
    registry = EntityRegistry()
    registry.add(make_player(config, *player_pos))
    templates = EntityTemplateRegistry(config.monster_templates)
    gs = GameState(config, gm, registry, GameRNG(seed=4), templates)
    gs.update_fov()
    return gs


def add_monster(gs, x, y, name="orc"):
    template = gs.templates.get_template(name)
    return gs.entity_registry.add(gs.templates.spawn(template, x, y))


def test_every_ai_kind_has_a_handler():
    assert set(AI_HANDLERS) == set(AiKind)


def test_unseen_monster_stays_put():
    gs = create_game_state()
    # a wall column between player and monster
    gs.game_map.blocked[:, 6] = True
    gs.game_map.block_sight[:, 6] = True
    gs.fov.update(2, 5, force=True)
    orc = add_monster(gs, 10, 5)
    assert not gs.fov.is_visible(10, 5)
    basic_ai_take_turn(orc, gs)
    assert (gs.entity_registry[orc].x, gs.entity_registry[orc].y) == (10, 5)


def test_visible_monster_strictly_closes_distance():
    gs = create_game_state()
    orc_id = add_monster(gs, 11, 8)
    orc = gs.entity_registry[orc_id]
    distance = orc.distance_to(gs.player)
    while distance >= 2.0:
        run_ai_phase(gs)
        assert not gs.game_map.is_blocked(orc.x, orc.y)
        assert (orc.x, orc.y) != (gs.player.x, gs.player.y)
        new_distance = orc.distance_to(gs.player)
        assert new_distance < distance
        distance = new_distance
    assert gs.player.fighter.hp == 30


def test_adjacent_monster_attacks_player():
    gs = create_game_state()
    orc = add_monster(gs, 3, 5)
    basic_ai_take_turn(orc, gs)
    # orc power 3 against player defense 2
    assert gs.player.fighter.hp == 29
    assert gs.message_log[-1][0] == "orc attacks player for 1 hit points."


def test_diagonal_neighbour_counts_as_melee_range():
    gs = create_game_state()
    troll = add_monster(gs, 3, 6, name="troll")
    basic_ai_take_turn(troll, gs)
    assert gs.player.fighter.hp == 28
    assert (gs.entity_registry[troll].x, gs.entity_registry[troll].y) == (3, 6)


def test_monsters_act_in_registry_order():
    gs = create_game_state()
    add_monster(gs, 2, 4, name="troll")
    add_monster(gs, 2, 6, name="orc")
    run_ai_phase(gs)
    texts = [text for text, _ in gs.message_log]
    assert texts == [
        "troll attacks player for 2 hit points.",
        "orc attacks player for 1 hit points.",
    ]


def test_dead_or_mindless_entities_are_skipped():
    gs = create_game_state()
    orc_id = add_monster(gs, 3, 5)
    gs.entity_registry[orc_id].alive = False
    troll_id = add_monster(gs, 2, 4, name="troll")
    gs.entity_registry[troll_id].ai = None
    run_ai_phase(gs)
    assert gs.player.fighter.hp == 30
    assert gs.message_log == []


def test_monster_does_not_attack_player_without_hp():
    gs = create_game_state()
    gs.player.fighter.hp = 0
    orc = add_monster(gs, 3, 5)
    basic_ai_take_turn(orc, gs)
    assert gs.player.fighter.hp == 0
    assert gs.message_log == []
