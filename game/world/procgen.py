# game/world/procgen.py
"""Room-and-corridor dungeon generation.

Rooms are random rectangles that may not touch any earlier room; each new
room is joined to the previous one by an L-shaped corridor.  Monsters are
seeded into each room as soon as it is carved and connected.
"""
from dataclasses import dataclass, field
from typing import List, NamedTuple, Tuple

import structlog

from game.constants import PLAYER_ID
from game.entities.registry import EntityRegistry
from game.entities.template_registry import EntityTemplateRegistry
from game.systems.movement_system import is_blocked
from game.world.game_map import GameMap
from game_rng import GameRNG

log = structlog.get_logger()


class Rect(NamedTuple):
    """A room's bounding box; ``x2``/``y2`` are one past the interior."""

    x1: int
    y1: int
    x2: int
    y2: int

    @classmethod
    def from_size(cls, x: int, y: int, w: int, h: int) -> "Rect":
        return cls(x, y, x + w, y + h)

    @property
    def center(self) -> Tuple[int, int]:
        """Center coordinates of the rectangle."""
        center_x = (self.x1 + self.x2) // 2
        center_y = (self.y1 + self.y2) // 2
        return center_x, center_y

    def intersects(self, other: "Rect") -> bool:
        """Returns True if this rectangle intersects with another one.

        Shared edges count as an intersection.
        """
        return (
            self.x1 <= other.x2
            and self.x2 >= other.x1
            and self.y1 <= other.y2
            and self.y2 >= other.y1
        )

    def contains_interior(self, x: int, y: int) -> bool:
        return self.x1 < x < self.x2 and self.y1 < y < self.y2


class Corridor(NamedTuple):
    """An inclusive straight run of carved cells."""

    x1: int
    y1: int
    x2: int
    y2: int


@dataclass
class DungeonLayout:
    """What the generator accepted, kept for inspection and tests."""

    rooms: List[Rect] = field(default_factory=list)
    corridors: List[Corridor] = field(default_factory=list)
    monsters_placed: int = 0


def create_room(room: Rect, game_map: GameMap) -> None:
    """Clears every tile strictly inside ``room``, leaving its walls."""
    game_map.carve(room.x1 + 1, room.y1 + 1, room.x2 - 1, room.y2 - 1)


def create_h_tunnel(x1: int, x2: int, y: int, game_map: GameMap) -> Corridor:
    corridor = Corridor(min(x1, x2), y, max(x1, x2), y)
    game_map.carve(*corridor)
    return corridor


def create_v_tunnel(y1: int, y2: int, x: int, game_map: GameMap) -> Corridor:
    corridor = Corridor(x, min(y1, y2), x, max(y1, y2))
    game_map.carve(*corridor)
    return corridor


def _connect_rooms(
    prev_room: Rect, new_room: Rect, game_map: GameMap, rng: GameRNG
) -> List[Corridor]:
    """Carves an L-shaped corridor between two room centers."""
    prev_x, prev_y = prev_room.center
    new_x, new_y = new_room.center
    if rng.coin_flip() == "heads":
        # Horizontal first, then vertical
        return [
            create_h_tunnel(prev_x, new_x, prev_y, game_map),
            create_v_tunnel(prev_y, new_y, new_x, game_map),
        ]
    return [
        create_v_tunnel(prev_y, new_y, prev_x, game_map),
        create_h_tunnel(prev_x, new_x, new_y, game_map),
    ]


def place_monsters(
    room: Rect,
    game_map: GameMap,
    entities: EntityRegistry,
    templates: EntityTemplateRegistry,
    max_room_monsters: int,
    rng: GameRNG,
) -> int:
    """Seeds up to ``max_room_monsters`` monsters inside ``room``.

    Each slot gets exactly one random cell; a blocked cell drops the slot.
    Returns how many monsters were placed.
    """
    num_monsters = rng.get_int(0, max_room_monsters)
    placed = 0
    for _ in range(num_monsters):
        x = rng.get_int(room.x1 + 1, room.x2 - 1)
        y = rng.get_int(room.y1 + 1, room.y2 - 1)
        if is_blocked(x, y, game_map, entities):
            log.debug("Monster slot dropped, cell blocked", pos=(x, y))
            continue
        template = templates.choose(rng)
        entities.add(templates.spawn(template, x, y))
        placed += 1
    return placed


def generate_dungeon(
    game_map: GameMap,
    entities: EntityRegistry,
    templates: EntityTemplateRegistry,
    rng: GameRNG,
    max_rooms: int,
    room_min_size: int,
    room_max_size: int,
    max_room_monsters: int,
) -> DungeonLayout:
    """Carves rooms and corridors into ``game_map`` and seeds monsters.

    The player (registry id 0) is moved to the center of the first accepted
    room.  Candidates that touch an accepted room are dropped but still use
    up one of the ``max_rooms`` attempts, so the result may hold fewer rooms.
    """
    log.info(
        "Generating dungeon",
        size=(game_map.width, game_map.height),
        max_rooms=max_rooms,
        room_size=(room_min_size, room_max_size),
    )
    if room_min_size < 2 or room_max_size < room_min_size:
        raise ValueError(
            f"Invalid room size bounds: min={room_min_size}, max={room_max_size}"
        )
    layout = DungeonLayout()

    for attempt in range(max_rooms):
        w = rng.get_int(room_min_size, room_max_size)
        h = rng.get_int(room_min_size, room_max_size)
        if w >= game_map.width or h >= game_map.height:
            log.debug("Room candidate larger than map", attempt=attempt, size=(w, h))
            continue
        x = rng.get_int(0, game_map.width - w - 1)
        y = rng.get_int(0, game_map.height - h - 1)
        new_room = Rect.from_size(x, y, w, h)

        if any(new_room.intersects(other) for other in layout.rooms):
            log.debug("Room candidate rejected", attempt=attempt, rect=new_room)
            continue

        create_room(new_room, game_map)
        if not layout.rooms:
            new_x, new_y = new_room.center
            entities[PLAYER_ID].set_pos(new_x, new_y)
        else:
            layout.corridors.extend(
                _connect_rooms(layout.rooms[-1], new_room, game_map, rng)
            )
        # Seeded after the player moves in so no monster lands on the start cell
        layout.monsters_placed += place_monsters(
            new_room, game_map, entities, templates, max_room_monsters, rng
        )
        layout.rooms.append(new_room)

    log.info(
        "Dungeon generated",
        rooms=len(layout.rooms),
        corridors=len(layout.corridors),
        monsters=layout.monsters_placed,
        player_start=tuple(entities[PLAYER_ID].position),
    )
    return layout
