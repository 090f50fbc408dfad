# game/entities/registry.py
from typing import Iterator, Self

import structlog

from game.constants import PLAYER_ID
from game.entities.components import Entity

log = structlog.get_logger()


class EntityRegistry:
    """Arena of entities addressed by stable integer ids.

    The id of an entity is its index in the backing list.  Entities are never
    removed, so ids stay valid for the whole session; index ``PLAYER_ID`` (0)
    always holds the player.
    """

    def __init__(self: Self):
        self._entities: list[Entity] = []
        log.debug("EntityRegistry initialized")

    def __len__(self: Self) -> int:
        return len(self._entities)

    def __iter__(self: Self) -> Iterator[Entity]:
        return iter(self._entities)

    def __getitem__(self: Self, entity_id: int) -> Entity:
        return self._entities[entity_id]

    def ids(self: Self) -> range:
        return range(len(self._entities))

    def add(self: Self, entity: Entity) -> int:
        """Appends ``entity`` and returns its id."""
        if not self._entities and entity.fighter is None:
            log.warning("First registered entity has no fighter", name=entity.name)
        self._entities.append(entity)
        entity_id = len(self._entities) - 1
        log.debug(
            "Entity registered",
            entity_id=entity_id,
            name=entity.name,
            pos=(entity.x, entity.y),
        )
        return entity_id

    @property
    def player(self: Self) -> Entity:
        return self._entities[PLAYER_ID]

    def get_pair(self: Self, first_id: int, second_id: int) -> tuple[Entity, Entity]:
        """Returns two distinct entities for simultaneous mutation.

        Asking for the same id twice is a caller bug and raises ``ValueError``.
        """
        if first_id == second_id:
            log.critical("Aliased entity access requested", entity_id=first_id)
            raise ValueError(
                f"get_pair requires two distinct ids, got {first_id} twice"
            )
        return self._entities[first_id], self._entities[second_id]

    def get_blocking_entity_at(self: Self, x: int, y: int) -> int | None:
        for entity_id, entity in enumerate(self._entities):
            if entity.blocks and entity.x == x and entity.y == y:
                return entity_id
        return None

    def get_fighter_at(self: Self, x: int, y: int) -> int | None:
        """First entity id at ``(x, y)`` that carries a Fighter."""
        for entity_id, entity in enumerate(self._entities):
            if entity.fighter is not None and entity.x == x and entity.y == y:
                return entity_id
        return None
