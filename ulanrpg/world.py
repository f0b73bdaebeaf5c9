"""A small entity store holding components for every game object."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from .components import (
    CombatStats,
    Health,
    Inventory,
    Item,
    Monster,
    Player,
    Position,
    Stats,
)


@dataclass
class Entity:
    """One game object and the components it carries."""

    id: int
    name: str | None = None
    position: Position | None = None
    health: Health | None = None
    stats: Stats | None = None
    combat: CombatStats | None = None
    player: Player | None = None
    monster: Monster | None = None
    item: Item | None = None
    inventory: Inventory | None = None
    template_ref: str | None = None

    def kind(self) -> str:
        if self.player is not None:
            return "PLAYER"
        if self.monster is not None:
            return "MONSTER"
        return "UNKNOWN"


class World:
    """Owns all entities, keyed by a numeric id."""

    def __init__(self) -> None:
        self._entities: dict[int, Entity] = {}
        self._next_id = 0

    def spawn(self, **kwargs) -> int:
        entity = Entity(id=self._next_id, **kwargs)
        self._next_id += 1
        self._entities[entity.id] = entity
        return entity.id

    def despawn(self, entity_id: int) -> bool:
        """Remove an entity; returns whether it existed."""
        return self._entities.pop(entity_id, None) is not None

    def get(self, entity_id: int | None) -> Entity | None:
        if entity_id is None:
            return None
        return self._entities.get(entity_id)

    def entities(self) -> Iterator[Entity]:
        return iter(list(self._entities.values()))

    def monsters(self) -> list[Entity]:
        return [e for e in self._entities.values() if e.monster is not None]

    def player(self) -> Entity | None:
        return next((e for e in self._entities.values() if e.player is not None), None)

    def occupied_positions(self) -> set[Position]:
        return {e.position for e in self._entities.values() if e.position is not None}

    def clear(self) -> None:
        self._entities.clear()

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._entities


def entity_diagnostics(world: World) -> list[str]:
    """Summary lines for every named entity with health and combat stats."""
    lines = ["=== ENTITY DIAGNOSTICS ==="]
    for e in world.entities():
        if e.name is None or e.health is None or e.combat is None:
            continue
        c = e.combat
        lines.append(
            f"{e.kind()} Entity {e.id}: {e.name} | Health: {e.health.current}/{e.health.max}"
            f" | Combat: dmg={c.damage}, def={c.defense}, acc={c.accuracy}, eva={c.evasion}"
        )
    lines.append("=========================")
    return lines