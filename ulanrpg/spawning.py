"""Placing monsters in the world: single spawns, random area spawns and new-game goblins."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from .components import Position
from .monster_templates import MonsterTemplateRegistry, spawn_monster_from_template
from .world import World

log = logging.getLogger(__name__)

MAX_ATTEMPTS = 1000

NUM_GOBLINS = 2
GOBLIN_MIN_LEVEL = 1
GOBLIN_MAX_LEVEL = 3
GOBLIN_SPAWN_POSITIONS = (
    Position(5, 5, 0),
    Position(-3, 2, 0),
    Position(3, -4, 0),
    Position(-5, -2, 0),
    Position(7, 1, 0),
)


@dataclass(frozen=True)
class SpawnMonsterEvent:
    """A request to spawn one monster from a template."""

    template_id: str
    position: Position
    level: int | None = None


@dataclass(frozen=True)
class SpawnRandomMonstersEvent:
    """A request to scatter monsters around a point.

    Without a template filter, every template spanning the level range is used.
    """

    area_center: Position
    area_size: tuple[int, int]
    count: int
    level_range: tuple[int, int]
    template_filter: tuple[str, ...] | None = None


@dataclass(frozen=True)
class MonsterDensityConfig:
    monsters_per_room_base: float = 1.5
    monsters_per_room_per_level: float = 0.2
    elite_chance: float = 0.1
    pack_spawn_chance: float = 0.3
    pack_size_min: int = 2
    pack_size_max: int = 5


def _rng(rng: random.Random | None) -> random.Random:
    return rng if rng is not None else random.Random()


def spawn_monster(
    world: World,
    registry: MonsterTemplateRegistry,
    event: SpawnMonsterEvent,
    rng: random.Random | None = None,
) -> int | None:
    """Spawn the monster an event asks for; None if its template is unknown."""
    return spawn_monster_from_template(
        world, registry, event.template_id, event.position, event.level, _rng(rng)
    )


def spawn_random_monsters(
    world: World,
    registry: MonsterTemplateRegistry,
    event: SpawnRandomMonstersEvent,
    rng: random.Random | None = None,
) -> list[int]:
    """Spawn up to `count` monsters on free tiles in the area; returns their ids."""
    rng = _rng(rng)
    low, high = event.level_range
    if event.template_filter is not None:
        candidates = list(event.template_filter)
    else:
        candidates = [t.id for t in registry.get_templates_for_level_range(low, high)]
    if not candidates:
        log.warning("No valid templates found for spawn event")
        return []

    occupied = world.occupied_positions()
    width, height = event.area_size
    center = event.area_center
    spawned_ids: list[int] = []
    spawned = attempts = 0

    while spawned < event.count and attempts < MAX_ATTEMPTS:
        attempts += 1
        spot = Position(
            center.x + rng.randint(-width, width),
            center.y + rng.randint(-height, height),
            center.level,
        )
        if spot in occupied:
            continue
        template_id = rng.choice(candidates)
        level = low if low == high else rng.randint(low, high)
        entity_id = spawn_monster_from_template(world, registry, template_id, spot, level, rng)
        if entity_id is not None:
            spawned_ids.append(entity_id)
        spawned += 1

    if spawned < event.count:
        log.warning("Could only spawn %d out of %d requested monsters", spawned, event.count)
    return spawned_ids


def get_appropriate_monsters_for_level(
    registry: MonsterTemplateRegistry, dungeon_level: int
) -> list[str]:
    """Ids of templates that can appear on the given dungeon level."""
    return [t.id for t in registry.get_templates_for_level_range(dungeon_level, dungeon_level)]


def spawn_random_goblins(
    world: World,
    registry: MonsterTemplateRegistry,
    rng: random.Random | None = None,
) -> list[int]:
    """Place the starting goblins on distinct fixed spots around the player."""
    rng = _rng(rng)
    templates = registry.get_templates_by_type_and_level("Goblin", GOBLIN_MIN_LEVEL, GOBLIN_MAX_LEVEL)
    if not templates:
        log.warning(
            "No 'Goblin' type templates found for level range %d-%d",
            GOBLIN_MIN_LEVEL,
            GOBLIN_MAX_LEVEL,
        )
        return []

    used: list[Position] = []
    spawned: list[int] = []
    for number in range(1, NUM_GOBLINS + 1):
        template = rng.choice(templates)
        available = [p for p in GOBLIN_SPAWN_POSITIONS if p not in used]
        if not available:
            log.warning("Could not find an available position for goblin spawn #%d", number)
            continue
        spot = rng.choice(available)
        used.append(spot)
        low, high = template.level_range
        level = min(max(rng.randint(GOBLIN_MIN_LEVEL, GOBLIN_MAX_LEVEL), low), high)
        entity_id = spawn_monster_from_template(world, registry, template.id, spot, level, rng)
        if entity_id is None:
            log.warning("Failed to spawn monster from template: %s", template.id)
            continue
        log.info("Spawned %s (Lvl %d) at (%d, %d)", template.name, level, spot.x, spot.y)
        spawned.append(entity_id)
    return spawned