"""Spawning item entities from templates and dropping rolled loot."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from .components import GoldItem, Item, PotionItem, Position, WeaponItem
from .item_templates import (
    ConsumableTemplate,
    EffectKind,
    ItemTemplateRegistry,
    WeaponTemplate,
)
from .loot_tables import ExperienceLoot, GoldLoot, ItemLoot, LootTableRegistry
from .world import World

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DropLootEvent:
    loot_table_id: str
    position: Position
    level: int
    luck: float


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def spawn_item_from_template(
    world: World, registry: ItemTemplateRegistry, item_id: str, position: Position
) -> int | None:
    """Spawn a weapon or consumable item; other kinds and unknown ids give None."""
    template = registry.get(item_id)
    if isinstance(template, WeaponTemplate):
        item_type = WeaponItem(_trunc_div(template.damage.min + template.damage.max, 2))
    elif isinstance(template, ConsumableTemplate):
        heal = next((e.amount for e in template.effects if e.kind is EffectKind.HEAL), 0)
        item_type = PotionItem(heal)
    else:
        return None
    return world.spawn(
        item=Item(item_type, template.stack_size),
        name=template.name,
        position=position,
    )


def drop_loot(
    world: World,
    loot_registry: LootTableRegistry,
    item_registry: ItemTemplateRegistry,
    event: DropLootEvent,
    rng: random.Random | None = None,
) -> tuple[list[int], int]:
    """Roll the event's table and lay the loot out around its position.

    Returns the spawned entity ids and the experience dropped.
    """
    results = loot_registry.roll_loot(event.loot_table_id, event.level, event.luck, rng)
    spawned: list[int] = []
    experience = 0
    for i, result in enumerate(results):
        spot = Position(
            event.position.x + i % 3 - 1,
            event.position.y + i // 3 - 1,
            event.position.level,
        )
        if isinstance(result, ItemLoot):
            entity_id = spawn_item_from_template(world, item_registry, result.item_id, spot)
            if entity_id is not None:
                world.get(entity_id).item.stack_size = result.quantity
                spawned.append(entity_id)
        elif isinstance(result, GoldLoot):
            spawned.append(
                world.spawn(
                    item=Item(GoldItem(result.amount), 1),
                    name=f"{result.amount} Gold",
                    position=spot,
                )
            )
        elif isinstance(result, ExperienceLoot):
            log.info("Dropped %d experience", result.amount)
            experience += result.amount
    return spawned, experience