"""Loot tables: weighted drop entries, conditions and rolling loot."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Union

from .monster_templates import TemplateError


def _get(data: Any, key: str, optional: bool = False):
    if not isinstance(data, dict):
        raise TemplateError(f"expected an object, got {type(data).__name__}")
    if key not in data or data[key] is None:
        if optional:
            return None
        raise TemplateError(f"missing field `{key}`")
    return data[key]


def _uint(data: Any, key: str) -> int:
    value = _get(data, key)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise TemplateError(f"field `{key}` must be an unsigned integer")
    return value


def _float(data: Any, key: str) -> float:
    value = _get(data, key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TemplateError(f"field `{key}` must be a number")
    return float(value)


def _str(data: Any, key: str) -> str:
    value = _get(data, key)
    if not isinstance(value, str):
        raise TemplateError(f"field `{key}` must be a string")
    return value


def _list(data: Any, key: str) -> list:
    value = _get(data, key)
    if not isinstance(value, list):
        raise TemplateError(f"field `{key}` must be a list")
    return value


@dataclass(frozen=True)
class QuantityRange:
    min: int
    max: int

    @classmethod
    def from_dict(cls, data: Any) -> "QuantityRange":
        return cls(_uint(data, "min"), _uint(data, "max"))


@dataclass(frozen=True)
class BonusRolls:
    per_level: float
    per_luck: float

    @classmethod
    def from_dict(cls, data: Any) -> "BonusRolls":
        return cls(_float(data, "per_level"), _float(data, "per_luck"))


@dataclass(frozen=True)
class LootRolls:
    min: int
    max: int
    bonus_rolls: BonusRolls | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "LootRolls":
        bonus = _get(data, "bonus_rolls", optional=True)
        return cls(
            _uint(data, "min"),
            _uint(data, "max"),
            None if bonus is None else BonusRolls.from_dict(bonus),
        )


@dataclass(frozen=True)
class ItemDrop:
    id: str
    quantity: QuantityRange
    modifiers: tuple[str, ...] | None = None


@dataclass(frozen=True)
class TableDrop:
    id: str


@dataclass(frozen=True)
class GoldDrop:
    amount: QuantityRange


@dataclass(frozen=True)
class ExperienceDrop:
    amount: QuantityRange


@dataclass(frozen=True)
class NothingDrop:
    """An entry that yields no loot."""


LootDrop = Union[ItemDrop, TableDrop, GoldDrop, ExperienceDrop, NothingDrop]


@dataclass(frozen=True)
class MinLevel:
    level: int


@dataclass(frozen=True)
class MaxLevel:
    level: int


@dataclass(frozen=True)
class RandomChance:
    chance: float


@dataclass(frozen=True)
class KilledByElement:
    element: str


@dataclass(frozen=True)
class PlayerHasItem:
    item_id: str


LootCondition = Union[MinLevel, MaxLevel, RandomChance, KilledByElement, PlayerHasItem]


def parse_loot_item(data: Any) -> LootDrop:
    """Build a drop from its JSON object, tagged by `type`."""
    tag = _get(data, "type")
    if tag == "Item":
        modifiers = _get(data, "modifiers", optional=True)
        if modifiers is not None:
            if not isinstance(modifiers, list) or not all(isinstance(m, str) for m in modifiers):
                raise TemplateError("field `modifiers` must be a list of strings")
            modifiers = tuple(modifiers)
        return ItemDrop(_str(data, "id"), QuantityRange.from_dict(_get(data, "quantity")), modifiers)
    if tag == "Table":
        return TableDrop(_str(data, "id"))
    if tag == "Gold":
        return GoldDrop(QuantityRange.from_dict(_get(data, "amount")))
    if tag == "Experience":
        return ExperienceDrop(QuantityRange.from_dict(_get(data, "amount")))
    if tag == "Nothing":
        return NothingDrop()
    raise TemplateError(f"unknown loot item type `{tag}`")


def parse_loot_condition(data: Any) -> LootCondition:
    """Build a condition from its JSON object, tagged by `type`."""
    tag = _get(data, "type")
    if tag == "MinLevel":
        return MinLevel(_uint(data, "level"))
    if tag == "MaxLevel":
        return MaxLevel(_uint(data, "level"))
    if tag == "Random":
        return RandomChance(_float(data, "chance"))
    if tag == "KilledByElement":
        return KilledByElement(_str(data, "element"))
    if tag == "PlayerHasItem":
        return PlayerHasItem(_str(data, "item_id"))
    raise TemplateError(f"unknown loot condition type `{tag}`")


@dataclass(frozen=True)
class LootEntry:
    weight: float
    item: LootDrop
    conditions: tuple[LootCondition, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "LootEntry":
        return cls(
            weight=_float(data, "weight"),
            item=parse_loot_item(_get(data, "item")),
            conditions=tuple(parse_loot_condition(c) for c in _list(data, "conditions")),
        )


@dataclass(frozen=True)
class LootTable:
    id: str
    name: str
    rolls: LootRolls
    entries: tuple[LootEntry, ...]

    @classmethod
    def from_dict(cls, data: Any) -> "LootTable":
        return cls(
            id=_str(data, "id"),
            name=_str(data, "name"),
            rolls=LootRolls.from_dict(_get(data, "rolls")),
            entries=tuple(LootEntry.from_dict(e) for e in _list(data, "entries")),
        )


@dataclass(frozen=True)
class ItemLoot:
    item_id: str
    quantity: int


@dataclass(frozen=True)
class GoldLoot:
    amount: int


@dataclass(frozen=True)
class ExperienceLoot:
    amount: int


LootResult = Union[ItemLoot, GoldLoot, ExperienceLoot]


class LootTableRegistry:
    """Loot tables keyed by id."""

    def __init__(self) -> None:
        self._tables: dict[str, LootTable] = {}

    def register(self, table: LootTable) -> None:
        self._tables[table.id] = table

    def get(self, table_id: str) -> LootTable | None:
        return self._tables.get(table_id)

    def count(self) -> int:
        return len(self._tables)

    def roll_loot(
        self, table_id: str, level: int, luck: float, rng: random.Random | None = None
    ) -> list[LootResult]:
        """Roll a table; unknown tables yield nothing, nested tables are rolled in place."""
        rng = rng or random
        table = self.get(table_id)
        if table is None:
            return []

        rolls = rng.randint(table.rolls.min, table.rolls.max)
        bonus = table.rolls.bonus_rolls
        if bonus is not None:
            rolls += max(0, int(level * bonus.per_level)) + max(0, int(luck * bonus.per_luck))

        results: list[LootResult] = []
        for _ in range(rolls):
            entry = self._weighted_select(table.entries, level, rng)
            if entry is None:
                continue
            drop = entry.item
            if isinstance(drop, ItemDrop):
                results.append(ItemLoot(drop.id, rng.randint(drop.quantity.min, drop.quantity.max)))
            elif isinstance(drop, TableDrop):
                results.extend(self.roll_loot(drop.id, level, luck, rng))
            elif isinstance(drop, GoldDrop):
                results.append(GoldLoot(rng.randint(drop.amount.min, drop.amount.max)))
            elif isinstance(drop, ExperienceDrop):
                results.append(ExperienceLoot(rng.randint(drop.amount.min, drop.amount.max)))
        return results

    @staticmethod
    def _eligible(entry: LootEntry, level: int, rng) -> bool:
        for condition in entry.conditions:
            if isinstance(condition, MinLevel) and level < condition.level:
                return False
            if isinstance(condition, MaxLevel) and level > condition.level:
                return False
            if isinstance(condition, RandomChance) and rng.random() > condition.chance:
                return False
        return True

    def _weighted_select(self, entries, level: int, rng) -> LootEntry | None:
        eligible = [e for e in entries if self._eligible(e, level, rng)]
        if not eligible:
            return None
        roll = rng.random() * sum(e.weight for e in eligible)
        for entry in eligible:
            roll -= entry.weight
            if roll <= 0.0:
                return entry
        return None