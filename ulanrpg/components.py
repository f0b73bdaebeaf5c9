"""Plain data components attached to game entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class AIType(Enum):
    """How a monster behaves in combat."""

    AGGRESSIVE = "Aggressive"
    DEFENSIVE = "Defensive"
    PASSIVE = "Passive"


@dataclass(frozen=True)
class Position:
    """A tile coordinate on a dungeon level."""

    x: int
    y: int
    level: int = 0


@dataclass
class Health:
    current: int
    max: int


@dataclass
class Stats:
    strength: int
    dexterity: int
    intelligence: int
    constitution: int


@dataclass
class CombatStats:
    damage: int
    defense: int
    accuracy: int
    evasion: int


@dataclass
class Monster:
    ai_type: AIType


@dataclass(frozen=True)
class Player:
    """Marker for the player-controlled entity."""


@dataclass
class Inventory:
    capacity: int
    items: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class WeaponItem:
    damage: int


@dataclass(frozen=True)
class ArmorItem:
    defense: int


@dataclass(frozen=True)
class PotionItem:
    heal_amount: int


@dataclass(frozen=True)
class GoldItem:
    amount: int


ItemType = Union[WeaponItem, ArmorItem, PotionItem, GoldItem]


@dataclass
class Item:
    item_type: ItemType
    stack_size: int