"""Item templates and their registry."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
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


def _int(data, key, optional=False, unsigned=False):
    value = _get(data, key, optional)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or (unsigned and value < 0):
        raise TemplateError(f"field `{key}` must be an {'unsigned ' if unsigned else ''}integer")
    return value


def _float(data, key):
    value = _get(data, key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TemplateError(f"field `{key}` must be a number")
    return float(value)


def _str(data, key):
    value = _get(data, key)
    if not isinstance(value, str):
        raise TemplateError(f"field `{key}` must be a string")
    return value


def _bool(data, key):
    value = _get(data, key)
    if not isinstance(value, bool):
        raise TemplateError(f"field `{key}` must be a boolean")
    return value


def _enum(cls, data, key):
    value = _get(data, key)
    try:
        return cls(value)
    except ValueError:
        raise TemplateError(f"unknown variant `{value}` for `{key}`") from None


def _list(data, key):
    value = _get(data, key)
    if not isinstance(value, list):
        raise TemplateError(f"field `{key}` must be a list")
    return value


class WeaponType(Enum):
    SWORD = "Sword"
    AXE = "Axe"
    MACE = "Mace"
    DAGGER = "Dagger"
    STAFF = "Staff"
    BOW = "Bow"
    CROSSBOW = "Crossbow"


class ArmorType(Enum):
    LIGHT = "Light"
    MEDIUM = "Medium"
    HEAVY = "Heavy"
    SHIELD = "Shield"


class DamageType(Enum):
    PHYSICAL = "Physical"
    FIRE = "Fire"
    COLD = "Cold"
    LIGHTNING = "Lightning"
    POISON = "Poison"
    HOLY = "Holy"
    SHADOW = "Shadow"


class ConsumableType(Enum):
    POTION = "Potion"
    SCROLL = "Scroll"
    FOOD = "Food"
    ELIXIR = "Elixir"


class EffectKind(Enum):
    HEAL = "Heal"
    RESTORE_MANA = "RestoreMana"
    BUFF = "Buff"
    CURE_POISON = "CurePoison"
    REMOVE_CURSE = "RemoveCurse"
    TELEPORT = "Teleport"


class ModifierType(Enum):
    FLAT = "Flat"
    PERCENTAGE = "Percentage"


class ItemRarity(Enum):
    COMMON = "Common"
    UNCOMMON = "Uncommon"
    RARE = "Rare"
    EPIC = "Epic"
    LEGENDARY = "Legendary"


@dataclass(frozen=True)
class DamageRange:
    min: int
    max: int
    damage_type: DamageType

    @classmethod
    def from_dict(cls, data: Any) -> "DamageRange":
        return cls(_int(data, "min"), _int(data, "max"), _enum(DamageType, data, "damage_type"))

    def to_dict(self) -> dict:
        return {"min": self.min, "max": self.max, "damage_type": self.damage_type.value}


@dataclass(frozen=True)
class ItemRequirements:
    level: int | None = None
    strength: int | None = None
    dexterity: int | None = None
    intelligence: int | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "ItemRequirements":
        return cls(
            level=_int(data, "level", optional=True, unsigned=True),
            strength=_int(data, "strength", optional=True),
            dexterity=_int(data, "dexterity", optional=True),
            intelligence=_int(data, "intelligence", optional=True),
        )

    def to_dict(self) -> dict:
        return {"level": self.level, "strength": self.strength,
                "dexterity": self.dexterity, "intelligence": self.intelligence}


@dataclass(frozen=True)
class StatModifier:
    stat: str
    modifier_type: ModifierType
    value: float

    @classmethod
    def from_dict(cls, data: Any) -> "StatModifier":
        return cls(_str(data, "stat"), _enum(ModifierType, data, "modifier_type"), _float(data, "value"))

    def to_dict(self) -> dict:
        return {"stat": self.stat, "modifier_type": self.modifier_type.value, "value": self.value}


_UNIT_EFFECTS = {EffectKind.CURE_POISON, EffectKind.REMOVE_CURSE, EffectKind.TELEPORT}


@dataclass(frozen=True)
class ConsumableEffect:
    """One effect of a consumable; which fields apply depends on kind."""

    kind: EffectKind
    amount: int | None = None
    stat: str | None = None
    duration: float | None = None

    @classmethod
    def from_json(cls, data: Any) -> "ConsumableEffect":
        if isinstance(data, str):
            kind = _enum(EffectKind, {"effect": data}, "effect")
            if kind not in _UNIT_EFFECTS:
                raise TemplateError(f"effect `{data}` needs parameters")
            return cls(kind)
        if not isinstance(data, dict) or len(data) != 1:
            raise TemplateError("an effect must be a name or a single-key object")
        (name, body), = data.items()
        kind = _enum(EffectKind, {"effect": name}, "effect")
        if kind in _UNIT_EFFECTS:
            raise TemplateError(f"effect `{name}` takes no parameters")
        if kind is EffectKind.BUFF:
            return cls(kind, amount=_int(body, "amount"), stat=_str(body, "stat"),
                       duration=_float(body, "duration"))
        return cls(kind, amount=_int(body, "amount"))

    def to_json(self) -> Any:
        if self.kind in _UNIT_EFFECTS:
            return self.kind.value
        if self.kind is EffectKind.BUFF:
            return {"Buff": {"stat": self.stat, "amount": self.amount, "duration": self.duration}}
        return {self.kind.value: {"amount": self.amount}}


@dataclass(frozen=True)
class WeaponTemplate:
    id: str
    name: str
    description: str
    weapon_type: WeaponType
    damage: DamageRange
    attack_speed: float
    requirements: ItemRequirements
    modifiers: tuple[StatModifier, ...]
    rarity: ItemRarity
    value: int
    stack_size: int


@dataclass(frozen=True)
class ArmorTemplate:
    id: str
    name: str
    description: str
    armor_type: ArmorType
    defense: int
    requirements: ItemRequirements
    modifiers: tuple[StatModifier, ...]
    rarity: ItemRarity
    value: int


@dataclass(frozen=True)
class ConsumableTemplate:
    id: str
    name: str
    description: str
    consumable_type: ConsumableType
    effects: tuple[ConsumableEffect, ...]
    charges: int
    cooldown: float
    value: int
    stack_size: int


@dataclass(frozen=True)
class MiscItemTemplate:
    id: str
    name: str
    description: str
    category: str
    value: int
    stack_size: int
    quest_item: bool


ItemTemplate = Union[WeaponTemplate, ArmorTemplate, ConsumableTemplate, MiscItemTemplate]

_TAGS = {
    WeaponTemplate: "Weapon",
    ArmorTemplate: "Armor",
    ConsumableTemplate: "Consumable",
    MiscItemTemplate: "Misc",
}


def _common(data: Any) -> dict:
    return {"id": _str(data, "id"), "name": _str(data, "name"),
            "description": _str(data, "description")}


def parse_item_template(data: Any) -> ItemTemplate:
    """Build an item template from its JSON object, tagged by `type`."""
    tag = _get(data, "type")
    if tag == "Weapon":
        return WeaponTemplate(
            **_common(data),
            weapon_type=_enum(WeaponType, data, "weapon_type"),
            damage=DamageRange.from_dict(_get(data, "damage")),
            attack_speed=_float(data, "attack_speed"),
            requirements=ItemRequirements.from_dict(_get(data, "requirements")),
            modifiers=tuple(StatModifier.from_dict(m) for m in _list(data, "modifiers")),
            rarity=_enum(ItemRarity, data, "rarity"),
            value=_int(data, "value", unsigned=True),
            stack_size=_int(data, "stack_size", unsigned=True),
        )
    if tag == "Armor":
        return ArmorTemplate(
            **_common(data),
            armor_type=_enum(ArmorType, data, "armor_type"),
            defense=_int(data, "defense"),
            requirements=ItemRequirements.from_dict(_get(data, "requirements")),
            modifiers=tuple(StatModifier.from_dict(m) for m in _list(data, "modifiers")),
            rarity=_enum(ItemRarity, data, "rarity"),
            value=_int(data, "value", unsigned=True),
        )
    if tag == "Consumable":
        return ConsumableTemplate(
            **_common(data),
            consumable_type=_enum(ConsumableType, data, "consumable_type"),
            effects=tuple(ConsumableEffect.from_json(e) for e in _list(data, "effects")),
            charges=_int(data, "charges", unsigned=True),
            cooldown=_float(data, "cooldown"),
            value=_int(data, "value", unsigned=True),
            stack_size=_int(data, "stack_size", unsigned=True),
        )
    if tag == "Misc":
        return MiscItemTemplate(
            **_common(data),
            category=_str(data, "category"),
            value=_int(data, "value", unsigned=True),
            stack_size=_int(data, "stack_size", unsigned=True),
            quest_item=_bool(data, "quest_item"),
        )
    raise TemplateError(f"unknown item type `{tag}`")


def item_template_to_dict(template: ItemTemplate) -> dict:
    """The JSON object form of an item template."""
    out: dict[str, Any] = {"type": _TAGS[type(template)]}
    for name, value in vars(template).items():
        if isinstance(value, Enum):
            value = value.value
        elif isinstance(value, (DamageRange, ItemRequirements)):
            value = value.to_dict()
        elif isinstance(value, tuple):
            value = [v.to_json() if isinstance(v, ConsumableEffect) else v.to_dict() for v in value]
        out[name] = value
    return out


class ItemTemplateRegistry:
    """Item templates keyed by id."""

    def __init__(self) -> None:
        self._items: dict[str, ItemTemplate] = {}

    def register(self, template: ItemTemplate) -> None:
        self._items[template.id] = template

    def get(self, item_id: str) -> ItemTemplate | None:
        return self._items.get(item_id)

    def count(self) -> int:
        return len(self._items)