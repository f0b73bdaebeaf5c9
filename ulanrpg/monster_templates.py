"""Monster templates, their registry and spawning monsters from them."""

from __future__ import annotations

import json
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator

from .components import AIType, CombatStats, Health, Monster, Position, Stats
from .world import World


class TemplateError(ValueError):
    """Raised when template data is malformed."""


def _field(data: Any, key: str, check, optional: bool = False):
    if not isinstance(data, dict):
        raise TemplateError(f"expected an object, got {type(data).__name__}")
    if key not in data or (optional and data[key] is None):
        if optional:
            return None
        raise TemplateError(f"missing field `{key}`")
    return check(data[key], key)


def _int(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TemplateError(f"field `{key}` must be an integer")
    return value


def _uint(value: Any, key: str) -> int:
    value = _int(value, key)
    if value < 0:
        raise TemplateError(f"field `{key}` must not be negative")
    return value


def _float(value: Any, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TemplateError(f"field `{key}` must be a number")
    return float(value)


def _str(value: Any, key: str) -> str:
    if not isinstance(value, str):
        raise TemplateError(f"field `{key}` must be a string")
    return value


def _enum(cls):
    def check(value: Any, key: str):
        try:
            return cls(value)
        except ValueError:
            raise TemplateError(f"unknown variant `{value}` for `{key}`") from None

    return check


class MonsterFamily(Enum):
    HUMANOID = "Humanoid"
    BEAST = "Beast"
    UNDEAD = "Undead"
    ELEMENTAL = "Elemental"
    DEMON = "Demon"
    DRAGON = "Dragon"
    CONSTRUCT = "Construct"
    ABERRATION = "Aberration"


@dataclass(frozen=True)
class HealthTemplate:
    base_health: int
    health_per_level: int


@dataclass(frozen=True)
class StatsTemplate:
    base_strength: int
    base_dexterity: int
    base_intelligence: int
    base_constitution: int
    strength_per_level: float
    dexterity_per_level: float
    intelligence_per_level: float
    constitution_per_level: float


@dataclass(frozen=True)
class CombatStatsTemplate:
    base_damage: int
    base_defense: int
    base_accuracy: int
    base_evasion: int
    damage_per_level: float
    defense_per_level: float


def _build(cls, data: Any, kinds: dict):
    return cls(**{name: _field(data, name, check) for name, check in kinds.items()})


@dataclass(frozen=True)
class MonsterTemplate:
    """Base properties for one kind of monster."""

    id: str
    name: str
    family: MonsterFamily
    monster_type: str
    health: HealthTemplate
    stats: StatsTemplate
    combat: CombatStatsTemplate
    ai_type: AIType
    level_range: tuple[int, int]
    experience_reward: int
    loot_table_id: str | None
    display_char: str
    display_color: tuple[float, float, float]

    @classmethod
    def from_dict(cls, data: Any) -> "MonsterTemplate":
        def level_range(value, key):
            if not isinstance(value, list) or len(value) != 2:
                raise TemplateError(f"field `{key}` must be a pair")
            return (_int(value[0], key), _int(value[1], key))

        def display_char(value, key):
            if not isinstance(value, str) or len(value) != 1:
                raise TemplateError(f"field `{key}` must be a single character")
            return value

        def display_color(value, key):
            if not isinstance(value, list) or len(value) != 3:
                raise TemplateError(f"field `{key}` must hold three numbers")
            return tuple(_float(v, key) for v in value)

        return cls(
            id=_field(data, "id", _str),
            name=_field(data, "name", _str),
            family=_field(data, "family", _enum(MonsterFamily)),
            monster_type=_field(data, "type", _str),
            health=_field(data, "health", lambda v, k: _build(
                HealthTemplate, v, {"base_health": _int, "health_per_level": _int})),
            stats=_field(data, "stats", lambda v, k: _build(StatsTemplate, v, {
                "base_strength": _int, "base_dexterity": _int,
                "base_intelligence": _int, "base_constitution": _int,
                "strength_per_level": _float, "dexterity_per_level": _float,
                "intelligence_per_level": _float, "constitution_per_level": _float,
            })),
            combat=_field(data, "combat", lambda v, k: _build(CombatStatsTemplate, v, {
                "base_damage": _int, "base_defense": _int,
                "base_accuracy": _int, "base_evasion": _int,
                "damage_per_level": _float, "defense_per_level": _float,
            })),
            ai_type=_field(data, "ai_type", _enum(AIType)),
            level_range=_field(data, "level_range", level_range),
            experience_reward=_field(data, "experience_reward", _uint),
            loot_table_id=_field(data, "loot_table_id", _str, optional=True),
            display_char=_field(data, "display_char", display_char),
            display_color=_field(data, "display_color", display_color),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "family": self.family.value,
            "type": self.monster_type,
            "health": vars(self.health).copy(),
            "stats": vars(self.stats).copy(),
            "combat": vars(self.combat).copy(),
            "ai_type": self.ai_type.value,
            "level_range": list(self.level_range),
            "experience_reward": self.experience_reward,
            "loot_table_id": self.loot_table_id,
            "display_char": self.display_char,
            "display_color": list(self.display_color),
        }

    def spans(self, min_level: int, max_level: int) -> bool:
        return self.level_range[0] <= max_level and self.level_range[1] >= min_level


class MonsterTemplateRegistry:
    """All monster templates, indexed by id, type and family."""

    def __init__(self) -> None:
        self._templates: dict[str, MonsterTemplate] = {}
        self._by_type: dict[str, list[str]] = {}
        self._by_family: dict[MonsterFamily, list[str]] = {}

    def register(self, template: MonsterTemplate) -> None:
        self._by_type.setdefault(template.monster_type, []).append(template.id)
        self._by_family.setdefault(template.family, []).append(template.id)
        self._templates[template.id] = template

    def get(self, template_id: str) -> MonsterTemplate | None:
        return self._templates.get(template_id)

    def get_templates_for_level_range(self, min_level: int, max_level: int) -> list[MonsterTemplate]:
        return [t for t in self._templates.values() if t.spans(min_level, max_level)]

    def _resolve(self, ids: list[str]) -> list[MonsterTemplate]:
        return [self._templates[i] for i in ids if i in self._templates]

    def get_templates_by_type(self, monster_type: str) -> list[MonsterTemplate]:
        return self._resolve(self._by_type.get(monster_type, []))

    def get_templates_by_family(self, family: MonsterFamily) -> list[MonsterTemplate]:
        return self._resolve(self._by_family.get(family, []))

    def get_templates_by_type_and_level(
        self, monster_type: str, min_level: int, max_level: int
    ) -> list[MonsterTemplate]:
        return [t for t in self.get_templates_by_type(monster_type) if t.spans(min_level, max_level)]

    def get_random_template_by_type(
        self, monster_type: str, min_level: int, max_level: int, rng: random.Random | None = None
    ) -> MonsterTemplate | None:
        candidates = self.get_templates_by_type_and_level(monster_type, min_level, max_level)
        if not candidates:
            return None
        return (rng or random).choice(candidates)

    def get_all_template_ids(self) -> list[str]:
        return list(self._templates)

    def get_all_templates(self) -> Iterator[MonsterTemplate]:
        return iter(list(self._templates.values()))

    def count(self) -> int:
        return len(self._templates)

    def load_from_json(self, json_data: str) -> None:
        """Register every template in a JSON array; nothing is added on error."""
        try:
            raw = json.loads(json_data)
        except json.JSONDecodeError as exc:
            raise TemplateError(str(exc)) from exc
        if not isinstance(raw, list):
            raise TemplateError("expected a JSON array of monster templates")
        templates = [MonsterTemplate.from_dict(item) for item in raw]
        for template in templates:
            self.register(template)


def spawn_monster_from_template(
    world: World,
    registry: MonsterTemplateRegistry,
    template_id: str,
    position: Position,
    level: int | None = None,
    rng: random.Random | None = None,
) -> int | None:
    """Spawn a monster scaled to its level; None if the template is unknown."""
    template = registry.get(template_id)
    if template is None:
        return None
    low, high = template.level_range
    if level is None:
        level = low if low == high else (rng or random).randint(low, high)
    steps = level - 1

    def scaled(base: int, per_level: float) -> int:
        return base + int(per_level * steps)

    hp = template.health.base_health + template.health.health_per_level * steps
    s, c = template.stats, template.combat
    return world.spawn(
        monster=Monster(template.ai_type),
        name=f"{template.name} (Lv.{level})",
        position=position,
        health=Health(hp, hp),
        stats=Stats(
            strength=scaled(s.base_strength, s.strength_per_level),
            dexterity=scaled(s.base_dexterity, s.dexterity_per_level),
            intelligence=scaled(s.base_intelligence, s.intelligence_per_level),
            constitution=scaled(s.base_constitution, s.constitution_per_level),
        ),
        combat=CombatStats(
            damage=scaled(c.base_damage, c.damage_per_level),
            defense=scaled(c.base_defense, c.defense_per_level),
            accuracy=c.base_accuracy,
            evasion=c.base_evasion,
        ),
        template_ref=template.id,
    )