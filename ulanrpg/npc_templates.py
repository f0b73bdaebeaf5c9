"""NPC templates and their registry."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .monster_templates import TemplateError


def _get(data: Any, key: str, optional: bool = False):
    if not isinstance(data, dict):
        raise TemplateError(f"expected an object, got {type(data).__name__}")
    if key not in data or data[key] is None:
        if optional:
            return None
        raise TemplateError(f"missing field `{key}`")
    return data[key]


def _str(data, key, optional=False):
    value = _get(data, key, optional)
    if value is not None and not isinstance(value, str):
        raise TemplateError(f"field `{key}` must be a string")
    return value


def _strs(data, key):
    value = _get(data, key)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise TemplateError(f"field `{key}` must be a list of strings")
    return tuple(value)


def _enum(cls, data, key):
    value = _get(data, key)
    try:
        return cls(value)
    except ValueError:
        raise TemplateError(f"unknown variant `{value}` for `{key}`") from None


class NPCType(Enum):
    MERCHANT = "Merchant"
    QUEST_GIVER = "QuestGiver"
    TRAINER = "Trainer"
    GUARD = "Guard"
    CIVILIAN = "Civilian"
    NOBLE = "Noble"
    INNKEEPER = "Innkeeper"


class NPCImportance(Enum):
    ESSENTIAL = "Essential"
    IMPORTANT = "Important"
    NORMAL = "Normal"


@dataclass(frozen=True)
class DialoguePersonality:
    tone: str
    speaking_style: str
    interests: tuple[str, ...]
    knowledge_areas: tuple[str, ...]
    personality_traits: tuple[str, ...]

    @classmethod
    def from_dict(cls, data: Any) -> "DialoguePersonality":
        return cls(
            tone=_str(data, "tone"),
            speaking_style=_str(data, "speaking_style"),
            interests=_strs(data, "interests"),
            knowledge_areas=_strs(data, "knowledge_areas"),
            personality_traits=_strs(data, "personality_traits"),
        )

    def to_dict(self) -> dict:
        return {
            "tone": self.tone,
            "speaking_style": self.speaking_style,
            "interests": list(self.interests),
            "knowledge_areas": list(self.knowledge_areas),
            "personality_traits": list(self.personality_traits),
        }


# Service kind -> (payload field name, whether it is a list of strings, else scalar type)
_SERVICES = {
    "Shop": ("inventory_table", str),
    "Quest": ("quest_ids", list),
    "Training": ("skills", list),
    "Inn": ("room_cost", int),
    "Crafting": ("craft_types", list),
}


@dataclass(frozen=True)
class NPCService:
    """A service an NPC offers; value is the kind's single payload field."""

    kind: str
    value: Any

    def __post_init__(self) -> None:
        if self.kind not in _SERVICES:
            raise TemplateError(f"unknown service `{self.kind}`")

    @property
    def field_name(self) -> str:
        return _SERVICES[self.kind][0]

    @classmethod
    def from_json(cls, data: Any) -> "NPCService":
        if not isinstance(data, dict) or len(data) != 1:
            raise TemplateError("a service must be a single-key object")
        (kind, body), = data.items()
        if kind not in _SERVICES:
            raise TemplateError(f"unknown service `{kind}`")
        name, kind_type = _SERVICES[kind]
        if kind_type is list:
            return cls(kind, _strs(body, name))
        if kind_type is str:
            return cls(kind, _str(body, name))
        value = _get(body, name)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise TemplateError(f"field `{name}` must be an unsigned integer")
        return cls(kind, value)

    def to_json(self) -> dict:
        value = list(self.value) if isinstance(self.value, tuple) else self.value
        return {self.kind: {self.field_name: value}}


@dataclass(frozen=True)
class NPCTemplate:
    id: str
    name: str
    title: str | None
    description: str
    npc_type: NPCType
    dialogue_personality: DialoguePersonality
    services: tuple[NPCService, ...]
    faction: str | None
    importance: NPCImportance
    spawn_locations: tuple[str, ...]

    @classmethod
    def from_dict(cls, data: Any) -> "NPCTemplate":
        services = _get(data, "services")
        if not isinstance(services, list):
            raise TemplateError("field `services` must be a list")
        return cls(
            id=_str(data, "id"),
            name=_str(data, "name"),
            title=_str(data, "title", optional=True),
            description=_str(data, "description"),
            npc_type=_enum(NPCType, data, "npc_type"),
            dialogue_personality=DialoguePersonality.from_dict(_get(data, "dialogue_personality")),
            services=tuple(NPCService.from_json(s) for s in services),
            faction=_str(data, "faction", optional=True),
            importance=_enum(NPCImportance, data, "importance"),
            spawn_locations=_strs(data, "spawn_locations"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "title": self.title,
            "description": self.description,
            "npc_type": self.npc_type.value,
            "dialogue_personality": self.dialogue_personality.to_dict(),
            "services": [s.to_json() for s in self.services],
            "faction": self.faction,
            "importance": self.importance.value,
            "spawn_locations": list(self.spawn_locations),
        }


class NPCTemplateRegistry:
    """NPC templates keyed by id."""

    def __init__(self) -> None:
        self._npcs: dict[str, NPCTemplate] = {}

    def register(self, template: NPCTemplate) -> None:
        self._npcs[template.id] = template

    def get(self, npc_id: str) -> NPCTemplate | None:
        return self._npcs.get(npc_id)

    def count(self) -> int:
        return len(self._npcs)