"""Loading template data files from disk into registries."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, TypeVar

from .item_templates import ItemTemplateRegistry, parse_item_template
from .loot_tables import LootTable, LootTableRegistry
from .monster_templates import MonsterTemplate, MonsterTemplateRegistry, TemplateError
from .npc_templates import NPCTemplate, NPCTemplateRegistry

T = TypeVar("T")


def _json_files(dir_path: Path) -> list[Path]:
    if dir_path.is_file():
        return [dir_path] if dir_path.suffix == ".json" else []
    return sorted(p for p in dir_path.rglob("*.json") if p.is_file())


def load_json_files(dir_path: str | os.PathLike, parse: Callable[[Any], T]) -> list[T]:
    """Parse every JSON array file under a directory, recursively.

    A missing directory yields an empty list.
    """
    dir_path = Path(dir_path)
    if not dir_path.exists():
        return []
    items: list[T] = []
    for path in _json_files(dir_path):
        text = path.read_text(encoding="utf-8")
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise TemplateError(f"{path}: {exc}") from exc
        if not isinstance(raw, list):
            raise TemplateError(f"{path}: expected a JSON array")
        items.extend(parse(entry) for entry in raw)
    return items


def load_monsters(dir_path: str | os.PathLike, registry: MonsterTemplateRegistry) -> None:
    for template in load_json_files(dir_path, MonsterTemplate.from_dict):
        registry.register(template)


def load_items(dir_path: str | os.PathLike, registry: ItemTemplateRegistry) -> None:
    for template in load_json_files(dir_path, parse_item_template):
        registry.register(template)


def load_npcs(dir_path: str | os.PathLike, registry: NPCTemplateRegistry) -> None:
    for template in load_json_files(dir_path, NPCTemplate.from_dict):
        registry.register(template)


def load_loot_tables(dir_path: str | os.PathLike, registry: LootTableRegistry) -> None:
    for table in load_json_files(dir_path, LootTable.from_dict):
        registry.register(table)


@dataclass
class GameData:
    """Every template registry the game draws on."""

    monsters: MonsterTemplateRegistry = field(default_factory=MonsterTemplateRegistry)
    items: ItemTemplateRegistry = field(default_factory=ItemTemplateRegistry)
    npcs: NPCTemplateRegistry = field(default_factory=NPCTemplateRegistry)
    loot_tables: LootTableRegistry = field(default_factory=LootTableRegistry)

    @classmethod
    def load(cls, data_dir: str | os.PathLike) -> "GameData":
        """Load the monsters, items, npcs and loot_tables subdirectories."""
        base = Path(data_dir)
        data = cls()
        load_monsters(base / "monsters", data.monsters)
        load_items(base / "items", data.items)
        load_npcs(base / "npcs", data.npcs)
        load_loot_tables(base / "loot_tables", data.loot_tables)
        return data