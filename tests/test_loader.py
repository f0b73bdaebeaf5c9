import json

import pytest

from ulanrpg.item_templates import ItemTemplateRegistry, WeaponTemplate
from ulanrpg.loader import (
    GameData,
    load_items,
    load_json_files,
    load_loot_tables,
    load_monsters,
    load_npcs,
)
from ulanrpg.loot_tables import LootTableRegistry
from ulanrpg.monster_templates import MonsterTemplateRegistry, TemplateError
from ulanrpg.npc_templates import NPCTemplateRegistry


def monster_dict(monster_id="goblin"):
    return {
        "id": monster_id,
        "name": "Goblin",
        "family": "Humanoid",
        "type": "Goblin",
        "health": {"base_health": 10, "health_per_level": 2},
        "stats": {
            "base_strength": 5, "base_dexterity": 6, "base_intelligence": 3, "base_constitution": 4,
            "strength_per_level": 0.5, "dexterity_per_level": 0.5,
            "intelligence_per_level": 0.1, "constitution_per_level": 0.5,
        },
        "combat": {
            "base_damage": 3, "base_defense": 1, "base_accuracy": 60, "base_evasion": 10,
            "damage_per_level": 0.5, "defense_per_level": 0.25,
        },
        "ai_type": "Aggressive",
        "level_range": [1, 3],
        "experience_reward": 5,
        "loot_table_id": None,
        "display_char": "g",
        "display_color": [0.1, 0.5, 0.1],
    }


WEAPON = {
    "type": "Weapon", "id": "sword", "name": "Sword", "description": "A blade",
    "weapon_type": "Sword", "damage": {"min": 2, "max": 6, "damage_type": "Physical"},
    "attack_speed": 1.0, "requirements": {}, "modifiers": [], "rarity": "Common",
    "value": 10, "stack_size": 1,
}

NPC = {
    "id": "bob", "name": "Bob", "title": None, "description": "A trader",
    "npc_type": "Merchant",
    "dialogue_personality": {
        "tone": "friendly", "speaking_style": "casual",
        "interests": [], "knowledge_areas": [], "personality_traits": [],
    },
    "services": [{"Shop": {"inventory_table": "wares"}}],
    "faction": None, "importance": "Normal", "spawn_locations": [],
}

LOOT = {
    "id": "coins", "name": "Coins", "rolls": {"min": 1, "max": 1},
    "entries": [{"weight": 1.0, "item": {"type": "Gold", "amount": {"min": 1, "max": 1}}, "conditions": []}],
}


def write(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


def test_missing_directory_gives_nothing(tmp_path):
    assert load_json_files(tmp_path / "absent", lambda d: d) == []


def test_loads_recursively_and_ignores_other_files(tmp_path):
    write(tmp_path / "a.json", [1, 2])
    write(tmp_path / "sub" / "b.json", [3])
    (tmp_path / "notes.txt").write_text("[99]", encoding="utf-8")
    assert sorted(load_json_files(tmp_path, lambda d: d)) == [1, 2, 3]


def test_invalid_json_raises(tmp_path):
    (tmp_path / "bad.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(TemplateError):
        load_json_files(tmp_path, lambda d: d)


def test_non_array_raises(tmp_path):
    write(tmp_path / "obj.json", {"id": "x"})
    with pytest.raises(TemplateError):
        load_json_files(tmp_path, lambda d: d)


def test_load_monsters(tmp_path):
    write(tmp_path / "goblins.json", [monster_dict("goblin"), monster_dict("goblin_chief")])
    registry = MonsterTemplateRegistry()
    load_monsters(tmp_path, registry)
    assert registry.count() == 2
    assert registry.get("goblin_chief").name == "Goblin"


def test_load_monsters_bad_template_registers_nothing(tmp_path):
    broken = monster_dict("broken")
    del broken["health"]
    write(tmp_path / "goblins.json", [monster_dict(), broken])
    registry = MonsterTemplateRegistry()
    with pytest.raises(TemplateError):
        load_monsters(tmp_path, registry)
    assert registry.count() == 0


def test_load_items(tmp_path):
    write(tmp_path / "weapons.json", [WEAPON])
    registry = ItemTemplateRegistry()
    load_items(tmp_path, registry)
    weapon = registry.get("sword")
    assert isinstance(weapon, WeaponTemplate)
    assert weapon.damage.max == 6


def test_load_npcs(tmp_path):
    write(tmp_path / "town.json", [NPC])
    registry = NPCTemplateRegistry()
    load_npcs(tmp_path, registry)
    assert registry.get("bob").services[0].value == "wares"


def test_load_loot_tables(tmp_path):
    write(tmp_path / "loot.json", [LOOT])
    registry = LootTableRegistry()
    load_loot_tables(tmp_path, registry)
    assert registry.get("coins").name == "Coins"


def test_game_data_load(tmp_path):
    write(tmp_path / "monsters" / "goblins.json", [monster_dict()])
    write(tmp_path / "items" / "weapons.json", [WEAPON])
    write(tmp_path / "npcs" / "town.json", [NPC])
    write(tmp_path / "loot_tables" / "loot.json", [LOOT])
    data = GameData.load(tmp_path)
    assert (data.monsters.count(), data.items.count(), data.npcs.count(), data.loot_tables.count()) == (1, 1, 1, 1)


def test_game_data_load_empty_dir(tmp_path):
    data = GameData.load(tmp_path)
    assert data.monsters.count() == 0 and data.loot_tables.count() == 0