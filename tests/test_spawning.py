import random

import pytest

from ulanrpg.components import Player, Position
from ulanrpg.monster_templates import MonsterTemplate, MonsterTemplateRegistry
from ulanrpg.spawning import (
    GOBLIN_SPAWN_POSITIONS,
    MonsterDensityConfig,
    SpawnMonsterEvent,
    SpawnRandomMonstersEvent,
    get_appropriate_monsters_for_level,
    spawn_monster,
    spawn_random_goblins,
    spawn_random_monsters,
)
from ulanrpg.world import World


def make_template(template_id, name="Goblin", monster_type="Goblin", level_range=(1, 3)):
    return MonsterTemplate.from_dict({
        "id": template_id,
        "name": name,
        "family": "Humanoid",
        "type": monster_type,
        "health": {"base_health": 10, "health_per_level": 2},
        "stats": {
            "base_strength": 5, "base_dexterity": 5,
            "base_intelligence": 5, "base_constitution": 5,
            "strength_per_level": 1.0, "dexterity_per_level": 1.0,
            "intelligence_per_level": 0.5, "constitution_per_level": 1.0,
        },
        "combat": {
            "base_damage": 3, "base_defense": 1, "base_accuracy": 60, "base_evasion": 5,
            "damage_per_level": 1.0, "defense_per_level": 0.5,
        },
        "ai_type": "Aggressive",
        "level_range": list(level_range),
        "experience_reward": 10,
        "loot_table_id": None,
        "display_char": "g",
        "display_color": [0.0, 1.0, 0.0],
    })


@pytest.fixture
def registry():
    reg = MonsterTemplateRegistry()
    reg.register(make_template("goblin_scout", level_range=(1, 3)))
    reg.register(make_template("goblin_chief", name="Goblin Chief", level_range=(4, 6)))
    reg.register(make_template("wolf", name="Wolf", monster_type="Wolf", level_range=(2, 5)))
    return reg


def test_spawn_monster_uses_event_fields(registry):
    world = World()
    event = SpawnMonsterEvent("goblin_scout", Position(4, -2, 1), level=2)
    entity_id = spawn_monster(world, registry, event, random.Random(1))
    entity = world.get(entity_id)
    assert entity.name == "Goblin (Lv.2)"
    assert entity.position == Position(4, -2, 1)
    assert entity.template_ref == "goblin_scout"


def test_spawn_monster_unknown_template(registry):
    world = World()
    event = SpawnMonsterEvent("dragon", Position(0, 0))
    assert spawn_monster(world, registry, event, random.Random(1)) is None
    assert len(world) == 0


def test_random_monsters_stay_in_area_and_range(registry):
    world = World()
    center = Position(10, 10, 2)
    event = SpawnRandomMonstersEvent(center, (2, 3), 5, (4, 5))
    ids = spawn_random_monsters(world, registry, event, random.Random(7))
    assert len(ids) == 5
    valid = set(get_appropriate_monsters_for_level(registry, 4)) | set(
        get_appropriate_monsters_for_level(registry, 5)
    )
    for entity_id in ids:
        e = world.get(entity_id)
        assert abs(e.position.x - center.x) <= 2
        assert abs(e.position.y - center.y) <= 3
        assert e.position.level == center.level
        assert e.template_ref in valid
        assert any(f"(Lv.{lvl})" in e.name for lvl in (4, 5))


def test_random_monsters_respect_filter(registry):
    world = World()
    event = SpawnRandomMonstersEvent(
        Position(0, 0), (5, 5), 6, (1, 1), template_filter=("wolf",)
    )
    ids = spawn_random_monsters(world, registry, event, random.Random(3))
    assert len(ids) == 6
    assert {world.get(i).template_ref for i in ids} == {"wolf"}
    assert all(world.get(i).name == "Wolf (Lv.1)" for i in ids)


def test_random_monsters_avoid_occupied_tiles(registry):
    world = World()
    player_id = world.spawn(player=Player(), position=Position(0, 0))
    event = SpawnRandomMonstersEvent(Position(0, 0), (1, 1), 4, (1, 3))
    ids = spawn_random_monsters(world, registry, event, random.Random(11))
    assert len(ids) == 4
    assert all(world.get(i).position != world.get(player_id).position for i in ids)


def test_random_monsters_give_up_when_area_full(registry):
    world = World()
    world.spawn(player=Player(), position=Position(0, 0))
    event = SpawnRandomMonstersEvent(Position(0, 0), (0, 0), 2, (1, 3))
    assert spawn_random_monsters(world, registry, event, random.Random(5)) == []
    assert len(world) == 1


def test_random_monsters_without_templates(registry):
    world = World()
    event = SpawnRandomMonstersEvent(Position(0, 0), (3, 3), 3, (50, 60))
    assert spawn_random_monsters(world, registry, event, random.Random(2)) == []
    assert len(world) == 0


def test_appropriate_monsters_for_level(registry):
    assert sorted(get_appropriate_monsters_for_level(registry, 3)) == ["goblin_scout", "wolf"]
    assert get_appropriate_monsters_for_level(registry, 6) == ["goblin_chief"]
    assert get_appropriate_monsters_for_level(registry, 0) == []


def test_density_config_pack_bounds_ordered():
    config = MonsterDensityConfig()
    assert config.pack_size_min <= config.pack_size_max
    assert config.monsters_per_room_base == 1.5


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
def test_goblins_spawn_on_distinct_fixed_spots(registry, seed):
    world = World()
    ids = spawn_random_goblins(world, registry, random.Random(seed))
    assert len(ids) == 2
    spots = [world.get(i).position for i in ids]
    assert len(set(spots)) == 2
    assert all(s in GOBLIN_SPAWN_POSITIONS for s in spots)
    assert all(world.get(i).template_ref == "goblin_scout" for i in ids)


def test_goblin_level_is_clamped_to_template():
    reg = MonsterTemplateRegistry()
    reg.register(make_template("goblin_fixed", level_range=(2, 2)))
    world = World()
    ids = spawn_random_goblins(world, reg, random.Random(9))
    assert [world.get(i).name for i in ids] == ["Goblin (Lv.2)", "Goblin (Lv.2)"]


def test_no_goblins_without_goblin_templates():
    reg = MonsterTemplateRegistry()
    reg.register(make_template("wolf", name="Wolf", monster_type="Wolf"))
    world = World()
    assert spawn_random_goblins(world, reg, random.Random(0)) == []
    assert len(world) == 0