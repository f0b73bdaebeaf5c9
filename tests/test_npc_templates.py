import pytest

from ulanrpg.monster_templates import TemplateError
from ulanrpg.npc_templates import (
    NPCImportance,
    NPCService,
    NPCTemplate,
    NPCTemplateRegistry,
    NPCType,
)

SMITH = {
    "id": "smith",
    "name": "Borin",
    "title": "the Smith",
    "description": "A burly smith.",
    "npc_type": "Merchant",
    "dialogue_personality": {
        "tone": "gruff",
        "speaking_style": "casual",
        "interests": ["metal"],
        "knowledge_areas": ["weapons"],
        "personality_traits": ["honest"],
    },
    "services": [
        {"Shop": {"inventory_table": "smith_goods"}},
        {"Inn": {"room_cost": 5}},
        {"Crafting": {"craft_types": ["smithing"]}},
    ],
    "faction": None,
    "importance": "Important",
    "spawn_locations": ["town"],
}


def test_round_trip():
    npc = NPCTemplate.from_dict(SMITH)
    assert npc.to_dict() == SMITH
    assert NPCTemplate.from_dict(npc.to_dict()) == npc


def test_fields():
    npc = NPCTemplate.from_dict(SMITH)
    assert npc.npc_type is NPCType.MERCHANT
    assert npc.importance is NPCImportance.IMPORTANT
    assert npc.faction is None
    assert npc.services[0] == NPCService("Shop", "smith_goods")
    assert npc.services[2].value == ("smithing",)


def test_missing_title_is_none():
    data = {k: v for k, v in SMITH.items() if k != "title"}
    assert NPCTemplate.from_dict(data).title is None


@pytest.mark.parametrize("bad", [
    {"Bank": {"gold": 1}},
    {"Inn": {"room_cost": -3}},
    {"Quest": {"quest_ids": "q1"}},
    "Shop",
])
def test_bad_services(bad):
    with pytest.raises(TemplateError):
        NPCService.from_json(bad)


def test_bad_npc_type():
    with pytest.raises(TemplateError):
        NPCTemplate.from_dict(dict(SMITH, npc_type="Wizard"))


def test_registry():
    reg = NPCTemplateRegistry()
    reg.register(NPCTemplate.from_dict(SMITH))
    reg.register(NPCTemplate.from_dict(dict(SMITH, id="smith2")))
    assert reg.count() == 2
    assert reg.get("smith2").name == "Borin"
    assert reg.get("ghost") is None