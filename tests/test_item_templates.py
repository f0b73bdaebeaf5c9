import pytest

from ulanrpg.item_templates import (
    ConsumableEffect,
    DamageType,
    EffectKind,
    ItemRarity,
    ItemTemplateRegistry,
    MiscItemTemplate,
    WeaponTemplate,
    WeaponType,
    item_template_to_dict,
    parse_item_template,
)
from ulanrpg.monster_templates import TemplateError

SWORD = {
    "type": "Weapon", "id": "iron_sword", "name": "Iron Sword", "description": "Plain.",
    "weapon_type": "Sword",
    "damage": {"min": 3, "max": 7, "damage_type": "Physical"},
    "attack_speed": 1.0,
    "requirements": {"level": 1, "strength": 5, "dexterity": None, "intelligence": None},
    "modifiers": [{"stat": "strength", "modifier_type": "Flat", "value": 1.0}],
    "rarity": "Common", "value": 20, "stack_size": 1,
}
ARMOR = {
    "type": "Armor", "id": "leather", "name": "Leather", "description": "Soft.",
    "armor_type": "Light", "defense": 2,
    "requirements": {"level": None, "strength": None, "dexterity": None, "intelligence": None},
    "modifiers": [], "rarity": "Uncommon", "value": 15,
}
POTION = {
    "type": "Consumable", "id": "potion", "name": "Potion", "description": "Red.",
    "consumable_type": "Potion",
    "effects": [{"Heal": {"amount": 10}}, "CurePoison",
                {"Buff": {"stat": "strength", "amount": 2, "duration": 30.0}}],
    "charges": 1, "cooldown": 0.0, "value": 5, "stack_size": 10,
}
KEY = {
    "type": "Misc", "id": "key", "name": "Key", "description": "Old.",
    "category": "quest", "value": 0, "stack_size": 1, "quest_item": True,
}


@pytest.mark.parametrize("data", [SWORD, ARMOR, POTION, KEY])
def test_round_trip(data):
    template = parse_item_template(data)
    assert item_template_to_dict(template) == data
    assert parse_item_template(item_template_to_dict(template)) == template


def test_weapon_fields():
    w = parse_item_template(SWORD)
    assert isinstance(w, WeaponTemplate)
    assert w.weapon_type is WeaponType.SWORD
    assert w.damage.damage_type is DamageType.PHYSICAL
    assert w.requirements.dexterity is None
    assert w.rarity is ItemRarity.COMMON


def test_missing_requirement_fields_are_none():
    data = dict(ARMOR, requirements={})
    assert parse_item_template(data).requirements.level is None


def test_effects_parse():
    effects = parse_item_template(POTION).effects
    assert effects[0] == ConsumableEffect(EffectKind.HEAL, amount=10)
    assert effects[1].kind is EffectKind.CURE_POISON
    assert effects[2].stat == "strength"


@pytest.mark.parametrize("bad", ["Heal", {"Teleport": {}}, {"Fly": {}}, {"Heal": {}}])
def test_bad_effects(bad):
    with pytest.raises(TemplateError):
        ConsumableEffect.from_json(bad)


@pytest.mark.parametrize("bad", [
    dict(SWORD, type="Ring"),
    dict(SWORD, weapon_type="Spear"),
    dict(KEY, value=-1),
    dict(KEY, quest_item="yes"),
    {k: v for k, v in ARMOR.items() if k != "defense"},
])
def test_bad_items(bad):
    with pytest.raises(TemplateError):
        parse_item_template(bad)


def test_registry():
    reg = ItemTemplateRegistry()
    for data in (SWORD, KEY):
        reg.register(parse_item_template(data))
    reg.register(parse_item_template(dict(KEY, name="Other Key")))
    assert reg.count() == 2
    assert isinstance(reg.get("key"), MiscItemTemplate)
    assert reg.get("key").name == "Other Key"
    assert reg.get("missing") is None