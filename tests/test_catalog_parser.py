"""Tests for raw asset-API JSON parsing."""

import pytest

from deadlock_planner.parser.catalog_parser import (
    parse_all_heroes,
    parse_all_items,
    parse_all_weapons,
    parse_ability,
    parse_hero,
    parse_item,
    parse_property,
    parse_weapon_entry,
)


RAW_HERO = {
    "id": 1,
    "class_name": "hero_inferno",
    "name": "Infernus",
    "player_selectable": True,
    "disabled": False,
    "in_development": False,
    "complexity": 1,
    "description": {"role": "Burns enemies", "lore": "...", "playstyle": "Close range"},
    "starting_stats": {
        "max_health": {"value": 550},
        "base_health_regen": {"value": 2.0},
        "max_move_speed": {"value": 7.2},
        "sprint_speed": {"value": 2.0},
        "stamina": {"value": 3},
        "stamina_regen_per_second": {"value": 0.2},
        "light_melee_damage": {"value": 50},
        "heavy_melee_damage": {"value": 116},
    },
    "items": {
        "signature1": "inferno_incendiary",
        "signature2": "inferno_catalyst",
        "weapon_primary": "citadel_weapon_inferno_set",
        "signature4": "inferno_concussive",
    },
}

RAW_ITEM = {
    "id": 715762406,
    "class_name": "upgrade_close_quarters",
    "name": "Close Quarters",
    "cost": 500,
    "item_tier": 1,
    "item_slot_type": "weapon",
    "shopable": True,
    "description": {"desc": "Bonus damage at close range."},
    "properties": {
        "BaseAttackDamagePercent": {"value": "20", "label": "Weapon Damage", "postfix": "%"},
        "BulletResist": {"value": 5, "prefix": "+", "tooltip_is_important": True},
        "Radius": "15m",
    },
}


def test_parse_hero_fields():
    hero = parse_hero(RAW_HERO)
    assert hero.id == 1
    assert hero.name == "Infernus"
    assert hero.role == "Burns enemies"
    assert hero.starting_stats.max_health == 550
    assert hero.starting_stats.stamina_regen == pytest.approx(0.2)
    assert hero.ability_class_names == (
        "inferno_incendiary",
        "inferno_catalyst",
        "inferno_concussive",
    )
    assert hero.weapon is None
    assert hero.is_selectable


def test_parse_hero_flags_and_missing_id():
    assert parse_hero({"name": "No id"}) is None
    hidden = parse_hero({"id": "7", "name": "Hidden", "in_development": True})
    assert hidden.id == 7
    assert not hidden.is_selectable


def test_parse_item_fields():
    item = parse_item(RAW_ITEM)
    assert item.cost == 500
    assert item.tier == 1
    assert item.slot_type == "weapon"
    assert item.shoppable
    assert item.description == "Bonus damage at close range."
    assert item.properties["BaseAttackDamagePercent"].value == "20"
    assert item.properties["BaseAttackDamagePercent"].label == "Weapon Damage"
    assert item.properties["BulletResist"].is_important
    assert item.properties["Radius"].value == "15m"


def test_parse_item_defaults_unshoppable():
    item = parse_item({"id": 3, "name": "Secret"})
    assert not item.shoppable
    assert item.cost == 0
    assert item.properties == {}


def test_parse_property_scale_function():
    prop = parse_property({
        "value": "75",
        "scale_function": {
            "class_name": "scale_function_tech_damage",
            "specific_stat_scale_type": "ETechPower",
            "stat_scale": 0.9,
        },
    })
    assert prop.scale_function.scale_type == "ETechPower"
    assert prop.scale_function.stat_scale == pytest.approx(0.9)
    assert parse_property(None).value is None


def test_parse_ability():
    ability = parse_ability({
        "id": 99,
        "class_name": "inferno_catalyst",
        "name": "Catalyst",
        "hero": 1,
        "properties": {"AbilityCooldown": {"value": "35"}},
    })
    assert ability.hero_id == 1
    assert ability.properties["AbilityCooldown"].value == "35"


def test_parse_weapon_entry_bullets_alias():
    hero_ids, info = parse_weapon_entry({
        "id": 5,
        "hero": 1,
        "heroes": [1, 2],
        "weapon_info": {
            "bullet_damage": 4.2,
            "cycle_time": "0.1",
            "clip_size": 36,
            "bullets_per_shot": 2,
            "reload_duration": 2.5,
            "crit_bonus_start": 1.65,
        },
    })
    assert hero_ids == [1, 2]
    assert info.bullets == 2
    assert info.cycle_time == pytest.approx(0.1)
    assert info.headshot_multiplier == pytest.approx(1.65)


def test_parse_weapon_entry_without_owner_is_skipped():
    assert parse_weapon_entry({"id": 5, "weapon_info": {"bullet_damage": 3}}) is None
    assert parse_weapon_entry({"id": 5, "hero": 1}) is None


def test_parse_all_skips_malformed_entries():
    heroes = parse_all_heroes([RAW_HERO, {"name": "broken"}, "nonsense"])
    assert [h.id for h in heroes] == [1]
    assert parse_all_items({"not": "a list"}) == []


def test_parse_all_weapons_first_wins():
    weapons = parse_all_weapons([
        {"id": 1, "hero": 3, "weapon_info": {"bullet_damage": 10}},
        {"id": 2, "hero": 3, "weapon_info": {"bullet_damage": 99}},
    ])
    assert weapons[3].bullet_damage == 10
