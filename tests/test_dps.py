"""Tests for weapon DPS metrics, item efficiency, and build comparison."""

import pytest

from deadlock_planner.engine.dps import (
    ZERO_DPS,
    compare_builds,
    compute_dps,
    item_efficiency,
    round2,
)
from deadlock_planner.models.constants import MAX_BUILD_ITEMS
from deadlock_planner.models.derived_stats import BuildCapacityError
from deadlock_planner.models.hero import Hero, WeaponInfo
from deadlock_planner.models.item import Item, ItemProperty


def _hero(weapon: WeaponInfo | None = None) -> Hero:
    if weapon is None:
        weapon = WeaponInfo(
            bullet_damage=10.0,
            cycle_time=0.1,
            clip_size=20,
            bullets=1,
            reload_duration=2.0,
            headshot_multiplier=1.8,
        )
    return Hero(id=1, class_name="hero_test", name="Tester", weapon=weapon)


def _item(item_id: int, cost: int = 1000, **props) -> Item:
    return Item(
        id=item_id,
        class_name=f"upgrade_{item_id}",
        name=f"Item {item_id}",
        cost=cost,
        slot_type="weapon",
        properties={key: ItemProperty(value=value) for key, value in props.items()},
    )


def test_no_hero_is_all_zero():
    assert compute_dps(None, []) == ZERO_DPS
    assert ZERO_DPS.base_dps == 0.0
    assert ZERO_DPS.effective_clip_size == 0


def test_base_metrics():
    """10 dmg * 10 shots/s = 100; burst 200 over 20/10 + 2 s = 50 sustained."""
    m = compute_dps(_hero(), [])
    assert m.base_dps == 100.0
    assert m.modified_dps == 100.0
    assert m.headshot_dps == 180.0
    assert m.damage_increase == 0.0
    assert m.effective_fire_rate == 10.0
    assert m.effective_clip_size == 20
    assert m.burst_damage == 200.0
    assert m.sustained_dps == 50.0


def test_weapon_damage_bonuses_sum():
    """+10% and +20% give +30%, not 1.1 * 1.2."""
    m = compute_dps(_hero(), [_item(1, BaseAttackDamagePercent=10), _item(2, BaseAttackDamagePercent=20)])
    assert m.modified_dps == 130.0
    assert m.damage_increase == 30.0


def test_fire_rate_keys_sum():
    m = compute_dps(_hero(), [_item(1, FireRate=10), _item(2, BonusFireRate="+10%")])
    assert m.effective_fire_rate == 12.0
    assert m.modified_dps == 120.0


def test_clip_is_floored():
    """20 * 1.15 = 23 exactly, 20 * 1.12 = 22.4 -> 22."""
    assert compute_dps(_hero(), [_item(1, BonusClipSizePercent=15)]).effective_clip_size == 23
    assert compute_dps(_hero(), [_item(1, BonusClipSizePercent=12)]).effective_clip_size == 22


def test_headshot_flat_bonus():
    """(10 * 1.8 + 5) * 10 = 230."""
    assert compute_dps(_hero(), [_item(1, HeadShotBonusDamage=5)]).headshot_dps == 230.0


def test_multiple_bullets_per_shot():
    hero = _hero(WeaponInfo(bullet_damage=5.0, cycle_time=0.5, clip_size=6, bullets=8, reload_duration=1.0))
    m = compute_dps(hero, [])
    assert m.base_dps == 80.0
    assert m.burst_damage == 240.0


def test_hero_without_weapon_info_uses_defaults():
    m = compute_dps(Hero(id=2, class_name="hero_x", name="X"), [])
    assert m.base_dps == 100.0
    assert m.headshot_dps == 180.0


def test_zero_cycle_time_means_no_weapon():
    m = compute_dps(_hero(WeaponInfo(bullet_damage=10.0, cycle_time=0.0)), [_item(1, FireRate=50)])
    assert m.base_dps == 0.0
    assert m.modified_dps == 0.0
    assert m.sustained_dps == 0.0
    assert m.damage_increase == 0.0


def test_capacity_enforced():
    with pytest.raises(BuildCapacityError):
        compute_dps(_hero(), [_item(i) for i in range(MAX_BUILD_ITEMS + 1)])


def test_item_efficiency_per_100_souls():
    """+20 DPS for 1000 souls = 2.0 per 100 souls."""
    assert item_efficiency(_hero(), _item(1, BaseAttackDamagePercent=20), []) == 2.0


def test_item_efficiency_zero_cases():
    assert item_efficiency(_hero(), _item(1, cost=0, BaseAttackDamagePercent=20), []) == 0.0
    assert item_efficiency(None, _item(1, BaseAttackDamagePercent=20), []) == 0.0
    assert item_efficiency(_hero(), _item(1, BonusHealth=200), []) == 0.0


def test_item_efficiency_depends_on_current_build():
    """With +20% damage owned, +20% fire rate adds 144 - 120 = 24 DPS."""
    owned = [_item(1, BaseAttackDamagePercent=20)]
    assert item_efficiency(_hero(), _item(2, cost=3000, FireRate=20), owned) == 0.8


def test_compare_builds():
    cmp = compare_builds(_hero(), [], [_item(1, BaseAttackDamagePercent=20)])
    assert cmp.first.modified_dps == 100.0
    assert cmp.second.modified_dps == 120.0
    assert cmp.difference == 20.0


def test_round2_half_away_from_zero():
    assert round2(0.125) == 0.13
    assert round2(-0.125) == -0.13
    assert round2(1.0) == 1.0
    assert round2(-0.001) == 0.0
