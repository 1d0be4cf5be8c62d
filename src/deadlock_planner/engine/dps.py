"""Weapon DPS metrics for a hero + item list.

Item bonuses feeding the DPS numbers are summed across the build (a +10%
and a +20% weapon damage item give +30%), then applied to the hero's weapon
parameters:

    base_dps        = damage * fire_rate * bullets
    modified_damage = damage * (1 + weapon_damage% / 100)
    fire_rate'      = fire_rate * (1 + fire_rate% / 100)
    clip'           = floor(clip * (1 + clip% / 100))
    modified_dps    = modified_damage * fire_rate' * bullets
    headshot_dps    = (modified_damage * headshot_mult + headshot_flat) * fire_rate' * bullets
    burst_damage    = modified_damage * clip' * bullets
    sustained_dps   = burst_damage / (clip' / fire_rate' + reload)

Reported values are rounded to 2 decimals (half away from zero); the clip
is floored since partial bullets don't exist.
"""

import math
from dataclasses import asdict, dataclass

from deadlock_planner.models.constants import (
    CLIP_SIZE_PERCENT_KEYS,
    FIRE_RATE_PERCENT_KEYS,
    HEADSHOT_BONUS_KEYS,
    WEAPON_DAMAGE_PERCENT_KEYS,
)
from deadlock_planner.models.derived_stats import check_capacity
from deadlock_planner.models.hero import Hero
from deadlock_planner.models.item import Item
from deadlock_planner.parser.property_value import sum_property


def round2(value: float) -> float:
    """Round to 2 decimals, halves away from zero."""
    scaled = math.floor(abs(value) * 100 + 0.5)
    if scaled == 0:
        return 0.0
    return math.copysign(scaled, value) / 100


@dataclass(frozen=True, slots=True)
class DpsMetrics:
    """Weapon damage output for one build."""

    base_dps: float = 0.0
    modified_dps: float = 0.0
    headshot_dps: float = 0.0
    damage_increase: float = 0.0     # percent over base_dps
    effective_fire_rate: float = 0.0
    effective_clip_size: int = 0
    burst_damage: float = 0.0
    sustained_dps: float = 0.0

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


ZERO_DPS = DpsMetrics()


@dataclass(frozen=True, slots=True)
class BuildComparison:
    """Side-by-side DPS of two item lists on the same hero."""

    first: DpsMetrics
    second: DpsMetrics
    difference: float                # second.modified_dps - first.modified_dps


def compute_dps(hero: Hero | None, items) -> DpsMetrics:
    """Compute weapon DPS metrics; an all-zero record when no hero is selected."""
    items = check_capacity(items)
    if hero is None:
        return ZERO_DPS

    weapon = hero.weapon_params
    fire_rate = weapon.fire_rate
    bullets = weapon.bullets

    weapon_damage_pct = sum_property(items, WEAPON_DAMAGE_PERCENT_KEYS)
    headshot_bonus = sum_property(items, HEADSHOT_BONUS_KEYS)
    clip_size_pct = sum_property(items, CLIP_SIZE_PERCENT_KEYS)
    fire_rate_pct = sum_property(items, FIRE_RATE_PERCENT_KEYS)

    base_dps = weapon.bullet_damage * fire_rate * bullets

    modified_damage = weapon.bullet_damage * (1 + weapon_damage_pct / 100)
    effective_fire_rate = fire_rate * (1 + fire_rate_pct / 100)
    # not clip * (1 + pct / 100), which floors 20 * 1.15 to 22
    effective_clip_size = math.floor(weapon.clip_size * (100 + clip_size_pct) / 100)

    modified_dps = modified_damage * effective_fire_rate * bullets
    headshot_damage = modified_damage * weapon.headshot_multiplier + headshot_bonus
    headshot_dps = headshot_damage * effective_fire_rate * bullets

    burst_damage = modified_damage * effective_clip_size * bullets

    sustained_dps = 0.0
    if effective_fire_rate > 0:
        cycle = effective_clip_size / effective_fire_rate + weapon.reload_duration
        if cycle > 0:
            sustained_dps = burst_damage / cycle

    damage_increase = 0.0
    if base_dps > 0:
        damage_increase = (modified_dps - base_dps) / base_dps * 100

    return DpsMetrics(
        base_dps=round2(base_dps),
        modified_dps=round2(modified_dps),
        headshot_dps=round2(headshot_dps),
        damage_increase=round2(damage_increase),
        effective_fire_rate=round2(effective_fire_rate),
        effective_clip_size=effective_clip_size,
        burst_damage=round2(burst_damage),
        sustained_dps=round2(sustained_dps),
    )


def item_efficiency(hero: Hero | None, candidate: Item, current) -> float:
    """Modified-DPS gain per 100 souls of adding `candidate` to `current`.

    Returns 0 when no hero is selected or the candidate is free.
    """
    current = check_capacity(current)
    if hero is None or candidate.cost == 0:
        return 0.0
    before = compute_dps(hero, current).modified_dps
    after = compute_dps(hero, [*current, candidate]).modified_dps
    return round2((after - before) / candidate.cost * 100)


def compare_builds(hero: Hero | None, first, second) -> BuildComparison:
    """Compare modified DPS of two item lists on the same hero."""
    a = compute_dps(hero, first)
    b = compute_dps(hero, second)
    return BuildComparison(first=a, second=b, difference=round2(b.modified_dps - a.modified_dps))
