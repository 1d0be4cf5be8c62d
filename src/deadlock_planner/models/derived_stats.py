"""Hero stat sheet aggregation.

compute_stats() folds a build's items, in order, onto the hero's base stats
using the fixed rule table in constants.STAT_RULES:

  - percent-multiply: running value *= (1 + v/100)
  - flat-add:         running value += v
  - percent-add:      running value += v (resists, lifesteal, spirit, CDR)

Only fire rate and the other percent-multiply fields are order sensitive;
they compound on the running value at the time each item is applied.
"""

import math
from dataclasses import asdict, dataclass, replace
from functools import reduce

from deadlock_planner.models.constants import MAX_BUILD_ITEMS, STAT_RULES, StatRule
from deadlock_planner.models.hero import Hero
from deadlock_planner.models.item import Item
from deadlock_planner.parser.property_value import resolve_property


class BuildCapacityError(ValueError):
    """Raised when a build holds more items than MAX_BUILD_ITEMS."""

    def __init__(self, count: int, limit: int = MAX_BUILD_ITEMS) -> None:
        super().__init__(f"A build holds at most {limit} items, got {count}")
        self.count = count
        self.limit = limit


def check_capacity(items) -> list[Item]:
    """Return `items` as a list, rejecting oversized builds up front."""
    items = list(items)
    if len(items) > MAX_BUILD_ITEMS:
        raise BuildCapacityError(len(items))
    return items


@dataclass(frozen=True, slots=True)
class HeroStats:
    """Fully resolved stat snapshot for a hero + item list."""

    # Weapon
    bullet_damage: float = 0.0
    rounds_per_second: float = 0.0
    fire_rate: float = 1.0          # multiplier on base rounds per second
    clip_size: float = 0.0
    reload_time: float = 0.0
    bullet_lifesteal: float = 0.0
    light_melee_damage: float = 0.0
    heavy_melee_damage: float = 0.0

    # Vitality
    max_health: float = 0.0
    base_health_regen: float = 0.0
    out_of_combat_regen: float = 0.0
    bullet_resist: float = 0.0
    spirit_resist: float = 0.0
    melee_resist: float = 0.0

    # Spirit
    spirit_power: float = 0.0
    cooldown_reduction: float = 0.0

    # Mobility
    max_move_speed: float = 0.0
    sprint_speed: float = 0.0
    stamina: float = 0.0
    stamina_regen: float = 0.0

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


def base_stats(hero: Hero) -> HeroStats:
    """Seed stat sheet: hero base values, multiplier 1.0, bonuses 0."""
    weapon = hero.weapon_params
    start = hero.starting_stats
    return HeroStats(
        bullet_damage=weapon.bullet_damage,
        rounds_per_second=weapon.fire_rate,
        fire_rate=1.0,
        clip_size=float(weapon.clip_size),
        reload_time=weapon.reload_duration,
        light_melee_damage=start.light_melee_damage,
        heavy_melee_damage=start.heavy_melee_damage,
        max_health=start.max_health,
        base_health_regen=start.base_health_regen,
        max_move_speed=start.max_move_speed,
        sprint_speed=start.sprint_speed,
        stamina=start.stamina,
        stamina_regen=start.stamina_regen,
    )


def apply_item(stats: HeroStats, item: Item, base_rounds_per_second: float) -> HeroStats:
    """Return a new HeroStats with one item's recognised properties applied."""
    updates: dict[str, float] = {}
    for key, prop in item.properties.items():
        rule = STAT_RULES.get(key)
        if rule is None:
            continue
        value = resolve_property(prop)
        if value == 0:
            continue
        kind, fields = rule
        for name in fields:
            current = updates.get(name, getattr(stats, name))
            if kind is StatRule.PERCENT_MULTIPLY:
                updates[name] = current * (1 + value / 100)
            else:
                updates[name] = current + value
        if "fire_rate" in fields:
            updates["rounds_per_second"] = base_rounds_per_second * updates["fire_rate"]
    if not updates:
        return stats
    return replace(stats, **updates)


def compute_stats(hero: Hero | None, items) -> HeroStats | None:
    """Compute the stat sheet for a hero wearing `items` (in order).

    Returns None when no hero is selected. Raises BuildCapacityError for
    more than MAX_BUILD_ITEMS items, before any aggregation.
    """
    items = check_capacity(items)
    if hero is None:
        return None
    seed = base_stats(hero)
    base_rps = seed.rounds_per_second
    return reduce(lambda stats, item: apply_item(stats, item, base_rps), items, seed)


def stat_deltas(before: HeroStats, after: HeroStats) -> dict[str, float]:
    """Per-field difference `after - before`, omitting unchanged fields."""
    out: dict[str, float] = {}
    for name, old in before.as_dict().items():
        new = getattr(after, name)
        if not math.isclose(old, new, rel_tol=0.0, abs_tol=1e-9):
            out[name] = new - old
    return out
