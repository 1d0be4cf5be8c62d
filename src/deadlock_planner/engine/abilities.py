"""Ability scaling from spirit power and cooldown reduction.

Each ability property may carry a scale function naming the resource it
scales with. Supported today:

  - ETechPower:    scaled = base + spirit_power * stat_scale
  - ETechCooldown: scaled = base * (1 - cooldown_reduction / 100)

ETechDuration and ETechRange are passed through (scaled == base): the item
bonuses they scale against are not modelled.
"""

from dataclasses import dataclass

from deadlock_planner.models.constants import (
    ABILITY_CHARGES,
    ABILITY_COOLDOWN,
    ABILITY_DAMAGE,
    ABILITY_DURATION,
    ABILITY_RANGE,
    COOLDOWN_REDUCTION_KEYS,
    SPIRIT_POWER_KEYS,
    ScaleType,
)
from deadlock_planner.models.derived_stats import check_capacity
from deadlock_planner.models.item import Ability, ItemProperty
from deadlock_planner.parser.property_value import resolve_property, sum_property


@dataclass(frozen=True, slots=True)
class AbilityMetrics:
    """Base and item-scaled numbers for one ability."""

    ability: Ability
    base_damage: float = 0.0
    scaled_damage: float = 0.0
    base_cooldown: float = 0.0
    scaled_cooldown: float = 0.0
    base_duration: float = 0.0
    scaled_duration: float = 0.0
    base_range: float = 0.0
    scaled_range: float = 0.0
    range_label: str = "0m"
    charges: int = 1
    dps: float = 0.0


def scale_value(
    base: float,
    prop: ItemProperty | None,
    spirit_power: float,
    cooldown_reduction: float,
) -> float:
    """Apply a property's scale function to its base value."""
    if prop is None or prop.scale_function is None:
        return base
    fn = prop.scale_function
    if fn.scale_type == ScaleType.SPIRIT_POWER.value:
        return base + spirit_power * fn.stat_scale
    if fn.scale_type == ScaleType.COOLDOWN.value:
        return base * (1 - cooldown_reduction / 100)
    # ETechDuration, ETechRange, and anything unrecognised: pass-through.
    return base


def compute_ability(ability: Ability, items) -> AbilityMetrics:
    """Scale one ability by the spirit power and CDR granted by `items`."""
    items = check_capacity(items)
    spirit_power = sum_property(items, SPIRIT_POWER_KEYS)
    cooldown_reduction = sum_property(items, COOLDOWN_REDUCTION_KEYS)

    props = ability.properties
    scaled: dict[str, tuple[float, float]] = {}
    for key in (ABILITY_DAMAGE, ABILITY_COOLDOWN, ABILITY_DURATION, ABILITY_RANGE):
        prop = props.get(key)
        base = resolve_property(prop)
        scaled[key] = (base, scale_value(base, prop, spirit_power, cooldown_reduction))

    damage, scaled_damage = scaled[ABILITY_DAMAGE]
    cooldown, scaled_cooldown = scaled[ABILITY_COOLDOWN]
    duration, scaled_duration = scaled[ABILITY_DURATION]
    cast_range, scaled_range = scaled[ABILITY_RANGE]

    range_prop = props.get(ABILITY_RANGE)
    range_label = str(range_prop.value) if range_prop and range_prop.value else "0m"
    charges = int(resolve_property(props.get(ABILITY_CHARGES))) or 1

    dps = 0.0
    if scaled_cooldown > 0 and scaled_damage > 0:
        dps = scaled_damage / scaled_cooldown

    return AbilityMetrics(
        ability=ability,
        base_damage=damage,
        scaled_damage=scaled_damage,
        base_cooldown=cooldown,
        scaled_cooldown=scaled_cooldown,
        base_duration=duration,
        scaled_duration=scaled_duration,
        base_range=cast_range,
        scaled_range=scaled_range,
        range_label=range_label,
        charges=charges,
        dps=dps,
    )


def compute_abilities(abilities, items) -> list[AbilityMetrics]:
    """compute_ability() over a hero's kit, in kit order."""
    items = check_capacity(items)
    return [compute_ability(ability, items) for ability in abilities]
