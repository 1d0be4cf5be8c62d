"""Catalog property keys, stat rule table, and weapon defaults.

Property keys are the ones the public Deadlock asset API attaches to shop
items and abilities. Only keys listed here have a numeric effect; every
other key in an item's property bag is display data and is ignored.
"""

from enum import Enum


# Hard cap on items in one build.
MAX_BUILD_ITEMS = 12

# Slots the optimizer fills when the caller doesn't say otherwise.
DEFAULT_OPTIMIZER_SLOTS = 6

SLOT_TYPES = ("weapon", "vitality", "spirit")


class StatRule(str, Enum):
    """How a recognised item property combines with the running stat sheet."""

    PERCENT_MULTIPLY = "percent_multiply"   # value *= 1 + v/100
    FLAT_ADD = "flat_add"                   # value += v
    PERCENT_ADD = "percent_add"             # value += v (displayed as %)


# property key -> (rule, HeroStats fields it touches)
STAT_RULES: dict[str, tuple[StatRule, tuple[str, ...]]] = {
    # Weapon
    "BaseAttackDamagePercent": (StatRule.PERCENT_MULTIPLY, ("bullet_damage",)),
    "BonusClipSizePercent": (StatRule.PERCENT_MULTIPLY, ("clip_size",)),
    "BonusClipSize": (StatRule.FLAT_ADD, ("clip_size",)),
    "BonusFireRate": (StatRule.PERCENT_MULTIPLY, ("fire_rate",)),
    "FireRate": (StatRule.PERCENT_MULTIPLY, ("fire_rate",)),
    "BonusReloadSpeed": (StatRule.PERCENT_MULTIPLY, ("reload_time",)),
    "BulletLifestealPercent": (StatRule.PERCENT_ADD, ("bullet_lifesteal",)),
    "BonusMeleeDamagePercent": (
        StatRule.PERCENT_MULTIPLY,
        ("light_melee_damage", "heavy_melee_damage"),
    ),
    # Vitality
    "BonusHealth": (StatRule.FLAT_ADD, ("max_health",)),
    "BonusHealthRegen": (StatRule.FLAT_ADD, ("base_health_regen",)),
    "OutOfCombatHealthRegen": (StatRule.FLAT_ADD, ("out_of_combat_regen",)),
    "BulletResist": (StatRule.PERCENT_ADD, ("bullet_resist",)),
    "BulletArmor": (StatRule.PERCENT_ADD, ("bullet_resist",)),
    "TechResist": (StatRule.PERCENT_ADD, ("spirit_resist",)),
    "TechArmor": (StatRule.PERCENT_ADD, ("spirit_resist",)),
    "MeleeResistPercent": (StatRule.PERCENT_ADD, ("melee_resist",)),
    # Spirit
    "TechPower": (StatRule.PERCENT_ADD, ("spirit_power",)),
    "BonusSpirit": (StatRule.PERCENT_ADD, ("spirit_power",)),
    "CooldownReduction": (StatRule.PERCENT_ADD, ("cooldown_reduction",)),
    # Mobility
    "BonusMoveSpeed": (StatRule.FLAT_ADD, ("max_move_speed",)),
    "BonusSprintSpeed": (StatRule.FLAT_ADD, ("sprint_speed",)),
    "Stamina": (StatRule.FLAT_ADD, ("stamina",)),
    "StaminaRegenIncrease": (StatRule.FLAT_ADD, ("stamina_regen",)),
}

# Keys summed by the DPS engine.
WEAPON_DAMAGE_PERCENT_KEYS = ("BaseAttackDamagePercent",)
HEADSHOT_BONUS_KEYS = ("HeadShotBonusDamage",)
CLIP_SIZE_PERCENT_KEYS = ("BonusClipSizePercent",)
FIRE_RATE_PERCENT_KEYS = ("FireRate", "BonusFireRate")

# Keys summed by the ability engine.
SPIRIT_POWER_KEYS = ("TechPower", "BonusSpirit")
COOLDOWN_REDUCTION_KEYS = ("CooldownReduction",)

# Ability property keys.
ABILITY_DAMAGE = "Damage"
ABILITY_COOLDOWN = "AbilityCooldown"
ABILITY_DURATION = "AbilityDuration"
ABILITY_RANGE = "AbilityCastRange"
ABILITY_CHARGES = "AbilityCharges"


class ScaleType(str, Enum):
    """`specific_stat_scale_type` values on ability scale functions."""

    SPIRIT_POWER = "ETechPower"
    COOLDOWN = "ETechCooldown"
    DURATION = "ETechDuration"
    RANGE = "ETechRange"


# Used when the catalog has no weapon entry for a hero.
DEFAULT_BULLET_DAMAGE = 10.0
DEFAULT_CYCLE_TIME = 0.1
DEFAULT_CLIP_SIZE = 20
DEFAULT_BULLETS_PER_SHOT = 1
DEFAULT_RELOAD_DURATION = 2.0
DEFAULT_HEADSHOT_MULTIPLIER = 1.8

# Friendly display names for HeroStats fields, grouped the way the shop is.
STAT_GROUPS: dict[str, tuple[tuple[str, str], ...]] = {
    "Weapon": (
        ("bullet_damage", "Bullet Damage"),
        ("rounds_per_second", "Rounds / Second"),
        ("clip_size", "Ammo"),
        ("reload_time", "Reload Time"),
        ("bullet_lifesteal", "Bullet Lifesteal %"),
        ("light_melee_damage", "Light Melee"),
        ("heavy_melee_damage", "Heavy Melee"),
    ),
    "Vitality": (
        ("max_health", "Max Health"),
        ("base_health_regen", "Health Regen"),
        ("out_of_combat_regen", "Out of Combat Regen"),
        ("bullet_resist", "Bullet Resist %"),
        ("spirit_resist", "Spirit Resist %"),
        ("melee_resist", "Melee Resist %"),
    ),
    "Spirit": (
        ("spirit_power", "Spirit Power"),
        ("cooldown_reduction", "Cooldown Reduction %"),
    ),
    "Mobility": (
        ("max_move_speed", "Move Speed"),
        ("sprint_speed", "Sprint Speed"),
        ("stamina", "Stamina"),
        ("stamina_regen", "Stamina Regen"),
    ),
}
