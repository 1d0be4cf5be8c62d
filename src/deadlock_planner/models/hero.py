"""Hero data models: base stats and weapon parameters.

A Hero is a read-only snapshot of the catalog's hero record. Weapon numbers
live on a separate weapon item in the catalog and are merged onto the hero
before any stat computation (see Catalog.hero_with_weapon).
"""

from dataclasses import dataclass, field

from deadlock_planner.models.constants import (
    DEFAULT_BULLET_DAMAGE,
    DEFAULT_BULLETS_PER_SHOT,
    DEFAULT_CLIP_SIZE,
    DEFAULT_CYCLE_TIME,
    DEFAULT_HEADSHOT_MULTIPLIER,
    DEFAULT_RELOAD_DURATION,
)


@dataclass(frozen=True, slots=True)
class WeaponInfo:
    """Raw weapon parameters. None means the catalog didn't provide it."""
    bullet_damage: float | None = None
    cycle_time: float | None = None      # seconds between shots
    clip_size: int | None = None
    bullets: int | None = None           # pellets per shot
    reload_duration: float | None = None
    headshot_multiplier: float | None = None   # crit_bonus_start


@dataclass(frozen=True, slots=True)
class WeaponParams:
    """Weapon parameters with catalog gaps filled in.

    `fire_rate` is 0 when the hero has no usable cycle time.
    """
    bullet_damage: float
    cycle_time: float
    clip_size: int
    bullets: int
    reload_duration: float
    headshot_multiplier: float

    @property
    def has_weapon(self) -> bool:
        return self.cycle_time > 0

    @property
    def fire_rate(self) -> float:
        if self.cycle_time <= 0:
            return 0.0
        return 1.0 / self.cycle_time


DEFAULT_WEAPON_PARAMS = WeaponParams(
    bullet_damage=DEFAULT_BULLET_DAMAGE,
    cycle_time=DEFAULT_CYCLE_TIME,
    clip_size=DEFAULT_CLIP_SIZE,
    bullets=DEFAULT_BULLETS_PER_SHOT,
    reload_duration=DEFAULT_RELOAD_DURATION,
    headshot_multiplier=DEFAULT_HEADSHOT_MULTIPLIER,
)


def weapon_params(weapon: WeaponInfo | None) -> WeaponParams:
    """Fill catalog gaps with defaults.

    A hero with no weapon entry at all gets the full default weapon. A
    weapon entry with a missing or non-positive cycle time is treated as
    "no weapon" rather than defaulted, so fire-rate math yields zero.
    """
    if weapon is None:
        return DEFAULT_WEAPON_PARAMS
    cycle_time = weapon.cycle_time if weapon.cycle_time and weapon.cycle_time > 0 else 0.0
    return WeaponParams(
        bullet_damage=weapon.bullet_damage or DEFAULT_BULLET_DAMAGE,
        cycle_time=cycle_time,
        clip_size=weapon.clip_size or DEFAULT_CLIP_SIZE,
        bullets=weapon.bullets or DEFAULT_BULLETS_PER_SHOT,
        reload_duration=weapon.reload_duration or DEFAULT_RELOAD_DURATION,
        headshot_multiplier=weapon.headshot_multiplier or DEFAULT_HEADSHOT_MULTIPLIER,
    )


@dataclass(frozen=True, slots=True)
class StartingStats:
    """Base (level 1, no items) hero stats from `starting_stats`."""
    max_health: float = 0.0
    base_health_regen: float = 0.0
    max_move_speed: float = 0.0
    sprint_speed: float = 0.0
    stamina: float = 0.0
    stamina_regen: float = 0.0
    light_melee_damage: float = 0.0
    heavy_melee_damage: float = 0.0


@dataclass(frozen=True, slots=True)
class Hero:
    """A parsed hero record."""
    id: int
    class_name: str
    name: str
    starting_stats: StartingStats = field(default_factory=StartingStats)
    weapon: WeaponInfo | None = None
    ability_class_names: tuple[str, ...] = ()
    role: str = ""
    playstyle: str = ""
    lore: str = ""
    complexity: int = 0
    player_selectable: bool = True
    disabled: bool = False
    in_development: bool = False

    @property
    def is_selectable(self) -> bool:
        return self.player_selectable and not self.disabled and not self.in_development

    @property
    def weapon_params(self) -> WeaponParams:
        return weapon_params(self.weapon)
