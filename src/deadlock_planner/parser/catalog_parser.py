"""Parse raw catalog JSON (heroes, items, abilities, weapons) into models.

Input is the decoded JSON of the public asset API. Key edge cases handled
here:
  - numeric fields may arrive as numbers, numeric strings, or be missing
  - `description` is an object ({"desc": ...} for items, {"role", "lore",
    "playstyle"} for heroes) or occasionally a bare string
  - starting stats are wrapped: {"max_health": {"value": 550}}
  - weapon numbers live on a separate weapon item linked by `hero` or
    `heroes`; the bullet count is `bullets` or `bullets_per_shot`
  - `shopable` is spelled with one p upstream
Entries without an integer id are skipped.
"""

import logging

from deadlock_planner.models.hero import Hero, StartingStats, WeaponInfo
from deadlock_planner.models.item import Ability, Item, ItemProperty, ScaleFunction
from deadlock_planner.parser.property_value import resolve_value


logger = logging.getLogger(__name__)

_STARTING_STAT_KEYS: dict[str, str] = {
    "max_health": "max_health",
    "base_health_regen": "base_health_regen",
    "max_move_speed": "max_move_speed",
    "sprint_speed": "sprint_speed",
    "stamina": "stamina",
    "stamina_regen_per_second": "stamina_regen",
    "light_melee_damage": "light_melee_damage",
    "heavy_melee_damage": "heavy_melee_damage",
}

_SIGNATURE_SLOTS = ("signature1", "signature2", "signature3", "signature4")


def _text(value: object) -> str:
    return value if isinstance(value, str) else ""


def _opt_float(value: object) -> float | None:
    if value is None:
        return None
    return resolve_value(value)


def _opt_int(value: object) -> int | None:
    if value is None:
        return None
    return int(resolve_value(value))


def _entry_id(raw: dict) -> int | None:
    value = raw.get("id")
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _description(raw: object, key: str) -> str:
    if isinstance(raw, dict):
        return _text(raw.get(key))
    return _text(raw)


def parse_scale_function(raw: object) -> ScaleFunction | None:
    if not isinstance(raw, dict):
        return None
    return ScaleFunction(
        class_name=_text(raw.get("class_name")),
        scale_type=raw.get("specific_stat_scale_type") or None,
        stat_scale=resolve_value(raw.get("stat_scale")),
    )


def parse_property(raw: object) -> ItemProperty:
    """Parse one property descriptor. Bare values are wrapped as-is."""
    if not isinstance(raw, dict):
        if isinstance(raw, (int, float, str)) and not isinstance(raw, bool):
            return ItemProperty(value=raw)
        return ItemProperty()
    return ItemProperty(
        value=raw.get("value"),
        label=_text(raw.get("label")),
        prefix=_text(raw.get("prefix")),
        postfix=_text(raw.get("postfix")),
        is_important=bool(raw.get("tooltip_is_important", False)),
        scale_function=parse_scale_function(raw.get("scale_function")),
    )


def parse_properties(raw: object) -> dict[str, ItemProperty]:
    if not isinstance(raw, dict):
        return {}
    return {str(key): parse_property(value) for key, value in raw.items()}


def parse_weapon_info(raw: object) -> WeaponInfo | None:
    if not isinstance(raw, dict):
        return None
    bullets = raw.get("bullets")
    if bullets is None:
        bullets = raw.get("bullets_per_shot")
    return WeaponInfo(
        bullet_damage=_opt_float(raw.get("bullet_damage")),
        cycle_time=_opt_float(raw.get("cycle_time")),
        clip_size=_opt_int(raw.get("clip_size")),
        bullets=_opt_int(bullets),
        reload_duration=_opt_float(raw.get("reload_duration")),
        headshot_multiplier=_opt_float(raw.get("crit_bonus_start")),
    )


def parse_starting_stats(raw: object) -> StartingStats:
    if not isinstance(raw, dict):
        return StartingStats()
    values: dict[str, float] = {}
    for api_key, field_name in _STARTING_STAT_KEYS.items():
        entry = raw.get(api_key)
        if isinstance(entry, dict):
            entry = entry.get("value")
        values[field_name] = resolve_value(entry)
    return StartingStats(**values)


def parse_hero(raw: dict) -> Hero | None:
    """Parse a hero record, or None when it has no usable id."""
    hero_id = _entry_id(raw)
    if hero_id is None:
        return None
    desc = raw.get("description")
    slots = raw.get("items") if isinstance(raw.get("items"), dict) else {}
    abilities = tuple(
        slots[slot] for slot in _SIGNATURE_SLOTS if isinstance(slots.get(slot), str)
    )
    return Hero(
        id=hero_id,
        class_name=_text(raw.get("class_name")),
        name=_text(raw.get("name")) or f"Hero {hero_id}",
        starting_stats=parse_starting_stats(raw.get("starting_stats")),
        weapon=parse_weapon_info(raw.get("weapon_info")),
        ability_class_names=abilities,
        role=_description(desc, "role"),
        playstyle=_description(desc, "playstyle"),
        lore=_description(desc, "lore"),
        complexity=int(resolve_value(raw.get("complexity"))),
        player_selectable=bool(raw.get("player_selectable", True)),
        disabled=bool(raw.get("disabled", False)),
        in_development=bool(raw.get("in_development", False)),
    )


def parse_item(raw: dict) -> Item | None:
    """Parse a shop upgrade record, or None when it has no usable id."""
    item_id = _entry_id(raw)
    if item_id is None:
        return None
    return Item(
        id=item_id,
        class_name=_text(raw.get("class_name")),
        name=_text(raw.get("name")) or f"Item {item_id}",
        cost=int(resolve_value(raw.get("cost"))),
        tier=int(resolve_value(raw.get("item_tier"))),
        slot_type=_text(raw.get("item_slot_type")),
        activation=_text(raw.get("activation")) or "passive",
        is_active_item=bool(raw.get("is_active_item", False)),
        shoppable=bool(raw.get("shopable", False)),
        description=_description(raw.get("description"), "desc"),
        properties=parse_properties(raw.get("properties")),
    )


def parse_ability(raw: dict) -> Ability | None:
    """Parse an ability record, or None when it has no usable id."""
    ability_id = _entry_id(raw)
    if ability_id is None:
        return None
    hero = raw.get("hero")
    return Ability(
        id=ability_id,
        class_name=_text(raw.get("class_name")),
        name=_text(raw.get("name")) or f"Ability {ability_id}",
        hero_id=hero if isinstance(hero, int) and not isinstance(hero, bool) else None,
        description=_description(raw.get("description"), "desc"),
        properties=parse_properties(raw.get("properties")),
    )


def parse_weapon_entry(raw: dict) -> tuple[list[int], WeaponInfo] | None:
    """Parse a weapon item into (owning hero ids, weapon info)."""
    info = parse_weapon_info(raw.get("weapon_info"))
    if info is None:
        return None
    hero_ids: list[int] = []
    hero = raw.get("hero")
    if isinstance(hero, int) and not isinstance(hero, bool):
        hero_ids.append(hero)
    heroes = raw.get("heroes")
    if isinstance(heroes, list):
        hero_ids.extend(h for h in heroes if isinstance(h, int) and h not in hero_ids)
    if not hero_ids:
        return None
    return hero_ids, info


def _parse_all(raw: object, parse, kind: str) -> list:
    if not isinstance(raw, list):
        logger.warning("Expected a JSON list of %s, got %s", kind, type(raw).__name__)
        return []
    out = []
    for entry in raw:
        parsed = parse(entry) if isinstance(entry, dict) else None
        if parsed is None:
            logger.debug("Skipping malformed %s entry: %r", kind, entry)
            continue
        out.append(parsed)
    return out


def parse_all_heroes(raw: object) -> list[Hero]:
    return _parse_all(raw, parse_hero, "heroes")


def parse_all_items(raw: object) -> list[Item]:
    return _parse_all(raw, parse_item, "items")


def parse_all_abilities(raw: object) -> list[Ability]:
    return _parse_all(raw, parse_ability, "abilities")


def parse_all_weapons(raw: object) -> dict[int, WeaponInfo]:
    """Map hero id -> weapon info. The first weapon listed for a hero wins."""
    by_hero: dict[int, WeaponInfo] = {}
    for hero_ids, info in _parse_all(raw, parse_weapon_entry, "weapons"):
        for hero_id in hero_ids:
            by_hero.setdefault(hero_id, info)
    return by_hero
