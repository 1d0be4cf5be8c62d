"""In-memory catalog: heroes, shop items, abilities, and hero weapons.

Built once from the live API (from_client) or from a JSON snapshot
directory (from_snapshot), then queried by the controllers. A snapshot
directory holds the raw API responses unchanged:

    heroes.json     GET /heroes
    items.json      GET /items/by-type/upgrade
    weapons.json    GET /items/by-type/weapon
    abilities.json  GET /items/by-type/ability

Catalog snapshots are read-only; merging weapon params onto a hero returns
a new Hero.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path

from deadlock_planner.catalog.client import CatalogError, DeadlockApiClient
from deadlock_planner.models.hero import Hero, WeaponInfo
from deadlock_planner.models.item import Ability, Item
from deadlock_planner.parser.catalog_parser import (
    parse_all_abilities,
    parse_all_heroes,
    parse_all_items,
    parse_all_weapons,
)


logger = logging.getLogger(__name__)

SNAPSHOT_FILES = {
    "heroes": "heroes.json",
    "items": "items.json",
    "weapons": "weapons.json",
    "abilities": "abilities.json",
}


@dataclass(slots=True)
class Catalog:
    """Parsed catalog data keyed by id."""

    heroes: dict[int, Hero] = field(default_factory=dict)
    items: dict[int, Item] = field(default_factory=dict)
    weapons_by_hero: dict[int, WeaponInfo] = field(default_factory=dict)
    abilities: dict[str, Ability] = field(default_factory=dict)   # by class_name

    # --- Factories ---------------------------------------------------------

    @classmethod
    def from_raw(
        cls,
        heroes: object,
        items: object,
        weapons: object = None,
        abilities: object = None,
    ) -> Catalog:
        """Build from decoded API responses."""
        return cls(
            heroes={h.id: h for h in parse_all_heroes(heroes)},
            items={i.id: i for i in parse_all_items(items)},
            weapons_by_hero=parse_all_weapons(weapons if weapons is not None else []),
            abilities={
                a.class_name: a
                for a in parse_all_abilities(abilities if abilities is not None else [])
            },
        )

    @classmethod
    def from_client(cls, client: DeadlockApiClient) -> Catalog:
        """Fetch everything from the live API. Raises CatalogError."""
        raw = _fetch_raw(client)
        catalog = cls.from_raw(raw["heroes"], raw["items"], raw["weapons"], raw["abilities"])
        logger.info(
            "Loaded catalog from %s: %d heroes, %d items",
            client.base_url,
            len(catalog.heroes),
            len(catalog.items),
        )
        return catalog

    @classmethod
    def from_snapshot(cls, directory: Path) -> Catalog:
        """Load a snapshot directory. Missing weapon/ability files are allowed."""
        raw: dict[str, object] = {}
        for key, filename in SNAPSHOT_FILES.items():
            path = directory / filename
            if not path.exists():
                if key in ("heroes", "items"):
                    raise FileNotFoundError(f"Catalog snapshot is missing {path}")
                raw[key] = []
                continue
            try:
                raw[key] = json.loads(path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as exc:
                raise CatalogError(f"Invalid JSON in {path}: {exc}") from exc
        catalog = cls.from_raw(raw["heroes"], raw["items"], raw["weapons"], raw["abilities"])
        logger.info(
            "Loaded catalog snapshot %s: %d heroes, %d items",
            directory,
            len(catalog.heroes),
            len(catalog.items),
        )
        return catalog

    # --- Queries -----------------------------------------------------------

    def selectable_heroes(self) -> list[Hero]:
        """Heroes a player can pick, sorted by name."""
        return sorted(
            (h for h in self.heroes.values() if h.is_selectable),
            key=lambda h: h.name.lower(),
        )

    def shoppable_items(self) -> list[Item]:
        """Shop items sorted by tier, cost, then name."""
        return sorted(
            (i for i in self.items.values() if i.shoppable),
            key=lambda i: (i.tier, i.cost, i.name.lower()),
        )

    def items_by_tier(self, tier: int) -> list[Item]:
        return [i for i in self.shoppable_items() if i.tier == tier]

    def items_by_slot_type(self, slot_type: str) -> list[Item]:
        return [i for i in self.shoppable_items() if i.slot_type == slot_type]

    def weapon_params_for(self, hero_id: int) -> WeaponInfo | None:
        """Raw weapon info for a hero, or None when the catalog has none."""
        hero = self.heroes.get(hero_id)
        if hero is not None and hero.weapon is not None:
            return hero.weapon
        return self.weapons_by_hero.get(hero_id)

    def hero_with_weapon(self, hero_id: int) -> Hero | None:
        """The hero with its weapon params merged in (None if unknown id)."""
        hero = self.heroes.get(hero_id)
        if hero is None:
            return None
        weapon = self.weapon_params_for(hero_id)
        if weapon is hero.weapon:
            return hero
        return replace(hero, weapon=weapon)

    def find_hero(self, query: str) -> Hero | None:
        """Look a hero up by id, name, or class name (case-insensitive)."""
        text = query.strip()
        if text.isdigit():
            return self.hero_with_weapon(int(text))
        lowered = text.lower()
        for hero in self.heroes.values():
            if lowered in (hero.name.lower(), hero.class_name.lower()):
                return self.hero_with_weapon(hero.id)
        return None

    def abilities_for(self, hero: Hero) -> list[Ability]:
        """Signature abilities in slot order; unknown class names are skipped."""
        return [
            self.abilities[name] for name in hero.ability_class_names if name in self.abilities
        ]

    def items_by_ids(self, item_ids) -> list[Item]:
        """Resolve stored ids to items, keeping order and dropping unknown ids."""
        return [self.items[i] for i in item_ids if i in self.items]


def _fetch_raw(client: DeadlockApiClient) -> dict[str, object]:
    return {
        "heroes": client.get_heroes(),
        "items": client.get_upgrade_items(),
        "weapons": client.get_weapon_items(),
        "abilities": client.get_ability_items(),
    }


def write_snapshot(client: DeadlockApiClient, directory: Path) -> dict[str, int]:
    """Download the raw catalog into `directory`; returns entry counts per file."""
    raw = _fetch_raw(client)
    directory.mkdir(parents=True, exist_ok=True)
    counts: dict[str, int] = {}
    for key, filename in SNAPSHOT_FILES.items():
        data = raw[key]
        (directory / filename).write_text(json.dumps(data, indent=2), encoding="utf-8")
        counts[filename] = len(data) if isinstance(data, list) else 0
    logger.info("Wrote catalog snapshot to %s", directory)
    return counts
