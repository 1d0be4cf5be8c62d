"""Dump selectable heroes with base weapon numbers and base DPS.

Usage:
    python -m scripts.dump_heroes [--snapshot DIR] [--json] [--all]
"""

import argparse
import json
import logging
from pathlib import Path

from deadlock_planner.catalog.catalog import Catalog
from deadlock_planner.catalog.client import CatalogError
from deadlock_planner.engine.dps import compute_dps
from deadlock_planner.ui.bootstrap import config_from_env, load_catalog


def hero_rows(catalog: Catalog, include_hidden: bool = False) -> list[dict]:
    """One dict per hero: weapon params plus unmodified DPS."""
    heroes = catalog.heroes.values() if include_hidden else catalog.selectable_heroes()
    rows: list[dict] = []
    for hero in sorted(heroes, key=lambda h: h.name.lower()):
        resolved = catalog.hero_with_weapon(hero.id) or hero
        params = resolved.weapon_params
        metrics = compute_dps(resolved, [])
        rows.append({
            "id": hero.id,
            "name": hero.name,
            "class_name": hero.class_name,
            "has_weapon_data": resolved.weapon is not None,
            "bullet_damage": params.bullet_damage,
            "fire_rate": round(params.fire_rate, 3),
            "clip_size": params.clip_size,
            "bullets": params.bullets,
            "reload_duration": params.reload_duration,
            "base_dps": metrics.base_dps,
            "sustained_dps": metrics.sustained_dps,
            "max_health": hero.starting_stats.max_health,
        })
    return rows


def format_row(row: dict) -> str:
    flag = "" if row["has_weapon_data"] else "  (default weapon)"
    return (
        f"{row['id']:>4}  {row['name']:<16} dmg={row['bullet_damage']:>6g} "
        f"x{row['bullets']:<2} rate={row['fire_rate']:>6g}/s clip={row['clip_size']:>3} "
        f"reload={row['reload_duration']:>4g}s hp={row['max_health']:>5g} "
        f"dps={row['base_dps']:>7g} sustained={row['sustained_dps']:>7g}{flag}"
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Dump hero weapon stats and base DPS")
    parser.add_argument("--snapshot", type=Path, help="Catalog snapshot directory (skips the API).")
    parser.add_argument("--all", action="store_true", help="Include unselectable heroes.")
    parser.add_argument("--json", action="store_true", help="Emit JSON instead of text.")
    parser.add_argument("--verbose", action="store_true", help="Log catalog loading.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    try:
        catalog, source = load_catalog(config_from_env(), snapshot_dir=args.snapshot)
    except (CatalogError, FileNotFoundError) as exc:
        raise SystemExit(f"Error: {exc}") from exc
    if source.error:
        raise SystemExit(f"Error: catalog unavailable: {source.error}")

    rows = hero_rows(catalog, include_hidden=args.all)
    if args.json:
        print(json.dumps(rows, indent=2))
        return
    print(f"{len(rows)} heroes from {source.mode} ({source.location})")
    for row in rows:
        print(format_row(row))


if __name__ == "__main__":
    main()
