"""Suggest items for a hero with the greedy DPS-per-soul optimizer.

Usage examples:
    python -m scripts.optimize_build --hero Haze --budget 15000
    python -m scripts.optimize_build --hero 1 --budget 9000 --slots 4 --slot-type weapon
    python -m scripts.optimize_build --hero haze --snapshot ./catalog --json
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any

from deadlock_planner.catalog.catalog import Catalog
from deadlock_planner.catalog.client import CatalogError
from deadlock_planner.models.constants import SLOT_TYPES
from deadlock_planner.models.hero import Hero
from deadlock_planner.optimizer.planner import OptimizeResult, optimize_from_spec
from deadlock_planner.optimizer.specs import OptimizeSpec
from deadlock_planner.ui.bootstrap import config_from_env, load_catalog


def _parse_budget(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("bool is not a valid budget")
    text = str(value).strip().lower().replace(",", "").replace("_", "")
    if text.endswith("k"):
        budget = int(float(text[:-1]) * 1000)
    else:
        budget = int(text)
    if budget < 0:
        raise ValueError(f"Budget must be >= 0, got {value!r}")
    return budget


def _parse_slot_types(values: list[str] | None) -> set[str]:
    slot_types: set[str] = set()
    for raw in values or []:
        for part in raw.split(","):
            slot = part.strip().lower()
            if not slot:
                continue
            if slot not in SLOT_TYPES:
                raise ValueError(
                    f"Unknown slot type {part.strip()!r}; expected one of {', '.join(SLOT_TYPES)}"
                )
            slot_types.add(slot)
    return slot_types


def _resolve_hero(catalog: Catalog, query: str) -> Hero:
    hero = catalog.find_hero(query)
    if hero is None:
        raise ValueError(f"Unknown hero: {query!r}")
    return hero


def _result_payload(hero: Hero, spec: OptimizeSpec, result: OptimizeResult) -> dict[str, Any]:
    return {
        "hero": {"id": hero.id, "name": hero.name},
        "budget": spec.budget,
        "max_slots": spec.max_slots,
        "slot_types": sorted(spec.slot_types),
        "chosen": [
            {"id": item.id, "name": item.name, "cost": item.cost, "efficiency": round(eff, 4)}
            for item, eff in zip(result.chosen, result.efficiencies)
        ],
        "total_cost": result.total_cost,
        "metrics": result.metrics.as_dict(),
        "messages": result.messages,
    }


def _render_text_result(hero: Hero, spec: OptimizeSpec, result: OptimizeResult) -> str:
    lines: list[str] = []
    lines.append(f"hero: {hero.name} ({hero.id})")
    lines.append(f"budget: {spec.budget}  slots: {spec.max_slots}")
    if spec.slot_types:
        lines.append(f"slot types: {', '.join(sorted(spec.slot_types))}")
    lines.append("")
    if not result.chosen:
        lines.append("no items chosen")
    for idx, (item, eff) in enumerate(zip(result.chosen, result.efficiencies), start=1):
        lines.append(f"  {idx:>2}. {item.name:<28} {item.cost:>6}  {eff:>8.3f} dps/100")
    lines.append(f"total cost: {result.total_cost}")
    lines.append("")
    metrics = result.metrics
    lines.append(
        f"dps: {metrics.base_dps:g} -> {metrics.modified_dps:g} "
        f"(+{metrics.damage_increase:g}%)"
    )
    lines.append(f"headshot dps: {metrics.headshot_dps:g}  sustained: {metrics.sustained_dps:g}")
    lines.append(
        f"burst: {metrics.burst_damage:g}  clip: {metrics.effective_clip_size:g}  "
        f"fire rate: {metrics.effective_fire_rate:g}/s"
    )
    if result.messages:
        lines.append("messages:")
        lines.extend(f"  - {msg}" for msg in result.messages)
    return "\n".join(lines)


def main() -> int:
    parser = argparse.ArgumentParser(description="Greedy item suggestions for a hero")
    parser.add_argument("--hero", required=True, help="Hero id, name, or class name.")
    parser.add_argument("--budget", default="15000", help="Souls to spend (e.g. 15000 or 15k).")
    parser.add_argument("--slots", type=int, default=None, help="Max items to add.")
    parser.add_argument(
        "--slot-type",
        action="append",
        help="Restrict to weapon/vitality/spirit; repeat or comma-separate.",
    )
    parser.add_argument("--max-tier", type=int, default=None, help="Highest item tier to consider.")
    parser.add_argument("--snapshot", type=Path, help="Catalog snapshot directory (skips the API).")
    parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON output.")
    parser.add_argument("--verbose", action="store_true", help="Log catalog loading.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    try:
        budget = _parse_budget(args.budget)
        slot_types = _parse_slot_types(args.slot_type)
    except ValueError as exc:
        parser.error(str(exc))

    config = config_from_env()
    try:
        catalog, source = load_catalog(config, snapshot_dir=args.snapshot)
    except (CatalogError, FileNotFoundError) as exc:
        print(f"Error: {exc}")
        return 1
    if source.error:
        print(f"Error: catalog unavailable: {source.error}")
        return 1

    try:
        hero = _resolve_hero(catalog, args.hero)
    except ValueError as exc:
        print(f"Error: {exc}")
        return 1

    spec = OptimizeSpec(
        budget=budget,
        max_slots=config.optimizer_slots if args.slots is None else args.slots,
        slot_types=slot_types,
        max_tier=args.max_tier,
    )
    try:
        result = optimize_from_spec(hero, catalog.shoppable_items(), spec)
    except ValueError as exc:
        print(f"Error: {exc}")
        return 1

    if args.json:
        print(json.dumps(_result_payload(hero, spec, result), indent=2))
        return 0
    print(_render_text_result(hero, spec, result))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
