"""Greedy budget optimizer for weapon DPS.

This is a heuristic, not an exact knapsack solve. Each round it adds the
affordable, not-yet-chosen item with the best DPS-per-soul given the items
already picked, and stops when the slot limit is reached or no candidate
has positive efficiency. Ties go to the first candidate in pool order.
Results are deterministic but not guaranteed optimal.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from deadlock_planner.engine.dps import DpsMetrics, compute_dps, item_efficiency
from deadlock_planner.models.constants import DEFAULT_OPTIMIZER_SLOTS, MAX_BUILD_ITEMS
from deadlock_planner.models.derived_stats import check_capacity
from deadlock_planner.models.hero import Hero
from deadlock_planner.models.item import Item
from deadlock_planner.optimizer.specs import OptimizeSpec


GREEDY_NOTE = (
    "Greedy pick by DPS per soul; a good build within budget, "
    "not necessarily the best possible one."
)


@dataclass(slots=True)
class OptimizeResult:
    """Optimizer output: chosen items in pick order plus final metrics."""

    chosen: list[Item]
    total_cost: int
    metrics: DpsMetrics
    efficiencies: list[float] = field(default_factory=list)
    messages: list[str] = field(default_factory=list)


def optimize_build(
    hero: Hero | None,
    pool: list[Item],
    budget: int,
    max_slots: int = DEFAULT_OPTIMIZER_SLOTS,
    *,
    current: list[Item] | None = None,
) -> OptimizeResult:
    """Pick up to `max_slots` items from `pool` within `budget` souls.

    `current` items are already owned: they count toward DPS and the
    MAX_BUILD_ITEMS cap but not toward `budget` or `total_cost`.
    """
    if max_slots < 0:
        raise ValueError(f"max_slots must be >= 0, got {max_slots}")
    owned = check_capacity(current or [])
    if hero is None:
        return OptimizeResult(chosen=[], total_cost=0, metrics=compute_dps(None, []))

    slots = min(max_slots, MAX_BUILD_ITEMS - len(owned))
    owned_ids = {item.id for item in owned}
    chosen_idx: list[int] = []
    efficiencies: list[float] = []
    remaining = budget

    for _ in range(slots):
        build = owned + [pool[i] for i in chosen_idx]
        best_idx: int | None = None
        best_eff = 0.0
        for idx, item in enumerate(pool):
            if idx in chosen_idx or item.id in owned_ids or item.cost > remaining:
                continue
            eff = item_efficiency(hero, item, build)
            if eff > best_eff:
                best_eff = eff
                best_idx = idx
        if best_idx is None:
            break
        chosen_idx.append(best_idx)
        efficiencies.append(best_eff)
        remaining -= pool[best_idx].cost

    chosen = [pool[i] for i in chosen_idx]
    messages = [GREEDY_NOTE]
    if len(chosen) < slots:
        messages.append(
            f"Stopped after {len(chosen)} of {slots} slots: "
            "no affordable item adds weapon DPS."
        )
    return OptimizeResult(
        chosen=chosen,
        total_cost=budget - remaining,
        metrics=compute_dps(hero, owned + chosen),
        efficiencies=efficiencies,
        messages=messages,
    )


def candidate_pool(items: list[Item], spec: OptimizeSpec) -> list[Item]:
    """Filter shop items down to what `spec` allows, keeping catalog order."""
    owned = set(spec.starting_item_ids)
    pool: list[Item] = []
    for item in items:
        if item.id in owned:
            continue
        if spec.slot_types and item.slot_type not in spec.slot_types:
            continue
        if spec.max_tier is not None and item.tier > spec.max_tier:
            continue
        pool.append(item)
    return pool


def optimize_from_spec(
    hero: Hero | None,
    items: list[Item],
    spec: OptimizeSpec,
) -> OptimizeResult:
    """Run optimize_build() with the pool and owned items described by `spec`."""
    by_id = {item.id: item for item in items}
    current = [by_id[i] for i in spec.starting_item_ids if i in by_id]
    return optimize_build(
        hero,
        candidate_pool(items, spec),
        spec.budget,
        spec.max_slots,
        current=current,
    )
