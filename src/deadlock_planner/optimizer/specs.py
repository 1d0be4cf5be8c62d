"""Input specs for budget-driven build optimization."""

from __future__ import annotations

from dataclasses import dataclass, field

from deadlock_planner.models.constants import DEFAULT_OPTIMIZER_SLOTS


@dataclass(slots=True)
class OptimizeSpec:
    """What the optimizer may spend and where it may look.

    `slot_types` restricts the candidate pool to the given shop categories
    (empty = all). `starting_item_ids` are kept as-is; the optimizer only
    adds items on top of them, and their cost doesn't count against
    `budget`.
    """

    budget: int
    max_slots: int = DEFAULT_OPTIMIZER_SLOTS
    slot_types: set[str] = field(default_factory=set)
    max_tier: int | None = None
    starting_item_ids: list[int] = field(default_factory=list)
