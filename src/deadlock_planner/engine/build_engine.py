"""Build engine: the current hero + ordered item list, and its metrics.

Owns the only mutable piece of the planner (BuildState). Every metric is
recomputed from the state and the catalog on each call; the pure
calculators in models.derived_stats, engine.dps, and engine.abilities do
the math.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field

from deadlock_planner.catalog.catalog import Catalog
from deadlock_planner.engine.abilities import AbilityMetrics, compute_abilities
from deadlock_planner.engine.build_config import BuildConfig
from deadlock_planner.engine.dps import DpsMetrics, compute_dps
from deadlock_planner.models.constants import MAX_BUILD_ITEMS
from deadlock_planner.models.derived_stats import BuildCapacityError, HeroStats, compute_stats
from deadlock_planner.models.hero import Hero
from deadlock_planner.models.item import Item


@dataclass(slots=True)
class BuildState:
    """Serialisable snapshot of all build choices."""

    name: str = "Untitled Build"
    hero_id: int | None = None
    item_ids: list[int] = field(default_factory=list)
    saved_build_id: str | None = None


class BuildEngine:
    """Validates build edits against the catalog and computes metrics."""

    __slots__ = ("_catalog", "_config", "_state")

    def __init__(self, catalog: Catalog, config: BuildConfig | None = None) -> None:
        self._catalog = catalog
        self._config = config or BuildConfig()
        self._state = BuildState()

    @classmethod
    def from_state(
        cls,
        state: BuildState,
        catalog: Catalog,
        config: BuildConfig | None = None,
    ) -> BuildEngine:
        """Restore a build; unknown item ids are dropped."""
        engine = cls(catalog, config)
        engine._state = BuildState(
            name=state.name,
            hero_id=state.hero_id if state.hero_id in catalog.heroes else None,
            item_ids=[i for i in state.item_ids if i in catalog.items][: engine.max_items],
            saved_build_id=state.saved_build_id,
        )
        return engine

    def copy(self) -> BuildEngine:
        engine = BuildEngine(self._catalog, self._config)
        engine._state = copy.deepcopy(self._state)
        return engine

    # --- Properties --------------------------------------------------------

    @property
    def state(self) -> BuildState:
        return self._state

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def config(self) -> BuildConfig:
        return self._config

    @property
    def max_items(self) -> int:
        return min(self._config.max_items, MAX_BUILD_ITEMS)

    @property
    def is_full(self) -> bool:
        return len(self._state.item_ids) >= self.max_items

    # --- Mutations ---------------------------------------------------------

    def set_name(self, name: str) -> None:
        name = name.strip()
        if not name:
            raise ValueError("Build name must not be empty")
        self._state.name = name

    def set_hero(self, hero_id: int | None) -> None:
        """Select a hero (None clears). Items are kept across hero changes."""
        if hero_id is not None:
            hero = self._catalog.heroes.get(hero_id)
            if hero is None:
                raise ValueError(f"Unknown hero id: {hero_id}")
            if not hero.is_selectable:
                raise ValueError(f"{hero.name} is not selectable")
        self._state.hero_id = hero_id

    def add_item(self, item_id: int) -> None:
        item = self._catalog.items.get(item_id)
        if item is None:
            raise ValueError(f"Unknown item id: {item_id}")
        if not self._config.allow_duplicate_items and item_id in self._state.item_ids:
            raise ValueError(f"{item.name} is already in the build")
        if self.is_full:
            raise BuildCapacityError(len(self._state.item_ids) + 1, self.max_items)
        self._state.item_ids.append(item_id)

    def remove_item(self, item_id: int) -> bool:
        """Remove the first occurrence of an item; False if it wasn't there."""
        try:
            self._state.item_ids.remove(item_id)
        except ValueError:
            return False
        return True

    def move_item(self, from_index: int, to_index: int) -> None:
        """Reorder: take the item at `from_index` and insert it at `to_index`."""
        ids = self._state.item_ids
        if not 0 <= from_index < len(ids):
            raise ValueError(f"No item at position {from_index}")
        if not 0 <= to_index < len(ids):
            raise ValueError(f"Position {to_index} is outside the build")
        ids.insert(to_index, ids.pop(from_index))

    def clear_items(self) -> None:
        self._state.item_ids.clear()

    def set_items(self, item_ids: list[int]) -> list[int]:
        """Replace the item list; returns ids dropped as unknown."""
        known = [i for i in item_ids if i in self._catalog.items]
        dropped = [i for i in item_ids if i not in self._catalog.items]
        if len(known) > self.max_items:
            raise BuildCapacityError(len(known), self.max_items)
        self._state.item_ids = known
        return dropped

    # --- Queries -----------------------------------------------------------

    def hero(self) -> Hero | None:
        """Selected hero with weapon params merged in."""
        if self._state.hero_id is None:
            return None
        return self._catalog.hero_with_weapon(self._state.hero_id)

    def items(self) -> list[Item]:
        return self._catalog.items_by_ids(self._state.item_ids)

    def total_cost(self) -> int:
        return sum(item.cost for item in self.items())

    def stats(self) -> HeroStats | None:
        return compute_stats(self.hero(), self.items())

    def base_stats(self) -> HeroStats | None:
        return compute_stats(self.hero(), [])

    def dps(self) -> DpsMetrics:
        return compute_dps(self.hero(), self.items())

    def abilities(self) -> list[AbilityMetrics]:
        hero = self.hero()
        if hero is None:
            return []
        return compute_abilities(self._catalog.abilities_for(hero), self.items())
