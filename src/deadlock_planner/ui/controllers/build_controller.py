"""Controller for build-page mutations and read models.

Views render the plain rows returned here; every mutation returns an
`(ok, message)` pair so the view can show the message without catching
engine exceptions itself.
"""

from dataclasses import dataclass
from typing import Callable

from deadlock_planner.engine.build_engine import BuildEngine
from deadlock_planner.engine.dps import BuildComparison, compare_builds, item_efficiency, round2
from deadlock_planner.models.constants import STAT_GROUPS, STAT_RULES
from deadlock_planner.models.derived_stats import BuildCapacityError
from deadlock_planner.models.item import ItemProperty
from deadlock_planner.optimizer.planner import OptimizeResult, optimize_from_spec
from deadlock_planner.optimizer.specs import OptimizeSpec
from deadlock_planner.storage.build_storage import (
    BuildStorage,
    decode_share_code,
    encode_share_code,
)
from deadlock_planner.ui.state import UiState


_DPS_LABELS: tuple[tuple[str, str], ...] = (
    ("base_dps", "Base DPS"),
    ("modified_dps", "DPS"),
    ("headshot_dps", "Headshot DPS"),
    ("sustained_dps", "Sustained DPS"),
    ("burst_damage", "Burst (one clip)"),
    ("effective_fire_rate", "Fire Rate (shots/s)"),
    ("effective_clip_size", "Clip Size"),
    ("damage_increase", "Increase %"),
)


@dataclass(frozen=True, slots=True)
class ItemRow:
    """Shop list entry."""

    item_id: int
    name: str
    cost: int
    tier: int
    slot_type: str
    in_build: bool = False


@dataclass(frozen=True, slots=True)
class StatRow:
    group: str
    label: str
    base: float
    current: float

    @property
    def changed(self) -> bool:
        return abs(self.current - self.base) > 1e-9


@dataclass(frozen=True, slots=True)
class AbilityRow:
    name: str
    damage: str
    cooldown: str
    duration: str
    cast_range: str
    charges: int
    dps: float


def format_number(value: float) -> str:
    return f"{round2(value):g}"


def format_property(key: str, prop: ItemProperty) -> str:
    """Tooltip line for one item property, e.g. '+20% Fire Rate'."""
    label = prop.label or key
    value = prop.value if prop.value is not None else ""
    line = f"{prop.prefix}{value}{prop.postfix} {label}".strip()
    if prop.is_important:
        line = f"* {line}"
    return line


@dataclass(slots=True)
class BuildController:
    """Owns build-page actions."""

    engine: BuildEngine
    storage: BuildStorage
    state: UiState
    on_change: Callable[[], None] | None = None

    def __post_init__(self) -> None:
        self._sync_state()

    def refresh(self) -> None:
        """Refresh UI-bound state after any build mutation."""
        self._sync_state()

    # --- Hero --------------------------------------------------------------

    def hero_options(self) -> list[tuple[int, str]]:
        return [(h.id, h.name) for h in self.engine.catalog.selectable_heroes()]

    @property
    def selected_hero_id(self) -> int | None:
        return self.engine.state.hero_id

    def select_hero(self, hero_id: int | None) -> tuple[bool, str | None]:
        try:
            self.engine.set_hero(hero_id)
        except ValueError as exc:
            return False, str(exc)
        self._changed()
        return True, None

    def hero_summary(self) -> str:
        hero = self.engine.hero()
        if hero is None:
            return "No hero selected"
        parts = [hero.name]
        if hero.role:
            parts.append(hero.role)
        if not hero.weapon_params.has_weapon:
            parts.append("no weapon data")
        return " - ".join(parts)

    # --- Items -------------------------------------------------------------

    def item_rows(
        self,
        query: str = "",
        slot_type: str | None = None,
        tier: int | None = None,
    ) -> list[ItemRow]:
        needle = query.strip().lower()
        in_build = set(self.engine.state.item_ids)
        rows: list[ItemRow] = []
        for item in self.engine.catalog.shoppable_items():
            if needle and needle not in item.name.lower():
                continue
            if slot_type and item.slot_type != slot_type:
                continue
            if tier is not None and item.tier != tier:
                continue
            rows.append(ItemRow(
                item_id=item.id,
                name=item.name,
                cost=item.cost,
                tier=item.tier,
                slot_type=item.slot_type,
                in_build=item.id in in_build,
            ))
        return rows

    def selected_item_rows(self) -> list[tuple[int, int, str, int]]:
        """(position, item id, name, cost) in build order."""
        return [
            (idx, item.id, item.name, item.cost)
            for idx, item in enumerate(self.engine.items())
        ]

    def item_tooltip(self, item_id: int) -> list[str]:
        item = self.engine.catalog.items.get(item_id)
        if item is None:
            return []
        lines = [f"{item.name} ({item.cost} souls, T{item.tier} {item.slot_type})"]
        if item.description:
            lines.append(item.description)
        for key, prop in item.properties.items():
            if key in STAT_RULES or prop.is_important:
                lines.append(format_property(key, prop))
        return lines

    def item_efficiency(self, item_id: int) -> float:
        """DPS per 100 souls of adding `item_id` to the current build."""
        item = self.engine.catalog.items.get(item_id)
        if item is None or self.engine.is_full:
            return 0.0
        return item_efficiency(self.engine.hero(), item, self.engine.items())

    def add_item(self, item_id: int) -> tuple[bool, str | None]:
        try:
            self.engine.add_item(item_id)
        except BuildCapacityError:
            return False, f"Build is full ({self.engine.max_items} items max)."
        except ValueError as exc:
            return False, str(exc)
        self._changed()
        return True, None

    def remove_item(self, item_id: int) -> tuple[bool, str | None]:
        if not self.engine.remove_item(item_id):
            return False, "Item is not in the build."
        self._changed()
        return True, None

    def move_item(self, from_index: int, to_index: int) -> tuple[bool, str | None]:
        try:
            self.engine.move_item(from_index, to_index)
        except ValueError as exc:
            return False, str(exc)
        self._changed()
        return True, None

    def clear_items(self) -> None:
        self.engine.clear_items()
        self._changed()

    def total_cost(self) -> int:
        return self.engine.total_cost()

    def capacity_label(self) -> str:
        return f"{len(self.engine.state.item_ids)}/{self.engine.max_items} items"

    # --- Read models -------------------------------------------------------

    def stat_rows(self) -> list[StatRow]:
        base = self.engine.base_stats()
        current = self.engine.stats()
        if base is None or current is None:
            return []
        rows: list[StatRow] = []
        for group, fields in STAT_GROUPS.items():
            for name, label in fields:
                rows.append(StatRow(
                    group=group,
                    label=label,
                    base=getattr(base, name),
                    current=getattr(current, name),
                ))
        return rows

    def dps_rows(self) -> list[tuple[str, str]]:
        metrics = self.engine.dps()
        return [(label, format_number(getattr(metrics, name))) for name, label in _DPS_LABELS]

    def ability_rows(self) -> list[AbilityRow]:
        rows: list[AbilityRow] = []
        for m in self.engine.abilities():
            rows.append(AbilityRow(
                name=m.ability.name,
                damage=_scaled_text(m.base_damage, m.scaled_damage),
                cooldown=_scaled_text(m.base_cooldown, m.scaled_cooldown, "s"),
                duration=_scaled_text(m.base_duration, m.scaled_duration, "s"),
                cast_range=m.range_label,
                charges=m.charges,
                dps=round2(m.dps),
            ))
        return rows

    # --- Optimizer ---------------------------------------------------------

    def suggest_items(
        self,
        budget: int | None = None,
        max_slots: int | None = None,
        slot_types: set[str] | None = None,
        keep_current: bool = True,
    ) -> OptimizeResult:
        config = self.engine.config
        spec = OptimizeSpec(
            budget=config.default_budget if budget is None else int(budget),
            max_slots=config.optimizer_slots if max_slots is None else int(max_slots),
            slot_types=set(slot_types or ()),
            starting_item_ids=list(self.engine.state.item_ids) if keep_current else [],
        )
        return optimize_from_spec(self.engine.hero(), self.engine.catalog.shoppable_items(), spec)

    def apply_suggestion(self, result: OptimizeResult, keep_current: bool = True) -> tuple[bool, str | None]:
        ids = list(self.engine.state.item_ids) if keep_current else []
        ids.extend(item.id for item in result.chosen)
        try:
            self.engine.set_items(ids)
        except BuildCapacityError as exc:
            return False, str(exc)
        self._changed()
        return True, f"Added {len(result.chosen)} items for {result.total_cost} souls."

    # --- Persistence -------------------------------------------------------

    def saved_build_rows(self) -> list[tuple[str, str, str]]:
        """(build id, name, hero name) for every saved build."""
        heroes = self.engine.catalog.heroes
        rows: list[tuple[str, str, str]] = []
        for build in self.storage.all_builds():
            hero = heroes.get(build.hero_id)
            rows.append((build.id, build.name, hero.name if hero else f"Hero {build.hero_id}"))
        return rows

    def save_build(self, name: str | None = None) -> tuple[bool, str | None]:
        state = self.engine.state
        if state.hero_id is None:
            return False, "Select a hero before saving."
        if name is not None:
            try:
                self.engine.set_name(name)
            except ValueError as exc:
                return False, str(exc)
        if state.saved_build_id is not None:
            saved = self.storage.update_build(
                state.saved_build_id, state.name, state.hero_id, state.item_ids
            )
            if saved is not None:
                self._changed()
                return True, f"Updated '{saved.name}'."
        saved = self.storage.save_build(state.name, state.hero_id, state.item_ids)
        state.saved_build_id = saved.id
        self._changed()
        return True, f"Saved '{saved.name}'."

    def load_build(self, build_id: str) -> tuple[bool, str | None]:
        build = self.storage.get_build(build_id)
        if build is None:
            return False, "Saved build not found."
        return self._load(build.hero_id, build.item_ids, name=build.name, saved_build_id=build.id)

    def delete_build(self, build_id: str) -> tuple[bool, str | None]:
        if not self.storage.delete_build(build_id):
            return False, "Saved build not found."
        if self.engine.state.saved_build_id == build_id:
            self.engine.state.saved_build_id = None
        self._changed()
        return True, None

    def export_build(self, build_id: str) -> str | None:
        build = self.storage.get_build(build_id)
        if build is None:
            return None
        return self.storage.export_build_json(build)

    def import_build(self, text: str) -> tuple[bool, str | None]:
        build = self.storage.import_build_json(text)
        if build is None:
            return False, "Not a valid exported build."
        self._changed()
        return True, f"Imported '{build.name}'."

    def share_code(self) -> str | None:
        state = self.engine.state
        if state.hero_id is None:
            return None
        return encode_share_code(state.hero_id, state.item_ids)

    def load_share_code(self, code: str) -> tuple[bool, str | None]:
        decoded = decode_share_code(code)
        if decoded is None:
            return False, "Not a valid build code."
        hero_id, item_ids = decoded
        return self._load(hero_id, item_ids)

    def compare_with_saved(self, build_id: str) -> tuple[bool, str | None, BuildComparison | None]:
        """Current build (first) against a saved build (second) on the current hero."""
        build = self.storage.get_build(build_id)
        if build is None:
            return False, "Saved build not found.", None
        other = self.engine.catalog.items_by_ids(build.item_ids)
        comparison = compare_builds(self.engine.hero(), self.engine.items(), other)
        diff = comparison.difference
        sign = "+" if diff >= 0 else ""
        return True, f"'{build.name}': {sign}{diff:g} DPS vs current", comparison

    # --- Internals ---------------------------------------------------------

    def _load(
        self,
        hero_id: int,
        item_ids: list[int],
        *,
        name: str | None = None,
        saved_build_id: str | None = None,
    ) -> tuple[bool, str | None]:
        # Dry run on a copy so a rejected build leaves the current one untouched.
        staged = self.engine.copy()
        try:
            staged.set_hero(hero_id)
            staged.set_items(item_ids)
        except ValueError as exc:
            return False, str(exc)
        self.engine.set_hero(hero_id)
        dropped = self.engine.set_items(item_ids)
        if name is not None:
            self.engine.set_name(name)
        self.engine.state.saved_build_id = saved_build_id
        self._changed()
        if dropped:
            return True, f"{len(dropped)} items are no longer in the catalog and were skipped."
        return True, None

    def _sync_state(self) -> None:
        hero = self.engine.hero()
        self.state.build_name = self.engine.state.name
        self.state.hero_name = hero.name if hero else None
        self.state.total_cost = self.engine.total_cost()
        self.state.item_count = len(self.engine.state.item_ids)
        self.state.max_items = self.engine.max_items

    def _changed(self) -> None:
        self._sync_state()
        if self.on_change is not None:
            self.on_change()


def _scaled_text(base: float, scaled: float, unit: str = "") -> str:
    if base == 0 and scaled == 0:
        return "-"
    if abs(scaled - base) < 1e-9:
        return f"{format_number(base)}{unit}"
    return f"{format_number(base)}{unit} -> {format_number(scaled)}{unit}"
