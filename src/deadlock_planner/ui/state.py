"""Shared UI state and lightweight app metadata."""

from dataclasses import dataclass, field
from pathlib import Path

from deadlock_planner.models.constants import MAX_BUILD_ITEMS


@dataclass(slots=True)
class CatalogSourceState:
    """Tracks where catalog data is loaded from."""

    mode: str = "empty"     # "api" | "snapshot" | "empty"
    location: str | None = None
    error: str | None = None


@dataclass(slots=True)
class UiState:
    """Top-level app state used by controllers and views."""

    build_name: str = "Untitled Build"
    hero_name: str | None = None
    total_cost: int = 0
    item_count: int = 0
    max_items: int = MAX_BUILD_ITEMS
    banner_title: str = "Deadlock Build Planner"
    builds_path: Path | None = None
    catalog_source: CatalogSourceState = field(default_factory=CatalogSourceState)
