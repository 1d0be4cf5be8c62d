"""Configuration knobs for the build engine and its collaborators.

Defaults match the live game and the public asset API. Environment
overrides are applied in ui.bootstrap.
"""

from dataclasses import dataclass

from deadlock_planner.catalog.client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from deadlock_planner.models.constants import DEFAULT_OPTIMIZER_SLOTS, MAX_BUILD_ITEMS


@dataclass(slots=True)
class BuildConfig:
    """Tuneable parameters that aren't part of the catalog."""

    max_items: int = MAX_BUILD_ITEMS
    optimizer_slots: int = DEFAULT_OPTIMIZER_SLOTS
    default_budget: int = 15_000       # souls
    allow_duplicate_items: bool = False
    api_base_url: str = DEFAULT_BASE_URL
    request_timeout: float = DEFAULT_TIMEOUT
