"""Catalog service access: HTTP client and parsed in-memory catalog."""

from deadlock_planner.catalog.catalog import Catalog, write_snapshot
from deadlock_planner.catalog.client import CatalogError, DeadlockApiClient

__all__ = [
    "Catalog",
    "CatalogError",
    "DeadlockApiClient",
    "write_snapshot",
]
