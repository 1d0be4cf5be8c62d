"""Bootstrap helpers for loading catalog data into UI runtime state."""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from deadlock_planner.catalog.catalog import Catalog
from deadlock_planner.catalog.client import CatalogError, DeadlockApiClient
from deadlock_planner.engine.build_config import BuildConfig
from deadlock_planner.engine.build_engine import BuildEngine
from deadlock_planner.storage.build_storage import BuildStorage
from deadlock_planner.ui.state import CatalogSourceState, UiState


logger = logging.getLogger(__name__)


def default_builds_path() -> Path:
    env_path = os.environ.get("DEADLOCK_BUILDS_FILE")
    if env_path:
        return Path(env_path).expanduser()
    config_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(config_home).expanduser() if config_home else Path.home() / ".config"
    return base / "deadlock-planner" / "builds.json"


def config_from_env(config: BuildConfig | None = None) -> BuildConfig:
    """Apply DEADLOCK_* environment overrides to a BuildConfig."""
    config = config or BuildConfig()
    api_url = os.environ.get("DEADLOCK_API_URL")
    if api_url:
        config.api_base_url = api_url
    budget = os.environ.get("DEADLOCK_DEFAULT_BUDGET")
    if budget:
        try:
            config.default_budget = int(budget)
        except ValueError:
            logger.warning("Ignoring non-integer DEADLOCK_DEFAULT_BUDGET=%r", budget)
    return config


def _snapshot_dir_from_env() -> Path | None:
    raw = os.environ.get("DEADLOCK_CATALOG_DIR")
    if not raw:
        return None
    return Path(raw).expanduser()


def load_catalog(
    config: BuildConfig,
    snapshot_dir: Path | None = None,
    client: DeadlockApiClient | None = None,
) -> tuple[Catalog, CatalogSourceState]:
    """Load from a snapshot when one is configured, else from the live API.

    A failing API leaves an empty catalog and records the error for the UI
    to show; a broken snapshot directory is a configuration error and
    propagates.
    """
    snapshot_dir = snapshot_dir or _snapshot_dir_from_env()
    if snapshot_dir is not None:
        catalog = Catalog.from_snapshot(snapshot_dir)
        return catalog, CatalogSourceState(mode="snapshot", location=str(snapshot_dir))

    client = client or DeadlockApiClient(config.api_base_url, timeout=config.request_timeout)
    try:
        catalog = Catalog.from_client(client)
    except CatalogError as exc:
        logger.warning("Catalog unavailable, starting with an empty catalog: %s", exc)
        return Catalog(), CatalogSourceState(mode="empty", location=client.base_url, error=str(exc))
    return catalog, CatalogSourceState(mode="api", location=client.base_url)


@dataclass(slots=True)
class BuildSession:
    """Runtime objects needed by UI pages/controllers."""

    engine: BuildEngine
    catalog: Catalog
    storage: BuildStorage
    config: BuildConfig


def bootstrap_default_session(
    snapshot_dir: Path | None = None,
    builds_path: Path | None = None,
    client: DeadlockApiClient | None = None,
) -> tuple[BuildSession, UiState]:
    """Build a UI session from environment defaults."""
    config = config_from_env()
    catalog, source = load_catalog(config, snapshot_dir=snapshot_dir, client=client)
    engine = BuildEngine(catalog, config)

    heroes = catalog.selectable_heroes()
    if heroes:
        engine.set_hero(heroes[0].id)

    storage = BuildStorage(builds_path or default_builds_path())
    state = UiState(
        build_name=engine.state.name,
        hero_name=heroes[0].name if heroes else None,
        max_items=engine.max_items,
        builds_path=storage.path,
        catalog_source=source,
    )
    return BuildSession(engine, catalog, storage, config), state


@dataclass(slots=True)
class LaunchOptions:
    """Command-line overrides for the desktop app."""

    snapshot_dir: Path | None = None
    builds_path: Path | None = None
    verbose: bool = False


def parse_launch_args(argv: list[str] | None = None) -> LaunchOptions:
    parser = argparse.ArgumentParser(prog="deadlock-planner", description="Deadlock build planner")
    parser.add_argument("--snapshot", type=Path, help="Catalog snapshot directory (skips the API).")
    parser.add_argument("--builds-file", type=Path, help="Saved builds JSON file.")
    parser.add_argument("--verbose", action="store_true", help="Log catalog loading.")
    args = parser.parse_args(argv)
    return LaunchOptions(
        snapshot_dir=args.snapshot.expanduser() if args.snapshot else None,
        builds_path=args.builds_file.expanduser() if args.builds_file else None,
        verbose=args.verbose,
    )


def describe_source(source: CatalogSourceState) -> str:
    """One-line summary of where the catalog came from."""
    if source.error:
        return f"No catalog loaded ({source.location}): {source.error}"
    if source.mode == "snapshot":
        return f"Catalog snapshot: {source.location}"
    if source.mode == "api":
        return f"Catalog API: {source.location}"
    return "No catalog loaded"
