"""Tests for environment-driven session bootstrap."""

import json

from deadlock_planner.catalog.client import CatalogError
from deadlock_planner.engine.build_config import BuildConfig
from deadlock_planner.ui.bootstrap import (
    LaunchOptions,
    bootstrap_default_session,
    config_from_env,
    default_builds_path,
    describe_source,
    load_catalog,
    parse_launch_args,
)
from deadlock_planner.ui.state import CatalogSourceState


HEROES = [
    {"id": 2, "name": "Zed", "class_name": "hero_z"},
    {"id": 1, "name": "Abrams", "class_name": "hero_atlas"},
]
ITEMS = [{"id": 10, "name": "Extra Health", "cost": 500, "item_tier": 1, "shopable": True}]


class _FailingClient:
    base_url = "https://example.test/v2"

    def get_heroes(self):
        raise CatalogError("offline")


def _write_snapshot(directory) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "heroes.json").write_text(json.dumps(HEROES))
    (directory / "items.json").write_text(json.dumps(ITEMS))


def test_default_builds_path_env(monkeypatch, tmp_path):
    monkeypatch.setenv("DEADLOCK_BUILDS_FILE", str(tmp_path / "mine.json"))
    assert default_builds_path() == tmp_path / "mine.json"


def test_default_builds_path_xdg(monkeypatch, tmp_path):
    monkeypatch.delenv("DEADLOCK_BUILDS_FILE", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert default_builds_path() == tmp_path / "deadlock-planner" / "builds.json"


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("DEADLOCK_API_URL", "https://mirror.test/v2")
    monkeypatch.setenv("DEADLOCK_DEFAULT_BUDGET", "9000")
    config = config_from_env()
    assert config.api_base_url == "https://mirror.test/v2"
    assert config.default_budget == 9000


def test_config_from_env_ignores_bad_budget(monkeypatch):
    monkeypatch.delenv("DEADLOCK_API_URL", raising=False)
    monkeypatch.setenv("DEADLOCK_DEFAULT_BUDGET", "lots")
    assert config_from_env().default_budget == BuildConfig().default_budget


def test_load_catalog_from_snapshot_env(monkeypatch, tmp_path):
    _write_snapshot(tmp_path)
    monkeypatch.setenv("DEADLOCK_CATALOG_DIR", str(tmp_path))
    catalog, source = load_catalog(BuildConfig())
    assert source.mode == "snapshot"
    assert set(catalog.heroes) == {1, 2}


def test_load_catalog_api_failure_is_empty(monkeypatch):
    monkeypatch.delenv("DEADLOCK_CATALOG_DIR", raising=False)
    catalog, source = load_catalog(BuildConfig(), client=_FailingClient())
    assert catalog.heroes == {}
    assert source.mode == "empty"
    assert source.error == "offline"


def test_bootstrap_selects_first_hero(monkeypatch, tmp_path):
    monkeypatch.delenv("DEADLOCK_API_URL", raising=False)
    monkeypatch.delenv("DEADLOCK_DEFAULT_BUDGET", raising=False)
    _write_snapshot(tmp_path / "snap")
    session, state = bootstrap_default_session(
        snapshot_dir=tmp_path / "snap",
        builds_path=tmp_path / "builds.json",
    )
    assert session.engine.state.hero_id == 1
    assert state.hero_name == "Abrams"
    assert state.builds_path == tmp_path / "builds.json"
    assert state.catalog_source.mode == "snapshot"


def test_bootstrap_with_empty_catalog(monkeypatch, tmp_path):
    monkeypatch.delenv("DEADLOCK_CATALOG_DIR", raising=False)
    session, state = bootstrap_default_session(
        builds_path=tmp_path / "builds.json",
        client=_FailingClient(),
    )
    assert session.engine.state.hero_id is None
    assert state.hero_name is None
    assert state.catalog_source.error == "offline"


def test_parse_launch_args(tmp_path):
    options = parse_launch_args(["--snapshot", str(tmp_path), "--builds-file", str(tmp_path / "b.json")])
    assert options.snapshot_dir == tmp_path
    assert options.builds_path == tmp_path / "b.json"
    assert not options.verbose
    assert parse_launch_args([]) == LaunchOptions()


def test_describe_source():
    assert describe_source(CatalogSourceState(mode="snapshot", location="/data")) == (
        "Catalog snapshot: /data"
    )
    offline = CatalogSourceState(mode="empty", location="https://example.test/v2", error="offline")
    assert describe_source(offline) == "No catalog loaded (https://example.test/v2): offline"
