"""Tests for the build-page controller (no GTK required)."""

from deadlock_planner.catalog.catalog import Catalog
from deadlock_planner.engine.build_config import BuildConfig
from deadlock_planner.engine.build_engine import BuildEngine
from deadlock_planner.models.hero import Hero, StartingStats, WeaponInfo
from deadlock_planner.models.item import Item, ItemProperty
from deadlock_planner.storage.build_storage import BuildStorage, encode_share_code
from deadlock_planner.ui.controllers.build_controller import BuildController, format_property
from deadlock_planner.ui.state import UiState


def _item(item_id: int, name: str, cost: int, slot_type: str, tier: int = 1, **props) -> Item:
    return Item(
        id=item_id,
        class_name=f"upgrade_{item_id}",
        name=name,
        cost=cost,
        tier=tier,
        slot_type=slot_type,
        properties={key: ItemProperty(value=value) for key, value in props.items()},
    )


def _catalog() -> Catalog:
    heroes = {
        1: Hero(
            id=1,
            class_name="hero_haze",
            name="Haze",
            role="Assassin",
            starting_stats=StartingStats(max_health=550),
            weapon=WeaponInfo(bullet_damage=10.0, cycle_time=0.1, clip_size=20, bullets=1),
        ),
        2: Hero(id=2, class_name="hero_atlas", name="Abrams"),
    }
    items = {
        10: _item(10, "Basic Magazine", 500, "weapon", BonusClipSizePercent=24),
        11: _item(11, "Extra Health", 500, "vitality", BonusHealth=150),
        12: _item(12, "High-Velocity Mag", 1250, "weapon", tier=2, BaseAttackDamagePercent=20),
        13: _item(13, "Rapid Rounds", 500, "weapon", FireRate=10),
    }
    return Catalog(heroes=heroes, items=items)


def _controller(tmp_path, changes: list | None = None) -> BuildController:
    engine = BuildEngine(_catalog(), BuildConfig(default_budget=2000, optimizer_slots=3))
    engine.set_hero(1)
    controller = BuildController(
        engine=engine,
        storage=BuildStorage(tmp_path / "builds.json", clock=lambda: 1000),
        state=UiState(),
    )
    if changes is not None:
        controller.on_change = lambda: changes.append(True)
    return controller


def test_state_synced_on_init(tmp_path):
    c = _controller(tmp_path)
    assert c.state.hero_name == "Haze"
    assert c.state.item_count == 0
    assert c.hero_summary() == "Haze - Assassin"


def test_hero_options_and_selection(tmp_path):
    changes: list = []
    c = _controller(tmp_path, changes)
    assert c.hero_options() == [(2, "Abrams"), (1, "Haze")]
    ok, _ = c.select_hero(2)
    assert ok and c.state.hero_name == "Abrams"
    ok, message = c.select_hero(404)
    assert not ok and "Unknown hero" in message
    assert changes == [True]


def test_item_rows_filters(tmp_path):
    c = _controller(tmp_path)
    assert [r.item_id for r in c.item_rows()] == [10, 11, 13, 12]
    assert [r.item_id for r in c.item_rows(query="mag")] == [10, 12]
    assert [r.item_id for r in c.item_rows(slot_type="vitality")] == [11]
    assert [r.item_id for r in c.item_rows(tier=2)] == [12]


def test_add_remove_and_state(tmp_path):
    changes: list = []
    c = _controller(tmp_path, changes)
    assert c.add_item(12) == (True, None)
    assert c.add_item(10) == (True, None)
    ok, message = c.add_item(12)
    assert not ok and "already" in message
    assert c.state.total_cost == 1750
    assert c.capacity_label() == "2/12 items"
    assert [row[1] for row in c.selected_item_rows()] == [12, 10]
    assert next(r for r in c.item_rows() if r.item_id == 12).in_build
    assert c.move_item(1, 0) == (True, None)
    assert [row[1] for row in c.selected_item_rows()] == [10, 12]
    assert c.remove_item(10) == (True, None)
    assert c.remove_item(10)[0] is False
    assert len(changes) == 4


def test_full_build_message(tmp_path):
    c = _controller(tmp_path)
    c.engine.config.max_items = 1
    c.add_item(10)
    ok, message = c.add_item(11)
    assert not ok and "full" in message
    assert c.item_efficiency(12) == 0.0


def test_read_models(tmp_path):
    c = _controller(tmp_path)
    c.add_item(11)
    health = next(r for r in c.stat_rows() if r.label == "Max Health")
    assert health.group == "Vitality"
    assert (health.base, health.current) == (550, 700)
    assert health.changed
    dps = dict(c.dps_rows())
    assert dps["DPS"] == "100"
    assert c.ability_rows() == []


def test_item_tooltip_and_efficiency(tmp_path):
    c = _controller(tmp_path)
    lines = c.item_tooltip(12)
    assert lines[0] == "High-Velocity Mag (1250 souls, T2 weapon)"
    assert "20 BaseAttackDamagePercent" in lines
    assert c.item_efficiency(12) == 1.6
    assert c.item_tooltip(999) == []


def test_format_property():
    prop = ItemProperty(value=20, label="Weapon Damage", prefix="+", postfix="%", is_important=True)
    assert format_property("BaseAttackDamagePercent", prop) == "* +20% Weapon Damage"


def test_suggest_and_apply(tmp_path):
    c = _controller(tmp_path)
    result = c.suggest_items()
    assert result.total_cost <= 2000
    assert [item.id for item in result.chosen][0] == 13
    ok, message = c.apply_suggestion(result)
    assert ok and "Added" in message
    assert c.engine.state.item_ids == [item.id for item in result.chosen]


def test_save_load_delete(tmp_path):
    c = _controller(tmp_path)
    c.add_item(12)
    ok, message = c.save_build("Gun Haze")
    assert ok and message == "Saved 'Gun Haze'."
    assert c.saved_build_rows() == [("build_1000", "Gun Haze", "Haze")]

    c.add_item(10)
    ok, message = c.save_build()
    assert message == "Updated 'Gun Haze'."
    assert c.storage.get_build("build_1000").item_ids == [12, 10]

    c.clear_items()
    assert c.load_build("build_1000") == (True, None)
    assert c.engine.state.item_ids == [12, 10]
    assert c.load_build("nope")[0] is False

    assert c.delete_build("build_1000") == (True, None)
    assert c.engine.state.saved_build_id is None
    assert c.saved_build_rows() == []


def test_save_requires_hero(tmp_path):
    c = _controller(tmp_path)
    c.select_hero(None)
    assert c.save_build("x") == (False, "Select a hero before saving.")


def test_share_code_roundtrip(tmp_path):
    c = _controller(tmp_path)
    c.add_item(12)
    code = c.share_code()
    c.clear_items()
    c.select_hero(2)
    assert c.load_share_code(code) == (True, None)
    assert c.engine.state.hero_id == 1
    assert c.engine.state.item_ids == [12]
    assert c.load_share_code("garbage!") == (False, "Not a valid build code.")


def test_rejected_share_code_keeps_current_build(tmp_path):
    changes: list = []
    c = _controller(tmp_path, changes)
    c.add_item(13)
    changes.clear()
    ok, message = c.load_share_code(encode_share_code(2, [10, 11, 12, 13] * 4))
    assert not ok and "at most 12" in message
    assert c.engine.state.hero_id == 1
    assert c.engine.state.item_ids == [13]
    assert c.state.hero_name == "Haze"
    assert changes == []
    assert c.load_share_code("bûild") == (False, "Not a valid build code.")


def test_load_reports_dropped_items(tmp_path):
    c = _controller(tmp_path)
    c.storage.save_build("Old", 1, [12, 404])
    ok, message = c.load_build("build_1000")
    assert ok and "1 items" in message
    assert c.engine.state.item_ids == [12]


def test_export_import_and_compare(tmp_path):
    c = _controller(tmp_path)
    c.add_item(12)
    c.save_build("Gun")
    text = c.export_build("build_1000")
    assert c.import_build(text) == (True, "Imported 'Gun'.")
    assert len(c.saved_build_rows()) == 2
    assert c.import_build("{}")[0] is False

    c.clear_items()
    ok, message, comparison = c.compare_with_saved("build_1000")
    assert ok
    assert comparison.difference == 20.0
    assert "+20 DPS" in message
