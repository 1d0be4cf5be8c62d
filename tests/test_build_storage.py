"""Tests for saved-build persistence and share codes."""

import base64
import json

from deadlock_planner.storage.build_storage import (
    BuildStorage,
    SavedBuild,
    decode_share_code,
    encode_share_code,
)


def _storage(tmp_path, now: int = 1000) -> BuildStorage:
    return BuildStorage(tmp_path / "builds.json", clock=lambda: now)


def test_empty_when_file_missing(tmp_path):
    assert _storage(tmp_path).all_builds() == []


def test_save_and_get(tmp_path):
    storage = _storage(tmp_path)
    saved = storage.save_build("Gun Haze", 1, [10, 12])
    assert saved.id == "build_1000"
    assert saved.created_at == saved.updated_at == 1000
    assert storage.get_build("build_1000") == saved
    assert json.loads((tmp_path / "builds.json").read_text())[0]["item_ids"] == [10, 12]


def test_id_collision_gets_suffix(tmp_path):
    storage = _storage(tmp_path)
    first = storage.save_build("A", 1, [])
    second = storage.save_build("B", 1, [])
    assert first.id == "build_1000"
    assert second.id == "build_1000_1"


def test_update_keeps_created_at(tmp_path):
    _storage(tmp_path, now=1000).save_build("A", 1, [10])
    storage = _storage(tmp_path, now=2000)
    updated = storage.update_build("build_1000", "A2", 2, [11])
    assert updated.name == "A2"
    assert updated.created_at == 1000
    assert updated.updated_at == 2000
    assert storage.get_build("build_1000").item_ids == [11]
    assert storage.update_build("missing", "x", 1, []) is None


def test_delete(tmp_path):
    storage = _storage(tmp_path)
    storage.save_build("A", 1, [])
    assert storage.delete_build("build_1000")
    assert not storage.delete_build("build_1000")
    assert storage.all_builds() == []


def test_unreadable_file_reads_as_empty(tmp_path):
    (tmp_path / "builds.json").write_text("{broken")
    assert _storage(tmp_path).all_builds() == []


def test_malformed_entries_skipped(tmp_path):
    (tmp_path / "builds.json").write_text(json.dumps([
        {"id": "ok", "name": "Fine", "hero_id": 1, "item_ids": [1, 2]},
        {"id": "bad", "name": "No hero", "item_ids": []},
        {"id": "bad2", "name": "Bad items", "hero_id": 1, "item_ids": ["x"]},
    ]))
    assert [b.id for b in _storage(tmp_path).all_builds()] == ["ok"]


def test_bad_timestamps_skipped(tmp_path):
    (tmp_path / "builds.json").write_text(json.dumps([
        {"id": "a", "name": "Fine", "hero_id": 1, "item_ids": [], "created_at": 5, "updated_at": 6},
        {"id": "b", "name": "Text", "hero_id": 1, "item_ids": [], "created_at": "yesterday"},
        {"id": "c", "name": "List", "hero_id": 1, "item_ids": [], "updated_at": [1]},
    ]))
    storage = _storage(tmp_path)
    assert [b.id for b in storage.all_builds()] == ["a"]
    assert storage.get_build("a").created_at == 5


def test_export_import_with_collision(tmp_path):
    storage = _storage(tmp_path)
    saved = storage.save_build("A", 1, [10])
    text = BuildStorage.export_build_json(saved)
    imported = storage.import_build_json(text)
    assert imported.id == "build_1000_1"
    assert imported.item_ids == [10]
    assert len(storage.all_builds()) == 2


def test_import_rejects_invalid(tmp_path):
    storage = _storage(tmp_path)
    assert storage.import_build_json("not json") is None
    assert storage.import_build_json(json.dumps({"id": "x", "name": "", "hero_id": 1, "item_ids": []})) is None
    assert storage.all_builds() == []


def test_saved_build_from_json_dict_rejects_bool_ids():
    assert SavedBuild.from_json_dict({"id": "a", "name": "n", "hero_id": True, "item_ids": []}) is None


def test_share_code_roundtrip():
    code = encode_share_code(7, [10, 11, 12])
    assert "+" not in code and "/" not in code
    assert decode_share_code(code) == (7, [10, 11, 12])


def test_share_code_accepts_standard_alphabet_without_padding():
    raw = base64.b64encode(b'{"h":7,"i":[1]}').decode().rstrip("=")
    assert decode_share_code(raw) == (7, [1])


def test_share_code_garbage_is_none():
    assert decode_share_code("") is None
    assert decode_share_code("not a code!") is None
    assert decode_share_code("héllo") is None
    assert decode_share_code(base64.b64encode(b"[1,2]").decode()) is None
    assert decode_share_code(base64.b64encode(b'{"h":"7","i":[]}').decode()) is None
