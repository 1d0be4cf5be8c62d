"""Saved builds and share codes.

Builds are stored as hero/item ids only, never as computed stats, so a
saved build is re-evaluated against whatever the current catalog says the
items do. All builds live in one JSON list file.

Share codes are base64 of a compact JSON envelope: {"h": hero_id, "i": [ids]}.
"""

from __future__ import annotations

import base64
import json
import logging
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Callable


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SavedBuild:
    """A named hero + ordered item id list."""

    id: str
    name: str
    hero_id: int
    item_ids: list[int] = field(default_factory=list)
    created_at: int = 0     # epoch milliseconds
    updated_at: int = 0

    def to_json_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_json_dict(cls, data: object) -> SavedBuild | None:
        """Validate and build; None when required fields are missing or wrong."""
        if not isinstance(data, dict):
            return None
        build_id = data.get("id")
        name = data.get("name")
        hero_id = data.get("hero_id")
        item_ids = data.get("item_ids")
        if not isinstance(build_id, str) or not build_id:
            return None
        if not isinstance(name, str) or not name:
            return None
        if isinstance(hero_id, bool) or not isinstance(hero_id, int) or hero_id <= 0:
            return None
        if not isinstance(item_ids, list) or not all(
            isinstance(i, int) and not isinstance(i, bool) for i in item_ids
        ):
            return None
        created_at = data.get("created_at", 0)
        updated_at = data.get("updated_at", 0)
        for stamp in (created_at, updated_at):
            if isinstance(stamp, bool) or not isinstance(stamp, int):
                return None
        return cls(
            id=build_id,
            name=name,
            hero_id=hero_id,
            item_ids=list(item_ids),
            created_at=created_at,
            updated_at=updated_at,
        )


def _now_ms() -> int:
    return int(time.time() * 1000)


class BuildStorage:
    """Named build persistence over a single JSON file."""

    def __init__(self, path: Path, clock: Callable[[], int] = _now_ms) -> None:
        self._path = path
        self._clock = clock

    @property
    def path(self) -> Path:
        return self._path

    def all_builds(self) -> list[SavedBuild]:
        """Every stored build; an unreadable file reads as empty."""
        if not self._path.exists():
            return []
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.error("Error loading builds from %s: %s", self._path, exc)
            return []
        if not isinstance(data, list):
            logger.error("Error loading builds from %s: expected a list", self._path)
            return []
        builds: list[SavedBuild] = []
        for entry in data:
            build = SavedBuild.from_json_dict(entry)
            if build is None:
                logger.warning("Skipping malformed saved build: %r", entry)
                continue
            builds.append(build)
        return builds

    def _write(self, builds: list[SavedBuild]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = [b.to_json_dict() for b in builds]
        self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def _new_id(self, existing: list[SavedBuild]) -> str:
        taken = {b.id for b in existing}
        stamp = self._clock()
        build_id = f"build_{stamp}"
        suffix = 1
        while build_id in taken:
            build_id = f"build_{stamp}_{suffix}"
            suffix += 1
        return build_id

    def save_build(self, name: str, hero_id: int, item_ids: list[int]) -> SavedBuild:
        """Store a new build and return it."""
        builds = self.all_builds()
        timestamp = self._clock()
        build = SavedBuild(
            id=self._new_id(builds),
            name=name,
            hero_id=int(hero_id),
            item_ids=[int(i) for i in item_ids],
            created_at=timestamp,
            updated_at=timestamp,
        )
        builds.append(build)
        self._write(builds)
        return build

    def update_build(
        self,
        build_id: str,
        name: str,
        hero_id: int,
        item_ids: list[int],
    ) -> SavedBuild | None:
        """Replace a stored build's contents; None when the id is unknown."""
        builds = self.all_builds()
        for idx, build in enumerate(builds):
            if build.id != build_id:
                continue
            updated = SavedBuild(
                id=build.id,
                name=name,
                hero_id=int(hero_id),
                item_ids=[int(i) for i in item_ids],
                created_at=build.created_at,
                updated_at=self._clock(),
            )
            builds[idx] = updated
            self._write(builds)
            return updated
        return None

    def delete_build(self, build_id: str) -> bool:
        builds = self.all_builds()
        kept = [b for b in builds if b.id != build_id]
        if len(kept) == len(builds):
            return False
        self._write(kept)
        return True

    def get_build(self, build_id: str) -> SavedBuild | None:
        for build in self.all_builds():
            if build.id == build_id:
                return build
        return None

    @staticmethod
    def export_build_json(build: SavedBuild) -> str:
        return json.dumps(build.to_json_dict(), indent=2)

    def import_build_json(self, text: str) -> SavedBuild | None:
        """Validate and store an exported build; a colliding id gets a new one."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.error("Error importing build: %s", exc)
            return None
        build = SavedBuild.from_json_dict(data)
        if build is None:
            logger.error("Error importing build: invalid build format")
            return None
        builds = self.all_builds()
        if any(b.id == build.id for b in builds):
            build.id = self._new_id(builds)
        builds.append(build)
        self._write(builds)
        return build


def encode_share_code(hero_id: int, item_ids: list[int]) -> str:
    """Encode a build as a URL-safe share code."""
    payload = json.dumps({"h": int(hero_id), "i": [int(i) for i in item_ids]}, separators=(",", ":"))
    return base64.urlsafe_b64encode(payload.encode("utf-8")).decode("ascii")


def decode_share_code(code: str) -> tuple[int, list[int]] | None:
    """Decode a share code to (hero_id, item_ids); None when it isn't one."""
    text = code.strip()
    # Accept both alphabets and missing padding.
    text = text.replace("-", "+").replace("_", "/")
    text += "=" * (-len(text) % 4)
    try:
        raw = base64.b64decode(text, validate=True)
        data = json.loads(raw.decode("utf-8"))
    except ValueError as exc:
        logger.error("Error decoding build share code: %s", exc)
        return None
    if not isinstance(data, dict):
        return None
    hero_id = data.get("h")
    item_ids = data.get("i")
    if isinstance(hero_id, bool) or not isinstance(hero_id, int):
        return None
    if not isinstance(item_ids, list) or not all(
        isinstance(i, int) and not isinstance(i, bool) for i in item_ids
    ):
        return None
    return hero_id, list(item_ids)
