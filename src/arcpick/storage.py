"""JSON file storage for saved archive selections."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from arcpick.utils import xdg_data_home

log = logging.getLogger(__name__)

_DATA_DIR = xdg_data_home() / "arcpick"

SELECTIONS_FILE = _DATA_DIR / "selections.json"


def _ensure_data_dir() -> None:
    """Create the data directory if it doesn't exist."""
    _DATA_DIR.mkdir(parents=True, exist_ok=True)


def archive_key(archive: Path) -> str:
    """Key under which an archive's selection is stored."""
    return str(archive.expanduser().resolve())


def _load_all() -> dict[str, Any]:
    """Load the selections file, returning empty structure if missing."""
    if not SELECTIONS_FILE.exists():
        return {"archives": {}}
    try:
        with open(SELECTIONS_FILE, encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError):
        log.exception("Failed to load selections file: %s", SELECTIONS_FILE)
        return {"archives": {}}
    if not isinstance(data, dict) or not isinstance(data.get("archives"), dict):
        log.warning("Ignoring malformed selections file: %s", SELECTIONS_FILE)
        return {"archives": {}}
    return data


def _save_all(data: dict[str, Any]) -> None:
    """Write the selections data to disk."""
    _ensure_data_dir()
    try:
        with open(SELECTIONS_FILE, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
    except OSError:
        log.exception("Failed to save selections file: %s", SELECTIONS_FILE)


def load_selection(archive: Path) -> list[str]:
    """Return the stored selection for ``archive``, or an empty list."""
    entry = _load_all()["archives"].get(archive_key(archive))
    if not entry:
        return []
    return [p for p in entry.get("paths", []) if isinstance(p, str)]


def save_selection(archive: Path, paths: set[str] | frozenset[str] | list[str]) -> None:
    """Store the selection for ``archive``; an empty selection removes the entry."""
    data = _load_all()
    key = archive_key(archive)
    if not paths:
        data["archives"].pop(key, None)
    else:
        data["archives"][key] = {
            "paths": sorted(paths),
            "saved_at": datetime.now(timezone.utc).isoformat(),
        }
    _save_all(data)
    log.info("Saved %d selected paths for %s", len(paths), key)


def forget_selection(archive: Path) -> bool:
    """Drop the stored selection for ``archive``. Returns True if one existed."""
    data = _load_all()
    existed = data["archives"].pop(archive_key(archive), None) is not None
    if existed:
        _save_all(data)
    return existed
