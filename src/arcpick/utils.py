"""Shared utility functions."""

from __future__ import annotations

import os
from pathlib import Path


def xdg_config_home() -> Path:
    """Return XDG_CONFIG_HOME, defaulting to ~/.config."""
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def xdg_data_home() -> Path:
    """Return XDG_DATA_HOME, defaulting to ~/.local/share."""
    return Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))


def join_path(segments: tuple[str, ...] | list[str]) -> str:
    """Join path segments into the canonical slash-separated form."""
    return "/".join(segments)


def normalize_path(path: str) -> str:
    """Strip leading and trailing separators from a user-supplied path."""
    return path.strip("/")


def is_under(path: str, prefix: str) -> bool:
    """Return True if ``path`` equals ``prefix`` or lies beneath it.

    Matches whole segments only: ``src`` does not cover ``src-backup``.
    """
    return path == prefix or path.startswith(prefix + "/")


def bytes_to_human(size_bytes: int) -> str:
    """Convert byte count to a human-readable string."""
    if size_bytes < 0:
        return f"-{bytes_to_human(-size_bytes)}"
    if size_bytes == 0:
        return "0 B"

    units = ("B", "KB", "MB", "GB", "TB")
    value = float(size_bytes)
    for unit in units[:-1]:
        if abs(value) < 1024:
            return f"{value:.1f} {unit}" if unit != "B" else f"{int(value)} B"
        value /= 1024
    return f"{value:.1f} {units[-1]}"


def member_name(raw: str) -> str:
    """Canonical archive member name: no `./` prefix, no trailing slash."""
    while raw.startswith("./"):
        raw = raw[2:]
    return raw.rstrip("/")
