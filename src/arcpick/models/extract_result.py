"""Extraction output dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ExtractedFileDescriptor:
    """A selected file projected into the destination namespace."""

    source_path: str
    destination_path: str
    size: int
    content_kind: str = "application/octet-stream"


@dataclass(slots=True)
class ExtractResult:
    """Result of writing extracted files to disk."""

    archive: str
    files_written: int = 0
    bytes_written: int = 0
    errors: list[str] = field(default_factory=list)
