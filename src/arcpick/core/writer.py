"""Writes projected files out of an archive onto disk."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from arcpick.core.errors import ArchiveReadError
from arcpick.models.extract_result import ExtractedFileDescriptor, ExtractResult
from arcpick.models.reader import ArchiveReader

log = logging.getLogger(__name__)


def write_extracted(
    descriptors: Iterable[ExtractedFileDescriptor],
    reader: ArchiveReader,
    archive: Path,
    output_dir: Path,
) -> ExtractResult:
    """Copy each described member of ``archive`` below ``output_dir``.

    Failures are recorded per file in the result instead of aborting the
    whole extraction. Destinations resolving outside ``output_dir`` are
    refused, as is a second file landing on an already written target.
    """
    result = ExtractResult(archive=str(archive))
    base = output_dir.resolve()
    written: dict[Path, str] = {}

    try:
        with reader.member_reader(archive) as read:
            for descriptor in descriptors:
                target = (base / descriptor.destination_path).resolve()
                if not target.is_relative_to(base) or target == base:
                    result.errors.append(f"{descriptor.destination_path}: destination escapes output directory")
                    continue
                if target in written:
                    result.errors.append(
                        f"{descriptor.destination_path}: destination collides with {written[target]}"
                    )
                    continue
                try:
                    payload = read(descriptor.source_path)
                    target.parent.mkdir(parents=True, exist_ok=True)
                    target.write_bytes(payload)
                except (ArchiveReadError, OSError) as e:
                    result.errors.append(f"{descriptor.source_path}: {e}")
                    continue
                written[target] = descriptor.source_path
                result.files_written += 1
                result.bytes_written += len(payload)
    except ArchiveReadError as e:
        result.errors.append(str(e))

    log.info(
        "Extracted %d files (%d bytes) from %s, %d error(s)",
        result.files_written,
        result.bytes_written,
        archive,
        len(result.errors),
    )
    return result
