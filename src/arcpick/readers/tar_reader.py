"""Reader for tar archives, plain or compressed."""

from __future__ import annotations

import logging
import tarfile
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path

from arcpick.core.errors import ArchiveReadError
from arcpick.models.entry import ArchiveEntryRecord
from arcpick.models.reader import ArchiveReader
from arcpick.utils import member_name

log = logging.getLogger(__name__)


class TarReader(ArchiveReader):
    """Lists and reads regular files and directories in tar archives.

    Links, devices and FIFOs are skipped.
    """

    @property
    def id(self) -> str:
        return "tar"

    @property
    def name(self) -> str:
        return "Tar Archive"

    @property
    def description(self) -> str:
        return "Tar archives, uncompressed or gzip/bzip2/xz compressed"

    @property
    def extensions(self) -> tuple[str, ...]:
        return (".tar", ".tar.gz", ".tgz", ".tar.bz2", ".tbz2", ".tar.xz", ".txz")

    @property
    def sort_order(self) -> int:
        return 20

    def list_entries(self, path: Path) -> list[ArchiveEntryRecord]:
        records: list[ArchiveEntryRecord] = []
        try:
            with tarfile.open(path, "r:*") as tf:
                for member in tf.getmembers():
                    name = member_name(member.name)
                    if not name or name == ".":
                        continue
                    if member.isdir():
                        records.append(ArchiveEntryRecord.from_name(name, is_directory=True))
                    elif member.isfile():
                        records.append(ArchiveEntryRecord.from_name(name, size=member.size))
                    else:
                        log.debug("Skipping non-regular tar member: %s", member.name)
        except (tarfile.TarError, OSError) as e:
            raise ArchiveReadError(str(path), str(e)) from e

        log.debug("Listed %d members in %s", len(records), path)
        return records

    def read_bytes(self, path: Path, source_path: str) -> bytes:
        with self.member_reader(path) as read:
            return read(source_path)

    @contextmanager
    def member_reader(self, path: Path) -> Iterator[Callable[[str], bytes]]:
        """Open the archive once and index its regular files by name."""
        try:
            tf = tarfile.open(path, "r:*")
        except (tarfile.TarError, OSError) as e:
            raise ArchiveReadError(str(path), str(e)) from e

        with tf:
            try:
                members = {member_name(m.name): m for m in tf.getmembers() if m.isfile()}
            except (tarfile.TarError, OSError) as e:
                raise ArchiveReadError(str(path), str(e)) from e

            def read(source_path: str) -> bytes:
                member = members.get(source_path)
                if member is None:
                    raise ArchiveReadError(str(path), f"no member named {source_path!r}")
                try:
                    handle = tf.extractfile(member)
                    if handle is None:
                        raise ArchiveReadError(str(path), f"no member named {source_path!r}")
                    with handle:
                        return handle.read()
                except (tarfile.TarError, OSError) as e:
                    raise ArchiveReadError(str(path), str(e)) from e

            yield read
