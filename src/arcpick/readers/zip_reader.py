"""Reader for zip archives."""

from __future__ import annotations

import logging
import zipfile
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path

from arcpick.core.errors import ArchiveReadError
from arcpick.models.entry import ArchiveEntryRecord
from arcpick.models.reader import ArchiveReader
from arcpick.utils import member_name

log = logging.getLogger(__name__)


class ZipReader(ArchiveReader):
    """Lists and reads members of zip-format archives."""

    @property
    def id(self) -> str:
        return "zip"

    @property
    def name(self) -> str:
        return "Zip Archive"

    @property
    def description(self) -> str:
        return "Zip files, including Java archives and Python wheels"

    @property
    def extensions(self) -> tuple[str, ...]:
        return (".zip", ".jar", ".whl")

    @property
    def sort_order(self) -> int:
        return 10

    def list_entries(self, path: Path) -> list[ArchiveEntryRecord]:
        try:
            with zipfile.ZipFile(path) as zf:
                infos = zf.infolist()
        except (zipfile.BadZipFile, OSError) as e:
            raise ArchiveReadError(str(path), str(e)) from e

        records: list[ArchiveEntryRecord] = []
        for info in infos:
            name = member_name(info.filename)
            if not name:
                continue
            if info.is_dir():
                records.append(ArchiveEntryRecord.from_name(name, is_directory=True))
            else:
                records.append(ArchiveEntryRecord.from_name(name, size=info.file_size))
        log.debug("Listed %d members in %s", len(records), path)
        return records

    def read_bytes(self, path: Path, source_path: str) -> bytes:
        with self.member_reader(path) as read:
            return read(source_path)

    @contextmanager
    def member_reader(self, path: Path) -> Iterator[Callable[[str], bytes]]:
        try:
            zf = zipfile.ZipFile(path)
        except (zipfile.BadZipFile, OSError) as e:
            raise ArchiveReadError(str(path), str(e)) from e

        with zf:
            members = {member_name(info.filename): info for info in zf.infolist() if not info.is_dir()}

            def read(source_path: str) -> bytes:
                info = members.get(source_path)
                if info is None:
                    raise ArchiveReadError(str(path), f"no member named {source_path!r}")
                try:
                    return zf.read(info)
                except (zipfile.BadZipFile, OSError) as e:
                    raise ArchiveReadError(str(path), str(e)) from e

            yield read
