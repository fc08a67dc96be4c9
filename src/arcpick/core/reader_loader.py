"""Archive reader discovery and loading.

Readers come from the ``arcpick.readers`` package first, then from
external directories: the system directory, the user directory and any
``readers.paths`` listed in settings. An external directory holds loose
``.py`` modules or packages; a package contributes its ``plugin.py`` if
present, else its ``__init__.py``.
"""

from __future__ import annotations

import importlib
import importlib.util
import inspect
import logging
import pkgutil
from collections.abc import Iterator
from pathlib import Path
from types import ModuleType

import arcpick.readers
from arcpick.core.registry import ReaderRegistry
from arcpick.models.reader import ArchiveReader
from arcpick.settings import Settings
from arcpick.utils import xdg_data_home

log = logging.getLogger(__name__)

_SYSTEM_READER_DIR = Path("/usr/share/arcpick/readers")
_USER_READER_DIR = xdg_data_home() / "arcpick" / "readers"


def _is_concrete_reader(obj: object) -> bool:
    return inspect.isclass(obj) and issubclass(obj, ArchiveReader) and not inspect.isabstract(obj)


def _reader_classes(module: ModuleType) -> list[type[ArchiveReader]]:
    """Concrete ArchiveReader subclasses reachable from ``module``."""
    return [cls for _, cls in inspect.getmembers(module, _is_concrete_reader)]


def _builtin_modules() -> Iterator[ModuleType]:
    for info in pkgutil.iter_modules(arcpick.readers.__path__, prefix="arcpick.readers."):
        try:
            yield importlib.import_module(info.name)
        except Exception:
            log.exception("Failed to load built-in reader module: %s", info.name)


def _module_file(entry: Path) -> Path | None:
    """Source file an external directory entry contributes, if any."""
    if entry.is_dir():
        if not (entry / "__init__.py").exists():
            return None
        plugin = entry / "plugin.py"
        return plugin if plugin.exists() else entry / "__init__.py"
    if entry.suffix == ".py" and entry.name != "__init__.py":
        return entry
    return None


def _import_file(module_file: Path, module_name: str) -> ModuleType | None:
    spec = importlib.util.spec_from_file_location(module_name, module_file)
    if spec is None or spec.loader is None:
        log.debug("No import spec for %s", module_file)
        return None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _external_modules(directory: Path) -> Iterator[ModuleType]:
    if not directory.is_dir():
        return
    for entry in sorted(directory.iterdir()):
        module_file = _module_file(entry)
        if module_file is None:
            continue
        try:
            module = _import_file(module_file, f"arcpick_ext_reader_{entry.stem}")
        except Exception:
            log.exception("Failed to load reader from: %s", module_file)
            continue
        if module is not None:
            yield module


def _external_dirs(settings: Settings | None) -> list[Path]:
    dirs = [_SYSTEM_READER_DIR, _USER_READER_DIR]
    if settings is not None:
        dirs.extend(Path(raw).expanduser() for raw in settings.get("readers.paths", []) or [])
    return dirs


def load_readers(registry: ReaderRegistry, settings: Settings | None = None) -> None:
    """Discover every available reader and register one instance of each."""
    modules = list(_builtin_modules())
    for directory in _external_dirs(settings):
        modules.extend(_external_modules(directory))

    for module in modules:
        for cls in _reader_classes(module):
            try:
                reader = cls()
            except Exception:
                log.exception("Failed to instantiate reader: %s", cls.__name__)
                continue
            log.debug("Found reader '%s' in %s", reader.id, module.__name__)
            registry.register(reader)

    log.info("Loaded %d readers", len(registry))
