"""Selection state over a built archive tree."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from arcpick.core.builder import ArchiveTree
from arcpick.core.errors import UnknownPath
from arcpick.core.projector import summarize
from arcpick.models.tree import SelectionSummary
from arcpick.utils import is_under, normalize_path

log = logging.getLogger(__name__)


class SelectionEngine:
    """Tracks which archive paths are selected.

    Toggling a directory cascades to its whole subtree; deselecting a
    directory removes every selected path beneath it. Files never
    cascade upward, and a directory's membership is never derived from
    its children.

    One engine belongs to one browsing session. It is not thread-safe.
    """

    def __init__(self, tree: ArchiveTree, selected: Iterable[str] = ()) -> None:
        self._tree = tree
        self._selected: set[str] = set()
        for raw in selected:
            path = normalize_path(raw)
            if path in tree:
                self._selected.add(path)
            else:
                log.warning("Dropping selected path not present in archive: %s", raw)

    @property
    def tree(self) -> ArchiveTree:
        return self._tree

    @property
    def selected(self) -> frozenset[str]:
        """Snapshot of the current selection."""
        return frozenset(self._selected)

    def __len__(self) -> int:
        return len(self._selected)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.is_selected(path)

    def is_selected(self, path: str) -> bool:
        return normalize_path(path) in self._selected

    # -- Mutators --

    def toggle(self, path: str) -> frozenset[str]:
        """Select ``path`` if unselected, otherwise deselect it.

        Raises ``UnknownPath`` without touching the selection when the
        path is not in the tree.
        """
        key = normalize_path(path)
        node = self._tree.get(key)
        if node is None:
            raise UnknownPath(path)

        if key in self._selected:
            if node.is_dir:
                removed = {p for p in self._selected if is_under(p, key)}
                self._selected -= removed
                log.debug("Deselected directory %s (%d paths)", key, len(removed))
            else:
                self._selected.discard(key)
                log.debug("Deselected file %s", key)
        else:
            self._selected.add(key)
            if node.is_dir:
                added = [child.path for child in node.iter_descendants()]
                self._selected.update(added)
                log.debug("Selected directory %s (%d descendants)", key, len(added))
            else:
                log.debug("Selected file %s", key)

        return self.selected

    def clear(self) -> frozenset[str]:
        """Deselect everything."""
        self._selected.clear()
        return self.selected

    # -- Queries --

    def summary(self) -> SelectionSummary:
        """Files and bytes covered by the current selection."""
        return summarize(self._tree, self._selected)
