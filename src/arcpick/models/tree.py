"""Archive tree node types."""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass


class NodeKind(enum.Enum):
    """Kind of an archive tree node."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True, slots=True)
class TreeNode:
    """One file or directory inside a built archive tree.

    Nodes are immutable once the builder returns. Children are ordered
    directories first, then by name.
    """

    name: str
    path: str
    kind: NodeKind
    size: int | None = None
    children: tuple[TreeNode, ...] = ()
    inferred: bool = False

    @property
    def is_dir(self) -> bool:
        return self.kind is NodeKind.DIRECTORY

    def child(self, name: str) -> TreeNode | None:
        """Return the direct child called ``name``, if any."""
        for node in self.children:
            if node.name == name:
                return node
        return None

    def iter_descendants(self) -> Iterator[TreeNode]:
        """Yield every node below this one, depth-first in child order."""
        for node in self.children:
            yield node
            if node.children:
                yield from node.iter_descendants()


@dataclass(frozen=True, slots=True)
class SelectionSummary:
    """What a selection currently covers."""

    selected_count: int = 0
    file_count: int = 0
    total_bytes: int = 0
