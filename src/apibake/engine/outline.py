"""Bookmark (outline) tree kept consistent with the heading structure."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from apibake.domain.errors import HeaderNestingError
from apibake.domain.ports.render_surface import OutlineHandle, RenderSurface

logger = logging.getLogger(__name__)


@dataclass
class OutlineNode:
    index: int
    title: str
    level: int
    parent: Optional[int]
    handle: OutlineHandle
    children: list[int] = field(default_factory=list)


class OutlineTree:
    """Arena of outline nodes plus the current path from the root.

    ``path[level]`` is the arena index of the most recent node at that
    depth. A new node may be added at any level up to ``len(path)``;
    adding it at a shallower level closes the deeper branches.
    """

    def __init__(self, surface: RenderSurface) -> None:
        self._surface = surface
        self._nodes: list[OutlineNode] = []
        self._path: list[int] = []

    @property
    def nodes(self) -> tuple[OutlineNode, ...]:
        return tuple(self._nodes)

    @property
    def path(self) -> tuple[OutlineNode, ...]:
        return tuple(self._nodes[i] for i in self._path)

    @property
    def roots(self) -> list[OutlineNode]:
        return [n for n in self._nodes if n.parent is None]

    def children_of(self, node: OutlineNode) -> list[OutlineNode]:
        return [self._nodes[i] for i in node.children]

    def check_level(self, level: int) -> None:
        """Raise HeaderNestingError if a node cannot be added at *level*."""
        if level < 0 or level > len(self._path):
            raise HeaderNestingError(level, len(self._path) - 1)

    def add(self, level: int, title: str) -> OutlineNode:
        self.check_level(level)

        parent = self._nodes[self._path[level - 1]] if level > 0 else None
        handle = self._surface.add_outline_item(title, parent.handle if parent else None)
        node = OutlineNode(
            index=len(self._nodes),
            title=title,
            level=level,
            parent=parent.index if parent else None,
            handle=handle,
        )
        self._nodes.append(node)
        if parent is not None:
            parent.children.append(node.index)

        del self._path[level:]
        self._path.append(node.index)
        logger.debug("Outline level=%d title=%r depth=%d", level, title, len(self._path))
        return node

    def reset(self) -> None:
        """Start a fresh path; already created bookmarks are kept."""
        self._path.clear()
