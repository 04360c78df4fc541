"""Push/pop stack of inherited text styles."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TypeVar

from apibake.domain.models.style import Style, StylePatch
from apibake.domain.ports.render_surface import RenderSurface

T = TypeVar("T")


class StyleStack:
    """Keeps exactly one style active on the surface.

    The active style is the top of the stack, or *baseline* when the
    stack is empty. Every push/pop re-applies the new active style,
    left margin included.
    """

    def __init__(self, surface: RenderSurface, baseline: Style) -> None:
        self._surface = surface
        self._baseline = baseline
        self._stack: list[Style] = []

    @property
    def baseline(self) -> Style:
        return self._baseline

    @property
    def current(self) -> Style:
        return self._stack[-1] if self._stack else self._baseline

    @property
    def depth(self) -> int:
        return len(self._stack)

    def push(self, patch: StylePatch) -> Style:
        merged = self.current.merged(patch)
        self._activate(merged)
        self._stack.append(merged)
        return merged

    def pop(self) -> Style:
        if self._stack:
            self._stack.pop()
        previous = self.current
        self._activate(previous)
        return previous

    @contextmanager
    def scoped(self, patch: StylePatch) -> Iterator[Style]:
        """Apply *patch* for the duration of the ``with`` block."""
        style = self.push(patch)
        try:
            yield style
        finally:
            self.pop()

    def with_style(self, patch: StylePatch, block: Callable[[Style], T]) -> T:
        with self.scoped(patch) as style:
            return block(style)

    def reset(self) -> None:
        """Drop every pushed style and re-activate the baseline."""
        self._stack.clear()
        self._activate(self._baseline)

    def _activate(self, style: Style) -> None:
        self._surface.apply_style(style)
