"""Shared fixtures: a recording RenderSurface with a simple geometry model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pytest

from apibake.config.loader import clear_cache
from apibake.config.models import ApiBakeConfig
from apibake.domain.models.style import Style
from apibake.domain.ports.render_surface import (
    Margins,
    OutlineHandle,
    PageCreated,
    RenderSurface,
    TextOptions,
)

CHAR_WIDTH = 0.5  # glyph width relative to the font size


@dataclass
class DrawnText:
    text: str
    options: TextOptions
    style: Style
    page: int
    x: float
    y: float


@dataclass
class DrawnRect:
    x: float
    y: float
    w: float
    h: float
    color: str
    page: int


class RecordingSurface(RenderSurface):
    """In-memory surface that records every drawing call.

    Text advances the cursor by ``len(text) * CHAR_WIDTH * size`` for
    continued runs and by one line otherwise; running past the bottom
    margin opens a new page, like a real auto page break.
    """

    def __init__(self, height: float = 792.0, top: float = 50.0, bottom: float = 50.0) -> None:
        self._height = height
        self._top = top
        self._bottom = bottom
        self._x = 0.0
        self._y = top
        self._style: Optional[Style] = None
        self._left = 0.0
        self._run_open = False
        self._auto_break = True
        self._pending: list[PageCreated] = []
        self.page_total = 0
        self.current_page = -1
        self.texts: list[DrawnText] = []
        self.rects: list[DrawnRect] = []
        self.outline_items: list[tuple[str, Optional[OutlineHandle], OutlineHandle]] = []
        self.applied: list[Style] = []
        self.margin_changes: list[tuple[float, float, bool]] = []
        self.sealed = False
        self.closed = False

    # -- pages -------------------------------------------------------------

    def _open_page(self) -> PageCreated:
        self.page_total += 1
        self.current_page = self.page_total - 1
        self._y = self._top
        return PageCreated(self.current_page)

    def add_page(self) -> PageCreated:
        self._run_open = False
        event = self._open_page()
        self._x = self._left
        return event

    def break_page(self) -> None:
        """Simulate an automatic page break in the middle of the flow."""
        self._pending.append(self._open_page())

    def drain_page_events(self) -> list[PageCreated]:
        events, self._pending = self._pending, []
        return events

    @property
    def page_count(self) -> int:
        return self.page_total

    def switch_to_page(self, index: int) -> None:
        self.current_page = index

    @property
    def page_height(self) -> float:
        return self._height

    @property
    def margins(self) -> Margins:
        return Margins(self._top, self._bottom, self._left, 70.0)

    def set_vertical_margins(self, top: float, bottom: float, auto_break: bool = True) -> None:
        self.margin_changes.append((top, bottom, auto_break))
        self._auto_break = auto_break
        self._top = top
        self._bottom = bottom

    def ensure_room(self, height: float) -> None:
        if self._y + height > self._height - self._bottom:
            self.break_page()

    # -- style & cursor ----------------------------------------------------

    def apply_style(self, style: Style) -> None:
        self._style = style
        self._left = style.left_margin
        self.applied.append(style)
        if not self._run_open:
            self._x = style.left_margin

    @property
    def style(self) -> Style:
        return self._style

    @property
    def x(self) -> float:
        return self._x

    @x.setter
    def x(self, value: float) -> None:
        self._x = value

    @property
    def y(self) -> float:
        return self._y

    @y.setter
    def y(self, value: float) -> None:
        self._y = value

    def line_height(self, line_gap: float = 0.0) -> float:
        return self._style.font_size * 1.15 + line_gap

    # -- drawing -----------------------------------------------------------

    def draw_text(self, text: str, options: TextOptions) -> None:
        if options.absolute:
            self._x = self._x if options.x is None else options.x + options.indent
            self._y = self._y if options.y is None else options.y
        self.texts.append(
            DrawnText(text, options, self._style, self.current_page, self._x, self._y)
        )
        if options.continued:
            self._run_open = True
            self._x += self.measure(text)[0]
            return
        self._run_open = False
        self._x = self._left
        self._y += self.line_height(options.line_gap)
        if self._auto_break and self._y > self._height - self._bottom:
            self.break_page()

    def measure(self, text: str) -> tuple[float, float]:
        lines = text.split("\n")
        width = max(len(line) for line in lines) * CHAR_WIDTH * self._style.font_size
        return width, self.line_height() * len(lines)

    def draw_rect(self, x, y, w, h, color, line_width=0.0) -> None:
        self.rects.append(DrawnRect(x, y, w, h, color, self.current_page))

    def add_outline_item(self, title, parent):
        handle = OutlineHandle(level=0 if parent is None else parent.level + 1, ref=title)
        self.outline_items.append((title, parent, handle))
        return handle

    def seal(self) -> None:
        assert not self.sealed, "sealed twice"
        assert not self.closed, "sealed after close"
        self.sealed = True

    def close(self) -> None:
        if not self.sealed:
            self.closed = True

    # -- helpers for assertions -------------------------------------------

    def strings(self) -> list[str]:
        return [t.text for t in self.texts]

    def texts_on(self, page: int) -> list[str]:
        return [t.text for t in self.texts if t.page == page]


@pytest.fixture(autouse=True)
def _fresh_config_cache():
    """Ensure a clean config cache for every test."""
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def config() -> ApiBakeConfig:
    return ApiBakeConfig()


@pytest.fixture
def surface_factory():
    """Build recording surfaces with custom page geometry."""
    return RecordingSurface
