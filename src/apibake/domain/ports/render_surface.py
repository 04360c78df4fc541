"""Port: render surface, the low-level page/text/outline primitive.

The composition engine only talks to this contract. The fpdf2 adapter in
``apibake.adapters.pdf_adapter`` implements it; tests use a recording fake.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, NamedTuple, Optional

from apibake.domain.models.style import Style

ALIGNMENTS = ("left", "center", "right", "justify")


class PageCreated(NamedTuple):
    """A page was just created; *index* is zero-based."""

    index: int


class Margins(NamedTuple):
    top: float
    bottom: float
    left: float
    right: float


@dataclass(frozen=True)
class OutlineHandle:
    """Opaque reference to a bookmark created by the surface."""

    level: int
    ref: Any = None


@dataclass(frozen=True)
class TextOptions:
    """Per-call text placement options.

    ``x``/``y`` switch to absolute placement; a missing coordinate falls
    back to the flowing cursor. ``indent`` shifts the first line only and
    is meaningful together with ``x``.
    """

    continued: bool = False
    x: Optional[float] = None
    y: Optional[float] = None
    destination: Optional[str] = None
    go_to: Optional[str] = None
    underline: bool = False
    align: Optional[str] = None
    line_gap: float = 0.0
    indent: float = 0.0

    @property
    def absolute(self) -> bool:
        return self.x is not None or self.y is not None


class RenderSurface(ABC):
    """Contract for the paginated drawing primitive."""

    # -- pages -------------------------------------------------------------

    @abstractmethod
    def add_page(self) -> PageCreated:
        """Start a new page and return its creation event.

        The event is returned only; it is not queued for
        :meth:`drain_page_events`.
        """
        ...

    @abstractmethod
    def drain_page_events(self) -> list[PageCreated]:
        """Return (and forget) events of pages created by automatic page breaks."""
        ...

    @property
    @abstractmethod
    def page_count(self) -> int: ...

    @abstractmethod
    def switch_to_page(self, index: int) -> None:
        """Make an already produced page the drawing target again."""
        ...

    @property
    @abstractmethod
    def page_height(self) -> float: ...

    @property
    @abstractmethod
    def margins(self) -> Margins: ...

    @abstractmethod
    def set_vertical_margins(self, top: float, bottom: float, auto_break: bool = True) -> None:
        """Set the top and bottom margins.

        With *auto_break* off, text drawn below the bottom margin stays on
        the current page instead of opening a new one.
        """
        ...

    @abstractmethod
    def ensure_room(self, height: float) -> None:
        """Break to a new page if *height* does not fit below the cursor."""
        ...

    # -- style & cursor ----------------------------------------------------

    @abstractmethod
    def apply_style(self, style: Style) -> None:
        """Activate font, size, fill color and left margin of *style*.

        The cursor moves to the new left margin, except inside an open
        continued run, where the margin takes effect once the run ends.
        """
        ...

    @property
    @abstractmethod
    def x(self) -> float: ...

    @x.setter
    @abstractmethod
    def x(self, value: float) -> None: ...

    @property
    @abstractmethod
    def y(self) -> float: ...

    @y.setter
    @abstractmethod
    def y(self, value: float) -> None: ...

    @abstractmethod
    def line_height(self, line_gap: float = 0.0) -> float:
        """Height of one line under the active style."""
        ...

    # -- drawing -----------------------------------------------------------

    @abstractmethod
    def draw_text(self, text: str, options: TextOptions) -> None: ...

    @abstractmethod
    def measure(self, text: str) -> tuple[float, float]:
        """Width and height of *text* under the active style."""
        ...

    @abstractmethod
    def draw_rect(
        self, x: float, y: float, w: float, h: float, color: str, line_width: float = 0.0
    ) -> None:
        """Draw a rectangle filled and stroked with *color*."""
        ...

    @abstractmethod
    def add_outline_item(self, title: str, parent: Optional[OutlineHandle]) -> OutlineHandle:
        """Create a bookmark at root level or under *parent*."""
        ...

    @abstractmethod
    def seal(self) -> None:
        """Finalize the output; no further drawing is allowed."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Release the output without finalizing it; no-op once sealed."""
        ...
