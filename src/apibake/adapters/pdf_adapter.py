"""PDF render surface for the API reference engine, built on fpdf2."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Optional

from fpdf import FPDF
from fpdf.drawing import color_from_hex_string
from fpdf.enums import XPos, YPos

from apibake.config.models import FormatConfig
from apibake.domain.errors import OutputWriteError
from apibake.domain.models.style import FontFace, Style
from apibake.domain.ports.render_surface import (
    Margins,
    OutlineHandle,
    PageCreated,
    RenderSurface,
    TextOptions,
)
from apibake.rules.constants import LINE_HEIGHT_FACTOR

logger = logging.getLogger(__name__)

# fpdf2 core fonts per face: (family, emphasis)
_FONTS: dict[FontFace, tuple[str, str]] = {
    FontFace.NORM: ("Helvetica", ""),
    FontFace.BOLD: ("Helvetica", "B"),
    FontFace.ITALIC: ("Helvetica", "I"),
    FontFace.BOLD_ITALIC: ("Helvetica", "BI"),
    FontFace.MONOSPACE: ("Courier", "B"),
}

_ALIGN = {"left": "L", "center": "C", "right": "R", "justify": "J"}


def _rgb(hex_color: str) -> tuple[float, float, float]:
    return tuple(color_from_hex_string(hex_color).colors255)


def _sanitize(text: str) -> str:
    """Replace characters not supported by standard PDF fonts (Latin-1)."""
    if not text:
        return ""
    replacements = {
        "\u2013": "-",  # en-dash
        "\u2014": "--",  # em-dash
        "\u2018": "'",  # left single quote
        "\u2019": "'",  # right single quote
        "\u201c": '"',  # left double quote
        "\u201d": '"',  # right double quote
        "\u2026": "...",  # ellipsis
        "\u00a0": " ",  # no-break space
    }
    for char, repl in replacements.items():
        text = text.replace(char, repl)

    # Fallback: encode to latin-1, replace errors with '?'
    return text.encode("latin-1", "replace").decode("latin-1")


class ApiPDF(FPDF):
    """FPDF subclass that reports every page it opens.

    ``header()`` runs synchronously inside ``add_page()``, both for explicit
    pages and for automatic page breaks, before anything is drawn on the
    new page.
    """

    def __init__(self) -> None:
        super().__init__(orientation="P", unit="pt", format="Letter")
        self.opened_pages: list[int] = []

    def header(self) -> None:
        self.opened_pages.append(self.page - 1)


class PdfSurface(RenderSurface):
    """Render surface writing a PDF file through fpdf2.

    All fpdf2 cursor, margin and font state is kept behind this class. The
    output file is opened on construction and written once by :meth:`seal`.
    """

    def __init__(self, output_path: Path, page_format: Optional[FormatConfig] = None) -> None:
        page_format = page_format or FormatConfig()
        self.output_path = Path(output_path)
        if not self.output_path.suffix:
            self.output_path = self.output_path.with_suffix(".pdf")
        try:
            self._stream: Optional[BinaryIO] = open(self.output_path, "wb")
        except OSError as exc:
            raise OutputWriteError(f"Cannot open {self.output_path}: {exc}") from exc

        self._pdf = ApiPDF()
        self._pdf.set_creator("apibake")
        self._pdf.set_margins(
            page_format.horizontal_margin,
            page_format.vertical_margin,
            page_format.horizontal_margin,
        )
        self._pdf.set_auto_page_break(auto=True, margin=page_format.vertical_margin)

        self._font: tuple[str, str, float] = ("Helvetica", "", 12)
        self._left = page_format.horizontal_margin
        self._run_open = False
        self._links: dict[str, int] = {}
        self._outline_count = 0

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    def add_page(self) -> PageCreated:
        self._run_open = False
        self._pdf.add_page()
        index = self._pdf.opened_pages.pop()
        self._move_to_left()
        return PageCreated(index)

    def drain_page_events(self) -> list[PageCreated]:
        events = [PageCreated(i) for i in self._pdf.opened_pages]
        self._pdf.opened_pages.clear()
        return events

    @property
    def page_count(self) -> int:
        return self._pdf.pages_count

    def switch_to_page(self, index: int) -> None:
        if not 0 <= index < self._pdf.pages_count:
            raise IndexError(f"No page {index} (document has {self._pdf.pages_count})")
        self._pdf.page = index + 1
        # Font selection must be emitted again in the revisited page's stream.
        self._pdf.current_font_is_set_on_page = False

    @property
    def page_height(self) -> float:
        return self._pdf.h

    @property
    def margins(self) -> Margins:
        pdf = self._pdf
        return Margins(top=pdf.t_margin, bottom=pdf.b_margin, left=pdf.l_margin, right=pdf.r_margin)

    def set_vertical_margins(self, top: float, bottom: float, auto_break: bool = True) -> None:
        self._pdf.set_top_margin(top)
        self._pdf.set_auto_page_break(auto_break, bottom)

    def ensure_room(self, height: float) -> None:
        if self._pdf.will_page_break(height):
            x = self._pdf.x
            self._pdf.add_page()
            self._pdf.set_x(x)

    # ------------------------------------------------------------------
    # Style & cursor
    # ------------------------------------------------------------------

    def apply_style(self, style: Style) -> None:
        family, emphasis = _FONTS[style.font]
        self._font = (family, emphasis, style.font_size)
        self._pdf.set_font(family, emphasis, style.font_size)
        self._pdf.set_text_color(*_rgb(style.fill_color))
        self._left = style.left_margin
        if not self._run_open:
            self._move_to_left()

    @property
    def x(self) -> float:
        return self._pdf.x

    @x.setter
    def x(self, value: float) -> None:
        self._pdf.set_x(value)

    @property
    def y(self) -> float:
        return self._pdf.y

    @y.setter
    def y(self, value: float) -> None:
        self._pdf.set_xy(self._pdf.x, value)

    def line_height(self, line_gap: float = 0.0) -> float:
        return self._pdf.font_size * LINE_HEIGHT_FACTOR + line_gap

    def _move_to_left(self) -> None:
        self._pdf.set_left_margin(self._left)
        self._pdf.set_x(self._left)

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def draw_text(self, text: str, options: TextOptions) -> None:
        pdf = self._pdf
        text = _sanitize(text)
        h = self.line_height(options.line_gap)
        link = self._link(options.go_to) if options.go_to else ""

        if options.absolute:
            pdf.set_xy(
                pdf.x if options.x is None else options.x,
                pdf.y if options.y is None else options.y,
            )
            if options.x is not None:
                # Wrapped lines return to x; only the first line is indented.
                pdf.set_left_margin(options.x)
                pdf.set_x(options.x + options.indent)

        if options.destination:
            pdf.set_link(self._link(options.destination), y=pdf.y, page=pdf.page)

        family, emphasis, size = self._font
        if options.underline:
            pdf.set_font(family, emphasis + "U", size)
        try:
            if options.continued:
                self._run_open = True
                pdf.write(h, text, link)
            elif options.align:
                pdf.multi_cell(
                    0,
                    h,
                    text,
                    align=_ALIGN[options.align],
                    link=link,
                    new_x=XPos.LMARGIN,
                    new_y=YPos.NEXT,
                )
            else:
                pdf.write(h, text, link)
                pdf.ln(h)
        finally:
            if options.underline:
                pdf.set_font(family, emphasis, size)

        if not options.continued:
            self._run_open = False
            self._move_to_left()

    def measure(self, text: str) -> tuple[float, float]:
        lines = _sanitize(text).split("\n")
        width = max(self._pdf.get_string_width(line) for line in lines)
        return width, self.line_height() * len(lines)

    def draw_rect(
        self, x: float, y: float, w: float, h: float, color: str, line_width: float = 0.0
    ) -> None:
        rgb = _rgb(color)
        self._pdf.set_fill_color(*rgb)
        self._pdf.set_draw_color(*rgb)
        self._pdf.set_line_width(line_width)
        self._pdf.rect(x, y, w, h, style="DF" if line_width else "F")

    def add_outline_item(self, title: str, parent: Optional[OutlineHandle]) -> OutlineHandle:
        level = 0 if parent is None else parent.level + 1
        self._pdf.start_section(_sanitize(title), level=level)
        self._outline_count += 1
        return OutlineHandle(level=level, ref=self._outline_count - 1)

    def _link(self, name: str) -> int:
        if name not in self._links:
            self._links[name] = self._pdf.add_link()
        return self._links[name]

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def seal(self) -> None:
        if self._stream is None:
            raise OutputWriteError(f"{self.output_path} is already sealed or closed")
        self._pdf.page = self._pdf.pages_count
        stream, self._stream = self._stream, None
        try:
            with stream:
                stream.write(self._pdf.output())
        except OSError as exc:
            raise OutputWriteError(f"Cannot write {self.output_path}: {exc}") from exc
        logger.info("Saved %d page(s) to %s", self._pdf.pages_count, self.output_path)

    def close(self) -> None:
        if self._stream is None:
            return
        stream, self._stream = self._stream, None
        stream.close()
        # Nothing was written yet; do not leave an empty file behind.
        self.output_path.unlink(missing_ok=True)
        logger.info("Discarded unfinished output %s", self.output_path)
