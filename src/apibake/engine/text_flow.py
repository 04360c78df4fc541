"""Styled text flow: plain runs, continued runs and the composite blocks
of an API reference (data fields, enum lists, method banners)."""

from __future__ import annotations

from collections.abc import Sequence
from contextlib import nullcontext
from typing import Optional

from apibake.config.models import ApiBakeConfig
from apibake.domain.models.fields import DataField
from apibake.domain.models.style import FontFace, StylePatch
from apibake.domain.ports.render_surface import ALIGNMENTS, RenderSurface, TextOptions
from apibake.engine.style_stack import StyleStack
from apibake.rules.constants import (
    API_HEADER_SIZE_BONUS,
    BANNER_LINE_WIDTH,
    BANNER_TEXT_COLOR,
    DESCRIPTION_GAP,
    ENUM_LABEL,
    EXAMPLE_SIZE_DELTA,
    HEADER_GAP,
    PARA_GAP,
)


class TextFlow:
    """Issues text drawing calls under the style stack's active style."""

    def __init__(self, surface: RenderSurface, styles: StyleStack, config: ApiBakeConfig) -> None:
        self._surface = surface
        self._styles = styles
        self._color = config.color
        self._base_size = config.font.base_size
        self._indent_step = config.format.indent_step

    # ------------------------------------------------------------------
    # Primitive runs
    # ------------------------------------------------------------------

    def text(
        self,
        text: str,
        patch: Optional[StylePatch] = None,
        *,
        continued: bool = False,
        x: Optional[float] = None,
        y: Optional[float] = None,
        destination: Optional[str] = None,
        go_to: Optional[str] = None,
        underline: bool = False,
        align: Optional[str] = None,
        line_gap: Optional[float] = None,
        indent: float = 0.0,
    ) -> TextFlow:
        """Draw *text*, optionally under a one-off style *patch*.

        ``continued`` keeps the cursor at the end of the run so the next
        call continues the same line. ``x``/``y`` place the run at an
        absolute position instead of the flowing cursor.
        """
        if align is not None and align not in ALIGNMENTS:
            raise ValueError(f"Unknown alignment {align!r}, expected one of {ALIGNMENTS}")

        scope = self._styles.scoped(patch) if patch is not None else nullcontext()
        with scope:
            style = self._styles.current
            options = TextOptions(
                continued=continued,
                x=x,
                y=y,
                destination=destination,
                go_to=go_to,
                underline=underline,
                align=None if continued else align,
                line_gap=style.line_gap if line_gap is None else line_gap,
                indent=indent,
            )
            self._surface.draw_text(text, options)
        return self

    def line_break(self, n: float = 1) -> TextFlow:
        self._surface.y = self._surface.y + n * self._surface.line_height()
        return self

    def move_up(self, n: float = 1) -> TextFlow:
        self._surface.y = self._surface.y - n * self._surface.line_height()
        return self

    # ------------------------------------------------------------------
    # Paragraph-level helpers
    # ------------------------------------------------------------------

    def para(self, text: str) -> TextFlow:
        self.text(text)
        return self.line_break(PARA_GAP)

    def description(self, text: str) -> TextFlow:
        self.text(text, StylePatch(fill_color=self._color.secondary))
        return self.line_break(DESCRIPTION_GAP)

    def indent_start(self) -> TextFlow:
        self._styles.push(StylePatch(left_margin=self._indent_step))
        return self

    def indent_end(self) -> TextFlow:
        self._styles.pop()
        return self

    # ------------------------------------------------------------------
    # Schema blocks
    # ------------------------------------------------------------------

    def data_fields(self, fields: Sequence[DataField]) -> None:
        """Render ``name[?]: type;  // description`` rows.

        The comment is overlaid on the row just drawn, starting right
        after the measured name and type, and wraps under a column one
        indent step in.
        """
        highlight = StylePatch(fill_color=self._color.highlight)
        origin_x = self._surface.x

        for field in fields:
            name = field.label
            type_label = field.type_label
            self.text(name, continued=type_label is not None)
            if type_label is not None:
                anchor = field.type.anchor if field.type else None
                self.text(": ", continued=True)
                self.text(type_label, highlight, go_to=anchor, underline=bool(anchor))

            if field.description:
                self.move_up()
                name_and_type = name + (f": {type_label}" if type_label else "")
                width, _ = self._surface.measure(name_and_type)
                self.text(
                    f"  // {field.description}",
                    StylePatch(fill_color=self._color.secondary),
                    x=origin_x + self._indent_step,
                    indent=width - self._indent_step,
                )
            self._surface.x = origin_x

    def object_schema(self, fields: Sequence[DataField]) -> None:
        self.text("{").indent_start()
        self.data_fields(fields)
        self.indent_end().text("}")

    def schema_type(self, type_name: str, content_type: Optional[str] = None) -> None:
        highlight = StylePatch(fill_color=self._color.highlight)
        if content_type:
            self.text("Content: ", continued=True)
            self.text(content_type, highlight, continued=True)
            self.text(" | ", continued=True)
        self.text("Type: ", continued=True)
        self.text(type_name, highlight)
        self.line_break(PARA_GAP)

    def example(self, name: str, body: str) -> None:
        self.text(f'Example "{name}":', StylePatch(font=FontFace.BOLD))
        self.line_break(PARA_GAP)
        self.text(
            body,
            StylePatch(
                font=FontFace.MONOSPACE,
                font_size=self._base_size - EXAMPLE_SIZE_DELTA,
                fill_color=self._color.secondary,
            ),
        )

    def enum_values(self, values: Sequence[str]) -> None:
        """Print ``Values: A, B, C`` with wrapped lines hanging under the list."""
        self.text(ENUM_LABEL)
        if not values:
            return

        self.move_up()
        hanging_x = self._surface.x + self._indent_step
        indent = self._surface.measure(ENUM_LABEL)[0] - self._indent_step

        with self._styles.scoped(StylePatch(fill_color=self._color.highlight)):
            last = len(values) - 1
            for i, value in enumerate(values):
                run = value if i == last else f"{value}, "
                if i == 0:
                    self.text(run, x=hanging_x, indent=indent, continued=i < last)
                else:
                    self.text(run, continued=i < last)

    # ------------------------------------------------------------------
    # HTTP method banner
    # ------------------------------------------------------------------

    def api_header(self, method: str, endpoint: str) -> None:
        """Draw the colored method label followed by the endpoint.

        The label is printed once to settle the line position (and any
        page break), then a rectangle of the measured label size is drawn
        over it and the label is reprinted on top in white.
        """
        font_size = self._base_size + API_HEADER_SIZE_BONUS
        color = self._color.for_method(method)

        with self._styles.scoped(StylePatch(font=FontFace.BOLD, font_size=font_size)):
            width, height = self._surface.measure(method)
            self._surface.ensure_room(height)

            self.text(method, continued=True)
            self.text(" ")
            self.move_up()
            self._surface.draw_rect(
                self._surface.x, self._surface.y, width, height, color, BANNER_LINE_WIDTH
            )
            self.text(method, StylePatch(fill_color=BANNER_TEXT_COLOR), continued=True)
            self.text(f"  {endpoint}", StylePatch(fill_color=self._color.headers))
            self.line_break(HEADER_GAP)
