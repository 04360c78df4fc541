"""ApiDocument: the public surface of the composition engine.

Callers issue a strictly sequential stream of calls (title page, sections,
headers, schema blocks, method banners) and finish with :meth:`finish`.
Everything is drawn immediately except running headers and page footers,
which are stamped onto every page once the whole document is laid out.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Mapping, Sequence
from types import TracebackType
from typing import Any, Concatenate, Optional, ParamSpec, TypeVar, Union

from apibake.config.loader import parse_config
from apibake.config.models import ApiBakeConfig
from apibake.domain.errors import DocumentStateError
from apibake.domain.models.fields import DataField
from apibake.domain.models.style import FontFace, Style, StylePatch
from apibake.domain.ports.render_surface import RenderSurface
from apibake.engine.outline import OutlineTree
from apibake.engine.pages import PageRegistry
from apibake.engine.style_stack import StyleStack
from apibake.engine.text_flow import TextFlow
from apibake.rules.constants import (
    DATE_FONT_SIZE,
    HEADER_GAP,
    HEADER_SIZE_BONUS,
    HEADER_SIZE_STEP,
    STAMP_FONT_SIZE,
    SUBTITLE_FONT_SIZE,
    TITLE_FONT_SIZE,
    TITLE_PAGE_TOP_RATIO,
)

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


def _streaming(
    method: Callable[Concatenate[ApiDocument, P], T],
) -> Callable[Concatenate[ApiDocument, P], T]:
    """Reject calls after finish() or close() and record pages the call created."""

    @functools.wraps(method)
    def wrapper(self: ApiDocument, *args: P.args, **kwargs: P.kwargs) -> T:
        if self._finished:
            raise DocumentStateError(f"{method.__name__}() called after finish()")
        if self._closed:
            raise DocumentStateError(f"{method.__name__}() called after close()")
        try:
            return method(self, *args, **kwargs)
        finally:
            self._sync_pages()

    return wrapper


class ApiDocument:
    """Compose an API reference document on a :class:`RenderSurface`."""

    def __init__(
        self,
        surface: RenderSurface,
        config: Union[ApiBakeConfig, Mapping[str, Any], None] = None,
    ) -> None:
        if config is None:
            config = ApiBakeConfig()
        elif not isinstance(config, ApiBakeConfig):
            config = parse_config(config)
        self.config = config

        self._surface = surface
        self._finished = False
        self._closed = False
        self._section_name = ""

        baseline = Style(
            font=FontFace.NORM,
            font_size=config.font.base_size,
            fill_color=config.color.main,
            left_margin=config.format.horizontal_margin,
            line_gap=0.0,
        )
        self.styles = StyleStack(surface, baseline)
        self.outline = OutlineTree(surface)
        self.pages = PageRegistry()
        self.flow = TextFlow(surface, self.styles, config)

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def section_name(self) -> str:
        return self._section_name

    # ------------------------------------------------------------------
    # Pages & sections
    # ------------------------------------------------------------------

    @_streaming
    def add_title_page(
        self, title: str, subtitle: Optional[str] = None, date: Optional[str] = None
    ) -> None:
        """Centered title page; font sizes do not follow the base size."""
        if self.pages.total or self._surface.page_count:
            raise DocumentStateError("The title page must be the first page of the document")

        self.pages.record(self._surface.add_page(), self._section_name)
        self.styles.reset()
        self._surface.y = self._surface.page_height * TITLE_PAGE_TOP_RATIO
        flow = self.flow
        flow.text(title, StylePatch(font=FontFace.BOLD, font_size=TITLE_FONT_SIZE), align="center")
        flow.line_break(1)
        if subtitle:
            flow.text(
                subtitle,
                StylePatch(font=FontFace.NORM, font_size=SUBTITLE_FONT_SIZE),
                align="center",
            )
            flow.line_break(0.5)
        if date:
            flow.text(
                date,
                StylePatch(
                    font=FontFace.NORM,
                    font_size=DATE_FONT_SIZE,
                    fill_color=self.config.color.secondary,
                ),
                align="center",
            )

    @_streaming
    def new_section(self, name: str) -> None:
        """Start a top-level part on a new page with fresh style/outline scope."""
        # Pages created so far belong to the previous section.
        self._sync_pages()
        logger.info("Section: %s", name)
        self._section_name = name
        self.styles.reset()
        self.outline.reset()
        self.pages.record(self._surface.add_page(), name)

    # ------------------------------------------------------------------
    # Headings
    # ------------------------------------------------------------------

    @_streaming
    def header(self, level: int, text: str, anchor: Optional[str] = None) -> None:
        self.outline.check_level(level)
        size = self.config.font.base_size + HEADER_SIZE_BONUS - level * HEADER_SIZE_STEP
        patch = StylePatch(fill_color=self.config.color.headers, font=FontFace.BOLD, font_size=size)
        with self.styles.scoped(patch):
            self.flow.text(text, destination=anchor)
            self.flow.line_break(HEADER_GAP)
        self.outline.add(level, text)

    @_streaming
    def sub_header(self, text: str) -> None:
        patch = StylePatch(
            fill_color=self.config.color.sub_headers,
            font=FontFace.BOLD,
            font_size=self.config.font.base_size,
        )
        with self.styles.scoped(patch):
            self.flow.text(text)
            self.flow.line_break(HEADER_GAP)

    @_streaming
    def api_header(self, method: str, endpoint: str, level: int) -> None:
        self.outline.check_level(level)
        self.flow.api_header(method, endpoint)
        self.outline.add(level, f"{method} {endpoint}")

    # ------------------------------------------------------------------
    # Body text
    # ------------------------------------------------------------------

    @_streaming
    def para(self, text: str) -> ApiDocument:
        self.flow.para(text)
        return self

    @_streaming
    def description(self, text: str) -> None:
        self.flow.description(text)

    @_streaming
    def line_break(self, n: float = 1) -> ApiDocument:
        self.flow.line_break(n)
        return self

    @_streaming
    def indent_start(self) -> ApiDocument:
        self.flow.indent_start()
        return self

    @_streaming
    def indent_end(self) -> ApiDocument:
        self.flow.indent_end()
        return self

    # ------------------------------------------------------------------
    # Schema blocks
    # ------------------------------------------------------------------

    @_streaming
    def data_fields(self, fields: Sequence[DataField]) -> None:
        self.flow.data_fields(fields)

    @_streaming
    def object_schema(self, fields: Sequence[DataField]) -> None:
        self.flow.object_schema(fields)

    @_streaming
    def schema_type(self, type_name: str, content_type: Optional[str] = None) -> None:
        self.flow.schema_type(type_name, content_type)

    @_streaming
    def example(self, name: str, body: str) -> None:
        self.flow.example(name, body)

    @_streaming
    def enum_values(self, values: Sequence[str]) -> None:
        self.flow.enum_values(values)

    # ------------------------------------------------------------------
    # Finishing pass
    # ------------------------------------------------------------------

    def finish(self) -> None:
        """Stamp running headers and page numbers, then seal the output.

        Only one attempt is allowed. If stamping or sealing fails, the
        output is closed unwritten and the document stays finished.
        """
        if self._finished:
            raise DocumentStateError("finish() called twice")
        if self._closed:
            raise DocumentStateError("finish() called after close()")
        self._finished = True

        try:
            self._sync_pages()
            self._stamp_pages()
            self._surface.seal()
        except Exception:
            self._surface.close()
            raise
        logger.info("Document finished: %d page(s)", self.pages.total)

    def _stamp_pages(self) -> None:
        stamp_style = StylePatch(
            font=FontFace.NORM,
            font_size=STAMP_FONT_SIZE,
            fill_color=self.config.color.secondary,
        )
        surface = self._surface
        for stamp in self.pages.stamps():
            surface.switch_to_page(stamp.index)
            margins = surface.margins
            # Stamps sit inside the margins; they must never open a page.
            surface.set_vertical_margins(0, 0, auto_break=False)
            try:
                with self.styles.scoped(stamp_style):
                    if stamp.heading:
                        self.flow.text(stamp.heading, y=margins.top / 2, align="right")
                    self.flow.text(
                        stamp.footer, y=surface.page_height - margins.bottom / 2, align="right"
                    )
            finally:
                surface.set_vertical_margins(margins.top, margins.bottom)

    # ------------------------------------------------------------------
    # Abandoning
    # ------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Abandon an unfinished document and discard its output.

        Does nothing once :meth:`finish` has been called.
        """
        if self._finished or self._closed:
            return
        self._closed = True
        self._surface.close()
        logger.info("Document closed before finish()")

    def __enter__(self) -> ApiDocument:
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()

    def _sync_pages(self) -> None:
        for event in self._surface.drain_page_events():
            self.pages.record(event, self._section_name)
