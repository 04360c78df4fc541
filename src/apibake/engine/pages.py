"""Page registry consumed by the deferred header/footer stamping pass."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from apibake.domain.errors import DocumentStateError
from apibake.domain.ports.render_surface import PageCreated

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageRecord:
    index: int
    section_title: str


@dataclass(frozen=True)
class PageStamp:
    """Running header and footer to draw on an already rendered page."""

    index: int
    heading: str
    footer: str


class PageRegistry:
    """Append-only list of pages and the section active when each was created.

    Content height is only final once the whole document is laid out, so
    stamps are produced after the fact by :meth:`stamps`. Page 0 is the
    title page and gets no stamp.
    """

    def __init__(self) -> None:
        self._records: list[PageRecord] = []

    @property
    def total(self) -> int:
        return len(self._records)

    @property
    def records(self) -> tuple[PageRecord, ...]:
        return tuple(self._records)

    def record(self, event: PageCreated, section_title: str) -> PageRecord:
        if event.index != len(self._records):
            raise DocumentStateError(
                f"Page {event.index} reported out of order, expected {len(self._records)}"
            )
        rec = PageRecord(index=event.index, section_title=section_title)
        self._records.append(rec)
        logger.debug("Page %d created in section %r", rec.index, section_title)
        return rec

    def title_for(self, index: int) -> str:
        return self._records[index].section_title

    def stamps(self) -> Iterator[PageStamp]:
        last = self.total - 1
        for rec in self._records[1:]:
            yield PageStamp(
                index=rec.index,
                heading=rec.section_title,
                footer=f"Page {rec.index} / {last}",
            )
