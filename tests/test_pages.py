"""Tests for the page registry."""

import pytest

from apibake.domain.errors import DocumentStateError
from apibake.domain.ports.render_surface import PageCreated
from apibake.engine.pages import PageRegistry


@pytest.fixture
def registry():
    reg = PageRegistry()
    reg.record(PageCreated(0), "")
    reg.record(PageCreated(1), "Pets")
    reg.record(PageCreated(2), "Pets")
    reg.record(PageCreated(3), "Store")
    return reg


class TestRecord:
    def test_records_in_order(self, registry):
        assert registry.total == 4
        assert [r.section_title for r in registry.records] == ["", "Pets", "Pets", "Store"]
        assert registry.title_for(3) == "Store"

    def test_out_of_order_event_rejected(self, registry):
        with pytest.raises(DocumentStateError):
            registry.record(PageCreated(7), "Store")
        assert registry.total == 4


class TestStamps:
    def test_title_page_is_skipped(self, registry):
        assert [s.index for s in registry.stamps()] == [1, 2, 3]

    def test_footer_labels(self, registry):
        assert [s.footer for s in registry.stamps()] == [
            "Page 1 / 3",
            "Page 2 / 3",
            "Page 3 / 3",
        ]

    def test_headings_follow_records(self, registry):
        assert [s.heading for s in registry.stamps()] == ["Pets", "Pets", "Store"]

    def test_single_page_document_has_no_stamps(self):
        reg = PageRegistry()
        reg.record(PageCreated(0), "")
        assert list(reg.stamps()) == []
