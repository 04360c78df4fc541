"""Integration tests for the fpdf2 render surface."""

from pathlib import Path

import pytest

from apibake.adapters.pdf_adapter import PdfSurface, _sanitize
from apibake.application.use_cases.generate_demo import GenerateDemoUseCase
from apibake.config.loader import parse_config
from apibake.domain.errors import HeaderNestingError, OutputWriteError
from apibake.domain.models.fields import DataField, FieldType
from apibake.engine.document import ApiDocument


@pytest.fixture
def output(tmp_path: Path) -> Path:
    return tmp_path / "api.pdf"


@pytest.fixture
def pdf_doc(output, config):
    return ApiDocument(PdfSurface(output, config.format), config)


class TestOutput:
    def test_minimal_document(self, pdf_doc, output):
        pdf_doc.add_title_page("Pet Store API", "Reference", "2026-10-19")
        pdf_doc.new_section("Pets")
        pdf_doc.header(0, "Endpoints")
        pdf_doc.api_header("GET", "/pets", 1)
        pdf_doc.finish()
        assert output.exists()
        assert output.read_bytes().startswith(b"%PDF")

    def test_suffix_added(self, tmp_path, config):
        surface = PdfSurface(tmp_path / "api", config.format)
        assert surface.output_path.name == "api.pdf"
        doc = ApiDocument(surface, config)
        doc.new_section("Only")
        doc.finish()
        assert (tmp_path / "api.pdf").exists()

    def test_missing_directory(self, tmp_path, config):
        with pytest.raises(OutputWriteError):
            PdfSurface(tmp_path / "missing" / "api.pdf", config.format)

    def test_seal_twice(self, pdf_doc):
        pdf_doc.new_section("Only")
        pdf_doc.finish()
        with pytest.raises(OutputWriteError):
            pdf_doc._surface.seal()

    @pytest.mark.parametrize("margin", [0, 10])
    def test_small_vertical_margin_stamps_in_place(self, output, margin):
        config = parse_config({"format": {"verticalMargin": margin}})
        surface = PdfSurface(output, config.format)
        doc = ApiDocument(surface, config)
        doc.add_title_page("T")
        doc.new_section("S")
        for i in range(80):
            doc.para(f"Paragraph {i}")
        doc.finish()

        assert doc.pages.total >= 3
        assert surface.page_count == doc.pages.total
        assert surface.drain_page_events() == []
        assert output.read_bytes().startswith(b"%PDF")


class TestAbandon:
    def test_close_discards_unfinished_output(self, pdf_doc, output):
        pdf_doc.new_section("Pets")
        pdf_doc.close()
        assert not output.exists()
        assert pdf_doc._surface._stream is None

    def test_aborted_build_releases_stream(self, pdf_doc, output):
        with pytest.raises(HeaderNestingError):
            with pdf_doc:
                pdf_doc.new_section("Pets")
                pdf_doc.header(2, "Too deep")
        assert pdf_doc._surface._stream is None
        assert not output.exists()

    def test_close_after_seal_keeps_file(self, pdf_doc, output):
        pdf_doc.new_section("Pets")
        pdf_doc.finish()
        pdf_doc._surface.close()
        assert output.read_bytes().startswith(b"%PDF")

    def test_aborted_demo_leaves_no_file(self, output, config, monkeypatch):
        def too_deep(self, doc):
            doc.new_section("Pets")
            doc.header(2, "Too deep")

        monkeypatch.setattr(GenerateDemoUseCase, "_pets_section", too_deep)
        use_case = GenerateDemoUseCase(
            lambda path: ApiDocument(PdfSurface(path, config.format), config)
        )
        with pytest.raises(HeaderNestingError):
            use_case.execute(output)
        assert not output.exists()


class TestPages:
    def test_explicit_pages_are_not_queued(self, output, config):
        surface = PdfSurface(output, config.format)
        assert surface.add_page().index == 0
        assert surface.add_page().index == 1
        assert surface.drain_page_events() == []
        assert surface.page_count == 2

    def test_auto_breaks_recorded_for_section(self, pdf_doc):
        pdf_doc.add_title_page("Long")
        pdf_doc.new_section("Pets")
        for i in range(120):
            pdf_doc.para(f"Paragraph {i}")
        pdf_doc.finish()
        titles = [r.section_title for r in pdf_doc.pages.records]
        assert len(titles) > 3
        assert titles[0] == ""
        assert set(titles[1:]) == {"Pets"}

    def test_switch_to_unknown_page(self, output, config):
        surface = PdfSurface(output, config.format)
        surface.add_page()
        with pytest.raises(IndexError):
            surface.switch_to_page(3)

    def test_vertical_margins_round_trip(self, output, config):
        surface = PdfSurface(output, config.format)
        surface.add_page()
        before = surface.margins
        surface.set_vertical_margins(0, 0)
        assert (surface.margins.top, surface.margins.bottom) == (0, 0)
        surface.set_vertical_margins(before.top, before.bottom)
        assert surface.margins == before


class TestDrawing:
    def test_measure_multiline(self, pdf_doc):
        pdf_doc.new_section("Pets")
        surface = pdf_doc._surface
        one_w, one_h = surface.measure("abc")
        two_w, two_h = surface.measure("abc\na")
        assert two_w == pytest.approx(one_w)
        assert two_h == pytest.approx(2 * one_h)

    def test_continued_run_keeps_line(self, pdf_doc):
        pdf_doc.new_section("Pets")
        surface = pdf_doc._surface
        y = surface.y
        pdf_doc.flow.text("Content: ", continued=True)
        assert surface.y == pytest.approx(y)
        assert surface.x > pdf_doc.config.format.horizontal_margin
        pdf_doc.flow.text("end")
        assert surface.y > y
        assert surface.x == pytest.approx(pdf_doc.config.format.horizontal_margin)

    def test_links_and_schema_blocks(self, pdf_doc, output):
        pdf_doc.new_section("Schemas")
        pdf_doc.header(0, "Pet", anchor="schema-Pet")
        pdf_doc.data_fields(
            [
                DataField(
                    name="owner",
                    type=FieldType(text="Pet", anchor="schema-Pet"),
                    description="A rather long description " * 8,
                ),
            ]
        )
        pdf_doc.enum_values([f"value{i}" for i in range(40)])
        pdf_doc.example("body", '{\n  "id": 1\n}')
        pdf_doc.finish()
        assert output.stat().st_size > 0


class TestSanitize:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("a–b", "a-b"),
            ("“quoted”", '"quoted"'),
            ("wait…", "wait..."),
            ("café", "café"),
            ("中", "?"),
            ("", ""),
        ],
    )
    def test_replacements(self, raw, expected):
        assert _sanitize(raw) == expected
