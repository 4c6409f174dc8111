"""
Tests for the void decision, report layout, renderers and the full pipeline.
"""

from __future__ import annotations

import pytest

from spire_deck.exceptions import DeckReadError, ReportRenderError
from spire_deck.models import DeckReport
from spire_deck.parser import DeckParser
from spire_deck.pipeline import DeckTallyPipeline
from spire_deck.render import (
    PdfReportRenderer,
    ReportRenderer,
    TextReportRenderer,
    get_renderer,
)
from spire_deck.report import ReportBuilder, is_void, report_file_name


def _report(invalid: int = 0, **overrides) -> DeckReport:
    kwargs = {
        "deck_id": "000123456",
        "total_cost": 9,
        "cost_histogram": {1: 5, 2: 2},
        "invalid_cards": tuple(f"bad line {i}" for i in range(invalid)),
        "card_count": 7,
    }
    kwargs.update(overrides)
    return DeckReport(**kwargs)


# ═══════════════════════════════════════════════════════════════════════
# VOID THRESHOLD
# ═══════════════════════════════════════════════════════════════════════


class TestVoidThreshold:
    def test_ten_invalid_is_not_void(self):
        assert not is_void(_report(invalid=10))

    def test_eleven_invalid_is_void(self):
        assert is_void(_report(invalid=11))

    def test_no_invalid_is_not_void(self):
        assert not is_void(_report())

    def test_parsed_deck_boundary(self):
        parser = DeckParser()
        assert not is_void(parser.parse(["Strike:1"] + ["junk"] * 10))
        assert is_void(parser.parse(["Strike:1"] + ["junk"] * 11))


class TestFileName:
    def test_normal_name(self):
        assert report_file_name("000123456", False) == "SpireDeck 000123456.pdf"

    def test_void_name(self):
        assert report_file_name("000123456", True) == "SpireDeck 000123456(VOID).pdf"

    def test_extension(self):
        assert report_file_name("000000001", False, "txt") == "SpireDeck 000000001.txt"


# ═══════════════════════════════════════════════════════════════════════
# REPORT BUILDER
# ═══════════════════════════════════════════════════════════════════════


class TestReportBuilder:
    def test_clean_deck_lines(self):
        renderable = ReportBuilder().build(_report())
        assert not renderable.is_void
        assert renderable.file_name == "SpireDeck 000123456.pdf"
        assert renderable.lines == (
            "Deck ID: 000123456",
            "Total Energy Cost: 9 energy",
            "Cost Histogram:",
            "1 energy: 5 card(s)",
            "2 energy: 2 card(s)",
        )
        assert renderable.cost_histogram == {1: 5, 2: 2}
        assert renderable.invalid_cards == ()

    def test_invalid_cards_listed_after_histogram(self):
        renderable = ReportBuilder().build(_report(invalid=2))
        assert renderable.lines[-3:] == ("Invalid Cards:", "bad line 0", "bad line 1")
        assert renderable.invalid_cards == ("bad line 0", "bad line 1")

    def test_histogram_sorted_by_cost(self):
        report = _report(total_cost=9, cost_histogram={3: 1, 0: 4, 2: 3}, card_count=8)
        lines = ReportBuilder().build(report).lines
        assert lines[3:6] == ("0 energy: 4 card(s)", "2 energy: 3 card(s)", "3 energy: 1 card(s)")

    def test_void_suppresses_detail(self):
        renderable = ReportBuilder().build(_report(invalid=11))
        assert renderable.is_void
        assert renderable.file_name == "SpireDeck 000123456(VOID).pdf"
        assert renderable.lines == ("Deck ID: 000123456", "Total Energy Cost: 9 energy", "VOID")
        assert renderable.cost_histogram is None
        assert renderable.invalid_cards is None

    def test_ten_invalid_lists_all_ten(self):
        renderable = ReportBuilder().build(_report(invalid=10))
        assert not renderable.is_void
        assert len(renderable.invalid_cards) == 10
        assert "VOID" not in renderable.lines

    def test_empty_deck(self):
        report = DeckReport(deck_id="000000000", total_cost=0)
        renderable = ReportBuilder().build(report)
        assert renderable.lines == ("Deck ID: 000000000", "Total Energy Cost: 0 energy", "Cost Histogram:")


# ═══════════════════════════════════════════════════════════════════════
# RENDERERS
# ═══════════════════════════════════════════════════════════════════════


class TestRenderers:
    def test_text_renderer(self, tmp_path):
        renderable = ReportBuilder().build(_report(invalid=1))
        path = TextReportRenderer().render(renderable, tmp_path)
        assert path.name == "SpireDeck 000123456.txt"
        assert path.read_text(encoding="utf-8").splitlines() == list(renderable.lines)

    def test_text_renderer_void_name(self, tmp_path):
        renderable = ReportBuilder().build(_report(invalid=11))
        path = TextReportRenderer().render(renderable, tmp_path)
        assert path.name == "SpireDeck 000123456(VOID).txt"

    def test_pdf_renderer(self, tmp_path):
        renderable = ReportBuilder().build(_report(invalid=1))
        path = PdfReportRenderer().render(renderable, tmp_path)
        assert path.name == "SpireDeck 000123456.pdf"
        assert path.read_bytes().startswith(b"%PDF")

    def test_pdf_keeps_markup_like_lines(self, tmp_path):
        report = _report(invalid_cards=("<b>Strike</b>:9", "A & B"))
        path = PdfReportRenderer().render(ReportBuilder().build(report), tmp_path)
        assert path.stat().st_size > 0

    def test_creates_output_dir(self, tmp_path):
        target = tmp_path / "nested" / "reports"
        path = TextReportRenderer().render(ReportBuilder().build(_report()), target)
        assert path.parent == target
        assert path.exists()

    @pytest.mark.parametrize("renderer", [TextReportRenderer(), PdfReportRenderer()])
    def test_unwritable_output_raises_render_error(self, tmp_path, renderer):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("", encoding="utf-8")
        with pytest.raises(ReportRenderError) as exc_info:
            renderer.render(ReportBuilder().build(_report()), blocker)
        assert exc_info.value.code == "RENDER_FAILED"

    def test_get_renderer(self):
        assert isinstance(get_renderer("pdf"), PdfReportRenderer)
        assert isinstance(get_renderer("TXT"), TextReportRenderer)

    def test_get_renderer_unknown(self):
        with pytest.raises(ValueError, match="Unknown report format"):
            get_renderer("docx")


# ═══════════════════════════════════════════════════════════════════════
# FULL PIPELINE
# ═══════════════════════════════════════════════════════════════════════


class _BrokenRenderer(ReportRenderer):
    extension = "txt"

    def _write(self, report, path):
        raise PermissionError(13, "Permission denied")


class TestPipeline:
    def test_five_strikes_end_to_end(self, tmp_path):
        deck = tmp_path / "deck.txt"
        deck.write_text("Strike:1\n" * 5, encoding="utf-8")
        pipeline = DeckTallyPipeline(renderer=TextReportRenderer(), output_dir=tmp_path / "out")

        outcome = pipeline.run(deck)

        assert outcome.report.total_cost == 5
        assert outcome.report.cost_histogram == {1: 5}
        assert outcome.report.invalid_cards == ()
        assert not outcome.renderable.is_void
        assert outcome.render_error is None
        assert outcome.output_path.exists()
        assert outcome.output_path.name == f"SpireDeck {outcome.report.deck_id}.txt"

    def test_default_renderer_is_pdf(self, tmp_path):
        deck = tmp_path / "deck.txt"
        deck.write_text("Bash:2\n", encoding="utf-8")
        outcome = DeckTallyPipeline(output_dir=tmp_path).run(deck)
        assert outcome.output_path.suffix == ".pdf"

    def test_void_deck_end_to_end(self, tmp_path):
        deck = tmp_path / "deck.txt"
        deck.write_text("Strike:1\n" + "junk\n" * 11, encoding="utf-8")
        outcome = DeckTallyPipeline(renderer=TextReportRenderer(), output_dir=tmp_path).run(deck)
        assert outcome.renderable.is_void
        assert outcome.output_path.name.endswith("(VOID).txt")

    def test_read_error_propagates(self, tmp_path):
        pipeline = DeckTallyPipeline(renderer=TextReportRenderer(), output_dir=tmp_path)
        with pytest.raises(DeckReadError):
            pipeline.run(tmp_path / "missing.txt")
        assert list(tmp_path.iterdir()) == []

    def test_render_error_is_contained(self, tmp_path):
        deck = tmp_path / "deck.txt"
        deck.write_text("Strike:1\nDefend:1\n", encoding="utf-8")
        outcome = DeckTallyPipeline(renderer=_BrokenRenderer(), output_dir=tmp_path).run(deck)

        assert outcome.report.total_cost == 2
        assert outcome.output_path is None
        assert isinstance(outcome.render_error, ReportRenderError)
        assert isinstance(outcome.render_error.__cause__, PermissionError)

    def test_no_render(self, tmp_path):
        deck = tmp_path / "deck.txt"
        deck.write_text("Strike:1\n", encoding="utf-8")
        out = tmp_path / "out"
        outcome = DeckTallyPipeline(output_dir=out).run(deck, render=False)
        assert outcome.output_path is None
        assert not out.exists()

    def test_run_lines_writes_nothing(self, tmp_path):
        outcome = DeckTallyPipeline(output_dir=tmp_path / "out").run_lines(["Strike:1", "Bash:2"])
        assert outcome.report.total_cost == 3
        assert outcome.output_path is None
        assert not (tmp_path / "out").exists()
