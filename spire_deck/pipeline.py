"""
Main tally pipeline: orchestrates read, parse, build and render.

Flow:
  ┌───────────┐
  │ Deck file │
  └─────┬─────┘
        │           DeckReadError ──► propagates (fatal, no report)
  ┌─────▼─────┐
  │DeckParser │   ← cap, validate, fold
  └─────┬─────┘
        │
  ┌─────▼───────┐
  │ReportBuilder│ ← void check, naming, lines
  └─────┬───────┘
        │
  ┌─────▼─────┐
  │ Renderer  │   ← ReportRenderError is caught and kept on the outcome
  └───────────┘

A render failure never discards the tally: the caller still gets the
``DeckReport`` and can show it to the operator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from .exceptions import ReportRenderError
from .models import DeckReport, RenderableReport
from .parser import DeckParser
from .render import PdfReportRenderer, ReportRenderer
from .report import ReportBuilder

logger = logging.getLogger(__name__)


@dataclass
class TallyOutcome:
    """Result of one pipeline run."""

    report: DeckReport
    renderable: RenderableReport
    output_path: Optional[Path] = None
    render_error: Optional[ReportRenderError] = None


class DeckTallyPipeline:
    """Orchestrates the full deck tally workflow.

    Usage:
        pipeline = DeckTallyPipeline(output_dir="reports")
        outcome = pipeline.run("ironclad.txt")
        if outcome.render_error:
            print(outcome.render_error)
    """

    def __init__(
        self,
        parser: DeckParser | None = None,
        builder: ReportBuilder | None = None,
        renderer: ReportRenderer | None = None,
        output_dir: str | Path = ".",
    ):
        self.parser = parser or DeckParser()
        self.builder = builder or ReportBuilder()
        self.renderer = renderer or PdfReportRenderer()
        self.output_dir = Path(output_dir)

    def run(self, path: str | Path, render: bool = True) -> TallyOutcome:
        """Parse a deck file, build its report and (optionally) render it.

        Raises:
            DeckReadError: the deck file could not be read.
        """
        report = self.parser.parse_file(path)
        outcome = self._build(report)
        if render:
            self._render(outcome)
        return outcome

    def run_lines(self, lines: Iterable[str]) -> TallyOutcome:
        """Parse in-memory lines and build the report. Nothing is written."""
        return self._build(self.parser.parse(lines))

    def _build(self, report: DeckReport) -> TallyOutcome:
        return TallyOutcome(report=report, renderable=self.builder.build(report))

    def _render(self, outcome: TallyOutcome) -> None:
        try:
            outcome.output_path = self.renderer.render(outcome.renderable, self.output_dir)
        except ReportRenderError as e:
            logger.error("Error generating report for deck %s: %s", outcome.report.deck_id, e)
            outcome.render_error = e
