"""
Report renderers: write a ``RenderableReport`` to disk.

Renderers only format. They never look at the deck contents beyond
``RenderableReport.lines``, so a new output format needs no changes to
parsing or to the void logic.

Every write failure surfaces as ``ReportRenderError``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from reportlab.lib.pagesizes import LETTER
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Preformatted, SimpleDocTemplate
from reportlab.platypus.doctemplate import LayoutError

from .exceptions import ReportRenderError
from .models import RenderableReport

logger = logging.getLogger(__name__)


class ReportRenderer:
    """Base renderer. Subclasses set ``extension`` and implement ``_write``."""

    extension = ""
    write_errors: tuple[type[BaseException], ...] = (OSError,)

    def output_path(self, report: RenderableReport, output_dir: str | Path) -> Path:
        name = Path(report.file_name).with_suffix(f".{self.extension}").name
        return Path(output_dir) / name

    def render(self, report: RenderableReport, output_dir: str | Path = ".") -> Path:
        """Write the report into ``output_dir`` (created if missing) and return its path.

        Raises:
            ReportRenderError: if the directory or file cannot be written.
        """
        path = self.output_path(report, output_dir)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            self._write(report, path)
        except self.write_errors as e:
            raise ReportRenderError(
                f"{path}: {e}",
                details={"path": str(path), "error": type(e).__name__},
            ) from e

        logger.info("Wrote %s report to %s", self.extension, path)
        return path

    def _write(self, report: RenderableReport, path: Path) -> None:
        raise NotImplementedError


class PdfReportRenderer(ReportRenderer):
    """One preformatted paragraph per line, so invalid card text is kept verbatim."""

    extension = "pdf"
    write_errors = (OSError, LayoutError)

    def _write(self, report: RenderableReport, path: Path) -> None:
        style = getSampleStyleSheet()["Normal"]
        doc = SimpleDocTemplate(
            str(path),
            pagesize=LETTER,
            title=Path(report.file_name).stem,
        )
        doc.build([Preformatted(line, style) for line in report.lines])


class TextReportRenderer(ReportRenderer):
    extension = "txt"

    def _write(self, report: RenderableReport, path: Path) -> None:
        path.write_text("\n".join(report.lines) + "\n", encoding="utf-8")


RENDERERS: dict[str, type[ReportRenderer]] = {
    PdfReportRenderer.extension: PdfReportRenderer,
    TextReportRenderer.extension: TextReportRenderer,
}


def get_renderer(name: str) -> ReportRenderer:
    """Look up a renderer by format name (``pdf`` or ``txt``)."""
    try:
        return RENDERERS[name.lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown report format '{name}'. Expected one of: {', '.join(sorted(RENDERERS))}"
        ) from None
