"""
Report builder: decides void status and lays out the report lines.

A deck with more than ``VOID_THRESHOLD`` invalid cards is void. Its report
keeps the deck ID and total cost but replaces the histogram and the
invalid-card listing with the literal ``VOID`` marker.
"""

from __future__ import annotations

import logging

from .models import DeckReport, RenderableReport

logger = logging.getLogger(__name__)

VOID_THRESHOLD = 10
VOID_MARKER = "VOID"
REPORT_PREFIX = "SpireDeck"


def is_void(report: DeckReport) -> bool:
    """Strictly more than VOID_THRESHOLD invalid cards. Exactly 10 is still a valid deck."""
    return report.invalid_count > VOID_THRESHOLD


def report_file_name(deck_id: str, void: bool, extension: str = "pdf") -> str:
    """``SpireDeck 000123456.pdf`` or ``SpireDeck 000123456(VOID).pdf``."""
    suffix = f"({VOID_MARKER})" if void else ""
    return f"{REPORT_PREFIX} {deck_id}{suffix}.{extension}"


def histogram_line(cost: int, count: int) -> str:
    return f"{cost} energy: {count} card(s)"


class ReportBuilder:
    """Turns a ``DeckReport`` into a ``RenderableReport``."""

    def build(self, report: DeckReport) -> RenderableReport:
        void = is_void(report)
        lines = [
            f"Deck ID: {report.deck_id}",
            f"Total Energy Cost: {report.total_cost} energy",
        ]

        if void:
            logger.warning(
                "Deck %s is void: %d invalid card(s) exceeds limit of %d",
                report.deck_id,
                report.invalid_count,
                VOID_THRESHOLD,
            )
            lines.append(VOID_MARKER)
            return RenderableReport(
                deck_id=report.deck_id,
                is_void=True,
                file_name=report_file_name(report.deck_id, True),
                total_cost=report.total_cost,
                lines=tuple(lines),
            )

        lines.append("Cost Histogram:")
        for cost in sorted(report.cost_histogram):
            lines.append(histogram_line(cost, report.cost_histogram[cost]))
        if report.invalid_cards:
            lines.append("Invalid Cards:")
            lines.extend(report.invalid_cards)

        return RenderableReport(
            deck_id=report.deck_id,
            is_void=False,
            file_name=report_file_name(report.deck_id, False),
            total_cost=report.total_cost,
            cost_histogram=dict(report.cost_histogram),
            invalid_cards=report.invalid_cards,
            lines=tuple(lines),
        )
