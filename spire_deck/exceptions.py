"""
Custom exception hierarchy for deck tallying.

Only I/O failures are exceptions here. A malformed card line is never an
error; it is captured as data in ``DeckReport.invalid_cards``.
"""

from __future__ import annotations


class SpireDeckError(Exception):
    """Base exception for all deck tally failures."""

    def __init__(self, code: str, message: str, details: dict | None = None):
        self.code = code
        self.details = details or {}
        super().__init__(message)


class DeckReadError(SpireDeckError):
    """The deck file is missing or cannot be read. Fatal: no report is produced."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("READ_FAILED", message, details)


class ReportRenderError(SpireDeckError):
    """The report artifact cannot be written. The parsed deck is still valid."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("RENDER_FAILED", message, details)
