"""
Spire Deck Cost Tally: energy-cost validation and reporting for card decks.

Architecture: Line parsing → Per-card validation → Histogram fold → Void check → Render
Philosophy:  Malformed cards are data, not errors. Only I/O failures raise.
"""

__version__ = "1.0.0"
