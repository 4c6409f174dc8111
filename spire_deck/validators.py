"""
Deterministic per-line checks for deck records.

Each function here is pure: it takes a line (or part of one) and returns a
value. Nothing logs, nothing raises. A malformed line is reported as
``None`` / ``False`` and the parser files it under ``invalid_cards``.

Line format:  ``<name>:<cost>`` with whitespace around either field ignored.
"""

from __future__ import annotations

import re

from .models import MAX_COST, MIN_COST, CardRecord

DELIMITER = ":"

# Optional sign followed by ASCII digits only. ``int()`` alone would also
# accept "1_0", full-width digits and surrounding whitespace.
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def strip_line_ending(line: str) -> str:
    """Drop a trailing ``\\n`` / ``\\r\\n`` so file handles can be parsed directly."""
    return line.rstrip("\r\n")


def split_card_line(line: str) -> CardRecord | None:
    """Split a line into name and cost. Returns None unless there are exactly two parts.

    Empty fields count as parts: ``"Strike:"`` splits into two,
    ``"Strike:1:"`` into three.
    """
    parts = line.split(DELIMITER)
    if len(parts) != 2:
        return None
    name, cost_text = parts
    return CardRecord(raw=line, name=name.strip(), cost_text=cost_text.strip())


def parse_cost(cost_text: str) -> int | None:
    """Parse an energy cost. Returns None if not an integer in [MIN_COST, MAX_COST]."""
    text = cost_text.strip()
    if not _INTEGER_RE.fullmatch(text):
        return None
    cost = int(text)
    if cost < MIN_COST or cost > MAX_COST:
        return None
    return cost


def is_valid_card(record: CardRecord) -> bool:
    """A card needs a non-blank name and a cost in range."""
    return bool(record.name.strip()) and parse_cost(record.cost_text) is not None


def card_cost(line: str) -> int | None:
    """Full check for one line: the card's cost if the line is valid, otherwise None."""
    record = split_card_line(line)
    if record is None or not is_valid_card(record):
        return None
    return parse_cost(record.cost_text)
