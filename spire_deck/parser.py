"""
Deck parser: turns deck lines into a ``DeckReport``.

Flow:
    lines ──► cap at MAX_LINES ──► strip line endings ──► validate
          ──► fold into _Tally ──► DeckReport (with random deck ID)

The fold threads an immutable ``_Tally`` through ``functools.reduce``;
there are no accumulator fields on the parser, so ``parse`` can be called
repeatedly and tested without any file I/O.
"""

from __future__ import annotations

import io
import logging
import random
from functools import reduce
from itertools import islice
from pathlib import Path
from typing import Iterable, NamedTuple

from pydantic import ValidationError

from .exceptions import DeckReadError
from .models import MAX_COST, DeckReport
from .validators import card_cost, strip_line_ending

logger = logging.getLogger(__name__)

MAX_LINES = 1000
DECK_ID_SPACE = 1_000_000_000
DECK_ID_WIDTH = 9

_RANDOM = random.Random()


class _Tally(NamedTuple):
    """Accumulator for the fold. ``counts[c]`` is the number of valid cards costing ``c``."""

    total_cost: int = 0
    counts: tuple[int, ...] = (0,) * (MAX_COST + 1)
    invalid_cards: tuple[str, ...] = ()


def _step(tally: _Tally, line: str) -> _Tally:
    cost = card_cost(line)
    if cost is None:
        return tally._replace(invalid_cards=tally.invalid_cards + (line,))
    counts = tally.counts[:cost] + (tally.counts[cost] + 1,) + tally.counts[cost + 1:]
    return tally._replace(total_cost=tally.total_cost + cost, counts=counts)


def generate_deck_id(rng: random.Random | None = None) -> str:
    """Random, zero-padded 9-digit deck ID. Cosmetic only; uniqueness is not guaranteed."""
    rng = rng or _RANDOM
    return f"{rng.randrange(DECK_ID_SPACE):0{DECK_ID_WIDTH}d}"


def split_deck_text(text: str) -> list[str]:
    """Split in-memory deck text exactly as a deck file opened in text mode is split.

    Universal newlines only (``\\n``, ``\\r``, ``\\r\\n``). ``str.splitlines`` would
    also break on form feeds, ``\\x1c`` and ``\\u2028``.
    """
    return io.StringIO(text, newline=None).readlines()


class DeckParser:
    """Validates deck lines and tallies energy costs.

    Usage:
        parser = DeckParser()
        report = parser.parse_file("ironclad.txt")
        print(report.total_cost, report.cost_histogram)
    """

    def __init__(self, max_lines: int = MAX_LINES, rng: random.Random | None = None):
        self.max_lines = max_lines
        self.rng = rng

    def parse(self, lines: Iterable[str]) -> DeckReport:
        """Tally at most ``max_lines`` lines. Lines past the cap are never read."""
        capped = (strip_line_ending(line) for line in islice(lines, self.max_lines))
        tally = reduce(_step, capped, _Tally())

        histogram = {cost: count for cost, count in enumerate(tally.counts) if count}
        report = DeckReport(
            deck_id=generate_deck_id(self.rng),
            total_cost=tally.total_cost,
            cost_histogram=histogram,
            invalid_cards=tally.invalid_cards,
            card_count=sum(histogram.values()),
        )
        logger.info(
            "Parsed deck %s: %d valid card(s), %d invalid line(s), total cost %d",
            report.deck_id,
            report.card_count,
            report.invalid_count,
            report.total_cost,
        )
        return report

    def parse_file(self, path: str | Path) -> DeckReport:
        """Read and parse a deck file.

        Raises:
            DeckReadError: if the file is missing, not a file, unreadable or
                not valid UTF-8, or the path itself is malformed (e.g. an
                embedded NUL byte). No partial report is produced.
        """
        resolved = Path(path)
        logger.info("Reading deck file %s", resolved)
        try:
            with resolved.open(encoding="utf-8") as f:
                return self.parse(f)
        except ValidationError:
            raise
        except (OSError, ValueError) as e:
            reason = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
            raise DeckReadError(
                f"{resolved}: {reason}",
                details={"path": str(resolved), "error": type(e).__name__},
            ) from e
