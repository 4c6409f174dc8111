"""
Pydantic models for deck data.

``DeckReport`` is the seam between parsing and rendering: the parser builds
it once, nothing mutates it afterwards, and any renderer can consume it.
Its invariants are checked at construction so a bad tally fails loudly at
the boundary instead of producing a misleading report.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

MIN_COST = 0
MAX_COST = 6


# ─── Card Record ────────────────────────────────────────────────────


class CardRecord(BaseModel):
    """A line that split cleanly into ``<name>:<cost>``.

    Splitting does not make the card valid; the name may still be blank or
    the cost unparseable. See ``validators.is_valid_card``.
    """

    model_config = ConfigDict(frozen=True)

    raw: str  # Original line, untrimmed
    name: str  # Trimmed name portion
    cost_text: str  # Trimmed cost portion


# ─── Deck Report ────────────────────────────────────────────────────


class DeckReport(BaseModel):
    """Aggregated result of parsing one deck file."""

    model_config = ConfigDict(frozen=True)

    deck_id: str = Field(pattern=r"^\d{9}$")
    total_cost: int = Field(ge=0)
    cost_histogram: Mapping[int, int] = Field(default_factory=dict, validate_default=True)
    invalid_cards: tuple[str, ...] = ()
    card_count: int = Field(default=0, ge=0)

    @field_validator("cost_histogram", mode="after")
    @classmethod
    def _freeze_histogram(cls, value: Mapping[int, int]) -> Mapping[int, int]:
        # frozen=True does not reach into the dict
        return MappingProxyType(dict(value))

    @field_serializer("cost_histogram")
    def _dump_histogram(self, value: Mapping[int, int]) -> dict[int, int]:
        return dict(value)

    @model_validator(mode="after")
    def _check_tally(self) -> DeckReport:
        for cost, count in self.cost_histogram.items():
            if not MIN_COST <= cost <= MAX_COST:
                raise ValueError(f"histogram cost {cost} outside [{MIN_COST}, {MAX_COST}]")
            if count < 1:
                raise ValueError(f"histogram count for cost {cost} must be positive, got {count}")

        expected_total = sum(cost * count for cost, count in self.cost_histogram.items())
        if self.total_cost != expected_total:
            raise ValueError(
                f"total_cost {self.total_cost} does not match histogram sum {expected_total}"
            )

        expected_count = sum(self.cost_histogram.values())
        if self.card_count != expected_count:
            raise ValueError(
                f"card_count {self.card_count} does not match histogram count {expected_count}"
            )
        return self

    @property
    def invalid_count(self) -> int:
        return len(self.invalid_cards)


# ─── Renderable Report ──────────────────────────────────────────────


class RenderableReport(BaseModel):
    """What a renderer receives: the void verdict, the file name and the text lines.

    ``cost_histogram`` and ``invalid_cards`` are ``None`` for a void deck:
    the detail is suppressed, not merely empty.
    """

    model_config = ConfigDict(frozen=True)

    deck_id: str
    is_void: bool
    file_name: str
    total_cost: int
    cost_histogram: Optional[dict[int, int]] = None
    invalid_cards: Optional[tuple[str, ...]] = None
    lines: tuple[str, ...] = ()
