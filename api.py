"""
Spire Deck Cost Tally: FastAPI Server
=====================================

RESTful API for tallying card decks without touching the filesystem.

Endpoints:
    POST /tally             Tally deck text sent as JSON
    POST /tally/file        Upload a deck file for tallying
    GET  /health            Health check / readiness probe

Run:
    uvicorn api:app --reload              # Dev (http://localhost:8000)
    uvicorn api:app --host 0.0.0.0        # Production

Docs:
    http://localhost:8000/docs             # Swagger UI (auto-generated)
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, UploadFile
from pydantic import BaseModel, Field

from spire_deck import __version__
from spire_deck.parser import split_deck_text
from spire_deck.pipeline import DeckTallyPipeline, TallyOutcome
from spire_deck.report import VOID_THRESHOLD

load_dotenv()

MAX_UPLOAD_BYTES = 1_048_576


# ─── Application Lifespan ───────────────────────────────────────────

_pipeline: DeckTallyPipeline | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    global _pipeline  # noqa: PLW0603
    _pipeline = DeckTallyPipeline()
    yield
    _pipeline = None


# ─── FastAPI App ─────────────────────────────────────────────────────

app = FastAPI(
    title="Spire Deck Cost Tally API",
    description=(
        "Validates `<name>:<cost>` deck lines, tallies energy costs into a "
        "histogram, and flags decks with too many invalid cards as VOID."
    ),
    version=__version__,
    lifespan=lifespan,
)


# ─── Request / Response Schemas ─────────────────────────────────────


class TallyRequest(BaseModel):
    """Request body for the /tally endpoint."""

    deck_text: str = Field(
        ...,
        description="Deck file contents, one `<name>:<cost>` card per line.",
        json_schema_extra={"example": "Strike:1\nDefend:1\nBash:2\nBroken Card\n"},
    )


class TallyResponse(BaseModel):
    """Tally result. Histogram and invalid cards are null for a void deck."""

    deck_id: str
    is_void: bool
    file_name: str = Field(description="Name the rendered report would be saved under")
    card_count: int
    total_cost: int
    invalid_count: int
    cost_histogram: Optional[dict[int, int]] = None
    invalid_cards: Optional[list[str]] = None
    lines: list[str]


class HealthResponse(BaseModel):
    status: str
    version: str
    max_lines: int
    void_threshold: int


# ─── Helpers ─────────────────────────────────────────────────────────


def _get_pipeline() -> DeckTallyPipeline:
    if _pipeline is None:
        raise HTTPException(status_code=503, detail="Pipeline not initialised")
    return _pipeline


def _build_response(outcome: TallyOutcome) -> TallyResponse:
    renderable = outcome.renderable
    return TallyResponse(
        deck_id=renderable.deck_id,
        is_void=renderable.is_void,
        file_name=renderable.file_name,
        card_count=outcome.report.card_count,
        total_cost=renderable.total_cost,
        invalid_count=outcome.report.invalid_count,
        cost_histogram=renderable.cost_histogram,
        invalid_cards=list(renderable.invalid_cards) if renderable.invalid_cards is not None else None,
        lines=list(renderable.lines),
    )


# ─── Endpoints ───────────────────────────────────────────────────────


@app.post(
    "/tally",
    summary="Tally a deck from text",
    tags=["Tally"],
    responses={503: {"description": "Pipeline not yet initialised"}},
)
def tally_deck(request: TallyRequest) -> TallyResponse:
    """Validate every card line and return the cost tally.

    - **is_void**: `true` when more than 10 lines are invalid
    - **cost_histogram**: energy cost → number of valid cards
    - **invalid_cards**: offending lines, verbatim and in order
    """
    pipeline = _get_pipeline()
    outcome = pipeline.run_lines(split_deck_text(request.deck_text))
    return _build_response(outcome)


@app.post(
    "/tally/file",
    summary="Tally a deck from an uploaded file",
    tags=["Tally"],
    responses={
        413: {"description": "File too large (max 1 MB)"},
        400: {"description": "File is not valid UTF-8 text"},
        503: {"description": "Pipeline not yet initialised"},
    },
)
async def tally_deck_file(file: UploadFile) -> TallyResponse:
    """Upload a deck `.txt` file (UTF-8, up to 1 MB)."""
    if file.size and file.size > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="File too large (max 1 MB)")

    content = await file.read()
    try:
        deck_text = content.decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="File must be UTF-8 encoded text")

    pipeline = _get_pipeline()
    outcome = await asyncio.to_thread(pipeline.run_lines, split_deck_text(deck_text))
    return _build_response(outcome)


@app.get(
    "/health",
    summary="Health check",
    tags=["System"],
    responses={503: {"description": "Pipeline not yet initialised"}},
)
def health_check() -> HealthResponse:
    pipeline = _get_pipeline()
    return HealthResponse(
        status="healthy",
        version=__version__,
        max_lines=pipeline.parser.max_lines,
        void_threshold=VOID_THRESHOLD,
    )
