#!/usr/bin/env python3
"""
Spire Deck Cost Tally: Entry Point
==================================

Tallies the energy costs of a deck file and writes a report.

Usage:
    python main.py                              # Prompt for the deck file
    python main.py ironclad.txt                 # PDF report in the current directory
    python main.py ironclad.txt --format txt    # Plain-text report
    python main.py ironclad.txt --no-render     # Summary only, no file written

Deck file format: one card per line, ``<name>:<cost>``, cost 0-6.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from spire_deck.config import load_settings
from spire_deck.exceptions import DeckReadError
from spire_deck.pipeline import DeckTallyPipeline, TallyOutcome
from spire_deck.render import RENDERERS, get_renderer

# ─── ANSI Color Constants ───────────────────────────────────────────

_RED = "\033[91m"
_YELLOW = "\033[93m"
_GREEN = "\033[92m"
_CYAN = "\033[96m"
_DIM = "\033[2m"
_BOLD = "\033[1m"
_RESET = "\033[0m"
_WIDTH = 60


# ─── Pretty Printer ─────────────────────────────────────────────────


def print_summary(outcome: TallyOutcome) -> None:
    """Pretty-print the tally with ANSI color codes."""
    report = outcome.report
    renderable = outcome.renderable

    print(f"\n{'=' * _WIDTH}")
    print(f"{_BOLD}{_CYAN}  SPIRE DECK COST TALLY{_RESET}")
    print(f"{'=' * _WIDTH}")
    print(f"  Deck ID:     {report.deck_id}")
    print(f"  Cards:       {report.card_count}")
    print(f"  Total Cost:  {report.total_cost} energy")
    print(f"{'─' * _WIDTH}")

    if renderable.is_void:
        print(
            f"  {_RED}{_BOLD}VOID{_RESET}  --  "
            f"{report.invalid_count} invalid card(s), details suppressed"
        )
    else:
        for cost, count in sorted(report.cost_histogram.items()):
            print(f"  {cost} energy: {count} card(s)")
        if report.invalid_cards:
            print(f"\n  {_YELLOW}{_BOLD}INVALID CARDS ({report.invalid_count}){_RESET}")
            for line in report.invalid_cards:
                print(f"    {_DIM}{line!r}{_RESET}")

    print(f"{'=' * _WIDTH}")
    if outcome.output_path is not None:
        print(f"  {_GREEN}Report written:{_RESET} {outcome.output_path}")
    print()


# ─── Main ────────────────────────────────────────────────────────────


@click.command()
@click.argument("deck_file", required=False, type=click.Path(path_type=Path))
@click.option(
    "--format",
    "report_format",
    type=click.Choice(sorted(RENDERERS), case_sensitive=False),
    default=None,
    help="Report format (default: $SPIRE_DECK_FORMAT or pdf).",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for the report (default: $SPIRE_DECK_OUTPUT_DIR or .).",
)
@click.option("--no-render", is_flag=True, help="Print the summary without writing a report.")
def main(
    deck_file: Path | None,
    report_format: str | None,
    output_dir: Path | None,
    no_render: bool,
) -> None:
    """Tally card energy costs in DECK_FILE and write a report."""
    try:
        settings = load_settings()
        renderer = get_renderer(report_format or settings.report_format)
    except ValueError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(2)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if deck_file is None:
        # Relative paths resolve against the working directory
        deck_file = Path(click.prompt("Enter the deck file name"))

    pipeline = DeckTallyPipeline(
        renderer=renderer,
        output_dir=output_dir or settings.output_dir,
    )

    try:
        outcome = pipeline.run(deck_file, render=not no_render)
    except DeckReadError as e:
        click.echo(f"Error reading the file: {e}", err=True)
        sys.exit(1)

    print_summary(outcome)

    if outcome.render_error is not None:
        click.echo(f"Error generating report: {outcome.render_error}", err=True)


if __name__ == "__main__":
    main()
