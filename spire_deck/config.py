"""
Runtime configuration from environment variables (and ``.env``, if present).

    SPIRE_DECK_OUTPUT_DIR   where reports are written       (default: .)
    SPIRE_DECK_FORMAT       pdf | txt                       (default: pdf)
    SPIRE_DECK_LOG_LEVEL    logging level for the CLI       (default: WARNING)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    output_dir: Path = Path(".")
    report_format: str = "pdf"
    log_level: str = "WARNING"


def load_settings() -> Settings:
    """Read settings from the environment. ``.env`` values never override real env vars.

    Raises:
        ValueError: if SPIRE_DECK_LOG_LEVEL is not a standard logging level name.
    """
    load_dotenv()
    log_level = os.environ.get("SPIRE_DECK_LOG_LEVEL", "WARNING").strip().upper()
    # getLevelName maps known names to ints and anything else to "Level X"
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(
            f"Unknown log level '{log_level}' in SPIRE_DECK_LOG_LEVEL. "
            "Expected one of: DEBUG, INFO, WARNING, ERROR, CRITICAL"
        )
    return Settings(
        output_dir=Path(os.environ.get("SPIRE_DECK_OUTPUT_DIR", ".")),
        report_format=os.environ.get("SPIRE_DECK_FORMAT", "pdf").lower(),
        log_level=log_level,
    )
