"""Pytest configuration: ensures the project root is importable."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent))


@pytest.fixture(autouse=True)
def _isolated_output(tmp_path, monkeypatch):
    """Keep rendered reports and env config out of the working tree."""
    monkeypatch.setenv("SPIRE_DECK_OUTPUT_DIR", str(tmp_path / "reports"))
    monkeypatch.delenv("SPIRE_DECK_FORMAT", raising=False)
    monkeypatch.delenv("SPIRE_DECK_LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)
    yield
