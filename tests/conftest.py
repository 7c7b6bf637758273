"""
Pytest configuration and fixtures for hledger-parse tests.

Provides fixtures for:
- Golden journal files
- Logging state isolation
- Common test utilities
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from hledger_parse import logging_setup

# =============================================================================
# Path Fixtures
# =============================================================================

FIXTURES_DIR = Path(__file__).parent / "fixtures"
GOLDEN_DIR = FIXTURES_DIR / "golden"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the fixtures directory path."""
    return FIXTURES_DIR


@pytest.fixture
def golden_dir() -> Path:
    """Return the golden files directory path."""
    return GOLDEN_DIR


# =============================================================================
# Golden File Fixtures
# =============================================================================


@pytest.fixture
def sample_journal(golden_dir: Path) -> Path:
    """Journal with comments, entries, a price and an elided posting."""
    return golden_dir / "sample.journal"


@pytest.fixture
def crlf_journal(golden_dir: Path) -> Path:
    """Journal using CRLF line endings."""
    return golden_dir / "crlf.journal"


@pytest.fixture
def single_posting_journal(golden_dir: Path) -> Path:
    """Journal with an entry that has only one posting."""
    return golden_dir / "single_posting.journal"


@pytest.fixture
def bad_date_journal(golden_dir: Path) -> Path:
    """Journal with an entry dated Feb 30."""
    return golden_dir / "bad_date.journal"


@pytest.fixture
def sample_text(sample_journal: Path) -> str:
    """Contents of the sample journal."""
    return sample_journal.read_text(encoding="utf-8")


# =============================================================================
# Logging Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_logging(monkeypatch: pytest.MonkeyPatch):
    """Undo any logging configuration a test performs, CLI runs included."""
    logger = logging.getLogger("hledger_parse")
    handlers = list(logger.handlers)
    level, propagate = logger.level, logger.propagate
    monkeypatch.setattr(logging_setup, "_CONFIGURED", logging_setup._CONFIGURED)
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
