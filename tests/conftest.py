"""Shared test fixtures."""

import json
import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from addbook.common.config_loader import DEFAULT_SETTINGS, merge_settings
from addbook.common.log_config import LOGGER_NAME
from addbook.models import BookRecord

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir():
    """Return path to fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def goodreads_html():
    """Load the Goodreads book page fixture."""
    return (FIXTURES_DIR / "goodreads_book.html").read_text(encoding="utf-8")


@pytest.fixture
def amazon_html():
    """Load the Amazon product page fixture."""
    return (FIXTURES_DIR / "amazon_book.html").read_text(encoding="utf-8")


@pytest.fixture
def taaghche_html():
    """Load the Taaghche book page fixture."""
    return (FIXTURES_DIR / "taaghche_book.html").read_text(encoding="utf-8")


@pytest.fixture
def fidibo_html():
    """Load the Fidibo book page fixture."""
    return (FIXTURES_DIR / "fidibo_book.html").read_text(encoding="utf-8")


@pytest.fixture
def json_response():
    """Build a mock requests.Response carrying a JSON body."""
    def _make(payload, status_code: int = 200):
        response = MagicMock()
        response.status_code = status_code
        response.json.return_value = payload
        response.text = json.dumps(payload)
        return response
    return _make


@pytest.fixture
def minimal_book():
    """Create a record with only the required title."""
    return BookRecord(title="The Test Book")


@pytest.fixture
def full_book():
    """Create a fully populated record."""
    return BookRecord(
        title="Sapiens: A Brief History of Humankind",
        author="Yuval Noah Harari",
        translator="",
        pages="464",
        cover="https://images.example.com/sapiens.jpg",
        publisher="Harper",
        date_published="2015-02-10",
        language="English",
        isbn="9780062316097",
        url="https://www.goodreads.com/book/show/23692271-sapiens",
        description="From a renowned historian comes a groundbreaking narrative of humanity.",
        summary="Explores how biology and history have defined us.",
    )


@pytest.fixture
def settings(tmp_path):
    """Default settings pointing at an empty temporary vault."""
    return merge_settings(DEFAULT_SETTINGS, {"notes": {"vault": str(tmp_path)}})


@pytest.fixture(autouse=True)
def reset_addbook_logger():
    """Drop handlers installed by setup_logging() during a test."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
