"""
Book Importer

End-to-end pipeline: book page URL -> BookRecord -> summary -> rendered
note -> file in the vault.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import requests

from .common.http_client import create_session
from .extraction import get_extractor_for_site, identify_source
from .models import BookRecord
from .notes import NoteVault, load_template, render_note
from .summary import GoogleBooksClient, OpenLibraryClient, SummaryResolver

logger = logging.getLogger(__name__)


class AddBookError(Exception):
    """Base error for the import pipeline."""


class UnsupportedSiteError(AddBookError, ValueError):
    """The URL does not belong to a supported site."""

    def __init__(self, url: str):
        super().__init__("This site is not supported.")
        self.url = url


class FetchError(AddBookError):
    """The book page could not be fetched."""


class ExtractionError(AddBookError):
    """The page was fetched but held no recognizable book data."""

    def __init__(self, url: str):
        super().__init__("Failed to fetch data.")
        self.url = url


class BookImporter:
    """
    Import one book page into the vault.

    Usage:
        importer = BookImporter(load_settings())
        path = importer.add_book("https://www.goodreads.com/book/show/1")
    """

    def __init__(self, settings: Dict[str, Any], session: Optional[requests.Session] = None):
        self.settings = settings
        http = settings.get("http", {})
        self.user_agent = http.get("user_agent")
        self.timeout = http.get("timeout", 30)
        self.session = session or create_session(self.user_agent)

    # ── Extraction ─────────────────────────────────────────────────────────

    def fetch_record(self, url: str) -> BookRecord:
        """
        Fetch and extract the book record for url, with summary attached.

        Raises:
            UnsupportedSiteError: No extractor for the URL
            FetchError: Transport error or non-2xx status
            ExtractionError: No book data on the page
        """
        url = (url or "").strip()
        site = identify_source(url)
        if site is None:
            raise UnsupportedSiteError(url)

        logger.info("Fetching %s page: %s", site, url)
        extractor = get_extractor_for_site(site)(
            url, session=self.session, user_agent=self.user_agent, timeout=self.timeout,
        )
        try:
            extractor.fetch()
        except requests.exceptions.RequestException as e:
            raise FetchError(f"Error fetching data: {e}") from e

        record = extractor.extract()
        if record is None:
            raise ExtractionError(url)

        record.summary = self.resolve_summary(record)
        return record

    def resolve_summary(self, record: BookRecord) -> str:
        """Look up a summary; "" when disabled or nothing is found."""
        config = self.settings.get("summary", {})
        if not config.get("enabled", True):
            return ""

        resolver = SummaryResolver(
            GoogleBooksClient(
                base_url=config.get("google_books_url"),
                session=self.session,
                user_agent=self.user_agent,
                timeout=self.timeout,
                api_key=config.get("google_books_api_key") or None,
            ),
            OpenLibraryClient(
                base_url=config.get("open_library_url"),
                session=self.session,
                user_agent=self.user_agent,
                timeout=self.timeout,
            ),
            min_length=config.get("min_length", 20),
            max_length=config.get("max_length", 500),
            max_results=config.get("max_results", 3),
        )
        return resolver.resolve(record.title, record.author, record.isbn)

    # ── Note writing ───────────────────────────────────────────────────────

    def vault(self) -> NoteVault:
        root = self.settings.get("notes", {}).get("vault") or "."
        return NoteVault(root)

    def template(self, vault: NoteVault) -> str:
        """Configured template (vault-relative unless absolute) or the default."""
        template_path = self.settings.get("notes", {}).get("template_path")
        if not template_path:
            return load_template(None)
        path = Path(template_path).expanduser()
        if not path.is_absolute():
            path = vault.root / path
        return load_template(path)

    def save_folder(self) -> str:
        return self.settings.get("notes", {}).get("save_folder", "")

    def render(self, record: BookRecord) -> str:
        return render_note(self.template(self.vault()), record)

    def save(self, record: BookRecord) -> Path:
        """Render record and write it as a new note."""
        vault = self.vault()
        content = render_note(self.template(vault), record)
        return vault.write_note(record, content, self.save_folder())

    def add_book(self, url: str) -> Path:
        """
        Import url as a new note.

        Returns:
            Path of the created note

        Raises:
            AddBookError subclasses from fetch_record
            FileNotFoundError: Vault or save folder missing
        """
        # Destination is checked before any network traffic
        self.vault().resolve_folder(self.save_folder())

        record = self.fetch_record(url)
        return self.save(record)
