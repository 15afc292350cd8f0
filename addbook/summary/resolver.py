"""
Summary Resolver

Finds a short book summary in external catalogs. Three lookups run in
order and the first acceptable text wins:

1. Google Books by ISBN
2. Google Books title + author search (with per-volume detail fetch)
3. Open Library search (with work record fetch)

Lookup failures never reach the caller; a total miss yields "".
"""

import logging
from typing import Dict, Optional

from ..common.text_utils import first_name_token, strip_html, strip_subtitle, truncate
from .catalog_clients import GoogleBooksClient, OpenLibraryClient

logger = logging.getLogger(__name__)

# Open Library doc fields that may carry descriptive text, in priority order
OPEN_LIBRARY_TEXT_FIELDS = ("description", "first_sentence", "subtitle")


def flatten_text(value) -> str:
    """
    Reduce an Open Library text value to a plain string.

    Handles "text", {"type": ..., "value": "text"} and lists of either.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        return flatten_text(value.get("value"))
    if isinstance(value, list):
        return " ".join(filter(None, (flatten_text(item) for item in value)))
    return ""


class SummaryResolver:
    """
    Resolve a summary for a book from catalog services.

    Usage:
        resolver = SummaryResolver(GoogleBooksClient(), OpenLibraryClient())
        summary = resolver.resolve("Sapiens: A Brief History", "Yuval Noah Harari")
    """

    def __init__(
        self,
        google_books: GoogleBooksClient,
        open_library: OpenLibraryClient,
        min_length: int = 20,
        max_length: int = 500,
        max_results: int = 3,
    ):
        self.google_books = google_books
        self.open_library = open_library
        self.min_length = min_length
        self.max_length = max_length
        self.max_results = max_results

    def resolve(self, title: str, author: str, isbn: str = "") -> str:
        """
        Return the first acceptable summary, or "" when every lookup misses.

        Args:
            title: Book title (a subtitle after ':' or a spaced dash is dropped)
            author: Comma-separated author names (only the first is used)
            isbn: Optional ISBN; lookups by ISBN run only when len > 5
        """
        isbn = (isbn or "").strip()
        has_isbn = len(isbn) > 5

        stages = []
        if has_isbn:
            stages.append(("google-isbn", lambda: self._google_by_isbn(isbn)))
        stages.append(("google-search", lambda: self._google_search(title, author)))
        stages.append(("open-library", lambda: self._open_library(title, author, isbn if has_isbn else "")))

        for name, stage in stages:
            try:
                summary = stage()
            except Exception as e:  # noqa: BLE001
                logger.debug("Summary stage %s failed: %s", name, e)
                continue
            if summary:
                logger.debug("Summary found via %s (%d chars)", name, len(summary))
                return summary

        logger.debug("No summary found for '%s'", title)
        return ""

    # ── Candidate handling ────────────────────────────────────────────────

    def _accept(self, text) -> str:
        """Cleaned, truncated text when longer than min_length, else ""."""
        cleaned = strip_html(text if isinstance(text, str) else flatten_text(text))
        if len(cleaned) > self.min_length:
            return truncate(cleaned, self.max_length)
        return ""

    # ── Google Books ──────────────────────────────────────────────────────

    def _volume_description(self, item: Dict) -> str:
        return self._accept((item.get("volumeInfo") or {}).get("description"))

    def _google_by_isbn(self, isbn: str) -> str:
        for item in self.google_books.search_by_isbn(isbn):
            summary = self._volume_description(item)
            if summary:
                return summary
        return ""

    def _google_search(self, title: str, author: str) -> str:
        query = self._search_terms(title, author, google=True)
        if not query:
            return ""

        for item in self.google_books.search(query, max_results=self.max_results)[:self.max_results]:
            summary = self._volume_description(item)
            if summary:
                return summary

            volume = self.google_books.get_volume(item.get("id", ""))
            if volume:
                summary = self._volume_description(volume)
                if summary:
                    return summary
        return ""

    # ── Open Library ──────────────────────────────────────────────────────

    def _open_library(self, title: str, author: str, isbn: str) -> str:
        if isbn:
            docs = self.open_library.search(isbn=isbn, limit=self.max_results)
        else:
            query = self._search_terms(title, author)
            if not query:
                return ""
            docs = self.open_library.search(query=query, limit=self.max_results)

        for doc in docs[:self.max_results]:
            summary = self._doc_text(doc)
            if summary:
                return summary

            work = self.open_library.get_work(doc.get("key", ""))
            if work:
                summary = self._doc_text(work)
                if summary:
                    return summary
        return ""

    def _doc_text(self, doc: Dict) -> str:
        for field_name in OPEN_LIBRARY_TEXT_FIELDS:
            summary = self._accept(doc.get(field_name))
            if summary:
                return summary
        return ""

    @staticmethod
    def _search_terms(title: str, author: str, google: bool = False) -> Optional[str]:
        clean_title = strip_subtitle(title)
        first_author = first_name_token(author)
        if not clean_title:
            return None
        if google:
            query = f"intitle:{clean_title}"
            if first_author:
                query += f" inauthor:{first_author}"
            return query
        return f"{clean_title} {first_author}".strip()
