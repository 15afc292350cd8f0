"""
Base Book Extractor

Shared fetch/parse lifecycle for the site extractors. Subclasses only
describe how one site's page maps onto a BookRecord.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

import requests
from bs4 import BeautifulSoup

from ..common.http_client import build_headers
from ..models import BookRecord
from .parsers import PageContext, SelectorRule, StructuredDataParser, first_non_empty

logger = logging.getLogger(__name__)


class BookExtractor:
    """
    Extracts a BookRecord from one book page.

    Usage:
        extractor = GoodreadsExtractor(url)
        extractor.fetch()              # or extractor.load_html(html)
        record = extractor.extract()   # None when the page holds no book
    """

    SITE = ""
    ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"

    def __init__(
        self,
        url: str,
        session: requests.Session | None = None,
        user_agent: str | None = None,
        timeout: int = 30,
    ):
        self.url = url
        self._session = session
        self.user_agent = user_agent
        self.timeout = timeout
        self.html = None
        self.soup = None
        self.context = None
        self.json_ld = None
        self.structured = StructuredDataParser()

    def fetch(self) -> None:
        """
        Fetch the book page HTML.

        Raises:
            requests.RequestException: On transport errors or non-2xx status
        """
        headers = build_headers(self.user_agent, accept=self.ACCEPT)
        requester = self._session or requests
        logger.debug("GET %s", self.url)
        response = requester.get(self.url, headers=headers, timeout=self.timeout)
        response.raise_for_status()
        self.load_html(response.text)

    def load_html(self, html: str) -> None:
        """Load pre-fetched HTML for extraction without a network request."""
        self.html = html
        self.soup = BeautifulSoup(html, "lxml")
        self.json_ld = self.structured.find_json_ld(self.soup)
        self.context = PageContext(soup=self.soup, html=html, data=self.json_ld)

    def extract(self) -> Optional[BookRecord]:
        """
        Extract the book record.

        Returns:
            BookRecord, or None when the page has no recognizable book data
        """
        if self.soup is None:
            raise RuntimeError("No page loaded; call fetch() or load_html() first")

        fields = self._extract_fields()
        if not fields or not fields.get("title"):
            logger.warning("%s: no book data found at %s", self.SITE, self.url)
            return None

        record = BookRecord(**fields)
        logger.info("%s: extracted '%s'", self.SITE, record.title)
        return record

    def _extract_fields(self) -> Optional[Dict[str, str]]:
        """Return BookRecord keyword arguments, or None on extraction miss."""
        raise NotImplementedError

    def canonical_url(self) -> str:
        """Page's declared canonical URL, falling back to the input URL."""
        canonical = first_non_empty(
            [SelectorRule('link[rel="canonical"]', attribute='href')],
            self.context,
        )
        return canonical or self.url

    def first(self, rules, context: PageContext | None = None) -> str:
        """Shorthand for first_non_empty over this page (or another context)."""
        return first_non_empty(rules, context or self.context)
