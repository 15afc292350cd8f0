"""
Catalog API Clients

Thin JSON clients for the two public book catalogs used for summaries:
Google Books (primary) and Open Library (secondary).

Every failure (transport error, non-200 status, malformed JSON) is logged
at DEBUG and reported as None so callers can move on to the next lookup.
"""

import logging
from typing import Dict, List, Optional

import requests

from ..common.http_client import build_headers

logger = logging.getLogger(__name__)


class CatalogClient:
    """
    Shared GET-and-decode behaviour for catalog APIs.

    Usage:
        with GoogleBooksClient() as client:
            items = client.search_by_isbn("9780141036144")
    """

    DEFAULT_BASE_URL = ""

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        user_agent: Optional[str] = None,
        timeout: int = 30,
    ):
        self.base_url = (base_url or self.DEFAULT_BASE_URL).rstrip("/")
        self.session = session or requests.Session()
        self.headers = build_headers(user_agent, accept="application/json")
        self.timeout = timeout

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def _get_json(self, url: str, params: Optional[Dict] = None) -> Optional[Dict]:
        """
        GET a URL and decode the JSON body.

        Returns:
            Decoded JSON object, or None on any error
        """
        try:
            response = self.session.get(url, params=params, headers=self.headers,
                                        timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.debug("Request failed: %s (%s)", url, e)
            return None

        if response.status_code != 200:
            logger.debug("HTTP %d from %s", response.status_code, url)
            return None

        try:
            data = response.json()
        except ValueError as e:
            logger.debug("Malformed JSON from %s: %s", url, e)
            return None

        if not isinstance(data, dict):
            logger.debug("Unexpected JSON payload from %s", url)
            return None
        return data


class GoogleBooksClient(CatalogClient):
    """Google Books volumes API."""

    DEFAULT_BASE_URL = "https://www.googleapis.com/books/v1/volumes"

    def __init__(self, *args, api_key: Optional[str] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.api_key = api_key

    def _params(self, **params) -> Dict[str, str]:
        if self.api_key:
            params["key"] = self.api_key
        return params

    def search(self, query: str, max_results: int = 3) -> List[Dict]:
        """Search volumes; returns the `items` list (possibly empty)."""
        data = self._get_json(self.base_url, self._params(q=query, maxResults=max_results))
        if not data:
            return []
        return data.get("items") or []

    def search_by_isbn(self, isbn: str) -> List[Dict]:
        return self.search(f"isbn:{isbn}", max_results=1)

    def get_volume(self, volume_id: str) -> Optional[Dict]:
        """Fetch one volume's full record."""
        if not volume_id:
            return None
        return self._get_json(f"{self.base_url}/{volume_id}", self._params())


class OpenLibraryClient(CatalogClient):
    """Open Library search and works API."""

    DEFAULT_BASE_URL = "https://openlibrary.org"

    def search(self, query: str = "", isbn: str = "", limit: int = 3) -> List[Dict]:
        """Search by ISBN when given, else by free text; returns `docs`."""
        params = {"isbn": isbn} if isbn else {"q": query}
        params["limit"] = limit
        data = self._get_json(f"{self.base_url}/search.json", params)
        if not data:
            return []
        return data.get("docs") or []

    def get_work(self, key: str) -> Optional[Dict]:
        """
        Fetch a work record.

        Args:
            key: Work key, either "/works/OL123W" or "OL123W"
        """
        if not key:
            return None
        if not key.startswith("/works/"):
            key = f"/works/{key.lstrip('/')}"
        return self._get_json(f"{self.base_url}{key}.json")
