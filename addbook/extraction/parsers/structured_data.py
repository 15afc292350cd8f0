"""
Structured Data Parser

Locates book records inside structured-data islands embedded in a page:
- JSON-LD scripts (schema.org Book / Product)
- The __NEXT_DATA__ hydration payload of Next.js pages

It also provides a generic predicate search over the decoded JSON, which
is how Goodreads publisher/publication details are found inside the
Apollo entity cache.
"""

import json
import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from bs4 import BeautifulSoup

from ...common.text_utils import clean_text

logger = logging.getLogger(__name__)

Predicate = Callable[[Any], bool]


class StructuredDataParser:
    """
    Parses JSON-LD and hydration payloads from book pages.

    Usage:
        parser = StructuredDataParser()
        json_ld = parser.find_json_ld(soup)
        app_state = parser.find_app_state(soup)
        details = parser.find_by_predicate(app_state, is_book_details)
    """

    SUPPORTED_TYPES = ['Book', 'Product']
    APP_STATE_SELECTOR = 'script#__NEXT_DATA__'

    def find_json_ld(self, soup: BeautifulSoup) -> Optional[Dict[str, Any]]:
        """
        Return the first JSON-LD block describing a book.

        A block qualifies when its @type is "Book", when @type is a list
        containing "Book" or "Product", or when it is a list / @graph
        container holding such an entity (the entity itself is returned).
        Blocks that fail to parse are skipped.

        Args:
            soup: BeautifulSoup object of the page

        Returns:
            JSON-LD dictionary or None if not found
        """
        scripts = soup.find_all('script', type='application/ld+json')

        for script in scripts:
            raw = script.string or script.get_text()
            if not raw or not raw.strip():
                continue
            try:
                data = json.loads(raw)
            except (json.JSONDecodeError, TypeError):
                logger.debug("Skipping malformed JSON-LD block")
                continue

            if isinstance(data, dict) and self._is_book_entity(data):
                return data

            # Wrapped entities: top-level list or @graph container
            members = []
            if isinstance(data, list):
                members = data
            elif isinstance(data, dict) and isinstance(data.get('@graph'), list):
                members = data['@graph']

            for member in members:
                if isinstance(member, dict) and self._is_book_entity(member, in_container=True):
                    return member

        return None

    def find_app_state(self, soup: BeautifulSoup) -> Optional[Dict[str, Any]]:
        """
        Parse the page's hydration payload (script#__NEXT_DATA__).

        Args:
            soup: BeautifulSoup object of the page

        Returns:
            Decoded payload or None if absent or malformed
        """
        script = soup.select_one(self.APP_STATE_SELECTOR)
        if not script:
            return None

        raw = script.string or script.get_text()
        if not raw:
            return None

        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, TypeError):
            logger.debug("Hydration payload is not valid JSON")
            return None

        return data if isinstance(data, dict) else None

    def find_by_predicate(self, root: Any, predicate: Predicate) -> Optional[Any]:
        """
        Depth-first search for the first container satisfying predicate.

        Walks nested dicts and lists with an explicit stack. Containers are
        tracked by identity, so shared or cyclic references are visited once.
        Leaf values (strings, numbers, datetimes, compiled patterns, ...)
        are never descended into. A "details" child is explored before the
        other children of the same node.

        Args:
            root: Decoded JSON (or any nested dict/list structure)
            predicate: Function returning True for the wanted node

        Returns:
            Matching node or None
        """
        if not isinstance(root, (dict, list)):
            return None

        stack: List[Any] = [root]
        visited = set()

        while stack:
            node = stack.pop()
            if id(node) in visited:
                continue
            visited.add(id(node))

            if predicate(node):
                return node

            if isinstance(node, dict):
                children = list(node.values())
                preferred = node.get('details')
            else:
                children = list(node)
                preferred = None

            # Reversed so the first child is popped first
            for child in reversed(children):
                if isinstance(child, (dict, list)) and child is not preferred:
                    stack.append(child)

            if isinstance(preferred, (dict, list)):
                stack.append(preferred)

        return None

    def _is_book_entity(self, data: Dict[str, Any], in_container: bool = False) -> bool:
        """Check the @type rules for a JSON-LD entity."""
        entity_type = data.get('@type')
        if isinstance(entity_type, list):
            return any(t in self.SUPPORTED_TYPES for t in entity_type)
        if entity_type == 'Book':
            return True
        # Inside a container a plain "Product" string also identifies the entity
        return in_container and entity_type in self.SUPPORTED_TYPES


def is_book_details(node: Any) -> bool:
    """
    Shape check for a Goodreads BookDetails node.

    Matches an explicit __typename, or a node carrying publisher and
    publicationTime plus one of format / numPages / asin.
    """
    if not isinstance(node, dict):
        return False
    if node.get('__typename') == 'BookDetails':
        return True
    return (
        'publisher' in node
        and 'publicationTime' in node
        and ('format' in node or 'numPages' in node or 'asin' in node)
    )


def has_long_description(node: Any, min_length: int = 50) -> bool:
    """True for a dict whose "description" is a string longer than min_length."""
    if not isinstance(node, dict):
        return False
    description = node.get('description')
    return isinstance(description, str) and len(description) > min_length


def concatenate_names(value: Any) -> str:
    """
    Join contributor names with ", ".

    Accepts a single entry or a list; each entry is either a plain string
    or an object carrying a "name" field. Blank names are dropped.

    Example:
        >>> concatenate_names([{"name": "A. Writer"}, "B. Writer"])
        'A. Writer, B. Writer'
    """
    if not value:
        return ""
    if not isinstance(value, list):
        value = [value]

    names = []
    for entry in value:
        if isinstance(entry, str):
            name = clean_text(entry)
        elif isinstance(entry, dict):
            name = clean_text(entry.get('name', ''))
        else:
            name = ""
        if name:
            names.append(name)

    return ', '.join(names)


def format_date_from_timestamp(timestamp: Any) -> str:
    """
    Format epoch milliseconds as YYYY-MM-DD in local calendar terms.

    Args:
        timestamp: Milliseconds since epoch (int, float or numeric string)

    Returns:
        Date string or "" for empty/invalid input
    """
    if not timestamp or isinstance(timestamp, bool):
        return ""

    try:
        moment = datetime.fromtimestamp(float(timestamp) / 1000)
    except (TypeError, ValueError, OverflowError, OSError):
        return ""

    return f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
