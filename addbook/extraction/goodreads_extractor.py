"""
Goodreads Book Extractor

Extracts book data from goodreads.com/book/show/ pages.

Sources, in priority order:
- JSON-LD Book block: title, authors, pages, cover, language, ISBN
- __NEXT_DATA__ Apollo cache: publisher, publication date, ISBN, description
- Rendered markup: ISBN text and description containers

Known limitation: Goodreads structured data lists translators as authors
with no role attached, so translators stay folded into `author` and
`translator` is always empty. Names are not guessed apart.
"""

import logging
import re
from typing import Any, Dict, Optional

from ..common.text_utils import clean_text, strip_html
from .base_extractor import BookExtractor
from .parsers import (
    JsonPathRule,
    PageContext,
    RegexRule,
    SelectorRule,
    concatenate_names,
    format_date_from_timestamp,
    has_long_description,
    is_book_details,
)

logger = logging.getLogger(__name__)

DESCRIPTION_SELECTORS = [
    '[data-testid="description"]',
    '.BookPageMetadataSection__description',
    'div[data-automation-id="bookDescription"]',
    'div#bookDescription',
    'div.read-more-content',
    'div.truncatedText',
    'div#descriptionContainer',
    'div.descriptionContainer',
    'div.BookPageDescriptionSection',
]

ISBN_TEXT_RULES = [
    RegexRule(r'ISBN-13\s*:?\s*([0-9][0-9\-]{11,16})', re.IGNORECASE),
    RegexRule(r'ISBN-10\s*:?\s*([0-9][0-9Xx\-]{8,12})', re.IGNORECASE),
    RegexRule(r'ISBN\s*:?\s*([0-9][0-9Xx\-]{8,16})', re.IGNORECASE),
]


class GoodreadsExtractor(BookExtractor):
    """Extracts book data from Goodreads."""

    SITE = "goodreads"

    def _extract_fields(self) -> Optional[Dict[str, str]]:
        if not self.json_ld:
            return None

        app_state = self.structured.find_app_state(self.soup)
        details = self._find_book_details(app_state)
        details_context = PageContext(soup=self.soup, html=self.html, data=details or {})

        return {
            "title": self.first([
                JsonPathRule('name'),
                SelectorRule('h1[data-testid="bookTitle"]'),
            ]),
            "author": concatenate_names(self.json_ld.get('author')),
            # Translators are indistinguishable from authors in the source data
            "translator": "",
            "pages": self.first([JsonPathRule('numberOfPages')])
                     or self._details_value(details_context, 'numPages'),
            "cover": self.first([JsonPathRule('image'), JsonPathRule('image.0')]),
            "publisher": self._details_value(details_context, 'publisher'),
            "date_published": format_date_from_timestamp(
                details.get('publicationTime') if details else None
            ),
            "language": self.first([JsonPathRule('inLanguage')])
                        or self._details_value(details_context, 'language.name'),
            "isbn": self._extract_isbn(details_context),
            "url": self.canonical_url(),
            "description": self._extract_description(app_state),
        }

    def _find_book_details(self, app_state: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        """Search the hydration payload, narrowest root first."""
        if not app_state:
            return None

        candidate_roots = [
            _nested(app_state, 'props', 'pageProps', 'apolloState'),
            _nested(app_state, 'props', 'pageProps'),
            _nested(app_state, 'props'),
            app_state,
        ]
        for root in candidate_roots:
            details = self.structured.find_by_predicate(root, is_book_details)
            if details:
                return details

        logger.debug("goodreads: no BookDetails node in hydration payload")
        return None

    @staticmethod
    def _details_value(details_context: PageContext, path: str) -> str:
        value = JsonPathRule(path)(details_context)
        return clean_text(value)

    def _extract_isbn(self, details_context: PageContext) -> str:
        """ISBN from details node, then JSON-LD, then visible page text (hyphens stripped)."""
        isbn = (
            self._details_value(details_context, 'isbn13')
            or self._details_value(details_context, 'isbn')
            or self._details_value(details_context, 'asin')
            or self.first([JsonPathRule('isbn')])
        )
        if not isbn:
            isbn = self.first(ISBN_TEXT_RULES)
        return isbn.replace('-', '').replace(' ', '')

    def _extract_description(self, app_state: Optional[Dict[str, Any]]) -> str:
        """Long payload description, then JSON-LD description, then markup."""
        if app_state:
            apollo = _nested(app_state, 'props', 'pageProps', 'apolloState')
            node = self.structured.find_by_predicate(apollo or app_state, has_long_description)
            if node:
                return strip_html(node['description'])

        description = self.json_ld.get('description')
        if isinstance(description, str) and description.strip():
            return strip_html(description)

        return self.first([SelectorRule(selector) for selector in DESCRIPTION_SELECTORS])


def _nested(data: Any, *keys: str) -> Any:
    """Follow dict keys, returning None as soon as a level is missing."""
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data
