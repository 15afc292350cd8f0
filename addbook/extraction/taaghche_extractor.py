"""
Taaghche Book Extractor

Extracts book data from taaghche.com/book/ pages (Persian e-book store).
Everything comes from the JSON-LD Book block; the edition-level fields
(pages, publisher, translator, date, language, ISBN) sit in its nested
"workExample" object when present.
"""

from typing import Dict, Optional

from .base_extractor import BookExtractor
from .parsers import JsonPathRule, PageContext, SelectorRule, concatenate_names

DESCRIPTION_SELECTORS = [
    '[itemprop="description"]',
    '.book-description',
    '.description',
    '.book-summary',
    '.summary-text',
]


class TaaghcheExtractor(BookExtractor):
    """Extracts book data from Taaghche."""

    SITE = "taaghche"

    def _extract_fields(self) -> Optional[Dict[str, str]]:
        if not self.json_ld:
            return None

        work_example = self.json_ld.get('workExample')
        if isinstance(work_example, list):
            work_example = work_example[0] if work_example else None
        if not isinstance(work_example, dict):
            work_example = self.json_ld

        edition = PageContext(soup=self.soup, html=self.html, data=work_example)

        def from_edition(*paths: str) -> str:
            return self.first([JsonPathRule(path) for path in paths], edition)

        translator = work_example.get('translator') or self.json_ld.get('translator')

        return {
            "title": self.first([JsonPathRule('name'), SelectorRule('h1')]),
            "author": concatenate_names(self.json_ld.get('author')),
            "translator": concatenate_names(translator),
            "pages": from_edition('numberOfPages'),
            "cover": self.first([JsonPathRule('image'), JsonPathRule('image.0')]),
            "publisher": from_edition('publisher.name', 'publisher'),
            "date_published": from_edition('datePublished'),
            "language": from_edition('inLanguage'),
            "isbn": from_edition('isbn').replace('-', ''),
            "url": self.canonical_url(),
            "description": self.first(
                [JsonPathRule('description')]
                + [SelectorRule(selector) for selector in DESCRIPTION_SELECTORS]
            ),
        }
