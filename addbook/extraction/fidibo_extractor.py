"""
Fidibo Book Extractor

Extracts book data from fidibo.com/book/ pages (Persian e-book store).

Fidibo publishes no structured data, so every field is read from the
book information table: each row pairs a Persian label cell with a value
cell.
"""

from typing import Dict, Optional

from ..common.text_utils import normalize_digits
from .base_extractor import BookExtractor
from .parsers import LabeledValueRule, SelectorRule

ROW_SELECTOR = 'tr.book-vl-rows-item'
LABEL_SELECTOR = 'td.book-vl-rows-item-title'
VALUE_SELECTOR = 'a.book-vl-rows-item-subtitle, div.book-vl-rows-item-subtitle'

# Row labels as printed on the page
LABELS = {
    "author": "نویسنده",
    "pages": "تعداد صفحات",
    "publisher": "ناشر",
    "translator": "مترجم",
    "date_published": "تاریخ انتشار",
    "language": "زبان",
    "isbn": "شابک",
}

DESCRIPTION_SELECTORS = [
    '.book-description',
    '.description-text',
    '.about-book',
    '[class*="desc"]',
    '.book-summary',
    '.summary',
]


def row_rule(field_name: str, pattern: Optional[str] = None) -> LabeledValueRule:
    """Table lookup for one labeled row."""
    return LabeledValueRule(ROW_SELECTOR, LABEL_SELECTOR, VALUE_SELECTOR,
                            label=LABELS[field_name], pattern=pattern)


class FidiboExtractor(BookExtractor):
    """Extracts book data from Fidibo."""

    SITE = "fidibo"

    def _extract_fields(self) -> Optional[Dict[str, str]]:
        title = self.first([
            SelectorRule('h1.book-main-box-detail-title'),
            SelectorRule('meta[property="og:title"]', attribute='content'),
        ])
        if not title:
            return None

        cover = self.first([
            SelectorRule('img.book-main-box-img', attribute='src'),
            SelectorRule('meta[property="og:image"]', attribute='content'),
        ])

        return {
            "title": title,
            "author": self.first([row_rule("author")]),
            "translator": self.first([row_rule("translator")]),
            "pages": normalize_digits(self.first([row_rule("pages", pattern=r'\d+')])),
            # Drop the resize query string to keep the full-size image
            "cover": cover.split('?')[0],
            "publisher": self.first([row_rule("publisher")]),
            "date_published": self.first([row_rule("date_published")]),
            "language": self.first([row_rule("language")]),
            "isbn": normalize_digits(
                self.first([row_rule("isbn", pattern=r'[\d\-Xx]{10,17}')])
            ).replace('-', ''),
            "url": self.url,
            "description": self.first([SelectorRule(selector) for selector in DESCRIPTION_SELECTORS]),
        }
