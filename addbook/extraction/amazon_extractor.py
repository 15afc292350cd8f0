"""
Amazon Book Extractor

Extracts book data from Amazon product pages (any country domain).

Amazon rarely ships a JSON-LD Book block, so nearly every field comes from
markup: the byline for contributors, the detail bullets and the rich
product information carousel ("rpi") for pages, publisher, date, language
and ISBN.

Known limitation: the book description is injected by client-side script
that this extractor does not execute, so `description` is always empty.
"""

import json
import logging
import re
from typing import Dict, List, Optional, Tuple

from ..common.text_utils import clean_text
from .base_extractor import BookExtractor
from .parsers import JsonPathRule, KeywordListRule, PageContext, SelectorRule
from .source_router import extract_asin

logger = logging.getLogger(__name__)

TITLE_SELECTORS = [
    'span#productTitle',
    'h1#title',
    '#productTitle',
    'span.a-size-large#productTitle',
    'h1.a-size-large',
]

# Detail containers scanned for "Label : value" entries
DETAIL_ITEMS = (
    '#detailBullets_feature_div li, '
    '#booksProductDetails_feature_div li, '
    '.rpi-attribute-value span'
)

# Category suffixes Amazon appends to titles, e.g. "(Bird Books, Gift Books)"
_CATEGORY_KEYWORDS = re.compile(
    r'\b(books?|editions?|series|classics?|gifts?|novels?|library|collection|'
    r'paperback|hardcover|kindle|volume|vol\.|trilogy|saga)\b',
    re.IGNORECASE,
)
_TRAILING_PARENTHETICAL = re.compile(r'\s*\(([^()]*)\)\s*$')
_LONG_PARENTHETICAL = 30

# "Label : value" separators; a hyphen only counts when spaced, so ISO dates survive
_SEPARATOR = re.compile(r'\s*[:–—]\s*|\s+-\s+')
_DIRECTION_MARKS = re.compile('[\u200e\u200f\u202a-\u202e]')


def clean_amazon_title(title: str) -> str:
    """
    Strip trailing marketing-category parentheticals from a title.

    A trailing "(...)" group is removed when it contains a category keyword
    or is at least 30 characters long; repeated until neither holds.

    Example:
        >>> clean_amazon_title("Some Book (Bird Books, Gift Books)")
        'Some Book'
    """
    title = clean_text(title)
    while True:
        match = _TRAILING_PARENTHETICAL.search(title)
        if not match:
            break
        inner = match.group(1)
        if len(inner) >= _LONG_PARENTHETICAL or _CATEGORY_KEYWORDS.search(inner):
            title = title[:match.start()].rstrip()
        else:
            break
    return title


def trailing_value(text: str) -> Optional[str]:
    """Return the segment after the last "Label : value" separator."""
    text = clean_text(_DIRECTION_MARKS.sub('', text))
    value = _SEPARATOR.split(text)[-1].strip()
    return value if len(value) > 1 else None


def first_number(text: str) -> Optional[str]:
    """Return the first run of digits after the label."""
    value = trailing_value(text) or text
    match = re.search(r'\d+', value)
    return match.group(0) if match else None


def _isbn_digits(text: str) -> Optional[str]:
    value = trailing_value(text)
    if not value:
        return None
    digits = value.replace('-', '').replace(' ', '')
    return digits if re.fullmatch(r'\d{9}[\dXx]|\d{13}', digits) else None


def dynamic_image_rule(context: PageContext) -> Optional[str]:
    """Largest image in data-a-dynamic-image, a JSON map of url -> [width, height]."""
    element = context.soup.select_one('img#landingImage, img#imgBlkFront')
    if element is None or not element.get('data-a-dynamic-image'):
        return None
    try:
        images = json.loads(element['data-a-dynamic-image'])
    except (json.JSONDecodeError, TypeError):
        return None
    if not isinstance(images, dict) or not images:
        return None

    def area(item):
        size = item[1]
        if isinstance(size, list) and len(size) == 2:
            return size[0] * size[1]
        return 0

    return max(images.items(), key=area)[0]


class AmazonExtractor(BookExtractor):
    """Extracts book data from Amazon."""

    SITE = "amazon"

    def _extract_fields(self) -> Optional[Dict[str, str]]:
        raw_title = self.first(
            [SelectorRule(selector) for selector in TITLE_SELECTORS]
            + [JsonPathRule('name')]
        )
        title = clean_amazon_title(raw_title)
        if not title:
            return None

        authors, translators = self._extract_contributors()

        return {
            "title": title,
            "author": ', '.join(authors) or self.first([
                SelectorRule('span.author a.a-link-normal'),
                SelectorRule('#bylineInfo a.a-link-normal'),
            ]),
            "translator": ', '.join(translators),
            "pages": self.first([
                KeywordListRule(DETAIL_ITEMS, include=['page', 'print length'],
                                exclude=['source'], transform=first_number),
                SelectorRule('[data-attribute="number_of_pages"]', pattern=r'\d+'),
                SelectorRule('#rpi-attribute-book_details-fiona_pages .rpi-attribute-value span',
                             pattern=r'\d+'),
            ]),
            "cover": self.first([
                SelectorRule('img#landingImage', attribute='data-old-hires'),
                dynamic_image_rule,
                SelectorRule('img#landingImage', attribute='src'),
                SelectorRule('img#imgBlkFront', attribute='src'),
            ]),
            "publisher": self.first([
                KeywordListRule(DETAIL_ITEMS, include=['publisher'], exclude=['publication'],
                                transform=trailing_value),
                SelectorRule('[data-attribute="publisher"]'),
                SelectorRule('#rpi-attribute-book_details-publisher .rpi-attribute-value span'),
            ]),
            "date_published": self.first([
                KeywordListRule(DETAIL_ITEMS, include=['publication date', 'publish date'],
                                transform=trailing_value),
                SelectorRule('[data-attribute="publication_date"]'),
                SelectorRule('#rpi-attribute-book_details-publication_date .rpi-attribute-value span'),
            ]),
            "language": self.first([
                SelectorRule('#rpi-attribute-language .rpi-attribute-value span'),
                SelectorRule('[data-attribute="language"]'),
                KeywordListRule(DETAIL_ITEMS, include=['language'], transform=trailing_value),
            ]),
            "isbn": self._extract_isbn(),
            "url": self.canonical_url(),
            # Loaded client-side; see module docstring
            "description": "",
        }

    def _extract_contributors(self) -> Tuple[List[str], List[str]]:
        """Split byline names into authors and translators by contribution label."""
        authors: List[str] = []
        translators: List[str] = []

        byline = self.soup.select_one('div#bylineInfo')
        if byline is None:
            return authors, translators

        for span in byline.select('span.author'):
            name_element = span.select_one('a.a-link-normal')
            if name_element is None:
                continue
            name = clean_text(name_element.get_text())
            if not name:
                continue

            role_element = span.select_one('span.contribution span.a-color-secondary')
            role = clean_text(role_element.get_text()) if role_element else ""

            if 'Translator' in role:
                translators.append(name)
            elif 'Author' in role or role == "" or role == "()":
                authors.append(name)
            else:
                logger.debug("amazon: skipping contributor %s %s", name, role)

        return authors, translators

    def _extract_isbn(self) -> str:
        """ISBN-13, then ISBN-10, then the ASIN from page or URL."""
        isbn = self.first([
            SelectorRule('#rpi-attribute-book_details-isbn13 .rpi-attribute-value span'),
            SelectorRule('[data-attribute="isbn_13"]'),
            KeywordListRule(DETAIL_ITEMS, include=['isbn-13'], transform=_isbn_digits),
            SelectorRule('#rpi-attribute-book_details-isbn10 .rpi-attribute-value span'),
            KeywordListRule(DETAIL_ITEMS, include=['isbn-10'], transform=_isbn_digits),
            SelectorRule('input#ASIN', attribute='value'),
        ])
        isbn = isbn.replace('-', '').replace(' ', '')
        return isbn or extract_asin(self.url)
