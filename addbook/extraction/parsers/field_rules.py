"""
Field Rules

Ordered fallback chains for field extraction. Each rule is a small
callable that reads one place in a page (a CSS selector, a regex over the
page text, a JSON path, a labeled table row, ...) and returns a string or
None. first_non_empty() tries the rules in order and keeps the first
non-empty, whitespace-normalized result.

Markup drift on a site then costs one rule, not the whole field.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Optional, Sequence

from bs4 import BeautifulSoup

from ...common.text_utils import clean_text

logger = logging.getLogger(__name__)


@dataclass
class PageContext:
    """Everything a rule may read from one fetched page."""
    soup: BeautifulSoup
    html: str = ""
    data: Any = None                 # Decoded structured data (JSON-LD, payload)
    _page_text: Optional[str] = field(default=None, repr=False)

    @property
    def page_text(self) -> str:
        """Lazy-load visible page text."""
        if self._page_text is None:
            self._page_text = self.soup.get_text(separator=" ")
        return self._page_text


Rule = Callable[[PageContext], Optional[str]]


def _apply_pattern(text: str, pattern: Optional[re.Pattern]) -> Optional[str]:
    if pattern is None:
        return text
    match = pattern.search(text)
    if not match:
        return None
    return match.group(1) if match.groups() else match.group(0)


class SelectorRule:
    """
    Read the first element matching a CSS selector.

    Usage:
        SelectorRule('span#productTitle')
        SelectorRule('img#landingImage', attribute='data-old-hires')
        SelectorRule('[data-attribute="number_of_pages"]', pattern=r'\\d+')
    """

    def __init__(self, selector: str, attribute: Optional[str] = None, pattern: Optional[str] = None):
        self.selector = selector
        self.attribute = attribute
        self.pattern = re.compile(pattern) if pattern else None

    def __call__(self, context: PageContext) -> Optional[str]:
        element = context.soup.select_one(self.selector)
        if element is None:
            return None

        if self.attribute:
            value = element.get(self.attribute)
            if isinstance(value, list):
                value = ' '.join(value)
        else:
            value = element.get_text(separator=" ")

        if not value:
            return None
        return _apply_pattern(value, self.pattern)

    def __repr__(self):
        return f"SelectorRule({self.selector!r})"


class RegexRule:
    """Search the visible page text (or the raw HTML) with a regex."""

    def __init__(self, pattern: str, flags: int = 0, source: str = "text"):
        self.pattern = re.compile(pattern, flags)
        self.source = source

    def __call__(self, context: PageContext) -> Optional[str]:
        text = context.html if self.source == "html" else context.page_text
        if not text:
            return None
        return _apply_pattern(text, self.pattern)

    def __repr__(self):
        return f"RegexRule({self.pattern.pattern!r})"


class JsonPathRule:
    """
    Read a dotted path from context.data.

    Integer segments index into lists: "author.0.name".
    Scalars are converted to strings; objects with a "name" are unwrapped.
    """

    def __init__(self, path: str):
        self.path = path
        self.segments = path.split('.')

    def __call__(self, context: PageContext) -> Optional[str]:
        value = context.data
        for segment in self.segments:
            if isinstance(value, dict):
                value = value.get(segment)
            elif isinstance(value, list) and segment.isdigit():
                index = int(segment)
                value = value[index] if index < len(value) else None
            else:
                return None
            if value is None:
                return None

        if isinstance(value, dict):
            value = value.get('name')
        if isinstance(value, (list, dict)) or value is None or isinstance(value, bool):
            return None
        return str(value)

    def __repr__(self):
        return f"JsonPathRule({self.path!r})"


class LabeledValueRule:
    """
    Find a table row by its label cell and read the value cell.

    Usage:
        LabeledValueRule('tr.book-vl-rows-item', 'td.book-vl-rows-item-title',
                         'div.book-vl-rows-item-subtitle', label='ناشر')
    """

    def __init__(self, row_selector: str, label_selector: str, value_selector: str,
                 label: str, pattern: Optional[str] = None):
        self.row_selector = row_selector
        self.label_selector = label_selector
        self.value_selector = value_selector
        self.label = label
        self.pattern = re.compile(pattern) if pattern else None

    def __call__(self, context: PageContext) -> Optional[str]:
        for row in context.soup.select(self.row_selector):
            label_cell = row.select_one(self.label_selector)
            if label_cell is None or self.label not in label_cell.get_text():
                continue
            value_cell = row.select_one(self.value_selector)
            if value_cell is None:
                return None
            return _apply_pattern(value_cell.get_text(separator=" "), self.pattern)
        return None

    def __repr__(self):
        return f"LabeledValueRule({self.label!r})"


class KeywordListRule:
    """
    Scan list items for one whose text mentions a keyword.

    The first item whose lowercase text contains any include keyword and
    none of the exclude keywords is passed to transform; a transform
    returning an empty value lets the scan continue.
    """

    def __init__(self, item_selector: str, include: Sequence[str], exclude: Sequence[str] = (),
                 transform: Optional[Callable[[str], Optional[str]]] = None):
        self.item_selector = item_selector
        self.include = [k.lower() for k in include]
        self.exclude = [k.lower() for k in exclude]
        self.transform = transform or (lambda text: text)

    def __call__(self, context: PageContext) -> Optional[str]:
        for item in context.soup.select(self.item_selector):
            text = clean_text(item.get_text(separator=" "))
            lowered = text.lower()
            if not any(k in lowered for k in self.include):
                continue
            if any(k in lowered for k in self.exclude):
                continue
            value = self.transform(text)
            if value and clean_text(value):
                return value
        return None

    def __repr__(self):
        return f"KeywordListRule({self.include!r})"


def first_non_empty(rules: Iterable[Rule], context: PageContext) -> str:
    """
    Try rules in order and return the first non-empty normalized result.

    A rule that raises is logged and treated as a miss.

    Args:
        rules: Ordered extraction rules
        context: Page being extracted

    Returns:
        Whitespace-normalized value or "" when every rule misses
    """
    for rule in rules:
        try:
            value = rule(context)
        except Exception as exc:  # noqa: BLE001
            logger.debug("Rule %r failed: %s", rule, exc)
            continue
        value = clean_text(value)
        if value:
            return value
    return ""


class FieldExtractor:
    """
    Named fallback chains for one site.

    Usage:
        extractor = FieldExtractor({
            'title': [SelectorRule('h1#title'), JsonPathRule('name')],
        })
        title = extractor.extract('title', context)
    """

    def __init__(self, rules_by_field: Dict[str, Sequence[Rule]]):
        self.rules_by_field = dict(rules_by_field)

    def extract(self, field_name: str, context: PageContext) -> str:
        """Run the chain for field_name; unknown fields give ""."""
        return first_non_empty(self.rules_by_field.get(field_name, ()), context)

    def extract_all(self, context: PageContext) -> Dict[str, str]:
        """Run every chain and return field -> value."""
        return {name: self.extract(name, context) for name in self.rules_by_field}
