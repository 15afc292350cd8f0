"""
Specialized parsers for book data extraction.

- StructuredDataParser: JSON-LD and __NEXT_DATA__ payloads, predicate search
- FieldExtractor: ordered fallback chains of extraction rules
"""

from .field_rules import (
    FieldExtractor,
    JsonPathRule,
    KeywordListRule,
    LabeledValueRule,
    PageContext,
    RegexRule,
    SelectorRule,
    first_non_empty,
)
from .structured_data import (
    StructuredDataParser,
    concatenate_names,
    format_date_from_timestamp,
    has_long_description,
    is_book_details,
)

__all__ = [
    'StructuredDataParser',
    'concatenate_names',
    'format_date_from_timestamp',
    'has_long_description',
    'is_book_details',
    'FieldExtractor',
    'PageContext',
    'SelectorRule',
    'RegexRule',
    'JsonPathRule',
    'LabeledValueRule',
    'KeywordListRule',
    'first_non_empty',
]
