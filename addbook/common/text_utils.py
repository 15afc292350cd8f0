"""
Text Utilities

Helper functions for text processing and cleanup.
"""

import re

from bs4 import BeautifulSoup

_WHITESPACE_PATTERN = re.compile(r'\s+')
# A hyphen only counts as a subtitle break when spaced, so "Half-Blood" stays whole
_SUBTITLE_SEPARATOR = re.compile(r'\s*[:–—]\s*|\s+-\s+')


def clean_text(text) -> str:
    """
    Collapse runs of whitespace to a single space and trim.

    Args:
        text: Text to normalize (non-strings are converted, None gives "")

    Returns:
        Normalized text
    """
    if text is None:
        return ""
    if not isinstance(text, str):
        text = str(text)
    return _WHITESPACE_PATTERN.sub(' ', text).strip()


def strip_html(text: str) -> str:
    """
    Remove HTML tags and decode entities, then normalize whitespace.

    Args:
        text: Text that may contain markup (e.g. catalog API descriptions)

    Returns:
        Plain text
    """
    if not text:
        return ""
    return clean_text(BeautifulSoup(text, "lxml").get_text(separator=" "))


def truncate(text: str, max_length: int) -> str:
    """Cut text to at most max_length characters."""
    if not text or len(text) <= max_length:
        return text or ""
    return text[:max_length].rstrip()


def strip_subtitle(title: str) -> str:
    """
    Drop a subtitle introduced by a colon, a long dash or a spaced hyphen.

    Example:
        >>> strip_subtitle("Sapiens: A Brief History of Humankind")
        'Sapiens'
    """
    if not title:
        return ""
    return clean_text(_SUBTITLE_SEPARATOR.split(title, maxsplit=1)[0])


def first_name_token(names: str) -> str:
    """Return the first entry of a comma-separated name list."""
    if not names:
        return ""
    return clean_text(names.split(',')[0])


# Persian (U+06F0..) and Arabic-Indic (U+0660..) digits to ASCII
_DIGIT_TABLE = str.maketrans(
    {chr(base + offset): str(offset) for base in (0x06F0, 0x0660) for offset in range(10)}
)


def normalize_digits(text: str) -> str:
    """
    Convert Persian and Arabic-Indic digits to ASCII digits.

    Example:
        >>> normalize_digits("۲۵۶")
        '256'
    """
    if not text:
        return ""
    return text.translate(_DIGIT_TABLE)
