"""
Source Router

Maps a book URL to the identifier of the site that serves it.
"""

import re
from typing import Dict, List, Optional, Pattern

# Amazon is checked first: product links come as /dp/, /gp/product/,
# /asin/, /exec/obidos/ paths, amzn.to and a.co short links, an ?asin=
# query form, and every country-code domain.
AMAZON_PATTERNS: List[Pattern] = [
    re.compile(
        r'amazon\.(com|co\.[a-z]{2}|com\.[a-z]{2}|[a-z]{2})/'
        r'(?:.*/)?(gp/product|exec/obidos/asin|dp|asin|o/ASIN)/([A-Z0-9]{10})',
        re.IGNORECASE,
    ),
    re.compile(r'amzn\.to/', re.IGNORECASE),
    re.compile(r'(?:^|[/.])a\.co/[a-zA-Z0-9]+', re.IGNORECASE),
    re.compile(
        r'amazon\.(com|co\.[a-z]{2}|com\.[a-z]{2}|[a-z]{2})/.*[&?]asin=([A-Z0-9]{10})',
        re.IGNORECASE,
    ),
]

# Remaining sites are told apart by domain, so order does not matter
SITE_PATTERNS: Dict[str, Pattern] = {
    'taaghche': re.compile(r'taaghche\.com/book/', re.IGNORECASE),
    'fidibo': re.compile(r'fidibo\.com/(books|book)/', re.IGNORECASE),
    'goodreads': re.compile(r'goodreads\.com/book/show/', re.IGNORECASE),
}


def identify_source(url: str) -> Optional[str]:
    """
    Identify the site a book URL belongs to.

    Args:
        url: Book page URL as entered by the user

    Returns:
        Site identifier ("amazon", "goodreads", "taaghche", "fidibo")
        or None for unsupported URLs

    Example:
        >>> identify_source("https://www.amazon.com/dp/0134685997")
        'amazon'
        >>> identify_source("https://example.com/foo") is None
        True
    """
    if not url:
        return None
    url = url.strip()

    for pattern in AMAZON_PATTERNS:
        if pattern.search(url):
            return 'amazon'

    for site, pattern in SITE_PATTERNS.items():
        if pattern.search(url):
            return site

    return None


def extract_asin(url: str) -> str:
    """Pull a 10-character ASIN out of an Amazon product URL, if present."""
    for pattern in (AMAZON_PATTERNS[0], AMAZON_PATTERNS[3]):
        match = pattern.search(url or "")
        if match:
            return match.group(match.lastindex).upper()
    return ""
