"""
Book extraction modules for retail/catalog sites.

Modules:
    source_router - identify_source(url) -> site id
    base_extractor - BookExtractor fetch/parse lifecycle
    goodreads_extractor, amazon_extractor, taaghche_extractor, fidibo_extractor
    validator - RecordValidator for the extraction report
    parsers - Structured data locator and fallback-chain field rules
"""

from .amazon_extractor import AmazonExtractor
from .base_extractor import BookExtractor
from .fidibo_extractor import FidiboExtractor
from .goodreads_extractor import GoodreadsExtractor
from .parsers import FieldExtractor, PageContext, StructuredDataParser
from .source_router import identify_source
from .taaghche_extractor import TaaghcheExtractor
from .validator import RecordValidator

# Registry of supported site extractors
SITE_EXTRACTORS = {
    'amazon': AmazonExtractor,
    'goodreads': GoodreadsExtractor,
    'taaghche': TaaghcheExtractor,
    'fidibo': FidiboExtractor,
}


def get_extractor_for_site(site: str):
    """
    Get the extractor class for a site identifier.

    Raises:
        ValueError: If site is not supported
    """
    try:
        return SITE_EXTRACTORS[site]
    except KeyError:
        supported = ', '.join(SITE_EXTRACTORS.keys())
        raise ValueError(f"Unsupported site: {site}. Supported: {supported}") from None


def get_extractor_for_url(url: str):
    """
    Get the appropriate extractor class for a URL.

    Args:
        url: Book page URL

    Returns:
        Extractor class (e.g., GoodreadsExtractor)

    Raises:
        ValueError: If site is not supported
    """
    site = identify_source(url)
    if site is None:
        supported = ', '.join(SITE_EXTRACTORS.keys())
        raise ValueError(f"Unsupported site: {url}. Supported: {supported}")
    return get_extractor_for_site(site)


def get_supported_sites() -> list:
    """Return list of supported site identifiers."""
    return list(SITE_EXTRACTORS.keys())


__all__ = [
    # Site-specific extractors
    'AmazonExtractor',
    'GoodreadsExtractor',
    'TaaghcheExtractor',
    'FidiboExtractor',
    'BookExtractor',
    'SITE_EXTRACTORS',
    # Routing
    'identify_source',
    'get_extractor_for_site',
    'get_extractor_for_url',
    'get_supported_sites',
    # Validator
    'RecordValidator',
    # Parsers
    'StructuredDataParser',
    'FieldExtractor',
    'PageContext',
]
