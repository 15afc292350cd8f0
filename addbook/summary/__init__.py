"""
Summary lookup modules.

Modules:
    catalog_clients - Google Books and Open Library JSON clients
    resolver - SummaryResolver ordered lookup strategy
"""

from .catalog_clients import CatalogClient, GoogleBooksClient, OpenLibraryClient
from .resolver import SummaryResolver, flatten_text

__all__ = [
    'CatalogClient',
    'GoogleBooksClient',
    'OpenLibraryClient',
    'SummaryResolver',
    'flatten_text',
]
