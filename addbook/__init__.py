"""
Add Book - book notes from retail/catalog links

Modules:
    models      - Data models (BookRecord)
    common      - Shared utilities (config loader, logging, HTTP, text utils)
    extraction  - Source routing and per-site book extractors
    summary     - Summary lookup against external catalog services
    notes       - Template rendering and vault note writing
    importer    - URL -> note pipeline
"""

__version__ = "1.2.0"
