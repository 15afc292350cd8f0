"""
Logging Configuration

The add_book.py script prints the extraction report and dry-run notes on
stdout, so a rendered note can be piped straight into a file. Fetch progress
and catalog lookup diagnostics go to stderr through the "addbook" logger.
"""

import logging
import sys

LOGGER_NAME = "addbook"


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """
    Attach a stderr handler to the "addbook" logger.

    Args:
        verbose: Show DEBUG records, including failed summary lookups
        quiet: Show warnings only, hiding fetch progress
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)-8s %(name)s: %(message)s"))

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Avoid duplicate handlers if called multiple times
    logger.handlers.clear()
    logger.addHandler(handler)

    # urllib3 connection chatter only in verbose mode
    logging.getLogger("urllib3").setLevel(logging.DEBUG if verbose else logging.WARNING)
