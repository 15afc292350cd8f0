"""
Data models for book extraction.

This module contains pure data classes with no business logic.
"""

from .book import BookRecord

__all__ = ['BookRecord']
