"""
Book data model.

Pure data class for representing extracted book information.
No extraction logic - only the record and its template view.
"""

import html
import re
from dataclasses import dataclass, fields
from typing import Dict

# Characters that are not allowed in note file names
_FILENAME_FORBIDDEN = re.compile(r'[\\/:*?"<>|]')


@dataclass
class BookRecord:
    """
    Bibliographic record for one book page.

    Every field except title is optional and defaults to an empty string,
    never None, so plain placeholder substitution always has a value.

    Field Groups:
    - Core fields: title, author, translator, pages, cover
    - Publication: publisher, date_published, language, isbn
    - Source: canonical url of the book page
    - Text: description (from the site) and summary (from catalog lookups)
    """

    # Core fields
    title: str
    author: str = ""
    translator: str = ""
    pages: str = ""             # Numeric string, e.g. "320"
    cover: str = ""             # Absolute image URL

    # Publication
    publisher: str = ""
    date_published: str = ""    # Free-form or yyyy-mm-dd
    language: str = ""
    isbn: str = ""              # Digits, or ASIN when no ISBN is listed

    # Source
    url: str = ""

    # Text
    description: str = ""       # Site-provided long text
    summary: str = ""           # External lookup, max 500 chars

    def __post_init__(self):
        """Validate title and coerce missing values to empty strings."""
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                setattr(self, f.name, "")
            elif not isinstance(value, str):
                setattr(self, f.name, str(value))

        if not self.title.strip():
            raise ValueError("Book title is required")

    def as_template_values(self) -> Dict[str, str]:
        """
        Map template placeholder names to field values.

        Placeholder names follow the note template ({{datepublished}},
        {{ISBN}}), not the attribute names.
        """
        return {
            "title": self.title,
            "author": self.author,
            "translator": self.translator,
            "pages": self.pages,
            "cover": self.cover,
            "publisher": self.publisher,
            "datepublished": self.date_published,
            "ISBN": self.isbn,
            "url": self.url,
            "language": self.language,
            "description": self.description,
            "summary": self.summary,
        }

    def filename_stem(self) -> str:
        """Title with entities decoded and path-unsafe characters removed."""
        stem = html.unescape(self.title)
        stem = _FILENAME_FORBIDDEN.sub("", stem)
        return ' '.join(stem.split())
