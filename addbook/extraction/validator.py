"""
Record Validator

Checks an extracted BookRecord for missing and malformed fields and
produces the coverage figures shown in the extraction report.
"""

from __future__ import annotations

import re

from ..models import BookRecord

_ISBN_PATTERN = re.compile(r"\d{9}[\dXx]|\d{13}")
_ASIN_PATTERN = re.compile(r"[A-Z0-9]{10}")
_ISO_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


class RecordValidator:
    """Validates an extracted book record."""

    def __init__(self, record: BookRecord):
        self.record = record

    def validate(self) -> dict:
        """
        Run all validations.

        Returns a dict with keys:
          overall_valid  - False if a required field is missing OR any error fires
          field_checks   - presence booleans for required/preferred/text fields
          coverage       - percentage scores per field group
          missing_fields - list of required field names that are absent
          errors         - blocking problems
          warnings       - non-blocking problems
        """
        errors: list[str] = []
        warnings: list[str] = []
        r = self.record

        # ── Error checks ─────────────────────────────────────────────────────

        if r.url and not r.url.startswith(("http://", "https://")):
            errors.append(f"url: not absolute ({r.url[:50]!r})")

        if r.cover and not r.cover.startswith(("http://", "https://")):
            errors.append(f"cover: not an absolute image URL ({r.cover[:60]!r})")

        # ── Warning checks ────────────────────────────────────────────────────

        if r.pages and not r.pages.isdigit():
            warnings.append(f"pages: not numeric ({r.pages!r})")

        if r.isbn and not (_ISBN_PATTERN.fullmatch(r.isbn) or _ASIN_PATTERN.fullmatch(r.isbn)):
            warnings.append(f"isbn: unexpected format ({r.isbn!r})")

        if r.date_published and re.match(r"\d{4}-", r.date_published) \
                and not _ISO_DATE_PATTERN.fullmatch(r.date_published):
            warnings.append(f"date_published: malformed ISO date ({r.date_published!r})")

        if len(r.summary) > 500:
            warnings.append(f"summary: too long ({len(r.summary)} chars, max 500)")

        # ── Field presence ────────────────────────────────────────────────────

        required_fields = {
            "title": bool(r.title),
            "url": bool(r.url),
        }
        preferred_fields = {
            "author": bool(r.author),
            "pages": bool(r.pages),
            "cover": bool(r.cover),
            "publisher": bool(r.publisher),
            "date_published": bool(r.date_published),
            "isbn": bool(r.isbn),
        }
        text_fields = {
            "description": bool(r.description),
            "summary": bool(r.summary),
        }

        required_score = sum(required_fields.values()) / len(required_fields) * 100
        preferred_score = sum(preferred_fields.values()) / len(preferred_fields) * 100
        text_score = sum(text_fields.values()) / len(text_fields) * 100

        missing_fields = [k for k, v in required_fields.items() if not v]
        missing_preferred = [k for k, v in preferred_fields.items() if not v]
        if missing_preferred:
            warnings.append(f"missing preferred fields: {', '.join(missing_preferred)}")

        return {
            "overall_valid": required_score == 100 and not errors,
            "field_checks": {
                "required": required_fields,
                "preferred": preferred_fields,
                "text": text_fields,
            },
            "coverage": {
                "required_fields": f"{required_score:.0f}%",
                "preferred_fields": f"{preferred_score:.0f}%",
                "text_fields": f"{text_score:.0f}%",
                "overall": f"{(required_score * 0.5 + preferred_score * 0.35 + text_score * 0.15):.1f}%",
            },
            "missing_fields": missing_fields,
            "errors": errors,
            "warnings": warnings,
        }
