#!/usr/bin/env python3
"""
Add Book

Creates a book note from a Goodreads, Amazon, Taaghche or Fidibo page.
Site is auto-detected from URL.

Usage:
    python3 add_book.py --url https://www.goodreads.com/book/show/1885.Pride_and_Prejudice
    python3 add_book.py --url https://www.amazon.com/dp/0141439513 --vault ~/Notes --folder Books
    python3 add_book.py --url https://taaghche.com/book/12345 --dry-run
"""

import argparse
import json
import os
import sys
from dataclasses import asdict
from pathlib import Path

from dotenv import load_dotenv

from addbook.common import load_settings, setup_logging
from addbook.extraction import RecordValidator, identify_source
from addbook.importer import AddBookError, BookImporter, UnsupportedSiteError
from addbook.models import BookRecord


def print_report(record: BookRecord, validation: dict, site: str = ""):
    """Print extraction report."""

    print("\n" + "="*80)
    print("EXTRACTION REPORT")
    print("="*80)

    print(f"\nSite: {site}")
    print(f"Book URL: {record.url}")
    print(f"Title: {record.title[:70]}..." if len(record.title) > 70 else f"Title: {record.title}")

    print("\n" + "-"*80)
    print("EXTRACTED DATA")
    print("-"*80)

    fields = [
        ("Author", record.author),
        ("Translator", record.translator),
        ("Pages", record.pages),
        ("Publisher", record.publisher),
        ("Published", record.date_published),
        ("Language", record.language),
        ("ISBN", record.isbn),
        ("Cover", record.cover),
    ]

    for label, value in fields:
        status = "OK" if value else "MISSING"
        print(f"  [{status:7}] {label:12} {value or 'MISSING'}")

    print("\nTEXT:")
    for name, content in [("Description", record.description), ("Summary", record.summary)]:
        status = "OK" if content else "MISSING"
        print(f"  [{status:7}] {name:12} {len(content)} characters")

    coverage = validation["coverage"]
    print(f"\n  Overall Coverage: {coverage['overall']}")

    if validation["errors"]:
        print("\nERRORS:")
        for error in validation["errors"]:
            print(f"  - {error}")

    if validation["warnings"]:
        print("\nWARNINGS:")
        for warning in validation["warnings"]:
            print(f"  - {warning}")

    print("\n" + "="*80)


def build_settings(args) -> dict:
    """Settings file values overridden by environment and command line."""
    settings = load_settings(args.config)
    notes = settings["notes"]
    summary = settings["summary"]

    notes["vault"] = args.vault or os.getenv("ADD_BOOK_VAULT") or notes["vault"]
    if args.folder is not None:
        notes["save_folder"] = args.folder
    if args.template is not None:
        notes["template_path"] = args.template
    if args.no_summary:
        summary["enabled"] = False
    summary["google_books_api_key"] = (
        os.getenv("GOOGLE_BOOKS_API_KEY") or summary["google_books_api_key"]
    )
    return settings


def main():
    parser = argparse.ArgumentParser(
        description="Create a book note from a book page URL"
    )
    parser.add_argument("--url", required=True, help="Book page URL")
    parser.add_argument("--vault", help="Vault directory (default: $ADD_BOOK_VAULT or settings)")
    parser.add_argument("--folder", help="Vault-relative folder for the new note")
    parser.add_argument("--template", help="Note template file (vault-relative or absolute)")
    parser.add_argument("--config", help="Settings YAML (default: config/settings.yaml)")
    parser.add_argument("--no-summary", action="store_true", help="Skip catalog summary lookup")
    parser.add_argument("--dry-run", action="store_true",
                        help="Print the rendered note instead of writing it")
    parser.add_argument("--output-json", help="Also save extracted data and validation as JSON")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("--quiet", action="store_true", help="Warnings only")

    args = parser.parse_args()

    load_dotenv()
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    site = identify_source(args.url)
    print(f"Extracting from: {site or 'unknown'}")
    print(f"URL: {args.url}")

    try:
        settings = build_settings(args)
        importer = BookImporter(settings)

        if not args.dry_run:
            importer.vault().resolve_folder(importer.save_folder())

        record = importer.fetch_record(args.url)

        validation = RecordValidator(record).validate()
        print_report(record, validation, site)

        if args.output_json:
            output_path = Path(args.output_json)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, 'w', encoding='utf-8') as f:
                json.dump({"site": site, "book": asdict(record), "validation": validation},
                          f, indent=2, ensure_ascii=False)
            print(f"\nResults saved to: {output_path}")

        if args.dry_run:
            print(importer.render(record))
        else:
            path = importer.save(record)
            print(f"\nNew note created: {path}")

        sys.exit(0 if validation["overall_valid"] else 1)

    except UnsupportedSiteError as e:
        print(f"\nError: {e}")
        sys.exit(2)
    except (AddBookError, FileNotFoundError) as e:
        print(f"\nError: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
