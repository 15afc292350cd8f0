"""Tests for the add_book.py command line entry point"""

import argparse
import json
from unittest.mock import patch

import pytest

import add_book
from addbook.models import BookRecord


def make_args(**overrides):
    values = dict(url="https://www.goodreads.com/book/show/1", vault=None, folder=None,
                  template=None, config=None, no_summary=False, dry_run=False,
                  output_json=None, verbose=False, quiet=False)
    values.update(overrides)
    return argparse.Namespace(**values)


class TestBuildSettings:
    def test_command_line_overrides(self, tmp_path, monkeypatch):
        monkeypatch.delenv("ADD_BOOK_VAULT", raising=False)
        settings = add_book.build_settings(make_args(
            vault=str(tmp_path), folder="Books", template="T/book.md", no_summary=True,
        ))
        assert settings["notes"]["vault"] == str(tmp_path)
        assert settings["notes"]["save_folder"] == "Books"
        assert settings["notes"]["template_path"] == "T/book.md"
        assert settings["summary"]["enabled"] is False

    def test_environment_values(self, tmp_path, monkeypatch):
        monkeypatch.setenv("ADD_BOOK_VAULT", str(tmp_path))
        monkeypatch.setenv("GOOGLE_BOOKS_API_KEY", "secret")
        settings = add_book.build_settings(make_args())
        assert settings["notes"]["vault"] == str(tmp_path)
        assert settings["summary"]["google_books_api_key"] == "secret"


class TestMain:
    def run(self, argv):
        with patch("sys.argv", ["add_book.py", *argv]), pytest.raises(SystemExit) as exit_info:
            add_book.main()
        return exit_info.value.code

    def test_unsupported_site_exit_code(self, capsys):
        assert self.run(["--url", "https://example.com/book/1", "--quiet"]) == 2
        assert "This site is not supported." in capsys.readouterr().out

    def test_dry_run_prints_note_and_saves_json(self, tmp_path, capsys):
        record = BookRecord(title="Emma", author="Jane Austen",
                            url="https://www.goodreads.com/book/show/6969")
        output_json = tmp_path / "out" / "emma.json"

        with patch.object(add_book.BookImporter, "fetch_record", return_value=record):
            code = self.run(["--url", record.url, "--dry-run", "--quiet",
                             "--vault", str(tmp_path), "--output-json", str(output_json)])

        assert code == 0
        out = capsys.readouterr().out
        assert 'title: "Emma"' in out
        saved = json.loads(output_json.read_text(encoding="utf-8"))
        assert saved["site"] == "goodreads"
        assert saved["book"]["author"] == "Jane Austen"
        assert list(tmp_path.glob("*.md")) == []

    def test_writes_note(self, tmp_path, capsys):
        record = BookRecord(title="Emma", url="https://www.goodreads.com/book/show/6969")
        with patch.object(add_book.BookImporter, "fetch_record", return_value=record):
            code = self.run(["--url", record.url, "--quiet", "--vault", str(tmp_path)])

        assert code == 0
        assert (tmp_path / "Emma.md").exists()
