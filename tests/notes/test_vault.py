"""Tests for addbook/notes/vault.py"""

import pytest

from addbook.models import BookRecord
from addbook.notes.vault import NoteVault


@pytest.fixture
def vault(tmp_path):
    return NoteVault(tmp_path)


class TestResolveFolder:
    @pytest.mark.parametrize("folder", ["", "/"])
    def test_root(self, vault, tmp_path, folder):
        assert vault.resolve_folder(folder) == tmp_path

    def test_existing_folder(self, vault, tmp_path):
        (tmp_path / "Books").mkdir()
        assert vault.resolve_folder("Books/") == tmp_path / "Books"

    def test_missing_folder(self, vault):
        with pytest.raises(FileNotFoundError, match="Save folder not found"):
            vault.resolve_folder("Nope")

    def test_missing_vault(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Vault not found"):
            NoteVault(tmp_path / "absent").resolve_folder("")


class TestUniqueStem:
    def test_counter_appended(self, vault, tmp_path):
        (tmp_path / "Emma.md").write_text("", encoding="utf-8")
        (tmp_path / "Emma 1.md").write_text("", encoding="utf-8")
        assert vault.unique_stem("Emma", tmp_path) == "Emma 2"

    def test_free_name(self, vault, tmp_path):
        assert vault.unique_stem("Emma", tmp_path) == "Emma"


class TestWriteNote:
    def test_writes_named_note(self, vault, tmp_path):
        record = BookRecord(title="What If?: Answers")
        path = vault.write_note(record, "content", "")
        assert path == tmp_path / "What If Answers.md"
        assert path.read_text(encoding="utf-8") == "content"

    def test_never_overwrites(self, vault, tmp_path):
        (tmp_path / "Books").mkdir()
        record = BookRecord(title="Emma")
        first = vault.write_note(record, "one", "Books")
        second = vault.write_note(record, "two", "Books")
        assert first.name == "Emma.md"
        assert second.name == "Emma 1.md"
        assert first.read_text(encoding="utf-8") == "one"
