"""
Note Vault

Writes rendered notes as Markdown files under a vault directory, never
overwriting an existing note.
"""

import logging
from pathlib import Path

from ..models import BookRecord

logger = logging.getLogger(__name__)

NOTE_SUFFIX = ".md"


class NoteVault:
    """
    A directory of Markdown notes.

    Usage:
        vault = NoteVault("~/Notes")
        path = vault.write_note(record, content, folder="Books")
    """

    def __init__(self, root: str | Path):
        self.root = Path(root).expanduser()

    def resolve_folder(self, folder: str = "") -> Path:
        """
        Resolve a vault-relative folder.

        Args:
            folder: Folder path; empty or "/" means the vault root

        Raises:
            FileNotFoundError: If the vault or the folder does not exist
        """
        if not self.root.is_dir():
            raise FileNotFoundError(f"Vault not found: {self.root}")

        folder = (folder or "").strip().strip("/")
        if not folder:
            return self.root

        target = self.root / folder
        if not target.is_dir():
            raise FileNotFoundError(
                f"Save folder not found: {folder}. Please set a valid path in settings."
            )
        return target

    def unique_stem(self, stem: str, folder: Path) -> str:
        """First of "stem", "stem 1", "stem 2", ... with no note in folder."""
        candidate = stem
        counter = 1
        while (folder / f"{candidate}{NOTE_SUFFIX}").exists():
            candidate = f"{stem} {counter}"
            counter += 1
        return candidate

    def write_note(self, record: BookRecord, content: str, folder: str = "") -> Path:
        """
        Write content as a new note named after the record's title.

        Returns:
            Path of the created note
        """
        target_dir = self.resolve_folder(folder)
        stem = self.unique_stem(record.filename_stem() or "Untitled", target_dir)
        path = target_dir / f"{stem}{NOTE_SUFFIX}"
        path.write_text(content, encoding='utf-8')
        logger.info("New note created: %s", path.name)
        return path
