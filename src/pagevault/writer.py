"""Write notes into the vault filesystem."""

import logging
from pathlib import Path

import click

from .config import Settings
from .exceptions import NoteWriteError
from .models import PageCapture
from .utils import format_file_name, normalize_folder

logger = logging.getLogger(__name__)


def unique_file_name(folder: Path, file_name: str) -> str:
    """Return file_name, or "<name> N.md" with the first N that is free in folder."""
    base_name = file_name[:-3] if file_name.endswith(".md") else file_name
    final_name = file_name
    counter = 1
    while (folder / final_name).exists():
        final_name = f"{base_name} {counter}.md"
        counter += 1
    return final_name


class VaultWriter:
    """Creates note files under a vault directory."""

    def __init__(self, vault_path: Path):
        self.vault_path = Path(vault_path)

    def save_note(self, content: str, page: PageCapture, settings: Settings) -> Path:
        """Write content to a new file in the configured save folder.

        Existing files are never overwritten. Returns the path of the new note.
        """
        folder = self.vault_path / normalize_folder(settings.save_folder)
        file_name = format_file_name(settings.file_name_template, page)

        try:
            folder.mkdir(parents=True, exist_ok=True)
            filepath = folder / unique_file_name(folder, file_name)
            with filepath.open("x", encoding="utf-8") as handle:
                handle.write(content)
        except OSError as e:
            logger.debug("Saving note for %s failed: %s", page.url, e)
            raise NoteWriteError(f"Failed to save note: {e}") from e

        logger.debug("Saved note %s", filepath)
        return filepath

    def relative_path(self, path: Path) -> str:
        """Vault-relative form of path, for messages."""
        try:
            return Path(path).relative_to(self.vault_path).as_posix()
        except ValueError:
            return str(path)

    @staticmethod
    def open_note(path: Path) -> None:
        """Open a note with the system's default application."""
        click.launch(str(path))
