"""Filesystem-backed note store.

Every read re-scans the vault so callers always get a complete, fresh
snapshot; nothing is cached between calls.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from fnmatch import fnmatch
from pathlib import Path
from typing import Any, Protocol

from .config import NOTE_SUFFIX, ROOT_FOLDER
from .errors import InvalidPathError
from .models import Note, folder_of
from .parser import ParseError, compute_backlinks, parse_note, serialize_note
from .resolver import resolve_link_target
from .snapshot import NoteSnapshot

log = logging.getLogger(__name__)


class NoteStore(Protocol):
    """Anything that can hand the engine a full note collection."""

    def get_all_notes(self) -> list[Note]: ...


def _timestamp(value: float | None) -> datetime | None:
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=UTC)


class LocalNoteStore:
    """Notes stored as markdown files under a vault directory."""

    def __init__(self, vault_root: Path, exclude: list[str] | tuple[str, ...] = ()) -> None:
        self.vault_root = Path(vault_root)
        self.exclude = list(exclude)

    def _relative(self, file_path: Path) -> str:
        return file_path.relative_to(self.vault_root).as_posix()

    def _is_excluded(self, rel_path: str) -> bool:
        parts = rel_path.split("/")
        # Skip dot-directories such as .obsidian/ and .git/
        if any(part.startswith(".") for part in parts[:-1]):
            return True
        return any(fnmatch(rel_path, pattern) for pattern in self.exclude)

    def _resolve(self, path: str) -> Path:
        if not path or path.startswith("/"):
            raise InvalidPathError(path, "must be relative to the vault root")
        if not path.endswith(NOTE_SUFFIX):
            raise InvalidPathError(path, f"must end with {NOTE_SUFFIX}")

        root = self.vault_root.resolve()
        full_path = (root / path).resolve()
        if not full_path.is_relative_to(root):
            raise InvalidPathError(path, "path escapes the vault")
        return full_path

    def _read_note(self, file_path: Path, rel_path: str | None = None) -> Note:
        rel_path = rel_path or self._relative(file_path)
        raw = file_path.read_text(encoding="utf-8")
        stat = file_path.stat()
        return parse_note(
            rel_path,
            raw,
            modified=_timestamp(stat.st_mtime),
            created=_timestamp(getattr(stat, "st_birthtime", None)),
        )

    def _scan(self) -> list[Note]:
        if not self.vault_root.is_dir():
            log.warning("Vault root %s does not exist", self.vault_root)
            return []

        notes: list[Note] = []
        for md_file in sorted(self.vault_root.rglob(f"*{NOTE_SUFFIX}")):
            if not md_file.is_file() or self._is_excluded(self._relative(md_file)):
                continue
            try:
                notes.append(self._read_note(md_file))
            except (ParseError, OSError, UnicodeDecodeError) as e:
                log.warning("Skipping %s: %s", md_file, e)
        return notes

    def get_all_notes(self) -> list[Note]:
        """Load every note in the vault with backlinks attached."""
        notes = self._scan()
        backlinks = compute_backlinks(notes)
        log.debug("Loaded %d notes from %s", len(notes), self.vault_root)
        return [note.model_copy(update={"backlinks": backlinks[note.path]}) for note in notes]

    def get_note(self, path: str, include_backlinks: bool = True) -> Note | None:
        """Load one note by path. Returns None if missing or excluded.

        Only this file is parsed when include_backlinks is False. Backlinks
        need every other note's links and titles, so asking for them costs a
        full vault scan; only links resolving to this note are kept.
        """
        full_path = self._resolve(path)
        if not full_path.is_file() or self._is_excluded(path):
            return None
        if not include_backlinks:
            return self._read_note(full_path, path)

        snapshot = NoteSnapshot(self._scan())
        note = snapshot.get(path)
        if note is None:
            return None
        backlinks = [
            link
            for other in snapshot
            for link in other.links
            if resolve_link_target(link.target, snapshot) == path
        ]
        return note.model_copy(update={"backlinks": backlinks})

    def write_note(self, path: str, content: str, metadata: dict[str, Any] | None = None) -> Note:
        """Create or overwrite a note and return it as parsed from disk.

        Only the written file is re-read, so backlinks on the result are
        empty; use get_note() for them.
        """
        full_path = self._resolve(path)
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_text(serialize_note(content, metadata), encoding="utf-8")
        log.info("Wrote note %s", path)
        return self._read_note(full_path, path)

    def delete_note(self, path: str) -> bool:
        """Delete a note. Returns False if it did not exist."""
        full_path = self._resolve(path)
        if not full_path.is_file():
            return False
        full_path.unlink()
        log.info("Deleted note %s", path)
        return True

    def list_folders(self) -> list[str]:
        folders = {folder_of(note.path) for note in self._scan()}
        folders.discard(ROOT_FOLDER)
        return sorted(folders)

    def list_tags(self) -> list[str]:
        return sorted({tag for note in self._scan() for tag in note.tags})
