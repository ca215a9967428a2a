"""
Filesystem storage - a vault that lives in a local directory.

Blocking filesystem calls run in a thread pool so the event loop stays free
while the resolver waits on reads and renames.
"""

import asyncio
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional

import aiofiles

from ..exceptions import FileOperationError, NoteReadError, StorageError
from ..models.note import NOTE_EXTENSION, Folder, Node, Note, normalize_path
from .base import NoteStorage

logger = logging.getLogger(__name__)


class FilesystemNoteStorage(NoteStorage):
    """Note storage backed by a vault directory on disk."""

    def __init__(self,
                 vault_dir: Path,
                 note_extension: str = NOTE_EXTENSION,
                 max_workers: int = 4):
        self.vault_dir = Path(vault_dir).resolve()
        self.note_extension = note_extension
        self._executor = ThreadPoolExecutor(max_workers=max_workers)

    def resolve(self, path: str) -> Path:
        """Map a vault-relative path onto the filesystem.

        Raises:
            StorageError: If the path points outside the vault.
        """
        normalized = normalize_path(path)
        if normalized == "/":
            return self.vault_dir
        absolute = (self.vault_dir / normalized).resolve()
        if absolute != self.vault_dir and self.vault_dir not in absolute.parents:
            raise StorageError(f"Path escapes the vault: {path}")
        return absolute

    def relative(self, absolute: Path) -> str:
        """Vault-relative, forward-slash path for an absolute path."""
        return normalize_path(Path(absolute).relative_to(self.vault_dir).as_posix())

    def _is_hidden(self, absolute: Path) -> bool:
        relative_parts = absolute.relative_to(self.vault_dir).parts
        return any(part.startswith(".") for part in relative_parts)

    async def _run(self, fn):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, fn)

    async def list_notes(self) -> List[Note]:
        def _scan():
            notes = []
            for file_path in sorted(self.vault_dir.rglob(f"*{self.note_extension}")):
                if not file_path.is_file() or self._is_hidden(file_path):
                    continue
                notes.append(Note.from_path(self.relative(file_path)))
            return notes

        notes = await self._run(_scan)
        logger.debug(f"Found {len(notes)} notes in {self.vault_dir}")
        return notes

    async def read_text(self, note: Note) -> str:
        try:
            async with aiofiles.open(self.resolve(note.path), mode='r', encoding='utf-8') as f:
                return await f.read()
        except (OSError, UnicodeDecodeError, StorageError) as e:
            raise NoteReadError(f"Cannot read {note.path}: {e}")

    async def get_node(self, path: str) -> Optional[Node]:
        absolute = self.resolve(path)

        def _stat():
            if absolute.is_dir():
                return Folder(normalize_path(path))
            if absolute.is_file():
                return Note.from_path(path)
            return None

        return await self._run(_stat)

    async def create_folder(self, path: str) -> Folder:
        absolute = self.resolve(path)

        def _create():
            try:
                absolute.mkdir(exist_ok=True)
            except FileExistsError:
                raise FileOperationError(f"A file is in the way of folder {path}")
            except OSError as e:
                raise FileOperationError(f"Failed to create folder {path}: {e}")

        await self._run(_create)
        logger.debug(f"Created folder {path}")
        return Folder(normalize_path(path))

    async def rename(self, from_path: str, to_path: str) -> Note:
        source = self.resolve(from_path)
        target = self.resolve(to_path)

        def _rename():
            try:
                os.rename(source, target)
            except OSError as e:
                raise FileOperationError(f"Failed to move {from_path} to {to_path}: {e}")

        await self._run(_rename)
        return Note.from_path(to_path)

    def close(self) -> None:
        self._executor.shutdown(wait=True)
