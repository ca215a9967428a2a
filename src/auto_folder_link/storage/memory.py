"""In-memory storage for tests and embedding.

Enumeration follows insertion order. Read and rename failures can be
injected per path to exercise the resolver's recovery paths.
"""

import posixpath
from typing import Dict, List, Optional, Set, Tuple

from ..exceptions import FileOperationError, NoteReadError
from ..models.note import NOTE_EXTENSION, Folder, Node, Note, normalize_path
from .base import NoteStorage


class InMemoryNoteStorage(NoteStorage):
    """A dict-backed vault."""

    def __init__(self, note_extension: str = NOTE_EXTENSION):
        self.note_extension = note_extension
        self.files: Dict[str, str] = {}
        self.folders: Set[str] = set()
        self.created_folders: List[str] = []
        self.renames: List[Tuple[str, str]] = []
        self.unreadable: Set[str] = set()
        self.rename_error: Optional[Exception] = None

    def add_note(self, path: str, content: str = "") -> Note:
        """Create a note, registering its parent folders."""
        note = Note.from_path(path)
        self._add_parents(note.path)
        self.files[note.path] = content
        return note

    def add_folder(self, path: str) -> Folder:
        path = normalize_path(path)
        self._add_parents(path)
        self.folders.add(path)
        return Folder(path)

    def fail_reads(self, path: str) -> None:
        self.unreadable.add(normalize_path(path))

    def _add_parents(self, path: str) -> None:
        parent = posixpath.dirname(path)
        while parent:
            self.folders.add(parent)
            parent = posixpath.dirname(parent)

    def mutation_count(self) -> int:
        return len(self.created_folders) + len(self.renames)

    async def list_notes(self) -> List[Note]:
        return [
            Note(path) for path in self.files
            if Note(path).has_extension(self.note_extension)
        ]

    async def read_text(self, note: Note) -> str:
        if note.path in self.unreadable or note.path not in self.files:
            raise NoteReadError(f"Cannot read {note.path}")
        return self.files[note.path]

    async def get_node(self, path: str) -> Optional[Node]:
        path = normalize_path(path)
        if path == "/" or path in self.folders:
            return Folder(path)
        if path in self.files:
            return Note(path)
        return None

    async def create_folder(self, path: str) -> Folder:
        path = normalize_path(path)
        if path in self.files:
            raise FileOperationError(f"A file is in the way of folder {path}")
        if path not in self.folders:
            self._add_parents(path)
            self.folders.add(path)
            self.created_folders.append(path)
        return Folder(path)

    async def rename(self, from_path: str, to_path: str) -> Note:
        from_path = normalize_path(from_path)
        to_path = normalize_path(to_path)
        if self.rename_error is not None:
            raise self.rename_error
        if from_path not in self.files:
            raise FileOperationError(f"No such note: {from_path}")
        if posixpath.dirname(to_path) and posixpath.dirname(to_path) not in self.folders:
            raise FileOperationError(f"No such folder: {posixpath.dirname(to_path)}")
        self.files[to_path] = self.files.pop(from_path)
        self.renames.append((from_path, to_path))
        return Note(to_path)
