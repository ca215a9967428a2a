"""Storage and notification interfaces.

The resolver only talks to these abstractions, so any backend that can list
notes, read their text, create folders and rename files can host it.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.note import Folder, Node, Note


class NoteStorage(ABC):
    """Async access to the notes and folders of a vault."""

    @abstractmethod
    async def list_notes(self) -> List[Note]:
        """Return every note document in the vault."""
        pass

    @abstractmethod
    async def read_text(self, note: Note) -> str:
        """Return the full text of *note*.

        Raises:
            NoteReadError: If the note cannot be read (e.g. it vanished).
        """
        pass

    @abstractmethod
    async def get_node(self, path: str) -> Optional[Node]:
        """Return the note or folder at *path*, or ``None`` if absent."""
        pass

    @abstractmethod
    async def create_folder(self, path: str) -> Folder:
        """Create a folder. A folder that already exists is not an error."""
        pass

    @abstractmethod
    async def rename(self, from_path: str, to_path: str) -> Note:
        """Move a note and return it at its new path.

        Raises:
            FileOperationError: If the underlying move fails.
        """
        pass


class Notifier(ABC):
    """User-facing feedback channel."""

    @abstractmethod
    def show(self, message: str) -> None:
        """Show a transient message to the user."""
        pass
