"""Storage backends for auto folder link."""

from .base import NoteStorage, Notifier
from .filesystem import FilesystemNoteStorage
from .memory import InMemoryNoteStorage

__all__ = [
    "NoteStorage",
    "Notifier",
    "FilesystemNoteStorage",
    "InMemoryNoteStorage",
]
