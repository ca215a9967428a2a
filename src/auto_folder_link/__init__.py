"""Auto Folder Link

Moves a newly created note into a folder named after the note that links
to it.
"""

__version__ = "0.1.0"

from .core.resolver import LinkSourceResolver, Relocation, MoveReason
from .core.link_pattern import build_link_pattern
from .models.note import Note, Folder, normalize_path
from .models.config import Config, Settings, SettingsStore
from .plugin import AutoFolderLinkPlugin
from .storage import NoteStorage, Notifier, FilesystemNoteStorage, InMemoryNoteStorage

__all__ = [
    # Core
    "LinkSourceResolver",
    "Relocation",
    "MoveReason",
    "build_link_pattern",
    "AutoFolderLinkPlugin",

    # Models
    "Note",
    "Folder",
    "normalize_path",
    "Config",
    "Settings",
    "SettingsStore",

    # Storage
    "NoteStorage",
    "Notifier",
    "FilesystemNoteStorage",
    "InMemoryNoteStorage",
]
