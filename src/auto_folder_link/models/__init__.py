"""Data models for auto folder link."""

from .note import Note, Folder, normalize_path, NOTE_EXTENSION
from .config import Config, Settings, SettingsStore

__all__ = [
    "Note",
    "Folder",
    "normalize_path",
    "NOTE_EXTENSION",
    "Config",
    "Settings",
    "SettingsStore",
]
