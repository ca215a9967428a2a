"""
Vault Events - the events exchanged between the watcher and the plugin.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .event_bus import VaultEvent


@dataclass(kw_only=True)
class NoteCreated(VaultEvent):
    """A file appeared in the vault."""
    path: str
    is_directory: bool = False

    def _get_event_data(self) -> Dict[str, Any]:
        return {"path": self.path, "is_directory": self.is_directory}


@dataclass(kw_only=True)
class NoteMoved(VaultEvent):
    """A note was moved into the folder of the note that links to it."""
    from_path: str
    to_path: str
    source_path: str

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "from_path": self.from_path,
            "to_path": self.to_path,
            "source_path": self.source_path,
        }


@dataclass(kw_only=True)
class NoteLeftInPlace(VaultEvent):
    """A resolution finished without moving the note."""
    path: str
    reason: str
    error: Optional[str] = None

    def _get_event_data(self) -> Dict[str, Any]:
        return {"path": self.path, "reason": self.reason, "error": self.error}
