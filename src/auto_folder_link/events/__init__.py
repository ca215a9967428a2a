"""
Event System

Vault events connect the filesystem watcher, the plugin and observers.
"""

from .event_bus import EventBus, VaultEvent
from .vault_events import NoteCreated, NoteMoved, NoteLeftInPlace

__all__ = [
    "EventBus",
    "VaultEvent",
    "NoteCreated",
    "NoteMoved",
    "NoteLeftInPlace",
]
