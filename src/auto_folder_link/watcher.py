"""Filesystem watcher that turns file creation into vault events."""

import asyncio
import logging
import os
from pathlib import Path
from typing import Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .events import EventBus, NoteCreated
from .models.note import NOTE_EXTENSION, normalize_path

logger = logging.getLogger(__name__)


class VaultEventHandler(FileSystemEventHandler):
    """Forward ``on_created`` from the observer thread to the event loop."""

    def __init__(self,
                 vault_dir: Path,
                 event_bus: EventBus,
                 loop: asyncio.AbstractEventLoop,
                 note_extension: str = NOTE_EXTENSION):
        super().__init__()
        self.vault_dir = Path(vault_dir).resolve()
        self.event_bus = event_bus
        self.loop = loop
        self.note_extension = note_extension

    def to_vault_path(self, src_path) -> Optional[str]:
        """Vault-relative path, or ``None`` for paths that are not watched."""
        try:
            relative = Path(os.fsdecode(src_path)).resolve().relative_to(self.vault_dir)
        except ValueError:
            return None
        if any(part.startswith(".") for part in relative.parts):
            return None
        return normalize_path(relative.as_posix())

    def on_created(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        path = self.to_vault_path(event.src_path)
        if path is None or not path.lower().endswith(self.note_extension.lower()):
            return
        logger.debug(f"Created: {path}")
        asyncio.run_coroutine_threadsafe(
            self.event_bus.publish(NoteCreated(path=path)),
            self.loop,
        )


class VaultWatcher:
    """Watch a vault directory recursively for new notes."""

    def __init__(self,
                 vault_dir: Path,
                 event_bus: EventBus,
                 loop: asyncio.AbstractEventLoop,
                 note_extension: str = NOTE_EXTENSION):
        self.vault_dir = Path(vault_dir)
        self.handler = VaultEventHandler(vault_dir, event_bus, loop, note_extension)
        self._observer = None

    def start(self) -> None:
        self._observer = Observer()
        self._observer.schedule(self.handler, str(self.vault_dir), recursive=True)
        self._observer.start()
        logger.info(f"Watching {self.vault_dir}")

    def stop(self) -> None:
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join()
        self._observer = None
