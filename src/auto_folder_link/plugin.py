"""Trigger layer: wires the resolver to vault events, settings and commands.

Two things start a resolution:

* a :class:`NoteCreated` event for a note document, while ``auto_move`` is on;
* the ``auto-folder-link-move-current`` command, for the active note,
  regardless of ``auto_move``.
"""

import logging
from typing import Optional

from .commands import Command, CommandRegistry
from .core.resolver import LinkSourceResolver, Relocation
from .domain.result import Result
from .events import EventBus, NoteCreated, NoteLeftInPlace, NoteMoved
from .exceptions import MoveError
from .models.config import Settings, SettingsStore
from .models.note import NOTE_EXTENSION, Note
from .storage.base import NoteStorage, Notifier

logger = logging.getLogger(__name__)

MOVE_CURRENT_COMMAND_ID = "auto-folder-link-move-current"
MOVE_CURRENT_COMMAND_NAME = "Move current file to its referencing folder"
NO_ACTIVE_FILE_MESSAGE = "No active file"


class AutoFolderLinkPlugin:
    """Keeps new notes next to the notes that link to them."""

    def __init__(self,
                 storage: NoteStorage,
                 notifier: Notifier,
                 settings_store: SettingsStore,
                 event_bus: Optional[EventBus] = None,
                 commands: Optional[CommandRegistry] = None,
                 note_extension: str = NOTE_EXTENSION):
        self.storage = storage
        self.notifier = notifier
        self.settings_store = settings_store
        self.event_bus = event_bus or EventBus()
        self.commands = commands or CommandRegistry()
        self.note_extension = note_extension
        self.resolver = LinkSourceResolver(storage, notifier, note_extension)
        self.settings = Settings()
        self.active_note: Optional[str] = None
        self.loaded = False

    async def on_load(self) -> None:
        self.settings = self.settings_store.load()
        self.event_bus.subscribe(NoteCreated, self.handle_note_created)
        self.commands.add_command(Command(
            id=MOVE_CURRENT_COMMAND_ID,
            name=MOVE_CURRENT_COMMAND_NAME,
            callback=self.move_active_note,
        ))
        self.loaded = True
        logger.info(f"AutoFolderLink loaded (auto move {'on' if self.settings.auto_move else 'off'})")

    async def on_unload(self) -> None:
        self.event_bus.unsubscribe(NoteCreated, self.handle_note_created)
        self.commands.remove_command(MOVE_CURRENT_COMMAND_ID)
        self.loaded = False
        logger.info("AutoFolderLink unloaded")

    def update_settings(self, auto_move: bool) -> Settings:
        """Change the settings and save them immediately."""
        self.settings.auto_move = auto_move
        self.settings_store.save(self.settings)
        logger.info(f"Auto move {'enabled' if auto_move else 'disabled'}")
        return self.settings

    def set_active_note(self, path: Optional[str]) -> None:
        self.active_note = path

    async def handle_note_created(self, event: NoteCreated,
                                  settings: Optional[Settings] = None
                                  ) -> Optional[Result[Relocation, MoveError]]:
        """Resolve a newly created note when auto move is enabled.

        Returns ``None`` when the event is ignored.
        """
        settings = settings or self.settings
        if not settings.auto_move:
            return None
        if event.is_directory:
            return None

        note = Note.from_path(event.path)
        if not note.has_extension(self.note_extension):
            return None
        return await self.try_move(note)

    async def move_active_note(self) -> Optional[Result[Relocation, MoveError]]:
        """Manual trigger for whichever note is active."""
        if not self.active_note:
            self.notifier.show(NO_ACTIVE_FILE_MESSAGE)
            return None
        return await self.try_move(Note.from_path(self.active_note))

    async def try_move(self, note: Note) -> Result[Relocation, MoveError]:
        result = await self.resolver.resolve_and_move(note)
        if result.is_success() and result.value().moved:
            relocation = result.value()
            if self.active_note == note.path:
                self.active_note = relocation.destination_path
            await self.event_bus.publish(NoteMoved(
                from_path=relocation.note_path,
                to_path=relocation.destination_path,
                source_path=relocation.source_path,
            ))
        elif result.is_success():
            await self.event_bus.publish(NoteLeftInPlace(
                path=note.path, reason=result.value().reason.value,
            ))
        else:
            await self.event_bus.publish(NoteLeftInPlace(
                path=note.path, reason="error", error=str(result.error()),
            ))
        return result
