"""Link-source resolution: move a new note next to the note that links to it."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..domain.result import Failure, Result, Success
from ..exceptions import MoveError, NoteReadError
from ..models.note import NOTE_EXTENSION, Note, normalize_path
from ..storage.base import NoteStorage, Notifier
from .link_pattern import build_link_pattern

logger = logging.getLogger(__name__)


class MoveReason(Enum):
    """Why a resolution ended the way it did."""
    MOVED = "moved"
    NO_SOURCE = "no_source"
    NOT_A_NOTE = "not_a_note"
    ALREADY_IN_PLACE = "already_in_place"


@dataclass(frozen=True)
class Relocation:
    """Outcome of a resolution that did not fail."""
    note_path: str
    reason: MoveReason
    source_path: Optional[str] = None
    destination_folder: Optional[str] = None
    destination_path: Optional[str] = None

    @property
    def moved(self) -> bool:
        return self.reason is MoveReason.MOVED

    def __bool__(self) -> bool:
        return self.moved


class LinkSourceResolver:
    """Find the note that links to a new note and move the new note into a
    folder named after it.

    Given ``A.md`` containing ``[[B]]``, resolving ``B.md`` creates ``A/``
    next to ``A.md`` (if needed) and moves ``B.md`` to ``A/B.md``.
    """

    def __init__(self,
                 storage: NoteStorage,
                 notifier: Notifier,
                 note_extension: str = NOTE_EXTENSION):
        self.storage = storage
        self.notifier = notifier
        self.note_extension = note_extension

    async def resolve_and_move(self, note: Note) -> Result[Relocation, MoveError]:
        """Move *note* into its referencing note's folder.

        Never raises: failures come back as ``Failure(MoveError)`` and a
        note without a referencing source comes back as a ``Success`` whose
        relocation is not ``moved``.
        """
        if not note.has_extension(self.note_extension):
            return Success(Relocation(note.path, MoveReason.NOT_A_NOTE))

        try:
            source = await self.find_source(note)
            if source is None:
                logger.info(f"No source note found for {note.basename}")
                return Success(Relocation(note.path, MoveReason.NO_SOURCE))

            folder = self.destination_folder(source)
            destination = normalize_path(f"{folder}/{note.name}")
            if destination == note.path:
                logger.info(f"{note.path} is already in {folder}")
                return Success(Relocation(
                    note.path, MoveReason.ALREADY_IN_PLACE,
                    source_path=source.path,
                    destination_folder=folder,
                    destination_path=destination,
                ))

            if await self.storage.get_node(folder) is None:
                await self.storage.create_folder(folder)

            await self.storage.rename(note.path, destination)
        except Exception as e:
            logger.error(f"Failed to move {note.path}: {e}")
            return Failure(MoveError(f"Failed to move {note.path}: {e}", note.path, cause=e))

        try:
            self.notifier.show(f"Moved note \"{note.basename}\" to \"{folder}\"")
        except Exception as e:
            logger.warning(f"Could not show move notice for {note.path}: {e}")
        logger.info(f"Moved {note.path} -> {destination}")
        return Success(Relocation(
            note.path, MoveReason.MOVED,
            source_path=source.path,
            destination_folder=folder,
            destination_path=destination,
        ))

    async def find_source(self, note: Note) -> Optional[Note]:
        """Return the first other note that links to *note*, if any."""
        pattern = build_link_pattern(note.basename)

        for candidate in await self.storage.list_notes():
            if candidate.path == note.path:
                continue
            read = await self.read_candidate(candidate)
            if read.is_failure():
                logger.debug(f"Skipping {candidate.path}: {read.error()}")
                continue
            if pattern.search(read.value()):
                return candidate
        return None

    async def read_candidate(self, candidate: Note) -> Result[str, NoteReadError]:
        try:
            return Success(await self.storage.read_text(candidate))
        except NoteReadError as e:
            return Failure(e)
        except Exception as e:
            return Failure(NoteReadError(f"Cannot read {candidate.path}: {e}"))

    @staticmethod
    def destination_folder(source: Note) -> str:
        """Folder named after *source*, next to it."""
        return normalize_path(f"{source.parent}/{source.basename}")
