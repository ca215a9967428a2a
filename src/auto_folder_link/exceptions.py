"""Custom exceptions for auto folder link."""


class AutoFolderLinkError(Exception):
    """Base exception for auto folder link errors."""
    pass


class StorageError(AutoFolderLinkError):
    """Raised when the note storage rejects an operation."""
    pass


class NoteReadError(StorageError):
    """Raised when the text of a note cannot be read."""
    pass


class FileOperationError(StorageError):
    """Raised when creating a folder or renaming a note fails."""
    pass


class MoveError(AutoFolderLinkError):
    """Raised when a note could not be moved to its referencing folder."""

    def __init__(self, message: str, note_path: str, cause: Exception = None):
        super().__init__(message)
        self.note_path = note_path
        self.cause = cause


class ConfigurationError(AutoFolderLinkError):
    """Raised when there's an error in configuration."""
    pass


class CommandError(AutoFolderLinkError):
    """Raised when a command cannot be registered or executed."""
    pass
