"""Note and folder models for vault-relative paths."""

import posixpath
from dataclasses import dataclass
from typing import Union

NOTE_EXTENSION = ".md"


def normalize_path(path: str) -> str:
    """Normalize a vault-relative path.

    Backslashes become forward slashes, repeated slashes collapse and
    leading and trailing slashes are stripped. An empty path is the vault
    root, ``"/"``.

    Only separators are touched. Characters inside names (non-breaking
    spaces, decomposed accents) are kept as they are on disk.
    """
    parts = [part for part in path.replace("\\", "/").split("/") if part]
    return "/".join(parts) or "/"


@dataclass(frozen=True)
class Folder:
    """A folder in the vault."""
    path: str

    @property
    def name(self) -> str:
        return posixpath.basename(self.path)

    @property
    def is_root(self) -> bool:
        return self.path in ("", "/")


@dataclass(frozen=True)
class Note:
    """A note document identified by its vault-relative path."""
    path: str

    @classmethod
    def from_path(cls, path: str) -> "Note":
        return cls(path=normalize_path(path))

    @property
    def name(self) -> str:
        """File name including the extension."""
        return posixpath.basename(self.path)

    @property
    def basename(self) -> str:
        """File name without extension or directory."""
        stem, _ = posixpath.splitext(self.name)
        return stem

    @property
    def extension(self) -> str:
        return posixpath.splitext(self.name)[1]

    @property
    def parent(self) -> str:
        """Parent folder path, ``""`` for notes at the vault root."""
        return posixpath.dirname(self.path)

    def has_extension(self, extension: str = NOTE_EXTENSION) -> bool:
        return self.extension.lower() == extension.lower()

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "name": self.name,
            "basename": self.basename,
            "parent": self.parent,
        }


Node = Union[Note, Folder]
