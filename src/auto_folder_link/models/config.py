"""Configuration model for auto folder link."""

import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

from ..exceptions import ConfigurationError
from .note import NOTE_EXTENSION

logger = logging.getLogger(__name__)

SETTINGS_DIRNAME = ".auto-folder-link"
SETTINGS_FILENAME = "data.json"

# Persisted key for each Settings field
_SETTING_KEYS = {
    "auto_move": "autoMove",
}


@dataclass
class Settings:
    """User-facing settings, persisted in the vault."""
    auto_move: bool = True
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        """Merge persisted data over the defaults.

        Unknown keys are kept so that saving does not drop them.
        """
        settings = cls()
        extra = dict(data)
        for name, key in _SETTING_KEYS.items():
            if key not in extra:
                continue
            value = extra.pop(key)
            if not isinstance(value, bool):
                raise ConfigurationError(
                    f"Setting '{key}' must be a boolean, got: {value!r}"
                )
            setattr(settings, name, value)
        settings.extra = extra
        return settings

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.extra)
        for f in fields(self):
            if f.name in _SETTING_KEYS:
                data[_SETTING_KEYS[f.name]] = getattr(self, f.name)
        return data


@dataclass
class Config:
    """Runtime configuration for a vault."""
    vault_directory: Path
    note_extension: str = NOTE_EXTENSION
    settings_path: Optional[Path] = None

    def __post_init__(self):
        self.vault_directory = Path(self.vault_directory)
        if not self.note_extension.startswith("."):
            self.note_extension = f".{self.note_extension}"
        if self.settings_path is None:
            self.settings_path = self.vault_directory / SETTINGS_DIRNAME / SETTINGS_FILENAME


class SettingsStore:
    """Loads and saves :class:`Settings` as JSON."""

    def __init__(self, path: Path):
        self.path = Path(path)

    @classmethod
    def for_vault(cls, vault_directory: Path) -> "SettingsStore":
        return cls(Config(vault_directory=vault_directory).settings_path)

    def load(self) -> Settings:
        """Load settings, falling back to defaults when nothing is saved yet."""
        if not self.path.exists():
            logger.debug(f"No settings at {self.path}, using defaults")
            return Settings()

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid settings file {self.path}: {e}")
        except OSError as e:
            raise ConfigurationError(f"Cannot read settings file {self.path}: {e}")

        if data is None:
            return Settings()
        if not isinstance(data, dict):
            raise ConfigurationError(f"Settings file {self.path} must contain an object")
        return Settings.from_dict(data)

    def save(self, settings: Settings) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(settings.to_dict(), f, indent=2)
        except OSError as e:
            raise ConfigurationError(f"Cannot write settings file {self.path}: {e}")
        logger.debug(f"Saved settings to {self.path}")
