"""Shared fixtures for auto folder link tests."""

import pytest

from auto_folder_link.models.config import SettingsStore
from auto_folder_link.notifier import RecordingNotifier
from auto_folder_link.storage.memory import InMemoryNoteStorage


@pytest.fixture
def storage():
    """Empty in-memory vault."""
    return InMemoryNoteStorage()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def settings_store(tmp_path):
    return SettingsStore(tmp_path / ".auto-folder-link" / "data.json")


@pytest.fixture
def vault(tmp_path):
    """Vault directory on disk."""
    vault_dir = tmp_path / "vault"
    vault_dir.mkdir()
    return vault_dir
