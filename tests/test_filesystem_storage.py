"""Tests for the filesystem-backed note storage."""

import asyncio

import pytest

from auto_folder_link.core.resolver import LinkSourceResolver, MoveReason
from auto_folder_link.exceptions import FileOperationError, NoteReadError, StorageError
from auto_folder_link.models.note import Folder, Note
from auto_folder_link.storage.filesystem import FilesystemNoteStorage


@pytest.fixture
def fs_storage(vault):
    storage = FilesystemNoteStorage(vault)
    yield storage
    storage.close()


def write(vault, relative, content=""):
    path = vault / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class TestListNotes:

    @pytest.mark.asyncio
    async def test_lists_markdown_only(self, vault, fs_storage):
        write(vault, "A.md")
        write(vault, "sub/B.md")
        write(vault, "image.png")

        notes = await fs_storage.list_notes()

        assert [n.path for n in notes] == ["A.md", "sub/B.md"]

    @pytest.mark.asyncio
    async def test_skips_hidden_folders(self, vault, fs_storage):
        write(vault, "A.md")
        write(vault, ".trash/Old.md")
        write(vault, ".auto-folder-link/notes.md")

        notes = await fs_storage.list_notes()

        assert [n.path for n in notes] == ["A.md"]


class TestReadAndLookup:

    @pytest.mark.asyncio
    async def test_read_text(self, vault, fs_storage):
        write(vault, "A.md", "hello [[B]]")
        assert await fs_storage.read_text(Note.from_path("A.md")) == "hello [[B]]"

    @pytest.mark.asyncio
    async def test_read_missing_raises_read_error(self, fs_storage):
        with pytest.raises(NoteReadError):
            await fs_storage.read_text(Note.from_path("missing.md"))

    @pytest.mark.asyncio
    async def test_get_node(self, vault, fs_storage):
        write(vault, "dir/A.md")

        assert await fs_storage.get_node("dir") == Folder("dir")
        assert await fs_storage.get_node("dir/A.md") == Note("dir/A.md")
        assert await fs_storage.get_node("nothing") is None

    def test_path_outside_vault(self, fs_storage):
        with pytest.raises(StorageError):
            fs_storage.resolve("../outside.md")


class TestMutations:

    @pytest.mark.asyncio
    async def test_create_folder_is_idempotent(self, vault, fs_storage):
        await fs_storage.create_folder("A")
        await fs_storage.create_folder("A")
        assert (vault / "A").is_dir()

    @pytest.mark.asyncio
    async def test_create_folder_over_file_fails(self, vault, fs_storage):
        write(vault, "A", "not a folder")
        with pytest.raises(FileOperationError):
            await fs_storage.create_folder("A")

    @pytest.mark.asyncio
    async def test_rename(self, vault, fs_storage):
        write(vault, "B.md", "body")
        (vault / "A").mkdir()

        moved = await fs_storage.rename("B.md", "A/B.md")

        assert moved == Note("A/B.md")
        assert (vault / "A" / "B.md").read_text(encoding="utf-8") == "body"
        assert not (vault / "B.md").exists()

    @pytest.mark.asyncio
    async def test_rename_into_missing_folder_fails(self, vault, fs_storage):
        write(vault, "B.md")
        with pytest.raises(FileOperationError):
            await fs_storage.rename("B.md", "missing/B.md")


class TestResolverOnDisk:
    """End to end over a real vault directory."""

    @pytest.mark.asyncio
    async def test_moves_linked_note(self, vault, fs_storage, notifier):
        write(vault, "A.md", "see [[B]]")
        write(vault, "B.md")
        resolver = LinkSourceResolver(fs_storage, notifier)

        result = await resolver.resolve_and_move(Note.from_path("B.md"))

        assert result.value().moved
        assert (vault / "A").is_dir()
        assert (vault / "A" / "B.md").exists()
        assert not (vault / "B.md").exists()

    @pytest.mark.asyncio
    async def test_unlinked_note_stays(self, vault, fs_storage, notifier):
        write(vault, "A.md", "nothing")
        write(vault, "C.md")
        resolver = LinkSourceResolver(fs_storage, notifier)

        result = await resolver.resolve_and_move(Note.from_path("C.md"))

        assert result.value().reason is MoveReason.NO_SOURCE
        assert (vault / "C.md").exists()
        assert sorted(p.name for p in vault.iterdir()) == ["A.md", "C.md"]

    @pytest.mark.asyncio
    async def test_source_with_non_breaking_space(self, vault, fs_storage, notifier):
        write(vault, "my\u00a0plan.md", "see [[B]]")
        write(vault, "B.md")
        resolver = LinkSourceResolver(fs_storage, notifier)

        result = await resolver.resolve_and_move(Note.from_path("B.md"))

        assert result.value().source_path == "my\u00a0plan.md"
        assert (vault / "my\u00a0plan" / "B.md").exists()

    @pytest.mark.asyncio
    async def test_source_with_decomposed_name(self, vault, fs_storage, notifier):
        source_name = "Ame\u0301lie"
        write(vault, f"{source_name}.md", "see [[B]]")
        write(vault, "B.md")
        resolver = LinkSourceResolver(fs_storage, notifier)

        result = await resolver.resolve_and_move(Note.from_path("B.md"))

        assert result.value().moved
        assert (vault / source_name / "B.md").exists()

    @pytest.mark.asyncio
    async def test_new_note_with_non_breaking_space(self, vault, fs_storage, notifier):
        write(vault, "E.md", "see [[C\u00a0D]]")
        write(vault, "C\u00a0D.md", "body")
        resolver = LinkSourceResolver(fs_storage, notifier)

        result = await resolver.resolve_and_move(Note.from_path("C\u00a0D.md"))

        assert result.value().destination_path == "E/C\u00a0D.md"
        assert (vault / "E" / "C\u00a0D.md").read_text(encoding="utf-8") == "body"
        assert not (vault / "C\u00a0D.md").exists()

    @pytest.mark.asyncio
    async def test_listed_paths_read_back(self, vault, fs_storage):
        write(vault, "my\u00a0plan.md", "text")

        notes = await fs_storage.list_notes()

        assert [n.path for n in notes] == ["my\u00a0plan.md"]
        assert await fs_storage.read_text(notes[0]) == "text"

    @pytest.mark.asyncio
    async def test_overlapping_runs_share_new_folder(self, vault, fs_storage, notifier):
        write(vault, "A.md", "see [[B]] and [[C]]")
        write(vault, "B.md")
        write(vault, "C.md")
        resolver = LinkSourceResolver(fs_storage, notifier)

        results = await asyncio.gather(
            resolver.resolve_and_move(Note.from_path("B.md")),
            resolver.resolve_and_move(Note.from_path("C.md")),
        )

        assert all(result.value().moved for result in results)
        assert sorted(p.name for p in (vault / "A").iterdir()) == ["B.md", "C.md"]
