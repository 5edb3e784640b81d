"""Tests for catalogspine.core.checkpoint."""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from catalogspine.core.checkpoint import Checkpoint, FileCheckpointStore, MemoryCheckpointStore
from catalogspine.core.exceptions import CheckpointError


class TestCheckpointBasic:
    """Basic Checkpoint tests."""

    def test_create_minimal(self) -> None:
        """Can create with required fields."""
        cp = Checkpoint(catalog_id="feedbooks")
        assert cp.resume_uri is None
        assert cp.last_loaded_id is None
        assert cp.loaded_ids == set()
        assert cp.has_pending_resume is False

    def test_pending_resume(self) -> None:
        """A last loaded id means a page was interrupted."""
        assert Checkpoint(catalog_id="c", last_loaded_id="x").has_pending_resume

    def test_copy_is_independent(self) -> None:
        """Copies do not share the identity set."""
        cp = Checkpoint(catalog_id="c", loaded_ids={"a"})
        clone = cp.copy()
        clone.loaded_ids.add("b")
        clone.resume_uri = "https://example.com"
        assert cp.loaded_ids == {"a"}
        assert cp.resume_uri is None


class TestCheckpointSerialization:
    """Checkpoint serialization tests."""

    def test_to_dict(self) -> None:
        """Identities are written sorted."""
        d = Checkpoint(catalog_id="c", resume_uri="u", loaded_ids={"b", "a"}).to_dict()
        assert d["catalog_id"] == "c"
        assert d["resume_uri"] == "u"
        assert d["loaded_ids"] == ["a", "b"]

    def test_from_dict(self) -> None:
        """Can create from dict."""
        cp = Checkpoint.from_dict(
            {
                "catalog_id": "c",
                "resume_uri": "https://example.com/opds?page=3",
                "last_loaded_id": None,
                "loaded_ids": ["x", "y"],
                "updated_at": "2024-01-01T00:00:00+00:00",
            }
        )
        assert cp.resume_uri == "https://example.com/opds?page=3"
        assert cp.loaded_ids == {"x", "y"}
        assert cp.updated_at.year == 2024

    def test_roundtrip(self) -> None:
        """Can roundtrip through dict."""
        original = Checkpoint(catalog_id="c", last_loaded_id="b", loaded_ids={"a", "b"})
        restored = Checkpoint.from_dict(original.to_dict())
        assert restored.last_loaded_id == "b"
        assert restored.loaded_ids == {"a", "b"}


class TestMemoryCheckpointStore:
    """MemoryCheckpointStore tests."""

    @pytest.fixture
    def store(self) -> MemoryCheckpointStore:
        return MemoryCheckpointStore()

    async def test_save_and_load(self, store: MemoryCheckpointStore) -> None:
        """Can save and load checkpoint."""
        await store.save(Checkpoint(catalog_id="c", loaded_ids={"a"}))
        loaded = await store.load("c")
        assert loaded is not None
        assert loaded.loaded_ids == {"a"}

    async def test_saved_copy_is_isolated(self, store: MemoryCheckpointStore) -> None:
        """Mutating after save does not change the stored value."""
        cp = Checkpoint(catalog_id="c")
        await store.save(cp)
        cp.loaded_ids.add("late")
        loaded = await store.load("c")
        assert loaded.loaded_ids == set()

    async def test_load_missing(self, store: MemoryCheckpointStore) -> None:
        """Loading missing checkpoint returns None."""
        assert await store.load("does-not-exist") is None

    async def test_delete(self, store: MemoryCheckpointStore) -> None:
        """Can delete checkpoint."""
        await store.save(Checkpoint(catalog_id="c"))
        assert await store.delete("c") is True
        assert await store.delete("c") is False

    async def test_list_ids(self, store: MemoryCheckpointStore) -> None:
        """Lists stored catalogs."""
        await store.save(Checkpoint(catalog_id="b"))
        await store.save(Checkpoint(catalog_id="a"))
        assert await store.list_ids() == ["a", "b"]


class TestFileCheckpointStore:
    """FileCheckpointStore tests."""

    @pytest.fixture
    def directory(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            yield Path(tmpdir)

    async def test_save_and_load(self, directory: Path) -> None:
        """Can save and load checkpoint."""
        store = FileCheckpointStore(directory)
        await store.save(Checkpoint(catalog_id="feedbooks", resume_uri="u", loaded_ids={"a"}))
        loaded = await store.load("feedbooks")
        assert loaded is not None
        assert loaded.resume_uri == "u"
        assert loaded.loaded_ids == {"a"}

    async def test_unsafe_id_sanitized(self, directory: Path) -> None:
        """Catalog ids with URL characters map to a safe filename."""
        store = FileCheckpointStore(directory)
        await store.save(Checkpoint(catalog_id="https://example.com/opds"))
        assert (directory / "https___example_com_opds.json").exists()
        assert await store.list_ids() == ["https://example.com/opds"]

    async def test_corrupt_file(self, directory: Path) -> None:
        """A corrupt checkpoint file raises CheckpointError."""
        store = FileCheckpointStore(directory)
        (directory / "broken.json").write_text("{not json")
        with pytest.raises(CheckpointError):
            await store.load("broken")

    async def test_list_skips_invalid(self, directory: Path) -> None:
        """Invalid files are ignored when listing."""
        store = FileCheckpointStore(directory)
        (directory / "broken.json").write_text("{not json")
        await store.save(Checkpoint(catalog_id="ok"))
        assert await store.list_ids() == ["ok"]

    async def test_delete(self, directory: Path) -> None:
        """Can delete checkpoint file."""
        store = FileCheckpointStore(directory)
        await store.save(Checkpoint(catalog_id="c"))
        assert await store.delete("c") is True
        assert await store.load("c") is None
