"""Checkpoint support for resumable catalog ingestion.

A checkpoint is the durable per-catalog cursor: the URL to resume from,
the identity of the last entry handed to the listener on the current page,
and every entry identity seen across earlier runs.

Example:
    >>> import asyncio
    >>> from catalogspine.core.checkpoint import Checkpoint, MemoryCheckpointStore
    >>>
    >>> async def example():
    ...     store = MemoryCheckpointStore()
    ...     checkpoint = Checkpoint(
    ...         catalog_id="feedbooks",
    ...         resume_uri="https://example.com/opds?page=2",
    ...         loaded_ids={"urn:book:1", "urn:book:2"},
    ...     )
    ...     await store.save(checkpoint)
    ...     loaded = await store.load("feedbooks")
    ...     return len(loaded.loaded_ids) if loaded else 0
    >>> asyncio.run(example())
    2
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from catalogspine.core.exceptions import CheckpointError


@dataclass
class Checkpoint:
    """Resume state for one catalog.

    Attributes:
        catalog_id: Identifier of the catalog this cursor belongs to.
        resume_uri: Page to fetch next, or None when there is nothing to resume.
        last_loaded_id: Identity of the last entry delivered on the current page.
            Only meaningful while a page is being ingested or after an interrupt.
        loaded_ids: Every entry identity seen so far. Only grows.
        updated_at: When the checkpoint was last changed.

    Example:
        >>> from catalogspine.core.checkpoint import Checkpoint
        >>> cp = Checkpoint(catalog_id="feedbooks")
        >>> cp.resume_uri is None
        True
        >>> cp.has_pending_resume
        False
    """

    catalog_id: str
    resume_uri: str | None = None
    last_loaded_id: str | None = None
    loaded_ids: set[str] = field(default_factory=set)
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def has_pending_resume(self) -> bool:
        """Whether a run was interrupted part-way through a page."""
        return self.last_loaded_id is not None

    def copy(self) -> Checkpoint:
        """Return an independent copy (the identity set is not shared).

        Example:
            >>> from catalogspine.core.checkpoint import Checkpoint
            >>> cp = Checkpoint(catalog_id="c", loaded_ids={"a"})
            >>> clone = cp.copy()
            >>> clone.loaded_ids.add("b")
            >>> sorted(cp.loaded_ids)
            ['a']
        """
        return Checkpoint(
            catalog_id=self.catalog_id,
            resume_uri=self.resume_uri,
            last_loaded_id=self.last_loaded_id,
            loaded_ids=set(self.loaded_ids),
            updated_at=self.updated_at,
        )

    def touch(self) -> None:
        """Mark the checkpoint as changed now."""
        self.updated_at = datetime.now(UTC)

    def to_dict(self) -> dict[str, Any]:
        """Convert checkpoint to dictionary for serialization.

        Identities are written sorted so stored files diff cleanly.

        Example:
            >>> from catalogspine.core.checkpoint import Checkpoint
            >>> cp = Checkpoint(catalog_id="c", loaded_ids={"b", "a"})
            >>> cp.to_dict()["loaded_ids"]
            ['a', 'b']
        """
        return {
            "catalog_id": self.catalog_id,
            "resume_uri": self.resume_uri,
            "last_loaded_id": self.last_loaded_id,
            "loaded_ids": sorted(self.loaded_ids),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Checkpoint:
        """Create checkpoint from dictionary.

        Example:
            >>> from catalogspine.core.checkpoint import Checkpoint
            >>> cp = Checkpoint.from_dict({"catalog_id": "c", "loaded_ids": ["x"]})
            >>> cp.loaded_ids
            {'x'}
        """
        updated_at = data.get("updated_at")
        return cls(
            catalog_id=data["catalog_id"],
            resume_uri=data.get("resume_uri"),
            last_loaded_id=data.get("last_loaded_id"),
            loaded_ids=set(data.get("loaded_ids", [])),
            updated_at=datetime.fromisoformat(updated_at) if updated_at else datetime.now(UTC),
        )


class CheckpointStore(ABC):
    """Abstract base class for checkpoint storage backends.

    Callers must serialize runs per catalog: a store never arbitrates
    between two writers of the same checkpoint.
    """

    @abstractmethod
    async def save(self, checkpoint: Checkpoint) -> None:
        """Save a checkpoint.

        Args:
            checkpoint: The checkpoint to save.
        """
        ...

    @abstractmethod
    async def load(self, catalog_id: str) -> Checkpoint | None:
        """Load a checkpoint by catalog ID.

        Args:
            catalog_id: The catalog identifier.

        Returns:
            The checkpoint if found, None otherwise.
        """
        ...

    @abstractmethod
    async def delete(self, catalog_id: str) -> bool:
        """Delete a checkpoint.

        Returns:
            True if checkpoint was deleted.
        """
        ...

    @abstractmethod
    async def list_ids(self) -> list[str]:
        """List catalog IDs that have a stored checkpoint."""
        ...


class MemoryCheckpointStore(CheckpointStore):
    """In-memory checkpoint store for testing.

    Stores copies, so later mutation of a saved checkpoint does not leak
    into the store.
    """

    def __init__(self) -> None:
        self._checkpoints: dict[str, Checkpoint] = {}

    async def save(self, checkpoint: Checkpoint) -> None:
        self._checkpoints[checkpoint.catalog_id] = checkpoint.copy()

    async def load(self, catalog_id: str) -> Checkpoint | None:
        checkpoint = self._checkpoints.get(catalog_id)
        return checkpoint.copy() if checkpoint else None

    async def delete(self, catalog_id: str) -> bool:
        if catalog_id in self._checkpoints:
            del self._checkpoints[catalog_id]
            return True
        return False

    async def list_ids(self) -> list[str]:
        return sorted(self._checkpoints)


class FileCheckpointStore(CheckpointStore):
    """File-based checkpoint store using JSON files.

    Stores one JSON file per catalog in a directory.

    Example:
        >>> import asyncio
        >>> import tempfile
        >>> from pathlib import Path
        >>> from catalogspine.core.checkpoint import Checkpoint, FileCheckpointStore
        >>> async def example():
        ...     with tempfile.TemporaryDirectory() as tmpdir:
        ...         store = FileCheckpointStore(Path(tmpdir))
        ...         await store.save(Checkpoint(catalog_id="test"))
        ...         loaded = await store.load("test")
        ...         return loaded is not None
        >>> asyncio.run(example())
        True
    """

    def __init__(self, directory: Path) -> None:
        """Initialize file checkpoint store.

        Args:
            directory: Directory to store checkpoint files.
        """
        self._directory = directory
        self._directory.mkdir(parents=True, exist_ok=True)

    def _checkpoint_path(self, catalog_id: str) -> Path:
        # Sanitize catalog_id for filename
        safe_id = "".join(c if c.isalnum() or c in "-_" else "_" for c in catalog_id)
        return self._directory / f"{safe_id}.json"

    async def save(self, checkpoint: Checkpoint) -> None:
        """Save checkpoint to JSON file."""
        path = self._checkpoint_path(checkpoint.catalog_id)
        path.write_text(json.dumps(checkpoint.to_dict(), indent=2))

    async def load(self, catalog_id: str) -> Checkpoint | None:
        """Load checkpoint from JSON file.

        Raises:
            CheckpointError: If the file exists but cannot be decoded.
        """
        path = self._checkpoint_path(catalog_id)
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text())
            return Checkpoint.from_dict(data)
        except (json.JSONDecodeError, KeyError, ValueError) as e:
            raise CheckpointError(f"Unreadable checkpoint {path}: {e}") from e

    async def delete(self, catalog_id: str) -> bool:
        """Delete checkpoint file."""
        path = self._checkpoint_path(catalog_id)
        if path.exists():
            path.unlink()
            return True
        return False

    async def list_ids(self) -> list[str]:
        """List catalog IDs from stored files."""
        ids = []
        for path in sorted(self._directory.glob("*.json")):
            try:
                ids.append(json.loads(path.read_text())["catalog_id"])
            except (json.JSONDecodeError, KeyError):
                continue  # Skip invalid files
        return ids
