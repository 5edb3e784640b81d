"""Core configuration, checkpointing and errors."""

from catalogspine.core.checkpoint import (
    Checkpoint,
    CheckpointStore,
    FileCheckpointStore,
    MemoryCheckpointStore,
)
from catalogspine.core.config import Settings, get_settings
from catalogspine.core.exceptions import (
    CatalogSpineError,
    CheckpointError,
    ConfigurationError,
    FeedError,
    IngestionStateError,
)

__all__ = [
    # Checkpointing
    "Checkpoint",
    "CheckpointStore",
    "FileCheckpointStore",
    "MemoryCheckpointStore",
    # Settings
    "Settings",
    "get_settings",
    # Errors
    "CatalogSpineError",
    "CheckpointError",
    "ConfigurationError",
    "FeedError",
    "IngestionStateError",
]
