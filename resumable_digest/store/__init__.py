"""Store module: in-memory checkpoint keeping."""

from resumable_digest.store.base import CheckpointStore
from resumable_digest.store.memory import MemoryCheckpointStore

__all__ = ["CheckpointStore", "MemoryCheckpointStore"]
