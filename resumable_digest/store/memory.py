"""In-memory checkpoint store."""

from __future__ import annotations

from dataclasses import dataclass

from resumable_digest.core.errors import CheckpointNotFoundError, VersionConflictError
from resumable_digest.core.types import HashState, PutResult


@dataclass
class _CheckpointEntry:
    state: HashState
    version: int = 1


class MemoryCheckpointStore:
    """Thread-unsafe, in-memory CheckpointStore.

    ``HashState`` is immutable, so entries are shared without copying.
    """

    def __init__(self) -> None:
        self._entries: dict[str, _CheckpointEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, job_id: object) -> bool:
        return job_id in self._entries

    def _get_entry(self, job_id: str) -> _CheckpointEntry:
        entry = self._entries.get(job_id)
        if entry is None:
            raise CheckpointNotFoundError(f"No checkpoint for job {job_id!r}")
        return entry

    async def get(self, job_id: str) -> HashState | None:
        entry = self._entries.get(job_id)
        return entry.state if entry is not None else None

    async def put(
        self,
        job_id: str,
        state: HashState,
        expected_version: int | None = None,
    ) -> PutResult:
        entry = self._entries.get(job_id)
        if entry is None:
            if expected_version is not None:
                raise CheckpointNotFoundError(
                    f"No checkpoint for job {job_id!r} at version {expected_version}"
                )
            self._entries[job_id] = _CheckpointEntry(state=state)
            return PutResult(success=True, version=1)
        if expected_version is not None and entry.version != expected_version:
            raise VersionConflictError(
                f"Expected version {expected_version}, got {entry.version}"
            )
        entry.state = state
        entry.version += 1
        return PutResult(success=True, version=entry.version)

    async def delete(self, job_id: str) -> bool:
        return self._entries.pop(job_id, None) is not None

    async def version(self, job_id: str) -> int | None:
        entry = self._entries.get(job_id)
        return entry.version if entry is not None else None

    async def require(self, job_id: str) -> HashState:
        return self._get_entry(job_id).state
