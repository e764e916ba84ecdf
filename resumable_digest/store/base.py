"""Checkpoint store protocol."""

from __future__ import annotations

from typing import Protocol

from resumable_digest.core.types import HashState, PutResult


class CheckpointStore(Protocol):
    async def get(self, job_id: str) -> HashState | None: ...

    async def put(
        self,
        job_id: str,
        state: HashState,
        expected_version: int | None = None,
    ) -> PutResult: ...

    async def delete(self, job_id: str) -> bool: ...

    async def version(self, job_id: str) -> int | None: ...
