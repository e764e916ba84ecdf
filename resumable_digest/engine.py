"""DigestEngine: job-level entry point over the resumable worker."""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from resumable_digest.config import WorkerConfig
from resumable_digest.core.cancellation import CancellationToken
from resumable_digest.core.clock import Clock, SystemClock
from resumable_digest.core.hasher import digest
from resumable_digest.core.id_generator import IdGenerator, UuidV4Generator
from resumable_digest.core.types import Checkpoint, HashState, RunResult
from resumable_digest.observability.event_bus import Event, EventBus, InMemoryEventBus
from resumable_digest.store.base import CheckpointStore
from resumable_digest.store.memory import MemoryCheckpointStore
from resumable_digest.worker import DigestRun, start_resumable_digest

logger = logging.getLogger(__name__)


class DigestEngine(Protocol):
    def digest(self, data: bytes) -> bytes: ...

    def start(
        self,
        data: bytes,
        prior_state: HashState | None = None,
        cancel: CancellationToken | None = None,
    ) -> DigestRun: ...

    async def run_job(
        self,
        job_id: str,
        data: bytes,
        cancel: CancellationToken | None = None,
    ) -> RunResult: ...


class DefaultDigestEngine:
    """Default DigestEngine: keeps one checkpoint per job in a CheckpointStore."""

    def __init__(
        self,
        store: CheckpointStore | None = None,
        *,
        config: WorkerConfig | None = None,
        event_bus: EventBus | None = None,
        id_generator: IdGenerator | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._store = store if store is not None else MemoryCheckpointStore()
        self._config = config or WorkerConfig()
        self._event_bus = event_bus or InMemoryEventBus(isolate_errors=True)
        self._id_gen = id_generator or UuidV4Generator()
        self._clock = clock or SystemClock()

        # Per-job locks so two runs never race on one checkpoint
        self._locks: dict[str, asyncio.Lock] = {}

    @property
    def store(self) -> CheckpointStore:
        return self._store

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    def _get_lock(self, job_id: str) -> asyncio.Lock:
        if job_id not in self._locks:
            self._locks[job_id] = asyncio.Lock()
        return self._locks[job_id]

    async def _emit(self, event_type: str, run_id: str, job_id: str, **payload) -> None:
        await self._event_bus.emit(
            Event(
                event_type=event_type,
                run_id=run_id,
                job_id=job_id,
                ts=self._clock.now_iso(),
                payload=payload,
            )
        )

    def digest(self, data: bytes) -> bytes:
        return digest(data)

    def start(
        self,
        data: bytes,
        prior_state: HashState | None = None,
        cancel: CancellationToken | None = None,
        *,
        job_id: str | None = None,
    ) -> DigestRun:
        return start_resumable_digest(
            data,
            prior_state,
            cancel,
            config=self._config,
            event_bus=self._event_bus,
            clock=self._clock,
            run_id=self._id_gen.generate(),
            job_id=job_id,
        )

    async def run_job(
        self,
        job_id: str,
        data: bytes,
        cancel: CancellationToken | None = None,
    ) -> RunResult:
        """Run ``job_id`` from its stored checkpoint (if any) until done or cancelled.

        A cancelled run replaces the stored checkpoint; a completed run clears it.
        """
        async with self._get_lock(job_id):
            prior = await self._store.get(job_id)
            version = await self._store.version(job_id)
            if prior is not None:
                logger.info("Job %s resuming from offset %d", job_id, prior.offset)

            run = self.start(data, prior, cancel, job_id=job_id)
            result = await run.result()

            if isinstance(result, Checkpoint):
                put = await self._store.put(job_id, result.state, expected_version=version)
                await self._emit(
                    "CheckpointSaved", run.run_id, job_id,
                    offset=result.state.offset, version=put.version,
                )
            elif await self._store.delete(job_id):
                await self._emit("CheckpointCleared", run.run_id, job_id)
            return result


def create_digest_engine(
    store: CheckpointStore | None = None,
    config: WorkerConfig | None = None,
) -> DefaultDigestEngine:
    """One-line factory to create a DigestEngine with default components."""
    return DefaultDigestEngine(store=store, config=config)
