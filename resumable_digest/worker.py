"""Resumable digest worker: incremental MD5 that checkpoints on cancellation."""

from __future__ import annotations

import asyncio
import logging

from resumable_digest.config import WorkerConfig
from resumable_digest.core.cancellation import CancellationToken
from resumable_digest.core.channel import OneShotChannel
from resumable_digest.core.clock import Clock, SystemClock
from resumable_digest.core.errors import InvalidHashStateError, RunAbortedError
from resumable_digest.core.hasher import Accumulator, new_accumulator
from resumable_digest.core.id_generator import UuidV4Generator
from resumable_digest.core.types import Checkpoint, Completed, HashState, RunResult
from resumable_digest.observability.event_bus import Event, EventBus

logger = logging.getLogger(__name__)


class DigestRun:
    """Handle on a running worker.

    ``states`` receives a ``HashState`` when the run is cancelled, ``digests``
    receives the final digest when it completes. Exactly one of them carries a
    value; both are closed once the worker task is done.
    """

    def __init__(
        self,
        run_id: str,
        worker: ResumableDigestWorker,
        task: asyncio.Task,
    ) -> None:
        self.run_id = run_id
        self.states = worker.states
        self.digests = worker.digests
        self.task = task
        self._worker = worker

    def __iter__(self):
        return iter((self.states, self.digests))

    @property
    def done(self) -> bool:
        return self.task.done()

    async def result(self) -> RunResult:
        """Wait for the worker and return its tagged result.

        Does not consume the channels and may be called any number of times.
        Errors raised inside the worker before it published propagate from here.
        """
        await asyncio.wait({self.task})
        error = None if self.task.cancelled() else self.task.exception()
        if self._worker.outcome is not None:
            return self._worker.outcome
        if error is not None:
            raise error
        raise RunAbortedError(f"Run {self.run_id} ended without a result")


class ResumableDigestWorker:
    def __init__(
        self,
        data: bytes,
        accumulator: Accumulator,
        offset: int,
        cancel: CancellationToken,
        config: WorkerConfig,
        run_id: str,
        *,
        event_bus: EventBus | None = None,
        clock: Clock | None = None,
        job_id: str | None = None,
        restored: bool = False,
    ) -> None:
        self._data = data
        self._acc = accumulator
        self._offset = offset
        self._restored = restored
        self._cancel = cancel
        self._config = config
        self._run_id = run_id
        self._job_id = job_id
        self._event_bus = event_bus
        self._clock = clock or SystemClock()

        self.states: OneShotChannel[HashState] = OneShotChannel("states")
        self.digests: OneShotChannel[bytes] = OneShotChannel("digests")
        self.outcome: RunResult | None = None

    def close_channels(self) -> None:
        self.states.close()
        self.digests.close()

    async def _emit(self, event_type: str, **payload) -> None:
        if self._event_bus is None:
            return
        await self._event_bus.emit(
            Event(
                event_type=event_type,
                run_id=self._run_id,
                job_id=self._job_id,
                ts=self._clock.now_iso(),
                payload=payload,
            )
        )

    async def _emit_final(self, event_type: str, **payload) -> None:
        # The result is already published; a failing handler must not undo it.
        try:
            await self._emit(event_type, **payload)
        except Exception:
            logger.exception("Run %s: %s handler failed", self._run_id, event_type)

    async def _pace(self) -> None:
        if self._config.pace_seconds > 0:
            # Returns early on cancellation.
            await self._cancel.wait_for(self._config.pace_seconds)
        else:
            await asyncio.sleep(0)

    async def run(self) -> None:
        total = len(self._data)
        started = self._clock.monotonic()
        try:
            await self._emit("RunStarted", offset=self._offset, total=total)
            if self._restored:
                await self._emit("StateRestored", offset=self._offset)
            while True:
                if self._cancel.cancelled:
                    state = HashState(offset=self._offset, data=self._acc.export_state())
                    self.outcome = Checkpoint(state=state)
                    self.states.send(state)
                    reason = self._cancel.reason.value if self._cancel.reason else None
                    logger.info(
                        "Run %s stopped (%s) at offset %d/%d",
                        self._run_id, reason, self._offset, total,
                    )
                    await self._emit_final(
                        "Checkpointed",
                        offset=self._offset,
                        reason=reason,
                        elapsed_ms=int((self._clock.monotonic() - started) * 1000),
                    )
                    return

                if self._offset < total:
                    end = min(self._offset + self._config.chunk_size, total)
                    self._acc.update(self._data[self._offset:end])
                    self._offset = end
                    if self._config.progress_events:
                        await self._emit("UnitAbsorbed", offset=self._offset)
                else:
                    digest = self._acc.digest()
                    self.outcome = Completed(digest=digest)
                    self.digests.send(digest)
                    logger.info("Run %s completed: %s", self._run_id, digest.hex())
                    await self._emit_final(
                        "DigestCompleted",
                        digest=digest.hex(),
                        elapsed_ms=int((self._clock.monotonic() - started) * 1000),
                    )
                    return

                await self._pace()
        finally:
            self.close_channels()


def restore_accumulator(data: bytes, prior_state: HashState) -> Accumulator:
    """Rebuild an accumulator from a checkpoint taken over ``data``."""
    if not 0 <= prior_state.offset <= len(data):
        raise InvalidHashStateError(
            f"Offset {prior_state.offset} outside input of {len(data)} bytes"
        )
    acc = new_accumulator()
    acc.import_state(prior_state.data)
    if acc.length != prior_state.offset:
        raise InvalidHashStateError(
            f"Offset {prior_state.offset} does not match absorbed length {acc.length}"
        )
    return acc


def start_resumable_digest(
    data: bytes,
    prior_state: HashState | None = None,
    cancel: CancellationToken | None = None,
    *,
    config: WorkerConfig | None = None,
    event_bus: EventBus | None = None,
    clock: Clock | None = None,
    run_id: str | None = None,
    job_id: str | None = None,
) -> DigestRun:
    """Spawn a worker task digesting ``data``, resuming from ``prior_state``.

    A malformed ``prior_state`` raises ``InvalidHashStateError`` here, before
    any task is created. Must be called with a running event loop.
    """
    data = bytes(data)
    if prior_state is None:
        acc, offset = new_accumulator(), 0
    else:
        acc, offset = restore_accumulator(data, prior_state), prior_state.offset

    run_id = run_id or UuidV4Generator().generate()
    worker = ResumableDigestWorker(
        data,
        acc,
        offset,
        cancel or CancellationToken(),
        config or WorkerConfig(),
        run_id,
        event_bus=event_bus,
        clock=clock,
        job_id=job_id,
        restored=prior_state is not None,
    )
    task = asyncio.get_running_loop().create_task(worker.run(), name=f"digest-{run_id}")
    # A task cancelled before its first step never reaches the finally block.
    task.add_done_callback(lambda _: worker.close_channels())
    if prior_state is not None:
        logger.debug("Run %s resuming at offset %d", run_id, offset)
    return DigestRun(run_id, worker, task)
