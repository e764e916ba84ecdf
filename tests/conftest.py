"""Shared test fixtures."""

from __future__ import annotations

import pytest

from resumable_digest.config import WorkerConfig
from resumable_digest.core.cancellation import CancellationToken
from resumable_digest.observability.event_bus import InMemoryEventBus
from resumable_digest.store.memory import MemoryCheckpointStore
from resumable_digest.worker import start_resumable_digest

HELLO = b"Hello World!"
HELLO_MD5 = bytes.fromhex("ED076287532E86365E841E92BFC50D8C")


class FixedClock:
    """Clock that returns a fixed timestamp and a manually advanced monotonic time."""

    def __init__(self, ts: str = "2026-10-19T10:00:00+00:00"):
        self._ts = ts
        self.mono = 100.0

    def now_iso(self) -> str:
        return self._ts

    def monotonic(self) -> float:
        return self.mono


async def checkpoint_at(data: bytes, k: int, chunk_size: int = 1, bus=None):
    """Run a worker over ``data`` and cancel it once ``k`` bytes are absorbed."""
    bus = bus or InMemoryEventBus()
    cancel = CancellationToken()
    if k == 0:
        cancel.cancel()

    def on_unit(event):
        if event.payload["offset"] >= k:
            cancel.cancel()

    bus.on("UnitAbsorbed", on_unit)
    run = start_resumable_digest(
        data,
        None,
        cancel,
        config=WorkerConfig(chunk_size=chunk_size, progress_events=True),
        event_bus=bus,
    )
    return await run.result()


@pytest.fixture
def event_bus():
    return InMemoryEventBus()


@pytest.fixture
def checkpoint_store():
    return MemoryCheckpointStore()


@pytest.fixture
def fixed_clock():
    return FixedClock()
