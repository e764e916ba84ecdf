"""Cooperative cancellation token."""

from __future__ import annotations

import asyncio

from resumable_digest.core.types import CancelReason


class CancellationToken:
    """Signal checked by the worker before every unit of work.

    The first ``cancel`` wins; later calls keep the original reason.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason: CancelReason | None = None
        self._timer: asyncio.TimerHandle | None = None

    @classmethod
    def with_timeout(cls, seconds: float) -> CancellationToken:
        """Token that cancels itself after ``seconds``. Needs a running loop."""
        token = cls()
        loop = asyncio.get_running_loop()
        token._timer = loop.call_later(
            seconds, token.cancel, CancelReason.DEADLINE_EXCEEDED
        )
        return token

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> CancelReason | None:
        return self._reason

    def cancel(self, reason: CancelReason = CancelReason.CANCELLED) -> None:
        if self._event.is_set():
            return
        self._reason = reason
        self._event.set()
        self.close()

    def close(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    async def wait(self) -> None:
        await self._event.wait()

    async def wait_for(self, timeout: float) -> bool:
        """Wait up to ``timeout`` seconds; True if cancelled meanwhile."""
        try:
            await asyncio.wait_for(self._event.wait(), timeout)
        except asyncio.TimeoutError:
            return False
        return True
