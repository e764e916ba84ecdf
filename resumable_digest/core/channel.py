"""Single-value result channel with explicit close."""

from __future__ import annotations

import asyncio
from typing import Generic, TypeVar

from resumable_digest.core.errors import ChannelClosedError

T = TypeVar("T")


class OneShotChannel(Generic[T]):
    """Carries at most one value from a producer task to one listener.

    ``receive`` returns the value once; after that, or when the channel was
    closed without a value, it returns ``None``.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._ready = asyncio.Event()
        self._value: T | None = None
        self._sent = False
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def has_value(self) -> bool:
        return self._value is not None

    def send(self, value: T) -> None:
        if self._closed:
            raise ChannelClosedError(f"Channel {self.name!r} is closed")
        if self._sent:
            raise ChannelClosedError(f"Channel {self.name!r} already carried a value")
        self._sent = True
        self._value = value
        self._ready.set()

    def close(self) -> None:
        self._closed = True
        self._ready.set()

    def receive_nowait(self) -> T | None:
        value, self._value = self._value, None
        return value

    async def receive(self) -> T | None:
        await self._ready.wait()
        return self.receive_nowait()
