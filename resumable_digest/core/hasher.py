"""Accumulator capabilities and the one-pass digest."""

from __future__ import annotations

from typing import Protocol

from resumable_digest.core.md5 import Md5Accumulator


class Accumulator(Protocol):
    @property
    def length(self) -> int: ...

    def update(self, data: bytes) -> None: ...

    def digest(self) -> bytes: ...

    def export_state(self) -> bytes: ...

    def import_state(self, data: bytes) -> None: ...


def new_accumulator() -> Accumulator:
    return Md5Accumulator()


def digest(data: bytes) -> bytes:
    """Digest the whole input in one pass."""
    acc = new_accumulator()
    acc.update(data)
    return acc.digest()
