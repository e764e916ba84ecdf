"""Run id generation."""

from __future__ import annotations

import uuid
from typing import Protocol


class IdGenerator(Protocol):
    def generate(self) -> str: ...


class UuidV4Generator:
    """``<prefix>-<32 hex chars>`` ids from UUID v4."""

    def __init__(self, prefix: str = "run") -> None:
        self._prefix = prefix

    def generate(self) -> str:
        return f"{self._prefix}-{uuid.uuid4().hex}"
