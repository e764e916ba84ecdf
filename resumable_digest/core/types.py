"""Core data types: checkpoints and run results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from resumable_digest.core.errors import InvalidHashStateError


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class RunStatus(str, Enum):
    CHECKPOINTED = "checkpointed"
    COMPLETED = "completed"


class CancelReason(str, Enum):
    CANCELLED = "cancelled"
    DEADLINE_EXCEEDED = "deadline_exceeded"


# ---------------------------------------------------------------------------
# Core data classes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HashState:
    """Snapshot of an interrupted run.

    ``offset`` counts the input bytes already absorbed; ``data`` is the
    serialized accumulator.
    """

    offset: int
    data: bytes

    def __post_init__(self) -> None:
        if isinstance(self.offset, bool) or not isinstance(self.offset, int):
            raise InvalidHashStateError(
                f"Offset must be an int, got {type(self.offset).__name__}"
            )
        if self.offset < 0:
            raise InvalidHashStateError(f"Negative offset {self.offset}")
        if not isinstance(self.data, (bytes, bytearray, memoryview)):
            raise InvalidHashStateError(
                f"State data must be bytes-like, got {type(self.data).__name__}"
            )
        object.__setattr__(self, "data", bytes(self.data))

    def to_dict(self) -> dict:
        return {"offset": self.offset, "data": self.data.hex()}

    @classmethod
    def from_dict(cls, raw: dict) -> HashState:
        try:
            return cls(offset=int(raw["offset"]), data=bytes.fromhex(raw["data"]))
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidHashStateError(f"Malformed hash state: {e}") from e


@dataclass(frozen=True)
class Checkpoint:
    state: HashState
    status: RunStatus = field(default=RunStatus.CHECKPOINTED, init=False)


@dataclass(frozen=True)
class Completed:
    digest: bytes
    status: RunStatus = field(default=RunStatus.COMPLETED, init=False)


RunResult = Union[Checkpoint, Completed]


@dataclass
class PutResult:
    success: bool
    version: int
