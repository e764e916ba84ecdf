"""Resumable Digest SDK: MD5 that can be stopped, checkpointed and resumed."""

from resumable_digest.config import DemoConfig, RuntimeConfig, WorkerConfig
from resumable_digest.core.cancellation import CancellationToken
from resumable_digest.core.channel import OneShotChannel
from resumable_digest.core.errors import (
    ChannelClosedError,
    CheckpointNotFoundError,
    DigestError,
    InvalidHashStateError,
    RunAbortedError,
    VersionConflictError,
)
from resumable_digest.core.hasher import Accumulator, digest
from resumable_digest.core.md5 import Md5Accumulator
from resumable_digest.core.types import (
    CancelReason,
    Checkpoint,
    Completed,
    HashState,
    RunResult,
    RunStatus,
)
from resumable_digest.engine import DefaultDigestEngine, DigestEngine, create_digest_engine
from resumable_digest.worker import DigestRun, start_resumable_digest

__all__ = [
    "Accumulator",
    "CancelReason",
    "CancellationToken",
    "ChannelClosedError",
    "Checkpoint",
    "CheckpointNotFoundError",
    "Completed",
    "DefaultDigestEngine",
    "DemoConfig",
    "DigestEngine",
    "DigestError",
    "DigestRun",
    "HashState",
    "InvalidHashStateError",
    "Md5Accumulator",
    "OneShotChannel",
    "RunAbortedError",
    "RunResult",
    "RunStatus",
    "RuntimeConfig",
    "VersionConflictError",
    "WorkerConfig",
    "create_digest_engine",
    "digest",
    "start_resumable_digest",
]
