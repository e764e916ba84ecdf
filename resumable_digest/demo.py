"""Three-act save/resume demonstration.

1. Digest the message synchronously.
2. Start a paced async run and stop it with a deadline, keeping the HashState.
3. Resume from that HashState and compare the final digest with act 1.
"""

from __future__ import annotations

import asyncio

from resumable_digest.config import DemoConfig, WorkerConfig
from resumable_digest.core.cancellation import CancellationToken
from resumable_digest.core.hasher import digest
from resumable_digest.core.types import Checkpoint, HashState
from resumable_digest.observability.logging_config import setup_logging
from resumable_digest.worker import start_resumable_digest


async def run_demo(config: DemoConfig | None = None) -> bool:
    """Run the three acts; True when the resumed digest matches the one-pass digest."""
    cfg = config or DemoConfig()
    worker_cfg = WorkerConfig(pace_seconds=cfg.pace_seconds)

    # 1. One-pass digest
    checksum1 = digest(cfg.message)
    print(f"MD5 checksum 1: {checksum1.hex().upper()}")

    # 2. Paced run stopped by a deadline
    cancel = CancellationToken.with_timeout(cfg.deadline_seconds)
    result = await start_resumable_digest(cfg.message, None, cancel, config=worker_cfg).result()
    cancel.close()
    state: HashState | None = None
    if isinstance(result, Checkpoint):
        state = result.state
        print("MD5 state:")
        print(f"Offset: {state.offset}\nData: {state.data.hex().upper()}")
    else:
        print(f"MD5 checksum 2: {result.digest.hex().upper()}")

    # 3. Resume from the saved state and run to completion
    result = await start_resumable_digest(cfg.message, state, config=worker_cfg).result()
    if isinstance(result, Checkpoint):
        print("MD5 state:")
        print(f"Offset: {result.state.offset}\nData: {result.state.data.hex().upper()}")
        return False

    checksum2 = result.digest
    print(f"MD5 checksum 2: {checksum2.hex().upper()}")
    same = checksum1 == checksum2
    print("checksum 1 == checksum 2" if same else "checksum 1 != checksum 2")
    return same


def main() -> int:
    cfg = DemoConfig()
    setup_logging("resumable_digest", cfg.log_level)
    asyncio.run(run_demo(cfg))
    return 0
