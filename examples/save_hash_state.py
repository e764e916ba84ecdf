"""
哈希状态保存与恢复示例
======================

演示 Resumable Digest SDK 的核心流程：
- 同步计算完整输入的 MD5
- 启动异步 worker，逐字节计算，并在超时后取消，拿到 HashState
- 通过 HashState.to_dict() 转为可序列化的 dict（模拟跨进程传递）
- 从 HashState 恢复计算，最终摘要与同步结果逐字节比较

运行方式:
    python examples/save_hash_state.py
"""

import asyncio
import json

from resumable_digest import (
    CancellationToken,
    Checkpoint,
    HashState,
    WorkerConfig,
    digest,
    start_resumable_digest,
)
from resumable_digest.observability import InMemoryEventBus, setup_logging


async def main():
    setup_logging("resumable_digest", "INFO")
    data = b"Hello World!"
    config = WorkerConfig(pace_seconds=0.2)
    event_bus = InMemoryEventBus()
    event_bus.on_all(lambda e: print(f"  [event] {e.event_type} {e.payload}"))

    # 1. 同步计算
    checksum1 = digest(data)
    print(f"MD5 checksum 1: {checksum1.hex().upper()}")

    # 2. 异步计算，300ms 后取消，模拟用户中断
    cancel = CancellationToken.with_timeout(0.3)
    run = start_resumable_digest(data, None, cancel, config=config, event_bus=event_bus)
    result = await run.result()
    if not isinstance(result, Checkpoint):
        print("未被中断，示例结束")
        return

    # 3. 序列化 HashState（例如写入 JSON 再读回）
    raw = json.dumps(result.state.to_dict())
    print(f"已保存状态: {raw}")
    state = HashState.from_dict(json.loads(raw))

    # 4. 从保存的状态恢复，直到完成
    run = start_resumable_digest(data, state, config=config, event_bus=event_bus)
    result = await run.result()
    checksum2 = result.digest
    print(f"MD5 checksum 2: {checksum2.hex().upper()}")
    print("checksum 1 == checksum 2" if checksum1 == checksum2 else "checksum 1 != checksum 2")


if __name__ == "__main__":
    asyncio.run(main())
