"""
按任务恢复示例
==============

演示 DigestEngine 按 job_id 管理检查点：
- 每次 run_job 从 CheckpointStore 中读取上一次的 HashState 继续计算
- 被取消时保存新的检查点（版本号递增），完成时清除检查点
- 多次中断后，最终摘要与一次性计算的结果一致

运行方式:
    python examples/job_resume.py
"""

import asyncio

from resumable_digest import (
    CancellationToken,
    Checkpoint,
    WorkerConfig,
    create_digest_engine,
)
from resumable_digest.store import MemoryCheckpointStore


async def main():
    data = bytes(range(256)) * 4
    store = MemoryCheckpointStore()
    engine = create_digest_engine(store=store, config=WorkerConfig(chunk_size=16, pace_seconds=0.01))

    # 每轮只给 worker 50ms，直到完成
    rounds = 0
    while True:
        rounds += 1
        cancel = CancellationToken.with_timeout(0.05)
        result = await engine.run_job("demo-job", data, cancel)
        cancel.close()
        if isinstance(result, Checkpoint):
            version = await store.version("demo-job")
            print(f"第 {rounds} 轮中断: offset={result.state.offset}/{len(data)} version={version}")
            continue
        print(f"第 {rounds} 轮完成: {result.digest.hex()}")
        break

    expected = engine.digest(data)
    print(f"一次性计算: {expected.hex()}")
    print("一致" if expected == result.digest else "不一致")


if __name__ == "__main__":
    asyncio.run(main())
