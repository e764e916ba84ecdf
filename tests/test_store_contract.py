"""Contract tests for CheckpointStore implementations."""

from __future__ import annotations

import pytest

from resumable_digest.core.errors import CheckpointNotFoundError, VersionConflictError
from resumable_digest.core.types import HashState
from resumable_digest.store.memory import MemoryCheckpointStore

STATE_A = HashState(offset=1, data=b"a")
STATE_B = HashState(offset=2, data=b"b")


@pytest.fixture(params=["memory"])
def store(request):
    if request.param == "memory":
        return MemoryCheckpointStore()
    raise ValueError(request.param)


@pytest.mark.asyncio
async def test_get_missing_returns_none(store):
    assert await store.get("job") is None
    assert await store.version("job") is None


@pytest.mark.asyncio
async def test_put_and_get(store):
    result = await store.put("job", STATE_A)
    assert result.success
    assert result.version == 1
    assert await store.get("job") == STATE_A


@pytest.mark.asyncio
async def test_put_bumps_version(store):
    await store.put("job", STATE_A)
    result = await store.put("job", STATE_B, expected_version=1)
    assert result.version == 2
    assert await store.get("job") == STATE_B
    assert await store.version("job") == 2


@pytest.mark.asyncio
async def test_version_conflict(store):
    await store.put("job", STATE_A)
    await store.put("job", STATE_B)
    with pytest.raises(VersionConflictError):
        await store.put("job", STATE_A, expected_version=1)
    assert await store.get("job") == STATE_B


@pytest.mark.asyncio
async def test_expected_version_on_missing_job(store):
    with pytest.raises(CheckpointNotFoundError):
        await store.put("job", STATE_A, expected_version=1)


@pytest.mark.asyncio
async def test_delete(store):
    await store.put("job", STATE_A)
    assert await store.delete("job") is True
    assert await store.delete("job") is False
    assert await store.get("job") is None


@pytest.mark.asyncio
async def test_jobs_are_isolated(store):
    await store.put("a", STATE_A)
    await store.put("b", STATE_B)
    assert await store.get("a") == STATE_A
    assert await store.get("b") == STATE_B


@pytest.mark.asyncio
async def test_memory_store_require_and_membership():
    store = MemoryCheckpointStore()
    with pytest.raises(CheckpointNotFoundError):
        await store.require("job")
    await store.put("job", STATE_A)
    assert "job" in store
    assert len(store) == 1
    assert await store.require("job") == STATE_A
