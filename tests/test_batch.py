"""
Tests for the Batch Scheduler
"""

import asyncio

import pytest
from unittest.mock import AsyncMock

from docupicks.services.batch import BatchScheduler


@pytest.mark.asyncio
async def test_order_preserved_and_nones_dropped():
    async def stage(n):
        await asyncio.sleep(0.001 * (5 - n))  # later items finish first
        return None if n % 2 else n * 10

    scheduler = BatchScheduler(batch_size=3, delay_ms=0)
    assert await scheduler.run(list(range(7)), stage) == [0, 20, 40, 60]


@pytest.mark.asyncio
async def test_delay_between_batches_only():
    sleep = AsyncMock()
    scheduler = BatchScheduler(batch_size=5, delay_ms=500, sleep=sleep)

    async def stage(n):
        return n

    await scheduler.run(list(range(12)), stage)

    # ceil(12 / 5) - 1 pauses
    assert sleep.await_count == 2
    sleep.assert_awaited_with(0.5)


@pytest.mark.asyncio
async def test_single_batch_never_sleeps():
    sleep = AsyncMock()
    scheduler = BatchScheduler(batch_size=5, delay_ms=500, sleep=sleep)

    async def stage(n):
        return n

    await scheduler.run([1, 2, 3], stage)
    await scheduler.run([], stage)
    sleep.assert_not_awaited()


@pytest.mark.asyncio
async def test_batches_are_sequential():
    events = []

    async def sleep(seconds):
        events.append("pause")

    async def stage(n):
        events.append(f"start-{n}")
        await asyncio.sleep(0)
        events.append(f"end-{n}")
        return n

    scheduler = BatchScheduler(batch_size=2, delay_ms=100, sleep=sleep)
    await scheduler.run([1, 2, 3], stage)

    pause = events.index("pause")
    assert set(events[:pause]) == {"start-1", "end-1", "start-2", "end-2"}
    assert events[pause + 1:] == ["start-3", "end-3"]


@pytest.mark.asyncio
async def test_members_of_a_batch_run_concurrently():
    running = 0
    peak = 0

    async def stage(n):
        nonlocal running, peak
        running += 1
        peak = max(peak, running)
        await asyncio.sleep(0.01)
        running -= 1
        return n

    await BatchScheduler(batch_size=4, delay_ms=0).run(list(range(8)), stage)
    assert peak == 4


def test_invalid_batch_size():
    with pytest.raises(ValueError):
        BatchScheduler(batch_size=0, delay_ms=0)
