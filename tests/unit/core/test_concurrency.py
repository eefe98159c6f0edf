"""
Unit tests for the bounded task runner
"""

import asyncio
import random

import pytest

from app.core.concurrency import run_bounded


def make_tracked_task(index, tracker, delay):
    async def task():
        tracker["in_flight"] += 1
        tracker["max_in_flight"] = max(tracker["max_in_flight"], tracker["in_flight"])
        try:
            await asyncio.sleep(delay)
            return index
        finally:
            tracker["in_flight"] -= 1

    return task


class TestRunBounded:
    """Ordering and concurrency-cap guarantees."""

    async def test_order_and_cap(self):
        tracker = {"in_flight": 0, "max_in_flight": 0}
        rng = random.Random(7)
        tasks = [make_tracked_task(i, tracker, rng.uniform(0, 0.02)) for i in range(12)]

        results = await run_bounded(tasks, 5)

        assert results == list(range(12))
        assert tracker["max_in_flight"] == 5
        assert tracker["in_flight"] == 0

    async def test_fewer_tasks_than_limit(self):
        tracker = {"in_flight": 0, "max_in_flight": 0}
        tasks = [make_tracked_task(i, tracker, 0.01) for i in range(3)]

        results = await run_bounded(tasks, 5)

        assert results == [0, 1, 2]
        assert tracker["max_in_flight"] == 3

    async def test_limit_one_is_sequential(self):
        order = []

        def make(i):
            async def task():
                order.append(("start", i))
                await asyncio.sleep(0)
                order.append(("end", i))
                return i * 10
            return task

        results = await run_bounded([make(i) for i in range(3)], 1)

        assert results == [0, 10, 20]
        assert order == [("start", 0), ("end", 0), ("start", 1), ("end", 1), ("start", 2), ("end", 2)]

    async def test_empty(self):
        assert await run_bounded([], 5) == []

    async def test_invalid_limit(self):
        with pytest.raises(ValueError):
            await run_bounded([], 0)

    async def test_failure_propagates_after_all_tasks_run(self):
        finished = []

        def make(i):
            async def task():
                await asyncio.sleep(0.001 * i)
                if i == 1:
                    raise RuntimeError("boom")
                finished.append(i)
                return i
            return task

        with pytest.raises(RuntimeError, match="boom"):
            await run_bounded([make(i) for i in range(6)], 2)

        assert sorted(finished) == [0, 2, 3, 4, 5]

    async def test_failed_task_does_not_stop_its_worker(self):
        started = []

        def make(i):
            async def task():
                started.append(i)
                if i == 0:
                    raise RuntimeError("first task failed")
                return i
            return task

        with pytest.raises(RuntimeError, match="first task failed"):
            await run_bounded([make(i) for i in range(4)], 1)

        assert started == [0, 1, 2, 3]

    async def test_first_failure_is_raised_when_every_worker_hits_one(self):
        started = []

        def make(i):
            async def task():
                started.append(i)
                await asyncio.sleep(0.001 * i)
                if i < 2:
                    raise ValueError(f"task {i}")
                return i
            return task

        with pytest.raises(ValueError, match="task 0"):
            await run_bounded([make(i) for i in range(5)], 2)

        assert sorted(started) == [0, 1, 2, 3, 4]
