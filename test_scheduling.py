import asyncio
import threading

import pytest

from consumers import to_list_consumer
from producer import from_list, tick_every
from producer_ops import delay_by, take
from scheduling import AsyncioScheduler, ManualScheduler, ThreadingScheduler


def test_manual_scheduler_fires_in_due_order():
    scheduler = ManualScheduler()
    fired = []
    scheduler.schedule(30, lambda: fired.append("c"))
    scheduler.schedule(10, lambda: fired.append("a"))
    scheduler.schedule(10, lambda: fired.append("b"))
    assert scheduler.pending == 3
    scheduler.advance(10)
    assert fired == ["a", "b"]
    scheduler.advance(100)
    assert fired == ["a", "b", "c"]
    assert scheduler.now == 110


def test_manual_scheduler_callbacks_can_schedule_more():
    scheduler = ManualScheduler()
    fired = []

    def again():
        fired.append(scheduler.now)
        if len(fired) < 3:
            scheduler.schedule(5, again)

    scheduler.schedule(5, again)
    assert scheduler.run_until_idle() == 3
    assert fired == [5, 10, 15]


def test_manual_scheduler_limit():
    scheduler = ManualScheduler()

    def forever():
        scheduler.schedule(1, forever)

    scheduler.schedule(1, forever)
    assert scheduler.run_until_idle(max_callbacks=10) == 10
    assert scheduler.pending == 1


def test_negative_delay_is_rejected():
    with pytest.raises(ValueError):
        ManualScheduler().schedule(-5, lambda: None)


def test_asyncio_scheduler_needs_a_running_loop():
    with pytest.raises(RuntimeError):
        AsyncioScheduler().schedule(0, lambda: None)


def test_ticks_on_the_asyncio_loop():
    async def main():
        done = asyncio.get_running_loop().create_future()
        take(3, tick_every(1, interval_ms=1))(to_list_consumer(done.set_result))
        return await done

    assert asyncio.run(main()) == [1, 2, 3]


def test_delay_by_on_the_asyncio_loop():
    async def main():
        loop = asyncio.get_running_loop()
        done = loop.create_future()
        start = loop.time()
        delay_by(10, from_list(["x", "y"]))(to_list_consumer(done.set_result))
        result = await done
        return result, loop.time() - start

    result, elapsed = asyncio.run(main())
    assert result == ["x", "y"]
    assert elapsed >= 0.02


def test_threading_scheduler():
    finished = threading.Event()
    results = []

    def on_complete(xs):
        results.append(xs)
        finished.set()

    delay_by(1, from_list([1, 2, 3]), scheduler=ThreadingScheduler())(to_list_consumer(on_complete))
    assert finished.wait(timeout=5)
    assert results == [[1, 2, 3]]
