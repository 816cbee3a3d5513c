"""Deferred callbacks for producers that deliver later.

A scheduler has a single operation, `schedule(delay_ms, callback)`, which
calls `callback()` exactly once after at least `delay_ms` milliseconds.
"""
import asyncio
import heapq
import itertools
import logging
import threading
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class Scheduler(ABC):

    def schedule(self, delay_ms, callback):
        if delay_ms < 0:
            raise ValueError("delay must be >= 0, got {}".format(delay_ms))
        logger.debug("scheduling %r in %s ms on %s", callback, delay_ms, type(self).__name__)
        return self._schedule(delay_ms, callback)

    @abstractmethod
    def _schedule(self, delay_ms, callback):
        """Arrange for callback() to run after delay_ms"""


class AsyncioScheduler(Scheduler):
    """Schedules on an asyncio event loop.

    Without an explicit loop the running loop at scheduling time is used, so
    scheduling outside of a running loop raises RuntimeError.
    """

    def __init__(self, loop=None):
        self.loop = loop

    def _schedule(self, delay_ms, callback):
        loop = self.loop or asyncio.get_running_loop()
        return loop.call_later(delay_ms / 1000.0, callback)


class ThreadingScheduler(Scheduler):
    """Runs each callback on its own timer thread"""

    def _schedule(self, delay_ms, callback):
        timer = threading.Timer(delay_ms / 1000.0, callback)
        timer.daemon = True
        timer.start()
        return timer


class ManualScheduler(Scheduler):
    """Scheduler with a virtual clock that only moves when told to.

    Callbacks due at the same time run in the order they were scheduled.
    """

    def __init__(self):
        self.now = 0
        self._queue = []
        self._counter = itertools.count()

    @property
    def pending(self):
        return len(self._queue)

    def _schedule(self, delay_ms, callback):
        heapq.heappush(self._queue, (self.now + delay_ms, next(self._counter), callback))

    def _run_next(self):
        due, _, callback = heapq.heappop(self._queue)
        self.now = due
        logger.debug("firing %r at %s ms", callback, due)
        callback()

    def advance(self, ms):
        """Move the clock forward by ms, firing every callback that falls due"""
        deadline = self.now + ms
        while self._queue and self._queue[0][0] <= deadline:
            self._run_next()
        self.now = deadline

    def run_until_idle(self, max_callbacks=None):
        """Fire callbacks until nothing is pending and return how many ran"""
        fired = 0
        while self._queue:
            if max_callbacks is not None and fired >= max_callbacks:
                break
            self._run_next()
            fired += 1
        return fired
