"""
A producer is a function that accepts a consumer and, whenever it is ready,
calls that consumer exactly once with a message.
A message is either Done or Continues(head, tail) where the tail is the next
producer.

This is the push-based half of the library:
> The producer holds control and decides when to deliver.
> A consumer that wants more must subscribe to the tail itself.

Producers may deliver synchronously or later through a scheduler; which one
is a property of the particular producer.
"""
import collections
import threading

from immutable import Cell, End
from scheduling import AsyncioScheduler


class Done(End):
    """The last message a producer delivers"""


class Continues(Cell):
    """A delivered value together with the producer of the following messages"""


class _DeliveryLoop(threading.local):
    def __init__(self):
        self.running = False
        self.queue = collections.deque()


_loop = _DeliveryLoop()


def _subscribe(run, consumer):
    # Subscriptions made while a delivery is in progress are queued and run
    # by the outermost call, so synchronous chains use constant stack.
    _loop.queue.append((run, consumer))
    if _loop.running:
        return
    _loop.running = True
    try:
        while _loop.queue:
            run, consumer = _loop.queue.popleft()
            run(consumer)
    finally:
        _loop.running = False
        _loop.queue.clear()


class Producer:
    """Callable that delivers the next message to the consumer it is given"""

    __slots__ = ('_run',)

    def __init__(self, run):
        self._run = run

    def __call__(self, consumer):
        _subscribe(self._run, consumer)

    def __repr__(self):
        return '<Producer {}>'.format(getattr(self._run, '__qualname__', self._run))


def producer(func):
    """Decorator that turns a function of the form f(consumer, ...) into a
    producer-creating function.

    For example:
        @producer
        def count_from(consumer, n):
            ...

    is equivalent to
        def count_from(n):
            def run(consumer):
                ...
            return Producer(run)
    """

    def wrap(*args, **kwargs):
        def run(consumer):
            func(consumer, *args, **kwargs)

        run.__qualname__ = func.__qualname__
        return Producer(run)

    wrap.__name__ = func.__name__
    wrap.__qualname__ = func.__qualname__
    wrap.__doc__ = func.__doc__
    return wrap


@producer
def empty(consumer):
    """producer that is done straight away"""
    consumer(Done())


@producer
def cons(consumer, x, tail):
    """producer that delivers x and then continues with tail"""
    consumer(Continues(x, tail))


@producer
def count_from(consumer, n):
    """producer of n, n + 1, n + 2, ... delivered synchronously"""
    consumer(Continues(n, count_from(n + 1)))


def from_list(xs):
    """producer of the items of a sequence, read by index and never modified"""

    @producer
    def from_index(consumer, i):
        if i < len(xs):
            consumer(Continues(xs[i], from_index(i + 1)))
        else:
            consumer(Done())

    return from_index(0)


@producer
def tick_every(consumer, start, interval_ms=1000, scheduler=None):
    """producer of start, start + 1, ... each delivered interval_ms after it is requested"""
    if scheduler is None:
        scheduler = AsyncioScheduler()

    def deliver():
        consumer(Continues(start, tick_every(start + 1, interval_ms, scheduler)))

    scheduler.schedule(interval_ms, deliver)


def combine(source, consumer):
    """effect that subscribes consumer to source when called"""
    return lambda: source(consumer)
