"""Combinators over producers.

Each combinator wraps the downstream consumer into a new consumer and
subscribes that to the upstream producer. `map` and `filter` shadow the
builtins inside this module.
"""
import logging

from producer import Continues, Done, producer
from scheduling import AsyncioScheduler

logger = logging.getLogger(__name__)


@producer
def take(consumer, n, source):
    """producer of at most the first n messages of source

    Once n is used up the consumer gets Done without source being asked again.
    """
    if n <= 0:
        consumer(Done())
        return

    def on_message(message):
        if message.is_done():
            consumer(message)
        else:
            consumer(Continues(message.head, take(n - 1, message.tail)))

    source(on_message)


@producer
def map(consumer, source, f):
    def on_message(message):
        if message.is_done():
            consumer(message)
        else:
            consumer(Continues(f(message.head), map(message.tail, f)))

    source(on_message)


@producer
def filter(consumer, source, p):
    """producer of the values of source that satisfy p

    Failing values are skipped by subscribing to the tail again, so a source
    that never delivers a matching value never calls consumer.
    """

    def ignore_until_found(message):
        if message.is_done():
            consumer(message)
        elif p(message.head):
            consumer(Continues(message.head, filter(message.tail, p)))
        else:
            message.tail(ignore_until_found)

    source(ignore_until_found)


@producer
def concat(consumer, source0, source1):
    def on_message(message):
        if message.is_done():
            source1(consumer)
        else:
            consumer(Continues(message.head, concat(message.tail, source1)))

    source0(on_message)


@producer
def zip_with(consumer, source0, source1, f):
    """producer of f(x0, x1); source1 is only asked once source0 has delivered"""

    def on_first(message0):
        if message0.is_done():
            consumer(message0)
            return

        def on_second(message1):
            if message1.is_done():
                consumer(message1)
            else:
                consumer(Continues(f(message0.head, message1.head),
                                   zip_with(message0.tail, message1.tail, f)))

        source1(on_second)

    source0(on_first)


@producer
def delay_by(consumer, duration_ms, source, scheduler=None):
    """producer that delivers each message of source duration_ms after it arrives"""
    if scheduler is None:
        scheduler = AsyncioScheduler()

    def on_message(message):
        if message.is_done():
            scheduler.schedule(duration_ms, lambda: consumer(message))
        else:
            delayed = Continues(message.head, delay_by(duration_ms, message.tail, scheduler))
            scheduler.schedule(duration_ms, lambda: consumer(delayed))

    source(on_message)


@producer
def concurrent_compose(consumer, source0, source1):
    """subscribe the same consumer to both sources

    Each source delivers on its own schedule, so consumer is called once per
    source and must cope with messages from either arriving in any order.
    Each source's own messages stay in order.
    """
    source0(consumer)
    source1(consumer)


@producer
def until_cancelled(consumer, source, token):
    """producer of the messages of source until token is cancelled, then Done"""
    if token.cancelled:
        logger.debug("%r cancelled before subscribing", token)
        consumer(Done())
        return

    def on_message(message):
        if message.is_done():
            consumer(message)
        elif token.cancelled:
            logger.debug("%r cancelled, dropping %r", token, message.head)
            consumer(Done())
        else:
            consumer(Continues(message.head, until_cancelled(message.tail, token)))

    source(on_message)
