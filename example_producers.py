import asyncio
import logging

from consumers import printing_consumer, to_list_consumer
from producer import Continues, Done, Producer, combine, count_from, from_list, tick_every
from producer_ops import take, map, filter, concat, delay_by, concurrent_compose

logger = logging.getLogger(__name__)


def three_numbers(consumer):
    """The producer of 123, 512, 715 written out by hand"""
    consumer(Continues(123, Producer(
        lambda consumer: consumer(Continues(512, Producer(
            lambda consumer: consumer(Continues(715, Producer(
                lambda consumer: consumer(Done())
            )))
        )))
    )))


def collect(source):
    """Drain a producer that delivers synchronously and return its values"""
    result = []
    source(to_list_consumer(result.extend))
    return result


def even_squares(n):
    return collect(take(n, filter(map(count_from(0), lambda x: x * x), lambda x: x % 2 == 0)))


async def gather(source):
    """Drain a producer on the running loop and return its values"""
    done = asyncio.get_running_loop().create_future()

    def finish(xs):
        # a composed source can finish more than once
        if not done.done():
            done.set_result(list(xs))

    source(to_list_consumer(finish))
    return await done


async def ticks_and_letters():
    ticks = take(3, tick_every(0, interval_ms=30))
    letters = delay_by(20, from_list(["a", "b", "c"]))
    return await gather(concurrent_compose(ticks, letters))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    combine(Producer(three_numbers), printing_consumer)()
    print(even_squares(5))
    print(collect(concat(from_list([1, 2, 3]), from_list([10, 20, 30]))))

    # both halves end up in the same list, the first Done completes it
    logger.info("interleaved: %s", asyncio.run(ticks_and_letters()))
