"""
Demand-sized streams sit between the two halves of the library.

The consumer decides when to ask and how much to ask for: calling the
source with a batch size n gives a Batch of n values and the source of the
following batches. The asynchronous variant answers the same question
through a producer instead of a return value.
"""
from immutable import Cell
from producer import producer


class Batch(Cell):
    """A list of values together with the source of the next batch"""


def _numbers(start, n):
    return list(range(start, start + max(n, 0)))


def count_from(start):
    """demand-sized source of start, start + 1, ..."""

    def demand(n):
        values = _numbers(start, n)
        return Batch(values, count_from(start + len(values)))

    return demand


@producer
def _deliver(consumer, batch):
    consumer(batch)


def async_count_from(start):
    """like count_from, but each demand gives a producer of the batch"""

    def demand(n):
        values = _numbers(start, n)
        return _deliver(Batch(values, async_count_from(start + len(values))))

    return demand


def request(source, sizes):
    """ask source for one batch per size and return the list of batches"""
    batches = []
    for n in sizes:
        batch = source(n)
        batches.append(batch.head)
        source = batch.tail
    return batches


def async_request(source, sizes, on_complete):
    """ask an asynchronous source for one batch per size, then call on_complete with them"""
    sizes = list(sizes)
    batches = []

    def ask(source, i):
        if i == len(sizes):
            on_complete(batches)
            return

        def on_batch(batch):
            batches.append(batch.head)
            ask(batch.tail, i + 1)

        source(sizes[i])(on_batch)

    ask(source, 0)
