import random

import pytest

from consumers import Cancellation, to_list_consumer
from producer import Continues, Done, Producer, count_from, empty, from_list, tick_every
from producer_ops import take, map, filter, concat, zip_with, delay_by, concurrent_compose, until_cancelled
from scheduling import ManualScheduler


def collect(source):
    results = []
    source(to_list_consumer(results.append))
    assert len(results) == 1, "producer did not finish synchronously"
    return results[0]


def exploding():
    def run(consumer):
        raise AssertionError("producer should not have been subscribed")

    return Producer(run)


def test_take():
    assert collect(take(3, count_from(0))) == [0, 1, 2]


def test_take_more_than_available():
    assert collect(take(5, from_list([1, 2]))) == [1, 2]


def test_take_zero_does_not_subscribe_upstream():
    assert collect(take(0, exploding())) == []


def test_map():
    assert collect(take(10, map(count_from(0), lambda x: x * x))) == [0, 1, 4, 9, 16, 25, 36, 49, 64, 81]


def test_filter():
    assert collect(take(10, filter(count_from(0), lambda x: x % 2 == 0))) == list(range(0, 20, 2))


def test_filter_finite_without_match():
    assert collect(filter(from_list([1, 3, 5]), lambda x: x % 2 == 0)) == []


def test_filter_skips_long_runs():
    assert collect(take(1, filter(count_from(0), lambda x: x >= 50000))) == [50000]


def test_concat():
    assert collect(concat(from_list([1, 2, 3]), from_list([10, 20, 30]))) == [1, 2, 3, 10, 20, 30]


def test_concat_infinite_first_never_reaches_second():
    assert collect(take(3, concat(count_from(0), exploding()))) == [0, 1, 2]


def test_concat_of_empties():
    assert collect(concat(empty(), empty())) == []


def test_zip_with():
    pairs = collect(take(3, zip_with(count_from(0), map(count_from(0), lambda x: x + 1), lambda x, y: (x, y))))
    assert pairs == [(0, 1), (1, 2), (2, 3)]


def test_zip_with_stops_at_shorter():
    assert collect(zip_with(from_list([1, 2, 3]), from_list([10]), lambda x, y: x + y)) == [11]


def test_zip_with_empty_first_does_not_subscribe_second():
    assert collect(zip_with(empty(), exploding(), max)) == []


def test_errors_from_user_functions_propagate():
    with pytest.raises(ZeroDivisionError):
        collect(map(from_list([1, 0]), lambda x: 1 / x))


def test_delay_by_keeps_order_and_delays_every_message():
    scheduler = ManualScheduler()
    arrivals = []

    def consumer(message):
        arrivals.append((scheduler.now, None if message.is_done() else message.head))
        if not message.is_done():
            message.tail(consumer)

    delay_by(50, from_list(["a", "b"]), scheduler=scheduler)(consumer)
    assert arrivals == []
    scheduler.run_until_idle()
    assert arrivals == [(50, "a"), (100, "b"), (150, None)]


def test_delay_by_on_top_of_ticks():
    scheduler = ManualScheduler()
    results = []
    take(2, delay_by(5, tick_every(0, interval_ms=10, scheduler=scheduler), scheduler=scheduler))(
        to_list_consumer(results.append))
    scheduler.advance(29)
    assert results == []
    scheduler.advance(1)
    assert results == [[0, 1]]


def test_negative_delay_is_rejected():
    with pytest.raises(ValueError):
        delay_by(-1, from_list([1]), scheduler=ManualScheduler())(lambda message: None)


def test_concurrent_compose_delivers_both_synchronous_sources():
    seen = []

    def consumer(message):
        if message.is_done():
            seen.append("done")
        else:
            seen.append(message.head)
            message.tail(consumer)

    concurrent_compose(from_list([1, 2, 3]), from_list(["a", "b"]))(consumer)
    assert [x for x in seen if isinstance(x, int)] == [1, 2, 3]
    assert [x for x in seen if isinstance(x, str) and x != "done"] == ["a", "b"]
    assert seen.count("done") == 2


def jittered(values, rng, scheduler):
    """producer of values where every message arrives after a random delay"""
    def at(i):
        def run(consumer):
            if i < len(values):
                message = Continues(values[i], at(i + 1))
            else:
                message = Done()
            scheduler.schedule(rng.randint(0, 20), lambda: consumer(message))

        return Producer(run)

    return at(0)


def test_concurrent_compose_interleaves_arbitrarily_but_keeps_each_order():
    rng = random.Random(1234)
    left = list(range(10))
    right = ["r{}".format(i) for i in range(10)]
    orders = set()

    for _ in range(50):
        scheduler = ManualScheduler()
        log = []

        def consumer(message):
            if not message.is_done():
                log.append(message.head)
                message.tail(consumer)

        concurrent_compose(jittered(left, rng, scheduler), jittered(right, rng, scheduler))(consumer)
        scheduler.run_until_idle()

        assert sorted(log, key=str) == sorted(left + right, key=str)
        assert [x for x in log if isinstance(x, int)] == left
        assert [x for x in log if isinstance(x, str)] == right
        orders.add(tuple(log))

    assert len(orders) > 1


def test_until_cancelled_passes_messages_through():
    assert collect(until_cancelled(from_list([1, 2]), Cancellation())) == [1, 2]


def test_until_cancelled_ends_with_done():
    token = Cancellation()
    results = []
    seen = []

    def consumer(message):
        if message.is_done():
            results.append(list(seen))
            return
        seen.append(message.head)
        if message.head == 2:
            token.cancel()
        message.tail(consumer)

    until_cancelled(count_from(0), token)(consumer)
    assert results == [[0, 1, 2]]


def test_until_cancelled_before_subscription():
    token = Cancellation()
    token.cancel()
    assert collect(until_cancelled(exploding(), token)) == []


def test_until_cancelled_drops_message_in_flight():
    scheduler = ManualScheduler()
    token = Cancellation()
    results = []
    until_cancelled(tick_every(0, interval_ms=10, scheduler=scheduler), token)(to_list_consumer(results.append))
    scheduler.advance(15)
    token.cancel()
    scheduler.advance(10)
    assert results == [[0]]
    assert scheduler.pending == 0
