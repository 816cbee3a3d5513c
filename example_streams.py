from stream import Continues, count_from, from_list, lazy, repeat, iterate
from stream_ops import take, concat, map, filter, zip_with, and_then, repeat_stream, fold, interleave
from stream_sinks import to_list, for_each, last_or_else, find_first


def nats():
    return count_from(0)


def squares(n):
    return to_list(take(n, map(nats(), lambda x: x * x)))


def evens(n):
    return to_list(take(n, filter(nats(), lambda x: x % 2 == 0)))


def plus_and_minus(n):
    return to_list(take(n, and_then(nats(), lambda x: from_list([x, -x]))))


def neighbours(n):
    return to_list(take(n, zip_with(nats(), map(nats(), lambda x: x + 1), lambda x, y: (x, y))))


def cycle(n, xs):
    return to_list(take(n, repeat_stream(from_list(xs))))


def sum_below(n):
    """sum of 0 .. n - 2, the last of the first n running totals"""
    return last_or_else(take(n, fold(nats(), 0, lambda x, total: total + x)), "empty")


def powers_of_two(n):
    return to_list(take(n, iterate(lambda x: 2 * x, 1)))


@lazy
def sieve(stream):
    """Every element is only forced once the head of the previous filter is found."""
    node = stream()
    p = node.head
    return Continues(p, sieve(filter(node.tail, lambda x, p=p: x % p != 0)))


def primes():
    return sieve(count_from(2))


def first_prime_above(n):
    return find_first(primes(), lambda p: p > n)


if __name__ == "__main__":
    print(to_list(concat(from_list([1, 2, 3]), from_list([10, 20, 30]))))
    print(to_list(take(3, concat(nats(), from_list([10, 20, 30])))))
    print(squares(10))
    print(evens(10))
    print(plus_and_minus(10))
    print(neighbours(5))
    print(to_list(take(5, repeat(10))))
    print(cycle(10, [0, 1, 2]))
    print(to_list(take(10, interleave(nats(), repeat("-")))))
    print(sum_below(100000))
    print(powers_of_two(10))
    for_each(take(10, primes()), print)
    print(first_prime_above(1000))
