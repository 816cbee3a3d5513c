"""Combinators over lazy streams.

Building a combinator forces nothing. Forcing the result forces upstream
only as far as needed to produce one node. `map` and `filter` shadow the
builtins inside this module.
"""
from stream import Continues, Done, lazy


@lazy
def take(n, stream):
    """stream of at most the first n elements of stream"""
    if n <= 0:
        return Done()
    node = stream()
    if node.is_done():
        return node
    return Continues(node.head, take(n - 1, node.tail))


@lazy
def concat(stream0, stream1):
    """all of stream0, then all of stream1

    If stream0 is infinite stream1 is never forced.
    """
    node = stream0()
    if node.is_done():
        return stream1()
    return Continues(node.head, concat(node.tail, stream1))


@lazy
def map(stream, f):
    node = stream()
    if node.is_done():
        return node
    return Continues(f(node.head), map(node.tail, f))


def first_match(stream, p):
    """Force stream until a head satisfies p and return that node, or Done.

    Never returns on an infinite stream without a matching element.
    """
    node = stream()
    while not node.is_done() and not p(node.head):
        node = node.tail()
    return node


@lazy
def filter(stream, p):
    """stream of the elements that satisfy p

    Forcing the result loops over failing elements, so an infinite run of
    them makes the head computation diverge.
    """
    node = first_match(stream, p)
    if node.is_done():
        return node
    return Continues(node.head, filter(node.tail, p))


@lazy
def zip_with(stream0, stream1, f):
    """stream of f(x0, x1) over pairs of elements, as long as the shorter one

    stream0 is always forced before stream1.
    """
    node0 = stream0()
    if node0.is_done():
        return node0
    node1 = stream1()
    if node1.is_done():
        return node1
    return Continues(f(node0.head, node1.head), zip_with(node0.tail, node1.tail, f))


@lazy
def and_then(stream, f):
    """splice in the stream f(x) for each element x of stream

    Empty inner streams are skipped in a loop rather than by recursion.
    """
    node = stream()
    while not node.is_done():
        inner = f(node.head)()
        if not inner.is_done():
            return Continues(inner.head, concat(inner.tail, and_then(node.tail, f)))
        node = node.tail()
    return node


@lazy
def interleave(stream0, stream1):
    """alternate between the elements of stream0 and stream1, starting with stream0

    Once one side is done the rest of the other side follows unchanged.
    """
    node = stream0()
    if node.is_done():
        return stream1()
    return Continues(node.head, interleave(stream1, node.tail))


def repeat_stream(stream):
    """cycle through stream forever; an empty stream stays empty"""

    @lazy
    def cycle(rest):
        node = rest()
        if node.is_done():
            # stream is known to be non-empty here
            node = stream()
        return Continues(node.head, cycle(node.tail))

    @lazy
    def start():
        node = stream()
        if node.is_done():
            return node
        return Continues(node.head, cycle(node.tail))

    return start()


@lazy
def fold(stream, state, update):
    """stream of running states, starting with state itself

    update is called as update(element, previous_state).
    """
    return Continues(state, _fold_next(stream, state, update))


@lazy
def _fold_next(stream, previous, update):
    node = stream()
    if node.is_done():
        return node
    state = update(node.head, previous)
    return Continues(state, _fold_next(node.tail, state, update))
