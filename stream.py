"""
A lazy stream is a suspended computation that, when forced, produces a node.
A node is either Done or Continues(head, tail) where the tail is another lazy
stream.

The above definition is the pull-based half of the library:
> The consumer holds control and forces the next node on demand.
> Nothing is computed before it is forced, and forcing computes one node.

Forcing the same stream twice yields equivalent nodes. None of the
primitives below consume or mutate their input, so streams can be shared
and replayed freely.
"""
from immutable import Cell, End


class Done(End):
    """The end of a lazy stream"""


class Continues(Cell):
    """A forced stream node: one value and the (unforced) rest of the stream"""


class LazyStream:
    """Zero-argument thunk that produces a node when called.

    Iterating over a stream forces it one node at a time, so a stream can be
    handed to anything that consumes Python iterables.
    """

    __slots__ = ('_thunk',)

    def __init__(self, thunk):
        self._thunk = thunk

    def __call__(self):
        return self._thunk()

    def __iter__(self):
        node = self()
        while not node.is_done():
            yield node.head
            node = node.tail()

    def __repr__(self):
        return '<LazyStream {}>'.format(getattr(self._thunk, '__qualname__', self._thunk))


def lazy(func):
    """Decorator that turns a function computing a node into a stream-creating
    function.

    For example:
        @lazy
        def count_from(n):
            return Continues(n, count_from(n + 1))

    is equivalent to
        def count_from(n):
            def thunk():
                return Continues(n, count_from(n + 1))
            return LazyStream(thunk)
    """

    def wrap(*args, **kwargs):
        def thunk():
            return func(*args, **kwargs)

        thunk.__qualname__ = func.__qualname__
        return LazyStream(thunk)

    wrap.__name__ = func.__name__
    wrap.__qualname__ = func.__qualname__
    wrap.__doc__ = func.__doc__
    return wrap


@lazy
def empty():
    """stream that is done straight away"""
    return Done()


@lazy
def cons(x, stream):
    """stream that starts with x and continues with stream"""
    return Continues(x, stream)


def singleton(x):
    return cons(x, empty())


@lazy
def count_from(n):
    """infinite stream n, n + 1, n + 2, ..."""
    return Continues(n, count_from(n + 1))


def from_list(xs):
    """finite stream over the items of a sequence

    The sequence is read by index and never modified, so the stream can be
    forced any number of times.
    """

    @lazy
    def from_index(i):
        if i < len(xs):
            return Continues(xs[i], from_index(i + 1))
        return Done()

    return from_index(0)


@lazy
def repeat(x):
    """infinite stream x, x, x, ..."""
    return Continues(x, repeat(x))


@lazy
def iterate(f, state):
    """infinite stream state, f(state), f(f(state)), ..."""
    return Continues(state, _iterate_next(f, state))


@lazy
def _iterate_next(f, previous):
    return iterate(f, f(previous))()


@lazy
def tail(stream):
    """stream without its first element; the tail of an empty stream is empty"""
    node = stream()
    if node.is_done():
        return node
    return node.tail()


@lazy
def repeat_from_effect(effect):
    """infinite stream of the values returned by calling effect

    Each force calls effect again, so this stream is only as referentially
    transparent as effect is.
    """
    return Continues(effect(), repeat_from_effect(effect))
