"""Eager consumers of lazy streams.

All of these force until Done, so they only return on finite streams.
Compose with `take` first when the stream may be infinite.
"""
from stream_ops import first_match


def to_list(stream):
    return list(stream)


def drain(stream, f=lambda _: None):
    """force the whole stream, calling f on every element"""
    node = stream()
    while not node.is_done():
        f(node.head)
        node = node.tail()


for_each = drain


def last_or_else(stream, default):
    """last element of stream, or default if it is empty"""
    last = default
    for x in stream:
        last = x
    return last


def find_first(stream, p, default=None):
    """first element that satisfies p, or default once the stream is done"""
    node = first_match(stream, p)
    if node.is_done():
        return default
    return node.head
