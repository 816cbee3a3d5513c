class Singleton:
    """Class with a single instance"""

    def __new__(cls):
        obj = object.__new__(cls)
        cls.__new__ = lambda _: obj
        return obj


class End(Singleton):
    """The terminal node of a sequence.

    Every subclass has exactly one instance, so terminals can be compared
    with `is`.
    """

    @staticmethod
    def is_done():
        return True

    def __setattr__(self, *args, **kwargs):
        raise TypeError("'{}' object is immutable".format(type(self).__name__))

    def __repr__(self):
        return '{}()'.format(type(self).__name__)


class Cell(tuple):
    """A node that carries a head value and whatever comes next.

    This container type is immutable. What `tail` is depends on the
    subclass: a suspended stream for pull nodes, a producer for push
    messages.
    """

    def __new__(cls, head, tail):
        return super().__new__(cls, (head, tail))

    @staticmethod
    def is_done():
        return False

    @property
    def head(self):
        return self[0]

    @property
    def tail(self):
        return self[1]

    def __setattr__(self, *args, **kwargs):
        raise TypeError("'{}' object does not support item assignment".format(type(self).__name__))

    def __getnewargs__(self):
        return self.head, self.tail

    def __repr__(self):
        return '{}({!r}, ...)'.format(type(self).__name__, self.head)
