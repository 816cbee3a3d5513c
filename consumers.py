"""Consumers that drain a producer by subscribing themselves to every tail."""


def printer(write=print, done_text="done!"):
    """consumer that writes every value and then done_text"""

    def consumer(message):
        if message.is_done():
            write(done_text)
        else:
            write(message.head)
            message.tail(consumer)

    return consumer


printing_consumer = printer()


def to_list_consumer(on_complete):
    """consumer that collects every value and calls on_complete with the list at the end

    The list belongs to this one consumer. Subscribing it to more than one
    producer at once (see concurrent_compose) mixes their values into the
    same list and completes on whichever Done comes first.
    """
    xs = []

    def consumer(message):
        if message.is_done():
            on_complete(xs)
        else:
            xs.append(message.head)
            message.tail(consumer)

    return consumer


class Cancellation:
    """Flag a consumer can raise to stop a chain wrapped with until_cancelled"""

    def __init__(self):
        self.cancelled = False

    def cancel(self):
        self.cancelled = True

    def __repr__(self):
        return 'Cancellation(cancelled={})'.format(self.cancelled)
