"""
Error taxonomy for SoundPool.

All errors raised by the selection engine derive from SoundPoolError so a
playback host can catch a single type and decide whether a failed draw is
skipped (no sound played) or escalated.
"""


class SoundPoolError(Exception):
    """Base class for all SoundPool errors."""
    pass


class InvalidWeightError(SoundPoolError, ValueError):
    """A weight was negative or not a finite number."""
    pass


class DuplicateItemError(SoundPoolError, ValueError):
    """The same item object was added to a collection twice."""
    pass


class EmptyCollectionError(SoundPoolError):
    """A draw was requested from a collection with no items."""
    pass


class EmptyQueueError(SoundPoolError):
    """
    Dequeue was called on an empty play queue.

    The selection policy refills the queue before every dequeue, so this
    surfacing from a pool draw indicates a refill bug.
    """
    pass


class SelectionError(SoundPoolError):
    """Repeat-avoidance could not find a different item within its redraw cap."""
    pass
