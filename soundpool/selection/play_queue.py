"""
Play Queue for SoundPool.

FIFO queue of item references used by the Shuffle and Sequential selection
modes. The queue is refilled from its collection either as a random
permutation or in insertion order; deciding when to refill belongs to the
selection policy.
"""

import logging
from collections import deque
from typing import Any, Generic, List, Optional, TypeVar

from soundpool.errors import EmptyQueueError
from soundpool.selection.random_source import RandomLike, resolve_random_source
from soundpool.selection.weighted_list import WeightedList

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PlayQueue(Generic[T]):
    """
    FIFO queue of items drawn from a WeightedList.

    Items are consumed front-to-back with dequeue(). The queue holds
    references only; the collection stays the owner of the items.
    """

    def __init__(self, collection: WeightedList[T]):
        """
        Initialize an empty play queue.

        Args:
            collection: Collection the queue is refilled from
        """
        self.collection = collection
        self._queue: deque[T] = deque()

    def refill_shuffled(self, rng: RandomLike = None, avoid_first: Optional[Any] = None) -> None:
        """
        Clear the queue and fill it with a random permutation of the collection.

        When avoid_first is given and the collection holds more than one
        item, the first queued item is never avoid_first. This keeps the
        last item of one shuffle cycle from repeating as the first item of
        the next.

        Args:
            rng: RandomSource, integer seed, or None for ambient randomness
            avoid_first: Item that must not be at the front of the queue
        """
        self._queue.clear()
        items = self.collection.items
        if not items:
            logger.debug("[QUEUE] Shuffle refill on empty collection")
            return

        source = resolve_random_source(rng)
        order = [items[i] for i in source.permutation(len(items))]

        if avoid_first is not None and len(order) > 1 and order[0] is avoid_first:
            # Swap with a uniformly chosen later slot
            swap_index = 1 + source.index(len(order) - 1)
            order[0], order[swap_index] = order[swap_index], order[0]

        self._queue.extend(order)
        logger.debug(f"[QUEUE] Refilled shuffled: {len(self._queue)} items")

    def refill_sequential(self) -> None:
        """Clear the queue and fill it in the collection's insertion order."""
        self._queue.clear()
        self._queue.extend(self.collection.items)
        logger.debug(f"[QUEUE] Refilled sequential: {len(self._queue)} items")

    def dequeue(self) -> T:
        """
        Remove and return the item at the front of the queue.

        Returns:
            Front item

        Raises:
            EmptyQueueError: If the queue is empty
        """
        if self.empty():
            raise EmptyQueueError("Play queue is empty; refill before dequeue")
        return self._queue.popleft()

    def peek(self) -> Optional[T]:
        """
        Return the front item without removing it.

        Returns:
            Front item, or None if queue is empty
        """
        if self.empty():
            return None
        return self._queue[0]

    def empty(self) -> bool:
        """Check if the queue is empty."""
        return len(self._queue) == 0

    def size(self) -> int:
        """Get the number of items remaining in the queue."""
        return len(self._queue)

    def __len__(self) -> int:
        return len(self._queue)

    def clear(self) -> None:
        """Clear all items from the queue."""
        self._queue.clear()
        logger.debug("[QUEUE] Queue cleared")

    def dump(self) -> List[str]:
        """
        Dump queue contents for debugging.

        Returns:
            List of string representations of queued items, front first
        """
        return [repr(item) for item in self._queue]
