"""
Selection policy for SoundPool.

Decides which item a pool hands back next. The active strategy is a
SelectionMode value and draw_item() dispatches on it; the only state that
survives between draws lives in SelectionState (the last-drawn item and the
play queue).

Modes:
- RANDOM: uniform draw, may repeat
- RANDOM_WEIGHTED: weighted draw, may repeat
- SMART: uniform draw, never the last-drawn item
- SMART_WEIGHTED: weighted draw, never the last-drawn item
- SHUFFLE: play a random permutation, reshuffle when exhausted
- SEQUENTIAL: play in insertion order, wrap when exhausted
- PRIMARY_ONLY: always the first item
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional, Union

from soundpool.errors import EmptyCollectionError, SelectionError
from soundpool.selection.play_queue import PlayQueue
from soundpool.selection.random_source import RandomSource
from soundpool.selection.weighted_list import WeightedList

logger = logging.getLogger(__name__)

# Upper bound on redraws in the repeat-avoiding modes. With at least two
# drawable items the chance of hitting it is negligible; reaching it means the
# weight table cannot produce anything but the last-drawn item.
MAX_REDRAWS: int = 1000


class SelectionMode(Enum):
    """Determines how items are drawn from a pool."""
    RANDOM = "random"
    RANDOM_WEIGHTED = "random_weighted"
    SMART = "smart"
    SMART_WEIGHTED = "smart_weighted"
    SHUFFLE = "shuffle"
    SEQUENTIAL = "sequential"
    PRIMARY_ONLY = "primary_only"

    @classmethod
    def parse(cls, value: Union["SelectionMode", str]) -> "SelectionMode":
        """
        Convert a mode name to a SelectionMode.

        Matching ignores case, dashes, underscores and spaces, so
        "smart-weighted", "SMART_WEIGHTED" and "SmartWeighted" all parse.

        Args:
            value: SelectionMode or mode name

        Returns:
            Matching SelectionMode

        Raises:
            ValueError: If the name matches no mode
        """
        if isinstance(value, cls):
            return value
        key = "".join(ch for ch in str(value).lower() if ch not in "-_ ")
        for mode in cls:
            if mode.value.replace("_", "") == key:
                return mode
        valid = ", ".join(mode.value for mode in cls)
        raise ValueError(f"Unknown selection mode: {value!r} (must be one of: {valid})")

    @property
    def uses_queue(self) -> bool:
        """True for modes that consume the play queue."""
        return self in (SelectionMode.SHUFFLE, SelectionMode.SEQUENTIAL)

    @property
    def avoids_repeats(self) -> bool:
        """True for modes that never return the same item twice in a row."""
        return self in (SelectionMode.SMART, SelectionMode.SMART_WEIGHTED, SelectionMode.SHUFFLE)


@dataclass
class SelectionState:
    """
    Mutable selection state owned by one pool.

    Attributes:
        queue: Play queue used by SHUFFLE and SEQUENTIAL
        last_drawn: Most recently drawn item (None before the first draw)
        queue_mode: Mode that last filled the queue (None when stale)
    """
    queue: PlayQueue
    last_drawn: Optional[Any] = None
    queue_mode: Optional[SelectionMode] = field(default=None)

    @classmethod
    def for_collection(cls, collection: WeightedList) -> "SelectionState":
        """Create fresh state whose play queue refills from collection."""
        return cls(queue=PlayQueue(collection))

    def invalidate_queue(self) -> None:
        """Drop queued items so the next queue-mode draw refills first."""
        if self.queue_mode is not None or not self.queue.empty():
            self.queue.clear()
        self.queue_mode = None

    def reset(self) -> None:
        """Forget the last-drawn item and the queue (collection rebuilt)."""
        self.last_drawn = None
        self.invalidate_queue()


# =============================================================================
# Strategies
# =============================================================================

def _avoid_repeat(draw: Callable[[RandomSource], Any], state: SelectionState, rng: RandomSource) -> Any:
    """Redraw until the result differs from the last-drawn item."""
    last = state.last_drawn
    for _ in range(MAX_REDRAWS):
        result = draw(rng)
        if result is not last:
            return result
    raise SelectionError(f"No item other than {last!r} drawn after {MAX_REDRAWS} attempts")


def _draw_random(collection: WeightedList, state: SelectionState, rng: RandomSource) -> Any:
    return collection.draw_unweighted(rng)


def _draw_random_weighted(collection: WeightedList, state: SelectionState, rng: RandomSource) -> Any:
    return collection.draw_weighted(rng)


def _draw_smart(collection: WeightedList, state: SelectionState, rng: RandomSource) -> Any:
    assert len(collection) >= 2, "repeat-avoidance needs at least two items"
    return _avoid_repeat(collection.draw_unweighted, state, rng)


def _draw_smart_weighted(collection: WeightedList, state: SelectionState, rng: RandomSource) -> Any:
    assert len(collection) >= 2, "repeat-avoidance needs at least two items"
    last = state.last_drawn
    if last in collection and collection.weight_of(last) > 0:
        others_carry_weight = any(weight > 0 for item, weight in collection if item is not last)
        if not others_carry_weight:
            # Only the last-drawn item carries weight; a weighted redraw would
            # never leave it, so treat the rest like a zero-weight table
            logger.warning(f"[SELECTION] Only {last!r} has weight, drawing the others uniformly")
            return _avoid_repeat(collection.draw_unweighted, state, rng)
    return _avoid_repeat(collection.draw_weighted, state, rng)


def _sync_queue(collection: WeightedList, state: SelectionState) -> PlayQueue:
    """Return the state's queue, rebinding it if the collection was swapped."""
    if state.queue.collection is not collection:
        state.queue = PlayQueue(collection)
        state.queue_mode = None
    return state.queue


def _draw_shuffle(collection: WeightedList, state: SelectionState, rng: RandomSource) -> Any:
    queue = _sync_queue(collection, state)
    if state.queue_mode is not SelectionMode.SHUFFLE or queue.empty():
        queue.refill_shuffled(rng, avoid_first=state.last_drawn)
        state.queue_mode = SelectionMode.SHUFFLE
    return queue.dequeue()


def _draw_sequential(collection: WeightedList, state: SelectionState, rng: RandomSource) -> Any:
    queue = _sync_queue(collection, state)
    if state.queue_mode is not SelectionMode.SEQUENTIAL or queue.empty():
        queue.refill_sequential()
        state.queue_mode = SelectionMode.SEQUENTIAL
    return queue.dequeue()


def _draw_primary_only(collection: WeightedList, state: SelectionState, rng: RandomSource) -> Any:
    return collection.item_at(0)


_STRATEGIES: Dict[SelectionMode, Callable[[WeightedList, SelectionState, RandomSource], Any]] = {
    SelectionMode.RANDOM: _draw_random,
    SelectionMode.RANDOM_WEIGHTED: _draw_random_weighted,
    SelectionMode.SMART: _draw_smart,
    SelectionMode.SMART_WEIGHTED: _draw_smart_weighted,
    SelectionMode.SHUFFLE: _draw_shuffle,
    SelectionMode.SEQUENTIAL: _draw_sequential,
    SelectionMode.PRIMARY_ONLY: _draw_primary_only,
}


def draw_item(mode: SelectionMode,
              collection: WeightedList,
              state: SelectionState,
              rng: RandomSource) -> Any:
    """
    Draw the next item from collection according to mode.

    A single-item collection short-circuits to that item in every mode.
    Drawing in a mode that does not use the play queue invalidates it, so
    switching back into SHUFFLE or SEQUENTIAL always starts from a fresh
    queue.

    Args:
        mode: Active selection mode
        collection: Items to draw from
        state: Selection state; last_drawn is updated on success
        rng: Random source for this draw

    Returns:
        The drawn item

    Raises:
        EmptyCollectionError: If collection is empty (state unchanged)
    """
    if len(collection) == 0:
        raise EmptyCollectionError("Cannot draw from an empty pool")

    if not mode.uses_queue and state.queue_mode is not None:
        state.invalidate_queue()

    if len(collection) == 1:
        result = collection.item_at(0)
    else:
        result = _STRATEGIES[mode](collection, state, rng)

    state.last_drawn = result
    logger.debug(f"[SELECTION] {mode.value}: drew {result!r}")
    return result
