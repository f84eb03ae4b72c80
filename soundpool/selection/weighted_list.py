"""
Weighted item collection for SoundPool.

Holds opaque item handles with non-negative weights in insertion order and
draws from them either uniformly or in proportion to weight.

Selection rules:
- Items are unique by identity (``is``), never by equality
- Insertion order is preserved for index access and sequential playback
- A single-item collection always returns that item without consuming
  randomness
- A weighted draw over an all-zero-weight collection falls back to a
  uniform draw
"""

import logging
import math
from typing import Any, Generic, Iterable, Iterator, List, Mapping, Optional, Tuple, TypeVar, Union

from soundpool.errors import DuplicateItemError, EmptyCollectionError, InvalidWeightError
from soundpool.selection.random_source import RandomLike, resolve_random_source

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_WEIGHT: float = 1.0


def _check_weight(weight: Any) -> float:
    """Return weight as a float, or raise InvalidWeightError."""
    try:
        value = float(weight)
    except (TypeError, ValueError):
        raise InvalidWeightError(f"Weight must be a number, got {weight!r}")
    if math.isnan(value) or math.isinf(value):
        raise InvalidWeightError(f"Weight must be finite, got {value}")
    if value < 0:
        raise InvalidWeightError(f"Weight must be non-negative, got {value}")
    return value


class WeightedList(Generic[T]):
    """
    Ordered collection of (item, weight) pairs.

    Iterating yields (item, weight) tuples in insertion order.

    Example:
        >>> clips = WeightedList()
        >>> clips.add(step_a, 1.0)
        >>> clips.add(step_b, 3.0)
        >>> clips.draw_weighted(rng)  # step_b three times as often
    """

    def __init__(self, entries: Optional[Iterable[Tuple[T, float]]] = None):
        """
        Initialize the collection.

        Args:
            entries: Optional (item, weight) pairs to add in order

        Raises:
            InvalidWeightError: If any weight is negative
            DuplicateItemError: If an item appears twice
        """
        self._items: List[T] = []
        self._weights: List[float] = []

        for item, weight in entries or []:
            self.add(item, weight)

    @classmethod
    def from_mapping(cls, mapping: Union[Mapping[T, float], Iterable[Tuple[T, float]]]) -> "WeightedList[T]":
        """
        Build a collection from an ordered mapping or iterable of pairs.

        Args:
            mapping: item -> weight mapping, or (item, weight) pairs

        Returns:
            New WeightedList in the mapping's iteration order
        """
        if isinstance(mapping, Mapping):
            return cls(mapping.items())
        return cls(mapping)

    # =========================================================================
    # Mutation
    # =========================================================================

    def add(self, item: T, weight: float = DEFAULT_WEIGHT) -> None:
        """
        Append an item with its weight.

        Args:
            item: Opaque item handle
            weight: Relative likelihood under weighted draws (>= 0)

        Raises:
            InvalidWeightError: If weight is negative or not finite
            DuplicateItemError: If this exact item is already present
        """
        value = _check_weight(weight)
        if item in self:
            raise DuplicateItemError(f"Item already in collection: {item!r}")

        self._items.append(item)
        self._weights.append(value)

    def remove(self, item: T) -> None:
        """
        Remove an item.

        Raises:
            KeyError: If the item is not present
        """
        index = self.index_of(item)
        if index is None:
            raise KeyError(item)
        del self._items[index]
        del self._weights[index]

    def clear(self) -> None:
        """Remove all entries."""
        self._items.clear()
        self._weights.clear()

    # =========================================================================
    # Access
    # =========================================================================

    @property
    def items(self) -> List[T]:
        """Items in insertion order (a copy)."""
        return list(self._items)

    @property
    def weights(self) -> List[float]:
        """Weights in insertion order (a copy)."""
        return list(self._weights)

    @property
    def total_weight(self) -> float:
        """Sum of all weights."""
        return sum(self._weights)

    def item_at(self, index: int) -> T:
        """
        Return the item at an insertion-order index.

        Raises:
            IndexError: If index is out of range
        """
        return self._items[index]

    def index_of(self, item: Any) -> Optional[int]:
        """Return the index of this exact item, or None."""
        for index, candidate in enumerate(self._items):
            if candidate is item:
                return index
        return None

    def weight_of(self, item: T) -> float:
        """
        Return the weight of an item.

        Raises:
            KeyError: If the item is not present
        """
        index = self.index_of(item)
        if index is None:
            raise KeyError(item)
        return self._weights[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Tuple[T, float]]:
        return iter(list(zip(self._items, self._weights)))

    def __contains__(self, item: Any) -> bool:
        return self.index_of(item) is not None

    def __repr__(self) -> str:
        return f"WeightedList(size={len(self)}, total_weight={self.total_weight:.3f})"

    # =========================================================================
    # Drawing
    # =========================================================================

    def _require_items(self) -> None:
        if not self._items:
            raise EmptyCollectionError("Cannot draw from an empty collection")

    def draw_unweighted(self, rng: RandomLike = None) -> T:
        """
        Draw an item uniformly, ignoring weights.

        Args:
            rng: RandomSource, integer seed, or None for ambient randomness

        Returns:
            Selected item

        Raises:
            EmptyCollectionError: If the collection is empty
        """
        self._require_items()
        if len(self._items) == 1:
            return self._items[0]

        source = resolve_random_source(rng)
        return self._items[source.index(len(self._items))]

    def draw_weighted(self, rng: RandomLike = None) -> T:
        """
        Draw an item with probability proportional to its weight.

        When every weight is zero the draw falls back to uniform.

        Args:
            rng: RandomSource, integer seed, or None for ambient randomness

        Returns:
            Selected item

        Raises:
            EmptyCollectionError: If the collection is empty
        """
        self._require_items()
        if len(self._items) == 1:
            return self._items[0]

        source = resolve_random_source(rng)
        if self.total_weight <= 0:
            logger.warning(f"[SELECTION] All {len(self._items)} weights are zero, drawing uniformly")
            return self._items[source.index(len(self._items))]

        return self._items[source.weighted_index(self._weights)]
