"""
Audio Pool for SoundPool.

An AudioPool defines a set of weighted audio items plus acceptable volume
and pitch ranges, and draws randomized Splashes from them according to its
selection mode.

Range rules:
- Bounds are clamped to be non-negative
- Non-finite bounds (nan, inf) raise ValueError
- Setting one bound past the other drags the other bound along, so
  min <= max holds after every setter call
"""

import logging
import math
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from soundpool.config import PoolConfig
from soundpool.core.splash import Splash
from soundpool.selection.random_source import RandomSource
from soundpool.selection.selection_policy import SelectionMode, SelectionState, draw_item
from soundpool.selection.weighted_list import DEFAULT_WEIGHT, WeightedList

logger = logging.getLogger(__name__)

Entries = Union[Mapping[Any, float], Iterable[Tuple[Any, float]]]


def _check_bound(name: str, value: float) -> float:
    """Return a range bound as a float, or raise ValueError if it is not finite."""
    try:
        bound = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid {name}: {value!r} (must be a number)")
    if not math.isfinite(bound):
        raise ValueError(f"Invalid {name}: {bound} (must be finite)")
    return bound


class AudioPool:
    """
    A pool of weighted audio items with randomized playback parameters.

    The pool owns its weight table, the collection rebuilt from it, the
    selection state and its own random source. One pool is meant to be
    driven by a single owner; draws are not safe against concurrent
    reconfiguration.

    Example:
        >>> pool = AudioPool({footstep_1: 1.0, footstep_2: 1.0},
        ...                  volume_min=0.8, volume_max=1.0,
        ...                  selection_mode=SelectionMode.SHUFFLE, random_seed=7)
        >>> splash = pool.draw_splash()
        >>> host.play(splash.item, splash.volume, splash.pitch)
    """

    def __init__(self,
                 entries: Optional[Entries] = None,
                 volume_min: float = 1.0,
                 volume_max: float = 1.0,
                 pitch_min: float = 1.0,
                 pitch_max: float = 1.0,
                 selection_mode: Union[SelectionMode, str] = SelectionMode.SMART,
                 random_seed: int = 0,
                 name: str = ""):
        """
        Initialize the audio pool.

        Args:
            entries: Ordered item -> weight mapping, or (item, weight) pairs
            volume_min: Minimum playback volume
            volume_max: Maximum playback volume
            pitch_min: Minimum playback pitch
            pitch_max: Maximum playback pitch
            selection_mode: How items are drawn (SelectionMode or its name)
            random_seed: Seed for reproducible draws; 0 for non-deterministic
            name: Display name used in logs

        Raises:
            InvalidWeightError: If any weight is negative
            DuplicateItemError: If an item appears twice
            ValueError: If selection_mode is not a known mode, or a range
                bound is not finite
        """
        self.name = name or "pool"

        self._volume_min = 1.0
        self._volume_max = 1.0
        self._pitch_min = 1.0
        self._pitch_max = 1.0
        self.volume_min = volume_min
        self.volume_max = volume_max
        self.pitch_min = pitch_min
        self.pitch_max = pitch_max

        self._selection_mode = SelectionMode.parse(selection_mode)
        self._random_seed = random_seed
        self._rng = RandomSource(random_seed)

        self._entries: List[Tuple[Any, float]] = []
        self._clips: WeightedList = WeightedList()
        self._state = SelectionState.for_collection(self._clips)
        self.set_entries(entries or [])

        logger.info(f"[POOL] {self.name}: {len(self._clips)} items, mode={self._selection_mode.value}, "
                    f"seed={self._random_seed}")

    @classmethod
    def from_config(cls, config: PoolConfig, entries: Optional[Entries] = None, name: str = "") -> "AudioPool":
        """
        Create a pool using the ranges, mode and seed of a PoolConfig.

        Args:
            config: Loaded pool configuration
            entries: Ordered item -> weight mapping, or (item, weight) pairs
            name: Display name used in logs

        Returns:
            New AudioPool
        """
        return cls(
            entries=entries,
            volume_min=config.volume_min,
            volume_max=config.volume_max,
            pitch_min=config.pitch_min,
            pitch_max=config.pitch_max,
            selection_mode=config.mode,
            random_seed=config.random_seed,
            name=name,
        )

    # =========================================================================
    # Entries
    # =========================================================================

    def set_entries(self, entries: Entries) -> None:
        """
        Replace the weight table and rebuild the collection.

        Rebuilding resets the selection state. On error the pool keeps its
        previous table and state.

        Raises:
            InvalidWeightError: If any weight is negative
            DuplicateItemError: If an item appears twice
        """
        clips = WeightedList.from_mapping(entries)
        self._entries = list(clips)
        self._clips = clips
        self._state = SelectionState.for_collection(clips)
        logger.debug(f"[POOL] {self.name}: rebuilt collection with {len(clips)} items "
                     f"(total weight {clips.total_weight:.3f})")

    def add_entry(self, item: Any, weight: float = DEFAULT_WEIGHT) -> None:
        """Add one item to the weight table and rebuild."""
        self.set_entries(self._entries + [(item, weight)])

    def remove_entry(self, item: Any) -> None:
        """
        Remove one item from the weight table and rebuild.

        Raises:
            KeyError: If the item is not in the pool
        """
        if item not in self._clips:
            raise KeyError(item)
        self.set_entries([(i, w) for i, w in self._entries if i is not item])

    @property
    def audio_clips(self) -> WeightedList:
        """The collection items are drawn from."""
        return self._clips

    @property
    def last_drawn(self) -> Optional[Any]:
        """The most recently drawn item, or None."""
        return self._state.last_drawn

    def __len__(self) -> int:
        return len(self._clips)

    # =========================================================================
    # Ranges
    # =========================================================================

    @property
    def volume_min(self) -> float:
        """The minimum volume an item from this pool can play at."""
        return self._volume_min

    @volume_min.setter
    def volume_min(self, value: float) -> None:
        self._volume_min = max(_check_bound("volume_min", value), 0.0)
        if self._volume_max < self._volume_min:
            self._volume_max = self._volume_min

    @property
    def volume_max(self) -> float:
        """The maximum volume an item from this pool can play at."""
        return self._volume_max

    @volume_max.setter
    def volume_max(self, value: float) -> None:
        self._volume_max = max(_check_bound("volume_max", value), 0.0)
        if self._volume_min > self._volume_max:
            self._volume_min = self._volume_max

    @property
    def pitch_min(self) -> float:
        """The minimum pitch an item from this pool can play at."""
        return self._pitch_min

    @pitch_min.setter
    def pitch_min(self, value: float) -> None:
        self._pitch_min = max(_check_bound("pitch_min", value), 0.0)
        if self._pitch_max < self._pitch_min:
            self._pitch_max = self._pitch_min

    @property
    def pitch_max(self) -> float:
        """The maximum pitch an item from this pool can play at."""
        return self._pitch_max

    @pitch_max.setter
    def pitch_max(self, value: float) -> None:
        self._pitch_max = max(_check_bound("pitch_max", value), 0.0)
        if self._pitch_min > self._pitch_max:
            self._pitch_min = self._pitch_max

    # =========================================================================
    # Selection settings
    # =========================================================================

    @property
    def selection_mode(self) -> SelectionMode:
        """How items are drawn from this pool."""
        return self._selection_mode

    @selection_mode.setter
    def selection_mode(self, value: Union[SelectionMode, str]) -> None:
        mode = SelectionMode.parse(value)
        if mode is not self._selection_mode:
            # A queue filled under another mode must not leak into this one
            self._state.invalidate_queue()
            logger.debug(f"[POOL] {self.name}: mode {self._selection_mode.value} -> {mode.value}")
        self._selection_mode = mode

    @property
    def random_seed(self) -> int:
        """Seed used to draw items and parameters; 0 means non-deterministic."""
        return self._random_seed

    @random_seed.setter
    def random_seed(self, value: int) -> None:
        seed = int(value)
        self._rng = RandomSource(seed)
        self._random_seed = seed

    # =========================================================================
    # Drawing
    # =========================================================================

    def get_random_volume(self) -> float:
        """Return a random volume between volume_min and volume_max."""
        return self._rng.uniform(self._volume_min, self._volume_max)

    def get_random_pitch(self) -> float:
        """Return a random pitch between pitch_min and pitch_max."""
        return self._rng.uniform(self._pitch_min, self._pitch_max)

    def draw_item(self) -> Any:
        """
        Draw the next item according to the selection mode.

        Advances the selection state (last-drawn item and play queue).

        Returns:
            The drawn item handle

        Raises:
            EmptyCollectionError: If the pool has no items
        """
        return draw_item(self._selection_mode, self._clips, self._state, self._rng)

    def draw_splash(self) -> Splash:
        """
        Draw an item and randomize its volume and pitch.

        Returns:
            A fresh Splash

        Raises:
            EmptyCollectionError: If the pool has no items
        """
        item = self.draw_item()
        splash = Splash(item, self.get_random_volume(), self.get_random_pitch())
        logger.debug(f"[POOL] {self.name}: splash item={item!r} volume={splash.volume:.3f} "
                     f"pitch={splash.pitch:.3f}")
        return splash

    create_splash = draw_splash

    def shuffle_play_queue(self) -> None:
        """Reshuffle the play queue, never starting with the last-drawn item."""
        self._state.queue.refill_shuffled(self._rng, avoid_first=self._state.last_drawn)
        self._state.queue_mode = SelectionMode.SHUFFLE

    def resequence_play_queue(self) -> None:
        """Reset the play queue to insertion order."""
        self._state.queue.refill_sequential()
        self._state.queue_mode = SelectionMode.SEQUENTIAL

    def __repr__(self) -> str:
        return (f"AudioPool(name={self.name!r}, items={len(self._clips)}, "
                f"mode={self._selection_mode.value}, seed={self._random_seed})")
