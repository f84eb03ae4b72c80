"""
SoundPool: weighted sound selection with randomized playback parameters.

Main entry points:
- AudioPool: weighted items plus volume/pitch ranges; draw_item() and
  draw_splash()
- SelectionMode: how items are drawn (random, smart, shuffle, ...)
- PoolConfig: environment-driven pool defaults

Example:
    >>> from soundpool import AudioPool, SelectionMode
    >>> pool = AudioPool({"a.wav": 1.0, "b.wav": 2.0}, selection_mode=SelectionMode.SMART_WEIGHTED)
    >>> splash = pool.draw_splash()
"""

__version__ = "0.1.0"

from soundpool.errors import (
    SoundPoolError,
    InvalidWeightError,
    DuplicateItemError,
    EmptyCollectionError,
    EmptyQueueError,
    SelectionError,
)
from soundpool.selection import (
    RandomSource,
    WeightedList,
    PlayQueue,
    SelectionMode,
    SelectionState,
    draw_item,
)
from soundpool.config import PoolConfig
from soundpool.core import AudioPool, Splash

__all__ = [
    "SoundPoolError",
    "InvalidWeightError",
    "DuplicateItemError",
    "EmptyCollectionError",
    "EmptyQueueError",
    "SelectionError",
    "RandomSource",
    "WeightedList",
    "PlayQueue",
    "SelectionMode",
    "SelectionState",
    "draw_item",
    "PoolConfig",
    "AudioPool",
    "Splash",
]
