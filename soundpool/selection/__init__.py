"""
Selection module for SoundPool.

This package contains the weighted item collection, the play queue, the
random source and the selection policy that decides which item is drawn.
"""

from soundpool.selection.random_source import RandomSource, resolve_random_source
from soundpool.selection.weighted_list import WeightedList
from soundpool.selection.play_queue import PlayQueue
from soundpool.selection.selection_policy import SelectionMode, SelectionState, draw_item

__all__ = [
    "RandomSource",
    "resolve_random_source",
    "WeightedList",
    "PlayQueue",
    "SelectionMode",
    "SelectionState",
    "draw_item",
]
