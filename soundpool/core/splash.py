"""
Splash model for SoundPool.

A Splash is one drawn item plus the randomized volume and pitch to apply
when it is played.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Splash:
    """
    Playback parameters for a single play of a pool.

    Produced fresh by every AudioPool.draw_splash() call and never retained
    by the pool. The host applies volume and pitch to its own output.

    Attributes:
        item: Opaque handle of the drawn audio item
        volume: Volume to play at (default 1.0)
        pitch: Pitch multiplier to play at (default 1.0)
    """
    item: Any
    volume: float = 1.0
    pitch: float = 1.0
