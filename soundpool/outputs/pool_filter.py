"""
Pool playback adapters for SoundPool.

Host-side helpers that take a Splash from a pool and hand it to an output:
either an attached BaseAudioSource, or a one-shot callback when no source
is attached.
"""

import logging
from typing import Any, Callable, Optional

from soundpool.core.audio_pool import AudioPool
from soundpool.core.splash import Splash
from soundpool.errors import EmptyCollectionError
from soundpool.outputs.base_source import BaseAudioSource

logger = logging.getLogger(__name__)

# one_shot(item, position, volume); pitch cannot be applied to one-shots
OneShotPlayer = Callable[[Any, Any, float], None]


def play_audio_pool(source: BaseAudioSource, pool: AudioPool) -> Splash:
    """
    Draw a splash from pool and play it on source.

    Args:
        source: Output channel to assign clip, volume and pitch to
        pool: Pool to draw from

    Returns:
        The splash that was played

    Raises:
        EmptyCollectionError: If the pool has no items
    """
    splash = pool.draw_splash()

    source.clip = splash.item
    source.volume = splash.volume
    source.pitch = splash.pitch

    source.play()
    return splash


class PoolFilter:
    """
    Plays a specific AudioPool.

    With a source attached, every play() assigns a fresh splash to the
    source. Without one, the drawn item is handed to the one-shot player
    at this filter's position. An empty pool is logged and skipped.
    """

    def __init__(self,
                 pool: Optional[AudioPool] = None,
                 source: Optional[BaseAudioSource] = None,
                 one_shot: Optional[OneShotPlayer] = None,
                 position: Any = None):
        """
        Initialize the filter.

        Args:
            pool: Pool to draw from
            source: Output channel; when None, one-shots are used
            one_shot: Player for one-shot playback at a position
            position: Position passed to the one-shot player
        """
        self.pool = pool
        self.source = source
        self.one_shot = one_shot
        self.position = position

    def play(self) -> Optional[Splash]:
        """
        Play this filter's pool.

        Returns:
            The splash that was played, or None if nothing was played

        Raises:
            ValueError: If neither a source nor a one-shot player is set
        """
        if self.pool is None:
            logger.warning("[FILTER] No pool assigned, nothing played")
            return None

        try:
            if self.source is not None:
                return play_audio_pool(self.source, self.pool)
            return self._play_one_shot()
        except EmptyCollectionError:
            logger.warning(f"[FILTER] Pool {self.pool.name} is empty, nothing played")
            return None

    def _play_one_shot(self) -> Splash:
        if self.one_shot is None:
            raise ValueError("PoolFilter has neither a source nor a one-shot player")
        splash = self.pool.draw_splash()
        self.one_shot(splash.item, self.position, splash.volume)
        return splash
