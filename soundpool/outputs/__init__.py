"""
Outputs module for SoundPool.

This package contains the playback-host side: the audio source interface
and the adapters that play a pool's splashes on it.
"""

from .base_source import BaseAudioSource
from .null_source import NullAudioSource
from .pool_filter import PoolFilter, play_audio_pool

__all__ = [
    "BaseAudioSource",
    "NullAudioSource",
    "PoolFilter",
    "play_audio_pool",
]
