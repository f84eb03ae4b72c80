"""
Core module for SoundPool.

This package contains the AudioPool and the Splash playback parameters it
produces.
"""

from soundpool.core.splash import Splash
from soundpool.core.audio_pool import AudioPool

__all__ = ["Splash", "AudioPool"]
