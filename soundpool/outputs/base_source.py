from abc import ABC, abstractmethod
from typing import Any, Optional


class BaseAudioSource(ABC):
    """
    Abstract base class for playback outputs driven by a pool.

    A source owns one output channel. The pool never plays anything itself;
    a host assigns clip, volume and pitch from a Splash and calls play().
    """

    def __init__(self) -> None:
        self.clip: Optional[Any] = None
        self.volume: float = 1.0
        self.pitch: float = 1.0

    @abstractmethod
    def play(self) -> None:
        """
        Start playing the assigned clip at the assigned volume and pitch.
        """
        ...
