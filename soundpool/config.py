"""
Configuration management for SoundPool.

Reads pool defaults and logging settings from an optional .env file and
environment variables, with sensible defaults.
"""

import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from soundpool.selection.selection_policy import SelectionMode


# Default .env file location
DEFAULT_ENV_FILE = Path("/etc/soundpool/soundpool.env")

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

logger = logging.getLogger(__name__)


def _load_env_file() -> None:
    """Load environment variables from .env file if it exists."""
    env_file = os.getenv("SOUNDPOOL_ENV_FILE", str(DEFAULT_ENV_FILE))
    env_path = Path(env_file)

    if env_path.exists():
        load_dotenv(env_path, override=False)  # Don't override existing env vars
        logger.debug(f"[CONFIG] Loaded env file {env_path}")


def _get_float(name: str, default: str) -> float:
    value = os.getenv(name, default)
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"Invalid {name}: {value} (must be a number)")


def _get_int(name: str, default: str) -> int:
    value = os.getenv(name, default)
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Invalid {name}: {value} (must be an integer)")


@dataclass
class PoolConfig:
    """Pool configuration loaded from .env file and environment variables."""

    # Playback ranges
    volume_min: float = 1.0
    volume_max: float = 1.0
    pitch_min: float = 1.0
    pitch_max: float = 1.0

    # Selection
    selection_mode: str = SelectionMode.SMART.value
    random_seed: int = 0  # 0 = non-deterministic

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @property
    def mode(self) -> SelectionMode:
        """The configured selection mode as a SelectionMode."""
        return SelectionMode.parse(self.selection_mode)

    @classmethod
    def load_config(cls) -> "PoolConfig":
        """
        Load configuration from environment variables.

        Returns:
            PoolConfig instance with loaded values

        Raises:
            ValueError: If configuration is invalid
        """
        # Load .env file first (if it exists)
        _load_env_file()

        volume_min = _get_float("SOUNDPOOL_VOLUME_MIN", "1.0")
        volume_max = _get_float("SOUNDPOOL_VOLUME_MAX", "1.0")
        pitch_min = _get_float("SOUNDPOOL_PITCH_MIN", "1.0")
        pitch_max = _get_float("SOUNDPOOL_PITCH_MAX", "1.0")

        selection_mode = os.getenv("SOUNDPOOL_SELECTION_MODE", SelectionMode.SMART.value)
        random_seed = _get_int("SOUNDPOOL_RANDOM_SEED", "0")

        log_level = os.getenv("SOUNDPOOL_LOG_LEVEL", "INFO").upper()
        log_file = os.getenv("SOUNDPOOL_LOG_FILE")
        if log_file == "":
            log_file = None

        config = cls(
            volume_min=volume_min,
            volume_max=volume_max,
            pitch_min=pitch_min,
            pitch_max=pitch_max,
            selection_mode=selection_mode,
            random_seed=random_seed,
            log_level=log_level,
            log_file=log_file,
        )

        # Validate configuration
        config.validate()

        logger.info(f"[CONFIG] Loaded pool config: mode={config.mode.value}, "
                    f"volume=[{config.volume_min}, {config.volume_max}], "
                    f"pitch=[{config.pitch_min}, {config.pitch_max}], seed={config.random_seed}")
        return config

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ValueError: If configuration is invalid
        """
        for name in ("volume_min", "volume_max", "pitch_min", "pitch_max"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ValueError(f"Invalid {name}: {value} (must be finite)")
            if value < 0:
                raise ValueError(f"Invalid {name}: {value} (must be non-negative)")

        if self.volume_min > self.volume_max:
            raise ValueError(f"Invalid volume range: {self.volume_min} > {self.volume_max}")
        if self.pitch_min > self.pitch_max:
            raise ValueError(f"Invalid pitch range: {self.pitch_min} > {self.pitch_max}")

        # Raises ValueError naming the valid modes
        SelectionMode.parse(self.selection_mode)

        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {self.log_level} (must be one of {', '.join(VALID_LOG_LEVELS)})")
