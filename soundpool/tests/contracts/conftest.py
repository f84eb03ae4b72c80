"""
Shared pytest fixtures for SoundPool contract tests.

Contract tests use test doubles (fakes, stubs) to avoid real dependencies.
No real audio files are used, and SOUNDPOOL_* environment variables are
isolated per test.
"""

import os

import pytest

from soundpool.core.audio_pool import AudioPool
from soundpool.selection.random_source import RandomSource
from soundpool.selection.selection_policy import SelectionState
from soundpool.selection.weighted_list import WeightedList
from soundpool.tests.contracts.test_doubles import (
    RecordingAudioSource,
    RecordingOneShot,
    make_clips,
)


@pytest.fixture
def clips():
    """Three opaque clips A, B, C."""
    return make_clips("A", "B", "C")


@pytest.fixture
def weighted_list(clips):
    """WeightedList of A, B, C with weight 1 each."""
    return WeightedList((clip, 1.0) for clip in clips)


@pytest.fixture
def selection_state(weighted_list):
    """Fresh selection state bound to weighted_list."""
    return SelectionState.for_collection(weighted_list)


@pytest.fixture
def rng():
    """Seeded random source for reproducible draws."""
    return RandomSource(seed=1234)


@pytest.fixture
def pool(clips):
    """Seeded pool of A, B, C with varied volume and pitch."""
    return AudioPool(
        {clip: 1.0 for clip in clips},
        volume_min=0.5,
        volume_max=0.9,
        pitch_min=0.8,
        pitch_max=1.2,
        random_seed=42,
        name="test",
    )


@pytest.fixture
def recording_source():
    """Audio source that records plays."""
    return RecordingAudioSource()


@pytest.fixture
def recording_one_shot():
    """One-shot player that records calls."""
    return RecordingOneShot()


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """
    Remove SOUNDPOOL_* variables and point the env file at a missing path.

    Variables loaded from an env file during the test are removed afterwards.
    """
    saved = {key for key in os.environ if key.startswith("SOUNDPOOL_")}
    for key in saved:
        monkeypatch.delenv(key)
    monkeypatch.setenv("SOUNDPOOL_ENV_FILE", str(tmp_path / "missing.env"))
    yield monkeypatch
    for key in [k for k in os.environ if k.startswith("SOUNDPOOL_")]:
        if key not in saved:
            del os.environ[key]
