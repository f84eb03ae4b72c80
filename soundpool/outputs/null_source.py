from .base_source import BaseAudioSource


class NullAudioSource(BaseAudioSource):
    """A source that plays nothing. Useful for dry runs and tests."""

    def play(self) -> None:
        # Nothing to play
        return
