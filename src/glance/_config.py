"""Engine configuration."""

from __future__ import annotations

from dataclasses import dataclass

from ._errors import GlanceConfigError
from ._segmenter import DEFAULT_TWEET_CHARS


@dataclass(slots=True, frozen=True)
class EngineConfig:
    tweet_max_chars: int = DEFAULT_TWEET_CHARS

    def __post_init__(self) -> None:
        if not isinstance(self.tweet_max_chars, int) or isinstance(
            self.tweet_max_chars, bool
        ):
            raise GlanceConfigError(
                f"tweet_max_chars must be an int, got {self.tweet_max_chars!r}"
            )
        if self.tweet_max_chars < 1:
            raise GlanceConfigError(
                f"tweet_max_chars must be >= 1, got {self.tweet_max_chars}"
            )
