"""
Enums and constants used across the application.
"""

from enum import Enum


class TimeFormat(str, Enum):
    """Clock display styles."""

    H24 = "24h"
    H12 = "12h"


class ClockMode(str, Enum):
    """How often and how long the clock cue is shown."""

    FLASH = "flash"
    ALWAYS_ON = "always-on"
    SUBLIMINAL = "subliminal"


class MediaType(str, Enum):
    """Media kinds the addon provides subtitles for."""

    MOVIE = "movie"
    SERIES = "series"
