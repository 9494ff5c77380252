"""Addon manifest and subtitle track references."""

from __future__ import annotations

from urllib.parse import quote

from services.flash_clock.resolver import encode_config
from services.flash_clock.validator import STANDARD_FLASH_DURATIONS, STANDARD_REPEAT_INTERVALS
from shared.config import config as service_config
from shared.enums import ClockMode, MediaType, TimeFormat
from shared.models import (
    DEFAULT_FLASH_DURATION_SECONDS,
    DEFAULT_MODE,
    DEFAULT_REPEAT_INTERVAL_SECONDS,
    DEFAULT_TIME_FORMAT,
    AddonManifest,
    BehaviorHints,
    ClockConfig,
    ManifestConfigOption,
    SubtitleTrack,
)

ADDON_ID = "com.kepners.flashclock"
ADDON_VERSION = "1.0.0"
ADDON_NAME = "🕒 Flash Clock (Top Right)"
ADDON_DESCRIPTION = (
    "Digital clock overlay via subtitles - flashes current time briefly, then disappears. "
    "Perfect for checking time when pausing."
)
ADDON_LOGO = "https://raw.githubusercontent.com/Kepners/clockrr/master/logo.ico"
ADDON_BACKGROUND = "#524948"

TRACK_ID = "flashclock-time"
TRACK_LANG = "eng"
DOCUMENT_PATH = "/flashclock.vtt"

SUPPORTED_TYPES = tuple(media_type.value for media_type in MediaType)


def build_manifest() -> AddonManifest:
    """Build the addon manifest. Presentation fields may be overridden in the settings file."""
    return AddonManifest(
        id=ADDON_ID,
        version=ADDON_VERSION,
        name=service_config.get_setting_value("manifest.name", ADDON_NAME),
        description=service_config.get_setting_value("manifest.description", ADDON_DESCRIPTION),
        logo=service_config.get_setting_value("manifest.logo", ADDON_LOGO),
        background=service_config.get_setting_value("manifest.background", ADDON_BACKGROUND),
        resources=["subtitles"],
        types=list(SUPPORTED_TYPES),
        catalogs=[],
        behaviorHints=BehaviorHints(configurable=True, configurationRequired=False),
        config=[
            ManifestConfigOption(
                key="timeFormat",
                title="Time Format",
                options=[fmt.value for fmt in TimeFormat],
                default=DEFAULT_TIME_FORMAT.value,
            ),
            ManifestConfigOption(
                key="flashDurationSec",
                title="Flash Duration (seconds)",
                options=[str(value) for value in STANDARD_FLASH_DURATIONS],
                default=str(DEFAULT_FLASH_DURATION_SECONDS),
            ),
            ManifestConfigOption(
                key="repeatIntervalSec",
                title="Repeat Interval (seconds)",
                options=[str(value) for value in STANDARD_REPEAT_INTERVALS],
                default=str(DEFAULT_REPEAT_INTERVAL_SECONDS),
            ),
            ManifestConfigOption(
                key="mode",
                title="Display Mode",
                options=[mode.value for mode in ClockMode],
                default=DEFAULT_MODE.value,
            ),
        ],
    )


def document_url(clock_config: ClockConfig, base_url: str | None = None) -> str:
    """URL of the WebVTT document for a resolved configuration."""
    base = base_url or service_config.public_base_url()
    token = quote(encode_config(clock_config), safe="")
    return f"{base}{DOCUMENT_PATH}?cfg={token}"


def subtitle_tracks(
    media_type: str, clock_config: ClockConfig, base_url: str | None = None
) -> list[SubtitleTrack]:
    """Subtitle tracks offered for a media item. Unsupported media kinds get none."""
    if media_type not in SUPPORTED_TYPES:
        return []
    return [
        SubtitleTrack(
            id=TRACK_ID,
            lang=TRACK_LANG,
            label=service_config.get_setting_value("manifest.name", ADDON_NAME),
            url=document_url(clock_config, base_url),
        )
    ]
