from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from shared.enums import ClockMode, TimeFormat

DEFAULT_TIME_FORMAT = TimeFormat.H24
DEFAULT_FLASH_DURATION_SECONDS = 10
DEFAULT_REPEAT_INTERVAL_SECONDS = 60
DEFAULT_MODE = ClockMode.FLASH


class ClockConfig(BaseModel):
    """Fully resolved clock configuration. Every field always carries a value."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    time_format: TimeFormat = Field(default=DEFAULT_TIME_FORMAT, alias="timeFormat")
    flash_duration_seconds: int = Field(
        default=DEFAULT_FLASH_DURATION_SECONDS, ge=1, alias="flashDurationSec"
    )
    repeat_interval_seconds: int = Field(
        default=DEFAULT_REPEAT_INTERVAL_SECONDS, ge=1, alias="repeatIntervalSec"
    )
    mode: ClockMode = Field(default=DEFAULT_MODE)

    def to_wire(self) -> dict[str, Any]:
        """Serialize with the addon's key names in a fixed order."""
        return {
            "timeFormat": self.time_format.value,
            "flashDurationSec": self.flash_duration_seconds,
            "repeatIntervalSec": self.repeat_interval_seconds,
            "mode": self.mode.value,
        }


class Cue(BaseModel):
    """One timed WebVTT cue, offsets in seconds from document start."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=1, description="Cue index, 1-based")
    start_offset: Decimal = Field(..., ge=0, description="Start time in seconds")
    end_offset: Decimal = Field(..., ge=0, description="End time in seconds")
    text: str = Field(..., description="Formatted wall-clock time")
    render_hint: str = Field(..., description="WebVTT cue settings")


# Addon protocol models
class SubtitleTrack(BaseModel):
    id: str
    lang: str
    label: str
    url: str


class SubtitlesResponse(BaseModel):
    subtitles: list[SubtitleTrack] = Field(default_factory=list)


class ManifestConfigOption(BaseModel):
    key: str
    type: str = "select"
    title: str
    options: list[str]
    default: str


class BehaviorHints(BaseModel):
    configurable: bool = True
    configurationRequired: bool = False


class AddonManifest(BaseModel):
    id: str
    version: str
    name: str
    description: str
    logo: str | None = None
    background: str | None = None
    resources: list[str]
    types: list[str]
    catalogs: list[dict[str, Any]] = Field(default_factory=list)
    behaviorHints: BehaviorHints = Field(default_factory=BehaviorHints)
    config: list[ManifestConfigOption] = Field(default_factory=list)


# UI helper models
class ClockConfigRequest(BaseModel):
    """Partial configuration submitted by a configuration editor."""

    model_config = ConfigDict(populate_by_name=True)

    time_format: str | None = Field(None, alias="timeFormat")
    flash_duration_seconds: int | str | None = Field(None, alias="flashDurationSec")
    repeat_interval_seconds: int | str | None = Field(None, alias="repeatIntervalSec")
    mode: str | None = Field(None)


class TokenResponse(BaseModel):
    token: str = Field(..., description="Opaque configuration token")
    config: dict[str, Any] = Field(..., description="Resolved configuration")


class ResolvedConfigResponse(BaseModel):
    config: dict[str, Any]
    token: str
    warnings: list[dict[str, Any]] = Field(default_factory=list)
