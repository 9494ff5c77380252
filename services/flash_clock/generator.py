"""WebVTT clock cue generation and document assembly."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from services.flash_clock.formatting import format_clock_time, format_vtt_timestamp
from shared.enums import ClockMode
from shared.logging_utils import setup_logging
from shared.models import ClockConfig, Cue

logger = setup_logging("flash-clock-generator")

# A generated document covers twelve hours from the request time
HORIZON_SECONDS = 12 * 60 * 60

# Small top offset, anchored to the right edge
RENDER_HINT = "line:5% position:95% align:end"

VTT_HEADER = "WEBVTT\n\n"

ALWAYS_ON_SPAN = Decimal(1)
SUBLIMINAL_SPAN = Decimal("0.05")


class ClockCueGenerator:
    """Generate clock cues for one of the display modes.

    Cue starts are bounded by ``horizon`` but ends are not clipped, so the last
    flash cue may run up to ``flash_duration_seconds - 1`` seconds past it.
    """

    def __init__(self, horizon: int = HORIZON_SECONDS, render_hint: str = RENDER_HINT):
        self.horizon = horizon
        self.render_hint = render_hint

    def cue_schedule(self, config: ClockConfig) -> tuple[int, Decimal]:
        """Return ``(step, span)`` in seconds for the configured mode."""
        if config.mode == ClockMode.ALWAYS_ON:
            return 1, ALWAYS_ON_SPAN
        if config.mode == ClockMode.SUBLIMINAL:
            return 1, SUBLIMINAL_SPAN
        return config.repeat_interval_seconds, Decimal(config.flash_duration_seconds)

    def generate(self, config: ClockConfig, base_instant: datetime) -> list[Cue]:
        """Generate the ordered cue sequence for ``config`` starting at ``base_instant``."""
        step, span = self.cue_schedule(config)
        tz = base_instant.tzinfo
        # Elapsed time is added in UTC so DST changes inside the horizon show real wall time
        base = base_instant.astimezone(timezone.utc) if tz is not None else base_instant

        cues: list[Cue] = []
        for index, t in enumerate(range(0, self.horizon, step), start=1):
            instant = base + timedelta(seconds=t)
            if tz is not None:
                instant = instant.astimezone(tz)
            start = Decimal(t)
            # Indices, offsets and spans are valid by construction; skip per-cue validation
            cues.append(
                Cue.model_construct(
                    index=index,
                    start_offset=start,
                    end_offset=start + span,
                    text=format_clock_time(instant, config.time_format),
                    render_hint=self.render_hint,
                )
            )

        logger.debug(f"Generated {len(cues)} cues every {step}s")
        return cues

    @staticmethod
    def convert_to_vtt(cues: Iterable[Cue]) -> str:
        """Assemble cues into a WebVTT document."""
        parts = [VTT_HEADER]
        for cue in cues:
            parts.append(
                f"{cue.index}\n"
                f"{format_vtt_timestamp(cue.start_offset)} --> "
                f"{format_vtt_timestamp(cue.end_offset)} {cue.render_hint}\n"
                f"{cue.text}\n\n"
            )
        return "".join(parts)

    def build_document(self, config: ClockConfig, base_instant: datetime) -> str:
        """Generate and assemble in one step."""
        return self.convert_to_vtt(self.generate(config, base_instant))
