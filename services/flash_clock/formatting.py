"""Clock text and WebVTT timestamp formatting."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from shared.enums import TimeFormat


def format_clock_time(instant: datetime, time_format: TimeFormat | str) -> str:
    """Format the wall-clock time of ``instant``.

    24h gives ``HH:MM``; 12h gives ``H:MM AM|PM`` with hour 0 shown as 12.
    Any value other than 12h formats as 24h.
    """
    hours = instant.hour
    minutes = instant.minute
    if time_format == TimeFormat.H12:
        period = "PM" if hours >= 12 else "AM"
        return f"{hours % 12 or 12}:{minutes:02d} {period}"
    return f"{hours:02d}:{minutes:02d}"


def format_vtt_timestamp(seconds: Decimal | float | int) -> str:
    """Convert seconds to WebVTT timestamp format (HH:MM:SS.mmm).

    Every field is truncated, never rounded. Floats are read through their
    shortest decimal representation so 3.05 yields ``.050`` rather than ``.049``.
    """
    total = seconds if isinstance(seconds, Decimal) else Decimal(str(seconds))
    whole = int(total)
    millis = int((total - whole) * 1000)
    hours, remainder = divmod(whole, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{millis:03d}"
