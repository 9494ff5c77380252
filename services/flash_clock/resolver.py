"""Configuration token decoding, defaulting and encoding.

A token is the base64 of a JSON object using the addon's wire keys
(``timeFormat``, ``flashDurationSec``, ``repeatIntervalSec``, ``mode``).
Older install links carry percent-encoded JSON instead, so decoding tries a
fixed list of strategies and keeps the first one that yields an object.
Resolution never fails: anything undecodable resolves to the defaults.
"""

from __future__ import annotations

import base64
import binascii
import json
import math
import re
from collections.abc import Callable, Iterable, Mapping
from typing import Any
from urllib.parse import unquote

from shared.enums import ClockMode, TimeFormat
from shared.models import (
    DEFAULT_FLASH_DURATION_SECONDS,
    DEFAULT_MODE,
    DEFAULT_REPEAT_INTERVAL_SECONDS,
    DEFAULT_TIME_FORMAT,
    ClockConfig,
)
from shared.logging_utils import setup_logging

logger = setup_logging("flash-clock-resolver")

DecodeStrategy = Callable[[str], dict[str, Any]]

DECODE_ERRORS = (binascii.Error, UnicodeDecodeError, json.JSONDecodeError, ValueError, TypeError)

# Wire key first, then the attribute name
FIELD_KEYS: dict[str, tuple[str, ...]] = {
    "time_format": ("timeFormat", "time_format"),
    "flash_duration_seconds": ("flashDurationSec", "flash_duration_seconds"),
    "repeat_interval_seconds": ("repeatIntervalSec", "repeat_interval_seconds"),
    "mode": ("mode",),
}

_LEADING_INT = re.compile(r"^\s*[+-]?\d+")


def _require_object(payload: Any) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise ValueError(f"Expected a JSON object, got {type(payload).__name__}")
    return payload


def decode_base64_json(token: str) -> dict[str, Any]:
    """Strategy 1: standard base64 of a JSON object. Stripped ``=`` padding is restored."""
    padded = token + "=" * (-len(token) % 4)
    raw = base64.b64decode(padded, validate=True)
    return _require_object(json.loads(raw.decode("utf-8")))


def decode_percent_json(token: str) -> dict[str, Any]:
    """Strategy 2: percent-encoded JSON object."""
    return _require_object(json.loads(unquote(token, errors="strict")))


DECODE_STRATEGIES: tuple[DecodeStrategy, ...] = (decode_base64_json, decode_percent_json)


def first_success(
    strategies: Iterable[DecodeStrategy], token: str, fallback: Callable[[], dict[str, Any]] = dict
) -> dict[str, Any]:
    """Return the result of the first strategy that does not raise a decode error."""
    for strategy in strategies:
        try:
            return strategy(token)
        except DECODE_ERRORS as e:
            logger.debug(f"Token decode via {strategy.__name__} failed: {e}")
    return fallback()


def decode_token(token: str | None) -> dict[str, Any]:
    """Decode an opaque configuration token into a raw mapping, empty on failure."""
    if not token:
        return {}
    return first_success(DECODE_STRATEGIES, token)


def _is_present(value: Any) -> bool:
    return value is not None and value != ""


def _lookup(raw: Mapping[str, Any], field: str) -> Any:
    for key in FIELD_KEYS[field]:
        value = raw.get(key)
        if _is_present(value):
            return value
    return None


def _coerce_positive_int(value: Any, default: int) -> int:
    """Integers arrive as JSON numbers or as numeric strings from the configure page."""
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not math.isfinite(value):
            return default
        number = int(value)
    elif isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match is None:
            return default
        number = int(match.group())
    else:
        return default
    return number if number >= 1 else default


def _coerce_enum(value: Any, enum_type: type, default: Any) -> Any:
    try:
        return enum_type(value)
    except (ValueError, TypeError):
        return default


def resolve_mapping(raw: Mapping[str, Any]) -> ClockConfig:
    """Merge a decoded mapping with defaults, field by field. Unknown keys are ignored."""
    return ClockConfig(
        time_format=_coerce_enum(_lookup(raw, "time_format"), TimeFormat, DEFAULT_TIME_FORMAT),
        flash_duration_seconds=_coerce_positive_int(
            _lookup(raw, "flash_duration_seconds"), DEFAULT_FLASH_DURATION_SECONDS
        ),
        repeat_interval_seconds=_coerce_positive_int(
            _lookup(raw, "repeat_interval_seconds"), DEFAULT_REPEAT_INTERVAL_SECONDS
        ),
        mode=_coerce_enum(_lookup(raw, "mode"), ClockMode, DEFAULT_MODE),
    )


def resolve_config(token: str | None) -> ClockConfig:
    """Decode a token and fill every missing field with its default."""
    return resolve_mapping(decode_token(token))


def encode_config(config: ClockConfig) -> str:
    """Serialize a resolved configuration to a base64 token."""
    payload = json.dumps(config.to_wire(), separators=(",", ":"))
    return base64.b64encode(payload.encode("utf-8")).decode("ascii")
