"""Sanity checks for clock configurations and generated cue sequences."""

from __future__ import annotations

from typing import Any

from shared.enums import ClockMode
from shared.logging_utils import setup_logging
from shared.models import ClockConfig, Cue

logger = setup_logging("flash-clock-validator")

# Values offered by the configure page
STANDARD_FLASH_DURATIONS = (3, 5, 10, 15, 30, 60)
STANDARD_REPEAT_INTERVALS = (10, 20, 30, 60, 120, 300)


class ClockConfigValidationError(Exception):
    """Raised when strict validation finds violations."""

    def __init__(self, message: str, violations: list[dict[str, Any]]):
        super().__init__(message)
        self.violations = violations


class ClockConfigValidator:
    """Validate resolved configurations and the cues generated from them.

    Overlapping flash cues (a flash longer than the repeat interval) are
    allowed and reported as a warning. Strict mode treats them as a violation
    and raises.
    """

    def validate(self, config: ClockConfig, strict: bool = False) -> dict[str, Any]:
        """
        Validate a resolved configuration.

        Args:
            config: Resolved configuration
            strict: If True, overlapping flash cues are a violation and raise

        Returns:
            Dict with keys: valid (bool), violations (list), warnings (list)

        Raises:
            ClockConfigValidationError: If strict=True and violations found
        """
        violations: list[dict[str, Any]] = []
        warnings: list[dict[str, Any]] = []

        if config.mode == ClockMode.FLASH:
            overlap = self._check_overlap(config)
            if strict:
                violations.extend({**item, "severity": "error"} for item in overlap)
            else:
                warnings.extend(overlap)
            for item in overlap:
                logger.warning(item["message"])
            warnings.extend(self._check_standard_options(config))

        is_valid = len(violations) == 0
        if strict and not is_valid:
            raise ClockConfigValidationError(
                f"Clock configuration failed with {len(violations)} violation(s)", violations
            )

        return {"valid": is_valid, "violations": violations, "warnings": warnings}

    def _check_overlap(self, config: ClockConfig) -> list[dict[str, Any]]:
        if config.flash_duration_seconds <= config.repeat_interval_seconds:
            return []
        overlap = config.flash_duration_seconds - config.repeat_interval_seconds
        return [
            {
                "type": "overlapping_cues",
                "severity": "warning",
                "message": (
                    f"Flash duration {config.flash_duration_seconds}s exceeds repeat interval "
                    f"{config.repeat_interval_seconds}s; consecutive cues overlap by {overlap}s"
                ),
                "details": {
                    "flash_duration_seconds": config.flash_duration_seconds,
                    "repeat_interval_seconds": config.repeat_interval_seconds,
                    "overlap_seconds": overlap,
                },
            }
        ]

    def _check_standard_options(self, config: ClockConfig) -> list[dict[str, Any]]:
        warnings = []
        if config.flash_duration_seconds not in STANDARD_FLASH_DURATIONS:
            warnings.append(
                {
                    "type": "nonstandard_option",
                    "severity": "info",
                    "message": f"Flash duration {config.flash_duration_seconds}s is not a configure page option",
                    "details": {"field": "flashDurationSec", "value": config.flash_duration_seconds},
                }
            )
        if config.repeat_interval_seconds not in STANDARD_REPEAT_INTERVALS:
            warnings.append(
                {
                    "type": "nonstandard_option",
                    "severity": "info",
                    "message": f"Repeat interval {config.repeat_interval_seconds}s is not a configure page option",
                    "details": {"field": "repeatIntervalSec", "value": config.repeat_interval_seconds},
                }
            )
        return warnings

    def validate_cues(self, cues: list[Cue]) -> dict[str, Any]:
        """Check index sequencing, start ordering and adjacent overlaps."""
        violations: list[dict[str, Any]] = []
        warnings: list[dict[str, Any]] = []

        for position, cue in enumerate(cues, start=1):
            if cue.index != position:
                violations.append(
                    {
                        "type": "ordering",
                        "severity": "error",
                        "message": f"Cue at position {position} has index {cue.index}",
                        "cue_index": cue.index,
                    }
                )
            if cue.end_offset <= cue.start_offset:
                violations.append(
                    {
                        "type": "negative_duration",
                        "severity": "error",
                        "message": f"Cue {cue.index} has non-positive duration",
                        "cue_index": cue.index,
                    }
                )

        for current, next_cue in zip(cues, cues[1:]):
            if current.start_offset >= next_cue.start_offset:
                violations.append(
                    {
                        "type": "ordering",
                        "severity": "error",
                        "message": f"Cue {current.index} does not start before cue {next_cue.index}",
                        "cue_index": current.index,
                    }
                )
            if current.end_offset > next_cue.start_offset:
                warnings.append(
                    {
                        "type": "overlap",
                        "severity": "warning",
                        "message": f"Cues {current.index} and {next_cue.index} overlap",
                        "cue_index": current.index,
                        "details": {"overlap_seconds": str(current.end_offset - next_cue.start_offset)},
                    }
                )

        return {
            "valid": len(violations) == 0,
            "violations": violations,
            "warnings": warnings,
            "total_cues": len(cues),
        }
