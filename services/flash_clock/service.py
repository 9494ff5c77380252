"""Request-level composition: resolve, generate, assemble, memoize."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Protocol
from zoneinfo import ZoneInfo

from services.flash_clock.generator import ClockCueGenerator
from services.flash_clock.resolver import resolve_config
from services.flash_clock.validator import ClockConfigValidator
from shared.cache import NullCache, ResponseCache
from shared.config import config as service_config
from shared.logging_utils import setup_logging
from shared.models import ClockConfig

logger = setup_logging("flash-clock-service")


class DocumentCache(Protocol):
    def get(self, config: ClockConfig) -> str | None: ...

    def put(self, config: ClockConfig, document: str) -> None: ...


def local_now(timezone_name: str | None = None) -> datetime:
    """Current time in the configured zone, or the server's local zone."""
    if timezone_name:
        return datetime.now(ZoneInfo(timezone_name))
    return datetime.now().astimezone()


class ClockDocumentService:
    """Turn a configuration token into a WebVTT clock document."""

    def __init__(
        self,
        cache: DocumentCache,
        generator: ClockCueGenerator | None = None,
        validator: ClockConfigValidator | None = None,
        now: Callable[[], datetime] | None = None,
    ):
        self.cache = cache
        self.generator = generator or ClockCueGenerator()
        self.validator = validator or ClockConfigValidator()
        self.now = now or (lambda: local_now(service_config.get("clock_timezone")))

    def document_for_token(self, token: str | None) -> str:
        return self.document_for_config(resolve_config(token))

    def document_for_config(self, clock_config: ClockConfig) -> str:
        """Return the cached document for ``clock_config`` or generate a fresh one."""
        cached = self.cache.get(clock_config)
        if cached is not None:
            logger.info(f"Serving cached clock document for mode={clock_config.mode.value}")
            return cached

        self.validator.validate(clock_config)
        cues = self.generator.generate(clock_config, self.now())
        if logger.isEnabledFor(logging.DEBUG):
            report = self.validator.validate_cues(cues)
            logger.debug(
                f"Cue check: valid={report['valid']}, violations={len(report['violations'])}, "
                f"overlaps={len(report['warnings'])}"
            )
        document = self.generator.convert_to_vtt(cues)
        self.cache.put(clock_config, document)
        logger.info(f"Generated clock document: mode={clock_config.mode.value}, cues={len(cues)}")
        return document


def create_cache() -> DocumentCache:
    """Build the process-wide document cache from configuration."""
    if not service_config.get("cache_enabled", True):
        return NullCache()
    return ResponseCache(
        ttl=service_config.get("cache_ttl_seconds", 30),
        max_entries=service_config.get("cache_max_entries", 100),
    )
