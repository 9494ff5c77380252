"""
Configuration management for the clock service.
"""

import json
import os
from typing import Any

import yaml

from dotenv import load_dotenv


class ServiceConfig:
    """Configuration management using environment variables and an optional YAML file."""

    def __init__(self) -> None:
        """Initialize configuration by loading environment variables."""
        # .env sits in the project root, next to bootloader.py
        env_path = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.env"))
        load_dotenv(dotenv_path=env_path, override=False)
        self.config: dict[str, Any] = {}
        self.settings: dict[str, Any] = {}
        self.settings_path = os.getenv(
            "FLASHCLOCK_SETTINGS_PATH",
            os.path.join(os.path.dirname(__file__), "../config/flashclock.yaml"),
        )
        self.load_from_env()
        self.load_settings()

    def load_from_env(self) -> None:
        """Load configuration from environment variables."""
        self.config = {
            "port": int(os.getenv("PORT", "7000")),
            "addon_url": os.getenv("ADDON_URL"),
            "vercel_url": os.getenv("VERCEL_URL"),
            "debug": os.getenv("DEBUG", "false").lower() == "true",
            "log_level": os.getenv("LOG_LEVEL", "INFO"),
            "allowed_origins": json.loads(os.getenv("ALLOWED_ORIGINS", '["*"]')),
            "cache_enabled": os.getenv("CACHE_ENABLED", "true").lower() == "true",
            "cache_ttl_seconds": int(os.getenv("CACHE_TTL_SECONDS", "30")),
            "cache_max_entries": int(os.getenv("CACHE_MAX_ENTRIES", "100")),
            "clock_timezone": os.getenv("CLOCK_TIMEZONE") or None,
        }

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value
        """
        return self.config.get(key, default)

    def public_base_url(self) -> str:
        """Externally reachable base URL used in subtitle track references."""
        vercel_url = self.get("vercel_url")
        if vercel_url:
            return f"https://{vercel_url}"
        addon_url = self.get("addon_url")
        if addon_url:
            return addon_url.rstrip("/")
        return f"http://localhost:{self.get('port', 7000)}"

    def load_settings(self) -> None:
        """Load optional settings from the YAML file."""
        path = os.path.abspath(self.settings_path)
        try:
            with open(path, "r", encoding="utf-8") as stream:
                data = yaml.safe_load(stream) or {}
        except FileNotFoundError:
            data = {}
        self.settings = data

    def get_setting_value(self, path: str, default: Any = None) -> Any:
        """Retrieve a settings value via dotted path."""
        env_override_key = f"FLASHCLOCK_FLAG_{path.replace('.', '_').upper()}"
        env_value = os.getenv(env_override_key)
        if env_value is not None:
            return self._coerce_env_value(env_value, default)

        node: Any = self.settings
        for part in path.split("."):
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node if node is not None else default

    @staticmethod
    def _coerce_env_value(raw: str, default: Any) -> Any:
        lowered = raw.lower()
        if lowered in {"true", "false"}:
            return lowered == "true"
        if lowered.replace(".", "", 1).isdigit():
            try:
                return float(lowered) if "." in lowered else int(lowered)
            except ValueError:
                return raw
        return raw or default


# Global configuration instance
config = ServiceConfig()
