"""Tests for service configuration and manifest settings overrides."""

import pytest

from services.flash_clock.manifest import build_manifest, subtitle_tracks
from shared.config import ServiceConfig, config
from shared.models import ClockConfig


@pytest.fixture
def service_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> ServiceConfig:
    for name in ("PORT", "ADDON_URL", "VERCEL_URL", "CACHE_ENABLED", "CACHE_TTL_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("FLASHCLOCK_SETTINGS_PATH", str(tmp_path / "missing.yaml"))
    return ServiceConfig()


class TestServiceConfig:
    def test_defaults(self, service_config: ServiceConfig) -> None:
        assert service_config.get("port") == 7000
        assert service_config.get("cache_enabled") is True
        assert service_config.get("cache_ttl_seconds") == 30
        assert service_config.get("cache_max_entries") == 100
        assert service_config.settings == {}

    def test_env_values(self, monkeypatch: pytest.MonkeyPatch, service_config: ServiceConfig) -> None:
        monkeypatch.setenv("PORT", "8123")
        monkeypatch.setenv("CACHE_ENABLED", "false")
        service_config.load_from_env()
        assert service_config.get("port") == 8123
        assert service_config.get("cache_enabled") is False

    def test_public_base_url_prefers_vercel(
        self, monkeypatch: pytest.MonkeyPatch, service_config: ServiceConfig
    ) -> None:
        assert service_config.public_base_url() == "http://localhost:7000"
        monkeypatch.setenv("ADDON_URL", "https://clock.example.org/")
        service_config.load_from_env()
        assert service_config.public_base_url() == "https://clock.example.org"
        monkeypatch.setenv("VERCEL_URL", "flashclock.vercel.app")
        service_config.load_from_env()
        assert service_config.public_base_url() == "https://flashclock.vercel.app"

    def test_settings_file(self, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
        settings_file = tmp_path / "flashclock.yaml"
        settings_file.write_text("manifest:\n  name: Corner Clock\n  logo: null\n", encoding="utf-8")
        monkeypatch.setenv("FLASHCLOCK_SETTINGS_PATH", str(settings_file))
        service_config = ServiceConfig()
        assert service_config.get_setting_value("manifest.name") == "Corner Clock"
        assert service_config.get_setting_value("manifest.logo", "fallback") == "fallback"
        assert service_config.get_setting_value("manifest.missing.deep", 3) == 3

    def test_env_flag_overrides_settings(
        self, monkeypatch: pytest.MonkeyPatch, service_config: ServiceConfig
    ) -> None:
        monkeypatch.setattr(service_config, "settings", {"manifest": {"name": "From file"}})
        monkeypatch.setenv("FLASHCLOCK_FLAG_MANIFEST_NAME", "From env")
        assert service_config.get_setting_value("manifest.name") == "From env"

    @pytest.mark.parametrize(
        "raw,expected",
        [("true", True), ("FALSE", False), ("42", 42), ("2.5", 2.5), ("text", "text"), ("", "default")],
    )
    def test_coerce_env_value(self, raw: str, expected: object) -> None:
        assert ServiceConfig._coerce_env_value(raw, "default") == expected


class TestManifestOverrides:
    def test_name_override_reaches_manifest_and_tracks(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(config, "settings", {"manifest": {"name": "Corner Clock", "background": "#000000"}})
        manifest = build_manifest()
        assert manifest.name == "Corner Clock"
        assert manifest.background == "#000000"
        tracks = subtitle_tracks("movie", ClockConfig(), base_url="https://clock.example.org")
        assert tracks[0].label == "Corner Clock"
        assert tracks[0].url.startswith("https://clock.example.org/flashclock.vtt?cfg=")
