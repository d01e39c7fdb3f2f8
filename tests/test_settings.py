"""Tests for the settings module."""

import pytest
from pydantic import ValidationError

from content_search_hub.config.provider import AppSettingsProvider
from content_search_hub.config.settings import AppSettings, get_settings
from content_search_hub.utils.errors import MissingConfigurationError


class TestAppSettings:
    """Test AppSettings class."""

    def test_default_values(self):
        """Test default values for app settings."""
        settings = AppSettings(_env_file=None)

        assert settings.app_name == "Content Search Hub"
        assert settings.environment == "development"
        assert settings.log_level == "INFO"
        assert settings.buckets_enabled is True
        assert settings.merger.default_limit == 100
        assert settings.merger.log_merge_metrics is False
        assert settings.formatter.default_icon is None
        assert settings.formatter.require_default_icon is False

    def test_env_overrides(self, mock_env):
        """Test nested environment overrides."""
        settings = get_settings()

        assert settings.log_level == "DEBUG"
        assert settings.buckets_enabled is False
        assert settings.merger.default_limit == 25
        assert settings.formatter.default_icon == "env-icon.png"

    def test_get_settings_is_cached(self, mock_env):
        assert get_settings() is get_settings()

    def test_log_level_is_normalized(self):
        assert AppSettings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            AppSettings(_env_file=None, log_level="LOUD")

    def test_invalid_environment(self):
        with pytest.raises(ValidationError):
            AppSettings(_env_file=None, environment="moon")

    def test_negative_default_limit(self):
        with pytest.raises(ValidationError):
            AppSettings(_env_file=None, merger={"default_limit": -1})


class TestAppSettingsProvider:
    """Test the settings-backed default icon provider."""

    def test_configured_icon(self, settings):
        assert AppSettingsProvider(settings).default_icon() == "default.png"

    def test_missing_icon_is_none(self):
        provider = AppSettingsProvider(AppSettings(_env_file=None))
        assert provider.default_icon() is None

    def test_missing_required_icon_raises(self):
        settings = AppSettings(_env_file=None, formatter={"require_default_icon": True})

        with pytest.raises(MissingConfigurationError) as exc_info:
            AppSettingsProvider(settings).default_icon()

        assert exc_info.value.details["config_key"] == "formatter.default_icon"
