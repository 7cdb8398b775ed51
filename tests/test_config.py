"""Tests for configuration management."""

import os
from importlib import reload
from unittest.mock import patch

from skycolor.models import ApiParam


def reload_config():
    import skycolor.config as config
    reload(config)
    return config


class TestConfigDefaults:
    """Tests for default configuration values."""

    def test_default_log_level(self):
        """Should default to INFO log level."""
        with patch.dict(os.environ, {}, clear=True):
            assert reload_config().LOG_LEVEL == "INFO"

    def test_default_location(self):
        """Should default to ZIP 1000000 in Japan."""
        with patch.dict(os.environ, {}, clear=True):
            config = reload_config()
            assert config.LOCATION_ZIP_CODE == "1000000"
            assert config.LOCATION_COUNTRY_CODE == "JP"

    def test_default_intervals(self):
        """Should refresh weather every 30 minutes and color every minute."""
        with patch.dict(os.environ, {}, clear=True):
            config = reload_config()
            assert config.WEATHER_UPDATE_INTERVAL == 1800
            assert config.COLOR_UPDATE_INTERVAL == 60

    def test_default_updater_enabled(self):
        with patch.dict(os.environ, {}, clear=True):
            assert reload_config().UPDATER_ENABLED is True

    def test_default_api_bind(self):
        with patch.dict(os.environ, {}, clear=True):
            config = reload_config()
            assert config.API_HOST == "127.0.0.1"
            assert config.API_PORT == 8000

    def test_default_api(self):
        with patch.dict(os.environ, {}, clear=True):
            config = reload_config()
            assert config.OPENWEATHER_API_KEY is None
            assert config.OPENWEATHER_BASE_URL == "https://api.openweathermap.org"
            assert config.HTTP_TIMEOUT == 10.0


class TestConfigEnvironmentOverrides:
    """Tests for environment variable overrides."""

    def test_override_log_level(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "DEBUG"}, clear=True):
            assert reload_config().LOG_LEVEL == "DEBUG"

    def test_override_intervals(self):
        env = {"WEATHER_UPDATE_INTERVAL": "600", "COLOR_UPDATE_INTERVAL": "15"}
        with patch.dict(os.environ, env, clear=True):
            config = reload_config()
            assert config.WEATHER_UPDATE_INTERVAL == 600
            assert config.COLOR_UPDATE_INTERVAL == 15

    def test_updater_enabled_case_insensitive(self):
        for value in ["False", "FALSE", "false"]:
            with patch.dict(os.environ, {"UPDATER_ENABLED": value}, clear=True):
                assert reload_config().UPDATER_ENABLED is False

    def test_override_color_store_file(self):
        with patch.dict(os.environ, {"COLOR_STORE_FILE": "/tmp/colors.json"}, clear=True):
            assert reload_config().COLOR_STORE_FILE == "/tmp/colors.json"


class TestGetSettings:
    """Tests for reading API settings at call time."""

    def test_no_api_key(self):
        from skycolor.config import get_settings
        with patch.dict(os.environ, {}, clear=True):
            assert get_settings() is None

    def test_empty_api_key(self):
        from skycolor.config import get_settings
        with patch.dict(os.environ, {"OPENWEATHER_API_KEY": ""}, clear=True):
            assert get_settings() is None

    def test_settings_from_environment(self):
        from skycolor.config import get_settings
        env = {
            "OPENWEATHER_API_KEY": "abc123",
            "LOCATION_ZIP_CODE": "94040",
            "LOCATION_COUNTRY_CODE": "US",
        }
        with patch.dict(os.environ, env, clear=True):
            assert get_settings() == ApiParam(api_key="abc123", zip_code="94040", country_code="US")

    def test_settings_default_location(self):
        from skycolor.config import get_settings
        with patch.dict(os.environ, {"OPENWEATHER_API_KEY": "abc123"}, clear=True):
            settings = get_settings()
            assert settings.zip_code == "1000000"
            assert settings.country_code == "JP"
