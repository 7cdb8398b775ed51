"""
Configuration management with environment variable support.

All settings can be overridden via environment variables.
Automatically loads .env file if present.
"""

import os
from pathlib import Path
from typing import Literal
from dotenv import load_dotenv

# Load .env file from project root (one level up from skycolor/)
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Logging configuration
LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = os.getenv("LOG_LEVEL", "INFO")

# OpenWeatherMap API
OPENWEATHER_API_KEY: str | None = os.getenv("OPENWEATHER_API_KEY")
OPENWEATHER_BASE_URL: str = os.getenv("OPENWEATHER_BASE_URL", "https://api.openweathermap.org")
HTTP_TIMEOUT: float = float(os.getenv("HTTP_TIMEOUT", "10"))

# Location used for the geocoding lookup
LOCATION_ZIP_CODE: str = os.getenv("LOCATION_ZIP_CODE", "1000000")
LOCATION_COUNTRY_CODE: str = os.getenv("LOCATION_COUNTRY_CODE", "JP")

# Refresh cadence
UPDATER_ENABLED: bool = os.getenv("UPDATER_ENABLED", "true").lower() == "true"
WEATHER_UPDATE_INTERVAL: int = int(os.getenv("WEATHER_UPDATE_INTERVAL", "1800"))  # seconds
COLOR_UPDATE_INTERVAL: int = int(os.getenv("COLOR_UPDATE_INTERVAL", "60"))  # seconds

# HTTP API
API_HOST: str = os.getenv("API_HOST", "127.0.0.1")
API_PORT: int = int(os.getenv("API_PORT", "8000"))

# Persisted color customizations (JSON object)
COLOR_STORE_FILE: str = os.getenv(
    "COLOR_STORE_FILE",
    str(Path.home() / ".config" / "skycolor" / "color_customizations.json")
)


def get_settings():
    """
    Read the API settings from the environment.

    Read at call time (not import time) so a changed .env or environment
    is picked up by SkyColorUpdater.on_settings_changed().

    Returns:
        ApiParam, or None when no API key is configured
    """
    from skycolor.models import ApiParam

    api_key = os.getenv("OPENWEATHER_API_KEY")
    if not api_key:
        return None

    return ApiParam(
        api_key=api_key,
        zip_code=os.getenv("LOCATION_ZIP_CODE", "1000000"),
        country_code=os.getenv("LOCATION_COUNTRY_CODE", "JP"),
    )
