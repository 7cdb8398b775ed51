"""
OpenWeatherMap client: ZIP/country geocoding and today's sun times + clouds.

Every call returns Ok(value) or Err(FetchError); no exception escapes.
Status codes map to FetchErrorKind:
- 401 -> API_KEY
- 404 -> PARAM
- other non-200 -> UNKNOWN_RESPONSE
- transport failure -> NETWORK
- 200 with a payload that fails validation -> UNKNOWN_RESPONSE

Cloud cover outside 0-100 is treated as an invalid payload, not clamped.
"""

import os
from datetime import datetime
from typing import Any, Optional

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from skycolor.config import HTTP_TIMEOUT, OPENWEATHER_BASE_URL
from skycolor.logger import get_logger
from skycolor.models import ApiParam, Location, Weather
from skycolor.result import Err, FetchError, FetchErrorKind, Ok, Result

logger = get_logger("weather")

USER_AGENT = "skycolor/1.0"
PROXY_ENV_VARS = ("HTTPS_PROXY", "https_proxy", "HTTP_PROXY", "http_proxy")


# ============================================================================
# Response Schemas
# ============================================================================

class _LocationResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    lat: float
    lon: float


class _Clouds(BaseModel):
    model_config = ConfigDict(extra="allow")

    all: int = Field(..., ge=0, le=100)


class _Sys(BaseModel):
    model_config = ConfigDict(extra="allow")

    sunrise: float
    sunset: float


class _WeatherResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    clouds: _Clouds
    sys: _Sys


# ============================================================================
# HTTP helpers
# ============================================================================

def get_system_proxy() -> Optional[str]:
    """First proxy URL set in the environment, HTTPS before HTTP."""
    for name in PROXY_ENV_VARS:
        value = os.environ.get(name)
        if value:
            return value
    return None


def _proxies() -> Optional[dict[str, str]]:
    proxy = get_system_proxy()
    if proxy is None:
        return None
    return {"http": proxy, "https": proxy}


def _get_json(url: str, params: dict[str, Any], not_found_message: str) -> Result[Any, FetchError]:
    """GET url and return the decoded JSON body, mapping failures to FetchError."""
    try:
        resp = requests.get(
            url,
            params=params,
            timeout=HTTP_TIMEOUT,
            headers={"User-Agent": USER_AGENT},
            proxies=_proxies(),
        )
    except requests.RequestException as e:
        logger.debug(f"Request to {url} failed: {e}")
        return Err(FetchError(FetchErrorKind.NETWORK, str(e) or "unknown error"))

    if resp.status_code == 401:
        return Err(FetchError(FetchErrorKind.API_KEY, "Invalid API key."))
    if resp.status_code == 404:
        return Err(FetchError(FetchErrorKind.PARAM, not_found_message))
    if resp.status_code != 200:
        return Err(FetchError(FetchErrorKind.UNKNOWN_RESPONSE, f"status code: {resp.status_code}"))

    try:
        return Ok(resp.json())
    except ValueError as e:
        return Err(FetchError(FetchErrorKind.UNKNOWN_RESPONSE, f"response is not JSON: {e}"))


# ============================================================================
# Public API
# ============================================================================

def get_location(param: ApiParam) -> Result[Location, FetchError]:
    """
    Resolve a ZIP/country code to coordinates.

    Args:
        param: API key plus ZIP and country code

    Returns:
        Ok(Location) or Err(FetchError)
    """
    result = _get_json(
        f"{OPENWEATHER_BASE_URL}/geo/1.0/zip",
        {"zip": f"{param.zip_code},{param.country_code}", "appid": param.api_key},
        "ZIP code or country code is unknown.",
    )
    if result.is_err():
        return result

    try:
        body = _LocationResponse.model_validate(result.value)
        location = Location(lat=body.lat, lon=body.lon)
    except ValidationError as e:
        return Err(FetchError(FetchErrorKind.UNKNOWN_RESPONSE, f"location API parse error: {e}"))

    logger.debug(f"Fetched location: lat={location.lat}, lon={location.lon}")
    return Ok(location)


def get_weather(
    location: Location,
    api_key: str,
    now: Optional[datetime] = None,
) -> Result[Weather, FetchError]:
    """
    Fetch today's sunrise, sunset and cloud cover.

    Sunrise/sunset unix timestamps are converted to seconds since the local
    midnight of now.

    Args:
        location: Coordinates to query
        api_key: OpenWeatherMap API key
        now: Reference time (defaults to current local time)

    Returns:
        Ok(Weather) or Err(FetchError)
    """
    result = _get_json(
        f"{OPENWEATHER_BASE_URL}/data/2.5/weather",
        {"lat": location.lat, "lon": location.lon, "appid": api_key},
        "location is invalid.",
    )
    if result.is_err():
        return result

    today_origin = start_of_day_timestamp(now or datetime.now())
    try:
        body = _WeatherResponse.model_validate(result.value)
        weather = Weather(
            sunrise=body.sys.sunrise - today_origin,
            sunset=body.sys.sunset - today_origin,
            cloud=body.clouds.all,
        )
    except ValidationError as e:
        return Err(FetchError(FetchErrorKind.UNKNOWN_RESPONSE, f"weather API parse error: {e}"))

    logger.debug(
        f"sunrise: {format_offset(weather.sunrise)}, "
        f"sunset: {format_offset(weather.sunset)}, cloud: {weather.cloud}"
    )
    return Ok(weather)


def start_of_day_timestamp(now: datetime) -> float:
    """Unix timestamp of the local midnight starting now's day."""
    return now.replace(hour=0, minute=0, second=0, microsecond=0).timestamp()


def format_offset(seconds: float) -> str:
    """Format seconds since midnight as 'HH:MM', e.g. 43500 -> '12:05'."""
    hour = int(seconds // 3600)
    minute = int(seconds // 60) % 60
    return f"{hour:02d}:{minute:02d}"
