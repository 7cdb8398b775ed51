"""Value models shared between the weather client, the engine and the API."""

from pydantic import BaseModel, ConfigDict, Field


class Location(BaseModel):
    """Geographic coordinates resolved from a ZIP/country code."""
    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90, description="Latitude (-90 to 90)")
    lon: float = Field(..., ge=-180, le=180, description="Longitude (-180 to 180)")


class Weather(BaseModel):
    """
    Sun times and cloud cover for today.

    sunrise/sunset are seconds since local midnight. They may be negative
    or exceed one day when upstream data is unusual.
    """
    model_config = ConfigDict(frozen=True)

    sunrise: float = Field(..., allow_inf_nan=False, description="Sunrise, seconds since local midnight")
    sunset: float = Field(..., allow_inf_nan=False, description="Sunset, seconds since local midnight")
    cloud: float = Field(..., ge=0, le=100, description="Cloud cover percentage (0-100)")


class ApiParam(BaseModel):
    """OpenWeatherMap credentials and the location to look up."""
    model_config = ConfigDict(frozen=True)

    api_key: str = Field(..., min_length=1)
    zip_code: str = "1000000"
    country_code: str = "JP"
