"""Shared pytest fixtures for all tests."""

import pytest
from unittest.mock import patch

from skycolor.models import ApiParam, Location, Weather
from skycolor.state import SkyState


@pytest.fixture
def color_store_file(tmp_path):
    """Point the color store at a temporary JSON file."""
    path = tmp_path / "config" / "color_customizations.json"
    with patch('skycolor.color_store.COLOR_STORE_FILE', str(path)):
        yield path


@pytest.fixture
def equinox_weather():
    """Sunrise 06:00, sunset 18:00, clear sky."""
    return Weather(sunrise=21600, sunset=64800, cloud=0)


@pytest.fixture
def api_param():
    return ApiParam(api_key="test-key", zip_code="1000000", country_code="JP")


@pytest.fixture
def tokyo():
    return Location(lat=35.6895, lon=139.6917)


@pytest.fixture
def fresh_state():
    """Isolated SkyState (not the global instance)."""
    return SkyState()
