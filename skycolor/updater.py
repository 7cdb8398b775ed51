"""
Periodic sky color refresh.

Two background loops:
- weather: re-fetch sunrise/sunset/clouds (default every 30 minutes)
- color: recompute and persist the sky colors (default every minute)

Fetch failures arrive as Err(FetchError) and are dispatched on their kind.
Location failures clear the persisted colors; weather failures keep the
last good weather so colors keep updating.
"""

import threading
from datetime import datetime
from typing import Optional

from skycolor import color_store
from skycolor.config import COLOR_UPDATE_INTERVAL, WEATHER_UPDATE_INTERVAL
from skycolor.logger import get_logger
from skycolor.models import ApiParam, Location, Weather
from skycolor.result import FetchError, FetchErrorKind
from skycolor.sky import SkyColors, compute_sky_color, seconds_since_midnight
from skycolor.state import SkyState, sky_state
from skycolor.weather import get_location, get_weather

logger = get_logger("updater")


class SkyColorUpdater:
    """
    Keeps the persisted sky colors in step with time and weather.

    Thread-safe: settings/location/weather are guarded by one lock.
    """

    def __init__(
        self,
        state: SkyState = sky_state,
        weather_interval: int = WEATHER_UPDATE_INTERVAL,  # seconds
        color_interval: int = COLOR_UPDATE_INTERVAL,  # seconds
    ):
        self.state = state
        self.weather_interval = weather_interval
        self.color_interval = color_interval

        self.settings: Optional[ApiParam] = None
        self.location: Optional[Location] = None
        self.weather: Optional[Weather] = None
        self.lock = threading.RLock()

        self.stop_event = threading.Event()
        self.threads: list[threading.Thread] = []

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self):
        """Start weather and color loops."""
        if any(t.is_alive() for t in self.threads):
            logger.warning("Sky color updater already running")
            return

        self.stop_event.clear()
        self.threads = [
            threading.Thread(
                target=self._loop,
                args=(self.update_weather, self.weather_interval),
                name="SkyWeatherUpdater",
                daemon=True,
            ),
            threading.Thread(
                target=self._loop,
                args=(self.update_color, self.color_interval),
                name="SkyColorUpdater",
                daemon=True,
            ),
        ]
        for thread in self.threads:
            thread.start()

        logger.info(
            f"Sky color updater started (weather every {self.weather_interval}s, "
            f"color every {self.color_interval}s)"
        )

    def stop(self):
        """Stop both loops."""
        self.stop_event.set()
        for thread in self.threads:
            thread.join(timeout=2.0)
            if thread.is_alive():
                logger.warning(f"{thread.name} did not stop gracefully")
        self.threads = []
        logger.info("Sky color updater stopped")

    def _loop(self, update, interval: int):
        # First run happens via on_settings_changed(); wait one interval
        while not self.stop_event.wait(interval):
            try:
                update()
            except Exception as e:
                logger.error(f"Error in {threading.current_thread().name} loop: {e}", exc_info=True)

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    def on_settings_changed(self, settings: Optional[ApiParam]) -> bool:
        """
        Apply new settings and refresh everything.

        Returns:
            False if the settings were unchanged (nothing done), True otherwise
        """
        with self.lock:
            if settings == self.settings:
                return False
            self.settings = settings

        self.refresh()
        return True

    def refresh(self) -> None:
        """Run location, weather and color updates in order."""
        self.update_location()
        self.update_weather()
        self.update_color()

    def update_location(self) -> None:
        """Resolve the configured ZIP/country code to coordinates."""
        with self.lock:
            settings = self.settings
        if settings is None:
            return

        result = get_location(settings)
        if result.is_err():
            self._handle_location_error(result.error)
            self.delete_color()
            return

        with self.lock:
            self.location = result.value
        self.state.update(location=result.value, last_error=None)
        logger.info(f"Location resolved: lat={result.value.lat}, lon={result.value.lon}")

    def update_weather(self) -> None:
        """Fetch sun times and cloud cover for the current location."""
        with self.lock:
            settings, location = self.settings, self.location
        if settings is None or location is None:
            return

        result = get_weather(location, settings.api_key)
        if result.is_err():
            self._handle_weather_error(result.error)
            return

        with self.lock:
            self.weather = result.value
        self.state.update(weather=result.value, last_weather_update=datetime.now(), last_error=None)

    def update_color(self, now: Optional[datetime] = None) -> Optional[SkyColors]:
        """
        Recompute colors for now and persist them.

        Returns:
            The colors written, or None when no weather is known yet
        """
        with self.lock:
            weather = self.weather
        if weather is None:
            return None

        now = now or datetime.now()
        colors = compute_sky_color(seconds_since_midnight(now), weather)
        written = color_store.write_colors(colors)

        self.state.update(
            background=written[color_store.BACKGROUND_KEY],
            foreground=written[color_store.FOREGROUND_KEY],
            last_color_update=now,
        )
        logger.debug(f"Sky colors updated: {written}")
        return colors

    def delete_color(self) -> None:
        """Remove persisted colors (e.g. after a location failure)."""
        color_store.clear_colors()
        self.state.update(background=None, foreground=None)

    # ------------------------------------------------------------------
    # Error dispatch
    # ------------------------------------------------------------------

    def _handle_location_error(self, error: FetchError) -> None:
        self.state.update(last_error=str(error))

        if error.kind == FetchErrorKind.API_KEY:
            logger.error("Invalid/deactivated API Key. (Activation could take several hours)")
            with self.lock:
                self.settings = None
        elif error.kind == FetchErrorKind.NETWORK:
            # Connection problems are transient
            logger.debug(f"Location fetch failed: {error.message}")
        elif error.kind == FetchErrorKind.PARAM:
            logger.error("Unknown ZIP/country code.")
        elif error.kind == FetchErrorKind.UNKNOWN_RESPONSE:
            logger.error(f"Invalid response from openweather server. ({error.message})")
        else:
            raise ValueError(f"Unhandled fetch error kind: {error.kind}")

    def _handle_weather_error(self, error: FetchError) -> None:
        self.state.update(last_error=str(error))

        if error.kind == FetchErrorKind.API_KEY:
            logger.error("Weather fetch rejected API key, dropping settings")
            with self.lock:
                self.settings = None
        elif error.kind in (
            FetchErrorKind.NETWORK,
            FetchErrorKind.PARAM,
            FetchErrorKind.UNKNOWN_RESPONSE,
        ):
            logger.warning(f"Weather fetch failed: {error}")
        else:
            raise ValueError(f"Unhandled fetch error kind: {error.kind}")
