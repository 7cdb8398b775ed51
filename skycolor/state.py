"""
Centralized service state for the API.

Thread-safe record of what the updater last fetched and rendered, so the
HTTP surface can report it without touching the network.
"""

from dataclasses import dataclass, field
from typing import Any, Optional
from datetime import datetime
import threading

from skycolor.models import Location, Weather


@dataclass
class SkyState:
    """
    Last known location, weather and colors.

    Thread-safe via internal lock. All updates should use the update() method.
    """

    location: Optional[Location] = None
    weather: Optional[Weather] = None

    # Last rendered colors ("#rrggbb"), None when cleared
    background: Optional[str] = None
    foreground: Optional[str] = None

    # Last fetch failure, e.g. "API_KEY: Invalid API key."
    last_error: Optional[str] = None

    last_weather_update: Optional[datetime] = None
    last_color_update: Optional[datetime] = None

    _lock: threading.Lock = field(default_factory=threading.Lock)

    def update(self, **kwargs) -> None:
        """
        Thread-safe state update.

        Example:
            sky_state.update(background="#5dc9f1", foreground="#000000")
        """
        with self._lock:
            for key, value in kwargs.items():
                if hasattr(self, key) and not key.startswith('_'):
                    setattr(self, key, value)

    def get_snapshot(self) -> dict[str, Any]:
        """JSON-friendly copy of the current state."""
        with self._lock:
            return {
                "location": self.location.model_dump() if self.location else None,
                "weather": self.weather.model_dump() if self.weather else None,
                "background": self.background,
                "foreground": self.foreground,
                "last_error": self.last_error,
                "last_weather_update": self.last_weather_update.isoformat() if self.last_weather_update else None,
                "last_color_update": self.last_color_update.isoformat() if self.last_color_update else None,
            }


# Global state instance
sky_state = SkyState()
