"""
Sky color engine.

Pipeline for one moment:
    keyframe table (from sunrise/sunset)
    -> clear-sky color (linear blend between keyframes)
    -> cloud adjustment (HSL desaturate + lighten)
    -> readable foreground (black or white by contrast)

Pure functions only: no I/O, no shared state. Safe to call from any thread.
"""

import math
from dataclasses import dataclass
from datetime import datetime

from skycolor.color import Hsl, Rgb, get_font_color, hsl_to_rgb, rgb_to_hex, rgb_to_hsl
from skycolor.keyframes import build_keyframes, interpolate
from skycolor.models import Weather

# At full overcast saturation keeps 10% (a slight tint) and lightness
# is capped below pure white.
CLOUD_DESATURATION = 0.9
CLOUD_LIGHTENING = 0.15
MAX_CLOUDED_LIGHTNESS = 0.95


class InvalidSkyInput(ValueError):
    """Raised for out-of-range time or weather passed to the engine."""


@dataclass(frozen=True)
class SkyColors:
    """Background sky color and the foreground color readable on it."""
    background: Rgb
    foreground: Rgb

    def to_hex(self) -> dict[str, str]:
        return {
            "background": rgb_to_hex(self.background),
            "foreground": rgb_to_hex(self.foreground),
        }


def apply_cloud_cover(color: Rgb, cloud: float) -> Rgb:
    """
    Wash out a clear-sky color by cloud cover.

    Args:
        color: Clear-sky color
        cloud: Cloud cover percentage (0-100)

    Returns:
        Color with saturation reduced by up to 90% and lightness raised by
        up to 0.15 (capped at 0.95), proportional to cloud. Hue unchanged.
    """
    hsl = rgb_to_hsl(color)
    fraction = cloud / 100
    clouded = Hsl(
        h=hsl.h,
        s=hsl.s - (hsl.s * fraction) * CLOUD_DESATURATION,
        l=min(MAX_CLOUDED_LIGHTNESS, fraction * CLOUD_LIGHTENING + hsl.l),
    )
    return hsl_to_rgb(clouded)


def _validate(current_time: float, weather: Weather) -> None:
    if not math.isfinite(current_time) or current_time < 0:
        raise InvalidSkyInput(f"current_time must be a finite number >= 0, got {current_time}")
    if not (math.isfinite(weather.sunrise) and math.isfinite(weather.sunset)):
        raise InvalidSkyInput(f"sunrise/sunset must be finite, got {weather.sunrise}/{weather.sunset}")
    if not 0 <= weather.cloud <= 100:
        raise InvalidSkyInput(f"cloud must be within 0-100, got {weather.cloud}")


def get_sky_color(current_time: float, weather: Weather) -> Rgb:
    """Background color at current_time (seconds since local midnight)."""
    _validate(current_time, weather)

    keyframes = build_keyframes(weather.sunrise, weather.sunset)
    clear_sky = interpolate(keyframes, current_time)
    return apply_cloud_cover(clear_sky, weather.cloud)


def compute_sky_color(current_time: float, weather: Weather) -> SkyColors:
    """
    Compute background and foreground colors for a moment.

    Args:
        current_time: Seconds since local midnight. Values past one day are
            accepted and resolve through the keyframe fallback.
        weather: Sun times and cloud cover

    Returns:
        SkyColors

    Raises:
        InvalidSkyInput: If current_time is negative or not finite, or
            weather values are out of range. Nothing is clamped silently.
    """
    background = get_sky_color(current_time, weather)
    return SkyColors(background=background, foreground=get_font_color(background))


def seconds_since_midnight(now: datetime) -> int:
    """Whole seconds elapsed since the local midnight of now."""
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return int((now - midnight).total_seconds())
