"""
Keyframe table for the clear-sky color over one day.

Each keyframe pins a sky color at an offset (seconds since local midnight).
Offsets are anchored to midnight, to sunrise/sunset, or to solar noon
(the midpoint of sunrise and sunset). Between two keyframes the color is
blended linearly.

The table is kept in its natural order, not sorted. Near the poles (or with
odd upstream data) sunrise/sunset-relative offsets can go negative or fall
out of order; the segment search below stays well-defined in that case and
the builder logs a warning instead of reordering the day.
"""

from dataclasses import dataclass

from skycolor.color import Rgb, hex_to_rgb, mix_color
from skycolor.logger import get_logger

logger = get_logger("keyframes")

DAY_SECONDS = 24 * 60 * 60
HALF_HOUR = 30 * 60
ONE_HOUR = 60 * 60
NINETY_MINUTES = 90 * 60
TWO_HOURS = 2 * 60 * 60

# Named sky states
NIGHT = "#111111"
ASTRONOMICAL_DAWN = "#4d548a"
NAUTICAL_DAWN = "#c486b1"
CIVIL_DAWN = "#ee88a0"
SUNRISE = "#ff7d75"
MORNING = "#f4eeef"
NOON = "#5dc9f1"
AFTERNOON = "#9eefe0"
GOLDEN_HOUR = "#f1e17c"
DUSK = "#f86b10"
SUNSET = "#100028"


@dataclass(frozen=True)
class Keyframe:
    """Sky color pinned at an offset in seconds since local midnight."""
    offset: float
    color: Rgb


def build_keyframes(sunrise: float, sunset: float) -> list[Keyframe]:
    """
    Build the 14-entry keyframe table for one day.

    Args:
        sunrise: Sunrise, seconds since local midnight
        sunset: Sunset, seconds since local midnight

    Returns:
        Keyframes in table order, from midnight (0) to the next midnight
        (DAY_SECONDS). Not sorted; see is_monotonic().
    """
    table = [
        (0, NIGHT),
        (sunrise - TWO_HOURS, NIGHT),
        (sunrise - NINETY_MINUTES, ASTRONOMICAL_DAWN),
        (sunrise - ONE_HOUR, NAUTICAL_DAWN),
        (sunrise - HALF_HOUR, CIVIL_DAWN),
        (sunrise, SUNRISE),
        (sunrise + HALF_HOUR, MORNING),
        ((sunrise + sunset) / 2, NOON),
        (sunset - NINETY_MINUTES, AFTERNOON),
        (sunset - ONE_HOUR, GOLDEN_HOUR),
        (sunset - HALF_HOUR, DUSK),
        (sunset, SUNSET),
        (sunset + HALF_HOUR, NIGHT),
        (DAY_SECONDS, NIGHT),
    ]
    keyframes = [Keyframe(offset=offset, color=hex_to_rgb(color)) for offset, color in table]

    if not is_monotonic(keyframes):
        logger.warning(
            f"Keyframe offsets out of order (sunrise={sunrise}, sunset={sunset}); "
            "colors may jump around dawn/dusk"
        )

    return keyframes


def is_monotonic(keyframes: list[Keyframe]) -> bool:
    """True if offsets never decrease along the table."""
    return all(a.offset <= b.offset for a, b in zip(keyframes, keyframes[1:]))


def find_segment(keyframes: list[Keyframe], current_time: float) -> int:
    """
    Locate the keyframe ending the segment that contains current_time.

    Scans in table order for the first keyframe with offset > current_time.
    If there is none, or it is the first keyframe, falls back to index 1
    so that (index - 1, index) is always a valid pair.

    Returns:
        Index i >= 1; the segment is keyframes[i - 1] .. keyframes[i]
    """
    if len(keyframes) < 2:
        raise ValueError("At least 2 keyframes required")

    for i, keyframe in enumerate(keyframes):
        if keyframe.offset > current_time:
            return max(i, 1)
    return 1


def interpolate(keyframes: list[Keyframe], current_time: float) -> Rgb:
    """
    Clear-sky color at current_time by linear blending.

    A zero-length segment (identical offsets) yields the later keyframe's
    color unmixed. Times outside the segment extrapolate.
    """
    i = find_segment(keyframes, current_time)
    prev, next_ = keyframes[i - 1], keyframes[i]

    span = next_.offset - prev.offset
    if span == 0:
        return next_.color

    ratio = (current_time - prev.offset) / span
    return mix_color(prev.color, next_.color, 1.0 - ratio)
