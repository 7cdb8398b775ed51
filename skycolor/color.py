"""
Color space helpers for the sky color engine.

Supports:
- hex <-> RGB parsing and formatting
- RGB <-> HSL conversion (via colorsys)
- Linear color mixing
- WCAG relative luminance and contrast ratio
- Picking a readable font color (black or white) for a background

All channels are floats in [0.0, 1.0]. Hue is in degrees [0, 360).
"""

import colorsys
import math
import re
from dataclasses import dataclass


# ============================================================================
# Data Structures
# ============================================================================

@dataclass(frozen=True)
class Rgb:
    """RGB color, channels nominally in [0.0, 1.0]."""
    r: float
    g: float
    b: float


@dataclass(frozen=True)
class Hsl:
    """HSL color: h in degrees [0, 360), s and l in [0.0, 1.0]."""
    h: float
    s: float
    l: float


BLACK = Rgb(0.0, 0.0, 0.0)
WHITE = Rgb(1.0, 1.0, 1.0)

HEX_COLOR_PATTERN = re.compile(r"#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})", re.IGNORECASE)


class InvalidHexColor(ValueError):
    """Raised when a string is not a 6-digit hex color."""


# ============================================================================
# Hex Conversion
# ============================================================================

def hex_to_rgb(hex_color: str) -> Rgb:
    """
    Parse a hex color string.

    Args:
        hex_color: Six hex digits with optional leading '#', any case

    Returns:
        Rgb with each channel = byte / 255

    Raises:
        InvalidHexColor: If the string is not exactly 6 hex digits

    Example:
        hex_to_rgb("#FF8000")  # Rgb(r=1.0, g=0.50196..., b=0.0)
    """
    match = HEX_COLOR_PATTERN.fullmatch(hex_color) if isinstance(hex_color, str) else None
    if match is None:
        raise InvalidHexColor(f"Invalid hex color: {hex_color!r}")

    r, g, b = (int(group, 16) / 255 for group in match.groups())
    return Rgb(r, g, b)


def _channel_to_byte(c: float) -> int:
    # Round half up, then clamp out-of-range mixes
    return max(0, min(255, math.floor(255 * c + 0.5)))


def rgb_to_hex(color: Rgb) -> str:
    """Format as '#rrggbb' (lowercase, zero padded)."""
    return "#{:02x}{:02x}{:02x}".format(
        _channel_to_byte(color.r),
        _channel_to_byte(color.g),
        _channel_to_byte(color.b),
    )


# ============================================================================
# Mixing and HSL
# ============================================================================

def mix_color(c1: Rgb, c2: Rgb, ratio: float) -> Rgb:
    """
    Blend two colors: c1 * ratio + c2 * (1 - ratio).

    ratio is not clamped; values outside [0, 1] extrapolate.
    """
    return Rgb(
        c1.r * ratio + c2.r * (1.0 - ratio),
        c1.g * ratio + c2.g * (1.0 - ratio),
        c1.b * ratio + c2.b * (1.0 - ratio),
    )


def rgb_to_hsl(color: Rgb) -> Hsl:
    """
    Convert RGB to HSL.

    Achromatic colors (r == g == b) have no defined hue and report h=0.
    """
    h, l, s = colorsys.rgb_to_hls(color.r, color.g, color.b)
    return Hsl(h * 360.0, s, l)


def hsl_to_rgb(color: Hsl) -> Rgb:
    """Convert HSL to RGB. Hue wraps modulo 360."""
    r, g, b = colorsys.hls_to_rgb((color.h / 360.0) % 1.0, color.l, color.s)
    return Rgb(r, g, b)


# ============================================================================
# Luminance and Contrast
# ============================================================================

def _linearize(c: float) -> float:
    """sRGB channel to linear light."""
    if c <= 0.03928:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def get_relative_luminance(color: Rgb) -> float:
    """WCAG relative luminance (0.0 for black, 1.0 for white)."""
    return (
        0.2126 * _linearize(color.r)
        + 0.7152 * _linearize(color.g)
        + 0.0722 * _linearize(color.b)
    )


def get_contrast_ratio(color1: Rgb, color2: Rgb) -> float:
    """WCAG contrast ratio in [1, 21]. Symmetric in its arguments."""
    luminance1 = get_relative_luminance(color1)
    luminance2 = get_relative_luminance(color2)
    bright = max(luminance1, luminance2)
    dark = min(luminance1, luminance2)
    return (bright + 0.05) / (dark + 0.05)


def get_font_color(bg_color: Rgb) -> Rgb:
    """
    Pick the higher-contrast font color for a background.

    Returns:
        WHITE if white contrasts strictly better than black, else BLACK
    """
    black_ratio = get_contrast_ratio(bg_color, BLACK)
    white_ratio = get_contrast_ratio(bg_color, WHITE)
    return WHITE if white_ratio > black_ratio else BLACK
