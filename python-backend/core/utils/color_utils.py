"""
Color utilities.

Hex parsing/formatting, RGB to HSL conversion (scalar and vectorized) and
WCAG contrast helpers used by the palette extractor and poster layout.
"""

from typing import Tuple

import numpy as np

from core.constants import ErrorMessages, PosterDefaults
from core.exceptions import InvalidInput

RGB = Tuple[int, int, int]
RGBA = Tuple[int, int, int, int]

WHITE: RGBA = (255, 255, 255, 255)
BLACK: RGBA = (0, 0, 0, 255)


def parse_hex(value: str) -> RGBA:
    """
    Parse a CSS hex color into an RGBA tuple.

    Accepts #rgb, #rgba, #rrggbb and #rrggbbaa (leading '#' optional).

    Raises:
        InvalidInput: If the string is not a hex color
    """
    s = value.strip().lstrip("#")
    if len(s) in (3, 4):
        s = "".join(c * 2 for c in s)
    if len(s) == 6:
        s += "ff"
    if len(s) != 8:
        raise InvalidInput(ErrorMessages.INVALID_HEX.format(value=value))
    try:
        r, g, b, a = (int(s[i : i + 2], 16) for i in range(0, 8, 2))
    except ValueError:
        raise InvalidInput(ErrorMessages.INVALID_HEX.format(value=value))
    return (r, g, b, a)


def hex_to_rgb(value: str) -> RGB:
    """Parse a hex color and drop its alpha."""
    return parse_hex(value)[:3]


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Format an RGB triple as lowercase #rrggbb."""
    return f"#{int(r):02x}{int(g):02x}{int(b):02x}"


def rgb_to_hsl(r: int, g: int, b: int) -> Tuple[int, int, int]:
    """
    Convert RGB (0-255) to HSL.

    Returns:
        (hue 0-360, saturation 0-100, lightness 0-100), rounded
    """
    h, s, l = rgb_to_hsl_array(np.array([[r, g, b]]))[0]
    return (int(round(h)), int(round(s)), int(round(l)))


def hex_to_hsl(value: str) -> Tuple[int, int, int]:
    return rgb_to_hsl(*hex_to_rgb(value))


def rgb_to_hsl_array(rgb: np.ndarray) -> np.ndarray:
    """
    Vectorized RGB to HSL conversion.

    Args:
        rgb: (N, 3) array of 0-255 values

    Returns:
        (N, 3) float array of (hue degrees, saturation %, lightness %)
    """
    norm = rgb.astype(np.float64) / 255.0
    c_max = norm.max(axis=1)
    c_min = norm.min(axis=1)
    delta = c_max - c_min

    lightness = (c_max + c_min) / 2.0

    saturation = np.zeros_like(lightness)
    chromatic = delta > 0
    denom = 1.0 - np.abs(2.0 * lightness - 1.0)
    np.divide(delta, denom, out=saturation, where=chromatic & (denom > 0))

    hue = np.zeros_like(lightness)
    r, g, b = norm[:, 0], norm[:, 1], norm[:, 2]
    safe_delta = np.where(chromatic, delta, 1.0)
    is_r = chromatic & (c_max == r)
    is_g = chromatic & (c_max == g) & ~is_r
    is_b = chromatic & ~is_r & ~is_g
    hue = np.where(is_r, ((g - b) / safe_delta) % 6.0, hue)
    hue = np.where(is_g, (b - r) / safe_delta + 2.0, hue)
    hue = np.where(is_b, (r - g) / safe_delta + 4.0, hue)

    return np.column_stack([hue * 60.0, saturation * 100.0, lightness * 100.0])


def relative_luminance(rgb: RGB) -> float:
    """WCAG 2.x relative luminance of an sRGB color."""

    def channel(value: int) -> float:
        c = value / 255.0
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = (channel(v) for v in rgb[:3])
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(first: RGB, second: RGB) -> float:
    """WCAG contrast ratio between two colors, in [1, 21]."""
    l1 = relative_luminance(first)
    l2 = relative_luminance(second)
    lighter, darker = max(l1, l2), min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def pick_text_color(
    background: RGB, threshold: float = PosterDefaults.MIN_CONTRAST_RATIO
) -> RGBA:
    """
    Choose white or black text for a background.

    White wins whenever it clears the threshold; black is used otherwise,
    including when neither color reaches it.
    """
    if contrast_ratio(WHITE[:3], background) >= threshold:
        return WHITE
    return BLACK
