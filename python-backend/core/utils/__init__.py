"""
Utility modules for core functionality.

Modules:
- color_utils: Hex parsing, HSL conversion and WCAG contrast helpers
- decorators: Timing helpers (timer context manager, log_timing)
"""

from .color_utils import (
    contrast_ratio,
    hex_to_hsl,
    hex_to_rgb,
    parse_hex,
    pick_text_color,
    rgb_to_hex,
    rgb_to_hsl,
    rgb_to_hsl_array,
)
from .decorators import log_timing, timer

__all__ = [
    "contrast_ratio",
    "hex_to_hsl",
    "hex_to_rgb",
    "parse_hex",
    "pick_text_color",
    "rgb_to_hex",
    "rgb_to_hsl",
    "rgb_to_hsl_array",
    "log_timing",
    "timer",
]
