"""
Centralized enums shared by schemas, services and imaging algorithms.
"""

from enum import Enum


class PaletteStyle(str, Enum):
    """Perceptual pre-filter applied before palette clustering."""

    ALL = "all"
    VIBRANT = "vibrant"
    MUTED = "muted"
    LIGHT = "light"
    DARK = "dark"


class ResampleMethod(str, Enum):
    """Resampling quality hint, ordered nearest < bilinear < bicubic/lanczos."""

    NEAREST = "nearest"
    BILINEAR = "bilinear"
    BICUBIC = "bicubic"
    LANCZOS = "lanczos"


class BackgroundType(str, Enum):
    """Beautify background modes."""

    SOLID = "solid"
    GRADIENT = "gradient"
    MESH = "mesh"


class FrameStyle(str, Enum):
    """Decorative chrome drawn around a beautified image."""

    NONE = "none"
    SAFARI = "safari"
    CHROME = "chrome"
    WINDOWS = "windows"
    ARC = "arc"
    MOBILE = "mobile"
    TABLET = "tablet"
    DESKTOP = "desktop"


class FrameTheme(str, Enum):
    """Color scheme for frame chrome."""

    LIGHT = "light"
    DARK = "dark"


class ExportFormat(str, Enum):
    """Output formats supported by the encode collaborator."""

    PNG = "png"
    JPEG = "jpeg"
    WEBP = "webp"

    @property
    def pil_format(self) -> str:
        return self.value.upper()

    @property
    def mime_type(self) -> str:
        return f"image/{self.value}"
