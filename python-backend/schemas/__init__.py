"""
Schemas Package

This package contains all Pydantic schemas for data validation and serialization,
organized by domain for better maintainability.

These schemas are shared across all application layers:
- API (routers, dependencies)
- Services (orchestration)
- Imaging (BeautifyOptions is consumed by the compositor)
"""

# Re-export enums from centralized location for convenience
from core.enums import (
    BackgroundType,
    ExportFormat,
    FrameStyle,
    FrameTheme,
    PaletteStyle,
    ResampleMethod,
)

# Beautify models
from .beautify import BackgroundSpec, BeautifyOptions, BeautifyResponse

# Common models
from .common import ImageResponse, ImageResult, Size

# Image utility models
from .image import CompressResponse, ConvertResponse, RotateResponse

# Palette models
from .palette import PaletteColor, PaletteResponse

# Poster models
from .poster import PosterResponse

# System models
from .system import DebugSettings, PerformanceMetrics, SystemStatus

# History models
from .history import HistoryResponse, OperationRecordModel

# Upscale models
from .upscale import CropInfo, UpscaleParams, UpscaleResponse

# Explicitly declare public API for re-export
__all__ = [
    # Common models
    "Size",
    "ImageResult",
    "ImageResponse",
    # Palette models
    "PaletteColor",
    "PaletteResponse",
    # Upscale models
    "UpscaleParams",
    "CropInfo",
    "UpscaleResponse",
    # Beautify models
    "BackgroundSpec",
    "BeautifyOptions",
    "BeautifyResponse",
    # Poster models
    "PosterResponse",
    # Image utility models
    "CompressResponse",
    "RotateResponse",
    "ConvertResponse",
    # System models
    "SystemStatus",
    "DebugSettings",
    "PerformanceMetrics",
    # History models
    "OperationRecordModel",
    "HistoryResponse",
    # Enums (re-exported from core.enums)
    "BackgroundType",
    "ExportFormat",
    "FrameStyle",
    "FrameTheme",
    "PaletteStyle",
    "ResampleMethod",
]
