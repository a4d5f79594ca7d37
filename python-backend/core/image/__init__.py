"""
Image utilities - modular architecture.

This package provides focused image utilities:
- converters: Decode/encode boundary (bytes, PIL, base64 <-> Raster)
- processors: Generic raster operations (resize, fit, quarter rotation)
"""

from core.image.converters import ImageConverters
from core.image.processors import resize_array, resize_raster, resize_to_fit, rotate_quarter

__all__ = ["ImageConverters", "resize_array", "resize_raster", "resize_to_fit", "rotate_quarter"]
