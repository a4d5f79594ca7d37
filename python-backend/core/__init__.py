"""
Core modules for the Image Studio backend
"""

from .exceptions import (
    ContextUnavailable,
    DecodeError,
    EncodeError,
    ImagingError,
    InvalidDimension,
    InvalidInput,
)
from .raster import Raster

__all__ = [
    "Raster",
    "ImagingError",
    "InvalidInput",
    "InvalidDimension",
    "ContextUnavailable",
    "DecodeError",
    "EncodeError",
]
