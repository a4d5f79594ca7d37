"""
Image utility API models.

This module contains responses for the generic image operations:
- Compression (resize to fit + re-encode)
- Quarter-turn rotation
- Format conversion
"""

from typing import Optional

from .common import ImageResponse


class CompressResponse(ImageResponse):
    """Response from compression"""

    original_file_size: int
    compression_ratio: float
    max_width: Optional[int] = None
    max_height: Optional[int] = None


class RotateResponse(ImageResponse):
    """Response from rotation"""

    degrees: int


class ConvertResponse(ImageResponse):
    """Response from format conversion"""

    original_format: Optional[str] = None
