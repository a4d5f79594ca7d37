"""
Raster processing operations.

Handles generic raster manipulation tasks:
- Resizing (exact size, or fit within bounds)
- Quarter-turn rotation
"""

import logging
from typing import Optional

import cv2
import numpy as np

from core.constants import ErrorMessages
from core.exceptions import InvalidDimension, InvalidInput
from core.raster import Raster

logger = logging.getLogger(__name__)


def resize_array(
    array: np.ndarray, width: int, height: int, interpolation: Optional[int] = None
) -> np.ndarray:
    """
    Resize an (H, W, C) array.

    Args:
        array: Input image array
        width: Target width in pixels
        height: Target height in pixels
        interpolation: OpenCV interpolation flag; by default INTER_AREA when
            shrinking and INTER_CUBIC when enlarging

    Returns:
        Resized array (the input itself when the size already matches)
    """
    if width <= 0 or height <= 0:
        raise InvalidDimension(f"Target size must be positive, got {width}x{height}")

    h, w = array.shape[:2]
    if (w, h) == (width, height):
        return array

    if interpolation is None:
        interpolation = cv2.INTER_AREA if width * height < w * h else cv2.INTER_CUBIC

    return cv2.resize(array, (width, height), interpolation=interpolation)


def resize_raster(
    raster: Raster, width: int, height: int, interpolation: Optional[int] = None
) -> Raster:
    """Resize a raster to an exact size, returning a new raster."""
    resized = resize_array(raster.as_array(), width, height, interpolation)
    return Raster.from_array(resized)


def resize_to_fit(
    raster: Raster,
    max_width: Optional[int] = None,
    max_height: Optional[int] = None,
) -> Raster:
    """
    Shrink a raster to fit within max dimensions, keeping its aspect ratio.

    The width limit is applied first, then the height limit on the result.
    Rasters already within bounds are returned as a copy at the same size.

    Args:
        raster: Input raster
        max_width: Maximum width (None = unbounded)
        max_height: Maximum height (None = unbounded)

    Returns:
        New raster
    """
    for name, value in (("max_width", max_width), ("max_height", max_height)):
        if value is not None and value <= 0:
            raise InvalidInput(ErrorMessages.INVALID_PARAMETER.format(param=name, value=value))

    ratio = raster.width / raster.height
    width, height = float(raster.width), float(raster.height)

    if max_width and width > max_width:
        width = float(max_width)
        height = width / ratio

    if max_height and height > max_height:
        height = float(max_height)
        width = height * ratio

    target_w = max(1, int(round(width)))
    target_h = max(1, int(round(height)))

    if (target_w, target_h) == raster.size:
        return raster.copy()

    logger.debug(f"Resizing {raster.width}x{raster.height} to {target_w}x{target_h}")
    return resize_raster(raster, target_w, target_h, cv2.INTER_AREA)


def rotate_quarter(raster: Raster, degrees: int) -> Raster:
    """
    Rotate a raster clockwise by a multiple of 90 degrees.

    Args:
        raster: Input raster
        degrees: Rotation angle; must be a multiple of 90 (negative allowed)

    Returns:
        New raster; width and height are swapped for 90 and 270
    """
    if degrees % 90 != 0:
        raise InvalidInput(
            ErrorMessages.INVALID_PARAMETER.format(param="degrees", value=degrees),
            {"allowed": "multiples of 90"},
        )

    turns = (degrees // 90) % 4
    # np.rot90 turns counter-clockwise for positive k
    rotated = np.rot90(raster.as_array(), k=-turns)
    return Raster.from_array(rotated)
