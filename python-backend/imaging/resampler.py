"""
Crop/zoom resampling (upscale) for image rasters.

Computes a focal-point crop rectangle for a target aspect ratio and zoom,
then resamples it at an arbitrary scale factor.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

import cv2
import numpy as np

from core.constants import ErrorMessages, UpscaleDefaults
from core.enums import ResampleMethod
from core.exceptions import InvalidDimension, InvalidInput
from core.raster import Raster
from core.utils.decorators import log_timing
from imaging.sharpen import sharpen

logger = logging.getLogger(__name__)

INTERPOLATION = {
    ResampleMethod.NEAREST: cv2.INTER_NEAREST,
    ResampleMethod.BILINEAR: cv2.INTER_LINEAR,
    ResampleMethod.BICUBIC: cv2.INTER_CUBIC,
    ResampleMethod.LANCZOS: cv2.INTER_LANCZOS4,
}


@dataclass(frozen=True)
class CropRect:
    """Crop rectangle, always inside the source bounds."""

    x: int
    y: int
    width: int
    height: int

    @property
    def x2(self) -> int:
        return self.x + self.width

    @property
    def y2(self) -> int:
        return self.y + self.height

    def to_dict(self):
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


def parse_aspect_ratio(value: Union[str, float, int, None]) -> Optional[float]:
    """
    Parse an aspect ratio given as "16:9", "1.5" or a number.

    Returns:
        width / height, or None for an empty value / "original"
    """
    if value is None:
        return None

    if isinstance(value, str):
        text = value.strip().lower()
        if text in ("", "original", "none", "free"):
            return None
        try:
            if ":" in text:
                w, h = text.split(":", 1)
                ratio = float(w) / float(h)
            else:
                ratio = float(text)
        except (ValueError, ZeroDivisionError):
            raise InvalidInput(ErrorMessages.INVALID_PARAMETER.format(param="aspect_ratio", value=value))
    else:
        ratio = float(value)

    if ratio <= 0:
        raise InvalidInput(ErrorMessages.INVALID_PARAMETER.format(param="aspect_ratio", value=value))
    return ratio


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def compute_crop_rect(
    source_width: int,
    source_height: int,
    target_aspect_ratio: Optional[float] = None,
    crop_focus: Tuple[float, float] = (UpscaleDefaults.DEFAULT_FOCUS, UpscaleDefaults.DEFAULT_FOCUS),
    crop_size: float = UpscaleDefaults.DEFAULT_CROP_SIZE,
) -> CropRect:
    """
    Resolve the source region to resample.

    Args:
        source_width: Source width in pixels
        source_height: Source height in pixels
        target_aspect_ratio: Optional width/height ratio the crop must match
        crop_focus: Focal center as (x%, y%) of the full source
        crop_size: Zoom as percent of the aspect-fitted crop (100 = no zoom)

    Returns:
        CropRect clamped inside the source
    """
    if source_width <= 0 or source_height <= 0:
        raise InvalidDimension(f"Source must have a positive area, got {source_width}x{source_height}")
    if crop_size <= 0:
        raise InvalidInput(ErrorMessages.INVALID_PARAMETER.format(param="crop_size", value=crop_size))

    width, height = float(source_width), float(source_height)

    # Shrink whichever side is in excess for the target ratio
    if target_aspect_ratio:
        if width / height > target_aspect_ratio:
            width = height * target_aspect_ratio
        else:
            height = width / target_aspect_ratio

    # Zoom in; sizes above 100% cannot grow past the source
    zoom = min(crop_size, 100.0) / 100.0
    width *= zoom
    height *= zoom

    crop_w = int(_clamp(round(width), 1, source_width))
    crop_h = int(_clamp(round(height), 1, source_height))

    focus_x = _clamp(crop_focus[0], 0.0, 100.0) / 100.0
    focus_y = _clamp(crop_focus[1], 0.0, 100.0) / 100.0

    x = round(source_width * focus_x - crop_w / 2)
    y = round(source_height * focus_y - crop_h / 2)
    x = int(_clamp(x, 0, source_width - crop_w))
    y = int(_clamp(y, 0, source_height - crop_h))

    return CropRect(x=x, y=y, width=crop_w, height=crop_h)


@log_timing
def upscale(
    raster: Raster,
    scale_factor: float = UpscaleDefaults.DEFAULT_SCALE_FACTOR,
    method: Union[ResampleMethod, str] = ResampleMethod.BICUBIC,
    target_aspect_ratio: Optional[float] = None,
    crop_focus: Tuple[float, float] = (UpscaleDefaults.DEFAULT_FOCUS, UpscaleDefaults.DEFAULT_FOCUS),
    crop_size: float = UpscaleDefaults.DEFAULT_CROP_SIZE,
    sharpen_amount: float = UpscaleDefaults.DEFAULT_SHARPEN,
) -> Raster:
    """
    Crop, resample and optionally sharpen a raster.

    Args:
        raster: Source raster
        scale_factor: Output size relative to the crop (> 0)
        method: nearest, bilinear, bicubic or lanczos
        target_aspect_ratio: Optional width/height ratio of the output
        crop_focus: Focal center (x%, y%)
        crop_size: Zoom percent (100 = full aspect-fitted source)
        sharpen_amount: 0-100 sharpen strength applied after resampling

    Returns:
        New raster of round(crop * scale_factor) pixels

    Raises:
        InvalidDimension: If scale_factor <= 0 or the output rounds to 0 pixels
    """
    if scale_factor <= 0:
        raise InvalidDimension(
            ErrorMessages.INVALID_PARAMETER.format(param="scale_factor", value=scale_factor)
        )

    try:
        method = ResampleMethod(method)
    except ValueError:
        raise InvalidInput(ErrorMessages.INVALID_PARAMETER.format(param="method", value=method))

    crop = compute_crop_rect(
        raster.width, raster.height, target_aspect_ratio, crop_focus, crop_size
    )

    target_w = round(crop.width * scale_factor)
    target_h = round(crop.height * scale_factor)
    if target_w <= 0 or target_h <= 0:
        raise InvalidDimension(
            f"Scale factor {scale_factor} turns a {crop.width}x{crop.height} crop into "
            f"{target_w}x{target_h}"
        )

    region = np.ascontiguousarray(raster.as_array()[crop.y : crop.y2, crop.x : crop.x2])
    if (target_w, target_h) == (crop.width, crop.height):
        result = Raster.from_array(region)
    else:
        resized = cv2.resize(region, (target_w, target_h), interpolation=INTERPOLATION[method])
        result = Raster.from_array(resized)

    logger.debug(
        f"Upscaled crop {crop.to_dict()} to {target_w}x{target_h} using {method.value}"
    )

    if sharpen_amount > 0:
        sharpen(result, sharpen_amount)

    return result
