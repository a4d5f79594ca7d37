"""
Upscale API models.
"""

from typing import Optional

from pydantic import BaseModel, Field

from core.constants import UpscaleDefaults
from core.enums import ResampleMethod

from .common import ImageResponse


class UpscaleParams(BaseModel):
    """Validated upscale parameters (collected from form fields)"""

    scale_factor: float = Field(
        UpscaleDefaults.DEFAULT_SCALE_FACTOR, gt=0, le=UpscaleDefaults.MAX_SCALE_FACTOR
    )
    method: ResampleMethod = ResampleMethod.BICUBIC
    aspect_ratio: Optional[float] = Field(None, gt=0, description="Target width / height")
    focus_x: float = Field(UpscaleDefaults.DEFAULT_FOCUS, ge=0, le=100)
    focus_y: float = Field(UpscaleDefaults.DEFAULT_FOCUS, ge=0, le=100)
    crop_size: float = Field(UpscaleDefaults.DEFAULT_CROP_SIZE, gt=0, le=100)
    sharpen: float = Field(UpscaleDefaults.DEFAULT_SHARPEN, ge=0, le=100)


class CropInfo(BaseModel):
    """Source region that was resampled"""

    x: int
    y: int
    width: int
    height: int


class UpscaleResponse(ImageResponse):
    """Response from upscaling"""

    crop: CropInfo
    method: ResampleMethod
    scale_factor: float
