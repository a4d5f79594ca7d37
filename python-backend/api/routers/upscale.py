"""
Upscale API Router - Crop, zoom and resample
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from api.dependencies import get_imaging_service, read_upload
from api.exceptions import safe_endpoint
from core.constants import ImageConstants, UpscaleDefaults
from imaging.resampler import parse_aspect_ratio
from schemas import ExportFormat, ResampleMethod, UpscaleParams, UpscaleResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("")
@safe_endpoint
async def upscale_image(
    data: bytes = Depends(read_upload),
    scale_factor: float = Form(UpscaleDefaults.DEFAULT_SCALE_FACTOR),
    method: ResampleMethod = Form(ResampleMethod.BICUBIC),
    aspect_ratio: Optional[str] = Form(None, description='"16:9", "1.5" or "original"'),
    focus_x: float = Form(UpscaleDefaults.DEFAULT_FOCUS),
    focus_y: float = Form(UpscaleDefaults.DEFAULT_FOCUS),
    crop_size: float = Form(UpscaleDefaults.DEFAULT_CROP_SIZE),
    sharpen: float = Form(UpscaleDefaults.DEFAULT_SHARPEN),
    format: ExportFormat = Form(ExportFormat.PNG),
    quality: float = Form(ImageConstants.DEFAULT_EXPORT_QUALITY, ge=0, le=1),
    imaging_service=Depends(get_imaging_service),
) -> UpscaleResponse:
    """
    Upscale an image.

    The crop is fitted to aspect_ratio, zoomed to crop_size percent around
    (focus_x, focus_y) and resampled by scale_factor.
    """
    try:
        params = UpscaleParams(
            scale_factor=scale_factor,
            method=method,
            aspect_ratio=parse_aspect_ratio(aspect_ratio),
            focus_x=focus_x,
            focus_y=focus_y,
            crop_size=crop_size,
            sharpen=sharpen,
        )
    except ValidationError as e:
        raise RequestValidationError(e.errors())

    return imaging_service.upscale(data, params, export_format=format, quality=quality)
