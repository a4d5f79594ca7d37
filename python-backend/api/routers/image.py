"""
Image API Router - Compression, rotation and format conversion
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form

from api.dependencies import get_imaging_service, read_upload
from api.exceptions import safe_endpoint
from core.constants import ImageConstants
from schemas import CompressResponse, ConvertResponse, ExportFormat, RotateResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/compress")
@safe_endpoint
async def compress_image(
    data: bytes = Depends(read_upload),
    quality: float = Form(ImageConstants.DEFAULT_COMPRESS_QUALITY, ge=0, le=1),
    format: ExportFormat = Form(ExportFormat(ImageConstants.DEFAULT_COMPRESS_FORMAT)),
    max_width: Optional[int] = Form(None, gt=0),
    max_height: Optional[int] = Form(None, gt=0),
    imaging_service=Depends(get_imaging_service),
) -> CompressResponse:
    """
    Shrink an image to fit max_width/max_height and re-encode it.

    The aspect ratio is kept and images are never enlarged.
    """
    return imaging_service.compress(
        data, quality=quality, export_format=format, max_width=max_width, max_height=max_height
    )


@router.post("/rotate")
@safe_endpoint
async def rotate_image(
    data: bytes = Depends(read_upload),
    degrees: int = Form(90, description="Clockwise, multiple of 90"),
    imaging_service=Depends(get_imaging_service),
) -> RotateResponse:
    """Rotate an image by a quarter turn multiple."""
    return imaging_service.rotate(data, degrees)


@router.post("/convert")
@safe_endpoint
async def convert_image(
    data: bytes = Depends(read_upload),
    format: ExportFormat = Form(...),
    quality: float = Form(ImageConstants.DEFAULT_EXPORT_QUALITY, ge=0, le=1),
    imaging_service=Depends(get_imaging_service),
) -> ConvertResponse:
    """Convert an image to png, jpeg or webp."""
    return imaging_service.convert(data, export_format=format, quality=quality)
