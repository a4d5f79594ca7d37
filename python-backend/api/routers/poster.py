"""
Poster API Router - Palette poster generation
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form

from api.dependencies import get_imaging_service, parse_hex_list, read_upload
from api.exceptions import safe_endpoint
from core.constants import ImageConstants, PaletteDefaults, PosterDefaults
from schemas import ExportFormat, PosterResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("")
@safe_endpoint
async def create_poster(
    data: bytes = Depends(read_upload),
    palette: Optional[str] = Form(None, description="Comma-separated hex colors"),
    color_count: int = Form(
        PaletteDefaults.DEFAULT_COLOR_COUNT,
        ge=PaletteDefaults.MIN_COLOR_COUNT,
        le=PosterDefaults.MAX_SWATCHES,
    ),
    caption: Optional[str] = Form(None),
    format: ExportFormat = Form(ExportFormat.PNG),
    quality: float = Form(ImageConstants.DEFAULT_EXPORT_QUALITY, ge=0, le=1),
    imaging_service=Depends(get_imaging_service),
) -> PosterResponse:
    """
    Render a 1080x1350 poster of the image and its palette.

    Without an explicit palette, color_count colors are extracted first.
    """
    return imaging_service.poster(
        data,
        palette=parse_hex_list(palette),
        color_count=color_count,
        caption=caption,
        export_format=format,
        quality=quality,
    )
