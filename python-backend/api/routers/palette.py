"""
Palette API Router - Color palette extraction
"""

import logging

from fastapi import APIRouter, Depends, Form

from api.dependencies import get_imaging_service, read_upload
from api.exceptions import safe_endpoint
from core.constants import PaletteDefaults
from schemas import PaletteResponse, PaletteStyle

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/extract")
@safe_endpoint
async def extract_palette(
    data: bytes = Depends(read_upload),
    color_count: int = Form(
        PaletteDefaults.DEFAULT_COLOR_COUNT,
        ge=PaletteDefaults.MIN_COLOR_COUNT,
        le=PaletteDefaults.MAX_COLOR_COUNT,
    ),
    style: PaletteStyle = Form(PaletteStyle.ALL),
    imaging_service=Depends(get_imaging_service),
) -> PaletteResponse:
    """
    Extract the dominant colors of an image.

    A fully transparent image yields an empty palette, not an error.
    """
    return imaging_service.extract_palette(data, color_count=color_count, style=style)
