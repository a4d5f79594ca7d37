"""
Beautify API Router - Backgrounds, shadows and frames
"""

import logging

from fastapi import APIRouter, Depends, Form
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from api.dependencies import get_imaging_service, read_upload
from api.exceptions import safe_endpoint
from schemas import BeautifyOptions, BeautifyResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("")
@safe_endpoint
async def beautify_image(
    data: bytes = Depends(read_upload),
    options: str = Form("{}", description="BeautifyOptions as JSON"),
    imaging_service=Depends(get_imaging_service),
) -> BeautifyResponse:
    """
    Compose the image on a padded canvas.

    The canvas is always (width + 2 * padding_x) x (height + 2 * padding_y).
    """
    try:
        parsed = BeautifyOptions.model_validate_json(options)
    except ValidationError as e:
        raise RequestValidationError(e.errors())

    return imaging_service.beautify(data, parsed)
