"""
Shared FastAPI dependencies for the Image Studio backend.
Centralizes common dependencies to eliminate code duplication.
"""

import logging
from typing import List, Optional

from fastapi import Depends, File, HTTPException, Request, UploadFile

from config import Settings, get_settings
from core.constants import ErrorMessages
from core.exceptions import DecodeError
from core.operation_log import OperationLog
from services.imaging_service import ImagingService

logger = logging.getLogger(__name__)


def get_operation_log(request: Request) -> OperationLog:
    """
    Get the operation log from app state.

    Raises:
        HTTPException: If the app state was not initialized
    """
    try:
        return request.app.state.operation_log
    except AttributeError as e:
        logger.error(f"Operation log not initialized in app state: {e}")
        raise HTTPException(
            status_code=500, detail="Internal server error: Operation log not initialized"
        )


def get_imaging_service(
    operation_log: OperationLog = Depends(get_operation_log),
    settings: Settings = Depends(get_settings),
) -> ImagingService:
    """Build an ImagingService bound to the configured limits."""
    return ImagingService(
        operation_log=operation_log,
        max_upload_mb=settings.imaging.max_upload_mb,
        max_dimension=settings.imaging.max_dimension,
    )


async def read_upload(file: UploadFile = File(..., description="Image file")) -> bytes:
    """Read the uploaded image into memory."""
    data = await file.read()
    if not data:
        raise DecodeError(ErrorMessages.EMPTY_UPLOAD)
    logger.debug(f"Received upload {file.filename} ({len(data)} bytes, {file.content_type})")
    return data


def parse_hex_list(value: Optional[str]) -> Optional[List[str]]:
    """
    Split a comma-separated color list.

    Returns:
        List of trimmed entries, or None for a missing/blank value
    """
    if value is None or not value.strip():
        return None
    return [color.strip() for color in value.split(",") if color.strip()]
