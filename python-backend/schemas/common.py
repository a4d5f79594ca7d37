"""
Common API models shared by the imaging endpoints.
"""

from pydantic import BaseModel, Field

from core.enums import ExportFormat


class Size(BaseModel):
    """Image size"""

    width: int
    height: int


class ImageResult(BaseModel):
    """Encoded output image returned to the client"""

    image_base64: str = Field(..., description="Base64-encoded image bytes")
    format: ExportFormat
    mime_type: str
    size: Size
    file_size: int = Field(..., description="Encoded size in bytes")


class ImageResponse(BaseModel):
    """Base response for operations producing an image"""

    success: bool = True
    result: ImageResult
    source_size: Size
    processing_time_ms: int = Field(..., description="Processing time in milliseconds")
