"""
Poster API models.
"""

from typing import List

from pydantic import BaseModel

from .common import ImageResponse


class PosterResponse(ImageResponse):
    """Response from poster generation"""

    palette: List[str]
    caption: str
