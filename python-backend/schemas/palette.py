"""
Palette extraction API models.
"""

from typing import List

from pydantic import BaseModel, Field

from core.enums import PaletteStyle

from .common import Size


class PaletteColor(BaseModel):
    """One palette entry in the notations shown next to each swatch"""

    hex: str = Field(..., description="Lowercase #rrggbb")
    rgb: List[int] = Field(..., min_length=3, max_length=3)
    hsl: List[int] = Field(..., min_length=3, max_length=3, description="Hue in degrees, S and L in percent")


class PaletteResponse(BaseModel):
    """Response from palette extraction"""

    success: bool = True
    palette: List[str] = Field(..., description="Hex colors in centroid order")
    colors: List[PaletteColor]
    style: PaletteStyle
    requested_count: int
    source_size: Size
    processing_time_ms: int
