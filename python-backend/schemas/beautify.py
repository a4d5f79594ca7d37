"""
Beautify API models.

BeautifyOptions is the full composition configuration. All range and hex
validation happens here so the compositor can trust its input.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from core.constants import BeautifyDefaults, ImageConstants
from core.enums import BackgroundType, ExportFormat, FrameStyle, FrameTheme
from core.exceptions import InvalidInput
from core.utils.color_utils import parse_hex

from .common import ImageResponse


def _check_hex(value: str) -> str:
    try:
        parse_hex(value)
    except InvalidInput as e:
        raise ValueError(e.message)
    return value


class BackgroundSpec(BaseModel):
    """Canvas background"""

    type: BackgroundType = BackgroundType.GRADIENT
    color: str = Field(BeautifyDefaults.DEFAULT_BACKGROUND_COLOR, description="Solid fill or mesh base color")
    colors: List[str] = Field(
        default_factory=lambda: ["#6366f1", "#ec4899"],
        max_length=BeautifyDefaults.MAX_GRADIENT_STOPS,
        description="Gradient stops or mesh blob colors",
    )
    angle: float = Field(BeautifyDefaults.DEFAULT_GRADIENT_ANGLE, description="Gradient angle in degrees (CSS)")

    @field_validator("color")
    @classmethod
    def validate_color(cls, v):
        return _check_hex(v)

    @field_validator("colors")
    @classmethod
    def validate_colors(cls, v):
        return [_check_hex(color) for color in v]


class BeautifyOptions(BaseModel):
    """Composition options for the beautify tool"""

    padding_x: int = Field(BeautifyDefaults.DEFAULT_PADDING, ge=0, le=1024)
    padding_y: int = Field(BeautifyDefaults.DEFAULT_PADDING, ge=0, le=1024)
    border_radius: float = Field(BeautifyDefaults.DEFAULT_BORDER_RADIUS, ge=0, le=512)
    shadow_blur: float = Field(BeautifyDefaults.DEFAULT_SHADOW_BLUR, ge=0, le=200)
    shadow_color: str = BeautifyDefaults.DEFAULT_SHADOW_COLOR
    shadow_offset_x: int = Field(BeautifyDefaults.DEFAULT_SHADOW_OFFSET_X, ge=-500, le=500)
    shadow_offset_y: int = Field(BeautifyDefaults.DEFAULT_SHADOW_OFFSET_Y, ge=-500, le=500)
    background: BackgroundSpec = Field(default_factory=BackgroundSpec)
    inset: float = Field(0, ge=0, lt=100, description="Shrink the image by this percent per axis")
    rotation: float = Field(0, ge=-180, le=180, description="Rotation in degrees, clockwise")
    scale: float = Field(1.0, gt=0, le=4)
    browser_frame: FrameStyle = FrameStyle.NONE
    frame_theme: FrameTheme = FrameTheme.LIGHT
    noise: bool = False
    noise_seed: Optional[int] = Field(None, ge=0, description="Seed for reproducible grain")
    export_format: ExportFormat = ExportFormat.PNG
    export_quality: float = Field(ImageConstants.DEFAULT_EXPORT_QUALITY, ge=0, le=1)

    @field_validator("shadow_color")
    @classmethod
    def validate_shadow_color(cls, v):
        return _check_hex(v)


class BeautifyResponse(ImageResponse):
    """Response from beautify"""

    options: BeautifyOptions
