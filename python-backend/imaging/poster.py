"""
Shareable palette poster.

Fixed 1080x1350 portrait layout: the image covers the top 70%, a row of
rounded swatches with vertical hex labels sits below it, and a caption
closes the footer.
"""

import logging
from functools import lru_cache
from typing import List, Optional

from PIL import Image, ImageDraw, ImageFont

from core.constants import ErrorMessages, PosterDefaults
from core.exceptions import ContextUnavailable, InvalidInput
from core.image.converters import ImageConverters
from core.image.processors import resize_array
from core.raster import Raster
from core.utils.color_utils import hex_to_rgb, pick_text_color
from core.utils.decorators import log_timing
from imaging.resampler import compute_crop_rect

logger = logging.getLogger(__name__)

IMAGE_ZONE_HEIGHT = round(PosterDefaults.HEIGHT * PosterDefaults.IMAGE_ZONE_RATIO)


@lru_cache(maxsize=8)
def load_font(size: int) -> ImageFont.ImageFont:
    """
    Load Pillow's bundled font at a pixel size.

    Raises:
        ContextUnavailable: If no font can be loaded
    """
    try:
        return ImageFont.load_default(size=size)
    except (OSError, ImportError) as e:
        logger.error(f"Failed to load default font: {e}")
        raise ContextUnavailable(ErrorMessages.FONT_UNAVAILABLE.format(error=e)) from e


def _cover(raster: Raster, width: int, height: int) -> Image.Image:
    """Center-crop the raster to the zone's aspect ratio and resize it to fill the zone."""
    crop = compute_crop_rect(raster.width, raster.height, target_aspect_ratio=width / height)
    region = raster.as_array()[crop.y : crop.y2, crop.x : crop.x2]
    return Image.fromarray(resize_array(region, width, height))


def _vertical_label(text: str, font, color) -> Image.Image:
    """Render text on a transparent tile and turn it to read bottom-to-top."""
    measure = ImageDraw.Draw(Image.new("RGBA", (1, 1)))
    left, top, right, bottom = measure.textbbox((0, 0), text, font=font)
    tile = Image.new("RGBA", (max(1, right - left), max(1, bottom - top)), (0, 0, 0, 0))
    ImageDraw.Draw(tile).text((-left, -top), text, font=font, fill=color)
    return tile.rotate(90, expand=True)


def _swatch_boxes(count: int) -> List[tuple]:
    """Equal-width swatch boxes spread across the row, margins and gaps included."""
    top = IMAGE_ZONE_HEIGHT + PosterDefaults.MARGIN
    bottom = top + PosterDefaults.SWATCH_HEIGHT
    usable = PosterDefaults.WIDTH - 2 * PosterDefaults.MARGIN - (count - 1) * PosterDefaults.SWATCH_GAP
    width = usable / count

    boxes = []
    for index in range(count):
        x0 = PosterDefaults.MARGIN + index * (width + PosterDefaults.SWATCH_GAP)
        # PIL box corners are inclusive
        boxes.append((x0, top, x0 + width - 1, bottom - 1))
    return boxes


@log_timing
def generate_poster(
    raster: Raster, palette: List[str], caption: Optional[str] = None
) -> Raster:
    """
    Lay out the image and its palette on a poster.

    Args:
        raster: Source raster
        palette: Hex colors, at most MAX_SWATCHES
        caption: Footer text; defaults to "Color Palette · N colors"

    Returns:
        1080x1350 raster

    Raises:
        InvalidInput: If the palette has too many colors or a malformed hex
        ContextUnavailable: If text cannot be rendered
    """
    if len(palette) > PosterDefaults.MAX_SWATCHES:
        raise InvalidInput(
            ErrorMessages.INVALID_PARAMETER.format(param="palette", value=f"{len(palette)} colors"),
            {"max_colors": PosterDefaults.MAX_SWATCHES},
        )
    colors = [hex_to_rgb(color) for color in palette]

    poster = Image.new("RGBA", (PosterDefaults.WIDTH, PosterDefaults.HEIGHT), PosterDefaults.BACKGROUND)
    poster.alpha_composite(_cover(raster, PosterDefaults.WIDTH, IMAGE_ZONE_HEIGHT))

    draw = ImageDraw.Draw(poster)
    hex_font = load_font(PosterDefaults.HEX_FONT_SIZE)

    boxes = _swatch_boxes(len(colors)) if colors else []
    for color, hex_code, box in zip(colors, palette, boxes):
        draw.rounded_rectangle(box, radius=PosterDefaults.SWATCH_RADIUS, fill=color + (255,))

        label = _vertical_label(hex_code.upper(), hex_font, pick_text_color(color))
        cx, cy = (box[0] + box[2]) / 2.0, (box[1] + box[3]) / 2.0
        x = max(0, int(round(cx - label.width / 2.0)))
        y = max(0, int(round(cy - label.height / 2.0)))
        poster.alpha_composite(label, dest=(x, y))

    if caption is None:
        caption = PosterDefaults.CAPTION_TEMPLATE.format(count=len(colors))

    if caption:
        caption_font = load_font(PosterDefaults.CAPTION_FONT_SIZE)
        left, top, right, bottom = draw.textbbox((0, 0), caption, font=caption_font)
        footer_top = IMAGE_ZONE_HEIGHT + PosterDefaults.MARGIN + PosterDefaults.SWATCH_HEIGHT
        x = (PosterDefaults.WIDTH - (right - left)) / 2.0 - left
        y = (footer_top + PosterDefaults.HEIGHT - (bottom - top)) / 2.0 - top
        draw.text((x, y), caption, font=caption_font, fill=PosterDefaults.CAPTION_COLOR)

    logger.debug(f"Poster rendered with {len(colors)} swatches from {raster.width}x{raster.height}")
    return ImageConverters.pil_to_raster(poster)
