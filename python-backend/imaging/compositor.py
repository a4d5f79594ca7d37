"""
Beautify compositor.

Places a source raster on a padded background with a drop shadow, rounded
corners, an optional rotation/scale and one of the decorative frames from
imaging.frames. The output size only depends on the source size and the
padding.

Layers are kept as premultiplied float32 arrays so that blurring, warping
and compositing never bleed color out of transparent pixels.
"""

import logging
from typing import Optional, Tuple

import cv2
import numpy as np
from PIL import Image, ImageDraw

from core.constants import BeautifyDefaults
from core.enums import FrameStyle, FrameTheme
from core.image.processors import resize_array
from core.raster import Raster
from core.utils.color_utils import parse_hex
from core.utils.decorators import log_timing
from imaging.backgrounds import apply_noise, paint_background
from imaging.frames import FRAME_RECIPES, THEMES, Box, FrameGeometry, FrameRecipe, Painter

logger = logging.getLogger(__name__)

Corners = Tuple[bool, bool, bool, bool]
ALL_CORNERS: Corners = (True, True, True, True)
BOTTOM_CORNERS: Corners = (False, False, True, True)


def _supersample_factor(width: int, height: int, factor: int) -> int:
    """Largest factor <= the requested one that keeps the buffer within budget."""
    budget = BeautifyDefaults.SUPERSAMPLE_PIXEL_BUDGET
    while factor > 1 and width * height * factor * factor > budget:
        factor -= 1
    return factor


def rounded_mask(
    width: int,
    height: int,
    radius: float,
    corners: Corners = ALL_CORNERS,
    supersample: int = BeautifyDefaults.MASK_SUPERSAMPLE,
) -> np.ndarray:
    """
    Antialiased rounded-rectangle coverage mask.

    The shape is drawn at supersample times the size and box-filtered down,
    so edge pixels hold their fractional coverage.

    Args:
        width: Mask width in pixels
        height: Mask height in pixels
        radius: Corner radius, clamped to half the shorter side
        corners: Which corners are rounded (top-left, top-right,
            bottom-right, bottom-left)
        supersample: Antialiasing factor

    Returns:
        (height, width) float32 array in [0, 1]
    """
    factor = _supersample_factor(width, height, supersample)
    radius = max(0.0, min(radius, width / 2.0, height / 2.0))

    big = Image.new("L", (width * factor, height * factor), 0)
    ImageDraw.Draw(big).rounded_rectangle(
        (0, 0, width * factor - 1, height * factor - 1),
        radius=radius * factor,
        fill=255,
        corners=corners,
    )
    if factor > 1:
        big = big.resize((width, height), Image.Resampling.BOX)
    return np.asarray(big, dtype=np.float32) / 255.0


def _premultiply(rgba: np.ndarray) -> np.ndarray:
    """uint8 straight RGBA -> float32 premultiplied RGBA in [0, 1]."""
    result = rgba.astype(np.float32) / 255.0
    result[..., :3] *= result[..., 3:4]
    return result


def _unpremultiply(rgba: np.ndarray) -> np.ndarray:
    """float32 premultiplied RGBA -> uint8 straight RGBA."""
    alpha = rgba[..., 3:4]
    rgb = np.divide(rgba[..., :3], alpha, out=np.zeros_like(rgba[..., :3]), where=alpha > 1e-6)
    straight = np.concatenate([rgb, alpha], axis=2)
    return np.clip(np.rint(straight * 255.0), 0, 255).astype(np.uint8)


def _window(x: int, y: int, width: int, height: int, canvas_width: int, canvas_height: int):
    """
    Overlap of a patch placed at (x, y) with the canvas.

    Returns:
        (canvas slices, patch slices), or None when they do not overlap
    """
    tx0, ty0 = max(x, 0), max(y, 0)
    tx1, ty1 = min(x + width, canvas_width), min(y + height, canvas_height)
    if tx1 <= tx0 or ty1 <= ty0:
        return None
    target = (slice(ty0, ty1), slice(tx0, tx1))
    source = (slice(ty0 - y, ty1 - y), slice(tx0 - x, tx1 - x))
    return target, source


def _composite(dst: np.ndarray, src: np.ndarray, x: int = 0, y: int = 0) -> None:
    """Source-over a premultiplied patch onto a premultiplied canvas, in place."""
    window = _window(x, y, src.shape[1], src.shape[0], dst.shape[1], dst.shape[0])
    if window is None:
        return
    target, source = window
    patch = src[source]
    dst[target] = patch + dst[target] * (1.0 - patch[..., 3:4])


def _place(canvas_shape: Tuple[int, int], patch: np.ndarray, x: int, y: int) -> np.ndarray:
    """Copy a 2-D patch into a zeroed canvas-sized array."""
    full = np.zeros(canvas_shape, dtype=np.float32)
    window = _window(x, y, patch.shape[1], patch.shape[0], canvas_shape[1], canvas_shape[0])
    if window is not None:
        target, source = window
        full[target] = patch[source]
    return full


def _render_chrome(painter: Painter, geometry: FrameGeometry, region: Box) -> np.ndarray:
    """
    Run a frame painter over a region, supersampled.

    Returns:
        (region.height, region.width, 4) premultiplied float32 patch
    """
    width, height = int(region.width), int(region.height)
    factor = _supersample_factor(width, height, BeautifyDefaults.CHROME_SUPERSAMPLE)

    layer = Image.new("RGBA", (width * factor, height * factor), (0, 0, 0, 0))
    painter(ImageDraw.Draw(layer), geometry.scaled(factor, (region.x0, region.y0)))

    # Resample in premultiplied form so edges do not darken
    layer = layer.convert("RGBa")
    if factor > 1:
        layer = layer.resize((width, height), Image.Resampling.BOX)
    return np.asarray(layer, dtype=np.float32) / 255.0


def _transform_matrix(width: int, height: int, rotation: float, scale: float) -> Optional[np.ndarray]:
    """
    Affine matrix rotating clockwise by `rotation` degrees and scaling about
    the canvas center; None for the identity.
    """
    if rotation % 360 == 0 and scale == 1:
        return None
    return cv2.getRotationMatrix2D((width / 2.0, height / 2.0), -rotation, scale)


def _warp(array: np.ndarray, matrix: Optional[np.ndarray], size: Tuple[int, int]) -> np.ndarray:
    if matrix is None:
        return array
    return cv2.warpAffine(
        array,
        matrix,
        size,
        flags=cv2.INTER_LINEAR,
        borderMode=cv2.BORDER_CONSTANT,
        borderValue=0,
    )


def layout_frame(
    canvas_size: Tuple[int, int],
    image_size: Tuple[int, int],
    recipe: FrameRecipe,
    border_radius: float,
    theme: FrameTheme,
) -> FrameGeometry:
    """
    Center the framed card on the canvas.

    Args:
        canvas_size: (width, height) of the output canvas
        image_size: (width, height) of the drawn (inset) image
        recipe: Frame recipe providing insets and radii
        border_radius: User corner radius
        theme: Chrome color theme

    Returns:
        FrameGeometry in canvas pixels
    """
    canvas_w, canvas_h = canvas_size
    image_w, image_h = image_size
    left, top, right, bottom = recipe.insets

    card_w = image_w + left + right
    card_h = image_h + top + bottom
    x0 = (canvas_w - card_w) // 2
    y0 = (canvas_h - (card_h + recipe.below)) // 2

    card = Box(x0, y0, x0 + card_w, y0 + card_h)
    return FrameGeometry(
        card=card,
        content=Box(x0 + left, y0 + top, x0 + left + image_w, y0 + top + image_h),
        header=Box(x0, y0, x0 + card_w, y0 + top) if recipe.has_header else None,
        radius=recipe.outer_radius(border_radius),
        content_radius=recipe.content_radius(border_radius),
        theme=THEMES[theme],
        stand=Box(x0, card.y1, x0 + card_w, card.y1 + recipe.below) if recipe.below else None,
    )


def _shadow_layer(silhouette: np.ndarray, options) -> Optional[np.ndarray]:
    """
    Tinted, offset and blurred copy of the (already transformed) silhouette.

    The offset is applied in screen space, so a rotated card still casts its
    shadow straight down for a positive shadow_offset_y.
    """
    r, g, b, a = parse_hex(options.shadow_color)
    if a == 0:
        return None

    height, width = silhouette.shape
    mask = silhouette
    if options.shadow_offset_x or options.shadow_offset_y:
        shift = np.float32(
            [[1, 0, options.shadow_offset_x], [0, 1, options.shadow_offset_y]]
        )
        mask = _warp(mask, shift, (width, height))

    if options.shadow_blur > 0:
        mask = cv2.GaussianBlur(mask, (0, 0), sigmaX=options.shadow_blur / 2.0)

    alpha = mask * (a / 255.0)
    shadow = np.empty((height, width, 4), dtype=np.float32)
    shadow[..., 0] = alpha * (r / 255.0)
    shadow[..., 1] = alpha * (g / 255.0)
    shadow[..., 2] = alpha * (b / 255.0)
    shadow[..., 3] = alpha
    return shadow


@log_timing
def beautify(raster: Raster, options) -> Raster:
    """
    Compose the beautified image.

    Drawing order: background, noise, shadow, frame chrome clipped to the
    silhouette, the clipped image, then unclipped frame overlays. Everything
    after the shadow is drawn untransformed on a card layer, which is warped
    once by the rotation/scale.

    Args:
        raster: Source raster
        options: schemas.beautify.BeautifyOptions

    Returns:
        Raster of (width + 2 * padding_x) x (height + 2 * padding_y)
    """
    source_w, source_h = raster.size
    canvas_w = source_w + 2 * options.padding_x
    canvas_h = source_h + 2 * options.padding_y

    background = paint_background(canvas_w, canvas_h, options.background)
    if options.noise:
        apply_noise(background, seed=options.noise_seed)
    canvas = _premultiply(background)

    style = FrameStyle(options.browser_frame)
    recipe = FRAME_RECIPES[style]

    shrink = 1.0 - options.inset / 100.0
    image_w = max(1, round(source_w * shrink))
    image_h = max(1, round(source_h * shrink))

    geometry = layout_frame(
        (canvas_w, canvas_h),
        (image_w, image_h),
        recipe,
        options.border_radius,
        FrameTheme(options.frame_theme),
    )
    card, content = geometry.card, geometry.content
    card_x, card_y = int(card.x0), int(card.y0)

    card_mask = rounded_mask(int(card.width), int(card.height), geometry.radius)
    silhouette = _place((canvas_h, canvas_w), card_mask, card_x, card_y)
    matrix = _transform_matrix(canvas_w, canvas_h, options.rotation, options.scale)

    shadow = _shadow_layer(_warp(silhouette, matrix, (canvas_w, canvas_h)), options)
    if shadow is not None:
        _composite(canvas, shadow)

    layer = np.zeros((canvas_h, canvas_w, 4), dtype=np.float32)

    if recipe.paint is not None:
        chrome = _render_chrome(recipe.paint, geometry, card)
        chrome *= card_mask[..., None]
        _composite(layer, chrome, card_x, card_y)

    image = _premultiply(resize_array(raster.as_array(), image_w, image_h))
    corners = BOTTOM_CORNERS if recipe.has_header else ALL_CORNERS
    image *= rounded_mask(image_w, image_h, geometry.content_radius, corners)[..., None]
    _composite(layer, image, int(content.x0), int(content.y0))

    if recipe.paint_overlay is not None:
        bottom = geometry.stand.y1 if geometry.stand else card.y1
        region = Box(card.x0, card.y0, card.x1, bottom)
        overlay = _render_chrome(recipe.paint_overlay, geometry, region)
        _composite(layer, overlay, card_x, card_y)

    _composite(canvas, _warp(layer, matrix, (canvas_w, canvas_h)))

    logger.debug(
        f"Beautified {source_w}x{source_h} into {canvas_w}x{canvas_h} "
        f"(frame={style.value}, rotation={options.rotation}, scale={options.scale})"
    )
    return Raster.from_array(_unpremultiply(canvas))
