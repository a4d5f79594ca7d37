"""
Background painters for the beautify compositor.

All painters work on float RGBA arrays in [0, 1] and return uint8
(height, width, 4) arrays.
"""

import logging
import math
from typing import List, Optional, Sequence

import numpy as np

from core.constants import BeautifyDefaults
from core.enums import BackgroundType
from core.exceptions import InvalidInput
from core.utils.color_utils import parse_hex

logger = logging.getLogger(__name__)


def _to_unit(hex_color: str) -> np.ndarray:
    return np.array(parse_hex(hex_color), dtype=np.float64) / 255.0


def _to_uint8(canvas: np.ndarray) -> np.ndarray:
    return np.clip(np.rint(canvas * 255.0), 0, 255).astype(np.uint8)


def solid(width: int, height: int, color: str) -> np.ndarray:
    """Flat fill."""
    canvas = np.empty((height, width, 4), dtype=np.float64)
    canvas[:] = _to_unit(color)
    return _to_uint8(canvas)


def linear_gradient(
    width: int,
    height: int,
    stops: Sequence[str],
    angle: float = BeautifyDefaults.DEFAULT_GRADIENT_ANGLE,
) -> np.ndarray:
    """
    Linear gradient with evenly spaced stops.

    Uses the CSS angle convention: 0deg points up, 90deg points right, and
    the gradient line is long enough for the corners to hit the end stops.

    Args:
        width: Canvas width
        height: Canvas height
        stops: Hex colors, at most MAX_GRADIENT_STOPS are used
        angle: Gradient direction in degrees
    """
    stops = list(stops)[: BeautifyDefaults.MAX_GRADIENT_STOPS]
    if not stops:
        raise InvalidInput("Gradient background needs at least one color stop")
    if len(stops) == 1:
        return solid(width, height, stops[0])

    rad = math.radians(angle)
    dx, dy = math.sin(rad), -math.cos(rad)
    line_length = abs(width * dx) + abs(height * dy)

    ys, xs = np.mgrid[0:height, 0:width].astype(np.float64)
    projection = (xs + 0.5 - width / 2.0) * dx + (ys + 0.5 - height / 2.0) * dy
    t = np.clip(projection / max(line_length, 1e-9) + 0.5, 0.0, 1.0)

    colors = np.array([_to_unit(c) for c in stops])
    positions = np.linspace(0.0, 1.0, len(stops))

    canvas = np.empty((height, width, 4), dtype=np.float64)
    for channel in range(4):
        canvas[..., channel] = np.interp(t, positions, colors[:, channel])
    return _to_uint8(canvas)


def mesh(
    width: int,
    height: int,
    base: str,
    colors: Optional[Sequence[str]] = None,
) -> np.ndarray:
    """
    Fake mesh gradient.

    Fills the base color, then screens five radial blobs (four corners and
    the center) at half opacity, each fading to transparent.

    Args:
        width: Canvas width
        height: Canvas height
        base: Base fill color
        colors: Blob colors, cycled over the five anchors (defaults to base)
    """
    blob_colors: List[str] = list(colors or [])[: BeautifyDefaults.MAX_GRADIENT_STOPS] or [base]

    canvas = np.empty((height, width, 4), dtype=np.float64)
    canvas[:] = _to_unit(base)

    anchors = [
        (0.0, 0.0),
        (float(width), 0.0),
        (float(width), float(height)),
        (0.0, float(height)),
        (width / 2.0, height / 2.0),
    ]
    radius = max(width, height) * BeautifyDefaults.MESH_BLOB_RADIUS_RATIO

    ys, xs = np.mgrid[0:height, 0:width].astype(np.float64)
    for index, (ax, ay) in enumerate(anchors):
        color = _to_unit(blob_colors[index % len(blob_colors)])
        distance = np.hypot(xs + 0.5 - ax, ys + 0.5 - ay)
        falloff = np.clip(1.0 - distance / radius, 0.0, 1.0)
        alpha = (falloff * color[3] * BeautifyDefaults.MESH_BLOB_OPACITY)[..., None]

        rgb = canvas[..., :3]
        screened = 1.0 - (1.0 - rgb) * (1.0 - color[:3])
        canvas[..., :3] = rgb + (screened - rgb) * alpha
        canvas[..., 3:] = canvas[..., 3:] + (1.0 - canvas[..., 3:]) * alpha

    return _to_uint8(canvas)


def paint_background(width: int, height: int, spec) -> np.ndarray:
    """
    Paint the background described by a BackgroundSpec.

    Args:
        width: Canvas width
        height: Canvas height
        spec: schemas.beautify.BackgroundSpec

    Returns:
        (height, width, 4) uint8 array
    """
    kind = BackgroundType(spec.type)
    if kind == BackgroundType.SOLID:
        return solid(width, height, spec.color)
    if kind == BackgroundType.GRADIENT:
        return linear_gradient(width, height, spec.colors or [spec.color], spec.angle)
    return mesh(width, height, spec.color, spec.colors)


def apply_noise(
    canvas: np.ndarray,
    speck_count: int = BeautifyDefaults.NOISE_SPECK_COUNT,
    opacity: float = BeautifyDefaults.NOISE_OPACITY,
    seed: Optional[int] = None,
) -> None:
    """
    Overlay-blend random black/white single-pixel specks in place.

    Args:
        canvas: (height, width, 4) uint8 array, modified in place
        speck_count: Number of specks
        opacity: Global opacity of the overlay
        seed: Optional RNG seed for reproducible grain
    """
    height, width = canvas.shape[:2]
    rng = np.random.default_rng(seed)
    xs = rng.integers(0, width, speck_count)
    ys = rng.integers(0, height, speck_count)
    blend = rng.integers(0, 2, speck_count).astype(np.float64)[:, None]

    base = canvas[ys, xs, :3].astype(np.float64) / 255.0
    overlay = np.where(
        base < 0.5,
        2.0 * base * blend,
        1.0 - 2.0 * (1.0 - base) * (1.0 - blend),
    )
    mixed = base + (overlay - base) * opacity
    canvas[ys, xs, :3] = np.clip(np.rint(mixed * 255.0), 0, 255).astype(np.uint8)
