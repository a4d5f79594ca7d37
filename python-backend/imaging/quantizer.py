"""
Color palette extraction for image rasters.

Runs a bounded, deterministic k-means over a down-sampled copy of the image,
optionally restricted to vibrant, muted, light or dark colors.
"""

import logging
from typing import Dict, List, Union

import cv2
import numpy as np

from core.constants import ErrorMessages, ImageConstants, PaletteDefaults
from core.enums import PaletteStyle
from core.exceptions import InvalidInput
from core.image.processors import resize_array
from core.raster import Raster
from core.utils.color_utils import hex_to_hsl, hex_to_rgb, rgb_to_hex, rgb_to_hsl_array
from core.utils.decorators import log_timing

logger = logging.getLogger(__name__)


def _working_pixels(raster: Raster) -> np.ndarray:
    """
    Down-sample to the working resolution and flatten to (N, 4).

    Rasters that already fit are used as-is, so their pixel order (and
    therefore the seed order) is preserved exactly.
    """
    array = raster.as_array()
    working_area = PaletteDefaults.WORKING_WIDTH * PaletteDefaults.WORKING_HEIGHT
    if raster.width * raster.height > working_area:
        array = resize_array(
            array,
            PaletteDefaults.WORKING_WIDTH,
            PaletteDefaults.WORKING_HEIGHT,
            interpolation=cv2.INTER_AREA,
        )
    return array.reshape(-1, 4)


def _style_mask(samples: np.ndarray, style: PaletteStyle) -> np.ndarray:
    """Boolean mask of samples passing the HSL style predicate."""
    # Thresholds compare the rounded values shown to users
    hsl = np.rint(rgb_to_hsl_array(samples))
    saturation, lightness = hsl[:, 1], hsl[:, 2]

    if style == PaletteStyle.VIBRANT:
        return saturation >= PaletteDefaults.VIBRANT_MIN_SATURATION
    if style == PaletteStyle.MUTED:
        return saturation < PaletteDefaults.VIBRANT_MIN_SATURATION
    if style == PaletteStyle.LIGHT:
        return lightness >= PaletteDefaults.LIGHT_MIN_LIGHTNESS
    if style == PaletteStyle.DARK:
        return lightness < PaletteDefaults.DARK_MAX_LIGHTNESS
    return np.ones(len(samples), dtype=bool)


def collect_samples(
    raster: Raster, color_count: int, style: PaletteStyle = PaletteStyle.ALL
) -> np.ndarray:
    """
    Build the color sample set for clustering.

    Transparent pixels (alpha < 128) never count. When a style filter leaves
    fewer than color_count samples, the unfiltered opaque samples are used
    instead, capped at the fallback budget.

    Returns:
        (N, 3) int array of RGB samples, possibly empty
    """
    pixels = _working_pixels(raster)
    opaque = pixels[pixels[:, 3] >= ImageConstants.OPAQUE_ALPHA_THRESHOLD, :3].astype(np.int64)

    if style == PaletteStyle.ALL:
        return opaque

    filtered = opaque[_style_mask(opaque, style)]
    if len(filtered) >= color_count:
        return filtered

    logger.debug(
        f"Style '{style.value}' kept {len(filtered)} samples (< {color_count}), "
        f"falling back to unfiltered samples"
    )
    return opaque[: PaletteDefaults.FALLBACK_SAMPLE_BUDGET]


def kmeans(
    samples: np.ndarray,
    k: int,
    max_iterations: int = PaletteDefaults.MAX_ITERATIONS,
    epsilon: float = PaletteDefaults.CONVERGENCE_EPSILON,
) -> np.ndarray:
    """
    Deterministic k-means in RGB space.

    Seeds are the first k samples. Ties in assignment go to the lowest
    centroid index and empty clusters keep their previous centroid.

    Args:
        samples: (N, 3) samples, N >= k
        k: Number of clusters
        max_iterations: Hard cap on assignment/update rounds
        epsilon: Stop once no centroid channel moves more than this

    Returns:
        (k, 3) float array of centroids in seed order
    """
    points = samples.astype(np.float64)
    centroids = points[:k].copy()

    for iteration in range(max_iterations):
        # (N, k) squared distances; argmin returns the first minimum on ties
        distances = ((points[:, None, :] - centroids[None, :, :]) ** 2).sum(axis=2)
        labels = distances.argmin(axis=1)

        counts = np.bincount(labels, minlength=k)
        updated = centroids.copy()
        for channel in range(3):
            sums = np.bincount(labels, weights=points[:, channel], minlength=k)
            np.divide(sums, counts, out=updated[:, channel], where=counts > 0)

        shift = np.abs(updated - centroids).max()
        centroids = updated
        if shift <= epsilon:
            logger.debug(f"k-means converged after {iteration + 1} rounds")
            break

    return centroids


@log_timing
def extract_palette(
    raster: Raster,
    color_count: int = PaletteDefaults.DEFAULT_COLOR_COUNT,
    style: Union[PaletteStyle, str] = PaletteStyle.ALL,
) -> List[str]:
    """
    Extract a palette of representative colors.

    Args:
        raster: Source raster
        color_count: Requested number of colors (>= 1)
        style: Perceptual pre-filter

    Returns:
        Lowercase #rrggbb strings in centroid order. Shorter than color_count
        when there are not enough opaque samples; empty for a fully
        transparent image.
    """
    if color_count < PaletteDefaults.MIN_COLOR_COUNT:
        raise InvalidInput(
            ErrorMessages.INVALID_PARAMETER.format(param="color_count", value=color_count)
        )

    try:
        style = PaletteStyle(style)
    except ValueError:
        raise InvalidInput(ErrorMessages.INVALID_PARAMETER.format(param="style", value=style))

    samples = collect_samples(raster, color_count, style)
    if len(samples) == 0:
        return []

    k = min(color_count, len(samples))
    centroids = kmeans(samples, k)

    # Round half up: a 2.5 mean becomes 3
    rounded = np.clip(np.floor(centroids + 0.5), 0, 255).astype(int)
    return [rgb_to_hex(r, g, b) for r, g, b in rounded]


def describe_palette(palette: List[str]) -> List[Dict]:
    """Expand hex colors into hex/rgb/hsl records."""
    return [
        {"hex": color, "rgb": list(hex_to_rgb(color)), "hsl": list(hex_to_hsl(color))}
        for color in palette
    ]
