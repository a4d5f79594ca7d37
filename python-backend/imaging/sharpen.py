"""
Four-neighbor sharpen filter.
"""

import numpy as np

from core.constants import ErrorMessages
from core.exceptions import InvalidInput
from core.raster import Raster


def sharpen(raster: Raster, amount: float) -> None:
    """
    Sharpen a raster in place.

    Each interior RGB channel value c with neighbors t, b, l, r becomes
    c + (5c - (t + b + l + r) - c) * amount / 100, clamped to [0, 255].
    Neighbors are read from a snapshot of the original pixels. The 1-pixel
    border and the alpha channel are left untouched.

    Args:
        raster: Raster to modify
        amount: Strength in percent, 0-100
    """
    if not 0 <= amount <= 100:
        raise InvalidInput(ErrorMessages.INVALID_PARAMETER.format(param="amount", value=amount))

    if amount == 0 or raster.width < 3 or raster.height < 3:
        return

    pixels = raster.as_array()
    snapshot = pixels[:, :, :3].astype(np.float64)

    center = snapshot[1:-1, 1:-1]
    neighbors = snapshot[:-2, 1:-1] + snapshot[2:, 1:-1] + snapshot[1:-1, :-2] + snapshot[1:-1, 2:]
    sharpened = 5.0 * center - neighbors

    result = center + (sharpened - center) * (amount / 100.0)
    pixels[1:-1, 1:-1, :3] = np.clip(np.rint(result), 0, 255).astype(np.uint8)
