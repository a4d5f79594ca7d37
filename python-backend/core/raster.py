"""
Raster data contract.

A Raster is the only currency exchanged between the imaging algorithms and
the decode/encode collaborator: width, height and a row-major RGBA byte
buffer.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from core.exceptions import InvalidInput

CHANNELS = 4


@dataclass
class Raster:
    """
    In-memory RGBA pixel grid.

    Attributes:
        width: Width in pixels (> 0)
        height: Height in pixels (> 0)
        pixels: width * height * 4 bytes, channel order R, G, B, A
    """

    width: int
    height: int
    pixels: bytearray

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise InvalidInput(
                f"Raster must have a positive area, got {self.width}x{self.height}",
                {"width": self.width, "height": self.height},
            )

        if not isinstance(self.pixels, bytearray):
            self.pixels = bytearray(self.pixels)

        expected = self.width * self.height * CHANNELS
        if len(self.pixels) != expected:
            raise InvalidInput(
                f"Pixel buffer has {len(self.pixels)} bytes, expected {expected}",
                {"width": self.width, "height": self.height},
            )

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height) tuple, PIL style."""
        return (self.width, self.height)

    def as_array(self) -> np.ndarray:
        """
        Writable (height, width, 4) uint8 view over the pixel buffer.

        Writes through the view mutate the raster in place.
        """
        return np.frombuffer(self.pixels, dtype=np.uint8).reshape(
            self.height, self.width, CHANNELS
        )

    def copy(self) -> "Raster":
        return Raster(self.width, self.height, bytearray(self.pixels))

    @classmethod
    def from_array(cls, array: np.ndarray) -> "Raster":
        """
        Create a raster from a (height, width, 4) array.

        Args:
            array: RGBA image array; other dtypes are clipped into uint8

        Returns:
            New Raster owning a copy of the data
        """
        if array.ndim != 3 or array.shape[2] != CHANNELS:
            raise InvalidInput(f"Expected an (H, W, 4) RGBA array, got shape {array.shape}")

        if array.dtype != np.uint8:
            array = np.clip(np.rint(array), 0, 255).astype(np.uint8)

        height, width = array.shape[:2]
        return cls(width, height, bytearray(np.ascontiguousarray(array).tobytes()))

    @classmethod
    def blank(cls, width: int, height: int, color=(0, 0, 0, 0)) -> "Raster":
        """Create a raster filled with one RGBA color."""
        if width <= 0 or height <= 0:
            raise InvalidInput(f"Raster must have a positive area, got {width}x{height}")
        array = np.empty((height, width, CHANNELS), dtype=np.uint8)
        array[:] = color
        return cls.from_array(array)
