"""
Pytest configuration and fixtures for Image Studio tests
"""

import io

import numpy as np
import pytest
from PIL import Image

from core.operation_log import OperationLog
from core.raster import Raster
from services.imaging_service import ImagingService


def make_raster(width, height, color=(0, 0, 0, 255)):
    """Create a raster filled with one RGBA color"""
    return Raster.blank(width, height, color)


def encode_png(raster):
    """Encode a raster to PNG bytes with plain Pillow"""
    buffer = io.BytesIO()
    Image.frombytes("RGBA", raster.size, bytes(raster.pixels)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def red_blue_raster():
    """4x4 opaque raster alternating red and blue pixels"""
    array = np.zeros((4, 4, 4), dtype=np.uint8)
    array[..., 3] = 255
    for y in range(4):
        for x in range(4):
            if (x + y) % 2 == 0:
                array[y, x, 0] = 255
            else:
                array[y, x, 2] = 255
    return Raster.from_array(array)


@pytest.fixture
def gradient_raster():
    """64x48 opaque raster with a horizontal red ramp and vertical green ramp"""
    xs = np.linspace(0, 255, 64)
    ys = np.linspace(0, 255, 48)
    array = np.zeros((48, 64, 4), dtype=np.uint8)
    array[..., 0] = xs[None, :].astype(np.uint8)
    array[..., 1] = ys[:, None].astype(np.uint8)
    array[..., 2] = 128
    array[..., 3] = 255
    return Raster.from_array(array)


@pytest.fixture
def transparent_raster():
    """Fully transparent 8x8 raster"""
    return make_raster(8, 8, (255, 255, 255, 0))


@pytest.fixture
def test_image_bytes(gradient_raster):
    """PNG upload built from the gradient raster"""
    return encode_png(gradient_raster)


@pytest.fixture
def operation_log():
    """Create OperationLog instance for testing"""
    return OperationLog(max_size=20)


@pytest.fixture
def imaging_service(operation_log):
    """Create ImagingService instance for testing"""
    return ImagingService(operation_log=operation_log, max_upload_mb=5, max_dimension=2048)
