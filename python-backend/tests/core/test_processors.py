"""
Tests for generic raster processors
"""

import numpy as np
import pytest

from core.exceptions import InvalidDimension, InvalidInput
from core.image.processors import resize_raster, resize_to_fit, rotate_quarter
from core.raster import Raster


class TestResizeToFit:
    """Test aspect-preserving shrinking"""

    def test_width_cap(self):
        """Test the width limit scales height proportionally"""
        result = resize_to_fit(Raster.blank(400, 200), max_width=100)
        assert result.size == (100, 50)

    def test_height_cap_after_width_cap(self):
        """Test the height limit is applied to the width-capped size"""
        result = resize_to_fit(Raster.blank(400, 400), max_width=200, max_height=100)
        assert result.size == (100, 100)

    def test_never_upsizes(self):
        """Test rasters within bounds keep their size"""
        raster = Raster.blank(50, 40, (1, 2, 3, 255))
        result = resize_to_fit(raster, max_width=100, max_height=100)

        assert result.size == (50, 40)
        assert result is not raster
        assert result.pixels == raster.pixels

    def test_non_positive_limit(self):
        """Test zero limits are rejected"""
        with pytest.raises(InvalidInput):
            resize_to_fit(Raster.blank(10, 10), max_width=0)


class TestRotateQuarter:
    """Test quarter-turn rotation"""

    @pytest.fixture
    def marked(self):
        """3x2 raster with a red top-left pixel"""
        array = np.zeros((2, 3, 4), dtype=np.uint8)
        array[..., 3] = 255
        array[0, 0, 0] = 255
        return Raster.from_array(array)

    def test_90_swaps_dimensions_clockwise(self, marked):
        """Test 90 degrees moves the top-left pixel to the top-right"""
        result = rotate_quarter(marked, 90)
        assert result.size == (2, 3)
        assert result.as_array()[0, 1, 0] == 255

    def test_180_keeps_dimensions(self, marked):
        """Test 180 degrees moves the top-left pixel to the bottom-right"""
        result = rotate_quarter(marked, 180)
        assert result.size == (3, 2)
        assert result.as_array()[1, 2, 0] == 255

    def test_negative_equals_270(self, marked):
        """Test -90 matches 270"""
        assert rotate_quarter(marked, -90).pixels == rotate_quarter(marked, 270).pixels

    def test_non_quarter_angle(self, marked):
        """Test angles that are not multiples of 90 are rejected"""
        with pytest.raises(InvalidInput):
            rotate_quarter(marked, 45)


class TestResizeRaster:
    """Test exact resizing"""

    def test_exact_size(self):
        """Test the raster is resized to the requested size"""
        assert resize_raster(Raster.blank(10, 10), 25, 5).size == (25, 5)

    def test_zero_target(self):
        """Test zero targets raise InvalidDimension"""
        with pytest.raises(InvalidDimension):
            resize_raster(Raster.blank(10, 10), 0, 5)
