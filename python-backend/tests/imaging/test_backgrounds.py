"""
Tests for the beautify background painters
"""

import numpy as np
import pytest

from core.exceptions import InvalidInput
from imaging.backgrounds import apply_noise, linear_gradient, mesh, paint_background, solid
from schemas.beautify import BackgroundSpec


class TestSolid:
    """Test flat fills"""

    def test_fill(self):
        """Test every pixel carries the color"""
        canvas = solid(5, 3, "#ff8000")
        assert canvas.shape == (3, 5, 4)
        assert (canvas == [255, 128, 0, 255]).all()

    def test_alpha(self):
        """Test 8-digit hex keeps its alpha"""
        assert solid(1, 1, "#00000080")[0, 0, 3] == 128


class TestLinearGradient:
    """Test linear gradients"""

    def test_left_to_right(self):
        """Test 90 degrees runs from the first stop to the last"""
        canvas = linear_gradient(100, 10, ["#000000", "#ffffff"], angle=90)
        assert canvas[5, 0, 0] < 10
        assert canvas[5, 99, 0] > 245
        assert (np.diff(canvas[5, :, 0].astype(int)) >= 0).all()

    def test_top_to_bottom(self):
        """Test 180 degrees runs downward"""
        canvas = linear_gradient(10, 100, ["#ff0000", "#0000ff"], angle=180)
        assert canvas[0, 5, 0] > canvas[99, 5, 0]
        assert canvas[0, 5, 2] < canvas[99, 5, 2]

    def test_single_stop_is_solid(self):
        """Test one stop paints a flat fill"""
        assert (linear_gradient(4, 4, ["#123456"]) == [0x12, 0x34, 0x56, 255]).all()

    def test_no_stops(self):
        """Test an empty stop list raises InvalidInput"""
        with pytest.raises(InvalidInput):
            linear_gradient(4, 4, [])


class TestMesh:
    """Test the mesh approximation"""

    def test_opaque_and_blended(self):
        """Test blobs lighten the base and keep full opacity"""
        canvas = mesh(50, 50, "#202020", ["#ff0000"])
        assert (canvas[..., 3] == 255).all()
        assert canvas[25, 25, 0] > 0x20
        assert canvas.shape == (50, 50, 4)

    def test_defaults_to_base_color(self):
        """Test blobs fall back to the base color"""
        canvas = mesh(10, 10, "#808080")
        assert canvas[..., 0].min() >= 0x80


class TestPaintBackground:
    """Test dispatch on BackgroundSpec.type"""

    @pytest.mark.parametrize("kind", ["solid", "gradient", "mesh"])
    def test_shapes(self, kind):
        """Test each mode returns a canvas-sized array"""
        spec = BackgroundSpec(type=kind)
        assert paint_background(30, 20, spec).shape == (20, 30, 4)

    def test_gradient_without_colors_uses_color(self):
        """Test an empty stop list falls back to the base color"""
        spec = BackgroundSpec(type="gradient", color="#00ff00", colors=[])
        assert (paint_background(3, 3, spec) == [0, 255, 0, 255]).all()


class TestNoise:
    """Test the grain overlay"""

    def test_seeded(self):
        """Test a seed makes the grain reproducible"""
        first = solid(40, 40, "#808080")
        second = solid(40, 40, "#808080")
        apply_noise(first, seed=1)
        apply_noise(second, seed=1)
        assert (first == second).all()

    def test_subtle(self):
        """Test specks stay within the overlay opacity and alpha is kept"""
        canvas = solid(40, 40, "#808080")
        apply_noise(canvas, seed=3)
        assert (canvas[..., 3] == 255).all()
        assert np.abs(canvas[..., :3].astype(int) - 128).max() <= 12
        assert (canvas[..., 0] != 128).any()
