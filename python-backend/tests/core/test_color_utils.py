"""
Tests for color utilities
"""

import numpy as np
import pytest

from core.exceptions import InvalidInput
from core.utils.color_utils import (
    BLACK,
    WHITE,
    contrast_ratio,
    hex_to_hsl,
    parse_hex,
    pick_text_color,
    rgb_to_hex,
    rgb_to_hsl_array,
)


class TestHexParsing:
    """Test hex color parsing and formatting"""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("#ff0000", (255, 0, 0, 255)),
            ("#f00", (255, 0, 0, 255)),
            ("#00000066", (0, 0, 0, 102)),
            ("#0f08", (0, 255, 0, 136)),
            ("6366F1", (99, 102, 241, 255)),
        ],
    )
    def test_parse_hex(self, value, expected):
        """Test supported hex notations"""
        assert parse_hex(value) == expected

    @pytest.mark.parametrize("value", ["", "#12", "#12345", "#gggggg", "red"])
    def test_parse_invalid(self, value):
        """Test malformed colors raise InvalidInput"""
        with pytest.raises(InvalidInput):
            parse_hex(value)

    def test_rgb_to_hex_lowercase(self):
        """Test hex output is lowercase and zero padded"""
        assert rgb_to_hex(171, 205, 9) == "#abcd09"


class TestHSL:
    """Test HSL conversion"""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("#ff0000", (0, 100, 50)),
            ("#00ff00", (120, 100, 50)),
            ("#0000ff", (240, 100, 50)),
            ("#ffffff", (0, 0, 100)),
            ("#808080", (0, 0, 50)),
        ],
    )
    def test_hex_to_hsl(self, value, expected):
        """Test reference colors"""
        assert hex_to_hsl(value) == expected

    def test_array_matches_scalar(self):
        """Test the vectorized form agrees with the scalar form"""
        hsl = rgb_to_hsl_array(np.array([[255, 0, 0], [128, 128, 128]]))
        assert np.allclose(hsl[0], [0, 100, 50])
        assert hsl[1, 1] == 0


class TestContrast:
    """Test WCAG contrast helpers"""

    def test_black_on_white(self):
        """Test the maximum contrast ratio"""
        assert contrast_ratio((0, 0, 0), (255, 255, 255)) == pytest.approx(21.0)

    def test_same_color(self):
        """Test identical colors have ratio 1"""
        assert contrast_ratio((90, 90, 90), (90, 90, 90)) == pytest.approx(1.0)

    def test_dark_background_gets_white(self):
        """Test white text on dark swatches"""
        assert pick_text_color((20, 20, 60)) == WHITE

    def test_light_background_gets_black(self):
        """Test black text on light swatches"""
        assert pick_text_color((250, 240, 200)) == BLACK
