"""
Tests for the beautify compositor
"""

import itertools

import numpy as np
import pytest

from core.enums import FrameStyle, FrameTheme
from core.raster import Raster
from imaging.compositor import (
    BOTTOM_CORNERS,
    beautify,
    layout_frame,
    rounded_mask,
)
from imaging.frames import FRAME_RECIPES
from schemas.beautify import BeautifyOptions

NO_SHADOW = "#00000000"


@pytest.fixture
def photo():
    """Opaque 100x50 raster with a horizontal ramp"""
    array = np.zeros((50, 100, 4), dtype=np.uint8)
    array[..., 0] = np.linspace(0, 255, 100, dtype=np.uint8)[None, :]
    array[..., 1] = 90
    array[..., 2] = 200
    array[..., 3] = 255
    return Raster.from_array(array)


def solid_options(**overrides):
    options = {
        "padding_x": 20,
        "padding_y": 20,
        "background": {"type": "solid", "color": "#102030"},
        "shadow_color": NO_SHADOW,
    }
    options.update(overrides)
    return BeautifyOptions(**options)


class TestRoundedMask:
    """Test antialiased coverage masks"""

    def test_square_corners_are_full(self):
        """Test radius 0 covers every pixel"""
        mask = rounded_mask(12, 7, 0)
        assert mask.shape == (7, 12)
        assert mask.dtype == np.float32
        assert np.allclose(mask, 1.0)

    def test_rounded_corners(self):
        """Test corners lose coverage while the center stays full"""
        mask = rounded_mask(40, 30, 10)
        assert mask[0, 0] == 0.0
        assert mask[15, 20] == 1.0
        assert 0.0 < mask[0, 20] <= 1.0
        assert mask.min() >= 0.0 and mask.max() <= 1.0

    def test_edge_pixels_are_fractional(self):
        """Test the arc produces partial coverage somewhere"""
        mask = rounded_mask(40, 40, 12)
        partial = (mask > 0.0) & (mask < 1.0)
        assert partial.any()

    def test_selected_corners(self):
        """Test only the requested corners are rounded"""
        mask = rounded_mask(30, 30, 10, corners=BOTTOM_CORNERS)
        assert mask[0, 0] == 1.0
        assert mask[0, 29] == 1.0
        assert mask[29, 0] == 0.0
        assert mask[29, 29] == 0.0

    def test_radius_clamped(self):
        """Test an oversized radius behaves like a pill"""
        assert np.allclose(rounded_mask(20, 10, 500), rounded_mask(20, 10, 5))


class TestLayoutFrame:
    """Test card placement"""

    def test_plain_card_sits_in_padding(self):
        """Test the no-frame card starts at the padding offset"""
        geometry = layout_frame(
            (140, 90), (100, 50), FRAME_RECIPES[FrameStyle.NONE], 12, FrameTheme.LIGHT
        )
        assert (geometry.card.x0, geometry.card.y0) == (20, 20)
        assert geometry.content == geometry.card
        assert geometry.header is None

    def test_header_above_content(self):
        """Test browser frames reserve a header strip above the image"""
        geometry = layout_frame(
            (300, 300), (100, 50), FRAME_RECIPES[FrameStyle.SAFARI], 12, FrameTheme.DARK
        )
        assert geometry.header is not None
        assert geometry.header.y1 == geometry.content.y0
        assert geometry.card.height == 50 + 40
        assert geometry.content.width == 100

    def test_stand_below_card(self):
        """Test the desktop frame centers card and stand together"""
        geometry = layout_frame(
            (400, 400), (100, 50), FRAME_RECIPES[FrameStyle.DESKTOP], 0, FrameTheme.LIGHT
        )
        assert geometry.stand is not None
        assert geometry.stand.y0 == geometry.card.y1
        total = geometry.stand.y1 - geometry.card.y0
        assert geometry.card.y0 == (400 - total) // 2


class TestBeautify:
    """Test the full composition"""

    def test_output_size_for_every_variant(self, photo):
        """Test the canvas size only depends on source size and padding"""
        variants = itertools.product(list(FrameStyle), [0, 15, -90], [0.5, 1.0, 2.0])
        for frame, rotation, scale in variants:
            options = BeautifyOptions(
                padding_x=20,
                padding_y=20,
                browser_frame=frame,
                rotation=rotation,
                scale=scale,
            )
            assert beautify(photo, options).size == (140, 90), (frame, rotation, scale)

    @pytest.mark.parametrize("background", ["solid", "gradient", "mesh"])
    def test_output_size_for_backgrounds(self, photo, background):
        """Test every background mode yields the padded size"""
        options = BeautifyOptions(padding_x=7, padding_y=0, background={"type": background})
        assert beautify(photo, options).size == (114, 50)

    def test_identity_composition(self, photo):
        """Test no padding, radius, shadow or frame reproduces the source"""
        options = solid_options(padding_x=0, padding_y=0, border_radius=0)
        result = beautify(photo, options)
        assert result.pixels == photo.pixels

    def test_background_and_image_placement(self, photo):
        """Test the padding shows the background and the center shows the image"""
        result = beautify(photo, solid_options()).as_array()

        assert result[0, 0].tolist() == [0x10, 0x20, 0x30, 255]
        assert result[-1, -1].tolist() == [0x10, 0x20, 0x30, 255]
        assert result[45, 70].tolist() == photo.as_array()[25, 50].tolist()

    def test_rounded_corner_shows_background(self, photo):
        """Test the image corner is clipped by the border radius"""
        result = beautify(photo, solid_options(border_radius=16)).as_array()
        assert result[20, 20].tolist() == [0x10, 0x20, 0x30, 255]

    def test_shadow_darkens_below_card(self, photo):
        """Test a positive y offset casts the shadow under the card"""
        plain = beautify(photo, solid_options(padding_y=40)).as_array()
        shaded = beautify(
            photo,
            solid_options(padding_y=40, shadow_color="#000000cc", shadow_blur=4, shadow_offset_y=20),
        ).as_array()

        below = (100, 70)
        assert shaded[below][:3].sum() < plain[below][:3].sum()
        # The shadow never covers the opaque card itself
        assert shaded[65, 70].tolist() == plain[65, 70].tolist()

    def test_inset_shrinks_image(self, photo):
        """Test inset draws a smaller image but keeps the canvas size"""
        result = beautify(photo, solid_options(inset=50, border_radius=0))
        array = result.as_array()

        assert result.size == (140, 90)
        # 50x25 image centered in 140x90: padding area around it is background
        assert array[30, 40].tolist() == [0x10, 0x20, 0x30, 255]
        assert array[45, 70, 2] == 200

    def test_rotation_moves_corners(self, photo):
        """Test a quarter turn exposes background where the image was"""
        result = beautify(photo, solid_options(rotation=90, border_radius=0)).as_array()
        # Rotated 100x50 becomes 50x100 around the center, leaving x=25 empty
        assert result[45, 25].tolist() == [0x10, 0x20, 0x30, 255]

    def test_transparent_source_keeps_background(self):
        """Test a fully transparent image leaves the background visible"""
        raster = Raster.blank(30, 30, (255, 255, 255, 0))
        result = beautify(raster, solid_options()).as_array()
        assert (result == [0x10, 0x20, 0x30, 255]).all()

    def test_noise_seed_is_reproducible(self, photo):
        """Test the same seed yields identical grain"""
        first = beautify(photo, solid_options(noise=True, noise_seed=42))
        second = beautify(photo, solid_options(noise=True, noise_seed=42))
        other = beautify(photo, solid_options(noise=True, noise_seed=43))

        assert first.pixels == second.pixels
        assert first.pixels != other.pixels

    def test_frames_draw_chrome(self, photo):
        """Test a browser frame paints a header above the image"""
        plain = beautify(photo, solid_options(padding_y=40)).as_array()
        framed = beautify(photo, solid_options(padding_y=40, browser_frame="safari")).as_array()
        # Header spans y 20..60 after centering card (90 tall) in 130
        assert framed[30, 70].tolist() != plain[30, 70].tolist()

    def test_source_not_modified(self, photo):
        """Test beautify leaves its input untouched"""
        before = bytes(photo.pixels)
        beautify(photo, solid_options(noise=True, rotation=10))
        assert bytes(photo.pixels) == before
