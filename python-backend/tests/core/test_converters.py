"""
Tests for the decode/encode boundary
"""

import io

import pytest
from PIL import Image

from core.enums import ExportFormat
from core.exceptions import DecodeError, InvalidInput
from core.image.converters import ImageConverters
from core.raster import Raster


class TestDecode:
    """Test decoding uploads into rasters"""

    def test_decode_png(self, test_image_bytes, gradient_raster):
        """Test PNG bytes decode to the original pixels"""
        raster = ImageConverters.decode(test_image_bytes)
        assert raster.size == gradient_raster.size
        assert raster.pixels == gradient_raster.pixels

    def test_decode_rgb_jpeg_adds_alpha(self):
        """Test images without alpha come back fully opaque"""
        buffer = io.BytesIO()
        Image.new("RGB", (8, 6), (200, 10, 10)).save(buffer, format="JPEG")
        raster = ImageConverters.decode(buffer.getvalue())

        assert raster.size == (8, 6)
        assert (raster.as_array()[..., 3] == 255).all()

    def test_decode_empty(self):
        """Test empty uploads raise DecodeError"""
        with pytest.raises(DecodeError):
            ImageConverters.decode(b"")

    def test_decode_garbage(self):
        """Test non-image bytes raise DecodeError"""
        with pytest.raises(DecodeError):
            ImageConverters.decode(b"definitely not an image")

    def test_decode_respects_max_dimension(self, test_image_bytes):
        """Test images wider than the limit are refused"""
        with pytest.raises(InvalidInput):
            ImageConverters.decode(test_image_bytes, max_dimension=32)

    def test_detect_format(self, test_image_bytes):
        """Test the container format is read from the header"""
        assert ImageConverters.detect_format(test_image_bytes) == ExportFormat.PNG
        assert ImageConverters.detect_format(b"nope") is None


class TestEncode:
    """Test encoding rasters"""

    def test_png_keeps_alpha(self):
        """Test PNG output preserves transparency"""
        raster = Raster.blank(4, 4, (10, 20, 30, 100))
        data = ImageConverters.encode(raster, ExportFormat.PNG)

        image = Image.open(io.BytesIO(data))
        assert image.format == "PNG"
        assert image.convert("RGBA").getpixel((0, 0)) == (10, 20, 30, 100)

    def test_jpeg_drops_alpha(self):
        """Test JPEG output is RGB"""
        raster = Raster.blank(4, 4, (10, 20, 30, 100))
        data = ImageConverters.encode(raster, "jpeg", quality=0.5)

        image = Image.open(io.BytesIO(data))
        assert image.format == "JPEG"
        assert image.mode == "RGB"

    def test_invalid_quality(self):
        """Test quality outside [0, 1] is rejected"""
        with pytest.raises(InvalidInput):
            ImageConverters.encode(Raster.blank(2, 2), ExportFormat.PNG, quality=1.5)

    def test_invalid_format(self):
        """Test unknown formats are rejected"""
        with pytest.raises(InvalidInput):
            ImageConverters.encode(Raster.blank(2, 2), "tiff")

    @pytest.mark.parametrize("quality,expected", [(0.0, 1), (0.5, 50), (0.92, 92), (1.0, 100)])
    def test_encoder_quality(self, quality, expected):
        """Test [0, 1] quality maps onto Pillow's scale"""
        assert ImageConverters.encoder_quality(quality) == expected


class TestBase64:
    """Test base64 helpers"""

    def test_data_url_accepted(self, test_image_bytes):
        """Test data: URLs decode like plain base64"""
        encoded = ImageConverters.to_base64(test_image_bytes)
        raster = ImageConverters.from_base64(f"data:image/png;base64,{encoded}")
        assert raster.size == (64, 48)

    def test_invalid_base64(self):
        """Test malformed base64 raises DecodeError"""
        with pytest.raises(DecodeError):
            ImageConverters.from_base64("%%%not-base64%%%")
