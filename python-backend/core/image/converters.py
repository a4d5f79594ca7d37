"""
Image format conversion utilities.

This is the decode/encode boundary of the imaging pipeline:
- Encoded bytes (PNG, JPEG, WebP, ...) to Raster via Pillow
- Raster to encoded bytes
- PIL Image <-> Raster
- Base64 helpers for JSON responses
"""

import base64
import binascii
import io
import logging
from typing import Optional, Union

from PIL import Image, ImageOps, UnidentifiedImageError, features

from core.constants import ErrorMessages, ImageConstants
from core.enums import ExportFormat
from core.exceptions import ContextUnavailable, DecodeError, EncodeError, InvalidInput
from core.raster import Raster

logger = logging.getLogger(__name__)

# Pillow feature name for formats that depend on an optional codec
_CODEC_FEATURES = {ExportFormat.WEBP: "webp", ExportFormat.JPEG: "jpg"}


class ImageConverters:
    """Utilities for converting between encoded images, PIL Images and Rasters."""

    @staticmethod
    def raster_to_pil(raster: Raster) -> Image.Image:
        """
        Convert Raster to PIL Image.

        Args:
            raster: Source raster

        Returns:
            PIL Image in RGBA mode (owns a copy of the pixels)
        """
        return Image.frombytes("RGBA", raster.size, bytes(raster.pixels))

    @staticmethod
    def pil_to_raster(image: Image.Image) -> Raster:
        """
        Convert PIL Image to Raster.

        Args:
            image: PIL Image in any mode

        Returns:
            Raster with RGBA pixels
        """
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return Raster(image.width, image.height, bytearray(image.tobytes()))

    @staticmethod
    def decode(data: bytes, max_dimension: Optional[int] = None) -> Raster:
        """
        Decode encoded image bytes into a Raster.

        Args:
            data: Image file contents
            max_dimension: Optional limit on width and height

        Returns:
            Raster in RGBA, EXIF orientation applied

        Raises:
            DecodeError: If the bytes are not a readable image
            InvalidInput: If the image exceeds max_dimension
        """
        if not data:
            raise DecodeError(ErrorMessages.EMPTY_UPLOAD)

        try:
            image = Image.open(io.BytesIO(data))
            # Check the header size before decoding the full pixel data
            if max_dimension and max(image.size) > max_dimension:
                raise InvalidInput(
                    ErrorMessages.IMAGE_TOO_LARGE.format(
                        width=image.width, height=image.height, max_dimension=max_dimension
                    )
                )
            image = ImageOps.exif_transpose(image)
            image.load()
        except InvalidInput:
            raise
        except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as e:
            logger.error(f"Failed to decode image: {e}")
            raise DecodeError(ErrorMessages.DECODE_FAILED.format(error=e)) from e

        return ImageConverters.pil_to_raster(image)

    @staticmethod
    def detect_format(data: bytes) -> Optional[ExportFormat]:
        """
        Identify the container format of encoded bytes from the header.

        Returns:
            The matching ExportFormat, or None for unreadable data or formats
            this service cannot write (GIF, BMP, ...)
        """
        try:
            with Image.open(io.BytesIO(data)) as image:
                name = (image.format or "").lower()
        except (UnidentifiedImageError, OSError, ValueError):
            return None

        try:
            return ExportFormat(name)
        except ValueError:
            return None

    @staticmethod
    def encode(
        raster: Raster,
        format: Union[ExportFormat, str] = ExportFormat.PNG,
        quality: float = ImageConstants.DEFAULT_EXPORT_QUALITY,
    ) -> bytes:
        """
        Encode a Raster.

        Args:
            raster: Raster to encode
            format: png, jpeg or webp
            quality: Encoder quality in [0, 1] (ignored for PNG)

        Returns:
            Encoded image bytes

        Raises:
            ContextUnavailable: If this Pillow build cannot write the format
            EncodeError: If encoding fails
        """
        try:
            export_format = ExportFormat(format)
        except ValueError:
            raise InvalidInput(ErrorMessages.INVALID_PARAMETER.format(param="format", value=format))

        if not 0.0 <= quality <= 1.0:
            raise InvalidInput(ErrorMessages.INVALID_PARAMETER.format(param="quality", value=quality))

        feature = _CODEC_FEATURES.get(export_format)
        if feature and not features.check(feature):
            raise ContextUnavailable(ErrorMessages.UNSUPPORTED_FORMAT.format(format=export_format.value))

        image = ImageConverters.raster_to_pil(raster)
        save_kwargs = {"format": export_format.pil_format}

        if export_format == ExportFormat.JPEG:
            # JPEG has no alpha channel
            image = image.convert("RGB")
            save_kwargs["quality"] = ImageConverters.encoder_quality(quality)
            save_kwargs["optimize"] = True
        elif export_format == ExportFormat.WEBP:
            save_kwargs["quality"] = ImageConverters.encoder_quality(quality)
        else:
            save_kwargs["optimize"] = True

        try:
            buffer = io.BytesIO()
            image.save(buffer, **save_kwargs)
            return buffer.getvalue()
        except (OSError, ValueError, KeyError) as e:
            logger.error(f"Failed to encode image as {export_format.value}: {e}")
            raise EncodeError(
                ErrorMessages.ENCODE_FAILED.format(format=export_format.value, error=e)
            ) from e

    @staticmethod
    def encoder_quality(quality: float) -> int:
        """Map a [0, 1] quality to Pillow's 1-100 scale."""
        return int(
            min(
                ImageConstants.MAX_ENCODER_QUALITY,
                max(ImageConstants.MIN_ENCODER_QUALITY, round(quality * 100)),
            )
        )

    @staticmethod
    def to_base64(data: bytes) -> str:
        """Base64-encode image bytes for a JSON payload."""
        return base64.b64encode(data).decode("utf-8")

    @staticmethod
    def from_base64(base64_string: str, max_dimension: Optional[int] = None) -> Raster:
        """
        Decode a base64 image string (data URLs accepted) into a Raster.
        """
        if base64_string.startswith("data:"):
            base64_string = base64_string.split(",", 1)[-1]
        try:
            data = base64.b64decode(base64_string, validate=True)
        except (binascii.Error, ValueError) as e:
            logger.error(f"Failed to decode base64 image: {e}")
            raise DecodeError(ErrorMessages.DECODE_FAILED.format(error=e)) from e
        return ImageConverters.decode(data, max_dimension=max_dimension)
