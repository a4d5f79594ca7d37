"""
Imaging Service - Orchestration of the imaging tools.

Every operation follows the same path: decode the upload, run one imaging
algorithm, encode the result and record the outcome in the operation log.
The algorithms themselves live in the imaging package and never see bytes.
"""

import logging
from typing import Callable, List, Optional, Tuple

from core.constants import ErrorMessages, ImageConstants, PaletteDefaults, PosterDefaults
from core.enums import ExportFormat, PaletteStyle
from core.exceptions import ImagingError, InvalidInput
from core.image.converters import ImageConverters
from core.image.processors import resize_to_fit, rotate_quarter
from core.operation_log import OperationLog, OperationStatus
from core.raster import Raster
from core.utils.decorators import timer
from imaging.compositor import beautify
from imaging.poster import generate_poster
from imaging.quantizer import describe_palette, extract_palette
from imaging.resampler import compute_crop_rect, upscale
from schemas import (
    BeautifyOptions,
    BeautifyResponse,
    CompressResponse,
    ConvertResponse,
    CropInfo,
    ImageResult,
    PaletteColor,
    PaletteResponse,
    PosterResponse,
    RotateResponse,
    Size,
    UpscaleParams,
    UpscaleResponse,
)

logger = logging.getLogger(__name__)


def _size(raster: Raster) -> Size:
    return Size(width=raster.width, height=raster.height)


class ImagingService:
    """
    Service for the imaging tools.

    Holds the upload limits and the operation log; each call is otherwise
    independent and stateless.
    """

    def __init__(
        self,
        operation_log: OperationLog,
        max_upload_mb: float = ImageConstants.DEFAULT_MAX_UPLOAD_MB,
        max_dimension: int = ImageConstants.DEFAULT_MAX_DIMENSION,
    ):
        """
        Initialize imaging service.

        Args:
            operation_log: Log receiving one record per operation
            max_upload_mb: Largest accepted upload
            max_dimension: Largest accepted width or height
        """
        self.operation_log = operation_log
        self.max_upload_mb = max_upload_mb
        self.max_dimension = max_dimension

    def decode_upload(self, data: bytes) -> Raster:
        """Check the upload size limit and decode."""
        size_mb = len(data) / (1024 * 1024)
        if size_mb > self.max_upload_mb:
            raise InvalidInput(
                ErrorMessages.UPLOAD_TOO_LARGE.format(size_mb=size_mb, max_mb=self.max_upload_mb)
            )
        return ImageConverters.decode(data, max_dimension=self.max_dimension)

    @staticmethod
    def encode_result(raster: Raster, export_format: ExportFormat, quality: float) -> ImageResult:
        """Encode a raster into the JSON image payload."""
        export_format = ExportFormat(export_format)
        encoded = ImageConverters.encode(raster, export_format, quality)
        return ImageResult(
            image_base64=ImageConverters.to_base64(encoded),
            format=export_format,
            mime_type=export_format.mime_type,
            size=_size(raster),
            file_size=len(encoded),
        )

    def _execute(self, operation: str, data: bytes, action: Callable[[Raster], Tuple]) -> Tuple:
        """
        Template method for all operations.

        Args:
            operation: Operation name for logs and the operation log
            data: Uploaded image bytes
            action: Receives the decoded raster and returns a tuple whose
                first item is the output raster (or None)

        Returns:
            Tuple of (source_raster, action_result, processing_time_ms)
        """
        source: Optional[Raster] = None
        try:
            with timer() as t:
                source = self.decode_upload(data)
                result = action(source)
        except ImagingError as e:
            self.operation_log.record(
                operation,
                processing_time_ms=t["ms"],
                status=OperationStatus.ERROR,
                source_size={"width": source.width, "height": source.height} if source else None,
                message=e.message,
            )
            logger.warning(f"{operation} failed: {e.message}")
            raise

        # Read processing time AFTER with block (timer updates in finally)
        processing_time_ms = t["ms"]

        output = result[0]
        self.operation_log.record(
            operation,
            processing_time_ms=processing_time_ms,
            source_size={"width": source.width, "height": source.height},
            output_size={"width": output.width, "height": output.height} if output is not None else None,
        )
        logger.info(
            f"{operation}: {source.width}x{source.height} processed in {processing_time_ms} ms"
        )
        return source, result, processing_time_ms

    def extract_palette(
        self,
        data: bytes,
        color_count: int = PaletteDefaults.DEFAULT_COLOR_COUNT,
        style: PaletteStyle = PaletteStyle.ALL,
    ) -> PaletteResponse:
        """Extract a color palette from an uploaded image."""

        def action(raster: Raster):
            return (None, extract_palette(raster, color_count, style))

        source, (_, palette), elapsed = self._execute("palette", data, action)

        return PaletteResponse(
            palette=palette,
            colors=[PaletteColor(**entry) for entry in describe_palette(palette)],
            style=PaletteStyle(style),
            requested_count=color_count,
            source_size=_size(source),
            processing_time_ms=elapsed,
        )

    def upscale(
        self,
        data: bytes,
        params: UpscaleParams,
        export_format: ExportFormat = ExportFormat.PNG,
        quality: float = ImageConstants.DEFAULT_EXPORT_QUALITY,
    ) -> UpscaleResponse:
        """Crop, resample and sharpen an uploaded image."""
        focus = (params.focus_x, params.focus_y)

        def action(raster: Raster):
            crop = compute_crop_rect(
                raster.width, raster.height, params.aspect_ratio, focus, params.crop_size
            )
            output = upscale(
                raster,
                scale_factor=params.scale_factor,
                method=params.method,
                target_aspect_ratio=params.aspect_ratio,
                crop_focus=focus,
                crop_size=params.crop_size,
                sharpen_amount=params.sharpen,
            )
            return output, crop, self.encode_result(output, export_format, quality)

        source, (_, crop, result), elapsed = self._execute("upscale", data, action)

        return UpscaleResponse(
            result=result,
            source_size=_size(source),
            processing_time_ms=elapsed,
            crop=CropInfo(**crop.to_dict()),
            method=params.method,
            scale_factor=params.scale_factor,
        )

    def beautify(self, data: bytes, options: BeautifyOptions) -> BeautifyResponse:
        """Compose an uploaded image onto a styled canvas."""

        def action(raster: Raster):
            output = beautify(raster, options)
            return output, self.encode_result(output, options.export_format, options.export_quality)

        source, (_, result), elapsed = self._execute("beautify", data, action)

        return BeautifyResponse(
            result=result,
            source_size=_size(source),
            processing_time_ms=elapsed,
            options=options,
        )

    def poster(
        self,
        data: bytes,
        palette: Optional[List[str]] = None,
        color_count: int = PaletteDefaults.DEFAULT_COLOR_COUNT,
        caption: Optional[str] = None,
        export_format: ExportFormat = ExportFormat.PNG,
        quality: float = ImageConstants.DEFAULT_EXPORT_QUALITY,
    ) -> PosterResponse:
        """
        Render the palette poster.

        Args:
            data: Uploaded image bytes
            palette: Hex colors to show; extracted from the image when None
            color_count: Palette size used for extraction
            caption: Footer caption (None for the default caption)
            export_format: Output format
            quality: Encoder quality in [0, 1]
        """

        def action(raster: Raster):
            colors = palette if palette is not None else extract_palette(raster, color_count)
            output = generate_poster(raster, colors, caption)
            return output, colors, self.encode_result(output, export_format, quality)

        source, (_, colors, result), elapsed = self._execute("poster", data, action)
        if caption is None:
            caption = PosterDefaults.CAPTION_TEMPLATE.format(count=len(colors))

        return PosterResponse(
            result=result,
            source_size=_size(source),
            processing_time_ms=elapsed,
            palette=colors,
            caption=caption,
        )

    def compress(
        self,
        data: bytes,
        quality: float = ImageConstants.DEFAULT_COMPRESS_QUALITY,
        export_format: ExportFormat = ExportFormat(ImageConstants.DEFAULT_COMPRESS_FORMAT),
        max_width: Optional[int] = None,
        max_height: Optional[int] = None,
    ) -> CompressResponse:
        """Shrink to fit the given bounds and re-encode."""

        def action(raster: Raster):
            output = resize_to_fit(raster, max_width, max_height)
            return output, self.encode_result(output, export_format, quality)

        source, (_, result), elapsed = self._execute("compress", data, action)

        return CompressResponse(
            result=result,
            source_size=_size(source),
            processing_time_ms=elapsed,
            original_file_size=len(data),
            compression_ratio=round(result.file_size / len(data), 4),
            max_width=max_width,
            max_height=max_height,
        )

    def rotate(self, data: bytes, degrees: int) -> RotateResponse:
        """Rotate by a multiple of 90 degrees, keeping the upload's format."""
        export_format = ImageConverters.detect_format(data) or ExportFormat.PNG

        def action(raster: Raster):
            output = rotate_quarter(raster, degrees)
            return output, self.encode_result(output, export_format, ImageConstants.DEFAULT_EXPORT_QUALITY)

        source, (_, result), elapsed = self._execute("rotate", data, action)

        return RotateResponse(
            result=result,
            source_size=_size(source),
            processing_time_ms=elapsed,
            degrees=degrees,
        )

    def convert(
        self,
        data: bytes,
        export_format: ExportFormat,
        quality: float = ImageConstants.DEFAULT_EXPORT_QUALITY,
    ) -> ConvertResponse:
        """Re-encode into another format."""
        original = ImageConverters.detect_format(data)

        def action(raster: Raster):
            return raster, self.encode_result(raster, export_format, quality)

        source, (_, result), elapsed = self._execute("convert", data, action)

        return ConvertResponse(
            result=result,
            source_size=_size(source),
            processing_time_ms=elapsed,
            original_format=original.value if original else None,
        )
