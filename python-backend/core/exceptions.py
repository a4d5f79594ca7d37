"""
Imaging error taxonomy.

Every failure raised by the imaging pipeline derives from ImagingError so the
API layer can translate it to an HTTP response in one place.
"""

from typing import Any, Dict, Optional


class ImagingError(Exception):
    """Base class for all imaging pipeline errors."""

    status_code = 500
    error = "imaging_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for JSON error responses."""
        content: Dict[str, Any] = {"error": self.error, "detail": self.message}
        if self.details:
            content["details"] = self.details
        return content


class InvalidInput(ImagingError):
    """Zero-area raster, out-of-range parameter or malformed option combination."""

    status_code = 400
    error = "invalid_input"


class InvalidDimension(InvalidInput):
    """Non-positive scale factor or a target size that rounds to zero."""

    error = "invalid_dimension"


class ContextUnavailable(ImagingError):
    """The rendering or codec surface cannot be acquired (missing codec, font)."""

    status_code = 503
    error = "context_unavailable"


class DecodeError(ImagingError):
    """The decode collaborator could not produce a raster from the given bytes."""

    status_code = 400
    error = "decode_error"


class EncodeError(ImagingError):
    """The encode collaborator could not produce bytes for the given raster."""

    status_code = 500
    error = "encode_error"
