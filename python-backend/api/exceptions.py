"""
Exception handling for the Image Studio API.

Imaging errors carry their own HTTP status; this module turns them into
JSON responses and wraps endpoints so unexpected failures surface as 500s
with a log entry.
"""

import functools
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.exceptions import ImagingError

logger = logging.getLogger(__name__)


def safe_endpoint(func):
    """
    Decorator for route handlers.

    HTTPException, RequestValidationError and ImagingError pass through to
    their handlers; any other exception is logged with a traceback and
    reported as a 500.
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except (HTTPException, RequestValidationError, ImagingError):
            raise
        except Exception as e:
            logger.error(f"Unhandled error in {func.__name__}: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail=f"Internal server error: {e}") from e

    return wrapper


async def imaging_error_handler(request: Request, exc: ImagingError) -> JSONResponse:
    """Map an ImagingError to its status code and {"error", "detail"} body."""
    if exc.status_code >= 500:
        logger.error(f"{exc.error} on {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.error} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "http_error", "detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers on the application."""
    app.add_exception_handler(ImagingError, imaging_error_handler)
    app.add_exception_handler(HTTPException, http_error_handler)
