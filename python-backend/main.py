"""
Image Studio - Main FastAPI Application
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Add parent directory to path
sys.path.append(str(Path(__file__).parent))

from api.exceptions import register_exception_handlers  # noqa: E402

# Import routers  # noqa: E402
from api.routers import beautify, history, image, palette, poster, system, upscale  # noqa: E402

# Import configuration  # noqa: E402
from config import get_settings  # noqa: E402

# Import core components  # noqa: E402
from core.operation_log import OperationLog  # noqa: E402

# Get configuration
settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.system.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Suppress noisy third-party loggers
logging.getLogger("watchfiles").setLevel(logging.WARNING)
logging.getLogger("PIL").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle"""
    logger.info("Starting Image Studio server...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Debug mode: {settings.system.debug}")

    app.state.operation_log = OperationLog(max_size=settings.history.buffer_size)
    app.state.config = settings.to_dict()
    app.state.debug = settings.system.debug

    yield

    logger.info("Server shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="Image Studio",
    description="Palette extraction, upscaling, beautify and poster tools for raster images",
    version="1.0.0",
    lifespan=lifespan,
)

if settings.api.cors_enabled:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Register exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(palette.router, prefix="/api/palette", tags=["Palette"])
app.include_router(upscale.router, prefix="/api/upscale", tags=["Upscale"])
app.include_router(beautify.router, prefix="/api/beautify", tags=["Beautify"])
app.include_router(poster.router, prefix="/api/poster", tags=["Poster"])
app.include_router(image.router, prefix="/api/image", tags=["Image"])
app.include_router(history.router, prefix="/api/history", tags=["History"])
app.include_router(system.router, prefix="/api/system", tags=["System"])


# Root endpoint
@app.get("/")
async def root():
    return {
        "name": "Image Studio",
        "status": "running",
        "version": "1.0.0",
        "endpoints": {
            "palette": "/api/palette",
            "upscale": "/api/upscale",
            "beautify": "/api/beautify",
            "poster": "/api/poster",
            "image": "/api/image",
            "history": "/api/history",
            "system": "/api/system",
            "docs": "/docs",
        },
    }


# Health check endpoint
@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "services": {
            "operation_log": getattr(app.state, "operation_log", None) is not None,
        },
    }


# Error handler
@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": "internal_error", "detail": f"Internal server error: {str(exc)}"},
    )


if __name__ == "__main__":
    reload_excludes = (
        ["*.log", "*.pyc", "__pycache__", ".git", ".venv", "venv"]
        if settings.system.debug
        else None
    )

    server_config = uvicorn.Config(
        "main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.system.debug,
        reload_excludes=reload_excludes,
        log_level=settings.system.log_level.lower(),
    )

    try:
        uvicorn.Server(server_config).run()
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, shutting down...")
    finally:
        logger.info("Server exiting...")
