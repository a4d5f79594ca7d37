"""
Configuration for the Image Studio backend.

Settings are read from environment variables prefixed with IMAGE_STUDIO_
(a .env file in the working directory is loaded first). Nested sections
use a double underscore, e.g. IMAGE_STUDIO_API__PORT=9000 or
IMAGE_STUDIO_SYSTEM__LOG_LEVEL=DEBUG.
"""

import os
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from core.constants import ImageConstants, PaletteDefaults
from core.enums import ExportFormat

ENV_PREFIX = "IMAGE_STUDIO_"
NESTED_DELIMITER = "__"


class SystemSettings(BaseModel):
    """Process-level settings"""

    log_level: str = "INFO"
    debug: bool = False

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level


class APISettings(BaseModel):
    """HTTP server settings"""

    host: str = "0.0.0.0"
    port: int = Field(8000, ge=1, le=65535)
    cors_enabled: bool = True
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, v):
        # Environment values arrive as "http://a,http://b"
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v


class ImagingSettings(BaseModel):
    """Limits and defaults of the imaging tools"""

    max_upload_mb: float = Field(ImageConstants.DEFAULT_MAX_UPLOAD_MB, gt=0)
    max_dimension: int = Field(ImageConstants.DEFAULT_MAX_DIMENSION, gt=0)
    default_palette_size: int = Field(
        PaletteDefaults.DEFAULT_COLOR_COUNT,
        ge=PaletteDefaults.MIN_COLOR_COUNT,
        le=PaletteDefaults.MAX_COLOR_COUNT,
    )
    default_export_format: ExportFormat = ExportFormat(ImageConstants.DEFAULT_EXPORT_FORMAT)
    default_export_quality: float = Field(ImageConstants.DEFAULT_EXPORT_QUALITY, ge=0, le=1)


class HistorySettings(BaseModel):
    """Operation log settings"""

    buffer_size: int = Field(100, ge=1)


class Settings(BaseModel):
    """Application settings"""

    environment: str = "development"
    system: SystemSettings = Field(default_factory=SystemSettings)
    api: APISettings = Field(default_factory=APISettings)
    imaging: ImagingSettings = Field(default_factory=ImagingSettings)
    history: HistorySettings = Field(default_factory=HistorySettings)

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-compatible dict, stored in app.state.config."""
        return self.model_dump(mode="json")


def settings_from_env(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """
    Collect IMAGE_STUDIO_* variables into a nested dict.

    Example:
        >>> settings_from_env({"IMAGE_STUDIO_API__PORT": "9000"})
        {'api': {'port': '9000'}}
    """
    environ = os.environ if environ is None else environ
    values: Dict[str, Any] = {}

    for key, value in environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        path = key[len(ENV_PREFIX) :].lower().split(NESTED_DELIMITER)
        section = values
        for part in path[:-1]:
            section = section.setdefault(part, {})
            if not isinstance(section, dict):
                break
        else:
            section[path[-1]] = value

    return values


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    load_dotenv()
    return Settings.model_validate(settings_from_env())
