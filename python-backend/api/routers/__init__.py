"""
API Routers for Image Studio
"""

from . import beautify, history, image, palette, poster, system, upscale

__all__ = ["palette", "upscale", "beautify", "poster", "image", "history", "system"]
