"""
Imaging algorithms.

This package provides the pixel-level operations behind each tool:
- quantizer: k-means color palette extraction
- resampler: crop/zoom and arbitrary-scale resampling
- sharpen: four-neighbor sharpen filter
- backgrounds, frames, compositor: the beautify pipeline
- poster: palette poster layout
"""

from imaging.compositor import beautify
from imaging.poster import generate_poster
from imaging.quantizer import describe_palette, extract_palette
from imaging.resampler import CropRect, compute_crop_rect, parse_aspect_ratio, upscale
from imaging.sharpen import sharpen

__all__ = [
    "beautify",
    "generate_poster",
    "describe_palette",
    "extract_palette",
    "CropRect",
    "compute_crop_rect",
    "parse_aspect_ratio",
    "upscale",
    "sharpen",
]
