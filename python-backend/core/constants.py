"""
Constants and configuration values for the Image Studio backend.
Centralizes all magic numbers used by the imaging pipeline.
"""


# Image Management Constants
class ImageConstants:
    """Constants related to decoding, encoding and upload limits."""

    # Upload limits
    DEFAULT_MAX_UPLOAD_MB = 25
    DEFAULT_MAX_DIMENSION = 8192

    # Alpha threshold below which a pixel counts as transparent
    OPAQUE_ALPHA_THRESHOLD = 128

    # Export
    DEFAULT_EXPORT_FORMAT = "png"
    DEFAULT_EXPORT_QUALITY = 0.92
    MIN_ENCODER_QUALITY = 1
    MAX_ENCODER_QUALITY = 100

    # Compression tool
    DEFAULT_COMPRESS_QUALITY = 0.8
    DEFAULT_COMPRESS_FORMAT = "jpeg"


# Palette Extraction Constants
class PaletteDefaults:
    """Default parameters for k-means palette extraction."""

    DEFAULT_COLOR_COUNT = 5
    MIN_COLOR_COUNT = 1
    MAX_COLOR_COUNT = 16

    # Working resolution (pixels are down-sampled to at most this size)
    WORKING_WIDTH = 100
    WORKING_HEIGHT = 100

    # Unfiltered re-scan budget when a style filter leaves too few samples
    FALLBACK_SAMPLE_BUDGET = 100

    # k-means loop
    MAX_ITERATIONS = 10
    CONVERGENCE_EPSILON = 0.5

    # HSL style thresholds (percent)
    VIBRANT_MIN_SATURATION = 40
    LIGHT_MIN_LIGHTNESS = 60
    DARK_MAX_LIGHTNESS = 40


# Upscale Constants
class UpscaleDefaults:
    """Default parameters for crop/zoom resampling."""

    DEFAULT_SCALE_FACTOR = 2.0
    MAX_SCALE_FACTOR = 8.0
    DEFAULT_METHOD = "bicubic"
    DEFAULT_FOCUS = 50.0
    DEFAULT_CROP_SIZE = 100.0
    DEFAULT_SHARPEN = 0.0


# Beautify Constants
class BeautifyDefaults:
    """Default parameters and fixed geometry for the compositor."""

    DEFAULT_PADDING = 64
    DEFAULT_BORDER_RADIUS = 12
    DEFAULT_SHADOW_BLUR = 40
    DEFAULT_SHADOW_COLOR = "#00000066"
    DEFAULT_SHADOW_OFFSET_X = 0
    DEFAULT_SHADOW_OFFSET_Y = 10
    DEFAULT_BACKGROUND_COLOR = "#6366f1"
    DEFAULT_GRADIENT_ANGLE = 135.0
    MAX_GRADIENT_STOPS = 5

    # Mesh background
    MESH_BLOB_OPACITY = 0.5
    MESH_BLOB_RADIUS_RATIO = 0.75

    # Noise overlay
    NOISE_SPECK_COUNT = 1000
    NOISE_OPACITY = 0.08

    # Antialiasing factors for rounded masks and chrome drawing
    MASK_SUPERSAMPLE = 4
    CHROME_SUPERSAMPLE = 2
    # Supersampled buffers above this many pixels use a lower factor
    SUPERSAMPLE_PIXEL_BUDGET = 16_000_000

    # Frame geometry
    HEADER_HEIGHT = 40
    TRAFFIC_LIGHT_RADIUS = 6
    TRAFFIC_LIGHT_SPACING = 20
    TRAFFIC_LIGHT_COLORS = ("#ff5f57", "#febc2e", "#28c840")


# Poster Constants
class PosterDefaults:
    """Fixed layout of the shareable palette poster."""

    WIDTH = 1080
    HEIGHT = 1350
    IMAGE_ZONE_RATIO = 0.7
    BACKGROUND = (255, 255, 255, 255)

    MARGIN = 40
    SWATCH_GAP = 16
    SWATCH_RADIUS = 16
    SWATCH_HEIGHT = 250
    MAX_SWATCHES = 16

    HEX_FONT_SIZE = 30
    CAPTION_FONT_SIZE = 28
    CAPTION_COLOR = (55, 65, 81, 255)
    CAPTION_TEMPLATE = "Color Palette · {count} colors"

    # WCAG AA threshold for normal text
    MIN_CONTRAST_RATIO = 4.5


# Error Messages
class ErrorMessages:
    """Standard error messages."""

    DECODE_FAILED = "Could not decode image: {error}"
    ENCODE_FAILED = "Could not encode image as {format}: {error}"
    UNSUPPORTED_FORMAT = "Image format {format} is not supported by this build"
    IMAGE_TOO_LARGE = "Image {width}x{height} exceeds the maximum dimension {max_dimension}"
    UPLOAD_TOO_LARGE = "Upload of {size_mb:.1f} MB exceeds the limit of {max_mb} MB"
    EMPTY_UPLOAD = "Uploaded file is empty"
    INVALID_PARAMETER = "Invalid parameter {param}: {value}"
    INVALID_HEX = "Invalid hex color: {value}"
    FONT_UNAVAILABLE = "Font rendering is unavailable: {error}"
