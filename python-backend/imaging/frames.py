"""
Frame chrome recipes for the beautify compositor.

Each FrameStyle maps to one FrameRecipe: fixed insets around the image
(header height or device bezel) plus a paint routine that draws the chrome
from an already computed FrameGeometry. New styles are added as new
recipes in FRAME_RECIPES.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from PIL import ImageDraw

from core.constants import BeautifyDefaults
from core.enums import FrameStyle, FrameTheme

Color = Tuple[int, int, int, int]


@dataclass(frozen=True)
class Box:
    """Axis-aligned rectangle (x0, y0) inclusive to (x1, y1) exclusive."""

    x0: float
    y0: float
    x1: float
    y1: float

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def height(self) -> float:
        return self.y1 - self.y0

    @property
    def center(self) -> Tuple[float, float]:
        return ((self.x0 + self.x1) / 2.0, (self.y0 + self.y1) / 2.0)

    def scaled(self, factor: float, origin: Tuple[float, float] = (0.0, 0.0)) -> "Box":
        ox, oy = origin
        return Box(
            (self.x0 - ox) * factor,
            (self.y0 - oy) * factor,
            (self.x1 - ox) * factor,
            (self.y1 - oy) * factor,
        )

    def xy(self) -> Tuple[float, float, float, float]:
        """Coordinates for PIL drawing (inclusive bottom-right)."""
        return (self.x0, self.y0, self.x1 - 1, self.y1 - 1)


@dataclass(frozen=True)
class ChromeColors:
    """Theme colors for chrome."""

    header: Color
    pill: Color
    text: Color
    bezel: Color
    accent: Color


THEMES: Dict[FrameTheme, ChromeColors] = {
    FrameTheme.LIGHT: ChromeColors(
        header=(232, 232, 237, 255),
        pill=(255, 255, 255, 255),
        text=(110, 110, 115, 255),
        bezel=(24, 24, 27, 255),
        accent=(220, 214, 245, 255),
    ),
    FrameTheme.DARK: ChromeColors(
        header=(40, 40, 45, 255),
        pill=(60, 60, 66, 255),
        text=(170, 170, 178, 255),
        bezel=(10, 10, 12, 255),
        accent=(72, 60, 110, 255),
    ),
}


@dataclass(frozen=True)
class FrameGeometry:
    """
    Resolved frame layout in card-local pixels.

    Attributes:
        card: Silhouette bounds (header/bezel included, stand excluded)
        content: Area the image fills
        header: Header bar for browser styles, None otherwise
        radius: Silhouette corner radius
        content_radius: Image clip corner radius
        theme: Chrome colors
        stand: Area below the card reserved for a stand, None otherwise
    """

    card: Box
    content: Box
    header: Optional[Box]
    radius: float
    content_radius: float
    theme: ChromeColors
    stand: Optional[Box] = None

    def scaled(self, factor: float, origin: Tuple[float, float]) -> "FrameGeometry":
        return FrameGeometry(
            card=self.card.scaled(factor, origin),
            content=self.content.scaled(factor, origin),
            header=self.header.scaled(factor, origin) if self.header else None,
            radius=self.radius * factor,
            content_radius=self.content_radius * factor,
            theme=self.theme,
            stand=self.stand.scaled(factor, origin) if self.stand else None,
        )


Painter = Callable[[ImageDraw.ImageDraw, FrameGeometry], None]


def _rounded_rect(
    draw: ImageDraw.ImageDraw,
    xy: Tuple[float, float, float, float],
    radius: float,
    fill: Color,
    corners: Tuple[bool, bool, bool, bool] = (True, True, True, True),
) -> None:
    """Rounded rectangle with the radius clamped to the box; empty boxes are skipped."""
    x0, y0, x1, y1 = xy
    if x1 <= x0 or y1 <= y0:
        return
    radius = max(0.0, min(radius, (x1 - x0) / 2.0, (y1 - y0) / 2.0))
    draw.rounded_rectangle((x0, y0, x1, y1), radius=radius, fill=fill, corners=corners)


@dataclass(frozen=True)
class FrameRecipe:
    """
    Fixed visual recipe for one frame style.

    Attributes:
        insets: (left, top, right, bottom) chrome thickness around the image
        has_header: True when a header bar occupies the top inset
        min_radius: Lower bound for the silhouette corner radius
        below: Height reserved under the card (monitor stand)
        paint: Draws chrome clipped to the silhouette
        paint_overlay: Draws chrome after the image, without the silhouette clip
    """

    insets: Tuple[int, int, int, int] = (0, 0, 0, 0)
    has_header: bool = False
    min_radius: float = 0.0
    below: int = 0
    paint: Optional[Painter] = None
    paint_overlay: Optional[Painter] = field(default=None)

    def outer_radius(self, border_radius: float) -> float:
        return max(border_radius, self.min_radius)

    def content_radius(self, border_radius: float) -> float:
        if self.has_header:
            return border_radius
        bezel = min(self.insets)
        return max(0.0, self.outer_radius(border_radius) - bezel)


def _unit(geometry: FrameGeometry) -> float:
    """Pixels per logical pixel; geometry may be supersampled."""
    if geometry.header is not None:
        return geometry.header.height / BeautifyDefaults.HEADER_HEIGHT
    return 1.0


def _header_bar(draw: ImageDraw.ImageDraw, geometry: FrameGeometry, fill: Color) -> None:
    """Header bar rounded on its top two corners only, flush with the body."""
    _rounded_rect(
        draw,
        geometry.header.xy(),
        radius=geometry.radius,
        fill=fill,
        corners=(True, True, False, False),
    )


def _traffic_lights(draw: ImageDraw.ImageDraw, geometry: FrameGeometry) -> float:
    """Draw macOS window dots; returns the x coordinate right of the last dot."""
    unit = _unit(geometry)
    header = geometry.header
    r = BeautifyDefaults.TRAFFIC_LIGHT_RADIUS * unit
    spacing = BeautifyDefaults.TRAFFIC_LIGHT_SPACING * unit
    cy = header.center[1]
    x = header.x0 + 20 * unit
    for color in BeautifyDefaults.TRAFFIC_LIGHT_COLORS:
        draw.ellipse((x - r, cy - r, x + r, cy + r), fill=color)
        x += spacing
    return x - spacing + r


def _address_pill(
    draw: ImageDraw.ImageDraw, geometry: FrameGeometry, left: float, width_ratio: float = 0.4
) -> None:
    unit = _unit(geometry)
    header = geometry.header
    cx, cy = header.center
    width = max(header.width * width_ratio, 40 * unit)
    x0 = max(cx - width / 2.0, left + 12 * unit)
    x1 = min(x0 + width, header.x1 - 16 * unit)
    if x1 - x0 < 24 * unit:
        return
    h = 24 * unit
    _rounded_rect(draw, (x0, cy - h / 2, x1, cy + h / 2), radius=h / 2, fill=geometry.theme.pill)
    # Lock glyph and a faint URL line
    draw.ellipse((x0 + 10 * unit, cy - 3 * unit, x0 + 16 * unit, cy + 3 * unit), fill=geometry.theme.text)
    line_end = min(x1 - 12 * unit, x0 + 22 * unit + (x1 - x0) * 0.35)
    if line_end > x0 + 24 * unit:
        draw.line((x0 + 22 * unit, cy, line_end, cy), fill=geometry.theme.text, width=max(1, round(2 * unit)))


def _paint_safari(draw: ImageDraw.ImageDraw, geometry: FrameGeometry) -> None:
    _header_bar(draw, geometry, geometry.theme.header)
    dots_end = _traffic_lights(draw, geometry)
    _address_pill(draw, geometry, dots_end)


def _paint_chrome(draw: ImageDraw.ImageDraw, geometry: FrameGeometry) -> None:
    unit = _unit(geometry)
    header = geometry.header
    _header_bar(draw, geometry, geometry.theme.header)
    dots_end = _traffic_lights(draw, geometry)

    # Active tab, joined with the page body below it
    tab_x0 = dots_end + 16 * unit
    tab_x1 = min(tab_x0 + 160 * unit, header.x0 + header.width * 0.45)
    if tab_x1 - tab_x0 > 24 * unit:
        _rounded_rect(
            draw,
            (tab_x0, header.y0 + 8 * unit, tab_x1, header.y1),
            radius=8 * unit,
            fill=geometry.theme.pill,
            corners=(True, True, False, False),
        )
        draw.line(
            (tab_x0 + 12 * unit, header.y0 + 24 * unit, tab_x0 + (tab_x1 - tab_x0) * 0.6, header.y0 + 24 * unit),
            fill=geometry.theme.text,
            width=max(1, round(2 * unit)),
        )
        dots_end = tab_x1

    _address_pill(draw, geometry, dots_end, width_ratio=0.3)


def _paint_windows(draw: ImageDraw.ImageDraw, geometry: FrameGeometry) -> None:
    unit = _unit(geometry)
    header = geometry.header
    _header_bar(draw, geometry, geometry.theme.header)

    stroke = max(1, round(unit))
    color = geometry.theme.text
    cell = 46 * unit
    glyph = 5 * unit
    cy = header.center[1]

    # Cells right to left: close, maximize, minimize
    close_cx = header.x1 - cell / 2
    draw.line((close_cx - glyph, cy - glyph, close_cx + glyph, cy + glyph), fill=color, width=stroke)
    draw.line((close_cx - glyph, cy + glyph, close_cx + glyph, cy - glyph), fill=color, width=stroke)

    max_cx = close_cx - cell
    draw.rectangle((max_cx - glyph, cy - glyph, max_cx + glyph, cy + glyph), outline=color, width=stroke)

    min_cx = max_cx - cell
    draw.line((min_cx - glyph, cy, min_cx + glyph, cy), fill=color, width=stroke)


def _paint_arc(draw: ImageDraw.ImageDraw, geometry: FrameGeometry) -> None:
    unit = _unit(geometry)
    header = geometry.header
    _header_bar(draw, geometry, geometry.theme.accent)
    dots_end = _traffic_lights(draw, geometry)

    # Sidebar tab
    tab_x0 = dots_end + 14 * unit
    tab_x1 = min(tab_x0 + 120 * unit, header.x1 - 16 * unit)
    if tab_x1 - tab_x0 > 24 * unit:
        cy = header.center[1]
        h = 24 * unit
        _rounded_rect(draw, (tab_x0, cy - h / 2, tab_x1, cy + h / 2), radius=8 * unit, fill=geometry.theme.pill)
        r = 4 * unit
        draw.ellipse((tab_x0 + 8 * unit, cy - r, tab_x0 + 8 * unit + 2 * r, cy + r), fill=geometry.theme.accent)


def _paint_bezel(draw: ImageDraw.ImageDraw, geometry: FrameGeometry) -> None:
    _rounded_rect(draw, geometry.card.xy(), radius=geometry.radius, fill=geometry.theme.bezel)


def _paint_mobile_notch(draw: ImageDraw.ImageDraw, geometry: FrameGeometry) -> None:
    content = geometry.content
    cx = content.center[0]
    notch_w = content.width * 0.3
    notch_h = max(content.height * 0.03, (content.y0 - geometry.card.y0) * 1.6)
    _rounded_rect(
        draw,
        (cx - notch_w / 2, content.y0 - 1, cx + notch_w / 2, content.y0 + notch_h),
        radius=notch_h / 2,
        fill=geometry.theme.bezel,
        corners=(False, False, True, True),
    )


def _paint_tablet(draw: ImageDraw.ImageDraw, geometry: FrameGeometry) -> None:
    _paint_bezel(draw, geometry)
    cx = geometry.content.center[0]
    cy = (geometry.card.y0 + geometry.content.y0) / 2.0
    r = max(1.0, (geometry.content.y0 - geometry.card.y0) * 0.18)
    draw.ellipse((cx - r, cy - r, cx + r, cy + r), fill=(45, 45, 50, 255))


def _paint_desktop(draw: ImageDraw.ImageDraw, geometry: FrameGeometry) -> None:
    _paint_bezel(draw, geometry)
    # Chin logo
    cx = geometry.content.center[0]
    cy = (geometry.content.y1 + geometry.card.y1) / 2.0
    r = max(1.0, (geometry.card.y1 - geometry.content.y1) * 0.15)
    draw.ellipse((cx - r, cy - r, cx + r, cy + r), fill=(70, 70, 76, 255))


def _paint_desktop_stand(draw: ImageDraw.ImageDraw, geometry: FrameGeometry) -> None:
    stand = geometry.stand
    cx = geometry.card.center[0]
    neck_top = geometry.card.y1 - 1
    base_h = stand.height * 0.18
    base_top = stand.y1 - base_h
    neck_w = geometry.card.width * 0.12
    base_w = geometry.card.width * 0.3
    color = (190, 190, 196, 255)

    draw.polygon(
        [
            (cx - neck_w / 2, neck_top),
            (cx + neck_w / 2, neck_top),
            (cx + neck_w * 0.65, base_top),
            (cx - neck_w * 0.65, base_top),
        ],
        fill=color,
    )
    _rounded_rect(
        draw, (cx - base_w / 2, base_top, cx + base_w / 2, stand.y1 - 1), radius=base_h / 2, fill=color
    )


HEADER = BeautifyDefaults.HEADER_HEIGHT

FRAME_RECIPES: Dict[FrameStyle, FrameRecipe] = {
    FrameStyle.NONE: FrameRecipe(),
    FrameStyle.SAFARI: FrameRecipe(insets=(0, HEADER, 0, 0), has_header=True, paint=_paint_safari),
    FrameStyle.CHROME: FrameRecipe(insets=(0, HEADER, 0, 0), has_header=True, paint=_paint_chrome),
    FrameStyle.WINDOWS: FrameRecipe(insets=(0, HEADER, 0, 0), has_header=True, paint=_paint_windows),
    FrameStyle.ARC: FrameRecipe(insets=(0, HEADER, 0, 0), has_header=True, paint=_paint_arc),
    FrameStyle.MOBILE: FrameRecipe(
        insets=(12, 12, 12, 12),
        min_radius=40,
        paint=_paint_bezel,
        paint_overlay=_paint_mobile_notch,
    ),
    FrameStyle.TABLET: FrameRecipe(insets=(18, 18, 18, 18), min_radius=24, paint=_paint_tablet),
    FrameStyle.DESKTOP: FrameRecipe(
        insets=(14, 14, 14, 36),
        min_radius=10,
        below=90,
        paint=_paint_desktop,
        paint_overlay=_paint_desktop_stand,
    ),
}
