# nature_generator/palettes.py

"""
================================================================================
STYLE & PALETTE MAPPING
================================================================================
This module defines the closed set of visual styles and the palette of seven
named colors each style paints with. Colors are authored in HSL (hue in
degrees, saturation and lightness in percent) and converted to 8-bit RGB.

It is designed to be a pure, stateless utility with no dependency on the
raster buffer, so it can be used by the pipeline, the preview window and the
command-line renderer alike.

Data Contract:
---------------
- resolve(style) -> Palette: total. Unknown styles resolve to the day palette.
- Style.parse(value) -> Style: unknown identifiers fall back to Style.DAY.
================================================================================
"""
import colorsys
import logging
from enum import Enum
from typing import NamedTuple, Tuple

RGB = Tuple[int, int, int]

class Style(str, Enum):
    """The nine visual styles a scene can be rendered in."""
    DAY = "day"
    GOLDEN = "golden"
    SUNSET = "sunset"
    NIGHT = "night"
    FOG = "fog"
    TROPICAL = "tropical"
    ARCTIC = "arctic"
    AUTUMN = "autumn"
    WATERCOLOR = "watercolor"

    @property
    def display_name(self) -> str:
        return STYLE_DISPLAY_NAMES[self]

    @classmethod
    def parse(cls, value, logger: logging.Logger = None) -> "Style":
        """Converts a style identifier to a Style, falling back to DAY."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            (logger or logging.getLogger(__name__)).warning(
                f"Unknown style '{value}', falling back to '{cls.DAY.value}'."
            )
            return cls.DAY

STYLE_DISPLAY_NAMES = {
    Style.DAY: "Daylight",
    Style.GOLDEN: "Golden Hour",
    Style.SUNSET: "Sunset",
    Style.NIGHT: "Starry Night",
    Style.FOG: "Misty Morning",
    Style.TROPICAL: "Tropical",
    Style.ARCTIC: "Arctic",
    Style.AUTUMN: "Autumn",
    Style.WATERCOLOR: "Watercolor",
}

class Palette(NamedTuple):
    sky_top: RGB
    sky_bottom: RGB
    sun: RGB
    mountain: RGB
    near_mountain: RGB
    water: RGB
    tree: RGB

PALETTE_COLOR_NAMES = Palette._fields

def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> RGB:
    """Converts CSS-style HSL (degrees, percent, percent) to an 8-bit RGB tuple."""
    r, g, b = colorsys.hls_to_rgb((hue % 360) / 360.0, lightness / 100.0, saturation / 100.0)
    return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)))

# --- Default Palette Definitions (HSL) ---
PALETTE_HSL = {
    Style.DAY: {
        "sky_top": (210, 92, 92), "sky_bottom": (200, 92, 75), "sun": (50, 96, 60),
        "mountain": (210, 22, 36), "near_mountain": (210, 24, 24),
        "water": (200, 60, 60), "tree": (140, 30, 22),
    },
    Style.GOLDEN: {
        "sky_top": (210, 80, 92), "sky_bottom": (40, 90, 70), "sun": (40, 100, 60),
        "mountain": (200, 24, 36), "near_mountain": (205, 26, 22),
        "water": (201, 60, 60), "tree": (140, 32, 22),
    },
    Style.SUNSET: {
        "sky_top": (260, 80, 70), "sky_bottom": (12, 90, 62), "sun": (30, 100, 60),
        "mountain": (260, 28, 26), "near_mountain": (270, 30, 20),
        "water": (210, 50, 45), "tree": (140, 34, 20),
    },
    Style.NIGHT: {
        "sky_top": (220, 40, 10), "sky_bottom": (220, 50, 20), "sun": (60, 40, 80),
        "mountain": (220, 20, 18), "near_mountain": (220, 20, 12),
        "water": (220, 30, 18), "tree": (140, 20, 12),
    },
    Style.FOG: {
        "sky_top": (210, 20, 92), "sky_bottom": (210, 10, 86), "sun": (50, 60, 82),
        "mountain": (210, 10, 68), "near_mountain": (210, 10, 54),
        "water": (210, 14, 70), "tree": (140, 16, 30),
    },
    Style.TROPICAL: {
        "sky_top": (195, 94, 86), "sky_bottom": (187, 95, 68), "sun": (50, 100, 60),
        "mountain": (170, 30, 36), "near_mountain": (163, 30, 28),
        "water": (186, 95, 50), "tree": (150, 40, 20),
    },
    Style.ARCTIC: {
        "sky_top": (210, 60, 96), "sky_bottom": (204, 60, 88), "sun": (50, 80, 88),
        "mountain": (210, 12, 74), "near_mountain": (210, 14, 62),
        "water": (200, 50, 72), "tree": (160, 24, 32),
    },
    Style.AUTUMN: {
        "sky_top": (25, 60, 90), "sky_bottom": (15, 60, 78), "sun": (45, 90, 70),
        "mountain": (20, 30, 38), "near_mountain": (18, 32, 24),
        "water": (205, 40, 56), "tree": (25, 60, 26),
    },
    Style.WATERCOLOR: {
        "sky_top": (210, 80, 96), "sky_bottom": (190, 80, 88), "sun": (45, 98, 75),
        "mountain": (210, 18, 54), "near_mountain": (210, 20, 42),
        "water": (200, 70, 70), "tree": (150, 28, 26),
    },
}

def create_palette(hsl_map: dict) -> Palette:
    """Builds an RGB Palette from a mapping of color name to HSL triple."""
    return Palette(**{name: hsl_to_rgb(*hsl_map[name]) for name in PALETTE_COLOR_NAMES})

# Every Style has an entry; this is checked at import time.
PALETTES = {style: create_palette(PALETTE_HSL[style]) for style in Style}

DEFAULT_PALETTE = PALETTES[Style.DAY]

def resolve(style) -> Palette:
    """
    Returns the palette for a style. Accepts a Style or its string identifier.
    Anything unrecognized resolves to the day palette.
    """
    if isinstance(style, Style):
        return PALETTES[style]
    try:
        return PALETTES[Style(str(style).strip().lower())]
    except ValueError:
        return DEFAULT_PALETTE
