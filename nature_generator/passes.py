# nature_generator/passes.py

"""
================================================================================
RENDER PASSES
================================================================================
The drawing passes that compose a scene, in the order the pipeline runs them:
sky, stars, sun, mountains, water, trees.

Each randomized pass is split in two:
    - place_*(rng, ...) takes every random draw the pass needs, in a fixed
      order, and returns the resulting placement.
    - draw_*(buffer, placement, ...) paints that placement into the buffer,
      sampling the noise field where needed, and returns the buffer.
Drawing never consumes randomness, so a pass's draw count depends only on its
placement logic and never on the image width.

Data Contract:
---------------
- rng: a RandomSource (or any zero-argument callable returning floats in [0, 1)).
- noise_field: a callable (x, y) -> [0, 1], broadcasting over NumPy arrays.
- Side Effects: draw_* mutate the buffer passed in.
================================================================================
"""
import math
from typing import List, NamedTuple, Tuple

import numpy as np

from . import config as DEFAULTS
from . import noise
from .palettes import Palette, Style, hsl_to_rgb
from .raster import RasterBuffer

WHITE = (255, 255, 255)
WATER_DEEP_COLOR = hsl_to_rgb(*DEFAULTS.WATER_DEEP_COLOR_HSL)
GROUND_COLOR = hsl_to_rgb(*DEFAULTS.GROUND_COLOR_HSL)
TRUNK_COLOR = hsl_to_rgb(*DEFAULTS.TRUNK_COLOR_HSL)

def _lerp(a, b, t):
    "Linear interpolation."
    return a + (b - a) * t

# --- Placements ---
class Star(NamedTuple):
    x: float
    y: float
    radius: float
    alpha: float

class SunPlacement(NamedTuple):
    x: float
    y: float
    radius: float

class MountainLayer(NamedTuple):
    index: int
    t: float
    base_y: float
    amplitude: float
    roughness: float
    noise_row: float
    snow_noise_row: float

class Wave(NamedTuple):
    index: int
    y: float
    noise_row: float

class WaterPlacement(NamedTuple):
    horizon: float
    waves: Tuple[Wave, ...]

class Tree(NamedTuple):
    x: float
    y: float
    size: float

class TreePlacement(NamedTuple):
    ground_y: float
    trees: Tuple[Tree, ...]

# --- 1. Sky ---
def draw_sky(buffer: RasterBuffer, palette: Palette) -> RasterBuffer:
    """Fills the whole buffer with a top-to-bottom gradient."""
    buffer.fill_vertical_gradient(palette.sky_top, palette.sky_bottom)
    return buffer

# --- 2. Stars ---
def place_stars(rng, width: int, height: int) -> List[Star]:
    """Draws the star count, then x, y, radius and alpha for each star in turn."""
    count = int(math.floor(DEFAULTS.STAR_COUNT_MIN + rng() * DEFAULTS.STAR_COUNT_SPAN))
    stars = []
    for _ in range(count):
        x = rng() * width
        y = rng() * height * DEFAULTS.STAR_FIELD_HEIGHT_FACTOR
        radius = rng() * DEFAULTS.STAR_RADIUS_SPAN + DEFAULTS.STAR_RADIUS_MIN
        alpha = DEFAULTS.STAR_ALPHA_MIN + rng() * DEFAULTS.STAR_ALPHA_SPAN
        stars.append(Star(x, y, radius, alpha))
    return stars

def draw_stars(buffer: RasterBuffer, stars: List[Star]) -> RasterBuffer:
    for star in stars:
        buffer.fill_disc(star.x, star.y, star.radius, WHITE, opacity=star.alpha, light_centre=True)
    return buffer

# --- 3. Sun ---
def place_sun(rng, width: int, height: int, style: Style) -> SunPlacement:
    shorter = min(width, height)
    radius = _lerp(shorter * DEFAULTS.SUN_RADIUS_MIN_FACTOR, shorter * DEFAULTS.SUN_RADIUS_MAX_FACTOR, rng())
    margin = radius + DEFAULTS.SUN_EDGE_MARGIN_PX
    x = _lerp(margin, width - margin, rng())
    band = DEFAULTS.SUN_BAND_NIGHT if style == Style.NIGHT else DEFAULTS.SUN_BAND_DEFAULT
    y = _lerp(height * band[0], height * band[1], rng())
    return SunPlacement(x, y, radius)

def draw_sun(buffer: RasterBuffer, sun: SunPlacement, color) -> RasterBuffer:
    """A soft glow three times the sun's radius, then the solid disc."""
    buffer.fill_radial_glow(
        sun.x, sun.y, sun.radius * DEFAULTS.SUN_GLOW_RADIUS_FACTOR, color, DEFAULTS.SUN_GLOW_MAX_OPACITY
    )
    buffer.fill_disc(sun.x, sun.y, sun.radius, color)
    return buffer

# --- 4. Mountains ---
def place_mountains(rng, height: int) -> List[MountainLayer]:
    """
    Draws the shared mountain seed, then per layer (back to front) the
    amplitude scale and the roughness jitter.
    """
    mountain_seed = math.floor(rng() * DEFAULTS.MOUNTAIN_SEED_RANGE)
    layer_count = DEFAULTS.MOUNTAIN_LAYERS
    base_min, base_max = DEFAULTS.MOUNTAIN_BASE_FACTORS
    amp_min, amp_max = DEFAULTS.MOUNTAIN_AMPLITUDE_FACTORS
    jitter_min, jitter_span = DEFAULTS.MOUNTAIN_AMPLITUDE_JITTER

    layers = []
    for index in range(layer_count):
        t = index / (layer_count - 1)
        base_y = _lerp(height * base_min, height * base_max, t)
        amplitude = _lerp(height * amp_min, height * amp_max, (1 - t) * (jitter_min + rng() * jitter_span))
        roughness = (
            DEFAULTS.MOUNTAIN_ROUGHNESS_BASE
            + t * DEFAULTS.MOUNTAIN_ROUGHNESS_PER_LAYER
            + rng() * DEFAULTS.MOUNTAIN_ROUGHNESS_JITTER
        )
        layer_seed = mountain_seed + index * DEFAULTS.MOUNTAIN_LAYER_SEED_STRIDE
        layers.append(MountainLayer(
            index=index,
            t=t,
            base_y=base_y,
            amplitude=amplitude,
            roughness=roughness,
            noise_row=layer_seed * DEFAULTS.MOUNTAIN_NOISE_ROW_SCALE,
            snow_noise_row=(layer_seed + DEFAULTS.SNOW_CAP_SEED_OFFSET) * DEFAULTS.MOUNTAIN_NOISE_ROW_SCALE,
        ))
    return layers

def mountain_ridge(layer: MountainLayer, width: int, noise_field=noise.sample) -> np.ndarray:
    """The silhouette's y value for every column of the layer."""
    xs = np.arange(width, dtype=np.float64)
    n = noise_field(xs * layer.roughness, layer.noise_row)
    return layer.base_y - (n * 2 - 1) * layer.amplitude

def snow_cap_edge(layer: MountainLayer, width: int, noise_field=noise.sample) -> np.ndarray:
    """The cap's upper edge: a lower, independent ridge kept well above the layer's base."""
    xs = np.arange(width, dtype=np.float64)
    n = noise_field(xs * layer.roughness * DEFAULTS.SNOW_CAP_ROUGHNESS_SCALE, layer.snow_noise_row)
    edge = layer.base_y - (n * 2 - 1) * layer.amplitude * DEFAULTS.SNOW_CAP_AMPLITUDE_SCALE
    return np.minimum(edge, layer.base_y - layer.amplitude * DEFAULTS.SNOW_CAP_MIN_RISE)

def has_snow_caps(style: Style) -> bool:
    return style.value in DEFAULTS.SNOW_CAP_STYLES

def draw_mountains(buffer: RasterBuffer, layers: List[MountainLayer], palette: Palette, style: Style,
                   noise_field=noise.sample) -> RasterBuffer:
    width, height = buffer.width, buffer.height
    for layer in layers:
        color = palette.mountain if layer.t < 0.5 else palette.near_mountain
        buffer.fill_between(mountain_ridge(layer, width, noise_field), height, color)

        if has_snow_caps(style) and layer.index < DEFAULTS.SNOW_CAP_LAYERS:
            opacity = DEFAULTS.SNOW_CAP_OPACITY_BASE + (1 - layer.t) * DEFAULTS.SNOW_CAP_OPACITY_SPAN
            buffer.fill_between(snow_cap_edge(layer, width, noise_field), layer.base_y, WHITE, opacity)
    return buffer

# --- 5. Water ---
def place_water(rng, height: int) -> WaterPlacement:
    """
    Draws the horizon, then for each wave its vertical jitter and its noise
    row. Every wave's randomness is drawn once, before any column is drawn.
    """
    horizon_min, horizon_span = DEFAULTS.WATER_HORIZON_FACTORS
    horizon = height * (horizon_min + rng() * horizon_span)
    waves = []
    for index in range(DEFAULTS.WAVE_COUNT):
        y = horizon + index * DEFAULTS.WAVE_SPACING_PX + rng() * DEFAULTS.WAVE_JITTER_PX
        noise_row = index * DEFAULTS.WAVE_NOISE_ROW_STRIDE + DEFAULTS.WAVE_NOISE_ROW_RANGE * rng()
        waves.append(Wave(index, y, noise_row))
    return WaterPlacement(horizon, tuple(waves))

def wave_line(wave: Wave, width: int, noise_field=noise.sample) -> np.ndarray:
    xs = np.arange(width, dtype=np.float64)
    n = noise_field(xs * DEFAULTS.WAVE_NOISE_FREQUENCY, wave.noise_row)
    return (
        wave.y
        + np.sin(xs * DEFAULTS.WAVE_SINE_FREQUENCY + wave.index) * DEFAULTS.WAVE_SINE_AMPLITUDE_PX
        + (n - 0.5) * DEFAULTS.WAVE_NOISE_AMPLITUDE_PX
    )

def draw_water(buffer: RasterBuffer, water: WaterPlacement, color, noise_field=noise.sample) -> RasterBuffer:
    buffer.fill_vertical_gradient(color, WATER_DEEP_COLOR, y0=water.horizon, y1=buffer.height)
    for wave in water.waves:
        buffer.stroke_polyline(wave_line(wave, buffer.width, noise_field), WHITE, opacity=DEFAULTS.WAVE_OPACITY)
    return buffer

# --- 6. Trees ---
def place_trees(rng, width: int, height: int) -> TreePlacement:
    """Draws the ground line and tree count, then x, size and lift for each tree."""
    ground_min, ground_span = DEFAULTS.GROUND_LINE_FACTORS
    ground_y = height * (ground_min + rng() * ground_span)
    count = int(math.floor(DEFAULTS.TREE_COUNT_MIN + rng() * DEFAULTS.TREE_COUNT_SPAN))
    size_min, size_max = DEFAULTS.TREE_SIZE_RANGE

    trees = []
    for _ in range(count):
        x = rng() * width
        size = _lerp(size_min, size_max, rng())
        y = ground_y - size - rng() * DEFAULTS.TREE_LIFT_PX
        trees.append(Tree(x, y, size))
    return TreePlacement(ground_y, tuple(trees))

def draw_tree(buffer: RasterBuffer, tree: Tree, color) -> RasterBuffer:
    """Trunk, conical foliage, and a faint highlight on the left flank."""
    x, y, s = tree.x, tree.y, tree.size
    buffer.fill_rect(x - s * 0.05, y + s * 0.6, s * 0.1, s * 0.6, TRUNK_COLOR)
    buffer.fill_polygon([(x, y), (x - s * 0.5, y + s), (x + s * 0.5, y + s)], color)
    buffer.fill_polygon(
        [(x - s * 0.15, y + s * 0.2), (x - s * 0.4, y + s * 0.9), (x - s * 0.1, y + s * 0.9)],
        WHITE, opacity=DEFAULTS.TREE_HIGHLIGHT_OPACITY
    )
    return buffer

def draw_trees(buffer: RasterBuffer, placement: TreePlacement, color) -> RasterBuffer:
    buffer.fill_rect(0, placement.ground_y, buffer.width, buffer.height - placement.ground_y, GROUND_COLOR)
    for tree in placement.trees:
        draw_tree(buffer, tree, color)
    return buffer
