# nature_generator/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the scene
generator. These values are used if they are not explicitly provided by the
caller's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC RENDER.
Instead, pass a configuration dictionary to SceneConfig.from_dict().
================================================================================
"""

# --- Scene Defaults ---
DEFAULT_STYLE = "day"
DEFAULT_WIDTH = 1024
DEFAULT_HEIGHT = 1024
DEFAULT_SEED = "nature"
DEFAULT_INCLUDE_WATER = True
DEFAULT_INCLUDE_TREES = True

# Named size presets, in the order the size selector cycles through them.
SIZE_PRESETS = {
    "square": (1024, 1024),
    "landscape": (1280, 720),
    "portrait": (768, 1024),
    "instagram": (1080, 1350),
    "wallpaper": (1920, 1080),
}

# --- Noise Generation ---
# The noise field is stateless: its permutation table is fixed at import time
# from this seed, so every render samples the same continuous function.
NOISE_PERMUTATION_SEED = 1337

# --- Random Seed Generation ---
# Length of the base-36 seed string produced when the caller leaves the seed empty.
GENERATED_SEED_LENGTH = 11

# --- Stars (night only) ---
STAR_COUNT_MIN = 300
STAR_COUNT_SPAN = 300
STAR_FIELD_HEIGHT_FACTOR = 0.6
STAR_RADIUS_MIN = 0.2
STAR_RADIUS_SPAN = 1.4
STAR_ALPHA_MIN = 0.5
STAR_ALPHA_SPAN = 0.5

# --- Sun ---
SUN_RADIUS_MIN_FACTOR = 0.05
SUN_RADIUS_MAX_FACTOR = 0.12
SUN_EDGE_MARGIN_PX = 20
SUN_BAND_NIGHT = (0.10, 0.35)
SUN_BAND_DEFAULT = (0.08, 0.45)
SUN_GLOW_RADIUS_FACTOR = 3.0
SUN_GLOW_MAX_OPACITY = 0.8

# --- Mountains ---
MOUNTAIN_LAYERS = 4
MOUNTAIN_SEED_RANGE = 100000
MOUNTAIN_LAYER_SEED_STRIDE = 1000
MOUNTAIN_NOISE_ROW_SCALE = 0.001
MOUNTAIN_BASE_FACTORS = (0.35, 0.75)
MOUNTAIN_AMPLITUDE_FACTORS = (0.06, 0.22)
MOUNTAIN_AMPLITUDE_JITTER = (0.6, 0.6) # (minimum, span) of the random scale
MOUNTAIN_ROUGHNESS_BASE = 0.002
MOUNTAIN_ROUGHNESS_PER_LAYER = 0.005
MOUNTAIN_ROUGHNESS_JITTER = 0.002

# Styles whose two farthest ridges carry translucent snow caps.
SNOW_CAP_STYLES = ("arctic", "night", "fog", "watercolor")
SNOW_CAP_LAYERS = 2
SNOW_CAP_SEED_OFFSET = 99
SNOW_CAP_ROUGHNESS_SCALE = 1.1
SNOW_CAP_AMPLITUDE_SCALE = 0.55
SNOW_CAP_MIN_RISE = 0.2 # Fraction of the amplitude the cap must sit above the base.
SNOW_CAP_OPACITY_BASE = 0.15
SNOW_CAP_OPACITY_SPAN = 0.1

# --- Water ---
WATER_HORIZON_FACTORS = (0.55, 0.12) # (minimum, span) as a fraction of height
WATER_DEEP_COLOR_HSL = (200, 40, 24)
WAVE_COUNT = 4
WAVE_SPACING_PX = 18
WAVE_JITTER_PX = 10
WAVE_NOISE_ROW_RANGE = 1000
WAVE_NOISE_ROW_STRIDE = 10
WAVE_NOISE_FREQUENCY = 0.02
WAVE_SINE_FREQUENCY = 0.015
WAVE_SINE_AMPLITUDE_PX = 2
WAVE_NOISE_AMPLITUDE_PX = 4
WAVE_OPACITY = 0.18 * 0.7 # Layer opacity times stroke opacity.

# --- Trees ---
GROUND_LINE_FACTORS = (0.68, 0.08) # (minimum, span) as a fraction of height
GROUND_COLOR_HSL = (120, 25, 22)
TRUNK_COLOR_HSL = (25, 20, 20)
TREE_COUNT_MIN = 30
TREE_COUNT_SPAN = 50
TREE_SIZE_RANGE = (30, 120)
TREE_LIFT_PX = 20
TREE_HIGHLIGHT_OPACITY = 0.12

# --- Watercolor Post-Filter ---
WATERCOLOR_LEVELS = 8
WATERCOLOR_SMEAR_OPACITY = 0.06
WATERCOLOR_SMEAR_OFFSET_PX = 1

# --- Export ---
EXPORT_FILENAME_PATTERN = "nature-{style}-{width}x{height}.png"
DEFAULT_OUTPUT_DIR = "renders"
