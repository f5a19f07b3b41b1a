# nature_generator/postfilter.py

"""
================================================================================
WATERCOLOR POST-FILTER
================================================================================
Whole-image transforms applied after every drawing pass when the scene is
rendered in the watercolor style: a directional smear that softens edges
sideways, followed by posterization to a small set of flat color levels.

Data Contract:
---------------
- Inputs: a writable RasterBuffer.
- Outputs: the same RasterBuffer, modified in place and returned.
- Invariants: after apply_watercolor() every pixel is fully opaque and every
  RGB channel value is one of WATERCOLOR_LEVELS evenly spaced values in
  [0, 255].
================================================================================
"""
import numpy as np
from scipy.ndimage import map_coordinates

from . import config as DEFAULTS
from .raster import RasterBuffer

def quantization_levels(levels: int = DEFAULTS.WATERCOLOR_LEVELS) -> np.ndarray:
    """The evenly spaced channel values posterize() snaps to."""
    return np.rint(np.linspace(0.0, 255.0, levels)).astype(np.uint8)

def force_opaque(buffer: RasterBuffer) -> RasterBuffer:
    buffer.pixels[..., 3] = 255
    return buffer

def posterize(buffer: RasterBuffer, levels: int = DEFAULTS.WATERCOLOR_LEVELS) -> RasterBuffer:
    """Snaps every RGB channel to the nearest of `levels` evenly spaced values and forces full opacity."""
    steps = levels - 1
    rgb = buffer.pixels[..., :3].astype(np.float64)
    quantized = np.rint(rgb / 255.0 * steps) * (255.0 / steps)
    buffer.pixels[..., :3] = np.clip(np.rint(quantized), 0, 255).astype(np.uint8)
    return force_opaque(buffer)

def smear(buffer: RasterBuffer, opacity: float = DEFAULTS.WATERCOLOR_SMEAR_OPACITY,
          offset_px: float = DEFAULTS.WATERCOLOR_SMEAR_OFFSET_PX) -> RasterBuffer:
    """
    Blends each 2-row band with a copy of itself that is shifted left by
    `offset_px` and stretched to width + 2 * offset_px, at low opacity.

    The resample is a fixed two-tap (linear) kernel along each row, edges
    clamped. Bands never overlap and each reads only its own rows, so all
    bands are evaluated at once from the buffer as it was before the smear.
    """
    height, width = buffer.height, buffer.width
    source = buffer.pixels[..., :3].astype(np.float64)

    # Destination pixel centre X lands on source position (X + offset) * w / (w + 2 * offset).
    dest_centres = np.arange(width, dtype=np.float64) + 0.5
    source_cols = (dest_centres + offset_px) * width / (width + 2.0 * offset_px) - 0.5
    row_grid, col_grid = np.meshgrid(
        np.arange(height, dtype=np.float64), source_cols, indexing='ij'
    )
    coords = np.array([row_grid.ravel(), col_grid.ravel()])

    shifted = np.empty_like(source)
    for channel in range(3):
        shifted[..., channel] = map_coordinates(
            source[..., channel], coords, order=1, mode='nearest'
        ).reshape(height, width)

    buffer.composite(np.full((height, width), opacity), shifted)
    return buffer

def apply_watercolor(buffer: RasterBuffer) -> RasterBuffer:
    """
    The full watercolor treatment: opaque, smeared, then posterized so the
    smear's in-between values land back on the level lattice.
    """
    force_opaque(buffer)
    smear(buffer)
    return posterize(buffer)
