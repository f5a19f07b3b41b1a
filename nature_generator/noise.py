# nature_generator/noise.py

"""
================================================================================
NOISE GENERATION UTILITIES
================================================================================
This module provides the continuous 2D gradient noise field used for mountain
silhouettes and water wave jitter. It is designed to be a pure, stateless
utility: the permutation table is built once at import time from a fixed
seed and never changes afterwards.

Data Contract:
---------------
- Inputs:
    - x, y: Floats or NumPy arrays of coordinates (broadcast together).
      Arbitrarily large or negative values are accepted; lattice indices
      wrap modulo 256.
- Outputs:
    - sample(): noise values in the closed range [0, 1].
    - perlin_noise_2d(): raw noise values (approximately [-1, 1]).
- Side Effects: None.
- Invariants: The output is continuous in (x, y) and depends only on the
  coordinates. The shape of the output matches the broadcast input shape.
================================================================================
"""

import numpy as np
from numba import njit

from . import config as DEFAULTS

# Pre-defined gradient vectors for performance.
_GRADIENT_VECTORS = np.array([[0, 1], [0, -1], [1, 0], [-1, 0]])

@njit
def _lerp(a, b, x):
    "Linear interpolation."
    return a + x * (b - a)

@njit
def _fade(t):
    "6t^5 - 15t^4 + 10t^3"
    return t * t * t * (t * (t * 6 - 15) + 10)

@njit
def _gradient(h, x, y):
    """Calculates the dot product between a gradient vector and coordinates."""
    g = _GRADIENT_VECTORS[h % 4]
    return g[0] * x + g[1] * y

@njit
def perlin_noise_2d(p, x, y, octaves=1, persistence=0.5, lacunarity=2.0):
    """
    Generate 2D Perlin noise for flat coordinate arrays using a pre-computed
    permutation table. JIT-compiled with Numba; the explicit loops compile to
    efficient machine code.
    """
    count = x.shape[0]
    total_noise = np.zeros(count)

    for i in range(count):
        noise_val = 0.0
        amplitude = 1.0
        frequency = 1.0

        for _ in range(octaves):
            x_sample = x[i] * frequency
            y_sample = y[i] * frequency

            xi = int(np.floor(x_sample))
            yi = int(np.floor(y_sample))

            xf = x_sample - xi
            yf = y_sample - yi

            u = _fade(xf)
            v = _fade(yf)

            px0 = xi % 256
            px1 = (px0 + 1) % 256
            py0 = yi % 256
            py1 = (py0 + 1) % 256

            # Numba requires scalar indexing
            idx00 = p[p[px0] + py0]
            idx01 = p[p[px0] + py1]
            idx10 = p[p[px1] + py0]
            idx11 = p[p[px1] + py1]

            g00 = _gradient(idx00, xf, yf)
            g01 = _gradient(idx01, xf, yf - 1)
            g10 = _gradient(idx10, xf - 1, yf)
            g11 = _gradient(idx11, xf - 1, yf - 1)

            x1 = _lerp(g00, g10, u)
            x2 = _lerp(g01, g11, u)
            octave_noise = _lerp(x1, x2, v)

            noise_val += octave_noise * amplitude
            amplitude *= persistence
            frequency *= lacunarity

        total_noise[i] = noise_val

    return total_noise

def create_permutation_table(seed: int) -> np.ndarray:
    """Builds the doubled 512-entry permutation table for a given integer seed."""
    p = np.arange(256, dtype=np.int64)
    rng = np.random.default_rng(seed)
    rng.shuffle(p)
    return np.concatenate([p, p])

PERMUTATION_TABLE = create_permutation_table(DEFAULTS.NOISE_PERMUTATION_SEED)

def sample(x, y):
    """
    Samples the noise field at (x, y), normalized to [0, 1].

    Scalars in, float out. Arrays in, array of the broadcast shape out.
    """
    x_arr, y_arr = np.broadcast_arrays(
        np.asarray(x, dtype=np.float64),
        np.asarray(y, dtype=np.float64)
    )
    raw = perlin_noise_2d(
        PERMUTATION_TABLE,
        np.ascontiguousarray(x_arr).ravel(),
        np.ascontiguousarray(y_arr).ravel()
    )
    # Normalize values to range [0, 1]
    values = np.clip((raw + 1.0) / 2.0, 0.0, 1.0).reshape(x_arr.shape)
    if values.ndim == 0:
        return float(values)
    return values
