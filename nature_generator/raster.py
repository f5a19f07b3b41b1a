# nature_generator/raster.py

"""
================================================================================
RASTER BUFFER
================================================================================
This module provides the explicit pixel buffer the render passes paint into,
together with the small set of antialiased compositing primitives they need.
It replaces a stateful "current drawing surface" with a plain NumPy array
that is handed from pass to pass.

Data Contract:
---------------
- Storage: `pixels` is a uint8 array of shape (height, width, 4) holding
  straight (non-premultiplied) RGBA. Origin is top-left, row-major.
- Pixel convention: pixel (row j, column i) covers [i, i+1) x [j, j+1);
  its centre is (i + 0.5, j + 0.5).
- Compositing: every primitive computes a float coverage mask in [0, 1]
  (already multiplied by its opacity) and blends it source-over.
- Ownership: a buffer is writable while a render owns it. freeze() makes the
  array read-only before it is handed to the caller.
- Errors: allocate() raises SurfaceAcquisitionError when no valid surface
  can be created.
================================================================================
"""
import logging
import math

import numpy as np

# Supersampling offsets (within a pixel) used for polygon coverage.
POLYGON_SAMPLE_OFFSETS = (0.25, 0.75)

class SurfaceAcquisitionError(RuntimeError):
    """Raised when a raster buffer of the requested size cannot be created."""

class RasterBuffer:
    """A width x height grid of RGBA pixels with source-over drawing helpers."""

    def __init__(self, pixels: np.ndarray):
        if pixels.ndim != 3 or pixels.shape[2] != 4 or pixels.dtype != np.uint8:
            raise ValueError(f"Expected a (height, width, 4) uint8 array, got {pixels.shape} {pixels.dtype}")
        self.pixels = pixels

    @classmethod
    def allocate(cls, width, height, logger: logging.Logger = None) -> "RasterBuffer":
        """
        Creates a fully transparent buffer. Any size that is not a pair of
        positive integers, or that cannot be allocated, is a
        SurfaceAcquisitionError.
        """
        logger = logger or logging.getLogger(__name__)
        for name, value in (("width", width), ("height", height)):
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value <= 0:
                logger.error(f"Cannot acquire a surface with {name}={value!r}.")
                raise SurfaceAcquisitionError(f"Surface {name} must be a positive integer, got {value!r}")
        try:
            pixels = np.zeros((int(height), int(width), 4), dtype=np.uint8)
        except (MemoryError, ValueError) as e:
            logger.error(f"Failed to allocate a {width}x{height} surface: {e}")
            raise SurfaceAcquisitionError(f"Could not allocate a {width}x{height} surface") from e
        logger.debug(f"Allocated {width}x{height} surface ({pixels.nbytes} bytes).")
        return cls(pixels)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def rgb(self) -> np.ndarray:
        return self.pixels[..., :3]

    @property
    def alpha(self) -> np.ndarray:
        return self.pixels[..., 3]

    @property
    def is_frozen(self) -> bool:
        return not self.pixels.flags.writeable

    def freeze(self) -> "RasterBuffer":
        """Marks the pixel array read-only. Ownership passes to the caller."""
        self.pixels.flags.writeable = False
        return self

    def copy(self) -> "RasterBuffer":
        """Returns a writable deep copy."""
        return RasterBuffer(self.pixels.copy())

    def tobytes(self) -> bytes:
        return self.pixels.tobytes()

    # --- Compositing ---
    def composite(self, coverage: np.ndarray, color, top: int = 0, left: int = 0):
        """
        Blends `color` over the region whose top-left pixel is (left, top),
        weighted per pixel by `coverage`. `color` is an RGB triple or an array
        of shape coverage.shape + (3,). Parts outside the buffer are ignored.
        """
        rows, cols = coverage.shape
        y0, y1 = max(top, 0), min(top + rows, self.height)
        x0, x1 = max(left, 0), min(left + cols, self.width)
        if y1 <= y0 or x1 <= x0:
            return

        src_a = coverage[y0 - top:y1 - top, x0 - left:x1 - left, np.newaxis].astype(np.float64)
        src_rgb = np.asarray(color, dtype=np.float64)
        if src_rgb.ndim == 3:
            src_rgb = src_rgb[y0 - top:y1 - top, x0 - left:x1 - left]

        region = self.pixels[y0:y1, x0:x1]
        dst_rgb = region[..., :3].astype(np.float64)
        dst_a = region[..., 3:].astype(np.float64) / 255.0

        out_a = src_a + dst_a * (1.0 - src_a)
        weighted = src_rgb * src_a + dst_rgb * dst_a * (1.0 - src_a)
        out_rgb = np.divide(weighted, out_a, out=np.zeros_like(weighted), where=out_a > 0)

        region[..., :3] = np.clip(np.rint(out_rgb), 0, 255).astype(np.uint8)
        region[..., 3:] = np.clip(np.rint(out_a * 255.0), 0, 255).astype(np.uint8)

    # --- Primitives ---
    def fill_vertical_gradient(self, top_color, bottom_color, y0: float = 0.0, y1: float = None, opacity: float = 1.0):
        """
        Fills the band [y0, y1) with a vertical linear gradient. The first
        full row of the band takes `top_color` exactly and the last row
        `bottom_color` exactly. A fractional y0 gives the first row partial
        coverage.
        """
        if y1 is None:
            y1 = self.height
        row_start = max(int(math.floor(y0)), 0)
        row_end = min(int(math.ceil(y1)), self.height)
        if row_end <= row_start:
            return

        rows = np.arange(row_start, row_end, dtype=np.float64)
        span = (y1 - y0) - 1.0
        if span > 0:
            t = np.clip((rows - y0) / span, 0.0, 1.0)
        else:
            t = np.zeros_like(rows)
        top = np.asarray(top_color, dtype=np.float64)
        bottom = np.asarray(bottom_color, dtype=np.float64)
        row_colors = top + t[:, np.newaxis] * (bottom - top)

        row_coverage = np.clip(np.minimum(rows + 1.0, y1) - np.maximum(rows, y0), 0.0, 1.0) * opacity
        coverage = np.repeat(row_coverage[:, np.newaxis], self.width, axis=1)
        colors = np.repeat(row_colors[:, np.newaxis, :], self.width, axis=1)
        self.composite(coverage, colors, top=row_start, left=0)

    def fill_rect(self, x: float, y: float, w: float, h: float, color, opacity: float = 1.0):
        """Fills an axis-aligned rectangle with exact fractional edge coverage."""
        col_start = max(int(math.floor(x)), 0)
        col_end = min(int(math.ceil(x + w)), self.width)
        row_start = max(int(math.floor(y)), 0)
        row_end = min(int(math.ceil(y + h)), self.height)
        if col_end <= col_start or row_end <= row_start:
            return

        cols = np.arange(col_start, col_end, dtype=np.float64)
        rows = np.arange(row_start, row_end, dtype=np.float64)
        cov_x = np.clip(np.minimum(cols + 1.0, x + w) - np.maximum(cols, x), 0.0, 1.0)
        cov_y = np.clip(np.minimum(rows + 1.0, y + h) - np.maximum(rows, y), 0.0, 1.0)
        self.composite(np.outer(cov_y, cov_x) * opacity, color, top=row_start, left=col_start)

    def _distance_grid(self, cx: float, cy: float, reach: float):
        """Distances from (cx, cy) to every pixel centre within `reach`, plus the grid origin."""
        col_start = max(int(math.floor(cx - reach)), 0)
        col_end = min(int(math.ceil(cx + reach)) + 1, self.width)
        row_start = max(int(math.floor(cy - reach)), 0)
        row_end = min(int(math.ceil(cy + reach)) + 1, self.height)
        if col_end <= col_start or row_end <= row_start:
            return None, row_start, col_start
        xs = np.arange(col_start, col_end, dtype=np.float64) + 0.5
        ys = np.arange(row_start, row_end, dtype=np.float64) + 0.5
        dist = np.hypot(xs[np.newaxis, :] - cx, ys[:, np.newaxis] - cy)
        return dist, row_start, col_start

    def fill_disc(self, cx: float, cy: float, radius: float, color, opacity: float = 1.0, light_centre: bool = False):
        """
        Fills an antialiased disc. With `light_centre`, the pixel containing
        the centre is always fully covered, so even sub-pixel discs show up.
        """
        dist, top, left = self._distance_grid(cx, cy, radius + 1.0)
        if dist is None:
            return
        coverage = np.clip(radius + 0.5 - dist, 0.0, 1.0)
        if light_centre:
            row, col = int(math.floor(cy)) - top, int(math.floor(cx)) - left
            if 0 <= row < coverage.shape[0] and 0 <= col < coverage.shape[1]:
                coverage[row, col] = 1.0
        self.composite(coverage * opacity, color, top=top, left=left)

    def fill_radial_glow(self, cx: float, cy: float, radius: float, color, max_opacity: float):
        """Paints a radial gradient whose opacity falls linearly from max_opacity at the centre to 0 at `radius`."""
        if radius <= 0:
            return
        dist, top, left = self._distance_grid(cx, cy, radius)
        if dist is None:
            return
        coverage = max_opacity * np.clip(1.0 - dist / radius, 0.0, 1.0)
        self.composite(coverage, color, top=top, left=left)

    def fill_between(self, top_edge, bottom_edge, color, opacity: float = 1.0):
        """
        Fills, column by column, the vertical span between two edges. Each
        edge is a scalar or an array with one y value per column. Rows that
        the span crosses only partly get fractional coverage.
        """
        top_edge = np.broadcast_to(np.asarray(top_edge, dtype=np.float64), (self.width,))
        bottom_edge = np.broadcast_to(np.asarray(bottom_edge, dtype=np.float64), (self.width,))
        row_start = max(int(math.floor(np.min(top_edge))), 0)
        row_end = min(int(math.ceil(np.max(bottom_edge))), self.height)
        if row_end <= row_start:
            return

        rows = np.arange(row_start, row_end, dtype=np.float64)[:, np.newaxis]
        coverage = np.clip(
            np.minimum(rows + 1.0, bottom_edge[np.newaxis, :]) - np.maximum(rows, top_edge[np.newaxis, :]),
            0.0, 1.0
        )
        self.composite(coverage * opacity, color, top=row_start, left=0)

    def fill_polygon(self, vertices, color, opacity: float = 1.0):
        """
        Fills a simple polygon given as a sequence of (x, y) vertices, using
        2x2 supersampling and the even-odd rule for edge coverage.
        """
        points = np.asarray(vertices, dtype=np.float64)
        col_start = max(int(math.floor(points[:, 0].min())), 0)
        col_end = min(int(math.ceil(points[:, 0].max())), self.width)
        row_start = max(int(math.floor(points[:, 1].min())), 0)
        row_end = min(int(math.ceil(points[:, 1].max())), self.height)
        if col_end <= col_start or row_end <= row_start:
            return

        cols = np.arange(col_start, col_end, dtype=np.float64)
        rows = np.arange(row_start, row_end, dtype=np.float64)
        coverage = np.zeros((rows.size, cols.size))
        for oy in POLYGON_SAMPLE_OFFSETS:
            for ox in POLYGON_SAMPLE_OFFSETS:
                px = (cols + ox)[np.newaxis, :]
                py = (rows + oy)[:, np.newaxis]
                coverage += _points_in_polygon(px, py, points)
        coverage /= len(POLYGON_SAMPLE_OFFSETS) ** 2
        self.composite(coverage * opacity, color, top=row_start, left=col_start)

    def stroke_polyline(self, ys, color, opacity: float = 1.0, line_width: float = 1.0):
        """
        Strokes a horizontal polyline that has one y value per column,
        measured at the column centre. Each column covers the span from its
        own point to the midpoints towards its neighbours, widened by the
        line width.
        """
        ys = np.asarray(ys, dtype=np.float64)
        prev_mid = (ys + np.concatenate(([ys[0]], ys[:-1]))) / 2.0
        next_mid = (ys + np.concatenate((ys[1:], [ys[-1]]))) / 2.0
        lo = np.minimum(ys, np.minimum(prev_mid, next_mid)) - line_width / 2.0
        hi = np.maximum(ys, np.maximum(prev_mid, next_mid)) + line_width / 2.0
        self.fill_between(lo, hi, color, opacity)

def _points_in_polygon(px: np.ndarray, py: np.ndarray, points: np.ndarray) -> np.ndarray:
    """Even-odd point-in-polygon test, broadcast over sample grids."""
    inside = np.zeros(np.broadcast(px, py).shape, dtype=bool)
    count = len(points)
    for k in range(count):
        x1, y1 = points[k]
        x2, y2 = points[(k + 1) % count]
        if y1 == y2:
            continue
        crosses = (y1 > py) != (y2 > py)
        x_at_y = x1 + (py - y1) * (x2 - x1) / (y2 - y1)
        inside ^= crosses & (px < x_at_y)
    return inside.astype(np.float64)
