# nature_generator/export.py

"""
================================================================================
PNG EXPORT
================================================================================
Encodes finished scenes as lossless PNG files with Pillow, named after the
scene's style and size.
================================================================================
"""
import logging
import os

import numpy as np
from PIL import Image

from . import config as DEFAULTS
from .raster import RasterBuffer
from .scene import SceneConfig

def export_filename(scene: SceneConfig) -> str:
    """e.g. 'nature-day-1024x1024.png'"""
    return DEFAULTS.EXPORT_FILENAME_PATTERN.format(
        style=scene.style.value, width=scene.width, height=scene.height
    )

def to_image(buffer: RasterBuffer) -> Image.Image:
    """Wraps the buffer's pixels in an RGBA Pillow image (the pixels are copied)."""
    return Image.fromarray(np.ascontiguousarray(buffer.pixels).copy())

def save_png(buffer: RasterBuffer, directory: str, filename: str, logger: logging.Logger = None) -> str:
    """Writes the buffer to directory/filename as a PNG and returns the path."""
    logger = logger or logging.getLogger(__name__)
    os.makedirs(directory, exist_ok=True)
    file_path = os.path.join(directory, filename)
    to_image(buffer).save(file_path, 'PNG', optimize=True)
    logger.info(f"Saved {buffer.width}x{buffer.height} image to '{file_path}'")
    return file_path

def save_result(result, directory: str = DEFAULTS.DEFAULT_OUTPUT_DIR, logger: logging.Logger = None) -> str:
    """Saves a SceneResult under its export filename."""
    return save_png(result.buffer, directory, export_filename(result.config), logger=logger)
