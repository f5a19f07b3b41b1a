# nature_generator/__init__.py

# This file makes the 'nature_generator' directory a Python package.
# We can also use it to define the public API of the package.

from .palettes import Palette, Style, resolve
from .pipeline import GenerationCancelled, RenderPipeline, SceneResult, render_scene
from .random_source import RandomSource, generate_seed
from .raster import RasterBuffer, SurfaceAcquisitionError
from .scene import SceneConfig
from .session import GenerationSession

__all__ = [
    "GenerationCancelled",
    "GenerationSession",
    "Palette",
    "RandomSource",
    "RasterBuffer",
    "RenderPipeline",
    "SceneConfig",
    "SceneResult",
    "Style",
    "SurfaceAcquisitionError",
    "generate_seed",
    "render_scene",
    "resolve",
]
