# nature_generator/pipeline.py

"""
================================================================================
CORE RENDER PIPELINE
================================================================================
This module contains the RenderPipeline class, responsible for turning one
SceneConfig into one finished raster image.

Data Contract:
---------------
- Inputs (on initialization):
    - logger: A configured Python logging object for runtime messages.
    - seed_generator (optional): Supplies the seed when a request's seed is
      empty. Defaults to random_source.generate_seed.
    - noise_field (optional): The (x, y) -> [0, 1] noise function.
- Inputs (per render):
    - scene (SceneConfig): The immutable request.
    - should_cancel (optional): Polled between passes; returning True aborts
      the render with GenerationCancelled.
- Outputs:
    - SceneResult: the frozen RasterBuffer, the effective seed, whether it
      was generated, and the layout each pass placed.
- Side Effects: Logs messages using the provided logger.
- Invariants: Passes run in a fixed order: sky, stars (night), sun,
  mountains, water (optional), trees (optional), watercolor filter
  (watercolor). Given the same non-empty seed and configuration the output
  is byte-identical. A render that fails or is cancelled never hands out
  its partial buffer.
================================================================================
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from . import noise
from . import palettes
from . import passes
from . import postfilter
from .palettes import Style
from .random_source import RandomSource, generate_seed
from .raster import RasterBuffer
from .scene import SceneConfig

class GenerationCancelled(Exception):
    """Raised inside a render that was superseded by a newer request."""

@dataclass(frozen=True)
class SceneResult:
    config: SceneConfig
    buffer: RasterBuffer
    effective_seed: str
    seed_was_generated: bool
    layout: dict = field(default_factory=dict)
    elapsed_seconds: float = 0.0

    @property
    def width(self) -> int:
        return self.buffer.width

    @property
    def height(self) -> int:
        return self.buffer.height

class RenderPipeline:
    """
    Renders nature scenes. Holds no per-render state: every call to render()
    owns its own RandomSource and RasterBuffer from start to finish.
    """
    def __init__(self, logger: logging.Logger = None,
                 seed_generator: Optional[Callable[[], str]] = None,
                 noise_field: Callable = None):
        self.logger = logger or logging.getLogger(__name__)
        self.seed_generator = seed_generator or generate_seed
        self.noise_field = noise_field or noise.sample
        self.logger.debug("RenderPipeline initialized.")

    def _checkpoint(self, should_cancel, next_pass: str):
        if should_cancel is not None and should_cancel():
            self.logger.info(f"Render cancelled before the '{next_pass}' pass; discarding partial buffer.")
            raise GenerationCancelled(next_pass)
        self.logger.debug(f"Running '{next_pass}' pass.")

    def render(self, scene: SceneConfig, should_cancel: Callable[[], bool] = None) -> SceneResult:
        """Runs every pass for `scene` and returns the finished, frozen result."""
        start_time = time.time()
        self.logger.info(
            f"Rendering '{scene.style.value}' scene at {scene.width}x{scene.height} "
            f"(water={scene.include_water}, trees={scene.include_trees})."
        )

        # --- 1. Acquire the surface and the random stream ---
        buffer = RasterBuffer.allocate(scene.width, scene.height, logger=self.logger)
        rng = RandomSource(scene.seed, seed_generator=self.seed_generator, logger=self.logger)
        palette = palettes.resolve(scene.style)
        width, height = scene.width, scene.height
        layout = {}

        # --- 2. Run the passes in their fixed order ---
        self._checkpoint(should_cancel, "sky")
        passes.draw_sky(buffer, palette)

        if scene.style == Style.NIGHT:
            self._checkpoint(should_cancel, "stars")
            stars = passes.place_stars(rng, width, height)
            passes.draw_stars(buffer, stars)
            layout['stars'] = stars

        self._checkpoint(should_cancel, "sun")
        sun = passes.place_sun(rng, width, height, scene.style)
        passes.draw_sun(buffer, sun, palette.sun)
        layout['sun'] = sun

        self._checkpoint(should_cancel, "mountains")
        mountains = passes.place_mountains(rng, height)
        passes.draw_mountains(buffer, mountains, palette, scene.style, noise_field=self.noise_field)
        layout['mountains'] = mountains

        if scene.include_water:
            self._checkpoint(should_cancel, "water")
            water = passes.place_water(rng, height)
            passes.draw_water(buffer, water, palette.water, noise_field=self.noise_field)
            layout['water'] = water

        if scene.include_trees:
            self._checkpoint(should_cancel, "trees")
            trees = passes.place_trees(rng, width, height)
            passes.draw_trees(buffer, trees, palette.tree)
            layout['trees'] = trees

        if scene.style == Style.WATERCOLOR:
            self._checkpoint(should_cancel, "watercolor")
            postfilter.apply_watercolor(buffer)

        # --- 3. Hand the finished buffer to the caller ---
        layout['random_draws'] = rng.draw_count
        buffer.freeze()
        elapsed = time.time() - start_time
        self.logger.info(
            f"Scene complete in {elapsed:.2f} seconds (seed '{rng.seed}', {rng.draw_count} random draws)."
        )
        return SceneResult(
            config=scene,
            buffer=buffer,
            effective_seed=rng.seed,
            seed_was_generated=rng.seed_was_generated,
            layout=layout,
            elapsed_seconds=elapsed,
        )

def render_scene(scene: SceneConfig, logger: logging.Logger = None, **kwargs) -> SceneResult:
    """One-shot convenience wrapper around RenderPipeline.render()."""
    return RenderPipeline(logger=logger, **kwargs).render(scene)
