# nature_generator/scene.py

"""
================================================================================
SCENE CONFIGURATION
================================================================================
The immutable request a caller submits for one render: style, size, seed and
the two feature toggles. SceneConfig.from_dict() builds one from a plain
mapping (a JSON file, CLI flags), taking every missing key from the internal
defaults in config.py.

Data Contract:
---------------
- style: always a Style. Unknown identifiers fall back to Style.DAY.
- width, height: ints. Positivity is enforced when the surface is acquired,
  not here.
- seed: a string. The empty string requests a randomized seed.
================================================================================
"""
import dataclasses
import logging
from dataclasses import dataclass

from . import config as DEFAULTS
from .palettes import Style

@dataclass(frozen=True)
class SceneConfig:
    style: Style = Style(DEFAULTS.DEFAULT_STYLE)
    width: int = DEFAULTS.DEFAULT_WIDTH
    height: int = DEFAULTS.DEFAULT_HEIGHT
    seed: str = DEFAULTS.DEFAULT_SEED
    include_water: bool = DEFAULTS.DEFAULT_INCLUDE_WATER
    include_trees: bool = DEFAULTS.DEFAULT_INCLUDE_TREES

    def __post_init__(self):
        # Frozen, so normalize through object.__setattr__.
        if not isinstance(self.style, Style):
            object.__setattr__(self, 'style', Style.parse(self.style))
        if self.seed is None:
            object.__setattr__(self, 'seed', "")

    @property
    def size(self) -> tuple:
        return (self.width, self.height)

    @classmethod
    def from_dict(cls, config: dict, logger: logging.Logger = None) -> "SceneConfig":
        """
        Builds a SceneConfig from user-supplied parameters, falling back to the
        internal defaults for anything not provided. A `size` preset name takes
        precedence over explicit width/height.
        """
        logger = logger or logging.getLogger(__name__)

        width = config.get('width', DEFAULTS.DEFAULT_WIDTH)
        height = config.get('height', DEFAULTS.DEFAULT_HEIGHT)
        preset = config.get('size')
        if preset is not None:
            width, height = preset_dimensions(preset)

        return cls(
            style=Style.parse(config.get('style', DEFAULTS.DEFAULT_STYLE), logger=logger),
            width=int(width),
            height=int(height),
            seed=str(config.get('seed', DEFAULTS.DEFAULT_SEED) or ""),
            include_water=bool(config.get('include_water', DEFAULTS.DEFAULT_INCLUDE_WATER)),
            include_trees=bool(config.get('include_trees', DEFAULTS.DEFAULT_INCLUDE_TREES)),
        )

    def to_dict(self) -> dict:
        """A JSON-friendly representation, the inverse of from_dict()."""
        return {
            'style': self.style.value,
            'width': self.width,
            'height': self.height,
            'seed': self.seed,
            'include_water': self.include_water,
            'include_trees': self.include_trees,
        }

    def replace(self, **changes) -> "SceneConfig":
        return dataclasses.replace(self, **changes)

def preset_dimensions(name: str) -> tuple:
    """Looks up a named size preset. Unknown names are a ValueError."""
    try:
        return DEFAULTS.SIZE_PRESETS[str(name).strip().lower()]
    except KeyError:
        known = ", ".join(DEFAULTS.SIZE_PRESETS)
        raise ValueError(f"Unknown size preset '{name}'. Expected one of: {known}") from None
