# nature_generator/random_source.py

"""
================================================================================
SEEDED RANDOM SOURCE
================================================================================
A deterministic stream of floats in [0, 1) derived from a seed string. Two
sources built from the same seed yield the same sequence forever, so every
random decision a render makes is fixed by its seed and by the order in which
the passes draw.

Data Contract:
---------------
- Inputs (on initialization):
    - seed (str): Any string. An empty string means "pick one for me".
    - seed_generator (callable, optional): Produces the seed used when the
      given seed is empty. Injectable so tests can make that path repeatable.
- Public Methods:
    - next(): Returns the next float in [0, 1).
- Public Properties:
    - seed: The effective seed actually used.
    - seed_was_generated: True when the seed came from the seed generator.
- Side Effects: Logs a warning when a randomized seed is used.
================================================================================
"""

import hashlib
import logging
from typing import Callable, Optional

import numpy as np

from . import config as DEFAULTS

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"

def generate_seed(length: int = DEFAULTS.GENERATED_SEED_LENGTH) -> str:
    """Returns a fresh base-36 seed string drawn from OS entropy."""
    rng = np.random.default_rng()
    indices = rng.integers(0, len(_BASE36_DIGITS), size=length)
    return "".join(_BASE36_DIGITS[i] for i in indices)

def seed_to_int(seed: str) -> int:
    """Hashes a seed string into a 256-bit integer suitable for seeding numpy."""
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    return int.from_bytes(digest, "big")

class RandomSource:
    """Deterministic float stream owned by a single generation."""

    def __init__(self, seed: str, seed_generator: Optional[Callable[[], str]] = None, logger: logging.Logger = None):
        self.logger = logger or logging.getLogger(__name__)

        if seed:
            self.seed = seed
            self.seed_was_generated = False
        else:
            generator = seed_generator or generate_seed
            self.seed = generator()
            self.seed_was_generated = True
            self.logger.warning(f"Empty seed: randomized seed used ('{self.seed}'). This render is not reproducible from its inputs.")

        self._rng = np.random.default_rng(seed_to_int(self.seed))
        self.draw_count = 0

    def next(self) -> float:
        """Returns the next float in [0, 1) and advances the stream."""
        self.draw_count += 1
        return float(self._rng.random())

    def __call__(self) -> float:
        return self.next()
