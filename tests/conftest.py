from __future__ import annotations

import logging

import pytest

from nature_generator.pipeline import RenderPipeline


@pytest.fixture
def pipeline() -> RenderPipeline:
    """A pipeline whose empty-seed path is repeatable."""
    return RenderPipeline(
        logger=logging.getLogger("tests.pipeline"),
        seed_generator=lambda: "generated-seed",
    )
