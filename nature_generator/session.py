# nature_generator/session.py

"""
================================================================================
GENERATION SESSION
================================================================================
Serializes render requests so that at most one generation is active at a
time. Requests are recorded immediately and serviced on the next call to
update(), the way an interactive loop defers expensive work to its next
tick. A newer request supersedes an older one: a pending request is simply
replaced, and a render already running is cancelled at its next pass
boundary and its partial buffer discarded.

Data Contract:
---------------
- Public Methods:
    - request(config): queue a render; supersedes anything older.
    - update(): service the newest pending request (one scheduling tick).
    - generate_now(config): request + update in one call.
- Public Properties:
    - current: the latest finished SceneResult, or None.
    - pending: the SceneConfig waiting for the next tick, or None.
    - is_generating, is_dirty.
- Side Effects: Logs messages using the provided logger.
================================================================================
"""
import logging
from typing import Optional

from .pipeline import GenerationCancelled, RenderPipeline, SceneResult
from .scene import SceneConfig

class GenerationSession:
    """Owns the single in-flight generation for an interactive caller."""

    def __init__(self, pipeline: RenderPipeline = None, logger: logging.Logger = None):
        self.logger = logger or logging.getLogger(__name__)
        self.pipeline = pipeline or RenderPipeline(logger=self.logger)
        self.current: Optional[SceneResult] = None
        self.pending: Optional[SceneConfig] = None
        self.is_generating = False
        self.cancelled_count = 0
        self._latest_request_id = 0

    @property
    def is_dirty(self) -> bool:
        return self.pending is not None

    def request(self, config: SceneConfig):
        """Records a render request to be serviced on the next update()."""
        self._latest_request_id += 1
        if self.pending is not None:
            self.logger.debug("Replacing a pending render request that never started.")
        if self.is_generating:
            self.logger.debug("A newer request arrived while rendering; the active render will be cancelled.")
        self.pending = config

    def update(self) -> Optional[SceneResult]:
        """
        Services the newest pending request, if any. Returns the finished
        result, or None when there was nothing to do or the render was
        superseded before it finished.
        """
        if self.pending is None or self.is_generating:
            return None

        config = self.pending
        self.pending = None
        request_id = self._latest_request_id

        self.is_generating = True
        try:
            result = self.pipeline.render(config, should_cancel=lambda: request_id != self._latest_request_id)
        except GenerationCancelled:
            self.cancelled_count += 1
            return None
        except Exception as e:
            self.logger.error(f"Render failed: {e}", exc_info=True)
            raise
        finally:
            self.is_generating = False

        self.current = result
        return result

    def generate_now(self, config: SceneConfig) -> Optional[SceneResult]:
        """Renders inline, without waiting for a scheduling tick."""
        self.request(config)
        return self.update()
