# preview.py

import logging
import sys

import pygame

from nature_generator import config as DEFAULTS
from nature_generator.export import save_result
from nature_generator.palettes import Style
from nature_generator.random_source import generate_seed
from nature_generator.scene import SceneConfig
from nature_generator.session import GenerationSession

# --- Application Constants ---
SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 720
BACKGROUND_COLOR = (10, 10, 20)
TICK_RATE = 30

STYLE_ORDER = list(Style)
PRESET_ORDER = list(DEFAULTS.SIZE_PRESETS)

def fit_size(image_size, screen_size):
    """Largest size with the image's aspect ratio that fits on screen."""
    scale = min(screen_size[0] / image_size[0], screen_size[1] / image_size[1])
    return max(1, int(image_size[0] * scale)), max(1, int(image_size[1] * scale))

class PreviewApp:
    """
    A small window that shows the current scene and re-renders it on key presses.

    S: cycle style   Z: cycle size preset   R: random seed
    W: toggle water  T: toggle trees        P: save PNG   Esc: quit
    """
    def __init__(self, scene: SceneConfig):
        logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
        self.logger = logging.getLogger("Preview")

        self.logger.info("Initializing Pygame...")
        pygame.init()
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        self.clock = pygame.time.Clock()
        self.is_running = True

        self.scene = scene
        self.preset_index = 0
        self.session = GenerationSession(logger=self.logger)
        self.session.request(self.scene)
        self.display_surface = None

    def run(self):
        """The main application loop."""
        while self.is_running:
            self.handle_events()
            self.update()
            self.draw()
            self.clock.tick(TICK_RATE)

        self.logger.info("Exiting preview.")
        pygame.quit()
        sys.exit()

    def _request(self, **changes):
        self.scene = self.scene.replace(**changes)
        self.session.request(self.scene)

    def handle_events(self):
        """Processes user input. Every change becomes a new render request."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.is_running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.is_running = False
                elif event.key == pygame.K_s:
                    next_style = STYLE_ORDER[(STYLE_ORDER.index(self.scene.style) + 1) % len(STYLE_ORDER)]
                    self._request(style=next_style)
                elif event.key == pygame.K_z:
                    self.preset_index = (self.preset_index + 1) % len(PRESET_ORDER)
                    width, height = DEFAULTS.SIZE_PRESETS[PRESET_ORDER[self.preset_index]]
                    self._request(width=width, height=height)
                elif event.key == pygame.K_r:
                    self._request(seed=generate_seed())
                elif event.key == pygame.K_w:
                    self._request(include_water=not self.scene.include_water)
                elif event.key == pygame.K_t:
                    self._request(include_trees=not self.scene.include_trees)
                elif event.key == pygame.K_p and self.session.current is not None:
                    save_result(self.session.current, logger=self.logger)

    def update(self):
        """Services the newest render request, one per tick."""
        if not self.session.is_dirty:
            return
        result = self.session.update()
        if result is None:
            return
        image_size = (result.width, result.height)
        surface = pygame.image.frombuffer(result.buffer.tobytes(), image_size, 'RGBA')
        self.display_surface = pygame.transform.smoothscale(surface, fit_size(image_size, (SCREEN_WIDTH, SCREEN_HEIGHT)))

    def draw(self):
        """Handles all rendering for the application."""
        self.screen.fill(BACKGROUND_COLOR)
        if self.display_surface is not None:
            rect = self.display_surface.get_rect(center=(SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2))
            self.screen.blit(self.display_surface, rect)

        status = "Generating..." if self.session.is_dirty else "Ready"
        pygame.display.set_caption(
            f"Nature Preview | {self.scene.style.display_name} | {self.scene.width}x{self.scene.height} | "
            f"seed '{self.scene.seed}' | {status}"
        )
        pygame.display.flip()

if __name__ == '__main__':
    app = PreviewApp(SceneConfig())
    app.run()
