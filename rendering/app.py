"""Interactive pygame front end for the slime simulation."""

import logging
from typing import Optional

import pygame

from slime.config.simulation_config import SimulationConfig
from slime.input_events import KeyPressed, PointerMoved, PointerPressed
from slime.simulation import SlimeSimulation
from rendering.slime_renderer import SlimeRenderer

logger = logging.getLogger(__name__)

# pygame key codes forwarded to the simulation, by simulation key name
FORWARDED_KEYS = {
    pygame.K_SPACE: "space",
}


class SlimeApp:
    """Window, event pump and frame clock around a ``SlimeSimulation``.

    Attributes:
        simulation: The headless simulation being driven
        screen: Pygame display surface
        clock: Pygame clock for frame rate
        renderer: Draws each frame
        show_hud: Whether the stats panel is visible
    """

    def __init__(self, config: Optional[SimulationConfig] = None, seed: Optional[int] = None) -> None:
        config = config or SimulationConfig()
        self.simulation = SlimeSimulation(config, seed=seed)
        self.clock: pygame.time.Clock = pygame.time.Clock()
        self.screen: Optional[pygame.Surface] = None
        self.renderer: Optional[SlimeRenderer] = None
        self.show_hud: bool = False

    def setup_game(self) -> bool:
        """Open the window. Returns False if no display is available."""
        display = self.simulation.config.display
        try:
            self.screen = pygame.display.set_mode((display.screen_width, display.screen_height))
            pygame.display.set_caption("Sage Slime")
        except pygame.error as e:
            logger.error("Couldn't set the display mode: %s", e)
            return False

        self.renderer = SlimeRenderer(self.screen, pygame.font.Font(None, 24))
        return True

    def handle_events(self) -> bool:
        """Translate pygame events into simulation input. Returns False to quit."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            elif event.type == pygame.MOUSEMOTION:
                self.simulation.post_event(PointerMoved(*event.pos))
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.simulation.post_event(PointerPressed(*event.pos))
            elif event.type == pygame.KEYDOWN:
                if event.key in FORWARDED_KEYS:
                    self.simulation.post_event(KeyPressed(FORWARDED_KEYS[event.key]))
                elif event.key == pygame.K_p:
                    self.simulation.toggle_pause()
                elif event.key == pygame.K_h:
                    self.show_hud = not self.show_hud
                elif event.key == pygame.K_ESCAPE:
                    return False
        return True

    def render(self) -> None:
        if self.renderer is None:
            return
        self.renderer.render(self.simulation, show_hud=self.show_hud)
        pygame.display.flip()

    def run(self) -> bool:
        """Run until the window is closed. Returns False if setup failed."""
        if not self.setup_game():
            return False

        separator = "=" * self.simulation.config.display.separator_width
        logger.info(separator)
        logger.info("SAGE SLIME")
        logger.info(separator)
        logger.info("Controls:")
        logger.info("  CLICK FLOWER - Pick up / drop the flower")
        logger.info("  CLICK SLIME  - Poke the slime")
        logger.info("  SPACE        - Jump")
        logger.info("  P            - Pause/Resume")
        logger.info("  H            - Toggle stats panel")
        logger.info("  ESC          - Quit")
        logger.info(separator)

        frame_rate = self.simulation.config.display.frame_rate
        while self.handle_events():
            self.simulation.update()
            self.render()
            self.clock.tick(frame_rate)

        for key, value in self.simulation.get_stats().items():
            logger.info("  %s: %s", key, value)
        logger.info("Goodbye!")
        return True


def run_app(seed: Optional[int] = None) -> bool:
    """Entry point for the windowed simulation."""
    pygame.init()
    app = SlimeApp(seed=seed)
    try:
        return app.run()
    finally:
        pygame.quit()
