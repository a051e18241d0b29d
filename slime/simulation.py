"""Headless simulation engine for the slime.

The engine is a coordinator: it owns the shared ``SimulationContext`` and
the per-frame systems, and runs them phase by phase. It contains no
behavior or physics logic itself.

    sim = SlimeSimulation(seed=42)
    sim.post_event(PointerPressed(400, 300))
    sim.update()  # input -> behavior -> physics -> particles
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from slime.config.simulation_config import SimulationConfig
from slime.entities.creature import Creature
from slime.entities.flower import Flower
from slime.input_events import InputEvent, InputInbox
from slime.math_utils import Vector2
from slime.state_machine import create_slime_state_machine
from slime.systems.behavior import BehaviorSystem
from slime.systems.fireflies import Firefly, FireflySystem, spawn_fireflies
from slime.systems.flower_spawning import FlowerSpawner
from slime.systems.input import InputSystem
from slime.systems.physics import PhysicsSystem
from slime.update_phases import PhaseRunner

logger = logging.getLogger(__name__)


@dataclass
class SimulationContext:
    """Everything the systems share for one simulation run.

    Attributes:
        config: Validated simulation configuration
        rng: Shared random number generator
        creature: The slime
        flower: The flower it hunts
        spawner: Places the flower after meals
        inbox: Input events waiting for the next frame
        pointer: Last known pointer position
        frame: Frame currently being simulated
        fireflies: Ambient particles
    """

    config: SimulationConfig
    rng: random.Random
    creature: Creature
    flower: Flower
    spawner: FlowerSpawner
    inbox: InputInbox = field(default_factory=InputInbox)
    pointer: Vector2 = field(default_factory=Vector2)
    frame: int = 0
    fireflies: List[Firefly] = field(default_factory=list)


def create_context(config: SimulationConfig, rng: random.Random) -> SimulationContext:
    """Build the initial creature, flower and particles."""
    display = config.display
    creature = Creature(
        config.creature,
        x=display.screen_width / 2,
        state_machine=create_slime_state_machine(track_history=config.track_history),
    )
    flower = Flower(0.0, 0.0, pickup_radius=config.flower.pickup_radius)
    spawner = FlowerSpawner(config.flower, display, rng=rng)
    spawner.respawn(flower, creature)

    fireflies: List[Firefly] = []
    if config.fireflies.enabled:
        fireflies = spawn_fireflies(
            config.fireflies.count, display.screen_width, display.screen_height, rng
        )

    return SimulationContext(
        config=config,
        rng=rng,
        creature=creature,
        flower=flower,
        spawner=spawner,
        pointer=Vector2(display.screen_width / 2, display.screen_height / 2),
        fireflies=fireflies,
    )


class SlimeSimulation:
    """Frame-driven slime simulation.

    Attributes:
        config: Simulation configuration
        context: Shared state (creature, flower, pointer, inbox)
        frame_count: Total frames elapsed
        paused: Whether update() is currently a no-op
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        *,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ) -> None:
        """Initialize the simulation.

        Args:
            config: Simulation configuration (defaults if not provided)
            rng: Shared random number generator for deterministic runs
            seed: Optional seed (used if rng is not provided)
        """
        self.config = config or SimulationConfig()
        if seed is not None:
            self.config.seed = seed
        self.config.validate()

        if rng is not None:
            self.rng = rng
        else:
            self.rng = random.Random(self.config.seed)

        self.frame_count: int = 0
        self.paused: bool = False
        self.context = create_context(self.config, self.rng)

        self.behavior = BehaviorSystem(self.context)
        self.input = InputSystem(self.context, self.behavior)
        self.physics = PhysicsSystem(self.context)
        self.fireflies = FireflySystem(self.context)
        self.fireflies.enabled = self.config.fireflies.enabled

        self._runner = PhaseRunner()
        for system in (self.input, self.behavior, self.physics, self.fireflies):
            self._runner.register(system)

        logger.info(
            f"SlimeSimulation initialized (seed={self.config.seed}, "
            f"{self.config.display.screen_width}x{self.config.display.screen_height})"
        )

    @property
    def creature(self) -> Creature:
        return self.context.creature

    @property
    def flower(self) -> Flower:
        return self.context.flower

    def post_event(self, event: InputEvent) -> None:
        """Queue an input event for the start of the next frame."""
        self.context.inbox.post(event)

    def update(self) -> None:
        """Advance the simulation by one frame."""
        if self.paused:
            return
        self.frame_count += 1
        self.context.frame = self.frame_count
        self._runner.run_all(self.frame_count)

    def toggle_pause(self) -> bool:
        self.paused = not self.paused
        logger.info("Simulation paused" if self.paused else "Simulation resumed")
        return self.paused

    def get_stats(self) -> Dict[str, Any]:
        creature = self.creature
        return {
            "frame": self.frame_count,
            "state": creature.state.name,
            "scale": round(creature.scale, 3),
            "eat_count": creature.eat_count,
            "flowers_spawned": self.context.spawner.total_spawned,
            "oversize_resets": self.behavior.oversize_resets,
            "ground_contacts": self.physics.ground_contacts,
            "position": (round(creature.pos.x, 1), round(creature.pos.y, 1)),
        }

    def get_debug_info(self) -> Dict[str, Any]:
        return {
            "runner": self._runner.get_debug_info(),
            "systems": [
                system.get_debug_info()
                for system in (self.input, self.behavior, self.physics, self.fireflies)
            ],
        }

    def run_headless(self, max_frames: int, stats_interval: int = 300) -> Dict[str, Any]:
        """Step the simulation without a display and log periodic stats.

        Args:
            max_frames: Number of frames to simulate
            stats_interval: Log stats every N frames (0 disables)

        Returns:
            Final stats dictionary
        """
        separator = "=" * self.config.display.separator_width
        logger.info(separator)
        logger.info("SAGE SLIME - HEADLESS RUN (%d frames)", max_frames)
        logger.info(separator)

        for _ in range(max_frames):
            self.update()
            if stats_interval and self.frame_count % stats_interval == 0:
                self._log_stats()

        stats = self.get_stats()
        logger.info(separator)
        logger.info("SIMULATION ENDED - Final Statistics")
        logger.info(separator)
        for key, value in stats.items():
            logger.info("  %s: %s", key, value)
        return stats

    def _log_stats(self) -> None:
        stats = self.get_stats()
        logger.info(
            "[frame %d] state=%s scale=%.2f eaten=%d spawned=%d",
            stats["frame"],
            stats["state"],
            stats["scale"],
            stats["eat_count"],
            stats["flowers_spawned"],
        )
