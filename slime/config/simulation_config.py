"""Aggregate simulation configuration built from the constant modules."""

from dataclasses import dataclass, field
from typing import Optional

from slime.config.creature import (
    GRAVITY,
    GROW_AMOUNT,
    IDLE_DURATION,
    INITIAL_PIXEL_SIZE,
    INITIAL_Y,
    JUMP_STRENGTH,
    MAX_EAT_COUNT,
    MOVE_SPEED,
    OVERSIZE_FACTOR,
    PAUSE_DURATION,
    POKE_DURATION,
    RESTITUTION,
)
from slime.config.display import (
    FRAME_RATE,
    GROUND_OFFSET,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    SEPARATOR_WIDTH,
)
from slime.config.fireflies import FIREFLY_COUNT
from slime.config.flower import (
    PICKUP_RADIUS,
    SPAWN_EDGE_MARGIN,
    SPAWN_MAX_ATTEMPTS,
    SPAWN_SAFETY_MARGIN,
)
from slime.exceptions import ConfigurationError


@dataclass
class DisplayConfig:
    """Canvas geometry and frame timing."""

    screen_width: int = SCREEN_WIDTH
    screen_height: int = SCREEN_HEIGHT
    frame_rate: int = FRAME_RATE
    ground_offset: int = GROUND_OFFSET
    separator_width: int = SEPARATOR_WIDTH

    @property
    def ground(self) -> float:
        """Y coordinate of the ground line."""
        return float(self.screen_height - self.ground_offset)


@dataclass
class CreatureConfig:
    """Tunable slime parameters.

    Attributes:
        initial_pixel_size: Size of one bitmap cell at birth and after a shrink
        grow_amount: Pixel size gained per flower eaten
        max_eat_count: Meals before the slime shrinks back to its initial size
        pause_duration: Frames spent digesting after growing
        idle_duration: Frames spent idle before seeking again
        poke_duration: Frames of wobble after being poked
        oversize_factor: Width, in viewport widths, that triggers a hard reset
    """

    initial_pixel_size: float = INITIAL_PIXEL_SIZE
    initial_y: float = INITIAL_Y
    move_speed: float = MOVE_SPEED
    gravity: float = GRAVITY
    jump_strength: float = JUMP_STRENGTH
    restitution: float = RESTITUTION
    grow_amount: float = GROW_AMOUNT
    max_eat_count: int = MAX_EAT_COUNT
    pause_duration: int = PAUSE_DURATION
    idle_duration: int = IDLE_DURATION
    poke_duration: int = POKE_DURATION
    oversize_factor: float = OVERSIZE_FACTOR


@dataclass
class FlowerConfig:
    """Flower pickup and spawning parameters."""

    pickup_radius: float = PICKUP_RADIUS
    edge_margin: float = SPAWN_EDGE_MARGIN
    safety_margin: float = SPAWN_SAFETY_MARGIN
    max_spawn_attempts: int = SPAWN_MAX_ATTEMPTS


@dataclass
class FireflyConfig:
    """Ambient particle parameters."""

    count: int = FIREFLY_COUNT
    enabled: bool = True


@dataclass
class SimulationConfig:
    """Configuration for a simulation run.

    Attributes:
        track_history: Record behavior transitions for debugging
        seed: Optional seed for the shared RNG
    """

    track_history: bool = False
    seed: Optional[int] = None
    display: DisplayConfig = field(default_factory=DisplayConfig)
    creature: CreatureConfig = field(default_factory=CreatureConfig)
    flower: FlowerConfig = field(default_factory=FlowerConfig)
    fireflies: FireflyConfig = field(default_factory=FireflyConfig)

    def validate(self) -> None:
        """Raise ConfigurationError if any parameter is out of range."""
        errors = []
        display = self.display
        creature = self.creature

        if display.screen_width <= 0 or display.screen_height <= 0:
            errors.append("screen dimensions must be positive")
        if display.frame_rate <= 0:
            errors.append("frame_rate must be positive")
        if not 0 <= display.ground_offset < display.screen_height:
            errors.append("ground_offset must lie inside the screen")

        if creature.initial_pixel_size <= 0:
            errors.append("initial_pixel_size must be positive")
        if creature.grow_amount <= 0:
            errors.append("grow_amount must be positive")
        if creature.max_eat_count < 1:
            errors.append("max_eat_count must be at least 1")
        for name in ("pause_duration", "idle_duration", "poke_duration"):
            if getattr(creature, name) < 1:
                errors.append(f"{name} must be at least one frame")
        if not 0.0 <= creature.restitution < 1.0:
            errors.append("restitution must be in [0, 1)")
        if creature.gravity <= 0:
            errors.append("gravity must be positive")
        if creature.oversize_factor <= 0:
            errors.append("oversize_factor must be positive")

        if self.flower.pickup_radius <= 0:
            errors.append("pickup_radius must be positive")
        if self.flower.max_spawn_attempts < 1:
            errors.append("max_spawn_attempts must be at least 1")
        if self.fireflies.count < 0:
            errors.append("firefly count cannot be negative")

        if errors:
            raise ConfigurationError("Invalid simulation config: " + "; ".join(errors))
