"""Physics & animation integrator for the slime.

Consumes the movement intent written by the behavior system and:

- crawls horizontally with a speed modulated by the crawl-wave
  ``sin(frame * CRAWL_WAVE_FREQUENCY)``, so the gait ripples,
- keeps the whole body inside the viewport,
- applies gravity and an inelastic ground bounce (``RESTITUTION``),
- derives the squash/stretch factors the renderer uses.

The frame counter is the only phase source; nothing here reads a clock.
"""

import math
from typing import TYPE_CHECKING, Tuple

from slime.config.creature import (
    BREATH_AMPLITUDE,
    CRAWL_SQUASH,
    CRAWL_STRETCH,
    CRAWL_WAVE_FREQUENCY,
    WOBBLE_FREQUENCY,
    WOBBLE_MAX,
)
from slime.entities.creature import Creature
from slime.state_machine import SlimeState
from slime.systems.base import BaseSystem, SystemResult
from slime.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from slime.simulation import SimulationContext


def crawl_wave(frame: int) -> float:
    return math.sin(frame * CRAWL_WAVE_FREQUENCY)


def locomote(creature: Creature, wave: float) -> None:
    """Advance x along the movement intent."""
    if creature.move_dir != 0:
        creature.pos.x += creature.move_dir * creature.config.move_speed * (1 + abs(wave))


def clamp_horizontal(creature: Creature, screen_width: float) -> None:
    """Keep the full body on screen; a body wider than the screen is centred."""
    half = creature.width / 2
    if creature.width >= screen_width:
        creature.pos.x = screen_width / 2
    else:
        creature.pos.x = min(max(creature.pos.x, half), screen_width - half)


def resolve_ground_contact(creature: Creature, ground: float, restitution: float) -> bool:
    """Rest the body on the ground and bounce if it sank below it.

    Returns:
        True if the creature touched the ground this frame
    """
    if creature.bottom <= ground:
        return False
    creature.pos.y = ground - creature.height
    creature.vy *= -restitution
    return True


def integrate_vertical(creature: Creature, ground: float) -> bool:
    """Apply one frame of gravity, then resolve ground contact."""
    config = creature.config
    creature.vy += config.gravity
    creature.pos.y += creature.vy
    return resolve_ground_contact(creature, ground, config.restitution)


def compute_stretch(creature: Creature, frame: int, wave: float) -> Tuple[float, float]:
    """Return ``(stretch_x, stretch_y)`` for this frame.

    POKED wobbles with an amplitude that decays linearly over the poke;
    crawling leans into the direction of travel; otherwise the slime
    breathes. In every case the two axes move in antiphase.
    """
    if creature.state is SlimeState.POKED:
        duration = creature.config.poke_duration
        amplitude = WOBBLE_MAX * max(creature.poke_timer, 0) / duration
        wobble = amplitude * math.sin(frame * WOBBLE_FREQUENCY)
        return (1 + wobble, 1 - wobble)

    if creature.move_dir != 0:
        return (
            1 + CRAWL_STRETCH * wave * creature.move_dir,
            1 - CRAWL_STRETCH * abs(wave) * CRAWL_SQUASH,
        )

    return (1 + BREATH_AMPLITUDE * wave, 1 - BREATH_AMPLITUDE * wave)


@runs_in_phase(UpdatePhase.ACT)
class PhysicsSystem(BaseSystem):
    """Integrates slime motion once per frame.

    Attributes:
        ground_contacts: Number of frames the slime touched the ground
    """

    def __init__(self, context: "SimulationContext") -> None:
        super().__init__(context, "Physics")
        self.ground_contacts: int = 0

    def _do_update(self, frame: int) -> SystemResult:
        ctx = self._context
        creature = ctx.creature
        display = ctx.config.display

        wave = crawl_wave(frame)
        locomote(creature, wave)
        creature.stretch_x, creature.stretch_y = compute_stretch(creature, frame, wave)
        clamp_horizontal(creature, display.screen_width)

        grounded = integrate_vertical(creature, display.ground)
        if grounded:
            self.ground_contacts += 1

        return SystemResult(
            entities_affected=1,
            details={"grounded": grounded, "vy": creature.vy},
        )
