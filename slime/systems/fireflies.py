"""Ambient firefly particles drifting behind the slime."""

import math
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, List

from slime.config.fireflies import (
    FIREFLY_MAX_DRIFT,
    FIREFLY_MAX_FLICKER_SPEED,
    FIREFLY_MAX_SIZE,
    FIREFLY_MIN_FLICKER_SPEED,
    FIREFLY_MIN_SIZE,
)
from slime.systems.base import BaseSystem, SystemResult
from slime.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from slime.simulation import SimulationContext


@dataclass
class Firefly:
    x: float
    y: float
    vx: float
    vy: float
    size: float
    flicker_speed: float
    flicker_offset: float

    def flicker(self, frame: int) -> float:
        """Brightness oscillator in [-1, 1]."""
        return math.sin(frame * self.flicker_speed + self.flicker_offset)


def spawn_fireflies(count: int, width: float, height: float, rng: random.Random) -> List[Firefly]:
    return [
        Firefly(
            x=rng.uniform(0, width),
            y=rng.uniform(0, height),
            vx=rng.uniform(-FIREFLY_MAX_DRIFT, FIREFLY_MAX_DRIFT),
            vy=rng.uniform(-FIREFLY_MAX_DRIFT, FIREFLY_MAX_DRIFT),
            size=rng.uniform(FIREFLY_MIN_SIZE, FIREFLY_MAX_SIZE),
            flicker_speed=rng.uniform(FIREFLY_MIN_FLICKER_SPEED, FIREFLY_MAX_FLICKER_SPEED),
            flicker_offset=rng.uniform(0, math.tau),
        )
        for _ in range(count)
    ]


@runs_in_phase(UpdatePhase.AMBIENT)
class FireflySystem(BaseSystem):
    """Drifts fireflies and wraps them around the screen edges."""

    def __init__(self, context: "SimulationContext") -> None:
        super().__init__(context, "Fireflies")

    def _do_update(self, frame: int) -> SystemResult:
        display = self._context.config.display
        width, height = display.screen_width, display.screen_height
        wrapped = 0

        for fly in self._context.fireflies:
            fly.x += fly.vx
            fly.y += fly.vy
            if fly.x < 0:
                fly.x = width
                wrapped += 1
            elif fly.x > width:
                fly.x = 0
                wrapped += 1
            if fly.y < 0:
                fly.y = height
                wrapped += 1
            elif fly.y > height:
                fly.y = 0
                wrapped += 1

        return SystemResult(
            entities_affected=len(self._context.fireflies),
            details={"wrapped": wrapped},
        )
