"""Flower spawning: pick a fresh flower position clear of the slime.

Candidates are rejection-sampled from the spawn area (inside the edge
margin, between the upper spawn line and just above the ground). A
candidate is rejected while it lies inside the slime's bounding box
inflated by the safety margin. If sampling runs out of attempts (a very
large slime can cover most of the area) the spawner scans the far side of
the area instead, so the loop always terminates.
"""

import logging
import random
from typing import Optional, Tuple

from slime.config.flower import SPAWN_TOP_OFFSET
from slime.config.simulation_config import DisplayConfig, FlowerConfig
from slime.entities.base import Rect
from slime.entities.creature import Creature
from slime.entities.flower import Flower
from slime.math_utils import Vector2
from slime.result import Err, Ok, Result

logger = logging.getLogger(__name__)

# Number of rows scanned by the fallback placement
_FALLBACK_ROWS = 16


class FlowerSpawner:
    """Places the flower at random positions away from the slime.

    Attributes:
        config: Margins and attempt limits
        display: Canvas geometry, used for the spawn area
        _rng: Random number generator for deterministic behavior
        total_spawned: Number of successful respawns
    """

    def __init__(
        self,
        config: FlowerConfig,
        display: DisplayConfig,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config
        self.display = display
        self._rng = rng if rng is not None else random.Random()
        self.total_spawned: int = 0

    def spawn_area(self) -> Tuple[float, float, float, float]:
        """Return ``(min_x, max_x, min_y, max_y)`` of the spawn area."""
        margin = self.config.edge_margin
        min_y = self.display.screen_height / 2 - SPAWN_TOP_OFFSET
        max_y = self.display.ground - margin
        return (margin, self.display.screen_width - margin, min_y, max(min_y, max_y))

    def exclusion_zone(self, creature: Creature) -> Rect:
        return creature.bounds().inflated(self.config.safety_margin)

    def is_clear(self, x: float, y: float, creature: Creature) -> bool:
        """Check that (x, y) lies outside the slime's padded bounding box."""
        return not self.exclusion_zone(creature).contains_point(x, y)

    def find_spawn_point(self, creature: Creature) -> Result[Vector2, str]:
        """Rejection-sample a clear spawn point."""
        min_x, max_x, min_y, max_y = self.spawn_area()
        for _ in range(self.config.max_spawn_attempts):
            x = self._rng.uniform(min_x, max_x)
            y = self._rng.uniform(min_y, max_y)
            if self.is_clear(x, y, creature):
                return Ok(Vector2(x, y))
        return Err(
            f"No clear spawn point after {self.config.max_spawn_attempts} attempts "
            f"(slime bounds {creature.bounds()!r})"
        )

    def fallback_spawn_point(self, creature: Creature) -> Vector2:
        """Deterministic placement on the side of the area away from the slime."""
        min_x, max_x, min_y, max_y = self.spawn_area()
        far_x = max_x if creature.pos.x < self.display.screen_width / 2 else min_x
        near_x = min_x if far_x == max_x else max_x

        for x in (far_x, near_x):
            for row in range(_FALLBACK_ROWS + 1):
                y = min_y + (max_y - min_y) * row / _FALLBACK_ROWS
                if self.is_clear(x, y, creature):
                    return Vector2(x, y)

        logger.warning("Slime covers the whole spawn area; flower placed at the far edge")
        return Vector2(far_x, min_y)

    def respawn(self, flower: Flower, creature: Creature) -> bool:
        """Move the flower to a fresh position.

        A held flower stays with the pointer and is not moved.

        Returns:
            True if the flower was repositioned
        """
        if flower.held:
            logger.debug("Skipping respawn: flower is held")
            return False

        result = self.find_spawn_point(creature)
        if result.is_ok():
            point = result.unwrap()
        else:
            logger.warning(result.error)
            point = self.fallback_spawn_point(creature)

        flower.move_to(point.x, point.y)
        self.total_spawned += 1
        logger.debug(f"Flower respawned at ({point.x:.0f}, {point.y:.0f})")
        return True
