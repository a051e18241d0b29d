"""The slime: a pixel-art creature that eats flowers and grows."""

from typing import Optional, Sequence

from slime.config.creature import SLIME_BITMAP
from slime.config.simulation_config import CreatureConfig
from slime.entities.base import Rect
from slime.exceptions import SimulationError
from slime.math_utils import Vector2
from slime.state_machine import SlimeState, StateMachine, create_slime_state_machine


class Creature:
    """Mutable record of the slime shared by the behavior and physics systems.

    ``pos.x`` is the horizontal centre of the body and ``pos.y`` its top
    edge. Size is expressed as ``scale``, the on-screen size of one bitmap
    cell, so the body is ``columns * scale`` wide.

    Attributes:
        pos: Centre-x / top-y position
        vy: Vertical velocity (positive is down)
        target_scale: Size GROWING eases toward
        stretch_x: Horizontal squash/stretch factor for this frame
        stretch_y: Vertical squash/stretch factor for this frame
        move_dir: Movement intent for this frame (-1, 0 or 1)
        eat_count: Flowers eaten since the last shrink
        pause_timer: Frames of digestion left in PAUSED
        idle_timer: Frames left in IDLE
        poke_timer: Frames of wobble left in POKED
        poke_resume_state: State a poke interrupted and returns to, if any
        powered_up: Rainbow colouring after a meal
    """

    def __init__(
        self,
        config: CreatureConfig,
        x: float,
        y: Optional[float] = None,
        bitmap: Sequence[str] = SLIME_BITMAP,
        state_machine: Optional[StateMachine[SlimeState]] = None,
    ) -> None:
        self.config = config
        self.bitmap = tuple(bitmap)
        self.columns = len(self.bitmap[0])
        self.rows = len(self.bitmap)

        self.pos = Vector2(x, config.initial_y if y is None else y)
        self.vy: float = 0.0
        self._scale: float = config.initial_pixel_size
        self.target_scale: float = config.initial_pixel_size
        self.stretch_x: float = 1.0
        self.stretch_y: float = 1.0
        self.move_dir: int = 0

        self.eat_count: int = 0
        self.pause_timer: int = 0
        self.idle_timer: int = 0
        self.poke_timer: int = 0
        self.poke_resume_state: Optional[SlimeState] = None
        self.powered_up: bool = False

        self.state_machine = state_machine or create_slime_state_machine()

    @property
    def state(self) -> SlimeState:
        return self.state_machine.state

    @property
    def scale(self) -> float:
        return self._scale

    @scale.setter
    def scale(self, value: float) -> None:
        if value <= 0:
            raise SimulationError(f"Creature scale must stay positive, got {value}")
        self._scale = value

    @property
    def width(self) -> float:
        """Unstretched body width in screen pixels."""
        return self.columns * self._scale

    @property
    def height(self) -> float:
        """Unstretched body height in screen pixels."""
        return self.rows * self._scale

    @property
    def center_y(self) -> float:
        return self.pos.y + self.height / 2

    @property
    def bottom(self) -> float:
        return self.pos.y + self.height

    def bounds(self) -> Rect:
        """Unstretched bounding rectangle used for pokes and spawn clearance."""
        return Rect(self.pos.x - self.width / 2, self.pos.y, self.width, self.height)

    def contains_point(self, px: float, py: float) -> bool:
        return self.bounds().contains_point(px, py)

    def can_jump(self, max_vy: float) -> bool:
        """True when vertical speed is small enough to allow a new jump."""
        return abs(self.vy) < max_vy

    def jump(self) -> None:
        self.vy = -self.config.jump_strength

    def __repr__(self) -> str:
        return (
            f"Creature(state={self.state.name}, pos={self.pos!r}, "
            f"scale={self._scale:.2f}, eat_count={self.eat_count})"
        )
