"""Input system: drains the inbox into the behavior system."""

import logging
from typing import TYPE_CHECKING

from slime.systems.base import BaseSystem, SystemResult
from slime.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from slime.simulation import SimulationContext
    from slime.systems.behavior import BehaviorSystem

logger = logging.getLogger(__name__)


@runs_in_phase(UpdatePhase.INPUT)
class InputSystem(BaseSystem):
    """Delivers queued input events, in arrival order, at the start of a frame."""

    def __init__(self, context: "SimulationContext", behavior: "BehaviorSystem") -> None:
        super().__init__(context, "Input")
        self._behavior = behavior
        self.events_handled: int = 0

    def _do_update(self, frame: int) -> SystemResult:
        ctx = self._context
        handled = 0
        for event in ctx.inbox.drain():
            self._behavior.handle_event(event)
            handled += 1

        # A held flower follows the pointer even on frames without motion events.
        if ctx.flower.held:
            ctx.flower.move_to(ctx.pointer.x, ctx.pointer.y)

        if handled:
            logger.debug(f"Frame {frame}: handled {handled} input event(s)")
        self.events_handled += handled
        return SystemResult(details={"events": handled})
