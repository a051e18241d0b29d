"""Update phase definitions for explicit execution ordering.

One simulation frame runs these phases in order:

    1. INPUT: Drain the input inbox (clicks, key presses, pointer moves)
    2. THINK: Behavior state machine picks intents and transitions
    3. ACT: Physics integrates motion and derives animation factors
    4. AMBIENT: Decorative particles drift and flicker

Input is handled before the behavior step so that a click always takes
effect on the frame it was delivered, in arrival order.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

__all__ = [
    "UpdatePhase",
    "PhaseRunner",
    "runs_in_phase",
    "get_system_phase",
]

if TYPE_CHECKING:
    from slime.systems.base import BaseSystem


class UpdatePhase(Enum):
    """Phases of a simulation update tick."""

    INPUT = auto()
    THINK = auto()
    ACT = auto()
    AMBIENT = auto()


@dataclass
class PhaseRunner:
    """Executes registered systems phase by phase.

    Within a phase, systems run in registration order.

    Example:
        runner = PhaseRunner()
        runner.register(physics)  # phase read from @runs_in_phase
        runner.register(behavior)
        runner.run_all(frame=1)  # behavior runs before physics
    """

    _systems_by_phase: Dict[UpdatePhase, List["BaseSystem"]] = field(
        default_factory=lambda: {phase: [] for phase in UpdatePhase}
    )

    def register(self, system: "BaseSystem", phase: Optional[UpdatePhase] = None) -> None:
        """Register a system, defaulting to the phase it declares."""
        resolved = phase if phase is not None else get_system_phase(system)
        if resolved is None:
            raise ValueError(f"{system!r} does not declare an update phase")
        self._systems_by_phase[resolved].append(system)

    def run_all(self, frame: int) -> None:
        for phase in UpdatePhase:
            self.run_phase(phase, frame)

    def run_phase(self, phase: UpdatePhase, frame: int) -> None:
        for system in self._systems_by_phase[phase]:
            if system.enabled:
                system.update(frame)

    def get_debug_info(self) -> Dict[str, Any]:
        return {
            "systems_per_phase": {
                phase.name: [s.name for s in systems]
                for phase, systems in self._systems_by_phase.items()
                if systems
            },
        }


def runs_in_phase(phase: UpdatePhase) -> Callable:
    """Decorator to declare which phase a system runs in.

    Example:
        @runs_in_phase(UpdatePhase.ACT)
        class PhysicsSystem(BaseSystem):
            ...
    """

    def decorator(cls):
        cls._phase = phase
        return cls

    return decorator


def get_system_phase(system: "BaseSystem") -> Optional[UpdatePhase]:
    """Get the phase a system is declared to run in."""
    return getattr(system, "_phase", None)
