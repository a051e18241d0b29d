"""Base class for simulation systems.

Every per-frame concern (input, behavior, physics, particles) is a system:
it is built with the shared ``SimulationContext``, can be disabled, and
returns a ``SystemResult`` describing what it did.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional

__all__ = [
    "SystemResult",
    "BaseSystem",
]

if TYPE_CHECKING:
    from slime.simulation import SimulationContext
    from slime.update_phases import UpdatePhase


@dataclass
class SystemResult:
    """Result of a system update cycle.

    Attributes:
        entities_affected: Number of entities that were modified
        skipped: Whether the update was skipped (system disabled)
        details: System-specific details (e.g., {"transition": "GROWING"})
    """

    entities_affected: int = 0
    skipped: bool = False
    details: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def skipped_result() -> "SystemResult":
        return SystemResult(skipped=True)


class BaseSystem(ABC):
    """Abstract base class for all simulation systems.

    Subclasses implement ``_do_update``; ``update`` handles the enabled
    flag and update counting.
    """

    _phase: Optional["UpdatePhase"] = None

    def __init__(self, context: "SimulationContext", name: str) -> None:
        self._context = context
        self._name = name
        self._enabled = True
        self._update_count = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = value

    @property
    def context(self) -> "SimulationContext":
        return self._context

    @property
    def update_count(self) -> int:
        return self._update_count

    @property
    def phase(self) -> Optional["UpdatePhase"]:
        return self._phase

    def update(self, frame: int) -> SystemResult:
        """Perform the system's per-frame logic.

        Args:
            frame: Current simulation frame number
        """
        if not self._enabled:
            return SystemResult.skipped_result()

        result = self._do_update(frame)
        self._update_count += 1
        return result

    @abstractmethod
    def _do_update(self, frame: int) -> SystemResult:
        """Implement system-specific update logic."""

    def get_debug_info(self) -> Dict[str, Any]:
        return {
            "name": self._name,
            "enabled": self._enabled,
            "update_count": self._update_count,
            "phase": self._phase.name if self._phase else None,
        }

    def __repr__(self) -> str:
        phase_str = f", phase={self._phase.name}" if self._phase else ""
        return f"{self.__class__.__name__}(name={self._name!r}, enabled={self._enabled}{phase_str})"
