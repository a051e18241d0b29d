"""Explicit state machine for the slime's behavior.

All behavior states are enumerated and the frame-driven edges between them
are listed in ``SLIME_TRANSITIONS``. A handler that tries to move along an
edge that is not in the table raises immediately instead of leaving the
creature in a state nothing expects.

Input events and the oversize reset are allowed to override the table
(grabbing the flower pauses the slime no matter what it was doing). Those
go through ``force_state`` so they show up as ``[FORCED]`` in the history.

Usage:
------
    machine = create_slime_state_machine(track_history=True)
    machine.transition(SlimeState.GROWING, frame=120, reason="ate flower")
    machine.force_state(SlimeState.PAUSED, frame=121, reason="flower picked up")
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from typing import Deque, Dict, Generic, List, Mapping, Sequence, TypeVar

from slime.result import Err, Ok, Result

S = TypeVar("S", bound=Enum)


@dataclass(frozen=True)
class StateTransition(Generic[S]):
    """One recorded state change: ``from_state -> to_state`` at ``frame``."""

    from_state: S
    to_state: S
    frame: int
    reason: str = ""


class StateMachine(Generic[S]):
    """Holds one enum state and only moves it along the edges in ``edges``.

    With ``track_history`` the last ``max_history`` changes are kept, forced
    ones included.
    """

    def __init__(
        self,
        initial_state: S,
        edges: Mapping[S, Sequence[S]],
        track_history: bool = False,
        max_history: int = 100,
    ) -> None:
        if initial_state not in edges:
            raise ValueError(
                f"Initial state {initial_state.name} has no entry in the transition table"
            )
        self._state = initial_state
        self._edges = edges
        self._history: Deque[StateTransition[S]] = deque(maxlen=max_history)
        self._track_history = track_history

    @property
    def state(self) -> S:
        return self._state

    @property
    def history(self) -> List[StateTransition[S]]:
        return list(self._history)

    def try_transition(self, target: S, frame: int = 0, reason: str = "") -> Result[S, str]:
        """Move to ``target`` if the table allows it, else return ``Err``."""
        allowed = self._edges.get(self._state, ())
        if target not in allowed:
            return Err(
                f"Invalid transition: {self._state.name} -> {target.name} "
                f"(allowed: {[s.name for s in allowed]})"
            )
        self._set(target, frame, reason)
        return Ok(target)

    def transition(self, target: S, frame: int = 0, reason: str = "") -> S:
        """Like ``try_transition`` but raises ValueError on a missing edge."""
        result = self.try_transition(target, frame, reason)
        if result.is_err():
            raise ValueError(result.error)
        return result.unwrap()

    def force_state(self, state: S, frame: int = 0, reason: str = "forced") -> None:
        """Jump to ``state`` regardless of the table (input overrides, resets)."""
        self._set(state, frame, f"[FORCED] {reason}")

    def _set(self, state: S, frame: int, reason: str) -> None:
        if self._track_history:
            self._history.append(StateTransition(self._state, state, frame, reason))
        self._state = state


# ============================================================================
# Slime Behavior State Machine
# ============================================================================


class SlimeState(Enum):
    """Behavior modes of the slime. Exactly one is active per frame."""

    SEEKING = auto()  # Crawling (and jumping) toward the flower
    GROWING = auto()  # Easing up to the post-meal size
    PAUSED = auto()  # Digesting; also forced while the flower is held
    SHRINKING = auto()  # Easing back down to the initial size
    IDLE = auto()  # Short "thinking" pause before the next hunt
    POKED = auto()  # Wobbling after the user clicked it


# Edges into POKED are the ones a click may take; POKED -> SHRINKING resumes
# an interrupted shrink. The flower grab/drop and the oversize reset bypass
# this table via force_state().
SLIME_TRANSITIONS: Dict[SlimeState, List[SlimeState]] = {
    SlimeState.SEEKING: [SlimeState.GROWING, SlimeState.POKED],
    SlimeState.GROWING: [SlimeState.PAUSED],
    SlimeState.PAUSED: [SlimeState.SHRINKING, SlimeState.IDLE],
    SlimeState.SHRINKING: [SlimeState.IDLE, SlimeState.POKED],
    SlimeState.IDLE: [SlimeState.SEEKING, SlimeState.POKED],
    SlimeState.POKED: [SlimeState.IDLE, SlimeState.SHRINKING],
}


def create_slime_state_machine(track_history: bool = False) -> StateMachine[SlimeState]:
    """Create a state machine for slime behavior, starting in SEEKING.

    Args:
        track_history: Whether to track transition history (useful for debugging)
    """
    return StateMachine(
        initial_state=SlimeState.SEEKING,
        edges=SLIME_TRANSITIONS,
        track_history=track_history,
    )
