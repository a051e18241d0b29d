"""Input messages and the per-frame inbox they are queued in.

Front ends translate their native events (pygame, tests) into these
messages and post them to the simulation. The inbox is drained once at the
start of each frame, so events apply in arrival order and never in the
middle of a behavior step.
"""

from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator, List, Union

JUMP_KEYS = frozenset({"space"})


@dataclass(frozen=True)
class PointerMoved:
    """The pointer moved to (x, y)."""

    x: float
    y: float


@dataclass(frozen=True)
class PointerPressed:
    """The primary pointer button was pressed at (x, y)."""

    x: float
    y: float


@dataclass(frozen=True)
class KeyPressed:
    """A key was pressed. ``key`` is a lowercase name such as "space"."""

    key: str


InputEvent = Union[PointerMoved, PointerPressed, KeyPressed]


class InputInbox:
    """FIFO of input events waiting for the next frame."""

    def __init__(self) -> None:
        self._events: Deque[InputEvent] = deque()

    def post(self, event: InputEvent) -> None:
        self._events.append(event)

    def drain(self) -> Iterator[InputEvent]:
        """Yield and remove queued events in arrival order.

        Events posted while draining are delivered in the same pass.
        """
        while self._events:
            yield self._events.popleft()

    def pending(self) -> List[InputEvent]:
        return list(self._events)

    def __len__(self) -> int:
        return len(self._events)
