"""Result type for operations that can be refused without being errors.

A poke on a creature that is busy growing, or a flower spawn that runs out
of attempts, is a normal outcome rather than a bug. Those operations return
``Ok(value)`` or ``Err(message)`` and the caller decides what to do.

    outcome = machine.try_transition(SlimeState.POKED)
    if outcome.is_err():
        logger.debug(outcome.error)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """A successful outcome carrying ``value``."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    @property
    def error(self) -> None:
        return None

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True)
class Err(Generic[E]):
    """A refused outcome carrying an ``error`` description."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self):
        """Raises ValueError; check is_ok() first."""
        raise ValueError(f"Called unwrap on Err: {self.error}")

    @property
    def value(self) -> None:
        return None

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Union[Ok[T], Err[E]]

__all__ = ["Ok", "Err", "Result"]
