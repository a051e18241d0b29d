"""Small math helpers shared by the simulation systems.

Pure Python on purpose: the core runs without pygame so it can be
stepped headless and in tests.
"""

from __future__ import annotations

import math


class Vector2:
    """A mutable 2D vector."""

    __slots__ = ("x", "y")

    def __init__(self, x: float = 0.0, y: float = 0.0) -> None:
        self.x: float = float(x)
        self.y: float = float(y)

    def distance_to(self, other: "Vector2") -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        return math.sqrt(dx * dx + dy * dy)

    def update(self, x: float, y: float) -> None:
        self.x = float(x)
        self.y = float(y)

    def __repr__(self) -> str:
        return f"Vector2({self.x}, {self.y})"


def sign(value: float) -> int:
    """Return -1, 0 or 1 depending on the sign of ``value``."""
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into ``[low, high]``."""
    return min(max(value, low), high)


def lerp(start: float, stop: float, amount: float) -> float:
    """Linear interpolation from ``start`` toward ``stop``."""
    return start + amount * (stop - start)


def remap(value: float, in_low: float, in_high: float, out_low: float, out_high: float) -> float:
    """Map ``value`` from one range onto another (no clamping)."""
    return out_low + (value - in_low) * (out_high - out_low) / (in_high - in_low)


__all__ = ["Vector2", "sign", "clamp", "lerp", "remap"]
