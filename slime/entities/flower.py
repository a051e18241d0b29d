"""The flower the slime hunts. A single mutable slot, never destroyed."""

from slime.math_utils import Vector2


class Flower:
    """Target entity, repositioned by the spawner or dragged by the user.

    While ``held`` is true the flower follows the pointer and cannot be
    eaten.
    """

    def __init__(self, x: float, y: float, pickup_radius: float) -> None:
        self.pos = Vector2(x, y)
        self.pickup_radius = pickup_radius
        self.held: bool = False

    def is_under(self, point: Vector2) -> bool:
        """Check if a pointer press at ``point`` hits the flower."""
        return self.pos.distance_to(point) < self.pickup_radius

    def move_to(self, x: float, y: float) -> None:
        self.pos.update(x, y)

    def __repr__(self) -> str:
        return f"Flower(pos={self.pos!r}, held={self.held})"
