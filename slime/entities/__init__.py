"""Simulation entities: the slime and its flower."""

from slime.entities.base import Rect
from slime.entities.creature import Creature
from slime.entities.flower import Flower

__all__ = ["Rect", "Creature", "Flower"]
