"""Per-frame systems of the slime simulation.

Execution order (see ``slime.update_phases``):

    INPUT    InputSystem      drain the inbox into the behavior system
    THINK    BehaviorSystem   run the state handler, oversize safeguard
    ACT      PhysicsSystem    locomotion, gravity, bounce, squash/stretch
    AMBIENT  FireflySystem    drift and wrap particles

``FlowerSpawner`` is not a per-frame system; the behavior handlers call it
when the slime finishes a meal or a shrink.
"""

from slime.systems.base import BaseSystem, SystemResult
from slime.systems.behavior import BehaviorSystem
from slime.systems.fireflies import FireflySystem
from slime.systems.flower_spawning import FlowerSpawner
from slime.systems.input import InputSystem
from slime.systems.physics import PhysicsSystem

__all__ = [
    "BaseSystem",
    "SystemResult",
    "BehaviorSystem",
    "FireflySystem",
    "FlowerSpawner",
    "InputSystem",
    "PhysicsSystem",
]
