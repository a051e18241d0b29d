"""Sage Slime simulation core.

The core is headless: it owns the creature, the flower and the per-frame
systems that drive them. Rendering lives in the ``rendering`` package.
"""

from slime.simulation import SimulationContext, SlimeSimulation
from slime.state_machine import SlimeState

__all__ = [
    "SimulationContext",
    "SlimeSimulation",
    "SlimeState",
]
