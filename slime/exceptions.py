"""Sage Slime exception hierarchy.

The simulation itself never raises during a frame; these exist for
startup checks and programming errors that should fail loudly.
"""


class SlimeError(Exception):
    """Root of all Sage Slime domain exceptions."""


class SimulationError(SlimeError):
    """Errors during simulation execution (systems, entities)."""


class ConfigurationError(SlimeError):
    """Invalid or incomplete configuration."""
