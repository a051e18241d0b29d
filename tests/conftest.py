"""Pytest configuration and fixtures for slime simulation tests."""

import os
import random

import pytest

# Renderer tests draw onto off-screen surfaces only.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def config():
    """Default configuration with fireflies off and history tracking on."""
    from slime.config.simulation_config import SimulationConfig

    config = SimulationConfig(track_history=True)
    config.fireflies.enabled = False
    return config


@pytest.fixture
def simulation(config, seeded_rng):
    """A fresh simulation with a deterministic seed."""
    from slime.simulation import SlimeSimulation

    return SlimeSimulation(config, rng=seeded_rng)


@pytest.fixture
def grounded_simulation(simulation):
    """A simulation whose slime is resting on the ground with no velocity."""
    creature = simulation.creature
    creature.pos.y = simulation.config.display.ground - creature.height
    creature.vy = 0.0
    return simulation
