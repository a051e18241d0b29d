"""Configuration package for the slime simulation.

Constants are grouped by concern (display, creature, flower, fireflies) and
aggregated into dataclasses in ``simulation_config``.
"""
