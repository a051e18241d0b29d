"""Ambient firefly particle configuration."""

FIREFLY_COUNT = 50
FIREFLY_MAX_DRIFT = 0.3
FIREFLY_MIN_SIZE = 1.0
FIREFLY_MAX_SIZE = 3.0
FIREFLY_MIN_FLICKER_SPEED = 0.01
FIREFLY_MAX_FLICKER_SPEED = 0.05
FIREFLY_HUE = 90
