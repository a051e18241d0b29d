"""Flower target configuration."""

# A press closer than this to the flower centre grabs/drops it
PICKUP_RADIUS = 30.0

# Spawn area and the clearance kept around the slime
SPAWN_EDGE_MARGIN = 50.0
SPAWN_SAFETY_MARGIN = 50.0
SPAWN_TOP_OFFSET = 200.0  # Highest spawn point is this far above mid-screen
SPAWN_MAX_ATTEMPTS = 1000

# Petal rings
RING_COUNT = 2
RING_BASE_RADIUS = 20.0
RING_RADIUS_STEP = 25.0
RING_FREQUENCY_STEP = 3.0
RING_HUE_STEP = 30.0
PETAL_ANGLE_STEP = 0.5  # Degrees between petal dots
HALO_HUE_OFFSET = 45.0
