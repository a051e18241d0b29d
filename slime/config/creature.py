"""Slime creature configuration: body, locomotion, physics and behavior timing.

Durations are in frames at FRAME_RATE (60 fps).
"""

# Pixel-art body. "X" cells are drawn; everything else is transparent.
SLIME_BITMAP = (
    "................",
    "......XXXX......",
    "....XXXXXXXX....",
    "...XXXXXXXXXX...",
    "..XXXXXXXXXXXX..",
    "..XXXXXXXXXXXX..",
    ".XXXXXXXXXXXXXX.",
    ".XXXXXXXXXXXXXX.",
    ".XXXXXXXXXXXXXX.",
    ".XXXXXXXXXXXXXX.",
    ".XXXXXXXXXXXXXX.",
    "..XXXXXXXXXXXX..",
    "...XXXXXXXXXX...",
    "      XX..XX    ",
    "      XX..XX    ",
    "................",
)

# Size of one bitmap cell at birth, in screen pixels
INITIAL_PIXEL_SIZE = 8.0

# Spawn point (x is the canvas centre)
INITIAL_Y = 100.0

# Locomotion
MOVE_SPEED = 1.5
SEEK_DEAD_ZONE = 5.0  # Stop steering when the flower is this close horizontally

# Vertical physics
GRAVITY = 0.8
JUMP_STRENGTH = 18.0
RESTITUTION = 0.65  # Fraction of speed kept on each ground bounce
SEEK_JUMP_MAX_VY = 1.0  # Autonomous jumps only from (near) rest
KEY_JUMP_MAX_VY = 5.0  # Player jumps allowed a little mid-bounce

# Seeking geometry, as fractions of the current body size
JUMP_TRIGGER_HEIGHT = 0.2  # Flower must be this far above centre
JUMP_TRIGGER_WIDTH = 0.75  # ...and horizontally within this reach
EAT_BOX_WIDTH = 0.15
EAT_BOX_HEIGHT = 0.2

# Growth cycle
GROW_AMOUNT = 2.0
GROW_EASE = 0.1
SHRINK_EASE = 0.05
SIZE_SNAP_TOLERANCE = 0.1
MAX_EAT_COUNT = 5
OVERSIZE_FACTOR = 1.5  # Reset when wider than this many viewports

# Behavior timers
PAUSE_DURATION = 120  # ~2 seconds of digestion
IDLE_DURATION = 90  # ~1.5 seconds of thinking
POKE_DURATION = 45  # ~0.75 seconds of wobble

# Animation
CRAWL_WAVE_FREQUENCY = 0.05
CRAWL_STRETCH = 0.1
CRAWL_SQUASH = 0.2
BREATH_AMPLITUDE = 0.05
WOBBLE_MAX = 0.3
WOBBLE_FREQUENCY = 0.5
ROW_WAVE_FREQUENCY = 0.1
ROW_WAVE_PHASE = 0.5
ROW_WAVE_AMPLITUDE = 0.25

# Colours
BODY_COLOR = (120, 220, 140)
POWERED_UP_HUE_SPEED = 5  # Degrees of hue per frame while powered up
EYE_COLOR = (255, 255, 255)
PUPIL_COLOR = (155, 155, 155)
