"""Display and timing configuration constants."""

# Canvas size in logical pixels
SCREEN_WIDTH = 750
SCREEN_HEIGHT = 750

# The frame rate for the game loop, in frames per second
FRAME_RATE = 60

# The ground line sits this far above the bottom of the canvas
GROUND_OFFSET = 150

# Background colour (dark forest green)
BACKGROUND_COLOR = (15, 25, 10)

# UI Display Constants
SEPARATOR_WIDTH = 60  # Width of separator lines in console output
HUD_TEXT_COLOR = (200, 220, 200)
HUD_PANEL_COLOR = (10, 20, 10)
HUD_PANEL_ALPHA = 180
