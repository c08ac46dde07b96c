# constants.py

"""
Application Constants

This module defines static configuration values for the application's framework.
These are not expected to change between simulation runs.

Data Contract:
- All values are immutable constants.
- Colors are RGB tuples.
"""

# Screen dimensions
WIDTH = 800  # Pixels
HEIGHT = 800  # Pixels

# Framerate
FPS = 60  # Frames per second

# Window Title
TITLE = "Brownian Motion"

# Fraction of the window covered by the arena disk.
ARENA_FILL = 0.9

# Colors (RGB)
BACKGROUND_COLOR = (10, 10, 20)
ARENA_COLOR = (31, 31, 41)
PARTICLE_COLOR = (61, 61, 79)
MAIN_PARTICLE_COLOR = (99, 199, 99)
