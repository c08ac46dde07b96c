import logging
import os

import pytest

# Render onto off-screen surfaces only.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

from particle import Particle


@pytest.fixture
def make_particle():
    def _make(position=(0.0, 0.0), velocity=(0.0, 0.0), radius=0.05, mass=1.0):
        return Particle(mass, radius, position, velocity)
    return _make


@pytest.fixture
def app_logger():
    logger = logging.getLogger("brownian_sim")
    yield logger
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
