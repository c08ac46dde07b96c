# renderer.py

import pygame
import constants


def arena_rect(width: int, height: int, fill: float = constants.ARENA_FILL):
    """Returns (x, y, w, h) of the arena's bounding box, centred in the surface."""
    disk_w = width * fill
    disk_h = height * fill
    return ((width - disk_w) / 2.0, (height - disk_h) / 2.0, disk_w, disk_h)


def to_screen(position, radius: float, rect):
    """
    Maps an arena-relative particle to the bounding box of its on-screen ellipse.

    The unit circle fills `rect`, so a particle at (x, y) is centred at
    rect centre + (x * w/2, y * h/2) and its radius scales by the same factors.
    """
    disk_x, disk_y, disk_w, disk_h = rect
    cx = disk_x + disk_w / 2.0 + position[0] * disk_w / 2.0
    cy = disk_y + disk_h / 2.0 + position[1] * disk_h / 2.0
    w = radius * disk_w
    h = radius * disk_h
    return (cx - w / 2.0, cy - h / 2.0, w, h)


def draw_pool(surface: pygame.Surface, pool):
    """
    Draws the arena and every particle. The main particle (index 0) is
    drawn last, in its own color, so it is never hidden by the others.
    """
    surface.fill(constants.BACKGROUND_COLOR)

    rect = arena_rect(surface.get_width(), surface.get_height())
    pygame.draw.ellipse(surface, constants.ARENA_COLOR, pygame.Rect(rect))

    particles = pool.particles
    for particle in particles[1:]:
        pygame.draw.ellipse(surface, constants.PARTICLE_COLOR,
                            pygame.Rect(to_screen(particle.position, particle.radius, rect)))

    if particles:
        main = particles[0]
        pygame.draw.ellipse(surface, constants.MAIN_PARTICLE_COLOR,
                            pygame.Rect(to_screen(main.position, main.radius, rect)))
