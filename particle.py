# particle.py

import logging
import numpy as np

logger = logging.getLogger("brownian_sim")


def check_positive(name: str, value) -> float:
    """Returns value as a float, raising ValueError unless it is finite and > 0."""
    value = float(value)
    if not np.isfinite(value) or value <= 0:
        raise ValueError(f"Particle {name} must be positive, got {value}")
    return value


class Particle:
    """
    Represents a single disk-shaped particle inside the unit-circle arena.

    Data Contract:
    - Inputs:
        - mass (float): Must be > 0.
        - radius (float): Must be > 0.
        - position (array-like): Arena-relative centre, shape (2,).
        - velocity (array-like): Shape (2,).
    - Side Effects: Copies position and velocity into float64 arrays owned by
      the particle.
    - Invariants: `collided` is only True between a collision and the end of
      the tick in which it happened.
    """
    def __init__(self, mass: float, radius: float, position, velocity):
        self.mass = check_positive("mass", mass)
        self.radius = check_positive("radius", radius)
        self.position = np.array(position, dtype=np.float64)
        self.velocity = np.array(velocity, dtype=np.float64)
        self.collided = False

    @classmethod
    def from_polar(cls, mass: float, radius: float, x: float, y: float, speed: float, angle: float):
        """Builds a particle whose velocity is given as a speed and a heading angle."""
        velocity = (speed * np.cos(angle), speed * np.sin(angle))
        return cls(mass, radius, (x, y), velocity)

    @property
    def kinetic_energy(self) -> float:
        return 0.5 * self.mass * float(np.dot(self.velocity, self.velocity))

    @property
    def momentum(self) -> np.ndarray:
        return self.mass * self.velocity

    def integrate(self, dt: float):
        """
        Advances the particle by dt and bounces it off the arena wall.
        p_new = p_old + v * dt
        """
        if dt < 0:
            raise ValueError(f"Time step must be non-negative, got {dt}")
        if dt == 0:
            return
        self.position += self.velocity * dt
        self.resolve_boundary()

    def resolve_boundary(self) -> bool:
        """
        Checks for and handles contact with the unit-circle boundary.

        The velocity is reflected about the outward radial normal and the
        particle is placed exactly on the circle of radius (1 - radius).
        Returns True if a reflection happened.
        """
        limit = 1.0 - self.radius
        dist_sq = float(np.dot(self.position, self.position))
        if dist_sq < limit * limit:
            return False

        # A particle sitting on the origin has no outward normal.
        if dist_sq == 0.0:
            logger.debug("Boundary contact at the origin skipped (no defined normal).")
            return False

        normal = self.position / np.sqrt(dist_sq)
        self.velocity = self.velocity - 2.0 * np.dot(self.velocity, normal) * normal
        self.position = normal * limit

        self.collided = True
        return True

    def __repr__(self):
        return (
            f"Particle(mass={self.mass}, radius={self.radius}, "
            f"position={self.position.tolist()}, velocity={self.velocity.tolist()})"
        )


def resolve_collision(a: Particle, b: Particle) -> bool:
    """
    Detects and resolves an elastic collision between two particles.

    Both particles' state is read into locals first, the update is computed,
    and then both are written back, so the caller may pass two elements of
    the same list.

    Data Contract:
    - Inputs: a, b (Particle) - Two distinct particles.
    - Outputs: True if the particles were in contact and approaching, in which
      case they are pushed apart to exactly touching, their velocities are
      exchanged along the line of centres, and both are marked collided.
      False otherwise, with neither particle modified.
    - Invariants: Total momentum and kinetic energy of the pair are conserved.
    """
    pos_a, pos_b = a.position, b.position
    vel_a, vel_b = a.velocity, b.velocity
    contact_dist = a.radius + b.radius

    # Ensure particles are in contact
    d = pos_b - pos_a
    dist_sq = float(np.dot(d, d))
    if dist_sq > contact_dist * contact_dist:
        return False

    # Ensure at least one of them is closing the gap
    if np.dot(d, vel_a) <= 0.0 and np.dot(d, vel_b) >= 0.0:
        return False

    # Coincident centres give no line of centres to resolve along.
    if dist_sq == 0.0:
        logger.debug("Pairwise contact with coincident centres skipped.")
        return False

    # 1. Backtrack overlap, split evenly between the two particles
    distance = np.sqrt(dist_sq)
    overlap = (contact_dist - distance) / 2.0
    shift = d * (overlap / distance)

    # 2. Elastic collision along the line of centres (uses pre-backtrack d)
    dv = vel_b - vel_a
    total_mass = a.mass + b.mass
    impulse = np.dot(dv, d) / dist_sq * d
    new_vel_a = vel_a + (2.0 * b.mass / total_mass) * impulse
    new_vel_b = vel_b - (2.0 * a.mass / total_mass) * impulse

    a.position = pos_a - shift
    b.position = pos_b + shift
    a.velocity = new_vel_a
    b.velocity = new_vel_b

    a.collided = True
    b.collided = True
    return True
