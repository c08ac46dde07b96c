# pool_generator.py

"""
Initial-state generation for the particle pool.

Particles are scattered uniformly over the unit disk with normally
distributed mass, radius and speed and a uniformly distributed heading.
All randomness flows through a single numpy Generator so a run can be
reproduced from its master seed.
"""

import logging
import math
import numpy as np
from particle import Particle
from particle_pool import ParticlePool

logger = logging.getLogger("brownian_sim")

TWO_PI = 2.0 * math.pi
ARENA_RADIUS = 1.0


class ParticlePoolGenerator:
    """
    Samples fully populated ParticlePools from distribution parameters.

    Data Contract:
    - Inputs:
        - mass_avg, mass_stdev (float): Normal distribution of particle mass.
        - radius_avg, radius_stdev (float): Normal distribution of particle radius.
        - speed_avg, speed_stdev (float): Normal distribution of initial speed.
        - rng (np.random.Generator, optional): Source of randomness.
    - Outputs: None
    - Side Effects: None at construction.
    - Invariants: mass_avg > 0, 0 < radius_avg < 1, every stdev >= 0.
      Violations raise ValueError here, never later as NaNs during a tick.
    """
    def __init__(self, mass_avg: float, mass_stdev: float,
                 radius_avg: float, radius_stdev: float,
                 speed_avg: float, speed_stdev: float,
                 rng: np.random.Generator = None):
        params = {
            'mass_avg': mass_avg, 'mass_stdev': mass_stdev,
            'radius_avg': radius_avg, 'radius_stdev': radius_stdev,
            'speed_avg': speed_avg, 'speed_stdev': speed_stdev,
        }
        for name, value in params.items():
            if not math.isfinite(value):
                raise ValueError(f"{name} must be a finite number, got {value}")
            if name.endswith('_stdev') and value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

        if mass_avg <= 0:
            raise ValueError(f"mass_avg must be positive, got {mass_avg}")
        if radius_avg <= 0:
            raise ValueError(f"radius_avg must be positive, got {radius_avg}")
        if radius_avg >= ARENA_RADIUS:
            raise ValueError(f"radius_avg must be smaller than the arena radius (1.0), got {radius_avg}")

        self.mass_avg, self.mass_stdev = float(mass_avg), float(mass_stdev)
        self.radius_avg, self.radius_stdev = float(radius_avg), float(radius_stdev)
        self.speed_avg, self.speed_stdev = float(speed_avg), float(speed_stdev)
        self.rng = rng if rng is not None else np.random.default_rng()

        logger.debug(f"ParticlePoolGenerator configured: {params}")

    @classmethod
    def from_config(cls, sim_config: dict, rng: np.random.Generator = None):
        """Builds a generator from the 'simulation' section of the config file."""
        return cls(
            sim_config['mass_avg'], sim_config['mass_stdev'],
            sim_config['radius_avg'], sim_config['radius_stdev'],
            sim_config['speed_avg'], sim_config['speed_stdev'],
            rng=rng,
        )

    def _sample_position(self):
        # Rejection sampling: resample until the point lies inside the unit disk.
        x, y = self.rng.uniform(-1.0, 1.0, size=2)
        while x * x + y * y >= 1.0:
            x, y = self.rng.uniform(-1.0, 1.0, size=2)
        return x, y

    def _sample_positive(self, mean: float, stdev: float, upper: float = math.inf) -> float:
        # Rejection sampling again: keep drawing until 0 < value < upper.
        value = self.rng.normal(mean, stdev)
        while value <= 0 or value >= upper:
            value = self.rng.normal(mean, stdev)
        return float(value)

    def generate(self, count: int) -> ParticlePool:
        """
        Returns a new pool of exactly `count` particles with speed 1.0.
        """
        if count < 0:
            raise ValueError(f"Particle count must be non-negative, got {count}")

        particles = []
        for _ in range(count):
            x, y = self._sample_position()
            particles.append(Particle.from_polar(
                self._sample_positive(self.mass_avg, self.mass_stdev),
                self._sample_positive(self.radius_avg, self.radius_stdev, upper=ARENA_RADIUS),
                x, y,
                float(self.rng.normal(self.speed_avg, self.speed_stdev)),
                float(self.rng.uniform(0.0, TWO_PI)),
            ))

        return ParticlePool(particles)
