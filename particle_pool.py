# particle_pool.py

import logging
import math
import numpy as np
from particle import check_positive, resolve_collision

logger = logging.getLogger("brownian_sim")


class ParticlePool:
    """
    Owns the ordered particle list and advances it one tick at a time.

    Data Contract:
    - Inputs:
        - particles (list[Particle]): The full population. Order is kept as given.
        - speed (float): Global multiplier applied to every time step.
    - Outputs: None. This class modifies its particles in place.
    - Side Effects: Mutates particle positions, velocities and collision flags.
    - Invariants: The number and order of particles never change after
      construction. Every collision flag is False between ticks.
    """
    def __init__(self, particles=None, speed: float = 1.0):
        self.particles = list(particles) if particles is not None else []
        self.speed = float(speed)
        self.ticks = 0

        logger.info(f"ParticlePool created with {len(self.particles)} particles (speed={self.speed}).")

    @property
    def speed(self) -> float:
        return self._speed

    @speed.setter
    def speed(self, value: float):
        value = float(value)
        if not math.isfinite(value) or value < 0:
            raise ValueError(f"Pool speed must be a finite, non-negative number, got {value}")
        self._speed = value

    def __len__(self):
        return len(self.particles)

    def __iter__(self):
        return iter(self.particles)

    def __getitem__(self, index):
        return self.particles[index]

    def step(self, dt: float):
        """
        Runs one tick of the simulation.

        1. Integrate every particle (boundary reflections happen here).
        2. One ascending-index pass of pairwise collisions. A particle that
           has already collided this tick, against the wall or another
           particle, takes no further part in the pass.
        3. Clear every collision flag.

        A zero effective time step (dt == 0 or speed == 0) leaves every
        particle untouched.
        """
        if dt < 0:
            raise ValueError(f"Time step must be non-negative, got {dt}")

        delta_time = dt * self.speed
        self.ticks += 1
        if delta_time == 0:
            return

        for particle in self.particles:
            particle.integrate(delta_time)

        self._resolve_collisions()

        for particle in self.particles:
            particle.collided = False

    def _resolve_collisions(self) -> int:
        """Pairwise pass; each particle resolves at most one collision. Returns the count."""
        particles = self.particles
        resolved = 0
        for i in range(1, len(particles)):
            p = particles[i]
            if p.collided:
                continue

            for j in range(i):
                q = particles[j]
                if q.collided:
                    continue
                if resolve_collision(p, q):
                    resolved += 1
                    break
        return resolved

    def override_particle(self, index: int = 0, mass=None, radius=None, position=None, velocity=None):
        """
        Replaces selected fields of one particle after construction.
        Used to make the main particle (index 0) stand out.
        """
        if not -len(self.particles) <= index < len(self.particles):
            raise IndexError(f"Particle index {index} out of range for pool of {len(self.particles)}")
        if mass is not None:
            mass = check_positive("mass", mass)
        if radius is not None:
            radius = check_positive("radius", radius)

        particle = self.particles[index]
        if mass is not None:
            particle.mass = mass
        if radius is not None:
            particle.radius = radius
        if position is not None:
            particle.position = np.array(position, dtype=np.float64)
        if velocity is not None:
            particle.velocity = np.array(velocity, dtype=np.float64)

        logger.info(f"Particle {index} overridden: {particle}")

    def get_total_kinetic_energy(self) -> float:
        """
        Calculates the total kinetic energy of the pool.
        KE = sum(0.5 * m * v^2)
        """
        return sum(particle.kinetic_energy for particle in self.particles)

    def get_total_momentum(self) -> np.ndarray:
        total = np.zeros(2, dtype=np.float64)
        for particle in self.particles:
            total += particle.momentum
        return total
