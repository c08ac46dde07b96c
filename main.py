# main.py

import json
import logging
import cProfile
import io
import pstats

import numpy as np
import pygame

import constants
import logger_setup
from pool_generator import ParticlePoolGenerator
from renderer import draw_pool

# Get the application's dedicated logger
logger = logging.getLogger("brownian_sim")


def load_config(path: str = 'config.json') -> dict:
    """Loads a JSON configuration file."""
    logger.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
    except FileNotFoundError:
        logger.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logger.error(f"Error decoding JSON from {path}.")
        raise
    return config


def build_pool(sim_config: dict, rng: np.random.Generator):
    """
    Creates the initial particle pool from the 'simulation' config section,
    then applies the main-particle override and the global speed.
    """
    generator = ParticlePoolGenerator.from_config(sim_config, rng=rng)
    pool = generator.generate(sim_config['particle_count'])

    main_particle = sim_config.get('main_particle')
    if main_particle and len(pool) > 0:
        pool.override_particle(0, **main_particle)

    pool.speed = sim_config.get('pool_speed', 1.0)
    return pool


def log_diagnostics(pool, tick: int, last_energy):
    """Logs energy and momentum totals. Returns the energy for the next delta."""
    energy = pool.get_total_kinetic_energy()
    momentum = pool.get_total_momentum()
    delta_e = 0.0 if last_energy is None else energy - last_energy
    logger.debug(
        f"Tick={tick}, "
        f"Kinetic={energy:.4f}, "
        f"Delta_E={delta_e:+.2e}, "
        f"Momentum=({momentum[0]:+.4f}, {momentum[1]:+.4f})"
    )
    return energy


def run_simulation_loop(pool, screen, clock, run_control: dict):
    """
    Drives the pool from the frame clock until the window is closed,
    Escape is pressed, or max_ticks (when positive) is reached.
    """
    log_throttle = run_control.get('log_throttle_ticks', 100)
    max_ticks = run_control.get('max_ticks', 0)

    running = True
    tick = 0
    last_energy = None

    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                running = False

        # Elapsed wall time in seconds since the previous frame.
        dt = clock.tick(constants.FPS) / 1000.0
        pool.step(dt)
        tick += 1

        if tick % log_throttle == 0:
            last_energy = log_diagnostics(pool, tick, last_energy)

        draw_pool(screen, pool)
        pygame.display.flip()

        if max_ticks > 0 and tick >= max_ticks:
            logger.info(f"Reached max_ticks ({max_ticks}). Stopping simulation.")
            running = False

    return tick


def main():
    """
    Main function to initialize and run the Brownian motion simulation.
    """
    logger_setup.setup_logging()

    config = load_config()
    sim_config = config['simulation']
    run_control = config.get('run_control', {})

    logger.info("Application starting...")
    logger.info(f"Loaded configuration: {config}")

    # Initialize the master random number generator (RNG)
    rng = np.random.default_rng(config['master_seed'])
    logger.info(f"Master RNG initialized with seed: {config['master_seed']}")

    pool = build_pool(sim_config, rng)

    pygame.init()
    screen = pygame.display.set_mode((constants.WIDTH, constants.HEIGHT))
    pygame.display.set_caption(constants.TITLE)
    clock = pygame.time.Clock()

    if run_control.get('profile', False):
        profiler = cProfile.Profile()
        profiler.enable()
        ticks = run_simulation_loop(pool, screen, clock, run_control)
        profiler.disable()

        s = io.StringIO()
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20)  # Print the top 20 time-consuming functions
        logger.info(f"Profiling complete.\n{s.getvalue()}")
    else:
        ticks = run_simulation_loop(pool, screen, clock, run_control)

    logger.info(f"Application shutting down after {ticks} ticks.")
    pygame.quit()


if __name__ == "__main__":
    main()
