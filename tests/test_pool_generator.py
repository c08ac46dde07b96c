import math

import numpy as np
import pytest

from particle_pool import ParticlePool
from pool_generator import ParticlePoolGenerator


def make_generator(seed=0, **overrides):
    params = dict(mass_avg=1.0, mass_stdev=0.1, radius_avg=0.02, radius_stdev=0.005,
                  speed_avg=1.0, speed_stdev=0.5)
    params.update(overrides)
    return ParticlePoolGenerator(rng=np.random.default_rng(seed), **params)


def test_generates_exact_count():
    pool = make_generator().generate(250)
    assert isinstance(pool, ParticlePool)
    assert len(pool) == 250
    assert pool.speed == 1.0
    assert all(not p.collided for p in pool)


def test_zero_count_gives_empty_pool():
    assert len(make_generator().generate(0)) == 0


def test_negative_count_rejected():
    with pytest.raises(ValueError):
        make_generator().generate(-1)


def test_positions_inside_unit_disk():
    pool = make_generator().generate(500)
    for particle in pool:
        assert particle.position[0] ** 2 + particle.position[1] ** 2 < 1.0


def test_samples_are_positive_even_with_wide_spread():
    pool = make_generator(mass_avg=0.1, mass_stdev=1.0, radius_avg=0.01, radius_stdev=0.1).generate(300)
    assert all(p.mass > 0 for p in pool)
    assert all(p.radius > 0 for p in pool)


def test_radii_always_fit_inside_arena():
    pool = make_generator(seed=1, mass_stdev=0.0, radius_avg=0.5, radius_stdev=1.0,
                          speed_stdev=0.0).generate(200)
    assert len(pool) == 200
    assert all(0 < p.radius < 1 for p in pool)


def test_zero_stdev_gives_exact_values():
    pool = make_generator(mass_stdev=0.0, radius_stdev=0.0, speed_avg=0.7, speed_stdev=0.0).generate(50)
    for particle in pool:
        assert particle.mass == 1.0
        assert particle.radius == 0.02
        assert np.linalg.norm(particle.velocity) == pytest.approx(0.7)


def test_seeded_generation_is_reproducible():
    first = make_generator(seed=99).generate(40)
    second = make_generator(seed=99).generate(40)
    for a, b in zip(first, second):
        np.testing.assert_array_equal(a.position, b.position)
        np.testing.assert_array_equal(a.velocity, b.velocity)
        assert a.mass == b.mass and a.radius == b.radius


def test_sample_means_follow_parameters():
    pool = make_generator(seed=5, mass_avg=2.0, mass_stdev=0.2).generate(2000)
    masses = np.array([p.mass for p in pool])
    assert masses.mean() == pytest.approx(2.0, abs=0.05)
    assert masses.std() == pytest.approx(0.2, abs=0.05)


def test_headings_cover_full_circle():
    pool = make_generator(seed=8, speed_stdev=0.0).generate(400)
    angles = np.array([math.atan2(p.velocity[1], p.velocity[0]) for p in pool])
    assert angles.min() < -3.0
    assert angles.max() > 3.0


@pytest.mark.parametrize("overrides", [
    {"mass_avg": 0.0},
    {"mass_avg": -1.0},
    {"radius_avg": 0.0},
    {"radius_avg": -0.02},
    {"radius_avg": 1.0},
    {"mass_stdev": -0.1},
    {"radius_stdev": -0.1},
    {"speed_stdev": -1.0},
    {"speed_avg": float("nan")},
    {"mass_avg": float("inf")},
])
def test_invalid_parameters_rejected(overrides):
    with pytest.raises(ValueError):
        make_generator(**overrides)


def test_from_config():
    sim_config = {
        "mass_avg": 1.5, "mass_stdev": 0.0,
        "radius_avg": 0.04, "radius_stdev": 0.0,
        "speed_avg": 2.0, "speed_stdev": 0.0,
    }
    generator = ParticlePoolGenerator.from_config(sim_config, rng=np.random.default_rng(1))
    particle = generator.generate(1)[0]
    assert particle.mass == 1.5
    assert particle.radius == 0.04
    assert np.linalg.norm(particle.velocity) == pytest.approx(2.0)


def test_from_config_missing_key():
    with pytest.raises(KeyError):
        ParticlePoolGenerator.from_config({"mass_avg": 1.0})
