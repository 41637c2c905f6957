from __future__ import annotations

import numpy as np
import pytest

from noisetex.config import NoiseConfig
from noisetex.noise import (
    Billow,
    Checker,
    Cylinders,
    Perlin,
    RidgedMultifractal,
    Voronoi,
    build_noise,
    gradient_noise_3d,
    value_noise_3d,
)
from noisetex.projection import sample_grid


def _sample_points(count: int = 400, seed: int = 5) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    rng = np.random.default_rng(seed)
    pts = rng.uniform(-4.0, 4.0, size=(3, count))
    return pts[0], pts[1], pts[2]


def test_gradient_noise_vanishes_on_lattice() -> None:
    grid = np.arange(-3, 4, dtype=np.float64)
    x, y, z = np.meshgrid(grid, grid, grid, indexing="ij")
    assert np.allclose(gradient_noise_3d(x, y, z, seed=9), 0.0)


@pytest.mark.parametrize("quality", ["low", "medium", "high"])
def test_gradient_noise_is_bounded(quality: str) -> None:
    x, y, z = _sample_points()
    values = gradient_noise_3d(x, y, z, seed=2, quality=quality)
    assert values.shape == x.shape
    assert np.abs(values).max() <= 2.5


def test_value_noise_is_deterministic_and_in_range() -> None:
    ix = np.arange(-50, 50)
    a = value_noise_3d(ix, ix * 3, -ix, seed=4)
    b = value_noise_3d(ix, ix * 3, -ix, seed=4)
    c = value_noise_3d(ix, ix * 3, -ix, seed=5)
    assert np.array_equal(a, b)
    assert not np.array_equal(a, c)
    assert a.min() >= -1.0 and a.max() <= 1.0


@pytest.mark.parametrize(
    "field_type",
    [Perlin, Billow, RidgedMultifractal],
)
def test_fractal_fields_depend_on_seed(field_type) -> None:
    x, y, z = _sample_points()
    a = field_type(frequency=1.3, seed=1)(x, y, z)
    b = field_type(frequency=1.3, seed=1)(x, y, z)
    c = field_type(frequency=1.3, seed=2)(x, y, z)
    assert np.array_equal(a, b)
    assert not np.array_equal(a, c)
    assert np.isfinite(a).all()


def test_perlin_single_octave_matches_gradient_noise() -> None:
    x, y, z = _sample_points()
    field = Perlin(frequency=2.0, octaves=1, seed=7)
    np.testing.assert_allclose(field(x, y, z), gradient_noise_3d(2.0 * x, 2.0 * y, 2.0 * z, seed=7))


def test_voronoi_is_piecewise_constant_without_distance() -> None:
    field = Voronoi(frequency=1.0, displacement=1.0, seed=3)
    x, y, z = _sample_points(200)
    values = field(x, y, z)
    nudged = field(x + 1e-6, y, z)
    assert values.shape == x.shape
    assert values.min() >= -1.0 and values.max() <= 1.0
    assert np.mean(values == nudged) > 0.95

    again = field(x, y, z)
    assert np.array_equal(values, again)


def test_voronoi_distance_adds_cell_borders() -> None:
    x, y, z = _sample_points(200)
    plain = Voronoi(seed=3)(x, y, z)
    with_distance = Voronoi(seed=3, distance=True)(x, y, z)
    assert not np.array_equal(plain, with_distance)


def test_checker_parity() -> None:
    field = Checker()
    values = field(np.array([0.5, 1.5, 1.5, -0.5]), np.array([0.5, 0.5, 1.5, 0.5]), np.zeros(4))
    np.testing.assert_array_equal(values, [1.0, -1.0, 1.0, -1.0])


def test_cylinders_shells() -> None:
    field = Cylinders(frequency=1.0)
    x = np.array([0.0, 0.25, 0.5, 1.0, 2.0])
    values = field(x, np.zeros_like(x), np.zeros_like(x))
    np.testing.assert_allclose(values, [1.0, 0.0, -1.0, 1.0, 1.0])


def test_build_noise_maps_modes() -> None:
    assert isinstance(build_noise(NoiseConfig(mode="perlin"), 1), Perlin)
    assert isinstance(build_noise(NoiseConfig(mode="billow"), 1), Billow)
    assert isinstance(build_noise(NoiseConfig(mode="ridged"), 1), RidgedMultifractal)
    assert isinstance(build_noise(NoiseConfig(mode="checker"), 1), Checker)

    cyl = build_noise(NoiseConfig(mode="cylinder", frequency=3.0), 1)
    assert isinstance(cyl, Cylinders) and cyl.frequency == 3.0

    vor = build_noise(NoiseConfig(mode="voronoi", lacunarity=0.7, persistence=1.5), 9)
    assert isinstance(vor, Voronoi)
    assert vor.displacement == 0.7
    assert vor.distance is True
    assert vor.seed == 9


def test_noise_config_rejects_unknown_mode() -> None:
    with pytest.raises(ValueError, match="unknown noise mode"):
        NoiseConfig(mode="simplex")


def test_voronoi_high_frequency_planar_grid() -> None:
    values = sample_grid(Voronoi(frequency=2000.0, seed=1), 64, 64, projection="planar")
    assert values.shape == (64, 64)
    assert np.isfinite(values).all()


def test_voronoi_result_does_not_depend_on_batching() -> None:
    field = Voronoi(frequency=3.0, seed=8, distance=True)
    x, y, z = _sample_points(1500, seed=21)
    whole = field(x, y, z)
    parts = np.concatenate([field(x[i : i + 100], y[i : i + 100], z[i : i + 100]) for i in range(0, 1500, 100)])
    np.testing.assert_array_equal(whole, parts)
