from __future__ import annotations

import numpy as np
import pytest

from noisetex.noise import Checker, Perlin
from noisetex.projection import cylindrical_coords, planar_coords, sample_grid, spherical_coords


def _x_field(x: np.ndarray, y: np.ndarray, z: np.ndarray) -> np.ndarray:
    return x + 0.0 * y + 0.0 * z


def _z_field(x: np.ndarray, y: np.ndarray, z: np.ndarray) -> np.ndarray:
    return z + 0.0 * x + 0.0 * y


@pytest.mark.parametrize("projection", ["planar", "spherical", "cylindrical"])
def test_sample_grid_is_fully_populated(projection: str) -> None:
    values = sample_grid(Perlin(frequency=2.0, octaves=3, seed=4), 32, 16, projection=projection)
    assert values.shape == (16, 32)
    assert values.dtype == np.float32
    assert np.isfinite(values).all()
    assert float(values.std()) > 0.0


def test_height_defaults_to_width() -> None:
    assert sample_grid(Checker(), 8, projection="planar").shape == (8, 8)


def test_planar_axes_follow_bounds() -> None:
    values = sample_grid(_x_field, 4, 2, projection="planar", bounds=(0.0, 4.0, 10.0, 12.0))
    np.testing.assert_allclose(values[0], [0.0, 1.0, 2.0, 3.0])

    zs = sample_grid(_z_field, 2, 4, projection="planar", bounds=(0.0, 1.0, 0.0, 4.0))
    # row 0 is the far end of the z axis
    np.testing.assert_allclose(zs[:, 0], [3.0, 2.0, 1.0, 0.0])


def test_spherical_points_lie_on_unit_sphere() -> None:
    x, y, z = spherical_coords(16, 8, (-90.0, 90.0, -180.0, 180.0))
    np.testing.assert_allclose(x * x + y * y + z * z, 1.0, atol=1e-9)
    np.testing.assert_allclose(y[0], -1.0, atol=1e-9)


def test_cylindrical_points_lie_on_unit_cylinder() -> None:
    x, y, z = cylindrical_coords(12, 5, (0.0, 360.0, 0.0, 5.0))
    np.testing.assert_allclose(x * x + z * z, 1.0, atol=1e-9)
    np.testing.assert_allclose(y[:, 0], [0.0, 1.0, 2.0, 3.0, 4.0])


def test_planar_coords_lie_on_ground_plane() -> None:
    _, y, _ = planar_coords(5, 3, (0.0, 5.0, 0.0, 5.0))
    assert np.all(y == 0.0)


def test_invalid_grid_requests() -> None:
    with pytest.raises(ValueError, match="positive"):
        sample_grid(Checker(), 0, 4)
    with pytest.raises(ValueError, match="unknown projection"):
        sample_grid(Checker(), 4, 4, projection="conic")
    with pytest.raises(ValueError, match="non-finite"):
        sample_grid(lambda x, y, z: x * np.nan, 4, 4, projection="planar")
