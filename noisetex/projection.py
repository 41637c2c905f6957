"""Grid projections that sample a scalar field onto a 2D raster domain."""

from __future__ import annotations

import numpy as np

from noisetex.config import DEFAULT_BOUNDS, PROJECTIONS
from noisetex.noise import ScalarField


def _axis(lo: float, hi: float, count: int) -> np.ndarray:
    step = (hi - lo) / float(count)
    return lo + np.arange(count, dtype=np.float64) * step


def planar_coords(width: int, height: int, bounds: tuple[float, float, float, float]):
    """Map the grid onto the y=0 plane spanning ``(left, right, top, bottom)``."""

    left, right, top, bottom = bounds
    xs = _axis(left, right, width)
    zs = _axis(top, bottom, height)
    x = np.broadcast_to(xs[None, :], (height, width))
    z = np.broadcast_to(zs[:, None], (height, width))
    return x, np.zeros_like(x), z


def spherical_coords(width: int, height: int, bounds: tuple[float, float, float, float]):
    """Map the grid onto the unit sphere spanning ``(south, north, west, east)`` degrees."""

    south, north, west, east = bounds
    lon = np.deg2rad(_axis(west, east, width))[None, :]
    lat = np.deg2rad(_axis(south, north, height))[:, None]
    r = np.cos(lat)
    return r * np.cos(lon), np.broadcast_to(np.sin(lat), (height, width)), r * np.sin(lon)


def cylindrical_coords(width: int, height: int, bounds: tuple[float, float, float, float]):
    """Map the grid onto a unit cylinder spanning ``(angle_min, angle_max, height_min, height_max)``."""

    angle_min, angle_max, height_min, height_max = bounds
    angle = np.deg2rad(_axis(angle_min, angle_max, width))[None, :]
    heights = _axis(height_min, height_max, height)[:, None]
    x = np.broadcast_to(np.cos(angle), (height, width))
    z = np.broadcast_to(np.sin(angle), (height, width))
    return x, np.broadcast_to(heights, (height, width)), z


_COORDS = {
    "planar": planar_coords,
    "spherical": spherical_coords,
    "cylindrical": cylindrical_coords,
}


def sample_grid(
    field: ScalarField,
    width: int,
    height: int | None = None,
    *,
    projection: str = "spherical",
    bounds: tuple[float, float, float, float] | None = None,
) -> np.ndarray:
    """Evaluate `field` over a ``height x width`` grid.

    Sample ``j`` along an axis sits at ``min + j * extent / count``. Row 0 of
    the result is the far end of the vertical axis (north for spherical
    grids), so the grid reads top-down like an image.
    """

    height = width if height is None else height
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be positive")
    if projection not in PROJECTIONS:
        raise ValueError(f"unknown projection {projection!r}; expected one of {', '.join(PROJECTIONS)}")

    x, y, z = _COORDS[projection](width, height, bounds or DEFAULT_BOUNDS[projection])
    values = np.asarray(field(x, y, z), dtype=np.float64)
    if values.shape != (height, width):
        raise ValueError(f"field returned shape {values.shape}, expected {(height, width)}")
    if not np.isfinite(values).all():
        raise ValueError("field produced non-finite samples")
    return np.flipud(values).astype(np.float32)
