"""RGBA raster buffers and clamp-to-edge access helpers.

A raster is a ``float32`` array of shape ``(height, width, 4)`` holding R, G,
B, A in [0, 1]. Row 0 is the top row. Grayscale ``(H, W)`` and RGB
``(H, W, 3)`` arrays are promoted to RGBA with opaque alpha.
"""

from __future__ import annotations

import numpy as np


LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float32)


def as_raster(array: np.ndarray) -> np.ndarray:
    """Validate `array` and return it as an RGBA float32 raster.

    The input is never modified; a copy is made whenever promotion or dtype
    conversion is needed.
    """

    values = np.asarray(array)
    if values.ndim == 2:
        values = raster_from_gray(values)
    elif values.ndim == 3 and values.shape[2] == 3:
        alpha = np.ones(values.shape[:2] + (1,), dtype=np.float32)
        values = np.concatenate((values.astype(np.float32), alpha), axis=2)
    elif values.ndim != 3 or values.shape[2] != 4:
        raise ValueError("raster must have shape (H, W), (H, W, 3) or (H, W, 4)")

    if values.shape[0] < 1 or values.shape[1] < 1:
        raise ValueError("raster width and height must be >= 1")
    return values.astype(np.float32, copy=False)


def new_raster(
    width: int,
    height: int,
    fill: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 1.0),
) -> np.ndarray:
    """Allocate a raster filled with a single RGBA colour."""

    if width <= 0 or height <= 0:
        raise ValueError("width and height must be positive")
    raster = np.empty((height, width, 4), dtype=np.float32)
    raster[...] = np.asarray(fill, dtype=np.float32)
    return raster


def raster_from_gray(values: np.ndarray) -> np.ndarray:
    """Replicate a [0, 1] grid into the RGB channels of a new opaque raster."""

    gray = np.asarray(values, dtype=np.float32)
    if gray.ndim != 2:
        raise ValueError("values must be a 2D array")
    alpha = np.ones_like(gray)
    return np.stack((gray, gray, gray, alpha), axis=-1)


def grayscale(raster: np.ndarray) -> np.ndarray:
    """Reduce a raster to per-pixel luma in [0, 1]."""

    rgba = as_raster(raster)
    return (rgba[..., :3] @ LUMA_WEIGHTS).astype(np.float32)


def clamp_index(indices: np.ndarray, size: int) -> np.ndarray:
    """Clamp integer coordinates into ``[0, size)``."""

    return np.clip(indices, 0, size - 1)


def neighbor(values: np.ndarray, dx: int, dy: int) -> np.ndarray:
    """Return ``values`` sampled at ``(x + dx, y + dy)`` with clamp-to-edge."""

    height, width = values.shape[:2]
    rows = clamp_index(np.arange(height) + dy, height)
    cols = clamp_index(np.arange(width) + dx, width)
    return values[rows[:, None], cols[None, :]]


def to_u8(raster: np.ndarray) -> np.ndarray:
    """Quantize a raster to 8-bit RGBA."""

    rgba = as_raster(raster)
    return np.round(np.clip(rgba, 0.0, 1.0) * 255.0).astype(np.uint8)


def from_u8(array: np.ndarray) -> np.ndarray:
    """Convert an 8-bit L/RGB/RGBA image array into a raster."""

    return as_raster(np.asarray(array, dtype=np.float32) / 255.0)
