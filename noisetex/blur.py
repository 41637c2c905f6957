"""Separable box blur used to pre-smooth heightfields."""

from __future__ import annotations

import numpy as np

from noisetex.config import BLUR_WINDOWS
from noisetex.raster import as_raster, clamp_index


def box_blur(
    source: np.ndarray,
    radius: int,
    iterations: int,
    *,
    window: str = "centered",
) -> np.ndarray:
    """Blur the colour channels of `source` with repeated separable box passes.

    Each iteration runs one horizontal and one vertical moving-average pass.
    Windows are clamped at the raster border, so edge pixels average over
    fewer samples instead of padded ones. Alpha is set to 1.0.

    ``window="centered"`` averages ``[i - radius, i + radius]``;
    ``window="legacy"`` averages ``[i - radius + 1, i + radius - 1]``.
    """

    if radius < 0:
        raise ValueError("radius must be >= 0")
    if iterations < 0:
        raise ValueError("iterations must be >= 0")
    if window not in BLUR_WINDOWS:
        raise ValueError(f"unknown blur window {window!r}; expected one of {', '.join(BLUR_WINDOWS)}")

    rgba = as_raster(source)
    result = np.empty_like(rgba)
    result[..., 3] = 1.0

    reach = int(radius) if window == "centered" else int(radius) - 1
    if radius == 0 or iterations == 0 or reach <= 0:
        result[..., :3] = rgba[..., :3]
        return result

    color = rgba[..., :3].astype(np.float64)
    for _ in range(int(iterations)):
        color = _box_blur_axis(color, reach, axis=1)
        color = _box_blur_axis(color, reach, axis=0)
    result[..., :3] = color
    return result


def _box_blur_axis(values: np.ndarray, reach: int, *, axis: int) -> np.ndarray:
    size = values.shape[axis]
    csum = np.cumsum(values, axis=axis)
    pad = [(0, 0)] * values.ndim
    pad[axis] = (1, 0)
    csum = np.pad(csum, pad, mode="constant", constant_values=0.0)

    index = np.arange(size)
    lo = clamp_index(index - reach, size)
    hi = clamp_index(index + reach, size)
    totals = np.take(csum, hi + 1, axis=axis) - np.take(csum, lo, axis=axis)

    shape = [1] * values.ndim
    shape[axis] = size
    counts = (hi - lo + 1).astype(np.float64).reshape(shape)
    return totals / counts
