"""Tangent-space normal maps from grayscale heightfields."""

from __future__ import annotations

import math

import numpy as np

from noisetex.config import ALPHA_MODES
from noisetex.raster import as_raster, grayscale, neighbor


MAX_STRENGTH = 10.0


def normal_map(source: np.ndarray, strength: float, *, alpha_mode: str = "green") -> np.ndarray:
    """Encode central-difference slopes of `source` as a normal map raster.

    Red holds the horizontal slope, green the vertical one, both packed from
    [-1, 1] into [0, 1] so a flat surface reads as 0.5. Blue is 1.0. Alpha
    repeats green unless ``alpha_mode="opaque"``.

    Green reads above 0.5 where the field rises towards the bottom row, the
    bottom-up texture convention. Neighbours outside the raster are clamped
    to the nearest edge pixel.
    """

    if math.isnan(strength):
        raise ValueError("strength must not be NaN")
    if alpha_mode not in ALPHA_MODES:
        raise ValueError(f"unknown alpha mode {alpha_mode!r}; expected one of {', '.join(ALPHA_MODES)}")

    gain = float(np.clip(strength, 0.0, MAX_STRENGTH))
    gray = grayscale(as_raster(source))

    # rows run top-down, so the row below is the southern neighbour
    x_slope = neighbor(gray, 1, 0) - neighbor(gray, -1, 0)
    y_slope = neighbor(gray, 0, 1) - neighbor(gray, 0, -1)
    x_delta = np.clip((x_slope * gain + 1.0) * 0.5, 0.0, 1.0)
    y_delta = np.clip((y_slope * gain + 1.0) * 0.5, 0.0, 1.0)

    result = np.empty(gray.shape + (4,), dtype=np.float32)
    result[..., 0] = x_delta
    result[..., 1] = y_delta
    result[..., 2] = 1.0
    result[..., 3] = y_delta if alpha_mode == "green" else 1.0
    return result
