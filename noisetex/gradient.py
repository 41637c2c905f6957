"""Gradient colorization of scalar fields into RGBA rasters."""

from __future__ import annotations

import matplotlib
from matplotlib.colors import Colormap, LinearSegmentedColormap
import numpy as np


GRADIENT_PRESETS: dict[str, list[tuple[float, str]]] = {
    "grayscale": [(0.0, "#000000"), (1.0, "#ffffff")],
    "rgb": [(0.0, "#ff0000"), (0.5, "#00ff00"), (1.0, "#0000ff")],
    "terrain": [
        (0.0, "#000080"),  # deep water
        (0.4, "#204080"),
        (0.48, "#4060c0"),  # shallows
        (0.49, "#c0c080"),  # sand
        (0.5, "#00c000"),  # grass
        (0.625, "#c0c000"),
        (0.75, "#a06040"),  # rock
        (0.875, "#80ffff"),
        (1.0, "#ffffff"),  # snow
    ],
}


def get_gradient(name: str) -> Colormap:
    """Resolve a preset name, or any registered matplotlib colormap name."""

    if name in GRADIENT_PRESETS:
        return LinearSegmentedColormap.from_list(name, GRADIENT_PRESETS[name])
    try:
        return matplotlib.colormaps[name]
    except KeyError:
        raise ValueError(
            f"unknown gradient {name!r}; expected one of {', '.join(GRADIENT_PRESETS)} or a matplotlib colormap"
        ) from None


def colorize(values: np.ndarray, gradient: str | Colormap = "grayscale") -> np.ndarray:
    """Map scalar values in [-1, 1] through `gradient` into an opaque RGBA raster."""

    if values.ndim != 2:
        raise ValueError("values must be a 2D array")
    cmap = get_gradient(gradient) if isinstance(gradient, str) else gradient
    t = np.clip((values.astype(np.float64) + 1.0) * 0.5, 0.0, 1.0)
    rgba = np.asarray(cmap(t), dtype=np.float32)
    rgba[..., 3] = 1.0
    return rgba
