"""Texture generation pipeline: noise, projection, colorize, blur, normal map."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import time

import numpy as np

from noisetex.blur import box_blur
from noisetex.config import NormalMapConfig, TextureConfig
from noisetex.gradient import colorize
from noisetex.metrics import FieldStats, field_stats
from noisetex.noise import build_noise
from noisetex.normalmap import normal_map
from noisetex.projection import sample_grid
from noisetex.rng import RngStream, resolve_seed


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextureResult:
    """Scalar grid and raster outputs of one generation run."""

    values: np.ndarray
    texture: np.ndarray
    heightmap: np.ndarray
    normal: np.ndarray | None
    seed: int
    stats: FieldStats


def derive_normal_map(heightmap: np.ndarray, config: NormalMapConfig) -> np.ndarray:
    """Optionally smooth `heightmap`, then encode its slopes as a normal map."""

    source = heightmap
    if config.smooth:
        start = time.perf_counter()
        source = box_blur(source, config.radius, config.iterations, window=config.window)
        logger.debug(
            "blurred heightmap radius=%d iterations=%d in %.3fs",
            config.radius,
            config.iterations,
            time.perf_counter() - start,
        )
    start = time.perf_counter()
    result = normal_map(source, config.strength, alpha_mode=config.alpha_mode)
    logger.debug("normal map strength=%.2f in %.3fs", config.strength, time.perf_counter() - start)
    return result


def generate_textures(config: TextureConfig | None = None, *, seed: int | None = None) -> TextureResult:
    """Generate the colour texture and, when enabled, its normal map."""

    cfg = config or TextureConfig()
    run_seed = seed if seed is not None else resolve_seed(cfg.seed, random_seed=cfg.random_seed)
    rng = RngStream(run_seed)
    proj = cfg.projection

    start = time.perf_counter()
    field = build_noise(cfg.noise, rng.fork("noise").int_seed())
    values = sample_grid(
        field,
        proj.width,
        proj.height,
        projection=proj.kind,
        bounds=proj.resolved_bounds(),
    )
    logger.debug(
        "sampled %s noise on %s %dx%d grid in %.3fs",
        cfg.noise.mode,
        proj.kind,
        proj.width,
        proj.height,
        time.perf_counter() - start,
    )

    texture = colorize(values, cfg.gradient)
    heightmap = texture if cfg.gradient == "grayscale" else colorize(values, "grayscale")
    normal = derive_normal_map(heightmap, cfg.normal) if cfg.normal.enabled else None

    return TextureResult(
        values=values,
        texture=texture,
        heightmap=heightmap,
        normal=normal,
        seed=run_seed,
        stats=field_stats(values),
    )
