"""Scalar noise fields sampled by the grid projections.

Every field is a callable ``field(x, y, z) -> ndarray`` evaluated over
broadcastable coordinate arrays. Values are nominally in [-1, 1].
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Callable

import numpy as np
from scipy.spatial import cKDTree

from noisetex.config import NoiseConfig


ScalarField = Callable[[np.ndarray, np.ndarray, np.ndarray], np.ndarray]

_MASK_31 = 0x7FFFFFFF
_MASK_32 = 0xFFFFFFFF
_SQRT_3 = float(np.sqrt(3.0))
_VORONOI_CHUNK = 512
# the own-cell point is nearer than 2 * sqrt(3); points of cells 6 or more away
# on any axis are farther than 4, so a +-5 cell block holds the nearest point
_VORONOI_OFFSETS = np.stack(
    np.meshgrid(*(np.arange(-5, 6, dtype=np.int64),) * 3, indexing="ij"), axis=-1
).reshape(-1, 3)

_GRADIENTS = np.array(
    [
        (1, 1, 0), (-1, 1, 0), (1, -1, 0), (-1, -1, 0),
        (1, 0, 1), (-1, 0, 1), (1, 0, -1), (-1, 0, -1),
        (0, 1, 1), (0, -1, 1), (0, 1, -1), (0, -1, -1),
        (1, 1, 0), (0, -1, 1), (-1, 1, 0), (0, -1, -1),
    ],
    dtype=np.float64,
)


def _interp_curve(t: np.ndarray, quality: str) -> np.ndarray:
    if quality == "low":
        return t
    if quality == "medium":
        return t * t * (3.0 - 2.0 * t)
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


@lru_cache(maxsize=64)
def _permutation_table(seed: int) -> np.ndarray:
    prng = np.random.Generator(np.random.PCG64(seed & _MASK_32))
    perm = prng.permutation(256).astype(np.int64)
    table = np.concatenate((perm, perm))
    table.setflags(write=False)
    return table


def _coords(x: np.ndarray, y: np.ndarray, z: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    bx, by, bz = np.broadcast_arrays(
        np.asarray(x, dtype=np.float64),
        np.asarray(y, dtype=np.float64),
        np.asarray(z, dtype=np.float64),
    )
    return bx, by, bz


def gradient_noise_3d(
    x: np.ndarray,
    y: np.ndarray,
    z: np.ndarray,
    *,
    seed: int,
    quality: str = "medium",
) -> np.ndarray:
    """Single octave of lattice gradient noise in approximately [-1, 1]."""

    perm = _permutation_table(int(seed))
    x, y, z = _coords(x, y, z)

    x0 = np.floor(x)
    y0 = np.floor(y)
    z0 = np.floor(z)
    fx = x - x0
    fy = y - y0
    fz = z - z0
    xi = x0.astype(np.int64) & 255
    yi = y0.astype(np.int64) & 255
    zi = z0.astype(np.int64) & 255

    u = _interp_curve(fx, quality)
    v = _interp_curve(fy, quality)
    w = _interp_curve(fz, quality)

    def corner(dx: int, dy: int, dz: int) -> np.ndarray:
        h = perm[perm[perm[xi + dx] + yi + dy] + zi + dz] & 15
        g = _GRADIENTS[h]
        return g[..., 0] * (fx - dx) + g[..., 1] * (fy - dy) + g[..., 2] * (fz - dz)

    x00 = corner(0, 0, 0) + u * (corner(1, 0, 0) - corner(0, 0, 0))
    x10 = corner(0, 1, 0) + u * (corner(1, 1, 0) - corner(0, 1, 0))
    x01 = corner(0, 0, 1) + u * (corner(1, 0, 1) - corner(0, 0, 1))
    x11 = corner(0, 1, 1) + u * (corner(1, 1, 1) - corner(0, 1, 1))
    y0_ = x00 + v * (x10 - x00)
    y1_ = x01 + v * (x11 - x01)
    return y0_ + w * (y1_ - y0_)


def value_noise_3d(ix: np.ndarray, iy: np.ndarray, iz: np.ndarray, *, seed: int) -> np.ndarray:
    """Hash integer lattice coordinates to deterministic values in [-1, 1]."""

    ix = np.asarray(ix, dtype=np.int64)
    iy = np.asarray(iy, dtype=np.int64)
    iz = np.asarray(iz, dtype=np.int64)
    n = (1619 * ix + 31337 * iy + 6971 * iz + 1013 * int(seed)) & _MASK_31
    n = n.astype(np.uint64)
    n = ((n >> np.uint64(13)) ^ n) & _MASK_32
    n = (n * ((n * n * 60493 + 19990303) & _MASK_32) + 1376312589) & _MASK_31
    return 1.0 - n.astype(np.float64) / 1073741824.0


@dataclass(frozen=True)
class Perlin:
    """Fractal sum of gradient-noise octaves."""

    frequency: float = 1.0
    lacunarity: float = 2.0
    persistence: float = 0.5
    octaves: int = 6
    seed: int = 0
    quality: str = "medium"

    def __call__(self, x: np.ndarray, y: np.ndarray, z: np.ndarray) -> np.ndarray:
        x, y, z = _coords(x, y, z)
        x = x * self.frequency
        y = y * self.frequency
        z = z * self.frequency
        value = np.zeros_like(x)
        amplitude = 1.0
        for octave in range(self.octaves):
            signal = gradient_noise_3d(x, y, z, seed=self.seed + octave, quality=self.quality)
            value += signal * amplitude
            x = x * self.lacunarity
            y = y * self.lacunarity
            z = z * self.lacunarity
            amplitude *= self.persistence
        return value


@dataclass(frozen=True)
class Billow:
    """Octaves of folded gradient noise, giving puffy cloud-like lobes."""

    frequency: float = 1.0
    lacunarity: float = 2.0
    persistence: float = 0.5
    octaves: int = 6
    seed: int = 0
    quality: str = "medium"

    def __call__(self, x: np.ndarray, y: np.ndarray, z: np.ndarray) -> np.ndarray:
        x, y, z = _coords(x, y, z)
        x = x * self.frequency
        y = y * self.frequency
        z = z * self.frequency
        value = np.zeros_like(x)
        amplitude = 1.0
        for octave in range(self.octaves):
            signal = gradient_noise_3d(x, y, z, seed=self.seed + octave, quality=self.quality)
            value += (2.0 * np.abs(signal) - 1.0) * amplitude
            x = x * self.lacunarity
            y = y * self.lacunarity
            z = z * self.lacunarity
            amplitude *= self.persistence
        return value + 0.5


@dataclass(frozen=True)
class RidgedMultifractal:
    """Ridged multifractal noise; octave weights feed back from prior ridges."""

    frequency: float = 1.0
    lacunarity: float = 2.0
    octaves: int = 6
    seed: int = 0
    quality: str = "medium"
    offset: float = 1.0
    gain: float = 2.0

    def _spectral_weights(self) -> np.ndarray:
        freq = 1.0
        weights = []
        for _ in range(self.octaves):
            weights.append(freq ** -1.0)
            freq *= self.lacunarity
        return np.asarray(weights, dtype=np.float64)

    def __call__(self, x: np.ndarray, y: np.ndarray, z: np.ndarray) -> np.ndarray:
        x, y, z = _coords(x, y, z)
        x = x * self.frequency
        y = y * self.frequency
        z = z * self.frequency
        spectral = self._spectral_weights()
        value = np.zeros_like(x)
        weight = np.ones_like(x)
        for octave in range(self.octaves):
            signal = gradient_noise_3d(x, y, z, seed=self.seed + octave, quality=self.quality)
            signal = self.offset - np.abs(signal)
            signal = signal * signal * weight
            weight = np.clip(signal * self.gain, 0.0, 1.0)
            value += signal * spectral[octave]
            x = x * self.lacunarity
            y = y * self.lacunarity
            z = z * self.lacunarity
        return value * 1.25 - 1.0


@dataclass(frozen=True)
class Voronoi:
    """Cellular noise: each sample takes the value of its nearest seed point.

    Seed points are jittered one per integer cell. With ``distance`` enabled
    the distance to the nearest point is added, producing cell borders.
    """

    frequency: float = 1.0
    displacement: float = 1.0
    seed: int = 0
    distance: bool = False

    def _cell_points(self, cells: np.ndarray) -> np.ndarray:
        cx, cy, cz = cells[:, 0], cells[:, 1], cells[:, 2]
        return np.stack(
            (
                cx + value_noise_3d(cx, cy, cz, seed=self.seed),
                cy + value_noise_3d(cx, cy, cz, seed=self.seed + 1),
                cz + value_noise_3d(cx, cy, cz, seed=self.seed + 2),
            ),
            axis=-1,
        )

    def _nearest(self, samples: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        occupied = np.unique(np.floor(samples).astype(np.int64), axis=0)
        cells = np.unique((occupied[:, None, :] + _VORONOI_OFFSETS[None, :, :]).reshape(-1, 3), axis=0)
        points = self._cell_points(cells)
        dist, nearest = cKDTree(points).query(samples)
        return dist, points[nearest]

    def __call__(self, x: np.ndarray, y: np.ndarray, z: np.ndarray) -> np.ndarray:
        x, y, z = _coords(x, y, z)
        samples = np.stack((x.ravel(), y.ravel(), z.ravel()), axis=-1) * self.frequency
        dist = np.empty(samples.shape[0], dtype=np.float64)
        candidate = np.empty(samples.shape, dtype=np.float64)
        # candidate cells are gathered per chunk around occupied cells only
        for start in range(0, samples.shape[0], _VORONOI_CHUNK):
            stop = start + _VORONOI_CHUNK
            dist[start:stop], candidate[start:stop] = self._nearest(samples[start:stop])

        cell = np.floor(candidate).astype(np.int64)
        value = self.displacement * value_noise_3d(cell[:, 0], cell[:, 1], cell[:, 2], seed=0)
        if self.distance:
            value = value + dist * _SQRT_3 - 1.0
        return value.reshape(x.shape)


@dataclass(frozen=True)
class Checker:
    """Alternating +1 / -1 unit cubes."""

    def __call__(self, x: np.ndarray, y: np.ndarray, z: np.ndarray) -> np.ndarray:
        x, y, z = _coords(x, y, z)
        parity = (
            (np.floor(x).astype(np.int64) & 1)
            ^ (np.floor(y).astype(np.int64) & 1)
            ^ (np.floor(z).astype(np.int64) & 1)
        )
        return np.where(parity != 0, -1.0, 1.0)


@dataclass(frozen=True)
class Cylinders:
    """Concentric cylinders around the y axis, one shell per unit radius."""

    frequency: float = 1.0

    def __call__(self, x: np.ndarray, y: np.ndarray, z: np.ndarray) -> np.ndarray:
        x, y, z = _coords(x, y, z)
        dist = np.hypot(x * self.frequency, z * self.frequency)
        small = dist - np.floor(dist)
        large = 1.0 - small
        return 1.0 - np.minimum(small, large) * 4.0


def build_noise(config: NoiseConfig, seed: int) -> ScalarField:
    """Instantiate the scalar field selected by `config`."""

    if config.mode == "perlin":
        return Perlin(config.frequency, config.lacunarity, config.persistence, config.octaves, seed, config.quality)
    if config.mode == "billow":
        return Billow(config.frequency, config.lacunarity, config.persistence, config.octaves, seed, config.quality)
    if config.mode == "ridged":
        return RidgedMultifractal(config.frequency, config.lacunarity, config.octaves, seed, config.quality)
    if config.mode == "voronoi":
        return Voronoi(config.frequency, config.lacunarity, seed, config.persistence > 1.0)
    if config.mode == "cylinder":
        return Cylinders(config.frequency)
    if config.mode == "checker":
        return Checker()
    raise ValueError(f"unknown noise mode: {config.mode}")
