"""Configuration models for texture generation."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


DEFAULT_SIZE = 256
DEFAULT_SEED = 1

NOISE_MODES = ("perlin", "checker", "cylinder", "billow", "ridged", "voronoi")
QUALITY_MODES = ("low", "medium", "high")
PROJECTIONS = ("planar", "spherical", "cylindrical")
BLUR_WINDOWS = ("centered", "legacy")
ALPHA_MODES = ("green", "opaque")

DEFAULT_BOUNDS: dict[str, tuple[float, float, float, float]] = {
    "planar": (0.0, 5.0, 0.0, 5.0),
    "spherical": (-90.0, 90.0, -180.0, 180.0),
    "cylindrical": (0.0, 360.0, 0.0, 5.0),
}


@dataclass(frozen=True)
class NoiseConfig:
    """Selects the scalar noise field and its fractal parameters."""

    mode: str = "perlin"
    frequency: float = 2.5
    lacunarity: float = 2.5
    persistence: float = 0.5
    octaves: int = 5
    quality: str = "medium"

    def __post_init__(self) -> None:
        if self.mode not in NOISE_MODES:
            raise ValueError(f"unknown noise mode {self.mode!r}; expected one of {', '.join(NOISE_MODES)}")
        if self.quality not in QUALITY_MODES:
            raise ValueError(f"unknown quality {self.quality!r}; expected one of {', '.join(QUALITY_MODES)}")
        if self.octaves < 1:
            raise ValueError("octaves must be >= 1")


@dataclass(frozen=True)
class ProjectionConfig:
    """Controls how the noise domain is mapped onto the output grid."""

    kind: str = "spherical"
    width: int = DEFAULT_SIZE
    height: int = DEFAULT_SIZE
    bounds: tuple[float, float, float, float] | None = None

    def __post_init__(self) -> None:
        if self.kind not in PROJECTIONS:
            raise ValueError(f"unknown projection {self.kind!r}; expected one of {', '.join(PROJECTIONS)}")
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be positive")

    def resolved_bounds(self) -> tuple[float, float, float, float]:
        return self.bounds if self.bounds is not None else DEFAULT_BOUNDS[self.kind]


@dataclass(frozen=True)
class NormalMapConfig:
    """Normal map derivation and heightmap pre-smoothing."""

    enabled: bool = False
    strength: float = 4.0
    smooth: bool = False
    radius: int = 2
    iterations: int = 2
    window: str = "centered"
    alpha_mode: str = "green"

    def __post_init__(self) -> None:
        if self.window not in BLUR_WINDOWS:
            raise ValueError(f"unknown blur window {self.window!r}; expected one of {', '.join(BLUR_WINDOWS)}")
        if self.alpha_mode not in ALPHA_MODES:
            raise ValueError(f"unknown alpha mode {self.alpha_mode!r}; expected one of {', '.join(ALPHA_MODES)}")
        if self.radius < 0 or self.iterations < 0:
            raise ValueError("radius and iterations must be >= 0")


@dataclass(frozen=True)
class TextureConfig:
    """Primary generation configuration."""

    seed: int = DEFAULT_SEED
    random_seed: bool = False
    gradient: str = "grayscale"
    noise: NoiseConfig = field(default_factory=NoiseConfig)
    projection: ProjectionConfig = field(default_factory=ProjectionConfig)
    normal: NormalMapConfig = field(default_factory=NormalMapConfig)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
