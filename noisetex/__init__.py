"""Noise texture and normal map generation package."""

from .blur import box_blur
from .config import DEFAULT_SEED, DEFAULT_SIZE, NoiseConfig, NormalMapConfig, ProjectionConfig, TextureConfig
from .normalmap import normal_map

__all__ = [
    "DEFAULT_SEED",
    "DEFAULT_SIZE",
    "NoiseConfig",
    "NormalMapConfig",
    "ProjectionConfig",
    "TextureConfig",
    "box_blur",
    "normal_map",
]
