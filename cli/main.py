"""CLI entry point for noise texture generation."""

from __future__ import annotations

import argparse
from dataclasses import replace
from datetime import datetime, timezone
import logging
from pathlib import Path
import platform
import time
from typing import Any

import numpy as np
from noisetex.config import (
    ALPHA_MODES,
    BLUR_WINDOWS,
    DEFAULT_SEED,
    DEFAULT_SIZE,
    NOISE_MODES,
    PROJECTIONS,
    QUALITY_MODES,
    NoiseConfig,
    NormalMapConfig,
    ProjectionConfig,
    TextureConfig,
)
from noisetex.io import (
    read_png_raster,
    staged_texture_dir,
    texture_output_dir,
    write_json,
    write_png_rgba,
    write_values_npy,
)
from noisetex.pipeline import derive_normal_map, generate_textures


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Noise texture and normal map generator")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help="Noise seed")
    parser.add_argument("--random-seed", action="store_true", help="Draw a fresh seed instead of --seed")
    parser.add_argument("--mode", choices=NOISE_MODES, default="perlin", help="Noise field")
    parser.add_argument("--projection", choices=PROJECTIONS, default="spherical", help="Grid projection")
    parser.add_argument("--size", type=int, default=DEFAULT_SIZE, help="Texture width in pixels")
    parser.add_argument("--height", type=int, default=None, help="Texture height in pixels (defaults to --size)")
    parser.add_argument("--frequency", type=float, default=2.5)
    parser.add_argument("--lacunarity", type=float, default=2.5)
    parser.add_argument("--persistence", type=float, default=0.5)
    parser.add_argument("--octaves", type=int, default=5)
    parser.add_argument("--quality", choices=QUALITY_MODES, default="medium")
    parser.add_argument("--gradient", default="grayscale", help="Gradient preset or matplotlib colormap name")
    parser.add_argument(
        "--normal-map",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Derive a normal map from the grayscale heightmap",
    )
    parser.add_argument("--strength", type=float, default=4.0, help="Normal map strength, clamped to [0, 10]")
    parser.add_argument("--smooth", action="store_true", help="Blur the heightmap before deriving normals")
    parser.add_argument("--radius", type=int, default=2, help="Blur radius in pixels")
    parser.add_argument("--iterations", type=int, default=2, help="Blur iterations")
    parser.add_argument("--blur-window", choices=BLUR_WINDOWS, default="centered")
    parser.add_argument("--alpha-mode", choices=ALPHA_MODES, default="green", help="Normal map alpha channel")
    parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="Derive the normal map from this image instead of generating noise",
    )
    parser.add_argument("--out", default="out", help="Output root directory")
    parser.add_argument("--overwrite", action="store_true", help="Overwrite files in existing output directory")
    parser.add_argument(
        "--json",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Write metadata JSON files",
    )
    parser.add_argument("--verbose", action="store_true", help="Log pipeline stages")
    return parser


def _config_from_args(args: argparse.Namespace) -> TextureConfig:
    return TextureConfig(
        seed=args.seed,
        random_seed=args.random_seed,
        gradient=args.gradient,
        noise=NoiseConfig(
            mode=args.mode,
            frequency=args.frequency,
            lacunarity=args.lacunarity,
            persistence=args.persistence,
            octaves=args.octaves,
            quality=args.quality,
        ),
        projection=ProjectionConfig(
            kind=args.projection,
            width=args.size,
            height=args.height if args.height is not None else args.size,
        ),
        normal=NormalMapConfig(
            enabled=args.normal_map,
            strength=args.strength,
            smooth=args.smooth,
            radius=args.radius,
            iterations=args.iterations,
            window=args.blur_window,
            alpha_mode=args.alpha_mode,
        ),
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = _config_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    rasters: dict[str, np.ndarray] = {}
    deterministic_meta: dict[str, Any] = {"config": config.to_dict()}
    generation_start = time.perf_counter()
    if args.input is not None:
        try:
            source = read_png_raster(args.input)
        except (OSError, ValueError) as exc:
            parser.error(f"cannot read --input image: {exc}")
        normal_cfg = replace(config.normal, enabled=True)
        rasters["normal.png"] = derive_normal_map(source, normal_cfg)
        label = args.input.stem.lower()
        height, width = source.shape[:2]
        deterministic_meta["input"] = args.input.name
        values = None
    else:
        try:
            result = generate_textures(config)
        except ValueError as exc:
            parser.error(str(exc))
        rasters["texture.png"] = result.texture
        if result.normal is not None:
            rasters["normal.png"] = result.normal
        label = f"seed{result.seed}"
        height, width = result.values.shape
        deterministic_meta["seed"] = result.seed
        deterministic_meta["stats"] = result.stats.to_dict()
        values = result.values
    generation_seconds = time.perf_counter() - generation_start
    deterministic_meta["width"] = width
    deterministic_meta["height"] = height

    out_dir = texture_output_dir(args.out, label, width, height)
    with staged_texture_dir(out_dir, overwrite=args.overwrite) as stage_dir:
        if values is not None:
            write_values_npy(stage_dir / "values.npy", values)
        for name, raster in rasters.items():
            write_png_rgba(stage_dir / name, raster)
        if args.json:
            meta = {
                **deterministic_meta,
                "generated_at_utc": datetime.now(timezone.utc).isoformat(),
                "generation_seconds": generation_seconds,
                "python_version": platform.python_version(),
                "numpy_version": np.__version__,
            }
            write_json(stage_dir / "deterministic_meta.json", deterministic_meta)
            write_json(stage_dir / "meta.json", meta)

    print(f"Generated textures: {out_dir}")
    if "stats" in deterministic_meta:
        stats = deterministic_meta["stats"]
        print(
            f"Noise {config.noise.mode} on {config.projection.kind} grid: "
            f"min={stats['min_value']:.3f}, max={stats['max_value']:.3f}, "
            f"mean={stats['mean_value']:.3f}, std={stats['std_value']:.3f}"
        )
    print(f"Generation time: {generation_seconds:.3f} s ({width}x{height})")
    file_count = sum(1 for child in out_dir.iterdir() if child.is_file())
    print(f"Output files: {file_count}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
