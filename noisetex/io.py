"""Output serialization for generated textures."""

from __future__ import annotations

from contextlib import contextmanager
import json
from pathlib import Path
import shutil
import tempfile
from typing import Any, Iterator

import numpy as np
from PIL import Image

from noisetex.raster import from_u8, to_u8


def texture_output_dir(out_root: str | Path, label: str, width: int, height: int) -> Path:
    """Return ``<out_root>/<label>/<width>x<height>`` for one texture set."""

    return Path(out_root) / label / f"{width}x{height}"


@contextmanager
def staged_texture_dir(target: Path, *, overwrite: bool) -> Iterator[Path]:
    """Yield a scratch directory whose files replace `target`'s on clean exit.

    A non-empty `target` is only replaced when `overwrite` is set. If the
    block raises, `target` is left untouched.
    """

    if target.exists() and any(target.iterdir()) and not overwrite:
        raise FileExistsError(
            f"Output directory already exists and is not empty: {target}. Use --overwrite to replace files."
        )
    target.mkdir(parents=True, exist_ok=True)
    stage_dir = Path(tempfile.mkdtemp(prefix=".staging-", dir=str(target.parent)))
    try:
        yield stage_dir
        for child in target.iterdir():
            if child.is_dir() and not child.is_symlink():
                shutil.rmtree(child)
            else:
                child.unlink()
        for child in stage_dir.iterdir():
            child.replace(target / child.name)
    finally:
        shutil.rmtree(stage_dir, ignore_errors=True)


def write_values_npy(path: str | Path, values: np.ndarray) -> None:
    np.save(Path(path), values.astype(np.float32), allow_pickle=False)


def write_png_rgba(path: str | Path, raster: np.ndarray) -> None:
    image = Image.fromarray(to_u8(raster))
    image.save(Path(path))


def read_png_raster(path: str | Path) -> np.ndarray:
    """Load an image file as an RGBA raster in [0, 1]."""

    with Image.open(Path(path)) as image:
        rgba = np.asarray(image.convert("RGBA"))
    return from_u8(rgba)


def write_json(path: str | Path, payload: dict[str, Any]) -> None:
    text = json.dumps(payload, indent=2, sort_keys=True)
    Path(path).write_text(text + "\n", encoding="utf-8")
