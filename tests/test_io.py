from __future__ import annotations

import pytest

from noisetex.io import staged_texture_dir, texture_output_dir


def test_texture_output_dir_layout(tmp_path) -> None:
    assert texture_output_dir(tmp_path, "seed3", 64, 32) == tmp_path / "seed3" / "64x32"


def test_staged_files_replace_previous_outputs(tmp_path) -> None:
    target = texture_output_dir(tmp_path, "seed1", 8, 8)
    target.mkdir(parents=True)
    (target / "stale.png").write_bytes(b"old")
    (target / "texture.png").write_bytes(b"old")

    with staged_texture_dir(target, overwrite=True) as stage_dir:
        assert stage_dir.parent == target.parent
        (stage_dir / "texture.png").write_bytes(b"new")

    assert sorted(child.name for child in target.iterdir()) == ["texture.png"]
    assert (target / "texture.png").read_bytes() == b"new"
    assert not list(target.parent.glob(".staging-*"))


def test_non_empty_target_requires_overwrite(tmp_path) -> None:
    target = tmp_path / "seed1" / "8x8"
    target.mkdir(parents=True)
    (target / "texture.png").write_bytes(b"old")

    with pytest.raises(FileExistsError):
        with staged_texture_dir(target, overwrite=False):
            pass
    assert (target / "texture.png").read_bytes() == b"old"


def test_failed_write_leaves_target_untouched(tmp_path) -> None:
    target = tmp_path / "seed1" / "8x8"
    target.mkdir(parents=True)
    (target / "texture.png").write_bytes(b"old")

    with pytest.raises(RuntimeError):
        with staged_texture_dir(target, overwrite=True) as stage_dir:
            (stage_dir / "texture.png").write_bytes(b"partial")
            raise RuntimeError("encoder failed")

    assert (target / "texture.png").read_bytes() == b"old"
    assert not list(target.parent.glob(".staging-*"))
