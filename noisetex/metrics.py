"""Summary statistics for generated scalar fields."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

import numpy as np


@dataclass(frozen=True)
class FieldStats:
    """Distribution summary of a scalar grid."""

    min_value: float
    max_value: float
    mean_value: float
    std_value: float
    out_of_range_fraction: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def field_stats(values: np.ndarray) -> FieldStats:
    """Compute min/max/mean/std and the share of samples outside [-1, 1]."""

    if values.ndim != 2:
        raise ValueError("values must be 2D")
    data = values.astype(np.float64, copy=False)
    outside = np.count_nonzero(np.abs(data) > 1.0)
    return FieldStats(
        min_value=float(data.min()),
        max_value=float(data.max()),
        mean_value=float(data.mean()),
        std_value=float(data.std()),
        out_of_range_fraction=float(outside / data.size),
    )
