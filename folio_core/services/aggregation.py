from __future__ import annotations

from typing import Dict, List

import numpy as np


def _round_half_up(values: np.ndarray) -> List[int]:
    cleaned = np.where(np.isnan(values), 0.0, values)
    return [int(v) for v in np.floor(cleaned + 0.5)]


def aggregate_paths(paths: np.ndarray) -> Dict[str, List[int]]:
    """
    Cross-path statistics per month column of a (paths, months) array.

    Percentiles are rank picks from the sorted column (index floor(n*q)),
    not interpolated. Empty input yields zeros.
    """
    paths = np.asarray(paths, dtype=float)
    if paths.ndim != 2:
        raise ValueError("paths must be a 2-D (paths, months) array")

    n, months = paths.shape
    if n == 0:
        zeros = [0] * months
        return {
            "mean": list(zeros),
            "median": list(zeros),
            "percentile10": list(zeros),
            "percentile90": list(zeros),
        }

    ordered = np.sort(paths, axis=0)
    return {
        "mean": _round_half_up(ordered.mean(axis=0)),
        "median": _round_half_up(ordered[n // 2]),
        "percentile10": _round_half_up(ordered[int(np.floor(n * 0.1))]),
        "percentile90": _round_half_up(ordered[int(np.floor(n * 0.9))]),
    }
