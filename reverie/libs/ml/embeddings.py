"""Pooling helpers for feature-extraction output."""

from __future__ import annotations

from typing import Any, List, Sequence

import numpy as np


def mean_pool(features: Any) -> List[float]:
    """Average token vectors into a single sentence vector."""

    arr = np.asarray(features, dtype=float)
    if arr.size == 0:
        return []
    # pipeline output is [batch][tokens][dim]; a single input has batch size 1
    while arr.ndim > 2:
        arr = arr[0]
    if arr.ndim == 2:
        arr = arr.mean(axis=0)
    return arr.tolist()


def l2_normalize(vector: Sequence[float]) -> List[float]:
    va = np.array(vector, dtype=float)
    norm = float(np.linalg.norm(va))
    if norm == 0:
        return va.tolist()
    return (va / norm).tolist()


__all__ = ["l2_normalize", "mean_pool"]
