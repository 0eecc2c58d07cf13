# tests/utils.py
"""
Small, reusable helpers used across the ksweep test suite.

Functions:
- perm_invariant_accuracy(y_pred, y_true): best accuracy over relabelings of predicted clusters.
- first_min_index(values): index of the first minimum in a sequence.
"""

from __future__ import annotations

import itertools
from typing import Sequence

import numpy as np


def perm_invariant_accuracy(y_pred: Sequence[int], y_true: Sequence[int]) -> float:
    """
    Best accuracy over all one-to-one mappings of predicted ids to true ids.

    Brute force over permutations; tests keep the number of clusters small.
    """
    y_pred = np.asarray(y_pred)
    y_true = np.asarray(y_true)
    if y_pred.shape != y_true.shape:
        raise ValueError(f"Shape mismatch: {y_pred.shape} vs {y_true.shape}")
    pred_ids = np.unique(y_pred)
    true_ids = np.unique(y_true)
    k = max(len(pred_ids), len(true_ids))
    true_pool = list(true_ids) + [None] * (k - len(true_ids))

    best = 0.0
    for perm in itertools.permutations(true_pool, len(pred_ids)):
        mapping = dict(zip(pred_ids, perm))
        hits = sum(1 for p, t in zip(y_pred, y_true) if mapping[p] == t)
        best = max(best, hits / max(1, len(y_true)))
    return float(best)


def first_min_index(values: Sequence[float]) -> int:
    """Index of the first occurrence of the minimum."""
    best = 0
    for i, v in enumerate(values):
        if v < values[best]:
            best = i
    return best
