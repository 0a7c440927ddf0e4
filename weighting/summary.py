# -*- coding: utf-8 -*-
"""
Tabular summaries of MEREC outputs.

These helpers only reshape arrays the pipeline already produced into
``pandas.DataFrame`` objects with labels attached; they compute no new
weights and print nothing.
"""

from typing import Dict, Optional, Sequence, Union

import numpy as np
import pandas as pd

from config import CriterionType, get_config
from .exceptions import EmptyInputError, ShapeError


def _labels(n: int, labels: Optional[Sequence[str]]) -> list:
    if labels is None:
        return [f"C{j + 1}" for j in range(n)]
    if len(labels) != n:
        raise ShapeError(f"Expected {n} labels, got {len(labels)}")
    return list(labels)


def impact_level(percentage: float,
                 thresholds: Optional[Dict[str, float]] = None) -> str:
    """Map a share of total deviation (percent) to high / medium / low."""
    th = {**get_config().summary.impact_thresholds, **(thresholds or {})}
    if percentage >= th["high"]:
        return "high"
    if percentage >= th["medium"]:
        return "medium"
    return "low"


def importance_level(weight: float,
                     thresholds: Optional[Dict[str, float]] = None) -> str:
    """Map a weight in [0, 1] to a five-step importance label."""
    th = thresholds or get_config().summary.importance_thresholds
    percentage = weight * 100.0
    for label, limit in sorted(th.items(), key=lambda kv: kv[1], reverse=True):
        if percentage >= limit:
            return label
    return "very low"


def analyze_criteria_impact(
    deviations: Sequence[float],
    labels: Optional[Sequence[str]] = None,
    thresholds: Optional[Dict[str, float]] = None,
) -> pd.DataFrame:
    """
    Rank criteria by removal effect E_j.

    Returns
    -------
    pd.DataFrame
        Columns ``criterion``, ``deviation``, ``percentage``, ``impact``,
        sorted by deviation (largest first).  ``percentage`` is 0 when
        the total deviation is 0.
    """
    E = np.asarray(deviations, dtype=float).ravel()
    if E.size == 0:
        raise EmptyInputError("Deviation vector must not be empty")
    total = E.sum()
    pct = E / total * 100.0 if total > 0 else np.zeros_like(E)

    df = pd.DataFrame({
        "criterion": _labels(E.size, labels),
        "deviation": E,
        "percentage": pct,
    })
    df["impact"] = [impact_level(p, thresholds) for p in df["percentage"]]
    df = df.sort_values("deviation", ascending=False, kind="stable")
    df.attrs["total_deviation"] = float(total)
    return df.reset_index(drop=True)


def summarize_criteria_weights(
    weights: Sequence[float],
    criteria_types: Optional[Sequence[Union[CriterionType, str]]] = None,
    labels: Optional[Sequence[str]] = None,
    thresholds: Optional[Dict[str, float]] = None,
) -> pd.DataFrame:
    """
    One row per criterion with weight, percentage, importance and rank,
    sorted by weight (rank 1 = most important).
    """
    W = np.asarray(weights, dtype=float).ravel()
    if W.size == 0:
        raise EmptyInputError("Weight vector must not be empty")
    if criteria_types is None:
        types = [CriterionType.BENEFIT.value] * W.size
    else:
        if len(criteria_types) != W.size:
            raise ShapeError(
                f"Expected {W.size} criteria types, got {len(criteria_types)}")
        types = [CriterionType.parse(t).value for t in criteria_types]

    df = pd.DataFrame({
        "criterion": _labels(W.size, labels),
        "type": types,
        "weight": W,
        "percentage": W * 100.0,
    })
    df["importance"] = [importance_level(w, thresholds) for w in W]
    df = df.sort_values("weight", ascending=False, kind="stable").reset_index(drop=True)
    df["rank"] = np.arange(1, len(df) + 1)
    return df


def removal_performance_stats(
    removal: np.ndarray,
    labels: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    """Per-criterion min / max / mean / population std of S'."""
    R = np.asarray(removal, dtype=float)
    if R.ndim != 2 or R.size == 0:
        raise EmptyInputError("Removal performance matrix must not be empty")
    frame = pd.DataFrame(R, columns=_labels(R.shape[1], labels))
    stats = pd.DataFrame({
        "min": frame.min(axis=0),
        "max": frame.max(axis=0),
        "mean": frame.mean(axis=0),
        "std": frame.std(axis=0, ddof=0),
    })
    stats.index.name = "criterion"
    return stats
