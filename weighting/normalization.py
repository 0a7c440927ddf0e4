# -*- coding: utf-8 -*-
"""
Ratio normalization of the decision matrix (N).

    Benefit criterion j:  n_ij = min_k(x_kj) / x_ij
    Cost    criterion j:  n_ij = x_ij         / max_k(x_kj)

Benefit columns are inverted on purpose: the best alternative gets the
smallest normalized value and therefore the largest |ln n_ij|, i.e. the
largest contribution to its performance score.
"""

import logging
from typing import Optional, Sequence

import numpy as np

from config import CriterionType
from loggers import Diagnostics, get_module_logger, report
from .exceptions import EmptyInputError, NormalizationError, ShapeError

logger = get_module_logger('normalization')

STAGE = "normalization"


def normalize_matrix(
    matrix: np.ndarray,
    criteria_types: Sequence[CriterionType],
    epsilon: float = 1e-10,
    diagnostics: Optional[Diagnostics] = None,
) -> np.ndarray:
    """
    Normalize each column according to its criterion type.

    A benefit column whose minimum is <= 0, or a cost column whose
    maximum is 0, cannot be scaled; the whole column is set to
    *epsilon* and a warning is reported.

    Returns
    -------
    np.ndarray
        New m×n matrix; the input is left untouched.
    """
    X = np.asarray(matrix, dtype=float)
    if X.ndim != 2:
        raise ShapeError(f"Decision matrix must be 2-D, got shape {X.shape}",
                         stage=STAGE)
    if X.size == 0:
        raise EmptyInputError("Decision matrix must not be empty", stage=STAGE)
    n = X.shape[1]
    if n != len(criteria_types):
        raise ShapeError(
            f"Matrix has {n} columns but {len(criteria_types)} criteria were given",
            stage=STAGE)

    N = np.empty_like(X)
    for j, ctype in enumerate(map(CriterionType.parse, criteria_types)):
        col = X[:, j]
        safe_col = np.maximum(col, epsilon)
        if ctype is CriterionType.BENEFIT:
            col_min = col.min()
            if col_min <= 0:
                report(logger, diagnostics, logging.WARNING,
                       f"Benefit criterion {j} has minimum {col_min:g} <= 0; "
                       f"using epsilon for the whole column",
                       data={'column': j, 'min': float(col_min)})
                N[:, j] = epsilon
            else:
                N[:, j] = col_min / safe_col
        else:
            col_max = col.max()
            if col_max == 0:
                report(logger, diagnostics, logging.WARNING,
                       f"Cost criterion {j} has maximum 0; "
                       f"using epsilon for the whole column",
                       data={'column': j, 'max': 0.0})
                N[:, j] = epsilon
            else:
                N[:, j] = safe_col / col_max
    return N


def validate_normalized_matrix(normalized: np.ndarray) -> None:
    """Every normalized cell must be finite and strictly positive."""
    N = np.asarray(normalized, dtype=float)
    bad = ~np.isfinite(N) | (N <= 0)
    if bad.any():
        i, j = (int(k) for k in np.argwhere(bad)[0])
        raise NormalizationError(
            f"Invalid normalized value at [{i}][{j}]: {N[i, j]}", index=(i, j))
