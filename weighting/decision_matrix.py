# -*- coding: utf-8 -*-
"""
Decision matrix construction (X).

Every element of the decision matrix must be strictly positive, since
later stages take logarithms of ratios built from it.  Non-positive raw
values are not rejected; they are repaired with ``x -> |x| + 1``.
"""

import logging
import math
from numbers import Real
from typing import Optional, Sequence

import numpy as np

from config import CriterionType
from loggers import Diagnostics, get_module_logger, report
from .exceptions import EmptyInputError, InvalidMatrixError, ShapeError

logger = get_module_logger('decision_matrix')

STAGE = "decision_matrix"


def build_decision_matrix(
    rows: Sequence[Sequence[float]],
    criteria_types: Sequence[CriterionType],
    diagnostics: Optional[Diagnostics] = None,
) -> np.ndarray:
    """
    Build the m×n decision matrix from raw alternative values.

    Parameters
    ----------
    rows : sequence of sequences
        One value list per alternative, in criterion order.
    criteria_types : sequence of CriterionType
        One tag per criterion; only its length is used here.
    diagnostics : Diagnostics, optional
        Receives a warning for every repaired cell.

    Returns
    -------
    np.ndarray
        Fresh float matrix with every cell > 0.

    Raises
    ------
    EmptyInputError
        No alternatives or no criteria.
    ShapeError
        An alternative does not carry exactly n values.
    InvalidMatrixError
        A value is not a real number.
    """
    m = len(rows)
    n = len(criteria_types)
    if m == 0:
        raise EmptyInputError("At least one alternative is required", stage=STAGE)
    if n == 0:
        raise EmptyInputError("At least one criterion is required", stage=STAGE)

    X = np.empty((m, n), dtype=float)
    for i, row in enumerate(rows):
        if len(row) != n:
            raise ShapeError(
                f"Row {i} must have exactly {n} values, got {len(row)}",
                stage=STAGE, row_index=i)
        for j, value in enumerate(row):
            if isinstance(value, bool) or not isinstance(value, Real):
                raise InvalidMatrixError(
                    f"Value at [{i}][{j}] is not a real number: {value!r}",
                    index=(i, j))
            X[i, j] = float(value)

    repaired = X <= 0
    if repaired.any():
        for i, j in zip(*np.nonzero(repaired)):
            report(logger, diagnostics, logging.WARNING,
                   f"Non-positive value {X[i, j]:g} at alternative {i}, "
                   f"criterion {j}; using |x| + 1",
                   data={'row': int(i), 'column': int(j),
                         'original': float(X[i, j])})
        X[repaired] = np.abs(X[repaired]) + 1.0

    return X


def validate_decision_matrix(matrix: np.ndarray,
                             criteria_types: Sequence[CriterionType]) -> None:
    """Re-check shape and positivity of a built decision matrix."""
    X = np.asarray(matrix, dtype=float)
    if X.ndim != 2 or X.size == 0:
        raise InvalidMatrixError(
            f"Decision matrix must be a non-empty 2-D array, got shape {X.shape}")
    if X.shape[1] != len(criteria_types):
        raise InvalidMatrixError(
            f"Decision matrix has {X.shape[1]} columns but "
            f"{len(criteria_types)} criteria were given")

    bad = ~np.isfinite(X) | (X <= 0)
    if bad.any():
        i, j = (int(k) for k in np.argwhere(bad)[0])
        value = X[i, j]
        reason = "is not finite" if not math.isfinite(value) else "must be > 0"
        raise InvalidMatrixError(
            f"Decision matrix value at [{i}][{j}] {reason}: {value}",
            index=(i, j))
