# -*- coding: utf-8 -*-
"""
Performance with each criterion removed (S').

    S'_ij = ln(1 + (1/(n-1)) Σ_{k≠j} |ln(n_ik)|)

Each (alternative, removed criterion) pair re-sums the remaining n-1
columns, which makes this the O(m·n²) stage of the pipeline.
"""

import logging
from typing import Optional

import numpy as np

from loggers import Diagnostics, get_module_logger, report
from .exceptions import EmptyInputError, InvalidRemovalError
from .performance import absolute_log_terms

logger = get_module_logger('removal')

STAGE = "removal_performance"


def calculate_removal_performance(
    normalized: np.ndarray,
    epsilon: float = 1e-10,
    diagnostics: Optional[Diagnostics] = None,
) -> np.ndarray:
    """
    Compute S'_ij for every alternative i and removed criterion j.

    With a single criterion there is nothing left after removal, so
    every cell is 0.  A cell that comes out non-finite is also set to 0.
    """
    N = np.asarray(normalized, dtype=float)
    if N.ndim != 2 or N.size == 0:
        raise EmptyInputError("Normalized matrix must not be empty", stage=STAGE)
    m, n = N.shape

    removal = np.zeros((m, n), dtype=float)
    if n == 1:
        report(logger, diagnostics, logging.WARNING,
               "Only one criterion; removal performance is 0 for every alternative")
        return removal

    terms = absolute_log_terms(N, epsilon, diagnostics)
    with np.errstate(invalid='ignore', over='ignore'):
        for j in range(n):
            kept = np.delete(terms, j, axis=1)
            removal[:, j] = np.log(1.0 + kept.sum(axis=1) / kept.shape[1])

    bad = ~np.isfinite(removal)
    if bad.any():
        for i, j in zip(*np.nonzero(bad)):
            report(logger, diagnostics, logging.WARNING,
                   f"Non-finite removal performance at alternative {i}, "
                   f"criterion {j}; using 0",
                   data={'row': int(i), 'column': int(j)})
        removal = np.where(bad, 0.0, removal)
    return removal


def validate_removal_performance(removal: np.ndarray,
                                 diagnostics: Optional[Diagnostics] = None) -> None:
    R = np.asarray(removal, dtype=float)
    if R.ndim != 2 or R.size == 0:
        raise InvalidRemovalError(
            f"Removal performance must be a non-empty 2-D array, got shape {R.shape}")
    bad = ~np.isfinite(R)
    if bad.any():
        i, j = (int(k) for k in np.argwhere(bad)[0])
        raise InvalidRemovalError(
            f"Invalid removal performance at [{i}][{j}]: {R[i, j]}", index=(i, j))
    for i, j in zip(*np.nonzero(R < 0)):
        report(logger, diagnostics, logging.WARNING,
               f"Negative removal performance at [{i}][{j}]: {R[i, j]}",
               data={'row': int(i), 'column': int(j)})
