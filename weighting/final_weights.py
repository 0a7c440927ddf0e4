# -*- coding: utf-8 -*-
"""
Final criterion weights (W).

    w_j = E_j / Σ_k E_k

When no criterion discriminates (Σ E = 0) every criterion gets 1/n.
"""

import logging
from typing import Optional

import numpy as np

from loggers import Diagnostics, get_module_logger, report
from .exceptions import EmptyInputError, InvalidWeightError

logger = get_module_logger('final_weights')

STAGE = "final_weights"


def _uniform(n: int) -> np.ndarray:
    return np.full(n, 1.0 / n)


def calculate_final_weights(
    deviations: np.ndarray,
    tolerance: float = 1e-10,
    diagnostics: Optional[Diagnostics] = None,
) -> np.ndarray:
    """
    Turn removal effects into a weight vector on the probability simplex.

    Fallbacks, in order:
      1. total deviation 0 or non-finite  → uniform weights
      2. a non-finite E_j                 → weight 0 for that criterion
      3. |Σw − 1| > tolerance             → divide by Σw, or uniform if Σw <= 0
    """
    E = np.asarray(deviations, dtype=float).ravel()
    n = E.shape[0]
    if n == 0:
        raise EmptyInputError("Deviation vector must not be empty", stage=STAGE)

    with np.errstate(over='ignore', invalid='ignore'):
        total = E.sum()
    if total == 0 or not np.isfinite(total):
        report(logger, diagnostics, logging.WARNING,
               f"Total deviation is {total}; using equal weights",
               data={'total': float(total)})
        return _uniform(n)

    finite = np.isfinite(E)
    for j in np.nonzero(~finite)[0]:
        report(logger, diagnostics, logging.WARNING,
               f"Non-finite deviation for criterion {j}: {E[j]}; using weight 0",
               data={'column': int(j)})
    for j in np.nonzero(finite & (E < 0))[0]:
        report(logger, diagnostics, logging.WARNING,
               f"Negative deviation for criterion {j}: {E[j]}; using |E|",
               data={'column': int(j)})
    weights = np.where(finite, np.abs(np.where(finite, E, 0.0)) / total, 0.0)

    observed = weights.sum()
    if abs(observed - 1.0) > tolerance:
        if observed > 0:
            report(logger, diagnostics, logging.WARNING,
                   f"Weights sum to {observed!r}; renormalizing",
                   data={'sum': float(observed)})
            weights = weights / observed
        else:
            report(logger, diagnostics, logging.WARNING,
                   f"Weights sum to {observed!r}; using equal weights",
                   data={'sum': float(observed)})
            weights = _uniform(n)
    return weights


def validate_final_weights(weights: np.ndarray, tolerance: float = 1e-10) -> None:
    """Every weight finite and in [0, 1], and the vector sums to 1."""
    W = np.asarray(weights, dtype=float).ravel()
    if W.size == 0:
        raise InvalidWeightError("Weight vector is empty")
    for j, w in enumerate(W):
        if not np.isfinite(w):
            raise InvalidWeightError(f"Invalid weight for criterion {j}: {w}", index=j)
        if w < 0:
            raise InvalidWeightError(
                f"Weight must not be negative for criterion {j}: {w}", index=j)
        if w > 1:
            raise InvalidWeightError(
                f"Weight must not exceed 1 for criterion {j}: {w}", index=j)
    total = W.sum()
    if abs(total - 1.0) > tolerance:
        raise InvalidWeightError(f"Weights must sum to 1, got {total!r}")
