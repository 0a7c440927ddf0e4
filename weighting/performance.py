# -*- coding: utf-8 -*-
"""
Overall performance of each alternative (S).

    S_i = ln(1 + (1/n) Σ_j |ln(n_ij)|)

The average runs over the *criterion* count n.  Published descriptions
of MEREC write the factor as 1/m; the n divisor is what every weight
reproduced by this package depends on, so it is kept.
"""

import logging
from typing import Dict, Optional

import numpy as np

from loggers import Diagnostics, get_module_logger, report
from .exceptions import EmptyInputError, InvalidPerformanceError

logger = get_module_logger('performance')

STAGE = "overall_performance"


def absolute_log_terms(
    normalized: np.ndarray,
    epsilon: float = 1e-10,
    diagnostics: Optional[Diagnostics] = None,
) -> np.ndarray:
    """Return |ln(max(n_ij, ε))| with non-finite terms replaced by |ln ε|."""
    N = np.asarray(normalized, dtype=float)
    with np.errstate(divide='ignore', invalid='ignore'):
        terms = np.abs(np.log(np.maximum(N, epsilon)))

    bad = ~np.isfinite(terms)
    if bad.any():
        for i, j in zip(*np.nonzero(bad)):
            report(logger, diagnostics, logging.WARNING,
                   f"Non-finite |ln| term at alternative {i}, criterion {j} "
                   f"(n_ij = {N[i, j]}); using |ln(epsilon)|",
                   data={'row': int(i), 'column': int(j)})
        terms = np.where(bad, abs(np.log(epsilon)), terms)
    return terms


def calculate_overall_performance(
    normalized: np.ndarray,
    epsilon: float = 1e-10,
    diagnostics: Optional[Diagnostics] = None,
) -> np.ndarray:
    """
    Compute S_i for every alternative.

    Parameters
    ----------
    normalized : np.ndarray
        Normalized matrix N (m×n).
    epsilon : float
        Floor applied before the logarithm.
    diagnostics : Diagnostics, optional
        Receives a warning for each substituted term or score.

    Returns
    -------
    np.ndarray
        Length-m vector; a score that is still non-finite after term
        substitution is replaced by 0.
    """
    N = np.asarray(normalized, dtype=float)
    if N.ndim != 2 or N.size == 0:
        raise EmptyInputError("Normalized matrix must not be empty", stage=STAGE)
    n = N.shape[1]

    terms = absolute_log_terms(N, epsilon, diagnostics)
    with np.errstate(invalid='ignore', over='ignore'):
        mean_abs_ln = terms.sum(axis=1) / n
        S = np.log(1.0 + mean_abs_ln)

    bad = ~np.isfinite(S)
    if bad.any():
        for i in np.nonzero(bad)[0]:
            report(logger, diagnostics, logging.WARNING,
                   f"Non-finite performance for alternative {i} "
                   f"(mean |ln| = {mean_abs_ln[i]}); using 0",
                   data={'row': int(i)})
        S = np.where(bad, 0.0, S)
    return S


def validate_overall_performance(performance: np.ndarray,
                                 diagnostics: Optional[Diagnostics] = None) -> None:
    S = np.asarray(performance, dtype=float)
    if S.size == 0:
        raise InvalidPerformanceError("Overall performance vector is empty")
    bad = ~np.isfinite(S)
    if bad.any():
        i = int(np.argmax(bad))
        raise InvalidPerformanceError(
            f"Invalid overall performance for alternative {i}: {S[i]}", index=i)
    for i in np.nonzero(S < 0)[0]:
        report(logger, diagnostics, logging.WARNING,
               f"Negative overall performance for alternative {i}: {S[i]}",
               data={'row': int(i)})


def performance_breakdown(normalized: np.ndarray,
                          epsilon: float = 1e-10) -> Dict[str, np.ndarray]:
    """Intermediate arrays of the S_i computation, for inspection."""
    N = np.asarray(normalized, dtype=float)
    if N.ndim != 2 or N.size == 0:
        raise EmptyInputError("Normalized matrix must not be empty", stage=STAGE)
    ln = np.log(np.maximum(N, epsilon))
    abs_ln = np.abs(ln)
    sum_abs_ln = abs_ln.sum(axis=1)
    mean_abs_ln = sum_abs_ln / N.shape[1]
    return {
        'ln': ln,
        'abs_ln': abs_ln,
        'sum_abs_ln': sum_abs_ln,
        'mean_abs_ln': mean_abs_ln,
        'performance': np.log(1.0 + mean_abs_ln),
    }
