# -*- coding: utf-8 -*-
"""
Removal effect of each criterion (E).

    E_j = Σ_i |S'_ij - S_i|

A larger E_j means that dropping criterion j moves the alternatives'
scores further, so j carries more discriminating weight.
"""

import logging
from typing import Optional

import numpy as np

from loggers import Diagnostics, get_module_logger, report
from .exceptions import (
    EmptyInputError,
    InvalidDeviationError,
    NegativeDeviationError,
    ShapeMismatchError,
)

logger = get_module_logger('deviation')

STAGE = "absolute_deviation"


def calculate_absolute_deviations(
    performance: np.ndarray,
    removal: np.ndarray,
    diagnostics: Optional[Diagnostics] = None,
) -> np.ndarray:
    """
    Sum the absolute score changes per removed criterion.

    Non-finite entries of S or S' are treated as 0 for this sum only.

    Raises
    ------
    EmptyInputError
        S is empty, or S' has no columns.
    ShapeMismatchError
        S' is not 2-D or its row count differs from len(S).
    """
    S = np.asarray(performance, dtype=float).ravel()
    R = np.asarray(removal, dtype=float)
    m = S.shape[0]
    if m == 0:
        raise EmptyInputError("Overall performance vector must not be empty",
                              stage=STAGE)
    if R.ndim != 2 or R.shape[0] != m:
        rows = R.shape[0] if R.ndim >= 1 else 0
        raise ShapeMismatchError(
            f"Removal matrix has {rows} rows but there are {m} alternatives",
            stage=STAGE)
    if R.shape[1] == 0:
        raise EmptyInputError("Removal matrix has no criteria", stage=STAGE)

    bad_s = ~np.isfinite(S)
    if bad_s.any():
        for i in np.nonzero(bad_s)[0]:
            report(logger, diagnostics, logging.WARNING,
                   f"Non-finite overall performance for alternative {i}: {S[i]}; "
                   f"counting it as 0", data={'row': int(i)})
        S = np.where(bad_s, 0.0, S)

    bad_r = ~np.isfinite(R)
    if bad_r.any():
        for i, j in zip(*np.nonzero(bad_r)):
            report(logger, diagnostics, logging.WARNING,
                   f"Non-finite removal performance at [{i}][{j}]: {R[i, j]}; "
                   f"counting it as 0", data={'row': int(i), 'column': int(j)})
        R = np.where(bad_r, 0.0, R)

    with np.errstate(over='ignore', invalid='ignore'):
        E = np.abs(R - S[:, None]).sum(axis=0)

    bad_e = ~np.isfinite(E)
    if bad_e.any():
        for j in np.nonzero(bad_e)[0]:
            report(logger, diagnostics, logging.WARNING,
                   f"Non-finite deviation for criterion {j}; using 0",
                   data={'column': int(j)})
        E = np.where(bad_e, 0.0, E)
    return E


def validate_absolute_deviations(deviations: np.ndarray) -> None:
    E = np.asarray(deviations, dtype=float)
    if E.size == 0:
        raise InvalidDeviationError("Deviation vector is empty")
    for j, e in enumerate(E.ravel()):
        if not np.isfinite(e):
            raise InvalidDeviationError(
                f"Invalid deviation for criterion {j}: {e}", index=j)
        if e < 0:
            raise NegativeDeviationError(
                f"Deviation must not be negative for criterion {j}: {e}", index=j)
