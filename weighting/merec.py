# -*- coding: utf-8 -*-
"""
MEREC (Method based on Removal Effects of Criteria) weight calculator.

Measures criterion importance by impact of removal on overall performance.
Reference: Keshavarz-Ghorabaee et al. (2021), Symmetry, 13(4), 525.

Pipeline
--------
    raw values → X (decision matrix) → N (normalized) → S (overall
    performance) → S' (removal performance) → E (absolute deviation)
    → W (weights)

Each stage returns a fresh array and is followed by its validator.
Diagnostics go to the ``merec`` logger and, when the caller passes one,
to a per-call :class:`loggers.Diagnostics` sink.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import numpy as np
import pandas as pd

from config import CriterionType, MERECConfig, get_config
from loggers import (
    Diagnostics,
    get_module_logger,
    log_exceptions,
    log_execution,
    timed_stage,
)
from .base import CriteriaTypes, WeightResult, check_epsilon, parse_criteria_types
from .decision_matrix import build_decision_matrix, validate_decision_matrix
from .deviation import calculate_absolute_deviations, validate_absolute_deviations
from .exceptions import EmptyInputError, InvalidCriterionTypeError, ShapeError
from .final_weights import calculate_final_weights, validate_final_weights
from .normalization import normalize_matrix, validate_normalized_matrix
from .performance import calculate_overall_performance, validate_overall_performance
from .removal import calculate_removal_performance, validate_removal_performance

logger = get_module_logger('merec')

DEFAULT_EPSILON = 1e-10


def _check_rows(matrix: Sequence[Sequence[float]], n_types: int) -> None:
    """Reject empty or ragged input before any numeric work."""
    if matrix is None or len(matrix) == 0:
        raise EmptyInputError("Matrix must not be empty", stage="input")
    if n_types == 0:
        raise EmptyInputError("Criteria types must not be empty", stage="input")
    n = len(matrix[0])
    if n != n_types:
        raise ShapeError(
            f"Matrix column count ({n}) must equal the number of "
            f"criteria types ({n_types})", stage="input", row_index=0)
    for i, row in enumerate(matrix):
        if row is None or len(row) != n:
            got = 0 if row is None else len(row)
            raise ShapeError(f"Row {i} must have {n} columns, got {got}",
                             stage="input", row_index=i)


def _as_rows(matrix: Any) -> List[Sequence[float]]:
    if isinstance(matrix, pd.DataFrame):
        return matrix.to_numpy().tolist()
    if isinstance(matrix, np.ndarray):
        if matrix.size == 0:
            raise EmptyInputError("Decision matrix is empty", stage="input")
        if matrix.ndim != 2:
            raise ShapeError(f"Matrix must be 2-D, got shape {matrix.shape}",
                             stage="input")
        return matrix.tolist()
    return matrix


def run_pipeline(
    matrix: Sequence[Sequence[float]],
    criteria_types: Sequence[CriterionType],
    epsilon: float = DEFAULT_EPSILON,
    tolerance: float = 1e-10,
    diagnostics: Optional[Diagnostics] = None,
) -> Dict[str, np.ndarray]:
    """Run all six stages and return every intermediate array.

    Inputs are assumed to have passed the entry-point checks; the
    stage validators still run after every step.
    """
    with timed_stage("decision_matrix", diagnostics, logger):
        X = build_decision_matrix(matrix, criteria_types, diagnostics)
        validate_decision_matrix(X, criteria_types)

    with timed_stage("normalization", diagnostics, logger):
        N = normalize_matrix(X, criteria_types, epsilon, diagnostics)
        validate_normalized_matrix(N)

    with timed_stage("overall_performance", diagnostics, logger):
        S = calculate_overall_performance(N, epsilon, diagnostics)
        validate_overall_performance(S, diagnostics)

    with timed_stage("removal_performance", diagnostics, logger):
        S_removed = calculate_removal_performance(N, epsilon, diagnostics)
        validate_removal_performance(S_removed, diagnostics)

    with timed_stage("absolute_deviation", diagnostics, logger):
        E = calculate_absolute_deviations(S, S_removed, diagnostics)
        validate_absolute_deviations(E)

    with timed_stage("final_weights", diagnostics, logger):
        W = calculate_final_weights(E, tolerance, diagnostics)
        validate_final_weights(W, tolerance)

    return {
        'decision_matrix': X,
        'normalized_matrix': N,
        'overall_performance': S,
        'removal_performance': S_removed,
        'removal_effects': E,
        'weights': W,
    }


@log_exceptions(logger)
@log_execution(logger)
def compute_merec_weights(
    matrix: Union[Sequence[Sequence[float]], np.ndarray, pd.DataFrame],
    criteria_types: Sequence[Union[CriterionType, str]],
    epsilon: float = DEFAULT_EPSILON,
    diagnostics: Optional[Diagnostics] = None,
) -> List[float]:
    """
    Compute MEREC criterion weights for a decision matrix.

    Parameters
    ----------
    matrix : list of lists, np.ndarray or pd.DataFrame
        m alternatives × n criteria.
    criteria_types : sequence of 'benefit' / 'cost' (or CriterionType)
        One tag per column.
    epsilon : float, default=1e-10
        Floor for logarithms and divisions; must be > 0.
    diagnostics : Diagnostics, optional
        Per-call sink for warnings raised while recovering from
        degenerate numeric input.

    Returns
    -------
    list of float
        n weights in [0, 1] summing to 1.

    Raises
    ------
    EmptyInputError, ShapeError, InvalidParameterError,
    InvalidCriterionTypeError
        Input problems, detected before any computation.
    MerecError
        A stage produced output violating its invariant.

    Examples
    --------
    >>> from loggers import Diagnostics
    >>> diag = Diagnostics()
    >>> weights = compute_merec_weights(
    ...     [[8, 7, 6, 5], [6, 8, 7, 6], [7, 6, 8, 7], [5, 9, 5, 8]],
    ...     ['benefit', 'benefit', 'cost', 'benefit'],
    ...     diagnostics=diag,
    ... )
    >>> print(weights)       # ≈ [0.3519, 0.1917, 0.1998, 0.2566]
    """
    rows = _as_rows(matrix)
    n_types = 0 if criteria_types is None else len(criteria_types)
    _check_rows(rows, n_types)
    eps = check_epsilon(epsilon)
    types = parse_criteria_types(criteria_types)

    stages = run_pipeline(rows, types, eps, diagnostics=diagnostics)
    return [float(w) for w in stages['weights']]


class MERECWeightCalculator:
    """
    MEREC weight calculator.

    Parameters
    ----------
    epsilon : float, optional
        Numerical stability constant; defaults to the configured value
        (1e-10).
    cost_criteria : list of str, optional
        Names of criteria where *lower* values are preferred (cost type).
        All other criteria are treated as benefit type.  Ignored when
        ``calculate`` is given explicit ``criteria_types``.
    config : MERECConfig, optional
        Overrides the global configuration.
    """

    def __init__(
        self,
        epsilon: Optional[float] = None,
        cost_criteria: Optional[List[str]] = None,
        config: Optional[MERECConfig] = None,
    ):
        cfg = config if config is not None else get_config().merec
        cfg.validate()
        self.epsilon = check_epsilon(cfg.epsilon if epsilon is None else epsilon)
        self.tolerance = cfg.weight_tolerance
        self.cost_criteria: List[str] = list(cost_criteria or [])

    def _resolve_types(self, columns: List[Any],
                       criteria_types: Optional[CriteriaTypes]) -> List[CriterionType]:
        if criteria_types is None:
            unknown = [c for c in self.cost_criteria if c not in columns]
            if unknown:
                raise InvalidCriterionTypeError(
                    f"cost_criteria not found in data: {unknown}")
            return [CriterionType.COST if c in self.cost_criteria
                    else CriterionType.BENEFIT for c in columns]
        if isinstance(criteria_types, Mapping):
            missing = [c for c in columns if c not in criteria_types]
            if missing:
                raise ShapeError(f"No criterion type given for columns: {missing}",
                                 stage="input")
            return [CriterionType.parse(criteria_types[c]) for c in columns]
        if len(criteria_types) != len(columns):
            raise ShapeError(
                f"Data has {len(columns)} columns but {len(criteria_types)} "
                f"criteria types were given", stage="input")
        return parse_criteria_types(criteria_types)

    @log_exceptions(logger)
    def calculate(self, data: pd.DataFrame,
                  criteria_types: Optional[CriteriaTypes] = None,
                  diagnostics: Optional[Diagnostics] = None) -> WeightResult:
        """
        Calculate MEREC weights from decision matrix.

        Parameters
        ----------
        data : pd.DataFrame
            Decision matrix (alternatives × criteria)
        criteria_types : sequence or mapping, optional
            Benefit/cost tag per column, positionally or keyed by column
            label.  Defaults to ``cost_criteria`` / benefit.
        diagnostics : Diagnostics, optional
            Sink for this call's warnings; a private one is created when
            omitted so the records still end up in ``details``.

        Returns
        -------
        WeightResult
            Weights keyed by column label, with every intermediate stage
            in ``details``.

        Raises
        ------
        EmptyInputError
            If data has no rows or no columns
        TypeError
            If data contains non-numeric columns
        ShapeError
            If two columns share a label
        """
        if data.shape[0] == 0 or data.shape[1] == 0:
            raise EmptyInputError("Input DataFrame is empty", stage="input")

        non_numeric = data.select_dtypes(exclude=[np.number]).columns.tolist()
        if non_numeric:
            raise TypeError(f"Non-numeric columns found: {non_numeric}")

        if data.columns.duplicated().any():
            dupes = data.columns[data.columns.duplicated()].unique().tolist()
            raise ShapeError(f"Duplicate column labels: {dupes}", stage="input")

        columns = data.columns.tolist()
        types = self._resolve_types(columns, criteria_types)
        diag = diagnostics if diagnostics is not None else Diagnostics()

        stages = run_pipeline(data.to_numpy(dtype=float).tolist(), types,
                              self.epsilon, self.tolerance, diag)
        weights = stages['weights']
        E = stages['removal_effects']

        return WeightResult(
            weights={col: float(weights[j]) for j, col in enumerate(columns)},
            method="merec",
            details={
                "criteria_types": {col: t.value for col, t in zip(columns, types)},
                "removal_effects": {col: float(E[j]) for j, col in enumerate(columns)},
                "decision_matrix": stages['decision_matrix'],
                "normalized_matrix": stages['normalized_matrix'],
                "overall_performance": stages['overall_performance'].tolist(),
                "removal_performance": pd.DataFrame(
                    stages['removal_performance'], index=data.index, columns=columns),
                "n_alternatives": data.shape[0],
                "n_criteria": data.shape[1],
                "epsilon": self.epsilon,
                "diagnostics": diag.to_records(),
                "interpretation": "Higher weights indicate criteria whose removal "
                                  "significantly changes alternative performance."
            }
        )
