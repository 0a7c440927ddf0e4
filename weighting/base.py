# -*- coding: utf-8 -*-
"""Base classes and utilities for weight calculation."""

import math
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Union

import numpy as np
import pandas as pd

from config import CriterionType
from .exceptions import EmptyInputError, InvalidParameterError

CriteriaTypes = Union[Sequence[Union[CriterionType, str]],
                      Mapping[str, Union[CriterionType, str]]]


@dataclass
class WeightResult:
    """Result container for weight calculations."""
    weights: Dict[str, float]
    method: str
    details: Dict

    @property
    def as_array(self) -> np.ndarray:
        """Return weights as numpy array in criterion (column) order."""
        return np.array(list(self.weights.values()), dtype=float)

    @property
    def as_series(self) -> pd.Series:
        return pd.Series(self.weights)


def parse_criteria_types(criteria_types: Sequence[Union[CriterionType, str]]
                         ) -> List[CriterionType]:
    """Coerce a sequence of tags to ``CriterionType`` members."""
    if criteria_types is None or len(criteria_types) == 0:
        raise EmptyInputError("Criteria types must not be empty",
                              stage="decision_matrix")
    if isinstance(criteria_types, (str, CriterionType)):
        raise InvalidParameterError(
            "criteria_types must be a sequence of types, not a single value")
    return [CriterionType.parse(t) for t in criteria_types]


def check_epsilon(epsilon: float) -> float:
    if isinstance(epsilon, bool) or not isinstance(epsilon, (int, float, np.floating)):
        raise InvalidParameterError(f"epsilon must be a number, got {epsilon!r}")
    if not math.isfinite(epsilon) or epsilon <= 0:
        raise InvalidParameterError(f"epsilon must be > 0, got {epsilon!r}")
    return float(epsilon)


def calculate_weights(data: pd.DataFrame, method: str = "merec",
                      criteria_types: Optional[CriteriaTypes] = None) -> WeightResult:
    """
    Convenience function to calculate weights.

    Parameters
    ----------
    data : pd.DataFrame
        Decision matrix (alternatives × criteria)
    method : str
        Weight calculation method: 'merec' or 'equal'
    criteria_types : sequence or mapping, optional
        Benefit/cost tag per column; all benefit when omitted.

    Returns
    -------
    WeightResult
        Calculated weights with metadata
    """
    from .merec import MERECWeightCalculator

    if method == "merec":
        return MERECWeightCalculator().calculate(data, criteria_types=criteria_types)
    elif method == "equal":
        cols = data.columns.tolist()
        if not cols:
            raise EmptyInputError("Input DataFrame has no criteria")
        w = 1.0 / len(cols)
        return WeightResult(
            weights={c: w for c in cols},
            method="equal",
            details={}
        )
    else:
        raise ValueError(f"Unknown method: {method}")
