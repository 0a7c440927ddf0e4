# -*- coding: utf-8 -*-
"""
Exceptions raised by the MEREC weighting pipeline.

Structural problems (empty input, ragged rows, bad parameters) abort the
pipeline immediately.  The ``Invalid*`` classes are raised by the
per-stage validators when a stage's output breaks its invariant.

All classes derive from ``ValueError`` so callers that only catch the
builtin keep working.
"""

from typing import Optional


class MerecError(ValueError):
    """Base class for every error raised by the pipeline."""

    stage: str = ""

    def __init__(self, message: str, *, stage: Optional[str] = None,
                 index: Optional[object] = None):
        super().__init__(message)
        if stage is not None:
            self.stage = stage
        self.index = index


class EmptyInputError(MerecError):
    """Matrix, criteria list or an intermediate array has zero length."""


class ShapeError(MerecError):
    """Row lengths disagree with each other or with the criteria count."""

    def __init__(self, message: str, *, stage: Optional[str] = None,
                 index: Optional[object] = None,
                 row_index: Optional[int] = None):
        super().__init__(message, stage=stage,
                         index=row_index if index is None else index)
        self.row_index = row_index


class ShapeMismatchError(ShapeError):
    """Two intermediate arrays disagree in their number of alternatives."""


class InvalidParameterError(MerecError):
    """A numeric parameter such as epsilon is out of range."""


class InvalidCriterionTypeError(MerecError):
    """A criterion type is neither benefit nor cost."""


class InvalidMatrixError(MerecError):
    stage = "decision_matrix"


class NormalizationError(MerecError):
    stage = "normalization"


class InvalidPerformanceError(MerecError):
    stage = "overall_performance"


class InvalidRemovalError(MerecError):
    stage = "removal_performance"


class InvalidDeviationError(MerecError):
    stage = "absolute_deviation"


class NegativeDeviationError(MerecError):
    stage = "absolute_deviation"


class InvalidWeightError(MerecError):
    stage = "final_weights"


__all__ = [
    'MerecError',
    'EmptyInputError',
    'ShapeError',
    'ShapeMismatchError',
    'InvalidParameterError',
    'InvalidCriterionTypeError',
    'InvalidMatrixError',
    'NormalizationError',
    'InvalidPerformanceError',
    'InvalidRemovalError',
    'InvalidDeviationError',
    'NegativeDeviationError',
    'InvalidWeightError',
]
