# -*- coding: utf-8 -*-
"""
Unit tests for the individual MEREC stages.

Covers:
  - build_decision_matrix / validate_decision_matrix
  - normalize_matrix / validate_normalized_matrix
  - calculate_overall_performance / performance_breakdown
  - calculate_removal_performance
  - calculate_absolute_deviations
  - calculate_final_weights / validate_final_weights
"""

import math

import numpy as np
import pytest

from config import CriterionType
from loggers import Diagnostics
from weighting.decision_matrix import build_decision_matrix, validate_decision_matrix
from weighting.normalization import normalize_matrix, validate_normalized_matrix
from weighting.performance import (
    calculate_overall_performance,
    performance_breakdown,
    validate_overall_performance,
)
from weighting.removal import calculate_removal_performance, validate_removal_performance
from weighting.deviation import calculate_absolute_deviations, validate_absolute_deviations
from weighting.final_weights import calculate_final_weights, validate_final_weights
from weighting.exceptions import (
    EmptyInputError,
    InvalidDeviationError,
    InvalidMatrixError,
    InvalidPerformanceError,
    InvalidRemovalError,
    InvalidWeightError,
    NegativeDeviationError,
    NormalizationError,
    ShapeError,
    ShapeMismatchError,
)

B = CriterionType.BENEFIT
C = CriterionType.COST


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def reference_matrix():
    """4 alternatives × 4 criteria from the worked MEREC example."""
    return np.array(
        [
            [8.0, 7.0, 6.0, 5.0],
            [6.0, 8.0, 7.0, 6.0],
            [7.0, 6.0, 8.0, 7.0],
            [5.0, 9.0, 5.0, 8.0],
        ]
    )


@pytest.fixture()
def reference_types():
    return [B, B, C, B]


@pytest.fixture()
def reference_normalized(reference_matrix, reference_types):
    return normalize_matrix(reference_matrix, reference_types)


# ---------------------------------------------------------------------------
# TestDecisionMatrix
# ---------------------------------------------------------------------------

class TestDecisionMatrix:
    def test_positive_values_copied(self):
        X = build_decision_matrix([[1, 2], [3, 4]], [B, C])
        assert X.dtype == float
        np.testing.assert_array_equal(X, [[1.0, 2.0], [3.0, 4.0]])

    def test_non_positive_values_repaired(self):
        X = build_decision_matrix([[0, -2.5], [3, 4]], [B, B])
        np.testing.assert_array_equal(X, [[1.0, 3.5], [3.0, 4.0]])

    def test_repairs_reported(self):
        diag = Diagnostics()
        build_decision_matrix([[0, 2], [-3, 4]], [B, B], diagnostics=diag)
        assert len(diag.warnings) == 2
        assert diag.entries[0]["data"] == {"row": 0, "column": 0, "original": 0.0}

    def test_input_not_mutated(self):
        rows = [[-1.0, 2.0], [3.0, 0.0]]
        build_decision_matrix(rows, [B, C])
        assert rows == [[-1.0, 2.0], [3.0, 0.0]]

    def test_no_alternatives_raises(self):
        with pytest.raises(EmptyInputError):
            build_decision_matrix([], [B])

    def test_no_criteria_raises(self):
        with pytest.raises(EmptyInputError):
            build_decision_matrix([[1.0]], [])

    def test_wrong_row_length_reports_row(self):
        with pytest.raises(ShapeError) as excinfo:
            build_decision_matrix([[1, 2], [3]], [B, B])
        assert excinfo.value.row_index == 1

    def test_non_numeric_value_raises(self):
        with pytest.raises(InvalidMatrixError):
            build_decision_matrix([[1, "x"]], [B, B])

    def test_validator_accepts_built_matrix(self):
        X = build_decision_matrix([[1, -1], [2, 0]], [B, C])
        validate_decision_matrix(X, [B, C])

    def test_validator_rejects_non_positive(self):
        with pytest.raises(InvalidMatrixError) as excinfo:
            validate_decision_matrix(np.array([[1.0, 0.0]]), [B, B])
        assert excinfo.value.index == (0, 1)

    def test_validator_rejects_nan(self):
        with pytest.raises(InvalidMatrixError):
            validate_decision_matrix(np.array([[1.0, np.nan]]), [B, B])

    def test_validator_rejects_column_mismatch(self):
        with pytest.raises(InvalidMatrixError):
            validate_decision_matrix(np.ones((2, 3)), [B, B])


# ---------------------------------------------------------------------------
# TestNormalization
# ---------------------------------------------------------------------------

class TestNormalization:
    def test_benefit_is_min_over_value(self):
        N = normalize_matrix(np.array([[2.0], [4.0], [8.0]]), [B])
        np.testing.assert_allclose(N[:, 0], [1.0, 0.5, 0.25])

    def test_cost_is_value_over_max(self):
        N = normalize_matrix(np.array([[2.0], [4.0], [8.0]]), [C])
        np.testing.assert_allclose(N[:, 0], [0.25, 0.5, 1.0])

    def test_accepts_string_types(self):
        N = normalize_matrix(np.array([[2.0], [4.0]]), ["cost"])
        np.testing.assert_allclose(N[:, 0], [0.5, 1.0])

    def test_output_in_unit_interval(self, reference_normalized):
        assert (reference_normalized > 0).all()
        assert (reference_normalized <= 1).all()

    def test_input_not_mutated(self, reference_matrix, reference_types):
        before = reference_matrix.copy()
        normalize_matrix(reference_matrix, reference_types)
        np.testing.assert_array_equal(reference_matrix, before)

    def test_benefit_scale_invariant(self, reference_matrix, reference_types):
        scaled = reference_matrix.copy()
        scaled[:, 0] *= 37.5
        N1 = normalize_matrix(reference_matrix, reference_types)
        N2 = normalize_matrix(scaled, reference_types)
        np.testing.assert_allclose(N1[:, 0], N2[:, 0], rtol=1e-12)

    def test_degenerate_benefit_column_uses_epsilon(self):
        diag = Diagnostics()
        X = np.array([[0.0, 1.0], [0.0, 2.0]])
        N = normalize_matrix(X, [B, C], epsilon=1e-10, diagnostics=diag)
        np.testing.assert_array_equal(N[:, 0], [1e-10, 1e-10])
        validate_normalized_matrix(N)
        assert len(diag.warnings) == 1

    def test_zero_cost_column_uses_epsilon(self):
        N = normalize_matrix(np.array([[0.0], [0.0]]), [C], epsilon=1e-6)
        np.testing.assert_array_equal(N[:, 0], [1e-6, 1e-6])

    def test_type_count_mismatch_raises(self, reference_matrix):
        with pytest.raises(ShapeError):
            normalize_matrix(reference_matrix, [B, B])

    def test_validator_rejects_nan(self):
        with pytest.raises(NormalizationError) as excinfo:
            validate_normalized_matrix(np.array([[0.5, np.nan]]))
        assert excinfo.value.index == (0, 1)

    def test_validator_rejects_negative(self):
        with pytest.raises(NormalizationError):
            validate_normalized_matrix(np.array([[-0.5, 1.0]]))


# ---------------------------------------------------------------------------
# TestOverallPerformance
# ---------------------------------------------------------------------------

class TestOverallPerformance:
    def test_formula_divides_by_criterion_count(self):
        N = np.array([[0.5, 1.0, 0.25]])
        expected = math.log(1 + (abs(math.log(0.5)) + 0 + abs(math.log(0.25))) / 3)
        S = calculate_overall_performance(N)
        assert abs(S[0] - expected) < 1e-12

    def test_non_negative(self, reference_normalized):
        S = calculate_overall_performance(reference_normalized)
        assert S.shape == (4,)
        assert (S >= 0).all()

    def test_nan_term_replaced_by_log_epsilon(self):
        diag = Diagnostics()
        N = np.array([[np.nan, 1.0]])
        S = calculate_overall_performance(N, epsilon=1e-10, diagnostics=diag)
        expected = math.log(1 + abs(math.log(1e-10)) / 2)
        assert abs(S[0] - expected) < 1e-12
        assert diag.warnings

    def test_empty_raises(self):
        with pytest.raises(EmptyInputError):
            calculate_overall_performance(np.empty((0, 3)))

    def test_validator_rejects_inf(self):
        with pytest.raises(InvalidPerformanceError):
            validate_overall_performance(np.array([0.1, np.inf]))

    def test_breakdown_matches_performance(self, reference_normalized):
        parts = performance_breakdown(reference_normalized)
        np.testing.assert_allclose(
            parts["performance"], calculate_overall_performance(reference_normalized))
        np.testing.assert_allclose(parts["abs_ln"], np.abs(parts["ln"]))


# ---------------------------------------------------------------------------
# TestRemovalPerformance
# ---------------------------------------------------------------------------

class TestRemovalPerformance:
    def test_shape(self, reference_normalized):
        R = calculate_removal_performance(reference_normalized)
        assert R.shape == (4, 4)
        assert np.isfinite(R).all()

    def test_averages_over_remaining_criteria(self):
        N = np.array([[0.5, 1.0, 0.25]])
        R = calculate_removal_performance(N)
        expected_0 = math.log(1 + (0 + abs(math.log(0.25))) / 2)
        expected_1 = math.log(1 + (abs(math.log(0.5)) + abs(math.log(0.25))) / 2)
        assert abs(R[0, 0] - expected_0) < 1e-12
        assert abs(R[0, 1] - expected_1) < 1e-12

    def test_single_criterion_is_zero(self):
        diag = Diagnostics()
        R = calculate_removal_performance(np.array([[0.5], [1.0]]), diagnostics=diag)
        np.testing.assert_array_equal(R, [[0.0], [0.0]])
        assert len(diag.warnings) == 1

    def test_input_not_mutated(self, reference_normalized):
        before = reference_normalized.copy()
        calculate_removal_performance(reference_normalized)
        np.testing.assert_array_equal(reference_normalized, before)

    def test_validator_rejects_nan(self):
        with pytest.raises(InvalidRemovalError) as excinfo:
            validate_removal_performance(np.array([[0.1, np.nan]]))
        assert excinfo.value.index == (0, 1)

    def test_validator_rejects_empty(self):
        with pytest.raises(InvalidRemovalError):
            validate_removal_performance(np.empty((0, 0)))


# ---------------------------------------------------------------------------
# TestAbsoluteDeviations
# ---------------------------------------------------------------------------

class TestAbsoluteDeviations:
    def test_sum_of_absolute_differences(self):
        S = np.array([1.0, 2.0])
        R = np.array([[0.5, 1.5], [2.5, 1.0]])
        E = calculate_absolute_deviations(S, R)
        np.testing.assert_allclose(E, [1.0, 1.5])

    def test_non_finite_counted_as_zero(self):
        diag = Diagnostics()
        S = np.array([np.nan, 1.0])
        R = np.array([[0.5], [np.inf]])
        E = calculate_absolute_deviations(S, R, diagnostics=diag)
        np.testing.assert_allclose(E, [0.5 + 1.0])
        assert len(diag.warnings) == 2

    def test_row_mismatch_raises(self):
        with pytest.raises(ShapeMismatchError):
            calculate_absolute_deviations(np.array([1.0, 2.0]), np.array([[1.0]]))

    def test_empty_performance_raises(self):
        with pytest.raises(EmptyInputError):
            calculate_absolute_deviations(np.array([]), np.empty((0, 2)))

    def test_no_criteria_raises(self):
        with pytest.raises(EmptyInputError):
            calculate_absolute_deviations(np.array([1.0]), np.empty((1, 0)))

    def test_validator_rejects_negative(self):
        with pytest.raises(NegativeDeviationError):
            validate_absolute_deviations(np.array([0.2, -0.1]))

    def test_validator_rejects_nan(self):
        with pytest.raises(InvalidDeviationError):
            validate_absolute_deviations(np.array([np.nan]))


# ---------------------------------------------------------------------------
# TestFinalWeights
# ---------------------------------------------------------------------------

class TestFinalWeights:
    def test_proportional_to_deviation(self):
        W = calculate_final_weights(np.array([1.0, 3.0]))
        np.testing.assert_allclose(W, [0.25, 0.75])
        validate_final_weights(W)

    def test_zero_total_gives_uniform(self):
        diag = Diagnostics()
        W = calculate_final_weights(np.zeros(4), diagnostics=diag)
        np.testing.assert_array_equal(W, [0.25] * 4)
        assert diag.warnings

    def test_non_finite_total_gives_uniform(self):
        W = calculate_final_weights(np.array([1.0, np.inf]))
        np.testing.assert_array_equal(W, [0.5, 0.5])

    def test_negative_deviation_renormalized(self):
        W = calculate_final_weights(np.array([-1.0, 3.0]))
        np.testing.assert_allclose(W, [0.25, 0.75])
        validate_final_weights(W)

    def test_all_negative_falls_back_to_uniform(self):
        W = calculate_final_weights(np.array([-1.0, -3.0]))
        np.testing.assert_array_equal(W, [0.5, 0.5])

    def test_empty_raises(self):
        with pytest.raises(EmptyInputError):
            calculate_final_weights(np.array([]))

    @pytest.mark.parametrize(
        "weights",
        [[0.5, 0.6], [1.2, -0.2], [np.nan, 1.0], [0.3, 0.3]],
    )
    def test_validator_rejects_invalid(self, weights):
        with pytest.raises(InvalidWeightError):
            validate_final_weights(np.array(weights))

    def test_validator_rejects_empty(self):
        with pytest.raises(InvalidWeightError):
            validate_final_weights(np.array([]))
