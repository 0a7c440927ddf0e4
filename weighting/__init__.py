# -*- coding: utf-8 -*-
"""
Weighting Methods Module

Objective criterion weights for MCDM via MEREC (Method based on the
Removal Effects of Criteria):

**Entry points:**
- compute_merec_weights: matrix + benefit/cost tags → weight list
- MERECWeightCalculator: DataFrame → WeightResult with every stage
- calculate_weights: 'merec' / 'equal' dispatcher

**Stages (each with a validator):**
- build_decision_matrix      (X)
- normalize_matrix           (N)
- calculate_overall_performance  (S)
- calculate_removal_performance  (S')
- calculate_absolute_deviations  (E)
- calculate_final_weights    (W)

**Summaries:**
- analyze_criteria_impact, summarize_criteria_weights,
  removal_performance_stats, performance_breakdown
"""

from .base import WeightResult, calculate_weights, parse_criteria_types
from .decision_matrix import build_decision_matrix, validate_decision_matrix
from .normalization import normalize_matrix, validate_normalized_matrix
from .performance import (
    calculate_overall_performance,
    validate_overall_performance,
    performance_breakdown,
)
from .removal import calculate_removal_performance, validate_removal_performance
from .deviation import calculate_absolute_deviations, validate_absolute_deviations
from .final_weights import calculate_final_weights, validate_final_weights
from .merec import MERECWeightCalculator, compute_merec_weights, run_pipeline
from .summary import (
    analyze_criteria_impact,
    importance_level,
    impact_level,
    summarize_criteria_weights,
    removal_performance_stats,
)
from .exceptions import *  # noqa: F401,F403
from .exceptions import __all__ as _exception_names

__all__ = [
    # Result type
    'WeightResult',

    # Entry points
    'compute_merec_weights',
    'MERECWeightCalculator',
    'calculate_weights',
    'run_pipeline',
    'parse_criteria_types',

    # Stages
    'build_decision_matrix',
    'validate_decision_matrix',
    'normalize_matrix',
    'validate_normalized_matrix',
    'calculate_overall_performance',
    'validate_overall_performance',
    'performance_breakdown',
    'calculate_removal_performance',
    'validate_removal_performance',
    'calculate_absolute_deviations',
    'validate_absolute_deviations',
    'calculate_final_weights',
    'validate_final_weights',

    # Summaries
    'analyze_criteria_impact',
    'importance_level',
    'impact_level',
    'summarize_criteria_weights',
    'removal_performance_stats',
] + list(_exception_names)
