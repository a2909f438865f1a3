"""Verification and telemetry for solver output.

This module provides tools to:
1. Check a solution's feasibility against its instance
2. Estimate synthetic complexity metrics from timing
3. Sweep problem kinds and sizes (``drift_solver.evaluation.benchmark``,
   imported on demand because it depends on the solver itself)
"""

from drift_solver.evaluation.verifier import (
    verify_coloring,
    verify_satisfaction,
    verify_solution,
    verify_subset,
    verify_tour,
)
from drift_solver.evaluation.metrics import (
    THEORETICAL_COMPLEXITY,
    ComplexityMetrics,
    estimate_metrics,
    measured_complexity,
    polynomial_degree,
)

__all__ = [
    # Verifier
    "verify_tour",
    "verify_coloring",
    "verify_satisfaction",
    "verify_subset",
    "verify_solution",
    # Metrics
    "ComplexityMetrics",
    "THEORETICAL_COMPLEXITY",
    "estimate_metrics",
    "measured_complexity",
    "polynomial_degree",
]
