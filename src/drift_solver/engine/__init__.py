"""Heuristic pattern-projection engine."""

from drift_solver.engine.sampler import PHI, sample_vector, sample_vectors, vector_count
from drift_solver.engine.history import HISTORY_CAPACITY, DimensionHistory
from drift_solver.engine.drift import apply_drift, drift_factor
from drift_solver.engine.projection import Projection, collapse, evidence_count, project_vector
from drift_solver.engine.correlation import (
    CorrelationPattern,
    build_pattern,
    dimension_correlations,
    pearson,
)
from drift_solver.engine.cache import PatternCache, PatternCacheEntry, is_pattern_valid
from drift_solver.engine.state import EngineState, SolverConfig
from drift_solver.engine.solver import PatternSolver, SolveResult, solve

__all__ = [
    # Sampling and drift
    "PHI",
    "sample_vector",
    "sample_vectors",
    "vector_count",
    "DimensionHistory",
    "HISTORY_CAPACITY",
    "apply_drift",
    "drift_factor",
    # Patterns
    "Projection",
    "project_vector",
    "collapse",
    "evidence_count",
    "CorrelationPattern",
    "pearson",
    "dimension_correlations",
    "build_pattern",
    "PatternCache",
    "PatternCacheEntry",
    "is_pattern_valid",
    # Session
    "SolverConfig",
    "EngineState",
    "PatternSolver",
    "SolveResult",
    "solve",
]
