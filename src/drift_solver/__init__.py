"""drift_solver - heuristic pattern-projection solver for classic NP-complete problems."""

__version__ = "0.1.0"

from drift_solver.core.errors import DriftSolverError, InvalidDimension, UnsupportedKind
from drift_solver.core.problems import (
    ColoringInstance,
    ProblemKind,
    SatisfactionInstance,
    SubsetInstance,
    TourInstance,
    instance_from_dict,
)
from drift_solver.engine.solver import PatternSolver, SolveResult, solve
from drift_solver.engine.state import SolverConfig

__all__ = [
    "DriftSolverError",
    "InvalidDimension",
    "UnsupportedKind",
    "ProblemKind",
    "TourInstance",
    "ColoringInstance",
    "SatisfactionInstance",
    "SubsetInstance",
    "instance_from_dict",
    "PatternSolver",
    "SolveResult",
    "SolverConfig",
    "solve",
]
