"""Exception types raised by the solver.

Only two conditions are fatal: an instance whose kind has no strategy, and
a non-positive dimension count. Infeasible or sub-optimal answers are not
errors; they are reported through ``SolveResult.valid``.
"""

from __future__ import annotations


class DriftSolverError(Exception):
    """Base class for all solver errors."""


class UnsupportedKind(DriftSolverError, TypeError):
    """Raised when a problem matches none of the known strategies."""

    def __init__(self, kind: object):
        self.kind = kind
        super().__init__(f"Unsupported problem type: {kind}")


class InvalidDimension(DriftSolverError, ValueError):
    """Raised when a dimension count is zero or negative."""

    def __init__(self, dimensions: int):
        self.dimensions = dimensions
        super().__init__(f"dimensions must be >= 1, got {dimensions}")
