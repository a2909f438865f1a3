"""Problem-specific heuristics that turn ranked projections into solutions."""

from __future__ import annotations

from typing import Callable

from drift_solver.core.errors import UnsupportedKind
from drift_solver.core.problems import ProblemKind
from drift_solver.strategies.coloring import solve_coloring
from drift_solver.strategies.satisfaction import clauses_satisfied, solve_satisfaction
from drift_solver.strategies.subset import refine_subset, solve_subset, subset_gap
from drift_solver.strategies.tour import solve_tour, tour_length

STRATEGIES: dict[ProblemKind, Callable] = {
    ProblemKind.TOUR: solve_tour,
    ProblemKind.COLORING: solve_coloring,
    ProblemKind.SATISFACTION: solve_satisfaction,
    ProblemKind.SUBSET: solve_subset,
}


def get_strategy(kind: ProblemKind | str) -> Callable:
    """Look up the strategy for ``kind``.

    Raises:
        UnsupportedKind: If no strategy handles ``kind``.
    """
    try:
        return STRATEGIES[ProblemKind(kind)]
    except ValueError:
        raise UnsupportedKind(kind) from None


__all__ = [
    "STRATEGIES",
    "get_strategy",
    "solve_tour",
    "solve_coloring",
    "solve_satisfaction",
    "solve_subset",
    "tour_length",
    "clauses_satisfied",
    "refine_subset",
    "subset_gap",
]
