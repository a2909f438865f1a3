"""Feasibility checks for produced solutions.

Verification only reports; it never raises for an infeasible answer. A
solution whose shape does not match the instance kind is reported invalid.
"""

from __future__ import annotations

from drift_solver.core.problems import (
    ColoringInstance,
    Instance,
    SatisfactionInstance,
    SubsetInstance,
    TourInstance,
)
from drift_solver.core.solutions import (
    ColoringSolution,
    SatisfactionSolution,
    Solution,
    SubsetSolution,
    TourSolution,
)
from drift_solver.strategies.satisfaction import clauses_satisfied


SUBSET_TOLERANCE = 0.001


def verify_tour(solution: TourSolution, instance: TourInstance) -> bool:
    """Path must visit every city index exactly once."""
    n = len(instance.cities)
    return len(solution.path) == n and set(solution.path) == set(range(n))


def verify_coloring(solution: ColoringSolution, instance: ColoringInstance) -> bool:
    """No edge joins two equal colors, and every color is below the budget."""
    coloring = solution.coloring
    n = len(instance.graph)
    if len(coloring) != n:
        return False

    for i in range(n):
        for j in range(i + 1, n):
            if instance.graph[i][j] == 1 and coloring[i] == coloring[j]:
                return False

    return max(coloring) < instance.max_colors and min(coloring) >= 0


def verify_satisfaction(solution: SatisfactionSolution, instance: SatisfactionInstance) -> bool:
    """Every clause needs a literal matching the assignment.

    The check is recomputed from the assignment rather than read from
    ``solution.satisfied``.
    """
    if len(solution.assignment) != instance.variables:
        return False
    return clauses_satisfied(instance.clauses, solution.assignment)


def verify_subset(
    solution: SubsetSolution,
    instance: SubsetInstance,
    tolerance: float = SUBSET_TOLERANCE,
) -> bool:
    """Selected sum must lie within ``tolerance * target`` of the target.

    An exact hit is always accepted, which keeps a zero target reachable.
    """
    if len(set(solution.subset)) != len(solution.subset):
        return False
    if any(i < 0 or i >= len(instance.numbers) for i in solution.subset):
        return False

    total = sum(instance.numbers[i] for i in solution.subset)
    difference = abs(total - instance.target)
    return difference == 0 or difference < tolerance * instance.target


def verify_solution(
    solution: Solution,
    instance: Instance,
    subset_tolerance: float = SUBSET_TOLERANCE,
) -> bool:
    """Dispatch to the verifier for the instance kind."""
    if isinstance(instance, TourInstance) and isinstance(solution, TourSolution):
        return verify_tour(solution, instance)
    if isinstance(instance, ColoringInstance) and isinstance(solution, ColoringSolution):
        return verify_coloring(solution, instance)
    if isinstance(instance, SatisfactionInstance) and isinstance(solution, SatisfactionSolution):
        return verify_satisfaction(solution, instance)
    if isinstance(instance, SubsetInstance) and isinstance(solution, SubsetSolution):
        return verify_subset(solution, instance, subset_tolerance)
    return False
