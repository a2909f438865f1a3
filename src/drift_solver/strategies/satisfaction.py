"""Truth assignment from projection leanings."""

from __future__ import annotations

from typing import Sequence

from drift_solver.core.problems import SatisfactionInstance
from drift_solver.core.solutions import SatisfactionSolution
from drift_solver.engine.projection import Projection


def clauses_satisfied(
    clauses: Sequence[Sequence[int]],
    assignment: Sequence[bool],
) -> bool:
    """True iff every clause has a literal whose polarity matches."""
    return all(
        any(assignment[abs(lit) - 1] == (lit > 0) for lit in clause)
        for clause in clauses
    )


def solve_satisfaction(
    projections: Sequence[Projection],
    instance: SatisfactionInstance,
    config=None,
) -> SatisfactionSolution:
    """Assign each variable the polarity with the lower leaning score.

    Variable ``i`` leans true by ``sum((p.coord(0) * (i + 1)) mod 1)`` and
    false by ``sum((p.coord(1) * (i + 1)) mod 1)``. Each occurrence of a
    positive literal lowers the true score by the bias, each negative one
    the false score. The variable is true iff its true score is strictly
    lower.
    """
    bias = config.satisfaction_bias if config is not None else 0.1

    occurrences = [[0, 0] for _ in range(instance.variables)]
    for clause in instance.clauses:
        for lit in clause:
            occurrences[abs(lit) - 1][0 if lit > 0 else 1] += 1

    assignment = []
    for i in range(instance.variables):
        true_score = 0.0
        false_score = 0.0
        for proj in projections:
            true_score += (proj.coord(0) * (i + 1)) % 1
            false_score += (proj.coord(1) * (i + 1)) % 1

        positive, negative = occurrences[i]
        true_score -= bias * positive
        false_score -= bias * negative

        assignment.append(true_score < false_score)

    return SatisfactionSolution(
        assignment=tuple(assignment),
        satisfied=clauses_satisfied(instance.clauses, assignment),
    )
