"""Subset selection with a single local-improvement pass."""

from __future__ import annotations

from typing import Sequence

from drift_solver.core.problems import SubsetInstance
from drift_solver.core.solutions import SubsetSolution
from drift_solver.engine.projection import Projection


def subset_gap(numbers: Sequence[float], target: float, mask: Sequence[bool]) -> float:
    """``|sum(selected) - target|`` for a membership mask."""
    return abs(sum(x for x, keep in zip(numbers, mask) if keep) - target)


def refine_subset(
    numbers: Sequence[float],
    target: float,
    mask: Sequence[bool],
) -> list[bool]:
    """One pass of single-element flips.

    Each index is flipped once, against the best mask found so far, and
    the flip is kept only if it strictly reduces the gap to the target.
    The result is never worse than ``mask`` but not necessarily optimal.
    """
    best = list(mask)
    best_gap = subset_gap(numbers, target, best)

    for i in range(len(numbers)):
        trial = list(best)
        trial[i] = not trial[i]
        gap = subset_gap(numbers, target, trial)
        if gap < best_gap:
            best = trial
            best_gap = gap

    return best


def _to_solution(numbers: Sequence[float], target: float, mask: Sequence[bool]) -> SubsetSolution:
    selected = tuple(i for i, keep in enumerate(mask) if keep)
    total = sum(numbers[i] for i in selected)
    return SubsetSolution(
        subset=selected,
        sum=total,
        target=target,
        difference=abs(total - target),
    )


def solve_subset(
    projections: Sequence[Projection],
    instance: SubsetInstance,
    config=None,
) -> SubsetSolution:
    """Pick elements by comparing include and exclude scores.

    Element ``x`` is included iff
    ``sum((p.coord(0) * x) mod 1) < sum((p.coord(1) * x) mod 1)``. When the
    resulting sum misses the target by more than the tolerance (0.1% of the
    target by default) the mask goes through ``refine_subset``.
    """
    tolerance = config.subset_tolerance if config is not None else 0.001
    numbers = instance.numbers
    target = instance.target

    mask = []
    for x in numbers:
        include = 0.0
        exclude = 0.0
        for proj in projections:
            include += (proj.coord(0) * x) % 1
            exclude += (proj.coord(1) * x) % 1
        mask.append(include < exclude)

    if subset_gap(numbers, target, mask) > tolerance * target:
        mask = refine_subset(numbers, target, mask)

    return _to_solution(numbers, target, mask)
