"""Random problem instance generators.

Every generator takes an optional ``rng`` (a ``numpy.random.Generator`` or
an integer seed) so sweeps can be reproduced.
"""

from __future__ import annotations

import math

import numpy as np

from drift_solver.core.errors import UnsupportedKind
from drift_solver.core.problems import (
    ColoringInstance,
    Instance,
    ProblemKind,
    SatisfactionInstance,
    SubsetInstance,
    TourInstance,
)


def _as_rng(rng: np.random.Generator | int | None) -> np.random.Generator:
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def generate_tour(size: int, rng: np.random.Generator | int | None = None) -> TourInstance:
    """Generate cities on a circle of radius 100-120 with jittered radii.

    Args:
        size: Number of cities.
        rng: Random generator or seed.

    Returns:
        TourInstance with ``size`` cities.
    """
    if size < 1:
        raise ValueError(f"size must be >= 1, got {size}")
    rng = _as_rng(rng)

    angles = np.arange(size) / size * 2 * np.pi
    radii = 100 + rng.random(size) * 20
    xs = np.cos(angles) * radii
    ys = np.sin(angles) * radii

    cities = tuple((float(x), float(y)) for x, y in zip(xs, ys))
    return TourInstance(cities=cities, size=size)


def generate_coloring(
    size: int,
    density: float = 0.3,
    rng: np.random.Generator | int | None = None,
) -> ColoringInstance:
    """Generate a random undirected graph with the given edge density.

    The color budget is an upper-bound estimate,
    ``min(size, ceil(size * density * 2))``, floored at one color.

    Args:
        size: Number of nodes.
        density: Probability of each edge (0-1).
        rng: Random generator or seed.

    Returns:
        ColoringInstance over a symmetric adjacency matrix.
    """
    if size < 1:
        raise ValueError(f"size must be >= 1, got {size}")
    if not 0 <= density <= 1:
        raise ValueError(f"density must be in [0, 1], got {density}")
    rng = _as_rng(rng)

    upper = np.triu(rng.random((size, size)) < density, k=1)
    graph = (upper | upper.T).astype(int)

    max_colors = max(1, min(size, math.ceil(size * density * 2)))
    return ColoringInstance(graph=graph.tolist(), max_colors=max_colors, size=size)


def generate_satisfaction(
    variables: int,
    clauses: int,
    clause_size: int = 3,
    rng: np.random.Generator | int | None = None,
) -> SatisfactionInstance:
    """Generate a random k-SAT formula (3-SAT by default).

    Literals are drawn uniformly over the variables and negated with
    probability one half; a clause may repeat a variable.
    """
    if variables < 1:
        raise ValueError(f"variables must be >= 1, got {variables}")
    if clauses < 0:
        raise ValueError(f"clauses must be >= 0, got {clauses}")
    rng = _as_rng(rng)

    variable_ids = rng.integers(1, variables + 1, size=(clauses, clause_size))
    negated = rng.random((clauses, clause_size)) < 0.5
    literals = np.where(negated, -variable_ids, variable_ids)

    return SatisfactionInstance(
        variables=variables,
        clauses=literals.tolist(),
        size=variables,
    )


def generate_subset(size: int, rng: np.random.Generator | int | None = None) -> SubsetInstance:
    """Generate integers in [1, 1000] with a target reachable by construction.

    The target is the sum of a random half of the numbers, so at least one
    exact subset exists.
    """
    if size < 1:
        raise ValueError(f"size must be >= 1, got {size}")
    rng = _as_rng(rng)

    numbers = rng.integers(1, 1001, size=size)
    chosen = rng.random(size) < 0.5
    target = int(numbers[chosen].sum())

    return SubsetInstance(numbers=tuple(int(n) for n in numbers), target=target, size=size)


def generate_instance(
    kind: ProblemKind | str,
    size: int,
    rng: np.random.Generator | int | None = None,
) -> Instance:
    """Generate an instance of ``kind`` at scale ``size``.

    Satisfaction instances get ``round(4.2 * size)`` clauses, the usual
    hard ratio for random 3-SAT.
    """
    try:
        kind = ProblemKind(kind)
    except ValueError:
        raise UnsupportedKind(kind) from None

    if kind is ProblemKind.TOUR:
        return generate_tour(size, rng=rng)
    if kind is ProblemKind.COLORING:
        return generate_coloring(size, rng=rng)
    if kind is ProblemKind.SATISFACTION:
        return generate_satisfaction(size, round(4.2 * size), rng=rng)
    return generate_subset(size, rng=rng)
