"""Problem instance definitions.

Four problem kinds share one engine. Each kind is a frozen dataclass that
validates its payload on construction, so the strategies never see a
malformed instance:

- TourInstance: travelling salesman over 2D points
- ColoringInstance: vertex coloring of an adjacency matrix
- SatisfactionInstance: CNF satisfiability with DIMACS-style literals
- SubsetInstance: subset sum over a list of numbers

Instances convert to and from the plain dictionary shape used by the
problem generator (``type``, ``cities``, ``graph``, ``maxColors``, ...).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import Any, Mapping, Sequence, Union

from drift_solver.core.errors import InvalidDimension, UnsupportedKind


DEFAULT_DIMENSIONS = 11


class ProblemKind(str, Enum):
    """Wire tags for the supported problem kinds."""

    TOUR = "tsp"
    COLORING = "graph-coloring"
    SATISFACTION = "sat"
    SUBSET = "subset-sum"


@dataclass(frozen=True)
class RangeConstraint:
    """Affine remap of a unit value onto [min, max]."""

    min: float
    max: float

    def apply(self, value: float) -> float:
        return self.min + value * (self.max - self.min)


@dataclass(frozen=True)
class DiscreteConstraint:
    """Quantize a unit value into one of ``options`` or into ``range(count)``."""

    options: tuple[float, ...] | None = None
    count: int | None = None

    def __post_init__(self):
        if self.options is not None:
            if len(self.options) == 0:
                raise ValueError("options must not be empty")
            object.__setattr__(self, "options", tuple(float(o) for o in self.options))
        elif self.count is None:
            raise ValueError("DiscreteConstraint needs options or count")
        elif self.count < 1:
            raise ValueError(f"count must be >= 1, got {self.count}")

    def apply(self, value: float) -> float:
        if self.options is not None:
            index = min(int(math.floor(value * len(self.options))), len(self.options) - 1)
            return self.options[index]
        return float(math.floor(value * self.count))


Constraint = Union[RangeConstraint, DiscreteConstraint]


def _check_common(instance: Any, default_size: int) -> None:
    """Normalize and validate the fields every instance carries."""
    size = default_size if instance.size is None else int(instance.size)
    if size < 1:
        raise ValueError(f"size must be >= 1, got {size}")
    object.__setattr__(instance, "size", size)

    if instance.dimensions <= 0:
        raise InvalidDimension(instance.dimensions)

    if instance.constraints is not None:
        constraints = tuple(instance.constraints)
        for c in constraints:
            if c is not None and not isinstance(c, (RangeConstraint, DiscreteConstraint)):
                raise ValueError(f"Unknown constraint: {c!r}")
        object.__setattr__(instance, "constraints", constraints)


def _as_real(value: Any, field_name: str) -> Real:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValueError(f"{field_name} must contain real numbers, got {value!r}")
    return value


def _constraints_to_dict(constraints: tuple[Constraint | None, ...] | None) -> list | None:
    if constraints is None:
        return None
    out: list[dict[str, Any] | None] = []
    for c in constraints:
        if c is None:
            out.append(None)
        elif isinstance(c, RangeConstraint):
            out.append({'min': c.min, 'max': c.max})
        elif c.options is not None:
            out.append({'discrete': True, 'options': list(c.options)})
        else:
            out.append({'discrete': True, 'count': c.count})
    return out


def _constraints_from_dict(raw: Sequence[Mapping[str, Any] | None] | None):
    if raw is None:
        return None
    constraints: list[Constraint | None] = []
    for item in raw:
        if not item:
            constraints.append(None)
        elif 'min' in item and 'max' in item:
            constraints.append(RangeConstraint(float(item['min']), float(item['max'])))
        elif item.get('discrete'):
            options = item.get('options')
            if options is not None:
                constraints.append(DiscreteConstraint(options=tuple(options)))
            else:
                constraints.append(DiscreteConstraint(count=int(item['count'])))
        else:
            constraints.append(None)
    return tuple(constraints)


@dataclass(frozen=True)
class TourInstance:
    """Travelling salesman instance.

    Attributes:
        cities: Sequence of (x, y) points.
        size: Scale hint, defaults to the number of cities.
        dimensions: Candidate vector dimensionality.
        constraints: Optional per-dimension sampling constraints.
        name: Human-readable label.
    """

    cities: tuple[tuple[float, float], ...]
    size: int | None = None
    dimensions: int = DEFAULT_DIMENSIONS
    constraints: tuple[Constraint | None, ...] | None = None
    name: str = ""

    kind = ProblemKind.TOUR

    def __post_init__(self):
        cities = tuple((float(x), float(y)) for x, y in self.cities)
        if len(cities) == 0:
            raise ValueError("cities must not be empty")
        object.__setattr__(self, "cities", cities)
        _check_common(self, len(cities))
        if not self.name:
            object.__setattr__(self, "name", f"Traveling Salesman Problem ({len(cities)} cities)")

    def to_dict(self) -> dict[str, Any]:
        return {
            'type': self.kind.value,
            'name': self.name,
            'size': self.size,
            'dimensions': self.dimensions,
            'cities': [{'x': x, 'y': y} for x, y in self.cities],
            'constraints': _constraints_to_dict(self.constraints),
        }


@dataclass(frozen=True)
class ColoringInstance:
    """Graph coloring instance over a symmetric 0/1 adjacency matrix."""

    graph: tuple[tuple[int, ...], ...]
    max_colors: int
    size: int | None = None
    dimensions: int = DEFAULT_DIMENSIONS
    constraints: tuple[Constraint | None, ...] | None = None
    name: str = ""

    kind = ProblemKind.COLORING

    def __post_init__(self):
        graph = tuple(tuple(int(v) for v in row) for row in self.graph)
        n = len(graph)
        if n == 0:
            raise ValueError("graph must not be empty")
        for i, row in enumerate(graph):
            if len(row) != n:
                raise ValueError(f"graph must be square, row {i} has {len(row)} entries for {n} nodes")
            for j, v in enumerate(row):
                if v not in (0, 1):
                    raise ValueError(f"graph entries must be 0 or 1, got {v} at ({i}, {j})")
                if graph[j][i] != v:
                    raise ValueError(f"graph must be symmetric, mismatch at ({i}, {j})")
        if self.max_colors < 1:
            raise ValueError(f"max_colors must be >= 1, got {self.max_colors}")
        object.__setattr__(self, "graph", graph)
        _check_common(self, n)
        if not self.name:
            object.__setattr__(self, "name", f"Graph Coloring Problem ({n} nodes)")

    def neighbors(self, node: int) -> list[int]:
        return [j for j, v in enumerate(self.graph[node]) if v == 1]

    def to_dict(self) -> dict[str, Any]:
        return {
            'type': self.kind.value,
            'name': self.name,
            'size': self.size,
            'dimensions': self.dimensions,
            'graph': [list(row) for row in self.graph],
            'maxColors': self.max_colors,
            'constraints': _constraints_to_dict(self.constraints),
        }


@dataclass(frozen=True)
class SatisfactionInstance:
    """CNF instance; literal ``k`` means variable ``k-1``, ``-k`` its negation."""

    variables: int
    clauses: tuple[tuple[int, ...], ...]
    size: int | None = None
    dimensions: int = DEFAULT_DIMENSIONS
    constraints: tuple[Constraint | None, ...] | None = None
    name: str = ""

    kind = ProblemKind.SATISFACTION

    def __post_init__(self):
        if self.variables < 1:
            raise ValueError(f"variables must be >= 1, got {self.variables}")
        clauses = tuple(tuple(int(lit) for lit in clause) for clause in self.clauses)
        for clause in clauses:
            for lit in clause:
                if lit == 0 or abs(lit) > self.variables:
                    raise ValueError(
                        f"literal {lit} out of range for {self.variables} variables"
                    )
        object.__setattr__(self, "clauses", clauses)
        _check_common(self, self.variables)
        if not self.name:
            object.__setattr__(
                self, "name",
                f"3-SAT Problem ({self.variables} variables, {len(clauses)} clauses)",
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            'type': self.kind.value,
            'name': self.name,
            'size': self.size,
            'dimensions': self.dimensions,
            'variables': self.variables,
            'clauses': [list(c) for c in self.clauses],
            'constraints': _constraints_to_dict(self.constraints),
        }


@dataclass(frozen=True)
class SubsetInstance:
    """Subset sum instance."""

    numbers: tuple[float, ...]
    target: float
    size: int | None = None
    dimensions: int = DEFAULT_DIMENSIONS
    constraints: tuple[Constraint | None, ...] | None = None
    name: str = ""

    kind = ProblemKind.SUBSET

    def __post_init__(self):
        numbers = tuple(_as_real(x, "numbers") for x in self.numbers)
        if len(numbers) == 0:
            raise ValueError("numbers must not be empty")
        _as_real(self.target, "target")
        if self.target < 0:
            raise ValueError(f"target must be >= 0, got {self.target}")
        object.__setattr__(self, "numbers", numbers)
        _check_common(self, len(numbers))
        if not self.name:
            object.__setattr__(self, "name", f"Subset Sum Problem ({len(numbers)} integers)")

    def to_dict(self) -> dict[str, Any]:
        return {
            'type': self.kind.value,
            'name': self.name,
            'size': self.size,
            'dimensions': self.dimensions,
            'numbers': list(self.numbers),
            'target': self.target,
            'constraints': _constraints_to_dict(self.constraints),
        }


Instance = Union[TourInstance, ColoringInstance, SatisfactionInstance, SubsetInstance]

INSTANCE_TYPES: dict[ProblemKind, type] = {
    ProblemKind.TOUR: TourInstance,
    ProblemKind.COLORING: ColoringInstance,
    ProblemKind.SATISFACTION: SatisfactionInstance,
    ProblemKind.SUBSET: SubsetInstance,
}


def kind_of(instance: object) -> ProblemKind:
    """Return the kind of a known instance type.

    Raises:
        UnsupportedKind: If ``instance`` is not one of the four variants.
    """
    kind = getattr(instance, "kind", None)
    if isinstance(kind, ProblemKind) and isinstance(instance, INSTANCE_TYPES[kind]):
        return kind
    raise UnsupportedKind(kind if kind is not None else type(instance).__name__)


def instance_from_dict(d: Mapping[str, Any]) -> Instance:
    """Build an instance from its dictionary form.

    Raises:
        UnsupportedKind: If the ``type`` tag names no known problem kind.
    """
    tag = d.get('type')
    try:
        kind = ProblemKind(tag)
    except ValueError:
        raise UnsupportedKind(tag) from None

    common = {
        'size': d.get('size'),
        'dimensions': int(d['dimensions']) if d.get('dimensions') is not None else DEFAULT_DIMENSIONS,
        'constraints': _constraints_from_dict(d.get('constraints')),
        'name': d.get('name', ""),
    }

    if kind is ProblemKind.TOUR:
        cities = tuple(
            (c['x'], c['y']) if isinstance(c, Mapping) else tuple(c)
            for c in d['cities']
        )
        return TourInstance(cities=cities, **common)
    if kind is ProblemKind.COLORING:
        return ColoringInstance(graph=d['graph'], max_colors=int(d['maxColors']), **common)
    if kind is ProblemKind.SATISFACTION:
        return SatisfactionInstance(variables=int(d['variables']), clauses=d['clauses'], **common)
    return SubsetInstance(numbers=tuple(d['numbers']), target=d['target'], **common)
