"""Solution records, one per problem kind.

Consumers switch on the instance kind to interpret a solution; the shapes
below mirror the instance variants.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class TourSolution:
    """City visiting order and the length of the closed tour."""

    path: tuple[int, ...]
    distance: float

    def to_dict(self) -> dict[str, Any]:
        return {'path': list(self.path), 'distance': self.distance}


@dataclass(frozen=True)
class ColoringSolution:
    """Color index per node and the number of colors used (max index + 1)."""

    coloring: tuple[int, ...]
    color_count: int

    def to_dict(self) -> dict[str, Any]:
        return {'coloring': list(self.coloring), 'colorCount': self.color_count}


@dataclass(frozen=True)
class SatisfactionSolution:
    """Truth value per variable and whether every clause is satisfied."""

    assignment: tuple[bool, ...]
    satisfied: bool

    def to_dict(self) -> dict[str, Any]:
        return {'assignment': list(self.assignment), 'satisfied': self.satisfied}


@dataclass(frozen=True)
class SubsetSolution:
    """Selected indices, their sum, and the distance to the target."""

    subset: tuple[int, ...]
    sum: float
    target: float
    difference: float

    def to_dict(self) -> dict[str, Any]:
        return {
            'subset': list(self.subset),
            'sum': self.sum,
            'target': self.target,
            'difference': self.difference,
        }


Solution = Union[TourSolution, ColoringSolution, SatisfactionSolution, SubsetSolution]
