"""Problem definitions, generators and error types."""

from drift_solver.core.errors import DriftSolverError, InvalidDimension, UnsupportedKind
from drift_solver.core.problems import (
    DEFAULT_DIMENSIONS,
    ColoringInstance,
    DiscreteConstraint,
    Instance,
    ProblemKind,
    RangeConstraint,
    SatisfactionInstance,
    SubsetInstance,
    TourInstance,
    instance_from_dict,
    kind_of,
)
from drift_solver.core.generators import (
    generate_coloring,
    generate_instance,
    generate_satisfaction,
    generate_subset,
    generate_tour,
)

__all__ = [
    # Errors
    "DriftSolverError",
    "InvalidDimension",
    "UnsupportedKind",
    # Instances
    "DEFAULT_DIMENSIONS",
    "ProblemKind",
    "RangeConstraint",
    "DiscreteConstraint",
    "Instance",
    "TourInstance",
    "ColoringInstance",
    "SatisfactionInstance",
    "SubsetInstance",
    "instance_from_dict",
    "kind_of",
    # Generators
    "generate_tour",
    "generate_coloring",
    "generate_satisfaction",
    "generate_subset",
    "generate_instance",
]
