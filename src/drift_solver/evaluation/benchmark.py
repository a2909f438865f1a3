"""Benchmark sweep across problem kinds and sizes.

Generates fresh instances at each requested size, solves them with one
shared solver session, and summarizes timing and validity per kind. An
empirical scaling exponent is fitted on log(time) against log(size).
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Sequence

import numpy as np
from scipy import stats

from drift_solver.core.generators import generate_instance
from drift_solver.core.problems import ProblemKind
from drift_solver.engine.solver import PatternSolver, SolveResult


@dataclass
class BenchmarkConfig:
    """Configuration for a benchmark sweep."""

    kinds: list[ProblemKind] = field(default_factory=lambda: list(ProblemKind))
    sizes: list[int] = field(default_factory=lambda: [10, 20, 50, 100])
    trials: int = 3
    seed: int | None = 42

    # Output
    output_dir: Path | None = None
    verbose: bool = True

    def __post_init__(self):
        self.kinds = [ProblemKind(k) for k in self.kinds]
        if not self.sizes:
            raise ValueError("sizes must not be empty")
        if any(s < 1 for s in self.sizes):
            raise ValueError(f"sizes must all be >= 1, got {self.sizes}")
        if self.trials < 1:
            raise ValueError(f"trials must be >= 1, got {self.trials}")


@dataclass
class BenchmarkRecord:
    """One solve call in a sweep."""

    kind: ProblemKind
    size: int
    trial: int
    elapsed_ms: float
    valid: bool
    polynomial_degree: float
    cache_hit: bool

    @classmethod
    def from_result(cls, kind: ProblemKind, trial: int, result: SolveResult) -> 'BenchmarkRecord':
        return cls(
            kind=kind,
            size=result.problem_size,
            trial=trial,
            elapsed_ms=result.elapsed_ms,
            valid=result.valid,
            polynomial_degree=result.metrics.polynomial_degree,
            cache_hit=result.cache_hit,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            'kind': self.kind.value,
            'size': self.size,
            'trial': self.trial,
            'elapsed_ms': self.elapsed_ms,
            'valid': self.valid,
            'polynomial_degree': self.polynomial_degree,
            'cache_hit': self.cache_hit,
        }


def fit_scaling_exponent(sizes: Sequence[int], times_ms: Sequence[float]) -> float | None:
    """Slope of log(time) against log(size), or None when undetermined.

    Needs at least two distinct sizes with positive times.
    """
    points = [(s, t) for s, t in zip(sizes, times_ms) if s > 1 and t > 0]
    if len({s for s, _ in points}) < 2:
        return None

    log_sizes = np.log([s for s, _ in points])
    log_times = np.log([t for _, t in points])
    fit = stats.linregress(log_sizes, log_times)
    return float(fit.slope)


class BenchmarkSweep:
    """Runs the sweep and aggregates its records.

    Attributes:
        config: Sweep configuration.
        solver: Solver session shared by every run.
        records: Collected per-run records.
    """

    def __init__(self, config: BenchmarkConfig, solver: PatternSolver | None = None):
        self.config = config
        self.solver = solver if solver is not None else PatternSolver()
        self.rng = np.random.default_rng(config.seed)
        self.records: list[BenchmarkRecord] = []

    def run(self, progress: Callable[[BenchmarkRecord], None] | None = None) -> list[BenchmarkRecord]:
        """Execute every (kind, size, trial) combination in order."""
        self.records = []

        for kind in self.config.kinds:
            if self.config.verbose:
                print(f"Benchmarking {kind.value}...")

            for size in self.config.sizes:
                for trial in range(self.config.trials):
                    instance = generate_instance(kind, size, rng=self.rng)
                    result = self.solver.solve(instance)
                    record = BenchmarkRecord.from_result(kind, trial, result)
                    self.records.append(record)

                    if progress is not None:
                        progress(record)

                if self.config.verbose:
                    runs = [r for r in self.records if r.kind is kind and r.size == size]
                    mean_ms = np.mean([r.elapsed_ms for r in runs])
                    valid = sum(r.valid for r in runs)
                    print(f"  size={size:<6} mean={mean_ms:8.3f} ms  valid={valid}/{len(runs)}")

        return self.records

    def summary(self) -> dict[str, Any]:
        """Per-kind validity rate, mean time per size and fitted exponent."""
        summary: dict[str, Any] = {}

        for kind in self.config.kinds:
            runs = [r for r in self.records if r.kind is kind]
            if not runs:
                continue

            sizes = sorted({r.size for r in runs})
            mean_times = [
                float(np.mean([r.elapsed_ms for r in runs if r.size == s]))
                for s in sizes
            ]

            summary[kind.value] = {
                'runs': len(runs),
                'valid_rate': sum(r.valid for r in runs) / len(runs),
                'mean_time_ms': dict(zip(sizes, mean_times)),
                'scaling_exponent': fit_scaling_exponent(sizes, mean_times),
            }

        return summary

    def generate_report(self, output_dir: Path | None = None) -> dict[str, Any]:
        """Build the report and optionally write it as ``benchmark.json``."""
        report = {
            'config': {
                'kinds': [k.value for k in self.config.kinds],
                'sizes': list(self.config.sizes),
                'trials': self.config.trials,
                'seed': self.config.seed,
            },
            'summary': self.summary(),
            'records': [r.to_dict() for r in self.records],
        }

        output_dir = output_dir or self.config.output_dir
        if output_dir is not None:
            output_dir = Path(output_dir)
            output_dir.mkdir(parents=True, exist_ok=True)
            with open(output_dir / "benchmark.json", "w") as f:
                json.dump(report, f, indent=2)

        return report


def run_benchmark(
    kinds: Sequence[ProblemKind | str] | None = None,
    sizes: Sequence[int] | None = None,
    trials: int = 3,
    seed: int | None = 42,
    output_dir: Path | None = None,
    verbose: bool = True,
) -> dict[str, Any]:
    """Convenience wrapper: configure, run and report in one call."""
    config = BenchmarkConfig(
        kinds=list(kinds) if kinds is not None else list(ProblemKind),
        sizes=list(sizes) if sizes is not None else [10, 20, 50, 100],
        trials=trials,
        seed=seed,
        output_dir=output_dir,
        verbose=verbose,
    )
    sweep = BenchmarkSweep(config)
    sweep.run()
    return sweep.generate_report()
