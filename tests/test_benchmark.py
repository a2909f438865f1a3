"""Tests for the benchmark sweep."""

import json

import pytest

from drift_solver.core.problems import ProblemKind
from drift_solver.engine.solver import PatternSolver
from drift_solver.evaluation.benchmark import (
    BenchmarkConfig,
    BenchmarkSweep,
    fit_scaling_exponent,
    run_benchmark,
)


class TestBenchmarkConfig:
    """Tests for BenchmarkConfig."""

    def test_defaults(self):
        """Test default kinds and sizes."""
        config = BenchmarkConfig()
        assert config.kinds == list(ProblemKind)
        assert config.sizes == [10, 20, 50, 100]
        assert config.trials == 3

    def test_kind_tags_converted(self):
        """Test that string tags become ProblemKind members."""
        config = BenchmarkConfig(kinds=['tsp', 'sat'])
        assert config.kinds == [ProblemKind.TOUR, ProblemKind.SATISFACTION]

    def test_invalid(self):
        """Test rejected settings."""
        with pytest.raises(ValueError):
            BenchmarkConfig(kinds=['knapsack'])
        with pytest.raises(ValueError):
            BenchmarkConfig(sizes=[])
        with pytest.raises(ValueError):
            BenchmarkConfig(sizes=[0, 10])
        with pytest.raises(ValueError):
            BenchmarkConfig(trials=0)


class TestScalingExponent:
    """Tests for fit_scaling_exponent."""

    def test_linear(self):
        """Test a perfectly linear series."""
        assert fit_scaling_exponent([10, 100, 1000], [1.0, 10.0, 100.0]) == pytest.approx(1.0)

    def test_quadratic(self):
        """Test a perfectly quadratic series."""
        assert fit_scaling_exponent([2, 4, 8], [4.0, 16.0, 64.0]) == pytest.approx(2.0)

    def test_undetermined(self):
        """Test that fewer than two usable sizes give None."""
        assert fit_scaling_exponent([10], [1.0]) is None
        assert fit_scaling_exponent([10, 20], [1.0, 0.0]) is None
        assert fit_scaling_exponent([1, 10], [1.0, 2.0]) is None


class TestBenchmarkSweep:
    """Tests for BenchmarkSweep."""

    @pytest.fixture
    def sweep(self):
        config = BenchmarkConfig(kinds=['tsp', 'subset-sum'], sizes=[8, 16], trials=2, verbose=False)
        return BenchmarkSweep(config)

    def test_run_records(self, sweep):
        """Test one record per kind, size and trial."""
        records = sweep.run()
        assert len(records) == 8
        assert [r.kind for r in records[:4]] == [ProblemKind.TOUR] * 4
        assert all(r.elapsed_ms >= 0 for r in records)
        assert all(r.valid for r in records if r.kind is ProblemKind.TOUR)

    def test_progress_callback(self, sweep):
        """Test that the callback sees every record."""
        seen = []
        sweep.run(progress=seen.append)
        assert seen == sweep.records

    def test_summary(self, sweep):
        """Test per-kind aggregation."""
        sweep.run()
        summary = sweep.summary()
        assert set(summary) == {'tsp', 'subset-sum'}
        assert summary['tsp']['runs'] == 4
        assert summary['tsp']['valid_rate'] == 1.0
        assert set(summary['tsp']['mean_time_ms']) == {8, 16}

    def test_report_written(self, sweep, tmp_path):
        """Test that the report lands in benchmark.json."""
        sweep.run()
        report = sweep.generate_report(tmp_path)

        with open(tmp_path / "benchmark.json") as f:
            saved = json.load(f)
        assert saved['config']['kinds'] == ['tsp', 'subset-sum']
        assert len(saved['records']) == len(report['records']) == 8

    def test_shared_solver(self):
        """Test that a supplied solver session is reused."""
        solver = PatternSolver()
        config = BenchmarkConfig(kinds=['graph-coloring'], sizes=[10], trials=3, verbose=False)
        BenchmarkSweep(config, solver=solver).run()
        assert solver.state.cycle_count == 3

    def test_verbose_output(self, capsys):
        """Test progress printing."""
        config = BenchmarkConfig(kinds=['sat'], sizes=[5], trials=1, verbose=True)
        BenchmarkSweep(config).run()
        out = capsys.readouterr().out
        assert "Benchmarking sat..." in out
        assert "size=5" in out


class TestRunBenchmark:
    """Tests for the run_benchmark wrapper."""

    def test_wrapper(self, tmp_path):
        """Test a one-call sweep with a report on disk."""
        report = run_benchmark(
            kinds=['tsp'], sizes=[4, 32], trials=1, output_dir=tmp_path, verbose=False,
        )
        assert report['summary']['tsp']['runs'] == 2
        assert (tmp_path / "benchmark.json").exists()
