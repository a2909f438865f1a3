"""Tests for the pattern-projection solver session."""

import logging
import math

import numpy as np
import pytest

import drift_solver.engine.solver as solver_module
from drift_solver import (
    ColoringInstance,
    InvalidDimension,
    PatternSolver,
    SatisfactionInstance,
    SolverConfig,
    SubsetInstance,
    TourInstance,
    UnsupportedKind,
    solve,
)
from drift_solver.core.generators import generate_instance, generate_tour
from drift_solver.core.problems import ProblemKind, RangeConstraint
from drift_solver.engine.sampler import PHI, vector_count


SQUARE = ((0, 0), (10, 0), (10, 10), (0, 10))


class TestSolveScenarios:
    """End-to-end solve calls on small fixed instances."""

    def test_square_tour(self):
        """Test that a 4-city square yields a valid closed tour."""
        result = PatternSolver().solve(TourInstance(cities=SQUARE))

        assert result.valid
        assert sorted(result.solution.path) == [0, 1, 2, 3]

        path = result.solution.path
        expected = sum(
            math.hypot(SQUARE[path[k]][0] - SQUARE[path[(k + 1) % 4]][0],
                       SQUARE[path[k]][1] - SQUARE[path[(k + 1) % 4]][1])
            for k in range(4)
        )
        assert abs(result.solution.distance - expected) < 1e-9

    def test_unit_clause(self):
        """Test that a single positive unit clause is satisfied."""
        result = solve(SatisfactionInstance(variables=1, clauses=[[1]]))
        assert result.solution.assignment == (True,)
        assert result.solution.satisfied
        assert result.valid

    def test_zero_target_subset(self):
        """Test that a zero target returns the empty subset."""
        result = PatternSolver().solve(SubsetInstance(numbers=[1, 2, 3, 4, 5], target=0))
        assert result.solution.subset == ()
        assert result.solution.sum == 0
        assert result.solution.difference == 0
        assert result.valid

    def test_coloring(self):
        """Test a small coloring with enough colors for a greedy pass."""
        graph = [[0, 1, 0, 1], [1, 0, 1, 0], [0, 1, 0, 1], [1, 0, 1, 0]]
        result = PatternSolver().solve(ColoringInstance(graph=graph, max_colors=4))
        coloring = result.solution.coloring
        assert len(coloring) == 4
        assert all(0 <= c < 4 for c in coloring)

    def test_evidence_size(self):
        """Test that the strategy sees at most ceil(log2(n)) projections."""
        result = PatternSolver().solve(TourInstance(cities=SQUARE))
        assert len(result.evidence) == 2

    def test_result_to_dict(self):
        """Test the serialized result keys."""
        data = PatternSolver().solve(TourInstance(cities=SQUARE)).to_dict()
        assert data['isValid'] is True
        assert data['problemSize'] == 4
        assert data['complexityMetrics']['theoretical_complexity'] == 'O(n!)'
        assert set(data['solution']) == {'path', 'distance'}
        assert data['timeElapsed'] >= 0


class TestWarmSessionScenarios:
    """Fixed scenarios on a session whose history already holds samples."""

    @pytest.fixture
    def warm_solver(self):
        solver = PatternSolver()
        rng = np.random.default_rng(20)
        for kind in ProblemKind:
            for size in (30, 60, 100):
                solver.solve(generate_instance(kind, size, rng=rng))
        return solver

    def test_history_is_filled(self, warm_solver):
        """Test that warm-up leaves enough samples for correlation."""
        assert warm_solver.state.history.sample_count(0) == 100

    def test_unit_clause(self, warm_solver):
        """Test that a positive unit clause stays satisfied."""
        result = warm_solver.solve(SatisfactionInstance(variables=1, clauses=[[1]]))
        assert len(result.pattern.pairs) == 3
        assert result.solution.assignment == (True,)
        assert result.valid

    def test_zero_target_subset(self, warm_solver):
        """Test that refinement strips every pick for a zero target."""
        result = warm_solver.solve(SubsetInstance(numbers=[1, 2, 3, 4, 5], target=0))
        assert len(result.pattern.pairs) == 3
        assert len(result.evidence) == 3
        assert result.solution.subset == ()
        assert result.solution.difference == 0
        assert result.valid

    def test_square_tour(self, warm_solver):
        """Test that the square tour stays a valid permutation."""
        result = warm_solver.solve(TourInstance(cities=SQUARE))
        assert result.valid
        assert sorted(result.solution.path) == [0, 1, 2, 3]


class TestSolveErrors:
    """Tests for rejected inputs."""

    def test_unsupported_kind(self):
        """Test that foreign objects raise UnsupportedKind."""
        solver = PatternSolver()
        with pytest.raises(UnsupportedKind):
            solver.solve({'type': 'tsp', 'cities': SQUARE})
        with pytest.raises(TypeError):
            solver.solve(object())

    def test_failed_kind_check_leaves_state(self):
        """Test that rejected input does not advance the session."""
        solver = PatternSolver()
        with pytest.raises(UnsupportedKind):
            solver.solve(object())
        assert solver.state.cycle_count == 0

    def test_invalid_dimension(self):
        """Test that dimensions <= 0 are rejected."""
        with pytest.raises(InvalidDimension):
            TourInstance(cities=SQUARE, dimensions=0)

    def test_solver_invalid_dimension(self):
        """Test that a non-positive session dimension count raises InvalidDimension."""
        with pytest.raises(InvalidDimension):
            PatternSolver(dimensions=0)
        with pytest.raises(InvalidDimension):
            PatternSolver(config=SolverConfig(dimensions=-2))

    def test_conflicting_dimensions(self):
        """Test that dimensions and config must agree."""
        with pytest.raises(ValueError):
            PatternSolver(dimensions=5, config=SolverConfig(dimensions=11))
        assert PatternSolver(dimensions=7).config.dimensions == 7


class TestSessionState:
    """Tests for state carried across solve calls."""

    def test_drift_counter(self):
        """Test one cycle per call and the reported drift value."""
        solver = PatternSolver()
        for cycle in range(1, 4):
            result = solver.solve(TourInstance(cities=SQUARE))
            assert solver.state.cycle_count == cycle
            assert result.drift_state == pytest.approx(math.sin(cycle * PHI) * 0.1)

    def test_history_growth_and_cap(self):
        """Test that each call feeds vector_count(size) samples, capped at 100."""
        solver = PatternSolver()
        instance = generate_tour(100, rng=0)
        solver.solve(instance)
        assert solver.state.history.sample_count(0) == vector_count(100)

        for _ in range(20):
            solver.solve(instance)
        assert solver.state.history.sample_count(0) == 100

    def test_cache_reuse(self, monkeypatch):
        """Test that a size within 20% reuses the stored pattern."""
        calls = []
        original = solver_module.build_pattern

        def counting(*args, **kwargs):
            calls.append(1)
            return original(*args, **kwargs)

        monkeypatch.setattr(solver_module, "build_pattern", counting)

        solver = PatternSolver()
        first = solver.solve(generate_tour(50, rng=1))
        second = solver.solve(generate_tour(55, rng=2))

        assert not first.cache_hit
        assert second.cache_hit
        assert second.pattern is first.pattern
        assert second.pattern.strengths == first.pattern.strengths
        assert len(calls) == 1

    def test_cache_miss_outside_window(self):
        """Test that a size far from every entry computes a new pattern."""
        solver = PatternSolver()
        solver.solve(generate_tour(50, rng=1))
        result = solver.solve(generate_tour(100, rng=1))
        assert not result.cache_hit
        assert len(solver.state.cache) == 2

    def test_cache_keyed_by_kind_and_dimensions(self):
        """Test that kind and dimensionality separate cache entries."""
        solver = PatternSolver()
        solver.solve(generate_instance(ProblemKind.TOUR, 20, rng=0))
        assert not solver.solve(generate_instance(ProblemKind.SUBSET, 20, rng=0)).cache_hit

        cities = generate_tour(20, rng=0).cities
        assert not solver.solve(TourInstance(cities=cities, dimensions=5)).cache_hit
        assert solver.solve(TourInstance(cities=cities, dimensions=5)).cache_hit

    def test_cache_hit_reprojects(self):
        """Test that a cache hit projects the current batch."""
        solver = PatternSolver()
        instance = generate_tour(64, rng=3)
        for _ in range(3):
            solver.solve(instance)
        result = solver.solve(instance)
        assert result.cache_hit
        assert len(result.evidence) == 6

    def test_reset(self):
        """Test that reset clears history, cache and counters."""
        solver = PatternSolver()
        solver.solve(TourInstance(cities=SQUARE))
        solver.reset()
        assert solver.state.cycle_count == 0
        assert solver.state.drift_state == 0.0
        assert len(solver.state.cache) == 0
        assert solver.state.history.sample_count(0) == 0

    def test_sessions_reproducible(self):
        """Test that two sessions fed the same sequence agree."""
        instances = [generate_instance(kind, 12, rng=4) for kind in ProblemKind]
        a, b = PatternSolver(), PatternSolver()
        for instance in instances * 3:
            ra, rb = a.solve(instance), b.solve(instance)
            assert ra.solution == rb.solution
            assert ra.pattern == rb.pattern

    def test_logging(self, caplog):
        """Test the start-of-solve log line."""
        caplog.set_level(logging.DEBUG, logger="drift_solver")
        PatternSolver().solve(TourInstance(cities=SQUARE))
        assert "Starting solution for: Traveling Salesman Problem (4 cities)" in caplog.text


class TestSolveProperties:
    """Invariants that hold for any instance a session sees."""

    @pytest.fixture
    def solver(self):
        return PatternSolver()

    def test_tour_always_valid(self, solver):
        """Test that every tour is a permutation with consistent distance."""
        rng = np.random.default_rng(10)
        for size in (1, 2, 3, 7, 15, 40):
            instance = generate_tour(size, rng=rng)
            result = solver.solve(instance)
            assert result.valid
            assert sorted(result.solution.path) == list(range(size))

    def test_coloring_validity_is_honest(self, solver):
        """Test that valid colorings have no conflicting edge."""
        rng = np.random.default_rng(11)
        for size in (3, 8, 20):
            instance = generate_instance(ProblemKind.COLORING, size, rng=rng)
            result = solver.solve(instance)
            coloring = result.solution.coloring
            conflict = any(
                instance.graph[i][j] == 1 and coloring[i] == coloring[j]
                for i in range(size) for j in range(i + 1, size)
            )
            in_budget = max(coloring) < instance.max_colors
            assert result.valid == (not conflict and in_budget)

    def test_satisfaction_flag_is_honest(self, solver):
        """Test that the satisfied flag matches an independent evaluation."""
        rng = np.random.default_rng(12)
        for size in (3, 6, 10):
            instance = generate_instance(ProblemKind.SATISFACTION, size, rng=rng)
            result = solver.solve(instance)
            assignment = result.solution.assignment
            expected = all(
                any(assignment[abs(l) - 1] == (l > 0) for l in clause)
                for clause in instance.clauses
            )
            assert result.solution.satisfied == expected
            assert result.valid == expected

    def test_subset_validity_is_honest(self, solver):
        """Test the subset tolerance rule and never-worse refinement."""
        rng = np.random.default_rng(13)
        for size in (4, 9, 25):
            instance = generate_instance(ProblemKind.SUBSET, size, rng=rng)
            result = solver.solve(instance)
            solution = result.solution
            assert solution.sum == sum(instance.numbers[i] for i in solution.subset)
            assert solution.difference == abs(solution.sum - instance.target)
            expected = solution.difference == 0 or solution.difference < 0.001 * instance.target
            assert result.valid == expected

    def test_low_dimensional_and_constrained(self, solver):
        """Test instances with few dimensions and sampling constraints."""
        cities = generate_tour(10, rng=5).cities
        low = solver.solve(TourInstance(cities=cities, dimensions=2))
        assert low.valid

        constrained = TourInstance(
            cities=cities,
            constraints=(RangeConstraint(0.0, 0.5), None, RangeConstraint(0.25, 0.75)),
        )
        assert solver.solve(constrained).valid
