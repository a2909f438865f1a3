"""Command-line interface for drift_solver."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path


def setup_logger(verbose: bool = False, log_path: Path | None = None) -> logging.Logger:
    """Set up the package logger for console and optional file output."""
    logger = logging.getLogger("drift_solver")
    logger.setLevel(logging.DEBUG)

    # Clear any existing handlers
    logger.handlers.clear()

    # Console handler - warnings only unless verbose
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    logger.addHandler(console_handler)

    # File handler - captures everything
    if log_path is not None:
        file_handler = logging.FileHandler(log_path, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)

    return logger


def _load_instance(args: argparse.Namespace):
    from drift_solver.core.generators import generate_instance
    from drift_solver.core.problems import instance_from_dict

    if args.input:
        with open(args.input) as f:
            return instance_from_dict(json.load(f))
    return generate_instance(args.kind, args.size, rng=args.seed)


def cmd_solve(args: argparse.Namespace) -> int:
    """Solve one generated or loaded instance."""
    from drift_solver.engine.solver import PatternSolver

    instance = _load_instance(args)
    solver = PatternSolver()

    result = None
    for _ in range(args.repeat):
        result = solver.solve(instance)

    if args.json:
        payload = {'problem': instance.to_dict(), 'result': result.to_dict()}
        print(json.dumps(payload, indent=2))
    else:
        print(f"{instance.name}")
        print(f"  valid:        {result.valid}")
        print(f"  time:         {result.elapsed_ms:.3f} ms")
        print(f"  drift state:  {result.drift_state:.6f}")
        print(f"  pattern:      {list(result.pattern.pairs)} (cache hit: {result.cache_hit})")
        print(f"  complexity:   {result.metrics.theoretical_complexity} theoretical, "
              f"{result.metrics.time_complexity} measured")
        for key, value in result.solution.to_dict().items():
            print(f"  {key + ':':<13} {value}")

    if args.render:
        from drift_solver.visualization.renderer import render_solution, save_figure

        output = Path(args.render)
        save_figure(render_solution(instance, result), output)
        print(f"Saved to {output}", file=sys.stderr)

    return 0 if result.valid else 2


def cmd_benchmark(args: argparse.Namespace) -> int:
    """Sweep kinds and sizes and report timing and validity."""
    from drift_solver.evaluation.benchmark import BenchmarkConfig, BenchmarkSweep

    config = BenchmarkConfig(
        kinds=args.kinds.split(','),
        sizes=[int(s) for s in args.sizes.split(',')],
        trials=args.trials,
        seed=args.seed,
        output_dir=Path(args.output) if args.output else None,
        verbose=True,
    )

    print("Running benchmark sweep...")
    print(f"  kinds:  {[k.value for k in config.kinds]}")
    print(f"  sizes:  {config.sizes}")
    print(f"  trials: {config.trials}")

    sweep = BenchmarkSweep(config)
    sweep.run()
    report = sweep.generate_report()

    print("\n" + "=" * 60)
    print("BENCHMARK SUMMARY")
    print("=" * 60)
    print(f"\n{'Kind':<18}{'Runs':<8}{'Valid':<10}{'Exponent':<10}")
    print("-" * 60)
    for kind, s in report['summary'].items():
        exponent = s['scaling_exponent']
        exponent_text = f"{exponent:.2f}" if exponent is not None else "n/a"
        print(f"{kind:<18}{s['runs']:<8}{s['valid_rate']:<10.2%}{exponent_text:<10}")

    if config.output_dir:
        print(f"\nResults saved to {config.output_dir}/")

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    from drift_solver.core.problems import ProblemKind

    kinds = [k.value for k in ProblemKind]

    parser = argparse.ArgumentParser(
        description="Heuristic pattern-projection solver for TSP, coloring, SAT and subset sum",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logging")
    parser.add_argument("--log-file", default=None, help="Append full logs to this file")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    solve_parser = subparsers.add_parser("solve", help="Solve one problem instance")
    solve_parser.add_argument("--kind", choices=kinds, default="tsp", help="Problem kind")
    solve_parser.add_argument("--size", type=int, default=20, help="Problem size")
    solve_parser.add_argument("--seed", type=int, default=None, help="Generator seed")
    solve_parser.add_argument("--input", "-i", default=None, help="Load instance JSON instead of generating")
    solve_parser.add_argument("--repeat", type=int, default=1, help="Solve repeatedly in one session")
    solve_parser.add_argument("--json", action="store_true", help="Print result as JSON")
    solve_parser.add_argument("--render", default=None, help="Save a rendering to this image file")

    bench_parser = subparsers.add_parser("benchmark", help="Sweep kinds and sizes")
    bench_parser.add_argument("--kinds", type=str, default=",".join(kinds),
                              help="Comma-separated problem kinds")
    bench_parser.add_argument("--sizes", type=str, default="10,20,50,100",
                              help="Comma-separated problem sizes")
    bench_parser.add_argument("--trials", type=int, default=3, help="Runs per kind and size")
    bench_parser.add_argument("--seed", type=int, default=42, help="Generator seed")
    bench_parser.add_argument("--output", "-o", default=None, help="Output directory for report")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    setup_logger(args.verbose, Path(args.log_file) if args.log_file else None)

    if args.command == "solve" and args.repeat < 1:
        parser.error("--repeat must be >= 1")

    commands = {
        "solve": cmd_solve,
        "benchmark": cmd_benchmark,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
