"""Command-line interface and high-level pipelines for the annealing experiments.

This module wires together configuration loading, the demonstration run, and
execution of the parameter sweep (sequential or parallel), followed by the
results table, CSV exports, and charts. It intentionally isolates I/O,
argument parsing, and progress reporting from the core algorithmic modules so
that the rest of the codebase remains easy to test programmatically.
"""
from __future__ import annotations

import argparse
import random
import tempfile
from pathlib import Path
from time import perf_counter
from typing import List, Optional

from . import settings
from .experiments import (
    run_demo,
    run_parameter_sweep,
    run_parameter_sweep_parallel,
)
from .plots import plot_sweep_heatmaps
from .reporting import (
    format_results_table,
    save_raw_runs_to_csv,
    save_sweep_to_csv,
)
from config_manager import ConfigManager
from eightqueens.board import BoardState
from eightqueens.simulated_annealing import ACCEPTANCE_RULES, sa_nqueens
from eightqueens.utils import attacking_pairs, cost, is_valid_solution


# ------------- Utils --------------------------------------------------------

def parse_float_list(values: Optional[List[str]]) -> Optional[List[float]]:
    """Normalize repeated / comma-separated numeric CLI inputs into floats.

    Returns ``None`` when nothing is provided so callers fall back to the
    configured grid.
    """
    if not values:
        return None
    parsed: List[float] = []
    for entry in values:
        for token in entry.split(","):
            token = token.strip()
            if token:
                try:
                    parsed.append(float(token))
                except ValueError as exc:
                    raise ValueError(f"Not a number: '{token}'") from exc
    return parsed or None


def apply_configuration(config_path: str) -> ConfigManager:
    """Load configuration and copy its values onto ``settings`` in-place.

    Raises ``FileNotFoundError`` for a missing file and ``ValueError`` for
    out-of-range values.
    """
    config_mgr = ConfigManager(config_path)

    sweep = config_mgr.get_sweep_settings()
    if sweep:
        settings.set_sweep_grid(
            temperatures=sweep.get("temperatures", settings.TEMPERATURES),
            decays=sweep.get("decays", settings.DECAYS),
            runs=sweep.get("runs_per_combination", settings.RUNS_PER_COMBINATION),
            floor_temperature=sweep.get("floor_temperature", settings.FLOOR_TEMPERATURE),
        )
        acceptance = sweep.get("acceptance", settings.ACCEPTANCE)
        if acceptance not in ACCEPTANCE_RULES:
            raise ValueError(f"Unknown acceptance rule '{acceptance}'. Allowed: " + ", ".join(ACCEPTANCE_RULES))
        settings.ACCEPTANCE = acceptance
        seed = sweep.get("seed", settings.SEED)
        try:
            settings.SEED = int(seed) if seed is not None else None
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Seed must be an integer, got {seed!r}") from exc

    demo = config_mgr.get_demo_settings()
    if demo:
        try:
            demo_T0 = float(demo.get("T0", settings.DEMO_T0))
            demo_decay = float(demo.get("decay", settings.DEMO_DECAY))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Demo settings must be numeric: {exc}") from exc
        if demo_T0 <= 0 or not 0 < demo_decay < 1:
            raise ValueError(f"Invalid demo schedule: T0={demo_T0}, decay={demo_decay}")
        settings.DEMO_T0 = demo_T0
        settings.DEMO_DECAY = demo_decay

    output = config_mgr.get_output_settings()
    if output:
        settings.OUT_DIR = output.get("output_dir", settings.OUT_DIR)
        settings.RUN_TAG = output.get("run_tag", settings.RUN_TAG)
        settings.DATE_IN_FILENAMES = bool(output.get("date_in_filenames", settings.DATE_IN_FILENAMES))

    return config_mgr


# ------------- Pipelines ----------------------------------------------------

def schedule_warning(acceptance: str, floor_temperature: float) -> Optional[str]:
    """Return a notice when the rule and floor make convergence unlikely, else None."""
    if acceptance == "metropolis" and floor_temperature >= 1.0:
        return (
            f"Note: metropolis acceptance with floor {floor_temperature:g} rarely reaches zero cost; "
            "use --acceptance truncated or a colder schedule (e.g. --floor 0.05)."
        )
    return None


def run_pipeline(mode: str = "parallel", demo_only: bool = False, plots: bool = True) -> None:
    """Demo run, then the sweep, table, CSV exports and charts."""
    settings.CURRENT_PIPELINE_MODE = mode
    start_total = perf_counter()

    print("=" * 70)
    print("PHASE 1: DEMONSTRATION RUN")
    print("=" * 70)
    warning = schedule_warning(settings.ACCEPTANCE, settings.FLOOR_TEMPERATURE)
    if warning:
        print(warning)
    demo_rng = random.Random(settings.SEED)
    run_demo(settings.DEMO_T0, settings.DEMO_DECAY, settings.FLOOR_TEMPERATURE, demo_rng, settings.ACCEPTANCE)
    if demo_only:
        return

    print("=" * 70)
    print(f"PHASE 2: PARAMETER SWEEP ({mode})")
    print("=" * 70)
    runner = run_parameter_sweep if mode == "sequential" else run_parameter_sweep_parallel
    results = runner(
        settings.TEMPERATURES,
        settings.DECAYS,
        settings.RUNS_PER_COMBINATION,
        floor_temperature=settings.FLOOR_TEMPERATURE,
        acceptance=settings.ACCEPTANCE,
        seed=settings.SEED,
        progress_label="Sweep",
    )

    print("\n" + format_results_table(results) + "\n")

    print("=" * 70)
    print("PHASE 3: EXPORTS")
    print("=" * 70)
    save_sweep_to_csv(results, settings.OUT_DIR)
    save_raw_runs_to_csv(results, settings.OUT_DIR)
    if plots:
        plot_sweep_heatmaps(results, settings.OUT_DIR)

    total_time = perf_counter() - start_total
    print(f"\nPipeline completed in {total_time:.1f}s")


# ------------- Quick regression -------------------------------------------

KNOWN_SOLUTION = [(0, 0), (1, 4), (2, 7), (3, 5), (4, 2), (5, 6), (6, 1), (7, 3)]


def run_quick_regression_tests() -> None:
    """Execute a fast, deterministic smoke test of the core and the harness.

    Verifies that:
    - A known solution has zero cost and no attacking pairs.
    - Seeded random boards and moves keep queens on distinct squares.
    - The truncated rule solves at least one of ten seeded reference runs.
    - A tiny sweep produces a non-empty CSV in a temporary folder.
    """
    print("Running quick regression tests (8 queens)...")

    solution = BoardState.from_queens(KNOWN_SOLUTION)
    if cost(solution) != 0 or attacking_pairs(solution) != 0:
        raise AssertionError("Known 8-queens solution does not have zero cost.")

    rng = random.Random(42)
    board = BoardState.generate_random(rng)
    for _ in range(200):
        board = board.make_random_move(rng)
        if len(set(board.queens)) != len(board.queens):
            raise AssertionError(f"Duplicate squares after a move: {board.queens}")
    print("  Board invariants: ok")

    solved = 0
    for seed in range(10):
        success, _, _, final_cost, _ = sa_nqueens(10000, 0.999, 2.0, random.Random(seed), "truncated")
        if success != (final_cost == 0):
            raise AssertionError("Success flag disagrees with the final cost.")
        solved += int(success)
    if solved == 0:
        raise AssertionError("Annealing with the truncated rule solved none of 10 seeded runs.")
    print(f"  Simulated Annealing: {solved}/10 seeded runs solved")

    results = run_parameter_sweep([1000.0], [0.99], runs=3, seed=42, progress_label="Quick regression sweep")
    for entry in results.values():
        for run in entry["raw_runs"]:
            if run["success"] and run["cost"] != 0:
                raise AssertionError("Successful run reported a non-zero cost.")

    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(save_sweep_to_csv(results, tmpdir))
        if not csv_path.exists() or csv_path.stat().st_size == 0:
            raise AssertionError("Sweep CSV was not generated successfully during quick tests.")

    if not is_valid_solution(KNOWN_SOLUTION):
        raise AssertionError("Pairwise validation rejected the known solution.")

    print("Quick regression tests passed.")


# ------------- CLI wiring --------------------------------------------------

def build_arg_parser():
    """Construct the argument parser for the CLI entry point."""
    parser = argparse.ArgumentParser(description="Solve 8-queens by simulated annealing and sweep its parameters.")
    parser.add_argument(
        "--mode",
        choices=["sequential", "parallel"],
        default="parallel",
        help="Sweep execution mode (default: parallel). Sequential gives cleaner timings.",
    )
    parser.add_argument("--config", default="config.json", help="Path to configuration file (default: config.json).")
    parser.add_argument("--runs", type=int, help="Runs per (T0, decay) pair; overrides the config.")
    parser.add_argument("--seed", type=int, help="Master seed for reproducible runs; overrides the config.")
    parser.add_argument("--temps", "-t", action="append", help="Initial temperatures (comma-separated or repeated).")
    parser.add_argument("--decays", "-d", action="append", help="Cooling factors (comma-separated or repeated).")
    parser.add_argument("--floor", type=float, help="Floor temperature; overrides the config.")
    parser.add_argument("--acceptance", choices=list(ACCEPTANCE_RULES), help="Acceptance rule; overrides the config. Metropolis needs a floor well below 1 to converge.")
    parser.add_argument("--tag", help="Run tag appended to output filenames.")
    parser.add_argument("--demo-only", action="store_true", help="Only run and print the demonstration board.")
    parser.add_argument("--no-plots", action="store_true", help="Skip chart generation.")
    parser.add_argument("--quick-test", action="store_true", help="Run quick regression tests and exit.")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point: parse arguments and dispatch to the pipeline."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.quick_test:
        run_quick_regression_tests()
        return

    try:
        apply_configuration(args.config)
        temps = parse_float_list(args.temps)
        decays = parse_float_list(args.decays)
        if temps or decays or args.runs is not None or args.floor is not None:
            settings.set_sweep_grid(
                temperatures=temps or settings.TEMPERATURES,
                decays=decays or settings.DECAYS,
                runs=args.runs if args.runs is not None else settings.RUNS_PER_COMBINATION,
                floor_temperature=args.floor if args.floor is not None else settings.FLOOR_TEMPERATURE,
            )
    except FileNotFoundError as exc:
        print(f"Configuration file not found: {exc}")
        raise SystemExit(1) from exc
    except ValueError as exc:
        print(f"Configuration error: {exc}")
        raise SystemExit(1) from exc

    if args.seed is not None:
        settings.SEED = args.seed
    if args.acceptance:
        settings.ACCEPTANCE = args.acceptance
    if args.tag:
        settings.RUN_TAG = args.tag

    try:
        run_pipeline(args.mode, demo_only=args.demo_only, plots=not args.no_plots)
    except KeyboardInterrupt:
        print("\nExecution interrupted by user. Cleaning up workers...")
        raise SystemExit(130) from None
