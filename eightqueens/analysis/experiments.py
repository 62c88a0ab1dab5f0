"""Experiment runners for the annealer (demo run and parameter sweep).

The sweep pairs every initial temperature with every cooling factor, runs the
annealer ``runs`` times per pair from fresh random boards, and folds each run
into per-pair averages of final cost and wall time.

Every run gets its own seed, spawned from one master seed with
``numpy.random.SeedSequence``. The sequential and parallel runners hand out
the same seeds in the same order, so a given master seed reproduces the same
boards whichever runner is used and however many workers there are.
"""
from __future__ import annotations

import random
from concurrent.futures import ProcessPoolExecutor
from typing import Dict, List, Optional, Tuple

import numpy as np

from . import settings
from .stats import (
    ProgressPrinter,
    SARecord,
    SweepKey,
    SweepResults,
    record_from_result,
    summarize_runs,
)
from eightqueens.board import BoardState
from eightqueens.simulated_annealing import anneal, sa_nqueens
from eightqueens.utils import cost, is_valid_solution

SweepTask = Tuple[float, float, float, str, int]


# Reusable workers -----------------------------------------------------------

def run_single_sa_experiment(params: SweepTask):
    """Worker wrapper to invoke a single seeded SA run (for parallel mapping)."""
    T0, decay, floor_temperature, acceptance, seed = params
    return sa_nqueens(T0, decay, floor_temperature, random.Random(seed), acceptance)


def spawn_seeds(master_seed: Optional[int], count: int) -> List[int]:
    """Return ``count`` independent 64-bit seeds derived from ``master_seed``."""
    children = np.random.SeedSequence(master_seed).spawn(count)
    return [int(child.generate_state(1, dtype=np.uint64)[0]) for child in children]


def build_sweep_tasks(
    temperatures: List[float],
    decays: List[float],
    runs: int,
    floor_temperature: float,
    acceptance: str,
    seed: Optional[int],
) -> List[SweepTask]:
    """Lay out the sweep as run-major tasks: every pair once per run index."""
    pairs = [(T0, decay) for T0 in temperatures for decay in decays]
    seeds = spawn_seeds(seed, runs * len(pairs))
    tasks: List[SweepTask] = []
    for i in range(runs):
        for j, (T0, decay) in enumerate(pairs):
            tasks.append((T0, decay, floor_temperature, acceptance, seeds[i * len(pairs) + j]))
    return tasks


def _collect(tasks: List[SweepTask], results) -> SweepResults:
    grouped: Dict[SweepKey, List[SARecord]] = {}
    for task in tasks:
        grouped.setdefault((task[0], task[1]), [])
    for task, result in zip(tasks, results):
        grouped[(task[0], task[1])].append(record_from_result(result))
    return {key: summarize_runs(key[0], key[1], runs) for key, runs in grouped.items()}


# Demo -----------------------------------------------------------------------

def run_demo(
    T0: float,
    decay: float,
    floor_temperature: float,
    rng: Optional[random.Random] = None,
    acceptance: str = "metropolis",
) -> Tuple[BoardState, BoardState]:
    """Anneal one random board and print the starting and finishing grids."""
    rng = rng if rng is not None else random.Random()
    start = BoardState.generate_random(rng)

    print("Starting state:")
    print(start.format_grid())
    print(f"Cost of starting state: {cost(start)}\n")

    final = anneal(start, T0, decay, floor_temperature, rng, acceptance)

    print("Finishing state:")
    print(final.format_grid())
    print(f"Cost of finishing state: {cost(final)}")
    if is_valid_solution(final):
        print("Valid 8-queens placement found.\n")
    else:
        print("Cooling schedule exhausted before reaching zero cost.\n")
    return start, final


# Sequential runner ----------------------------------------------------------

def run_parameter_sweep(
    temperatures: List[float],
    decays: List[float],
    runs: int,
    floor_temperature: float = 2.0,
    acceptance: str = "metropolis",
    seed: Optional[int] = None,
    progress_label: Optional[str] = None,
) -> SweepResults:
    """Run the sweep in this process.

    For each run index, every ``(T0, decay)`` pair is annealed once from a
    fresh random board. Interrupting with Ctrl-C returns the runs finished so
    far.
    """
    tasks = build_sweep_tasks(temperatures, decays, runs, floor_temperature, acceptance, seed)
    pairs_per_run = max(1, len(tasks) // max(1, runs))
    progress = ProgressPrinter(runs, progress_label) if progress_label else None

    results = []
    try:
        for index, task in enumerate(tasks):
            results.append(run_single_sa_experiment(task))
            if progress and (index + 1) % pairs_per_run == 0:
                progress.update((index + 1) // pairs_per_run, "sequential")
    except KeyboardInterrupt:
        print("\nInterrupted by user (sequential). Returning partial results...")

    return _collect(tasks[: len(results)], results)


# Parallel runner ------------------------------------------------------------

def run_parameter_sweep_parallel(
    temperatures: List[float],
    decays: List[float],
    runs: int,
    floor_temperature: float = 2.0,
    acceptance: str = "metropolis",
    seed: Optional[int] = None,
    progress_label: Optional[str] = None,
    max_workers: Optional[int] = None,
) -> SweepResults:
    """Run the sweep across a process pool.

    Each task carries its own seed, so workers never share a random stream.
    Timings are wall-clock per run and therefore noisier than in sequential
    mode.
    """
    tasks = build_sweep_tasks(temperatures, decays, runs, floor_temperature, acceptance, seed)
    workers = max_workers or settings.NUM_PROCESSES
    pairs = max(1, len(temperatures) * len(decays))

    results = []
    with ProcessPoolExecutor(max_workers=workers) as executor:
        try:
            for result in executor.map(run_single_sa_experiment, tasks, chunksize=pairs):
                results.append(result)
                if progress_label and len(results) % (pairs * max(1, runs // 10)) == 0:
                    print(f"[{progress_label}] {len(results)}/{len(tasks)} runs - parallel x{workers}")
        except KeyboardInterrupt:
            print("\nInterrupted by user (parallel). Returning partial results...")
            executor.shutdown(wait=False, cancel_futures=True)

    return _collect(tasks[: len(results)], results)
