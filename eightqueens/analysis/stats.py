"""Typed result shapes and statistics helpers for the analysis pipeline.

Defines ``TypedDict`` structures for sweep outputs and provides utilities to
accumulate running averages and compute summary statistics across runs.
"""
from __future__ import annotations

import math
import statistics
from typing import Dict, List, Optional, Tuple, TypedDict


class StatsSummary(TypedDict, total=False):
    count: int
    mean: Optional[float]
    median: Optional[float]
    std: Optional[float]
    min: Optional[float]
    max: Optional[float]
    q25: Optional[float]
    q75: Optional[float]
    range: Optional[float]


class SARecord(TypedDict):
    success: bool
    steps: int
    time: float
    cost: int
    initial_cost: int


class SweepEntry(TypedDict, total=False):
    T0: float
    decay: float
    total_runs: int
    successes: int
    success_rate: float
    avg_cost: float
    avg_time_ms: float
    avg_steps: float
    all_cost: StatsSummary
    all_time: StatsSummary
    all_steps: StatsSummary
    raw_runs: List[SARecord]


SweepKey = Tuple[float, float]
SweepResults = Dict[SweepKey, SweepEntry]


class RunningMean:
    """Incremental mean and variance (Welford's update).

    Folding values one at a time gives the same mean as ``sum / count``
    without keeping the values around.
    """

    def __init__(self) -> None:
        self.count = 0
        self.mean = 0.0
        self._m2 = 0.0

    def add(self, value: float) -> None:
        self.count += 1
        delta = value - self.mean
        self.mean += delta / self.count
        self._m2 += delta * (value - self.mean)

    @property
    def variance(self) -> float:
        """Population variance of the values seen so far (0 when empty)."""
        if self.count < 2:
            return 0.0
        return self._m2 / self.count

    @property
    def std(self) -> float:
        return math.sqrt(self.variance)


class ProgressPrinter:
    """Minimal, stdout-only progress reporter for long-running loops.

    Parameters
    ----------
    total : int
        Total number of steps/items expected. Values <= 0 are coerced to 1 to
        avoid division by zero when reporting percentages.
    label : str
        Short label printed in front of the progress counters.
    """

    def __init__(self, total: int, label: str):
        self.total = max(1, total)
        self.label = label

    def update(self, index: int, detail: str = "") -> None:
        """Print a single-line progress update to stdout."""
        percent = (index / self.total) * 100
        suffix = f" - {detail}" if detail else ""
        print(f"[{self.label}] {index}/{self.total} ({percent:.0f}%)" + suffix)


def compute_detailed_statistics(values: List[float], label: str = "") -> StatsSummary:
    """Compute summary statistics for a numeric sequence.

    Parameters
    ----------
    values : List[float]
        Numeric values to summarize.
    label : str, optional
        Carried for debugging contexts; not used in calculations.

    Returns
    -------
    StatsSummary
        count, mean, median, std, min, max, q25, q75 and range. When
        ``values`` is empty, numeric fields are ``None`` and ``count`` is 0.
    """
    if not values:
        return {
            "count": 0,
            "mean": None,
            "median": None,
            "std": None,
            "min": None,
            "max": None,
            "q25": None,
            "q75": None,
            "range": None,
        }

    sorted_vals = sorted(values)
    n = len(values)

    mean_val = statistics.mean(values)
    median_val = statistics.median(values)
    min_val = min(values)
    max_val = max(values)
    std_val = statistics.pstdev(values) if n > 1 else 0

    q25 = sorted_vals[n // 4] if n >= 4 else min_val
    q75 = sorted_vals[3 * n // 4] if n >= 4 else max_val

    return {
        "count": n,
        "mean": mean_val,
        "median": median_val,
        "std": std_val,
        "min": min_val,
        "max": max_val,
        "q25": q25,
        "q75": q75,
        "range": max_val - min_val,
    }


def record_from_result(result: Tuple[bool, int, float, int, int]) -> SARecord:
    """Convert an ``SAResult`` tuple into a named record."""
    success, steps, elapsed, final_cost, initial_cost = result
    return {
        "success": bool(success),
        "steps": int(steps),
        "time": float(elapsed),
        "cost": int(final_cost),
        "initial_cost": int(initial_cost),
    }


def summarize_runs(T0: float, decay: float, runs: List[SARecord]) -> SweepEntry:
    """Aggregate the runs of one ``(T0, decay)`` pair.

    Averages are accumulated with ``RunningMean`` in run order. Time is
    reported in milliseconds to match the results table.
    """
    cost_mean = RunningMean()
    time_mean = RunningMean()
    steps_mean = RunningMean()
    successes = 0
    for run in runs:
        cost_mean.add(run["cost"])
        time_mean.add(run["time"] * 1000.0)
        steps_mean.add(run["steps"])
        if run["success"]:
            successes += 1

    total = len(runs)
    return {
        "T0": T0,
        "decay": decay,
        "total_runs": total,
        "successes": successes,
        "success_rate": successes / total if total else 0.0,
        "avg_cost": cost_mean.mean,
        "avg_time_ms": time_mean.mean,
        "avg_steps": steps_mean.mean,
        "all_cost": compute_detailed_statistics([r["cost"] for r in runs], "all_cost"),
        "all_time": compute_detailed_statistics([r["time"] for r in runs], "all_time"),
        "all_steps": compute_detailed_statistics([r["steps"] for r in runs], "all_steps"),
        "raw_runs": list(runs),
    }
