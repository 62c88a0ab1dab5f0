"""Table and CSV export utilities for sweep outputs (aggregates and raw runs).

These helpers print the fixed-width results table and materialize CSV
summaries as well as full per-run raw data for downstream analysis or
spreadsheet inspection.
"""
from __future__ import annotations

import csv
import os
from typing import List
from . import settings

from .stats import SweepEntry, SweepResults


def _build_suffix() -> str:
    """Build an optional filename suffix from RUN_TAG and the run datestamp.

    Returns an empty string if no suffixing is configured.
    """
    parts: List[str] = []
    run_tag = getattr(settings, "RUN_TAG", None)
    if run_tag:
        parts.append(str(run_tag))
    if getattr(settings, "DATE_IN_FILENAMES", False):
        run_id = getattr(settings, "RUN_ID", None)
        if run_id:
            parts.append(str(run_id))
    return ("_" + "_".join(parts)) if parts else ""


def _ordered_entries(results: SweepResults) -> List[SweepEntry]:
    return [results[key] for key in sorted(results)]


def format_results_table(results: SweepResults) -> str:
    """Render the sweep as a fixed-width table, one line per ``(T0, decay)``.

    Columns: T, deltaT, Avg. Cost, Avg. Time (ms), Success.
    """
    lines = [f"{'T':<8}{'deltaT':<10}{'Avg. Cost':<12}{'Avg. Time (ms)':<16}{'Success':<10}"]
    for entry in _ordered_entries(results):
        lines.append(
            f"{entry['T0']:<8.0f}{entry['decay']:<10.3f}{entry['avg_cost']:<12.2f}"
            f"{entry['avg_time_ms']:<16.1f}{entry['success_rate'] * 100:<.0f}%"
        )
    return "\n".join(lines)


def save_sweep_to_csv(results: SweepResults, out_dir: str) -> str:
    """Write per-pair aggregate metrics to CSV and return the file path.

    Column names follow lowercase snake_case.
    """
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"sweep_summary{_build_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "t0",
            "decay",
            "total_runs",
            "successes",
            "success_rate",
            "avg_cost",
            "avg_time_ms",
            "avg_steps",
            "cost_median",
            "cost_std",
            "cost_max",
            "time_std_seconds",
        ])
        for entry in _ordered_entries(results):
            cost_stats = entry.get("all_cost", {})
            time_stats = entry.get("all_time", {})
            writer.writerow([
                entry["T0"],
                entry["decay"],
                entry["total_runs"],
                entry["successes"],
                entry["success_rate"],
                entry["avg_cost"],
                entry["avg_time_ms"],
                entry["avg_steps"],
                cost_stats.get("median"),
                cost_stats.get("std"),
                cost_stats.get("max"),
                time_stats.get("std"),
            ])
    print(f"Sweep summary saved to {filename}")
    return filename


def save_raw_runs_to_csv(results: SweepResults, out_dir: str) -> str:
    """Write one row per annealing run and return the file path."""
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"sweep_raw_runs{_build_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "t0",
            "decay",
            "run_id",
            "success",
            "steps",
            "time_seconds",
            "initial_cost",
            "final_cost",
        ])
        for entry in _ordered_entries(results):
            for i, run in enumerate(entry.get("raw_runs", [])):
                writer.writerow([
                    entry["T0"],
                    entry["decay"],
                    i + 1,
                    run["success"],
                    run["steps"],
                    run["time"],
                    run["initial_cost"],
                    run["cost"],
                ])
    print(f"Raw runs saved to {filename}")
    return filename
