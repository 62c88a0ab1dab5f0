"""Visualization utilities for sweep outputs.

Overview
--------
Heatmaps over the ``(T0, decay)`` grid, built from a ``SweepResults``
mapping. Rows are initial temperatures, columns are cooling factors.

Chart map
---------
- 01_avg_cost_heatmap.png — mean final cost per pair (0 = every run solved).
- 02_avg_time_heatmap.png — mean wall-clock time per run [ms].
- 03_success_rate_heatmap.png — fraction of runs that reached zero cost.

Filenames carry the same optional tag/date suffix as the CSV exports.
Return value is the list of written paths.
"""
from __future__ import annotations

import os
from typing import List

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402
import seaborn as sns  # noqa: E402

from .reporting import _build_suffix  # noqa: E402
from .stats import SweepResults  # noqa: E402


def sweep_to_dataframe(results: SweepResults) -> pd.DataFrame:
    """Flatten sweep aggregates into one row per ``(T0, decay)`` pair."""
    rows = [
        {
            "T0": entry["T0"],
            "decay": entry["decay"],
            "avg_cost": entry["avg_cost"],
            "avg_time_ms": entry["avg_time_ms"],
            "success_rate": entry["success_rate"],
            "total_runs": entry["total_runs"],
        }
        for entry in results.values()
    ]
    columns = ["T0", "decay", "avg_cost", "avg_time_ms", "success_rate", "total_runs"]
    return pd.DataFrame(rows, columns=columns).sort_values(["T0", "decay"]).reset_index(drop=True)


def _heatmap(frame: pd.DataFrame, metric: str, title: str, fmt: str, cmap: str, fname: str) -> None:
    grid = frame.pivot_table(index="T0", columns="decay", values=metric)
    plt.figure(figsize=(7, 5))
    sns.heatmap(grid, annot=True, fmt=fmt, cmap=cmap, cbar=True, linewidths=0.5)
    plt.title(title)
    plt.xlabel("Cooling factor (decay)")
    plt.ylabel("Initial temperature T0")
    plt.savefig(fname, bbox_inches="tight", dpi=150)
    plt.close()


def plot_sweep_heatmaps(results: SweepResults, out_dir: str) -> List[str]:
    """Write cost, time and success-rate heatmaps for the sweep.

    Nothing is written for empty results.
    """
    if not results:
        print("No sweep results to plot.")
        return []

    os.makedirs(out_dir, exist_ok=True)
    frame = sweep_to_dataframe(results)
    suffix = _build_suffix()
    written: List[str] = []

    charts = [
        ("avg_cost", "Average final cost", ".2f", "rocket_r", f"01_avg_cost_heatmap{suffix}.png"),
        ("avg_time_ms", "Average time per run [ms]", ".1f", "mako_r", f"02_avg_time_heatmap{suffix}.png"),
        ("success_rate", "Success rate (cost == 0)", ".0%", "viridis", f"03_success_rate_heatmap{suffix}.png"),
    ]
    for metric, title, fmt, cmap, name in charts:
        if not np.isfinite(frame[metric].to_numpy(dtype=float)).all():
            print(f"  Skipping {name}: non-finite values")
            continue
        fname = os.path.join(out_dir, name)
        _heatmap(frame, metric, title, fmt, cmap, fname)
        written.append(fname)

    print(f"Charts saved to {out_dir}")
    return written
