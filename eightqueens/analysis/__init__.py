"""
Analysis and orchestration package for the 8-Queens annealing experiments.

This package contains:
- settings: global knobs (sweep grid, floor temperature, output naming)
- stats: typed records, running means and summary statistics
- experiments: demo run and parameter sweep runners
- reporting: results table and CSV exports
- plots: heatmaps of the sweep
- cli: top-level pipeline entry points and argument parser
"""

from . import settings as settings  # re-export for convenience
from .stats import (
    StatsSummary,
    SARecord,
    SweepEntry,
    SweepResults,
    RunningMean,
    ProgressPrinter,
    compute_detailed_statistics,
    summarize_runs,
)

__all__ = [
    # types
    "StatsSummary",
    "SARecord",
    "SweepEntry",
    "SweepResults",
    # utils
    "RunningMean",
    "ProgressPrinter",
    "compute_detailed_statistics",
    "summarize_runs",
    # settings module
    "settings",
]
