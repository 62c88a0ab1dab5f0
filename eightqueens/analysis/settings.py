"""Global settings for the 8-Queens annealing experiments.

This module centralizes tunable constants used across the orchestration code.
Values can be overridden at runtime via the configuration loader in
`eightqueens.analysis.cli.apply_configuration`.
"""
from __future__ import annotations

import multiprocessing
from typing import List, Optional
from datetime import datetime

# Parameter grid: every initial temperature is paired with every cooling factor
TEMPERATURES: List[float] = [100.0, 1000.0, 10000.0]
DECAYS: List[float] = [0.9, 0.99, 0.999]

# Number of independent runs per (T0, decay) pair
RUNS_PER_COMBINATION: int = 100

# The annealing loop runs while T > FLOOR_TEMPERATURE
FLOOR_TEMPERATURE: float = 2.0

# Acceptance rule: 'metropolis' (float probability) | 'truncated' (historical integer cast)
ACCEPTANCE: str = "metropolis"

# Single demonstration run printed before the sweep
DEMO_T0: float = 10000.0
DEMO_DECAY: float = 0.999

# Master seed for the sweep (None = fresh entropy on every invocation)
SEED: Optional[int] = None

# Output directory for CSV and charts
OUT_DIR: str = "results_queens_annealing"

# Number of worker processes to use (leave one core for the OS)
NUM_PROCESSES: int = max(1, multiprocessing.cpu_count() - 1)

# Output naming policy --------------------------------------------------------

# When True, results and plots will include a datestamp suffix (e.g., _20251113-142530)
# applied consistently across all artifacts produced within the same run.
DATE_IN_FILENAMES: bool = True

# Unique run identifier used for filename stamping; set once at import time.
RUN_ID: str = datetime.now().strftime("%Y%m%d-%H%M%S")

# Optional run labeling to avoid overwriting outputs
RUN_TAG: Optional[str] = None

# Current pipeline mode: 'sequential' | 'parallel'
CURRENT_PIPELINE_MODE: str = 'parallel'


def set_sweep_grid(
        temperatures: List[float],
        decays: List[float],
        runs: int,
        floor_temperature: float = 2.0,
) -> None:
        """Configure the parameter sweep and print the active grid.

        Parameters
        - temperatures: initial temperatures to test (each > 0).
        - decays: cooling factors to test (each in (0, 1)).
        - runs: independent runs per (T0, decay) pair (>= 1).
        - floor_temperature: loop stops once T <= floor_temperature.

        Raises
        - ValueError when any value falls outside its domain, leaving the
            previous settings untouched.
        """
        global TEMPERATURES, DECAYS, RUNS_PER_COMBINATION, FLOOR_TEMPERATURE
        try:
                temps = [float(t) for t in temperatures]
                decs = [float(d) for d in decays]
                runs = int(runs)
                floor_temperature = float(floor_temperature)
        except (TypeError, ValueError) as exc:
                raise ValueError(f"Sweep settings must be numeric: {exc}") from exc
        if not temps or any(t <= 0 for t in temps):
                raise ValueError(f"Temperatures must be a non-empty list of positive values: {temperatures}")
        if not decs or any(not 0 < d < 1 for d in decs):
                raise ValueError(f"Decays must be a non-empty list of values in (0, 1): {decays}")
        if runs < 1:
                raise ValueError(f"Runs per combination must be >= 1, got {runs}")
        if not floor_temperature >= 0:
                raise ValueError(f"Floor temperature must be non-negative, got {floor_temperature}")

        TEMPERATURES = temps
        DECAYS = decs
        RUNS_PER_COMBINATION = runs
        FLOOR_TEMPERATURE = floor_temperature

        print("Sweep settings configured:")
        print(f"   - T0: {TEMPERATURES}")
        print(f"   - decay: {DECAYS}")
        print(f"   - runs per pair: {RUNS_PER_COMBINATION}")
        print(f"   - floor temperature: {FLOOR_TEMPERATURE}")
