"""
8-Queens Simulated Annealing Orchestrator
=========================================

Entry script for the experiment pipeline: a demonstration run that prints the
starting and finishing boards, then a sweep over initial temperatures and
cooling factors with averaged cost/time tables, CSV exports and heatmaps.

Usage::

    python algo.py --mode sequential --runs 100 --seed 7
    python algo.py --demo-only
    python algo.py --quick-test

See ``eightqueens.analysis.cli`` for all options.
"""

from eightqueens.analysis.cli import main


if __name__ == "__main__":
    main()
