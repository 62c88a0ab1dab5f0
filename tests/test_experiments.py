"""Tests for the sweep runners, the results table, CSV exports and charts."""

from pathlib import Path
import csv
import random
import sys
import tempfile
import unittest
from unittest import mock

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from eightqueens.analysis import settings
from eightqueens.analysis.experiments import (
    build_sweep_tasks,
    run_demo,
    run_parameter_sweep,
    run_parameter_sweep_parallel,
    spawn_seeds,
)
from eightqueens.analysis.plots import plot_sweep_heatmaps, sweep_to_dataframe
from eightqueens.analysis.reporting import (
    format_results_table,
    save_raw_runs_to_csv,
    save_sweep_to_csv,
)
from eightqueens.utils import cost


def _outcomes(results):
    return {
        key: [(r["success"], r["steps"], r["cost"], r["initial_cost"]) for r in entry["raw_runs"]]
        for key, entry in results.items()
    }


class SeedTests(unittest.TestCase):

    def test_spawned_seeds_are_reproducible_and_distinct(self):
        first = spawn_seeds(7, 20)
        self.assertEqual(first, spawn_seeds(7, 20))
        self.assertEqual(len(set(first)), 20)
        self.assertNotEqual(first, spawn_seeds(8, 20))

    def test_tasks_are_run_major(self):
        tasks = build_sweep_tasks([100.0, 1000.0], [0.9, 0.99], 3, 2.0, "metropolis", 1)
        self.assertEqual(len(tasks), 12)
        self.assertEqual([(t[0], t[1]) for t in tasks[:4]], [(100.0, 0.9), (100.0, 0.99), (1000.0, 0.9), (1000.0, 0.99)])
        self.assertEqual(len({t[4] for t in tasks}), 12)


class SweepTests(unittest.TestCase):

    def test_sequential_sweep_covers_every_pair(self):
        results = run_parameter_sweep([100.0, 1000.0], [0.9, 0.99], runs=3, seed=11)
        self.assertEqual(set(results), {(100.0, 0.9), (100.0, 0.99), (1000.0, 0.9), (1000.0, 0.99)})
        for (T0, decay), entry in results.items():
            self.assertEqual(entry["T0"], T0)
            self.assertEqual(entry["decay"], decay)
            self.assertEqual(entry["total_runs"], 3)
            for run in entry["raw_runs"]:
                self.assertEqual(run["success"], run["cost"] == 0)

    def test_same_seed_reproduces_sweep(self):
        first = run_parameter_sweep([100.0], [0.9, 0.99], runs=4, seed=5)
        second = run_parameter_sweep([100.0], [0.9, 0.99], runs=4, seed=5)
        self.assertEqual(_outcomes(first), _outcomes(second))

    def test_parallel_matches_sequential(self):
        sequential = run_parameter_sweep([100.0], [0.9, 0.99], runs=4, seed=9)
        parallel = run_parameter_sweep_parallel([100.0], [0.9, 0.99], runs=4, seed=9, max_workers=2)
        self.assertEqual(_outcomes(sequential), _outcomes(parallel))

    def test_demo_prints_both_boards(self):
        with mock.patch("builtins.print") as fake_print:
            start, final = run_demo(100.0, 0.9, 2.0, random.Random(2))
        printed = "\n".join(str(call.args[0]) for call in fake_print.call_args_list if call.args)
        self.assertIn("Starting state:", printed)
        self.assertIn("Finishing state:", printed)
        self.assertIn(f"Cost of finishing state: {cost(final)}", printed)
        self.assertIn(start.format_grid(), printed)


class ReportingTests(unittest.TestCase):

    def setUp(self):
        self.results = run_parameter_sweep([100.0, 1000.0], [0.9], runs=2, seed=3)
        self._tag, self._date = settings.RUN_TAG, settings.DATE_IN_FILENAMES
        settings.RUN_TAG, settings.DATE_IN_FILENAMES = None, False

    def tearDown(self):
        settings.RUN_TAG, settings.DATE_IN_FILENAMES = self._tag, self._date

    def test_table_has_one_line_per_pair(self):
        lines = format_results_table(self.results).splitlines()
        self.assertEqual(len(lines), 3)
        self.assertTrue(lines[0].startswith("T"))
        self.assertIn("Avg. Cost", lines[0])
        self.assertTrue(lines[1].startswith("100"))
        self.assertTrue(lines[2].startswith("1000"))

    def test_csv_exports(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            summary = Path(save_sweep_to_csv(self.results, tmpdir))
            raw = Path(save_raw_runs_to_csv(self.results, tmpdir))
            self.assertEqual(summary.name, "sweep_summary.csv")
            with open(summary, newline="") as f:
                rows = list(csv.DictReader(f))
            self.assertEqual(len(rows), 2)
            self.assertEqual(rows[0]["total_runs"], "2")
            with open(raw, newline="") as f:
                raw_rows = list(csv.DictReader(f))
            self.assertEqual(len(raw_rows), 4)
            self.assertIn("final_cost", raw_rows[0])

    def test_run_tag_in_filename(self):
        settings.RUN_TAG = "trial"
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(save_sweep_to_csv(self.results, tmpdir))
        self.assertEqual(path.name, "sweep_summary_trial.csv")

    def test_heatmaps_written(self):
        frame = sweep_to_dataframe(self.results)
        self.assertEqual(list(frame["T0"]), [100.0, 1000.0])
        with tempfile.TemporaryDirectory() as tmpdir:
            written = plot_sweep_heatmaps(self.results, tmpdir)
            self.assertEqual(len(written), 3)
            for path in written:
                self.assertTrue(Path(path).stat().st_size > 0)

    def test_no_heatmaps_for_empty_results(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            self.assertEqual(plot_sweep_heatmaps({}, tmpdir), [])


if __name__ == "__main__":
    unittest.main()
