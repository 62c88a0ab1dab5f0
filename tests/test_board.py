"""Tests for the BoardState value: random generation, moves and rendering."""

from pathlib import Path
import random
import sys
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from eightqueens.board import BoardState
from eightqueens.utils import BOARD_SIZE

KNOWN_SOLUTION = [(0, 0), (1, 4), (2, 7), (3, 5), (4, 2), (5, 6), (6, 1), (7, 3)]


class GenerateRandomTests(unittest.TestCase):
    """Random starting boards always place eight queens on distinct squares."""

    def test_queens_are_distinct_and_in_range(self):
        rng = random.Random(7)
        for _ in range(200):
            board = BoardState.generate_random(rng)
            self.assertEqual(len(board.queens), BOARD_SIZE)
            self.assertEqual(len(set(board.queens)), BOARD_SIZE)
            for row, col in board.queens:
                self.assertTrue(0 <= row < BOARD_SIZE)
                self.assertTrue(0 <= col < BOARD_SIZE)

    def test_same_seed_gives_same_board(self):
        first = BoardState.generate_random(random.Random(123))
        second = BoardState.generate_random(random.Random(123))
        self.assertEqual(first, second)

    def test_works_without_explicit_generator(self):
        board = BoardState.generate_random()
        self.assertEqual(len(set(board.queens)), BOARD_SIZE)


class MakeRandomMoveTests(unittest.TestCase):
    """A move relocates exactly one queen onto a previously empty square."""

    def test_exactly_one_queen_moves_to_an_empty_square(self):
        rng = random.Random(99)
        board = BoardState.generate_random(rng)
        for _ in range(300):
            neighbor = board.make_random_move(rng)
            changed = [i for i in range(BOARD_SIZE) if board.queens[i] != neighbor.queens[i]]
            self.assertEqual(len(changed), 1)
            new_square = neighbor.queens[changed[0]]
            self.assertNotIn(new_square, board.queens)
            self.assertEqual(len(set(neighbor.queens)), BOARD_SIZE)
            board = neighbor

    def test_original_board_is_untouched(self):
        rng = random.Random(5)
        board = BoardState.generate_random(rng)
        snapshot = (board.queens, board.render())
        board.make_random_move(rng)
        self.assertEqual((board.queens, board.render()), snapshot)

    def test_moved_board_updates_grid(self):
        board = BoardState.from_queens(KNOWN_SOLUTION)
        neighbor = board.make_random_move(random.Random(1))
        (index,) = [i for i in range(BOARD_SIZE) if board.queens[i] != neighbor.queens[i]]
        old_row, old_col = board.queens[index]
        new_row, new_col = neighbor.queens[index]
        self.assertEqual(neighbor.render()[old_row][old_col], 0)
        self.assertEqual(neighbor.render()[new_row][new_col], 1)


class RenderTests(unittest.TestCase):
    """The occupancy grid mirrors the queen list."""

    def test_cell_occupied_iff_listed(self):
        rng = random.Random(11)
        for _ in range(50):
            board = BoardState.generate_random(rng)
            grid = board.render()
            self.assertEqual(len(grid), BOARD_SIZE)
            for r in range(BOARD_SIZE):
                self.assertEqual(len(grid[r]), BOARD_SIZE)
                for c in range(BOARD_SIZE):
                    self.assertEqual(grid[r][c] == 1, (r, c) in board.queens)
            self.assertEqual(sum(map(sum, grid)), BOARD_SIZE)

    def test_render_returns_a_copy(self):
        board = BoardState.from_queens(KNOWN_SOLUTION)
        grid = board.render()
        grid[0][0] = 0
        self.assertEqual(board.render()[0][0], 1)

    def test_format_grid(self):
        board = BoardState.from_queens(KNOWN_SOLUTION)
        lines = board.format_grid().splitlines()
        self.assertEqual(len(lines), BOARD_SIZE)
        self.assertEqual(lines[0], "1 0 0 0 0 0 0 0")
        self.assertEqual(lines[1], "0 0 0 0 1 0 0 0")


class ConstructionTests(unittest.TestCase):
    """Malformed placements are rejected at construction."""

    def test_wrong_queen_count(self):
        with self.assertRaises(ValueError):
            BoardState.from_queens(KNOWN_SOLUTION[:7])

    def test_out_of_range(self):
        bad = KNOWN_SOLUTION[:7] + [(8, 0)]
        with self.assertRaises(ValueError):
            BoardState.from_queens(bad)

    def test_shared_square(self):
        bad = KNOWN_SOLUTION[:7] + [(0, 0)]
        with self.assertRaises(ValueError):
            BoardState.from_queens(bad)

    def test_boards_are_hashable_values(self):
        a = BoardState.from_queens(KNOWN_SOLUTION)
        b = BoardState.from_queens(list(KNOWN_SOLUTION))
        self.assertEqual(a, b)
        self.assertEqual(len({a, b}), 1)


if __name__ == "__main__":
    unittest.main()
