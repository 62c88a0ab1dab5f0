"""Board state value for the 8-Queens annealer.

A ``BoardState`` is an immutable snapshot of eight queen placements. Queens
may stand on any square; the only structural rule is that no two queens share
a square. Neighbors are produced by relocating a single queen to an empty
square, which yields a new instance and leaves the original untouched.

Randomness
----------
All random draws go through an explicit ``random.Random`` handle. Passing the
same seeded generator reproduces the same boards.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from .utils import BOARD_SIZE, Coordinate, cost


def _resolve_rng(rng: Optional[random.Random]) -> random.Random:
    return rng if rng is not None else random.Random()


@dataclass(frozen=True)
class BoardState:
    """Placement of ``BOARD_SIZE`` queens on distinct squares.

    Attributes
    ----------
    queens : Tuple[Tuple[int, int], ...]
        Ordered ``(row, col)`` coordinates, one per queen.
    grid : Tuple[Tuple[int, ...], ...]
        Occupancy cache derived from ``queens`` (1 = queen, 0 = empty).
    """

    queens: Tuple[Coordinate, ...]
    grid: Tuple[Tuple[int, ...], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        queens = tuple((int(r), int(c)) for r, c in self.queens)
        if len(queens) != BOARD_SIZE:
            raise ValueError(f"Expected {BOARD_SIZE} queens, got {len(queens)}")
        for row, col in queens:
            if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
                raise ValueError(f"Queen coordinate out of range: {(row, col)}")
        if len(set(queens)) != len(queens):
            raise ValueError(f"Two queens share a square: {queens}")

        occupied = set(queens)
        grid = tuple(
            tuple(1 if (r, c) in occupied else 0 for c in range(BOARD_SIZE))
            for r in range(BOARD_SIZE)
        )
        object.__setattr__(self, "queens", queens)
        object.__setattr__(self, "grid", grid)

    @classmethod
    def from_queens(cls, queens: Iterable[Coordinate]) -> "BoardState":
        """Build a state from caller-supplied coordinates (validated)."""
        return cls(tuple(queens))

    @classmethod
    def generate_random(cls, rng: Optional[random.Random] = None) -> "BoardState":
        """Return a fresh random placement of ``BOARD_SIZE`` queens.

        Squares are drawn uniformly over the whole board; draws that hit an
        already chosen square are rejected and redrawn. Row, column and
        diagonal clashes are expected.
        """
        rng = _resolve_rng(rng)
        chosen: List[Coordinate] = []
        used = set()
        while len(chosen) < BOARD_SIZE:
            square = (rng.randrange(BOARD_SIZE), rng.randrange(BOARD_SIZE))
            if square in used:
                continue
            used.add(square)
            chosen.append(square)
        return cls(tuple(chosen))

    @property
    def cost(self) -> int:
        """Conflict cost of this placement (see ``eightqueens.utils.cost``)."""
        return cost(self.queens)

    def occupied(self, row: int, col: int) -> bool:
        """True when a queen sits on (row, col)."""
        return self.grid[row][col] == 1

    def make_random_move(self, rng: Optional[random.Random] = None) -> "BoardState":
        """Return a neighbor with one queen moved to a random empty square.

        The target square is drawn first (uniformly among empty squares, by
        rejection), then the queen to move is drawn uniformly by index.
        """
        rng = _resolve_rng(rng)
        target = (rng.randrange(BOARD_SIZE), rng.randrange(BOARD_SIZE))
        while self.occupied(*target):
            target = (rng.randrange(BOARD_SIZE), rng.randrange(BOARD_SIZE))

        index = rng.randrange(len(self.queens))
        moved = list(self.queens)
        moved[index] = target
        return BoardState(tuple(moved))

    def render(self) -> List[List[int]]:
        """Return the board as rows of cell markers (0 = empty, 1 = queen)."""
        return [list(row) for row in self.grid]

    def format_grid(self) -> str:
        """Plain text dump of the grid, one row per line."""
        return "\n".join(" ".join(str(cell) for cell in row) for row in self.grid)
