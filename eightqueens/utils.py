"""Utility helpers for the 8-Queens project.

This module provides the low-level primitives the annealer depends upon. In
particular, it includes two ways of looking at conflicts in a placement: the
line-family cost the search minimizes, and a pairwise attack count used as a
reference check.

Representation
--------------
Placements are sequences of ``(row, col)`` coordinates, one per queen. Queens
may sit on any square (not one per row), so rows and columns both need to be
checked.
"""

from __future__ import annotations

from typing import Sequence, Tuple

BOARD_SIZE = 8

Coordinate = Tuple[int, int]


def cost(queens: Sequence[Coordinate], size: int = BOARD_SIZE) -> int:
    """Compute the conflict cost of a placement.

    Every row, column and diagonal holding ``k > 1`` queens adds ``k`` to the
    total. This over-counts compared to attacking pairs (a line with three
    queens adds 3, not 3 pairs) but it is zero exactly when no line is shared.

    "\\" diagonals are indexed by ``row - col`` shifted by ``size``; "/"
    diagonals by ``row + col``. Both fit in ``2 * size`` slots. (``col - row``
    would name the same "\\" diagonal again and leave "/" unchecked.)

    Accepts a ``BoardState`` as well as a plain coordinate sequence.
    """
    queens = getattr(queens, "queens", queens)
    row_count = [0] * size
    column_count = [0] * size
    neg_diag = [0] * (2 * size)
    pos_diag = [0] * (2 * size)

    for row, col in queens:
        row_count[row] += 1
        column_count[col] += 1
        neg_diag[(row - col) + size] += 1
        pos_diag[row + col] += 1

    total = 0
    for counts in (row_count, column_count, neg_diag, pos_diag):
        for count in counts:
            if count > 1:
                total += count
    return total


def attacking_pairs(queens: Sequence[Coordinate]) -> int:
    """Count queen pairs sharing a row, column or diagonal in O(N^2).

    Reference implementation for validation. Prefer ``cost`` inside the
    search loop.
    """
    queens = list(getattr(queens, "queens", queens))
    pairs = 0
    for i in range(len(queens)):
        r1, c1 = queens[i]
        for j in range(i + 1, len(queens)):
            r2, c2 = queens[j]
            if r1 == r2 or c1 == c2 or abs(r1 - r2) == abs(c1 - c2):
                pairs += 1
    return pairs


def is_valid_solution(queens: Sequence[Coordinate], size: int = BOARD_SIZE) -> bool:
    """Return True if the placement is a valid N-Queens solution.

    Contract
    - Input: sequence of ``(row, col)`` coordinates
    - Valid if: exactly ``size`` queens, all coordinates in range, and no
      pair of queens attacks each other
    - Implementation: range check + ``attacking_pairs(queens) == 0``
    """
    queens = list(getattr(queens, "queens", queens))
    if len(queens) != size:
        return False
    for row, col in queens:
        if not isinstance(row, int) or not isinstance(col, int):
            return False
        if not (0 <= row < size and 0 <= col < size):
            return False
    return attacking_pairs(queens) == 0
