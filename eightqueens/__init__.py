"""8-Queens Simulated Annealing implementation."""

from .board import BoardState
from .simulated_annealing import accept_move, anneal, cooling_steps, iter_annealing, sa_nqueens
from .utils import BOARD_SIZE, attacking_pairs, cost, is_valid_solution

__all__ = [
    "BOARD_SIZE",
    "BoardState",
    "anneal",
    "accept_move",
    "cooling_steps",
    "iter_annealing",
    "sa_nqueens",
    "cost",
    "attacking_pairs",
    "is_valid_solution",
]
