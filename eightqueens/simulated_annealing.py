"""Simulated Annealing solver for the 8-Queens problem.

This module implements the annealing loop over ``BoardState`` values. At each
step the current board proposes a neighbor (one queen moved to an empty
square). The neighbor is accepted if it lowers the conflict cost, or with
Metropolis probability otherwise. Temperature decays geometrically and the
search stops at zero cost or once the temperature reaches the floor.

Contract (public API)
---------------------
- ``anneal(initial, T0, decay, floor_temperature, rng)`` returns the board
  held when the loop exits. There is no success flag: callers check
  ``cost(result) == 0``.
- ``sa_nqueens(T0, decay, floor_temperature, rng)`` is the timed wrapper used
  by the experiment harness. It returns a 5-tuple ``SAResult``:
    (success, steps, elapsed_seconds, final_cost, initial_cost)

Acceptance
----------
With the default ``"metropolis"`` rule the probability ``exp(delta / T)``
(``delta = cost(current) - cost(neighbor)``) is compared as a float against a
uniform draw in ``[0, 1)``, so cost-increasing moves stay possible while the
temperature is high.

The ``"truncated"`` rule truncates that probability to an integer first. Any
probability below 1 becomes 0, so only improving and equal-cost moves are
ever taken: a greedy walk with sideways moves. It reproduces the historical
behavior and is kept for comparison; with ``T0=10000, decay=0.999`` and a
floor of 2 it solves roughly four runs in five. Under the Metropolis rule a
floor of 2 is still too hot to settle on a solution, so that rule needs a
colder and longer schedule (e.g. ``T0=10, decay=0.9995, floor=0.05``).

Determinism
-----------
Pass a seeded ``random.Random`` to reproduce a run.
"""

from __future__ import annotations

import math
import random
from time import perf_counter
from typing import Iterator, Optional, Tuple

from .board import BoardState
from .utils import cost

DEFAULT_FLOOR_TEMPERATURE = 2.0

ACCEPTANCE_RULES = ("metropolis", "truncated")

SAResult = Tuple[bool, int, float, int, int]


def _check_schedule(T0: float, decay: float, floor_temperature: float = DEFAULT_FLOOR_TEMPERATURE) -> None:
    if not T0 > 0:
        raise ValueError(f"Initial temperature must be positive, got {T0}")
    if not 0 < decay < 1:
        raise ValueError(f"Cooling factor must lie in (0, 1), got {decay}")
    # T *= decay only approaches 0, so a negative floor is never reached.
    if not floor_temperature >= 0:
        raise ValueError(f"Floor temperature must be non-negative, got {floor_temperature}")


def _check_rule(acceptance: str) -> None:
    if acceptance not in ACCEPTANCE_RULES:
        raise ValueError(
            f"Unknown acceptance rule '{acceptance}'. Allowed: " + ", ".join(ACCEPTANCE_RULES)
        )


def cooling_steps(T0: float, decay: float, floor_temperature: float = DEFAULT_FLOOR_TEMPERATURE) -> int:
    """Return how many steps the schedule allows before reaching the floor.

    Mirrors the loop's own float arithmetic (``T *= decay``), so the value is
    exactly the iteration count of a run that never hits zero cost. It matches
    ``ceil(log(floor / T0) / log(decay))`` up to rounding at exact powers.
    """
    _check_schedule(T0, decay, floor_temperature)
    steps = 0
    temperature = T0
    while temperature > floor_temperature:
        temperature *= decay
        steps += 1
    return steps


def accept_move(
    delta: int,
    temperature: float,
    rng: random.Random,
    acceptance: str = "metropolis",
) -> bool:
    """Decide whether to move to a neighbor.

    Parameters
    ----------
    delta : int
        ``cost(current) - cost(neighbor)``; positive means the neighbor is
        strictly better.
    temperature : float
        Current temperature, strictly positive.
    rng : random.Random
        Source of the uniform draw. Not consulted when ``delta > 0``.
    acceptance : str, default "metropolis"
        ``"metropolis"`` or ``"truncated"`` (see module docstring).
    """
    if delta > 0:
        return True
    probability = math.exp(delta / temperature)
    if acceptance == "truncated":
        probability = int(probability)
    return probability > rng.random()


def iter_annealing(
    initial: BoardState,
    T0: float,
    decay: float,
    floor_temperature: float = DEFAULT_FLOOR_TEMPERATURE,
    rng: Optional[random.Random] = None,
    acceptance: str = "metropolis",
) -> Iterator[Tuple[int, float, BoardState]]:
    """Yield ``(step, temperature, current)`` after every annealing step.

    ``temperature`` is the value after cooling. The generator ends when the
    current board reaches zero cost or the temperature is no longer above
    ``floor_temperature``.
    """
    _check_schedule(T0, decay, floor_temperature)
    _check_rule(acceptance)
    rng = rng if rng is not None else random.Random()

    current = initial
    current_cost = cost(current.queens)
    temperature = T0
    step = 0
    solved = False

    while temperature > floor_temperature and not solved:
        neighbor = current.make_random_move(rng)
        neighbor_cost = cost(neighbor.queens)
        if accept_move(current_cost - neighbor_cost, temperature, rng, acceptance):
            current = neighbor
            current_cost = neighbor_cost

        # Geometric cooling schedule
        temperature *= decay
        step += 1
        solved = current_cost == 0
        yield step, temperature, current


def anneal(
    initial: BoardState,
    T0: float,
    decay: float,
    floor_temperature: float = DEFAULT_FLOOR_TEMPERATURE,
    rng: Optional[random.Random] = None,
    acceptance: str = "metropolis",
) -> BoardState:
    """Run Simulated Annealing from ``initial`` and return the final board.

    Parameters
    ----------
    initial : BoardState
        Starting placement; never modified.
    T0 : float
        Initial temperature (> 0).
    decay : float
        Geometric cooling factor in (0, 1); ``T *= decay`` after every step.
    floor_temperature : float, default 2.0
        The loop runs while ``T > floor_temperature``.
    rng : random.Random | None
        Randomness handle; a fresh unseeded generator when omitted.
    acceptance : str, default "metropolis"
        Acceptance rule, ``"metropolis"`` or ``"truncated"``.

    Returns
    -------
    BoardState
        The board held at loop exit. Running out of temperature without
        reaching zero cost is a normal outcome, not an error.

    Raises
    ------
    ValueError
        If ``T0 <= 0``, ``decay`` is outside ``(0, 1)`` or the acceptance
        rule is unknown.
    """
    final = initial
    for _, _, current in iter_annealing(initial, T0, decay, floor_temperature, rng, acceptance):
        final = current
    return final


def sa_nqueens(
    T0: float,
    decay: float,
    floor_temperature: float = DEFAULT_FLOOR_TEMPERATURE,
    rng: Optional[random.Random] = None,
    acceptance: str = "metropolis",
) -> SAResult:
    """Anneal a fresh random board and report how the run went.

    Timing covers generation of the starting board and the annealing loop,
    measured with ``perf_counter()``.

    Returns
    -------
    SAResult
        Tuple (success, steps, elapsed, final_cost, initial_cost).
    """
    rng = rng if rng is not None else random.Random()
    start = perf_counter()
    initial = BoardState.generate_random(rng)
    initial_cost = cost(initial.queens)

    final = initial
    steps = 0
    for steps, _, current in iter_annealing(initial, T0, decay, floor_temperature, rng, acceptance):
        final = current

    elapsed = perf_counter() - start
    final_cost = cost(final.queens)
    return final_cost == 0, steps, elapsed, final_cost, initial_cost
