"""Pareto dominance counting.

All objectives are framed as minimisation: ``a`` dominates ``b`` when it is no
worse on every objective and strictly better on at least one. Ranking only
counts dominators; an individual with count 0 lies on the first front.

Performance:
- Vectorized pairwise comparison using NumPy broadcasting (O(n²) memory and time)
"""

from __future__ import annotations

import logging
import math
from numbers import Real

import numpy as np

from paretogp.evolution.individual import Individual
from paretogp.exceptions import DominationError

logger = logging.getLogger(__name__)


def dominates(
    fitness1: dict[str, float],
    fitness2: dict[str, float],
    objectives: list[str] | None = None,
) -> bool:
    """Check if fitness1 dominates fitness2 (lower is better).

    Args:
        fitness1: First fitness dict
        fitness2: Second fitness dict
        objectives: Objectives to compare (defaults to the keys of fitness1)

    Returns:
        True if fitness1 dominates fitness2

    Raises:
        DominationError: If either fitness dict lacks one of the objectives
    """
    objectives = list(fitness1.keys()) if objectives is None else objectives

    worse_in_any = False
    better_in_any = False

    for obj in objectives:
        if obj not in fitness1 or obj not in fitness2:
            raise DominationError(f"Missing fitness value for objective '{obj}'")
        v1 = fitness1[obj]
        v2 = fitness2[obj]

        if v1 > v2:
            worse_in_any = True
        elif v1 < v2:
            better_in_any = True

    return better_in_any and not worse_in_any


def build_fitness_matrix(
    individuals: list[Individual], objectives: list[str]
) -> np.ndarray:
    """Build fitness matrix for vectorized operations.

    Args:
        individuals: List of individuals
        objectives: Objective names, in registry order

    Returns:
        Array of shape (n_individuals, n_objectives)

    Raises:
        DominationError: If a score is missing or not a real number
    """
    matrix = np.zeros((len(individuals), len(objectives)))

    for i, ind in enumerate(individuals):
        for j, obj in enumerate(objectives):
            try:
                value = ind.fitness[obj]
            except KeyError:
                raise DominationError(
                    f"Individual {i} has no fitness for objective '{obj}'"
                ) from None
            if isinstance(value, bool) or not isinstance(value, Real):
                raise DominationError(
                    f"Individual {i} has non-numeric fitness {value!r} for '{obj}'"
                )
            matrix[i, j] = value

    return matrix


def dominance_matrix(fitness_matrix: np.ndarray) -> np.ndarray:
    """Compute dominance matrix using broadcasting.

    Args:
        fitness_matrix: Array of shape (n, m) where n=individuals, m=objectives

    Returns:
        Boolean matrix of shape (n, n) where [i, j] = True means i dominates j
    """
    # (n, 1, m) against (1, n, m)
    leq = fitness_matrix[:, None, :] <= fitness_matrix[None, :, :]
    lt = fitness_matrix[:, None, :] < fitness_matrix[None, :, :]

    return np.all(leq, axis=2) & np.any(lt, axis=2)


def compute_domination_counts(
    individuals: list[Individual], objectives: list[str]
) -> list[Individual]:
    """Count, for every individual, how many others in the set dominate it.

    Counts are written to ``domination_count`` in place. Identical fitness
    vectors never dominate each other, so duplicates keep their counts.

    Args:
        individuals: Ranked set (modified in place)
        objectives: Objective names, in registry order

    Returns:
        The first front (individuals with count 0), in set order

    Raises:
        DominationError: If any individual lacks a configured objective
    """
    if not objectives:
        raise DominationError("Cannot rank individuals without objectives")
    if not individuals:
        return []

    fitness_matrix = build_fitness_matrix(individuals, objectives)
    dom = dominance_matrix(fitness_matrix)

    # Column j counts the individuals dominating j
    counts = dom.sum(axis=0)

    for ind, count in zip(individuals, counts):
        ind.domination_count = int(count)

    front = [ind for ind in individuals if ind.domination_count == 0]
    logger.debug(f"Ranked {len(individuals)} individuals, front size {len(front)}")
    return front


def pareto_front(individuals: list[Individual]) -> list[Individual]:
    """Individuals whose current domination count is 0."""
    return [ind for ind in individuals if ind.domination_count == 0]


def has_nan(individuals: list[Individual], objectives: list[str]) -> bool:
    """True if any score is NaN (NaN never dominates and is never dominated)."""
    return any(
        math.isnan(ind.fitness[obj])
        for ind in individuals
        for obj in objectives
        if obj in ind.fitness
    )
