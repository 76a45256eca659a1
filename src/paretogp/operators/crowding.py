"""Crowding distance for diversity-aware ranking.

Crowding distance measures how isolated an individual is in objective space.
Higher distance = more isolated = preferred when domination counts tie.
"""

from __future__ import annotations

import logging

import numpy as np

from paretogp.evolution.individual import Individual
from paretogp.operators.dominance import build_fitness_matrix

logger = logging.getLogger(__name__)


def compute_crowding_distances(
    individuals: list[Individual], objectives: list[str]
) -> None:
    """Compute crowding distance for all individuals in place.

    Recomputed from scratch on every call. For each objective the set is
    sorted (stable) by score; the first and last sorted members get +inf and
    interior members add the normalised gap between their neighbours. A zero
    range contributes nothing to interior members. When the range is not
    finite (an infinite or NaN score), interior members whose neighbour gap is
    infinite get +inf and the others nothing, so the result is never NaN.

    Args:
        individuals: Ranked set (modified in place)
        objectives: Objective names, in registry order
    """
    n = len(individuals)
    if n == 0:
        return

    distances = np.zeros(n)
    fitness_matrix = build_fitness_matrix(individuals, objectives)

    for j in range(len(objectives)):
        sorted_idx = np.argsort(fitness_matrix[:, j], kind="stable")

        distances[sorted_idx[0]] = np.inf
        distances[sorted_idx[-1]] = np.inf

        if n < 3:
            continue

        values = fitness_matrix[sorted_idx, j]
        with np.errstate(invalid="ignore"):
            obj_range = values[-1] - values[0]
            gaps = values[2:] - values[:-2]

        if obj_range == 0:
            continue
        if np.isfinite(obj_range):
            contributions = gaps / obj_range
        else:
            # Infinite scores: only neighbours of an infinite value are isolated
            contributions = np.where(np.isinf(gaps), np.inf, 0.0)

        distances[sorted_idx[1:-1]] += contributions

    for ind, distance in zip(individuals, distances):
        ind.crowding_distance = float(distance)

    logger.debug(
        f"Crowding distances computed for {n} individuals "
        f"({int(np.isinf(distances).sum())} boundary)"
    )
