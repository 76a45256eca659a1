"""Best-individual extraction policies."""

from __future__ import annotations

import numpy as np

from paretogp.evolution.individual import Individual
from paretogp.evolution.population import Population
from paretogp.exceptions import ConfigurationError
from paretogp.operators.dominance import build_fitness_matrix

EUCLIDEAN = "euclidean"
FIRST_FITNESS = "first_fitness"


def compute_euclidean_distances(population: Population, objectives: list[str]) -> None:
    """Distance of every individual to the all-zero ideal point.

    Each objective is min-max normalised over the population first; an
    objective with zero range normalises to 0 for everyone.
    """
    if len(population) == 0:
        return

    matrix = build_fitness_matrix(population.individuals, objectives)
    mins = matrix.min(axis=0)
    ranges = matrix.max(axis=0) - mins

    safe_ranges = np.where(ranges > 0, ranges, 1.0)
    normalized = np.where(ranges > 0, (matrix - mins) / safe_ranges, 0.0)
    distances = np.linalg.norm(normalized, axis=1)

    for ind, distance in zip(population, distances):
        ind.euclidean_distance = float(distance)


class EuclideanBestPicker:
    """Individual closest to the ideal point across the whole population."""

    name = EUCLIDEAN

    def pick(self, population: Population, objectives: list[str]) -> Individual:
        compute_euclidean_distances(population, objectives)
        best = population[0]
        for ind in population:
            if ind.euclidean_distance < best.euclidean_distance:
                best = ind
        return best


class FirstFitnessBestPicker:
    """Individual with the lowest score on the primary objective."""

    name = FIRST_FITNESS

    def pick(self, population: Population, objectives: list[str]) -> Individual:
        primary = objectives[0]
        best = population[0]
        for ind in population:
            if ind.fitness[primary] < best.fitness[primary]:
                best = ind
        return best


BEST_PICKERS = {
    EUCLIDEAN: EuclideanBestPicker,
    FIRST_FITNESS: FirstFitnessBestPicker,
}


def make_best_picker(name: str) -> EuclideanBestPicker | FirstFitnessBestPicker:
    """Build a best picker by policy name.

    Raises:
        ConfigurationError: If the policy is unknown
    """
    try:
        return BEST_PICKERS[name]()
    except KeyError:
        raise ConfigurationError(
            f"No such best selection method '{name}'. Valid: {sorted(BEST_PICKERS)}"
        ) from None
