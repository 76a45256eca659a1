"""Offspring production.

Each attempt picks a first parent, then makes exactly one branch draw:

- draw < crossover_rate: pick a second parent and recombine (0..k children)
- draw < crossover_rate + mutation_rate: mutate the first parent (one child)
- otherwise: the attempt is wasted and retried

The number of draws consumed per generation is part of the reproducibility
contract, so wasted attempts are never skipped or short-circuited.
"""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Any

from paretogp.evolution.individual import Individual
from paretogp.evolution.population import Population
from paretogp.evolution.protocol import CrossoverOperator, MutationOperator, Selector
from paretogp.exceptions import ConfigurationError, OperatorError

logger = logging.getLogger(__name__)


class Branch(Enum):
    """Outcome of one variation attempt."""

    CROSSOVER = "crossover"
    MUTATION = "mutation"
    SKIP = "skip"


class VariationPipeline:
    """Produce offspring pools through crossover and mutation."""

    def __init__(
        self,
        selection: Selector,
        crossover: CrossoverOperator,
        mutate: MutationOperator,
        crossover_rate: float,
        mutation_rate: float,
        rng: random.Random,
    ):
        """Initialize the pipeline.

        Args:
            selection: Parent selection strategy
            crossover: External crossover capability
            mutate: External mutation capability
            crossover_rate: Probability of the crossover branch
            mutation_rate: Probability of the mutation branch (cumulative with crossover)
            rng: Shared random stream

        Raises:
            ConfigurationError: If the rates cannot produce offspring
        """
        for label, rate in (("crossover_rate", crossover_rate), ("mutation_rate", mutation_rate)):
            if not 0.0 <= rate <= 1.0:
                raise ConfigurationError(f"{label} must be in [0, 1], got {rate}")
        # A cumulative rate above 1 leaves mutation the range [crossover_rate, 1)
        if crossover_rate + mutation_rate <= 0.0:
            raise ConfigurationError("crossover_rate + mutation_rate must be positive")

        self.selection = selection
        self.crossover = crossover
        self.mutate = mutate
        self.crossover_rate = crossover_rate
        self.mutation_rate = mutation_rate
        self.rng = rng

        self.wasted_attempts = 0

    def branch_for(self, draw: float) -> Branch:
        """Map a uniform draw onto the cumulative branch ranges."""
        if draw < self.crossover_rate:
            return Branch.CROSSOVER
        if draw < self.crossover_rate + self.mutation_rate:
            return Branch.MUTATION
        return Branch.SKIP

    def breed(self, population: Population, size: int) -> Population:
        """Create exactly ``size`` offspring from ``population``.

        Args:
            population: Ranked parent population
            size: Target offspring count

        Returns:
            Offspring population with empty fitness

        Raises:
            OperatorError: If a genotype operator returns no usable child
        """
        offspring = Population()
        self.wasted_attempts = 0

        while len(offspring) < size:
            parent1 = self.selection.select(population)
            branch = self.branch_for(self.rng.random())

            if branch is Branch.CROSSOVER:
                parent2 = self.selection.select(population)
                children = self._crossover(parent1, parent2)
            elif branch is Branch.MUTATION:
                children = [self._mutate(parent1)]
            else:
                self.wasted_attempts += 1
                continue

            for genome in children:
                if len(offspring) >= size:
                    break
                offspring.append(Individual(genome=genome))

        logger.debug(
            f"Bred {len(offspring)} offspring ({self.wasted_attempts} wasted attempts)"
        )
        return offspring

    def _crossover(self, parent1: Individual, parent2: Individual) -> list[Any]:
        children = self.crossover(parent1.genome, parent2.genome, self.rng)
        if children is None:
            raise OperatorError("Crossover returned None instead of a sequence")
        return list(children)

    def _mutate(self, parent: Individual) -> Any:
        child = self.mutate(parent.genome, self.rng)
        if child is None:
            raise OperatorError("Mutation returned None instead of a genome")
        return child
