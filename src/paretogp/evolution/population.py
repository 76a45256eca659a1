"""Population management for multi-objective evolution.

Handles the ordered individual collection, merging, sorting and statistics.
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator

import numpy as np

from paretogp.evolution.individual import Individual


@dataclass
class PopulationStats:
    """Statistics about a population."""

    size: int
    min_fitness: dict[str, float]
    max_fitness: dict[str, float]
    avg_fitness: dict[str, float]
    std_fitness: dict[str, float]
    pareto_front_size: int


@dataclass
class Population:
    """Ordered collection of individuals.

    Order is significant: merging keeps parents before offspring and sorting is
    stable, so equal-ranked individuals keep their relative order.
    """

    individuals: list[Individual] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.individuals)

    def __iter__(self) -> Iterator[Individual]:
        return iter(self.individuals)

    def __getitem__(self, idx: int) -> Individual:
        return self.individuals[idx]

    def append(self, individual: Individual) -> None:
        self.individuals.append(individual)

    def extend(self, individuals: Iterable[Individual]) -> None:
        self.individuals.extend(individuals)

    @classmethod
    def merge(cls, parents: "Population", offspring: "Population") -> "Population":
        """Combine two populations, parents first."""
        return cls(individuals=list(parents.individuals) + list(offspring.individuals))

    @classmethod
    def from_genomes(cls, genomes: Iterable) -> "Population":
        """Wrap genomes as individuals with empty fitness."""
        return cls(individuals=[Individual(genome=genome) for genome in genomes])

    def sort(self, use_crowding: bool = False) -> None:
        """Sort in place by domination count, then crowding distance if enabled.

        Args:
            use_crowding: Break domination-count ties by descending crowding distance
        """
        if use_crowding:
            self.individuals.sort(
                key=lambda ind: (ind.domination_count, -ind.crowding_distance)
            )
        else:
            self.individuals.sort(key=lambda ind: ind.domination_count)

    def truncate(self, size: int) -> "Population":
        """Return a new population holding the first ``size`` individuals."""
        return Population(individuals=self.individuals[:size])

    def get_pareto_front(self) -> list[Individual]:
        """Get individuals on the Pareto front (domination count 0)."""
        return [ind for ind in self.individuals if ind.domination_count == 0]

    def to_genomes(self) -> list:
        return [ind.genome for ind in self.individuals]

    def compute_stats(self, objectives: list[str]) -> PopulationStats:
        """Compute per-objective statistics.

        Individuals without a score for an objective are skipped for that objective.
        """
        min_fitness = {}
        max_fitness = {}
        avg_fitness = {}
        std_fitness = {}

        for obj in objectives:
            values = np.array(
                [ind.fitness[obj] for ind in self.individuals if obj in ind.fitness],
                dtype=float,
            )
            if values.size == 0:
                continue
            min_fitness[obj] = float(values.min())
            max_fitness[obj] = float(values.max())
            avg_fitness[obj] = float(values.mean())
            std_fitness[obj] = float(values.std())

        return PopulationStats(
            size=len(self.individuals),
            min_fitness=min_fitness,
            max_fitness=max_fitness,
            avg_fitness=avg_fitness,
            std_fitness=std_fitness,
            pareto_front_size=len(self.get_pareto_front()),
        )
