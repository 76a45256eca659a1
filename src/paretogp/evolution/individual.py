"""Candidate solution record."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Individual:
    """Individual with fitness values for ranking and selection.

    The genome is opaque: only genotype operators look inside it. The engine
    mutates the ranking fields (domination count, crowding and euclidean
    distance); fitness functions write the ``fitness`` entries.

    Attributes:
        genome: Genotype handle owned by the external operators
        fitness: Objective name -> score (lower is better), insertion-ordered
        domination_count: Number of individuals in the ranked set dominating this one
        crowding_distance: Diversity estimate (may be +inf)
        euclidean_distance: Distance to the ideal point, set by the euclidean best picker
    """

    genome: Any
    fitness: dict[str, float] = field(default_factory=dict)
    domination_count: int = 0
    crowding_distance: float = 0.0
    euclidean_distance: float | None = None

    def get_fitness(self, objective: str | None = None) -> float:
        """Score for ``objective``, or for the first objective when omitted."""
        if objective is None:
            if not self.fitness:
                raise KeyError("individual has no fitness assigned")
            return next(iter(self.fitness.values()))
        return self.fitness[objective]

    @property
    def is_non_dominated(self) -> bool:
        return self.domination_count == 0

    def fitness_vector(self, objectives: list[str]) -> list[float]:
        return [self.fitness[obj] for obj in objectives]

    def __str__(self) -> str:
        return str(self.genome)
