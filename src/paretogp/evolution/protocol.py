from typing import Protocol, Any, Sequence, runtime_checkable

from paretogp.evolution.individual import Individual
from paretogp.evolution.population import Population


@runtime_checkable
class Initializer(Protocol):
    """Produces fresh genomes for the initial population."""

    def __call__(self, size: int, rng: Any) -> Sequence[Any]:
        ...


@runtime_checkable
class CrossoverOperator(Protocol):
    """Recombines two parent genomes into zero or more children."""

    def __call__(self, genome1: Any, genome2: Any, rng: Any) -> Sequence[Any]:
        ...


@runtime_checkable
class MutationOperator(Protocol):
    """Produces exactly one mutated copy of a genome."""

    def __call__(self, genome: Any, rng: Any) -> Any:
        ...


@runtime_checkable
class FitnessFunction(Protocol):
    """Scores every individual of a population on one named objective.

    Implementations write ``individual.fitness[objective]`` for each individual
    and return only once the whole population is scored. Lower is better.
    """

    def evaluate(self, objective: str, population: Population) -> None:
        ...


@runtime_checkable
class Selector(Protocol):
    """Picks one parent from a ranked population without modifying it."""

    diversity_aware: bool

    def select(self, population: Population) -> Individual:
        ...
