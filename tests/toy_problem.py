"""Deterministic toy problem used as external collaborators in tests.

Genomes are tuples of floats in [0, 1]. Two conflicting objectives:
``f1`` = first gene, ``f2`` = 1 - first gene + mean of the remaining genes.
Also usable as a plugin (``register``) for the CLI.
"""

import random
from typing import Callable, Sequence

from paretogp.evolution.individual import Individual
from paretogp.evolution.population import Population

GENOME_LENGTH = 4


class Genome(tuple):
    def __str__(self) -> str:
        return "[" + " ".join(f"{g:.4f}" for g in self) + "]"


def initialize(size: int, rng: random.Random) -> list[Genome]:
    return [Genome(rng.random() for _ in range(GENOME_LENGTH)) for _ in range(size)]


def one_point_crossover(g1: Genome, g2: Genome, rng: random.Random) -> list[Genome]:
    point = rng.randrange(1, len(g1))
    return [Genome(g1[:point] + g2[point:]), Genome(g2[:point] + g1[point:])]


def gaussian_mutation(genome: Genome, rng: random.Random) -> Genome:
    idx = rng.randrange(len(genome))
    genes = list(genome)
    genes[idx] = min(1.0, max(0.0, genes[idx] + rng.gauss(0.0, 0.1)))
    return Genome(genes)


def f1(genome: Sequence[float]) -> float:
    return genome[0]


def f2(genome: Sequence[float]) -> float:
    rest = genome[1:]
    return 1.0 - genome[0] + sum(rest) / len(rest)


class ObjectiveFunction:
    """Scores every individual with a plain function of the genome."""

    def __init__(self, func: Callable[[Sequence[float]], float]):
        self.func = func
        self.calls: list[int] = []

    def evaluate(self, objective: str, population: Population) -> None:
        self.calls.append(len(population))
        for ind in population:
            ind.fitness[objective] = self.func(ind.genome)


class ScriptedRandom:
    """Random stream replaying fixed draws, for pinning branch decisions."""

    def __init__(self, draws: Sequence[float] = (), indices: Sequence[int] = ()):
        self.draws = list(draws)
        self.indices = list(indices)

    def random(self) -> float:
        return self.draws.pop(0)

    def randrange(self, start: int, stop: int | None = None) -> int:
        if self.indices:
            return self.indices.pop(0)
        return 0 if stop is None else start


def make_individual(fitness: dict[str, float], genome=None, **kwargs) -> Individual:
    return Individual(genome=genome if genome is not None else tuple(fitness.values()),
                      fitness=dict(fitness), **kwargs)


def register(registry) -> None:
    registry.register("initialize", "toy_uniform", lambda config: initialize)
    registry.register("crossover", "toy_one_point", lambda config: one_point_crossover)
    registry.register("mutate", "toy_gaussian", lambda config: gaussian_mutation)
    registry.register("fitness", "f1", lambda config: ObjectiveFunction(f1))
    registry.register("fitness", "f2", lambda config: ObjectiveFunction(f2))
