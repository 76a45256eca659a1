"""
Pytest fixtures for pareto-gp tests.

Genomes and objectives come from the deterministic toy problem in
``toy_problem.py``; nothing here depends on a real genotype.
"""

import pytest

import toy_problem
from paretogp.config import EngineConfig
from paretogp.operators.registry import OperatorRegistry


@pytest.fixture
def toy_registry() -> OperatorRegistry:
    """Fresh registry holding the toy operators."""
    registry = OperatorRegistry()
    toy_problem.register(registry)
    return registry


@pytest.fixture
def toy_config() -> EngineConfig:
    """Small configuration over the toy operators."""
    return EngineConfig(
        population_size=12,
        n_generations=5,
        crossover_rate=0.7,
        mutation_rate=0.2,
        tournament_size=3,
        objectives=["f1", "f2"],
        initialize="toy_uniform",
        crossover="toy_one_point",
        mutate="toy_gaussian",
        seed=42,
    )


@pytest.fixture
def four_individuals():
    """A=(1,4), B=(2,3), C=(3,2), D=(5,5) on two minimised objectives."""
    return [
        toy_problem.make_individual({"f1": 1.0, "f2": 4.0}, genome="A"),
        toy_problem.make_individual({"f1": 2.0, "f2": 3.0}, genome="B"),
        toy_problem.make_individual({"f1": 3.0, "f2": 2.0}, genome="C"),
        toy_problem.make_individual({"f1": 5.0, "f2": 5.0}, genome="D"),
    ]
