"""Generational mu+lambda engine.

One step breeds N offspring, scores them on every objective, merges them
behind the N parents, counts dominators over the 2N pool, optionally computes
crowding distances, stable-sorts and keeps the first N. The best individual
of the survivors then feeds the convergence monitor.

Usage:
    engine = GenerationalEngine.from_config(config, registry)
    result = engine.run()
    front = result.pareto_front
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Any

import pandas as pd

from paretogp.evolution.best import make_best_picker
from paretogp.evolution.convergence import (
    ConvergenceMonitor,
    ConvergencePolicy,
    ConvergenceState,
)
from paretogp.evolution.individual import Individual
from paretogp.evolution.population import Population
from paretogp.evolution.protocol import (
    CrossoverOperator,
    FitnessFunction,
    Initializer,
    MutationOperator,
)
from paretogp.evolution.variation import VariationPipeline
from paretogp.exceptions import ConfigurationError, EvaluationError, OperatorError
from paretogp.operators.crowding import compute_crowding_distances
from paretogp.operators.dominance import compute_domination_counts, has_nan
from paretogp.operators.registry import (
    CROSSOVER,
    INITIALIZE,
    MUTATE,
    OperatorRegistry,
    default_registry,
)
from paretogp.operators.selection import make_selection

if TYPE_CHECKING:
    from paretogp.config import EngineConfig

logger = logging.getLogger(__name__)


class EngineStatus(Enum):
    INITIALIZING = "initializing"
    STEPPING = "stepping"
    STOPPED = "stopped"


@dataclass
class EngineState:
    """Everything that changes during a run.

    Attributes:
        population: Current population (size N at generation boundaries)
        offspring: Last offspring pool
        merged: Last parents+offspring pool
        pareto_front: Non-dominated members of the current population
        best: Best individual of the current population
        generation: Completed generations
        convergence: Plateau tracking for the convergence monitor
        best_history: Best individual per generation, initial population first
        status: Lifecycle state
        stop_reason: Why the run stopped early, if it did
    """

    population: Population = field(default_factory=Population)
    offspring: Population = field(default_factory=Population)
    merged: Population = field(default_factory=Population)
    pareto_front: list[Individual] = field(default_factory=list)
    best: Individual | None = None
    generation: int = 0
    convergence: ConvergenceState = field(default_factory=ConvergenceState)
    best_history: list[Individual] = field(default_factory=list)
    status: EngineStatus = EngineStatus.INITIALIZING
    stop_reason: str | None = None

    @property
    def finished(self) -> bool:
        return self.status is EngineStatus.STOPPED


@dataclass
class RunResult:
    """Result of a full run.

    Attributes:
        best: Best individual of the final population
        best_history: Best individual per generation (entry 0 = initial population)
        population: Final population
        pareto_front: Non-dominated members of the final population
        objectives: Objective names in registry order
        n_generations: Number of generations completed
        stop_reason: Convergence reason, or None if the budget ran out
    """

    best: Individual
    best_history: list[Individual]
    population: Population
    pareto_front: list[Individual]
    objectives: list[str]
    n_generations: int
    stop_reason: str | None = None

    @property
    def converged(self) -> bool:
        return self.stop_reason is not None

    def to_frame(self) -> pd.DataFrame:
        """Best individual per generation as a DataFrame."""
        rows = []
        for generation, ind in enumerate(self.best_history):
            row: dict[str, Any] = {"generation": generation, "genome": str(ind.genome)}
            for obj in self.objectives:
                row[obj] = ind.fitness.get(obj)
            rows.append(row)
        return pd.DataFrame(rows, columns=["generation", "genome", *self.objectives])


class GenerationalEngine:
    """Multi-objective evolutionary search over externally defined genomes."""

    def __init__(
        self,
        objectives: dict[str, FitnessFunction],
        initialize: Initializer,
        crossover: CrossoverOperator,
        mutate: MutationOperator,
        config: EngineConfig,
        rng: random.Random | None = None,
        convergence_policies: dict[str, ConvergencePolicy] | None = None,
    ):
        """Initialize engine.

        Args:
            objectives: Objective name -> fitness function, primary objective first
            initialize: Produces the initial genomes
            crossover: Recombination capability
            mutate: Mutation capability
            config: Engine configuration
            rng: Random stream; defaults to ``random.Random(config.seed)``
            convergence_policies: Extra stopping rules by objective name, for this
                engine only

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        if not config.objectives:
            config = replace(config, objectives=list(objectives))
        elif list(config.objectives) != list(objectives):
            raise ConfigurationError(
                f"Configured objectives {config.objectives} do not match "
                f"fitness functions {list(objectives)}"
            )
        self.config = config.validate()

        self.objectives = dict(objectives)
        self.objective_names = list(objectives)
        self.initialize_op = initialize
        self.rng = rng if rng is not None else random.Random(config.seed)

        self.selection = make_selection(config.selection, self.rng, config.tournament_size)
        self.diversity_aware = self.selection.diversity_aware
        self.best_picker = make_best_picker(config.best_policy)
        self.monitor = ConvergenceMonitor(
            self.objective_names[0], policies=convergence_policies
        )
        self.variation = VariationPipeline(
            selection=self.selection,
            crossover=crossover,
            mutate=mutate,
            crossover_rate=config.crossover_rate,
            mutation_rate=config.mutation_rate,
            rng=self.rng,
        )

        self.state = EngineState()

    @classmethod
    def from_config(
        cls,
        config: EngineConfig,
        registry: OperatorRegistry | None = None,
        rng: random.Random | None = None,
        convergence_policies: dict[str, ConvergencePolicy] | None = None,
    ) -> "GenerationalEngine":
        """Build an engine whose operators are looked up by identifier.

        Raises:
            ConfigurationError: If any identifier is unknown
        """
        registry = registry or default_registry
        config.validate()
        registry.load_plugins(config.plugins)

        return cls(
            objectives=registry.resolve_objectives(config.objectives, config),
            initialize=registry.resolve(INITIALIZE, config.initialize, config),
            crossover=registry.resolve(CROSSOVER, config.crossover, config),
            mutate=registry.resolve(MUTATE, config.mutate, config),
            config=config,
            rng=rng,
            convergence_policies=convergence_policies,
        )

    @property
    def population(self) -> Population:
        return self.state.population

    @property
    def best(self) -> Individual | None:
        return self.state.best

    @property
    def pareto_front(self) -> list[Individual]:
        return self.state.pareto_front

    def initialize(self) -> None:
        """Create, score and rank the initial population."""
        size = self.config.population_size
        self.state = EngineState()

        genomes = list(self.initialize_op(size, self.rng))
        if len(genomes) != size:
            raise OperatorError(
                f"Initializer produced {len(genomes)} genomes, expected {size}"
            )

        population = Population.from_genomes(genomes)
        self._evaluate(population)
        self._rank(population)
        population.sort(use_crowding=self.diversity_aware)

        self.state.population = population.truncate(size)
        self.state.pareto_front = self.state.population.get_pareto_front()
        self.state.best = self.state.population[0]
        self.state.best_history.append(self.state.best)
        self.state.status = EngineStatus.STEPPING

        logger.info(
            f"Initial population of {size}: front size {len(self.state.pareto_front)}, "
            f"best {self.state.best.fitness}"
        )

    def step(self) -> Individual:
        """Advance the population by one generation.

        Returns:
            Best individual of the new population

        Raises:
            DominationError: If the merged pool cannot be ranked
            EvaluationError: If a fitness function resizes the offspring pool
        """
        if self.state.status is not EngineStatus.STEPPING:
            raise RuntimeError(f"Cannot step an engine in state {self.state.status.value}")

        size = self.config.population_size

        offspring = self.variation.breed(self.state.population, size)
        self._evaluate(offspring)

        merged = Population.merge(self.state.population, offspring)
        self._rank(merged)
        merged.sort(use_crowding=self.diversity_aware)

        population = merged.truncate(size)

        self.state.offspring = offspring
        self.state.merged = merged
        self.state.population = population
        self.state.pareto_front = population.get_pareto_front()
        self.state.best = self.best_picker.pick(population, self.objective_names)

        return self.state.best

    def run(self) -> RunResult:
        """Run until convergence or until the generation budget is spent.

        Generations are counted from 0 up to and including ``n_generations``,
        so a full run takes ``n_generations + 1`` steps.
        """
        if self.state.status is EngineStatus.INITIALIZING:
            logger.info(
                f"Starting run: N={self.config.population_size}, "
                f"generations={self.config.n_generations}, seed={self.config.seed}, "
                f"objectives={self.objective_names}"
            )
            self.initialize()

        primary = self.objective_names[0]

        while (
            self.state.status is EngineStatus.STEPPING
            and self.state.generation <= self.config.n_generations
        ):
            best = self.step()
            self.state.best_history.append(best)
            self.state.generation += 1

            logger.info(
                f"Generation {self.state.generation}: best {best.fitness}, "
                f"front size {len(self.state.pareto_front)}"
            )
            if logger.isEnabledFor(logging.DEBUG):
                stats = self.state.population.compute_stats(self.objective_names)
                logger.debug(f"Generation {self.state.generation} stats: {stats}")

            reason = self.monitor.update(self.state.convergence, best.fitness[primary])
            if reason is not None:
                self.state.stop_reason = reason
                self.state.status = EngineStatus.STOPPED

        self.state.status = EngineStatus.STOPPED
        logger.info(
            f"Run finished after {self.state.generation} generations"
            + (f" ({self.state.stop_reason})" if self.state.stop_reason else "")
        )

        return RunResult(
            best=self.state.best,
            best_history=list(self.state.best_history),
            population=self.state.population,
            pareto_front=list(self.state.pareto_front),
            objectives=list(self.objective_names),
            n_generations=self.state.generation,
            stop_reason=self.state.stop_reason,
        )

    def _evaluate(self, population: Population) -> None:
        size = len(population)
        for name, fitness_function in self.objectives.items():
            fitness_function.evaluate(name, population)
            if len(population) != size:
                raise EvaluationError(
                    f"Fitness function '{name}' resized the population "
                    f"from {size} to {len(population)}"
                )

    def _rank(self, population: Population) -> None:
        compute_domination_counts(population.individuals, self.objective_names)
        if has_nan(population.individuals, self.objective_names):
            logger.warning("NaN fitness values present; they neither dominate nor are dominated")
        if self.diversity_aware:
            compute_crowding_distances(population.individuals, self.objective_names)
