"""Evolution engine for multi-objective genetic programming.

Generational mu+lambda loop with Pareto domination counting and optional
crowding-distance tie-breaking. Genomes and fitness functions are supplied
from outside through the protocols in ``paretogp.evolution.protocol``.
"""

from paretogp.evolution.individual import Individual
from paretogp.evolution.population import Population, PopulationStats
from paretogp.evolution.variation import Branch, VariationPipeline
from paretogp.evolution.best import (
    EuclideanBestPicker,
    FirstFitnessBestPicker,
    make_best_picker,
)
from paretogp.evolution.convergence import (
    ConvergenceMonitor,
    ConvergencePolicy,
    ConvergenceState,
)
from paretogp.evolution.engine import (
    EngineState,
    EngineStatus,
    GenerationalEngine,
    RunResult,
)

__all__ = [
    "Individual",
    "Population",
    "PopulationStats",
    "Branch",
    "VariationPipeline",
    "EuclideanBestPicker",
    "FirstFitnessBestPicker",
    "make_best_picker",
    "ConvergenceMonitor",
    "ConvergencePolicy",
    "ConvergenceState",
    "EngineState",
    "EngineStatus",
    "GenerationalEngine",
    "RunResult",
]
