"""
pareto-gp: Pareto-based multi-objective evolutionary search for symbolic models.

The engine evolves a population of externally defined genomes (expression
trees, rule sets, ...) toward several competing objectives and returns a small
set of non-dominated candidates.
"""

__version__ = "0.1.0"

from paretogp.evolution.engine import GenerationalEngine, RunResult
from paretogp.evolution.individual import Individual
from paretogp.evolution.population import Population
from paretogp.config import EngineConfig, load_config
from paretogp.operators.registry import OperatorRegistry, default_registry

__all__ = [
    "__version__",
    "GenerationalEngine",
    "RunResult",
    "Individual",
    "Population",
    "EngineConfig",
    "load_config",
    "OperatorRegistry",
    "default_registry",
]
