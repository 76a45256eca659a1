"""Ranking and selection operators.

This module provides Pareto domination counting, crowding distance, tournament
selection, and the registry through which genotype and fitness operators are
plugged in.
"""

from paretogp.operators.dominance import (
    compute_domination_counts,
    dominates,
    pareto_front,
)
from paretogp.operators.crowding import compute_crowding_distances
from paretogp.operators.selection import (
    CrowdedTournamentSelection,
    TournamentSelection,
    make_selection,
)
from paretogp.operators.registry import OperatorRegistry, default_registry

__all__ = [
    "compute_domination_counts",
    "dominates",
    "pareto_front",
    "compute_crowding_distances",
    "CrowdedTournamentSelection",
    "TournamentSelection",
    "make_selection",
    "OperatorRegistry",
    "default_registry",
]
