"""Selection operators for multi-objective genetic programming.

Provides tournament strategies over a ranked population:
- Tournament selection: lowest domination count wins
- Crowded tournament selection: ties broken by crowding distance

Both sample with replacement from the shared random stream and never modify
the population. The earlier sample wins a full tie, which keeps runs
reproducible for a given seed.
"""

from __future__ import annotations

import random

from paretogp.evolution.individual import Individual
from paretogp.evolution.population import Population
from paretogp.exceptions import ConfigurationError

TOURNAMENT = "tournament"
CROWDED_TOURNAMENT = "crowded_tournament"


class TournamentSelection:
    """Tournament on domination count only."""

    name = TOURNAMENT
    diversity_aware = False

    def __init__(self, rng: random.Random, tournament_size: int = 7):
        if tournament_size < 1:
            raise ConfigurationError(
                f"tournament_size must be at least 1, got {tournament_size}"
            )
        self.rng = rng
        self.tournament_size = tournament_size

    def select(self, population: Population) -> Individual:
        """Select one individual.

        Args:
            population: Ranked population to sample from

        Returns:
            Tournament winner
        """
        n = len(population)
        if n == 0:
            raise ValueError("Cannot select from an empty population")

        best = population[self.rng.randrange(n)]
        for _ in range(self.tournament_size - 1):
            challenger = population[self.rng.randrange(n)]
            if self._beats(challenger, best):
                best = challenger
        return best

    def _beats(self, challenger: Individual, best: Individual) -> bool:
        return challenger.domination_count < best.domination_count


class CrowdedTournamentSelection(TournamentSelection):
    """Tournament on domination count, then crowding distance (higher wins)."""

    name = CROWDED_TOURNAMENT
    diversity_aware = True

    def _beats(self, challenger: Individual, best: Individual) -> bool:
        if challenger.domination_count != best.domination_count:
            return challenger.domination_count < best.domination_count
        return challenger.crowding_distance > best.crowding_distance


SELECTION_STRATEGIES: dict[str, type[TournamentSelection]] = {
    TOURNAMENT: TournamentSelection,
    CROWDED_TOURNAMENT: CrowdedTournamentSelection,
}


def make_selection(
    name: str, rng: random.Random, tournament_size: int = 7
) -> TournamentSelection:
    """Build a selection strategy by name.

    Raises:
        ConfigurationError: If the name is not a known strategy
    """
    try:
        strategy_cls = SELECTION_STRATEGIES[name]
    except KeyError:
        raise ConfigurationError(
            f"Invalid selection operator '{name}'. "
            f"Valid: {sorted(SELECTION_STRATEGIES)}"
        ) from None
    return strategy_cls(rng, tournament_size)


def is_diversity_aware(name: str) -> bool:
    """Whether the named strategy needs crowding distances."""
    if name not in SELECTION_STRATEGIES:
        raise ConfigurationError(f"Invalid selection operator '{name}'")
    return SELECTION_STRATEGIES[name].diversity_aware
