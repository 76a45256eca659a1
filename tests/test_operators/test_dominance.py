"""Tests for Pareto domination counting."""

import random

import pytest

from paretogp.exceptions import DominationError
from paretogp.operators.dominance import (
    compute_domination_counts,
    dominates,
    pareto_front,
)
from toy_problem import make_individual

OBJECTIVES = ["f1", "f2"]


class TestDominates:
    """Test the pairwise dominance relation."""

    def test_lower_is_better(self):
        assert dominates({"a": 1.0, "b": 1.0}, {"a": 2.0, "b": 2.0})
        assert not dominates({"a": 2.0, "b": 2.0}, {"a": 1.0, "b": 1.0})

    def test_weak_improvement_is_enough(self):
        """Equal on one objective, strictly better on the other."""
        assert dominates({"a": 1.0, "b": 2.0}, {"a": 1.0, "b": 3.0})

    def test_trade_off_is_non_dominated(self):
        fitness1 = {"a": 1.0, "b": 3.0}
        fitness2 = {"a": 2.0, "b": 2.0}

        assert not dominates(fitness1, fitness2)
        assert not dominates(fitness2, fitness1)

    def test_identical_vectors_do_not_dominate(self):
        assert not dominates({"a": 1.0, "b": 1.0}, {"a": 1.0, "b": 1.0})

    def test_missing_objective_raises(self):
        with pytest.raises(DominationError):
            dominates({"a": 1.0}, {"a": 2.0, "b": 1.0}, objectives=["a", "b"])


class TestDominationCounts:
    """Test domination counting over a set."""

    def test_four_individual_scenario(self, four_individuals):
        front = compute_domination_counts(four_individuals, OBJECTIVES)

        counts = {ind.genome: ind.domination_count for ind in four_individuals}
        assert counts == {"A": 0, "B": 0, "C": 0, "D": 3}
        assert [ind.genome for ind in front] == ["A", "B", "C"]

    def test_duplicates_do_not_count_each_other(self):
        individuals = [
            make_individual({"f1": 1.0, "f2": 1.0}),
            make_individual({"f1": 1.0, "f2": 1.0}),
            make_individual({"f1": 2.0, "f2": 2.0}),
        ]

        compute_domination_counts(individuals, OBJECTIVES)

        assert [ind.domination_count for ind in individuals] == [0, 0, 2]

    def test_counts_are_recomputed(self, four_individuals):
        for ind in four_individuals:
            ind.domination_count = 99

        compute_domination_counts(four_individuals, OBJECTIVES)

        assert four_individuals[0].domination_count == 0

    def test_counts_match_pairwise_dominance(self):
        rng = random.Random(7)
        individuals = [
            make_individual({"f1": rng.randint(0, 5), "f2": rng.randint(0, 5), "f3": rng.random()})
            for _ in range(40)
        ]
        objectives = ["f1", "f2", "f3"]

        compute_domination_counts(individuals, objectives)

        for b in individuals:
            expected = sum(
                1 for a in individuals if dominates(a.fitness, b.fitness, objectives)
            )
            assert b.domination_count == expected

    def test_front_is_not_dominated(self):
        rng = random.Random(3)
        individuals = [
            make_individual({"f1": rng.random(), "f2": rng.random()}) for _ in range(30)
        ]

        front = compute_domination_counts(individuals, OBJECTIVES)

        assert len(front) == sum(1 for ind in individuals if ind.domination_count == 0)
        assert front == pareto_front(individuals)
        for member in front:
            for other in individuals:
                assert not dominates(other.fitness, member.fitness, OBJECTIVES)

    def test_only_configured_objectives_are_compared(self):
        """Extra fitness entries outside the registry are ignored."""
        individuals = [
            make_individual({"f1": 1.0, "f2": 1.0, "extra": 9.0}),
            make_individual({"f1": 1.0, "f2": 1.0, "extra": 0.0}),
        ]

        compute_domination_counts(individuals, OBJECTIVES)

        assert [ind.domination_count for ind in individuals] == [0, 0]

    def test_missing_objective_is_fatal(self, four_individuals):
        del four_individuals[2].fitness["f2"]

        with pytest.raises(DominationError, match="f2"):
            compute_domination_counts(four_individuals, OBJECTIVES)

    def test_non_numeric_fitness_is_fatal(self, four_individuals):
        four_individuals[1].fitness["f1"] = "bad"

        with pytest.raises(DominationError):
            compute_domination_counts(four_individuals, OBJECTIVES)

    def test_empty_set(self):
        assert compute_domination_counts([], OBJECTIVES) == []
