"""Tests for early-stopping policies."""

import pytest

from paretogp.evolution.convergence import (
    CONVERGENCE_POLICIES,
    PLATEAU_GENERATIONS,
    ConvergenceMonitor,
    ConvergencePolicy,
    ConvergenceState,
)


class TestThresholds:
    """Test score thresholds."""

    @pytest.mark.parametrize("objective", [
        "sr_accuracy", "sr_accuracy_dual", "sr_correlation", "sr_correlation_dual",
    ])
    def test_accuracy_style(self, objective):
        monitor = ConvergenceMonitor(objective)
        state = ConvergenceState()

        assert monitor.update(state, 0.999) is None
        assert monitor.update(state, 0.9995) is not None

    def test_roc(self):
        monitor = ConvergenceMonitor("sr_roc")
        state = ConvergenceState()

        assert monitor.update(state, 0.99) is None
        reason = monitor.update(state, 0.991)
        assert reason is not None
        assert "sr_roc" in reason

    def test_unknown_objective_never_stops(self):
        monitor = ConvergenceMonitor("subtree_complexity")
        state = ConvergenceState()

        assert not monitor.enabled
        for _ in range(50):
            assert monitor.update(state, 1.0) is None

    def test_accuracy_ignores_plateau(self):
        monitor = ConvergenceMonitor("sr_accuracy")
        state = ConvergenceState()

        for _ in range(PLATEAU_GENERATIONS * 2):
            assert monitor.update(state, 0.5) is None


class TestPlateau:
    """Test the unchanged-score rule."""

    def test_stops_after_fifteen_repeats(self):
        monitor = ConvergenceMonitor("sr_roc")
        state = ConvergenceState()

        # The first generation only records the score
        assert monitor.update(state, 0.8) is None
        for _ in range(PLATEAU_GENERATIONS - 1):
            assert monitor.update(state, 0.8) is None

        reason = monitor.update(state, 0.8)

        assert reason is not None
        assert state.plateau_counter == PLATEAU_GENERATIONS

    def test_tiny_change_resets(self):
        monitor = ConvergenceMonitor("sr_roc")
        state = ConvergenceState()

        for _ in range(10):
            monitor.update(state, 0.8)
        monitor.update(state, 0.8 + 1e-12)

        assert state.plateau_counter == 0
        assert state.last_fitness == 0.8 + 1e-12

    def test_zero_score_is_not_a_repeat_at_start(self):
        monitor = ConvergenceMonitor("sr_roc")
        state = ConvergenceState()

        monitor.update(state, 0.0)

        assert state.plateau_counter == 0
        assert state.last_fitness == 0.0

    def test_custom_policy(self):
        monitor = ConvergenceMonitor("anything", ConvergencePolicy(plateau_generations=2))
        state = ConvergenceState()

        assert monitor.update(state, 1.0) is None
        assert monitor.update(state, 1.0) is None
        assert monitor.update(state, 1.0) is not None


class TestPolicyTable:
    """Test that extra policies stay local to one monitor."""

    def test_extra_policy(self):
        monitor = ConvergenceMonitor(
            "mse", policies={"mse": ConvergencePolicy(threshold=0.5)}
        )

        assert monitor.enabled
        assert monitor.update(ConvergenceState(), 0.6) is not None

    def test_extra_policy_does_not_leak(self):
        ConvergenceMonitor("mse", policies={"mse": ConvergencePolicy(threshold=0.5)})

        assert not ConvergenceMonitor("mse").enabled
        assert "mse" not in CONVERGENCE_POLICIES

    def test_override_builtin(self):
        monitor = ConvergenceMonitor(
            "sr_accuracy", policies={"sr_accuracy": ConvergencePolicy(threshold=0.5)}
        )

        assert monitor.update(ConvergenceState(), 0.6) is not None
        assert ConvergenceMonitor("sr_accuracy").update(ConvergenceState(), 0.6) is None

    def test_builtin_table_is_read_only(self):
        with pytest.raises(TypeError):
            CONVERGENCE_POLICIES["mse"] = ConvergencePolicy(threshold=0.5)
