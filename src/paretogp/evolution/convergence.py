"""Early-stopping policies keyed by the primary objective.

Accuracy-style objectives stop once the best score passes 0.999. ROC-style
objectives stop at 0.99, or after 15 consecutive generations whose best score
is bit-identical to the previous generation's. Objectives without a policy
run for the full generation budget.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

logger = logging.getLogger(__name__)

PLATEAU_GENERATIONS = 15


@dataclass(frozen=True)
class ConvergencePolicy:
    """Stopping rule for one objective.

    Attributes:
        threshold: Stop once the best score exceeds this value (None disables)
        plateau_generations: Stop after this many unchanged generations (None disables)
    """

    threshold: float | None = None
    plateau_generations: int | None = None


ACCURACY_POLICY = ConvergencePolicy(threshold=0.999)
ROC_POLICY = ConvergencePolicy(threshold=0.99, plateau_generations=PLATEAU_GENERATIONS)

CONVERGENCE_POLICIES: Mapping[str, ConvergencePolicy] = MappingProxyType({
    "sr_accuracy": ACCURACY_POLICY,
    "sr_accuracy_dual": ACCURACY_POLICY,
    "sr_correlation": ACCURACY_POLICY,
    "sr_correlation_dual": ACCURACY_POLICY,
    "sr_roc": ROC_POLICY,
})


@dataclass
class ConvergenceState:
    """Mutable plateau tracking, owned by the engine state."""

    last_fitness: float | None = None
    plateau_counter: int = 0


class ConvergenceMonitor:
    """Decide after each generation whether the search should stop."""

    def __init__(
        self,
        objective: str,
        policy: ConvergencePolicy | None = None,
        policies: Mapping[str, ConvergencePolicy] | None = None,
    ):
        """Initialize monitor.

        Args:
            objective: Primary objective name
            policy: Explicit policy; looked up by objective name when omitted
            policies: Extra policies by objective name, layered over the
                built-in table for this monitor only
        """
        self.objective = objective
        self.policies = dict(CONVERGENCE_POLICIES)
        if policies:
            self.policies.update(policies)
        self.policy = policy if policy is not None else self.policies.get(objective)

    @property
    def enabled(self) -> bool:
        return self.policy is not None

    def update(self, state: ConvergenceState, best_score: float) -> str | None:
        """Feed one generation's best primary score.

        Args:
            state: Plateau state to update in place
            best_score: Best individual's score on the primary objective

        Returns:
            Stop reason, or None to keep going
        """
        if self.policy is None:
            return None

        reason = None

        if self.policy.plateau_generations is not None:
            if state.last_fitness is not None and best_score == state.last_fitness:
                state.plateau_counter += 1
            else:
                state.plateau_counter = 0
                state.last_fitness = best_score

            if state.plateau_counter >= self.policy.plateau_generations:
                reason = (
                    f"'{self.objective}' unchanged for "
                    f"{state.plateau_counter} generations"
                )

        if self.policy.threshold is not None and best_score > self.policy.threshold:
            reason = f"'{self.objective}' reached {best_score} > {self.policy.threshold}"

        if reason:
            logger.info(f"Convergence: {reason}")
        return reason
