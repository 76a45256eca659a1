"""Named registry for the external genotype and fitness capabilities.

The engine never knows how genomes are built or scored. Plugins register
factories under string identifiers; the configuration refers to those
identifiers and every one of them is resolved when the engine is built, so a
typo fails before the first generation rather than halfway through a run.

Usage:
    registry = OperatorRegistry()
    registry.register("mutate", "gaussian", lambda config: GaussianMutation(0.1))
    mutate = registry.resolve("mutate", "gaussian", config)
"""

from __future__ import annotations

import importlib
import logging
from typing import Any, Callable, Iterable

from paretogp.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

INITIALIZE = "initialize"
CROSSOVER = "crossover"
MUTATE = "mutate"
FITNESS = "fitness"

OPERATOR_KINDS = (INITIALIZE, CROSSOVER, MUTATE, FITNESS)

Factory = Callable[[Any], Any]


class OperatorRegistry:
    """Maps (kind, identifier) to a factory taking the engine configuration."""

    def __init__(self):
        self._factories: dict[str, dict[str, Factory]] = {
            kind: {} for kind in OPERATOR_KINDS
        }
        self._loaded_plugins: set[str] = set()

    def register(self, kind: str, name: str, factory: Factory) -> None:
        """Register a factory.

        Args:
            kind: One of ``initialize``, ``crossover``, ``mutate``, ``fitness``
            name: Identifier used in configuration
            factory: Callable receiving the EngineConfig, returning the operator
        """
        self._check_kind(kind)
        if name in self._factories[kind]:
            logger.warning(f"Overwriting existing {kind} operator: {name}")
        self._factories[kind][name] = factory

    def names(self, kind: str) -> list[str]:
        self._check_kind(kind)
        return sorted(self._factories[kind])

    def __contains__(self, key: tuple[str, str]) -> bool:
        kind, name = key
        return name in self._factories.get(kind, {})

    def resolve(self, kind: str, name: str, config: Any = None) -> Any:
        """Instantiate the operator registered as ``name``.

        Raises:
            ConfigurationError: If no such operator is registered
        """
        self._check_kind(kind)
        try:
            factory = self._factories[kind][name]
        except KeyError:
            raise ConfigurationError(
                f"Invalid {kind} operator '{name}'. Valid: {self.names(kind)}"
            ) from None
        return factory(config)

    def resolve_objectives(self, names: Iterable[str], config: Any = None) -> dict[str, Any]:
        """Resolve fitness functions, keeping configuration order."""
        objectives = {}
        for name in names:
            if name in objectives:
                raise ConfigurationError(f"Objective '{name}' configured twice")
            objectives[name] = self.resolve(FITNESS, name, config)
        return objectives

    def load_plugins(self, modules: Iterable[str]) -> None:
        """Import plugin modules and call their ``register(registry)`` hook.

        Raises:
            ConfigurationError: If a module cannot be imported or has no hook
        """
        for module_name in modules:
            if module_name in self._loaded_plugins:
                continue
            try:
                module = importlib.import_module(module_name)
            except ImportError as e:
                raise ConfigurationError(f"Cannot import plugin '{module_name}': {e}") from e

            hook = getattr(module, "register", None)
            if not callable(hook):
                raise ConfigurationError(
                    f"Plugin '{module_name}' has no register(registry) function"
                )
            hook(self)
            self._loaded_plugins.add(module_name)
            logger.info(f"Loaded plugin {module_name}")

    def _check_kind(self, kind: str) -> None:
        if kind not in self._factories:
            raise ConfigurationError(
                f"Unknown operator kind '{kind}'. Valid: {list(OPERATOR_KINDS)}"
            )


default_registry = OperatorRegistry()
