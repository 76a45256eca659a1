"""Engine configuration.

Runs are described by a Java-style ``.properties`` file, e.g.::

    pop_size = 500
    num_gens = 60
    fitness_op = sr_roc, subtree_complexity
    selection_op = crowded_tournament
    front_rank_method = euclidean
    plugins = mypackage.operators

Keys missing from the file keep the defaults below.
"""

import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator

from paretogp.evolution.best import BEST_PICKERS, FIRST_FITNESS
from paretogp.exceptions import ConfigurationError
from paretogp.operators.selection import SELECTION_STRATEGIES, TOURNAMENT

logger = logging.getLogger(__name__)


@dataclass
class EngineConfig:
    """Configuration for the generational engine.

    Attributes:
        population_size: Population size N, kept constant across generations
        n_generations: Last generation index; a full run steps 0..n_generations
        crossover_rate: Probability of the crossover branch
        mutation_rate: Probability of the mutation branch, on top of crossover_rate
            (capped at 1 - crossover_rate)
        tournament_size: Samples per tournament
        selection: ``tournament`` or ``crowded_tournament``
        best_policy: ``first_fitness`` or ``euclidean``
        objectives: Ordered objective identifiers; the first is primary
        initialize: Initializer identifier
        crossover: Crossover identifier
        mutate: Mutation identifier
        seed: Random seed (None = nondeterministic)
        models_path: Where the driver appends best-per-generation records
        plugins: Modules registering operators
    """

    population_size: int = 1000
    n_generations: int = 100
    crossover_rate: float = 0.7
    mutation_rate: float = 0.1
    tournament_size: int = 7
    selection: str = TOURNAMENT
    best_policy: str = FIRST_FITNESS
    objectives: list[str] = field(default_factory=list)
    initialize: str = "default"
    crossover: str = "default"
    mutate: str = "default"
    seed: int | None = None
    models_path: str | None = None
    plugins: list[str] = field(default_factory=list)

    def validate(self) -> "EngineConfig":
        """Check values, raising ConfigurationError on the first problem."""
        if self.population_size < 1:
            raise ConfigurationError(f"population_size must be >= 1, got {self.population_size}")
        if self.n_generations < 0:
            raise ConfigurationError(f"n_generations must be >= 0, got {self.n_generations}")
        for name in ("crossover_rate", "mutation_rate"):
            rate = getattr(self, name)
            if not 0.0 <= rate <= 1.0:
                raise ConfigurationError(f"{name} must be in [0, 1], got {rate}")
        if self.crossover_rate + self.mutation_rate <= 0.0:
            raise ConfigurationError("crossover_rate + mutation_rate must be positive")
        if self.tournament_size < 1:
            raise ConfigurationError(f"tournament_size must be >= 1, got {self.tournament_size}")
        if self.selection not in SELECTION_STRATEGIES:
            raise ConfigurationError(f"Invalid selection operator '{self.selection}'")
        if self.best_policy not in BEST_PICKERS:
            raise ConfigurationError(f"No such best selection method '{self.best_policy}'")
        if not self.objectives:
            raise ConfigurationError("At least one objective (fitness_op) is required")
        if len(set(self.objectives)) != len(self.objectives):
            raise ConfigurationError(f"Duplicate objectives in {self.objectives}")
        return self

    @property
    def primary_objective(self) -> str:
        return self.objectives[0]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_properties(cls, props: dict[str, str]) -> "EngineConfig":
        """Create config from parsed properties.

        Raises:
            ConfigurationError: If a value cannot be converted
        """
        kwargs: dict[str, Any] = {}
        for key, (attr, converter) in PROPERTY_KEYS.items():
            if key not in props:
                continue
            raw = props[key]
            try:
                kwargs[attr] = converter(raw)
            except ValueError:
                raise ConfigurationError(f"Invalid value for '{key}': {raw!r}") from None

        unknown = sorted(set(props) - set(PROPERTY_KEYS))
        if unknown:
            logger.debug(f"Ignoring unrecognised properties: {unknown}")

        return cls(**kwargs)


def _split_list(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def _optional_int(raw: str) -> int | None:
    return int(raw) if raw.strip() else None


PROPERTY_KEYS: dict[str, tuple[str, Callable[[str], Any]]] = {
    "pop_size": ("population_size", int),
    "num_gens": ("n_generations", int),
    "xover_rate": ("crossover_rate", float),
    "mutation_rate": ("mutation_rate", float),
    "tourney_size": ("tournament_size", int),
    "selection_op": ("selection", str.strip),
    "front_rank_method": ("best_policy", str.strip),
    "fitness_op": ("objectives", _split_list),
    "initialize_op": ("initialize", str.strip),
    "xover_op": ("crossover", str.strip),
    "mutate_op": ("mutate", str.strip),
    "seed": ("seed", _optional_int),
    "models_path": ("models_path", str.strip),
    "plugins": ("plugins", _split_list),
}

ENV_OVERRIDES: dict[str, tuple[str, Callable[[str], Any]]] = {
    "PARETOGP_SEED": ("seed", int),
    "PARETOGP_POP_SIZE": ("population_size", int),
    "PARETOGP_NUM_GENS": ("n_generations", int),
}


_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def _unescape(text: str) -> str:
    if "\\" not in text:
        return text
    chars = []
    i = 0
    while i < len(text):
        c = text[i]
        if c != "\\" or i + 1 == len(text):
            chars.append(c)
            i += 1
            continue
        escaped = text[i + 1]
        if escaped == "u":
            digits = text[i + 2 : i + 6]
            if len(digits) != 4:
                raise ValueError(f"malformed \\uxxxx escape in {text!r}")
            chars.append(chr(int(digits, 16)))
            i += 6
            continue
        chars.append(_ESCAPES.get(escaped, escaped))
        i += 2
    return "".join(chars)


def _logical_lines(lines: Iterable[str]) -> Iterator[tuple[int, str]]:
    """Join backslash-continued lines, skipping comments and blank lines."""
    pending = None
    start = 0
    for line_no, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n").lstrip()
        if pending is None:
            if not line or line[0] in "#!":
                continue
            start = line_no
            pending = ""

        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending += line[:-1]
            continue

        yield start, pending + line
        pending = None

    if pending is not None:
        yield start, pending


def _split_entry(line: str) -> tuple[str, str]:
    # The key ends at the first unescaped '=', ':' or whitespace
    i = 0
    while i < len(line):
        c = line[i]
        if c == "\\":
            i += 2
            continue
        if c in "=:" or c.isspace():
            break
        i += 1

    key = line[:i]
    rest = line[i:].lstrip()
    if rest and rest[0] in "=:":
        rest = rest[1:].lstrip()
    return _unescape(key), _unescape(rest.rstrip())


def load_properties(path: Path | str) -> dict[str, str]:
    """Read a ``.properties`` file into a dict.

    Follows the Java format: ``key = value``, ``key: value`` and ``key value``
    lines, ``#`` and ``!`` comments, blank lines, backslash line
    continuations and ``\\t \\n \\r \\f \\uXXXX`` escapes (any other escaped
    character stands for itself). Trailing whitespace on values is dropped.
    Later keys override earlier ones.

    Raises:
        ConfigurationError: On a malformed escape sequence
    """
    props: dict[str, str] = {}
    with open(path) as f:
        for line_no, line in _logical_lines(f):
            try:
                key, value = _split_entry(line)
            except ValueError as e:
                raise ConfigurationError(f"{path}:{line_no}: {e}") from None
            props[key] = value

    return props


def _apply_env_overrides(config: EngineConfig) -> None:
    for env_var, (attr, converter) in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value is None:
            continue
        try:
            setattr(config, attr, converter(value))
        except ValueError:
            raise ConfigurationError(f"Invalid value for {env_var}: {value!r}") from None


def load_config(path: Path | str) -> EngineConfig:
    """Load, override from the environment, and validate a configuration file."""
    config = EngineConfig.from_properties(load_properties(path))
    _apply_env_overrides(config)
    return config.validate()
