"""Exceptions raised by the evolutionary engine.

Every error here is fatal for the run. Only the top-level driver decides how the
process exits.
"""


class ParetoGPError(Exception):
    """Base class for all engine errors."""

    pass


class ConfigurationError(ParetoGPError, ValueError):
    """Raised for unknown operator identifiers or invalid configuration values."""

    pass


class DominationError(ParetoGPError):
    """Raised when an individual cannot be ranked (e.g. missing objective score)."""

    pass


class EvaluationError(ParetoGPError):
    """Raised when a fitness function breaks its contract."""

    pass


class OperatorError(ParetoGPError):
    """Raised when a genotype operator returns something unusable."""

    pass
