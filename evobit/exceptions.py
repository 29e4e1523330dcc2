"""
Exception hierarchy for evobit.

Every error raised by the engine derives from :class:`EvobitError`. The
families also subclass the closest builtin so callers that only know about
``ValueError`` / ``LookupError`` / ``IndexError`` keep working.
"""


class EvobitError(Exception):
    """Base for all evobit exceptions."""

    pass


class ConfigurationError(EvobitError, ValueError):
    """Invalid or unloadable configuration."""

    pass


class UnsupportedStrategyError(ConfigurationError):
    """Raised when a strategy value has no operator implementation."""

    def __init__(self, family: str, value: object):
        self.family = family
        self.value = value
        super().__init__(f"Unsupported {family}: {value!r}")


class SelectionError(EvobitError, ValueError):
    """Selection request that cannot be satisfied by the pool."""

    pass


class EmptyPopulationError(EvobitError, LookupError):
    """Raised when asking an empty population for its fittest individual."""

    pass


class GeneIndexError(EvobitError, IndexError):
    """Gene index outside of the genome."""

    pass


class EvolutionError(EvobitError):
    """Evolution process misuse."""

    pass


__all__ = [
    "EvobitError",
    "ConfigurationError",
    "UnsupportedStrategyError",
    "SelectionError",
    "EmptyPopulationError",
    "GeneIndexError",
    "EvolutionError",
]
