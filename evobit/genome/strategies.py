"""
Strategy enumerations for the evolutionary operators.

Values equal member names so configuration files can spell them directly
(``selectionStrategy: TOURNAMENT``).
"""

from enum import Enum


class SelectionStrategy(str, Enum):
    """Strategies for choosing individuals from a pool."""

    ELITISM = "ELITISM"          # Fittest first, distinct
    ROULETTE = "ROULETTE"        # Fitness-proportional, with replacement
    TOURNAMENT = "TOURNAMENT"    # Best of a random group, one winner per round


class CrossoverStrategy(str, Enum):
    """Ways of combining two parent genomes."""

    ONE_POINT = "ONE_POINT"
    TWO_POINT = "TWO_POINT"
    UNIFORM = "UNIFORM"
    ARITHMETIC = "ARITHMETIC"    # Bitwise XOR of the parents


class CrossoverLeftoverStrategy(str, Enum):
    """What happens to the longer parent's tail after UNIFORM/ARITHMETIC."""

    KEEP_ALL_OR_NOTHING_RANDOMLY = "KEEP_ALL_OR_NOTHING_RANDOMLY"
    KEEP_ONE_OR_NOT_RANDOMLY = "KEEP_ONE_OR_NOT_RANDOMLY"
    KEEP_ONLY_FROM_FITTEST_PARENT = "KEEP_ONLY_FROM_FITTEST_PARENT"


class MutationStrategy(str, Enum):
    """Single-gene edits applied by the mutation operator."""

    ADD = "ADD"
    REMOVE = "REMOVE"
    FLIP = "FLIP"


class MutationTargetStrategy(str, Enum):
    """Which members of a generation are mutation candidates."""

    PARENTS = "PARENTS"
    CHILDREN = "CHILDREN"
    BOTH = "BOTH"

    @property
    def mutates_parents(self) -> bool:
        match self:
            case MutationTargetStrategy.PARENTS | MutationTargetStrategy.BOTH:
                return True
            case _:
                return False

    @property
    def mutates_children(self) -> bool:
        match self:
            case MutationTargetStrategy.CHILDREN | MutationTargetStrategy.BOTH:
                return True
            case _:
                return False


__all__ = [
    "SelectionStrategy",
    "CrossoverStrategy",
    "CrossoverLeftoverStrategy",
    "MutationStrategy",
    "MutationTargetStrategy",
]
