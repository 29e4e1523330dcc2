"""
evobit Genome Evolution System

This package implements the bit-string genome, its fitness against a target,
the population of candidates and the genetic operators that evolve it.

Author: evobit developers
Version: 0.1.0
"""

# Core data model
from .individual import Individual

# Fitness evaluation
from .fitness import (
    FitnessEvaluator,
    compute_fitness,
)

# Strategies
from .strategies import (
    SelectionStrategy,
    CrossoverStrategy,
    CrossoverLeftoverStrategy,
    MutationStrategy,
    MutationTargetStrategy,
)

# Evolution operators
from .operators import (
    SelectionConfig,
    SelectionOperator,
    CrossoverConfig,
    CrossoverOperator,
    MutationConfig,
    MutationOperator,
    MutationOutcome,
)

# Population management
from .population import (
    Population,
    PopulationStatistics,
    random_genome,
)

# Evolution history
from .history import (
    EvolutionHistory,
    GenerationRecord,
)

__version__ = "0.1.0"
__all__ = [
    # Data model
    "Individual",
    # Fitness
    "FitnessEvaluator",
    "compute_fitness",
    # Strategies
    "SelectionStrategy",
    "CrossoverStrategy",
    "CrossoverLeftoverStrategy",
    "MutationStrategy",
    "MutationTargetStrategy",
    # Operators
    "SelectionConfig",
    "SelectionOperator",
    "CrossoverConfig",
    "CrossoverOperator",
    "MutationConfig",
    "MutationOperator",
    "MutationOutcome",
    # Population
    "Population",
    "PopulationStatistics",
    "random_genome",
    # History
    "EvolutionHistory",
    "GenerationRecord",
]
