"""
evobit - Evolutionary search for target bit-strings

A genetic algorithm over variable-length bit-strings with pluggable
selection, crossover and mutation operators.
"""

# Core genome system
from evobit.genome import (
    Individual,
    Population,
    PopulationStatistics,
    FitnessEvaluator,
    SelectionOperator,
    CrossoverOperator,
    MutationOperator,
    SelectionStrategy,
    CrossoverStrategy,
    CrossoverLeftoverStrategy,
    MutationStrategy,
    MutationTargetStrategy,
    EvolutionHistory,
)

# Configuration
from evobit.config import (
    EvobitConfig,
    GAConfig,
    LoggingConfig,
    load_config,
)

# Orchestrator
from evobit.orchestrator import (
    EvolutionOrchestrator,
    EvolutionResult,
    OrchestratorState,
    TerminationKind,
)

# Errors
from evobit.exceptions import (
    EvobitError,
    ConfigurationError,
    UnsupportedStrategyError,
    SelectionError,
    EmptyPopulationError,
    GeneIndexError,
    EvolutionError,
)

__all__ = [
    # Genome system
    "Individual",
    "Population",
    "PopulationStatistics",
    "FitnessEvaluator",
    "SelectionOperator",
    "CrossoverOperator",
    "MutationOperator",
    "SelectionStrategy",
    "CrossoverStrategy",
    "CrossoverLeftoverStrategy",
    "MutationStrategy",
    "MutationTargetStrategy",
    "EvolutionHistory",
    # Configuration
    "EvobitConfig",
    "GAConfig",
    "LoggingConfig",
    "load_config",
    # Orchestrator
    "EvolutionOrchestrator",
    "EvolutionResult",
    "OrchestratorState",
    "TerminationKind",
    # Errors
    "EvobitError",
    "ConfigurationError",
    "UnsupportedStrategyError",
    "SelectionError",
    "EmptyPopulationError",
    "GeneIndexError",
    "EvolutionError",
]

__version__ = "0.1.0"
