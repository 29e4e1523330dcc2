"""
Evolution Operators - Selection, Crossover & Mutation

This module implements the genetic operators that drive the bit-string search:
- Selection: choose survivors and parents from a pool
- Crossover: combine two parents into one child, with leftover handling
- Mutation: add, remove or flip a single gene in place

Every operator draws from the random generator it is given; the orchestrator
passes the same instance to all of them so a run is reproducible from one seed.

Author: evobit developers
Python: 3.11+
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Sequence

from loguru import logger

from evobit.exceptions import SelectionError, UnsupportedStrategyError
from .individual import Individual
from .strategies import (
    CrossoverLeftoverStrategy,
    CrossoverStrategy,
    MutationStrategy,
    SelectionStrategy,
)


# =============================================================================
# Selection Operator
# =============================================================================


@dataclass
class SelectionConfig:
    """Configuration for selection."""

    strategy: SelectionStrategy = SelectionStrategy.ELITISM
    tournament_size: int | None = None   # Required for TOURNAMENT

    def validate(self) -> tuple[bool, list[str]]:
        """Validate configuration."""
        errors = []

        if self.strategy == SelectionStrategy.TOURNAMENT:
            if self.tournament_size is None:
                errors.append("tournament_size is required for TOURNAMENT selection")
            elif self.tournament_size < 1:
                errors.append("tournament_size must be >= 1")

        return (len(errors) == 0, errors)


class SelectionOperator:
    """Chooses individuals from a pool according to the configured strategy."""

    def __init__(self, config: SelectionConfig, rng: random.Random):
        """
        Initialize selection operator.

        Args:
            config: Selection configuration
            rng: Shared random generator
        """
        self.config = config
        self.rng = rng

        is_valid, errors = self.config.validate()
        if not is_valid:
            raise ValueError(f"Invalid selection config: {', '.join(errors)}")

    def select(self, pool: Sequence[Individual], count: int) -> list[Individual]:
        """
        Select ``count`` individuals from ``pool``.

        ELITISM returns distinct individuals sorted by descending fitness;
        ROULETTE and TOURNAMENT sample with replacement. The pool itself is
        never reordered.

        Args:
            pool: Candidates
            count: Number of individuals to return

        Returns:
            Selected individuals (same objects as in the pool)
        """
        if count < 0:
            raise SelectionError(f"Cannot select a negative number of individuals ({count})")
        if count == 0:
            return []
        if not pool:
            raise SelectionError(f"Cannot select {count} individuals from an empty pool")

        match self.config.strategy:
            case SelectionStrategy.ELITISM:
                return self._elitism_selection(pool, count)

            case SelectionStrategy.ROULETTE:
                return self._roulette_selection(pool, count)

            case SelectionStrategy.TOURNAMENT:
                return self._tournament_selection(pool, count)

            case _:
                raise UnsupportedStrategyError("selection strategy", self.config.strategy)

    def _elitism_selection(self, pool: Sequence[Individual], count: int) -> list[Individual]:
        """Fittest first; equal fitness keeps pool order (stable sort)."""
        if count > len(pool):
            raise SelectionError(
                f"ELITISM cannot select {count} distinct individuals from a pool of {len(pool)}"
            )
        return sorted(pool, key=lambda ind: ind.fitness, reverse=True)[:count]

    def _roulette_selection(self, pool: Sequence[Individual], count: int) -> list[Individual]:
        """Fitness-proportional selection with replacement."""
        total_fitness = sum(ind.fitness for ind in pool)

        # Length penalties can push the total to zero or below
        if total_fitness <= 0:
            logger.debug(
                "Non-positive total fitness, sampling uniformly",
                total_fitness=total_fitness,
            )
            return [self.rng.choice(pool) for _ in range(count)]

        winners = []
        for _ in range(count):
            spin = self.rng.randrange(total_fitness)
            cumulative = 0
            for individual in pool:
                cumulative += individual.fitness
                if cumulative >= spin:
                    winners.append(individual)
                    break
        return winners

    def _tournament_selection(self, pool: Sequence[Individual], count: int) -> list[Individual]:
        """One winner per round: the fittest of ``tournament_size`` shuffled contestants."""
        tournament_size = self.config.tournament_size
        if tournament_size > len(pool):
            raise SelectionError(
                f"tournament_size ({tournament_size}) exceeds pool size ({len(pool)})"
            )

        contestants = list(pool)
        winners = []
        for _ in range(count):
            self.rng.shuffle(contestants)
            winners.append(max(contestants[:tournament_size], key=lambda ind: ind.fitness))
        return winners


# =============================================================================
# Crossover Operator
# =============================================================================


@dataclass
class CrossoverConfig:
    """Configuration for crossover operations."""

    strategy: CrossoverStrategy = CrossoverStrategy.ONE_POINT
    leftover_strategy: CrossoverLeftoverStrategy = (
        CrossoverLeftoverStrategy.KEEP_ALL_OR_NOTHING_RANDOMLY
    )


class CrossoverOperator:
    """Combines two parent individuals into one child."""

    def __init__(self, config: CrossoverConfig, rng: random.Random):
        """
        Initialize crossover operator.

        Args:
            config: Crossover configuration
            rng: Shared random generator
        """
        self.config = config
        self.rng = rng

    def crossover(self, parent1: Individual, parent2: Individual) -> Individual:
        """
        Perform crossover between two parents.

        If either parent has at most one gene there is nothing to cut, and a
        copy of the fitter parent is returned (the first parent wins ties).

        Args:
            parent1: First parent
            parent2: Second parent

        Returns:
            New child individual (fitness not yet evaluated)
        """
        if parent1.genome_length <= 1 or parent2.genome_length <= 1:
            fitter = parent2 if parent2.fitness > parent1.fitness else parent1
            return fitter.clone()

        genome1 = parent1.genome
        genome2 = parent2.genome
        min_length = min(len(genome1), len(genome2))

        match self.config.strategy:
            case CrossoverStrategy.ONE_POINT:
                return Individual(self._one_point(genome1, genome2, min_length))

            case CrossoverStrategy.TWO_POINT:
                return Individual(self._two_point(genome1, genome2, min_length))

            case CrossoverStrategy.UNIFORM:
                child_genome = self._uniform(genome1, genome2, min_length)

            case CrossoverStrategy.ARITHMETIC:
                child_genome = [genome1[i] ^ genome2[i] for i in range(min_length)]

            case _:
                raise UnsupportedStrategyError("crossover strategy", self.config.strategy)

        child_genome.extend(self._leftovers(parent1, parent2, min_length))
        return Individual(child_genome)

    def _one_point(self, genome1: list[int], genome2: list[int], min_length: int) -> list[int]:
        """
        Head of the first parent, tail of the second, cut in [0, min_length - 2].

        The second parent is read only up to ``min_length``; any genes it has
        beyond that are dropped so the child is exactly ``min_length`` long.
        """
        cut = self.rng.randrange(min_length - 1)
        return genome1[:cut] + genome2[cut:min_length]

    def _two_point(self, genome1: list[int], genome2: list[int], min_length: int) -> list[int]:
        """Middle segment from the second parent, ends from the first."""
        cut1 = self.rng.randint(1, min_length - 1)
        cut2 = self.rng.randint(cut1, min_length - 1)
        return genome1[:cut1] + genome2[cut1:cut2] + genome1[cut2:min_length]

    def _uniform(self, genome1: list[int], genome2: list[int], min_length: int) -> list[int]:
        """
        Position-by-position choice with fixed quotas per parent.

        Each parent contributes ``min_length // 2`` genes; the odd one goes to
        a coin-chosen side. At every position the first parent is picked with
        probability proportional to its remaining quota.
        """
        quota1 = quota2 = min_length // 2
        if self.rng.random() < 0.5:
            quota1 += min_length % 2
        else:
            quota2 += min_length % 2

        child = []
        for i in range(min_length):
            if self.rng.random() * (quota1 + quota2) < quota1:
                child.append(genome1[i])
                quota1 -= 1
            else:
                child.append(genome2[i])
                quota2 -= 1
        return child

    def _leftovers(self, parent1: Individual, parent2: Individual, min_length: int) -> list[int]:
        """Genes kept from the longer parent's tail beyond ``min_length``."""
        longer = parent1 if parent1.genome_length > parent2.genome_length else parent2
        tail = longer.genome[min_length:]
        if not tail:
            return []

        match self.config.leftover_strategy:
            case CrossoverLeftoverStrategy.KEEP_ALL_OR_NOTHING_RANDOMLY:
                return tail if self.rng.random() < 0.5 else []

            case CrossoverLeftoverStrategy.KEEP_ONE_OR_NOT_RANDOMLY:
                return [gene for gene in tail if self.rng.random() < 0.5]

            case CrossoverLeftoverStrategy.KEEP_ONLY_FROM_FITTEST_PARENT:
                fitter = parent1 if parent1.fitness >= parent2.fitness else parent2
                return fitter.genome[min_length:]

            case _:
                raise UnsupportedStrategyError(
                    "crossover leftover strategy", self.config.leftover_strategy
                )


# =============================================================================
# Mutation Operator
# =============================================================================


@dataclass
class MutationConfig:
    """Configuration for mutation operations."""

    mutation_rate: float = 0.0    # Probability an individual gets a mutation attempt
    bit_add_rate: float = 0.0     # Probability an ADD attempt takes effect
    bit_remove_rate: float = 0.0  # Probability a REMOVE attempt takes effect
    bit_flip_rate: float = 0.0    # Probability a FLIP attempt takes effect

    def validate(self) -> tuple[bool, list[str]]:
        """Validate configuration."""
        errors = []

        for name in ("mutation_rate", "bit_add_rate", "bit_remove_rate", "bit_flip_rate"):
            value = getattr(self, name)
            if not (0.0 <= value <= 1.0):
                errors.append(f"{name} must be in [0, 1]")

        return (len(errors) == 0, errors)


@dataclass
class MutationOutcome:
    """What the last ``mutate`` call did."""

    attempted: bool = False
    strategy: MutationStrategy | None = None
    applied: bool = False
    index: int | None = None


class MutationOperator:
    """Edits one individual's genome in place."""

    def __init__(self, config: MutationConfig, rng: random.Random):
        """
        Initialize mutation operator.

        Args:
            config: Mutation configuration
            rng: Shared random generator
        """
        self.config = config
        self.rng = rng
        self.last_outcome = MutationOutcome()

        is_valid, errors = self.config.validate()
        if not is_valid:
            raise ValueError(f"Invalid mutation config: {', '.join(errors)}")

    def mutate(self, individual: Individual) -> Individual:
        """
        Possibly mutate ``individual`` in place.

        An outer roll against ``mutation_rate`` decides whether to try at all.
        Then ADD, REMOVE or FLIP is picked uniformly and must pass its own rate.

        Args:
            individual: Individual to edit

        Returns:
            The same individual
        """
        self.last_outcome = MutationOutcome()
        if self.rng.random() >= self.config.mutation_rate:
            return individual

        strategy = self.rng.choice(list(MutationStrategy))
        self.last_outcome = MutationOutcome(attempted=True, strategy=strategy)

        match strategy:
            case MutationStrategy.ADD:
                if self.rng.random() < self.config.bit_add_rate:
                    individual.add_gene(self.rng.randint(0, 1))
                    self._applied(individual.genome_length - 1)

            case MutationStrategy.REMOVE:
                if self.rng.random() < self.config.bit_remove_rate:
                    # Never shrink to an empty genome
                    if individual.genome_length > 1:
                        index = self.rng.randrange(individual.genome_length)
                        individual.remove_gene(index)
                        self._applied(index)

            case MutationStrategy.FLIP:
                if self.rng.random() < self.config.bit_flip_rate:
                    index = self.rng.randrange(individual.genome_length)
                    individual.set_gene(index, self.rng.randint(0, 1))
                    self._applied(index)

            case _:
                raise UnsupportedStrategyError("mutation strategy", strategy)

        return individual

    def _applied(self, index: int) -> None:
        self.last_outcome.applied = True
        self.last_outcome.index = index


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    "SelectionConfig",
    "SelectionOperator",
    "CrossoverConfig",
    "CrossoverOperator",
    "MutationConfig",
    "MutationOutcome",
    "MutationOperator",
]
