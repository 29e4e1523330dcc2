"""
Population Management for Bit-String Evolution

This module holds one generation of individuals:
- Random initialization (variable or fixed genome length)
- Wrapping survivors + children into the next generation
- Fitness evaluation against the target on construction
- Population statistics

A population is never edited once the orchestrator has moved on; each
generation builds a new one.

Author: evobit developers
Python: 3.11+
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, Sequence

from loguru import logger

from evobit.exceptions import EmptyPopulationError
from .fitness import FitnessEvaluator
from .individual import Individual


# =============================================================================
# Population Statistics
# =============================================================================


@dataclass
class PopulationStatistics:
    """Statistics about one generation."""

    generation: int
    population_size: int

    # Fitness statistics
    avg_fitness: float
    max_fitness: int
    min_fitness: int
    std_fitness: float

    # Genome shape
    avg_genome_length: float
    min_genome_length: int
    max_genome_length: int

    # Diversity metrics
    unique_genomes: int
    diversity_score: float

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "generation": self.generation,
            "population_size": self.population_size,
            "avg_fitness": self.avg_fitness,
            "max_fitness": self.max_fitness,
            "min_fitness": self.min_fitness,
            "std_fitness": self.std_fitness,
            "avg_genome_length": self.avg_genome_length,
            "min_genome_length": self.min_genome_length,
            "max_genome_length": self.max_genome_length,
            "unique_genomes": self.unique_genomes,
            "diversity_score": self.diversity_score,
        }

    @classmethod
    def from_dict(cls, data: dict) -> PopulationStatistics:
        return cls(**data)


# =============================================================================
# Population
# =============================================================================


class Population:
    """
    An ordered collection of individuals evaluated against one target.

    Construction modes:
    - ``Population(target, individuals)`` wraps an existing list
    - ``Population.random(...)`` draws genome lengths from a range
    - ``Population.fixed_length(...)`` uses one genome length for everybody

    All three compute fitness immediately.
    """

    def __init__(self, target: Sequence[int], individuals: Iterable[Individual]):
        """
        Wrap individuals into a population and evaluate them.

        Args:
            target: Target solution used for fitness
            individuals: Members of the population (taken over, not copied)
        """
        self.evaluator = FitnessEvaluator(target)
        self._individuals: list[Individual] = list(individuals)
        self.update_fitness()

    @classmethod
    def random(
        cls,
        target: Sequence[int],
        size: int,
        min_genome_length: int,
        max_genome_length: int,
        rng: random.Random,
    ) -> Population:
        """
        Create ``size`` random individuals with lengths in
        ``[min_genome_length, max_genome_length]``.

        Args:
            target: Target solution
            size: Number of individuals
            min_genome_length: Shortest genome to generate
            max_genome_length: Longest genome to generate
            rng: Shared random generator

        Returns:
            Evaluated population
        """
        if min_genome_length > max_genome_length:
            raise ValueError(
                f"min_genome_length ({min_genome_length}) must be <= "
                f"max_genome_length ({max_genome_length})"
            )
        individuals = [
            Individual(random_genome(rng.randint(min_genome_length, max_genome_length), rng))
            for _ in range(size)
        ]
        population = cls(target, individuals)

        logger.debug(
            "Random population created",
            size=size,
            min_genome_length=min_genome_length,
            max_genome_length=max_genome_length,
        )
        return population

    @classmethod
    def fixed_length(
        cls,
        target: Sequence[int],
        size: int,
        genome_length: int,
        rng: random.Random,
    ) -> Population:
        """Create ``size`` random individuals that all have ``genome_length`` genes."""
        return cls.random(target, size, genome_length, genome_length, rng)

    @property
    def target(self) -> tuple[int, ...]:
        return self.evaluator.target

    @property
    def individuals(self) -> list[Individual]:
        """Members in population order (a new list, same objects)."""
        return list(self._individuals)

    @property
    def size(self) -> int:
        return len(self._individuals)

    def update_fitness(self) -> None:
        """Recompute the fitness of every member against the target."""
        self.evaluator.evaluate_all(self._individuals)

    def fittest(self) -> Individual:
        """
        Member with the highest fitness (earliest wins ties).

        Raises:
            EmptyPopulationError: If the population has no members
        """
        if not self._individuals:
            raise EmptyPopulationError("Cannot find fittest individual in an empty population")
        return max(self._individuals, key=lambda ind: ind.fitness)

    def find_solution(self) -> Individual | None:
        """First member whose genome equals the target, if any."""
        for individual in self._individuals:
            if self.evaluator.is_solution(individual):
                return individual
        return None

    def contains_solution(self) -> bool:
        return self.find_solution() is not None

    def compute_statistics(self, generation: int) -> PopulationStatistics:
        """
        Compute population statistics.

        Args:
            generation: Generation number this population belongs to

        Returns:
            Population statistics
        """
        if not self._individuals:
            return PopulationStatistics(
                generation=generation,
                population_size=0,
                avg_fitness=0.0,
                max_fitness=0,
                min_fitness=0,
                std_fitness=0.0,
                avg_genome_length=0.0,
                min_genome_length=0,
                max_genome_length=0,
                unique_genomes=0,
                diversity_score=0.0,
            )

        fitness_values = [ind.fitness for ind in self._individuals]
        lengths = [ind.genome_length for ind in self._individuals]
        count = len(fitness_values)

        avg_fitness = sum(fitness_values) / count
        variance = sum((f - avg_fitness) ** 2 for f in fitness_values) / count

        unique_genomes = len({ind.bitstring() for ind in self._individuals})

        return PopulationStatistics(
            generation=generation,
            population_size=count,
            avg_fitness=avg_fitness,
            max_fitness=max(fitness_values),
            min_fitness=min(fitness_values),
            std_fitness=variance ** 0.5,
            avg_genome_length=sum(lengths) / count,
            min_genome_length=min(lengths),
            max_genome_length=max(lengths),
            unique_genomes=unique_genomes,
            diversity_score=unique_genomes / count,
        )

    def __len__(self) -> int:
        return len(self._individuals)

    def __iter__(self):
        return iter(self._individuals)

    def __repr__(self) -> str:
        return f"Population(size={self.size}, target_length={len(self.target)})"


def random_genome(length: int, rng: random.Random) -> list[int]:
    """Uniformly random genes drawn from the shared generator."""
    return [rng.randint(0, 1) for _ in range(length)]


__all__ = [
    "PopulationStatistics",
    "Population",
    "random_genome",
]
