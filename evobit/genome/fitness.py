"""
Fitness Evaluation Module

Scores a genome against the target bit-string:

    fitness = matching positions over the common prefix
              - abs(len(genome) - len(target))

The length penalty rewards content accuracy and punishes both over- and
under-length genomes, so fitness may be negative. The maximum,
``len(target)``, is reached only by an exact match.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from .individual import Individual


def compute_fitness(genome: Sequence[int], target: Sequence[int]) -> int:
    """
    Score a genome against the target.

    Args:
        genome: Candidate genes
        target: Target genes

    Returns:
        Integer fitness (higher is better)
    """
    overlap = min(len(genome), len(target))
    matching = sum(1 for i in range(overlap) if genome[i] == target[i])
    return matching - abs(len(genome) - len(target))


class FitnessEvaluator:
    """Evaluates individuals against a fixed target solution."""

    def __init__(self, target: Iterable[int]):
        self.target: tuple[int, ...] = tuple(target)
        if not self.target:
            raise ValueError("Target solution must contain at least one gene")

    @property
    def max_fitness(self) -> int:
        """Fitness of an exact match."""
        return len(self.target)

    def evaluate(self, individual: Individual) -> int:
        """Compute, store and return the fitness of ``individual``."""
        individual.fitness = compute_fitness(individual.genome, self.target)
        return individual.fitness

    def evaluate_all(self, individuals: Iterable[Individual]) -> None:
        for individual in individuals:
            self.evaluate(individual)

    def is_solution(self, individual: Individual) -> bool:
        return individual.matches(self.target)


__all__ = ["compute_fitness", "FitnessEvaluator"]
