"""
Evolution Orchestrator

Drives the generation loop of the bit-string search.

Features:
- One random generator shared by the population and every operator
- Exact-match termination check at the start of each generation
- Survivor selection, parent/child mutation, crossover breeding
- Per-generation statistics in an EvolutionHistory

Author: evobit developers
Python: 3.11+
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any

from loguru import logger

from evobit.config import GAConfig
from evobit.exceptions import EvolutionError
from evobit.genome import (
    CrossoverOperator,
    EvolutionHistory,
    Individual,
    MutationOperator,
    Population,
    SelectionOperator,
)
from evobit.monitoring.logging_config import (
    LogContext,
    log_evolution_complete,
    log_evolution_generation,
    log_evolution_start,
)


# =============================================================================
# States & Results
# =============================================================================


class OrchestratorState(str, Enum):
    """Lifecycle of an orchestrator."""

    RUNNING = "RUNNING"
    TERMINATED_SUCCESS = "TERMINATED_SUCCESS"
    TERMINATED_EXHAUSTED = "TERMINATED_EXHAUSTED"


class TerminationKind(str, Enum):
    """Why a run stopped."""

    SUCCESS = "SUCCESS"      # A genome matched the target
    EXHAUSTED = "EXHAUSTED"  # Generation budget used up


@dataclass
class EvolutionResult:
    """Outcome of a run."""

    fittest: Individual
    generation: int
    termination: TerminationKind
    history: EvolutionHistory
    elapsed_seconds: float

    @property
    def succeeded(self) -> bool:
        return self.termination == TerminationKind.SUCCESS

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "fittest": self.fittest.to_dict(),
            "generation": self.generation,
            "termination": self.termination.value,
            "elapsed_seconds": self.elapsed_seconds,
            "summary": self.history.compute_summary(),
        }


# =============================================================================
# Evolution Orchestrator
# =============================================================================


class EvolutionOrchestrator:
    """
    Run the genetic algorithm described by a GAConfig.

    Each generation:
    1. Stop if any genome equals the target
    2. Select ``elite_count`` survivors
    3. Mutate survivors (PARENTS / BOTH)
    4. Breed children from survivor pairs, mutate them (CHILDREN / BOTH)
    5. Replace the population with survivors + children
    """

    def __init__(self, config: GAConfig, rng: random.Random | None = None):
        """
        Initialize evolution orchestrator.

        Args:
            config: Genetic algorithm configuration
            rng: Random generator to use; a new one seeded from the config if None
        """
        self.config = config
        self.rng = rng if rng is not None else random.Random(config.seed)
        self.target: tuple[int, ...] = tuple(config.solution)
        self.elite_count = config.elite_count

        # Operators share the orchestrator's generator
        self.selection = SelectionOperator(config.selection_config(), self.rng)
        self.crossover = CrossoverOperator(config.crossover_config(), self.rng)
        self.mutation = MutationOperator(config.mutation_config(), self.rng)

        self.population = Population.random(
            self.target,
            config.population_size,
            config.min_genome_length,
            config.max_genome_length,
            self.rng,
        )

        # State
        self.state = OrchestratorState.RUNNING
        self.current_generation = 0
        self.history = EvolutionHistory()
        self._result: EvolutionResult | None = None

        logger.info(
            "Initialized EvolutionOrchestrator",
            population_size=config.population_size,
            max_generation=config.max_generation,
            elite_count=self.elite_count,
            selection=config.selection_strategy.value,
            crossover=config.crossover_strategy.value,
            seed=config.seed,
        )

    def run(self) -> EvolutionResult:
        """
        Run the evolution until a match is found or the budget is spent.

        Returns:
            Result with the fittest individual, generation and termination kind

        Raises:
            EvolutionError: If the orchestrator has already run
        """
        if self.state != OrchestratorState.RUNNING or self._result is not None:
            raise EvolutionError("Orchestrator has already run; create a new one for another run")

        max_generation = self.config.max_generation
        log_evolution_start(
            max_generation + 1,
            self.config.population_size,
            self.elite_count,
            self.config.seed,
        )
        start_time = time.time()

        for generation in range(max_generation + 1):
            self.current_generation = generation
            gen_start = time.time()

            with LogContext(phase="evolution", generation=generation):
                self._record(generation)

                if self.population.contains_solution():
                    return self._finish(TerminationKind.SUCCESS, generation, start_time)

                mutations, crossovers = self._run_generation()

            self.history.update_operator_counts(generation, mutations, crossovers)
            record = self.history.get_generation_record(generation)
            log_evolution_generation(
                generation,
                record.best_fitness,
                record.statistics.avg_fitness,
                record.statistics.unique_genomes,
                time.time() - gen_start,
            )

        # Budget spent; the last bred population is recorded but not searched
        final_generation = max_generation + 1
        self.current_generation = final_generation
        self._record(final_generation)
        return self._finish(TerminationKind.EXHAUSTED, final_generation, start_time)

    def _run_generation(self) -> tuple[int, int]:
        """
        Build the next population from the current one.

        Returns:
            (mutations applied, crossovers performed)
        """
        target_strategy = self.config.mutation_target_strategy
        mutations = 0

        # Clones keep survivors independent from the outgoing population
        # and from each other when selection returns duplicates
        survivors = [
            individual.clone()
            for individual in self.selection.select(self.population.individuals, self.elite_count)
        ]

        if target_strategy.mutates_parents:
            for survivor in survivors:
                self.mutation.mutate(survivor)
                mutations += self.mutation.last_outcome.applied

        children: list[Individual] = []
        while len(survivors) + len(children) < self.config.population_size:
            parent1, parent2 = self.selection.select(survivors, 2)
            child = self.crossover.crossover(parent1, parent2)

            if target_strategy.mutates_children:
                self.mutation.mutate(child)
                mutations += self.mutation.last_outcome.applied

            children.append(child)

        self.population = Population(self.target, survivors + children)
        logger.debug(
            "Next generation bred",
            survivors=len(survivors),
            children=len(children),
            mutations=mutations,
        )
        return mutations, len(children)

    def _record(self, generation: int) -> None:
        statistics = self.population.compute_statistics(generation)
        self.history.record_generation(generation, statistics, self.population.fittest())

    def _finish(
        self,
        termination: TerminationKind,
        generation: int,
        start_time: float,
    ) -> EvolutionResult:
        elapsed = time.time() - start_time
        fittest = self.population.fittest()

        match termination:
            case TerminationKind.SUCCESS:
                self.state = OrchestratorState.TERMINATED_SUCCESS
                logger.success(f"Solution found in generation {generation}")
            case TerminationKind.EXHAUSTED:
                self.state = OrchestratorState.TERMINATED_EXHAUSTED
                logger.warning(
                    f"No solution found in {self.config.max_generation + 1} generations",
                    best_fitness=fittest.fitness,
                )

        log_evolution_complete(
            termination.value, generation, fittest.bitstring(), fittest.fitness, elapsed
        )

        self._result = EvolutionResult(
            fittest=fittest,
            generation=generation,
            termination=termination,
            history=self.history,
            elapsed_seconds=elapsed,
        )
        return self._result

    @property
    def result(self) -> EvolutionResult | None:
        return self._result

    def get_statistics(self) -> dict[str, Any]:
        """
        Get run statistics.

        Returns:
            Statistics dictionary
        """
        return {
            "state": self.state.value,
            "current_generation": self.current_generation,
            "population_size": self.population.size,
            "elite_count": self.elite_count,
            "best_fitness": self.population.fittest().fitness,
            "history": self.history.compute_summary(),
        }


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    "EvolutionOrchestrator",
    "EvolutionResult",
    "OrchestratorState",
    "TerminationKind",
]
