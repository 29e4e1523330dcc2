"""
Evolution History Tracking

This module records what happened in every generation of a run:
- Generation records (statistics, best genome, operator counts)
- Fitness progression over time
- Summary and JSON report export

Only statistics and the best genome per generation are kept; populations
themselves are not stored.

Author: evobit developers
Python: 3.11+
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from loguru import logger

from .individual import Individual
from .population import PopulationStatistics


# =============================================================================
# Generation Record
# =============================================================================


@dataclass
class GenerationRecord:
    """
    Record of a single generation.

    Captures:
    - Generation metadata
    - Population statistics
    - Best genome of the generation
    - How many mutations and crossovers produced the next one
    """

    generation: int
    timestamp: str

    # Statistics
    statistics: PopulationStatistics

    # Best genome
    best_genome: str
    best_fitness: int

    # Evolution metadata
    mutations_applied: int = 0
    crossovers_applied: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "generation": self.generation,
            "timestamp": self.timestamp,
            "statistics": self.statistics.to_dict(),
            "best_genome": self.best_genome,
            "best_fitness": self.best_fitness,
            "mutations_applied": self.mutations_applied,
            "crossovers_applied": self.crossovers_applied,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GenerationRecord:
        """Create from dictionary."""
        return cls(
            generation=data["generation"],
            timestamp=data["timestamp"],
            statistics=PopulationStatistics.from_dict(data["statistics"]),
            best_genome=data["best_genome"],
            best_fitness=data["best_fitness"],
            mutations_applied=data.get("mutations_applied", 0),
            crossovers_applied=data.get("crossovers_applied", 0),
        )


# =============================================================================
# Evolution History
# =============================================================================


class EvolutionHistory:
    """
    Tracks evolution history across all generations of one run.

    Responsibilities:
    - Record each generation
    - Track the global best genome
    - Analyze fitness progression
    - Export a report for analysis
    """

    def __init__(self, experiment_name: str = "evobit"):
        """
        Initialize evolution history.

        Args:
            experiment_name: Name of this evolution run
        """
        self.experiment_name = experiment_name
        self.start_time = datetime.now(timezone.utc).isoformat()

        self.generations: dict[int, GenerationRecord] = {}

        # Global best genome
        self.global_best_genome: str | None = None
        self.global_best_fitness: int | None = None

    def record_generation(
        self,
        generation: int,
        statistics: PopulationStatistics,
        best: Individual,
        mutations_applied: int = 0,
        crossovers_applied: int = 0,
    ) -> GenerationRecord:
        """
        Record a generation.

        Args:
            generation: Generation number
            statistics: Population statistics
            best: Fittest individual of the generation
            mutations_applied: Mutations that took effect while breeding the next generation
            crossovers_applied: Children produced by crossover

        Returns:
            The stored record
        """
        if self.global_best_fitness is None or best.fitness > self.global_best_fitness:
            self.global_best_genome = best.bitstring()
            self.global_best_fitness = best.fitness

        record = GenerationRecord(
            generation=generation,
            timestamp=datetime.now(timezone.utc).isoformat(),
            statistics=statistics,
            best_genome=best.bitstring(),
            best_fitness=best.fitness,
            mutations_applied=mutations_applied,
            crossovers_applied=crossovers_applied,
        )
        self.generations[generation] = record

        logger.debug(
            "Generation recorded",
            generation=generation,
            best_fitness=best.fitness,
            avg_fitness=f"{statistics.avg_fitness:.2f}",
        )
        return record

    def update_operator_counts(
        self,
        generation: int,
        mutations_applied: int,
        crossovers_applied: int,
    ) -> None:
        """Attach operator counts to an already recorded generation."""
        record = self.generations.get(generation)
        if record is None:
            return
        record.mutations_applied = mutations_applied
        record.crossovers_applied = crossovers_applied

    def get_fitness_progression(self) -> list[tuple[int, int]]:
        """
        Get fitness progression over generations.

        Returns:
            List of (generation, best_fitness) tuples
        """
        return [
            (generation, self.generations[generation].best_fitness)
            for generation in sorted(self.generations)
        ]

    def get_generation_record(self, generation: int) -> GenerationRecord | None:
        return self.generations.get(generation)

    def compute_summary(self) -> dict[str, Any]:
        """
        Compute summary statistics of the run.

        Returns:
            Summary dictionary
        """
        if not self.generations:
            return {
                "experiment_name": self.experiment_name,
                "total_generations": 0,
                "global_best_fitness": None,
            }

        progression = self.get_fitness_progression()
        initial_fitness = progression[0][1]
        final_fitness = progression[-1][1]

        return {
            "experiment_name": self.experiment_name,
            "start_time": self.start_time,
            "total_generations": len(self.generations),
            "global_best_fitness": self.global_best_fitness,
            "global_best_genome": self.global_best_genome,
            "initial_fitness": initial_fitness,
            "final_fitness": final_fitness,
            "fitness_improvement": final_fitness - initial_fitness,
            "total_mutations": sum(r.mutations_applied for r in self.generations.values()),
            "total_crossovers": sum(r.crossovers_applied for r in self.generations.values()),
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "experiment_name": self.experiment_name,
            "start_time": self.start_time,
            "summary": self.compute_summary(),
            "generations": {
                str(gen): record.to_dict()
                for gen, record in sorted(self.generations.items())
            },
        }

    def export_to_json(self, filepath: Path | str) -> None:
        """
        Export the history report to a JSON file.

        Args:
            filepath: Output file path
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

        logger.info(
            "Evolution history exported",
            filepath=str(filepath),
            generations=len(self.generations),
        )

    def __len__(self) -> int:
        return len(self.generations)


__all__ = [
    "GenerationRecord",
    "EvolutionHistory",
]
