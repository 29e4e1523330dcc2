"""
Individual - a single candidate bit-string and its fitness.

Author: evobit developers
Python: 3.11+
"""

from __future__ import annotations

from typing import Any, Iterable

from evobit.exceptions import GeneIndexError


BITS = (0, 1)


def _check_bit(gene: int) -> int:
    if gene not in BITS:
        raise ValueError(f"Gene must be 0 or 1 (got {gene!r})")
    return int(gene)


class Individual:
    """
    Candidate solution: a growable genome of 0/1 genes plus an integer fitness.

    Individuals sort by fitness descending, so ``sorted(individuals)`` puts
    the fittest first. Equality is identity; two individuals with the same
    score are still different members of a population.
    """

    __slots__ = ("_genome", "_fitness")

    def __init__(self, genome: Iterable[int], fitness: int = 0):
        """
        Create an individual.

        Args:
            genome: Genes to copy into the new individual
            fitness: Initial fitness (recomputed by the owning population)
        """
        self._genome: list[int] = [_check_bit(g) for g in genome]
        self._fitness = int(fitness)

    @property
    def fitness(self) -> int:
        return self._fitness

    @fitness.setter
    def fitness(self, value: int) -> None:
        self._fitness = int(value)

    @property
    def genome(self) -> list[int]:
        """Copy of the genome."""
        return list(self._genome)

    @property
    def genome_length(self) -> int:
        return len(self._genome)

    def gene(self, index: int) -> int:
        self._check_index(index)
        return self._genome[index]

    def set_gene(self, index: int, gene: int) -> None:
        """Overwrite the gene at ``index``."""
        self._check_index(index)
        self._genome[index] = _check_bit(gene)

    def add_gene(self, gene: int) -> None:
        """Append a gene to the end of the genome."""
        self._genome.append(_check_bit(gene))

    def remove_gene(self, index: int) -> None:
        """Remove the gene at ``index``."""
        self._check_index(index)
        del self._genome[index]

    def matches(self, target: Iterable[int]) -> bool:
        """True when the genome equals ``target`` exactly."""
        return self._genome == list(target)

    def clone(self) -> Individual:
        """Independent copy (genome and fitness)."""
        return Individual(self._genome, self._fitness)

    def bitstring(self) -> str:
        return "".join(str(g) for g in self._genome)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "genome": self.bitstring(),
            "genome_length": self.genome_length,
            "fitness": self._fitness,
        }

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._genome):
            raise GeneIndexError(
                f"Gene index {index} out of range for genome of length {len(self._genome)}"
            )

    def __len__(self) -> int:
        return len(self._genome)

    def __lt__(self, other: Individual) -> bool:
        # Higher fitness sorts first
        if not isinstance(other, Individual):
            return NotImplemented
        return self._fitness > other._fitness

    def __repr__(self) -> str:
        return f"Individual(genome={self.bitstring()}, fitness={self._fitness})"


__all__ = ["Individual", "BITS"]
